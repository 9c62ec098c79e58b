"""
Exercise Tracker — API Routes Package
=======================================

Route Inventory:
    - users.py:   POST/GET /api/users, POST /api/users/{id}/exercises,
                  GET /api/users/{id}/logs
    - health.py:  GET /health
    - pages.py:   GET / (landing page)
    - body.py:    typed request-body dependency shared by the POST routes

Routes stay thin: extract the request, call a service, return its result.
"""
