# Services package init
"""
Exercise Tracker — Services Layer
===================================

What:  Business logic between routes (HTTP) and the store (persistence).
How:   Services take an AsyncSession plus plain values, apply the rules,
       and return response schemas. Routes get the session through
       FastAPI's dependency injection and hand it in.

Service Inventory:
    - UserService:     create / list users, resolve a user id to a row
    - ExerciseService: record an exercise, build a filtered exercise log
    - LogFilter:       from / to / limit query values turned into SQL clauses
    - parsing:         permissive duration, date and limit coercion, plus
                       the calendar-string date rendering
"""
