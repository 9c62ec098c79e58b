"""
Exercise Tracker — Application Package Initializer
====================================================

What: Marks the `exercise_tracker` directory as a Python package.
Who:  Imported by uvicorn, Alembic, pytest and the console entry point.

Architecture Note:
    The service is a thin layered API over a relational store:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← body/query parsing, status codes
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← existence checks, coercion, shaping
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← store handle + per-request sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
