"""Core Business Logic Module

This module provides the course marketplace logic independent of Flask.

Module Structure:
    - models.py     : Account, Course, Lesson, Purchase records and Role
    - errors.py     : ApiError taxonomy carrying HTTP status codes
    - validators.py : Request payload schemas
    - passwords.py  : One-way password hashing
    - tokens.py     : Bearer token issue/verify (credential service)
    - store.py      : SQLite persistence
    - accounts.py   : Signup, login, profile
    - catalog.py    : Courses and lessons with ownership checks
    - purchases.py  : Purchases and per-account listing

Usage Pattern:
    Import explicitly when needed:
        from coursehub.core.store import Database
        from coursehub.core import catalog
        course = catalog.create_course(db, caller, {"title": "Intro"})
"""
