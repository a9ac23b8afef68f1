"""
Blog Backend - Application Package
====================================

Layered layout:

    ┌─────────────────────────────────────┐
    │      Routes (API + Pages)           │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Services (rules, coercion)     │  ← presence checks, outcome table
    ├─────────────────────────────────────┤
    │      BlogStore (data access)        │  ← one ORM call per operation
    ├─────────────────────────────────────┤
    │      Models & Schemas               │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
