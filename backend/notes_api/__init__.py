"""
Notes API — Application Package Initializer
=============================================

What: Marks the `notes_api` directory as a Python package.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, request schemas
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Store statements, not-found rules
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy table + Pydantic
    ├─────────────────────────────────────┤
    │     Persistence Gateway (Pool)      │  ← Scoped pooled connections
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
