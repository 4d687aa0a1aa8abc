"""
Employee API - Application Package Initializer
===============================================

What: Marks the `employee_api` directory as a Python package.
Why:  Enables module imports like `from employee_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest, uvicorn
      and the seed CLI.

Architecture Note:
    The backend is a small CRUD service over one MongoDB collection,
    split into the same layers every FastAPI service of this shape uses:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (CRUD Logic)       │  ← Presence checks, one ODM call each
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Beanie Document + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← MongoDB client + Beanie init
    └─────────────────────────────────────┘

    The hard parts (uniqueness, query execution, persistence) live in MongoDB
    and Beanie. The layers above only decide which call to make and which
    HTTP status code describes the outcome.
"""

__version__ = "1.0.0"
