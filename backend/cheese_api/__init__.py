"""
Cheese Catalog Backend — Application Package Initializer
=========================================================

What: Marks the `cheese_api` directory as a Python package.
Who:  Used by uvicorn (`uvicorn cheese_api.main:app`), Alembic and pytest.

Architecture Note:
    The backend is split into thin layers, each testable on its own:

    ┌─────────────────────────────────────┐
    │        Routes (Request Handlers)    │  ← validation + status codes
    ├─────────────────────────────────────┤
    │       Services (Business Logic)     │  ← create/update/delete, imageData
    ├─────────────────────────────────────┤
    │     Repositories (Persistence)      │  ← save/find/exists/delete
    ├─────────────────────────────────────┤
    │  Models & Schemas / Database        │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘

    Dependencies flow downwards only and are passed in through constructors
    once, when the application is created (see `cheese_api.main.create_app`).
"""

__version__ = "1.0.0"
