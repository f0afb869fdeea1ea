"""
FakeStack Backend — Application Package
=========================================

What: A question-and-answer forum backend: users, questions, tags, answers,
      comments, views and votes behind a FastAPI HTTP API.
Who:  Imported by uvicorn (fakestack.main:app), Alembic and pytest.

Architecture Note:

    ┌─────────────────────────────────────┐
    │       Routes (fakestack.routes)     │  ← validation, status codes
    ├─────────────────────────────────────┤
    │     Stores (fakestack.services)     │  ← payload | StoreError
    ├─────────────────────────────────────┤
    │    Models & Schemas (data shapes)   │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database (fakestack.database)     │  ← async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
