"""
Showcase Backend — Application Package Initializer
===================================================

What: REST backend for the marketing site (projects, client testimonials,
      contact submissions and newsletter signups).
Who:  Imported by uvicorn (`showcase.main:app`), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Services (workflows, uploads,      │  ← Validation, image pipeline
    │            image transform)         │
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database / Image storage ports    │  ← Async sessions, upload root
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
