"""
MyGram Backend — Application Package Initializer
==================================================

What: A social photo-sharing REST backend: users, photos, comments and
      social media links, with bcrypt credentials, signed session tokens
      and owner-only mutations.

Architecture Note:
    ┌─────────────────────────────────────┐
    │        Routes (API Layer)           │  ← HTTP concerns, session resolution
    ├─────────────────────────────────────┤
    │        Services (Business Logic)    │  ← sign-up/login, ownership rule
    ├─────────────────────────────────────┤
    │        Stores (repositories)        │  ← live-row queries, soft delete
    ├─────────────────────────────────────┤
    │        Models & Schemas (Data)      │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
