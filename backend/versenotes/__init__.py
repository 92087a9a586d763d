"""
VerseNotes Backend — Application Package
==========================================

Accounts, posts and per-user verse highlights over a JSON HTTP API.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← unpack request, call service
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← presence checks, one query each
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
