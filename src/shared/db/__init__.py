"""
Database Module

This module provides database connectivity and session management for Level2.

Architecture Overview:
======================
┌─────────────────────────────────────────────────────────────────────────────┐
│                        DATABASE LAYER                                       │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   FastAPI Route                                                             │
│       │                                                                     │
│       │  Dependency Injection: get_db() → app.state.database               │
│       ▼                                                                     │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │              AsyncSession (from session.py)                 │          │
│   │                                                             │          │
│   │  - One session per request                                  │          │
│   │  - Services commit each unit of work                        │          │
│   │  - Auto-rollback on exception                               │          │
│   └─────────────────────────────────────────────────────────────┘          │
│       │                                                                     │
│       │  Passed to Repository                                               │
│       ▼                                                                     │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │              Repository (from repositories/)                │          │
│   │                                                             │          │
│   │  - UserRepository                                           │          │
│   │  - WorkStoryRepository                                      │          │
│   │  - ProfileRepository / ProfileStoryRepository               │          │
│   │  - ShareLinkRepository                                      │          │
│   └─────────────────────────────────────────────────────────────┘          │
│       │                                                                     │
│       │  SQL Queries                                                        │
│       ▼                                                                     │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │              PostgreSQL Database                            │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Components:
===========
- session.py: Database adapter (engine, session factory, lifecycle) and
  storage error translation
"""

from src.shared.db.session import (
    Database,
    create_database,
    storage_errors,
)

__all__ = [
    "Database",  # Engine + session factory, built by the application factory
    "create_database",  # Database for the configured DATABASE_URL
    "storage_errors",  # Translate SQLAlchemy failures into StorageError
]
