"""
Shared Module

Contains the code the API layer is built on:
- Models: SQLAlchemy ORM models
- Repositories: Data access layer
- Services: Business logic layer
- Schemas: Pydantic request/response models
- Core: Logging, exceptions
- Adapters: Blob storage integrations

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions
    ├── db/             ← Database session management
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── services/       ← Business logic
    ├── schemas/        ← Pydantic schemas
    ├── adapters/       ← Blob stores
    ├── migrations/     ← Alembic environment and revisions
    └── utils/          ← Share tokens, input validation

Usage:
======
    from src.shared.models import User, Profile
    from src.shared.repositories import ProfileRepository
    from src.shared.services import ProfileService
    from src.shared.schemas import ProfileResponse
    from src.shared.core import logger, Level2Exception
"""
