"""
Level2.bio Backend

Work stories, curated profiles and revocable public share links.

Package Structure:
==================
    src/
    ├── api/        ← FastAPI application
    ├── shared/     ← Shared code (models, services, repositories, etc.)
    └── config/     ← Configuration

Running the Application:
========================
    # API Server
    uvicorn src.api.main:app --reload

    # Migrations
    alembic upgrade head
"""
