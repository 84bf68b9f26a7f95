"""
Shared Module

Contains the application core used by the HTTP surface:
- Models: SQLAlchemy ORM models
- Repositories: Data access layer behind abstract interfaces
- Use cases: Business rules, one class per operation
- Actions: Entry points returning the success/error envelope
- Schemas: Pydantic input value objects and output shapes
- Core: Logging, exceptions, response normalization
- Adapters: External collaborators (cache invalidation)

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions, envelopes
    ├── db/             ← Database session management, unit of work
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── use_cases/      ← Business logic
    ├── actions/        ← Auth + rate limit + use case + envelope
    ├── schemas/        ← Pydantic schemas
    ├── adapters/       ← External services
    ├── utils/          ← Pagination, rate limiter, security
    └── composition.py  ← Wires repositories into use cases

Usage:
======
    from agora.shared.models import User, Post
    from agora.shared.repositories import SqlAlchemyPostRepository
    from agora.shared.use_cases import CreatePostUseCase
    from agora.shared.core import logger, AgoraException
"""
