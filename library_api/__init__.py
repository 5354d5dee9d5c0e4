"""
Library Catalog API Application Package

A GraphQL API for a catalog of authors and books.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session factory and get_db dependency
- errors.py: Error kinds reported to API callers
- main.py: FastAPI application factory and configuration
- models/: SQLAlchemy ORM models
- schemas/: Pydantic validation schemas
- services/: Catalog and identity stores, token signing
- graphql/: Strawberry schema, context and resolvers
"""

__version__ = "0.1.0"
