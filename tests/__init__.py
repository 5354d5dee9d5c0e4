"""
Test Suite for the Library Catalog API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_security.py: Password hashing and bearer tokens
- test_services.py: Catalog and identity services
- test_context.py: Building the request context from the Authorization header
- test_graphql.py: Queries and mutations through the /graphql endpoint

Running Tests:
    # Run all tests
    pytest

    # Run with coverage
    pytest --cov=library_api --cov-report=html

    # Run specific file
    pytest tests/test_graphql.py

    # Run with verbose output
    pytest -v
"""
