"""
Services Package

Business logic separate from GraphQL handling, reusable and easy to
test in isolation. Every function takes the request's database session
as its first argument.

Current services:
- catalog.py: Authors and books (counts, filters, get-or-create author)
- identity.py: Users and credential checks
- security.py: Password hashing and bearer token signing
"""
