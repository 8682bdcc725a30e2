"""
Core utilities shared across the backoffice API.

- configuration helpers (env vars, data directory, CORS origins)
- logging setup
- password hashing and verification
"""
