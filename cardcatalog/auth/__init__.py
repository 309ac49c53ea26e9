"""Authentication module for Card Catalog Core.

This module provides authentication and authorization functionality:
- Schema validation for auth requests and responses
- JWT token issuing and verification (TokenIssuer / TokenVerifier)
- Password hashing and verification (bcrypt)
- Registration, login and profile flows
- The @auth_required gate for protected endpoints

Auth endpoints (under settings.auth_prefix, default /api/auth):
- POST /register - Create account and return JWT token
- POST /login - Authenticate and return JWT token
- GET /me - Get current user info
- POST /logout - Stateless acknowledgement
"""

from . import schemas, service, token

__all__ = ["schemas", "service", "token"]
