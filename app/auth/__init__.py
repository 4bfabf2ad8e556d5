"""
Auth module - Email/password signup and login with JWT bearer tokens.
"""

from app.auth.router import router as auth_router

__all__ = ["auth_router"]
