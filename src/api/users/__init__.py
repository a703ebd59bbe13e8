"""
Users API package.

Contains the create, list and delete routes for registered users.
"""

from src.api.users.routes import router

__all__ = ["router"]
