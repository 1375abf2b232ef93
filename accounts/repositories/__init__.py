"""Persistence collaborators."""

from accounts.repositories.user_repository import UserRepository

__all__ = ["UserRepository"]
