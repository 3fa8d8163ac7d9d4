"""
Unified models library for the Arcade Hub project.

This package provides the Pydantic data models used across the system:
- Primitives: Rectangle collision bounds
- Accounts: Registered users, login attempt records and player stats

Usage:
    >>> from models import Rectangle, User
    >>> from models.user import LoginAttemptRecord
"""

# ============================================================================
# Primitives (basic types used everywhere)
# ============================================================================
from .primitives import (
    Rectangle,
)

# ============================================================================
# Account models
# ============================================================================
from .user import (
    User,
    LoginAttemptRecord,
    PlayerStats,
)

__all__ = [
    'Rectangle',
    'User',
    'LoginAttemptRecord',
    'PlayerStats',
]
