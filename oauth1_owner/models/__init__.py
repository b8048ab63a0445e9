"""
Data models for tokens and normalized user profiles.
"""

from .oauth_models import (
    RequestToken,
    AccessToken,
    UserProfile
)

__all__ = [
    'RequestToken',
    'AccessToken',
    'UserProfile'
]
