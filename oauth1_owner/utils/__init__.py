"""
Utility modules for OAuth 1.0a resource owners.
"""

from .crypto import FernetEncryption
from .logger import get_logger

__all__ = [
    'FernetEncryption',
    'get_logger'
]
