"""
Connection management modules
"""

from .base import BaseConnection
from .rest import RestConnection, Resource

__all__ = [
    'BaseConnection',
    'RestConnection',
    'Resource',
]
