"""
vLCM - vSphere Lifecycle Manager REST bindings
Offline depots, depot content and cluster software drafts
"""

__version__ = "0.1.0"

from .client import VLCMClient
from .exceptions import (
    VLCMError, ConfigurationError, RestError, ConnectionError,
    AuthenticationError, HTTPError, DecodeError, TaskError,
    TaskPollError, TaskCancelledError, TaskTimeoutError,
)

__all__ = [
    "VLCMClient",
    "VLCMError",
    "ConfigurationError",
    "RestError",
    "ConnectionError",
    "AuthenticationError",
    "HTTPError",
    "DecodeError",
    "TaskError",
    "TaskPollError",
    "TaskCancelledError",
    "TaskTimeoutError",
]
