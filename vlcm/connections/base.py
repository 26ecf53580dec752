"""
Base connection interface
"""

from abc import ABC, abstractmethod
from typing import Optional, Any


class BaseConnection(ABC):
    """Abstract base class for API connections"""

    def __init__(self, url: str, username: Optional[str] = None,
                 password: Optional[str] = None, insecure: bool = False,
                 timeout: int = 30):
        self.url = url.rstrip('/')
        self.username = username
        self.password = password
        self.insecure = insecure
        self.timeout = timeout
        self._connected = False

    @abstractmethod
    def connect(self) -> None:
        """Establish connection"""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close connection"""
        pass

    @abstractmethod
    def do(self, method: str, resource: Any, body: Any = None) -> Any:
        """Issue one request and return the decoded JSON body (or None)"""
        pass

    def is_connected(self) -> bool:
        """Check if connection is active"""
        return self._connected

    def __enter__(self):
        """Context manager entry"""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.disconnect()
