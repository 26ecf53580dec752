"""
Main vLCM client class
"""

from typing import Optional

from .connections.rest import RestConnection
from .settings.clusters import ClusterManager
from .settings.depots import DepotManager
from .tasks import TaskManager


class VLCMClient:
    """Bundles one vCenter REST connection with the vLCM managers"""

    def __init__(self, url: str, username: Optional[str] = None,
                 password: Optional[str] = None, session_id: Optional[str] = None,
                 insecure: bool = False, timeout: int = 30,
                 connection: Optional[RestConnection] = None):
        self.connection = connection or RestConnection(
            url, username=username, password=password, session_id=session_id,
            insecure=insecure, timeout=timeout)
        self.depots = DepotManager(self.connection)
        self.clusters = ClusterManager(self.connection)
        self.tasks = TaskManager(self.connection)

    def connect(self) -> None:
        """Open the vAPI session"""
        self.connection.connect()

    def disconnect(self) -> None:
        """Close the vAPI session"""
        self.connection.close()

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
