"""
CIS task status and completion polling
"""

import logging
import threading
import time
from typing import Dict, Any, Optional

from .connections.rest import RestConnection
from .exceptions import (
    RestError, DecodeError, TaskPollError, TaskCancelledError, TaskTimeoutError,
)
from .settings.models import JsonObject, decode


logger = logging.getLogger(__name__)

TASKS_PATH = "/api/cis/tasks"

# Seconds between status polls
POLL_INTERVAL = 10

# The only non-terminal status; everything else ends the wait
RUNNING = "RUNNING"


class TaskManager:
    """Reads the status of asynchronous vAPI tasks"""

    def __init__(self, connection: RestConnection):
        self.connection = connection

    def get_task_info(self, task_id: str) -> Dict[str, Any]:
        """Get the full task document"""
        resource = self.connection.resource(TASKS_PATH).with_subpath(task_id)
        return decode(JsonObject, self.connection.do("GET", resource), f"task {task_id}")

    def get_task_status(self, task_id: str) -> str:
        """Get the task status, failing with DecodeError if it is absent or not a string"""
        status = self.get_task_info(task_id).get("status")
        if not isinstance(status, str):
            raise DecodeError(f"Task {task_id} has no readable status field")
        return status

    def wait_for_completion(self, task_id: str, interval: float = POLL_INTERVAL,
                            stop_event: Optional[threading.Event] = None,
                            timeout: Optional[float] = None) -> str:
        """
        Block until the task leaves the RUNNING state.

        Polls once per interval on a fixed schedule counted from the call;
        the first poll happens after the first interval, not immediately.

        Args:
            task_id: Task identifier returned by an asynchronous operation
            interval: Seconds between polls
            stop_event: Setting this event aborts the wait between polls
            timeout: Optional overall limit in seconds; waits forever if None

        Returns:
            The first status other than RUNNING, unchanged. FAILED and other
            terminal statuses are returned, not raised.

        Raises:
            TaskPollError: A status fetch failed; ``status`` holds the last
                value read ("" if the status itself was unreadable)
            TaskCancelledError: stop_event was set
            TaskTimeoutError: timeout elapsed first
        """
        stop_event = stop_event or threading.Event()
        start = time.monotonic()
        deadline = start + timeout if timeout is not None else None
        status = ""
        polls = 0

        while True:
            polls += 1
            next_poll = start + polls * interval
            now = time.monotonic()

            if deadline is not None and next_poll > deadline:
                if stop_event.wait(max(0.0, deadline - now)):
                    raise TaskCancelledError(f"Wait for task {task_id} cancelled",
                                             task_id=task_id, status=status)
                raise TaskTimeoutError(
                    f"Task {task_id} still {status or RUNNING} after {timeout} seconds",
                    task_id=task_id, status=status)

            if stop_event.wait(max(0.0, next_poll - now)):
                raise TaskCancelledError(f"Wait for task {task_id} cancelled",
                                         task_id=task_id, status=status)

            try:
                status = self.get_task_status(task_id)
            except DecodeError as e:
                raise TaskPollError(f"Failed to read status of task {task_id}: {e}",
                                    task_id=task_id, status="") from e
            except RestError as e:
                raise TaskPollError(f"Failed to poll task {task_id}: {e}",
                                    task_id=task_id, status=status, code=e.code) from e

            logger.debug(f"Task {task_id} poll {polls}: {status}")
            if status != RUNNING:
                logger.info(f"Task {task_id} finished with status {status}")
                return status
