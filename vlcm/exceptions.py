"""
vLCM Library Exceptions
"""


class VLCMError(Exception):
    """Base exception for all vLCM errors"""
    def __init__(self, message, code=None, details=None):
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ConfigurationError(VLCMError):
    """Missing or invalid connection settings"""
    pass


class RestError(VLCMError):
    """Any failure of a single REST exchange"""
    pass


class ConnectionError(RestError):
    """Transport-level errors reaching the service"""
    pass


class AuthenticationError(RestError):
    """Session login rejected"""
    pass


class HTTPError(RestError):
    """Non-2xx response; code holds the HTTP status"""

    @property
    def status_code(self):
        return self.code

    @property
    def error_type(self):
        return self.details.get('error_type')


class DecodeError(RestError):
    """Response body does not have the expected JSON shape"""
    pass


class TaskError(VLCMError):
    """Base for task wait outcomes that are not a terminal status"""
    def __init__(self, message, task_id=None, status="", **kwargs):
        super().__init__(message, **kwargs)
        self.task_id = task_id
        self.status = status


class TaskPollError(TaskError):
    """Fetching the task status failed; status is the last value read"""
    pass


class TaskCancelledError(TaskError):
    """Wait interrupted by the caller"""
    pass


class TaskTimeoutError(TaskError):
    """Deadline passed before the task left RUNNING"""
    pass
