"""
vAPI REST connection built on requests
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Tuple
from urllib.parse import quote, urlencode

import requests
import urllib3

from .base import BaseConnection
from ..exceptions import (
    RestError, ConnectionError, AuthenticationError, HTTPError, DecodeError,
)


logger = logging.getLogger(__name__)

SESSION_PATH = "/api/session"
SESSION_HEADER = "vmware-api-session-id"

METHODS = ("GET", "POST", "PATCH", "DELETE")


@dataclass(frozen=True)
class Resource:
    """A request target: base URL, path and ordered query parameters.

    Builders return new instances, so a resource can be shared and extended
    without affecting the original.
    """
    base_url: str
    path: str
    params: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    def with_subpath(self, subpath: str) -> "Resource":
        """Append a single identifier segment to the path"""
        segment = quote(str(subpath), safe='')
        return Resource(self.base_url, f"{self.path.rstrip('/')}/{segment}", self.params)

    def with_param(self, name: str, value: Any) -> "Resource":
        """Attach a query parameter"""
        return Resource(self.base_url, self.path, self.params + ((name, str(value)),))

    def with_list_param(self, name: str, values: Optional[Iterable[str]]) -> "Resource":
        """Attach a comma-joined multi-value parameter, or nothing when empty"""
        values = [v for v in (values or []) if v]
        if not values:
            return self
        return self.with_param(name, ",".join(values))

    @property
    def query(self) -> str:
        return urlencode(self.params, safe=',')

    @property
    def url(self) -> str:
        url = f"{self.base_url}{self.path}"
        if self.params:
            url = f"{url}?{self.query}"
        return url


class RestConnection(BaseConnection):
    """HTTP client for the vCenter vAPI endpoints.

    Holds one requests.Session. The session id is either supplied by the
    caller or obtained by a basic-auth login on connect().
    """

    def __init__(self, url: str, username: Optional[str] = None,
                 password: Optional[str] = None, session_id: Optional[str] = None,
                 insecure: bool = False, timeout: int = 30):
        if "://" not in url:
            url = f"https://{url}"
        super().__init__(url, username=username, password=password,
                         insecure=insecure, timeout=timeout)
        self.session_id = session_id
        self._owns_session = False
        self.session = requests.Session()
        self.session.verify = not insecure
        self.session.headers.update({
            "Accept": "application/json",
            "Content-Type": "application/json",
        })
        if insecure:
            # Lab environments commonly use self-signed certificates
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def connect(self) -> None:
        """Attach an existing session id, or log in with basic auth"""
        if not self.session_id:
            self.session_id = self._login()
            self._owns_session = True
        self.session.headers[SESSION_HEADER] = self.session_id
        self._connected = True

    def disconnect(self) -> None:
        """Delete the session if this connection created it"""
        if self._connected and self._owns_session:
            try:
                self.do("DELETE", self.resource(SESSION_PATH))
            except RestError as e:
                logger.warning(f"Failed to delete vAPI session: {e}")
            self.session_id = None
            self._owns_session = False
        self.session.headers.pop(SESSION_HEADER, None)
        self._connected = False

    def close(self) -> None:
        """Disconnect and release the HTTP session"""
        self.disconnect()
        self.session.close()

    def resource(self, path: str) -> Resource:
        """Build a resource for a path below the service root"""
        return Resource(self.url, path)

    def do(self, method: str, resource: Resource, body: Any = None) -> Any:
        """Issue one request and decode the JSON response.

        Args:
            method: GET, POST, PATCH or DELETE.
            resource: target built with resource().
            body: optional JSON body; objects with to_dict() are encoded first.

        Returns:
            The decoded JSON document, or None for an empty response body.

        Raises:
            ConnectionError: the request could not be sent.
            HTTPError: the server answered with a non-2xx status.
            DecodeError: the response body is not valid JSON.
        """
        method = method.upper()
        if method not in METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        if hasattr(body, 'to_dict'):
            body = body.to_dict()

        url = resource.url
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, json=body, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise ConnectionError(f"{method} {url} failed: {e}") from e

        if not response.ok:
            raise self._http_error(method, resource, response)

        return self._decode(method, resource, response)

    def _login(self) -> str:
        if not (self.username and self.password):
            raise AuthenticationError(
                f"No session id or credentials provided for {self.url}")

        url = self.resource(SESSION_PATH).url
        logger.debug(f"POST {url}")
        try:
            response = self.session.post(url, auth=(self.username, self.password),
                                         timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise ConnectionError(f"Failed to connect to {self.url}: {e}") from e

        if response.status_code in (401, 403):
            raise AuthenticationError(f"Failed to authenticate to {self.url}",
                                      code=response.status_code)
        if not response.ok:
            raise self._http_error("POST", self.resource(SESSION_PATH), response)

        session_id = self._decode("POST", self.resource(SESSION_PATH), response)
        if not isinstance(session_id, str) or not session_id:
            raise DecodeError(f"Unexpected session response from {self.url}")
        return session_id

    @staticmethod
    def _decode(method: str, resource: Resource, response: requests.Response) -> Any:
        if not response.content or not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"{method} {resource.path}: invalid JSON response: {e}") from e

    @staticmethod
    def _http_error(method: str, resource: Resource, response: requests.Response) -> HTTPError:
        details = {}
        try:
            payload = response.json()
        except ValueError:
            payload = None

        # vAPI errors carry error_type and localizable messages
        if isinstance(payload, dict):
            details['error_type'] = payload.get('error_type')
            details['messages'] = [
                m.get('default_message', '') for m in payload.get('messages') or []
                if isinstance(m, dict)
            ]

        message = f"{method} {resource.path}: {response.status_code} {response.reason}"
        if details.get('error_type'):
            message += f" ({details['error_type']})"
        if details.get('messages'):
            message += ": " + "; ".join(m for m in details['messages'] if m)
        return HTTPError(message, code=response.status_code, details=details)
