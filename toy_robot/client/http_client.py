"""HTTP client for the toy robot API."""

import json
import socket
from dataclasses import dataclass
from typing import Any, Optional, Union
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode, urlparse
from urllib.request import Request, urlopen

import structlog

from ..errors import ClientTransportError
from ..state.models import Direction, RobotState

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OperationResult:
    """Decoded API envelope."""
    success: bool
    data: Any = None
    message: Optional[str] = None
    error: Optional[str] = None
    status_code: int = 200

    @property
    def state(self) -> Optional[RobotState]:
        """Robot state carried in ``data``, when the payload is one."""
        if isinstance(self.data, dict) and "isPlaced" in self.data:
            return RobotState.from_dict(self.data)
        return None


class RobotClient:
    """Talks to /api/robot endpoints of a running service."""

    def __init__(self, base_url: str = "http://localhost:3000/api/robot",
                 timeout_seconds: float = 5.0):
        parsed = urlparse(base_url)
        if not parsed.scheme or not parsed.netloc:
            raise ClientTransportError(f"Invalid URL: {base_url}", url=base_url)

        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.logger = logger.bind(base_url=self.base_url)

    def get_current_state(self) -> OperationResult:
        return self._request("GET", "/current")

    def place(self, x: int, y: int, direction: Union[Direction, str]) -> OperationResult:
        facing = direction.value if isinstance(direction, Direction) else direction
        return self._request("POST", "/place", {"x": x, "y": y, "direction": facing})

    def move(self) -> OperationResult:
        return self._request("POST", "/move", {})

    def turn_left(self) -> OperationResult:
        return self._request("POST", "/turn-left", {})

    def turn_right(self) -> OperationResult:
        return self._request("POST", "/turn-right", {})

    def get_report(self) -> OperationResult:
        return self._request("GET", "/report")

    def get_history(self) -> OperationResult:
        return self._request("GET", "/history")

    def validate_command(self, command: str, x: Optional[int] = None,
                         y: Optional[int] = None) -> OperationResult:
        params: dict[str, Any] = {"command": command}
        if x is not None:
            params["x"] = x
        if y is not None:
            params["y"] = y
        return self._request("GET", f"/validate?{urlencode(params)}")

    def health(self) -> OperationResult:
        return self._request("GET", "/health")

    def _request(self, method: str, path: str,
                 payload: Optional[dict[str, Any]] = None) -> OperationResult:
        """
        Send one request and decode the envelope.

        HTTP error statuses that still carry an envelope decode into a
        failed OperationResult; anything else raises ClientTransportError.
        """
        url = f"{self.base_url}{path}"
        data = None
        headers = {
            'Accept': 'application/json',
            'User-Agent': 'toy-robot-client/1.0'
        }
        if payload is not None:
            data = json.dumps(payload).encode('utf-8')
            headers['Content-Type'] = 'application/json'

        req = Request(url, data=data, headers=headers, method=method)

        try:
            with urlopen(req, timeout=self.timeout_seconds) as response:
                return self._decode(url, response.getcode(), response.read())

        except HTTPError as e:
            body = e.read()
            self.logger.warning(
                "Robot API HTTP error",
                url=url,
                error_code=e.code,
                error_reason=str(e.reason)
            )
            return self._decode(url, e.code, body)

        except (OSError, URLError, socket.timeout) as e:
            self.logger.warning("Robot API network error", url=url, error=str(e))
            raise ClientTransportError(f"Network error: {e}", url=url) from e

    def _decode(self, url: str, status_code: int, raw: bytes) -> OperationResult:
        try:
            body = json.loads(raw.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ClientTransportError(
                f"HTTP {status_code}: response is not JSON",
                url=url,
                status_code=status_code
            ) from e

        if not isinstance(body, dict) or "success" not in body:
            raise ClientTransportError(
                f"HTTP {status_code}: response is not an API envelope",
                url=url,
                status_code=status_code
            )

        return OperationResult(
            success=bool(body["success"]),
            data=body.get("data"),
            message=body.get("message"),
            error=body.get("error"),
            status_code=status_code,
        )
