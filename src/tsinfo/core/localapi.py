"""Read-only client for the tailscaled local API."""

import logging
from pathlib import Path

import httpx

from tsinfo.core.config import get_socket_path

logger = logging.getLogger(__name__)

# tailscaled ignores the host, but httpx needs a syntactically valid URL
BASE_URL = "http://local-tailscaled.sock"


class LocalAPIError(RuntimeError):
    """Raised when the daemon cannot be queried."""

    pass


class LocalAPI:
    """Client for the tailscaled local API over its unix socket."""

    def __init__(
        self,
        socket_path: Path | str | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
        timeout: float = 5.0,
    ) -> None:
        """Initialize with optional socket path or transport override."""
        self.socket_path = Path(socket_path) if socket_path else get_socket_path()
        if transport is None:
            transport = httpx.HTTPTransport(uds=str(self.socket_path))
        self._client = httpx.Client(
            transport=transport,
            base_url=BASE_URL,
            headers={"Sec-Tailscale": "localapi"},
            timeout=timeout,
        )

    def __enter__(self) -> "LocalAPI":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying connection pool."""
        self._client.close()

    def _get(self, path: str) -> dict:
        """GET a local API endpoint and decode its JSON object."""
        logger.debug("GET %s via %s", path, self.socket_path)
        try:
            resp = self._client.get(path)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise LocalAPIError(
                f"{path} returned HTTP {e.response.status_code}: {e.response.text.strip()}"
            ) from e
        except httpx.RequestError as e:
            raise LocalAPIError(f"Could not reach tailscaled at {self.socket_path}: {e}") from e

        if not resp.content.strip():
            return {}
        try:
            data = resp.json()
        except ValueError as e:
            raise LocalAPIError(f"{path} returned invalid JSON: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise LocalAPIError(f"{path} returned {type(data).__name__}, expected an object")
        return data

    def get_status(self) -> dict:
        """Get node and peer status."""
        return self._get("/localapi/v0/status")

    def get_prefs(self) -> dict:
        """Get node preferences."""
        return self._get("/localapi/v0/prefs")

    def get_tka_status(self) -> dict:
        """Get tailnet lock status."""
        return self._get("/localapi/v0/tka/status")

    def get_serve_config(self) -> dict:
        """Get serve and funnel configuration."""
        return self._get("/localapi/v0/serve-config")
