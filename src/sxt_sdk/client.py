"""Shared HTTP execution for the SxT discovery and sqlcore clients."""

from typing import Any, NamedTuple

import httpx
import structlog

from sxt_sdk.config import ClientConfig
from sxt_sdk.helpers import MissingTokenError, get_discover_endpoint, get_endpoint

logger = structlog.get_logger()


class Result(NamedTuple):
    """Outcome of a discovery call: raw body, error message and success flag."""

    body: str
    error: str
    success: bool

    @classmethod
    def failure(cls, error: str) -> "Result":
        return cls("", error, False)


class Outcome(NamedTuple):
    """Outcome of a DDL call: error message (empty on success) and success flag."""

    message: str
    success: bool


class SxTClient:
    """Reusable HTTP client bound to one ClientConfig.

    The underlying httpx.Client is created on first use and kept open until
    close() is called, so consecutive calls reuse connections.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Connection settings. Read from the environment when None.
            transport: Optional httpx transport, mainly for tests.
        """
        self.config = config if config is not None else ClientConfig()
        self._transport = transport
        self._client: httpx.Client | None = None

    def __enter__(self) -> "SxTClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def http(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None:
            transport = self._transport
            if transport is None:
                transport = httpx.HTTPTransport(retries=self.config.retries)

            # Granular timeout (connect, read, write, pool)
            timeout = httpx.Timeout(
                connect=5.0,
                read=self.config.timeout,
                write=self.config.timeout,
                pool=5.0,
            )
            self._client = httpx.Client(transport=transport, timeout=timeout)
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def discover_endpoint(self, resource: str) -> str:
        return get_discover_endpoint(resource, self.config.base_url, self.config.api_version)

    def endpoint(self, action: str) -> str:
        return get_endpoint(action, self.config.base_url, self.config.api_version)

    def _bearer(self) -> str:
        if not self.config.access_token:
            raise MissingTokenError()
        return f"Bearer {self.config.access_token}"

    def get(self, url: str) -> Result:
        """Execute an authorized GET and return the body whatever the status.

        Only request errors count as failures. A readable non-2xx response is
        returned as a successful body and logged.
        """
        try:
            request = self.http.build_request("GET", url)
        except (httpx.InvalidURL, ValueError, TypeError) as e:
            return Result.failure(f"Failed to create request: {e}")

        try:
            request.headers["Authorization"] = self._bearer()
        except MissingTokenError as e:
            logger.info("Discovery request skipped", url=url, reason=str(e))
            return Result.failure(str(e))

        logger.debug("Sending discovery request", method="GET", url=url)

        try:
            response = self.http.send(request, stream=True)
        except httpx.RequestError as e:
            return Result.failure(f"Request failed: {e}")

        try:
            response.read()
        except (httpx.HTTPError, httpx.StreamError) as e:
            return Result.failure(f"Failed to read response body: {e}")
        finally:
            response.close()

        if not response.is_success:
            logger.warning(
                "Discovery request returned non-success status",
                url=url,
                status_code=response.status_code,
            )

        return Result(response.text, "", True)

    def post_json(
        self,
        url: str,
        payload: dict[str, Any],
        origin_app: str = "",
    ) -> Outcome:
        """POST a JSON payload and succeed only on HTTP 200.

        The bearer token is attached when one is configured; the X-Origin-App
        header is sent when origin_app (or the configured default) is set.
        """
        headers = {"Content-Type": "application/json"}
        origin_app = origin_app or self.config.origin_app
        if origin_app:
            headers["X-Origin-App"] = origin_app
        if self.config.access_token:
            headers["Authorization"] = f"Bearer {self.config.access_token}"

        try:
            request = self.http.build_request("POST", url, json=payload, headers=headers)
        except (httpx.InvalidURL, ValueError, TypeError) as e:
            return Outcome(f"Failed to create request: {e}", False)

        logger.debug("Sending DDL request", method="POST", url=url, origin_app=origin_app or None)

        try:
            response = self.http.send(request, stream=True)
        except httpx.RequestError as e:
            return Outcome(f"Failed to execute request: {e}", False)

        try:
            response.read()
        except (httpx.HTTPError, httpx.StreamError) as e:
            return Outcome(f"Failed to read response body: {e}", False)
        finally:
            response.close()

        if response.status_code != httpx.codes.OK:
            logger.warning("DDL request rejected", url=url, status_code=response.status_code)
            return Outcome(f"Request failed with status {response.status_code}: {response.text}", False)

        return Outcome("", True)
