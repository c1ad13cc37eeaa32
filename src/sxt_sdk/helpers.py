"""Shared endpoint and identifier helpers for the discovery and sqlcore clients."""

from collections.abc import Mapping

import httpx

from sxt_sdk.config import DEFAULT_API_VERSION, DEFAULT_BASE_URL


class SxTError(Exception):
    """Base error for failures detected before a request reaches the service."""


class IdentifierError(SxTError):
    """Raised when a schema, table or column identifier is not uppercase."""


class PublicKeyError(SxTError):
    """Raised when a table owner's public key is not raw bytes or a key object."""


class MissingTokenError(SxTError):
    """Raised when a request needs an access token and none is configured."""

    def __init__(self) -> None:
        super().__init__("Access token is not set")


def get_endpoint(
    action: str,
    base_url: str | None = None,
    api_version: str | None = None,
) -> str:
    """Build the URL for an API action such as ``sql/ddl``.

    Args:
        action: Path of the action below the versioned API root.
        base_url: Service root. Defaults to the public SxT gateway.
        api_version: API version segment. Defaults to ``v1``.

    Returns:
        The absolute endpoint URL, without a trailing slash.
    """
    root = (base_url or DEFAULT_BASE_URL).rstrip("/")
    version = (api_version or DEFAULT_API_VERSION).strip("/")
    return f"{root}/{version}/{action.strip('/')}"


def get_discover_endpoint(
    resource: str,
    base_url: str | None = None,
    api_version: str | None = None,
) -> str:
    """Build the discovery URL for a resource kind (``schema``, ``table``, ``views``, ...)."""
    return get_endpoint(f"discover/{resource}", base_url, api_version)


def check_upper_case(identifier: str) -> tuple[str, bool]:
    """Check that an identifier is entirely uppercase.

    The service stores identifiers uppercased, so lowercase or mixed-case
    names never match anything. An empty identifier is accepted.

    Returns:
        An ``(error message, valid)`` pair. The message is empty when valid.
    """
    if identifier != identifier.upper():
        return f"Identifier '{identifier}' must be uppercase", False
    return "", True


def validate_identifiers(*identifiers: str) -> None:
    """Raise IdentifierError for the first identifier that fails check_upper_case."""
    for identifier in identifiers:
        message, valid = check_upper_case(identifier)
        if not valid:
            raise IdentifierError(message)


def with_query(endpoint: str, params: Mapping[str, str | None]) -> str:
    """Append an encoded query string to an endpoint.

    Parameters set to None are left out; empty strings are kept. The ``?`` is
    always appended, even when no parameters remain.
    """
    present = {key: value for key, value in params.items() if value is not None}
    return f"{endpoint}?{httpx.QueryParams(present)}"
