"""Python SDK for the Space and Time data-indexing and SQL service.

- discovery: list schemas, tables, columns, keys, blockchains and views
- sqlcore: create schemas and tables, run DDL statements

Example usage:
    from sxt_sdk import ClientConfig, DiscoveryClient, SQLCoreClient

    config = ClientConfig(access_token=token)
    with DiscoveryClient(config) as discovery:
        body, error, ok = discovery.list_schemas("ALL")
"""

from . import discovery, sqlcore
from .client import Outcome, Result, SxTClient
from .config import ClientConfig, load_config
from .discovery import DiscoveryClient
from .helpers import (
    IdentifierError,
    MissingTokenError,
    PublicKeyError,
    SxTError,
    check_upper_case,
    get_discover_endpoint,
    get_endpoint,
)
from .sqlcore import AccessType, SQLCoreClient

__all__ = [
    "discovery",
    "sqlcore",
    "AccessType",
    "ClientConfig",
    "DiscoveryClient",
    "IdentifierError",
    "MissingTokenError",
    "Outcome",
    "PublicKeyError",
    "Result",
    "SQLCoreClient",
    "SxTClient",
    "SxTError",
    "check_upper_case",
    "get_discover_endpoint",
    "get_endpoint",
    "load_config",
]
__version__ = "0.1.0"
