"""Read-only discovery of schemas, tables, keys, blockchains and views.

Every operation issues one GET against a ``/discover`` endpoint and returns a
Result triple ``(body, error, success)``. Identifiers are checked for casing
before any request is made.

Example:
    from sxt_sdk import ClientConfig, DiscoveryClient

    with DiscoveryClient(ClientConfig(access_token=token)) as discovery:
        body, error, ok = discovery.list_tables("ETHEREUM", "ALL")

    # Or with the token read from the accessToken environment variable
    from sxt_sdk import discovery
    body, error, ok = discovery.list_schemas("ALL")
"""

from typing import Any

import httpx
import structlog

from sxt_sdk.client import Result, SxTClient
from sxt_sdk.config import ClientConfig
from sxt_sdk.helpers import IdentifierError, validate_identifiers, with_query

logger = structlog.get_logger()


def _optional(value: str) -> str | None:
    """Map an empty optional argument to None so with_query drops it."""
    return value or None


class DiscoveryClient:
    """Client for the discovery endpoints."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.BaseTransport | None = None,
        client: SxTClient | None = None,
    ) -> None:
        # Only a client built here is closed by close(); a passed-in one stays open
        self._owns_client = client is None
        self._client = client if client is not None else SxTClient(config, transport)

    def __enter__(self) -> "DiscoveryClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _get(self, url: str, *identifiers: str) -> Result:
        try:
            validate_identifiers(*identifiers)
        except IdentifierError as e:
            logger.info("Rejected discovery identifiers", error=str(e))
            return Result.failure(str(e))
        return self._client.get(url)

    def list_schemas(self, scope: str, search_pattern: str = "") -> Result:
        """List schemas visible in the given scope, optionally filtered by a search pattern."""
        url = with_query(
            self._client.discover_endpoint("schema"),
            {"scope": scope, "searchPattern": _optional(search_pattern)},
        )
        return self._get(url)

    def list_tables(self, schema: str, scope: str, search_pattern: str = "") -> Result:
        """List tables in a schema."""
        url = with_query(
            self._client.discover_endpoint("table"),
            {
                "scope": scope,
                "schema": _optional(schema),
                "searchPattern": _optional(search_pattern),
            },
        )
        return self._get(url, schema)

    def list_columns(self, schema: str, table: str) -> Result:
        """List the columns of a table."""
        return self._list_table_info("column", schema, table)

    def list_table_index(self, schema: str, table: str) -> Result:
        """List the indexes of a table."""
        return self._list_table_info("index", schema, table)

    def list_table_primary_key(self, schema: str, table: str) -> Result:
        """List the primary key columns of a table."""
        return self._list_table_info("primarykey", schema, table)

    def list_table_relations(self, schema: str, scope: str) -> Result:
        """List relationships between the tables of a schema."""
        url = with_query(
            self._client.discover_endpoint("table") + "/relations",
            {"schema": schema, "scope": scope},
        )
        return self._get(url, schema)

    def list_primary_key_references(self, schema: str, table: str, column: str) -> Result:
        """List foreign keys that reference the given primary key column."""
        return self._list_key_references("primary", schema, table, column)

    def list_foreign_key_references(self, schema: str, table: str, column: str) -> Result:
        """List primary keys referenced by the given foreign key column."""
        return self._list_key_references("foreign", schema, table, column)

    def list_blockchains(self) -> Result:
        """List all indexed blockchains."""
        return self._list_blockchain_info("", "")

    def list_blockchain_schemas(self, chain_id: str) -> Result:
        """List the schemas holding data for one blockchain."""
        return self._list_blockchain_info(chain_id, "schemas")

    def list_blockchain_information(self, chain_id: str) -> Result:
        """Get metadata for one blockchain."""
        return self._list_blockchain_info(chain_id, "meta")

    def list_views(self, name: str = "", owned: str = "") -> Result:
        """List views, optionally filtered by name and ownership (``"true"``/``"false"``)."""
        url = with_query(
            self._client.discover_endpoint("views"),
            {"name": _optional(name), "owned": _optional(owned)},
        )
        return self._get(url)

    def _list_table_info(self, info_type: str, schema: str, table: str) -> Result:
        url = with_query(
            f"{self._client.discover_endpoint('table')}/{info_type}",
            {"schema": schema, "table": table},
        )
        return self._get(url, schema, table)

    def _list_key_references(self, key_type: str, schema: str, table: str, column: str) -> Result:
        url = with_query(
            f"{self._client.discover_endpoint('refs')}/{key_type}key",
            {"schema": schema, "table": table, "column": column},
        )
        return self._get(url, schema, table, column)

    def _list_blockchain_info(self, chain_id: str, info_type: str) -> Result:
        url = self._client.discover_endpoint("blockchains")
        if chain_id:
            url = f"{url}/{chain_id}/{info_type}"
        return self._get(url)


# Module-level shortcuts, configured from the environment on every call.


def list_schemas(scope: str, search_pattern: str = "") -> Result:
    with DiscoveryClient(ClientConfig()) as discovery:
        return discovery.list_schemas(scope, search_pattern)


def list_tables(schema: str, scope: str, search_pattern: str = "") -> Result:
    with DiscoveryClient(ClientConfig()) as discovery:
        return discovery.list_tables(schema, scope, search_pattern)


def list_columns(schema: str, table: str) -> Result:
    with DiscoveryClient(ClientConfig()) as discovery:
        return discovery.list_columns(schema, table)


def list_table_index(schema: str, table: str) -> Result:
    with DiscoveryClient(ClientConfig()) as discovery:
        return discovery.list_table_index(schema, table)


def list_table_primary_key(schema: str, table: str) -> Result:
    with DiscoveryClient(ClientConfig()) as discovery:
        return discovery.list_table_primary_key(schema, table)


def list_table_relations(schema: str, scope: str) -> Result:
    with DiscoveryClient(ClientConfig()) as discovery:
        return discovery.list_table_relations(schema, scope)


def list_primary_key_references(schema: str, table: str, column: str) -> Result:
    with DiscoveryClient(ClientConfig()) as discovery:
        return discovery.list_primary_key_references(schema, table, column)


def list_foreign_key_references(schema: str, table: str, column: str) -> Result:
    with DiscoveryClient(ClientConfig()) as discovery:
        return discovery.list_foreign_key_references(schema, table, column)


def list_blockchains() -> Result:
    with DiscoveryClient(ClientConfig()) as discovery:
        return discovery.list_blockchains()


def list_blockchain_schemas(chain_id: str) -> Result:
    with DiscoveryClient(ClientConfig()) as discovery:
        return discovery.list_blockchain_schemas(chain_id)


def list_blockchain_information(chain_id: str) -> Result:
    with DiscoveryClient(ClientConfig()) as discovery:
        return discovery.list_blockchain_information(chain_id)


def list_views(name: str = "", owned: str = "") -> Result:
    with DiscoveryClient(ClientConfig()) as discovery:
        return discovery.list_views(name, owned)
