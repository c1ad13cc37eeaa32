"""Schema and table management through the DDL endpoint.

Example:
    from sxt_sdk import AccessType, ClientConfig, SQLCoreClient

    with SQLCoreClient(ClientConfig(access_token=token)) as sql:
        message, ok = sql.create_table(
            "CREATE TABLE ETHEREUM.TRANSFERS (ID INT PRIMARY KEY)",
            AccessType.PERMISSIONED,
            public_key,
            biscuits=[biscuit],
        )
"""

from collections.abc import Sequence
from enum import Enum
from typing import Any

import httpx
import structlog

from sxt_sdk.client import Outcome, SxTClient
from sxt_sdk.config import ClientConfig
from sxt_sdk.helpers import PublicKeyError

logger = structlog.get_logger()

DDL_ACTION = "sql/ddl"


class AccessType(str, Enum):
    """Table visibility and encryption policy.

    See https://docs.spaceandtime.io/docs/secure-your-table
    """

    PUBLIC = "public"
    PERMISSIONED = "permissioned"
    ENCRYPTED = "encrypted"

    @classmethod
    def parse(cls, value: "str | AccessType") -> "AccessType | None":
        """Return the matching member, or None for empty or unknown values."""
        try:
            return cls(value)
        except ValueError:
            return None


def format_public_key(public_key: Any) -> str:
    """Render a public key as lowercase hex.

    Accepts raw bytes or a key object exposing ``public_bytes_raw()``, such as
    cryptography's Ed25519PublicKey.

    Raises:
        PublicKeyError: For any other type, including hex strings and ints.
    """
    if hasattr(public_key, "public_bytes_raw"):
        public_key = public_key.public_bytes_raw()
    if not isinstance(public_key, (bytes, bytearray, memoryview)):
        raise PublicKeyError(
            f"Invalid public key: expected bytes, got {type(public_key).__name__}"
        )
    return bytes(public_key).hex()


def with_table_configuration(sql_text: str, access_type: AccessType, public_key: Any) -> str:
    """Append the access-control WITH clause to a CREATE TABLE statement."""
    return (
        f'{sql_text} WITH "public_key={format_public_key(public_key)},'
        f'access_type={access_type.value}"'
    )


class SQLCoreClient:
    """Client for DDL statements (CREATE SCHEMA, CREATE TABLE, ALTER, DROP)."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.BaseTransport | None = None,
        client: SxTClient | None = None,
    ) -> None:
        # Only a client built here is closed by close(); a passed-in one stays open
        self._owns_client = client is None
        self._client = client if client is not None else SxTClient(config, transport)

    def __enter__(self) -> "SQLCoreClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def ddl(
        self,
        sql_text: str,
        origin_app: str = "",
        biscuits: Sequence[str] = (),
    ) -> Outcome:
        """Submit a DDL statement.

        Args:
            sql_text: The statement to run.
            origin_app: Sent as the X-Origin-App header when non-empty.
            biscuits: Authorization biscuits for the resources touched.

        Returns:
            ``("", True)`` when the service answers 200, otherwise an error
            message and False.
        """
        payload = {"biscuits": list(biscuits), "sqlText": sql_text}
        return self._client.post_json(self._client.endpoint(DDL_ACTION), payload, origin_app)

    def create_schema(
        self,
        sql_text: str,
        origin_app: str = "",
        biscuits: Sequence[str] = (),
    ) -> Outcome:
        """Create a schema. Same request as ddl()."""
        return self.ddl(sql_text, origin_app, biscuits)

    def create_table(
        self,
        sql_text: str,
        access_type: "str | AccessType",
        public_key: Any,
        origin_app: str = "",
        biscuits: Sequence[str] = (),
    ) -> Outcome:
        """Create a table with an access type and the owner's public key.

        The access type must be one of public, permissioned or encrypted,
        and the key must be raw bytes or expose public_bytes_raw(). Anything
        else fails without contacting the service.
        """
        parsed = AccessType.parse(access_type)
        if parsed is None:
            logger.info("Rejected table access type", access_type=str(access_type))
            return Outcome("Invalid access type", False)

        try:
            sql_text = with_table_configuration(sql_text, parsed, public_key)
        except PublicKeyError as e:
            logger.info("Rejected table public key", error=str(e))
            return Outcome(str(e), False)

        return self.ddl(sql_text, origin_app, biscuits)


# Module-level shortcuts, configured from the environment on every call.


def ddl(sql_text: str, origin_app: str = "", biscuits: Sequence[str] = ()) -> Outcome:
    with SQLCoreClient(ClientConfig()) as sql:
        return sql.ddl(sql_text, origin_app, biscuits)


def create_schema(sql_text: str, origin_app: str = "", biscuits: Sequence[str] = ()) -> Outcome:
    with SQLCoreClient(ClientConfig()) as sql:
        return sql.create_schema(sql_text, origin_app, biscuits)


def create_table(
    sql_text: str,
    access_type: "str | AccessType",
    public_key: Any,
    origin_app: str = "",
    biscuits: Sequence[str] = (),
) -> Outcome:
    with SQLCoreClient(ClientConfig()) as sql:
        return sql.create_table(sql_text, access_type, public_key, origin_app, biscuits)
