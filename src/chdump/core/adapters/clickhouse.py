from __future__ import annotations

from clickhouse_driver import Client
from clickhouse_driver.errors import Error as DriverError

from chdump.core.errors import ConnectionFailed, QueryError

PARTITIONS_QUERY = (
    "SELECT partition, table, database "
    "FROM system.parts "
    "WHERE active AND database = %(database)s"
)


def format_driver_error(exc: Exception) -> str:
    """Return `[code] message` for driver/server exceptions, or the plain text."""
    code = getattr(exc, "code", None)
    message = getattr(exc, "message", None) or str(exc)
    if code:
        return f"[{code}] {message}"
    return message


class ClickHouseAdapter:
    """Adapter around clickhouse-driver for catalog queries and FREEZE statements."""

    def __init__(self, client: Client) -> None:
        self.client = client

    @classmethod
    def connect(
        cls, host: str, port: int, *, compression: bool = False
    ) -> "ClickHouseAdapter":
        """Create an adapter for `host:port` and check the server answers.

        `compression` turns on LZ4 block compression, which needs the
        driver's lz4 extra installed.
        """
        adapter = cls(
            Client(
                host=host,
                port=port,
                user="default",
                password="",
                compression=compression,
            )
        )
        adapter.ping()
        return adapter

    def ping(self) -> None:
        """Run a trivial query; raise ConnectionFailed if the server is unreachable."""
        try:
            self.client.execute("SELECT 1")
        except DriverError as exc:
            raise ConnectionFailed(format_driver_error(exc)) from exc

    def _query(self, query: str, params: dict | None = None) -> list[tuple]:
        try:
            return self.client.execute(query, params)
        except DriverError as exc:
            raise QueryError(format_driver_error(exc)) from exc

    def list_databases_rows(self) -> list[tuple[str]]:
        """Return `(name,)` rows from SHOW DATABASES."""
        return self._query("SHOW DATABASES")

    def list_partition_rows(self, database: str) -> list[tuple[str, str, str]]:
        """Return `(partition, table, database)` rows of active parts."""
        return self._query(PARTITIONS_QUERY, {"database": database})

    def execute(self, statement: str) -> None:
        """Execute a statement, discarding its result."""
        self._query(statement)

    def close(self) -> None:
        """Close the underlying connection."""
        self.client.disconnect()
