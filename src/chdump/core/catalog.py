"""Database and partition discovery.

This module turns raw rows from the ClickHouse system catalog into the
Database and PartitionDescriptor models used by the freeze orchestration.
It relies on an adapter for the actual queries, so the filtering and
ordering rules can be exercised without a server.
"""

from __future__ import annotations

from typing import Iterable, Protocol

from chdump.core.models import Database, PartitionDescriptor
from chdump.core.reporting import Reporter

HIDDEN_TABLE_PREFIX = "."


class CatalogAdapter(Protocol):
    """Interface for the catalog queries used by the core domain."""

    def list_databases_rows(self) -> Iterable[tuple[str]]:
        """Return one `(name,)` row per database."""
        ...

    def list_partition_rows(self, database: str) -> Iterable[tuple[str, str, str]]:
        """Return `(partition, table, database)` rows of active parts in a database."""
        ...


def is_hidden_table(table: str) -> bool:
    """Return True for engine-internal tables (e.g. `.inner.` tables of views)."""
    return table.startswith(HIDDEN_TABLE_PREFIX)


def list_databases(adapter: CatalogAdapter) -> list[Database]:
    """Return all databases in server order."""
    return [Database(name=row[0]) for row in adapter.list_databases_rows()]


def list_partitions(
    adapter: CatalogAdapter,
    database: str,
    reporter: Reporter,
) -> list[PartitionDescriptor]:
    """
    Return the active partitions of all user tables in a database.

    Rows are kept in the order the catalog returns them. Rows belonging to
    tables whose name starts with `.` are skipped. One info line is reported
    per partition found.

    Args:
        adapter: Catalog adapter used to query `system.parts`.
        database: Database name. Unknown databases simply yield no rows.
        reporter: Sink for progress messages.

    Returns:
        A list of PartitionDescriptor objects.

    Raises:
        QueryError: If the catalog query fails.
    """
    partitions: list[PartitionDescriptor] = []

    for partition_id, table, database_name in adapter.list_partition_rows(database):
        if is_hidden_table(table):
            continue

        reporter.info(
            f"found {partition_id} partition of {table} table in {database_name} database"
        )
        partitions.append(
            PartitionDescriptor(
                database=database_name,
                table=table,
                partition=partition_id,
            )
        )

    return partitions
