"""Core domain models for ClickHouse backups.

These models represent databases, partitions and the outcome of freeze and
restore runs in a simple, immutable form. They are intentionally free of
driver types and UI/CLI concerns.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Database:
    """Lightweight representation of a ClickHouse database."""

    name: str


@dataclass(frozen=True)
class PartitionDescriptor:
    """
    Identifies one physical partition.

    Attributes:
        database: Name of the database owning the table.
        table: Name of the table owning the partition.
        partition: Partition key token as reported by `system.parts`.
                   The format is owned by the engine and treated as opaque.
    """

    database: str
    table: str
    partition: str

    @property
    def full_table_name(self) -> str:
        """Return `database.table`."""
        return f"{self.database}.{self.table}"


@dataclass(frozen=True)
class FreezeRequest:
    """A batch of partitions to freeze and copy into the archive tree."""

    partitions: tuple[PartitionDescriptor, ...]
    source_root: Path
    destination_root: Path
    dry_run: bool = False


@dataclass(frozen=True)
class FreezeResult:
    """
    Outcome of a single freeze orchestration call.

    Attributes:
        frozen: Partitions frozen and copied (or only announced in dry run),
                in processing order.
        statements: FREEZE statements executed (or logged in dry run).
        failed: Partition on which processing stopped, if any.
        error: Reason processing stopped, if any.
    """

    frozen: tuple[PartitionDescriptor, ...] = ()
    statements: tuple[str, ...] = ()
    failed: PartitionDescriptor | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class RestoreRequest:
    """Restore one archived database into a ClickHouse storage root."""

    database: str
    source_root: Path
    destination_root: Path


@dataclass(frozen=True)
class RestoreResult:
    """Outcome of a restore run: the (source, destination) pairs copied."""

    database: str
    copied: tuple[tuple[Path, Path], ...] = ()
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
