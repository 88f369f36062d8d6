"""Freeze orchestration: snapshot partitions and move them into the archive.

For each partition the engine is asked to FREEZE it, which hard-links the
partition files under `<source_root>/shadow/1/data/<database>`. The frozen
data and the database metadata are then copied into the archive tree:

    <destination_root>/partitions/<database>/...
    <destination_root>/metadata/<database>/...

Processing is sequential and stops at the first failure. Partitions already
copied stay in the archive; nothing is rolled back.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from chdump.core.errors import CopyError, QueryError
from chdump.core.fileutils import copy_directory, ensure_directories
from chdump.core.models import FreezeRequest, FreezeResult, PartitionDescriptor
from chdump.core.reporting import Reporter

SHADOW_INCREMENT = "1"


class FreezeAdapter(Protocol):
    """Interface for executing FREEZE statements."""

    def execute(self, statement: str) -> None:
        """Execute a statement on the live connection."""
        ...


def freeze_statement(partition: PartitionDescriptor) -> str:
    """Render the FREEZE statement for a partition."""
    return (
        f"ALTER TABLE {partition.database}.{partition.table} "
        f"FREEZE PARTITION '{partition.partition}';"
    )


def shadow_data_dir(root: Path, database: str) -> Path:
    """Where the engine materializes frozen parts of a database."""
    return Path(root) / "shadow" / SHADOW_INCREMENT / "data" / database


def metadata_dir(root: Path, database: str) -> Path:
    """Table metadata (.sql) directory of a database in a storage root."""
    return Path(root) / "metadata" / database


def live_data_dir(root: Path, database: str) -> Path:
    """Table data directory of a database in a storage root."""
    return Path(root) / "data" / database


def archive_partitions_dir(root: Path, database: str) -> Path:
    return Path(root) / "partitions" / database


def archive_metadata_dir(root: Path, database: str) -> Path:
    return Path(root) / "metadata" / database


def _copy_frozen(partition: PartitionDescriptor, request: FreezeRequest) -> None:
    database = partition.database
    partitions_out = archive_partitions_dir(request.destination_root, database)
    metadata_out = archive_metadata_dir(request.destination_root, database)

    ensure_directories([partitions_out, metadata_out])
    copy_directory(shadow_data_dir(request.source_root, database), partitions_out)
    copy_directory(metadata_dir(request.source_root, database), metadata_out)


def freeze_partitions(
    adapter: FreezeAdapter,
    request: FreezeRequest,
    reporter: Reporter,
) -> FreezeResult:
    """
    Freeze each requested partition and copy it into the archive tree.

    In dry-run mode the statements are only reported: nothing is executed
    and the filesystem is not touched.

    Args:
        adapter: Adapter used to execute FREEZE statements.
        request: Partitions plus source/destination roots and the dry-run flag.
        reporter: Sink for progress and error messages.

    Returns:
        FreezeResult describing what was processed and, on failure, where
        and why processing stopped.
    """
    frozen: list[PartitionDescriptor] = []
    statements: list[str] = []

    for partition in request.partitions:
        statement = freeze_statement(partition)

        if request.dry_run:
            reporter.info(statement)
            statements.append(statement)
            frozen.append(partition)
            continue

        try:
            adapter.execute(statement)
            statements.append(statement)
            _copy_frozen(partition, request)
        except (QueryError, CopyError) as exc:
            reporter.error(
                f"can't freeze partition {partition.partition} "
                f"of {partition.full_table_name}: {exc}"
            )
            return FreezeResult(
                frozen=tuple(frozen),
                statements=tuple(statements),
                failed=partition,
                error=str(exc),
            )

        frozen.append(partition)

    return FreezeResult(frozen=tuple(frozen), statements=tuple(statements))
