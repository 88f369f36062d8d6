"""Restore an archived database back into a ClickHouse storage root.

The archive produced by a backup run is copied back into the layout the
server reads at startup:

    <source_root>/metadata/<database>   -> <destination_root>/metadata/<database>
    <source_root>/partitions/<database> -> <destination_root>/data/<database>

No ATTACH/DETACH statements are issued. The server picks the files up on
its next start, or the operator attaches the tables by hand.
"""

from __future__ import annotations

from pathlib import Path

from chdump.core.errors import CopyError
from chdump.core.fileutils import copy_directory, find_missing_directory
from chdump.core.freeze import (
    archive_metadata_dir,
    archive_partitions_dir,
    live_data_dir,
    metadata_dir,
)
from chdump.core.models import RestoreRequest, RestoreResult
from chdump.core.reporting import Reporter


def restore_plan(request: RestoreRequest) -> list[tuple[Path, Path]]:
    """Return the (source, destination) pairs a restore would copy, metadata first."""
    database = request.database
    return [
        (
            archive_metadata_dir(request.source_root, database),
            metadata_dir(request.destination_root, database),
        ),
        (
            archive_partitions_dir(request.source_root, database),
            live_data_dir(request.destination_root, database),
        ),
    ]


def restore_database(request: RestoreRequest, reporter: Reporter) -> RestoreResult:
    """
    Copy an archived database into a storage root.

    The archive must contain both the metadata and the partitions directory
    of the database; otherwise nothing is copied.
    """
    plan = restore_plan(request)

    missing = find_missing_directory(src for src, _ in plan)
    if missing is not None:
        return RestoreResult(
            database=request.database,
            error=f"{missing} not found in archive",
        )

    copied: list[tuple[Path, Path]] = []
    for source, destination in plan:
        reporter.info(f"restoring {source} -> {destination}")
        try:
            copy_directory(source, destination)
        except CopyError as exc:
            reporter.error(f"can't restore database {request.database}: {exc}")
            return RestoreResult(
                database=request.database, copied=tuple(copied), error=str(exc)
            )
        copied.append((source, destination))

    return RestoreResult(database=request.database, copied=tuple(copied))
