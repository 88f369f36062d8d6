"""Backup mode: freeze partitions and copy them into the archive tree."""

from __future__ import annotations

from pathlib import Path

from chdump.cli.common.context import AppContext
from chdump.cli.common.exits import die, require_directories
from chdump.cli.common.options import DEFAULT_CLICKHOUSE_DIRECTORY
from chdump.cli.common.output import out
from chdump.core.catalog import list_databases, list_partitions
from chdump.core.errors import QueryError
from chdump.core.freeze import freeze_partitions
from chdump.core.models import FreezeRequest, FreezeResult


def resolve_backup_dirs(in_dir: str | None, out_dir: str | None) -> tuple[Path, Path]:
    """Apply backup defaults and make sure both directories exist."""
    source_root = Path(in_dir or DEFAULT_CLICKHOUSE_DIRECTORY)
    if not out_dir:
        die("please set destination directory")
    destination_root = Path(out_dir)

    require_directories([source_root, destination_root])
    return source_root, destination_root


def _database_names(appctx: AppContext, database: str | None) -> list[str] | None:
    """Databases to back up, or None when the server could not list them."""
    if database:
        return [database]
    try:
        with out.status("Loading databases..."):
            return [db.name for db in list_databases(appctx.adapter)]
    except QueryError as exc:
        out.error(f"can't get database list, {exc}")
        return None


def run_backup(
    appctx: AppContext,
    *,
    database: str | None,
    source_root: Path,
    destination_root: Path,
    dry_run: bool,
) -> bool:
    """
    Back up one database, or every database when none is given.

    Catalog and freeze failures are reported and the run moves on to the
    next database. A failed database listing ends the run as a failure.

    Returns:
        True if every database was backed up without errors.
    """
    out.info("Run in backup mode")
    if dry_run:
        out.warn("DRY RUN: partitions will not be frozen or copied.")

    names = _database_names(appctx, database)
    if names is None:
        return False

    results: list[tuple[str, FreezeResult | None]] = []

    for name in names:
        try:
            partitions = list_partitions(appctx.adapter, name, out)
        except QueryError as exc:
            out.error(f"can't get partition list, {exc}")
            results.append((name, None))
            continue

        if not partitions:
            out.warn(f"No active partitions in {name}")
            results.append((name, FreezeResult()))
            continue

        out.partitions_table(partitions, title=f"Partitions in {name}")

        request = FreezeRequest(
            partitions=tuple(partitions),
            source_root=source_root,
            destination_root=destination_root,
            dry_run=dry_run,
        )
        status_msg = "Listing FREEZE statements..." if dry_run else f"Freezing {name}..."
        with out.status(status_msg):
            result = freeze_partitions(appctx.adapter, request, out)
        if not result.ok:
            out.warn(
                f"Stopped backing up {name} after {len(result.frozen)} partition(s)"
            )
        results.append((name, result))

    if results:
        out.backup_results_table(results, title="Backup results")

    return all(result is not None and result.ok for _, result in results)
