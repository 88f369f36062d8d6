"""Restore mode: copy an archived database back into a storage root."""

from __future__ import annotations

from pathlib import Path

from chdump.cli.common.exits import die, require_directories, warn_exit
from chdump.cli.common.options import DEFAULT_CLICKHOUSE_DIRECTORY
from chdump.cli.common.output import out
from chdump.core.models import RestoreRequest
from chdump.core.restore import restore_database, restore_plan


def resolve_restore_args(
    database: str | None, in_dir: str | None, out_dir: str | None
) -> RestoreRequest:
    """Apply restore defaults and validate the required flags and directories."""
    if not in_dir:
        die("please set source directory")
    if not database:
        die("please set database for restore")

    source_root = Path(in_dir)
    destination_root = Path(out_dir or DEFAULT_CLICKHOUSE_DIRECTORY)

    require_directories([source_root, destination_root])

    return RestoreRequest(
        database=database,
        source_root=source_root,
        destination_root=destination_root,
    )


def run_restore(request: RestoreRequest, *, yes: bool) -> bool:
    """
    Restore one database from the archive.

    Returns:
        True if the restore completed.
    """
    out.info("Run in restore mode")
    out.kv(
        {
            "Database": request.database,
            "Archive": request.source_root,
            "Storage root": request.destination_root,
        }
    )
    out.restore_plan_table(restore_plan(request))

    if not yes:
        if not out.confirm("Proceed with copying the archive into the storage root?"):
            warn_exit("Cancelled.")

    with out.status(f"Restoring {request.database}..."):
        result = restore_database(request, out)

    if not result.ok:
        out.error(f"can't restore database, {result.error}")
        return False

    out.success(f"Restored {request.database} ({len(result.copied)} directories).")
    out.warn(
        "No tables were attached: restart the server or ATTACH the tables "
        "to load the restored files."
    )
    return True
