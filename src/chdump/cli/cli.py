"""CLI application for ClickHouse partition backups."""

import typer

from chdump.cli.commands.backup import resolve_backup_dirs, run_backup
from chdump.cli.commands.restore import resolve_restore_args, run_restore
from chdump.cli.common.context import build_context
from chdump.cli.common.exits import die, warn_exit
from chdump.cli.common.options import (
    BackupOpt,
    CompressOpt,
    DatabaseOpt,
    DebugOpt,
    HostOpt,
    InDirOpt,
    NoFreezeOpt,
    OutDirOpt,
    PortOpt,
    RestoreOpt,
    YesOpt,
)
from chdump.cli.common.output import out

app = typer.Typer(
    help="chdump - ClickHouse partition backup and restore",
    add_completion=False,
)


@app.command()
def main(
    backup: bool = BackupOpt,
    restore: bool = RestoreOpt,
    host: str = HostOpt,
    port: int = PortOpt,
    database: str | None = DatabaseOpt,
    debug: bool = DebugOpt,
    no_freeze: bool = NoFreezeOpt,
    in_dir: str | None = InDirOpt,
    out_dir: str | None = OutDirOpt,
    yes: bool = YesOpt,
    compress: bool = CompressOpt,
):
    """
    Back up frozen partitions of a ClickHouse server, or restore a database.
    """
    if backup and restore:
        die("Run in only one mode (backup or restore)", code=1)
    if not backup and not restore:
        warn_exit("Choose mode (restore or backup)", code=0)

    if restore:
        request = resolve_restore_args(database, in_dir, out_dir)
        ok = run_restore(request, yes=yes)
    else:
        source_root, destination_root = resolve_backup_dirs(in_dir, out_dir)
        appctx = build_context(host, port, debug=debug, compression=compress)
        try:
            ok = run_backup(
                appctx,
                database=database,
                source_root=source_root,
                destination_root=destination_root,
                dry_run=no_freeze,
            )
        finally:
            appctx.adapter.close()

    out.print("done")
    if not ok:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
