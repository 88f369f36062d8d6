"""Common CLI options for the CLI."""

import typer

DEFAULT_CLICKHOUSE_DIRECTORY = "/var/lib/clickhouse"

BackupOpt = typer.Option(
    False,
    "--backup",
    help="Backup mode",
)

RestoreOpt = typer.Option(
    False,
    "--restore",
    help="Restore mode",
)

HostOpt = typer.Option(
    "127.0.0.1",
    "--host",
    "-h",
    help="ClickHouse server hostname",
)

PortOpt = typer.Option(
    9000,
    "--port",
    "-p",
    help="ClickHouse native protocol port",
)

DatabaseOpt = typer.Option(
    None,
    "--db",
    "-db",
    help="Database name (required for restore, optional filter for backup)",
)

DebugOpt = typer.Option(
    False,
    "--debug",
    "-d",
    help="Show driver debug info",
)

NoFreezeOpt = typer.Option(
    False,
    "--no-freeze",
    help="Do not freeze, only show partitions and FREEZE statements",
)

InDirOpt = typer.Option(
    None,
    "--in",
    help=f"Source directory ({DEFAULT_CLICKHOUSE_DIRECTORY} for backup mode by default)",
)

OutDirOpt = typer.Option(
    None,
    "--out",
    help=f"Destination directory ({DEFAULT_CLICKHOUSE_DIRECTORY} for restore mode by default)",
)

YesOpt = typer.Option(
    False,
    "--yes",
    help="Skip confirmation prompt",
)

CompressOpt = typer.Option(
    False,
    "--compress",
    help="Compress data on the wire (needs the 'compression' extra)",
)
