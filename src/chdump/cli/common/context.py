"""Application context management for the CLI."""

import logging
from dataclasses import dataclass

from rich.logging import RichHandler

from chdump.cli.common.exits import exit_from_exc
from chdump.cli.common.output import console
from chdump.core.adapters.clickhouse import ClickHouseAdapter
from chdump.core.errors import ConnectionFailed


@dataclass
class AppContext:
    """Application context holding the ClickHouse connection adapter."""

    host: str
    port: int
    adapter: ClickHouseAdapter


def enable_driver_debug() -> None:
    """Route clickhouse-driver's own debug logging to the console."""
    logger = logging.getLogger("clickhouse_driver")
    logger.setLevel(logging.DEBUG)
    logger.addHandler(RichHandler(console=console, show_path=False))


def build_context(
    host: str, port: int, *, debug: bool = False, compression: bool = False
) -> AppContext:
    """Build and return the application context with a live ClickHouse adapter.

    Args:
        host: ClickHouse server hostname.
        port: ClickHouse native protocol port.
        debug: Enable driver debug logging.
        compression: Compress data exchanged with the server.

    Returns:
        AppContext: Application context with a connected adapter.
    """
    if debug:
        enable_driver_debug()
    try:
        adapter = ClickHouseAdapter.connect(host, port, compression=compression)
    except ConnectionFailed as exc:
        exit_from_exc(
            exc,
            message=f"can't connect to clickhouse server {host}:{port}, {exc}",
            code=1,
        )
    return AppContext(host=host, port=port, adapter=adapter)
