"""Error types raised by the core and the ClickHouse adapter."""


class DumpError(RuntimeError):
    """Base class for backup/restore failures."""


class ConnectionFailed(DumpError):
    """Raised when the ClickHouse server cannot be reached."""


class QueryError(DumpError):
    """Raised when a catalog query or FREEZE statement fails."""


class CopyError(DumpError):
    """Raised when copying into the archive or storage tree fails."""
