from pathlib import Path

from chdump.core.errors import QueryError
from chdump.core.freeze import (
    archive_metadata_dir,
    archive_partitions_dir,
    freeze_partitions,
    freeze_statement,
    shadow_data_dir,
)
from chdump.core.models import FreezeRequest, PartitionDescriptor


class _Adapter:
    def __init__(self, fail_on: str | None = None):
        self.executed: list[str] = []
        self.fail_on = fail_on

    def execute(self, statement: str) -> None:
        if self.fail_on and self.fail_on in statement:
            raise QueryError("[60] Table doesn't exist")
        self.executed.append(statement)


EVENTS = PartitionDescriptor(database="analytics", table="events", partition="202401")


def _make_clickhouse_root(root: Path, database: str = "analytics") -> None:
    part = root / "shadow" / "1" / "data" / database / "events" / "202401_1_1_0"
    part.mkdir(parents=True)
    (part / "data.bin").write_bytes(b"\x10\x20frozen")
    metadata = root / "metadata" / database
    metadata.mkdir(parents=True)
    (metadata / "events.sql").write_text("ATTACH TABLE events (ts DateTime) ENGINE = MergeTree")


def test_freeze_statement_text():
    assert freeze_statement(EVENTS) == (
        "ALTER TABLE analytics.events FREEZE PARTITION '202401';"
    )


def test_layout_paths():
    assert shadow_data_dir(Path("/src"), "analytics") == Path("/src/shadow/1/data/analytics")
    assert archive_partitions_dir(Path("/dst"), "analytics") == Path(
        "/dst/partitions/analytics"
    )
    assert archive_metadata_dir(Path("/dst"), "analytics") == Path("/dst/metadata/analytics")


def test_freeze_partitions_executes_and_copies(tmp_path, reporter):
    source = tmp_path / "src"
    destination = tmp_path / "dst"
    destination.mkdir()
    _make_clickhouse_root(source)
    adapter = _Adapter()

    result = freeze_partitions(
        adapter,
        FreezeRequest(
            partitions=(EVENTS,),
            source_root=source,
            destination_root=destination,
        ),
        reporter,
    )

    assert result.ok
    assert result.frozen == (EVENTS,)
    assert adapter.executed == ["ALTER TABLE analytics.events FREEZE PARTITION '202401';"]
    assert (destination / "partitions" / "analytics").is_dir()
    assert (destination / "metadata" / "analytics").is_dir()
    assert (
        destination / "partitions" / "analytics" / "events" / "202401_1_1_0" / "data.bin"
    ).read_bytes() == b"\x10\x20frozen"
    assert (destination / "metadata" / "analytics" / "events.sql").read_text().startswith(
        "ATTACH TABLE events"
    )


def test_freeze_partitions_handles_several_partitions_of_one_database(tmp_path, reporter):
    source = tmp_path / "src"
    destination = tmp_path / "dst"
    destination.mkdir()
    _make_clickhouse_root(source)
    partitions = (
        EVENTS,
        PartitionDescriptor(database="analytics", table="events", partition="202402"),
    )
    adapter = _Adapter()

    result = freeze_partitions(
        adapter,
        FreezeRequest(partitions=partitions, source_root=source, destination_root=destination),
        reporter,
    )

    assert result.ok
    assert result.frozen == partitions
    assert len(adapter.executed) == 2


def test_freeze_partitions_dry_run_never_executes_or_touches_disk(tmp_path, reporter):
    source = tmp_path / "src"
    destination = tmp_path / "dst"
    destination.mkdir()
    adapter = _Adapter()

    result = freeze_partitions(
        adapter,
        FreezeRequest(
            partitions=(EVENTS,),
            source_root=source,
            destination_root=destination,
            dry_run=True,
        ),
        reporter,
    )

    assert result.ok
    assert adapter.executed == []
    assert list(destination.iterdir()) == []
    assert not source.exists()
    assert result.statements == ("ALTER TABLE analytics.events FREEZE PARTITION '202401';",)
    assert ("info", "ALTER TABLE analytics.events FREEZE PARTITION '202401';") in (
        reporter.messages
    )


def test_freeze_partitions_stops_at_first_failure(tmp_path, reporter):
    source = tmp_path / "src"
    destination = tmp_path / "dst"
    destination.mkdir()
    _make_clickhouse_root(source)
    broken = PartitionDescriptor(database="analytics", table="gone", partition="1")
    never = PartitionDescriptor(database="analytics", table="events", partition="202403")
    adapter = _Adapter(fail_on="analytics.gone")

    result = freeze_partitions(
        adapter,
        FreezeRequest(
            partitions=(EVENTS, broken, never),
            source_root=source,
            destination_root=destination,
        ),
        reporter,
    )

    assert not result.ok
    assert result.failed == broken
    assert result.frozen == (EVENTS,)
    assert "60" in (result.error or "")
    assert adapter.executed == ["ALTER TABLE analytics.events FREEZE PARTITION '202401';"]
    assert (destination / "partitions" / "analytics" / "events").is_dir()
    assert any(level == "error" for level, _ in reporter.messages)


def test_freeze_partitions_copy_failure_aborts(tmp_path, reporter):
    source = tmp_path / "src"
    destination = tmp_path / "dst"
    destination.mkdir()
    # frozen data is missing: the engine froze into a different shadow increment
    (source / "metadata" / "analytics").mkdir(parents=True)
    adapter = _Adapter()

    result = freeze_partitions(
        adapter,
        FreezeRequest(
            partitions=(
                EVENTS,
                PartitionDescriptor(database="analytics", table="events", partition="2"),
            ),
            source_root=source,
            destination_root=destination,
        ),
        reporter,
    )

    assert not result.ok
    assert result.failed == EVENTS
    assert result.frozen == ()
    assert len(adapter.executed) == 1
