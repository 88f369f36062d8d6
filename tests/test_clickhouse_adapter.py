import pytest
from clickhouse_driver.errors import NetworkError, ServerException

from chdump.core.adapters import clickhouse as clickhouse_adapter
from chdump.core.adapters.clickhouse import (
    PARTITIONS_QUERY,
    ClickHouseAdapter,
    format_driver_error,
)
from chdump.core.errors import ConnectionFailed, QueryError


class _Client:
    def __init__(self, responses=None, error: Exception | None = None):
        self.responses = responses or {}
        self.error = error
        self.calls: list[tuple[str, dict | None]] = []
        self.disconnected = False

    def execute(self, query, params=None):
        self.calls.append((query, params))
        if self.error is not None:
            raise self.error
        return self.responses.get(query, [])

    def disconnect(self):
        self.disconnected = True


def test_format_driver_error_includes_server_code():
    exc = ServerException("Table analytics.gone doesn't exist.", code=60)

    assert format_driver_error(exc) == "[60] Table analytics.gone doesn't exist."


def test_format_driver_error_plain_exception():
    assert format_driver_error(RuntimeError("boom")) == "boom"


def test_list_partition_rows_binds_database_parameter():
    client = _Client(
        responses={PARTITIONS_QUERY: [("202401", "events", "analytics")]}
    )
    adapter = ClickHouseAdapter(client)

    rows = adapter.list_partition_rows("analytics")

    assert rows == [("202401", "events", "analytics")]
    assert client.calls == [(PARTITIONS_QUERY, {"database": "analytics"})]


def test_query_failures_become_query_errors():
    adapter = ClickHouseAdapter(
        _Client(error=ServerException("Syntax error", code=62))
    )

    with pytest.raises(QueryError, match=r"\[62\] Syntax error"):
        adapter.execute("ALTER TABLE analytics.events FREEZE PARTITION '202401';")


def test_ping_failure_becomes_connection_failed():
    adapter = ClickHouseAdapter(
        _Client(error=NetworkError("Connection refused (127.0.0.1:9000)"))
    )

    with pytest.raises(ConnectionFailed, match="Connection refused"):
        adapter.ping()


def test_connect_pings_the_server(monkeypatch):
    created: list[dict] = []

    def _fake_client(**kwargs):
        created.append(kwargs)
        return _Client()

    monkeypatch.setattr(clickhouse_adapter, "Client", _fake_client)

    adapter = ClickHouseAdapter.connect("db.internal", 9440)

    assert created[0]["host"] == "db.internal"
    assert created[0]["port"] == 9440
    assert created[0]["compression"] is False
    assert adapter.client.calls == [("SELECT 1", None)]

    adapter.close()
    assert adapter.client.disconnected is True


def test_connect_can_enable_compression(monkeypatch):
    created: list[dict] = []

    def _fake_client(**kwargs):
        created.append(kwargs)
        return _Client()

    monkeypatch.setattr(clickhouse_adapter, "Client", _fake_client)

    ClickHouseAdapter.connect("db.internal", 9000, compression=True)

    assert created[0]["compression"] is True
