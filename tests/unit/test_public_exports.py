from __future__ import annotations

import tempodb_client
import tempodb_client.series as series


def test_package_exports_clients_config_and_errors():
    expected = {
        "TempoDBClient",
        "AsyncTempoDBClient",
        "TempoDBClientConfig",
        "TempoDBError",
        "TempoDBValidationError",
        "TempoDBTransportError",
        "TempoDBClientClosedError",
        "QueryResult",
        "SplitAggregate",
    }
    assert expected == set(tempodb_client.__all__)


def test_series_package_does_not_export_splitters():
    assert "KeySetSplitter" not in series.__all__
    assert "AsyncKeySetSplitter" not in series.__all__
    assert not hasattr(series, "KeySetSplitter")
