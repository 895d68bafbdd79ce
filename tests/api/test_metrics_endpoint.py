"""
Tests for the /metrics endpoint.
"""
import pytest
from fastapi.testclient import TestClient

from introengine.api.main import app
from introengine.utils.metrics import metrics


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


class TestPrometheusMetricsEndpoint:
    """Tests for /metrics Prometheus endpoint."""

    def test_returns_prometheus_format(self, client):
        """Test /metrics returns Prometheus text format."""
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]
        assert "# HELP ie_engine_calls_total" in response.text
        assert "# TYPE ie_engine_duration_seconds histogram" in response.text

    def test_counts_previous_requests(self, client):
        """Requests are counted once they complete, so the second scrape sees the first."""
        client.get("/health")
        client.get("/metrics")

        content = client.get("/metrics").text

        assert 'ie_requests_total{endpoint="/health",status="200"} 1.0' in content
        assert 'ie_requests_total{endpoint="/metrics",status="200"} 1.0' in content

    def test_engine_calls_are_recorded(self, client):
        client.post("/api/weekly-advisor", json={"intros_generated": 3})

        content = client.get("/metrics").text

        assert 'ie_engine_calls_total{engine="weekly_advisor"} 1.0' in content
        assert 'ie_engine_duration_seconds_count{engine="weekly_advisor"} 1' in content

    def test_unknown_paths_share_one_series(self, client):
        for i in range(20):
            assert client.get(f"/nope/{i}").status_code == 404

        content = client.get("/metrics").text

        assert 'ie_requests_total{endpoint="unmatched",status="404"} 20.0' in content
        assert "/nope" not in content

    def test_unexpected_errors_are_counted(self, monkeypatch):
        class BrokenAdvisor:
            def analyze(self, activity):
                raise RuntimeError("boom")

        monkeypatch.setattr("introengine.api.routes.advisor.get_weekly_advisor", lambda: BrokenAdvisor())
        client = TestClient(app, raise_server_exceptions=False)

        response = client.post("/api/weekly-advisor", json={"intros_generated": 3})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert metrics.requests_total.get(endpoint="/api/weekly-advisor", status="500") == 1
