"""
Tests for the event counter service.
"""
from concurrent.futures import ThreadPoolExecutor

from prometheus_client import CONTENT_TYPE_LATEST


def counter_line(event, page, value):
    return f'frontend_events_total{{event="{event}",page="{page}"}} {value}'


class TestTrack:

    def test_counts_repeated_events(self, metrics_client):
        for _ in range(2):
            response = metrics_client.post("/track", json={"event": "page_view", "page": "/manage"})
            assert response.status_code == 200
            assert response.text == "Event tracked"

        text = metrics_client.get("/metrics").text

        assert counter_line("page_view", "/manage", "2.0") in text

    def test_label_pairs_counted_separately(self, metrics_client):
        metrics_client.post("/track", json={"event": "page_view", "page": "/"})
        metrics_client.post("/track", json={"event": "page_view", "page": "/manage"})
        metrics_client.post("/track", json={"event": "click", "page": "/"})

        text = metrics_client.get("/metrics").text

        assert counter_line("page_view", "/", "1.0") in text
        assert counter_line("page_view", "/manage", "1.0") in text
        assert counter_line("click", "/", "1.0") in text

    def test_missing_page_rejected_without_increment(self, metrics_client):
        metrics_client.post("/track", json={"event": "page_view", "page": "/"})
        before = metrics_client.get("/metrics").text

        response = metrics_client.post("/track", json={"event": "page_view"})

        assert response.status_code == 400
        assert response.text == "Missing event or page"
        assert metrics_client.get("/metrics").text == before

    def test_empty_or_malformed_bodies_rejected(self, metrics_client):
        assert metrics_client.post("/track", json={"event": "", "page": "/"}).status_code == 400
        assert metrics_client.post("/track", json=["page_view", "/"]).status_code == 400
        assert metrics_client.post(
            "/track", content=b"not json", headers={"Content-Type": "application/json"}
        ).status_code == 400
        assert metrics_client.post("/track").status_code == 400


    def test_concurrent_events_all_counted(self, metrics_client):
        def post(_):
            return metrics_client.post("/track", json={"event": "page_view", "page": "/"}).status_code

        with ThreadPoolExecutor(max_workers=8) as pool:
            statuses = list(pool.map(post, range(200)))

        assert statuses == [200] * 200
        assert counter_line("page_view", "/", "200.0") in metrics_client.get("/metrics").text

class TestMetrics:

    def test_exposition_format(self, metrics_client):
        response = metrics_client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"] == CONTENT_TYPE_LATEST
        assert "# HELP frontend_events_total Total number of frontend events" in response.text
        assert "# TYPE frontend_events_total counter" in response.text

    def test_cors_allows_any_origin(self, metrics_client):
        response = metrics_client.options(
            "/track",
            headers={
                "Origin": "http://example.com",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
