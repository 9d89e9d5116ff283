"""
API tests through FastAPI's TestClient.
"""

from sqlalchemy.exc import OperationalError

from transit_delay.database import get_db
from transit_delay.main import create_app


def _predict(client, route="28", stop="3301", when="2024-03-15T09:30:00"):
    return client.post("/api/predict", json={"route": route, "stop": stop, "datetime": when})


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "T" in data["timestamp"]

    def test_root(self, client):
        data = client.get("/").json()
        assert data["status"] == "running"
        assert data["version"] == "0.1.0"


class TestAppFactory:
    def test_importing_main_builds_no_app(self):
        import transit_delay.main as main_module

        assert not hasattr(main_module, "app")

    def test_each_app_gets_its_own_database(self, settings):
        first = create_app(settings)
        second = create_app(settings)
        assert first.state.database is not second.state.database
        assert first.state.settings is settings


class TestPredict:
    def test_returns_stored_prediction(self, client):
        response = _predict(client)
        assert response.status_code == 200

        data = response.json()
        assert isinstance(data["id"], int)
        assert data["route"] == "28"
        assert data["stop"] == "3301"
        assert data["datetime"].startswith("2024-03-15T09:30:00")
        assert 0 <= data["prediction"] <= 15
        assert 70 <= data["confidence"] <= 95
        assert data["weather"] in {"Clear", "Rainy", "Cloudy", "Snowy"}
        assert data["label"] == ("On Time" if data["prediction"] <= 2 else "Delayed")
        assert data["created_at"]

    def test_each_prediction_gets_new_id(self, client):
        ids = {_predict(client).json()["id"] for _ in range(5)}
        assert len(ids) == 5

    def test_empty_route_rejected(self, client):
        response = _predict(client, route="")
        assert response.status_code == 422
        assert client.get("/api/queries").json() == []

    def test_empty_stop_rejected(self, client):
        assert _predict(client, stop="").status_code == 422

    def test_malformed_datetime_rejected(self, client):
        assert _predict(client, when="yesterday-ish").status_code == 422

    def test_missing_fields_rejected(self, client):
        assert client.post("/api/predict", json={"route": "28"}).status_code == 422


class TestQueries:
    def test_recent_defaults_to_ten(self, client):
        for _ in range(12):
            _predict(client)

        rows = client.get("/api/queries/recent").json()

        assert len(rows) == 10
        ids = [r["id"] for r in rows]
        assert ids == sorted(ids, reverse=True)

    def test_recent_zero_limit(self, client):
        _predict(client)
        response = client.get("/api/queries/recent", params={"limit": 0})
        assert response.status_code == 200
        assert response.json() == []

    def test_recent_limit_above_count_returns_all(self, client):
        created = [_predict(client).json()["id"] for _ in range(3)]
        rows = client.get("/api/queries/recent", params={"limit": 50}).json()
        assert [r["id"] for r in rows] == list(reversed(created))

    def test_recent_huge_limit_returns_all(self, client):
        created = _predict(client).json()["id"]
        response = client.get("/api/queries/recent", params={"limit": 2**63})
        assert response.status_code == 200
        assert [r["id"] for r in response.json()] == [created]

    def test_recent_route_filter_is_stripped(self, client):
        _predict(client, route=" 6 ")
        rows = client.get("/api/queries/recent", params={"route": " 6 "}).json()
        assert [r["route"] for r in rows] == ["6"]

    def test_recent_negative_limit_rejected(self, client):
        assert client.get("/api/queries/recent", params={"limit": -1}).status_code == 422

    def test_recent_route_filter(self, client):
        _predict(client, route="2")
        _predict(client, route="6")
        rows = client.get("/api/queries/recent", params={"route": "6"}).json()
        assert [r["route"] for r in rows] == ["6"]

    def test_recent_rows_have_no_label(self, client):
        _predict(client)
        row = client.get("/api/queries/recent").json()[0]
        assert "label" not in row
        assert set(row) == {
            "id", "route", "stop", "datetime", "weather",
            "prediction", "confidence", "created_at",
        }

    def test_all_queries(self, client):
        for _ in range(3):
            _predict(client)
        assert len(client.get("/api/queries").json()) == 3


class TestStats:
    def test_dashboard_empty(self, client):
        response = client.get("/api/stats/dashboard")
        assert response.status_code == 200
        assert response.json() == {
            "totalQueries": 0,
            "averageDelay": 0,
            "onTimePercentage": 0,
            "recentQueries": [],
        }

    def test_dashboard_after_predictions(self, client):
        predictions = [_predict(client).json() for _ in range(7)]

        data = client.get("/api/stats/dashboard").json()

        delays = [p["prediction"] for p in predictions]
        assert data["totalQueries"] == 7
        assert data["averageDelay"] == round(sum(delays) / 7, 2)
        assert len(data["recentQueries"]) == 5
        assert data["recentQueries"][0]["id"] == predictions[-1]["id"]

    def test_route_stats(self, client):
        for route in ["2", "2", "6"]:
            _predict(client, route=route)

        data = client.get("/api/stats/routes").json()

        assert [r["route"] for r in data] == ["2", "6"]
        assert [r["queryCount"] for r in data] == [2, 1]
        assert set(data[0]) == {"route", "averageDelay", "queryCount", "onTimePercentage"}

    def test_route_stats_empty(self, client):
        assert client.get("/api/stats/routes").json() == []


class _FailingSession:
    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    async def commit(self):
        pass

    async def rollback(self):
        pass

    async def close(self):
        pass


class TestDatabaseErrors:
    def test_store_failure_returns_500(self, client):
        async def broken_db():
            yield _FailingSession()

        client.app.dependency_overrides[get_db] = broken_db
        try:
            response = client.get("/api/stats/routes")
        finally:
            client.app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"detail": "Database error"}
