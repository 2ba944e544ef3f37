"""
API endpoint tests.
"""

import pytest


@pytest.mark.api
class TestHealthEndpoints:
    """Root and health check."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["message"] == "FilmLab API"

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["reference_entries"] == 8


@pytest.mark.api
class TestCatalogueEndpoints:
    """Films, developers, dilutions and ISOs."""

    def test_films_sorted(self, client):
        response = client.get("/api/films")

        assert response.status_code == 200
        films = response.json()
        assert [f["name"] for f in films] == ["FP4 Plus", "HP5 Plus", "Portra 400"]
        assert films[1]["default_iso"] == 400

    def test_developers(self, client):
        response = client.get("/api/developers")

        assert [d["id"] for d in response.json()] == ["d76", "rodinal"]

    def test_dilutions(self, client):
        response = client.get("/api/dilutions", params={"film_id": "hp5", "developer_id": "d76"})

        assert response.status_code == 200
        assert response.json() == {"dilutions": ["1+1", "stock"]}

    def test_dilutions_empty(self, client):
        response = client.get("/api/dilutions", params={"film_id": "portra", "developer_id": "d76"})

        assert response.status_code == 200
        assert response.json() == {"dilutions": []}

    def test_isos(self, client):
        response = client.get(
            "/api/isos", params={"film_id": "hp5", "developer_id": "d76", "dilution": "stock"}
        )

        assert response.json() == {"isos": [200, 400, 800]}


@pytest.mark.api
class TestDevelopmentTimeEndpoint:
    """POST /api/development-time."""

    def test_default_temperature(self, client):
        response = client.post(
            "/api/development-time",
            json={"film_id": "hp5", "developer_id": "d76", "dilution": "stock", "iso": 400},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["time"] == 480
        assert data["multiplier"] == 1.0
        assert data["formatted"] == "8:00"

    def test_adjusted_for_temperature(self, client):
        response = client.post(
            "/api/development-time",
            json={
                "film_id": "hp5",
                "developer_id": "d76",
                "dilution": "stock",
                "iso": 400,
                "temperature": 24.5,
            },
        )

        assert response.json()["time"] == 336

    def test_no_data_is_404(self, client):
        response = client.post(
            "/api/development-time",
            json={"film_id": "portra", "developer_id": "d76", "dilution": "stock", "iso": 400},
        )

        assert response.status_code == 404

    def test_save_creates_record(self, client, journal):
        response = client.post(
            "/api/development-time",
            json={
                "film_id": "hp5",
                "developer_id": "rodinal",
                "dilution": "1+50",
                "iso": 400,
                "temperature": 20,
                "save": True,
            },
        )

        assert response.status_code == 200
        records = journal.list_records()
        assert len(records) == 1
        assert str(records[0].id) == response.json()["record_id"]
        assert records[0].developer_name == "Rodinal"
        assert records[0].time == 660


@pytest.mark.api
class TestPushPullEndpoint:
    """POST /api/push-pull."""

    def test_push_ladder(self, client):
        response = client.post(
            "/api/push-pull",
            json={"minutes": "8", "seconds": "0", "coefficient": "1.33", "is_push_mode": True, "steps": 2},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["mode"] == "push"
        assert [r["total_seconds"] for r in data["results"]] == [480, 638, 849]
        assert [r["label"] for r in data["results"]] == ["Base", "+1", "+2"]

    def test_pull_ladder_numeric_input(self, client):
        response = client.post(
            "/api/push-pull",
            json={"minutes": 8, "seconds": 0, "coefficient": 1.33, "is_push_mode": False, "steps": 1},
        )

        assert [r["formatted"] for r in response.json()["results"]] == ["8:00", "6:01"]

    def test_defaults(self, client):
        response = client.post("/api/push-pull", json={"minutes": 8})

        data = response.json()
        assert data["coefficient"] == 1.33
        assert len(data["results"]) == 6

    @pytest.mark.parametrize(
        "payload, field",
        [
            ({"minutes": "8", "seconds": "75"}, "seconds"),
            ({"minutes": "x"}, "minutes"),
            ({"minutes": "8", "coefficient": "0"}, "coefficient"),
            ({"minutes": "8", "steps": -1}, "steps"),
        ],
    )
    def test_invalid_input_is_422(self, client, payload, field):
        response = client.post("/api/push-pull", json=payload)

        assert response.status_code == 422
        assert response.json()["field"] == field

    def test_save_stores_base_time(self, client, journal):
        response = client.post(
            "/api/push-pull",
            json={"minutes": 8, "seconds": 0, "coefficient": 1.33, "steps": 3, "temperature": 21.0, "save": True},
        )

        assert response.status_code == 200
        record = journal.list_records()[0]
        assert record.time == 480
        assert record.dilution == "Coefficient: 1.33, Temperature: 21.0°C"


@pytest.mark.api
class TestRecordEndpoints:
    """Journal CRUD endpoints."""

    def test_create_list_delete(self, client):
        payload = {
            "film_name": "Tri-X 400",
            "developer_name": "HC-110",
            "dilution": "1+31",
            "iso": 400,
            "temperature": 20.0,
            "time": 225,
        }
        created = client.post("/api/records", json=payload)
        assert created.status_code == 200
        record_id = created.json()["id"]

        listed = client.get("/api/records").json()
        assert [r["id"] for r in listed] == [record_id]
        assert listed[0]["film_name"] == "Tri-X 400"

        deleted = client.delete(f"/api/records/{record_id}")
        assert deleted.status_code == 200
        assert client.get("/api/records").json() == []

    def test_delete_missing_is_404(self, client):
        response = client.delete("/api/records/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404

    def test_list_newest_first(self, client):
        for name in ("first", "second", "third"):
            client.post(
                "/api/records",
                json={
                    "film_name": name,
                    "developer_name": "D-76",
                    "iso": 400,
                    "temperature": 20.0,
                    "time": 480,
                },
            )

        names = [r["film_name"] for r in client.get("/api/records").json()]
        assert names == ["third", "second", "first"]


@pytest.mark.api
class TestRequestValidation:
    """Out-of-range input is rejected with 422 before reaching the core."""

    @pytest.mark.parametrize("temperature", ["inf", "-inf", "nan"])
    def test_non_finite_temperature(self, client, temperature):
        response = client.post(
            "/api/development-time",
            json={
                "film_id": "hp5",
                "developer_id": "d76",
                "dilution": "stock",
                "iso": 400,
                "temperature": temperature,
            },
        )

        assert response.status_code == 422

    @pytest.mark.parametrize("coefficient", ["1e200", "1e-200", 50])
    def test_coefficient_out_of_range(self, client, coefficient):
        response = client.post(
            "/api/push-pull",
            json={"minutes": "8", "seconds": "0", "coefficient": coefficient, "steps": 2},
        )

        assert response.status_code == 422
        assert response.json()["field"] == "coefficient"

    def test_non_finite_push_pull_temperature(self, client, journal):
        response = client.post(
            "/api/push-pull",
            json={"minutes": 8, "temperature": "nan", "save": True},
        )

        assert response.status_code == 422
        assert len(journal) == 0

    @pytest.mark.parametrize(
        "overrides",
        [{"iso": 0}, {"iso": -100}, {"time": -1}, {"temperature": "inf"}],
    )
    def test_invalid_record(self, client, journal, overrides):
        payload = {
            "film_name": "HP5 Plus",
            "developer_name": "D-76",
            "iso": 400,
            "temperature": 20.0,
            "time": 480,
        }
        payload.update(overrides)

        response = client.post("/api/records", json=payload)

        assert response.status_code == 422
        assert len(journal) == 0


@pytest.mark.api
def test_journal_routes_are_plain_functions(app):
    """Routes that touch SQLite run in the threadpool, not on the event loop."""
    import inspect

    journal_paths = {
        "/api/records",
        "/api/records/{record_id}",
        "/api/development-time",
        "/api/push-pull",
    }
    endpoints = [route.endpoint for route in app.routes if getattr(route, "path", None) in journal_paths]

    assert len(endpoints) == 5
    assert not any(inspect.iscoroutinefunction(endpoint) for endpoint in endpoints)
