"""End-to-end tests for the FastAPI routes (TestClient + in-memory SQLite)."""

from datetime import datetime

import pytest

from database.models import Variable
from tests.factories import add_category, add_correlation, add_unit, add_variable


class TestGlobalVariables:

    def test_returns_ranked_variables_with_category(self, client, session):
        symptoms = add_category(session, "Symptoms")
        add_variable(session, symptoms, "Headache", number_of_user_variables=50,
                     number_of_aggregate_correlations_as_cause=1, number_of_aggregate_correlations_as_effect=1)
        add_variable(session, symptoms, "Fatigue", number_of_user_variables=40,
                     number_of_aggregate_correlations_as_cause=10, number_of_aggregate_correlations_as_effect=None)

        resp = client.get("/api/v1/variables")

        assert resp.status_code == 200
        variables = resp.json()["variables"]
        assert [v["name"] for v in variables] == ["Fatigue", "Headache"]
        assert variables[0]["variable_categories"] == {"id": symptoms.id, "name": "Symptoms"}
        for key in ("id", "image_url", "number_of_aggregate_correlations_as_cause",
                    "number_of_aggregate_correlations_as_effect"):
            assert key in variables[0]

    def test_excludes_ineligible_and_boring(self, client, session):
        good = add_category(session, "Symptoms")
        boring = add_category(session, "Location", boring=True)
        add_variable(session, good, "Headache")
        add_variable(session, good, "Rare", number_of_user_variables=2)
        add_variable(session, good, "Gone", deleted_at=datetime(2024, 1, 1))
        add_variable(session, boring, "Home")

        names = [v["name"] for v in client.get("/api/v1/variables").json()["variables"]]
        assert names == ["Headache"]

    def test_respects_global_cap(self, settings, client, session):
        settings.GLOBAL_VARIABLE_LIMIT = 3
        cat = add_category(session, "Foods")
        for i in range(5):
            add_variable(session, cat, f"Food {i}", number_of_user_variables=10 + i)

        assert len(client.get("/api/v1/variables").json()["variables"]) == 3

    def test_big_counts_are_json_safe(self, client, session):
        cat = add_category(session, "Foods")
        add_variable(session, cat, "Water", number_of_measurements=2**60)

        variable = client.get("/api/v1/variables").json()["variables"][0]
        assert variable["number_of_measurements"] == float(2**60)
        assert variable["number_of_user_variables"] == 10

    def test_storage_failure_is_generic_500(self, client, db, session, caplog):
        add_category(session, "Foods")
        Variable.__table__.drop(db.engine)

        resp = client.get("/api/v1/variables")

        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to fetch variables"}
        assert "no such table" not in resp.text
        assert any("failed" in r.getMessage() for r in caplog.records)


class TestCategoryVariables:

    def test_returns_category_variables(self, client, session):
        cat = add_category(session, "Vital Signs")
        other = add_category(session, "Foods")
        add_variable(session, cat, "Heart Rate")
        add_variable(session, other, "Apples")

        resp = client.get("/api/v1/variable-categories/Vital_Signs/variables")

        assert resp.status_code == 200
        assert [v["name"] for v in resp.json()["variables"]] == ["Heart Rate"]

    def test_percent_encoded_slug(self, client, session):
        cat = add_category(session, "Vital Signs")
        add_variable(session, cat, "Heart Rate")

        resp = client.get("/api/v1/variable-categories/Vital%20Signs/variables")
        assert [v["name"] for v in resp.json()["variables"]] == ["Heart Rate"]

    def test_slug_containing_slash(self, client, session):
        cat = add_category(session, "Vitamins/Minerals")
        add_variable(session, cat, "Zinc")

        resp = client.get("/api/v1/variable-categories/Vitamins/Minerals/variables")
        assert resp.status_code == 200
        assert [v["name"] for v in resp.json()["variables"]] == ["Zinc"]

    def test_two_phase_order_within_cap(self, settings, client, session):
        settings.CATEGORY_VARIABLE_LIMIT = 2
        cat = add_category(session, "Emotions")
        add_variable(session, cat, "A", number_of_user_variables=30, number_of_aggregate_correlations_as_cause=1)
        add_variable(session, cat, "B", number_of_user_variables=20, number_of_aggregate_correlations_as_cause=5)
        add_variable(session, cat, "C", number_of_user_variables=10, number_of_aggregate_correlations_as_cause=99)

        names = [v["name"] for v in client.get("/api/v1/variable-categories/Emotions/variables").json()["variables"]]
        assert names == ["B", "A"]

    @pytest.mark.parametrize("slug", ["Unknown", "emotions", "Emo%22tions"])
    def test_unknown_category_is_404(self, client, session, slug):
        add_category(session, "Emotions")

        resp = client.get(f"/api/v1/variable-categories/{slug}/variables")

        assert resp.status_code == 404
        assert resp.json() == {"error": "Category not found"}

    def test_soft_deleted_category_is_404(self, client, session):
        add_category(session, "Emotions", deleted_at=datetime(2024, 1, 1))
        assert client.get("/api/v1/variable-categories/Emotions/variables").status_code == 404

    def test_storage_failure_is_500(self, client, db, session):
        add_category(session, "Emotions")
        Variable.__table__.drop(db.engine)

        resp = client.get("/api/v1/variable-categories/Emotions/variables")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to fetch variables"}


class TestCategoryListing:

    def test_lists_categories_with_slugs(self, client, session):
        add_category(session, "Sleep Quality: Night", number_of_variables=3)
        add_category(session, "Emotions", number_of_variables=30)
        add_category(session, "Location", boring=True)

        categories = client.get("/api/v1/variable-categories").json()["categories"]
        assert [(c["name"], c["slug"]) for c in categories] == [
            ("Emotions", "Emotions"),
            ("Sleep Quality: Night", "Sleep_Quality-_Night"),
        ]


class TestVariableDetail:

    @pytest.fixture
    def mood(self, session):
        cat = add_category(session, "Emotions")
        unit = add_unit(session, "1 to 5 Rating", "/5")
        mood = add_variable(session, cat, "Overall Mood", default_unit_id=unit.id, description="How you feel")
        sleep = add_variable(session, cat, "Sleep Duration", image_url="https://img/sleep.png")
        add_correlation(session, mood, sleep, aggregate_qm_score=0.4)
        add_correlation(session, sleep, mood, aggregate_qm_score=0.8, forward_pearson_correlation_coefficient=0.3)
        return mood

    def test_by_slug(self, client, mood):
        resp = client.get("/api/v1/variables/Overall_Mood")

        assert resp.status_code == 200
        data = resp.json()
        assert data["variable"]["id"] == mood.id
        assert data["variable"]["description"] == "How you feel"
        assert data["variable"]["unit"]["abbreviated_name"] == "/5"
        assert data["variable"]["variable_categories"]["name"] == "Emotions"
        assert data["cause_correlations"][0]["variable"] == {
            "id": data["cause_correlations"][0]["effect_variable_id"],
            "name": "Sleep Duration",
            "image_url": "https://img/sleep.png",
        }
        assert data["effect_correlations"][0]["variable"]["name"] == "Sleep Duration"
        assert data["effect_correlations"][0]["forward_pearson_correlation_coefficient"] == 0.3

    def test_by_id(self, client, mood):
        assert client.get(f"/api/v1/variables/{mood.id}").json()["variable"]["name"] == "Overall Mood"

    def test_unknown_is_404(self, client, mood):
        resp = client.get("/api/v1/variables/Nothing_Here")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Variable not found"}

    def test_slug_containing_slash(self, client, session):
        cat = add_category(session, "Vitamins")
        thiamine = add_variable(session, cat, "Vitamin B1/Thiamine")

        resp = client.get("/api/v1/variables/Vitamin_B1%2FThiamine")

        assert resp.status_code == 200
        assert resp.json()["variable"]["id"] == thiamine.id
        assert client.get("/api/v1/variables/Vitamin_B1/Thiamine").json()["variable"]["id"] == thiamine.id

    def test_unknown_slug_with_slash_is_json_404(self, client, mood):
        resp = client.get("/api/v1/variables/No%2FSuch")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Variable not found"}

    def test_error_shape_documented(self, client):
        openapi = client.get("/openapi.json").json()
        responses = openapi["paths"]["/api/v1/variables/{query}"]["get"]["responses"]
        assert responses["404"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
        assert "ErrorResponse" in openapi["components"]["schemas"]


class TestPages:

    def test_categories_page_links_use_slugs(self, client, session):
        add_category(session, "Sleep Quality: Night", number_of_variables=3)
        add_category(session, "Emotions", number_of_variables=30)
        add_category(session, "Location", boring=True)

        resp = client.get("/variable-categories")

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        html = resp.text
        assert 'href="/variable-categories/Sleep_Quality-_Night"' in html
        assert 'href="/variable-categories/Emotions"' in html
        assert "Location" not in html
        assert html.index("Emotions") < html.index("Sleep Quality: Night")

    def test_category_names_are_escaped(self, client, session):
        add_category(session, "<b>Bold</b>")
        assert "<b>Bold</b>" not in client.get("/variable-categories").text

    def test_empty_categories_page(self, client):
        assert "No categories found" in client.get("/variable-categories").text

    def test_category_page(self, client, session):
        cat = add_category(session, "Emotions")
        add_variable(session, cat, "Overall Mood")

        resp = client.get("/variable-categories/Emotions")
        assert resp.status_code == 200
        assert "Overall Mood" in resp.text

    def test_unknown_category_page_is_404(self, client):
        resp = client.get("/variable-categories/Nope")
        assert resp.status_code == 404
        assert "Category Not Found" in resp.text


class TestHealth:

    def test_root(self, client):
        assert client.get("/").json()["status"] == "ok"

    def test_health_reports_database(self, client):
        data = client.get("/health").json()
        assert data["status"] == "ok"
        assert data["database_connected"] is True
