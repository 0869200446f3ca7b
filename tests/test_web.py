"""
Test suite for the Flask routes.

Run with: pytest tests/test_web.py -v
"""
from __future__ import annotations

import csv
import io
from unittest.mock import MagicMock

from survey_responses.errors import StorageError
from survey_responses.models.schema import field_ids, labels
from survey_responses.web import create_app


def _rows(response) -> list:
    return list(csv.reader(io.StringIO(response.get_data(as_text=True), newline="")))


class TestSubmitRoute:

    def test_json_submission_is_saved(self, client, jsonl_store, sample_submission):
        response = client.post("/api/responses", json=sample_submission)

        assert response.status_code == 201
        assert response.get_json() == {"message": "Response saved."}
        stored = jsonl_store.list_all()
        assert len(stored) == 1
        assert stored[0]["postPurchaseActions"] == "Left a review; Shared on social"
        assert stored[0]["created_at"]

    def test_form_submission_is_saved(self, client, jsonl_store):
        response = client.post("/api/responses", data={
            "purchaseChannel": "Store A",
            "postPurchaseActions": ["Left a review", "Shared on social"],
            "switchFactors": "",
        })

        assert response.status_code == 201
        stored = jsonl_store.list_all()[0]
        assert stored["purchaseChannel"] == "Store A"
        assert stored["postPurchaseActions"] == "Left a review; Shared on social"
        assert stored["switchFactors"] == ""

    def test_malformed_json_values_are_stored_as_text(self, client, jsonl_store):
        response = client.post("/api/responses", json={
            "advocacyLikelihood": 5.0,
            "purchaseChannel": ["a", ["b", "c"]],
            "switchFactors": {"x": 1},
        })

        assert response.status_code == 201
        stored = jsonl_store.list_all()[0]
        assert stored["advocacyLikelihood"] == "5"
        assert stored["purchaseChannel"] == "a; "
        assert stored["switchFactors"] == ""

    def test_browser_form_post_redirects_to_thank_you(self, client, jsonl_store):
        response = client.post(
            "/api/responses",
            data={"purchaseChannel": "Store A"},
            headers={"Accept": "text/html,application/xhtml+xml,*/*;q=0.8"},
        )

        assert response.status_code == 303
        assert "status=saved" in response.headers["Location"]
        assert jsonl_store.list_all()[0]["purchaseChannel"] == "Store A"

        page = client.get(response.headers["Location"]).get_data(as_text=True)
        assert "Thank you! Your response has been saved." in page

    def test_empty_browser_form_post_redirects_back(self, client, jsonl_store):
        response = client.post(
            "/api/responses",
            data={"purchaseChannel": ""},
            headers={"Accept": "text/html"},
        )

        assert response.status_code == 303
        assert "status=empty" in response.headers["Location"]
        assert jsonl_store.list_all() == []

    def test_form_post_accepting_anything_gets_json(self, client):
        response = client.post(
            "/api/responses",
            data={"purchaseChannel": "Store A"},
            headers={"Accept": "*/*"},
        )

        assert response.status_code == 201
        assert response.get_json() == {"message": "Response saved."}

    def test_empty_json_object_is_rejected(self, client, jsonl_store):
        response = client.post("/api/responses", json={})

        assert response.status_code == 400
        assert response.get_json() == {"message": "Submission is empty."}
        assert jsonl_store.list_all() == []

    def test_non_object_json_is_rejected(self, client):
        assert client.post("/api/responses", json=["a"]).status_code == 400

    def test_malformed_json_is_rejected(self, client):
        response = client.post(
            "/api/responses",
            data="{not json",
            content_type="application/json",
        )

        assert response.status_code == 400

    def test_missing_body_is_rejected(self, client):
        assert client.post("/api/responses").status_code == 400

    def test_storage_failure_returns_500(self, settings):
        store = MagicMock()
        store.name = "mock"
        store.insert.side_effect = StorageError("disk full")
        client = create_app(settings, store=store).test_client()

        response = client.post("/api/responses", json={"purchaseChannel": "A"})

        assert response.status_code == 500
        assert response.get_json() == {"message": "Failed to save response."}

    def test_oversized_body_is_rejected(self, settings, jsonl_store):
        small = settings.model_copy(update={"max_content_length": 64})
        client = create_app(small, store=jsonl_store).test_client()

        response = client.post("/api/responses", json={"switchFactors": "x" * 500})

        assert response.status_code == 413
        assert jsonl_store.list_all() == []


class TestExportRoutes:

    def test_empty_export_is_header_only(self, client):
        response = client.get("/api/responses.csv")

        assert response.status_code == 200
        assert response.mimetype == "text/csv"
        assert _rows(response) == [list(labels())]

    def test_submit_then_export(self, client, sample_submission):
        client.post("/api/responses", json=sample_submission)

        response = client.get("/api/responses.csv")

        rows = _rows(response)
        assert len(rows) == 2
        row = dict(zip(field_ids(), rows[1]))
        assert row["purchaseChannel"] == "Store A"
        assert row["postPurchaseActions"] == "Left a review; Shared on social"
        assert row["created_at"]
        assert ",Left a review; Shared on social," in response.get_data(as_text=True)

    def test_both_export_paths_match(self, client, sample_submission):
        client.post("/api/responses", json=sample_submission)

        assert (
            client.get("/api/responses").get_data()
            == client.get("/api/responses.csv").get_data()
        )

    def test_rows_follow_submission_order(self, client):
        for channel in ("first", "second", "third"):
            client.post("/api/responses", json={"purchaseChannel": channel})

        rows = _rows(client.get("/api/responses.csv"))
        column = field_ids().index("purchaseChannel")

        assert [row[column] for row in rows[1:]] == ["first", "second", "third"]

    def test_export_failure_returns_500(self, settings):
        store = MagicMock()
        store.name = "mock"
        store.list_all.side_effect = StorageError("unreadable")
        client = create_app(settings, store=store).test_client()

        response = client.get("/api/responses.csv")

        assert response.status_code == 500
        assert response.get_json() == {"message": "Failed to load responses."}


class TestPages:

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.get_json()["status"] == "ok"

    def test_index_renders_every_question(self, client):
        response = client.get("/")

        page = response.get_data(as_text=True)
        assert response.status_code == 200
        assert 'name="purchaseChannel"' in page
        assert 'name="switchFactors"' in page
        assert 'name="created_at"' not in page

    def test_multi_select_questions_take_several_answers(self, client):
        page = client.get("/").get_data(as_text=True)

        assert page.count('name="postPurchaseActions"') == 3
        assert page.count('name="purchaseChannel"') == 1

    def test_index_without_status_has_no_message(self, client):
        page = client.get("/").get_data(as_text=True)

        assert "Thank you!" not in page
        assert "Please answer at least one question." not in page

    def test_index_shows_empty_submission_message(self, client):
        page = client.get("/?status=empty").get_data(as_text=True)

        assert "Please answer at least one question." in page

    def test_create_app_connects_store(self, settings, tmp_path):
        from survey_responses.storage import JsonLinesResponseStore

        store = JsonLinesResponseStore(tmp_path / "fresh" / "responses.jsonl")
        create_app(settings, store=store)

        assert store.connected
        store.close()

    def test_create_app_builds_store_from_settings(self, settings):
        app = create_app(settings)
        store = app.extensions["survey_responses"].store

        assert store.connected
        assert store.path == settings.data_file
        store.close()
