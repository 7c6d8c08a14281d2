"""
tests/test_ranking_api.py

HTTP and callable transports over FastAPI's TestClient.
"""

from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from conftest import API_KEY, FaultyStore, RecordingStore, ranking_documents, seed_example

HEADERS = {"x-api-key": API_KEY}


class TestAggregateRankingEndpoint:
    def test_success_envelope_and_write(self, client: TestClient, store: RecordingStore) -> None:
        response = client.post("/aggregate-ranking", headers=HEADERS)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["entity_count"] == 2

        stored = store.get_document(f"ranking/{body['ranking_id']}")
        assert stored is not None
        assert stored["ranking"][0] == {"id": "0000", "name": "Alice", "rating": 5}

    @pytest.mark.parametrize("method", ["get", "put", "delete", "patch"])
    def test_wrong_verb_is_405_without_reads(
        self, client: TestClient, store: RecordingStore, method: str
    ) -> None:
        response = getattr(client, method)("/aggregate-ranking", headers=HEADERS)
        assert response.status_code == 405
        assert response.json() == {"message": "Method not allowed."}
        assert store.calls == []

    @pytest.mark.parametrize(
        "headers",
        [{}, {"x-api-key": ""}, {"x-api-key": "wrong"}, {"x-api-key": API_KEY + "x"}],
    )
    def test_bad_secret_is_403_without_reads(
        self, client: TestClient, store: RecordingStore, headers: dict[str, str]
    ) -> None:
        response = client.post("/aggregate-ranking", headers=headers)
        assert response.status_code == 403
        assert response.json() == {"message": "Forbidden."}
        assert store.calls == []

    def test_missing_source_is_404(self, client_factory: Any) -> None:
        empty = RecordingStore()
        response = client_factory(empty).post("/aggregate-ranking", headers=HEADERS)
        assert response.status_code == 404
        assert response.json() == {"message": "Document not found."}
        assert ranking_documents(empty) == []

    def test_storage_fault_is_generic_500(self, client_factory: Any) -> None:
        faulty = FaultyStore(fail_list={"ratings/0001/shards"})
        seed_example(faulty)
        response = client_factory(faulty).post("/aggregate-ranking", headers=HEADERS)
        assert response.status_code == 500
        assert response.json() == {"message": "An error occurred."}
        assert ranking_documents(faulty) == []

    def test_error_body_does_not_leak_detail(self, client_factory: Any) -> None:
        faulty = FaultyStore(fail_create=True, error=RuntimeError("secret-internal-detail"))
        seed_example(faulty)
        response = client_factory(faulty).post("/aggregate-ranking", headers=HEADERS)
        assert response.status_code == 500
        assert "secret-internal-detail" not in response.text


class TestCallableEndpoint:
    def test_success_result(self, client: TestClient, store: RecordingStore) -> None:
        response = client.post("/callable/aggregate-ranking", json={"data": None})
        assert response.status_code == 200
        result = response.json()["result"]
        assert result["success"] is True
        assert result["entity_count"] == 2
        assert len(ranking_documents(store)) == 1

    def test_no_secret_required(self, client: TestClient) -> None:
        response = client.post("/callable/aggregate-ranking")
        assert response.status_code == 200

    def test_missing_source_is_informational(self, client_factory: Any) -> None:
        empty = RecordingStore()
        response = client_factory(empty).post("/callable/aggregate-ranking", json={"data": {}})
        assert response.status_code == 200
        assert response.json() == {
            "result": {"success": False, "message": "Document not found."}
        }
        assert ranking_documents(empty) == []

    def test_failure_is_opaque_internal_error(self, client_factory: Any) -> None:
        faulty = FaultyStore(fail_list={"ratings/0000/shards"}, error=RuntimeError("boom"))
        seed_example(faulty)
        response = client_factory(faulty).post("/callable/aggregate-ranking", json={"data": None})
        assert response.status_code == 500
        assert response.json() == {"error": {"status": "INTERNAL", "message": "INTERNAL"}}
        assert ranking_documents(faulty) == []


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
