"""Integration tests for the authenticated user's request endpoints."""

from typing import Any
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

REQUEST_ID = "660e8400-e29b-41d4-a716-446655440000"


def make_response(data: Any) -> MagicMock:
    response = MagicMock()
    response.data = data
    return response


class TestListMyRequests:
    """Tests for GET /my-requests endpoint."""

    def test_lists_callers_requests(
        self,
        client: TestClient,
        mock_supabase_client: MagicMock,
        request_row: dict,
        auth_headers: dict,
    ) -> None:
        mock_supabase_client.table.return_value.select.return_value.eq.return_value.execute.return_value = (
            make_response([request_row])
        )

        response = client.get("/my-requests", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["requests"][0]["partnerName"] == "Biology Club"
        assert data["requests"][0]["requestedBy"] == "test@example.com"
        mock_supabase_client.table.return_value.select.return_value.eq.assert_called_once_with(
            "requested_by", "test@example.com"
        )

    def test_requires_auth(self, client: TestClient) -> None:
        response = client.get("/my-requests")

        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_rejects_non_bearer_header(self, client: TestClient) -> None:
        response = client.get("/my-requests", headers={"Authorization": "Basic dXNlcjpwYXNz"})

        assert response.status_code == 401


class TestUpdateMyRequest:
    """Tests for PUT /my-requests/{id} endpoint."""

    def test_returns_updated_record(
        self,
        client: TestClient,
        mock_supabase_client: MagicMock,
        request_row: dict,
        auth_headers: dict,
    ) -> None:
        mock_supabase_client.table.return_value.select.return_value.eq.return_value.limit.return_value.execute.return_value = (
            make_response([{**request_row, "study_mode": "Offline"}])
        )

        response = client.put(
            f"/my-requests/{REQUEST_ID}",
            json={"studyMode": "Offline", "_id": REQUEST_ID},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["updated"]["studyMode"] == "Offline"
        mock_supabase_client.table.return_value.update.assert_called_once_with({"study_mode": "Offline"})

    def test_nonexistent_id_succeeds_with_null_updated(
        self, client: TestClient, mock_supabase_client: MagicMock, auth_headers: dict
    ) -> None:
        """Test a missing request is not a 404: success with updated null."""
        mock_supabase_client.table.return_value.update.return_value.eq.return_value.execute.return_value = (
            make_response([])
        )
        mock_supabase_client.table.return_value.select.return_value.eq.return_value.limit.return_value.execute.return_value = (
            make_response([])
        )

        response = client.put(
            f"/my-requests/{REQUEST_ID}", json={"location": "Sylhet"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "updated": None}

    def test_wrong_field_type_returns_400_envelope(
        self, client: TestClient, mock_supabase_client: MagicMock, auth_headers: dict
    ) -> None:
        response = client.put(
            f"/my-requests/{REQUEST_ID}", json={"rating": "x"}, headers=auth_headers
        )

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "validation_error"
        assert data["message"].startswith("rating is invalid")
        mock_supabase_client.table.return_value.update.assert_not_called()

    def test_missing_body_changes_nothing(
        self,
        client: TestClient,
        mock_supabase_client: MagicMock,
        request_row: dict,
        auth_headers: dict,
    ) -> None:
        mock_supabase_client.table.return_value.select.return_value.eq.return_value.limit.return_value.execute.return_value = (
            make_response([request_row])
        )

        response = client.put(f"/my-requests/{REQUEST_ID}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["success"] is True
        mock_supabase_client.table.return_value.update.assert_not_called()

    def test_malformed_id_returns_400(self, client: TestClient, auth_headers: dict) -> None:
        response = client.put("/my-requests/not-an-id", json={"location": "X"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request ID"

    def test_requires_auth(self, client: TestClient, mock_supabase_client: MagicMock) -> None:
        response = client.put(f"/my-requests/{REQUEST_ID}", json={"location": "X"})

        assert response.status_code == 401
        mock_supabase_client.table.return_value.update.assert_not_called()


class TestDeleteMyRequest:
    """Tests for DELETE /my-requests/{id} endpoint."""

    def test_deleting_twice_succeeds_both_times(
        self,
        client: TestClient,
        mock_supabase_client: MagicMock,
        request_row: dict,
        auth_headers: dict,
    ) -> None:
        mock_supabase_client.table.return_value.delete.return_value.eq.return_value.execute.side_effect = [
            make_response([request_row]),
            make_response([]),
        ]

        first = client.delete(f"/my-requests/{REQUEST_ID}", headers=auth_headers)
        second = client.delete(f"/my-requests/{REQUEST_ID}", headers=auth_headers)

        assert first.status_code == 200
        assert first.json() == {"success": True, "result": {"deletedCount": 1}}
        assert second.status_code == 200
        assert second.json() == {"success": True, "result": {"deletedCount": 0}}

    def test_requires_auth(self, client: TestClient, mock_supabase_client: MagicMock) -> None:
        response = client.delete(f"/my-requests/{REQUEST_ID}")

        assert response.status_code == 401
        mock_supabase_client.table.return_value.delete.assert_not_called()
