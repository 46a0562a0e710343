"""Integration tests for counselor endpoints."""
import pytest

COUNSELOR = {
    "name": "Priya Sharma",
    "email": "priya@example.com",
    "phone": "+44 7700 900123",
    "experience": "5 years",
    "expertise": "UK admissions",
}


@pytest.mark.integration
class TestCounselorsApi:
    """Test counselor CRUD over HTTP."""

    def test_create_and_list(self, admin_client):
        response = admin_client.post("/api/v1/counselors", json=COUNSELOR)

        assert response.status_code == 201
        data = response.json()
        assert data["generatedId"] == "COUN001"
        assert data["message"] == "Counselor added successfully!"

        listing = admin_client.get("/api/v1/counselors").json()
        assert listing["total"] == 1
        assert listing["counselors"][0]["counselorCode"] == "COUN001"
        assert listing["counselors"][0]["totalMeetings"] == 0

    def test_duplicate_email(self, admin_client):
        admin_client.post("/api/v1/counselors", json=COUNSELOR)
        response = admin_client.post("/api/v1/counselors", json=COUNSELOR)

        assert response.status_code == 409
        assert response.json()["success"] is False

    def test_invalid_phone(self, admin_client):
        response = admin_client.post("/api/v1/counselors", json={**COUNSELOR, "phone": "123"})

        assert response.status_code == 400
        assert response.json()["message"] == "Please provide a valid phone number (minimum 10 digits)"

    def test_get_update_delete(self, admin_client):
        counselor_id = admin_client.post("/api/v1/counselors", json=COUNSELOR).json()["counselorId"]

        detail = admin_client.get(f"/api/v1/counselors/{counselor_id}").json()
        assert detail["counselor"]["email"] == "priya@example.com"
        assert detail["meetings"] == []

        updated = admin_client.put(
            f"/api/v1/counselors/{counselor_id}", json={**COUNSELOR, "expertise": "Canada visas"}
        )
        assert updated.status_code == 200
        assert admin_client.get(f"/api/v1/counselors/{counselor_id}").json()["counselor"]["expertise"] == "Canada visas"

        assert admin_client.delete(f"/api/v1/counselors/{counselor_id}").status_code == 200
        assert admin_client.get(f"/api/v1/counselors/{counselor_id}").status_code == 404

    def test_client_role_forbidden(self, client, client_token):
        response = client.get("/api/v1/counselors", headers={"Authorization": f"Bearer {client_token}"})

        assert response.status_code == 403
        assert response.json() == {"success": False, "message": "Access denied. Insufficient permissions."}
