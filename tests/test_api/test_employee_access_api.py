"""
API tests for the employee access gate
"""
import pytest

from app.main import app
from app.services.employee_access_service import EmployeeAccessService, get_employee_access_service

LOGIN = "/api/v1/employee-access?action=login"
VERIFY = "/api/v1/employee-access?action=verify"


@pytest.fixture
def service():
    service = EmployeeAccessService(secret="test-secret", password="letmein", ttl_hours=24)
    app.dependency_overrides[get_employee_access_service] = lambda: service
    return service


class TestLogin:

    def test_correct_password_returns_token(self, client, service):
        response = client.post(LOGIN, json={"password": "letmein"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert service.verify_token(data["token"]) is True

    def test_wrong_password(self, client, service):
        response = client.post(LOGIN, json={"password": "guess"})

        assert response.status_code == 401
        assert response.json() == {"error": "Incorrect password"}

    @pytest.mark.parametrize("body", [{}, {"password": ""}, {"password": "x" * 101}, ["letmein"]])
    def test_invalid_input(self, client, service, body):
        response = client.post(LOGIN, json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid input"}

    def test_non_json_body(self, client, service):
        response = client.post(LOGIN, content="password=letmein", headers={"Content-Type": "text/plain"})
        assert response.status_code == 400

    def test_rate_limited_after_five_attempts(self, client, service):
        for _ in range(5):
            assert client.post(LOGIN, json={"password": "guess"}).status_code == 401

        response = client.post(LOGIN, json={"password": "letmein"})

        assert response.status_code == 429
        assert "Retry-After" in response.headers


class TestVerify:

    def test_valid_token(self, client, service):
        token = service.issue_token()
        assert client.post(VERIFY, json={"token": token}).json() == {"valid": True}

    @pytest.mark.parametrize("body", [{"token": "garbage"}, {}, {"token": 42}])
    def test_invalid_token_is_still_200(self, client, service, body):
        response = client.post(VERIFY, json=body)

        assert response.status_code == 200
        assert response.json() == {"valid": False}

    def test_not_rate_limited(self, client, service):
        for _ in range(10):
            assert client.post(VERIFY, json={"token": "garbage"}).status_code == 200


@pytest.mark.parametrize("url", ["/api/v1/employee-access", "/api/v1/employee-access?action=logout"])
def test_unknown_action(client, service, url):
    response = client.post(url, json={"password": "letmein"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid action"}
