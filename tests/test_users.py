"""Tests for user management endpoints."""
from fastapi.testclient import TestClient

from conftest import API, PASSWORD, login, signup


def test_all_users(client: TestClient, test_user, auth_headers, other_headers):
    response = client.get(f"{API}/users/view/allUsers", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "All User Details Found"
    emails = [user["email"] for user in body["data"]]
    assert emails == ["mayur@example.com", "raju@example.com"]
    assert all("hashedPassword" not in user for user in body["data"])


def test_all_users_requires_token(client: TestClient, test_user):
    response = client.get(f"{API}/users/view/allUsers")

    assert response.status_code == 401


def test_user_details(client: TestClient, test_user, auth_headers):
    response = client.get(f"{API}/users/{test_user['userId']}/userDetails", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["userId"] == test_user["userId"]
    assert data["firstName"] == "Mayur"


def test_user_details_not_found(client: TestClient, auth_headers):
    response = client.get(f"{API}/users/nope/userDetails", headers=auth_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "No User Found"


def test_edit_own_user(client: TestClient, test_user, auth_headers):
    response = client.put(
        f"{API}/users/{test_user['userId']}/edit",
        json={"lastName": "M", "mobileNumber": 917276789024, "country": "IN"},
        headers=auth_headers
    )

    assert response.status_code == 200
    assert response.json()["data"] == {"n": 1, "nModified": 1, "ok": 1}

    data = client.get(
        f"{API}/users/{test_user['userId']}/userDetails", headers=auth_headers
    ).json()["data"]
    assert data["lastName"] == "M"
    assert data["mobileNumber"] == "917276789024"
    assert data["firstName"] == "Mayur"


def test_edit_other_user(client: TestClient, test_user, other_headers):
    """Users cannot edit someone else's profile."""
    response = client.put(
        f"{API}/users/{test_user['userId']}/edit",
        json={"firstName": "Hacked"},
        headers=other_headers
    )

    assert response.status_code == 401
    assert response.json()["error"] is True


def test_edit_cannot_change_email_or_password(client: TestClient, test_user, auth_headers):
    """Credential fields are not part of a profile edit."""
    client.put(
        f"{API}/users/{test_user['userId']}/edit",
        json={"email": "new@example.com", "password": "new-password-123"},
        headers=auth_headers
    )

    assert login(client, "mayur@example.com", PASSWORD)


def test_delete_own_user(client: TestClient, test_user, auth_headers):
    """A deleted user can no longer log in and is not listed."""
    response = client.put(f"{API}/users/{test_user['userId']}/deleteUser", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["data"] == {"n": 1, "ok": 1}

    response = client.post(
        f"{API}/users/login",
        json={"email": test_user["email"], "password": PASSWORD}
    )
    assert response.status_code == 400

    other = signup(client, "raju@example.com")
    token = login(client, other["email"])
    listed = client.get(
        f"{API}/users/view/allUsers", headers={"Authorization": f"Bearer {token}"}
    ).json()["data"]
    assert [user["email"] for user in listed] == ["raju@example.com"]


def test_delete_other_user(client: TestClient, test_user, other_headers):
    response = client.put(f"{API}/users/{test_user['userId']}/deleteUser", headers=other_headers)

    assert response.status_code == 401
    assert login(client, test_user["email"])


def test_response_headers(client: TestClient):
    """Every response carries a request id and the security headers."""
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})

    assert response.headers["X-Request-ID"] == "abc-123"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_unknown_route_uses_envelope(client: TestClient):
    response = client.get(f"{API}/nothing/here")

    assert response.status_code == 404
    assert response.json()["error"] is True
    assert response.json()["status"] == 404


def test_edit_user_null_first_name(client: TestClient, test_user, auth_headers):
    """A required profile field cannot be cleared."""
    response = client.put(
        f"{API}/users/{test_user['userId']}/edit",
        json={"firstName": None},
        headers=auth_headers
    )

    assert response.status_code == 400
    assert "firstName" in response.json()["message"]

    data = client.get(
        f"{API}/users/{test_user['userId']}/userDetails", headers=auth_headers
    ).json()["data"]
    assert data["firstName"] == "Mayur"


def test_edit_user_clears_optional_field(client: TestClient, test_user, auth_headers):
    client.put(
        f"{API}/users/{test_user['userId']}/edit",
        json={"country": "IN"},
        headers=auth_headers
    )

    response = client.put(
        f"{API}/users/{test_user['userId']}/edit",
        json={"country": None},
        headers=auth_headers
    )

    assert response.status_code == 200
    data = client.get(
        f"{API}/users/{test_user['userId']}/userDetails", headers=auth_headers
    ).json()["data"]
    assert data["country"] is None


def test_health(client: TestClient):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert set(response.json()) == {"status", "version"}
