from datetime import timedelta

from app.db.models import Role
from app.services.v1 import CredentialStore

NEW_WORKER = {"email": "porter@healthcare.example.com", "password": "porter-pw", "salary": 2500}


def test_admin_creates_worker_without_password_in_response(patients_client, admin_headers) -> None:
    response = patients_client.post("/workers", json=NEW_WORKER, headers=admin_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "porter@healthcare.example.com"
    assert body["salary"] == 2500
    assert "password" not in body

    listing = patients_client.get("/workers", headers=admin_headers)
    assert all("password" not in worker for worker in listing.json())


def test_worker_token_is_forbidden_on_admin_routes(patients_client, worker_headers) -> None:
    response = patients_client.get("/workers", headers=worker_headers)
    assert response.status_code == 403
    assert response.json()["error"] == "FORBIDDEN"


def test_expired_token_is_unauthorized(patients_client, admin_headers, token_service) -> None:
    me = token_service.verify(admin_headers["Authorization"].split()[1])
    expired, _ = token_service.issue(me.principal_id, Role.ADMIN, ttl=timedelta(minutes=-1))

    response = patients_client.get("/workers", headers={"Authorization": f"Bearer {expired}"})
    assert response.status_code == 401
    assert response.json()["error"] == "TOKEN_EXPIRED"


def test_token_for_deleted_worker_is_rejected(patients_client, admin_headers, worker_headers) -> None:
    workers = patients_client.get("/workers", headers=admin_headers).json()
    patients_client.delete(f"/workers/{workers[0]['id']}", headers=admin_headers)

    response = patients_client.get("/patients", headers=worker_headers)
    assert response.status_code == 401


def test_duplicate_worker_email_conflicts(patients_client, admin_headers) -> None:
    patients_client.post("/workers", json=NEW_WORKER, headers=admin_headers)
    response = patients_client.post(
        "/workers", json=dict(NEW_WORKER, email="PORTER@healthcare.example.com"), headers=admin_headers
    )
    assert response.status_code == 409
    assert response.json() == {
        "message": "Email already registered",
        "error": "DUPLICATE_EMAIL",
        "timestamp": response.json()["timestamp"],
    }


def test_login_failures_are_indistinguishable(patients_client, admin_headers) -> None:
    patients_client.post("/workers", json=NEW_WORKER, headers=admin_headers)

    wrong_password = patients_client.post(
        "/worker/login", json={"email": NEW_WORKER["email"], "password": "nope-nope"}
    )
    unknown_email = patients_client.post(
        "/worker/login", json={"email": "nobody@healthcare.example.com", "password": "porter-pw"}
    )
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json()["message"] == unknown_email.json()["message"]
    assert wrong_password.json()["error"] == unknown_email.json()["error"] == "INVALID_CREDENTIALS"


def test_password_change_rehashes(patients_client, admin_headers) -> None:
    worker = patients_client.post("/workers", json=NEW_WORKER, headers=admin_headers).json()

    updated = patients_client.put(
        f"/workers/{worker['id']}",
        json={"password": "brand-new-pw", "salary": 2700},
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["salary"] == 2700

    old = patients_client.post(
        "/worker/login", json={"email": NEW_WORKER["email"], "password": "porter-pw"}
    )
    new = patients_client.post(
        "/worker/login", json={"email": NEW_WORKER["email"], "password": "brand-new-pw"}
    )
    assert old.status_code == 401
    assert new.status_code == 200
    assert new.json()["role"] == "worker"
    assert "expiresAt" in new.json()


def test_email_change_to_taken_address_conflicts(patients_client, admin_headers) -> None:
    first = patients_client.post("/workers", json=NEW_WORKER, headers=admin_headers).json()
    patients_client.post(
        "/workers", json=dict(NEW_WORKER, email="cook@healthcare.example.com"), headers=admin_headers
    )

    response = patients_client.put(
        f"/workers/{first['id']}", json={"email": "cook@healthcare.example.com"}, headers=admin_headers
    )
    assert response.status_code == 409


def test_unknown_worker_is_404(patients_client, admin_headers) -> None:
    response = patients_client.get("/workers/does-not-exist", headers=admin_headers)
    assert response.status_code == 404


def test_email_change_losing_race_still_conflicts(patients_client, admin_headers, monkeypatch) -> None:
    first = patients_client.post("/workers", json=NEW_WORKER, headers=admin_headers).json()
    patients_client.post(
        "/workers", json=dict(NEW_WORKER, email="cook@healthcare.example.com"), headers=admin_headers
    )

    # Another request claimed the address between the check and the write
    async def never_taken(self, *args, **kwargs) -> bool:
        return False

    monkeypatch.setattr(CredentialStore, "email_taken", never_taken)

    response = patients_client.put(
        f"/workers/{first['id']}", json={"email": "cook@healthcare.example.com"}, headers=admin_headers
    )
    assert response.status_code == 409
    assert response.json()["error"] == "DUPLICATE_EMAIL"
