"""Shared fixtures: a fresh SQLite database per test and clients for both services."""

import asyncio

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from common.config import (
    AppConfig,
    AuthConfig,
    DatabaseConfig,
    DbDriver,
    Environment,
    EnvLogLevel,
    LoggingConfig,
    ServiceKind,
    configure_structlog,
)
from app.db import DbManager
from app.services.v1 import TokenService
from main import create_app

ADMIN_EMAIL = "admin@healthcare.example.com"
ADMIN_PASSWORD = "admin-password"
TEST_SECRET = "test-secret-that-is-long-enough-for-hs256"

configure_structlog(EnvLogLevel.INFO.level)


def make_config(db_path: str, **overrides) -> AppConfig:
    values = dict(
        app_title="Healthcare Admin",
        app_version="1.0.0",
        environment=Environment.DEVELOPMENT,
        logging=LoggingConfig(log_level=EnvLogLevel.INFO),
        auth=AuthConfig(
            jwt_secret=SecretStr(TEST_SECRET),
            default_admin_email=ADMIN_EMAIL,
            default_admin_password=SecretStr(ADMIN_PASSWORD),
        ),
        database=DatabaseConfig(driver=DbDriver.AIOSQLITE, name=db_path, auto_create=True),
    )
    values.update(overrides)
    return AppConfig(**values)


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "healthcare.db")


@pytest.fixture
def app_config(db_path) -> AppConfig:
    return make_config(db_path)


@pytest.fixture
def patients_client(app_config):
    with TestClient(create_app(ServiceKind.PATIENTS, app_config)) as client:
        yield client


@pytest.fixture
def clinical_client(app_config, patients_client):
    # The patients service bootstraps the admin whose tokens both services accept
    with TestClient(create_app(ServiceKind.CLINICAL, app_config)) as client:
        yield client


@pytest.fixture
def standalone_clinical_client(tmp_path, patients_client):
    # Clinical service on its own database file, sharing only the signing secret
    config = make_config(str(tmp_path / "clinical.db"))
    with TestClient(create_app(ServiceKind.CLINICAL, config)) as client:
        yield client


def login(client: TestClient, role: str, email: str, password: str) -> str:
    response = client.post(f"/{role}/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(patients_client) -> dict[str, str]:
    return bearer(login(patients_client, "admin", ADMIN_EMAIL, ADMIN_PASSWORD))


@pytest.fixture
def worker_headers(patients_client, admin_headers) -> dict[str, str]:
    response = patients_client.post(
        "/workers",
        json={"email": "nurse@healthcare.example.com", "password": "nurse-pass", "salary": 4200},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return bearer(login(patients_client, "worker", "nurse@healthcare.example.com", "nurse-pass"))


@pytest.fixture
def local_patient(clinical_client, admin_headers) -> dict:
    response = clinical_client.post(
        "/local-patients",
        json={
            "firstName": "Ada",
            "lastName": "Lovelace",
            "dateOfBirth": "1985-12-10",
            "gender": "Female",
            "email": "ada@example.com",
        },
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(TEST_SECRET)


@pytest.fixture
def run_db(db_path):
    """
    Run `work(db_manager)` on a fresh event loop against the test database.

    Example:
        run_db(lambda db: ensure_default_admin(db, "a@b.c", "pw"))
    """

    def runner(work):
        async def _main():
            manager = DbManager(f"sqlite+aiosqlite:///{db_path}")
            await manager.create_schema()
            try:
                return await work(manager)
            finally:
                await manager.dispose()

        return asyncio.run(_main())

    return runner
