import pytest

from app.db.models import Role, Worker
from app.services.v1 import CredentialStore, TokenService
from app.services.v1 import credential_store as credential_store_module
from common.api_error import DuplicateEmailError, InvalidCredentialsError


def test_worker_password_is_stored_hashed(run_db) -> None:
    async def work(db):
        async with db.session() as session:
            worker = await CredentialStore(session).create_worker("Nurse@Clinic.example.com", "s3cret-pw", 3000)
            worker_id = worker.id
        async with db.session() as session:
            return await session.get(Worker, worker_id)

    worker = run_db(work)
    assert worker.email == "nurse@clinic.example.com"
    assert worker.password != "s3cret-pw"
    assert credential_store_module.verify_password("s3cret-pw", worker.password)


def test_duplicate_worker_email_fails_before_hashing(run_db, monkeypatch) -> None:
    async def seed(db):
        async with db.session() as session:
            await CredentialStore(session).create_worker("dup@clinic.example.com", "first-pw")

    run_db(seed)

    def fail_hash(password: str) -> str:
        raise AssertionError("password hashed for a duplicate email")

    monkeypatch.setattr(credential_store_module, "hash_password", fail_hash)

    async def duplicate(db):
        async with db.session() as session:
            await CredentialStore(session).create_worker("DUP@clinic.example.com", "second-pw")

    with pytest.raises(DuplicateEmailError):
        run_db(duplicate)


def test_wrong_password_and_unknown_email_fail_identically(run_db) -> None:
    tokens = TokenService("credential-store-test-secret-0123456789")

    def attempt(email, password):
        async def work(db):
            async with db.session() as session:
                store = CredentialStore(session, tokens)
                if not await store.find_by_email("known@clinic.example.com", Role.WORKER):
                    await store.create_worker("known@clinic.example.com", "right-pw")
                await store.authenticate(email, password, Role.WORKER)

        return work

    failures = []
    for email, password in [("known@clinic.example.com", "wrong-pw"), ("ghost@clinic.example.com", "right-pw")]:
        with pytest.raises(InvalidCredentialsError) as exc_info:
            run_db(attempt(email, password))
        failures.append((exc_info.value.status_code, exc_info.value.code, exc_info.value.message))

    assert failures[0] == failures[1]
    assert failures[0] == (401, "INVALID_CREDENTIALS", "Invalid email or password")


def test_login_is_scoped_to_role(run_db) -> None:
    tokens = TokenService("credential-store-test-secret-0123456789")

    async def work(db):
        async with db.session() as session:
            store = CredentialStore(session, tokens)
            await store.create_admin("boss@clinic.example.com", "boss-pw")
            # An admin account cannot log in through the worker path
            await store.authenticate("boss@clinic.example.com", "boss-pw", Role.WORKER)

    with pytest.raises(InvalidCredentialsError):
        run_db(work)


def test_successful_login_issues_role_token(run_db) -> None:
    tokens = TokenService("credential-store-test-secret-0123456789")

    async def work(db):
        async with db.session() as session:
            store = CredentialStore(session, tokens)
            admin = await store.create_admin("boss@clinic.example.com", "boss-pw")
            token, _, principal = await store.authenticate("BOSS@clinic.example.com", "boss-pw", Role.ADMIN)
            return admin.id, principal.id, token

    admin_id, principal_id, token = run_db(work)
    claims = tokens.verify(token)
    assert principal_id == admin_id == claims.principal_id
    assert claims.role is Role.ADMIN
