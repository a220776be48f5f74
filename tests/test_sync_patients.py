def _patient(first_name, email, **extra):
    return {
        "firstName": first_name,
        "lastName": "Synced",
        "dateOfBirth": "1970-01-01",
        "email": email,
        **extra,
    }


def test_sync_with_duplicate_email_is_partial_success(clinical_client, admin_headers, local_patient) -> None:
    batch = [
        _patient("One", "one@example.com"),
        _patient("Dup", local_patient["email"]),
        _patient("Two", "two@example.com"),
    ]

    response = clinical_client.post("/sync-patients", json=batch, headers=admin_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["added"] == 2
    assert body["message"] == "Patient synchronization completed with duplicates"
    assert len(body["errors"]) == 1
    assert body["errors"][0]["index"] == 1
    assert body["errors"][0]["email"] == local_patient["email"]

    emails = {p["email"] for p in clinical_client.get("/local-patients", headers=admin_headers).json()}
    assert emails == {"ada@example.com", "one@example.com", "two@example.com"}


def test_sync_keeps_directory_ids(clinical_client, admin_headers) -> None:
    batch = [_patient("Kept", "kept@example.com", id="directory-id-1")]

    response = clinical_client.post("/sync-patients", json=batch, headers=admin_headers)
    assert response.json() == {
        "message": "Patient synchronization completed",
        "added": 1,
        "errors": [],
    }

    fetched = clinical_client.get("/local-patients/directory-id-1", headers=admin_headers)
    assert fetched.status_code == 200
    assert fetched.json()["firstName"] == "Kept"


def test_duplicates_within_one_batch_are_reported(clinical_client, admin_headers) -> None:
    batch = [
        _patient("A", "same@example.com", id="p-1"),
        _patient("B", "same@example.com"),
        _patient("C", "other@example.com", id="p-1"),
    ]

    body = clinical_client.post("/sync-patients", json=batch, headers=admin_headers).json()
    assert body["added"] == 1
    assert [e["index"] for e in body["errors"]] == [1, 2]


def test_sync_is_admin_only(clinical_client, worker_headers) -> None:
    response = clinical_client.post(
        "/sync-patients", json=[_patient("X", "x@example.com")], headers=worker_headers
    )
    assert response.status_code == 403


def test_workers_can_use_local_patients(clinical_client, worker_headers) -> None:
    created = clinical_client.post(
        "/local-patients", json=_patient("Local", "local@example.com"), headers=worker_headers
    )
    assert created.status_code == 201
    assert clinical_client.get(
        f"/local-patients/{created.json()['id']}", headers=worker_headers
    ).status_code == 200
