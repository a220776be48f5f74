PATIENT = {
    "firstName": "Grace",
    "lastName": "Hopper",
    "dateOfBirth": "1980-12-09",
    "gender": "Female",
    "contactNumber": "+1 555 0100",
    "email": "grace@example.com",
}


def test_patients_require_authentication(patients_client) -> None:
    response = patients_client.get("/patients")
    assert response.status_code == 401
    body = response.json()
    assert set(body) >= {"message", "error", "timestamp"}


def test_create_list_and_get(patients_client, worker_headers) -> None:
    created = patients_client.post("/patients", json=PATIENT, headers=worker_headers)
    assert created.status_code == 201
    patient = created.json()
    assert patient["firstName"] == "Grace"
    assert patient["id"]

    listing = patients_client.get("/patients", headers=worker_headers)
    assert [p["id"] for p in listing.json()] == [patient["id"]]

    fetched = patients_client.get(f"/patients/{patient['id']}", headers=worker_headers)
    assert fetched.json()["email"] == "grace@example.com"


def test_duplicate_email_conflicts(patients_client, admin_headers) -> None:
    assert patients_client.post("/patients", json=PATIENT, headers=admin_headers).status_code == 201

    duplicate = dict(PATIENT, firstName="Other", email="GRACE@example.com")
    response = patients_client.post("/patients", json=duplicate, headers=admin_headers)
    assert response.status_code == 409
    assert response.json()["error"] == "CONFLICT"


def test_patients_without_email_do_not_collide(patients_client, admin_headers) -> None:
    no_email = {k: v for k, v in PATIENT.items() if k != "email"}
    assert patients_client.post("/patients", json=no_email, headers=admin_headers).status_code == 201
    assert patients_client.post("/patients", json=no_email, headers=admin_headers).status_code == 201


def test_missing_required_field_is_400(patients_client, admin_headers) -> None:
    response = patients_client.post(
        "/patients", json={"firstName": "No", "lastName": "Birthday"}, headers=admin_headers
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert any("dateOfBirth" in err["loc"] for err in body["errors"])


def test_partial_update_and_delete(patients_client, admin_headers) -> None:
    patient = patients_client.post("/patients", json=PATIENT, headers=admin_headers).json()

    updated = patients_client.put(
        f"/patients/{patient['id']}", json={"contactNumber": "+1 555 0199"}, headers=admin_headers
    )
    assert updated.status_code == 200
    assert updated.json()["contactNumber"] == "+1 555 0199"
    assert updated.json()["lastName"] == "Hopper"

    cleared = patients_client.put(
        f"/patients/{patient['id']}", json={"lastName": None}, headers=admin_headers
    )
    assert cleared.status_code == 400

    deleted = patients_client.delete(f"/patients/{patient['id']}", headers=admin_headers)
    assert deleted.json() == {"message": "Patient deleted"}

    missing = patients_client.get(f"/patients/{patient['id']}", headers=admin_headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Patient not found"
