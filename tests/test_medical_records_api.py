def _record(patient_id, **extra):
    return {
        "patientId": patient_id,
        "doctorName": "Dr. Grey",
        "diagnosis": "Seasonal allergies",
        "treatment": "Antihistamines",
        **extra,
    }


def test_create_and_fetch_record(clinical_client, worker_headers, local_patient) -> None:
    created = clinical_client.post(
        "/medical-records", json=_record(local_patient["id"]), headers=worker_headers
    )
    assert created.status_code == 201
    body = created.json()
    assert body["patientId"] == local_patient["id"]
    assert body["doctorName"] == "Dr. Grey"

    fetched = clinical_client.get(f"/medical-records/{body['id']}", headers=worker_headers)
    assert fetched.status_code == 200
    assert fetched.json()["diagnosis"] == "Seasonal allergies"


def test_unknown_patient_is_rejected_and_nothing_saved(clinical_client, admin_headers) -> None:
    response = clinical_client.post(
        "/medical-records", json=_record("missing-patient"), headers=admin_headers
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Patient not found"

    assert clinical_client.get("/medical-records", headers=admin_headers).json() == []


def test_update_to_unknown_patient_is_rejected(clinical_client, admin_headers, local_patient) -> None:
    created = clinical_client.post(
        "/medical-records", json=_record(local_patient["id"]), headers=admin_headers
    ).json()

    response = clinical_client.put(
        f"/medical-records/{created['id']}",
        json={"patientId": "missing-patient"},
        headers=admin_headers,
    )
    assert response.status_code == 404

    still = clinical_client.get(f"/medical-records/{created['id']}", headers=admin_headers)
    assert still.json()["patientId"] == local_patient["id"]


def test_partial_update_keeps_other_fields(clinical_client, admin_headers, local_patient) -> None:
    created = clinical_client.post(
        "/medical-records", json=_record(local_patient["id"]), headers=admin_headers
    ).json()

    response = clinical_client.put(
        f"/medical-records/{created['id']}",
        json={"treatment": "Nasal spray"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["treatment"] == "Nasal spray"
    assert response.json()["diagnosis"] == "Seasonal allergies"


def test_patient_records_bundle(clinical_client, admin_headers, local_patient) -> None:
    patient_id = local_patient["id"]
    clinical_client.post("/medical-records", json=_record(patient_id), headers=admin_headers)
    clinical_client.post(
        "/appointments",
        json={"patientId": patient_id, "doctorName": "Dr. Grey", "appointmentDate": "2026-04-01T08:00:00Z"},
        headers=admin_headers,
    )

    response = clinical_client.get(f"/patient-records/{patient_id}", headers=admin_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["patient"]["id"] == patient_id
    assert len(body["medicalRecords"]) == 1
    assert len(body["appointments"]) == 1

    missing = clinical_client.get("/patient-records/nobody", headers=admin_headers)
    assert missing.status_code == 404


def test_list_by_patient_and_delete(clinical_client, admin_headers, local_patient) -> None:
    created = clinical_client.post(
        "/medical-records", json=_record(local_patient["id"]), headers=admin_headers
    ).json()

    listing = clinical_client.get(
        f"/medical-records/patient/{local_patient['id']}", headers=admin_headers
    )
    assert [r["id"] for r in listing.json()] == [created["id"]]

    deleted = clinical_client.delete(f"/medical-records/{created['id']}", headers=admin_headers)
    assert deleted.json() == {"message": "Medical record deleted"}
    assert clinical_client.get(
        f"/medical-records/{created['id']}", headers=admin_headers
    ).status_code == 404
