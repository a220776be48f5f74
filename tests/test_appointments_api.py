SLOT = "2026-03-02T09:30:00Z"


def _book(client, headers, patient_id, doctor="Dr. Grey", when=SLOT, **extra):
    return client.post(
        "/appointments",
        json={"patientId": patient_id, "doctorName": doctor, "appointmentDate": when, **extra},
        headers=headers,
    )


def test_double_booking_scenario(clinical_client, admin_headers, local_patient) -> None:
    a1 = _book(clinical_client, admin_headers, local_patient["id"])
    assert a1.status_code == 201
    assert a1.json()["status"] == "Scheduled"

    a2 = _book(clinical_client, admin_headers, local_patient["id"])
    assert a2.status_code == 409
    assert a2.json()["message"] == "This time slot is already booked"

    cancel = clinical_client.put(
        f"/appointments/{a1.json()['id']}",
        json={"status": "Cancelled"},
        headers=admin_headers,
    )
    assert cancel.status_code == 200
    assert cancel.json()["status"] == "Cancelled"

    retry = _book(clinical_client, admin_headers, local_patient["id"])
    assert retry.status_code == 201


def test_same_instant_in_other_offset_conflicts(clinical_client, admin_headers, local_patient) -> None:
    assert _book(clinical_client, admin_headers, local_patient["id"]).status_code == 201

    response = _book(
        clinical_client, admin_headers, local_patient["id"], when="2026-03-02T10:30:00+01:00"
    )
    assert response.status_code == 409


def test_reschedule_into_taken_slot_is_rejected(clinical_client, admin_headers, local_patient) -> None:
    assert _book(clinical_client, admin_headers, local_patient["id"]).status_code == 201
    other = _book(clinical_client, admin_headers, local_patient["id"], when="2026-03-02T10:00:00Z")
    assert other.status_code == 201

    response = clinical_client.put(
        f"/appointments/{other.json()['id']}",
        json={"appointmentDate": SLOT},
        headers=admin_headers,
    )
    assert response.status_code == 409

    unchanged = clinical_client.get(f"/appointments/{other.json()['id']}", headers=admin_headers)
    assert unchanged.json()["appointmentDate"].startswith("2026-03-02T10:00:00")


def test_updating_own_slot_is_not_a_conflict(clinical_client, admin_headers, local_patient) -> None:
    booked = _book(clinical_client, admin_headers, local_patient["id"])

    response = clinical_client.put(
        f"/appointments/{booked.json()['id']}",
        json={"doctorName": "Dr. Grey", "appointmentDate": SLOT},
        headers=admin_headers,
    )
    assert response.status_code == 200


def test_reactivating_into_taken_slot_is_rejected(clinical_client, admin_headers, local_patient) -> None:
    first = _book(clinical_client, admin_headers, local_patient["id"])
    clinical_client.put(
        f"/appointments/{first.json()['id']}", json={"status": "Cancelled"}, headers=admin_headers
    )
    assert _book(clinical_client, admin_headers, local_patient["id"]).status_code == 201

    response = clinical_client.put(
        f"/appointments/{first.json()['id']}", json={"status": "Scheduled"}, headers=admin_headers
    )
    assert response.status_code == 409


def test_unknown_patient_is_rejected_and_nothing_saved(clinical_client, admin_headers) -> None:
    response = _book(clinical_client, admin_headers, "no-such-patient")
    assert response.status_code == 404
    assert response.json()["message"] == "Patient not found"

    listing = clinical_client.get("/appointments", headers=admin_headers)
    assert listing.json() == []


def test_explicit_null_on_required_field_is_rejected(clinical_client, admin_headers, local_patient) -> None:
    booked = _book(clinical_client, admin_headers, local_patient["id"])

    response = clinical_client.put(
        f"/appointments/{booked.json()['id']}", json={"doctorName": None}, headers=admin_headers
    )
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


def test_list_by_patient_and_delete(clinical_client, worker_headers, local_patient) -> None:
    booked = _book(clinical_client, worker_headers, local_patient["id"])
    appointment_id = booked.json()["id"]

    by_patient = clinical_client.get(
        f"/appointments/patient/{local_patient['id']}", headers=worker_headers
    )
    assert [a["id"] for a in by_patient.json()] == [appointment_id]

    deleted = clinical_client.delete(f"/appointments/{appointment_id}", headers=worker_headers)
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Appointment deleted"}

    missing = clinical_client.get(f"/appointments/{appointment_id}", headers=worker_headers)
    assert missing.status_code == 404


def test_requires_authentication(clinical_client) -> None:
    response = clinical_client.get("/appointments")
    assert response.status_code == 401
    assert response.json()["error"] == "UNAUTHORIZED"


def test_clinical_service_with_own_database_accepts_tokens(
    standalone_clinical_client, admin_headers, worker_headers
) -> None:
    assert standalone_clinical_client.get("/appointments", headers=admin_headers).status_code == 200

    response = standalone_clinical_client.post(
        "/local-patients",
        json={
            "firstName": "Grace",
            "lastName": "Hopper",
            "dateOfBirth": "1906-12-09",
            "gender": "Female",
            "email": "grace@example.com",
        },
        headers=worker_headers,
    )
    assert response.status_code == 201, response.text
