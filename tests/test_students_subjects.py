"""Student and subject endpoints."""


def test_teacher_manages_students(client, teacher_headers, student_payload):
    created = client.post("/api/students", json=student_payload(), headers=teacher_headers)
    assert created.status_code == 200
    student_id = created.json()["id"]

    updated = client.put(
        f"/api/students/{student_id}", json={"course": "BSIT"}, headers=teacher_headers
    )
    assert updated.status_code == 200
    assert updated.json()["course"] == "BSIT"
    assert updated.json()["first_name"] == "Ana"

    assert client.delete(f"/api/students/{student_id}", headers=teacher_headers).status_code == 200
    assert client.get(f"/api/students/{student_id}", headers=teacher_headers).status_code == 404


def test_students_listed_by_last_name(client, teacher_headers, student_payload):
    for id_number, last_name in [("1", "Santos"), ("2", "Abad"), ("3", "Lim")]:
        client.post(
            "/api/students",
            json=student_payload(id_number=id_number, last_name=last_name),
            headers=teacher_headers,
        )

    names = [s["last_name"] for s in client.get("/api/students", headers=teacher_headers).json()]

    assert names == ["Abad", "Lim", "Santos"]


def test_student_search(client, teacher_headers, student_payload):
    client.post("/api/students", json=student_payload("2024-001", "Ana", "Reyes"), headers=teacher_headers)
    client.post("/api/students", json=student_payload("2024-002", "Ben", "Cruz"), headers=teacher_headers)
    client.post("/api/students", json=student_payload("2023-100", "Carla", "Benitez"), headers=teacher_headers)

    def search(term):
        resp = client.get("/api/students", params={"search": term}, headers=teacher_headers)
        return sorted(s["id_number"] for s in resp.json())

    assert search("ben") == ["2023-100", "2024-002"]
    assert search("REYES") == ["2024-001"]
    assert search("2024-") == ["2024-001", "2024-002"]
    assert search("%") == []


def test_duplicate_id_number_is_conflict(client, teacher_headers, student_payload):
    client.post("/api/students", json=student_payload(), headers=teacher_headers)

    resp = client.post("/api/students", json=student_payload(), headers=teacher_headers)

    assert resp.status_code == 409
    assert "id_number" in resp.json()["detail"]


def test_student_role_can_read_but_not_write(
    client, teacher_headers, student_headers, student_payload
):
    client.post("/api/students", json=student_payload(), headers=teacher_headers)

    assert len(client.get("/api/students", headers=student_headers).json()) == 1

    resp = client.post("/api/students", json=student_payload("2024-999"), headers=student_headers)
    assert resp.status_code == 403
    assert resp.json()["detail"] == 'new row violates row-level security policy for table "students"'
    assert len(client.get("/api/students", headers=teacher_headers).json()) == 1


def test_missing_student_is_not_found(client, teacher_headers):
    assert client.get("/api/students/nope", headers=teacher_headers).status_code == 404
    assert client.put("/api/students/nope", json={}, headers=teacher_headers).status_code == 404
    assert client.delete("/api/students/nope", headers=teacher_headers).status_code == 404


def test_subjects_crud(client, admin_headers):
    for name in ["Physics", "Algebra"]:
        resp = client.post(
            "/api/subjects", json={"name": name, "instructor": "Dr. Tan"}, headers=admin_headers
        )
        assert resp.status_code == 200

    subjects = client.get("/api/subjects", headers=admin_headers).json()
    assert [s["name"] for s in subjects] == ["Algebra", "Physics"]

    subject_id = subjects[0]["id"]
    resp = client.put(
        f"/api/subjects/{subject_id}", json={"instructor": "Ms. Go"}, headers=admin_headers
    )
    assert resp.json()["instructor"] == "Ms. Go"

    assert client.delete(f"/api/subjects/{subject_id}", headers=admin_headers).status_code == 200
    assert len(client.get("/api/subjects", headers=admin_headers).json()) == 1


def test_student_role_cannot_delete_subject(client, admin_headers, student_headers):
    subject_id = client.post(
        "/api/subjects", json={"name": "Algebra", "instructor": "X"}, headers=admin_headers
    ).json()["id"]

    resp = client.delete(f"/api/subjects/{subject_id}", headers=student_headers)

    assert resp.status_code == 403
    assert client.get(f"/api/subjects/{subject_id}", headers=admin_headers).status_code == 200
