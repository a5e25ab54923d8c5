from conftest import LECTURER, STUDENT

GRACE = {"firstName": "Grace", "lastName": "Hopper", "email": "grace@example.com"}


def test_get_lecturer_by_id_and_email(client, sign_up):
    body, headers = sign_up()
    lecturer_id = body["user"]["id"]

    by_id = client.get(f"/lecturer/id/{lecturer_id}", headers=headers)
    by_email = client.get(f"/lecturer/email/{LECTURER['email']}", headers=headers)
    assert by_id.status_code == by_email.status_code == 200
    assert by_id.json()["lecturer"] == by_email.json()["lecturer"]
    assert "passwordHash" not in by_id.json()["lecturer"]


def test_unknown_lecturer(client, sign_up):
    _, headers = sign_up()
    assert client.get("/lecturer/id/missing", headers=headers).status_code == 404
    response = client.get("/lecturer/email/nobody@example.com", headers=headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Lecturer not found"


def test_lecturer_lookup_requires_login(client):
    assert client.get("/lecturer/email/ada@example.com").status_code == 401


def test_update_own_profile(client, sign_up):
    body, headers = sign_up()
    response = client.put(
        f"/lecturer/id/{body['user']['id']}",
        json={"firstName": "Augusta", "email": "augusta@example.com"},
        headers=headers,
    )
    assert response.status_code == 200
    lecturer = response.json()["lecturer"]
    assert lecturer["firstName"] == "Augusta"
    assert lecturer["lastName"] == "Lovelace"
    assert lecturer["email"] == "augusta@example.com"


def test_update_someone_elses_profile(client, sign_up):
    ada, _ = sign_up()
    _, grace_headers = sign_up(**GRACE)
    response = client.put(
        f"/lecturer/id/{ada['user']['id']}", json={"firstName": "Mallory"}, headers=grace_headers
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Not Authorized to update this user"


def test_update_unknown_profile(client, sign_up):
    _, headers = sign_up()
    response = client.put("/lecturer/id/missing", json={"firstName": "Nobody"}, headers=headers)
    assert response.status_code == 404


def test_update_profile_to_taken_email(client, sign_up):
    sign_up()
    grace, grace_headers = sign_up(**GRACE)
    response = client.put(
        f"/lecturer/id/{grace['user']['id']}",
        json={"email": LECTURER["email"]},
        headers=grace_headers,
    )
    assert response.status_code == 400


def test_update_password(client, sign_up):
    _, headers = sign_up()
    response = client.put(
        "/lecturer/password/update",
        json={"oldPassword": LECTURER["password"], "newPassword": "brand-new-pass"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Password updated successfully"

    login = client.post(
        "/lecturer/login", json={"email": LECTURER["email"], "password": "brand-new-pass"}
    )
    assert login.status_code == 200


def test_update_password_with_wrong_old_password(client, sign_up):
    _, headers = sign_up()
    response = client.put(
        "/lecturer/password/update",
        json={"oldPassword": "not-my-password", "newPassword": "brand-new-pass"},
        headers=headers,
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Incorrect old password"


def test_update_password_without_new_password(client, sign_up):
    _, headers = sign_up()
    response = client.put(
        "/lecturer/password/update", json={"oldPassword": LECTURER["password"]}, headers=headers
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Enter a new password"


def test_delete_account_removes_courses(client, sign_up):
    ada, ada_headers = sign_up()
    _, grace_headers = sign_up(**GRACE)
    client.post(
        "/courses/new",
        json={
            "courseName": "Data Structures",
            "courseCode": "CSC301",
            "level": "300",
            "day": "Monday",
            "time": "10:00",
        },
        headers=ada_headers,
    )

    response = client.delete(f"/lecturer/id/{ada['user']['id']}", headers=ada_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Lecturer account deleted successfully"
    assert client.get("/courses/all", headers=grace_headers).json()["courses"] == []


def test_delete_someone_elses_account(client, sign_up):
    ada, _ = sign_up()
    _, grace_headers = sign_up(**GRACE)
    response = client.delete(f"/lecturer/id/{ada['user']['id']}", headers=grace_headers)
    assert response.status_code == 401
    assert client.get(f"/lecturer/id/{ada['user']['id']}", headers=grace_headers).status_code == 200


def test_delete_unknown_account(client, sign_up):
    _, headers = sign_up()
    assert client.delete("/lecturer/id/missing", headers=headers).status_code == 404


def test_students(client, sign_up):
    _, headers = sign_up()
    client.post("/register", json=STUDENT)

    listing = client.get("/student", headers=headers)
    assert listing.status_code == 200
    assert listing.json()["students"][0]["email"] == STUDENT["email"]

    single = client.get(f"/student/{STUDENT['matricNumber']}", headers=headers)
    assert single.status_code == 200
    student = single.json()["student"]
    assert student["level"] == "300"
    assert student["images"] == ["img/chinedu-1.jpg"]

    missing = client.get("/student/00000000", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Student not found"


def test_students_require_login(client):
    assert client.get("/student").status_code == 401
