from conftest import LECTURER, STUDENT, TEST_SECRET

from config import AuthSettings
from utils.token_issuer import TokenIssuer


def test_register_student(client, sign_up):
    response = client.post("/register", json=STUDENT)
    assert response.status_code == 201
    assert response.json() == {"success": True, "message": "Student data stored successfully"}

    duplicate = client.post("/register", json={**STUDENT, "matricNumber": "20190002"})
    assert duplicate.status_code == 400
    assert duplicate.json() == {"success": False, "message": "Student already exist"}

    _, headers = sign_up()
    students = client.get("/student", headers=headers).json()["students"]
    assert [s["matricNumber"] for s in students] == ["20190001"]


def test_register_student_validation_error_is_bad_request(client):
    response = client.post("/register", json={**STUDENT, "matricNumber": "123"})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "matricNumber" in body["message"]


def test_register_student_rejects_unknown_level(client):
    response = client.post("/register", json={**STUDENT, "level": "600"})
    assert response.status_code == 400


def test_sign_up_sets_http_only_cookie(client, mailer):
    response = client.post("/lecturer/signup", json=LECTURER)
    assert response.status_code == 201

    body = response.json()
    assert body["success"] is True
    assert response.cookies["token"] == body["token"]
    assert "httponly" in response.headers["set-cookie"].lower()
    assert body["user"]["email"] == LECTURER["email"]
    assert body["user"]["firstName"] == "Ada"
    assert "password" not in body["user"]
    assert "passwordHash" not in body["user"]
    assert "otp" not in body["user"]
    assert mailer.outbox[-1]["to"] == LECTURER["email"]


def test_sign_up_cookie_authenticates_follow_up_requests(client):
    client.post("/lecturer/signup", json=LECTURER)
    assert client.get("/courses/all").status_code == 200


def test_sign_up_with_existing_email(client, sign_up):
    sign_up()
    response = client.post("/lecturer/signup", json=LECTURER)
    assert response.status_code == 400
    assert response.json()["message"] == "Lecturer already exist"


def test_sign_up_rejects_short_password(client):
    response = client.post("/lecturer/signup", json={**LECTURER, "password": "short"})
    assert response.status_code == 400


def test_log_in_token_identifies_lecturer(client, sign_up):
    body, _ = sign_up()
    response = client.post(
        "/lecturer/login",
        json={"email": LECTURER["email"], "password": LECTURER["password"]},
    )
    assert response.status_code == 200
    token = response.json()["token"]
    assert response.cookies["token"] == token

    issuer = TokenIssuer(AuthSettings(secret_key=TEST_SECRET))
    assert issuer.verify(token) == body["user"]["id"]


def test_log_in_failures_share_one_message(client, sign_up):
    sign_up()
    wrong_password = client.post(
        "/lecturer/login", json={"email": LECTURER["email"], "password": "wrong-password"}
    )
    unknown_email = client.post(
        "/lecturer/login", json={"email": "nobody@example.com", "password": LECTURER["password"]}
    )
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["message"] == "Invalid email or password"


def test_log_in_with_missing_field(client):
    response = client.post("/lecturer/login", json={"email": LECTURER["email"]})
    assert response.status_code == 400
    assert response.json()["message"] == "Please enter your email and password"


def test_log_out_clears_cookie(client):
    client.post("/lecturer/signup", json=LECTURER)
    assert client.post("/lecturer/logout").status_code == 200
    assert client.get("/courses/all").status_code == 401


def test_password_reset_round_trip(client, sign_up, mailer):
    sign_up()
    response = client.post("/lecturer/forgotpassword", json={"email": LECTURER["email"]})
    assert response.status_code == 200
    otp = mailer.last_otp()

    reset = client.put(
        "/lecturer/reset",
        json={"password": "brand-new-pass", "confirmPassword": "brand-new-pass", "otp": otp},
    )
    assert reset.status_code == 200
    client.cookies.clear()
    headers = {"Authorization": f"Bearer {reset.json()['token']}"}
    assert client.get("/courses/all", headers=headers).status_code == 200

    reused = client.put(
        "/lecturer/reset",
        json={"password": "other-password", "confirmPassword": "other-password", "otp": otp},
    )
    assert reused.status_code == 400
    assert reused.json()["message"] == "Invalid or expired OTP"

    login = client.post(
        "/lecturer/login", json={"email": LECTURER["email"], "password": "brand-new-pass"}
    )
    assert login.status_code == 200


def test_reset_with_mismatched_passwords(client):
    response = client.put(
        "/lecturer/reset",
        json={"password": "brand-new-pass", "confirmPassword": "different-pass", "otp": "123456"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Passwords do not match"


def test_forgot_password_for_unknown_email(client):
    response = client.post("/lecturer/forgotpassword", json={"email": "nobody@example.com"})
    assert response.status_code == 404


def test_forgot_password_mail_failure_is_internal_error(client, sign_up, mailer):
    sign_up()
    mailer.fail = True
    response = client.post("/lecturer/forgotpassword", json={"email": LECTURER["email"]})
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Email could not be sent"}


def test_protected_route_without_token(client):
    response = client.get("/courses/all")
    assert response.status_code == 401
    assert response.json()["message"] == "Please login to access this resource"


def test_protected_route_with_forged_token(client, sign_up):
    body, _ = sign_up()
    forged = TokenIssuer(AuthSettings(secret_key="not-the-secret")).issue(body["user"]["id"])
    response = client.get("/courses/all", headers={"Authorization": f"Bearer {forged}"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token, please login to access this resource"


def test_token_of_deleted_lecturer_is_rejected(client, sign_up):
    body, headers = sign_up()
    assert client.delete(f"/lecturer/id/{body['user']['id']}", headers=headers).status_code == 200
    assert client.get("/courses/all", headers=headers).status_code == 401


def test_root_and_health(client):
    assert client.get("/").status_code == 200
    assert client.get("/api/health").json() == {"status": "ok"}


def test_mixed_case_email_can_log_in_and_reset(client, sign_up, mailer):
    mixed = "Ada@Example.COM"
    body, headers = sign_up(email=mixed)
    assert body["user"]["email"] == "ada@example.com"

    login = client.post("/lecturer/login", json={"email": mixed, "password": LECTURER["password"]})
    assert login.status_code == 200
    assert login.json()["user"]["id"] == body["user"]["id"]

    assert client.post("/lecturer/forgotpassword", json={"email": mixed}).status_code == 200
    assert mailer.outbox[-1]["to"] == "ada@example.com"
    assert client.get(f"/lecturer/email/{mixed}", headers=headers).status_code == 200


def test_sign_up_email_is_case_insensitive(client, sign_up):
    sign_up()
    response = client.post("/lecturer/signup", json={**LECTURER, "email": "ADA@example.com"})
    assert response.status_code == 400
    assert response.json()["message"] == "Lecturer already exist"


def test_stale_cookie_does_not_mask_bearer_header(client, sign_up):
    _, headers = sign_up()
    client.cookies.set("token", "stale-token")
    assert client.get("/courses/all", headers=headers).status_code == 200


def test_stale_cookie_without_header_is_rejected(client, sign_up):
    sign_up()
    client.cookies.set("token", "stale-token")
    response = client.get("/courses/all")
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token, please login to access this resource"


def test_error_body_is_documented(client):
    schema = client.get("/openapi.json").json()
    assert "ErrorResponse" in schema["components"]["schemas"]
    login = schema["paths"]["/lecturer/login"]["post"]["responses"]
    assert login["401"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
