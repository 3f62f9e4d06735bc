from datetime import date

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, select

from dashboard.models.user import User
from dashboard.repositories.user_repo import UserRepository

REQUIRED = ["id", "email", "name", "gender", "birthday", "password"]


def _users(session):
    session.expire_all()
    return session.exec(select(User)).all()


def test_check_user_on_empty_store(client):
    response = client.post("/checkUser", json={"email": "a@x.com"})
    assert response.status_code == 200
    assert response.json() == {"exists": False}


def test_sign_in_flow(client, auth_payload):
    assert client.post("/checkUser", json={"email": "a@x.com"}).json() == {"exists": False}

    response = client.post("/storeAuthInfo", json=auth_payload)
    assert response.status_code == 200
    assert response.json() == {"message": "Auth info received and stored/updated."}

    body = client.post("/checkUser", json={"email": "a@x.com"}).json()
    assert body["exists"] is True
    info = body["userInfo"]
    assert info["id"] == auth_payload["id"]
    assert info["email"] == "a@x.com"
    assert info["name"] == "Ada Lovelace"
    assert info["gender"] == "female"
    assert info["birthday"] == "1990-12-10"
    assert info["password"] == "YourDefaultPassword"
    assert info["token"] is None


def test_store_auth_info_round_trip(client, session, auth_payload):
    client.post("/storeAuthInfo", json=auth_payload)

    user = UserRepository().get_by_email(session, "a@x.com")
    assert user.id == auth_payload["id"]
    assert user.name == auth_payload["name"]
    assert user.gender == auth_payload["gender"]
    assert user.birthday == date(1990, 12, 10)
    assert user.password == auth_payload["password"]


@pytest.mark.parametrize("field", REQUIRED)
def test_store_auth_info_missing_field(client, session, auth_payload, field):
    payload = dict(auth_payload)
    del payload[field]

    response = client.post("/storeAuthInfo", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required auth info fields."
    assert _users(session) == []


def test_store_auth_info_empty_string_counts_as_missing(client, session, auth_payload):
    response = client.post("/storeAuthInfo", json={**auth_payload, "name": ""})
    assert response.status_code == 400
    assert _users(session) == []


def test_store_auth_info_missing_field_is_logged(client, auth_payload, read_logs):
    payload = {k: v for k, v in auth_payload.items() if k != "gender"}
    client.post("/storeAuthInfo", json=payload)

    logs = read_logs()
    assert logs[-1].eventType == "Error"
    assert "gender" in logs[-1].eventDescription


def test_store_auth_info_rejects_bad_birthday(client, session, auth_payload):
    response = client.post("/storeAuthInfo", json={**auth_payload, "birthday": "N/A"})
    assert response.status_code == 400
    assert _users(session) == []


def test_store_auth_info_accepts_numeric_id(client, session, auth_payload):
    response = client.post("/storeAuthInfo", json={**auth_payload, "id": 42})
    assert response.status_code == 200
    assert _users(session)[0].id == "42"


def test_store_auth_info_upsert_keeps_token_and_company(client, session, auth_payload):
    client.post("/storeAuthInfo", json=auth_payload)
    client.post("/storeToken", json={"email": "a@x.com", "token": "abc123"})
    client.post(
        "/updateCompanyInfo",
        json={"email": "a@x.com", "orgName": "Acme", "position": "CTO"},
    )

    client.post("/storeAuthInfo", json={**auth_payload, "name": "Ada King"})

    users = _users(session)
    assert len(users) == 1
    assert users[0].name == "Ada King"
    assert users[0].token == "abc123"
    assert users[0].orgName == "Acme"
    assert users[0].position == "CTO"


def test_upsert_retries_as_update_when_id_was_inserted_concurrently(engine, monkeypatch):
    repo = UserRepository()
    fields = {
        "email": "a@x.com",
        "gender": "female",
        "birthday": date(1990, 12, 10),
        "password": "pw",
    }

    with Session(engine) as first, Session(engine) as second:
        real_get = second.get
        lookups = []

        def get_before_other_insert(*args, **kwargs):
            lookups.append(args)
            if len(lookups) == 1:
                # the other sign-in commits between this lookup and our insert
                repo.upsert(first, user_id="1", name="First", **fields)
                return None
            return real_get(*args, **kwargs)

        monkeypatch.setattr(second, "get", get_before_other_insert)
        user = repo.upsert(second, user_id="1", name="Second", **fields)

    assert user.name == "Second"
    with Session(engine) as check:
        users = check.exec(select(User)).all()
    assert [(u.id, u.name) for u in users] == [("1", "Second")]


def test_update_profile_overwrites_columns(client, session, auth_payload):
    client.post("/storeAuthInfo", json=auth_payload)

    response = client.post(
        "/updateProfile",
        json={
            "id": auth_payload["id"],
            "name": "Ada B.",
            "email": "ada@x.com",
            "gender": "female",
            "birthday": "1991-01-02",
            "password": "new-secret",
            "profilepicture": "https://example.com/new.png",
            "countryCode": "+44",
            "contact": "7700900123",
        },
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Profile updated successfully."}
    user = _users(session)[0]
    assert user.email == "ada@x.com"
    assert user.birthday == date(1991, 1, 2)
    assert user.password == "new-secret"
    assert user.profilepicture == "https://example.com/new.png"
    assert user.countryCode == "+44"
    assert user.contact == "7700900123"


def test_update_profile_unknown_id_is_not_an_error(client, session):
    response = client.post("/updateProfile", json={"id": "nobody", "name": "X"})
    assert response.status_code == 200
    assert _users(session) == []


def test_company_info_round_trip(client, auth_payload):
    client.post("/storeAuthInfo", json=auth_payload)

    response = client.post(
        "/updateCompanyInfo",
        json={"email": "a@x.com", "orgName": "Acme", "position": "CTO"},
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Company info updated successfully."}

    response = client.get("/fetchCompanyInfo/a@x.com")
    assert response.status_code == 200
    assert response.json() == {"orgName": "Acme", "position": "CTO"}


def test_fetch_company_info_defaults_to_nulls(client, auth_payload):
    client.post("/storeAuthInfo", json=auth_payload)
    assert client.get("/fetchCompanyInfo/a@x.com").json() == {
        "orgName": None,
        "position": None,
    }


def test_fetch_company_info_unknown_email(client, read_logs):
    response = client.get("/fetchCompanyInfo/nobody@x.com")
    assert response.status_code == 404
    assert response.json()["detail"] == "Company info not found"
    assert read_logs()[-1].eventType == "Info"


def test_check_user_store_failure(client, monkeypatch, read_logs):
    def boom(self, session, email):
        raise OperationalError("SELECT", {}, Exception("connection lost"))

    monkeypatch.setattr(UserRepository, "get_by_email", boom)

    response = client.post("/checkUser", json={"email": "a@x.com"})

    assert response.status_code == 500
    assert response.json() == {"detail": "Error checking user."}
    last = read_logs()[-1]
    assert last.eventType == "Error"
    assert "connection lost" in last.eventDescription


def test_store_auth_info_store_failure_hides_detail(client, monkeypatch, auth_payload):
    def boom(self, session, **kwargs):
        raise OperationalError("INSERT", {}, Exception("disk full"))

    monkeypatch.setattr(UserRepository, "upsert", boom)

    response = client.post("/storeAuthInfo", json=auth_payload)

    assert response.status_code == 500
    assert "disk full" not in response.text


def test_malformed_body_is_400(client):
    response = client.post(
        "/checkUser",
        content="not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400


def test_every_route_outcome_is_logged(client, auth_payload, read_logs):
    client.post("/checkUser", json={"email": "a@x.com"})
    client.post("/storeAuthInfo", json=auth_payload)
    client.post("/checkUser", json={"email": "a@x.com"})

    descriptions = [log.eventDescription for log in read_logs()]
    assert descriptions == [
        "User with email a@x.com not found.",
        "Auth info for user a@x.com stored/updated successfully.",
        "User with email a@x.com found.",
    ]


def test_health(client):
    assert client.get("/").json() == {"status": "ok", "service": "dashboard-backend"}
