# tests/test_user_challenges_routes.py
import datetime as dt

import pytest
from bson import ObjectId

from app.db.mongodb import CHALLENGES, USER_CHALLENGES

ALICE = "alice@example.com"
BOB = "bob@example.com"


def auth(email):
    return {"X-User-Email": email}


@pytest.fixture
def challenge_id(mock_db):
    cid = ObjectId()
    mock_db[CHALLENGES].seed(
        {"_id": cid, "title": "Zero waste", "category": "Waste Reduction", "participants": 0}
    )
    return str(cid)


def _participants(client, cid):
    r = client.get(f"/api/challenges/{cid}")
    assert r.status_code == 200
    return r.json()["participants"]


# --- Parcours complet : join, re-join, progression, liste, départ ---
def test_full_participation_flow(client, challenge_id):
    r = client.post(f"/api/challenges/join/{challenge_id}", headers=auth(ALICE))
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True and body["already_joined"] is False
    uc = body["user_challenge"]
    assert uc["status"] == "Ongoing" and uc["progress"] == 0 and uc["progress_logs"] == []
    assert uc["challenge_id"] == challenge_id
    uc_id = uc["_id"]
    assert _participants(client, challenge_id) == 1

    r = client.post(f"/api/challenges/join/{challenge_id}", headers=auth(ALICE))
    assert r.status_code == 200
    assert r.json()["already_joined"] is True
    assert r.json()["user_challenge"]["_id"] == uc_id
    assert _participants(client, challenge_id) == 1

    r = client.patch(
        f"/api/user-challenges/{uc_id}/progress",
        json={"progress": 100, "addLogValue": 2.5},
        headers=auth(ALICE),
    )
    assert r.status_code == 200
    updated = r.json()["updated"]
    assert updated["progress"] == 100
    assert updated["status"] == "Finished"
    assert [log["value"] for log in updated["progress_logs"]] == [2.5]

    r = client.get("/api/user-challenges/me", headers=auth(ALICE))
    assert r.status_code == 200
    mine = r.json()
    assert len(mine) == 1
    assert mine[0]["_id"] == uc_id
    assert mine[0]["challenge"]["title"] == "Zero waste"

    r = client.delete(f"/api/user-challenges/{uc_id}", headers=auth(ALICE))
    assert r.status_code == 200
    assert r.json() == {"success": True, "data": None, "message": "Left challenge"}
    assert _participants(client, challenge_id) == 0

    r = client.delete(f"/api/user-challenges/{uc_id}", headers=auth(ALICE))
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND"


def test_join_unknown_challenge_404(client):
    r = client.post(f"/api/challenges/join/{ObjectId()}", headers=auth(ALICE))
    assert r.status_code == 404
    assert r.json()["success"] is False


@pytest.mark.parametrize(
    "method,path",
    [
        ("get", "/api/user-challenges/me"),
        ("patch", f"/api/user-challenges/{ObjectId()}/progress"),
        ("delete", f"/api/user-challenges/{ObjectId()}"),
        ("post", f"/api/challenges/join/{ObjectId()}"),
    ],
)
def test_identity_required(client, method, path):
    kwargs = {"json": {"progress": 10}} if method == "patch" else {}
    r = getattr(client, method)(path, **kwargs)
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "HTTP_401"


def test_blank_identity_header_is_rejected(client):
    r = client.get("/api/user-challenges/me", headers={"X-User-Email": "   "})
    assert r.status_code == 401


def test_progress_on_someone_elses_enrollment_403(client, challenge_id):
    uc_id = client.post(f"/api/challenges/join/{challenge_id}", headers=auth(ALICE)).json()[
        "user_challenge"
    ]["_id"]

    r = client.patch(
        f"/api/user-challenges/{uc_id}/progress", json={"progress": 50}, headers=auth(BOB)
    )
    assert r.status_code == 403
    assert r.json()["error"]["code"] == "FORBIDDEN"

    r = client.delete(f"/api/user-challenges/{uc_id}", headers=auth(BOB))
    assert r.status_code == 403
    assert _participants(client, challenge_id) == 1


def test_progress_unknown_enrollment_404(client):
    r = client.patch(
        f"/api/user-challenges/{ObjectId()}/progress", json={"progress": 10}, headers=auth(ALICE)
    )
    assert r.status_code == 404


@pytest.mark.parametrize("payload", [{"progress": "50"}, {"addLogValue": "3"}, {"progress": True}])
def test_progress_non_numeric_422(client, challenge_id, payload):
    uc_id = client.post(f"/api/challenges/join/{challenge_id}", headers=auth(ALICE)).json()[
        "user_challenge"
    ]["_id"]

    r = client.patch(f"/api/user-challenges/{uc_id}/progress", json=payload, headers=auth(ALICE))
    assert r.status_code == 422
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


def test_progress_non_finite_400(client, challenge_id):
    uc_id = client.post(f"/api/challenges/join/{challenge_id}", headers=auth(ALICE)).json()[
        "user_challenge"
    ]["_id"]

    r = client.patch(
        f"/api/user-challenges/{uc_id}/progress",
        content='{"progress": NaN}',
        headers={**auth(ALICE), "Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "INVALID_INPUT"


def test_progress_huge_integers(client, challenge_id):
    uc_id = client.post(f"/api/challenges/join/{challenge_id}", headers=auth(ALICE)).json()[
        "user_challenge"
    ]["_id"]
    huge = "1" + "0" * 400
    headers = {**auth(ALICE), "Content-Type": "application/json"}

    r = client.patch(
        f"/api/user-challenges/{uc_id}/progress",
        content='{"progress": ' + huge + "}",
        headers=headers,
    )
    assert r.status_code == 200
    assert r.json()["updated"]["progress"] == 100
    assert r.json()["updated"]["status"] == "Finished"

    r = client.patch(
        f"/api/user-challenges/{uc_id}/progress",
        content='{"addLogValue": ' + huge + "}",
        headers=headers,
    )
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "INVALID_INPUT"


def test_list_mine_reads_legacy_float_progress(client, challenge_id, mock_db):
    mock_db[USER_CHALLENGES].seed(
        {
            "_id": ObjectId(),
            "user_id": ALICE,
            "challenge_id": ObjectId(challenge_id),
            "status": "Ongoing",
            "progress": 45.5,
            "progress_logs": [],
            "join_date": dt.datetime(2024, 5, 1, tzinfo=dt.timezone.utc),
            "last_updated": dt.datetime(2024, 5, 1, tzinfo=dt.timezone.utc),
        }
    )

    r = client.get("/api/user-challenges/me", headers=auth(ALICE))

    assert r.status_code == 200
    assert r.json()[0]["progress"] == 45


def test_list_mine_only_returns_callers_enrollments(client, challenge_id):
    client.post(f"/api/challenges/join/{challenge_id}", headers=auth(ALICE))
    client.post(f"/api/challenges/join/{challenge_id}", headers=auth(BOB))

    mine = client.get("/api/user-challenges/me", headers=auth(BOB)).json()

    assert [uc["user_id"] for uc in mine] == [BOB]
    assert _participants(client, challenge_id) == 2
