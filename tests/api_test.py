from pitwall.core.enums import SessionKind
from tests.conftest import SEASON
from tests.parser_test import RACE_HTML


def _as(user):
    return {"X-User-Id": str(user.id)}


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_points_endpoint(client):
    r = client.get("/points?position=9&kind=race&distance_pct=40")
    assert r.status_code == 200
    assert r.json()["points"] == 1
    assert client.get("/points?position=DNF&kind=race").json()["points"] == 0


def test_import_then_save_result(client, drivers, users, event):
    admin = users["admin"]
    r = client.post(f"/results/{event.id}/race/import", json={"html": RACE_HTML}, headers=_as(admin))
    assert r.status_code == 200
    preview = r.json()
    assert preview["table_kind"] == "race"
    assert preview["unresolved"] == []

    r = client.put(f"/results/{event.id}/race", json={"entries": preview["entries"]}, headers=_as(admin))
    assert r.status_code == 200
    body = r.json()
    for k in ["season", "drivers", "teams"]:
        assert k in body
    assert body["drivers"][0]["name"] == "Lando Norris"
    assert body["drivers"][0]["points"] == 25

    r = client.get(f"/results/{event.id}/race")
    assert r.status_code == 200
    assert [e["position"] for e in r.json()["entries"]] == ["1", "2", "NC"]

    r = client.get(f"/standings/{SEASON}")
    assert r.status_code == 200
    assert r.json()["drivers"][0]["rank"] == 1


def test_import_without_table_is_422(client, drivers, users, event):
    r = client.post(f"/results/{event.id}/race/import", json={"html": "<p/>"}, headers=_as(users["admin"]))
    assert r.status_code == 422


def test_result_writes_need_game_manager(client, drivers, users, event):
    r = client.put(f"/results/{event.id}/race", json={"entries": []}, headers=_as(users["alice"]))
    assert r.status_code == 403
    r = client.put(f"/results/{event.id}/race", json={"entries": []})
    assert r.status_code == 422  # missing X-User-Id header


def test_round_status_roundtrip(client, users, past_event):
    r = client.get(f"/rounds/{past_event.id}/race/closed")
    assert r.json() == {"closed": True}

    r = client.put(f"/rounds/{past_event.id}/race", json={"status": "open"}, headers=_as(users["admin"]))
    assert r.status_code == 200
    assert r.json()["status"] == "open"
    assert r.json()["closed"] is False

    r = client.delete(f"/rounds/{past_event.id}/race", headers=_as(users["admin"]))
    assert r.json()["status"] is None
    assert r.json()["closed"] is True


def test_unknown_round_is_404(client, users, event):
    r = client.get(f"/rounds/{event.id}/sprint")
    assert r.status_code == 404


def test_bet_flow_and_leaderboard(client, drivers, users, event, past_event):
    alice = users["alice"]
    picks = [drivers["VER"].id, drivers["NOR"].id]
    r = client.put(f"/bets/{event.id}/race", json={"drivers": picks}, headers=_as(alice))
    assert r.status_code == 200
    assert r.json()["drivers"] == picks

    r = client.get(f"/bets/{event.id}/race", headers=_as(alice))
    assert r.status_code == 200

    r = client.put(f"/bets/{past_event.id}/race", json={"drivers": picks}, headers=_as(alice))
    assert r.status_code == 409

    entries = [
        {"driver_id": drivers["VER"].id, "team_id": drivers["VER"].team_id, "position": "1"},
        {"driver_id": drivers["NOR"].id, "team_id": drivers["NOR"].team_id, "position": "2"},
    ]
    r = client.put(f"/results/{event.id}/{SessionKind.race.value}", json={"entries": entries}, headers=_as(users["admin"]))
    assert r.status_code == 200

    r = client.get(f"/leaderboard/{SEASON}")
    assert r.status_code == 200
    body = r.json()
    assert body["count"] == 3
    assert body["entries"][0]["username"] == "alice"
    assert body["entries"][0]["points"] == 18
    assert body["entries"][0]["wins"] == 1


def test_settings_endpoints(client, users):
    r = client.get("/settings")
    assert r.status_code == 200
    assert r.json()["race_points"] == [10, 8, 6, 5, 4, 3, 2, 1]

    bad = {"season": SEASON, "race_points": [], "quali_points": [1], "participation_point": 1}
    r = client.put("/settings", json=bad, headers=_as(users["admin"]))
    assert r.status_code == 422


def test_bonus_endpoints(client, users):
    admin, alice = users["admin"], users["alice"]
    q = {"id": "bq-test", "season": SEASON, "question": "Champion?", "points": 5, "deadline": "2099-01-01T00:00:00Z"}
    r = client.post("/bonus/questions", json=q, headers=_as(admin))
    assert r.status_code == 201

    r = client.put("/bonus/questions/bq-test/answer", json={"answer": "Norris"}, headers=_as(alice))
    assert r.status_code == 200

    r = client.put("/bonus/questions/bq-test/grade", json={"correct_answer": "NORRIS"}, headers=_as(admin))
    assert r.status_code == 200
    assert r.json()["correct_answer"] == "NORRIS"
    assert r.json()["is_graded"] is True

    board = client.get(f"/leaderboard/{SEASON}").json()
    assert board["entries"][0]["username"] == "alice"
    assert board["entries"][0]["points"] == 5

    r = client.put("/bonus/questions/missing/answer", json={"answer": "x"}, headers=_as(alice))
    assert r.status_code == 404


def test_listing_questions_seeds_champion_questions(client):
    r = client.get("/bonus/questions")
    assert r.status_code == 200
    ids = {q["id"] for q in r.json()}
    assert ids == {f"bq-driver-{SEASON}", f"bq-const-{SEASON}"}

    # second read does not duplicate them
    assert len(client.get("/bonus/questions").json()) == 2

    r = client.get("/bonus/questions", params={"season": 2000})
    assert r.json() == []
