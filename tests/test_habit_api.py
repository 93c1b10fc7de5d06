from datetime import date, timedelta

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from Data.database import init_db
from Data.models import HabitCompletion
from services import habit_service, identity_service

from conftest import ALICE, BOB


def new_habit(client, habit_id, headers=ALICE, name="Meditar"):
    return client.post("/habits", json={"id": habit_id, "name": name}, headers=headers)


def toggle(client, habit_id, day, headers=ALICE):
    return client.post(f"/habits/{habit_id}/toggle", json={"date": day}, headers=headers)


def test_create_and_list(client):
    resp = new_habit(client, "h1")
    assert resp.status_code == 201
    habits = client.get("/habits", headers=ALICE).json()
    assert habits == [{
        "id": "h1",
        "user_email": "alice@example.com",
        "name": "Meditar",
        "color": "brand-purple",
        "completed_dates": [],
        "streak": 0,
    }]


def test_toggle_twice_restores_state(client):
    new_habit(client, "h1")
    day = "2026-10-14"

    resp = toggle(client, "h1", day)
    assert resp.json() == {"success": True, "affected": 1, "completed": True}
    assert client.get("/habits", headers=ALICE).json()[0]["completed_dates"] == [day]

    resp = toggle(client, "h1", day)
    assert resp.json()["completed"] is False
    assert client.get("/habits", headers=ALICE).json()[0]["completed_dates"] == []


def test_list_reports_streak(client):
    new_habit(client, "h1")
    today = date.today()
    for offset in (0, 1, 2, 5):
        toggle(client, "h1", (today - timedelta(days=offset)).isoformat())
    habit = client.get("/habits", headers=ALICE).json()[0]
    assert habit["streak"] == 3
    assert len(habit["completed_dates"]) == 4


def test_toggle_other_owners_habit_is_noop(client, db):
    new_habit(client, "h1")
    resp = toggle(client, "h1", "2026-10-14", headers=BOB)
    assert resp.json() == {"success": True, "affected": 0, "completed": None}
    assert db.query(HabitCompletion).count() == 0


def test_delete_removes_completions(client, db):
    new_habit(client, "h1")
    new_habit(client, "h2", name="Ler")
    new_habit(client, "b1", headers=BOB)
    for day in ("2026-10-13", "2026-10-14"):
        toggle(client, "h1", day)
        toggle(client, "h2", day)
        toggle(client, "b1", day, headers=BOB)

    resp = client.delete("/habits/h1", headers=ALICE)
    assert resp.json() == {"success": True, "affected": 1}

    assert db.query(HabitCompletion).filter(HabitCompletion.habit_id == "h1").count() == 0
    assert db.query(HabitCompletion).filter(HabitCompletion.habit_id == "h2").count() == 2
    assert db.query(HabitCompletion).filter(HabitCompletion.habit_id == "b1").count() == 2
    assert [h["id"] for h in client.get("/habits", headers=ALICE).json()] == ["h2"]


def test_delete_by_other_owner_is_noop(client):
    new_habit(client, "h1")
    toggle(client, "h1", "2026-10-14")
    resp = client.delete("/habits/h1", headers=BOB)
    assert resp.json()["affected"] == 0
    assert client.get("/habits", headers=ALICE).json()[0]["completed_dates"] == ["2026-10-14"]


def test_completion_notifies(client):
    new_habit(client, "h1")
    toggle(client, "h1", "2026-10-14")
    titles = [n["title"] for n in client.get("/notifications", headers=ALICE).json()]
    assert sorted(titles) == ["Hábito Concluído", "Novo Hábito"]


def test_week_endpoint(client):
    dates = client.get("/habits/week").json()["dates"]
    assert len(dates) == 7
    assert date.fromisoformat(dates[0]).weekday() == 0
    assert date.today().isoformat() in dates


def test_toggle_service_round_trip(db):
    identity_service.resolve_user(db, "alice@example.com")
    habit_service.create_habit(db, "alice@example.com", "Correr", habit_id="run")
    day = date(2026, 10, 14)
    assert habit_service.toggle_completion(db, "run", "alice@example.com", day) is True
    assert habit_service.toggle_completion(db, "run", "alice@example.com", day) is False
    assert habit_service.toggle_completion(db, "missing", "alice@example.com", day) is None


def test_blank_name_is_rejected(client):
    assert new_habit(client, "h1", name="   ").status_code == 422
    assert client.get("/habits", headers=ALICE).json() == []


def test_concurrent_toggle_leaves_no_mark(tmp_path, monkeypatch):
    # Two sessions on one file so each has its own connection.
    engine = create_engine(f"sqlite:///{tmp_path / 'planner.db'}")
    init_db(bind=engine)
    Session = sessionmaker(bind=engine)
    email = "alice@example.com"
    day = date(2026, 10, 14)

    with Session() as setup:
        identity_service.resolve_user(setup, email)
        habit_service.create_habit(setup, email, "Correr", habit_id="run")

    original = habit_service._remove_completion
    calls = []

    def other_toggle_wins(db, habit_id, user_email, when):
        calls.append(when)
        if len(calls) == 1:
            with Session() as other:
                other.add(HabitCompletion(habit_id=habit_id, user_email=user_email, date=when))
                other.commit()
            return 0
        return original(db, habit_id, user_email, when)

    monkeypatch.setattr(habit_service, "_remove_completion", other_toggle_wins)

    with Session() as db:
        assert habit_service.toggle_completion(db, "run", email, day) is False

    assert len(calls) == 2
    with Session() as check:
        assert check.query(HabitCompletion).count() == 0
    engine.dispose()
