import asyncio
from types import SimpleNamespace

import pytest

import config
from services import insight_service

from conftest import ALICE


class FakeClient:
    reply = "Você está indo muito bem!"
    delay = 0.0
    fail = False

    def __init__(self, host=None, timeout=None):
        self.host = host

    async def list(self):
        return SimpleNamespace(models=[SimpleNamespace(model="llama3.2")])

    async def chat(self, model, messages):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise ConnectionError("ollama is down")
        return {"message": {"content": f"  {self.reply}  "}}


@pytest.fixture
def fake_ollama(monkeypatch):
    monkeypatch.setattr(insight_service, "AsyncClient", FakeClient)
    monkeypatch.setattr(FakeClient, "delay", 0.0)
    monkeypatch.setattr(FakeClient, "fail", False)
    return FakeClient


def seed(client):
    client.post("/login", json={"email": "alice@example.com"})
    client.post("/tasks", json={"id": "t1", "title": "A", "date": "2026-10-14T09:00:00Z"}, headers=ALICE)
    client.post("/tasks", json={"id": "t2", "title": "B", "date": "2026-10-13T09:00:00Z"}, headers=ALICE)
    client.patch("/tasks/t2", json={"completed": True}, headers=ALICE)
    client.post("/habits", json={"id": "h1", "name": "Ler"}, headers=ALICE)
    client.post("/habits/h1/toggle", json={"date": "2026-10-14"}, headers=ALICE)
    client.post("/mood", json={"id": "m1", "mood": "sad", "date": "2026-10-13T08:00:00Z"}, headers=ALICE)
    client.post("/mood", json={"id": "m2", "mood": "happy", "date": "2026-10-14T08:00:00Z"}, headers=ALICE)
    for entry_id, amount, kind, category in (
        ("f1", 100, "income", "salary"),
        ("f2", 40, "expense", "food"),
        ("f3", 10, "expense", "food"),
    ):
        client.post(
            "/finance",
            json={"id": entry_id, "description": entry_id, "amount": amount,
                  "type": kind, "category": category, "date": "2026-10-14T12:00:00Z"},
            headers=ALICE,
        )


def test_dashboard(client):
    seed(client)
    data = client.get("/dashboard", headers=ALICE).json()
    assert data["user_name"] == "alice"
    assert data["completed_tasks"] == 1
    assert data["habits"] == 1
    assert data["mood"] == "Ótimo"
    assert data["balance"] == 50
    assert data["mood_trend"] == [30, 90]
    assert [t["id"] for t in data["pending_tasks"]] == ["t1"]
    assert len(data["recent_finance"]) == 2


def test_dashboard_without_data(client):
    data = client.get("/dashboard", headers=ALICE).json()
    assert data["mood"] == "Sem dados"
    assert data["balance"] == 0
    assert data["mood_trend"] == []


def test_reports(client):
    seed(client)
    data = client.get("/reports", headers=ALICE).json()
    assert data["expenses_by_category"] == [{"name": "Food", "value": 50}]
    assert data["mood_levels"] == [
        {"date": "13/10", "level": 2},
        {"date": "14/10", "level": 5},
    ]
    assert data["habit_completions"] == [{"name": "Ler", "completions": 1}]


def test_insight_success(client, fake_ollama):
    seed(client)
    resp = client.get("/dashboard/insight", headers=ALICE)
    assert resp.status_code == 200
    assert resp.json() == {"insight": "Você está indo muito bem!"}


def test_insight_falls_back_on_error(client, fake_ollama):
    fake_ollama.fail = True
    resp = client.get("/dashboard/insight", headers=ALICE)
    assert resp.status_code == 200
    assert resp.json() == {"insight": insight_service.FALLBACK_INSIGHT}


def test_insight_falls_back_on_timeout(fake_ollama, monkeypatch):
    monkeypatch.setattr(config, "INSIGHT_TIMEOUT", 0.05)
    fake_ollama.delay = 1.0
    text = asyncio.run(insight_service.get_insight({"tasks": [], "user_name": "Ana"}))
    assert text == insight_service.FALLBACK_INSIGHT


def test_insight_falls_back_on_empty_reply(fake_ollama, monkeypatch):
    monkeypatch.setattr(fake_ollama, "reply", "")
    text = asyncio.run(insight_service.get_insight({}))
    assert text == insight_service.FALLBACK_INSIGHT


def test_build_prompt():
    prompt = insight_service.build_prompt({
        "user_name": "Ana",
        "tasks": [{"completed": True}, {"completed": False}, {"completed": False}],
        "habits": [{}],
        "mood": [{"mood": "calm"}, {"mood": "sad"}],
        "finance": [{"type": "expense", "amount": 20.0}],
    })
    assert 'usuário "Ana"' in prompt
    assert "Tarefas Pendentes: 2" in prompt
    assert "Tarefas Concluídas: 1" in prompt
    assert "Hábitos Ativos: 1" in prompt
    assert "Último Humor: calm" in prompt
    assert "Saldo Financeiro: R$ -20.00" in prompt


def test_build_prompt_without_mood():
    assert "Último Humor: Não registrado" in insight_service.build_prompt({})
