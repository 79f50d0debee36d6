# ============================================================
# Tests : tests/test_routes_readings.py
# Objet  : Parcours HTTP d'une lecture et enveloppes d'erreur.
# ============================================================
"""
Tests des routes `/readings` et `/cards`.

Ce module rejoue une conversation complète via l'API et vérifie les codes d'erreur:
404 session inconnue, 409 action hors étape, 422 entrée invalide, 502 catalogue indisponible.
"""

from __future__ import annotations

from unittest.mock import patch

from fastapi.testclient import TestClient

from arcana.api import routes_readings
from arcana.app.main import app
from arcana.core.http_constants import (
    HTTP_BAD_GATEWAY,
    HTTP_CONFLICT,
    HTTP_CREATED,
    HTTP_NOT_FOUND,
    HTTP_OK,
    HTTP_UNPROCESSABLE_ENTITY,
)
from arcana.domain.reading import BIRTH_PROMPT
from tests.fakes import DownCatalog

client = TestClient(app)

BIRTH = {"date": "1990-12-05", "time": "14:30", "location": "Paris"}
SPREAD = 3
MAX_DRAW = 10


def _start() -> str:
    r = client.post("/readings")
    assert r.status_code == HTTP_CREATED
    return r.json()["sessionId"]


def test_reading_conversation_over_http():
    """Teste le parcours HTTP complet jusqu'aux questions de clarification."""
    r = client.post("/readings")
    assert r.status_code == HTTP_CREATED
    assert r.json()["step"] == "birthdate"
    assert r.json()["message"] == BIRTH_PROMPT
    sid = r.json()["sessionId"]

    r = client.post(f"/readings/{sid}/birth", json=BIRTH)
    assert r.status_code == HTTP_OK
    assert r.json()["step"] == "initial"

    r = client.post(f"/readings/{sid}/messages", json={"text": "I feel lost in my career."})
    assert r.status_code == HTTP_OK
    body = r.json()
    assert body["step"] == "cards"
    assert body["energy"]["primarySign"]
    assert 0.0 <= body["depth"]["depth"] <= 1.0
    assert body["energyUpdate"]["message"].endswith("%")

    r = client.post(f"/readings/{sid}/cards")
    assert r.status_code == HTTP_OK
    assert r.json()["step"] == "deeper"
    assert len(r.json()["cards"]) == SPREAD

    r = client.post(f"/readings/{sid}/messages", json={"text": "I want more freedom."})
    assert r.json()["step"] == "final"

    r = client.post(f"/readings/{sid}/messages", json={"text": "I will decide this month."})
    assert r.json()["step"] == "clarifying"
    final_reading = r.json()["message"]

    r = client.post(f"/readings/{sid}/messages", json={"text": "How do I start?"})
    assert r.json()["step"] == "clarifying"
    assert r.json()["message"].startswith("Practically speaking")

    r = client.get(f"/readings/{sid}")
    assert r.status_code == HTTP_OK
    session = r.json()
    assert session["step"] == "clarifying"
    assert session["finalReading"] == final_reading
    assert session["astro"]["sunSign"] == "Sagittarius"
    assert len(session["responses"]) == 4  # noqa: PLR2004


def test_unknown_session_is_404():
    """Teste l'enveloppe 404 pour une session inconnue."""
    r = client.get("/readings/does-not-exist")
    assert r.status_code == HTTP_NOT_FOUND
    assert r.json()["code"] == "NOT_FOUND"
    r = client.post("/readings/does-not-exist/messages", json={"text": "hello"})
    assert r.status_code == HTTP_NOT_FOUND


def test_out_of_step_action_is_409():
    """Teste l'enveloppe 409 STEP_CONFLICT pour une action hors étape."""
    sid = _start()
    r = client.post(f"/readings/{sid}/cards", headers={"X-Request-ID": "trace-42"})
    assert r.status_code == HTTP_CONFLICT
    body = r.json()
    assert body["code"] == "STEP_CONFLICT"
    assert body["trace_id"] == "trace-42"
    assert body["details"] == {"field": "step"}


def test_invalid_birth_is_422():
    """Teste qu'une date de naissance impossible produit 422 INVALID_INPUT."""
    sid = _start()
    r = client.post(f"/readings/{sid}/birth", json={**BIRTH, "date": "1990-02-30"})
    assert r.status_code == HTTP_UNPROCESSABLE_ENTITY
    assert r.json()["code"] == "INVALID_INPUT"
    assert client.get(f"/readings/{sid}").json()["step"] == "birthdate"


def test_empty_message_is_422():
    """Teste qu'un message vide est rejeté par la validation de requête."""
    sid = _start()
    client.post(f"/readings/{sid}/birth", json=BIRTH)
    r = client.post(f"/readings/{sid}/messages", json={"text": ""})
    assert r.status_code == HTTP_UNPROCESSABLE_ENTITY
    assert r.json()["code"] == "VALIDATION_ERROR"


def test_catalog_outage_is_502():
    """Teste l'enveloppe 502 quand le catalogue est indisponible; la session reste à `cards`."""
    sid = _start()
    client.post(f"/readings/{sid}/birth", json=BIRTH)
    client.post(f"/readings/{sid}/messages", json={"text": "I feel lost."})
    with patch.object(routes_readings.service, "catalog", DownCatalog()):
        r = client.post(f"/readings/{sid}/cards")
    assert r.status_code == HTTP_BAD_GATEWAY
    assert r.json()["code"] == "BAD_GATEWAY"
    assert r.json()["details"] == {"service": "tarot_api"}
    assert client.get(f"/readings/{sid}").json()["step"] == "cards"


def test_cards_catalog_routes():
    """Teste la liste des cartes et le tirage borné."""
    r = client.get("/cards")
    assert r.status_code == HTTP_OK
    assert all("name" in card and "suit" in card for card in r.json())

    r = client.get("/cards/random", params={"n": SPREAD})
    assert r.status_code == HTTP_OK
    assert len({card["name"] for card in r.json()}) == SPREAD

    r = client.get("/cards/random", params={"n": MAX_DRAW + 1})
    assert r.status_code == HTTP_UNPROCESSABLE_ENTITY
