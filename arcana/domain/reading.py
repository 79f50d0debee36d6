"""Contrôleur de conversation d'une lecture de tarot.

Étapes (dans l'ordre):
- birthdate: attente des données de naissance (`submit_birth`)
- initial: première confidence de l'utilisateur (`respond`)
- cards: attente du tirage (`draw_cards`)
- deeper: réaction au tirage, suivie d'une question de relance (`respond`)
- final: dernière réponse, puis lecture finale (`respond`)
- clarifying: questions de clarification sur la lecture (`respond`, répétable)

Chaque réponse relance l'analyse énergétique, la mesure de profondeur et reconstruit l'analyse
approfondie sur l'historique complet.
"""

from __future__ import annotations

import random
import threading
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Literal

import structlog

from arcana.domain.astrology import calculate_evolutionary_astrology
from arcana.domain.deep_analysis import generate_energy_update, perform_deep_analysis
from arcana.domain.energy import analyze_text_energy
from arcana.domain.errors import InvalidInputError
from arcana.domain.models import (
    AstrologyData,
    BirthData,
    DeepAnalysis,
    EnergySignature,
    EnergyUpdate,
    ResponseDepth,
    TarotCard,
)
from arcana.domain.narrative import (
    SPREAD_SIZE,
    build_narrative_prompt,
    generate_card_analysis,
    generate_card_invitation,
    generate_clarifying_response,
    generate_follow_up_question,
    generate_reading,
    generate_welcome_message,
)
from arcana.domain.response_depth import analyze_response_depth

log = structlog.get_logger(__name__)

ReadingStep = Literal["birthdate", "initial", "cards", "deeper", "final", "clarifying"]

BIRTH_PROMPT = (
    "Before we begin, share your birth date, birth time and birthplace so I can tune into your "
    "cosmic blueprint."
)
NEUTRAL_MESSAGE = (
    "Let's take a breath together. Tell me a little more about what you're feeling right now."
)


@dataclass
class ReadingSession:
    """État mutable d'une conversation (une par utilisateur)."""

    id: str
    step: ReadingStep = "birthdate"
    birth: BirthData | None = None
    astro: AstrologyData | None = None
    responses: list[str] = field(default_factory=list)
    cards: list[TarotCard] = field(default_factory=list)
    analysis: DeepAnalysis | None = None
    final_reading: str = ""


@dataclass(frozen=True)
class TurnResult:
    """Réponse d'un tour: message du lecteur et métriques associées."""

    session_id: str
    step: ReadingStep
    message: str
    energy: EnergySignature | None = None
    depth: ResponseDepth | None = None
    analysis: DeepAnalysis | None = None
    energy_update: EnergyUpdate | None = None
    cards: list[TarotCard] = field(default_factory=list)


class InMemorySessionRepo:
    """
    Dépôt de sessions en mémoire (utilisé pour dev/tests).

    Stocke les sessions dans un dict local, non persistant.
    """

    def __init__(self) -> None:
        """Initialise une base mémoire vide."""
        self._db: dict[str, ReadingSession] = {}

    def save(self, session: ReadingSession) -> ReadingSession:
        """Enregistre/écrase une session et la renvoie."""
        self._db[session.id] = session
        return session

    def get(self, session_id: str) -> ReadingSession | None:
        """Retourne une session par id, ou None si elle est absente."""
        return self._db.get(session_id)

    def __len__(self) -> int:
        return len(self._db)


class ReadingService:
    """Service métier pilotant les étapes d'une lecture.

    Responsabilités:
    - Valider que chaque action correspond à l'étape courante.
    - Orchestrer thème évolutif, tirage, analyses et textes.
    - Déléguer la lecture finale au narrateur s'il est configuré (sinon gabarit).
    - Sérialiser les actions d'une même session (un verrou par session, aucun verrou global).
    """

    def __init__(
        self,
        catalog,
        sessions: InMemorySessionRepo | None = None,
        narrator=None,
        today: Callable[[], date] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialise le service avec ses dépendances.

        Paramètres:
        - catalog: `CardCatalog` utilisé pour le tirage.
        - sessions: dépôt de sessions (mémoire par défaut).
        - narrator: `Narrator` optionnel pour la lecture finale.
        - today: fournisseur de la date courante (transits).
        - rng: générateur aléatoire des questions d'ouverture.
        """
        self.catalog = catalog
        self.sessions = sessions or InMemorySessionRepo()
        self.narrator = narrator
        self._today = today or date.today
        self._rng = rng
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    # -------------------- Accès --------------------

    def get(self, session_id: str) -> ReadingSession:
        """Charge une session.

        Raises:
            KeyError: session inconnue.
        """
        session = self.sessions.get(session_id)
        if session is None:
            raise KeyError(session_id)
        return session

    def _session_lock(self, session_id: str) -> threading.Lock:
        """Verrou propre à une session; les autres sessions ne sont jamais bloquées.

        Raises:
            KeyError: session inconnue.
        """
        with self._locks_guard:
            lock = self._locks.get(session_id)
            if lock is None:
                self.get(session_id)
                lock = self._locks[session_id] = threading.Lock()
            return lock

    @staticmethod
    def _expect(session: ReadingSession, *steps: ReadingStep) -> None:
        if session.step not in steps:
            raise InvalidInputError(
                "step", session.step, f"action not allowed at step {session.step!r}"
            )

    # -------------------- Actions --------------------

    def start(self) -> TurnResult:
        session = self.sessions.save(ReadingSession(id=str(uuid.uuid4())))
        log.info("reading_started", session_id=session.id)
        return TurnResult(session_id=session.id, step=session.step, message=BIRTH_PROMPT)

    def submit_birth(self, session_id: str, birth: BirthData) -> TurnResult:
        """Calcule le thème évolutif et passe à l'étape `initial`.

        Raises:
            KeyError: session inconnue.
            InvalidInputError: mauvaise étape, date ou heure mal formée.
        """
        with self._session_lock(session_id):
            session = self.get(session_id)
            self._expect(session, "birthdate")
            astro = calculate_evolutionary_astrology(birth, self._today())
            session.birth = birth
            session.astro = astro
            session.step = "initial"
            message = generate_welcome_message(astro, self._rng)
        log.info("reading_birth_submitted", session_id=session_id, sun=astro.sun_sign)
        return TurnResult(session_id=session_id, step=session.step, message=message)

    def draw_cards(self, session_id: str) -> TurnResult:
        """Tire trois cartes et passe à l'étape `deeper`.

        Raises:
            KeyError: session inconnue.
            InvalidInputError: mauvaise étape.
            ExternalServiceError: catalogue indisponible (la session reste à `cards`).
        """
        with self._session_lock(session_id):
            session = self.get(session_id)
            self._expect(session, "cards")
            cards = self.catalog.get_random_cards(SPREAD_SIZE)
            session.cards = list(cards)
            session.analysis = perform_deep_analysis(
                session.responses, session.birth, session.astro, session.cards
            )
            session.step = "deeper"
            message = self._safely(
                lambda: generate_card_analysis(session.cards, session.astro, session.analysis),
                session.id,
            )
        log.info(
            "reading_cards_drawn",
            session_id=session_id,
            catalog=getattr(self.catalog, "name", "catalog"),
            cards=[c.name for c in cards],
        )
        return TurnResult(
            session_id=session_id,
            step=session.step,
            message=message,
            analysis=session.analysis,
            energy_update=generate_energy_update(session.analysis),
            cards=list(session.cards),
        )

    def respond(self, session_id: str, text: str) -> TurnResult:
        """Enregistre une réponse utilisateur et produit la réplique de l'étape courante.

        Raises:
            KeyError: session inconnue.
            InvalidInputError: texte vide ou action impossible à l'étape courante.
        """
        if not text or not text.strip():
            raise InvalidInputError("text", text, "message must not be empty")
        with self._session_lock(session_id):
            session = self.get(session_id)
            self._expect(session, "initial", "deeper", "final", "clarifying")
            session.responses.append(text)
            energy = analyze_text_energy(text)
            depth = analyze_response_depth(text)
            session.analysis = perform_deep_analysis(
                session.responses, session.birth, session.astro, session.cards
            )
            step = session.step
            message = self._safely(lambda: self._reply(session, text, energy, depth), session.id)
            session.step = _NEXT_STEP[step]
        log.info(
            "reading_turn",
            session_id=session_id,
            step=step,
            next_step=session.step,
            responses=len(session.responses),
            sign=energy.primary_sign,
        )
        return TurnResult(
            session_id=session_id,
            step=session.step,
            message=message,
            energy=energy,
            depth=depth,
            analysis=session.analysis,
            energy_update=generate_energy_update(session.analysis),
            cards=list(session.cards),
        )

    # -------------------- Répliques --------------------

    def _reply(
        self, session: ReadingSession, text: str, energy: EnergySignature, depth: ResponseDepth
    ) -> str:
        if session.step == "initial":
            return generate_card_invitation(energy, depth, session.astro)
        if session.step == "deeper":
            follow_up = generate_follow_up_question(session.cards, session.responses)
            if session.astro is None:
                return follow_up
            node = session.astro.north_node.split(" - ")[0]
            return f"Your {node} North Node is asking: {follow_up}"
        if session.step == "final":
            session.final_reading = self._final_reading(session)
            return session.final_reading
        return generate_clarifying_response(text, session.cards)

    def _final_reading(self, session: ReadingSession) -> str:
        if self.narrator is not None:
            messages = build_narrative_prompt(
                session.analysis, session.astro, session.cards, session.responses
            )
            return self.narrator.narrate_or_fallback(messages)
        return generate_reading(
            session.cards, session.responses, session.birth, session.astro, session.analysis
        )

    @staticmethod
    def _safely(build: Callable[[], str], session_id: str) -> str:
        """Exécute la construction d'une réplique; tout échec donne le message neutre."""
        try:
            return build()
        except Exception:  # noqa: BLE001 - la conversation continue quoi qu'il arrive
            log.exception("reading_turn_degraded", session_id=session_id)
            return NEUTRAL_MESSAGE


_NEXT_STEP: dict[str, ReadingStep] = {
    "initial": "cards",
    "deeper": "final",
    "final": "clarifying",
    "clarifying": "clarifying",
}
