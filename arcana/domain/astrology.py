"""Dérivation du thème « évolutif » à partir des données de naissance.

Ce module ne fait aucun calcul d'éphémérides : les signes sont obtenus par une arithmétique
symbolique volontairement simple et reproductible.

- Soleil: table des intervalles mois/jour classiques.
- Lune: `ZODIAC_SIGNS[heure % 12]`.
- Ascendant: `ZODIAC_SIGNS[(minute + len(lieu)) % 12]`.
- Nœuds, thème, mission, leçons, schémas karmiques: tables indexées par le signe solaire.
- Transits: dépendent du mois courant (date d'appel), jamais mis en cache.
"""

from __future__ import annotations

import re
from datetime import date, datetime

import structlog

from arcana.domain.errors import InvalidInputError
from arcana.domain.lexicon import (
    CURRENT_LESSONS,
    CURRENT_LESSONS_FALLBACK,
    DEFAULT_SIGN,
    EVOLUTIONARY_THEME_FALLBACK,
    EVOLUTIONARY_THEMES,
    GALACTIC_ALIGNMENTS,
    GALACTIC_CENTER_DEGREE,
    KARMATIC_PATTERNS,
    KARMATIC_PATTERNS_FALLBACK,
    NORTH_NODE_FALLBACK,
    NORTH_NODES,
    SOUL_PURPOSE_FALLBACK,
    SOUL_PURPOSES,
    SOUTH_NODE_FALLBACK,
    SOUTH_NODES,
    SQUARE_SIGNS,
    SUN_SIGN_FALLBACK,
    SUN_SIGN_RANGES,
    SUPPORTIVE_SIGNS,
    TRANSIT_JUPITER,
    TRANSIT_PLUTO,
    TRANSITS_ALWAYS,
    ZODIAC_SIGNS,
)
from arcana.domain.models import AstrologyData, BirthData

log = structlog.get_logger(__name__)

_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::\d{2})?\s*$")


def parse_birth_date(value: str) -> date:
    """Parse une date ISO `YYYY-MM-DD`.

    Raises:
        InvalidInputError: si la date est absente, mal formée ou impossible.
    """
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, TypeError, ValueError) as err:
        raise InvalidInputError("date", value, f"invalid birth date: {value!r}") from err


def parse_birth_time(value: str) -> tuple[int, int]:
    """Parse une heure `HH:MM` (secondes tolérées) et retourne (heure, minute).

    Raises:
        InvalidInputError: si le format est invalide ou hors bornes (0-23, 0-59).
    """
    match = _TIME_RE.match(value) if isinstance(value, str) else None
    if not match:
        raise InvalidInputError("time", value, f"invalid birth time: {value!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:  # noqa: PLR2004
        raise InvalidInputError("time", value, f"birth time out of range: {value!r}")
    return hour, minute


def calculate_sun_sign(month: int, day: int) -> str:
    """Signe solaire selon les intervalles mois/jour (bornes incluses)."""
    for sign, (start_month, start_day), (end_month, end_day) in SUN_SIGN_RANGES:
        if (month == start_month and day >= start_day) or (month == end_month and day <= end_day):
            return sign
    return SUN_SIGN_FALLBACK


def calculate_moon_sign(hour: int) -> str:
    """Signe lunaire symbolique: heure de naissance modulo 12."""
    return ZODIAC_SIGNS[hour % 12]


def calculate_rising_sign(minute: int, location: str) -> str:
    """Ascendant symbolique: (minute + longueur du lieu) modulo 12."""
    return ZODIAC_SIGNS[(minute + len(location)) % 12]


def calculate_galactic_alignment(sun_sign: str) -> str:
    """Relation du signe solaire au Centre Galactique (27° Sagittaire)."""
    if sun_sign == DEFAULT_SIGN:
        return GALACTIC_ALIGNMENTS["direct"]
    if sun_sign == "Gemini":
        return GALACTIC_ALIGNMENTS["opposition"]
    if sun_sign in SQUARE_SIGNS:
        return GALACTIC_ALIGNMENTS["square"]
    if sun_sign in SUPPORTIVE_SIGNS:
        return GALACTIC_ALIGNMENTS["supportive"]
    return GALACTIC_ALIGNMENTS["unique"]


def get_current_transits(today: date | None = None) -> list[str]:
    """Météo cosmique du moment, fonction du mois courant.

    - novembre à février: transit de Pluton
    - mars à mai: transit de Jupiter
    - toujours: deux lignes constantes
    """
    month = (today or date.today()).month - 1
    transits: list[str] = []
    if month >= 10 or month <= 1:  # noqa: PLR2004
        transits.append(TRANSIT_PLUTO)
    if 2 <= month <= 4:  # noqa: PLR2004
        transits.append(TRANSIT_JUPITER)
    transits.extend(TRANSITS_ALWAYS)
    return transits


def calculate_evolutionary_astrology(birth: BirthData, today: date | None = None) -> AstrologyData:
    """
    Calcule le thème évolutif complet.

    Paramètres:
    - birth: `BirthData` (date ISO, heure HH:MM, lieu libre).
    - today: date de référence des transits (par défaut la date du jour, à l'appel).

    Raises:
        InvalidInputError: date ou heure mal formée.
    """
    birth_date = parse_birth_date(birth.date)
    hour, minute = parse_birth_time(birth.time)

    sun_sign = calculate_sun_sign(birth_date.month, birth_date.day)
    astro = AstrologyData(
        sun_sign=sun_sign,
        moon_sign=calculate_moon_sign(hour),
        rising_sign=calculate_rising_sign(minute, birth.location),
        north_node=NORTH_NODES.get(sun_sign, NORTH_NODE_FALLBACK),
        south_node=SOUTH_NODES.get(sun_sign, SOUTH_NODE_FALLBACK),
        galactic_alignment=calculate_galactic_alignment(sun_sign),
        current_transits=get_current_transits(today),
        evolutionary_theme=EVOLUTIONARY_THEMES.get(sun_sign, EVOLUTIONARY_THEME_FALLBACK),
        soul_purpose=SOUL_PURPOSES.get(sun_sign, SOUL_PURPOSE_FALLBACK),
        current_lessons=list(CURRENT_LESSONS.get(sun_sign, CURRENT_LESSONS_FALLBACK)),
        karmatic_patterns=list(KARMATIC_PATTERNS.get(sun_sign, KARMATIC_PATTERNS_FALLBACK)),
    )
    log.debug(
        "birth_chart_derived",
        sun=astro.sun_sign,
        moon=astro.moon_sign,
        rising=astro.rising_sign,
    )
    return astro


def generate_astrology_insight(astro: AstrologyData) -> str:
    """Rédige la synthèse longue du thème évolutif (texte gabarit)."""
    theme_head = astro.evolutionary_theme.split(" - ")[0].lower()
    center = (
        "directly downloading"
        if "Direct" in astro.galactic_alignment
        else "working through you to"
    )
    path = " and ".join(astro.current_lessons[:2]).lower()
    lesson = astro.current_lessons[0].lower() if astro.current_lessons else "self-trust"
    pattern = astro.karmatic_patterns[0] if astro.karmatic_patterns else "Old programming"
    return f"""
Your cosmic blueprint is absolutely wild... let me break down what the universe downloaded about your soul's journey:

**Your Galactic Signature:**
Sun in {astro.sun_sign}, Moon in {astro.moon_sign}, Rising {astro.rising_sign} - this combo is giving {astro.evolutionary_theme.lower()}.

**Soul Mission Status:**
Your North Node in {astro.north_node} is literally your soul's GPS coordinates for this lifetime. You came here to {astro.soul_purpose.lower()}.

**Galactic Center Connection:**
{astro.galactic_alignment} - the cosmic center at {GALACTIC_CENTER_DEGREE}° Sagittarius is {center} upgrade human consciousness.

**Current Cosmic Weather:**
{". ".join(astro.current_transits)}. The universe is literally serving up the exact frequencies you need for your next evolution.

**What Your Responses Revealed:**
Your words are showing {lesson} energy is activated. The way you're processing your experience tells me you're in a major {theme_head} phase.

**Karmic Patterns Ready for Upgrade:**
{pattern} - this old programming is literally asking to be rewritten. Your soul is done with this frequency.

**The Real Tea:**
Your birth chart isn't just random cosmic placement - it's your soul's chosen curriculum for this incarnation. Every challenge, every gift, every weird synchronicity is part of your evolutionary design.

The Galactic Center activation means you're receiving direct downloads from the cosmic source. Trust those random insights, those sudden knowings, those moments when you just *know* something without knowing how you know it.

Your current life situation is literally your soul's chosen classroom. The universe isn't happening TO you - you're co-creating WITH it based on your pre-birth soul contracts.

The path forward: {path}. Your higher self already knows the way - your job is to trust the process and follow the breadcrumbs of synchronicity.
""".strip()  # noqa: E501
