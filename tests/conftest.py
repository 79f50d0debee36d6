"""Configuration de test pour pytest avec gestion des chemins.

Ce module configure pytest pour résoudre les imports `arcana` en ajoutant la racine du projet au
sys.path, et fournit les jeux de données partagés (tirage, thème, date de référence).
"""

import os
import sys
from datetime import date

import pytest

# Ensure project root is on sys.path so that
# imports like `from arcana...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from arcana.domain.astrology import calculate_evolutionary_astrology  # noqa: E402
from arcana.domain.models import BirthData, TarotCard  # noqa: E402

# Janvier: le transit de Pluton est actif.
REFERENCE_DAY = date(2024, 1, 15)


@pytest.fixture
def birth() -> BirthData:
    """Naissance Sagittaire (Lune Gémeaux, Ascendant Poissons)."""
    return BirthData(date="1990-12-05", time="14:30", location="Paris")


@pytest.fixture
def astro(birth: BirthData):
    return calculate_evolutionary_astrology(birth, REFERENCE_DAY)


@pytest.fixture
def spread() -> list[TarotCard]:
    """Tirage positionnel: fondation, présent, guidance."""
    return [
        TarotCard(
            name="Temperance",
            suit="Major Arcana",
            keywords=["balance", "healing", "moderation"],
            element="Spirit",
        ),
        TarotCard(
            name="The Magician",
            suit="Major Arcana",
            keywords=["manifestation", "creativity", "willpower"],
            element="Spirit",
        ),
        TarotCard(
            name="The Hermit",
            suit="Major Arcana",
            keywords=["introspection", "wisdom", "solitude"],
            element="Spirit",
        ),
    ]
