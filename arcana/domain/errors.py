"""Taxonomie des erreurs du domaine.

- `InvalidInputError`: entrée mal formée (date/heure de naissance) rejetée explicitement.
- `ExternalServiceError`: collaborateur externe (catalogue de cartes, génération de texte)
  injoignable ou réponse inattendue.
- `EmptyInputWarning`: historique de réponses vide; géré par des valeurs de repli, jamais levé.
"""

from __future__ import annotations


class ArcanaError(Exception):
    """Erreur de base du moteur de lecture."""


class InvalidInputError(ArcanaError, ValueError):
    """Entrée utilisateur mal formée.

    Attributs:
    - field: nom du champ fautif (ex: "date", "time").
    - value: valeur reçue.
    """

    def __init__(self, field: str, value: object, message: str | None = None) -> None:
        """Construit l'erreur avec le champ et la valeur fautifs."""
        self.field = field
        self.value = value
        super().__init__(message or f"invalid {field}: {value!r}")


class ExternalServiceError(ArcanaError):
    """Service tiers en échec (HTTP non-2xx, corps invalide, tentatives épuisées)."""

    def __init__(self, service: str, reason: str) -> None:
        """Construit l'erreur avec le nom du service et la raison."""
        self.service = service
        self.reason = reason
        super().__init__(f"{service}: {reason}")


class EmptyInputWarning(UserWarning):
    """Historique de réponses vide transmis à l'analyse approfondie."""
