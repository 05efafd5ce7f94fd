"""Maîtrises planétaires des signes (classiques et modernes).

Objectif du module
------------------
- Associer chaque signe à son maître selon le régime choisi par l'utilisateur.
- Retrouver le maître de l'Ascendant (dispositeur) parmi les points d'un sujet.

Les tables sont des données: ajouter un régime ou un alias de signe ne demande
aucune modification de la logique.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType
from typing import Literal

import structlog

from chart_insights.domain.models import Point, Subject
from chart_insights.domain.points import point_key

RulershipMode = Literal["classical", "modern"]

ZODIAC_SIGNS = (
    "Aries",
    "Taurus",
    "Gemini",
    "Cancer",
    "Leo",
    "Virgo",
    "Libra",
    "Scorpio",
    "Sagittarius",
    "Capricorn",
    "Aquarius",
    "Pisces",
)

CLASSICAL_RULERS = MappingProxyType(
    {
        "Aries": "Mars",
        "Taurus": "Venus",
        "Gemini": "Mercury",
        "Cancer": "Moon",
        "Leo": "Sun",
        "Virgo": "Mercury",
        "Libra": "Venus",
        "Scorpio": "Mars",
        "Sagittarius": "Jupiter",
        "Capricorn": "Saturn",
        "Aquarius": "Saturn",
        "Pisces": "Jupiter",
    }
)

MODERN_OVERRIDES = MappingProxyType(
    {
        "Scorpio": "Pluto",
        "Aquarius": "Uranus",
        "Pisces": "Neptune",
    }
)

MODERN_RULERS = MappingProxyType({**CLASSICAL_RULERS, **MODERN_OVERRIDES})

RULERS_BY_MODE = MappingProxyType(
    {
        "classical": CLASSICAL_RULERS,
        "modern": MODERN_RULERS,
    }
)

# Noms italiens et abréviations renvoyés par certaines configurations du service.
SIGN_ALIASES = MappingProxyType(
    {
        "Ariete": "Aries",
        "Toro": "Taurus",
        "Gemelli": "Gemini",
        "Cancro": "Cancer",
        "Leone": "Leo",
        "Vergine": "Virgo",
        "Bilancia": "Libra",
        "Scorpione": "Scorpio",
        "Sagittario": "Sagittarius",
        "Capricorno": "Capricorn",
        "Acquario": "Aquarius",
        "Pesci": "Pisces",
        "Ari": "Aries",
        "Tau": "Taurus",
        "Gem": "Gemini",
        "Can": "Cancer",
        "Vir": "Virgo",
        "Lib": "Libra",
        "Sco": "Scorpio",
        "Sag": "Sagittarius",
        "Cap": "Capricorn",
        "Aqu": "Aquarius",
        "Pis": "Pisces",
    }
)

log = structlog.get_logger(__name__)


def normalize_sign(sign: str | None) -> str | None:
    """Retourne le nom anglais canonique d'un signe, ou None s'il est inconnu."""
    if not isinstance(sign, str) or not sign.strip():
        return None
    titled = sign.strip().capitalize()
    if titled in CLASSICAL_RULERS:
        return titled
    return SIGN_ALIASES.get(titled)


def sign_ruler(sign: str | None, mode: str = "classical") -> str | None:
    """Maître du signe selon le régime `mode` ("classical" par défaut).

    Un régime inconnu retombe sur le régime classique; un signe inconnu donne None.
    """
    canonical = normalize_sign(sign)
    if canonical is None:
        return None
    rulers = RULERS_BY_MODE.get(mode, CLASSICAL_RULERS)
    return rulers[canonical]


def rulership_table(mode: str = "classical") -> dict[str, str]:
    """Table complète signe → maître, dans l'ordre du zodiaque."""
    return {sign: sign_ruler(sign, mode) for sign in ZODIAC_SIGNS}


def ascendant_ruler(
    subject: Subject | None,
    mode: str = "classical",
    active_points: Iterable[str] | None = None,
) -> Point | None:
    """Point du sujet qui gouverne le signe de son Ascendant.

    Args:
        subject: Sujet enrichi (points indexés par nom).
        mode: Régime de maîtrise, "classical" ou "modern".
        active_points: Points activés par l'utilisateur; vide ou None = aucun filtre.

    Returns:
        Point | None: None si l'Ascendant manque, si le maître est absent du
        sujet ou s'il est désactivé. L'appelant affiche alors "ruler unknown".
    """
    if subject is None or subject.ascendant is None:
        return None
    ruler_name = sign_ruler(subject.ascendant.sign, mode)
    if ruler_name is None:
        log.debug("ascendant_sign_unrecognized", sign=subject.ascendant.sign)
        return None
    active = {point_key(name) for name in active_points or ()}
    if active and point_key(ruler_name) not in active:
        log.debug("ascendant_ruler_inactive", ruler=ruler_name, mode=mode)
        return None
    return subject.point(ruler_name)
