"""Normalisation des types de carte et résolution du sujet "effectif".

Les libellés de type reçus varient en casse, séparateur (`-`/`_`) et espaces
("Solar-Return", "solar_return", " Solar Return ", "lunar-return", ...).
Ce module les ramène à une valeur canonique et détermine, pour les cartes
doubles, quel sujet est mis en avant dans les highlights.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Literal

from chart_insights.domain.models import Subject

CanonicalChartType = Literal[
    "natal",
    "transit",
    "synastry",
    "composite",
    "solar_return",
    "lunar_return",
    "unknown",
]

NATAL = "natal"
TRANSIT = "transit"
SYNASTRY = "synastry"
COMPOSITE = "composite"
SOLAR_RETURN = "solar_return"
LUNAR_RETURN = "lunar_return"
UNKNOWN = "unknown"

DUAL_CHART_TYPES = frozenset({TRANSIT, SYNASTRY, SOLAR_RETURN, LUNAR_RETURN})
RETURN_CHART_TYPES = frozenset({SOLAR_RETURN, LUNAR_RETURN})

CHART_TYPE_ALIASES = MappingProxyType(
    {
        "natal": NATAL,
        "birth chart": NATAL,
        "radix": NATAL,
        "transit": TRANSIT,
        "transits": TRANSIT,
        "synastry": SYNASTRY,
        "composite": COMPOSITE,
        "solar return": SOLAR_RETURN,
        "solarreturn": SOLAR_RETURN,
        "lunar return": LUNAR_RETURN,
        "lunarreturn": LUNAR_RETURN,
    }
)

# Ordre d'évaluation par mot-clé quand aucun alias exact ne correspond.
# "SingleReturnChart"/"DualReturnChart" (service de calcul) servent aux retours
# solaires comme lunaires: sans type explicite de l'appelant, ils restent "unknown".
_KEYWORD_ORDER: tuple[tuple[str, str], ...] = (
    ("natal", NATAL),
    ("transit", TRANSIT),
    ("synastry", SYNASTRY),
    ("composite", COMPOSITE),
    ("solar return", SOLAR_RETURN),
    ("lunar return", LUNAR_RETURN),
)

_SEPARATORS = re.compile(r"[-_\s]+")


def normalize_chart_type(raw_type: str | None) -> CanonicalChartType:
    """Ramène un libellé de type de carte à sa valeur canonique.

    Retourne "unknown" pour toute entrée non reconnue (jamais d'exception).
    """
    if not isinstance(raw_type, str):
        return UNKNOWN
    normalized = _SEPARATORS.sub(" ", raw_type.lower()).strip()
    if not normalized:
        return UNKNOWN
    alias = CHART_TYPE_ALIASES.get(normalized)
    if alias is not None:
        return alias
    for keyword, canonical in _KEYWORD_ORDER:
        if keyword in normalized:
            return canonical
    return UNKNOWN


def resolve_chart_type(requested: str | None, reported: str | None) -> CanonicalChartType:
    """Type canonique d'une carte: le type demandé par l'appelant prime sur celui du résultat."""
    return normalize_chart_type(requested or reported)


def is_dual_chart_type(chart_type: str) -> bool:
    return chart_type in DUAL_CHART_TYPES


def resolve_effective_subject(
    chart_type: str, primary: Subject | None, secondary: Subject | None
) -> Subject | None:
    """Sujet dont les placements sont mis en avant dans les highlights.

    - natal, composite: le sujet principal.
    - transit: le sujet des transits; synastry: la seconde personne;
      solar/lunar return: la carte de retour. Le sujet principal sert de
      repli quand le second est absent.
    """
    if chart_type in DUAL_CHART_TYPES and secondary is not None:
        return secondary
    return primary
