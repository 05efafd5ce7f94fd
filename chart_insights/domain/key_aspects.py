"""Lignes d'affichage des aspects clés.

Chaque aspect classé devient une `KeyAspectRow`: noms lisibles, libellés de
propriétaire pour les cartes doubles, symbole et orbe formaté. Pour les
transits, le point en transit est affiché en premier.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

from chart_insights.domain.aspect_ranking import is_moving_owner
from chart_insights.domain.chart_types import RETURN_CHART_TYPES, SYNASTRY, TRANSIT, is_dual_chart_type
from chart_insights.domain.formatting import format_point_name
from chart_insights.domain.models import Aspect, KeyAspectRow

ASPECT_SYMBOLS = MappingProxyType(
    {
        "conjunction": "☌",
        "opposition": "☍",
        "trine": "△",
        "square": "□",
        "sextile": "⚹",
        "quincunx": "⚻",
        "semi-sextile": "⚺",
        "semi-square": "∠",
        "sesquiquadrate": "⚼",
        "quintile": "Q",
        "bi-quintile": "bQ",
        "biquintile": "bQ",
    }
)

MAX_OWNER_LABEL_LEN = 8
SHORT_OWNER_LABEL_LEN = 3


def aspect_symbol(aspect_name: str) -> str:
    key = aspect_name.strip().lower()
    return ASPECT_SYMBOLS.get(key) or aspect_name.strip()[:1].upper()


def _owner_first_name(owner: str | None) -> str:
    parts = (owner or "").split()
    if not parts:
        return ""
    first = parts[0]
    return first[:SHORT_OWNER_LABEL_LEN] if len(first) > MAX_OWNER_LABEL_LEN else first


def _transit_first(aspect: Aspect, moving_owners: frozenset[str]) -> bool:
    return is_moving_owner(aspect.p1_owner, moving_owners) and not is_moving_owner(
        aspect.p2_owner, moving_owners
    )


def _owner_labels(chart_type: str, aspect: Aspect, moving_owners: frozenset[str]) -> tuple[str, str]:
    """Libellés (p1, p2); sans propriétaire explicite, p2 vient de la seconde carte."""
    if chart_type == TRANSIT:
        return ("Transit", "Natal") if _transit_first(aspect, moving_owners) else ("Natal", "Transit")
    if chart_type in RETURN_CHART_TYPES:
        return "Natal", "Return"
    return _owner_first_name(aspect.p1_owner), _owner_first_name(aspect.p2_owner)


def build_key_aspect_row(
    chart_type: str, aspect: Aspect, moving_owners: Iterable[str] | None = None
) -> KeyAspectRow:
    """Ligne d'affichage d'un aspect.

    `moving_owners` désigne, en plus des libellés génériques ("Transit", ...),
    les propriétaires de la carte en transit.
    """
    moving = frozenset(moving_owners or ())
    owners_differ = bool(aspect.p1_owner and aspect.p2_owner and aspect.p1_owner != aspect.p2_owner)
    show_owners = is_dual_chart_type(chart_type) or owners_differ
    p1_label, p2_label = _owner_labels(chart_type, aspect, moving) if show_owners else ("", "")

    first, second = aspect.p1_name, aspect.p2_name
    first_label, second_label = p1_label, p2_label
    if chart_type == TRANSIT and not _transit_first(aspect, moving):
        first, second = second, first
        first_label, second_label = second_label, first_label

    movement = aspect.aspect_movement if chart_type != SYNASTRY else None
    orbit = abs(aspect.orbit)
    return KeyAspectRow(
        first_point=format_point_name(first),
        second_point=format_point_name(second),
        first_label=first_label,
        second_label=second_label,
        aspect=aspect.aspect,
        symbol=aspect_symbol(aspect.aspect),
        orbit=orbit,
        orb_text=f"{orbit:.1f}° orb",
        movement=movement,
    )


def build_key_aspect_rows(
    chart_type: str, aspects: Iterable[Aspect], moving_owners: Iterable[str] | None = None
) -> list[KeyAspectRow]:
    moving = frozenset(moving_owners or ())
    return [build_key_aspect_row(chart_type, a, moving) for a in aspects]
