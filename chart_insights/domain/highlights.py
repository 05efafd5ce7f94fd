"""Génération des highlights par type de carte.

Chaque générateur retourne une liste de `HighlightItem` (libellé, valeur
formatée, détail optionnel) enrichis, quand c'est possible, de la maison
projetée dans l'autre carte et du point maître de l'Ascendant.

Les données manquantes dégradent l'affichage ("Unknown", pas de maison),
jamais la génération elle-même.
"""

from __future__ import annotations

from collections.abc import Sequence

from chart_insights.domain.aspect_ranking import find_first_best_aspect, pair_predicate
from chart_insights.domain.chart_types import (
    COMPOSITE,
    LUNAR_RETURN,
    NATAL,
    SOLAR_RETURN,
    SYNASTRY,
    TRANSIT,
)
from chart_insights.domain.formatting import (
    UNKNOWN_VALUE,
    format_aspect,
    format_position,
    format_sign_degree,
)
from chart_insights.domain.house_projection import (
    SECOND_IN_FIRST,
    HouseOverlayIndex,
    format_ordinal_house,
)
from chart_insights.domain.models import Aspect, HighlightItem, Point, Subject
from chart_insights.domain.points import point_key
from chart_insights.domain.rulership import ascendant_ruler, sign_ruler

TRANSIT_HIGHLIGHT_POINTS = ("Saturn", "Jupiter", "Mars")

SUN_MOON_CHAIN = (
    pair_predicate(["Sun"], ["Moon"]),
    pair_predicate(["Sun"], ["Sun"]),
    pair_predicate(["Sun", "Moon"], ["Sun", "Moon"]),
)
VENUS_MARS_CHAIN = (
    pair_predicate(["Venus"], ["Mars"]),
    pair_predicate(["Venus", "Mars", "Ascendant"], ["Venus", "Mars", "Ascendant"]),
)


def _active_point(subject: Subject | None, name: str, active: frozenset[str]) -> Point | None:
    if subject is None:
        return None
    if active and point_key(name) not in active:
        return None
    return subject.point(name)


def natal_highlights(subject: Subject, active: frozenset[str] = frozenset()) -> list[HighlightItem]:
    """Soleil, Lune (signe, degré, maison) et Ascendant (signe, degré)."""
    return [
        HighlightItem(label="Sun", value=format_position(_active_point(subject, "Sun", active))),
        HighlightItem(label="Moon", value=format_position(_active_point(subject, "Moon", active))),
        HighlightItem(
            label="Ascendant",
            value=format_sign_degree(_active_point(subject, "Ascendant", active)),
        ),
    ]


def composite_highlights(subject: Subject, active: frozenset[str] = frozenset()) -> list[HighlightItem]:
    return [
        HighlightItem(
            label="Composite Sun",
            value=format_position(_active_point(subject, "Sun", active)),
        ),
        HighlightItem(
            label="Composite Moon",
            value=format_position(_active_point(subject, "Moon", active)),
        ),
        HighlightItem(
            label="Composite Ascendant",
            value=format_sign_degree(_active_point(subject, "Ascendant", active)),
        ),
    ]


def transit_highlights(
    transit_subject: Subject,
    overlay: HouseOverlayIndex,
    active: frozenset[str] = frozenset(),
) -> list[HighlightItem]:
    """Saturne, Jupiter et Mars en transit, avec la maison natale qu'ils traversent.

    Les points du transit sont le second sujet: leur maison natale se lit dans
    `second_points_in_first_houses`. Sans comparaison, la maison propre du
    point est affichée.
    """
    items = []
    for name in TRANSIT_HIGHLIGHT_POINTS:
        point = _active_point(transit_subject, name, active)
        natal_house = overlay.house_of(name, SECOND_IN_FIRST) if point else None
        items.append(
            HighlightItem(
                label=name,
                value=format_position(
                    point,
                    house_label=format_ordinal_house(natal_house) if natal_house else None,
                ),
                house_number=natal_house,
            )
        )
    return items


def synastry_highlights(aspects: Sequence[Aspect]) -> list[HighlightItem]:
    """Paires "titre" Soleil–Lune et Vénus–Mars, via des chaînes de repli."""
    sun_moon = find_first_best_aspect(aspects, SUN_MOON_CHAIN)
    venus_mars = find_first_best_aspect(aspects, VENUS_MARS_CHAIN)
    return [
        HighlightItem(label="Sun–Moon", value=format_aspect(sun_moon)),
        HighlightItem(label="Venus–Mars", value=format_aspect(venus_mars)),
    ]


def _return_ascendant_item(return_subject: Subject, overlay: HouseOverlayIndex) -> HighlightItem:
    ascendant = return_subject.ascendant
    natal_house = overlay.cusp_house_of("Ascendant", SECOND_IN_FIRST) if ascendant else None
    value = format_sign_degree(ascendant)
    if natal_house is None:
        return HighlightItem(label="Return Ascendant", value=value)
    return HighlightItem(
        label="Return Ascendant",
        value=f"{value} (Natal {format_ordinal_house(natal_house)})",
        detail="Natal Position",
        house_number=natal_house,
    )


def _ascendant_ruler_item(
    return_subject: Subject,
    overlay: HouseOverlayIndex,
    mode: str,
    active: frozenset[str],
) -> HighlightItem:
    ascendant_sign = return_subject.ascendant.sign if return_subject.ascendant else None
    ruler_name = sign_ruler(ascendant_sign, mode)
    ruler = ascendant_ruler(return_subject, mode, active)
    if ruler is None:
        return HighlightItem(
            label="ASC Ruler",
            value=UNKNOWN_VALUE,
            detail=f"{ascendant_sign or '?'} -> {ruler_name or '?'}?",
        )
    natal_house = overlay.house_of(ruler.name, SECOND_IN_FIRST)
    detail = f"Ruler of {ascendant_sign} ({ruler_name})"
    if natal_house is not None:
        detail = f"{detail}, Natal {format_ordinal_house(natal_house)}"
    return HighlightItem(
        label="ASC Ruler",
        value=format_position(ruler),
        detail=detail,
        house_number=natal_house,
        ruler=ruler,
    )


def return_highlights(
    return_subject: Subject,
    is_solar: bool,
    overlay: HouseOverlayIndex,
    rulership_mode: str = "classical",
    active: frozenset[str] = frozenset(),
) -> list[HighlightItem]:
    """Highlights d'un retour solaire ou lunaire.

    - Ascendant du retour (et maison natale de cette cuspide en double roue);
    - Soleil (retour solaire) ou Lune (retour lunaire) du retour;
    - maître de l'Ascendant du retour, ou "Unknown" avec le maître attendu.
    """
    items = [_return_ascendant_item(return_subject, overlay)]
    luminary, label = ("Sun", "Return Sun") if is_solar else ("Moon", "Return Moon")
    point = _active_point(return_subject, luminary, active)
    if point is not None:
        items.append(HighlightItem(label=label, value=format_position(point)))
    items.append(_ascendant_ruler_item(return_subject, overlay, rulership_mode, active))
    return items


def build_highlights(
    chart_type: str,
    effective_subject: Subject | None,
    aspects: Sequence[Aspect],
    overlay: HouseOverlayIndex,
    rulership_mode: str = "classical",
    active: frozenset[str] = frozenset(),
) -> list[HighlightItem]:
    """Aiguillage vers le générateur du type canonique; type inconnu → aucun élément."""
    if chart_type == SYNASTRY:
        return synastry_highlights(aspects)
    if effective_subject is None:
        return []
    if chart_type == NATAL:
        return natal_highlights(effective_subject, active)
    if chart_type == COMPOSITE:
        return composite_highlights(effective_subject, active)
    if chart_type == TRANSIT:
        return transit_highlights(effective_subject, overlay, active)
    if chart_type in (SOLAR_RETURN, LUNAR_RETURN):
        return return_highlights(
            effective_subject,
            chart_type == SOLAR_RETURN,
            overlay,
            rulership_mode,
            active,
        )
    return []
