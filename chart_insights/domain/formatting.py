"""Mise en forme textuelle des positions et des aspects."""

from __future__ import annotations

from chart_insights.domain.models import Aspect, Point

UNKNOWN_VALUE = "Unknown"
NO_ASPECT = "—"


def format_point_name(name: str) -> str:
    return name.replace("_", " ")


def _degrees_minutes(position: float) -> str:
    degrees = int(position)
    minutes = round((position - degrees) * 60)
    if minutes == 60:
        degrees, minutes = degrees + 1, 0
    return f"{degrees}°{minutes}'"


def format_sign_degree(point: Point | None) -> str:
    """Format "Signe D°M'" (sans maison)."""
    if point is None:
        return UNKNOWN_VALUE
    return f"{point.sign or UNKNOWN_VALUE} {_degrees_minutes(point.position)}"


def format_position(point: Point | None, show_house: bool = True, house_label: str | None = None) -> str:
    """Format "Signe D°M' Maison".

    Args:
        point: Point à formater (None → "Unknown").
        show_house: Ajoute la maison du point quand elle est connue.
        house_label: Maison à afficher à la place de celle du point (overlay).
    """
    if point is None:
        return UNKNOWN_VALUE
    base = format_sign_degree(point)
    if not show_house:
        return base
    house = house_label or (format_point_name(point.house) if point.house else None)
    return f"{base} {house}" if house else base


def format_aspect(aspect: Aspect | None) -> str:
    """Format "P1-P2 aspect (orbe°)", ou "—" sans aspect."""
    if aspect is None:
        return NO_ASPECT
    return f"{aspect.p1_name}-{aspect.p2_name} {aspect.aspect} ({abs(aspect.orbit):.1f}°)"
