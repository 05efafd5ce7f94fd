"""Modèles de domaine (cœur métier) indépendants de l'API.

Objectif du module
------------------
- Décrire le résultat brut d'un calcul de carte tel que fourni par le service
  d'éphémérides externe (points, aspects, comparaison de maisons).
- Décrire la vue dérivée (aspects clés, highlights) produite par le moteur.

Tous les modèles d'entrée sont figés: le moteur lit, filtre et ré-empaquette,
il ne modifie jamais les données reçues.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

AspectMovement = Literal["Applying", "Separating"]


def _canonical_key(name: str) -> str:
    return name.strip().replace(" ", "_").lower()


class Point(BaseModel):
    """Placement calculé d'un corps céleste ou d'un angle."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    position: float = Field(..., description="Degree within sign, 0-30")
    sign: str
    house: str | None = None
    element: str | None = None
    quality: str | None = None
    retrograde: bool = False
    speed: float | None = None
    abs_pos: float | None = None
    point_type: str | None = None


class Aspect(BaseModel):
    """Relation angulaire entre deux points, éventuellement issus de deux cartes."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    p1_name: str
    p2_name: str
    aspect: str
    orbit: float
    diff: float = 0.0
    aspect_movement: AspectMovement | None = None
    p1_owner: str | None = None
    p2_owner: str | None = None

    @field_validator("aspect_movement", mode="before")
    @classmethod
    def _normalize_movement(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().capitalize() or None
        return value

    def swapped(self) -> Aspect:
        """Retourne le même aspect avec ses deux extrémités inversées."""
        return self.model_copy(
            update={
                "p1_name": self.p2_name,
                "p2_name": self.p1_name,
                "p1_owner": self.p2_owner,
                "p2_owner": self.p1_owner,
            }
        )


class Subject(BaseModel):
    """Ensemble des points d'une carte et métadonnées d'identité.

    Le service externe renvoie les points sous forme de champs à plat
    (`sun`, `moon`, `medium_coeli`, ...). Ils sont regroupés dans `points`,
    indexés par leur nom canonique (`Sun`, `Medium_Coeli`, ...).
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    birth_date: str | None = None
    birth_time: str | None = None
    city: str | None = None
    nation: str | None = None
    lat: float | None = None
    lng: float | None = None
    tz_str: str | None = None
    points: dict[str, Point] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_flat_points(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "points" in data:
            return data
        points = {}
        rest = {}
        for key, value in data.items():
            if isinstance(value, dict) and {"name", "sign", "position"} <= value.keys():
                points[value["name"]] = value
            else:
                rest[key] = value
        rest["points"] = points
        return rest

    def point(self, name: str) -> Point | None:
        """Retrouve un point par nom, sans tenir compte de la casse ni des `_`."""
        found = self.points.get(name)
        if found is not None:
            return found
        wanted = _canonical_key(name)
        for key, candidate in self.points.items():
            if _canonical_key(key) == wanted:
                return candidate
        return None

    @property
    def ascendant(self) -> Point | None:
        return self.point("Ascendant")


class PointInHouse(BaseModel):
    """Projection d'un point (ou d'une cuspide) dans les maisons de l'autre carte."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    point_name: str
    point_sign: str
    point_degree: float
    projected_house_number: int = Field(..., ge=1, le=12)
    projected_house_name: str
    point_owner_name: str | None = None
    projected_house_owner_name: str | None = None


class HouseComparison(BaseModel):
    """Références croisées symétriques entre les systèmes de maisons de deux sujets."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    first_subject_name: str = ""
    second_subject_name: str = ""
    first_points_in_second_houses: list[PointInHouse] = Field(default_factory=list)
    second_points_in_first_houses: list[PointInHouse] = Field(default_factory=list)
    first_cusps_in_second_houses: list[PointInHouse] = Field(default_factory=list)
    second_cusps_in_first_houses: list[PointInHouse] = Field(default_factory=list)

    @field_validator(
        "first_points_in_second_houses",
        "second_points_in_first_houses",
        "first_cusps_in_second_houses",
        "second_cusps_in_first_houses",
        mode="before",
    )
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class ElementDistribution(BaseModel):
    """Répartition des points actifs entre les quatre éléments (effectifs et pourcentages)."""

    model_config = ConfigDict(extra="ignore")

    fire: int = 0
    earth: int = 0
    air: int = 0
    water: int = 0
    fire_percentage: int = 0
    earth_percentage: int = 0
    air_percentage: int = 0
    water_percentage: int = 0


class QualityDistribution(BaseModel):
    """Répartition des points actifs entre les trois modalités."""

    model_config = ConfigDict(extra="ignore")

    cardinal: int = 0
    fixed: int = 0
    mutable: int = 0
    cardinal_percentage: int = 0
    fixed_percentage: int = 0
    mutable_percentage: int = 0


class ChartResult(BaseModel):
    """Résultat agrégé d'un calcul de carte, consommé par le moteur."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    chart_type: str = ""
    subject: Subject | None = None
    first_subject: Subject | None = None
    second_subject: Subject | None = None
    aspects: list[Aspect] = Field(default_factory=list)
    house_comparison: HouseComparison | None = None
    active_points: list[str] = Field(default_factory=list)
    element_distribution: ElementDistribution | None = None
    quality_distribution: QualityDistribution | None = None

    @field_validator("aspects", "active_points", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def primary_subject(self) -> Subject | None:
        return self.first_subject or self.subject

    @property
    def secondary_subject(self) -> Subject | None:
        return self.second_subject


class HighlightItem(BaseModel):
    """Élément de highlight prêt à l'affichage."""

    label: str
    value: str
    detail: str | None = None
    house_number: int | None = None
    ruler: Point | None = None


class KeyAspectRow(BaseModel):
    """Ligne d'affichage d'un aspect clé (libellés de propriétaires, symbole, orbe)."""

    first_point: str
    second_point: str
    first_label: str = ""
    second_label: str = ""
    aspect: str
    symbol: str
    orbit: float
    orb_text: str
    movement: str | None = None


class ChartInsights(BaseModel):
    """Vue dérivée d'un résultat de carte."""

    chart_type: str
    key_aspects: list[Aspect] = Field(default_factory=list)
    key_aspect_rows: list[KeyAspectRow] = Field(default_factory=list)
    highlights: list[HighlightItem] = Field(default_factory=list)
    aspect_grid: list[Aspect] = Field(default_factory=list)
    active_points: list[str] = Field(default_factory=list)
    element_distribution: ElementDistribution | None = None
    quality_distribution: QualityDistribution | None = None
    synastry_key_aspect: Aspect | None = None
