# anchorplan/core/types.py
"""
Dataclasses for zones, anchors, display geometry, placement request and result.
Coordinates of zones and anchors are percentages of the displayed image box.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from anchorplan.core.config import ANCHOR_DIAMETER_M, DEFAULT_STRATEGY


@dataclass(frozen=True)
class Zone:
    """User-drawn distribution rectangle (percent of displayed image)."""
    x: float
    y: float
    width: float
    height: float
    id: str | None = None
    name: str | None = None

    @classmethod
    def from_corners(
        cls,
        x0: float,
        y0: float,
        x1: float,
        y1: float,
        id: str | None = None,
        name: str | None = None,
    ) -> Zone:
        """Build a zone from two drag corners given in any order."""
        return cls(
            x=min(x0, x1),
            y=min(y0, y1),
            width=abs(x1 - x0),
            height=abs(y1 - y0),
            id=id,
            name=name,
        )

    @property
    def area(self) -> float:
        """Proportional weight in percent² (not m²)."""
        return self.width * self.height


@dataclass(frozen=True)
class ExclusionZone:
    """Rectangle (percent of displayed image) where no anchor may be placed."""
    x: float
    y: float
    width: float
    height: float
    id: str | None = None


@dataclass(frozen=True)
class Anchor:
    """A placed anchor: percent coordinates plus physical diameter (m)."""
    id: str
    x: float
    y: float
    diameter: float = ANCHOR_DIAMETER_M


@dataclass(frozen=True)
class DisplayGeometry:
    """Letterboxed rectangle at which the image is rendered inside its container."""
    image_width: float
    image_height: float
    container_width: float
    container_height: float
    display_width: float
    display_height: float
    offset_x: float
    offset_y: float

    @property
    def display_scale(self) -> float:
        """Display pixels per image pixel."""
        return self.display_width / self.image_width

    def percent_to_display(self, x_pct: float, y_pct: float) -> tuple[float, float]:
        """Percent of image box -> display px relative to the image box origin."""
        return (x_pct / 100.0 * self.display_width, y_pct / 100.0 * self.display_height)

    def display_to_percent(self, x_px: float, y_px: float) -> tuple[float, float]:
        """Display px relative to the image box origin -> percent of image box."""
        return (x_px / self.display_width * 100.0, y_px / self.display_height * 100.0)

    def percent_to_container(self, x_pct: float, y_pct: float) -> tuple[float, float]:
        """Percent of image box -> container px (letterbox offsets applied)."""
        x, y = self.percent_to_display(x_pct, y_pct)
        return (x + self.offset_x, y + self.offset_y)


@dataclass(frozen=True)
class PlacementConstraints:
    """Derived constraints shared by every strategy for one run."""
    geometry: DisplayGeometry
    min_distance_px: float
    diameter_m: float = ANCHOR_DIAMETER_M
    exclusion_zones: tuple[ExclusionZone, ...] = ()


@dataclass(frozen=True)
class Demand:
    """Required anchor count, overall and per zone (same order as zones)."""
    total: int
    per_zone: tuple[int, ...]


@dataclass
class PlacementRequest:
    """Inputs from the UI shell for one distribution run."""
    project_area_m2: float
    zones: list[Zone]
    image_size: tuple[float, float]
    container_size: tuple[float, float]
    anchor_diameter_m: float = ANCHOR_DIAMETER_M
    additional_anchors: int = 0
    exclusion_zones: list[ExclusionZone] = field(default_factory=list)
    strategy: str = DEFAULT_STRATEGY


@dataclass
class PlacementResult:
    """
    Output of one distribution run. anchors is empty when error_key is set.
    Serializes to anchors.json via reporting.anchors_to_dict.
    """
    anchors: list[Anchor]
    strategy: str
    requested: int
    meters_per_pixel: float = 0.0
    min_distance_px: float = 0.0
    geometry: DisplayGeometry | None = None
    error_key: str | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def placed(self) -> int:
        return len(self.anchors)

    @property
    def ok(self) -> bool:
        return self.error_key is None
