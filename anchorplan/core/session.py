# anchorplan/core/session.py
"""
Project session: zones accumulate, anchors are replaced on every distribution,
"add more" bumps the additional-anchor counter and re-runs the whole placement.
The counter is threaded explicitly into each PlacementRequest.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from anchorplan.core.config import ANCHOR_DIAMETER_M, DEFAULT_STRATEGY, SEED
from anchorplan.core.demand import next_additional_anchors
from anchorplan.core.placement import run_distribution
from anchorplan.core.types import (
    Anchor,
    ExclusionZone,
    PlacementRequest,
    PlacementResult,
    Zone,
)


@dataclass
class ProjectSession:
    """In-memory state for one blueprint. Not persisted."""
    project_area_m2: float
    image_size: tuple[float, float] = (0.0, 0.0)
    anchor_diameter_m: float = ANCHOR_DIAMETER_M
    strategy: str = DEFAULT_STRATEGY
    zones: list[Zone] = field(default_factory=list)
    exclusion_zones: list[ExclusionZone] = field(default_factory=list)
    additional_anchors: int = 0
    last_result: PlacementResult | None = None

    @property
    def anchors(self) -> list[Anchor]:
        return list(self.last_result.anchors) if self.last_result is not None else []

    def add_zone(self, zone: Zone) -> Zone:
        """Append a zone; assigns an id and default name when missing. Clears anchors."""
        n = len(self.zones)
        zone = Zone(
            x=zone.x,
            y=zone.y,
            width=zone.width,
            height=zone.height,
            id=zone.id or f"zone-{n}",
            name=zone.name or f"Zone {n + 1}",
        )
        self.zones.append(zone)
        self.last_result = None
        return zone

    def add_exclusion(self, exclusion: ExclusionZone) -> ExclusionZone:
        exclusion = ExclusionZone(
            x=exclusion.x,
            y=exclusion.y,
            width=exclusion.width,
            height=exclusion.height,
            id=exclusion.id or f"exclusion-{len(self.exclusion_zones)}",
        )
        self.exclusion_zones.append(exclusion)
        self.last_result = None
        return exclusion

    def reset(self) -> None:
        """Drop zones, exclusions, anchors and the additional-anchor counter."""
        self.zones = []
        self.exclusion_zones = []
        self.additional_anchors = 0
        self.last_result = None

    def request(self, container_size: tuple[float, float]) -> PlacementRequest:
        return PlacementRequest(
            project_area_m2=self.project_area_m2,
            zones=list(self.zones),
            image_size=self.image_size,
            container_size=container_size,
            anchor_diameter_m=self.anchor_diameter_m,
            additional_anchors=self.additional_anchors,
            exclusion_zones=list(self.exclusion_zones),
            strategy=self.strategy,
        )

    def distribute(
        self,
        container_size: tuple[float, float],
        seed: int | None = SEED,
        rng: np.random.Generator | None = None,
    ) -> PlacementResult:
        """Replace the anchor set with a fresh distribution."""
        self.last_result = run_distribution(self.request(container_size), seed=seed, rng=rng)
        return self.last_result

    def add_more(
        self,
        container_size: tuple[float, float],
        seed: int | None = SEED,
        rng: np.random.Generator | None = None,
    ) -> PlacementResult:
        """Increase demand by one step and redistribute from scratch."""
        self.additional_anchors = next_additional_anchors(self.additional_anchors)
        return self.distribute(container_size, seed=seed, rng=rng)
