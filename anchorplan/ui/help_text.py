# anchorplan/ui/help_text.py
"""
Reusable help strings for UI tooltips and glossary.
"""

from anchorplan.core.config import ADDITIONAL_ANCHORS_STEP, ANCHOR_DIAMETER_M, AREA_PER_ANCHOR_M2

TOOLTIP_PROJECT_AREA = f"Total site area in m². One anchor is required per {AREA_PER_ANCHOR_M2:g} m², rounded up."
TOOLTIP_ZONE = "Zone rectangle in percent of the displayed blueprint: x, y of the top-left corner, then width and height."
TOOLTIP_EXCLUSION = "Rectangle where no anchor may be placed, in percent of the displayed blueprint."
TOOLTIP_STRATEGY = "Hex grid: even, natural-looking coverage per zone. Rejection: random points across all zones."
TOOLTIP_ADD_MORE = f"Add {ADDITIONAL_ANCHORS_STEP} anchors to the demand and redistribute from scratch."
TOOLTIP_CONTAINER = "Viewer size in px. Anchor percentages do not depend on it; only the letterbox does."

GLOSSARY_MD = f"""
### Anchor
An equipment position on the blueprint. Anchors have a diameter of **{ANCHOR_DIAMETER_M:g} m**; no two anchors are closer than that.

### Zone
A rectangle you draw over the blueprint. Anchors are placed only inside zones. With the hex grid, each zone gets a share of the anchors proportional to its area.

### Display geometry
The rectangle the blueprint actually occupies in the viewer after fitting it without distortion (letterboxing).

### Meters per pixel
Scale derived from project area and image pixel area, assuming the blueprint covers the whole project at uniform scale.
"""
