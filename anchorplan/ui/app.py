# anchorplan/ui/app.py
"""
Streamlit UI: project setup, blueprint upload, zones, distribute / add more / reset.
Thin shell over anchorplan.core.session.ProjectSession; all placement logic lives in core.
Run with: streamlit run anchorplan/ui/app.py
"""

from __future__ import annotations

import io
import json
import logging
from pathlib import Path

from anchorplan.core.config import (
    DEFAULT_CONTAINER_HEIGHT_PX,
    DEFAULT_CONTAINER_WIDTH_PX,
    DEFAULT_STRATEGY,
    LOG_LEVEL,
)

# Configure logging from env (e.g. LOG_LEVEL=DEBUG for development)
logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))

import matplotlib.image as mpimg
import streamlit as st

from anchorplan.core.demand import compute_demand
from anchorplan.core.display import resolve_display_geometry
from anchorplan.core.error_codes import PreconditionError, user_message
from anchorplan.core.io import image_size_of
from anchorplan.core.placement import STRATEGIES
from anchorplan.core.render import render_after, render_before
from anchorplan.core.reporting import anchors_to_dict
from anchorplan.core.session import ProjectSession
from anchorplan.core.types import ExclusionZone, Zone
from anchorplan.ui.help_text import (
    GLOSSARY_MD,
    TOOLTIP_ADD_MORE,
    TOOLTIP_CONTAINER,
    TOOLTIP_EXCLUSION,
    TOOLTIP_PROJECT_AREA,
    TOOLTIP_STRATEGY,
    TOOLTIP_ZONE,
)

logger = logging.getLogger(__name__)


def _session() -> ProjectSession | None:
    return st.session_state.get("project")


def _rect_inputs(prefix: str, help_text: str) -> tuple[float, float, float, float]:
    c1, c2, c3, c4 = st.columns(4)
    x = c1.number_input("x %", 0.0, 100.0, 10.0, key=f"{prefix}_x", help=help_text)
    y = c2.number_input("y %", 0.0, 100.0, 10.0, key=f"{prefix}_y")
    w = c3.number_input("width %", 0.0, 100.0, 30.0, key=f"{prefix}_w")
    h = c4.number_input("height %", 0.0, 100.0, 30.0, key=f"{prefix}_h")
    return x, y, w, h


def _render_view(project: ProjectSession, container: tuple[float, float], image) -> bytes | None:
    """Render current zones (and anchors, if any) to PNG bytes. Nothing is written to disk."""
    try:
        geometry = resolve_display_geometry(*project.image_size, *container)
    except PreconditionError as e:
        st.error(user_message(e.error_key))
        return None
    buf = io.BytesIO()
    if project.last_result is not None and project.last_result.ok:
        render_after(
            geometry, project.zones, project.last_result, buf,
            exclusions=project.exclusion_zones, image=image,
            show_zones=st.session_state.get("show_zones", True),
        )
    else:
        render_before(geometry, project.zones, buf, exclusions=project.exclusion_zones, image=image)
    return buf.getvalue()


st.set_page_config(page_title="Anchor Planner", layout="wide")

# ----- Sidebar: project setup -----
with st.sidebar:
    st.header("Anchor Planner")
    project = _session()
    if project is None:
        area = st.number_input("Project area (m²)", min_value=0.0, value=0.0, step=25.0, help=TOOLTIP_PROJECT_AREA)
        if st.button("Start project", disabled=area <= 0):
            st.session_state["project"] = ProjectSession(project_area_m2=area, strategy=DEFAULT_STRATEGY)
            st.rerun()
        st.stop()

    st.caption(f"Project area: **{project.project_area_m2:g} m²**")
    project.strategy = st.selectbox(
        "Strategy", sorted(STRATEGIES), index=sorted(STRATEGIES).index(project.strategy), help=TOOLTIP_STRATEGY,
    )
    cw = st.number_input("Viewer width (px)", min_value=0, value=DEFAULT_CONTAINER_WIDTH_PX, help=TOOLTIP_CONTAINER)
    ch = st.number_input("Viewer height (px)", min_value=0, value=DEFAULT_CONTAINER_HEIGHT_PX)
    container = (float(cw), float(ch))
    st.session_state["show_zones"] = st.checkbox("Show zones", value=st.session_state.get("show_zones", True))
    with st.expander("Help & glossary"):
        st.markdown(GLOSSARY_MD)

# ----- Blueprint upload -----
uploaded = st.file_uploader("Upload project blueprint", type=["png", "jpg", "jpeg"])
if uploaded is None:
    st.info("Upload a blueprint image to start drawing zones.")
    st.stop()
image = mpimg.imread(uploaded, format=Path(uploaded.name).suffix.lstrip(".").lower())
project.image_size = image_size_of(image)

# ----- Zones -----
left, right = st.columns([1, 2])
with left:
    st.subheader("Distribution zones")
    zx, zy, zw, zh = _rect_inputs("zone", TOOLTIP_ZONE)
    zone_name = st.text_input("Zone name", value="")
    if st.button("Add distribution zone", disabled=zw <= 0 or zh <= 0):
        project.add_zone(Zone(x=zx, y=zy, width=zw, height=zh, name=zone_name.strip() or None))
    with st.expander("Exclusion zones"):
        ex, ey, ew, eh = _rect_inputs("excl", TOOLTIP_EXCLUSION)
        if st.button("Add exclusion zone", disabled=ew <= 0 or eh <= 0):
            project.add_exclusion(ExclusionZone(x=ex, y=ey, width=ew, height=eh))

    for z in project.zones:
        st.caption(f"{z.name}: x={z.x:g}% y={z.y:g}% {z.width:g}×{z.height:g}%")

    no_zones = not project.zones
    b1, b2, b3 = st.columns(3)
    if b1.button("Distribute anchors", disabled=no_zones):
        project.distribute(container)
    if b2.button("Add more anchors", disabled=no_zones or project.last_result is None, help=TOOLTIP_ADD_MORE):
        project.add_more(container)
    if b3.button("Reset zones"):
        project.reset()

    if project.zones:
        try:
            demand = compute_demand(project.project_area_m2, project.zones, project.additional_anchors)
            st.caption(f"Demand: {demand.total} anchors (additional: {project.additional_anchors})")
        except PreconditionError as e:
            st.error(user_message(e.error_key))

    result = project.last_result
    if result is not None:
        if not result.ok:
            st.error(user_message(result.error_key))
        else:
            st.metric("Anchors placed", f"{result.placed} / {result.requested}")
            for w in result.warnings:
                st.warning(w)
            data = anchors_to_dict(result, project.request(container))
            st.download_button(
                "Download anchors.json",
                data=json.dumps(data, indent=2).encode("utf-8"),
                file_name="anchors.json",
                mime="application/json",
            )

with right:
    view_png = _render_view(project, container, image)
    if view_png is not None:
        st.image(view_png, caption="Blueprint")
        st.download_button("Download view.png", data=view_png, file_name="view.png", mime="image/png")
