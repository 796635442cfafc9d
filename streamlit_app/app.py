from __future__ import annotations

import streamlit as st

from population_pyramid.config import get_settings
from population_pyramid.controller import ViewController, ViewState
from population_pyramid.logging_config import configure_logging
from population_pyramid.models import ChartModel, ViewKind
from population_pyramid.render.altair_chart import pyramid_chart

# =====================================================
# Page config
# =====================================================
st.set_page_config(page_title="India Population Graph", layout="wide")
st.title("India Population Graph")

configure_logging(None)

try:
    settings = get_settings()
except RuntimeError as exc:
    st.error(str(exc))
    st.stop()

# =====================================================
# Controller (one per browser session)
# =====================================================
def _remember(model: ChartModel) -> None:
    """Subscriber: keep the latest model for this script run."""
    st.session_state["pyramid_model"] = model


if "pyramid_controller" not in st.session_state:
    controller = ViewController(ViewState(current_view=settings.default_view))
    controller.subscribe(_remember)
    controller.load(settings.data_source)
    st.session_state["pyramid_controller"] = controller

controller: ViewController = st.session_state["pyramid_controller"]

# =====================================================
# View selector
# =====================================================
views = list(ViewKind)
selected = st.selectbox(
    "Select Population Type",
    views,
    index=views.index(controller.state.current_view),
    format_func=lambda v: v.display_name,
)
controller.set_view(selected)

# =====================================================
# Chart
# =====================================================
if controller.state.last_error is not None:
    st.error(str(controller.state.last_error))
    if st.button("Retry"):
        controller.load(settings.data_source)
        st.rerun()
elif st.session_state.get("pyramid_model") is None:
    st.info("Population data is not loaded yet.")
else:
    model = st.session_state["pyramid_model"]
    st.altair_chart(pyramid_chart(model), width="stretch")
    if model.coerced_cells:
        st.caption(
            f"{model.coerced_cells} value(s) in the source could not be read and are shown as 0."
        )

st.caption(f"Source: {settings.data_source}")
