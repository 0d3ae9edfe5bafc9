"""Streamlit UI entrypoint.

Run with::

    streamlit run deepfakeguard/ui/app.py

Sets up the page and delegates to page modules for rendering each tab.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

# Ensure repo root is on sys.path for imports.
repo_root = Path(__file__).resolve().parents[2]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

import streamlit as st

from deepfakeguard.ui.components import inject_custom_css
from deepfakeguard.ui.page_modules import about_page, activity_page, detector_page, disclaimer
from deepfakeguard.ui.state import get_workflow

logging.basicConfig(
    level=os.getenv("DEEPFAKEGUARD_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Configure Streamlit page
st.set_page_config(page_title="DeepfakeGuard", layout="wide")
inject_custom_css(st)

st.markdown('<div class="app-logo">Deepfake<span>Guard</span></div>', unsafe_allow_html=True)

disclaimer.render_disclaimer(st=st)

tab_detector, tab_about, tab_activity = st.tabs(["Detector", "About", "Activity"])

with tab_detector:
    detector_page.render_detector_tab(st=st)

with tab_about:
    about_page.render_about_tab(st=st)

with tab_activity:
    activity_page.render_activity_tab(st=st)

st.sidebar.header("Analysis API")
st.sidebar.info(f"Requests go to `{get_workflow().api_base_url}`. Set DEEPFAKEGUARD_API_BASE_URL to change it.")
st.sidebar.caption("DeepfakeGuard · SavedModel Edition")
