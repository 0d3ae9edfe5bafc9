"""Static About page."""

from __future__ import annotations


def render_about_tab(*, st) -> None:
    st.title("About")
    st.markdown(
        "The backend loads a TensorFlow SavedModel and runs inference on images and videos."
    )
    st.markdown(
        "If the input is predicted **fake**, an occlusion-sensitivity heatmap is overlaid. "
        "For videos, sampled frames are processed and saved to MP4."
    )
    st.markdown(
        "Uploaded files and rendered outputs are deleted from the server as soon as this "
        "client has downloaded the result, and again (best effort) when the session ends."
    )
