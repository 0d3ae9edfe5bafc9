"""Consent overlay shown once per browser session until the user accepts it.

It gates nothing in the workflow; it only decides whether the notice is shown.
Acceptance lives in session state, so one visitor never hides it for another.
"""

from __future__ import annotations

from deepfakeguard.ui.state import accept_disclaimer, disclaimer_accepted

DISCLAIMER_TEXT = """
The results produced by this system are **research outputs only**. They are intended
to assist in analysis and exploration; **they are not definitive**.

- The model's prediction should **not** be used as legal evidence or as the sole basis
  for decisions with legal, financial, or life-impacting consequences.
- The visualization (heatmap/annotated media) highlights areas the model found
  suspicious; it does not prove manipulation.
- False positives and false negatives are possible. Confirm findings with independent
  technical or legal experts before taking action.
- By using this service you acknowledge that the creators and operators are not
  responsible for decisions made based on the model output.
"""


def disclaimer_visible() -> bool:
    return not disclaimer_accepted()


def render_disclaimer(*, st) -> None:
    if not disclaimer_visible():
        return

    with st.container(border=True):
        st.subheader("Important Disclaimer")
        st.markdown(DISCLAIMER_TEXT)
        st.caption("If you are unsure about how to interpret results, consult a qualified human expert.")
        st.button("I Understand & Continue", type="primary", on_click=accept_disclaimer)
