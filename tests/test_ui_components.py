from __future__ import annotations

from deepfakeguard.ui.components import verdict_pill_class


def test_verdict_pill_class() -> None:
    assert verdict_pill_class("fake") == "pill-danger"
    assert verdict_pill_class("REAL") == "pill-success"
    assert verdict_pill_class(None) == "pill-success"
