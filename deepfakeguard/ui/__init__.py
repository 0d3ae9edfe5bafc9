"""Thin UI layer.

Streamlit pages that:
- collect the user's file
- drive the upload/analysis workflow
- render the original and the annotated result

Business logic lives in deepfakeguard.workflow.
"""
