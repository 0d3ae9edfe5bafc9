"""Upload & analysis workflow.

Purpose:
- Validate the user's file before anything touches the network.
- Hold the memory-backed preview/result handles and release them exactly once.
- Run the upload -> predict -> download -> remote cleanup pipeline.

The Streamlit pages only read ``UploadWorkflow.snapshot()`` and call its
operations; they never create or release handles themselves.
"""
