"""DeepfakeGuard browser client.

Submits an image or video to a remote deepfake analysis service and shows
the annotated media it returns.
"""
