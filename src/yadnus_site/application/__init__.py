"""Application layer.

Services here coordinate repositories and platform clients to implement the
webinar streaming workflow and public form capture.
"""
