"""FastAPI application and HTTP layer.

The app is built by ``yadnus_site.api.main.create_app``.
"""
