"""API layer: the FastAPI application, its routers and services."""

from borsa_backend.api.app import create_api

__all__ = ["create_api"]
