"""Backend and storage services."""

from .api_client import ApiClient, Resource, ResourceClient
from .session_service import SessionService

__all__ = ["ApiClient", "Resource", "ResourceClient", "SessionService"]
