"""Shared schema base classes."""

from terra_client.core.schemas.base import CamelModel

__all__ = ["CamelModel"]
