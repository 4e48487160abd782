"""Core configuration, credential hashing, and token authority."""

from livraria.core.config import Settings, TokenConfig, get_settings

__all__ = ["Settings", "TokenConfig", "get_settings"]
