"""Configuration: environment settings and per-client configuration."""

from .client_config import ClientConfig
from .settings import Settings, settings

__all__ = ["ClientConfig", "Settings", "settings"]
