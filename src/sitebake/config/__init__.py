"""Configuration layer: layered store, discovery, settings, and the resolved configuration."""

from sitebake.config.configuration import BakeConfiguration
from sitebake.config.store import LayeredStore

__all__ = ["BakeConfiguration", "LayeredStore"]
