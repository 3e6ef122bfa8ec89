"""Configuration loading and validation."""

from .loader import load_config
from .schema import ConfigSchema

__all__ = ["load_config", "ConfigSchema"]
