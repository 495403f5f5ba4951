"""Configuration — defaults, layered hierarchy, validated settings."""

from dbgate.config.hierarchy import load_config_hierarchy, load_settings
from dbgate.config.schema import GateSettings

__all__ = ["GateSettings", "load_config_hierarchy", "load_settings"]
