"""Configuration module for chainlog."""

from chainlog.config.loader import load_config, get_config_path
from chainlog.config.schema import Config

__all__ = ["Config", "load_config", "get_config_path"]
