# src/config/__init__.py
# Configuration package: the environment-driven Config and its loaded singleton.

from .settings import config, Config, load_config

__all__ = ["config", "Config", "load_config"]
