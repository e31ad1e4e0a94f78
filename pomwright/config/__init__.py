"""
Configuration Management

Framework configuration: browser selection, headless and maximize flags,
retry count, base URL and report location.
"""

from .manager import ConfigManager, DEFAULTS, env_key, flatten

__all__ = ['ConfigManager', 'DEFAULTS', 'env_key', 'flatten']
