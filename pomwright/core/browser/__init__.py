"""
Browser Management Module

Handles browser selection, launch options, lifecycle and context creation.
"""

from .engine import (
    EngineSelection,
    LaunchConfig,
    ViewportKind,
    ViewportPolicy,
    build_launch_config,
    choose_viewport_policy,
    detect_screen_size,
)
from .errors import StartupError, UnsupportedBrowserError
from .manager import BrowserLifecycleManager, LifecycleHandle, LifecycleState

__all__ = [
    'BrowserLifecycleManager', 'LifecycleHandle', 'LifecycleState',
    'EngineSelection', 'LaunchConfig', 'ViewportKind', 'ViewportPolicy',
    'build_launch_config', 'choose_viewport_policy', 'detect_screen_size',
    'StartupError', 'UnsupportedBrowserError',
]
