"""
Engine Selection

Maps configured browser names onto Playwright engine families and derives
the launch options and viewport policy for each of them.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from .errors import UnsupportedBrowserError

logger = logging.getLogger(__name__)

START_MAXIMIZED_ARG = '--start-maximized'
FALLBACK_SCREEN_SIZE = (1920, 1080)

ScreenSizeProvider = Callable[[], Tuple[int, int]]


class EngineSelection(Enum):
    """Supported browsers, each bound to an engine family and optional channel."""

    CHROME = ('chrome', 'chromium', 'chrome')
    MSEDGE = ('msedge', 'chromium', 'msedge')
    CHROMIUM = ('chromium', 'chromium', None)
    FIREFOX = ('firefox', 'firefox', None)
    WEBKIT = ('webkit', 'webkit', None)

    def __init__(self, browser_name: str, family: str, channel: Optional[str]):
        self.browser_name = browser_name
        self.family = family
        self.channel = channel

    @classmethod
    def resolve(cls, name: Optional[str]) -> 'EngineSelection':
        """Resolve a configured browser name (trimmed, case-insensitive)."""
        normalized = (name or '').strip().lower()
        for selection in cls:
            if selection.browser_name == normalized:
                return selection
        raise UnsupportedBrowserError(name)

    @property
    def is_chromium_family(self) -> bool:
        return self.family == 'chromium'


class ViewportKind(Enum):
    USE_SCREEN_SIZE = 'use_screen_size'
    NATIVE_MAXIMIZE = 'native_maximize'
    FIXED_DEFAULT = 'fixed_default'


@dataclass(frozen=True)
class LaunchConfig:
    """Options passed to ``BrowserType.launch``."""
    headless: bool
    channel: Optional[str] = None
    args: Tuple[str, ...] = ()

    def to_launch_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {'headless': self.headless}
        if self.channel:
            kwargs['channel'] = self.channel
        if self.args:
            kwargs['args'] = list(self.args)
        return kwargs


@dataclass(frozen=True)
class ViewportPolicy:
    """How the content area of a new context is sized."""
    kind: ViewportKind
    width: Optional[int] = None
    height: Optional[int] = None

    @classmethod
    def screen_size(cls, width: int, height: int) -> 'ViewportPolicy':
        return cls(ViewportKind.USE_SCREEN_SIZE, int(width), int(height))

    @classmethod
    def native_maximize(cls) -> 'ViewportPolicy':
        return cls(ViewportKind.NATIVE_MAXIMIZE)

    @classmethod
    def fixed_default(cls) -> 'ViewportPolicy':
        return cls(ViewportKind.FIXED_DEFAULT)

    def to_context_kwargs(self) -> Dict[str, Any]:
        """
        Render keyword arguments for ``Browser.new_context``.

        ``no_viewport`` is not the same as leaving the viewport out: it tells
        Playwright to let the OS window (maximized through the launch flag)
        decide the size instead of emulating the default 1280x720.
        """
        if self.kind is ViewportKind.USE_SCREEN_SIZE:
            return {'viewport': {'width': self.width, 'height': self.height}}
        if self.kind is ViewportKind.NATIVE_MAXIMIZE:
            return {'no_viewport': True}
        return {}

    def describe(self) -> str:
        if self.kind is ViewportKind.USE_SCREEN_SIZE:
            return f"Viewport set to screen size: {self.width}x{self.height}"
        if self.kind is ViewportKind.NATIVE_MAXIMIZE:
            return "Chromium-based browser -> viewport set to NULL (real maximize)."
        return "Using default viewport (not maximized)."


def build_launch_config(selection: EngineSelection, headless: bool, maximize: bool) -> LaunchConfig:
    """
    Derive launch options from the selected browser.

    Only the literal ``chrome`` selection receives ``--start-maximized``;
    ``msedge`` and ``chromium`` keep their default window even when
    maximize is requested.
    """
    args: Tuple[str, ...] = ()
    if maximize and selection is EngineSelection.CHROME:
        args = (START_MAXIMIZED_ARG,)
    return LaunchConfig(headless=bool(headless), channel=selection.channel, args=args)


def choose_viewport_policy(selection: EngineSelection, maximize: bool,
                           screen_size_provider: Optional[ScreenSizeProvider] = None) -> ViewportPolicy:
    """Pick the viewport policy for a new context."""
    if not maximize:
        return ViewportPolicy.fixed_default()

    if selection in (EngineSelection.CHROME, EngineSelection.MSEDGE):
        return ViewportPolicy.native_maximize()

    provider = screen_size_provider or detect_screen_size
    width, height = provider()
    return ViewportPolicy.screen_size(width, height)


def detect_screen_size() -> Tuple[int, int]:
    """Return the primary screen resolution, or a fixed fallback without a display."""
    try:
        import tkinter
    except ImportError:
        logger.warning(f"tkinter unavailable, using fallback screen size {FALLBACK_SCREEN_SIZE}")
        return FALLBACK_SCREEN_SIZE

    try:
        root = tkinter.Tk()
    except tkinter.TclError as e:
        logger.warning(f"No display available ({e}), using fallback screen size {FALLBACK_SCREEN_SIZE}")
        return FALLBACK_SCREEN_SIZE

    try:
        root.withdraw()
        return root.winfo_screenwidth(), root.winfo_screenheight()
    finally:
        root.destroy()
