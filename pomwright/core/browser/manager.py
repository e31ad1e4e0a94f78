"""
Browser Lifecycle Management

Single authority for the Playwright engine and launched browser of a test
process. Handles browser selection from configuration, launch options,
and the viewport policy applied to every new context.
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from playwright.sync_api import Browser, BrowserContext, Error as PlaywrightError, Page, sync_playwright

from .engine import (
    EngineSelection,
    LaunchConfig,
    ScreenSizeProvider,
    ViewportPolicy,
    build_launch_config,
    choose_viewport_policy,
    detect_screen_size,
)

logger = logging.getLogger(__name__)

EngineFactory = Callable[[], Any]


def default_engine_factory():
    """Start the real Playwright driver."""
    return sync_playwright().start()


class LifecycleState(Enum):
    UNINITIALIZED = 'uninitialized'
    STARTING = 'starting'
    RUNNING = 'running'
    STOPPED = 'stopped'


@dataclass(frozen=True)
class LifecycleHandle:
    """Engine and browser owned for the lifetime of one start/stop cycle."""
    engine: Any
    browser: Browser
    selection: EngineSelection
    launch_config: LaunchConfig
    maximize: bool
    viewport_policy: ViewportPolicy


class BrowserLifecycleManager:
    """
    Owns one Playwright engine and one launched browser per process.

    ``start`` and ``stop`` are serialized; ``new_context`` and ``new_page``
    may be called from several callers once running and each returns an
    independent resource.
    """

    def __init__(self, config=None, engine_factory: Optional[EngineFactory] = None,
                 screen_size_provider: Optional[ScreenSizeProvider] = None,
                 report_sink=None):
        self._config = config
        self.engine_factory = engine_factory or default_engine_factory
        self.screen_size_provider = screen_size_provider or detect_screen_size
        self.report_sink = report_sink

        self._lock = threading.RLock()
        self._handle: Optional[LifecycleHandle] = None
        self._state = LifecycleState.UNINITIALIZED

    # --- Lifecycle ---

    def start(self, config=None) -> None:
        """
        Resolve the configured browser and launch it.

        Calling ``start`` while already running is a no-op. An unsupported
        browser name fails before the engine is created.

        Args:
            config: Configuration source exposing ``get`` and ``get_bool``.
                Falls back to the last supplied config, then to the default
                ``ConfigManager``.

        Raises:
            UnsupportedBrowserError: browser name not recognized
            playwright.sync_api.Error: engine launch failure, unmodified
        """
        with self._lock:
            if self._handle is not None:
                return

            config = self._resolve_config(config)
            browser_name = config.get('browser')
            selection = EngineSelection.resolve(browser_name)
            headless = config.get_bool('headless')
            maximize = config.get_bool('maximize.window')
            launch_config = build_launch_config(selection, headless, maximize)
            # Screen size is queried once per start, on the starting thread.
            viewport_policy = choose_viewport_policy(selection, maximize, self.screen_size_provider)

            previous_state = self._state
            self._state = LifecycleState.STARTING
            try:
                engine = self.engine_factory()
            except Exception:
                self._state = previous_state
                raise

            try:
                self.log_lifecycle_event(
                    "Launching browser: %s | Headless: %s | Maximize: %s",
                    selection.browser_name, headless, maximize,
                )
                browser_type = getattr(engine, selection.family)
                browser = browser_type.launch(**launch_config.to_launch_kwargs())
            except Exception:
                self._state = previous_state
                self._stop_engine(engine)
                raise

            self._handle = LifecycleHandle(
                engine=engine,
                browser=browser,
                selection=selection,
                launch_config=launch_config,
                maximize=maximize,
                viewport_policy=viewport_policy,
            )
            self._state = LifecycleState.RUNNING
            logger.info(f"🚀 Browser started: {selection.browser_name} ({launch_config})")

    def stop(self) -> None:
        """Close the browser, then the engine. Safe to call at any time."""
        with self._lock:
            handle = self._handle
            if handle is None:
                return

            try:
                handle.browser.close()
            except PlaywrightError as e:
                logger.debug(f"Browser already closed: {e}")

            self._stop_engine(handle.engine)
            self._handle = None
            self._state = LifecycleState.STOPPED
            self.log_lifecycle_event("Browser and Playwright stopped.")

    def active_browser(self) -> Browser:
        """
        Return the running browser, starting it on first use.

        The lazy start keeps fixtures that never call ``start`` working; new
        code should call ``start`` explicitly.
        """
        return self._active_handle().browser

    # --- Contexts and pages ---

    def new_context(self) -> BrowserContext:
        """Create an isolated context sized by the viewport policy chosen at start."""
        handle = self._active_handle()
        policy = handle.viewport_policy
        self.log_lifecycle_event(policy.describe())
        return handle.browser.new_context(**policy.to_context_kwargs())

    def new_page(self) -> Page:
        """Open a page within a fresh context."""
        return self.new_context().new_page()

    def viewport_policy(self) -> Optional[ViewportPolicy]:
        handle = self._handle
        return handle.viewport_policy if handle else None

    # --- State ---

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._handle is not None

    @property
    def selection(self) -> Optional[EngineSelection]:
        handle = self._handle
        return handle.selection if handle else None

    @property
    def launch_config(self) -> Optional[LaunchConfig]:
        handle = self._handle
        return handle.launch_config if handle else None

    def __enter__(self) -> 'BrowserLifecycleManager':
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    # --- Helpers ---

    def _active_handle(self) -> LifecycleHandle:
        # One snapshot per caller; a concurrent stop() cannot split browser and policy.
        handle = self._handle
        if handle is None:
            with self._lock:
                if self._handle is None:
                    self.start()
                handle = self._handle
        return handle

    def _resolve_config(self, config):
        if config is not None:
            self._config = config
        if self._config is None:
            from ...config import ConfigManager
            self._config = ConfigManager.load()
        return self._config

    def _stop_engine(self, engine) -> None:
        try:
            engine.stop()
        except Exception as e:
            logger.warning(f"Error stopping Playwright: {e}")

    def log_lifecycle_event(self, message: str, *args) -> None:
        """Log to the module logger and forward to the report sink, never raising."""
        logger.info(message, *args)
        if self.report_sink is None:
            return
        try:
            self.report_sink.log_info(message % args if args else message)
        except Exception as e:
            logger.debug(f"Report sink rejected lifecycle event: {e}")
