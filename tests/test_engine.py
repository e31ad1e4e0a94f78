"""Tests for browser name resolution, launch options and viewport policy."""

import pytest

from pomwright.core.browser import (
    EngineSelection,
    UnsupportedBrowserError,
    ViewportKind,
    ViewportPolicy,
    build_launch_config,
    choose_viewport_policy,
)
from pomwright.core.browser.engine import FALLBACK_SCREEN_SIZE, detect_screen_size


@pytest.mark.parametrize('name, expected', [
    ('chrome', EngineSelection.CHROME),
    ('  Chrome ', EngineSelection.CHROME),
    ('MSEDGE', EngineSelection.MSEDGE),
    ('chromium\n', EngineSelection.CHROMIUM),
    ('FireFox', EngineSelection.FIREFOX),
    (' webkit', EngineSelection.WEBKIT),
])
def test_resolve_recognized_names(name, expected):
    assert EngineSelection.resolve(name) is expected


@pytest.mark.parametrize('name', ['safari', 'edge', 'chrome-beta', '', None, 'fire fox'])
def test_resolve_rejects_unknown_names(name):
    with pytest.raises(UnsupportedBrowserError) as excinfo:
        EngineSelection.resolve(name)
    assert excinfo.value.browser == name
    assert 'Unsupported browser' in str(excinfo.value)


def test_selection_families_and_channels():
    assert EngineSelection.CHROME.family == 'chromium'
    assert EngineSelection.CHROME.channel == 'chrome'
    assert EngineSelection.MSEDGE.channel == 'msedge'
    assert EngineSelection.CHROMIUM.channel is None
    assert EngineSelection.FIREFOX.family == 'firefox'
    assert EngineSelection.WEBKIT.family == 'webkit'
    assert EngineSelection.MSEDGE.is_chromium_family
    assert not EngineSelection.WEBKIT.is_chromium_family


def test_chrome_maximize_gets_channel_and_start_maximized():
    config = build_launch_config(EngineSelection.CHROME, headless=False, maximize=True)
    assert config.channel == 'chrome'
    assert config.args == ('--start-maximized',)
    assert config.to_launch_kwargs() == {
        'headless': False, 'channel': 'chrome', 'args': ['--start-maximized'],
    }


def test_msedge_maximize_has_channel_but_no_start_maximized():
    # Only the literal "chrome" selection gets the maximize argument.
    config = build_launch_config(EngineSelection.MSEDGE, headless=True, maximize=True)
    assert config.channel == 'msedge'
    assert '--start-maximized' not in config.args
    assert config.to_launch_kwargs() == {'headless': True, 'channel': 'msedge'}


def test_chromium_maximize_has_no_channel_and_no_args():
    config = build_launch_config(EngineSelection.CHROMIUM, headless=True, maximize=True)
    assert config.channel is None
    assert config.args == ()
    assert config.to_launch_kwargs() == {'headless': True}


def test_chrome_without_maximize_has_no_args():
    config = build_launch_config(EngineSelection.CHROME, headless=True, maximize=False)
    assert config.args == ()


def test_viewport_default_when_not_maximized():
    for selection in EngineSelection:
        policy = choose_viewport_policy(selection, False, lambda: pytest.fail('screen queried'))
        assert policy == ViewportPolicy.fixed_default()
        assert policy.to_context_kwargs() == {}


@pytest.mark.parametrize('selection', [EngineSelection.CHROME, EngineSelection.MSEDGE])
def test_viewport_native_maximize_for_branded_chromium(selection):
    policy = choose_viewport_policy(selection, True, lambda: pytest.fail('screen queried'))
    assert policy.kind is ViewportKind.NATIVE_MAXIMIZE
    assert policy.to_context_kwargs() == {'no_viewport': True}


@pytest.mark.parametrize('selection', [EngineSelection.FIREFOX, EngineSelection.WEBKIT, EngineSelection.CHROMIUM])
def test_viewport_screen_size_for_other_engines(selection):
    policy = choose_viewport_policy(selection, True, lambda: (2560, 1440))
    assert policy.kind is ViewportKind.USE_SCREEN_SIZE
    assert policy.to_context_kwargs() == {'viewport': {'width': 2560, 'height': 1440}}
    assert '2560x1440' in policy.describe()


def test_detect_screen_size_falls_back_without_display(monkeypatch):
    tkinter = pytest.importorskip('tkinter')

    def no_display(*args, **kwargs):
        raise tkinter.TclError('no display name and no $DISPLAY environment variable')

    monkeypatch.setattr(tkinter, 'Tk', no_display)
    assert detect_screen_size() == FALLBACK_SCREEN_SIZE
