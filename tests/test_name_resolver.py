import pytest

from focusmenu.core.models import RawIdentity
from focusmenu.core.name_resolver import (
    NameResolver,
    as_valid_utf8,
    expand_dashes,
    looks_like_window_title,
    settings_app_name,
    single_word_name,
)
from tests.helpers import cmdline


@pytest.fixture
def resolver(owner):
    return NameResolver(owner)


def resolve(resolver, source_name, pid=None, title=None):
    return resolver.resolve_display_name(
        RawIdentity(source_name=source_name, pid=pid, fallback_window_title=title)
    ).display_text


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("org.mozilla.firefox", "Firefox"),
        ("ORG.MOZILLA.FIREFOX", "Firefox"),
        ("google-chrome", "Google Chrome"),
        ("code", "Visual Studio Code"),
        ("vlc", "VLC Media Player"),
        ("VLC media player", "VLC Media Player"),
        ("xfce4-about", "About Xfce"),
        ("xfce4-appfinder", "App Finder"),
        ("soffice.bin", "LibreOffice"),
        ("xfce4-power-settings", "Power"),
        ("Xfce4-mouse-settings", "Mouse"),
        ("Xfce4-power-manager-settings", "Power Manager"),
        ("org.gnome.Calculator", "Calculator"),
        ("org.gnome.text-editor", "Text Editor"),
        ("my-cool-app", "My Cool App"),
        ("simpleapp", "Simpleapp"),
        ("AlreadyCapitalized", "AlreadyCapitalized"),
    ],
)
def test_tier_cascade(resolver, raw, expected):
    assert resolve(resolver, raw) == expected


def test_suffix_override_matches_title_shaped_name(resolver):
    assert resolve(resolver, "Playlist - Audacious") == "Audacious"


def test_empty_name_falls_back_to_title(resolver):
    assert resolve(resolver, "", title="Terminal") == "Terminal"
    assert resolve(resolver, None, title="Terminal") == "Terminal"


def test_empty_name_without_title_is_untitled(resolver):
    assert resolve(resolver, "") == "Untitled Program"
    assert resolve(resolver, b"", title=b"") == "Untitled Program"
    assert resolver.resolve_display_name("").display_text == "Untitled Program"


@pytest.mark.parametrize("raw", [b"\xff\xfe", b"caja\x80", "bad\udcff"])
def test_invalid_utf8_name(resolver, raw):
    assert resolve(resolver, raw) == "Invalid App Name"


def test_invalid_utf8_never_reaches_process_lookup(owner, add_process):
    add_process(50, cmdline("/usr/bin/gedit"))
    resolver = NameResolver(owner)

    assert resolve(resolver, b"\xc3\x28 - long window title", pid=50) == "Invalid App Name"


def test_window_title_is_replaced_by_process_name(owner, add_process):
    add_process(77, cmdline("/usr/bin/gedit", "notes.txt"))
    resolver = NameResolver(owner)

    assert resolve(resolver, "notes.txt - Text Editor", pid=77) == "Gedit"
    assert resolve(resolver, "~/src/main.c", pid=77) == "Gedit"


def test_window_title_kept_when_process_unknown(resolver):
    assert resolve(resolver, "notes.txt - Text Editor", pid=4040) == "Notes.txt   Text Editor"


def test_unmasked_name_runs_remaining_tiers(owner, add_process):
    add_process(12, cmdline("/opt/my-cool-app/my-cool-app"))
    resolver = NameResolver(owner)

    assert resolve(resolver, "A very long window title indeed", pid=12) == "My Cool App"


def test_identity_results_are_fixed_points(resolver):
    for raw in ("AlreadyCapitalized", "Calculator", "Firefox"):
        first = resolve(resolver, raw)
        assert resolve(resolver, first) == first


def test_configured_override_wins(make_owner):
    owner = make_owner({"name_resolver": {"overrides": {"Code": "VS Code"}}})
    resolver = NameResolver(owner)

    assert resolve(resolver, "code") == "VS Code"
    assert resolve(resolver, "google-chrome") == "Google Chrome"


def test_title_length_limit_from_config(make_owner, add_process):
    add_process(9, cmdline("/usr/bin/geany"))
    owner = make_owner({"name_resolver": {"title_length_limit": 5}})

    assert resolve(NameResolver(owner), "Calculator", pid=9) == "Geany"


def test_looks_like_window_title():
    assert looks_like_window_title("x" * 21)
    assert not looks_like_window_title("x" * 20)
    assert looks_like_window_title("doc — App")
    assert looks_like_window_title("http:")
    assert not looks_like_window_title("org.gnome.Calculator")


def test_tier_helpers():
    assert expand_dashes("a-b-c") == "a B C"
    assert settings_app_name("xfce4-settings") is None
    assert settings_app_name("firefox-settings") is None
    assert single_word_name("Mixed") is None
    assert single_word_name("two words") is None
    assert as_valid_utf8(b"caf\xc3\xa9") == "café"
    assert as_valid_utf8(b"\xff") is None
