import logging

from focusmenu.core.models import (
    LocaleType,
    RawIdentity,
    RoleTag,
    SortStyle,
    WindowSnapshot,
)
from focusmenu.core.session import ResolverSession
from tests.helpers import cmdline


def test_sort_context_is_computed_once(make_session, add_process, monkeypatch):
    add_process(10, cmdline("xfdesktop"))
    session = make_session(environ={"LANG": "en_US.UTF-8"})
    calls = []
    original = session.discover_desktop_shells

    def counting(*args, **kwargs):
        calls.append(args)
        return original(*args, **kwargs)

    monkeypatch.setattr(session, "discover_desktop_shells", counting)

    first = session.sort_context
    second = session.sort_context

    assert first is second
    assert first.sort_style == SortStyle.THUNAR
    assert first.locale_type == LocaleType.UNICODE_AWARE
    assert len(calls) == 1


def test_settings_override_detection(make_session):
    session = make_session({"sorting": {"sort_style": "thunar", "locale": "posix"}})

    assert session.sort_context.sort_style == SortStyle.THUNAR
    assert session.sort_context.locale_type == LocaleType.POSIX
    assert session.sort_names([".b", "a", None]) == [None, ".b", "a"]


def test_get_config_walks_nested_keys(make_session):
    session = make_session({"name_resolver": {"overrides": {"kate": "Kate"}}})

    assert session.get_config(["name_resolver", "overrides", "kate"]) == "Kate"
    assert session.get_config(["name_resolver", "missing"], 5) == 5
    assert session.get_config(["sorting", "locale", "deeper"], "x") == "x"


def test_resolve_and_classify(make_session, add_process):
    add_process(40, cmdline("caja", "--desktop"))
    session = make_session({"name_resolver": {"overrides": {"kate": "Kate"}}})

    assert session.resolve_display_name("kate").display_text == "Kate"
    assert str(session.resolve_display_name(RawIdentity(b"org.gnome.Maps"))) == "Maps"
    assert session.classify("caja", 40) == RoleTag.DESKTOP_SHELL
    assert session.display_name_for_window(
        WindowSnapshot(id=1, pid=40, app_id="", title="Desktop")
    ).display_text == "Desktop"


def test_sort_windows_by_document_name(make_session):
    session = make_session()
    windows = [
        WindowSnapshot(id=1, title="~/b.txt - Mousepad"),
        WindowSnapshot(id=2, title=None),
        WindowSnapshot(id=3, title="/tmp/a.txt - Mousepad"),
    ]

    assert [w.id for w in session.sort_windows(windows)] == [2, 3, 1]


def test_build_listing_from_views(make_session):
    session = make_session()
    views = [
        {"id": 7, "pid": 70, "app-id": "org.gnome.Calculator", "title": "Calculator"},
        {"id": 8, "pid": 80, "app-id": "abiword", "title": "x.abw - AbiWord", "minimized": True},
    ]
    windows = [WindowSnapshot.from_view(view) for view in views]

    listing = session.build_listing(windows, focused=windows[0])

    assert [app.display_name for app in listing.applications] == ["Abiword", "Calculator"]
    assert listing.show_all_enabled
    assert listing.hide_current_label == "Hide Calculator"


def test_find_desktop_entry_uses_configured_paths(make_session, tmp_path):
    apps = tmp_path / "apps"
    apps.mkdir()
    (apps / "maps.desktop").write_text("[Desktop Entry]\nName=Maps\nExec=gnome-maps\n")
    session = make_session({"desktop_entries": {"search_paths": [str(apps)]}})

    assert session.find_desktop_entry("maps") == str(apps / "maps.desktop")


def test_recent_documents_default_location(make_session, tmp_path):
    data = tmp_path / "data"
    data.mkdir()
    (data / "recently-used.xbel").write_text(
        '<xbel version="1.0"><bookmark href="file:///a" modified="2024-01-01T00:00:00Z"/></xbel>'
    )
    session = make_session()

    assert [doc.href for doc in session.recent_documents()] == ["file:///a"]


def test_recent_documents_configured_file(make_session, tmp_path):
    custom = tmp_path / "custom.xbel"
    custom.write_text('<xbel version="1.0"><bookmark href="file:///b"/></xbel>')
    session = make_session({"history": {"recent_file": str(custom)}})

    assert [doc.href for doc in session.recent_documents()] == ["file:///b"]


def test_session_never_writes_configuration(tmp_path):
    environ = {"XDG_CONFIG_HOME": str(tmp_path / "cfg"), "LANG": "C"}

    session = ResolverSession(logger=logging.getLogger("tests.owner"), environ=environ)

    assert session.get_config(["sorting", "sort_style"]) == "auto"
    assert not (tmp_path / "cfg").exists()
