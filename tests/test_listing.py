from focusmenu.core.listing import (
    app_has_hideable_windows,
    build_listing,
    is_desktop_window,
)
from focusmenu.core.models import RoleTag, WindowSnapshot
from tests.helpers import cmdline


def window(id, pid, app_id, title, **kwargs):
    return WindowSnapshot(id=id, pid=pid, app_id=app_id, title=title, **kwargs)


def desktop_window(id, pid, app_id):
    return window(id, pid, app_id, "Desktop", layer="background")


FIREFOX_B = window(1, 100, "org.mozilla.firefox", "b.html — Mozilla Firefox")
FIREFOX_A = window(2, 100, "org.mozilla.firefox", "a.html — Mozilla Firefox")
GEDIT = window(3, 200, "gedit", "notes.txt - gedit")


def test_is_desktop_window():
    assert is_desktop_window(window(1, 1, "x", "Desktop"))
    assert is_desktop_window(window(1, 1, "x", "Work Desktop"))
    assert is_desktop_window(window(1, 1, "x", "Doc", role="dialog"))
    assert is_desktop_window(window(1, 1, "x", "Doc", layer="background"))
    assert not is_desktop_window(window(1, 1, "x", "Desktop notes"))


def test_app_has_hideable_windows():
    assert app_has_hideable_windows([GEDIT])
    assert not app_has_hideable_windows([window(4, 200, "gedit", "a", minimized=True)])
    assert not app_has_hideable_windows([desktop_window(5, 10, "xfdesktop")])
    assert not app_has_hideable_windows(
        [window(6, 200, "gedit", "a", on_current_workspace=False)]
    )


def test_groups_sorts_and_labels(make_session):
    session = make_session()

    listing = build_listing(session, [GEDIT, FIREFOX_B, FIREFOX_A])

    assert [app.display_name for app in listing.applications] == ["Firefox", "Gedit"]
    firefox = listing.applications[0]
    assert [w.window.id for w in firefox.windows] == [2, 1]
    assert [w.label for w in firefox.windows] == ["a.html", "b.html"]
    assert listing.applications[1].windows[0].label == "notes.txt"
    assert firefox.role == RoleTag.ORDINARY
    assert listing.hide_current_label is None
    assert not listing.hide_current_enabled
    assert listing.hide_others_enabled
    assert not listing.show_all_enabled


def test_untitled_window_sorts_first_and_gets_placeholder(make_session):
    untitled = window(9, 200, "gedit", None)

    listing = build_listing(make_session(), [GEDIT, untitled])

    assert [w.label for w in listing.applications[0].windows] == ["Document", "notes.txt"]


def test_only_current_workspace_and_minimized_windows(make_session):
    elsewhere = window(10, 300, "mousepad", "a.txt", on_current_workspace=False)
    hidden = window(11, 400, "ristretto", "b.png", minimized=True, on_current_workspace=False)
    dialog = window(12, 500, "zenity", "Question", role="dialog")
    unmapped = window(13, 600, "abiword", "c.abw", mapped=False)

    listing = build_listing(make_session(), [elsewhere, hidden, dialog, unmapped])

    assert [app.display_name for app in listing.applications] == ["Ristretto"]
    assert listing.show_all_enabled
    assert not listing.hide_others_enabled


def test_focused_application_flags(make_session):
    listing = build_listing(make_session(), [GEDIT, FIREFOX_A], focused=GEDIT)

    assert listing.hide_current_label == "Hide Gedit"
    assert listing.hide_current_enabled
    assert listing.hide_others_enabled
    assert [app.is_active for app in listing.applications] == [False, True]
    assert listing.applications[1].windows[0].is_focused


def test_hide_others_ignores_focused_application(make_session):
    second_gedit = window(4, 200, "gedit", "todo.txt - gedit")

    listing = build_listing(make_session(), [GEDIT, second_gedit], focused=GEDIT)

    assert not listing.hide_others_enabled


def test_desktop_shells_listed_first(make_session, add_process):
    add_process(10, cmdline("/usr/bin/xfdesktop"))
    shell_window = desktop_window(20, 10, "xfdesktop")
    session = make_session()

    listing = build_listing(session, [shell_window, GEDIT], focused=shell_window)

    assert [(s.pid, s.display_name, s.is_active) for s in listing.desktop_shells] == [
        (10, "Xfdesktop", True)
    ]
    assert listing.hide_current_label == "Hide Xfdesktop"
    assert not listing.hide_current_enabled
    assert [app.display_name for app in listing.applications] == ["Gedit"]


def test_thunar_window_stands_in_for_xfdesktop(make_session, add_process):
    add_process(10, cmdline("/usr/bin/xfdesktop"))
    add_process(11, cmdline("/usr/bin/thunar"))
    thunar = window(21, 11, "Thunar", "Home - Thunar")

    listing = build_listing(make_session(), [thunar])

    assert listing.desktop_shells == []
    assert listing.applications[0].role == RoleTag.FILE_MANAGER
    assert listing.applications[0].windows[0].label == "Home"


def test_caja_desktop_with_windows_is_not_listed_twice(make_session, add_process):
    add_process(30, cmdline("caja", "--force-desktop"))
    browser = window(31, 30, "caja", "Documents")

    listing = build_listing(make_session(), [browser], focused=browser)

    assert listing.desktop_shells == []
    assert listing.applications[0].role == RoleTag.DESKTOP_SHELL
    assert listing.hide_current_enabled
