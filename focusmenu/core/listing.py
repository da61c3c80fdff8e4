"""
Ordered application and window collections for a window switcher.

This is the data half of the panel's switcher menu: which applications and
windows to show, in which order, under which labels, and which of the
"Hide <App>", "Hide Others" and "Show All" commands apply. Building widgets
from it is the caller's business.
"""

from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional, Sequence, Tuple
from focusmenu.core.comparator import (
    ensure_valid_title,
    sort_key,
    strip_application_suffix,
    window_title_sort_key,
)
from focusmenu.core.models import (
    DesktopManagerInfo,
    ProcessFacts,
    RoleTag,
    WindowSnapshot,
)
from focusmenu.core.name_resolver import as_valid_utf8, ascii_lower

DESKTOP_TITLE_SUFFIX = "Desktop"


@dataclass(frozen=True)
class WindowEntry:
    window: WindowSnapshot
    label: str
    is_focused: bool = False


@dataclass(frozen=True)
class ApplicationEntry:
    display_name: str
    pid: Optional[int]
    app_id: Optional[str]
    role: RoleTag
    is_active: bool
    windows: Tuple[WindowEntry, ...]


@dataclass
class SwitcherListing:
    hide_current_label: Optional[str] = None
    hide_current_enabled: bool = False
    hide_others_enabled: bool = False
    show_all_enabled: bool = False
    desktop_shells: List[DesktopManagerInfo] = field(default_factory=list)
    applications: List[ApplicationEntry] = field(default_factory=list)


def is_desktop_window(window: WindowSnapshot) -> bool:
    """
    Windows that must never be hidden: anything that is not a normal
    toplevel, and windows titled "Desktop" or "... Desktop".
    """
    if not window.is_toplevel:
        return True
    return ensure_valid_title(window.title).endswith(DESKTOP_TITLE_SUFFIX)


def is_listed_window(window: WindowSnapshot) -> bool:
    return (
        window.is_toplevel
        and window.mapped
        and (window.on_current_workspace or window.minimized)
    )


def app_has_hideable_windows(windows: Sequence[WindowSnapshot]) -> bool:
    return any(
        is_listed_window(window)
        and not window.minimized
        and not is_desktop_window(window)
        for window in windows
    )


def application_key(window: WindowSnapshot) -> Hashable:
    return (window.pid, window.app_id)


def _app_id_text(window: WindowSnapshot) -> Optional[str]:
    return as_valid_utf8(window.app_id) or None


def _same_window(a: WindowSnapshot, b: Optional[WindowSnapshot]) -> bool:
    return b is not None and a.id == b.id


def build_listing(
    session,
    windows: Sequence[WindowSnapshot],
    focused: Optional[WindowSnapshot] = None,
    processes: Optional[Sequence[ProcessFacts]] = None,
) -> SwitcherListing:
    """
    Group, name and order the windows of the current workspace.
    Args:
        session: The ResolverSession providing names, roles and the sort context.
        windows: Every window known to the window-tracking layer.
        focused: The focused window, or None when the desktop has focus.
        processes: A process scan to reuse for desktop-shell discovery.
    Returns:
        SwitcherListing: Desktop shells without windows of their own first,
        then applications ordered by display name.
    """
    context = session.sort_context
    listing = SwitcherListing()
    focused_key = application_key(focused) if focused is not None else None

    groups: Dict[Hashable, List[WindowSnapshot]] = {}
    for window in windows:
        if is_listed_window(window):
            groups.setdefault(application_key(window), []).append(window)
            if window.minimized:
                listing.show_all_enabled = True
            elif (
                not _same_window(window, focused)
                and not is_desktop_window(window)
                and application_key(window) != focused_key
            ):
                listing.hide_others_enabled = True

    names = {
        key: session.display_name_for_window(group[0]).display_text
        for key, group in groups.items()
    }

    if focused is not None:
        focused_name = names.get(focused_key)
        if focused_name is None:
            focused_name = session.display_name_for_window(focused).display_text
        listing.hide_current_label = f"Hide {focused_name}"
        listing.hide_current_enabled = True
        if session.role_classifier.is_shell_instance(
            _app_id_text(focused), focused.pid
        ):
            listing.hide_current_enabled = app_has_hideable_windows(
                [w for w in windows if application_key(w) == focused_key]
            )

    name_key = sort_key(context)
    title_key = window_title_sort_key(context)
    for key in sorted(groups, key=lambda k: name_key(names[k])):
        group = groups[key]
        display_name = names[key]
        first = group[0]
        ordered = sorted(group, key=lambda w: title_key(w.title))
        listing.applications.append(
            ApplicationEntry(
                display_name=display_name,
                pid=first.pid,
                app_id=_app_id_text(first),
                role=session.classify(_app_id_text(first), first.pid),
                is_active=key == focused_key,
                windows=tuple(
                    WindowEntry(
                        window=window,
                        label=strip_application_suffix(
                            ensure_valid_title(window.title), display_name
                        ),
                        is_focused=_same_window(window, focused),
                    )
                    for window in ordered
                ),
            )
        )

    listed_pids = {entry.pid for entry in listing.applications if entry.pid}
    thunar_listed = any(
        entry.app_id and ascii_lower(entry.app_id) == "thunar"
        for entry in listing.applications
    )
    for shell in session.discover_desktop_shells(windows, focused, processes):
        if shell.pid in listed_pids:
            continue
        if shell.process_name == "xfdesktop" and thunar_listed:
            continue
        listing.desktop_shells.append(shell.copy())
    return listing
