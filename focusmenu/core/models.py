"""
Plain records shared by the resolver components.

Nothing here performs I/O. Records that describe a running system
(ProcessFacts, WindowSnapshot, DesktopManagerInfo) are snapshots taken at
resolution time; they are never updated in place.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

UNTITLED_PROGRAM = "Untitled Program"
INVALID_APP_NAME = "Invalid App Name"
UNKNOWN_PROCESS = "unknown"

RawText = Union[str, bytes]


@dataclass(frozen=True)
class ProcessFacts:
    pid: int
    command_line: Tuple[str, ...]
    basename: str
    raw_cmdline: bytes = field(default=b"", repr=False, compare=False)


@dataclass(frozen=True)
class RawIdentity:
    """
    What the window-tracking layer knows about an application.

    Attributes:
        source_name: The toolkit's application name. May be empty or hold
            bytes that are not valid UTF-8.
        pid: Owning process id, when known.
        fallback_window_title: Title of the application's first window, used
            when source_name is empty.
    """

    source_name: Optional[RawText]
    pid: Optional[int] = None
    fallback_window_title: Optional[RawText] = None


@dataclass(frozen=True)
class ResolvedName:
    display_text: str

    def __str__(self) -> str:
        return self.display_text


class RoleTag(Enum):
    ORDINARY = "ordinary"
    FILE_MANAGER = "file-manager"
    DESKTOP_SHELL = "desktop-shell"
    BLACKLISTED_FOR_HISTORY = "blacklisted-for-history"


class LocaleType(Enum):
    POSIX = "posix"
    UNICODE_AWARE = "unicode"


class SortStyle(Enum):
    CAJA = "caja"
    THUNAR = "thunar"
    UNKNOWN_DEFAULTS_TO_CAJA = "unknown"


@dataclass(frozen=True)
class SortContext:
    """Collation settings computed once per session and passed to every comparison."""

    locale_type: LocaleType = LocaleType.UNICODE_AWARE
    sort_style: SortStyle = SortStyle.CAJA


@dataclass
class DesktopManagerInfo:
    pid: int
    process_name: str
    display_name: str
    is_active: bool = False

    def copy(self) -> "DesktopManagerInfo":
        """Independent copy for storage that outlives the scan which produced it."""
        return replace(self)


@dataclass(frozen=True)
class DesktopEntry:
    path: str
    name: Optional[str] = None
    icon: Optional[str] = None
    exec: Optional[str] = None


@dataclass(frozen=True)
class WindowSnapshot:
    """
    One window as reported by the window-tracking layer.

    The field names follow the compositor's view dictionaries; use
    WindowSnapshot.from_view() to build one from such a dictionary.
    """

    id: Any
    pid: Optional[int] = None
    app_id: Optional[RawText] = None
    title: Optional[RawText] = None
    minimized: bool = False
    role: str = "toplevel"
    layer: str = "workspace"
    mapped: bool = True
    activated: bool = False
    on_current_workspace: bool = True

    @classmethod
    def from_view(cls, view: Dict[str, Any]) -> "WindowSnapshot":
        pid = view.get("pid")
        return cls(
            id=view.get("id"),
            pid=pid if isinstance(pid, int) and pid > 0 else None,
            app_id=view.get("app-id"),
            title=view.get("title"),
            minimized=bool(view.get("minimized", False)),
            role=view.get("role") or "toplevel",
            layer=view.get("layer") or "workspace",
            mapped=view.get("mapped", True) is not False,
            activated=bool(view.get("activated", False)),
            on_current_workspace=bool(view.get("on-current-workspace", True)),
        )

    @property
    def is_toplevel(self) -> bool:
        return self.role == "toplevel" and self.layer == "workspace"
