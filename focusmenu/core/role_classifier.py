import os
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence
from xml.etree import ElementTree as ET
from focusmenu.core.models import (
    DesktopManagerInfo,
    ProcessFacts,
    RawIdentity,
    RoleTag,
    WindowSnapshot,
)
from focusmenu.core.name_resolver import NameResolver, ascii_lower
from focusmenu.core.process_inspector import ProcessInspector
from focusmenu.shared.command_runner import CommandRunner

DESKTOP_SHELL_NAMES = (
    "xfdesktop",
    "caja",
    "nemo-desktop",
    "nautilus-desktop",
    "pcmanfm",
)

# Binaries that only ever run as the desktop.
DESKTOP_ONLY_NAMES = ("xfdesktop", "nemo-desktop", "nautilus-desktop")

FILE_MANAGER_NAMES = (
    "caja",
    "thunar",
    "nemo",
    "nautilus",
    "pcmanfm",
    "dolphin",
    "konqueror",
)

HISTORY_BLACKLIST = (
    "Firefox",
    "firefox",
    "Mozilla Firefox",
    "Chrome",
    "Chromium",
    "Google Chrome",
    "chromium",
    "wget",
    "curl",
    "Thunderbird",
    "thunderbird",
    "Transmission",
    "qBittorrent",
    "aria2c",
    "yt-dlp",
    "youtube-dl",
)

SHELL_DISPLAY_NAMES = {
    "xfdesktop": "Xfdesktop",
    "nemo-desktop": "Nemo",
    "nautilus-desktop": "Nautilus",
    "caja": "Caja",
    "pcmanfm": "PCManFM",
}

FALLBACK_FILE_MANAGERS = ("caja", "thunar", "nemo", "nautilus")


@dataclass(frozen=True)
class DesktopFlags:
    """Desktop-mode switches found in a raw cmdline record."""

    force_desktop: bool = False
    no_default_window: bool = False
    desktop: bool = False

    @classmethod
    def from_cmdline(cls, raw: bytes) -> "DesktopFlags":
        return cls(
            force_desktop=b"--force-desktop" in raw,
            no_default_window=has_standalone_argument(raw, b"-n"),
            desktop=b"--desktop" in raw,
        )

    @property
    def caja_is_desktop(self) -> bool:
        # -n only keeps caja windowless, it is no proof of desktop mode.
        return self.force_desktop or self.desktop


def has_standalone_argument(raw: bytes, argument: bytes) -> bool:
    """
    True when `argument` appears in the cmdline record starting at an
    argument boundary and ending at a NUL, a space or the end of the record.
    """
    start = raw.find(argument)
    while start != -1:
        end = start + len(argument)
        starts_argument = start == 0 or raw[start - 1 : start] == b"\0"
        ends_argument = end >= len(raw) or raw[end : end + 1] in (b"\0", b" ")
        if starts_argument and ends_argument:
            return True
        start = raw.find(argument, start + 1)
    return False


def local_name(tag) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1].rsplit(":", 1)[-1]


def _children(element: ET.Element, name: str) -> Iterable[ET.Element]:
    return (child for child in element if local_name(child.tag) == name)


def bookmark_applications(bookmark: Optional[ET.Element]) -> List[str]:
    """
    Names of the applications recorded under info/metadata/applications
    of an XBEL bookmark element.
    """
    if bookmark is None:
        return []
    names = []
    for info in _children(bookmark, "info"):
        for metadata in _children(info, "metadata"):
            for applications in _children(metadata, "applications"):
                for application in _children(applications, "application"):
                    name = application.get("name")
                    if name:
                        names.append(name)
    return names


class RoleClassifier:
    """
    Decides which running applications are desktop shells, file managers or
    download tools whose files should stay out of the document history.
    """

    def __init__(
        self,
        owner,
        inspector: Optional[ProcessInspector] = None,
        name_resolver: Optional[NameResolver] = None,
        command_runner: Optional[CommandRunner] = None,
    ):
        self.logger = owner.logger
        self.inspector = inspector if inspector is not None else ProcessInspector(owner)
        self.name_resolver = (
            name_resolver
            if name_resolver is not None
            else NameResolver(owner, inspector=self.inspector)
        )
        self.command_runner = (
            command_runner if command_runner is not None else CommandRunner(owner)
        )
        extra_blacklist = owner.get_config(["history", "extra_blacklist"], []) or []
        self.history_blacklist = {
            ascii_lower(name) for name in (*HISTORY_BLACKLIST, *extra_blacklist)
        }

    def looks_like_shell_name(self, name: Optional[str]) -> bool:
        """Name-only check against the known desktop shells."""
        if not name:
            return False
        return ascii_lower(name) in DESKTOP_SHELL_NAMES

    def _flags_prove_shell(self, name: str, raw_cmdline: Optional[bytes]) -> bool:
        lowered = ascii_lower(name)
        if lowered in DESKTOP_ONLY_NAMES:
            return True
        if lowered == "caja" or name.startswith("Caja"):
            if not raw_cmdline:
                return False
            return DesktopFlags.from_cmdline(raw_cmdline).caja_is_desktop
        if lowered == "pcmanfm":
            return bool(raw_cmdline) and DesktopFlags.from_cmdline(raw_cmdline).desktop
        return False

    def is_shell_instance(self, app_name: Optional[str], pid: Optional[int]) -> bool:
        """
        Whether this running application is the one drawing the desktop.

        xfdesktop, nemo-desktop and nautilus-desktop always are. caja needs
        --force-desktop or --desktop in its cmdline record, pcmanfm needs
        --desktop.
        Args:
            app_name (Optional[str]): Application name reported by the toolkit.
            pid (Optional[int]): Owning process id.
        Returns:
            bool: True for a desktop-shell instance.
        """
        if not app_name:
            return False
        lowered = ascii_lower(app_name)
        if lowered in DESKTOP_ONLY_NAMES:
            return True
        if lowered not in ("caja", "pcmanfm") and not app_name.startswith("Caja"):
            return False
        return self._flags_prove_shell(app_name, self.inspector.read_cmdline(pid))

    def is_file_manager(self, app_name: Optional[str]) -> bool:
        if not app_name:
            return False
        if ascii_lower(app_name) in FILE_MANAGER_NAMES:
            return True
        return self.looks_like_shell_name(app_name)

    def is_history_blacklisted_name(self, app_name: Optional[str]) -> bool:
        return bool(app_name) and ascii_lower(app_name) in self.history_blacklist

    def should_blacklist_for_history(self, bookmark: Optional[ET.Element]) -> bool:
        """
        Whether a recent-document bookmark was produced by a download or
        fetch tool rather than an editor.
        Args:
            bookmark: An XBEL <bookmark> element, or None.
        Returns:
            bool: True if any recorded application is blacklisted.
        """
        return any(
            self.is_history_blacklisted_name(name)
            for name in bookmark_applications(bookmark)
        )

    def classify(self, app_name: Optional[str], pid: Optional[int] = None) -> RoleTag:
        if self.is_shell_instance(app_name, pid):
            return RoleTag.DESKTOP_SHELL
        if self.is_file_manager(app_name):
            return RoleTag.FILE_MANAGER
        if self.is_history_blacklisted_name(app_name):
            return RoleTag.BLACKLISTED_FOR_HISTORY
        return RoleTag.ORDINARY

    def _is_shell_process(self, process: ProcessFacts) -> bool:
        if not self.looks_like_shell_name(process.basename):
            return False
        return self._flags_prove_shell(process.basename, process.raw_cmdline)

    def discover_desktop_shell_instances(
        self,
        windows: Sequence[WindowSnapshot] = (),
        focused: Optional[WindowSnapshot] = None,
        processes: Optional[Sequence[ProcessFacts]] = None,
    ) -> List[DesktopManagerInfo]:
        """
        Find desktop-shell processes, including those owning no window.
        Args:
            windows: Current window snapshots, used to give a shell the same
                display name its windows would get.
            focused: The focused window, or None when the desktop has focus.
            processes: A process scan to reuse; scanned afresh when omitted.
        Returns:
            List[DesktopManagerInfo]: One record per shell instance, in pid order.
        """
        if processes is None:
            processes = self.inspector.scan_all_processes()
        shells = []
        for process in processes:
            if not self._is_shell_process(process):
                continue
            basename = ascii_lower(process.basename)
            display_name = SHELL_DISPLAY_NAMES.get(basename, process.basename)
            window = next((w for w in windows if w.pid == process.pid), None)
            if window is not None:
                display_name = self.name_resolver.resolve_display_name(
                    RawIdentity(
                        source_name=window.app_id,
                        pid=process.pid,
                        fallback_window_title=window.title,
                    )
                ).display_text
            is_active = focused is None or focused.pid == process.pid
            shells.append(
                DesktopManagerInfo(
                    pid=process.pid,
                    process_name=basename,
                    display_name=display_name,
                    is_active=is_active,
                )
            )
        self.logger.debug(f"Found {len(shells)} desktop shell instance(s).")
        return shells

    def get_default_file_manager(self) -> Optional[str]:
        """
        Ask xdg-mime for the directory handler, falling back to the first
        well-known file manager installed on PATH.
        Returns:
            Optional[str]: The handler's desktop id without ".desktop", or None.
        """
        output = self.command_runner.query(
            ["xdg-mime", "query", "default", "inode/directory"]
        )
        if output:
            if output.endswith(".desktop"):
                return os.path.basename(output)[: -len(".desktop")]
            return output
        for name in FALLBACK_FILE_MANAGERS:
            if self.command_runner.find_program(name):
                return name
        return None
