import os
from typing import Iterator, List, Optional, Sequence
from gi.repository import GLib  # pyright: ignore
from focusmenu.core.models import DesktopEntry, UNKNOWN_PROCESS
from focusmenu.core.name_resolver import ascii_lower
from focusmenu.core.process_inspector import ProcessInspector

DESKTOP_GROUP = "Desktop Entry"
DEFAULT_SEARCH_PATHS = (
    "/usr/share/applications",
    "/usr/local/share/applications",
)


def name_variants(app_name: str) -> List[str]:
    """The spellings tried against a launcher's Name key, in order."""
    lowered = ascii_lower(app_name)
    variants = [app_name, lowered, lowered.replace(" ", "-")]
    return list(dict.fromkeys(variants))


class DesktopEntryLocator:
    """
    Maps running applications to the launcher (.desktop) files that describe them.

    Attributes:
        search_paths (List[str]): Directories scanned for .desktop files, in order.
    """

    def __init__(
        self,
        owner,
        inspector: Optional[ProcessInspector] = None,
        search_paths: Optional[Sequence[str]] = None,
    ):
        self.logger = owner.logger
        self.inspector = inspector if inspector is not None else ProcessInspector(owner)
        if search_paths is None:
            search_paths = owner.get_config(
                ["desktop_entries", "search_paths"], list(DEFAULT_SEARCH_PATHS)
            )
        self.search_paths: List[str] = [
            os.path.expanduser(path) for path in search_paths or DEFAULT_SEARCH_PATHS
        ]

    def _iter_desktop_files(self, dir_path: str) -> Iterator[str]:
        try:
            file_names = sorted(os.listdir(dir_path))
        except OSError:
            return
        for file_name in file_names:
            if file_name.endswith(".desktop"):
                yield os.path.join(dir_path, file_name)

    def _load_keyfile(self, file_path: str) -> Optional[GLib.KeyFile]:
        keyfile = GLib.KeyFile.new()
        try:
            if not keyfile.load_from_file(file_path, GLib.KeyFileFlags.NONE):
                return None
        except GLib.Error as e:
            self.logger.debug(f"Skipping unreadable desktop file {file_path}: {e}")
            return None
        return keyfile

    def _get_string(self, keyfile: GLib.KeyFile, key: str) -> Optional[str]:
        """Safely retrieves a string value from the keyfile."""
        try:
            return keyfile.get_string(DESKTOP_GROUP, key)
        except GLib.Error:
            return None

    def read_desktop_entry(self, file_path: str) -> Optional[DesktopEntry]:
        """
        Parse the keys of interest from a launcher file.
        Args:
            file_path (str): Path to a .desktop file.
        Returns:
            Optional[DesktopEntry]: The parsed entry, or None if the file is malformed.
        """
        keyfile = self._load_keyfile(file_path)
        if keyfile is None:
            return None
        return DesktopEntry(
            path=file_path,
            name=self._get_string(keyfile, "Name"),
            icon=self._get_string(keyfile, "Icon"),
            exec=self._get_string(keyfile, "Exec"),
        )

    def search_directory(self, dir_path: str, app_name: str) -> Optional[str]:
        """Return the first launcher in dir_path whose Name equals app_name, ignoring case."""
        wanted = ascii_lower(app_name)
        for file_path in self._iter_desktop_files(dir_path):
            entry = self.read_desktop_entry(file_path)
            if entry and entry.name and ascii_lower(entry.name) == wanted:
                return file_path
        return None

    def search_directory_by_executable(
        self, dir_path: str, exe_name: str
    ) -> Optional[str]:
        """Return the first launcher in dir_path whose Exec line mentions exe_name."""
        for file_path in self._iter_desktop_files(dir_path):
            entry = self.read_desktop_entry(file_path)
            if entry and entry.exec and exe_name in entry.exec:
                return file_path
        return None

    def find_desktop_entry(
        self, app_name: Optional[str], pid: Optional[int] = None
    ) -> Optional[str]:
        """
        Locate the launcher file of a running application.

        Every search path is tried with each spelling of the name first; the
        process's executable name is matched against Exec lines only when no
        Name matches.
        Args:
            app_name (Optional[str]): Display or toolkit name of the application.
            pid (Optional[int]): Process id used for the executable fallback.
        Returns:
            Optional[str]: Absolute path of the launcher, or None.
        """
        variants = name_variants(app_name) if app_name else []
        for dir_path in self.search_paths:
            for variant in variants:
                found = self.search_directory(dir_path, variant)
                if found:
                    self.logger.debug(f"Desktop entry for '{app_name}': {found}")
                    return found
        if pid is None:
            return None
        exe_name = self.inspector.get_process_name(pid)
        if exe_name == UNKNOWN_PROCESS:
            return None
        for dir_path in self.search_paths:
            found = self.search_directory_by_executable(dir_path, exe_name)
            if found:
                self.logger.debug(
                    f"Desktop entry for '{app_name}' found by executable '{exe_name}': {found}"
                )
                return found
        self.logger.debug(f"No desktop entry found for '{app_name}'.")
        return None
