"""
One resolver session: configuration, logger and every component wired
together, with the sort context computed once on first use.
"""

import os
from functools import cached_property
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence, Union
import structlog
from focusmenu.core import listing
from focusmenu.core.comparator import sort_names, window_title_sort_key
from focusmenu.core.desktop_entry import DesktopEntryLocator
from focusmenu.core.history import RecentDocument, RecentDocumentReader
from focusmenu.core.log_setup import LOGGER_NAME
from focusmenu.core.models import (
    DesktopManagerInfo,
    ProcessFacts,
    RawIdentity,
    RawText,
    ResolvedName,
    RoleTag,
    SortContext,
    WindowSnapshot,
)
from focusmenu.core.name_resolver import NameResolver
from focusmenu.core.process_inspector import ProcessInspector
from focusmenu.core.role_classifier import RoleClassifier
from focusmenu.core.sort_style import build_sort_context
from focusmenu.shared.command_runner import CommandRunner
from focusmenu.shared.config_handler import ConfigHandler
from focusmenu.shared.path_handler import PathHandler


class ResolverSession:
    def __init__(
        self,
        logger=None,
        config_handler: Optional[ConfigHandler] = None,
        config_file: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """
        Args:
            logger: structlog logger; the "focusmenu" logger when omitted.
            config_handler: A ready ConfigHandler. Built from config_file otherwise.
            config_file: Explicit config.toml path. Defaults to the XDG location.
            environ: Environment for XDG and locale lookups. Defaults to os.environ.
        """
        self.logger = logger if logger is not None else structlog.get_logger(LOGGER_NAME)
        self.environ = os.environ if environ is None else environ
        self.path_handler = PathHandler(self, self.environ)
        if config_handler is None:
            if config_file is None:
                config_file = self.path_handler.get_config_file()
            config_handler = ConfigHandler(self, config_file)
        self.config_handler = config_handler
        self.inspector = ProcessInspector(self)
        self.command_runner = CommandRunner(self)
        self.name_resolver = NameResolver(self, inspector=self.inspector)
        self.role_classifier = RoleClassifier(
            self,
            inspector=self.inspector,
            name_resolver=self.name_resolver,
            command_runner=self.command_runner,
        )
        self.desktop_locator = DesktopEntryLocator(self, inspector=self.inspector)
        self.history_reader = RecentDocumentReader(self, self.role_classifier)

    def get_config(self, key_path, default=None):
        """Safely retrieves a configuration value using a list of keys."""
        return self.config_handler.get_root_setting(key_path, default)

    @cached_property
    def sort_context(self) -> SortContext:
        return build_sort_context(self, self.discover_desktop_shells, self.environ)

    def resolve_display_name(
        self, identity: Union[RawIdentity, RawText, None]
    ) -> ResolvedName:
        return self.name_resolver.resolve_display_name(identity)

    def display_name_for_window(self, window: WindowSnapshot) -> ResolvedName:
        return self.name_resolver.resolve_display_name(
            RawIdentity(
                source_name=window.app_id,
                pid=window.pid,
                fallback_window_title=window.title,
            )
        )

    def classify(self, app_name: Optional[str], pid: Optional[int] = None) -> RoleTag:
        return self.role_classifier.classify(app_name, pid)

    def find_desktop_entry(
        self, app_name: Optional[str], pid: Optional[int] = None
    ) -> Optional[str]:
        return self.desktop_locator.find_desktop_entry(app_name, pid)

    def discover_desktop_shells(
        self,
        windows: Sequence[WindowSnapshot] = (),
        focused: Optional[WindowSnapshot] = None,
        processes: Optional[Sequence[ProcessFacts]] = None,
    ) -> List[DesktopManagerInfo]:
        return self.role_classifier.discover_desktop_shell_instances(
            windows, focused, processes
        )

    def sort_names(self, names: Iterable[Optional[str]]) -> List[Optional[str]]:
        return sort_names(names, self.sort_context)

    def sort_windows(self, windows: Iterable[WindowSnapshot]) -> List[WindowSnapshot]:
        """Order windows by the document part of their titles."""
        title_key = window_title_sort_key(self.sort_context)
        return sorted(windows, key=lambda window: title_key(window.title))

    def build_listing(
        self,
        windows: Sequence[WindowSnapshot],
        focused: Optional[WindowSnapshot] = None,
    ) -> listing.SwitcherListing:
        processes = self.inspector.scan_all_processes()
        return listing.build_listing(self, windows, focused, processes)

    def recent_documents(
        self, path: Optional[Union[str, Path]] = None
    ) -> List[RecentDocument]:
        if path is None:
            path = self.get_config(["history", "recent_file"], "") or None
        if path is None:
            path = self.path_handler.get_recent_documents_file()
        return self.history_reader.read(path)
