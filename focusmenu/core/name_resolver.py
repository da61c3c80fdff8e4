"""
Display-name resolution for running applications.

Toolkits report application names in wildly different shapes: reverse-domain
ids (org.gnome.Calculator), package names (my-cool-app), settings binaries
(xfce4-power-manager-settings) and sometimes the title of the focused window.
NameResolver turns all of them into something fit for a menu label by running
an ordered cascade of tiers; the first tier that produces a name wins.

Each tier is a plain function taking the candidate name and returning either
the display name or None, so the cascade can be exercised one tier at a time.
"""

from typing import Callable, Dict, Optional, Tuple, Union
from focusmenu.core.models import (
    INVALID_APP_NAME,
    UNKNOWN_PROCESS,
    UNTITLED_PROGRAM,
    RawIdentity,
    RawText,
    ResolvedName,
)
from focusmenu.core.process_inspector import ProcessInspector

TITLE_LENGTH_LIMIT = 20
TITLE_SEPARATORS = (" — ", " - ")
TITLE_CHARACTERS = (":", "/")

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)

EXACT_OVERRIDES = {
    "org.mozilla.firefox": "Firefox",
    "google-chrome": "Google Chrome",
    "code": "Visual Studio Code",
    "vlc": "VLC Media Player",
    "vlc media player": "VLC Media Player",
    "xfce4-about": "About Xfce",
    "xfce4-appfinder": "App Finder",
}
PREFIX_OVERRIDES = (("soffice", "LibreOffice"),)
SUFFIX_OVERRIDES = (("- audacious", "Audacious"),)

SETTINGS_PREFIXES = ("Xfce4-", "xfce4-")
SETTINGS_SUFFIX = "-settings"
REVERSE_DOMAIN_PREFIXES = ("org.", "Org.")


def ascii_lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def _ascii_upper(char: str) -> str:
    return char.upper() if "a" <= char <= "z" else char


def capitalize_first(text: str) -> str:
    """Uppercase the first character when it is an ASCII lowercase letter."""
    if not text:
        return text
    return _ascii_upper(text[0]) + text[1:]


def expand_dashes(text: str) -> str:
    """Turn every dash into a space and capitalize the letter after it."""
    chars = list(text)
    for i, char in enumerate(chars):
        if char == "-":
            chars[i] = " "
            if i + 1 < len(chars):
                chars[i + 1] = _ascii_upper(chars[i + 1])
    return "".join(chars)


def as_valid_utf8(value: Optional[RawText]) -> Optional[str]:
    """
    Return value as a str when it is valid UTF-8, otherwise None.

    Bytes are decoded strictly. A str is rejected when it carries lone
    surrogates, which is how os.fsdecode() smuggles undecodable bytes.
    """
    if value is None:
        return None
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError:
            return None
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return None
    return value


def looks_like_window_title(name: str, length_limit: int = TITLE_LENGTH_LIMIT) -> bool:
    return (
        len(name) > length_limit
        or any(separator in name for separator in TITLE_SEPARATORS)
        or any(char in name for char in TITLE_CHARACTERS)
    )


def builtin_override(name: str) -> Optional[str]:
    lowered = ascii_lower(name)
    if lowered in EXACT_OVERRIDES:
        return EXACT_OVERRIDES[lowered]
    for prefix, display_name in PREFIX_OVERRIDES:
        if lowered.startswith(prefix):
            return display_name
    for suffix, display_name in SUFFIX_OVERRIDES:
        if lowered.endswith(suffix):
            return display_name
    return None


def settings_app_name(name: str) -> Optional[str]:
    """Xfce4-<mid>-settings -> <Mid> with dashes expanded."""
    if not name.startswith(SETTINGS_PREFIXES) or not name.endswith(SETTINGS_SUFFIX):
        return None
    start = len(SETTINGS_PREFIXES[0])
    end = name.rfind(SETTINGS_SUFFIX)
    if end <= start:
        return None
    return expand_dashes(capitalize_first(name[start:end]))


def reverse_domain_name(name: str) -> Optional[str]:
    """org.vendor.App-Name -> App Name."""
    if not name.startswith(REVERSE_DOMAIN_PREFIXES):
        return None
    app_name = name[name.rfind(".") + 1 :]
    if not app_name:
        return None
    return expand_dashes(capitalize_first(app_name))


def single_word_name(name: str) -> Optional[str]:
    """A single all-lowercase word gets a capital first letter."""
    if not name or any(char in name for char in " .-"):
        return None
    if any("A" <= char <= "Z" for char in name):
        return None
    return capitalize_first(name)


def dash_expanded_name(name: str) -> Optional[str]:
    if "-" not in name:
        return None
    return capitalize_first(expand_dashes(name))


class NameResolver:
    """
    Resolves RawIdentity records into ResolvedName values.

    The resolver never fails: empty names fall back to the window title or
    "Untitled Program", names that are not valid UTF-8 become
    "Invalid App Name".
    """

    def __init__(self, owner, inspector: Optional[ProcessInspector] = None):
        """
        Args:
            owner: Object exposing `logger` and `get_config(key_path, default)`.
            inspector: Process inspector used to look through window titles
                masquerading as application names.
        """
        self.logger = owner.logger
        self.inspector = inspector if inspector is not None else ProcessInspector(owner)
        overrides = owner.get_config(["name_resolver", "overrides"], {}) or {}
        self.overrides: Dict[str, str] = {
            ascii_lower(str(raw)): str(display)
            for raw, display in overrides.items()
            if display
        }
        self.title_length_limit = int(
            owner.get_config(
                ["name_resolver", "title_length_limit"], TITLE_LENGTH_LIMIT
            )
        )
        self.tiers: Tuple[Tuple[str, Callable[[str], Optional[str]]], ...] = (
            ("manual-override", self.manual_override),
            ("settings-app", settings_app_name),
            ("reverse-domain", reverse_domain_name),
            ("single-word", single_word_name),
            ("dash-expansion", dash_expanded_name),
        )

    def manual_override(self, name: str) -> Optional[str]:
        configured = self.overrides.get(ascii_lower(name))
        if configured:
            return configured
        return builtin_override(name)

    def _name_from_title(self, title: Optional[RawText]) -> str:
        if title is None or len(title) == 0:
            return UNTITLED_PROGRAM
        valid_title = as_valid_utf8(title)
        if valid_title is None:
            return INVALID_APP_NAME
        return valid_title

    def _unmask_window_title(self, name: str, pid: Optional[int]) -> str:
        """Swap a window title posing as an app name for the process name."""
        if not looks_like_window_title(name, self.title_length_limit):
            return name
        if not isinstance(pid, int) or pid <= 0:
            return name
        process_name = self.inspector.get_process_name(pid)
        if not process_name or process_name == UNKNOWN_PROCESS:
            return name
        if as_valid_utf8(process_name) is None:
            return name
        self.logger.debug(
            f"Name '{name}' looks like a window title, using process name '{process_name}'."
        )
        return process_name

    def resolve_display_name(
        self, identity: Union[RawIdentity, RawText, None]
    ) -> ResolvedName:
        """
        Run the tier cascade for one application.
        Args:
            identity: A RawIdentity, or a bare source name.
        Returns:
            ResolvedName: Never empty, always valid UTF-8.
        """
        if not isinstance(identity, RawIdentity):
            identity = RawIdentity(source_name=identity)
        source_name = identity.source_name
        if source_name is None or len(source_name) == 0:
            return ResolvedName(self._name_from_title(identity.fallback_window_title))
        name = as_valid_utf8(source_name)
        if name is None:
            return ResolvedName(INVALID_APP_NAME)
        name = self._unmask_window_title(name, identity.pid)
        for tier_name, tier in self.tiers:
            display_name = tier(name)
            if display_name:
                self.logger.debug(
                    f"Resolved '{name}' to '{display_name}' by {tier_name}."
                )
                return ResolvedName(display_name)
        return ResolvedName(name)
