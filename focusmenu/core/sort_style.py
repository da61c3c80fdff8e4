import locale
import os
from typing import Iterable, Mapping, Optional
from focusmenu.core.models import DesktopManagerInfo, LocaleType, SortContext, SortStyle

LOCALE_VARIABLES = ("LC_ALL", "LC_COLLATE", "LANG")
POSIX_LOCALES = ("C", "POSIX")
UNICODE_FALLBACK_LOCALE = "C.UTF-8"

SORT_STYLE_SETTINGS = {"caja": SortStyle.CAJA, "thunar": SortStyle.THUNAR}
LOCALE_SETTINGS = {"posix": LocaleType.POSIX, "unicode": LocaleType.UNICODE_AWARE}


def detect_locale_name(environ: Optional[Mapping[str, str]] = None) -> str:
    """
    The collation locale named by LC_ALL, then LC_COLLATE, then LANG; the
    first non-empty one wins and "C" is assumed when all are unset.
    """
    if environ is None:
        environ = os.environ
    return next(
        (environ[name] for name in LOCALE_VARIABLES if environ.get(name)), "C"
    )


def detect_locale(environ: Optional[Mapping[str, str]] = None) -> LocaleType:
    if detect_locale_name(environ) in POSIX_LOCALES:
        return LocaleType.POSIX
    return LocaleType.UNICODE_AWARE


def apply_collation_locale(
    owner, locale_type: LocaleType, environ: Optional[Mapping[str, str]] = None
) -> Optional[str]:
    """
    Switch the process's LC_COLLATE to match the session's LocaleType, so
    GLib collation follows the user's locale.
    Args:
        owner: Object exposing `logger`.
        locale_type: The resolved collation type.
        environ: Environment the locale name is read from.
    Returns:
        Optional[str]: The locale now in effect, or None if none could be set.
    """
    if locale_type == LocaleType.POSIX:
        candidates = ["C"]
    else:
        name = detect_locale_name(environ)
        candidates = [UNICODE_FALLBACK_LOCALE]
        if name not in POSIX_LOCALES:
            candidates.insert(0, name)
    for candidate in candidates:
        try:
            applied = locale.setlocale(locale.LC_COLLATE, candidate)
        except locale.Error as e:
            owner.logger.warning(f"Cannot collate with locale '{candidate}': {e}")
            continue
        owner.logger.debug(f"Collating with locale '{applied}'.")
        return applied
    return None


def detect_sort_style(shells: Iterable[DesktopManagerInfo]) -> SortStyle:
    """
    Caja-style ordering for a caja desktop, Thunar-style for xfdesktop.
    The first recognised shell decides; no shell at all means Caja.
    """
    for shell in shells:
        if shell.process_name == "caja":
            return SortStyle.CAJA
        if shell.process_name == "xfdesktop":
            return SortStyle.THUNAR
    return SortStyle.CAJA


def build_sort_context(
    owner,
    shells_provider,
    environ: Optional[Mapping[str, str]] = None,
) -> SortContext:
    """
    Resolve the session's SortContext, honouring the "sorting" settings.
    Args:
        owner: Object exposing `logger` and `get_config(key_path, default)`.
        shells_provider: Callable returning the desktop shells; only called
            when the sort style is left on "auto".
        environ: Environment used for locale detection.
    Returns:
        SortContext: The collation settings for every later comparison.
    """
    style_setting = str(owner.get_config(["sorting", "sort_style"], "auto")).lower()
    locale_setting = str(owner.get_config(["sorting", "locale"], "auto")).lower()
    if style_setting in SORT_STYLE_SETTINGS:
        sort_style = SORT_STYLE_SETTINGS[style_setting]
    else:
        if style_setting != "auto":
            owner.logger.warning(
                f"Unknown sort_style '{style_setting}' in configuration, detecting instead."
            )
        sort_style = detect_sort_style(shells_provider())
    if locale_setting in LOCALE_SETTINGS:
        locale_type = LOCALE_SETTINGS[locale_setting]
    else:
        if locale_setting != "auto":
            owner.logger.warning(
                f"Unknown locale '{locale_setting}' in configuration, detecting instead."
            )
        locale_type = detect_locale(environ)
    apply_collation_locale(owner, locale_type, environ)
    owner.logger.info(
        f"Sorting with {sort_style.value} style in a {locale_type.value} locale."
    )
    return SortContext(locale_type=locale_type, sort_style=sort_style)
