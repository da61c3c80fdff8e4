"""
File-manager-aware ordering of application names and window titles.

Caja and Thunar disagree about where names starting with "." or "#" belong,
and Caja falls back to plain byte order in the C locale. Everything else is
ordered the way file managers order filenames: runs of digits compare by
value ("file2" before "file10") and the text between them is compared with
GLib's collation in the session's LC_COLLATE.
"""

import re
from functools import cmp_to_key, lru_cache
from typing import Callable, Iterable, List, Optional, Tuple
from urllib.parse import quote
from gi.repository import GLib  # pyright: ignore
from focusmenu.core.models import LocaleType, RawText, SortContext, SortStyle
from focusmenu.core.name_resolver import as_valid_utf8, ascii_lower

DOCUMENT_FALLBACK = "Document"
INVALID_WINDOW_NAME = "Invalid Window Name"
# Reserved characters a URI path may carry unescaped.
URI_PATH_SAFE = "!$&'()*+,;=:@/"
DOCUMENT_SEPARATOR = " - "
APP_SUFFIX_SEPARATORS = (
    " — ",
    " – ",
    " - ",
    " ― ",
    " ‒ ",
    " ⸺ ",
    " ⸻ ",
    "—",
    "–",
    "-",
)
_ASCII_WHITESPACE = " \t\n\v\f\r"
_DIGIT_RUN = re.compile(r"([0-9]+)")


def special_char_priority(name: Optional[str], style: SortStyle) -> int:
    """
    0 sorts before 1. Caja puts "." and "#" names last, Thunar puts only
    "." names first. Unknown styles behave like Caja.
    """
    if not name:
        return 1
    if style == SortStyle.THUNAR:
        return 0 if name[0] == "." else 1
    return 1 if name[0] in ".#" else 0


def _utf8_bytes(text: str) -> bytes:
    return text.encode("utf-8", "surrogatepass")


def _byte_compare(a: str, b: str) -> int:
    a_bytes, b_bytes = _utf8_bytes(a), _utf8_bytes(b)
    return (a_bytes > b_bytes) - (a_bytes < b_bytes)


@lru_cache(maxsize=4096)
def filename_segments(name: str) -> Tuple[str, ...]:
    """
    Split a name into alternating text and digit runs, text first:
    "file10.txt" -> ("file", "10", ".txt").
    """
    if as_valid_utf8(name) is None:
        name = _utf8_bytes(name).decode("utf-8", "replace")
    return tuple(_DIGIT_RUN.split(name))


def _compare_segment(a: str, b: str, is_digits: bool) -> int:
    if is_digits:
        # By value, then fewer leading zeros first.
        value_a, value_b = a.lstrip("0"), b.lstrip("0")
        if value_a != value_b:
            if len(value_a) != len(value_b):
                return -1 if len(value_a) < len(value_b) else 1
            return -1 if value_a < value_b else 1
        return (len(a) > len(b)) - (len(a) < len(b))
    if a == b:
        return 0
    order = GLib.utf8_collate(a, b)
    return (order > 0) - (order < 0)


def collate_filenames(a: str, b: str) -> int:
    """Natural filename comparison under the current LC_COLLATE."""
    segments_a = filename_segments(a)
    segments_b = filename_segments(b)
    for index, (segment_a, segment_b) in enumerate(zip(segments_a, segments_b)):
        order = _compare_segment(segment_a, segment_b, index % 2 == 1)
        if order:
            return order
    return (len(segments_a) > len(segments_b)) - (len(segments_a) < len(segments_b))


def compare(
    a: Optional[str], b: Optional[str], style: SortStyle, locale_type: LocaleType
) -> int:
    """
    Three-way comparison of two names the way the desktop's file manager orders them.
    Args:
        a, b: Names to compare. None sorts before any string.
        style: The file manager whose ordering is imitated.
        locale_type: Collation type of the session.
    Returns:
        int: Negative, zero or positive. Zero only for equal names.
    """
    if a is None and b is None:
        return 0
    if a is None:
        return -1
    if b is None:
        return 1
    priority_a = special_char_priority(a, style)
    priority_b = special_char_priority(b, style)
    if priority_a != priority_b:
        return -1 if priority_a < priority_b else 1
    if style == SortStyle.CAJA and locale_type == LocaleType.POSIX:
        return _byte_compare(a, b)
    return collate_filenames(a, b) or _byte_compare(a, b)


def compare_in_context(a: Optional[str], b: Optional[str], context: SortContext) -> int:
    return compare(a, b, context.sort_style, context.locale_type)


def sort_key(context: SortContext) -> Callable:
    """Key function for sorted() over names, bound to one session's context."""
    return cmp_to_key(lambda a, b: compare_in_context(a, b, context))


def sort_names(names: Iterable[Optional[str]], context: SortContext) -> List[Optional[str]]:
    return sorted(names, key=sort_key(context))


def escape_invalid_utf8(raw: bytes) -> str:
    """
    Percent-escape the bytes of raw that are not valid UTF-8, together with
    ASCII characters a URI path may not carry. Valid multi-byte sequences
    are kept as they are.
    """
    parts = []
    for char in raw.decode("utf-8", "surrogateescape"):
        code = ord(char)
        if 0xDC80 <= code <= 0xDCFF:
            parts.append("%%%02X" % (code - 0xDC00))
        elif code < 0x80:
            parts.append(quote(char, safe=URI_PATH_SAFE))
        else:
            parts.append(char)
    return "".join(parts)


def ensure_valid_title(title: Optional[RawText]) -> str:
    if title is None:
        return ""
    valid = as_valid_utf8(title)
    if valid is not None:
        return valid
    if isinstance(title, str):
        try:
            title = title.encode("utf-8", "surrogateescape")
        except UnicodeEncodeError:
            return INVALID_WINDOW_NAME
    return escape_invalid_utf8(title)


def extract_sortable_document_name(window_title: Optional[RawText]) -> str:
    """
    "~/path/report.odt - Writer" -> "report.odt".
    """
    if window_title is None:
        return ""
    safe_title = ensure_valid_title(window_title)
    filename_part = safe_title[safe_title.rfind("/") + 1 :]
    if DOCUMENT_SEPARATOR in safe_title:
        separator = filename_part.rfind(DOCUMENT_SEPARATOR)
        if separator != -1:
            filename_part = filename_part[:separator]
    return filename_part


def compare_window_titles(
    a: Optional[RawText], b: Optional[RawText], context: SortContext
) -> int:
    if a is None and b is None:
        return 0
    if a is None:
        return -1
    if b is None:
        return 1
    return compare_in_context(
        extract_sortable_document_name(a),
        extract_sortable_document_name(b),
        context,
    )


def window_title_sort_key(context: SortContext) -> Callable:
    return cmp_to_key(lambda a, b: compare_window_titles(a, b, context))


def strip_application_suffix(
    window_title: Optional[str], app_name: Optional[str]
) -> str:
    """
    Remove a trailing "<separator><app name>" from a window title.

    Separators are tried in a fixed priority order, each at its rightmost
    occurrence; the first one followed by text ending in the application
    name (at a word boundary) is cut. "Document" replaces an empty result.
    Args:
        window_title (Optional[str]): Title as reported by the toolkit.
        app_name (Optional[str]): Display name of the owning application.
    Returns:
        str: The title without the application suffix.
    """
    if window_title is None:
        return ""
    if app_name is None:
        return window_title
    app_len = len(app_name)
    lowered_app = ascii_lower(app_name)
    result = window_title
    for separator in APP_SUFFIX_SEPARATORS:
        position = window_title.rfind(separator)
        if position == -1:
            continue
        after = window_title[position + len(separator) :]
        if len(after) < app_len:
            continue
        start = len(after) - app_len
        if ascii_lower(after[start:]) != lowered_app:
            continue
        if start == 0 or after[start - 1] == " ":
            result = window_title[:position]
            break
    result = result.strip(_ASCII_WHITESPACE)
    return result or DOCUMENT_FALLBACK
