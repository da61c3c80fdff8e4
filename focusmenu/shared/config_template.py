default_config = {
    "_section_hint": (
        "Settings for the focus-menu resolver, which names, classifies and "
        "orders the applications and windows shown by the panel switcher."
    ),
    "processes": {
        "_section_hint": "Where process command lines are read from.",
        "proc_root": "/proc",
        "proc_root_hint": (
            "Root of the process table. Each numeric entry must contain a "
            "NUL-separated 'cmdline' record."
        ),
    },
    "desktop_entries": {
        "_section_hint": "Launcher (.desktop) file lookup.",
        "search_paths": [
            "/usr/share/applications",
            "/usr/local/share/applications",
        ],
        "search_paths_hint": (
            "Directories scanned, in order, when looking up the launcher file "
            "of a running application."
        ),
    },
    "name_resolver": {
        "_section_hint": "How raw application identifiers become display names.",
        "overrides": {},
        "overrides_hint": (
            "Table of raw application names to display names, matched "
            "case-insensitively before any built-in rule "
            "(e.g., 'org.kde.kate' = 'Kate')."
        ),
        "title_length_limit": 20,
        "title_length_limit_hint": (
            "Names longer than this many characters are treated as window "
            "titles and replaced by the process name."
        ),
    },
    "history": {
        "_section_hint": "Recent-document history filtering.",
        "extra_blacklist": [],
        "extra_blacklist_hint": (
            "Additional application names whose recent files are hidden from "
            "the document history, on top of the built-in download tools."
        ),
        "recent_file": "",
        "recent_file_hint": (
            "Path to the XBEL recent-documents file. Empty means "
            "$XDG_DATA_HOME/recently-used.xbel."
        ),
    },
    "sorting": {
        "_section_hint": "Ordering of applications and windows.",
        "sort_style": "auto",
        "sort_style_hint": (
            "'auto' follows the running desktop shell, 'caja' or 'thunar' "
            "forces that file manager's ordering."
        ),
        "locale": "auto",
        "locale_hint": (
            "'auto' reads LC_ALL, LC_COLLATE and LANG; 'posix' or 'unicode' "
            "forces the collation type."
        ),
    },
}
