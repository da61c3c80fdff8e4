import os
from pathlib import Path
from typing import Optional


class PathHandler:
    """
    Resolves the XDG base directories used by the resolver: where the
    configuration lives and where the desktop keeps its recent-documents file.
    Nothing is created on disk.
    """

    def __init__(self, owner, environ: Optional[dict] = None):
        """
        Args:
            owner: The object that owns this handler, used for accessing the logger.
            environ: Environment mapping to read XDG variables from. Defaults to os.environ.
        """
        self.app_name = "focus-menu"
        self._home = Path.home()
        self._environ = os.environ if environ is None else environ
        self.logger = owner.logger

    def _get_xdg_base_dir(self, env_var: str, default_path: Path) -> Path:
        """Helper to get XDG base directory with fallback."""
        path_str = self._environ.get(env_var)
        if path_str:
            return Path(path_str)
        return default_path

    def get_config_dir(self) -> Path:
        """
        Returns the path to the application's configuration directory:
        $XDG_CONFIG_HOME/focus-menu or ~/.config/focus-menu.
        """
        config_home = self._get_xdg_base_dir("XDG_CONFIG_HOME", self._home / ".config")
        return config_home / self.app_name

    def get_config_file(self) -> Path:
        return self.get_config_dir() / "config.toml"

    def get_recent_documents_file(self) -> Path:
        """
        Returns the freedesktop recent-documents bookmark file,
        $XDG_DATA_HOME/recently-used.xbel. The file is not created.
        """
        data_home = self._get_xdg_base_dir(
            "XDG_DATA_HOME", self._home / ".local" / "share"
        )
        return data_home / "recently-used.xbel"
