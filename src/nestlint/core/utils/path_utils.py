# src/nestlint/core/utils/path_utils.py
from typing import List, Optional

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

RC_FILE_NAME = ".nestlintrc"
HTML_PATTERNS = ("*.html", "*.htm")


class PathUtils:
    """
    A central utility for reliably retrieving important package and project paths.
    """

    # --- Package specific paths

    @staticmethod
    def get_package_root() -> Path:
        """Returns the directory of the installed 'nestlint' package (holds settings.json)."""
        return Path(__file__).resolve().parents[2]

    @staticmethod
    def get_settings_file() -> Path:
        return PathUtils.get_package_root() / "settings.json"

    # --- Project specific paths ---

    @staticmethod
    def find_rc_file(start: Path) -> Optional[Path]:
        """
        Searches upwards from `start` (a file or directory) for a '.nestlintrc'.
        Returns None when no directory up to the filesystem root has one.
        """
        current_path = Path(start).resolve()
        if not current_path.is_dir():
            current_path = current_path.parent
        while True:
            candidate = current_path / RC_FILE_NAME
            if candidate.is_file():
                logger.debug("Found %s at %s", RC_FILE_NAME, candidate)
                return candidate
            if current_path == current_path.parent:
                return None
            current_path = current_path.parent

    # --- Helper methods ---

    @staticmethod
    def expand_html_files(paths) -> List[Path]:
        """
        Expands files and directories into a sorted, de-duplicated list of files.
        Directories are searched recursively for '*.html' and '*.htm'.
        """
        found = []
        for raw in paths:
            path = Path(raw)
            if path.is_dir():
                for pattern in HTML_PATTERNS:
                    found.extend(p for p in path.rglob(pattern) if p.is_file())
            else:
                found.append(path)
        return sorted(set(found))
