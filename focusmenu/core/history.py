from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union
from xml.etree import ElementTree as ET
from focusmenu.core.role_classifier import (
    RoleClassifier,
    bookmark_applications,
    local_name,
)


@dataclass(frozen=True)
class RecentDocument:
    href: str
    modified: Optional[str]
    applications: Tuple[str, ...]


class RecentDocumentReader:
    """
    Reads the freedesktop recently-used.xbel bookmark file, leaving out
    files that a browser or download tool put there.
    """

    def __init__(self, owner, classifier: RoleClassifier):
        self.logger = owner.logger
        self.classifier = classifier

    def read(self, path: Union[str, Path]) -> List[RecentDocument]:
        """
        Args:
            path: Location of the XBEL file.
        Returns:
            List[RecentDocument]: Newest first. Empty when the file is
            missing or cannot be parsed.
        """
        try:
            tree = ET.parse(path)
        except FileNotFoundError:
            self.logger.debug(f"No recent documents file at {path}.")
            return []
        except (OSError, ET.ParseError) as e:
            self.logger.warning(f"Could not read recent documents from {path}: {e}")
            return []
        documents = []
        skipped = 0
        for bookmark in tree.getroot().iter():
            if local_name(bookmark.tag) != "bookmark":
                continue
            href = bookmark.get("href")
            if not href:
                continue
            if self.classifier.should_blacklist_for_history(bookmark):
                skipped += 1
                continue
            documents.append(
                RecentDocument(
                    href=href,
                    modified=bookmark.get("modified")
                    or bookmark.get("visited")
                    or bookmark.get("added"),
                    applications=tuple(bookmark_applications(bookmark)),
                )
            )
        # ISO 8601 timestamps order lexically.
        documents.sort(key=lambda doc: doc.modified or "", reverse=True)
        self.logger.debug(
            f"Read {len(documents)} recent document(s), skipped {skipped} from blacklisted applications."
        )
        return documents
