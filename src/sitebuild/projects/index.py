"""Lookup indices over repository metadata."""

import logging
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepoIndex:
    """Case-insensitive lookups built once per build.

    Attributes:
        by_name: Lowercase short name -> repository record.
        by_full: Lowercase owner/name -> repository record. Holds both the
            full_name key and the path of html_url.
    """

    by_name: dict[str, dict[str, Any]] = field(default_factory=dict)
    by_full: dict[str, dict[str, Any]] = field(default_factory=dict)

    def html_url_for_name(self, name: str) -> str | None:
        """Canonical URL of the repository with this short name, if known."""
        repo = self.by_name.get(name.lower())
        if repo and repo.get("html_url"):
            return str(repo["html_url"])
        return None


def _url_path_key(html_url: Any) -> str | None:
    if not isinstance(html_url, str):
        return None
    try:
        parsed = urlparse(html_url)
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None
    return parsed.path.strip("/").lower() or None


def build_repo_index(repos: list[Any]) -> RepoIndex:
    """Index repository records by short name and owner/name.

    Later records overwrite earlier ones on key collisions. Entries that are
    not objects are skipped.

    Args:
        repos: Records from repos.json.

    Returns:
        Populated RepoIndex.
    """
    index = RepoIndex()
    skipped = 0

    for repo in repos:
        if not isinstance(repo, dict) or not repo:
            skipped += 1
            continue

        if repo.get("name"):
            index.by_name[str(repo["name"]).lower()] = repo
        if repo.get("full_name"):
            index.by_full[str(repo["full_name"]).lower()] = repo

        path_key = _url_path_key(repo.get("html_url"))
        if path_key:
            index.by_full[path_key] = repo

    if skipped:
        logger.debug("Skipped %d malformed repository records", skipped)

    return index
