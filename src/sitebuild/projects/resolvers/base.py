"""Base resolver interface for project link resolution."""

import re
from abc import ABC, abstractmethod
from typing import Any

from sitebuild.projects.index import RepoIndex

VCS_PREFIX = re.compile(r"^git\+")


def strip_vcs_prefix(value: str) -> str:
    """Drop a leading ``git+`` from package-manifest style URLs."""
    return VCS_PREFIX.sub("", value)


class BaseResolver(ABC):
    """Abstract base class for link resolution strategies.

    A resolver inspects one project record and either produces a URL or
    returns None so the next strategy in the chain gets a chance.
    """

    name: str = "base"

    def __init__(self, host: str = "github.com") -> None:
        """Initialize resolver.

        Args:
            host: Repository hosting domain used for canonical URLs.
        """
        self.host = host

    def canonical_url(self, owner_repo: str) -> str:
        """Build the web URL of an owner/name repository reference."""
        return f"https://{self.host}/{owner_repo}"

    def resolve_shorthand(self, value: str, index: RepoIndex) -> str | None:
        """Resolve a URL, owner/name, or bare repository name string."""
        if value.startswith("http"):
            return value
        if "/" in value:
            return self.canonical_url(value)
        return index.html_url_for_name(value)

    @abstractmethod
    def resolve(self, project: dict[str, Any], index: RepoIndex) -> str | None:
        """Resolve a link for a project.

        Args:
            project: Project record from projects.json.
            index: Repository metadata lookups.

        Returns:
            URL string, or None when this strategy does not apply.
        """
