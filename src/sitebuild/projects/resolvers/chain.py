"""Resolver chain for project link resolution."""

import logging
from collections import defaultdict
from typing import Any

from sitebuild.projects.index import RepoIndex

from .base import BaseResolver
from .fields import (
    ExplicitUrlResolver,
    GithubFieldResolver,
    NameLookupResolver,
    RepoFieldResolver,
    RepositoryFieldResolver,
)

logger = logging.getLogger(__name__)


class ResolverChain:
    """Ordered link resolution strategies.

    Short-circuits on the first strategy that yields a URL and tracks which
    strategy resolved each project.
    """

    def __init__(self, index: RepoIndex, host: str = "github.com") -> None:
        """Initialize chain.

        Args:
            index: Repository metadata lookups shared by all strategies.
            host: Repository hosting domain used for canonical URLs.
        """
        self.index = index
        self.stats: dict[str, int] = defaultdict(int)

        self.resolvers: list[BaseResolver] = [
            ExplicitUrlResolver(host),
            RepositoryFieldResolver(host),
            GithubFieldResolver(host),
            RepoFieldResolver(host),
            NameLookupResolver(host),
        ]

    def resolve(self, project: dict[str, Any]) -> str | None:
        """Resolve a link for a project.

        Args:
            project: Project record.

        Returns:
            URL from the first matching strategy, or None.
        """
        for resolver in self.resolvers:
            href = resolver.resolve(project, self.index)
            if href:
                self.stats[resolver.name] += 1
                return href

        self.stats["unresolved"] += 1
        return None

    def get_stats(self) -> dict[str, int]:
        """Get per-strategy resolution counts."""
        return dict(self.stats)
