"""Project link resolution strategies."""

from sitebuild.projects.resolvers.base import BaseResolver, strip_vcs_prefix
from sitebuild.projects.resolvers.chain import ResolverChain
from sitebuild.projects.resolvers.fields import (
    ExplicitUrlResolver,
    GithubFieldResolver,
    NameLookupResolver,
    RepoFieldResolver,
    RepositoryFieldResolver,
)

__all__ = [
    "BaseResolver",
    "ExplicitUrlResolver",
    "GithubFieldResolver",
    "NameLookupResolver",
    "RepoFieldResolver",
    "RepositoryFieldResolver",
    "ResolverChain",
    "strip_vcs_prefix",
]
