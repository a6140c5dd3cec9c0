"""GitHub repository metadata fetching."""

from sitebuild.github.auth import AuthenticationError, GitHubAuth
from sitebuild.github.client import GitHubClient, GitHubHTTPError, parse_link_header
from sitebuild.github.repos import (
    export_repos,
    fetch_repositories,
    slim_repo,
    write_repos_json,
)

__all__ = [
    "AuthenticationError",
    "GitHubAuth",
    "GitHubClient",
    "GitHubHTTPError",
    "export_repos",
    "fetch_repositories",
    "parse_link_header",
    "slim_repo",
    "write_repos_json",
]
