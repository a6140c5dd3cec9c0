"""Repository metadata export to repos.json."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from sitebuild.github.auth import GitHubAuth
from sitebuild.github.client import GitHubClient

logger = logging.getLogger(__name__)

REPO_FIELDS = ("name", "full_name", "html_url", "description", "stargazers_count")


def slim_repo(repo: dict[str, Any]) -> dict[str, Any]:
    """Keep the fields the build and the client-side repo list read.

    ``url`` mirrors ``html_url`` because the browser script links to
    ``repo.url``; the API's own ``url`` is the API endpoint.
    """
    record = {key: repo.get(key) for key in REPO_FIELDS}
    record["url"] = repo.get("html_url")
    return record


async def fetch_repositories(
    client: GitHubClient,
    name: str,
    mode: str = "user",
    include_forks: bool = False,
) -> list[dict[str, Any]]:
    """Fetch all public repositories of a user or organization.

    Args:
        client: Open GitHub client.
        name: User or organization login.
        mode: "user" or "org".
        include_forks: Keep forked repositories.

    Returns:
        Slim repository records in API order (sorted by full name).
    """
    if mode == "org":
        path = f"/orgs/{name}/repos"
        params: dict[str, Any] = {"type": "public", "per_page": 100, "sort": "full_name"}
    else:
        path = f"/users/{name}/repos"
        params = {"type": "owner", "per_page": 100, "sort": "full_name"}

    logger.info("Fetching repositories for %s: %s", mode, name)

    records: list[dict[str, Any]] = []
    skipped_forks = 0
    async for page in client.paginate(path, params):
        for repo in page:
            if not isinstance(repo, dict):
                continue
            if repo.get("fork") and not include_forks:
                skipped_forks += 1
                continue
            records.append(slim_repo(repo))

    logger.info("Fetched %d repositories (%d forks skipped)", len(records), skipped_forks)
    return records


def write_repos_json(records: list[dict[str, Any]], path: Path) -> None:
    """Write repository records as pretty-printed JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(records, f, indent=2, ensure_ascii=False)
        f.write("\n")
    logger.info("Wrote %d repositories to %s", len(records), path)


def export_repos(
    name: str,
    output: Path,
    mode: str = "user",
    include_forks: bool = False,
    auth: GitHubAuth | None = None,
    base_url: str = GitHubClient.BASE_URL,
) -> int:
    """Fetch repository metadata and write it to output.

    Args:
        name: User or organization login.
        output: Destination repos.json.
        mode: "user" or "org".
        include_forks: Keep forked repositories.
        auth: Credentials; anonymous when None.
        base_url: API root.

    Returns:
        Number of repositories written.
    """

    async def _run() -> list[dict[str, Any]]:
        async with GitHubClient(
            auth or GitHubAuth(allow_anonymous=True), base_url=base_url
        ) as client:
            return await fetch_repositories(client, name, mode, include_forks)

    records = asyncio.run(_run())
    write_repos_json(records, output)
    return len(records)
