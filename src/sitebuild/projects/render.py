"""HTML fragment rendering for the project list."""

import logging
import re
from typing import Any

from sitebuild.projects.index import RepoIndex, build_repo_index
from sitebuild.projects.resolvers import ResolverChain, strip_vcs_prefix

logger = logging.getLogger(__name__)

_ESCAPES = (("&", "&amp;"), ("<", "&lt;"), (">", "&gt;"), ('"', "&quot;"))


def escape_html(value: Any) -> str:
    """Escape ``& < > "`` in text embedded into markup or attributes."""
    text = "" if value is None else str(value)
    for char, entity in _ESCAPES:
        text = text.replace(char, entity)
    return text


def normalize_repo_key(href: str, host: str = "github.com") -> str:
    """Reduce a repository URL to a lowercase ``owner/name`` key."""
    key = strip_vcs_prefix(href)
    key = re.sub(rf"^https?://(www\.)?{re.escape(host)}/", "", key, flags=re.IGNORECASE)
    return key.rstrip("/").lower()


def find_repo_for_link(href: str, index: RepoIndex, host: str = "github.com") -> dict[str, Any] | None:
    """Match a resolved link against repository metadata.

    Tries the owner/name key first, then only the last path segment as a
    short name. The fallback can pick the wrong owner's repository when two
    owners use the same name.
    """
    if host not in href:
        return None
    key = normalize_repo_key(href, host)
    return index.by_full.get(key) or index.by_name.get(key.split("/")[-1])


def render_stars(repo: dict[str, Any] | None) -> str:
    """Star badge markup, or an empty string when no count is known."""
    if not repo or repo.get("stargazers_count") is None:
        return ""
    return f' <span class="stars">⭐ {escape_html(repo["stargazers_count"])}</span>'


def render_project_item(
    project: Any,
    chain: ResolverChain,
    host: str = "github.com",
) -> str:
    """Render one ``<li>`` for a project record.

    Records that are not objects render as an untitled, unlinked entry.
    """
    if not isinstance(project, dict):
        project = {}

    title = escape_html(project.get("title") or project.get("name") or "Untitled")
    description = project.get("description")
    desc_html = f"<p>{escape_html(description)}</p>" if description else ""

    href = chain.resolve(project)
    stars_html = render_stars(find_repo_for_link(href, chain.index, host)) if href else ""

    if href:
        link = f'<a href="{escape_html(href)}" target="_blank" rel="noopener noreferrer">{title}</a>'
    else:
        link = f"<span>{title}</span>"
    return f"<li>{link}{stars_html}{desc_html}</li>"


def render_project_list(
    projects: list[Any],
    repos: list[Any],
    host: str = "github.com",
) -> str:
    """Render list items for all projects in input order.

    Args:
        projects: Records from projects.json.
        repos: Records from repos.json.
        host: Repository hosting domain.

    Returns:
        Newline-joined ``<li>`` elements, without the surrounding list.
    """
    chain = ResolverChain(build_repo_index(repos), host=host)
    items = [render_project_item(project, chain, host) for project in projects]
    logger.debug("Link resolution: %s", chain.get_stats())
    return "\n".join(items)
