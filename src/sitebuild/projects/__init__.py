"""Project list data loading, repository join and rendering."""

from sitebuild.projects.index import RepoIndex, build_repo_index
from sitebuild.projects.loader import load_projects, load_repos
from sitebuild.projects.render import (
    escape_html,
    find_repo_for_link,
    normalize_repo_key,
    render_project_item,
    render_project_list,
)

__all__ = [
    "RepoIndex",
    "build_repo_index",
    "escape_html",
    "find_repo_for_link",
    "load_projects",
    "load_repos",
    "normalize_repo_key",
    "render_project_item",
    "render_project_list",
]
