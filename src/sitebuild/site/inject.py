"""Project list injection into the designated output page."""

import logging
import re
from pathlib import Path

from sitebuild.config import Config
from sitebuild.projects import load_projects, load_repos, render_project_list
from sitebuild.site.rewrite import read_html, write_html

logger = logging.getLogger(__name__)

STRATEGY_MARKER = "marker"
STRATEGY_CONTAINER = "container"


def _container_pattern(container_id: str) -> re.Pattern[str]:
    return re.compile(
        rf"""(<div[^>]*id=["']{re.escape(container_id)}["'][^>]*>)([\s\S]*?)(</div>)""",
        re.IGNORECASE,
    )


def inject_fragment(
    html: str,
    items_html: str,
    placeholder: str = "<!--PROJECTS_PLACEHOLDER-->",
    container_ids: list[str] | None = None,
) -> tuple[str, str | None]:
    """Insert rendered list items into a page.

    The literal placeholder wins when present; only its first occurrence is
    replaced. Otherwise the inner content of each recognised ``<div>``
    container is replaced.

    Args:
        html: Page content.
        items_html: Rendered ``<li>`` elements.
        placeholder: Literal marker text.
        container_ids: Recognised container element ids.

    Returns:
        Tuple of (new page content, strategy used or None if nothing matched).
    """
    if container_ids is None:
        container_ids = ["projects-list", "projects-container"]

    if placeholder in html:
        return html.replace(placeholder, f"<ul>\n{items_html}\n</ul>", 1), STRATEGY_MARKER

    if not any(f'id="{cid}"' in html for cid in container_ids):
        return html, None

    replaced = 0
    for cid in container_ids:
        html, count = _container_pattern(cid).subn(
            lambda m: f"{m.group(1)}\n<ul>\n{items_html}\n</ul>\n{m.group(3)}",
            html,
            count=1,
        )
        replaced += count

    return html, STRATEGY_CONTAINER if replaced else None


def inject_projects(config: Config) -> str | None:
    """Render projects.json into the designated output page.

    Best effort: every failure is logged and the build carries on.

    Args:
        config: Build configuration.

    Returns:
        Injection strategy applied, or None when skipped.
    """
    target = config.target_html_path
    if not target.is_file():
        logger.debug("No %s in output, skipping project injection", target)
        return None

    try:
        projects = load_projects(config.projects_path)
        if projects is None:
            return None
        repos = load_repos(config.repos_path)

        items_html = render_project_list(projects, repos, host=config.projects.repo_host)
        html = read_html(target)
        new_html, strategy = inject_fragment(
            html,
            items_html,
            placeholder=config.projects.placeholder,
            container_ids=config.projects.container_ids,
        )
        if strategy is None:
            logger.warning(
                "No placeholder or projects container found in %s, skipping injection", target
            )
            return None

        write_html(target, new_html)
    except Exception:
        logger.exception("Failed to inject projects into %s", target)
        return None

    logger.info("Injected %d projects into %s (%s)", len(projects), target, strategy)
    return strategy
