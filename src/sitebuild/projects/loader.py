"""Loading of the project and repository metadata data files."""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


def load_projects(path: Path) -> list[Any] | None:
    """Load the project list.

    Args:
        path: Path to projects.json.

    Returns:
        The project list, an empty list when the document is valid JSON but
        not an array, or None when the file is missing or unparsable.
    """
    try:
        projects = _read_json(path)
    except (OSError, ValueError, RecursionError) as e:
        logger.warning("No valid projects file at %s (%s), skipping injection", path, e)
        return None

    if not isinstance(projects, list):
        logger.warning("Projects file %s is not a JSON array, treating as empty", path)
        return []

    logger.info("Loaded %d projects from %s", len(projects), path)
    return projects


def load_repos(path: Path) -> list[Any]:
    """Load repository metadata, which is optional.

    Missing, unparsable or non-array files all yield an empty list.
    """
    try:
        repos = _read_json(path)
    except (OSError, ValueError, RecursionError) as e:
        logger.debug("No repository metadata at %s: %s", path, e)
        return []

    if not isinstance(repos, list):
        logger.debug("Repository metadata at %s is not a JSON array", path)
        return []

    logger.info("Loaded %d repository records from %s", len(repos), path)
    return repos
