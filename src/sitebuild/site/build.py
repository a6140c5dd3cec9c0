"""Site build orchestration.

Runs the pipeline in order: verify source, clean output, copy tree, inject
the project list, rewrite HTML paths. Copy and rewrite failures propagate to
the caller; project injection never fails the build.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from sitebuild.config import Config
from sitebuild.site.copier import clean_output, copy_tree
from sitebuild.site.inject import inject_projects
from sitebuild.site.rewrite import rewrite_html_files

logger = logging.getLogger(__name__)


class SourceNotFoundError(Exception):
    """Raised when the source directory does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Source folder not found: {path}")


@dataclass
class BuildResult:
    """Summary of one build run."""

    source: Path
    output: Path
    files_copied: int = 0
    html_rewritten: int = 0
    injection: str | None = None
    duration_seconds: float = 0.0


def _check_layout(source: Path, output: Path) -> None:
    """Refuse layouts where cleaning or copying would touch the source."""
    src = source.resolve()
    out = output.resolve()
    if out == src or out.is_relative_to(src) or src.is_relative_to(out):
        msg = f"Output directory {output} must not contain or be inside source {source}"
        raise ValueError(msg)


def build_site(config: Config) -> BuildResult:
    """Build the output tree from the source tree.

    Args:
        config: Build configuration with resolved directories.

    Returns:
        BuildResult with counts for each step.

    Raises:
        SourceNotFoundError: If the source directory is missing. Nothing is
            removed in that case.
        ValueError: If one of the directories contains the other.
        OSError: If copying or rewriting fails.
    """
    start_time = datetime.now(UTC)
    source = config.site.source_dir
    output = config.site.output_dir

    if not source.is_dir():
        raise SourceNotFoundError(source)
    _check_layout(source, output)

    result = BuildResult(source=source, output=output)

    logger.info("Cleaning %s", output)
    clean_output(output)

    logger.info("Copying %s -> %s", source, output)
    result.files_copied = copy_tree(source, output)
    logger.info("Copied %d files", result.files_copied)

    if config.projects.enabled:
        result.injection = inject_projects(config)

    logger.info("Rewriting HTML paths in %s", output)
    result.html_rewritten = rewrite_html_files(output, config.site.source_subdir)

    result.duration_seconds = (datetime.now(UTC) - start_time).total_seconds()
    logger.info(
        "Build complete: %d files copied, %d HTML files rewritten in %.2fs",
        result.files_copied,
        result.html_rewritten,
        result.duration_seconds,
    )
    return result
