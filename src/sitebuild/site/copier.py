"""Recursive source tree copy."""

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def clean_output(dest: Path) -> None:
    """Remove the output directory if it exists.

    A file or symlink at the output path is removed too (a symlink is
    unlinked, never followed). Removal failures are treated as if nothing
    was there.
    """
    try:
        if dest.is_symlink() or dest.is_file():
            dest.unlink()
        else:
            shutil.rmtree(dest)
        logger.debug("Removed %s", dest)
    except OSError as e:
        logger.debug("Nothing removed at %s: %s", dest, e)


def copy_tree(src: Path, dest: Path) -> int:
    """Copy src to dest depth-first, creating directories as needed.

    Only file contents are copied; permissions and timestamps are not.

    Args:
        src: Existing file or directory.
        dest: Destination path.

    Returns:
        Number of files copied.

    Raises:
        OSError: On any read or write failure.
    """
    if src.is_dir():
        dest.mkdir(parents=True, exist_ok=True)
        files_copied = 0
        for entry in sorted(src.iterdir()):
            files_copied += copy_tree(entry, dest / entry.name)
        return files_copied

    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(src, dest)
    return 1
