"""HTML asset path rewriting for subpath hosting.

Output pages live at the site root, so references written for the source
layout are flattened to ``./``:

1. ``/img/a.png``           -> ``./img/a.png``
2. ``../src/img/a.png``     -> ``./img/a.png``  (also ``src/img/a.png``)
3. ``../about.html``        -> ``./about.html``

Each rule runs over the whole document before the next one.
"""

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

ROOT_RELATIVE = re.compile(r"""(href|src)=["']/([^"']+)["']""")
PARENT_RELATIVE = re.compile(r"""(href|src)=["']\.\./([^"']+)["']""")


def _source_subdir_pattern(source_subdir: str) -> re.Pattern[str]:
    return re.compile(rf"""(href|src)=["'](?:\.\./)?{re.escape(source_subdir)}/([^"']+)["']""")


def rewrite_html_content(content: str, source_subdir: str = "src") -> str:
    """Rewrite href/src values of one HTML document.

    Args:
        content: HTML text.
        source_subdir: Source directory name dropped by the second rule.

    Returns:
        Rewritten HTML text. Values are always emitted double-quoted.
    """
    content = ROOT_RELATIVE.sub(r'\1="./\2"', content)
    content = _source_subdir_pattern(source_subdir).sub(r'\1="./\2"', content)
    content = PARENT_RELATIVE.sub(r'\1="./\2"', content)
    return content


def is_html_file(path: Path) -> bool:
    """Check for the .html extension, case-insensitively."""
    return path.name.lower().endswith(".html")


def read_html(path: Path) -> str:
    """Read HTML keeping line endings and undecodable bytes intact."""
    with path.open(encoding="utf-8", errors="surrogateescape", newline="") as f:
        return f.read()


def write_html(path: Path, content: str) -> None:
    """Write HTML produced by read_html without altering line endings."""
    with path.open("w", encoding="utf-8", errors="surrogateescape", newline="") as f:
        f.write(content)


def rewrite_html_files(root: Path, source_subdir: str = "src") -> int:
    """Rewrite every HTML file below root in place.

    Files are written back only when their content changed.

    Args:
        root: Output directory.
        source_subdir: Source directory name dropped by the second rule.

    Returns:
        Number of files written.

    Raises:
        OSError: If a file cannot be read or written.
    """
    files_written = 0
    for entry in sorted(root.iterdir()):
        if entry.is_dir():
            files_written += rewrite_html_files(entry, source_subdir)
        elif is_html_file(entry):
            data = read_html(entry)
            new_data = rewrite_html_content(data, source_subdir)
            if new_data != data:
                write_html(entry, new_data)
                logger.debug("Rewrote paths in %s", entry)
                files_written += 1
    return files_written
