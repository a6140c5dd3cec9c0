"""Shared fixtures for sitebuild tests.

Provides:
- A small source tree resembling a GitHub Pages project
- Configuration pointing at temporary source/output directories
"""

import json
from pathlib import Path

import pytest

from sitebuild.config import Config

PROJECTS_PAGE = """<!DOCTYPE html>
<html>
<head>
    <link rel="stylesheet" href="/css/style.css">
</head>
<body>
    <nav><a href="../index.html">Home</a></nav>
    <main>
        <!--PROJECTS_PLACEHOLDER-->
    </main>
    <script src="../src/js/main.js"></script>
</body>
</html>
"""

INDEX_PAGE = """<!DOCTYPE html>
<html>
<head>
    <link rel="stylesheet" href="/css/style.css">
</head>
<body>
    <img src="../src/img/logo.png" alt="logo">
    <a href="https://example.com/">External</a>
    <div id="repo-container"></div>
    <script src="js/github.js"></script>
</body>
</html>
"""


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Create a sample source tree."""
    src = tmp_path / "src"
    (src / "css").mkdir(parents=True)
    (src / "js").mkdir()
    (src / "img").mkdir()
    (src / "data").mkdir()
    (src / "pages").mkdir()

    (src / "index.html").write_text(INDEX_PAGE, encoding="utf-8")
    (src / "projects.html").write_text(PROJECTS_PAGE, encoding="utf-8")
    (src / "pages" / "about.HTML").write_text(
        '<a href="../index.html">Back</a>\n', encoding="utf-8"
    )
    (src / "css" / "style.css").write_text("body { background: url(/img/bg.png); }\n")
    (src / "js" / "main.js").write_text("console.log('main');\n")
    (src / "img" / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x01binary")

    projects = [
        {"title": "A", "repo": "octocat/Hello-World", "description": "Demo <app>"},
        {"title": "Notes"},
    ]
    repos = [
        {
            "name": "Hello-World",
            "full_name": "octocat/Hello-World",
            "html_url": "https://github.com/octocat/Hello-World",
            "stargazers_count": 42,
        }
    ]
    (src / "data" / "projects.json").write_text(json.dumps(projects), encoding="utf-8")
    (src / "data" / "repos.json").write_text(json.dumps(repos), encoding="utf-8")
    return src


@pytest.fixture
def config(source_dir: Path, tmp_path: Path) -> Config:
    """Configuration building source_dir into tmp_path/docs."""
    cfg = Config()
    cfg.site.source_dir = source_dir
    cfg.site.output_dir = tmp_path / "docs"
    return cfg
