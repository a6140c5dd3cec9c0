"""End-to-end tests for the site build pipeline."""

from pathlib import Path

import pytest

from sitebuild.config import Config
from sitebuild.site.build import SourceNotFoundError, build_site


def _snapshot(root: Path) -> dict[str, bytes]:
    return {
        p.relative_to(root).as_posix(): p.read_bytes() for p in root.rglob("*") if p.is_file()
    }


class TestBuildSite:
    """Tests for build_site."""

    def test_full_build(self, config: Config) -> None:
        """Test copy, injection and rewriting together."""
        result = build_site(config)

        out = config.site.output_dir
        assert result.files_copied == len(_snapshot(config.site.source_dir))
        assert result.injection == "marker"
        assert result.html_rewritten == 3

        index = (out / "index.html").read_text(encoding="utf-8")
        assert 'href="./css/style.css"' in index
        assert 'src="./img/logo.png"' in index
        assert 'src="js/github.js"' in index
        assert 'href="https://example.com/"' in index

        projects = (out / "projects.html").read_text(encoding="utf-8")
        assert 'href="./index.html"' in projects
        assert 'src="./js/main.js"' in projects
        assert 'href="https://github.com/octocat/Hello-World"' in projects
        assert "⭐ 42" in projects

        about = (out / "pages" / "about.HTML").read_text(encoding="utf-8")
        assert about == '<a href="./index.html">Back</a>\n'

    def test_non_html_identical(self, config: Config) -> None:
        """Test every non-HTML file is byte-identical to its source."""
        build_site(config)

        src = _snapshot(config.site.source_dir)
        out = _snapshot(config.site.output_dir)
        assert set(src) == set(out)
        for rel, data in src.items():
            if not rel.lower().endswith(".html"):
                assert out[rel] == data, rel

    def test_idempotent(self, config: Config) -> None:
        """Test two builds produce identical output."""
        build_site(config)
        first = _snapshot(config.site.output_dir)
        build_site(config)
        assert _snapshot(config.site.output_dir) == first

    def test_stale_output_removed(self, config: Config) -> None:
        """Test files not in the source disappear from the output."""
        config.site.output_dir.mkdir(parents=True)
        (config.site.output_dir / "stale.txt").write_text("old")

        build_site(config)

        assert not (config.site.output_dir / "stale.txt").exists()

    def test_missing_source(self, tmp_path: Path) -> None:
        """Test a missing source raises before the output is touched."""
        cfg = Config()
        cfg.site.source_dir = tmp_path / "missing"
        cfg.site.output_dir = tmp_path / "docs"
        cfg.site.output_dir.mkdir()
        (cfg.site.output_dir / "keep.txt").write_text("keep")

        with pytest.raises(SourceNotFoundError, match="missing"):
            build_site(cfg)

        assert (cfg.site.output_dir / "keep.txt").exists()

    def test_output_inside_source_rejected(self, config: Config) -> None:
        """Test overlapping directories are refused."""
        config.site.output_dir = config.site.source_dir / "docs"

        with pytest.raises(ValueError, match="must not contain"):
            build_site(config)

    def test_malformed_projects_build_succeeds(self, config: Config) -> None:
        """Test bad project data leaves the placeholder and the build completes."""
        (config.site.source_dir / "data" / "projects.json").write_text("not json")

        result = build_site(config)

        assert result.injection is None
        projects = (config.site.output_dir / "projects.html").read_text(encoding="utf-8")
        assert "<!--PROJECTS_PLACEHOLDER-->" in projects
        assert 'href="./css/style.css"' in projects

    def test_deeply_nested_projects_build_succeeds(self, config: Config) -> None:
        """Test JSON too deep to decode is treated like any unparsable file."""
        (config.site.source_dir / "data" / "projects.json").write_text(
            "[" * 100000 + "]" * 100000
        )

        result = build_site(config)

        assert result.injection is None
        projects = (config.site.output_dir / "projects.html").read_text(encoding="utf-8")
        assert "<!--PROJECTS_PLACEHOLDER-->" in projects

    def test_deeply_nested_repos_build_succeeds(self, config: Config) -> None:
        """Test undecodable repository metadata only drops the star badges."""
        (config.site.source_dir / "data" / "repos.json").write_text("[" * 100000 + "]" * 100000)

        result = build_site(config)

        assert result.injection == "marker"
        projects = (config.site.output_dir / "projects.html").read_text(encoding="utf-8")
        assert "octocat/Hello-World" in projects
        assert "⭐" not in projects

    def test_file_at_output_path_replaced(self, config: Config) -> None:
        """Test a file occupying the output path is replaced by the build."""
        config.site.output_dir.write_text("not a directory")

        build_site(config)

        assert (config.site.output_dir / "index.html").is_file()

    def test_projects_disabled(self, config: Config) -> None:
        """Test injection can be switched off."""
        config.projects.enabled = False

        result = build_site(config)

        assert result.injection is None
        projects = (config.site.output_dir / "projects.html").read_text(encoding="utf-8")
        assert "<!--PROJECTS_PLACEHOLDER-->" in projects

    def test_injected_links_not_rewritten(self, config: Config) -> None:
        """Test absolute project URLs survive the rewrite step."""
        build_site(config)
        projects = (config.site.output_dir / "projects.html").read_text(encoding="utf-8")
        assert 'href="./github.com' not in projects
