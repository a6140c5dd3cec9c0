"""Tests for project list rendering and star enrichment."""

from sitebuild.projects import (
    build_repo_index,
    escape_html,
    find_repo_for_link,
    normalize_repo_key,
    render_project_list,
)

HELLO_WORLD = {
    "full_name": "octocat/Hello-World",
    "html_url": "https://github.com/octocat/Hello-World",
    "stargazers_count": 42,
}


class TestEscapeHtml:
    """Tests for escape_html."""

    def test_escapes_markup_characters(self) -> None:
        """Test & < > and double quotes are escaped, ampersand first."""
        assert escape_html('<a href="x">&</a>') == "&lt;a href=&quot;x&quot;&gt;&amp;&lt;/a&gt;"

    def test_single_quote_kept(self) -> None:
        """Test apostrophes pass through."""
        assert escape_html("it's") == "it's"

    def test_non_strings(self) -> None:
        """Test numbers are stringified and None becomes empty."""
        assert escape_html(42) == "42"
        assert escape_html(None) == ""


class TestStarLookup:
    """Tests for normalize_repo_key and find_repo_for_link."""

    def test_normalize(self) -> None:
        """Test prefix, host, trailing slash and case normalization."""
        assert normalize_repo_key("git+https://www.GitHub.com/Owner/Repo/") == "owner/repo"
        assert normalize_repo_key("http://github.com/a/b") == "a/b"

    def test_full_name_match(self) -> None:
        """Test owner/name lookup."""
        index = build_repo_index([HELLO_WORLD])
        assert find_repo_for_link("https://github.com/octocat/hello-world", index) is HELLO_WORLD

    def test_last_segment_fallback(self) -> None:
        """Test a different owner still matches by short name."""
        repo = {"name": "tool", "stargazers_count": 1}
        index = build_repo_index([repo])
        assert find_repo_for_link("https://github.com/someone-else/tool", index) is repo

    def test_other_host_skipped(self) -> None:
        """Test links off the repository host are never enriched."""
        index = build_repo_index([{"name": "tool", "stargazers_count": 1}])
        assert find_repo_for_link("https://gitlab.com/a/tool", index) is None


class TestRenderProjectList:
    """Tests for render_project_list."""

    def test_linked_project_with_stars(self) -> None:
        """Test owner/name repo resolves to a link with a star badge."""
        html = render_project_list([{"title": "A", "repo": "octocat/Hello-World"}], [HELLO_WORLD])

        assert html == (
            '<li><a href="https://github.com/octocat/Hello-World" target="_blank" '
            'rel="noopener noreferrer">A</a> <span class="stars">⭐ 42</span></li>'
        )

    def test_unresolved_project_plain_text(self) -> None:
        """Test a project without a link renders its title in a span."""
        html = render_project_list([{"title": "Lonely"}], [])

        assert html == "<li><span>Lonely</span></li>"
        assert "<a " not in html

    def test_description_and_escaping(self) -> None:
        """Test title and description are escaped."""
        html = render_project_list(
            [{"title": 'Tom & "Jerry" <3', "description": "a < b > c & d"}], []
        )

        assert "Tom &amp; &quot;Jerry&quot; &lt;3" in html
        assert "<p>a &lt; b &gt; c &amp; d</p>" in html

    def test_href_escaped(self) -> None:
        """Test quotes in URLs cannot break out of the attribute."""
        html = render_project_list([{"title": "x", "url": 'https://e.com/"onmouseover="x'}], [])
        assert 'href="https://e.com/&quot;onmouseover=&quot;x"' in html

    def test_title_fallbacks(self) -> None:
        """Test title, then name, then Untitled."""
        html = render_project_list([{"name": "byname"}, {}, "not-an-object"], [])

        assert html.split("\n") == [
            "<li><span>byname</span></li>",
            "<li><span>Untitled</span></li>",
            "<li><span>Untitled</span></li>",
        ]

    def test_input_order_preserved(self) -> None:
        """Test items are neither sorted nor de-duplicated."""
        projects = [{"title": "b"}, {"title": "a"}, {"title": "b"}]
        html = render_project_list(projects, [])
        assert html.split("\n") == [
            "<li><span>b</span></li>",
            "<li><span>a</span></li>",
            "<li><span>b</span></li>",
        ]

    def test_no_badge_without_count(self) -> None:
        """Test a matched repository without stargazers_count gets no badge."""
        repos = [{"name": "tool", "html_url": "https://github.com/a/tool"}]
        html = render_project_list([{"title": "tool"}], repos)
        assert 'href="https://github.com/a/tool"' in html
        assert "stars" not in html

    def test_zero_stars_rendered(self) -> None:
        """Test a zero star count still renders a badge."""
        repos = [{"name": "tool", "html_url": "https://github.com/a/tool", "stargazers_count": 0}]
        html = render_project_list([{"github": "tool"}], repos)
        assert '<span class="stars">⭐ 0</span>' in html

    def test_non_github_link_no_badge(self) -> None:
        """Test homepage links outside github.com skip enrichment."""
        repos = [{"name": "site", "stargazers_count": 5}]
        html = render_project_list([{"title": "site", "homepage": "https://site.dev/site"}], repos)
        assert "stars" not in html

    def test_empty_list(self) -> None:
        """Test no projects renders an empty string."""
        assert render_project_list([], [HELLO_WORLD]) == ""
