"""Field-based link resolution strategies, in chain order."""

from typing import Any, ClassVar

from sitebuild.projects.index import RepoIndex

from .base import BaseResolver, strip_vcs_prefix


class ExplicitUrlResolver(BaseResolver):
    """Use the first explicit URL field holding an absolute http(s) URL."""

    name = "explicit_url"

    URL_FIELDS: ClassVar[tuple[str, ...]] = (
        "url",
        "homepage",
        "website",
        "link",
        "html_url",
        "repo_url",
        "github_url",
    )

    def resolve(self, project: dict[str, Any], index: RepoIndex) -> str | None:  # noqa: ARG002
        for field_name in self.URL_FIELDS:
            value = project.get(field_name)
            if isinstance(value, str) and value.startswith("http"):
                return value
        return None


class RepositoryFieldResolver(BaseResolver):
    """Resolve a package.json style ``repository`` field.

    Accepts a URL string, an ``owner/name`` string, or an object with ``url``.
    """

    name = "repository"

    def resolve(self, project: dict[str, Any], index: RepoIndex) -> str | None:  # noqa: ARG002
        repository = project.get("repository")
        if not repository:
            return None

        if isinstance(repository, str):
            if self.host in repository:
                return strip_vcs_prefix(repository)
            if "/" in repository:
                return self.canonical_url(strip_vcs_prefix(repository))
            return None

        if isinstance(repository, dict):
            url = repository.get("url")
            if isinstance(url, str) and url:
                return strip_vcs_prefix(url)
        return None


class GithubFieldResolver(BaseResolver):
    """Resolve a ``github`` shorthand: URL, owner/name, or bare name."""

    name = "github"

    def resolve(self, project: dict[str, Any], index: RepoIndex) -> str | None:
        value = project.get("github")
        if not isinstance(value, str) or not value:
            return None
        return self.resolve_shorthand(value, index)


class RepoFieldResolver(BaseResolver):
    """Resolve a ``repo`` field given as a shorthand string or an object."""

    name = "repo"

    def resolve(self, project: dict[str, Any], index: RepoIndex) -> str | None:
        value = project.get("repo")
        if not value:
            return None

        if isinstance(value, str):
            return self.resolve_shorthand(value, index)

        if isinstance(value, dict):
            if value.get("html_url"):
                return str(value["html_url"])
            if value.get("full_name"):
                return self.canonical_url(str(value["full_name"]))
        return None


class NameLookupResolver(BaseResolver):
    """Fall back to the project name or title as a repository short name."""

    name = "name_lookup"

    def resolve(self, project: dict[str, Any], index: RepoIndex) -> str | None:
        key = str(project.get("name") or project.get("title") or "")
        if not key:
            return None
        return index.html_url_for_name(key)
