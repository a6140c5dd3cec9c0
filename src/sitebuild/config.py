"""Configuration loading and validation."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_NAME = "sitebuild.yaml"


class SiteConfig(BaseModel):
    """Input and output tree configuration."""

    source_dir: Path = Field(default=Path("src"))
    output_dir: Path = Field(default=Path("docs"))
    source_subdir: str = Field(
        default="src",
        description="Directory name flattened out of ../<name>/ and <name>/ references",
    )

    @field_validator("source_subdir")
    @classmethod
    def validate_source_subdir(cls, v: str) -> str:
        """Reject empty names and names containing path separators."""
        v = v.strip()
        if not v or "/" in v or "\\" in v:
            msg = f"source_subdir must be a single directory name, got '{v}'"
            raise ValueError(msg)
        return v


class ProjectsConfig(BaseModel):
    """Project list injection configuration."""

    enabled: bool = True
    projects_file: Path = Field(default=Path("data/projects.json"))
    repos_file: Path = Field(default=Path("data/repos.json"))
    target_html: Path = Field(default=Path("projects.html"))
    placeholder: str = "<!--PROJECTS_PLACEHOLDER-->"
    container_ids: list[str] = Field(
        default_factory=lambda: ["projects-list", "projects-container"]
    )
    repo_host: str = "github.com"

    @field_validator("placeholder", "repo_host")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure marker and host are not blank."""
        if not v.strip():
            msg = "value must not be blank"
            raise ValueError(msg)
        return v


class TargetConfig(BaseModel):
    """GitHub account whose repositories are fetched."""

    mode: str = Field(default="user", pattern=r"^(org|user)$")
    name: str


class GitHubConfig(BaseModel):
    """GitHub metadata fetch configuration."""

    target: TargetConfig | None = None
    token_env: str = "GITHUB_TOKEN"
    include_forks: bool = False
    api_url: str = "https://api.github.com"


class Config(BaseModel):
    """Root configuration model."""

    site: SiteConfig = Field(default_factory=SiteConfig)
    projects: ProjectsConfig = Field(default_factory=ProjectsConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)

    def resolve_paths(self, base_dir: Path) -> "Config":
        """Anchor relative site directories at base_dir.

        Args:
            base_dir: Directory that relative paths are interpreted against.

        Returns:
            Self, for chaining.
        """
        if not self.site.source_dir.is_absolute():
            self.site.source_dir = base_dir / self.site.source_dir
        if not self.site.output_dir.is_absolute():
            self.site.output_dir = base_dir / self.site.output_dir
        return self

    @property
    def projects_path(self) -> Path:
        """Project data file inside the source tree."""
        return self.site.source_dir / self.projects.projects_file

    @property
    def repos_path(self) -> Path:
        """Repository metadata file inside the source tree."""
        return self.site.source_dir / self.projects.repos_file

    @property
    def target_html_path(self) -> Path:
        """Designated HTML file inside the output tree."""
        return self.site.output_dir / self.projects.target_html


def load_config(path: Path | None = None) -> Config:
    """Load and validate configuration from a YAML file.

    Without a path, defaults are used and relative directories resolve
    against the current working directory.

    Args:
        path: Path to the YAML configuration file, or None.

    Returns:
        Validated Config object with resolved directories.

    Raises:
        FileNotFoundError: If an explicit config file doesn't exist.
        ValidationError: If the config is invalid.
    """
    if path is None:
        return Config().resolve_paths(Path.cwd())

    if not path.exists():
        msg = f"Config file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open(encoding="utf-8") as f:
        raw_config: dict[str, Any] = yaml.safe_load(f) or {}

    return Config.model_validate(raw_config).resolve_paths(path.resolve().parent)
