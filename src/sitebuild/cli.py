"""CLI entry point for sitebuild.

Commands:
- build: Copy the source tree to the output directory, inject the project
  list and rewrite asset paths for subpath hosting
- fetch-repos: Write repos.json from the GitHub REST API
"""

from pathlib import Path

import click
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from sitebuild import __version__
from sitebuild.config import DEFAULT_CONFIG_NAME, Config, load_config
from sitebuild.logging import setup_logging

console = Console()


def _load(config_path: Path | None) -> Config:
    """Load explicit config, else ./sitebuild.yaml when present, else defaults."""
    if config_path is None and Path(DEFAULT_CONFIG_NAME).is_file():
        config_path = Path(DEFAULT_CONFIG_NAME)
    try:
        return load_config(config_path)
    except (FileNotFoundError, ValidationError, yaml.YAMLError) as e:
        console.print(f"[bold red]Invalid configuration:[/bold red] {escape(str(e))}")
        raise click.Abort() from e


@click.group()
@click.version_option(version=__version__, prog_name="sitebuild")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, default=False, help="Only log warnings and errors")
@click.option("--json-logs", is_flag=True, default=False, help="Emit log records as JSON lines")
@click.pass_context
def main(ctx: click.Context, verbose: bool, quiet: bool, json_logs: bool) -> None:
    """Static site builder for subpath hosting.

    \b
    Quick Start:
        1. Optionally fetch star counts: sitebuild fetch-repos --user NAME
        2. Build the site: sitebuild build
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose=verbose, json_format=json_logs, quiet=quiet)


@main.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help=f"Path to config file (default: ./{DEFAULT_CONFIG_NAME} if present)",
)
@click.option(
    "--source",
    "-s",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Override source directory",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Override output directory",
)
@click.option(
    "--no-projects",
    is_flag=True,
    default=False,
    help="Skip project list injection",
)
@click.pass_context
def build(
    ctx: click.Context,
    config: Path | None,
    source: Path | None,
    output: Path | None,
    no_projects: bool,
) -> None:
    """Build the output tree from the source tree.

    \b
    Steps:
    1. Remove the output directory
    2. Copy the source tree into it
    3. Inject data/projects.json into projects.html (best effort)
    4. Rewrite /x, ../x and ../src/x asset paths in HTML files to ./x
    """
    from sitebuild.site.build import SourceNotFoundError, build_site

    cfg = _load(config)
    if source is not None:
        cfg.site.source_dir = source.resolve()
    if output is not None:
        cfg.site.output_dir = output.resolve()
    if no_projects:
        cfg.projects.enabled = False

    console.print(f"[bold]Building {cfg.site.source_dir} → {cfg.site.output_dir}[/bold]")

    try:
        result = build_site(cfg)
    except SourceNotFoundError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise SystemExit(1) from e
    except Exception as e:
        console.print(f"\n[bold red]Build failed:[/bold red] {e}")
        if ctx.obj.get("verbose"):
            import traceback

            console.print("\n[dim]Traceback:[/dim]")
            console.print(traceback.format_exc())
        raise SystemExit(1) from e

    console.print()
    console.print("[bold green]Build complete![/bold green]")
    console.print(f"  Files copied: {result.files_copied}")
    console.print(f"  HTML files rewritten: {result.html_rewritten}")
    console.print(f"  Projects injected: {result.injection or 'skipped'}")
    console.print(f"  Output: {result.output}")


@main.command(name="fetch-repos")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help=f"Path to config file (default: ./{DEFAULT_CONFIG_NAME} if present)",
)
@click.option("--user", "user", default=None, help="GitHub user whose repositories to fetch")
@click.option("--org", "org", default=None, help="GitHub organization whose repositories to fetch")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Destination file (default: repos file inside the source directory)",
)
@click.option(
    "--include-forks",
    is_flag=True,
    default=False,
    help="Keep forked repositories",
)
@click.pass_context
def fetch_repos(
    ctx: click.Context,
    config: Path | None,
    user: str | None,
    org: str | None,
    output: Path | None,
    include_forks: bool,
) -> None:
    """Fetch repository metadata (names, URLs, stars) into repos.json."""
    from sitebuild.github import AuthenticationError, GitHubAuth, GitHubHTTPError, export_repos

    cfg = _load(config)

    if user and org:
        console.print("[bold red]Error:[/bold red] Use either --user or --org, not both")
        raise click.Abort()
    if user:
        mode, name = "user", user
    elif org:
        mode, name = "org", org
    elif cfg.github.target is not None:
        mode, name = cfg.github.target.mode, cfg.github.target.name
    else:
        console.print(
            "[bold red]Error:[/bold red] Specify --user or --org, or set github.target in config"
        )
        raise click.Abort()

    destination = output or cfg.repos_path

    try:
        auth = GitHubAuth(token_env=cfg.github.token_env, allow_anonymous=True)
        count = export_repos(
            name,
            destination,
            mode=mode,
            include_forks=include_forks or cfg.github.include_forks,
            auth=auth,
            base_url=cfg.github.api_url,
        )
    except (AuthenticationError, GitHubHTTPError, OSError) as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if ctx.obj.get("verbose"):
            import traceback

            console.print("\n[dim]Traceback:[/dim]")
            console.print(traceback.format_exc())
        raise click.Abort() from e

    console.print(f"[bold green]Wrote {count} repositories[/bold green] to {destination}")


if __name__ == "__main__":
    main()
