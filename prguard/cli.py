#!/usr/bin/env python3
import asyncio
import os
from pathlib import Path
from typing import Optional

import click
import pyperclip
from rich.console import Console

from .config import DEFAULT_CONFIG_FILENAME, Config
from .core import ReviewRunner
from .exceptions import PRGuardError
from .observers import ConsoleReportObserver, FileLogObserver, ReviewReporter
from .sources import GitHubSource, LocalGitSource, PullRequestSource

console = Console()


async def run_review(source: PullRequestSource, config: Config, reporter: ReviewReporter):
    """Run the review and release the source's resources."""
    try:
        return await ReviewRunner(source, config=config, reporter=reporter).run()
    finally:
        await source.aclose()


def print_config(config: Config, config_path: Path) -> None:
    console.print("\n[bold]Current Configuration Settings:[/bold]")
    source = "config" if config_path.exists() else "default"
    if config_path.exists():
        console.print(f"[dim]Config file: {str(config_path).replace(os.sep, '/')}[/dim]")
    else:
        console.print("[dim]Using default values (no config file found)[/dim]")

    console.print(f"\n{'Setting':<22} {'Value':<40} {'Source':<10}")
    console.print("-" * 72)
    for name, value in config.model_dump().items():
        console.print(f"{name:<22} {str(value):<40} {source:<10}", markup=False)

    console.print(
        f"\nTo modify these settings, create or edit {DEFAULT_CONFIG_FILENAME} in your repository root"
    )


@click.command()
@click.option(
    "--config-dir",
    is_flag=True,
    help="Display the config file location and copy it to clipboard",
)
@click.option(
    "--config-list", is_flag=True, help="Display current configuration settings"
)
@click.option(
    "-p",
    "--path",
    default=".",
    help="Path to git repository (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "--base",
    help="Revision the pull request targets (overrides config setting)",
)
@click.option("--head", default="HEAD", help="Revision of the pull request (defaults to HEAD)")
@click.option(
    "--assignee",
    help="Login of the person assigned to merge (local git reviews only)",
)
@click.option(
    "--github-repo",
    help="Read the pull request from GitHub, given as OWNER/NAME",
)
@click.option("--pr", "pr_number", type=int, help="Pull request number on GitHub")
@click.option(
    "--token",
    envvar="GITHUB_TOKEN",
    help="GitHub token. Can also be set via the GITHUB_TOKEN environment variable.",
)
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional file to log review output (overrides config setting)",
)
@click.option(
    "--markdown-out",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the review as a markdown comment body to this file",
)
@click.option("--version", is_flag=True, help="Display version information and exit")
def main(
    config_dir: bool,
    config_list: bool,
    path: Path,
    base: Optional[str],
    head: str,
    assignee: Optional[str],
    github_repo: Optional[str],
    pr_number: Optional[int],
    token: Optional[str],
    log_file: Optional[Path],
    markdown_out: Optional[Path],
    version: bool,
):
    """
    Review a pull request and report problems the way a review bot does.

    This tool will:
    1. Fail on commit messages that break the conventional-changelog conventions
    2. Warn when the manifest changed without its lockfile
    3. Warn about big pull requests and pull requests without an assignee
    4. Report added, removed and updated dependencies

    Configuration can be set in .prguard.toml in the repository root.
    Command line options override configuration file settings.
    """
    exit_code = 0
    try:
        if version:
            from .version import display_version_info

            display_version_info()
            return

        repo_path = path.absolute()
        config_path = repo_path / DEFAULT_CONFIG_FILENAME

        if config_list:
            print_config(Config.load(repo_path), config_path)
            return

        if config_dir:
            # Create default config file if it doesn't exist
            if not config_path.exists():
                Config().save(repo_path)
                console.print(
                    "[yellow]Created new config file with default values[/yellow]"
                )

            console.print(f"[green]Config file location:[/green] {config_path}")
            try:
                pyperclip.copy(str(config_path))
                console.print("[green]Path copied to clipboard![/green]")
            except pyperclip.PyperclipException:
                console.print("[yellow]Clipboard not available, path not copied[/yellow]")
            return

        config = Config.load(repo_path)

        # Command line options override config
        if base is not None:
            config.base_branch = base
        if log_file is not None:
            config.log_file = str(log_file)

        if github_repo:
            if pr_number is None:
                raise click.UsageError("--pr is required together with --github-repo")
            source = GitHubSource(github_repo, pr_number, token=token)
        else:
            source = LocalGitSource(
                str(repo_path), base=config.base_branch, head=head, assignee=assignee
            )

        reporter = ReviewReporter([ConsoleReportObserver(console)])
        log_file_path = log_file or config.get_log_file()
        if log_file_path:
            reporter.add_observer(FileLogObserver(str(log_file_path)))

        report = asyncio.run(run_review(source, config, reporter))

        if markdown_out is not None:
            markdown_out.write_text(report.render_markdown())

        if report.failed and config.fail_on_error:
            exit_code = 1
    except click.UsageError:
        raise
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
    except PRGuardError as e:
        console.print(f"[red]Error: {str(e)}[/red]")
        raise click.Abort()
    except Exception as e:
        console.print(f"[red]Unexpected error: {str(e)}[/red]")
        raise click.Abort()

    if exit_code:
        raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
