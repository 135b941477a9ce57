"""
Command line interface for the vc_changelog tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``autochangelog`` command. It resolves the
working directory, loads the configuration, runs the changelog pipeline
and reports the outcome. Each outcome has its own exit code so scripts
can tell "changelog updated" from "no changes" from a failure.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import click

from vc_changelog import __version__
from vc_changelog.config.loader import ChangelogConfig, ConfigError, load_config
from vc_changelog.release import (
    STATUS_NO_CHANGES,
    ChangelogResult,
    ChangelogWriteError,
    update_changelog,
)
from vc_changelog.vcs.git_client import GitClient, GitError

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_NO_REPO = 3
EXIT_NO_CHANGES = 4
EXIT_CONFIG_ERROR = 5
EXIT_VCS_FAILURE = 6
EXIT_WRITE_FAILURE = 7


# ---------------------------------------------------------------------------
# Status display utilities
# ---------------------------------------------------------------------------

def print_step(step_num: int, total_steps: int, message: str):
    """Print a step indicator."""
    click.echo(f"\n{'='*60}")
    click.echo(f"Step {step_num}/{total_steps}: {message}")
    click.echo(f"{'='*60}")


def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}", err=False)


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}", err=False)


def print_warning(message: str, indent: int = 0):
    """Print a warning message."""
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}", err=False)


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


def print_release(result: ChangelogResult) -> None:
    """Show the rendered release and a per-section summary."""
    for section in result.sections:
        count = section.entry_count
        print_info(f"{section.heading}: {count} entr{'ies' if count != 1 else 'y'}", indent=1)
    click.echo("")
    for line in result.release_text.rstrip("\n").splitlines():
        click.echo(f"   │ {line}")


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def resolve_config(
    directory: Path,
    config_file: Optional[Path],
    changelog_file: Optional[str],
    version_file: Optional[str],
    heading: Optional[str],
) -> ChangelogConfig:
    """Load the configuration for ``directory`` with command line overrides."""
    return load_config(
        directory,
        config_path=config_file,
        overrides={
            "changelog_file": changelog_file,
            "version_file": version_file,
            "top_heading": heading,
        },
    )


@click.command()
@click.argument(
    "directory",
    required=False,
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option("--changelog-file", help="Changelog file name (default: Changelog.org).")
@click.option("--version-file", help="Version file name (default: VERSION).")
@click.option("--heading", help="Top-level changelog heading (default: Changelog).")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="JSON configuration file (default: .changelog.json in DIRECTORY).",
)
@click.option("--dry-run", is_flag=True, help="Show the new release without writing any file.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="autochangelog")
def main(
    directory: Path,
    changelog_file: Optional[str],
    version_file: Optional[str],
    heading: Optional[str],
    config_file: Optional[Path],
    dry_run: bool,
    verbose: bool,
) -> None:
    """Update the changelog and version of a Git repository.

    Reads the Conventional Commits made since the changelog was last
    committed, adds a dated release section to the changelog and bumps
    the semantic version accordingly.
    """
    # Use force=True to ensure handlers are reconfigured on subsequent
    # invocations (important for tests).
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    total_steps = 3
    try:
        directory = directory.resolve()

        # Step 1: Detect repository
        print_step(1, total_steps, "Detecting Repository")
        repo_root = GitClient.find_repo_root(directory)
        if repo_root is None:
            print_error(f"{directory} is not inside a Git repository.")
            raise click.exceptions.Exit(EXIT_NO_REPO)
        print_success(f"Found Git repository at: {repo_root}")

        # Step 2: Load configuration
        print_step(2, total_steps, "Loading Configuration")
        try:
            config = resolve_config(directory, config_file, changelog_file, version_file, heading)
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)
        print_success("Configuration loaded")
        print_info(f"Changelog: {config.changelog_file}", indent=1)
        print_info(f"Version file: {config.version_file}", indent=1)
        rule_names: List[str] = [rule.heading for rule in config.rules]
        print_info(f"Sections: {', '.join(rule_names)}", indent=1)

        # Step 3: Generate the release
        print_step(3, total_steps, "Generating Release")
        try:
            result = update_changelog(directory, config, dry_run=dry_run)
        except GitError as exc:
            print_error(f"VCS error: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)
        except ChangelogWriteError as exc:
            print_error(f"Write error: {exc}")
            raise click.exceptions.Exit(EXIT_WRITE_FAILURE)

        if result.status == STATUS_NO_CHANGES:
            print_warning(f"No changes found; version stays at {result.version}.")
            raise click.exceptions.Exit(EXIT_NO_CHANGES)

        print_success(f"Classified {result.commit_count} commit{'s' if result.commit_count != 1 else ''}")
        print_release(result)
        click.echo("")
        if dry_run:
            print_info(f"Dry run: v{result.previous_version} would become v{result.version}")
        else:
            print_success(f"Updated {config.changelog_file}: v{result.previous_version} -> v{result.version}")

        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        raise click.exceptions.Exit(EXIT_GENERIC_ERROR)
