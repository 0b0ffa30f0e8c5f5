"""Version management for prguard."""

import importlib.metadata
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from . import __version__

console = Console()


def get_current_version() -> str:
    """Get the current version of prguard."""
    return __version__


def get_installed_version() -> str:
    """Get the installed version from pip metadata."""
    try:
        return importlib.metadata.version("prguard")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def get_installation_path() -> Optional[Path]:
    """Get the installation path of prguard."""
    return Path(__file__).parent


def display_version_info() -> None:
    """Display version information."""
    text = Text()
    text.append("prguard ", style="bold")
    text.append(get_current_version(), style="green")
    text.append(f"\nInstalled version: {get_installed_version()}")
    text.append(f"\nInstalled at: {get_installation_path()}")
    console.print(Panel(text, title="Version", expand=False))
