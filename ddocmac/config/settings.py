"""
settings.py

This module provides application configuration management for ddocmac.

Features:
- Centralized application configuration using Pydantic settings
- Constants for application-wide use
- Discovery of macro definition files (.ddoc) that are always loaded

Usage:
Import appsettings for application configuration values.
"""

from pathlib import Path
from typing import Final, Iterable, Optional
from appdirs import user_config_dir
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.console import Console

# Console instance for rich output
console: Final[Console] = Console()

# User-level directory whose *.ddoc files are merged into every expansion
CONFIG_DIR: Final[Path] = Path(user_config_dir("ddocmac", ""))
MACRO_SUFFIX: Final[str] = ".ddoc"


class App(BaseSettings):
    """
    Application settings model.

    Settings can be overridden through environment variables with the
    DDOCMAC_ prefix, e.g. ``DDOCMAC_MAXDEPTH=200``.

    Attributes:
        beQuiet: Suppress detailed logging output
        maxDepth: Maximum macro nesting depth; None leaves recursion unbounded
        encoding: Text encoding for input, output and macro files
        macroFiles: Extra macro definition files loaded on every run
        userMacros: Load *.ddoc files found in the user config directory
    """

    beQuiet: bool = False
    maxDepth: Optional[int] = Field(default=None, ge=1)
    encoding: str = "utf-8"
    macroFiles: list[str] = Field(default_factory=list)
    userMacros: bool = True

    model_config = SettingsConfigDict(
        env_prefix="DDOCMAC_",
        case_sensitive=False,
        extra="allow",
    )


def macroFiles_discover(directory: Path = CONFIG_DIR) -> list[Path]:
    """
    List the macro definition files in a directory, sorted by name.

    A missing directory is not an error: it simply holds no files.

    Args:
        directory: Directory to search

    Returns:
        list[Path]: The *.ddoc files found, in lexical order
    """
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.suffix == MACRO_SUFFIX)


def macroFiles_resolve(extra: Iterable[Path | str] = ()) -> list[Path]:
    """
    Build the ordered list of macro definition files for one run.

    Later files override earlier ones, so the order is: user config
    directory, then files named in settings, then explicit ones.

    Args:
        extra: Files given explicitly by the caller

    Returns:
        list[Path]: Files to parse, in override order
    """
    files: list[Path] = []
    if appsettings.userMacros:
        files.extend(macroFiles_discover())
    files.extend(Path(f) for f in appsettings.macroFiles)
    files.extend(Path(f) for f in extra)
    return files


# Create the application settings instance
appsettings: Final[App] = App()
