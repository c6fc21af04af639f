"""
Selection Engine
================

Turns the user's intent (explicit list, all, profile or an interactive
numbered menu) into an ordered list of catalog font names.
"""

import logging
from collections.abc import Callable, Iterable

import click

from nerdfonts.core.exceptions import InvalidSelectionError
from nerdfonts.core.models import FontCatalog

from .profiles import get_profile

logger = logging.getLogger(__name__)

ALL_TOKEN = "all"


def parse_font_list(value: str | None) -> list[str]:
    """Split a comma separated font list, dropping blanks and duplicates."""
    if not value:
        return []
    return _dedupe(part.strip() for part in value.split(","))


def _dedupe(names: Iterable[str]) -> list[str]:
    seen = []
    for name in names:
        if name and name not in seen:
            seen.append(name)
    return seen


def validate_fonts(catalog: FontCatalog, fonts: Iterable[str]) -> list[str]:
    """Check every font is in the catalog, raising on the first bad name."""
    selected = _dedupe(fonts)
    for font in selected:
        if font not in catalog:
            raise InvalidSelectionError(font)
    return selected


def check_exclusive(fonts: str | None, install_all: bool, profile: str | None) -> None:
    """Reject combining more than one selection mode."""
    given = [
        token
        for token, present in (("--all", install_all), ("--fonts", bool(fonts)), ("--profile", bool(profile)))
        if present
    ]
    if len(given) > 1:
        raise InvalidSelectionError(" ".join(given), "Conflicting selection options")


def parse_indices(raw: str, catalog: FontCatalog) -> list[str]:
    """
    Parse space separated 1-based indices, or the ``all`` token.

    Raises:
        InvalidSelectionError: naming the first token that is not a valid index
    """
    raw = raw.strip()
    if raw == ALL_TOKEN:
        return catalog.names

    tokens = raw.split()
    if not tokens:
        raise InvalidSelectionError("", "No fonts selected")

    names = catalog.names
    selected = []
    for token in tokens:
        if not token.isdecimal() or not 1 <= int(token) <= len(names):
            raise InvalidSelectionError(token, "Invalid font number")
        selected.append(names[int(token) - 1])
    return _dedupe(selected)


def interactive_select(
    catalog: FontCatalog,
    prompt: Callable[[str], str] | None = None,
    echo: Callable[[str], None] | None = None,
) -> list[str]:
    """Show a numbered menu and keep prompting until the input is valid."""
    prompt = prompt or (lambda text: click.prompt(text, default="", show_default=False))
    echo = echo or click.echo

    echo(f"Available fonts ({len(catalog)} total):")
    for index, name in enumerate(catalog.names, start=1):
        echo(f"{index}. {name}")

    while True:
        raw = prompt(
            "\nEnter the numbers of the fonts you want to install (space-separated), "
            "or 'all' for all fonts"
        )
        try:
            return parse_indices(raw, catalog)
        except InvalidSelectionError as e:
            logger.error(f"'{e.token}' is not a valid font number.")


def select_fonts(
    catalog: FontCatalog,
    fonts: str | None = None,
    install_all: bool = False,
    profile: str | None = None,
    prompt: Callable[[str], str] | None = None,
    echo: Callable[[str], None] | None = None,
) -> list[str]:
    """
    Resolve the selection mode into an ordered list of catalog fonts.

    Args:
        catalog: Catalog of the current release
        fonts: Comma separated font names
        install_all: Select every catalog font
        profile: Named profile
        prompt: Input function for interactive mode
        echo: Output function for interactive mode

    Returns:
        Ordered list of font names present in the catalog

    Raises:
        InvalidSelectionError: For unknown fonts, profiles or conflicting modes
    """
    check_exclusive(fonts, install_all, profile)

    if profile:
        selected = validate_fonts(catalog, get_profile(profile))
        logger.info(f"Using profile: {profile}")
    elif install_all:
        selected = catalog.names
    elif fonts:
        selected = validate_fonts(catalog, parse_font_list(fonts))
    else:
        selected = interactive_select(catalog, prompt=prompt, echo=echo)

    if not selected:
        raise InvalidSelectionError(fonts or "", "No fonts selected")

    logger.info(f"Selected fonts ({len(selected)}): {' '.join(selected)}")
    return selected
