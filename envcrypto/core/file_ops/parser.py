"""
Env File Parser
===============

Parses and formats the ``KEY=value`` text carried inside an encrypted
container.

Parsing is lenient: blank lines and ``#`` comments are skipped, and any
line that is not a ``KEY=value`` assignment (no ``=``, empty key) is
dropped without aborting the rest of the file.
"""

from __future__ import annotations

import re
from typing import Final, Mapping

_ASSIGNMENT: Final[re.Pattern[str]] = re.compile(r"\s*([A-Za-z0-9_.-]+)\s*=\s*(.*)")
_NEEDS_QUOTES: Final[re.Pattern[str]] = re.compile(r"[\s,;]")
_QUOTES: Final[tuple[str, ...]] = ('"', "'")


def _strip_quotes(value: str) -> str:
    """Remove one matching pair of outer quotes; the interior is kept verbatim."""
    if len(value) > 1 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_env(text: str) -> dict[str, str]:
    """
    Parse env file text into a mapping.

    Args:
        text: Plaintext content, ``\\n`` or ``\\r\\n`` line endings

    Returns:
        Mapping of key to raw string value; later duplicates win
    """
    variables: dict[str, str] = {}

    for line in text.split("\n"):
        line = line.removesuffix("\r")

        stripped = line.lstrip()
        if not stripped or stripped.startswith("#"):
            continue

        match = _ASSIGNMENT.fullmatch(line)
        if match is None:
            continue

        key, value = match.groups()
        variables[key] = _strip_quotes(value)

    return variables


def format_env(variables: Mapping[str, str]) -> str:
    """
    Format a mapping as env file text.

    Values containing whitespace, ``,`` or ``;`` are wrapped in double
    quotes. No escaping is applied.
    """
    lines = []
    for key, value in variables.items():
        if _NEEDS_QUOTES.search(value):
            lines.append(f'{key}="{value}"')
        else:
            lines.append(f"{key}={value}")
    return "".join(f"{line}\n" for line in lines)
