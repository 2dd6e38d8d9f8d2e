"""Parsing of env file text into variables."""

from __future__ import annotations

import re

from envdesk.core.registry import VariableRegistry
from envdesk.models.env import EnvLine, LineKind, Variable

ASSIGNMENT_RE = re.compile(r"^([^=]+)=(.*)$")

_QUOTES = ('"', "'")


def extract_value(value: str) -> str:
    """Trim a value and strip one matching pair of outer quotes.

    Interior content, escape sequences included, is left untouched.
    """
    value = value.strip()
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


class EnvLineParser:
    """Turns env file text into Variable records.

    Parsing is pure: the same text and profile always give the same
    result. Comment, blank and malformed lines produce no variables;
    duplicated names produce one record per occurrence.
    """

    def __init__(self, registry: VariableRegistry | None = None) -> None:
        self.registry = registry or VariableRegistry()

    def parse(self, text: str, source_file: str = "") -> list[Variable]:
        variables: list[Variable] = []
        for line in text.splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            match = ASSIGNMENT_RE.match(line)
            if not match:
                continue
            name = match.group(1).strip()
            if not name:
                continue
            variables.append(
                Variable(
                    name=name,
                    raw_value=extract_value(match.group(2)),
                    source_file=source_file,
                    secret=self.registry.is_secret(name),
                    group=self.registry.group_for(name),
                )
            )
        return variables

    def parse_lines(self, text: str) -> list[EnvLine]:
        """Classify every physical line, keeping line numbers and raw text."""
        lines: list[EnvLine] = []
        for number, line in enumerate(text.splitlines(), start=1):
            stripped = line.strip()
            if not stripped:
                lines.append(EnvLine(number=number, raw=line, kind=LineKind.BLANK))
                continue
            if stripped.startswith("#"):
                lines.append(EnvLine(number=number, raw=line, kind=LineKind.COMMENT))
                continue
            match = ASSIGNMENT_RE.match(line)
            name = match.group(1).strip() if match else ""
            if not name:
                lines.append(EnvLine(number=number, raw=line, kind=LineKind.INVALID))
                continue
            lines.append(
                EnvLine(
                    number=number,
                    raw=line,
                    kind=LineKind.ASSIGNMENT,
                    key=name,
                    value=extract_value(match.group(2)),
                )
            )
        return lines
