"""Frontmatter extraction and validation for Markdown notes.

A note may start with a YAML block fenced by ``---`` lines::

    ---
    schema_path: ./schemas/note.yaml
    validated: true
    ---
    # Title

Only ``schema_path`` and ``validated`` are interpreted; the raw YAML is
kept on the result for callers that need the rest.
"""

from __future__ import annotations

import yaml

from yamlnote.errors import YamlNoteFrontmatterError
from yamlnote.models import ErrorInfo, Frontmatter, ValidationResult

_FENCE = "---"


def split_frontmatter(markdown: str) -> tuple[str, str] | None:
    """Return ``(frontmatter_yaml, body)``, or ``None`` if no complete block exists.

    The first two lines that are exactly ``---`` (ignoring surrounding
    whitespace) delimit the block.
    """
    lines = markdown.splitlines()
    fences = [i for i, line in enumerate(lines) if line.strip() == _FENCE][:2]
    if len(fences) < 2:
        return None
    start, end = fences
    return "\n".join(lines[start + 1:end]), "\n".join(lines[end + 1:])


def parse_frontmatter(markdown: str) -> Frontmatter:
    """Extract and parse the frontmatter block of *markdown*.

    Raises
    ------
    YamlNoteFrontmatterError
        If the block is missing or incomplete, is not valid YAML, is not a
        mapping, or carries wrongly typed ``schema_path`` / ``validated``
        fields.
    """
    parts = split_frontmatter(markdown)
    if parts is None:
        raise YamlNoteFrontmatterError(
            "Frontmatter is missing or incomplete",
            context={"reason": "missing"},
        )
    raw, _body = parts

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        raise YamlNoteFrontmatterError(
            f"Frontmatter is not valid YAML: {exc}",
            context={"reason": "yaml", "line": mark.line + 1 if mark is not None else 0},
            cause=exc,
        ) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise YamlNoteFrontmatterError(
            "Frontmatter must be a mapping",
            context={"reason": "shape"},
        )

    schema_path = data.get("schema_path")
    if schema_path is not None and not isinstance(schema_path, str):
        raise YamlNoteFrontmatterError(
            "schema_path must be a string",
            context={"reason": "schema_path"},
        )
    validated = data.get("validated", True)
    if not isinstance(validated, bool):
        raise YamlNoteFrontmatterError(
            "validated must be a boolean",
            context={"reason": "validated"},
        )

    return Frontmatter(schema_path=schema_path, validated=validated, raw=raw)


def validate_frontmatter(frontmatter: Frontmatter) -> ValidationResult:
    """Check the parsed frontmatter fields.

    A ``schema_path`` that is present but blank is an error.
    """
    errors: list[ErrorInfo] = []
    if frontmatter.schema_path is not None and not frontmatter.schema_path.strip():
        errors.append(ErrorInfo(0, "schema_path is empty", "schema_path"))
    if errors:
        return ValidationResult.failed(*errors)
    return ValidationResult.ok()
