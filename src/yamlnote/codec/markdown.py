"""Markdown outline extraction.

A note written as Markdown maps to a two-key document::

    title: <text of the first level-1 heading>
    content: <everything after that heading>

Mistune parses the Markdown so that only a real level-1 heading (ATX
``# Title`` or setext ``Title\\n=====``) counts as the title; headings in
code fences and the like are ignored.  With no level-1 heading the title
falls back to ``YamlNoteConfig.untitled_title`` and the whole text becomes
the content.
"""

from __future__ import annotations

import re
from typing import Any

import mistune

from yamlnote.codec.document import decode_document, encode_document
from yamlnote.config import YamlNoteConfig
from yamlnote.tree.nodes import Mapping, String, Tree

_ATX_H1_RE = re.compile(r"^ {0,3}#(?:[ \t]+|$)")
_SETEXT_H1_RE = re.compile(r"^ {0,3}=+[ \t]*$")
_FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})")
_TEXT_TOKENS = frozenset({"text", "codespan", "inline_html"})


class OutlineExtractor:
    """Split Markdown into a title and the remaining content."""

    def __init__(self, config: YamlNoteConfig | None = None) -> None:
        self._config = config or YamlNoteConfig()
        self._parser = mistune.create_markdown(renderer="ast")

    def extract(self, markdown: str) -> tuple[str, str]:
        """Return ``(title, content)`` for *markdown*."""
        tokens = self._parser(markdown)
        if isinstance(tokens, str):
            tokens = []
        title = _first_h1_text(tokens)
        if title is None:
            return self._config.untitled_title, markdown
        return title, _strip_title(markdown.splitlines())

    def to_tree(self, markdown: str) -> Mapping:
        title, content = self.extract(markdown)
        return Mapping((("title", String(title)), ("content", String(content))))


def _inline_text(children: list[dict[str, Any]]) -> str:
    parts: list[str] = []
    for child in children:
        if child.get("type") in _TEXT_TOKENS:
            parts.append(child.get("raw", ""))
        elif child.get("type") in ("softbreak", "linebreak"):
            parts.append(" ")
        elif "children" in child:
            parts.append(_inline_text(child["children"]))
    return "".join(parts)


def _first_h1_text(tokens: list[dict[str, Any]]) -> str | None:
    for token in tokens:
        if token.get("type") == "heading" and token.get("attrs", {}).get("level") == 1:
            return _inline_text(token.get("children", [])).strip()
    return None


def _strip_title(lines: list[str]) -> str:
    """Drop everything up to and including the first H1 line(s).

    Lines inside fenced code blocks never count as headings.
    """
    fence: str | None = None
    for i, line in enumerate(lines):
        match = _FENCE_RE.match(line)
        if fence is not None:
            if match and _closes_fence(fence, match.group(1), line[match.end():]):
                fence = None
            continue
        if match:
            fence = match.group(1)
            continue
        if _ATX_H1_RE.match(line):
            return "\n".join(lines[i + 1:]).lstrip()
        if i + 1 < len(lines) and line.strip() and _SETEXT_H1_RE.match(lines[i + 1]):
            return "\n".join(lines[i + 2:]).lstrip()
    return "\n".join(lines).lstrip()


def _closes_fence(opening: str, marker: str, rest: str) -> bool:
    return marker[0] == opening[0] and len(marker) >= len(opening) and not rest.strip()


def md_to_tree(markdown: str, config: YamlNoteConfig | None = None) -> Mapping:
    """Extract ``{title, content}`` from *markdown*."""
    return OutlineExtractor(config).to_tree(markdown)


def md_to_yaml(markdown: str, config: YamlNoteConfig | None = None) -> str:
    """Extract ``{title, content}`` from *markdown* and encode it as YAML."""
    return encode_document(md_to_tree(markdown, config), config)


def tree_to_md(tree: Tree) -> str:
    """Render a ``{title, content}`` document back to Markdown.

    Missing or non-string ``title`` / ``content`` entries are skipped.
    """
    parts: list[str] = []
    if isinstance(tree, Mapping):
        title = tree.get("title")
        if isinstance(title, String):
            parts.append(f"# {title.value}\n\n")
        content = tree.get("content")
        if isinstance(content, String):
            parts.append(content.value)
            if not content.value.endswith("\n"):
                parts.append("\n")
    return "".join(parts)


def yaml_to_md(text: str) -> str:
    """Decode a YAML note and render it as Markdown.

    Raises
    ------
    YamlNoteDecodeError
        If *text* is not valid YAML.
    """
    return tree_to_md(decode_document(text))
