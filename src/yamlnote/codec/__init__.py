"""Text codecs: YAML/JSON documents, Markdown outlines, frontmatter.

Exports
-------
decode_document, encode_document
    YAML text <-> tree.
decode_json, encode_json
    JSON text <-> tree.
md_to_tree, md_to_yaml, tree_to_md, yaml_to_md
    Markdown title/content extraction and rendering.
parse_frontmatter, validate_frontmatter
    Note metadata block handling.
"""

from .document import decode_document, decode_json, dumps_json, encode_document, encode_json
from .frontmatter import parse_frontmatter, split_frontmatter, validate_frontmatter
from .markdown import OutlineExtractor, md_to_tree, md_to_yaml, tree_to_md, yaml_to_md

__all__ = [
    "OutlineExtractor",
    "decode_document",
    "decode_json",
    "dumps_json",
    "encode_document",
    "encode_json",
    "md_to_tree",
    "md_to_yaml",
    "parse_frontmatter",
    "split_frontmatter",
    "tree_to_md",
    "validate_frontmatter",
    "yaml_to_md",
]
