"""Path tokens and JSON-Pointer (RFC 6901) rendering.

A path is a tuple of tokens.  Each token is a mapping key (``str``), a
sequence index (``int``) or the :data:`APPEND` marker, rendered ``-``, which
addresses one past the last element of a sequence.

Pointers read from the wire keep every segment as a string: whether
``"0"`` is an index or a key depends on the container it meets, so the
resolver decides (see :func:`sequence_index`).
"""

from __future__ import annotations

import re
from typing import Union

from yamlnote.errors import YamlNoteInvalidPathError


class _AppendMarker:
    """Singleton type of :data:`APPEND`."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "APPEND"

    def __str__(self) -> str:
        return "-"

    def __reduce__(self) -> str:
        return "APPEND"


APPEND = _AppendMarker()
"""The append-to-end token, valid only as the final token of an insert."""

PathToken = Union[str, int, _AppendMarker]
Path = tuple[PathToken, ...]

_INDEX_RE = re.compile(r"0|[1-9][0-9]*")


def escape_token(token: str) -> str:
    """Escape ``~`` as ``~0`` and ``/`` as ``~1`` (in that order)."""
    return token.replace("~", "~0").replace("/", "~1")


def unescape_token(token: str) -> str:
    """Reverse :func:`escape_token` (``~1`` first, then ``~0``)."""
    return token.replace("~1", "/").replace("~0", "~")


def format_pointer(path: Path) -> str:
    """Render *path* as a JSON-Pointer string.

    >>> format_pointer(("a", "b/c", 0, APPEND))
    '/a/b~1c/0/-'
    >>> format_pointer(())
    ''
    """
    return "".join("/" + escape_token(str(token)) for token in path)


def parse_pointer(pointer: str) -> Path:
    """Split a JSON-Pointer string into unescaped string tokens.

    ``""`` addresses the root.  Every other pointer must start with ``/``.

    Raises
    ------
    YamlNoteInvalidPathError
        If *pointer* is not a string, does not start with ``/``, or
        contains a ``~`` not followed by ``0`` or ``1``.
    """
    if not isinstance(pointer, str):
        raise YamlNoteInvalidPathError(
            f"Pointer must be a string, got {type(pointer).__name__}",
            context={"path": repr(pointer), "depth": 0, "token": None},
        )
    if pointer == "":
        return ()
    if not pointer.startswith("/"):
        raise YamlNoteInvalidPathError(
            f"Pointer must start with '/': {pointer!r}",
            context={"path": pointer, "depth": 0, "token": None},
        )
    tokens: list[PathToken] = []
    for depth, raw in enumerate(pointer[1:].split("/")):
        if re.search(r"~(?![01])", raw):
            raise YamlNoteInvalidPathError(
                f"Invalid escape sequence in pointer segment {raw!r}",
                context={"path": pointer, "depth": depth, "token": raw},
            )
        tokens.append(unescape_token(raw))
    return tuple(tokens)


def is_append(token: PathToken) -> bool:
    """Return ``True`` for the append marker in either of its spellings."""
    return token is APPEND or token == "-"


def sequence_index(token: PathToken, path: Path, depth: int) -> int | None:
    """Interpret *token* as a sequence position.

    Returns the non-negative index, or ``None`` for the append marker.

    Raises
    ------
    YamlNoteInvalidPathError
        If the token is neither a non-negative integer, a base-10 digit
        string without leading zeros, nor the append marker.
    """
    if is_append(token):
        return None
    if isinstance(token, int) and not isinstance(token, bool):
        if token >= 0:
            return token
    elif isinstance(token, str) and _INDEX_RE.fullmatch(token):
        return int(token)
    raise YamlNoteInvalidPathError(
        f"Token {token!r} is not a valid sequence index",
        context={"path": format_pointer(path), "depth": depth, "token": str(token)},
    )


def mapping_key(token: PathToken, path: Path, depth: int) -> str:
    """Interpret *token* as a mapping key.

    Raises
    ------
    YamlNoteInvalidPathError
        If the token is an integer index or the :data:`APPEND` sentinel.
    """
    if isinstance(token, str):
        return token
    raise YamlNoteInvalidPathError(
        f"Token {token!r} cannot address a mapping entry",
        context={"path": format_pointer(path), "depth": depth, "token": str(token)},
    )
