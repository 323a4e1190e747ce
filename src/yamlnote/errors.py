"""Full error hierarchy for the yamlnote core.

Every public error class inherits from YamlNoteError. Each carries a
machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).

Error codes are defined as a :class:`str` enum so that they serialise
naturally to JSON and can be matched with simple ``==`` comparisons.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the core can raise."""

    DECODE_ERROR = "DECODE_ERROR"
    ENCODE_ERROR = "ENCODE_ERROR"
    PATH_ERROR = "PATH_ERROR"
    PATH_NOT_FOUND = "PATH_NOT_FOUND"
    INDEX_OUT_OF_BOUNDS = "INDEX_OUT_OF_BOUNDS"
    INVALID_PATH = "INVALID_PATH"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    APPLY_ERROR = "APPLY_ERROR"
    PATCH_FORMAT_ERROR = "PATCH_FORMAT_ERROR"
    FRONTMATTER_ERROR = "FRONTMATTER_ERROR"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class YamlNoteError(Exception):
    """Base exception for all yamlnote errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
        Keys and expected types are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Codec errors
# ---------------------------------------------------------------------------

class YamlNoteDecodeError(YamlNoteError):
    """Source text could not be decoded into a tree.

    Context keys: ``line`` (1-based, ``0`` when the parser reports no
    location), ``format``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.DECODE_ERROR,
            message=message,
            context=context,
            cause=cause,
        )

    @property
    def line(self) -> int:
        return int(self.context.get("line", 0))


class YamlNoteEncodeError(YamlNoteError):
    """A tree could not be rendered back to text.

    Context keys: ``format``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.ENCODE_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class YamlNoteFrontmatterError(YamlNoteError):
    """Markdown frontmatter is missing, incomplete, or not valid YAML.

    Context keys: ``reason``, ``line``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.FRONTMATTER_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Path errors
# ---------------------------------------------------------------------------

class YamlNotePathError(YamlNoteError):
    """Base class for errors raised while addressing a node by path.

    Context keys (all subclasses): ``path`` (JSON-Pointer string) and
    ``depth`` (index of the offending token).  Subclasses may add more.
    """

    def __init__(
        self,
        code: str = ErrorCode.PATH_ERROR,
        message: str = "Path error",
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            context=context,
            cause=cause,
        )


class YamlNotePathNotFoundError(YamlNotePathError):
    """A mapping key along the path does not exist.

    Context keys: ``path``, ``depth``, ``key``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.PATH_NOT_FOUND,
            message=message,
            context=context,
            cause=cause,
        )


class YamlNoteIndexOutOfBoundsError(YamlNotePathError):
    """A sequence index lies outside the range allowed for the operation.

    Context keys: ``path``, ``depth``, ``index``, ``length``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.INDEX_OUT_OF_BOUNDS,
            message=message,
            context=context,
            cause=cause,
        )


class YamlNoteInvalidPathError(YamlNotePathError):
    """The path is malformed: a bad pointer string, a token that cannot
    address the container it meets, an append marker in a non-final
    position, or an attempt to remove the root.

    Context keys: ``path``, ``depth``, ``token``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PATH,
            message=message,
            context=context,
            cause=cause,
        )


class YamlNoteTypeMismatchError(YamlNotePathError):
    """The path continues through a scalar node.

    Context keys: ``path``, ``depth``, ``node_kind``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.TYPE_MISMATCH,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Patch errors
# ---------------------------------------------------------------------------

class YamlNoteApplyError(YamlNoteError):
    """An operation in a patch failed; the whole patch was abandoned.

    The underlying :class:`YamlNotePathError` is available as ``cause``.

    Context keys: ``index``, ``op``, ``path``, ``reason`` (the path error
    code).
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.APPLY_ERROR,
            message=message,
            context=context,
            cause=cause,
        )

    @property
    def index(self) -> int:
        return int(self.context.get("index", -1))


class YamlNotePatchFormatError(YamlNoteError):
    """A patch document is not a well-formed list of add/remove/replace
    operations.

    Context keys: ``index`` (entry position, when known), ``reason``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.PATCH_FORMAT_ERROR,
            message=message,
            context=context,
            cause=cause,
        )
