"""Partial marker comments.

A partial is delimited in rendered HTML by a pair of comments::

    <!--frsh-partial:<name>:<mode>:<key>-->
      ...content...
    <!--/frsh-partial:<name>:<mode>:<key>-->

``mode`` is the replacement-mode code (``0`` replace, ``1`` append,
``2`` prepend). ``name`` may not contain ``:``; ``key`` may.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from perch.errors import MarkerError

START_PREFIX = "frsh-partial:"
END_PREFIX = f"/{START_PREFIX}"


class ReplacementMode(Enum):
    """How new partial content is merged into the live region."""

    REPLACE = "replace"
    APPEND = "append"
    PREPEND = "prepend"

    @property
    def code(self) -> str:
        """The wire code used in marker comments."""
        return _MODE_TO_CODE[self]

    @classmethod
    def from_code(cls, code: str) -> ReplacementMode:
        """Resolve a wire code, raising :class:`MarkerError` if unknown."""
        try:
            return _CODE_TO_MODE[code]
        except KeyError:
            raise MarkerError(f"Unknown partial replacement mode code {code!r}") from None

    @classmethod
    def coerce(cls, value: ReplacementMode | str) -> ReplacementMode:
        """Accept a mode, its name (``"append"``), or its code (``"1"``)."""
        if isinstance(value, ReplacementMode):
            return value
        if value in _CODE_TO_MODE:
            return _CODE_TO_MODE[value]
        return cls(value)


_MODE_TO_CODE: dict[ReplacementMode, str] = {
    ReplacementMode.REPLACE: "0",
    ReplacementMode.APPEND: "1",
    ReplacementMode.PREPEND: "2",
}
_CODE_TO_MODE: dict[str, ReplacementMode] = {code: mode for mode, code in _MODE_TO_CODE.items()}


@dataclass(frozen=True, slots=True)
class PartialMarker:
    """A decoded start or end marker."""

    name: str
    mode: ReplacementMode = ReplacementMode.REPLACE
    key: str = ""
    end: bool = False

    def encode(self) -> str:
        """Comment text for this marker."""
        return encode_marker(self.name, self.mode, self.key, end=self.end)

    def pairs_with(self, other: PartialMarker) -> bool:
        """True if *other* closes the region this marker opens."""
        return (
            not self.end
            and other.end
            and self.name == other.name
            and self.key == other.key
            and self.mode is other.mode
        )


def encode_marker(
    name: str,
    mode: ReplacementMode | str = ReplacementMode.REPLACE,
    key: str = "",
    *,
    end: bool = False,
) -> str:
    """Build the comment text for a start (or, with ``end=True``, end) marker.

    >>> encode_marker("counter")
    'frsh-partial:counter:0:'
    >>> encode_marker("feed", "append", "k1", end=True)
    '/frsh-partial:feed:1:k1'
    """
    if not name:
        raise MarkerError("A partial name must not be empty")
    if ":" in name:
        raise MarkerError(f"A partial name must not contain ':' (got {name!r})")
    if "--" in name or "--" in key:
        raise MarkerError("Partial names and keys must not contain '--'")
    mode = ReplacementMode.coerce(mode)
    prefix = END_PREFIX if end else START_PREFIX
    return f"{prefix}{name}:{mode.code}:{key}"


def decode_marker(text: str) -> PartialMarker:
    """Parse marker comment text.

    Raises :class:`MarkerError` when the prefix is neither the start nor
    the end form, when fields are missing, or when the mode code is
    unknown.
    """
    if text.startswith(END_PREFIX):
        end = True
        body = text[len(END_PREFIX) :]
    elif text.startswith(START_PREFIX):
        end = False
        body = text[len(START_PREFIX) :]
    else:
        raise MarkerError(f"Not a partial marker comment: {text!r}")

    fields = body.split(":", 2)
    if len(fields) != 3:
        raise MarkerError(f"Expected 'name:mode:key' in partial marker, got {text!r}")
    name, code, key = fields
    if not name:
        raise MarkerError(f"Partial marker has an empty name: {text!r}")
    return PartialMarker(name=name, mode=ReplacementMode.from_code(code), key=key, end=end)


def is_start_marker(text: str) -> bool:
    """True if comment text opens a partial."""
    return text.startswith(START_PREFIX)


def is_end_marker(text: str) -> bool:
    """True if comment text closes a partial."""
    return text.startswith(END_PREFIX)
