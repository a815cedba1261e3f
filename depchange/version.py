"""Version ordering shared by all ecosystems.

Every ecosystem plugs a ``BaseVersion`` subclass into a ``VersionRegistry``.
``GenericVersion`` is the default dotted-numeric ordering: numeric segments
compare as numbers, alphabetic segments compare lexically and sort below
numbers so that pre-releases come before their release.
"""

import re
from abc import ABC, abstractmethod

from .errors import VersionValidationError

VERSION_PATTERN = r"[0-9]+(?:\.[0-9a-zA-Z]+)*(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
ANCHORED_VERSION_PATTERN = re.compile(rf"\A\s*({VERSION_PATTERN})?\s*\Z")

_SEGMENT_PATTERN = re.compile(r"[0-9]+|[a-z]+", re.IGNORECASE)
_LETTER_PATTERN = re.compile(r"[a-zA-Z]")


class BaseVersion(ABC):
    """Common interface for ecosystem version classes.

    Instances of the same class are totally ordered. Comparing two different
    version classes is unsupported: ``==`` is False and ordering raises
    ``TypeError``.
    """

    @classmethod
    @abstractmethod
    def correct(cls, version) -> bool:
        """Return True if ``version`` parses for this ecosystem."""

    @property
    @abstractmethod
    def segments(self) -> list:
        """Ordered numeric and string atoms of the version."""

    @abstractmethod
    def to_semver(self) -> str:
        """Render the version as a SemVer-comparable string."""

    @abstractmethod
    def _compare(self, other) -> int:
        """Compare with an instance of the same class, returning -1, 0 or 1."""

    def compare(self, other: "BaseVersion") -> int:
        """Return -1, 0 or 1 as ``self`` is less than, equal to or greater than ``other``."""
        if type(other) is not type(self):
            raise TypeError(
                f"Cannot compare {type(self).__name__} with {type(other).__name__}"
            )
        return self._compare(other)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._compare(other) == 0

    def __lt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._compare(other) < 0

    def __le__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._compare(other) <= 0

    def __gt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._compare(other) > 0

    def __ge__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._compare(other) >= 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


def _strip_build_metadata(version: str) -> str:
    return version.split("+", 1)[0] if "+" in version else version


def _drop_trailing_zeros(parts: list) -> list:
    while parts and parts[-1] == 0:
        parts.pop()
    return parts


def _canonicalize(segments: tuple) -> tuple:
    string_start = next(
        (i for i, segment in enumerate(segments) if isinstance(segment, str)),
        len(segments),
    )
    numeric = _drop_trailing_zeros(list(segments[:string_start]))
    strings = _drop_trailing_zeros(list(segments[string_start:]))
    return tuple(numeric + strings)


class GenericVersion(BaseVersion):
    """Dotted-numeric version with optional pre-release tail.

    ``1.0 == 1.0.0``, ``1.0 < 1.0.1`` and ``1.0.0-alpha < 1.0.0``. Build
    metadata after a ``+`` is ignored. An empty string means ``0``.
    """

    def __init__(self, version):
        if version is None or isinstance(version, bool):
            raise VersionValidationError(version)

        text = str(version)
        candidate = _strip_build_metadata(text)
        if not ANCHORED_VERSION_PATTERN.match(candidate):
            raise VersionValidationError(version)

        self._original = text.strip()
        # A hyphen starts a pre-release, e.g. 1.0.0-rc1 reads as 1.0.0.pre.rc1
        self._version = (candidate.strip() or "0").replace("-", ".pre.")
        self._segments = tuple(
            int(part) if part.isdigit() else part
            for part in _SEGMENT_PATTERN.findall(self._version)
        )
        self._canonical = _canonicalize(self._segments)

    @classmethod
    def correct(cls, version) -> bool:
        if version is None or isinstance(version, bool):
            return False
        return ANCHORED_VERSION_PATTERN.match(_strip_build_metadata(str(version))) is not None

    @property
    def segments(self) -> list:
        return list(self._segments)

    @property
    def prerelease(self) -> bool:
        return _LETTER_PATTERN.search(self._version) is not None

    def to_semver(self) -> str:
        return self._original

    def _compare(self, other: "GenericVersion") -> int:
        lhs_segments, rhs_segments = self._canonical, other._canonical
        for index in range(max(len(lhs_segments), len(rhs_segments))):
            lhs = lhs_segments[index] if index < len(lhs_segments) else 0
            rhs = rhs_segments[index] if index < len(rhs_segments) else 0
            if lhs == rhs:
                continue
            if isinstance(lhs, str) and isinstance(rhs, int):
                return -1
            if isinstance(lhs, int) and isinstance(rhs, str):
                return 1
            return -1 if lhs < rhs else 1
        return 0

    def __hash__(self) -> int:
        return hash((GenericVersion, self._canonical))

    def __str__(self) -> str:
        return self._original
