"""PEP 440 versions for the pip ecosystem."""

from packaging.version import InvalidVersion, Version

from .errors import VersionValidationError
from .version import BaseVersion

ECOSYSTEM = "pip"


class PythonVersion(BaseVersion):
    """Python package version ordered by PEP 440 rules."""

    def __init__(self, version):
        if version is None or isinstance(version, bool):
            raise VersionValidationError(version)

        self._original = str(version).strip()
        try:
            self._version = Version(self._original)
        except InvalidVersion as e:
            raise VersionValidationError(version, str(e)) from e

    @classmethod
    def correct(cls, version) -> bool:
        try:
            cls(version)
        except VersionValidationError:
            return False
        return True

    @property
    def segments(self) -> list:
        parts = list(self._version.release)
        if self._version.pre:
            parts.extend(self._version.pre)
        return parts

    @property
    def prerelease(self) -> bool:
        return self._version.is_prerelease

    def to_semver(self) -> str:
        return self._version.public

    def _compare(self, other: "PythonVersion") -> int:
        if self._version == other._version:
            return 0
        return -1 if self._version < other._version else 1

    def __hash__(self) -> int:
        return hash((PythonVersion, self._version))

    def __str__(self) -> str:
        return self._original
