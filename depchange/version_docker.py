"""Docker tag versions, including Java-style update numbers."""

import re

from .errors import VersionValidationError
from .version import BaseVersion, GenericVersion

ECOSYSTEM = "docker"

_STARTS_WITH_DIGIT = re.compile(r"\A[0-9]")


class DockerVersion(BaseVersion):
    """Version of a Docker image tag.

    Java images tag releases as ``<release>_<update>`` (for example
    ``8.0.192_12``), see
    https://www.oracle.com/java/technologies/javase/versioning-naming.html.
    The tag is split at the first underscore; the release part is compared
    first and the update number only breaks ties. Tags use ``-`` where SemVer
    uses ``.``, so hyphens in the release part are read as dots.
    """

    def __init__(self, version):
        if version is None or isinstance(version, bool):
            raise VersionValidationError(version)

        self._original = str(version).strip()
        release_part, _, update_part = self._original.partition("_")

        self.release_part = GenericVersion(release_part.replace("-", "."))
        self.update_part = GenericVersion(
            update_part if _STARTS_WITH_DIGIT.match(update_part) else 0
        )

    @classmethod
    def correct(cls, version) -> bool:
        try:
            return GenericVersion.correct(cls(version).to_semver())
        except VersionValidationError:
            return False

    @property
    def segments(self) -> list:
        return self.release_part.segments

    @property
    def prerelease(self) -> bool:
        return self.release_part.prerelease

    def to_semver(self) -> str:
        return self.release_part.to_semver()

    def sort_criteria(self) -> tuple:
        return (self.release_part, self.update_part)

    def _compare(self, other: "DockerVersion") -> int:
        for lhs, rhs in zip(self.sort_criteria(), other.sort_criteria()):
            result = lhs.compare(rhs)
            if result:
                return result
        return 0

    def __hash__(self) -> int:
        return hash((DockerVersion, self.sort_criteria()))

    def __str__(self) -> str:
        return self._original
