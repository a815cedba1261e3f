"""Registry mapping ecosystem ids to version classes."""

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType

from . import version_docker, version_python
from .errors import NoVersionStrategyError, VersionValidationError
from .version import BaseVersion, GenericVersion

logger = logging.getLogger(__name__)

VersionFactory = Callable[[str], BaseVersion]

GENERIC_ECOSYSTEMS = ("bundler", "npm_and_yarn")


class VersionRegistry:
    """Lookup table from ecosystem id to version factory.

    Registrations replace the whole mapping under a lock, so readers always
    see a complete snapshot and never need to lock. The last registration
    for an ecosystem wins.
    """

    def __init__(self, entries: Mapping[str, VersionFactory] | None = None):
        self._lock = threading.Lock()
        self._entries: Mapping[str, VersionFactory] = MappingProxyType(dict(entries or {}))

    def register(self, ecosystem: str, factory: VersionFactory) -> None:
        """Register ``factory`` for ``ecosystem``, replacing any previous one."""
        with self._lock:
            entries = dict(self._entries)
            if ecosystem in entries:
                logger.debug("Overriding version strategy for %s", ecosystem)
            entries[ecosystem] = factory
            self._entries = MappingProxyType(entries)
        logger.debug("Registered version strategy %r for %s", factory, ecosystem)

    def get(self, ecosystem: str) -> VersionFactory:
        """Return the version factory for ``ecosystem``.

        Raises:
            NoVersionStrategyError: If nothing is registered for ``ecosystem``
        """
        try:
            return self._entries[ecosystem]
        except KeyError:
            raise NoVersionStrategyError(ecosystem) from None

    lookup = get

    def __contains__(self, ecosystem: object) -> bool:
        return ecosystem in self._entries

    @property
    def ecosystems(self) -> list[str]:
        return sorted(self._entries)

    def parse(self, ecosystem: str, raw: str) -> BaseVersion:
        return self.get(ecosystem)(raw)

    def is_valid(self, ecosystem: str, raw: str) -> bool:
        """Check whether ``raw`` is a valid version for ``ecosystem``.

        Malformed versions return False; an unknown ecosystem still raises.
        """
        factory = self.get(ecosystem)
        correct = getattr(factory, "correct", None)
        if correct is not None:
            return bool(correct(raw))
        try:
            factory(raw)
        except VersionValidationError:
            return False
        return True

    def compare(self, ecosystem: str, a: str, b: str) -> int:
        """Return -1, 0 or 1 comparing two raw version strings."""
        return self.parse(ecosystem, a).compare(self.parse(ecosystem, b))

    def sort(self, ecosystem: str, raws: Iterable[str], reverse: bool = False) -> list[BaseVersion]:
        factory = self.get(ecosystem)
        return sorted((factory(raw) for raw in raws), reverse=reverse)

    def segments(self, ecosystem: str, raw: str) -> list:
        return self.parse(ecosystem, raw).segments


def default_registry() -> VersionRegistry:
    """Build a registry holding the built-in ecosystems."""
    registry = VersionRegistry()
    for ecosystem in GENERIC_ECOSYSTEMS:
        registry.register(ecosystem, GenericVersion)
    registry.register(version_docker.ECOSYSTEM, version_docker.DockerVersion)
    registry.register(version_python.ECOSYSTEM, version_python.PythonVersion)
    return registry
