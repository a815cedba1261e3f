"""Branch names for dependency updates."""

import hashlib
import logging
import re
from collections.abc import Sequence

from .config import DEFAULT_PREFIX, DEFAULT_SEPARATOR
from .errors import BranchNameError
from .logging_utils import is_debug_enabled
from .models import Dependency, DependencyFile, Requirement

logger = logging.getLogger(__name__)

DIGEST_ECOSYSTEM = "docker"

_GIT_SHA = re.compile(r"[0-9a-f]{40}")
_GEMSPEC = re.compile(r"^[^/]*\.gemspec$")

# Order matters: two-character operators are rewritten before their prefixes
_REQUIREMENT_TOKENS = (
    ("!=", "neq-"),
    (">=", "gte-"),
    ("<=", "lte-"),
    ("~>", "tw-"),
    ("^", "tw-"),
    ("||", "or-"),
    ("~=", "approx-"),
    ("~", "approx-"),
)


def sanitize_ref(ref: str) -> str:
    """Make ``ref`` a legal git ref name.

    Not a complete implementation of git's ref rules, but it covers the
    cases dependency metadata produces. The allowed character set is a bit
    stricter than git's.
    """
    ref = re.sub(r"[^A-Za-z0-9/\-_.(){}]", "", ref)
    # Slashes can't be followed by periods
    ref = ref.replace("/.", "/dot-")
    ref = re.sub(r"\.{2,}", ".", ref)
    ref = re.sub(r"/{2,}", "/", ref)
    return re.sub(r"\.$", "", ref)


def _unique(values) -> list:
    seen = []
    for value in values:
        if value is not None and value not in seen:
            seen.append(value)
    return seen


class BranchNamer:
    """Derive a branch name for a set of updated dependencies."""

    def __init__(
        self,
        dependencies: Sequence[Dependency],
        files: Sequence[DependencyFile],
        target_branch: str | None,
        separator: str = DEFAULT_SEPARATOR,
        prefix: str | None = DEFAULT_PREFIX,
        max_length: int | None = None,
    ):
        if not dependencies:
            raise ValueError("BranchNamer needs at least one dependency")
        self.dependencies = tuple(dependencies)
        self.files = tuple(files)
        self.target_branch = target_branch
        self.separator = separator
        self.prefix = prefix
        self.max_length = max_length
        self._name: str | None = None

    def new_branch_name(self) -> str:
        if self._name is None:
            self._name = f"{self._dependency_name_part()}-{self._branch_version_suffix()}"

        path = "/".join(part for part in (*self._prefixes(), self._name) if part)
        # Some users need branch names without slashes
        sanitized_name = sanitize_ref(re.sub(r"/+", "/", path).replace("/", self.separator))

        # Shorten the ref in case users' refs have length limits
        if self.max_length is not None and len(sanitized_name) > self.max_length:
            digest = hashlib.sha1(sanitized_name.encode("utf-8")).hexdigest()[: self.max_length]
            start = max(self.max_length - len(digest), 0)
            if is_debug_enabled(logger):
                logger.debug("Truncating branch name %s to %d characters", sanitized_name, self.max_length)
            sanitized_name = sanitized_name[:start] + digest

        return sanitized_name

    @property
    def package_manager(self) -> str:
        return self.dependencies[0].package_manager

    def _prefixes(self) -> list[str | None]:
        directory = self.files[0].directory.replace(" ", "-") if self.files else None
        return [self.prefix, self.package_manager, directory, self.target_branch]

    def _dependency_name_part(self) -> str:
        if len(self.dependencies) > 1 and self._updating_a_property():
            return self._property_name()
        if len(self.dependencies) > 1 and self._updating_a_dependency_set():
            return self._dependency_set_group()

        joined = "-and-".join(dep.name for dep in self.dependencies)
        return re.sub(r"[:\[\]]", "-", joined).replace("@", "")

    def _updating_a_property(self) -> bool:
        return any(r.property_name for r in self.dependencies[0].requirements)

    def _updating_a_dependency_set(self) -> bool:
        return any(r.dependency_set for r in self.dependencies[0].requirements)

    def _property_name(self) -> str:
        name = next(
            (r.property_name for r in self.dependencies[0].requirements if r.property_name),
            None,
        )
        if not name:
            raise BranchNameError("No property name!")
        return name

    def _dependency_set_group(self) -> str:
        dependency_set = next(
            (r.dependency_set for r in self.dependencies[0].requirements if r.dependency_set),
            None,
        )
        group = dependency_set.get("group") if dependency_set else None
        if not group:
            raise BranchNameError("No dependency set!")
        return group

    def _branch_version_suffix(self) -> str:
        dep = self.dependencies[0]

        if dep.removed:
            return "-removed"
        if self._library() and self._ref_changed(dep) and self._new_ref(dep):
            return self._new_ref(dep)
        if self._library():
            return self._sanitized_requirement(dep)
        return self._new_version(dep)

    def _library(self) -> bool:
        return any(not dep.appears_in_lockfile() for dep in self.dependencies)

    def _sanitized_requirement(self, dependency: Dependency) -> str:
        requirement = self._new_library_requirement(dependency).replace(" ", "")
        for operator, token in _REQUIREMENT_TOKENS:
            requirement = requirement.replace(operator, token)
        requirement = re.sub(r"=+", "eq-", requirement)
        return (
            requirement.replace(">", "gt-")
            .replace("<", "lt-")
            .replace("*", "star")
            .replace(",", "-and-")
        )

    def _new_library_requirement(self, dependency: Dependency) -> str:
        previous = dependency.previous_requirements or ()
        updated = [r for r in dependency.requirements if r not in previous]

        gemspec = next((r for r in updated if _GEMSPEC.match(r.file)), None)
        chosen: Requirement | None = gemspec or (updated[0] if updated else None)
        if chosen is None or chosen.requirement is None:
            raise BranchNameError(f"No updated requirement for {dependency.name}")
        return chosen.requirement

    def _new_version(self, dependency: Dependency) -> str:
        version = dependency.version
        if version is None:
            raise BranchNameError(f"No version for {dependency.name}")

        # Looks like a git SHA: prefer the ref being updated to, else a short SHA
        if _GIT_SHA.fullmatch(version):
            if self._ref_changed(dependency) and self._new_ref(dependency):
                return self._new_ref(dependency)
            return version[:7]

        if version == dependency.previous_version and self.package_manager == DIGEST_ECOSYSTEM:
            digest = next((r.source_digest for r in dependency.requirements if r.source_digest), None)
            if digest:
                return digest.split(":")[-1][:7]
            logger.warning("No digest found for unchanged %s %s", dependency.name, version)
        elif version == dependency.previous_version:
            logger.debug("Version of %s is unchanged (%s)", dependency.name, version)

        return version

    def _previous_ref(self, dependency: Dependency) -> str | None:
        refs = _unique(r.source_ref for r in dependency.previous_requirements or ())
        return refs[0] if len(refs) == 1 else None

    def _new_ref(self, dependency: Dependency) -> str | None:
        refs = _unique(r.source_ref for r in dependency.requirements)
        return refs[0] if len(refs) == 1 else None

    def _ref_changed(self, dependency: Dependency) -> bool:
        # Multiple previous refs count as no previous ref
        return self._previous_ref(dependency) != self._new_ref(dependency)
