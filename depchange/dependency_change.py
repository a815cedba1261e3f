"""A change to a project's dependencies produced by one update run.

A ``DependencyChange`` holds the updated dependencies, the rewritten
dependency files and the grouping rule (if any) that produced them. Adapters
use it to name the branch, write the files and open a pull request.
"""

import copy
import threading
from collections.abc import Iterable, Sequence
from functools import cached_property
from typing import Any, Protocol

from .branch_namer import BranchNamer
from .config import BranchNameConfig
from .models import Dependency, DependencyFile, GroupRule, Job, Source

_UNSET = object()


class MessageBuilder(Protocol):
    """Builds a pull request message; rendering is outside this package."""

    def __call__(
        self,
        *,
        source: Source,
        dependencies: Sequence[Dependency],
        files: Sequence[DependencyFile],
        credentials: Sequence[Any],
        commit_message_options: Any,
    ) -> Any: ...


class DependencyChange:
    """Frozen snapshot of one dependency update."""

    def __init__(
        self,
        job: Job,
        dependencies: Iterable[Dependency],
        updated_dependency_files: Iterable[DependencyFile],
        group_rule: GroupRule | None = None,
    ):
        self.job = job
        self.dependencies = tuple(dependencies)
        self.updated_dependency_files = tuple(updated_dependency_files)
        self.group_rule = group_rule
        self._message_lock = threading.Lock()
        self._message: Any = _UNSET

    def build_message(self, message_builder: MessageBuilder) -> Any:
        """Return the pull request message, building it on first use only."""
        if self._message is _UNSET:
            with self._message_lock:
                if self._message is _UNSET:
                    self._message = message_builder(
                        source=self.job.source,
                        dependencies=self.dependencies,
                        files=self.updated_dependency_files,
                        credentials=self.job.credentials,
                        commit_message_options=self.job.commit_message_options,
                    )
        return self._message

    def humanized_summary(self) -> str:
        return ", ".join(
            f"{dependency.name} ( from {dependency.previous_version or ''} to {dependency.version or ''} )"
            for dependency in self.dependencies
        )

    @cached_property
    def _serialized_files(self) -> tuple[dict[str, Any], ...]:
        return tuple(f.to_dict() for f in self.updated_dependency_files)

    def serialized_files(self) -> list[dict[str, Any]]:
        return copy.deepcopy(list(self._serialized_files))

    def is_grouped(self) -> bool:
        # Only records whether a rule was assigned; the rule itself is not evaluated
        return self.group_rule is not None

    @property
    def target_branch(self) -> str | None:
        return self.job.source.branch

    def branch_name(self, config: BranchNameConfig | None = None) -> str:
        config = config or BranchNameConfig()
        return BranchNamer(
            dependencies=self.dependencies,
            files=self.updated_dependency_files,
            target_branch=self.target_branch,
            separator=config.separator,
            prefix=config.prefix,
            max_length=config.max_length,
        ).new_branch_name()
