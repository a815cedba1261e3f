"""Reading dependency changes from JSON documents."""

import json
import logging
from collections.abc import Mapping
from typing import Any

from .config import BranchNameConfig
from .dependency_change import DependencyChange
from .errors import ChangeParseError
from .models import Dependency, DependencyFile, GroupRule, Job, Source

logger = logging.getLogger(__name__)


def _require_mapping(value: Any, what: str) -> Mapping:
    if not isinstance(value, Mapping):
        raise ChangeParseError(f"{what} must be an object")
    return value


def _require_list(value: Any, what: str) -> list:
    if not isinstance(value, list):
        raise ChangeParseError(f"{what} must be a list")
    return value


def _parse_job(data: Mapping) -> Job:
    source = _require_mapping(data.get("source"), "job.source")
    return Job(
        source=Source(
            provider=source.get("provider", "github"),
            repo=source["repo"],
            directory=source.get("directory") or "/",
            branch=source.get("branch"),
        ),
        credentials=tuple(_require_list(data.get("credentials", []), "job.credentials")),
        commit_message_options=data.get("commit_message_options"),
    )


def _parse_group_rule(data: Any) -> GroupRule | None:
    if data is None:
        return None
    data = _require_mapping(data, "group_rule")
    return GroupRule(name=data["name"], patterns=tuple(data.get("patterns") or ()))


class ChangeParser:
    """Parser for serialized dependency change documents."""

    def parse(self, content: str) -> DependencyChange:
        try:
            document = json.loads(content)
        except json.JSONDecodeError as e:
            raise ChangeParseError(f"Invalid JSON: {e}") from e

        return self.parse_document(document)

    def parse_document(self, document: Any) -> DependencyChange:
        document = _require_mapping(document, "Change document")
        try:
            job = _parse_job(_require_mapping(document.get("job"), "job"))
            dependencies = [
                Dependency.from_dict(_require_mapping(d, "dependency"))
                for d in _require_list(document.get("dependencies"), "dependencies")
            ]
            files = [
                DependencyFile.from_dict(_require_mapping(f, "updated dependency file"))
                for f in _require_list(
                    document.get("updated_dependency_files", []), "updated_dependency_files"
                )
            ]
            group_rule = _parse_group_rule(document.get("group_rule"))
        except ChangeParseError:
            raise
        except KeyError as e:
            raise ChangeParseError(f"Missing required field {e.args[0]!r}") from e
        except (TypeError, ValueError) as e:
            raise ChangeParseError(str(e)) from e

        if not dependencies:
            raise ChangeParseError("A change needs at least one dependency")

        logger.debug("Parsed change with %d dependencies and %d files", len(dependencies), len(files))
        return DependencyChange(
            job=job,
            dependencies=dependencies,
            updated_dependency_files=files,
            group_rule=group_rule,
        )


def parse_change(content: str) -> DependencyChange:
    """Parse a JSON change document into a DependencyChange.

    Args:
        content: The JSON document

    Returns:
        Parsed DependencyChange

    Raises:
        ChangeParseError: If the document is malformed
    """
    parser = ChangeParser()
    return parser.parse(content)


def change_to_dict(change: DependencyChange, config: BranchNameConfig | None = None) -> dict[str, Any]:
    """Summarize a change for reports."""
    return {
        "branch": change.branch_name(config),
        "summary": change.humanized_summary(),
        "grouped": change.is_grouped(),
        "dependencies": [d.name for d in change.dependencies],
        "files": change.serialized_files(),
    }
