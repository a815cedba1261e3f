"""Pytest configuration and fixtures."""

import json
import logging

import pytest

from depchange.models import Dependency, DependencyFile, Job, Requirement, Source
from depchange.registry import default_registry


@pytest.fixture
def registry():
    """Fresh registry with the built-in ecosystems."""
    return default_registry()


@pytest.fixture
def job():
    """Job targeting the main branch of a GitHub repo."""
    return Job(
        source=Source(provider="github", repo="acme/widgets", directory="/", branch="main"),
        credentials=({"type": "git_source", "host": "github.com"},),
        commit_message_options={"prefix": "build"},
    )


@pytest.fixture
def gemfile():
    return DependencyFile(name="Gemfile", content='gem "foo", "~> 0.2"\n', directory="/")


@pytest.fixture
def foo_and_bar():
    """Two lockfile dependencies: foo 0.1 -> 0.2 and bar 1.0 -> 1.1."""
    foo = Dependency(
        name="foo",
        package_manager="bundler",
        version="0.2",
        previous_version="0.1",
        requirements=(Requirement(file="Gemfile", requirement="~> 0.2"),),
        previous_requirements=(Requirement(file="Gemfile", requirement="~> 0.1"),),
    )
    bar = Dependency(
        name="bar",
        package_manager="bundler",
        version="1.1",
        previous_version="1.0",
        requirements=(Requirement(file="Gemfile", requirement="~> 1.1"),),
        previous_requirements=(Requirement(file="Gemfile", requirement="~> 1.0"),),
    )
    return [foo, bar]


@pytest.fixture
def change_document():
    """Serialized change document as accepted by parse_change."""
    return {
        "job": {
            "source": {"provider": "github", "repo": "acme/widgets", "directory": "/", "branch": "main"},
            "credentials": [],
            "commit_message_options": {"prefix": "deps"},
        },
        "dependencies": [
            {
                "name": "foo",
                "package_manager": "bundler",
                "version": "0.2",
                "previous_version": "0.1",
                "requirements": [{"file": "Gemfile", "requirement": "~> 0.2"}],
                "previous_requirements": [{"file": "Gemfile", "requirement": "~> 0.1"}],
            },
            {
                "name": "bar",
                "package_manager": "bundler",
                "version": "1.1",
                "previous_version": "1.0",
                "requirements": [{"file": "Gemfile", "requirement": "~> 1.1"}],
                "previous_requirements": [{"file": "Gemfile", "requirement": "~> 1.0"}],
            },
        ],
        "updated_dependency_files": [
            {"name": "Gemfile", "directory": "/", "content": "gem 'foo'\n", "operation": "update"},
            {"name": "Gemfile.lock", "directory": "/", "content": "GEM\n", "operation": "update"},
        ],
        "group_rule": None,
    }


@pytest.fixture
def change_file(tmp_path, change_document):
    """Change document written to disk."""
    path = tmp_path / "change.json"
    path.write_text(json.dumps(change_document))
    return path


@pytest.fixture
def clean_logging():
    """Restore root logger state after a test touches it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
