"""Ecosystem detection for dependency manifests."""

import posixpath
import re
from fnmatch import fnmatch

UNKNOWN = "unknown"

# Filename globs per ecosystem, matched against the basename
FILENAME_PATTERNS = (
    ("docker", ("Dockerfile", "*.Dockerfile", "*.dockerfile", "Dockerfile.*")),
    ("bundler", ("Gemfile", "Gemfile.lock", "*.gemspec")),
    ("pip", ("requirements*.txt", "pyproject.toml", "setup.py", "setup.cfg", "Pipfile", "Pipfile.lock")),
    ("npm_and_yarn", ("package.json", "package-lock.json", "yarn.lock")),
)

CONTENT_PATTERNS = (
    ("docker", (r"^\s*FROM\s+\S+",)),
    ("bundler", (r"^\s*source\s+['\"]https://rubygems\.org['\"]", r"^\s*gem\s+['\"][\w\-]+['\"]")),
    ("npm_and_yarn", (r'"dependencies"\s*:', r'"devDependencies"\s*:')),
    (
        "pip",
        (
            r"^[a-zA-Z0-9\-_.]+\s*(?:\[.*?\])?\s*(?:==|>=|<=|~=|!=|>|<)\s*[\w.\-*]+",  # package>=1.0.0
            r";\s*(?:sys_platform|python_version)",  # environment markers
        ),
    ),
)


def identify(filename: str | None, content: str | None = None) -> str:
    """Detect the ecosystem of a manifest.

    Args:
        filename: Manifest file name or path
        content: Optional manifest content, used when the name is not conclusive

    Returns:
        Ecosystem id such as 'docker', 'bundler', 'pip', 'npm_and_yarn',
        or 'unknown'
    """
    # Filename-based detection takes precedence
    if filename:
        basename = posixpath.basename(filename.replace("\\", "/"))
        for ecosystem, patterns in FILENAME_PATTERNS:
            if any(fnmatch(basename, pattern) for pattern in patterns):
                return ecosystem

    if content:
        for ecosystem, patterns in CONTENT_PATTERNS:
            if any(re.search(pattern, content, re.MULTILINE) for pattern in patterns):
                return ecosystem

    return UNKNOWN
