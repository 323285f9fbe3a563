#!/usr/bin/env python3
"""Bump the launcher version everywhere it is recorded.

Usage: python scripts/bump_version.py {patch,minor,major,prerelease}
"""

import argparse
import re
import sys
from pathlib import Path

import semver

PYPROJECT = Path("pyproject.toml")
PACKAGE_INIT = Path("src/ai_gateway_launcher/__init__.py")

# file -> pattern whose first group precedes the quoted version string
VERSION_PATTERNS = {
    PYPROJECT: re.compile(r'(\[project\].*?version\s*=\s*)"[^"]+"', re.DOTALL),
    PACKAGE_INIT: re.compile(r'(__version__\s*=\s*)"[^"]+"'),
}


def read_current_version() -> semver.Version:
    match = re.search(r'\[project\].*?version\s*=\s*"([^"]+)"', PYPROJECT.read_text(), re.DOTALL)
    if not match:
        raise ValueError(f"No [project] version in {PYPROJECT}")
    return semver.Version.parse(match.group(1))


def write_version(path: Path, version: semver.Version) -> None:
    pattern = VERSION_PATTERNS[path]
    content = path.read_text()
    updated, count = pattern.subn(lambda m: f'{m.group(1)}"{version}"', content, count=1)
    if count == 0:
        raise ValueError(f"No version string found in {path}")
    path.write_text(updated)


def main() -> None:
    parser = argparse.ArgumentParser(description="Bump the launcher version")
    parser.add_argument("part", choices=["patch", "minor", "major", "prerelease"])
    args = parser.parse_args()

    missing = [str(p) for p in VERSION_PATTERNS if not p.exists()]
    if missing:
        print(f"Error: {', '.join(missing)} not found; run from the repository root", file=sys.stderr)
        sys.exit(1)

    current = read_current_version()
    new_version = current.next_version(args.part)

    for path in VERSION_PATTERNS:
        write_version(path, new_version)
    print(f"{current} -> {new_version}")


if __name__ == "__main__":
    main()
