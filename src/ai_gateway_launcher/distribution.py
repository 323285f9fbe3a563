"""Release-time check of the bundled gateway binaries.

Run before publishing to confirm the delegate directory holds what the
launcher expects. The launcher itself never lists the directory; it only
opens the one file it resolved.

Usage:
    ai-gateway-check-dist [--dist-dir PATH]
"""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from .config import load_config
from .runtime import PlatformResolver, Resolved, RuntimeEnvironment
from .runtime.specs import BINARY_FORMATS, PLATFORM_BINARIES, os_for_executable

# Warn above this size per binary
BINARY_SIZE_WARNING = 50 * 1024 * 1024
# PyPI's default per-file upload limit
PACKAGE_SIZE_WARNING = 100 * 1024 * 1024

ELF_MAGIC = b"\x7fELF"
MACHO_MAGICS = (
    b"\xcf\xfa\xed\xfe",  # 64-bit, little endian
    b"\xce\xfa\xed\xfe",  # 32-bit, little endian
    b"\xfe\xed\xfa\xcf",  # 64-bit, big endian
    b"\xfe\xed\xfa\xce",  # 32-bit, big endian
    b"\xca\xfe\xba\xbe",  # universal
)


class BinaryStatus(Enum):
    """Status of a bundled binary."""

    OK = "ok"
    MISSING = "missing"
    NOT_EXECUTABLE = "not_executable"


@dataclass
class BinaryCheck:
    """Result of checking one expected binary."""

    name: str
    path: Path
    status: BinaryStatus
    size: int = 0
    detected_format: Optional[str] = None
    expected_format: Optional[str] = None
    warnings: List[str] = field(default_factory=list)


@dataclass
class DistributionReport:
    """Everything found in the delegate directory."""

    dist_dir: Path
    binaries: List[BinaryCheck] = field(default_factory=list)
    unexpected_files: List[str] = field(default_factory=list)
    current_platform_binary: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def total_size(self) -> int:
        return sum(check.size for check in self.binaries)


def detect_binary_format(path: Path) -> Optional[str]:
    """Identify an executable format from its magic number.

    Returns:
        "ELF", "Mach-O", or None if unrecognized
    """
    with open(path, "rb") as f:
        magic = f.read(4)
    if magic == ELF_MAGIC:
        return "ELF"
    if magic in MACHO_MAGICS:
        return "Mach-O"
    return None


def check_binary(dist_dir: Path, name: str, expected_format: Optional[str]) -> BinaryCheck:
    """Check one expected binary for presence, permissions, size and format."""
    path = dist_dir / name
    if not path.is_file():
        return BinaryCheck(
            name=name,
            path=path,
            status=BinaryStatus.MISSING,
            expected_format=expected_format,
        )

    check = BinaryCheck(
        name=name,
        path=path,
        status=BinaryStatus.OK,
        size=path.stat().st_size,
        expected_format=expected_format,
    )

    if not os.access(path, os.X_OK):
        check.status = BinaryStatus.NOT_EXECUTABLE

    if check.size > BINARY_SIZE_WARNING:
        check.warnings.append(
            f"{name} is quite large ({_megabytes(check.size)}) - consider optimization"
        )

    check.detected_format = detect_binary_format(path)
    if expected_format and check.detected_format != expected_format:
        check.warnings.append(f"{name} doesn't appear to be a {expected_format} binary")

    return check


def check_distribution(
    dist_dir: Path,
    environment: Optional[RuntimeEnvironment] = None,
    resolver: Optional[PlatformResolver] = None,
) -> DistributionReport:
    """Check every known binary in ``dist_dir``.

    Missing binaries are warnings since a package may ship a subset of
    platforms. A binary that is present but not executable, or a missing
    binary for the platform running the check, is a failure.

    Args:
        dist_dir: Delegate directory to inspect
        environment: Host to resolve for (defaults to the running host)
        resolver: Resolver to use (defaults to one with default settings)

    Returns:
        DistributionReport
    """
    dist_dir = Path(dist_dir)
    report = DistributionReport(dist_dir=dist_dir)

    if not dist_dir.is_dir():
        report.failures.append(f"Delegate directory not found: {dist_dir}")
        return report

    for name in PLATFORM_BINARIES.values():
        check = check_binary(dist_dir, name, BINARY_FORMATS.get(os_for_executable(name)))
        report.binaries.append(check)
        report.warnings.extend(check.warnings)

        if check.status is BinaryStatus.MISSING:
            report.warnings.append(f"{name} missing (package will not run on that platform)")
        elif check.status is BinaryStatus.NOT_EXECUTABLE:
            report.failures.append(f"{name} is not executable. Run: chmod +x {check.path}")

    expected = set(PLATFORM_BINARIES.values())
    report.unexpected_files = sorted(
        entry.name
        for entry in dist_dir.iterdir()
        if entry.name not in expected and not entry.name.startswith(".")
    )

    environment = environment or RuntimeEnvironment.capture()
    selection = (resolver or PlatformResolver()).resolve(environment)
    if isinstance(selection, Resolved):
        report.current_platform_binary = selection.executable_name
        if not (dist_dir / selection.executable_name).is_file():
            report.failures.append(
                f"Detected binary {selection.executable_name} for "
                f"{environment.describe()} not found in {dist_dir}"
            )
    else:
        report.warnings.append(
            f"Cannot verify the current platform ({environment.describe()}): no prebuilt binary"
        )

    if report.total_size > PACKAGE_SIZE_WARNING:
        report.warnings.append(
            f"Binaries total {_megabytes(report.total_size)} - "
            f"PyPI rejects files over {_megabytes(PACKAGE_SIZE_WARNING)} by default"
        )

    return report


def print_report(report: DistributionReport) -> None:
    print(f"✅ Checking {report.dist_dir}")
    for check in report.binaries:
        if check.status is BinaryStatus.MISSING:
            print(f"   ⚠️  {check.name} missing")
            continue
        status = "✅" if check.status is BinaryStatus.OK else "❌"
        fmt = check.detected_format or "unknown format"
        print(f"   {status} {check.name} ({fmt}, {_megabytes(check.size)})")

    for name in report.unexpected_files:
        print(f"   - unexpected file: {name}")

    if report.current_platform_binary:
        print(f"   - Detected binary for current platform: {report.current_platform_binary}")

    for warning in report.warnings:
        print(f"⚠️  {warning}")
    for failure in report.failures:
        print(f"❌ {failure}", file=sys.stderr)

    if report.ok:
        print("\n🎉 Distribution check passed.")


def main(argv: Optional[List[str]] = None) -> None:
    config = load_config()

    parser = argparse.ArgumentParser(description="Check the bundled gateway binaries")
    parser.add_argument(
        "--dist-dir",
        type=Path,
        default=config.delegate_dir,
        help="Delegate directory to check (default: the installed package's)",
    )
    args = parser.parse_args(argv)

    report = check_distribution(
        args.dist_dir,
        resolver=PlatformResolver(config.launcher.min_runtime_version),
    )
    print_report(report)
    sys.exit(0 if report.ok else 1)


def _megabytes(size: int) -> str:
    return f"{size / 1024 / 1024:.2f}MB"


if __name__ == "__main__":
    main()
