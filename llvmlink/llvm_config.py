"""
Discovery and version check of llvm-config.

llvm-config is looked up as <prefix>/bin/llvm-config*, so versioned names
such as llvm-config-3.8 are accepted. When several match, the
lexicographically last one is used. That is not necessarily the newest
version (llvm-config-10 sorts before llvm-config-9), and installs with
several versioned binaries may pick an unexpected one.

Versions are strict semantic versions (MAJOR.MINOR.PATCH[-pre][+build]).
"""

import glob
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path

from semver import Version

from .config import LLVM_CONFIG_NAME
from .errors import BuildError, ErrorKind
from .utils import capture_output, decode_output, print_info

NOT_FOUND_MESSAGE = "llvm-config not found. Install LLVM before attempting to build."

_REQUIREMENT = re.compile(r'^\s*(>=|<=|==|!=|>|<)\s*(\S+)\s*$')


@dataclass(frozen=True)
class LlvmConfig:
    """A located llvm-config executable and the version it reported."""
    path: Path
    version: Version

    def query(self, *flags: str) -> str:
        """Run llvm-config with the given flags and return its output."""
        return capture_output([str(self.path), *flags],
                              f"{LLVM_CONFIG_NAME} {' '.join(flags)}")


@dataclass(frozen=True)
class VersionRequirement:
    """A single comparison such as >=3.6.0."""
    operator: str
    version: Version

    def matches(self, version: Version) -> bool:
        # Pre-releases only match a requirement naming the same release
        if version.prerelease and not (
                self.version.prerelease
                and version.finalize_version() == self.version.finalize_version()):
            return False
        return version.match(str(self))

    def __str__(self) -> str:
        return f"{self.operator}{self.version}"


def parse_requirement(requirement: str) -> VersionRequirement:
    """Parse a range expression; minor and patch may be omitted (>=3.6)."""
    match = _REQUIREMENT.match(requirement)
    if not match:
        raise ValueError(f"Invalid version requirement: {requirement!r}")
    operator, version = match.groups()
    return VersionRequirement(operator, Version.parse(version, optional_minor_and_patch=True))


def parse_version(text: str) -> Version:
    """Parse the output of llvm-config --version."""
    try:
        return Version.parse(text.strip())
    except ValueError:
        raise BuildError(ErrorKind.UNPARSEABLE_OUTPUT,
                         f"Could not parse version from {LLVM_CONFIG_NAME} "
                         f"--version: {text.strip()!r}")


def find_llvm_config(prefix: Path) -> Path:
    """Return the last <prefix>/bin/llvm-config* match in sorted order."""
    pattern = str(Path(glob.escape(str(prefix))) / 'bin' / f'{LLVM_CONFIG_NAME}*')
    matches = sorted(glob.glob(pattern))
    if not matches:
        raise BuildError(ErrorKind.TOOL_NOT_FOUND, NOT_FOUND_MESSAGE)
    return Path(matches[-1])


def query_version(path: Path) -> Version:
    """Run llvm-config --version; a tool that cannot start counts as missing."""
    try:
        result = subprocess.run([str(path), '--version'], stdout=subprocess.PIPE,
                                check=False)
    except OSError:
        raise BuildError(ErrorKind.TOOL_NOT_FOUND, NOT_FOUND_MESSAGE)

    description = f"{LLVM_CONFIG_NAME} --version"
    if result.returncode != 0:
        raise BuildError(ErrorKind.TOOL_INVOCATION_FAILED,
                         f"{description} failed with status {result.returncode}")
    return parse_version(decode_output(result.stdout, description))


def resolve_llvm_config(prefix: Path, requirement: VersionRequirement) -> LlvmConfig:
    """Locate llvm-config under prefix and check its version.

    Raises BuildError when the tool is missing, its version cannot be parsed,
    or the version does not satisfy requirement.
    """
    path = find_llvm_config(prefix)
    version = query_version(path)

    if not requirement.matches(version):
        raise BuildError(ErrorKind.VERSION_TOO_LOW,
                         f"LLVM version {requirement} is required (found {version})")

    print_info(f"Found LLVM version {version}")
    return LlvmConfig(path, version)
