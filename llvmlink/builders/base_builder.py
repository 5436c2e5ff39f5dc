"""
Base builder class for llvmlink.

This module provides the two-phase (configure, then build) interface that
native library builders inherit from. Each phase hands the directory it
prepared to the next one, and a failed phase stops the build before the
directory is used.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from ..errors import BuildError, ErrorKind
from ..utils import print_info, print_success, run_command


class BaseBuilder(ABC):
    """Base class for native library builders."""

    # Human-readable name of the build tool, used in error messages
    tool_label = 'build tool'

    def __init__(self, lib_name: str, source_dir: Path, out_dir: Path,
                 log_file: Optional[Path] = None, verbose: bool = False):
        self.lib_name = lib_name
        self.source_dir = source_dir
        self.out_dir = out_dir
        self.log_file = log_file
        self.verbose = verbose

    @abstractmethod
    def get_configure_command(self) -> List[str]:
        """Get the command that configures the build directory."""
        pass

    @abstractmethod
    def get_build_command(self, build_dir: Path) -> List[str]:
        """Get the command that builds a configured directory."""
        pass

    def get_build_directory(self) -> Path:
        """Get the build directory, creating it if needed."""
        self.out_dir.mkdir(parents=True, exist_ok=True)
        return self.out_dir

    def run_step(self, step: str, cmd: List[str], cwd: Path):
        """Run one build phase, raising BuildError if it does not succeed."""
        try:
            status = run_command(cmd, cwd, self.log_file, verbose=self.verbose)
        except OSError as e:
            raise BuildError(ErrorKind.TOOL_INVOCATION_FAILED,
                             f"Failed to invoke {self.tool_label} for {step}: {e}")

        if status != 0:
            raise BuildError(ErrorKind.TOOL_INVOCATION_FAILED,
                             f"{self.tool_label} {step} of {self.lib_name} failed "
                             f"with status {status}")

    def configure(self) -> Path:
        """Run the configure phase and return the configured directory."""
        build_dir = self.get_build_directory()
        self.run_step('configuration', self.get_configure_command(), build_dir)
        return build_dir

    def compile(self, build_dir: Path) -> Path:
        """Build a configured directory and return it."""
        self.run_step('build', self.get_build_command(build_dir), build_dir)
        return build_dir

    def build(self) -> Path:
        """Configure and build, returning the directory holding the archive."""
        print_info(f"Building {self.lib_name} in {self.out_dir}...")
        build_dir = self.compile(self.configure())
        print_success(f"Successfully built {self.lib_name}")
        return build_dir
