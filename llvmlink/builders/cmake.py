"""
CMake builder for llvmlink.

This module builds the C++ wrapper library with CMake and reads back where
CMake found LLVM.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .base_builder import BaseBuilder
from ..config import BuildConfig, WRAPPERS_LIB_NAME
from ..locator import locate_llvm_prefix


class CMakeBuilder(BaseBuilder):
    """Builder for a CMake project producing a static archive."""

    tool_label = 'CMake'

    def __init__(self, lib_name: str, source_dir: Path, out_dir: Path,
                 cmake: str = 'cmake', log_file: Optional[Path] = None,
                 verbose: bool = False):
        super().__init__(lib_name, source_dir, out_dir, log_file, verbose)
        self.cmake = cmake

    def get_configure_command(self) -> List[str]:
        """Configure runs in the build directory against the source tree."""
        return [self.cmake, str(self.source_dir)]

    def get_build_command(self, build_dir: Path) -> List[str]:
        return [self.cmake, '--build', str(build_dir)]


@dataclass(frozen=True)
class WrapperBuild:
    """Result of building the wrapper library."""
    llvm_prefix: Path
    out_dir: Path
    lib_name: str


def build_wrappers(config: BuildConfig) -> WrapperBuild:
    """Build the wrapper library and locate the LLVM it was configured with."""
    builder = CMakeBuilder(WRAPPERS_LIB_NAME, config.source_dir, config.out_dir,
                           cmake=config.cmake, log_file=config.log_file,
                           verbose=config.verbose)
    out_dir = builder.build()
    llvm_prefix = locate_llvm_prefix(out_dir, config.cmake)
    return WrapperBuild(llvm_prefix, out_dir, builder.lib_name)
