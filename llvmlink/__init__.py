"""
llvmlink - LLVM Link Plan Generator

This package runs at build time, before a native LLVM binding compiles. It
builds the C++ wrapper library, finds the LLVM installation CMake used,
checks the LLVM version and prints the linker directives the enclosing
build needs.

Main modules:
- config: Build options and fixed constants
- utils: Colored output and command execution
- builders: CMake build of the wrapper library
- locator: LLVM prefix lookup in the CMake cache
- llvm_config: llvm-config discovery and version check
- link_plan: Search paths, libraries and C++ runtime selection
- directives: Directive types and emission

Usage:
    python -m llvmlink
"""

__version__ = "1.0.0"
__description__ = "Build-time LLVM link plan generator"

from .config import BuildConfig, get_build_config
from .errors import BuildError, ErrorKind
from .main import main, run

__all__ = [
    'BuildConfig',
    'get_build_config',
    'BuildError',
    'ErrorKind',
    'main',
    'run'
]
