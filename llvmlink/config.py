"""
Configuration for llvmlink.

This module holds the fixed build constants (minimum LLVM version, tool and
library names) and loads the per-build options from the environment the
enclosing build process provides.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .errors import BuildError, ErrorKind


# =============================================================================
# FIXED BUILD CONSTANTS
# =============================================================================

# Range the LLVM version reported by llvm-config must satisfy
MINIMUM_LLVM_VERSION = '>=3.6'

# Introspection tool shipped in <prefix>/bin, possibly with a version suffix
LLVM_CONFIG_NAME = 'llvm-config'

# CMake cache entry recording <prefix>/lib/cmake/llvm
LLVM_DIR_CACHE_KEY = 'LLVM_DIR:PATH='
LLVM_DIR_DEPTH = 3

# Libraries in LLVM's own namespace follow the dylib feature
LLVM_LIB_PREFIX = 'LLVM'

# Wrapper library built from <manifest dir>/wrappers
WRAPPERS_SUBDIR = 'wrappers'
WRAPPERS_LIB_NAME = 'targetwrappers'

# C++ runtime selection from llvm-config --cxxflags
LIBCXX_MARKER = 'stdlib=libc++'
LIBCXX_RUNTIME = 'c++'
LIBSTDCXX_RUNTIME = 'stdc++'


# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

OUT_DIR_VAR = 'OUT_DIR'
MANIFEST_DIR_VAR = 'CARGO_MANIFEST_DIR'
LLVM_DYLIB_VAR = 'CARGO_FEATURE_LLVM_DYLIB'
CMAKE_VAR = 'CMAKE'
VERBOSE_VAR = 'VERBOSE'
LOG_FILE_VAR = 'LLVMLINK_LOG_FILE'


@dataclass(frozen=True)
class BuildConfig:
    """Build options, read once at start and passed into each stage."""
    source_dir: Path
    out_dir: Path
    llvm_dylib: bool = False
    cmake: str = 'cmake'
    minimum_version: str = MINIMUM_LLVM_VERSION
    verbose: bool = False
    log_file: Optional[Path] = None

    def summary(self) -> dict:
        return {
            'Wrapper sources': self.source_dir,
            'Output directory': self.out_dir,
            'LLVM libraries': 'dylib' if self.llvm_dylib else 'static',
            'CMake': self.cmake,
            'Required LLVM': self.minimum_version,
            'Log file': self.log_file or '(none)',
        }


def _require(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name)
    if not value:
        raise BuildError(ErrorKind.INVALID_CONFIGURATION,
                         f"Environment variable {name} is not set")
    return value


def get_build_config(environ: Optional[Mapping[str, str]] = None) -> BuildConfig:
    """Build the configuration from environment variables."""
    if environ is None:
        environ = os.environ

    out_dir = Path(_require(environ, OUT_DIR_VAR))
    manifest_dir = Path(_require(environ, MANIFEST_DIR_VAR))
    log_file = environ.get(LOG_FILE_VAR)

    return BuildConfig(
        source_dir=manifest_dir / WRAPPERS_SUBDIR,
        out_dir=out_dir,
        # Cargo sets feature variables to "1"; only presence matters
        llvm_dylib=LLVM_DYLIB_VAR in environ,
        cmake=environ.get(CMAKE_VAR) or 'cmake',
        verbose=environ.get(VERBOSE_VAR, '').lower() in ('1', 'true', 'yes'),
        log_file=Path(log_file) if log_file else None,
    )
