"""
LLVM installation lookup through the CMake cache.

CMake records the directory holding LLVMConfig.cmake, which sits at
<prefix>/lib/cmake/llvm. The installation prefix is three levels above it.
"""

from pathlib import Path
from typing import Optional

from .config import LLVM_DIR_CACHE_KEY, LLVM_DIR_DEPTH
from .errors import BuildError, ErrorKind
from .utils import capture_output, print_info


def read_cmake_cache(out_dir: Path, cmake: str = 'cmake') -> str:
    """Return the `cmake -N -L` listing of a configured build directory."""
    return capture_output([cmake, '-N', '-L', str(out_dir)], 'cmake -N -L')


def find_cache_entry(listing: str, key: str) -> Optional[str]:
    """Return the value of the first KEY:TYPE= line, or None."""
    for line in listing.splitlines():
        if line.startswith(key):
            return line[len(key):]
    return None


def prefix_from_llvm_dir(llvm_dir: str) -> Path:
    """Ascend from <prefix>/lib/cmake/llvm to <prefix>."""
    path = Path(llvm_dir)
    if not llvm_dir or len(path.parents) < LLVM_DIR_DEPTH:
        raise BuildError(ErrorKind.MALFORMED_CACHE_ENTRY,
                         f"{LLVM_DIR_CACHE_KEY}{llvm_dir} does not have "
                         f"{LLVM_DIR_DEPTH} parent directories")
    return path.parents[LLVM_DIR_DEPTH - 1]


def locate_llvm_prefix(out_dir: Path, cmake: str = 'cmake') -> Path:
    """Find the LLVM installation prefix recorded in the CMake cache."""
    llvm_dir = find_cache_entry(read_cmake_cache(out_dir, cmake), LLVM_DIR_CACHE_KEY)
    if llvm_dir is None:
        raise BuildError(ErrorKind.MALFORMED_CACHE_ENTRY,
                         f"CMake cache in {out_dir} has no {LLVM_DIR_CACHE_KEY} entry")

    prefix = prefix_from_llvm_dir(llvm_dir)
    print_info(f"LLVM installation prefix: {prefix}")
    return prefix
