"""
Link plan generation from llvm-config output.

Three independent queries feed the plan: --ldflags gives search paths,
--libs --system-libs gives libraries, and --cxxflags tells which C++
runtime LLVM was built against. llvm-config emits plain space separated
tokens without quoting, so no shell-aware parsing is needed.
"""

from typing import Iterator

from .config import LIBCXX_MARKER, LIBCXX_RUNTIME, LIBSTDCXX_RUNTIME, LLVM_LIB_PREFIX
from .directives import DirectiveEmitter, LinkKind, LinkLibrary, SearchPath
from .llvm_config import LlvmConfig
from .utils import split_tokens

SEARCH_PATH_FLAG = '-L'
LIBRARY_FLAG = '-l'


def search_paths(ldflags: str) -> Iterator[SearchPath]:
    """Yield a search path for every -L<dir> token."""
    for token in split_tokens(ldflags):
        if token.startswith(SEARCH_PATH_FLAG):
            yield SearchPath(token[len(SEARCH_PATH_FLAG):])


def library_kind(name: str, llvm_dylib: bool) -> LinkKind:
    """LLVM's own libraries follow the dylib option, system libraries are shared."""
    if name.startswith(LLVM_LIB_PREFIX):
        return LinkKind.DYLIB if llvm_dylib else LinkKind.STATIC
    return LinkKind.DYLIB


def libraries(libs: str, llvm_dylib: bool) -> Iterator[LinkLibrary]:
    """Yield a library for every -l<name> token, in order."""
    for token in split_tokens(libs):
        if token.startswith(LIBRARY_FLAG):
            name = token[len(LIBRARY_FLAG):]
            yield LinkLibrary(name, library_kind(name, llvm_dylib))


def cxx_runtime(cxxflags: str) -> LinkLibrary:
    """Pick libc++ when LLVM was built with it, libstdc++ otherwise."""
    if LIBCXX_MARKER in cxxflags:
        return LinkLibrary(LIBCXX_RUNTIME)
    return LinkLibrary(LIBSTDCXX_RUNTIME)


def emit_stdlib_directive(cxxflags: str, emitter: DirectiveEmitter):
    """Link the C++ runtime matching the one LLVM was built with."""
    emitter.emit(cxx_runtime(cxxflags))


def emit_link_plan(llvm_config: LlvmConfig, emitter: DirectiveEmitter,
                   llvm_dylib: bool = False):
    """Query llvm-config and emit search paths, libraries and the C++ runtime."""
    for directive in search_paths(llvm_config.query('--ldflags')):
        emitter.emit(directive)

    for directive in libraries(llvm_config.query('--libs', '--system-libs'), llvm_dylib):
        emitter.emit(directive)

    emit_stdlib_directive(llvm_config.query('--cxxflags'), emitter)
