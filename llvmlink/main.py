"""
Build script entry point.

Runs the stages in order (wrapper build, LLVM lookup, version check, link
plan) and reports the first failure as a single error line.
"""

from typing import Mapping, Optional, TextIO

from .builders import build_wrappers
from .config import BuildConfig, get_build_config
from .directives import DirectiveEmitter, LinkKind, LinkLibrary, SearchPath
from .errors import BuildError
from .link_plan import emit_link_plan
from .llvm_config import parse_requirement, resolve_llvm_config
from .utils import (
    print_configuration_summary, print_error, print_success, setup_signal_handlers
)


def run(config: BuildConfig, emitter: DirectiveEmitter):
    """Build the wrappers, check LLVM and emit the full link plan."""
    wrappers = build_wrappers(config)
    llvm_config = resolve_llvm_config(wrappers.llvm_prefix,
                                      parse_requirement(config.minimum_version))

    # Nothing is emitted until LLVM passed the version check
    emitter.emit(SearchPath(str(wrappers.out_dir)))
    emitter.emit(LinkLibrary(wrappers.lib_name, LinkKind.STATIC))

    emit_link_plan(llvm_config, emitter, config.llvm_dylib)


def main(environ: Optional[Mapping[str, str]] = None,
         stream: Optional[TextIO] = None) -> int:
    """Run the build script, returning the process exit status."""
    setup_signal_handlers()

    try:
        config = get_build_config(environ)
        if config.verbose:
            print_configuration_summary(config.summary())
        run(config, DirectiveEmitter(stream))
    except BuildError as e:
        print_error(str(e))
        return 1

    print_success("Link plan complete")
    return 0
