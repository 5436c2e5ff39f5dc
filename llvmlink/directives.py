"""
Link directives and their emission to the enclosing build.

Directives are written in the Cargo build-script protocol as soon as they
are computed. Nothing is buffered or deduplicated; the downstream linker
tolerates duplicates.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional, TextIO, Union


class LinkKind(Enum):
    STATIC = 'static'
    DYLIB = 'dylib'


@dataclass(frozen=True)
class SearchPath:
    """Add a native library search path."""
    path: str


@dataclass(frozen=True)
class LinkLibrary:
    """Link a native library; kind None leaves the mode to the pipeline."""
    name: str
    kind: Optional[LinkKind] = None


Directive = Union[SearchPath, LinkLibrary]


def render(directive: Directive) -> str:
    """Format a directive as a Cargo build-script instruction."""
    if isinstance(directive, SearchPath):
        return f"cargo:rustc-link-search=native={directive.path}"
    if directive.kind is None:
        return f"cargo:rustc-link-lib={directive.name}"
    return f"cargo:rustc-link-lib={directive.kind.value}={directive.name}"


class DirectiveEmitter:
    """Writes directives to a stream, one line each."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout

    def emit(self, directive: Directive):
        self.stream.write(render(directive) + '\n')
        self.stream.flush()
