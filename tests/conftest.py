from __future__ import annotations

import io
import shlex
import textwrap
from pathlib import Path

import pytest

from llvmlink.directives import DirectiveEmitter


def write_script(path: Path, body: str) -> Path:
    """Write an executable /bin/sh script standing in for an external tool."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n" + textwrap.dedent(body).lstrip("\n"))
    path.chmod(0o755)
    return path


def emitted_lines(stream: io.StringIO) -> list[str]:
    return stream.getvalue().splitlines()


@pytest.fixture
def stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def emitter(stream: io.StringIO) -> DirectiveEmitter:
    return DirectiveEmitter(stream)


@pytest.fixture
def llvm_prefix(tmp_path: Path) -> Path:
    prefix = tmp_path / "llvm"
    (prefix / "bin").mkdir(parents=True)
    return prefix


@pytest.fixture
def make_llvm_config(llvm_prefix: Path):
    """Factory for a fake llvm-config answering the four queries."""

    def _make(
        version: str = "3.8.1",
        ldflags: str = "-L/opt/llvm/lib",
        libs: str = "-lLLVMCore -lLLVMSupport -lz -lpthread",
        cxxflags: str = "-I/opt/llvm/include -std=c++11 -fPIC",
        name: str = "llvm-config",
    ) -> Path:
        return write_script(llvm_prefix / "bin" / name, f"""
            case "$1" in
              --version) echo {shlex.quote(version)} ;;
              --ldflags) echo {shlex.quote(ldflags)} ;;
              --libs) echo {shlex.quote(libs)} ;;
              --cxxflags) echo {shlex.quote(cxxflags)} ;;
              *) exit 1 ;;
            esac
            """)

    return _make


@pytest.fixture
def cmake_calls(tmp_path: Path) -> Path:
    return tmp_path / "cmake-calls.log"


@pytest.fixture
def make_cmake(tmp_path: Path, llvm_prefix: Path, cmake_calls: Path):
    """Factory for a fake cmake handling configure, --build and -N -L."""

    def _make(
        configure_status: int = 0,
        build_status: int = 0,
        cache_lines: list[str] | None = None,
    ) -> Path:
        if cache_lines is None:
            cache_lines = [
                "// CMake cache listing",
                "CMAKE_BUILD_TYPE:STRING=",
                f"LLVM_DIR:PATH={llvm_prefix / 'lib' / 'cmake' / 'llvm'}",
            ]
        listing = " ".join(shlex.quote(line) for line in cache_lines)
        calls = shlex.quote(str(cmake_calls))
        return write_script(tmp_path / "tools" / "cmake", f"""
            echo "$(pwd) $*" >> {calls}
            case "$1" in
              --build) exit {build_status} ;;
              -N) printf '%s\\n' {listing} ;;
              *) exit {configure_status} ;;
            esac
            """)

    return _make


@pytest.fixture
def build_env(tmp_path: Path, make_cmake) -> dict[str, str]:
    """Environment a Cargo build script would see, using the fake cmake."""
    manifest_dir = tmp_path / "crate"
    (manifest_dir / "wrappers").mkdir(parents=True)
    return {
        "OUT_DIR": str(tmp_path / "out"),
        "CARGO_MANIFEST_DIR": str(manifest_dir),
        "CMAKE": str(make_cmake()),
    }
