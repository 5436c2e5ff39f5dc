"""
Builders package for llvmlink

This package contains the builders that compile the native libraries linked
alongside LLVM.

Available builders:
- CMakeBuilder: CMake projects (the target wrappers library)

All builders inherit from BaseBuilder and follow the same interface.
"""

from .base_builder import BaseBuilder
from .cmake import CMakeBuilder, WrapperBuild, build_wrappers

__all__ = [
    'BaseBuilder',
    'CMakeBuilder',
    'WrapperBuild',
    'build_wrappers'
]
