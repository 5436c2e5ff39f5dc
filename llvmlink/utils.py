"""
Utility functions for llvmlink.

This module provides colored output, signal handling, command execution
and the decoding/tokenizing of tool output used throughout the build.
"""

import re
import signal
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .errors import BuildError, ErrorKind


# =============================================================================
# COLOR CODES AND OUTPUT
# =============================================================================

class Colors:
    BLUE = '\033[94m'
    GREEN = '\033[92m'
    RED = '\033[91m'
    RESET = '\033[0m'


def print_info(message: str):
    """Print info message with color."""
    print(f"{Colors.BLUE}[INFO]{Colors.RESET} {message}")


def print_success(message: str):
    """Print success message with color."""
    print(f"{Colors.GREEN}[SUCCESS]{Colors.RESET} {message}")


def print_error(message: str):
    """Print error message with color."""
    print(f"{Colors.RED}[ERROR]{Colors.RESET} {message}")


def print_configuration_summary(config_data: dict):
    """Print current configuration summary."""
    print_info("llvmlink configuration")
    for key, value in config_data.items():
        print_info(f"{key}: {value}")


# =============================================================================
# SIGNAL HANDLING
# =============================================================================

def signal_handler(signum, frame):
    """Handle interruption signals."""
    print_error("Build interrupted by user")
    sys.exit(1)


def setup_signal_handlers():
    """Set up signal handlers for interruption."""
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)


# =============================================================================
# COMMAND EXECUTION
# =============================================================================

def open_log_file(log_file: Path) -> TextIO:
    """Open the command log for appending, creating its directory."""
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        return open(log_file, 'a')
    except OSError as e:
        raise BuildError(ErrorKind.INVALID_CONFIGURATION,
                         f"Cannot open log file {log_file}: {e}")


def run_command(cmd: List[str], cwd: Path, log_file: Optional[Path] = None,
                verbose: bool = False) -> int:
    """Run a command with logging and return its exit status.

    Output is merged and streamed line by line into the log file and, when
    verbose, the console. OSError propagates if the command cannot start.
    """
    if verbose:
        print_info(f"Running: {' '.join(cmd)}")
        print_info(f"Working directory: {cwd}")

    log_handle = None
    if log_file:
        log_handle = open_log_file(log_file)
        log_handle.write(f"\n{'='*60}\n")
        log_handle.write(f"Command: {' '.join(cmd)}\n")
        log_handle.write(f"Working directory: {cwd}\n")
        log_handle.write(f"{'='*60}\n")
        log_handle.flush()

    try:
        process = subprocess.Popen(
            cmd,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            universal_newlines=True,
            errors='replace',
            bufsize=1
        )

        # Stream output
        for line in process.stdout:
            if verbose:
                print(line.rstrip())
            if log_handle:
                log_handle.write(line)
                log_handle.flush()

        process.wait()

        if log_handle:
            log_handle.write(f"\nReturn code: {process.returncode}\n")
        return process.returncode

    except OSError as e:
        if log_handle:
            log_handle.write(f"\nException: {e}\n")
        raise

    finally:
        if log_handle:
            log_handle.close()


def decode_output(data: bytes, description: str) -> str:
    """Decode captured tool output as UTF-8."""
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise BuildError(ErrorKind.UNPARSEABLE_OUTPUT,
                         f"Output of {description} is not valid UTF-8: {e}")


def capture_output(cmd: List[str], description: str) -> str:
    """Run a query command and return its decoded standard output."""
    try:
        result = subprocess.run(cmd, stdout=subprocess.PIPE, check=False)
    except OSError as e:
        raise BuildError(ErrorKind.TOOL_INVOCATION_FAILED,
                         f"Failed to invoke {description}: {e}")

    if result.returncode != 0:
        raise BuildError(ErrorKind.TOOL_INVOCATION_FAILED,
                         f"{description} failed with status {result.returncode}")

    return decode_output(result.stdout, description)


# =============================================================================
# TOKENIZING
# =============================================================================

_WHITESPACE = re.compile(r'[ \t\n]+')


def split_tokens(text: str) -> List[str]:
    """Split tool output on ASCII space, tab and newline."""
    return [token for token in _WHITESPACE.split(text) if token]
