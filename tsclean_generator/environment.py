"""
Toolchain preflight and npm invocations.

Before anything is written the generator makes sure Node.js (of a minimum
major version) and npm are available. A missing TypeScript compiler is
installed globally rather than treated as an error. npm calls are one-shot:
their failures are logged, never retried.
"""

import logging
import re
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from .colored_logging import log_progress, log_success
from .constants import DefaultConfig, ToolchainCommands
from .exceptions import EnvironmentCheckError

logger = logging.getLogger(__name__)

_NODE_VERSION_RE = re.compile(r"^v?(?P<major>\d+)")


def _which(cmd: str) -> Optional[str]:
    return shutil.which(cmd)


def _run(argv: List[str], cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
    logger.debug(f"+ ({cwd or '.'}) {' '.join(argv)}")
    return subprocess.run(
        argv,
        cwd=str(cwd) if cwd else None,
        capture_output=True,
        text=True,
        check=False,
    )


def parse_node_major(version_output: str) -> Optional[int]:
    """
    Extract the major version from `node -v` output.

    Example:
        >>> parse_node_major("v18.17.0")
        18
    """
    match = _NODE_VERSION_RE.match(version_output.strip())
    return int(match.group("major")) if match else None


def check_node(min_node_version: int = DefaultConfig.MIN_NODE_VERSION) -> int:
    """
    Verify that node is on PATH and at least min_node_version.

    Returns:
        The detected major version
    """
    if _which(ToolchainCommands.NODE) is None:
        raise EnvironmentCheckError(
            f"Node.js is not installed. Please install Node.js version {min_node_version} or higher.",
            tool=ToolchainCommands.NODE,
        )

    try:
        result = _run([ToolchainCommands.NODE, "-v"])
    except OSError as e:
        raise EnvironmentCheckError(f"Could not run 'node -v': {e}", tool=ToolchainCommands.NODE) from e

    found = result.stdout.strip()
    major = parse_node_major(found)
    if major is None or major < min_node_version:
        raise EnvironmentCheckError(
            f"Node.js version {min_node_version} or higher is required. Found: {found or 'unknown'}",
            tool=ToolchainCommands.NODE,
        )
    logger.debug(f"Found Node.js {found}")
    return major


def check_npm() -> None:
    """Verify that npm is on PATH."""
    if _which(ToolchainCommands.NPM) is None:
        raise EnvironmentCheckError("npm is not installed. Please install npm.", tool=ToolchainCommands.NPM)


def ensure_typescript() -> bool:
    """
    Install TypeScript globally when tsc is missing.

    Returns:
        True if an installation was attempted
    """
    if _which(ToolchainCommands.TSC) is not None:
        return False

    log_progress(logger, "TypeScript is not installed globally. Installing...")
    try:
        result = _run([ToolchainCommands.NPM, "install", "-g", "typescript"])
    except OSError as e:
        logger.warning(f"Could not install TypeScript: {e}")
        return True
    if result.returncode != 0:
        logger.warning(f"'npm install -g typescript' exited with status {result.returncode}")
    return True


def check_toolchain(min_node_version: int = DefaultConfig.MIN_NODE_VERSION) -> None:
    """Run the full preflight: node version, npm, then tsc."""
    check_node(min_node_version)
    check_npm()
    ensure_typescript()
    logger.debug("Toolchain preflight passed")


def install_dependencies(project_root: Path) -> bool:
    """
    Run `npm install` inside a newly generated project.

    Returns:
        True if npm exited successfully
    """
    log_progress(logger, "Installing dependencies...")
    try:
        result = _run([ToolchainCommands.NPM, "install"], cwd=project_root)
    except OSError as e:
        logger.warning(f"Could not run 'npm install': {e}")
        return False

    if result.returncode != 0:
        logger.warning(f"'npm install' exited with status {result.returncode}; run it manually in {project_root}")
        logger.debug(result.stderr)
        return False

    log_success(logger, "Dependencies installed")
    return True
