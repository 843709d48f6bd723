"""Utility functions for the tohls conversion pipeline"""

import logging
import math
import shutil
import subprocess
from datetime import datetime
from typing import List

from .exceptions import DependencyError

logger = logging.getLogger(__name__)

def run_cmd(cmd: List[str], capture_output: bool = True,
            check: bool = True) -> subprocess.CompletedProcess:
    """Run a command and handle errors"""
    logger.info("Running command: %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            capture_output=capture_output,
            check=check,
            text=True
        )
        if result.stdout:
            logger.debug("Command stdout: %s", result.stdout)
        if result.stderr:
            logger.debug("Command stderr: %s", result.stderr)
        return result
    except subprocess.CalledProcessError as e:
        logger.error("Command failed: %s", " ".join(cmd))
        logger.error("Error output: %s", e.stderr)
        raise

def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3)."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)

def get_timestamp() -> str:
    """Get current timestamp in YYYYMMDD_HHMMSS format"""
    return datetime.now().strftime("%Y%m%d_%H%M%S")

def check_dependencies(required: List[str]) -> None:
    """
    Check that every required executable is on the PATH.

    Raises:
        DependencyError: Naming the first missing executable
    """
    for cmd in required:
        if shutil.which(cmd) is None:
            logger.error("Required dependency not found: %s", cmd)
            raise DependencyError(f"Required dependency not found: {cmd}", module="utils")
