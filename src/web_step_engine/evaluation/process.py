"""
System process execution.
"""

import logging
import shlex
import subprocess
from typing import Optional

from web_step_engine.exceptions import EvaluationError

logger = logging.getLogger(__name__)


def run_process(command: str, timeout_seconds: Optional[float] = None) -> str:
    """
    Run a command and return its trimmed standard output.
    
    The command is split shell-style but not run through a shell.
    
    Raises:
        EvaluationError: If the command cannot start, exits non-zero,
            or runs past the timeout
    """
    logger.debug(f"Running process: {command}")
    try:
        completed = subprocess.run(
            shlex.split(command),
            capture_output=True,
            text=True,
            check=True,
            timeout=timeout_seconds,
        )
    except subprocess.CalledProcessError as e:
        raise EvaluationError(
            f"Process '{command}' exited with code {e.returncode}: {e.stderr.strip()}",
            "sysproc",
            command,
        ) from e
    except subprocess.TimeoutExpired as e:
        raise EvaluationError(f"Process '{command}' timed out", "sysproc", command) from e
    except (OSError, ValueError) as e:
        raise EvaluationError(f"Cannot run process '{command}': {e}", "sysproc", command) from e
    return completed.stdout.strip()
