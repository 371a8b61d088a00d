"""Run short PHP snippets through the PHP CLI and decode their JSON output."""

import json
import shutil
import subprocess
from typing import Any

from .errors import M2PerformanceError


class PhpCliError(M2PerformanceError):
    """The PHP CLI is missing, failed, or printed something other than JSON."""


def run_php_json(snippet: str, *args: str, php_binary: str = "php", timeout: int = 15) -> Any:
    """Execute ``php -r <snippet> args...`` and decode stdout as JSON.
    
    Args:
        snippet: PHP code without the opening tag; must echo JSON
        *args: Values available to the snippet as ``$argv[1..]``
        php_binary: PHP CLI executable
        timeout: Seconds before the process is abandoned
        
    Returns:
        Decoded JSON value
    """
    if shutil.which(php_binary) is None:
        raise PhpCliError(f"PHP CLI '{php_binary}' not found on PATH")
    
    try:
        completed = subprocess.run(
            [php_binary, "-r", snippet, *args],
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False
        )
    except subprocess.TimeoutExpired as e:
        raise PhpCliError(f"PHP CLI timed out after {timeout}s") from e
    
    if completed.returncode != 0:
        message = completed.stderr.strip() or f"exit status {completed.returncode}"
        raise PhpCliError(f"PHP CLI failed: {message}")
    
    try:
        return json.loads(completed.stdout or "null")
    except json.JSONDecodeError as e:
        raise PhpCliError(f"PHP CLI returned invalid JSON: {e}") from e
