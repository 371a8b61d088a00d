"""Validation utilities."""

import socket
from pathlib import Path
from typing import Optional


def validate_magento_root(root: str) -> tuple[bool, Optional[str]]:
    """Validate that a directory looks like a Magento installation.
    
    Args:
        root: Candidate Magento root
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not root:
        return False, "Magento root is required"
    
    path = Path(root).expanduser()
    if not path.exists():
        return False, f"Magento root not found: {root}"
    
    if not path.is_dir():
        return False, f"Magento root is not a directory: {root}"
    
    if not (path / "app" / "etc").is_dir():
        return False, f"No app/etc directory under {root}; is this a Magento root?"
    
    return True, None


def is_port_open(host: str, port: int, timeout: float = 1.0) -> bool:
    """Check whether a TCP service accepts connections.
    
    Args:
        host: Hostname or IP
        port: TCP port
        timeout: Connection timeout in seconds
        
    Returns:
        True if a connection could be established
    """
    try:
        with socket.create_connection((host, int(port)), timeout=timeout):
            return True
    except (OSError, ValueError):
        return False
