"""
Utility functions for VINTEL

Provides logging setup and URL helpers
"""

import logging
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse


# ═══════════════════════════════════════════════════════════════════
# LOGGING
# ═══════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure logging for VINTEL"""
    level = getattr(logging, log_level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """Get logger instance for module"""
    return logging.getLogger(name)


# ═══════════════════════════════════════════════════════════════════
# URL HELPERS
# ═══════════════════════════════════════════════════════════════════

def link_domain(link: str) -> str:
    """Return the lower-cased host of *link*, or ``""`` if it has none.

    Scheme-less links such as ``copart.com/lot/1`` are parsed as hosts.
    Links that cannot be parsed at all, such as ``http://[x``, have no host.
    """
    if not link:
        return ""
    text = link.strip()
    try:
        parsed = urlparse(text if "//" in text else f"//{text}")
        hostname = parsed.hostname
    except ValueError:
        return ""
    return (hostname or "").lower()
