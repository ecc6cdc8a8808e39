from __future__ import annotations

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: Optional[str] = None, console: Optional[Console] = None) -> None:
    """
    Minimal logging setup.
    - Uses PREFECT_LOG_LEVEL env if level is None (default WARNING).
    - Configures a single Rich console handler (stderr) via logging.basicConfig.
    """
    level_name = (level or os.getenv("PREFECT_LOG_LEVEL") or "WARNING").upper()
    # Fallback to INFO if user passes something weird
    level_value = getattr(logging, level_name, logging.INFO)
    if not isinstance(level_value, int):
        level_value = logging.INFO

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    logging.basicConfig(
        level=level_value,
        format="%(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[handler],
        force=True,
    )
    # httpx logs every request at INFO; our clients already log at DEBUG.
    logging.getLogger("httpx").setLevel(max(level_value, logging.WARNING))
