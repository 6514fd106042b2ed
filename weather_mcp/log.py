"""Console and file logging for the server process."""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Optional


def log_and_print(message: str, log_file: Optional[str] = None) -> None:
    """Print to stderr and log to file.

    stdout belongs to the stdio transport, so nothing here may write to it.
    """
    print(message, file=sys.stderr, flush=True)
    if log_file:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(f"[{timestamp}] {message}\n")
