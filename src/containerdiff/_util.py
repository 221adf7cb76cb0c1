"""Shared utilities for containerdiff: debug logging, structured warnings."""

import os
import sys
from typing import List

_DEBUG = bool(os.environ.get("CONTAINERDIFF_DEBUG", ""))


def debug(label: str, msg: str) -> None:
    """Print a debug message to stderr when CONTAINERDIFF_DEBUG is set."""
    if _DEBUG:
        print(f"[containerdiff] {label}: {msg}", file=sys.stderr)


def notice(msg: str) -> None:
    """Operator-facing progress message (excluded clusters, timeouts)."""
    print(msg, file=sys.stderr)


def make_warning(source: str, message: str, severity: str = "warning", **extra) -> dict:
    """Build a structured warning dict with consistent keys."""
    warning = {"source": source, "message": message, "severity": severity}
    warning.update(extra)
    return warning


def split_csv(value: str) -> List[str]:
    """Split a comma-separated flag value, dropping blanks."""
    return [part.strip() for part in value.split(",") if part.strip()]
