"""
styles.py -- Maps semantic emphasis tags to ANSI styling.

The formatter only attaches a Tag to each piece of text; whether that turns
into color is decided here, at render time. With color off the text is
emitted unchanged, so output stays correct when piped or redirected.
"""

import os
import re
import sys
from enum import Enum
from typing import Optional, TextIO

from .severity import Severity

# ---------------------------------------------------------------------------
# ANSI color control
# ---------------------------------------------------------------------------

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")
_RESET = "\033[0m"


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from a string."""
    return _ANSI_RE.sub("", text)


def _use_color(stream: Optional[TextIO] = None) -> bool:
    """Return True if stream (default stdout) is a TTY and color has not been disabled.

    Respects NO_COLOR env var (https://no-color.org) and FORCE_COLOR.
    Can be overridden by calling disable_color() / enable_color().
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if stream is None:
        stream = sys.stdout
    return hasattr(stream, "isatty") and stream.isatty()


_color_enabled: Optional[bool] = None  # None = auto-detect


def disable_color() -> None:
    """Force-disable color output (called when --no-color flag is set)."""
    global _color_enabled
    _color_enabled = False


def enable_color() -> None:
    """Force-enable color output."""
    global _color_enabled
    _color_enabled = True


def reset_color() -> None:
    """Return to auto-detection."""
    global _color_enabled
    _color_enabled = None


def color_active(stream: Optional[TextIO] = None) -> bool:
    """Whether output to stream (default stdout) should be colored."""
    if _color_enabled is not None:
        return _color_enabled
    return _use_color(stream)


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


class Tag(str, Enum):
    header = "header"
    label = "label"
    value = "value"
    important = "important"
    fixed = "fixed"
    critical = "critical"
    high = "high"
    medium = "medium"


TAG_CODES = {
    Tag.header: "\033[96;1m",  # bright cyan, bold
    Tag.label: "\033[93;1m",  # bright yellow, bold
    Tag.value: "\033[97m",  # bright white
    Tag.important: "\033[91;1m",  # bright red, bold
    Tag.fixed: "\033[92;1m",  # bright green, bold
    Tag.critical: "\033[91;1m",
    Tag.high: "\033[95;1m",  # bright magenta, bold
    Tag.medium: "\033[93;1m",
}

_SEVERITY_TAGS = {
    Severity.critical: Tag.critical,
    Severity.high: Tag.high,
    Severity.medium: Tag.medium,
}


def severity_tag(severity: Severity) -> Optional[Tag]:
    """Emphasis for a severity tier. Low and absent scores stay plain."""
    return _SEVERITY_TAGS.get(severity)


def style(text: str, tag: Optional[Tag], color: Optional[bool] = None) -> str:
    """Wrap text in the ANSI codes for tag, or return it unchanged.

    color=None defers to the process-wide setting (color_active()).
    Empty text is never wrapped.
    """
    if color is None:
        color = color_active()
    if not color or tag is None or not text:
        return text
    return f"{TAG_CODES[tag]}{text}{_RESET}"
