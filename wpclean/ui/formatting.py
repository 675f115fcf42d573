"""Human-readable formatting helpers shared by the TUI and the session log."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


def format_size(bytes_size: int) -> str:
    """Convert bytes to human-readable format.

    Args:
        bytes_size: Size in bytes.

    Returns:
        Human-readable size string (e.g., "10.5 MB", "1.2 GB").
    """
    if bytes_size < 1024:
        return f"{bytes_size} B"
    elif bytes_size < 1024 * 1024:
        return f"{bytes_size / 1024:.1f} KB"
    elif bytes_size < 1024 * 1024 * 1024:
        return f"{bytes_size / (1024 * 1024):.1f} MB"
    else:
        return f"{bytes_size / (1024 * 1024 * 1024):.1f} GB"


def format_age(moment: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Express how long ago ``moment`` was in whole days.

    Returns "today" for anything less than a day old (including timestamps in
    the future), otherwise "1d", "2d", ... and "-" when there is no timestamp.
    Aware timestamps are compared against an aware ``now``.
    """
    if moment is None:
        return "-"
    if now is None:
        now = datetime.now(timezone.utc) if moment.tzinfo is not None else datetime.now()
    days = int((now - moment).total_seconds() // 86400)
    if days <= 0:
        return "today"
    return f"{days}d"


def shorten_path(path: Path, root: Optional[Path] = None, max_length: int = 53) -> str:
    """Display form of a path: root prefix replaced by "~", long paths cut from the left."""
    text = str(path)
    if root is not None:
        root_text = str(root).rstrip("/\\")
        if root_text and (text == root_text or text.startswith(root_text + "/")
                          or text.startswith(root_text + "\\")):
            text = "~" + text[len(root_text):]
    if len(text) > max_length:
        return "..." + text[-(max_length - 3):]
    return text


def truncate_name(name: str, max_length: int = 53) -> str:
    """Truncate long names with a trailing ellipsis."""
    if len(name) > max_length:
        return name[: max_length - 3] + "..."
    return name
