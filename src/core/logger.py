"""
Unified Tree Logger
===================

Custom logging system with tree-style formatting and EST timezone support.
Every request the relay serves, and every upstream failure it hides from
callers, ends up here.

Features:
- Unique run ID generation for tracking server sessions
- EST/EDT timezone timestamp formatting (auto-adjusts)
- Tree-style log formatting for structured data
- Console and file output simultaneously
- Daily log folders with separate log and error files
- Automatic cleanup of old logs (7+ days)

Log Structure:
    logs/
    ├── 2026-10-19/
    │   ├── {BOT_NAME}-2026-10-19.log
    │   └── {BOT_NAME}-Errors-2026-10-19.log
    └── ...

Environment Variables:
    BOT_NAME - Name for log files (default: AvatarProxy)
    LOG_DIR  - Base directory for log folders (default: <root>/logs)
    DEBUG    - Enable debug logging (1/true/yes)
"""

import os
import re
import shutil
import uuid
import traceback
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Tuple, Optional, Any
from zoneinfo import ZoneInfo

from src.core.config import LOGS_DIR


# =============================================================================
# Constants
# =============================================================================

# Timezone for timestamps
TIMEZONE = ZoneInfo("America/New_York")

# Log retention period in days
LOG_RETENTION_DAYS = 7

_DEFAULT_BOT_NAME = "AvatarProxy"


def _get_bot_name() -> str:
    """Get bot name from env var at runtime (not import time)."""
    return os.getenv("BOT_NAME", _DEFAULT_BOT_NAME)


# Regex to match emojis (for stripping from titles)
EMOJI_PATTERN = re.compile(
    "["
    "\U0001F600-\U0001F64F"  # emoticons
    "\U0001F300-\U0001F5FF"  # symbols & pictographs
    "\U0001F680-\U0001F6FF"  # transport & map symbols
    "\U00002702-\U000027B0"  # dingbats
    "\U0001F900-\U0001F9FF"  # supplemental symbols
    "\U00002600-\U000026FF"  # misc symbols
    "]+",
    flags=re.UNICODE
)


# =============================================================================
# Tree Symbols
# =============================================================================

class TreeSymbols:
    """Box-drawing characters for tree formatting."""
    BRANCH = "├─"      # Middle item connector
    LAST = "└─"        # Last item connector


# =============================================================================
# Logger
# =============================================================================

class Logger:
    """Custom logger with tree-style formatting."""

    # Emojis that route a tree to the error log
    ERROR_EMOJIS = {"❌", "⚠️", "🚨", "💥"}

    def __init__(self, logs_base_dir: Optional[Path] = None) -> None:
        """Initialize the logger with unique run ID and daily log folder rotation."""
        self.run_id: str = str(uuid.uuid4())[:8]

        self._start_time: datetime = datetime.now(TIMEZONE)

        # Track last log type for spacing between trees
        self._last_was_tree: bool = False

        if logs_base_dir is None:
            logs_base_dir = Path(os.getenv("LOG_DIR", str(LOGS_DIR)))
        self.logs_base_dir = logs_base_dir
        self.logs_base_dir.mkdir(parents=True, exist_ok=True)

        self.current_date = datetime.now(TIMEZONE).strftime("%Y-%m-%d")
        self._set_log_files()

        self._cleanup_old_logs()
        self._write_header("NEW SESSION - RUN ID")

    # =========================================================================
    # Private Methods - Setup
    # =========================================================================

    def _set_log_files(self) -> None:
        """Point log files at today's folder (e.g., logs/2026-10-19/)."""
        self.log_dir = self.logs_base_dir / self.current_date
        self.log_dir.mkdir(exist_ok=True)
        self.log_file: Path = self.log_dir / f"{_get_bot_name()}-{self.current_date}.log"
        self.error_file: Path = self.log_dir / f"{_get_bot_name()}-Errors-{self.current_date}.log"

    def _cleanup_old_logs(self) -> None:
        """Clean up log folders older than retention period (7 days)."""
        try:
            cutoff_date = datetime.now(TIMEZONE) - timedelta(days=LOG_RETENTION_DAYS)
            deleted_count = 0

            # Only date-formatted folders (YYYY-MM-DD)
            for folder in self.logs_base_dir.glob("????-??-??"):
                if not folder.is_dir():
                    continue

                try:
                    folder_date = datetime.strptime(folder.name, "%Y-%m-%d").replace(tzinfo=TIMEZONE)
                except ValueError:
                    continue

                if folder_date < cutoff_date:
                    shutil.rmtree(folder)
                    deleted_count += 1

            if deleted_count > 0:
                print(f"[LOG CLEANUP] Deleted {deleted_count} old log folders (>{LOG_RETENTION_DAYS} days)")
        except OSError as e:
            print(f"[LOG CLEANUP ERROR] {type(e).__name__}: {e}")

    def _check_date_rotation(self) -> None:
        """Check if date has changed and rotate to new log folder if needed."""
        current_date = datetime.now(TIMEZONE).strftime("%Y-%m-%d")

        if current_date != self.current_date:
            self.current_date = current_date
            self._set_log_files()
            self._write_header("LOG ROTATION - Continuing session")

    def _write_header(self, label: str) -> None:
        """Write a session banner to both log files."""
        header = (
            f"\n{'='*60}\n"
            f"{label} {self.run_id}\n"
            f"{self._get_timestamp()}\n"
            f"{'='*60}\n\n"
        )
        self._append(self.log_file, header)
        self._append(self.error_file, header)

    # =========================================================================
    # Private Methods - Formatting
    # =========================================================================

    def _get_timestamp(self) -> str:
        """Get current timestamp in Eastern timezone (auto EST/EDT)."""
        current_time = datetime.now(TIMEZONE)
        return f"[{current_time.strftime('%I:%M:%S %p')} {current_time.strftime('%Z')}]"

    def _strip_emojis(self, text: str) -> str:
        """Remove emojis from text to avoid duplicate emojis in output."""
        return EMOJI_PATTERN.sub("", text).strip()

    def _format_tree(self, items: List[Tuple[str, Any]]) -> List[str]:
        """Format items as tree branches."""
        lines = []
        for i, (key, value) in enumerate(items):
            prefix = TreeSymbols.LAST if i == len(items) - 1 else TreeSymbols.BRANCH
            lines.append(f"  {prefix} {key}: {value}")
        return lines

    def _format_duration(self, seconds: float) -> str:
        """Format seconds into human-readable duration (e.g., '2d 5h 30m')."""
        if seconds < 0:
            return "0s"

        days, remainder = divmod(int(seconds), 86400)
        hours, remainder = divmod(remainder, 3600)
        minutes, secs = divmod(remainder, 60)

        parts = []
        if days > 0:
            parts.append(f"{days}d")
        if hours > 0:
            parts.append(f"{hours}h")
        if minutes > 0:
            parts.append(f"{minutes}m")
        if secs > 0 and not parts:
            parts.append(f"{secs}s")

        return " ".join(parts) if parts else "0s"

    def _get_uptime(self) -> str:
        """Get formatted uptime since logger initialization."""
        delta = datetime.now(TIMEZONE) - self._start_time
        return self._format_duration(delta.total_seconds())

    # =========================================================================
    # Private Methods - File Writing
    # =========================================================================

    @staticmethod
    def _append(path: Path, text: str) -> None:
        try:
            with open(path, "a", encoding="utf-8") as f:
                f.write(text)
        except OSError:
            pass

    def _write(self, message: str, emoji: str = "", to_error: bool = False) -> None:
        """Write a timestamped line to console and log file(s)."""
        self._check_date_rotation()

        clean_message = self._strip_emojis(message)
        timestamp = self._get_timestamp()
        full_message = f"{timestamp} {emoji} {clean_message}" if emoji else f"{timestamp} {clean_message}"

        self._write_raw(full_message, to_error)

    def _write_raw(self, message: str, to_error: bool = False) -> None:
        """Write raw message without timestamp (for tree branches)."""
        print(message)
        self._append(self.log_file, f"{message}\n")
        if to_error:
            self._append(self.error_file, f"{message}\n")

    def _emit_tree(self, title: str, items: List[Tuple[str, Any]], emoji: str, to_error: bool) -> None:
        if not self._last_was_tree:
            self._write_raw("", to_error)

        self._write(title, emoji, to_error)
        for line in self._format_tree(items):
            self._write_raw(line, to_error)

        self._write_raw("", to_error)
        self._last_was_tree = True

    # =========================================================================
    # Public Methods - Log Levels
    # =========================================================================

    def info(self, message: str, details: Optional[List[Tuple[str, Any]]] = None) -> None:
        """Log an informational message."""
        if details:
            self.tree(message, details, emoji="ℹ️")
        else:
            self._write(message, "ℹ️")
            self._last_was_tree = False

    def success(self, message: str, details: Optional[List[Tuple[str, Any]]] = None) -> None:
        """Log a success message."""
        if details:
            self.tree(message, details, emoji="✅")
        else:
            self._write(message, "✅")
            self._last_was_tree = False

    def error(self, message: str, details: Optional[List[Tuple[str, Any]]] = None) -> None:
        """Log an error message (also writes to error log)."""
        if details:
            self._emit_tree(message, details, "❌", to_error=True)
        else:
            self._write(message, "❌", to_error=True)
            self._last_was_tree = False

    def warning(self, message: str, details: Optional[List[Tuple[str, Any]]] = None) -> None:
        """Log a warning message (also writes to error log)."""
        if details:
            self._emit_tree(message, details, "⚠️", to_error=True)
        else:
            self._write(message, "⚠️", to_error=True)
            self._last_was_tree = False

    def debug(self, message: str, details: Optional[List[Tuple[str, Any]]] = None) -> None:
        """Log a debug message (only if DEBUG env var is set)."""
        if os.getenv("DEBUG", "").lower() in ("1", "true", "yes"):
            if details:
                self.tree(message, details, emoji="🔍")
            else:
                self._write(message, "🔍")
                self._last_was_tree = False

    def exception(self, message: str, details: Optional[List[Tuple[str, Any]]] = None) -> None:
        """Log an exception with full traceback (traceback goes to files only)."""
        # Deferred: src.utils imports this module
        from src.utils.security import mask_secrets

        self._emit_tree(message, details or [], "💥", to_error=True)
        tb = mask_secrets(traceback.format_exc())
        self._append(self.log_file, f"{tb}\n")
        self._append(self.error_file, f"{tb}\n")

    # =========================================================================
    # Public Methods - Tree Formatting
    # =========================================================================

    def tree(
        self,
        title: str,
        items: List[Tuple[str, Any]],
        emoji: str = "📦"
    ) -> None:
        """
        Log structured data in tree format.

        Example output:

            [12:00:00 PM EDT] 📦 Served Request
              ├─ ID: 123456789
              └─ User: nea#0001

        Args:
            title: Tree title/header
            items: List of (key, value) tuples
            emoji: Emoji prefix for title
        """
        self._emit_tree(title, items, emoji, to_error=emoji in self.ERROR_EMOJIS)

    def error_tree(
        self,
        title: str,
        error: BaseException,
        context: Optional[List[Tuple[str, Any]]] = None
    ) -> None:
        """
        Log an error with context in tree format.

        Example output:
            [12:00:00 PM EDT] ❌ Discord Lookup Failed
              ├─ Type: NonSuccessStatusError
              ├─ Message: Discord returned an error status (status=500)
              └─ User ID: 123

        Args:
            title: Error title/description
            error: The exception that occurred
            context: Additional context as (key, value) tuples
        """
        items: List[Tuple[str, Any]] = [
            ("Type", type(error).__name__),
            ("Message", str(error)[:200]),
        ]

        if context:
            items.extend(context)

        self._emit_tree(title, items, "❌", to_error=True)

    def startup_banner(
        self,
        name: str,
        extra: Optional[List[Tuple[str, Any]]] = None
    ) -> None:
        """
        Log server startup with a banner and tree format.

        Example output:
            ═══════════════════════════════════════════
                  AvatarProxy │ Run: a1b2c3d4
            ═══════════════════════════════════════════
        """
        banner_text = f"{name} │ Run: {self.run_id}"
        banner_width = max(43, len(banner_text) + 4)
        padding = (banner_width - len(banner_text)) // 2

        banner = (
            f"{'═' * banner_width}\n"
            f"{' ' * padding}{banner_text}\n"
            f"{'═' * banner_width}"
        )

        print(f"\n{banner}\n")
        self._append(self.log_file, f"\n{banner}\n\n")

        self.tree(f"{name} Starting", extra or [], emoji="🚀")

    def shutdown_tree(
        self,
        name: str,
        reason: str = "Shutdown requested",
    ) -> None:
        """Log server shutdown with uptime."""
        self.tree(f"{name} Shutting Down", [
            ("Reason", reason),
            ("Uptime", self._get_uptime()),
        ], emoji="👋")


# =============================================================================
# Module Export
# =============================================================================

logger = Logger()

log = logger

__all__ = [
    "logger",
    "log",
    "Logger",
    "TreeSymbols",
]
