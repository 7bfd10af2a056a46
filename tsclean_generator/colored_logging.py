"""
Colored console logging for the tsclean generator.

Progress lines, success lines and section headers produced while scaffolding
get their own colors so a long generation run stays readable.
"""

import logging
import sys
from typing import Optional, TextIO


class ColoredFormatter(logging.Formatter):
    """
    Logging formatter that wraps records in ANSI color codes.

    Levels WARNING and above always use their level color. INFO and DEBUG
    records are colored by the marker the log_* helpers prepend.
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }

    SUCCESS_MARKER = '✓'
    PROGRESS_MARKER = '→'
    HIGHLIGHT_MARKER = '•'

    MARKER_COLORS = {
        SUCCESS_MARKER: '\033[92m',    # Bright Green
        PROGRESS_MARKER: '\033[94m',   # Bright Blue
        HIGHLIGHT_MARKER: '\033[96m',  # Bright Cyan
    }

    RESET = '\033[0m'
    BOLD = '\033[1m'

    def __init__(
        self,
        fmt: Optional[str] = None,
        use_colors: bool = True,
        stream: Optional[TextIO] = None,
    ):
        """
        Initialize the colored formatter.

        Args:
            fmt: Log format string (uses "%(message)s" if None)
            use_colors: Whether to use colors at all
            stream: Stream the handler writes to; colors are only used on a TTY
        """
        super().__init__(fmt or "%(message)s")
        stream = stream if stream is not None else sys.stderr
        self.use_colors = use_colors and hasattr(stream, 'isatty') and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with colors."""
        formatted_message = super().format(record)
        if not self.use_colors:
            return formatted_message

        if record.levelno >= logging.WARNING:
            color = self.COLORS.get(record.levelname, '')
            return f"{color}{formatted_message}{self.RESET}" if color else formatted_message

        message = record.getMessage()
        for marker, color in self.MARKER_COLORS.items():
            if message.startswith(marker):
                bold = self.BOLD if marker == self.SUCCESS_MARKER else ''
                return f"{color}{bold}{formatted_message}{self.RESET}"

        if self._is_section_message(message):
            return f"{self.BOLD}{self.MARKER_COLORS[self.HIGHLIGHT_MARKER]}{formatted_message}{self.RESET}"

        if record.levelno == logging.DEBUG:
            return f"{self.COLORS['DEBUG']}{formatted_message}{self.RESET}"

        return formatted_message

    @staticmethod
    def _is_section_message(message: str) -> bool:
        """Check if message is a section separator or title."""
        stripped = message.strip()
        return stripped.startswith('=' * 10) or (stripped.isupper() and len(stripped) > 3)


def setup_colored_logging(level: int = logging.INFO, use_colors: bool = True) -> None:
    """
    Set up colored logging for the application.

    Args:
        level: Logging level (default: INFO)
        use_colors: Whether to use colors (default: True)
    """
    formatter = ColoredFormatter(use_colors=use_colors, stream=sys.stderr)

    root_logger = logging.getLogger()

    # Remove existing handlers to avoid duplication
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)

    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)


def get_colored_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name."""
    return logging.getLogger(name)


def log_success(logger: logging.Logger, message: str) -> None:
    """Log a success message with special formatting."""
    logger.info(f"{ColoredFormatter.SUCCESS_MARKER} {message}")


def log_progress(logger: logging.Logger, message: str) -> None:
    """Log a progress message with special formatting."""
    logger.info(f"{ColoredFormatter.PROGRESS_MARKER} {message}")


def log_highlight(logger: logging.Logger, message: str) -> None:
    """Log a highlighted message with special formatting."""
    logger.info(f"{ColoredFormatter.HIGHLIGHT_MARKER} {message}")


def log_section(logger: logging.Logger, section_name: str) -> None:
    """Log a section header with special formatting."""
    separator = "=" * 60
    logger.info(separator)
    logger.info(f"  {section_name.upper()}")
    logger.info(separator)
