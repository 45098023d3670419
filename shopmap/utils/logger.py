"""
Logging utilities for the shop map tools.
Supports both normal mode (rich console output) and debug mode (detailed logs).
"""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table


class ShopMapLogger:
    """
    Logger for the shop map with rich console output and optional debug mode.
    """

    def __init__(self, debug_mode: bool = False, debug_log_file: Optional[str] = None):
        self.debug_mode = debug_mode
        self.debug_log_file = debug_log_file
        self.console = Console()

        self._setup_logging()

    def _setup_logging(self):
        """Configure Python logging."""
        self.logger = logging.getLogger('shopmap')
        self.logger.setLevel(logging.DEBUG if self.debug_mode else logging.INFO)

        # Remove existing handlers
        self.logger.handlers = []

        console_handler = RichHandler(console=self.console, rich_tracebacks=True, show_path=False)
        console_handler.setLevel(logging.INFO)
        self.logger.addHandler(console_handler)

        # File handler for debug mode
        if self.debug_mode and self.debug_log_file:
            log_path = Path(self.debug_log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
            )
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def print_header(self, title: str):
        """Print a header/banner."""
        self.console.print(Panel(title, style="bold blue"))

    def print_section(self, title: str):
        """Print a section header."""
        self.console.print(f"\n[bold cyan]{title}[/bold cyan]")

    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)

    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)

    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)

    def error(self, message: str, exc_info: bool = False):
        """Log error message."""
        self.logger.error(message, exc_info=exc_info)

    def success(self, message: str):
        """Log success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def print_table(self, title: str, data: list, headers: list):
        """Print a formatted table."""
        table = Table(title=title)
        for header in headers:
            table.add_column(header)
        for row in data:
            table.add_row(*[str(cell) for cell in row])
        self.console.print(table)

    def print_summary(self, title: str, rows: list, duration: Optional[float] = None):
        """Print a two-column metric summary."""
        self.print_section(title)

        data = list(rows)
        if duration is not None:
            data.append(["Duration", f"{duration:.1f}s"])

        table = Table(show_header=False)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="bold")
        for row in data:
            table.add_row(str(row[0]), str(row[1]))
        self.console.print(table)


# Global logger instance
_logger_instance: Optional[ShopMapLogger] = None


def get_logger() -> ShopMapLogger:
    """Get the global logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = ShopMapLogger()
    return _logger_instance


def init_logger(debug_mode: bool = False, debug_log_file: Optional[str] = None) -> ShopMapLogger:
    """Initialize the global logger."""
    global _logger_instance
    _logger_instance = ShopMapLogger(debug_mode=debug_mode, debug_log_file=debug_log_file)
    return _logger_instance
