# This file is part of the Copilot issue agent for logging and console management.
# Date: 2026-10-19
# Version: 0.1.0

import logging
from rich.logging import RichHandler
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

# Define a custom logging level for success messages
SUCCESS_LEVEL_NUM = 25

logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

def success_log(self, message, *args, **kwargs):
    if self.isEnabledFor(SUCCESS_LEVEL_NUM):
        self._log(SUCCESS_LEVEL_NUM, message, args, **kwargs)

# Register the custom success method to the logging.Logger class
if not hasattr(logging.Logger, 'success'):
    setattr(logging.Logger, 'success', success_log)

class ConsoleManager:
    """
    A singleton class that manages the console output for the agent.
    It uses Rich for logging, panels and tables.
    """
    def __init__(self, name: str = "Copilot-Issues"):
        custom_theme = Theme({
            "logging.level.success": "bold green"
        })
        self._console = Console(theme=custom_theme)
        self._logger = self._setup_logger(name)

    def _setup_logger(self, name: str) -> logging.Logger:
        logger = logging.getLogger(name)
        if logger.hasHandlers():
            # Already configured (e.g. module re-imported under uvicorn --reload)
            return logger

        logger.setLevel(logging.INFO)
        handler = RichHandler(
            console=self._console,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            keywords=["INFO", "SUCCESS", "WARNING", "ERROR", "DEBUG", "CRITICAL"],
            show_path=False
        )
        handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
        logger.addHandler(handler)
        return logger

    def info(self, message: str):
        self._logger.info(message)

    def success(self, message: str):
        self._logger.success(message)

    def warning(self, message: str):
        self._logger.warning(message)

    def error(self, message: str):
        self._logger.error(message)

    def exception(self, message: str):
        # Only meaningful inside an except block
        self._logger.exception(message)

    def rule(self, title: str, style: str = "cyan"):
        self._console.rule(f"[bold {style}]{title}[/bold {style}]", style=style)

    def display_data_as_table(self, data: dict, title: str):
        table = Table(show_header=True, header_style="bold magenta", box=None, show_edge=False)
        table.add_column("Parameter", style="cyan", no_wrap=True, width=24)
        table.add_column("Value", style="white")

        for key, value in data.items():
            if isinstance(value, dict):
                for sub_key, sub_value in value.items():
                    table.add_row(f"  • {key}.{sub_key}", str(sub_value))
            elif isinstance(value, (list, tuple)):
                table.add_row(key, ", ".join(map(str, value or [])))
            else:
                table.add_row(key, str(value))

        panel = Panel(table, title=f"[bold green]✓ {title}[/bold green]", border_style="green")
        self._console.print(panel)

    def display_error_panel(self, title: str, error_message: str):
        panel = Panel(error_message, title=f"[bold red]{title}[/bold red]", border_style="red")
        self._console.print(panel)

# Create a singleton instance for global use
console = ConsoleManager()
