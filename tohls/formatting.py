"""Rich-based console formatting utilities"""

from rich.console import Console
from rich.text import Text

console = Console()
error_console = Console(stderr=True)

def print_check(message: str) -> None:
    """Print a checkmark message in bold green."""
    text = Text("✓ ", style="bold green") + Text(message, style="bold")
    console.print(text)

def print_error(message: str) -> None:
    """Print an error message in bold red to stderr."""
    text = Text("✗ ", style="bold red") + Text(message, style="bold")
    error_console.print(text)

def print_success(message: str) -> None:
    """Print a success message in plain green."""
    text = Text("✓ ", style="green") + Text(message, style="green")
    console.print(text)

def print_header(title: str, width: int = 80) -> None:
    """Print a decorative header."""
    separator = Text("=" * width, style="bold blue")
    padding = (width - len(title)) // 2
    console.print(separator)
    console.print(" " * padding + title, style="bold blue")
    console.print(separator)

def print_info(message: str) -> None:
    """Print an informational message in a subtle style."""
    text = Text("ℹ ", style="bold blue") + Text(message, style="blue")
    console.print(text)
