# Argot CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for Argot CLI applications."""
from rich.console import Console

from argot.themes import get_argot_theme

console = Console(color_system="truecolor", theme=get_argot_theme())
