"""
Command-line interface for the jailcell package.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
