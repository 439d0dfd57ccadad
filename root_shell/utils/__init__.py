"""Util functions and classes implementation."""

from root_shell.utils.config import Config
from root_shell.utils.logger import setup_logging

__all__ = [
    "Config",
    "setup_logging"
]
