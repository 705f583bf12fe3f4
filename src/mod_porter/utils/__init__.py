"""Utility modules for Modrinth Mod Porter."""

from .console_log import ConsoleLog
from .symbols import LogSymbols

__all__ = ['ConsoleLog', 'LogSymbols']
