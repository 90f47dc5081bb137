"""Interpreter core and terminal front end."""

from termsite.shell.history import HistoryNavigator
from termsite.shell.interpreter import Interpreter
from termsite.shell.output import OutputBuffer

__all__ = ["HistoryNavigator", "Interpreter", "OutputBuffer"]
