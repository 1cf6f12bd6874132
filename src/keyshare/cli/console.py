"""CLI console and logging helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from keyshare.exceptions import EnvironmentError

LOGGER_NAME = "keyshare"
HANDLER_NAME = "keyshare-console"


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()


def configure_logging(level: str | int = logging.WARNING) -> logging.Logger:
	"""Attach a single stderr handler to the ``keyshare`` logger.

	Uses ``rich.logging.RichHandler`` when Rich is importable, else a
	plain :class:`logging.StreamHandler`.  Calling it again only updates
	the level; handlers attached by others are left alone.
	"""
	logger = logging.getLogger(LOGGER_NAME)
	logger.setLevel(level)
	if any(h.get_name() == HANDLER_NAME for h in logger.handlers):
		return logger

	handler: logging.Handler
	try:
		from rich.logging import RichHandler
	except ModuleNotFoundError:
		handler = logging.StreamHandler(sys.stderr)
		handler.setFormatter(
			logging.Formatter("%(levelname)s %(name)s: %(message)s"),
		)
	else:
		handler = RichHandler(
			console=get_rich_console(),
			show_path=False,
			markup=False,
		)
		handler.setFormatter(logging.Formatter("%(message)s"))
	handler.set_name(HANDLER_NAME)
	logger.addHandler(handler)
	logger.propagate = False
	return logger
