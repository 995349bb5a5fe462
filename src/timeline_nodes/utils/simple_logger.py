# timeline_nodes
# Copyright (C) 2024 timeline_nodes Project Contributors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

"""Stdlib-only logging primitives shared by `timeline_nodes.utils.logger` and `timeline_nodes.preferences`.

Only loggers within the `timeline_nodes` namespace are ever (re)configured; the root logger, and loggers of any host application, are left alone.
"""

import logging
import typing as typ
from pathlib import Path

LogLevel: typ.TypeAlias = int
LogHandler: typ.TypeAlias = logging.Handler

####################
# - Constants
####################
LOG_LEVEL_MAP: dict[str, LogLevel] = {
	'DEBUG': logging.DEBUG,
	'INFO': logging.INFO,
	'WARNING': logging.WARNING,
	'ERROR': logging.ERROR,
	'CRITICAL': logging.CRITICAL,
}

LOGGER_NAMESPACE = 'timeline_nodes'

STREAM_LOG_FORMAT = 11 * ' ' + '%(levelname)-8s %(message)s (%(name)s)'
FILE_LOG_FORMAT = '%(asctime)s %(levelname)-8s %(message)s (%(name)s)'

####################
# - Globals
####################
CACHE = {
	'console_level': logging.WARNING,
	'file_path': None,
	'file_level': logging.NOTSET,
}


####################
# - Logging Handlers
####################
def console_handler(level: LogLevel) -> logging.StreamHandler:
	"""A logging handler that prints messages to the console.

	Parameters:
		level: The log levels (debug, info, etc.) to print.

	Returns:
		The logging handler, which can be added to a logger.
	"""
	stream_formatter = logging.Formatter(STREAM_LOG_FORMAT)
	stream_handler = logging.StreamHandler()
	stream_handler.setFormatter(stream_formatter)
	stream_handler.setLevel(level)
	return stream_handler


def file_handler(path_log_file: Path, level: LogLevel) -> logging.FileHandler:
	"""A logging handler that appends messages to a file.

	Parameters:
		path_log_file: The path to the log file.
		level: The log levels (debug, info, etc.) to append to the file.

	Returns:
		The logging handler, which can be added to a logger.
	"""
	file_formatter = logging.Formatter(FILE_LOG_FORMAT)
	file_handler = logging.FileHandler(path_log_file)
	file_handler.setFormatter(file_formatter)
	file_handler.setLevel(level)
	return file_handler


####################
# - Logger Setup
####################
def update_logger(
	cb_console_handler: typ.Callable[[LogLevel], LogHandler],
	cb_file_handler: typ.Callable[[Path, LogLevel], LogHandler],
	logger: logging.Logger,
	console_level: LogLevel | None,
	file_path: Path | None,
	file_level: LogLevel,
) -> None:
	"""Configures a single logger with given console and file handlers, individualizing the log level that triggers each.

	Parameters:
		cb_console_handler: A function that takes a log level threshold (inclusive), and returns a logging handler to a console-printer.
		cb_file_handler: A function that takes a log level threshold (inclusive), and returns a logging handler to a file-printer.
		logger: The logger to configure.
		console_level: The log level threshold to print to the console.
			None deactivates console logging.
		file_path: The path to the log file.
			None deactivates file logging.
		file_level: The log level threshold to print to the log file.
	"""
	# Delegate Level Semantics to Log Handlers
	## This lets everything through
	logger.setLevel(logging.DEBUG)

	# DO NOT Propagate to Root Logger
	## This looks like 'double messages'
	logger.propagate = False

	# Clear Existing Handlers
	## Handlers are closed, so that log files aren't left open.
	for handler in list(logger.handlers):
		logger.removeHandler(handler)
		handler.close()

	# Add Console Logging Handler
	if console_level is not None:
		logger.addHandler(cb_console_handler(console_level))

	# Add File Logging Handler
	if file_path is not None:
		logger.addHandler(cb_file_handler(file_path, file_level))


def get(module_name: str) -> logging.Logger:
	"""Get a plain (`rich`-less) logger from the module name.

	Uses the global `CACHE` to store `console_level`, `file_path`, and `file_level`, since preferences may not be available yet.

	Parameters:
		module_name: The name of the module to create a logger for.
			Should be set to `__name__`.
	"""
	logger = logging.getLogger(module_name)

	# Reuse Cached Arguments from Last update_all_loggers()
	update_logger(
		console_handler,
		file_handler,
		logger,
		console_level=CACHE['console_level'],
		file_path=CACHE['file_path'],
		file_level=CACHE['file_level'],
	)

	return logger


####################
# - Logger Sync
####################
def update_all_loggers(
	cb_console_handler: typ.Callable[[LogLevel], LogHandler],
	cb_file_handler: typ.Callable[[Path, LogLevel], LogHandler],
	console_level: LogLevel | None,
	file_path: Path | None,
	file_level: LogLevel,
) -> None:
	"""Update all `timeline_nodes` loggers to conform to the given per-handler on/off state and log level.

	This runs the corresponding `update_logger()` for all loggers in the namespace.
	Thus, all parameters are identical to `update_logger()`.
	"""
	CACHE['console_level'] = console_level
	CACHE['file_path'] = file_path
	CACHE['file_level'] = file_level

	for logger in loggers():
		update_logger(
			cb_console_handler,
			cb_file_handler,
			logger,
			console_level=console_level,
			file_path=file_path,
			file_level=file_level,
		)


####################
# - Logger Iteration
####################
def loggers() -> list[logging.Logger]:
	"""All instantiated loggers within the `timeline_nodes` namespace."""
	return [
		logging.getLogger(name)
		for name in list(logging.root.manager.loggerDict)
		if name == LOGGER_NAMESPACE or name.startswith(LOGGER_NAMESPACE + '.')
	]
