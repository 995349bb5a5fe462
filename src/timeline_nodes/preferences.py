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

"""Process-wide preferences for `timeline_nodes`, read from the environment.

Attributes:
	ENV_PREFIX: Prefix of every environment variable consulted by `Preferences.from_env()`.
	ENV_FIELDS: Map from environment variable to the `Preferences` field it sets.
"""

import logging
import os
import typing as typ
from pathlib import Path

import pydantic as pyd

from .contracts.keyframe_types import KeyframeType
from .utils import simple_logger

log = simple_logger.get(__name__)

LogLevelName: typ.TypeAlias = typ.Literal[
	'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'
]

ENV_PREFIX = 'TIMELINE_NODES_'
ENV_FIELDS: dict[str, str] = {
	ENV_PREFIX + 'LOG_CONSOLE': 'use_log_console',
	ENV_PREFIX + 'LOG_LEVEL': 'log_level_console',
	ENV_PREFIX + 'LOG_FILE': 'use_log_file',
	ENV_PREFIX + 'LOG_PATH': 'log_file_path',
	ENV_PREFIX + 'LOG_FILE_LEVEL': 'log_level_file',
	ENV_PREFIX + 'DEFAULT_KEYFRAME_TYPE': 'default_keyframe_type',
}


####################
# - Preferences
####################
class Preferences(pyd.BaseModel):
	"""User preferences and settings.

	Attributes:
		use_log_console: Whether to log to the console (via `rich`).
		log_level_console: Level threshold of console logging.
		use_log_file: Whether to append logs to `log_file_path`.
		log_file_path: Path to the log file.
		log_level_file: Level threshold of file logging.
		default_keyframe_type: Keyframe type suggested when an input has no keyframes to take a hint from.
	"""

	model_config = pyd.ConfigDict(frozen=True)

	# Logging
	## Console Logging
	use_log_console: bool = True
	log_level_console: LogLevelName = 'WARNING'

	## File Logging
	use_log_file: bool = False
	log_file_path: Path = Path('timeline_nodes.log')
	log_level_file: LogLevelName = 'DEBUG'

	# Keyframes
	default_keyframe_type: KeyframeType = KeyframeType.Linear

	####################
	# - Validators
	####################
	@pyd.field_validator('log_level_console', 'log_level_file', mode='before')
	@classmethod
	def _upper_log_level(cls, value: typ.Any) -> typ.Any:
		if isinstance(value, str):
			return value.strip().upper()
		return value

	@pyd.field_validator('default_keyframe_type', mode='before')
	@classmethod
	def _lower_keyframe_type(cls, value: typ.Any) -> typ.Any:
		if isinstance(value, str):
			return value.strip().lower()
		return value

	####################
	# - Construction
	####################
	@classmethod
	def from_env(cls, environ: typ.Mapping[str, str] | None = None) -> typ.Self:
		"""Build preferences from `TIMELINE_NODES_*` environment variables.

		Unset variables keep their defaults.

		Raises:
			pydantic.ValidationError: If a variable holds a value that can't be parsed.
		"""
		environ = os.environ if environ is None else environ
		return cls.model_validate(
			{
				field_name: environ[env_name]
				for env_name, field_name in ENV_FIELDS.items()
				if env_name in environ
			}
		)

	####################
	# - Events: Properties Changed
	####################
	def on_logging_changed(
		self, single_logger_to_setup: logging.Logger | None = None
	) -> None:
		"""Configure one, or all, active `timeline_nodes` logger(s).

		Parameters:
			single_logger_to_setup: When set, only this logger will be setup.
				Otherwise, **all `timeline_nodes` loggers will be setup**.
		"""
		from .utils import logger

		log_setup_kwargs = {
			'console_level': (
				logger.LOG_LEVEL_MAP[self.log_level_console]
				if self.use_log_console
				else None
			),
			'file_path': self.log_file_path if self.use_log_file else None,
			'file_level': logger.LOG_LEVEL_MAP[self.log_level_file],
		}

		# Sync Single Logger / All Loggers
		if single_logger_to_setup is not None:
			logger.update_logger(
				logger.console_handler,
				logger.file_handler,
				single_logger_to_setup,
				**log_setup_kwargs,
			)
		else:
			log.info('Re-Configuring All Loggers')
			logger.update_all_loggers(
				logger.console_handler,
				logger.file_handler,
				**log_setup_kwargs,
			)


####################
# - Global Preferences
####################
_PREFS: Preferences | None = None


def prefs() -> Preferences:
	"""The process-wide preferences, lazily read from the environment on first use."""
	global _PREFS  # noqa: PLW0603

	if _PREFS is None:
		_PREFS = Preferences.from_env()

	return _PREFS


def set_prefs(new_prefs: Preferences) -> None:
	"""Replace the process-wide preferences, and re-configure all loggers to match."""
	global _PREFS  # noqa: PLW0603

	_PREFS = new_prefs
	new_prefs.on_logging_changed()
