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

"""An input holding a resizable list of same-typed sub-inputs."""

import typing as typ

from timeline_nodes import contracts as ct
from timeline_nodes.utils import logger
from timeline_nodes.utils.events import Listener, relay_events, unrelay_events

from . import edges
from .node_input import NodeInput

log = logger.get(__name__)


class NodeInputArray(NodeInput):
	"""A `NodeInput` that additionally owns `size` sub-inputs, with ids `{id}[0]`, `{id}[1]`, ...

	Every sub-input shares the data type and default value of the array.
	Events of sub-inputs are relayed, with unchanged arguments, through the array itself.
	"""

	def __init__(
		self,
		input_id: str,
		data_type: ct.DataType,
		default_value: typ.Any = None,
		*,
		name: str = '',
		keyframable: bool = True,
		size: int = 0,
	) -> None:
		super().__init__(
			input_id, data_type, default_value, name=name, keyframable=keyframable
		)
		self._default_value = default_value
		self._sub_inputs: list[NodeInput] = []
		self._sub_input_relays: list[dict[typ.Hashable, Listener]] = []

		self._resize(size)

	####################
	# - Sub-Inputs
	####################
	@property
	def size(self) -> int:
		return len(self._sub_inputs)

	@property
	def sub_inputs(self) -> list[NodeInput]:
		return list(self._sub_inputs)

	def at(self, index: int) -> NodeInput:
		"""The sub-input at `index`.

		Raises:
			IndexError: If `index` is out of range.
		"""
		if not 0 <= index < len(self._sub_inputs):
			msg = f'Array input "{self.id}" has no sub-input {index} (size is {self.size})'
			raise IndexError(msg)

		return self._sub_inputs[index]

	def iter_inputs(self) -> typ.Iterator[NodeInput]:
		yield self
		for sub_input in self._sub_inputs:
			yield from sub_input.iter_inputs()

	def set_size(self, size: int) -> None:
		"""Grow or shrink the array to `size` sub-inputs, then report `SizeChanged`.

		Removed sub-inputs are forcibly disconnected; new sub-inputs start from the default value.

		Raises:
			ValueError: If `size` is negative.
		"""
		if size < 0:
			msg = f'Array input "{self.id}" cannot have negative size {size}'
			log.error(msg)
			raise ValueError(msg)

		if size == self.size:
			return

		self._resize(size)
		log.debug('Array input "%s": Resized to %d', self.id, size)
		self.trigger_event(ct.GraphEvent.SizeChanged, self, size)

	def _resize(self, size: int) -> None:
		while len(self._sub_inputs) > size:
			sub_input = self._sub_inputs[-1]
			output = sub_input.get_connected_output()
			if output is not None:
				edges.disconnect_edge(output, sub_input, force=True)

			unrelay_events(sub_input, self._sub_input_relays.pop())
			self._sub_inputs.pop()
			sub_input.node = None

		while len(self._sub_inputs) < size:
			sub_input = NodeInput(
				f'{self.id}[{len(self._sub_inputs)}]',
				self.data_type,
				self._default_value,
				name=self._name,
				keyframable=self.is_keyframable,
			)
			sub_input.node = self.node
			self._sub_inputs.append(sub_input)
			self._sub_input_relays.append(
				relay_events(sub_input, self, ct.GraphEvent.input_events)
			)
