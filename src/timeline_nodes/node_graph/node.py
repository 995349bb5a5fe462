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

"""A node: Named inputs, feeding a single output."""

import typing as typ
import uuid

from timeline_nodes import contracts as ct
from timeline_nodes.utils import logger
from timeline_nodes.utils.events import EventEmitter, Listener, relay_events

from .edges import NodeEdge, NodeOutput
from .node_input import NodeInput

log = logger.get(__name__)


class Node(EventEmitter):
	"""A unit of computation, whose inputs may be animated over time, or fed by other nodes.

	All events of the node's inputs (and their sub-inputs) are relayed, with unchanged arguments, by the node.
	Nodes are hashed and compared by identity.

	Attributes:
		name: Display name of the node.
		instance_id: Stable, unique identifier of this node.
		output: The node's single output.
	"""

	def __init__(self, name: str = '') -> None:
		super().__init__()
		self.name = name
		self.instance_id = uuid.uuid4()
		self.output = NodeOutput(self)

		self._inputs: dict[str, NodeInput] = {}
		self._input_relays: dict[str, dict[typ.Hashable, Listener]] = {}

	def __repr__(self) -> str:
		return f'{type(self).__name__}({self.name!r})'

	####################
	# - Inputs
	####################
	@property
	def inputs(self) -> list[NodeInput]:
		return list(self._inputs.values())

	def get_input(self, input_id: str) -> NodeInput | None:
		return self._inputs.get(input_id)

	def add_input(self, node_input: NodeInput) -> NodeInput:
		"""Attach `node_input` to this node.

		Raises:
			ValueError: If an input with the same id already exists, or `node_input` belongs to another node.
		"""
		if node_input.id in self._inputs:
			msg = f'Node {self!r} already has an input "{node_input.id}"'
			log.error(msg)
			raise ValueError(msg)

		if node_input.node is not None and node_input.node is not self:
			msg = f'Input "{node_input.id}" already belongs to {node_input.node!r}'
			log.error(msg)
			raise ValueError(msg)

		for sub_input in node_input.iter_inputs():
			sub_input.node = self

		self._inputs[node_input.id] = node_input
		self._input_relays[node_input.id] = relay_events(
			node_input, self, ct.GraphEvent.input_events
		)
		return node_input

	####################
	# - Connections
	####################
	def input_edges(self) -> list[NodeEdge]:
		"""All edges leading into this node, including those of sub-inputs."""
		return [
			sub_input.edge
			for node_input in self._inputs.values()
			for sub_input in node_input.iter_inputs()
			if sub_input.edge is not None
		]

	def output_connections(self) -> list[NodeInput]:
		"""All inputs fed by this node's output."""
		return self.output.connected_inputs

	####################
	# - Layout
	####################
	def visual_size(self) -> tuple[float, float]:
		"""Width and height of the node, in context coordinates."""
		return (1.0, 1.0)
