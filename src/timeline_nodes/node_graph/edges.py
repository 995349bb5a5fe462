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

"""Connections between node outputs and node inputs.

An input is fed by at most one edge; an output may feed any number of inputs.
Every connect/disconnect is announced by the **destination input** as `InputConnected`/`InputDisconnected`, which the owning node and graph relay.
"""

import dataclasses
import typing as typ

from timeline_nodes import contracts as ct
from timeline_nodes.utils import logger

if typ.TYPE_CHECKING:
	from .node import Node
	from .node_input import NodeInput

log = logger.get(__name__)


####################
# - Output / Edge
####################
class NodeOutput:
	"""The output of a `Node`, from which edges lead to downstream inputs."""

	def __init__(self, node: 'Node', output_id: str = 'output') -> None:
		self.node = node
		self.id = output_id
		self.edges: list[NodeEdge] = []

	@property
	def connected_inputs(self) -> list['NodeInput']:
		return [edge.input for edge in self.edges]

	def __repr__(self) -> str:
		return f'NodeOutput({self.node!r}, {self.id!r})'


@dataclasses.dataclass(frozen=True, eq=False)
class NodeEdge:
	"""A connection from `output` to `input`; compared by identity."""

	output: NodeOutput
	input: 'NodeInput'


####################
# - Connect / Disconnect
####################
def connect_edge(output: NodeOutput, node_input: 'NodeInput') -> NodeEdge:
	"""Connect `output` to `node_input`, replacing any existing incoming edge.

	Connecting an already-connected pair is a no-op.

	Raises:
		RuntimeError: If `node_input` is locked.
	"""
	existing = node_input.edge
	if existing is not None and existing.output is output:
		return existing

	if node_input.is_locked:
		msg = f'Cannot connect {output!r} to locked input "{node_input.id}"'
		log.error(msg)
		raise RuntimeError(msg)

	if existing is not None:
		disconnect_edge(existing.output, node_input)

	edge = NodeEdge(output=output, input=node_input)
	output.edges.append(edge)
	node_input.attach_edge(edge)

	log.debug('Connected %s -> "%s"', output, node_input.id)
	node_input.trigger_event(ct.GraphEvent.InputConnected, output, node_input)
	return edge


def disconnect_edge(
	output: NodeOutput, node_input: 'NodeInput', *, force: bool = False
) -> None:
	"""Remove the edge from `output` to `node_input`.

	Parameters:
		force: Disconnect even if `node_input` is locked.
			Used when a node leaves its graph.

	Raises:
		ValueError: If no such edge exists.
		RuntimeError: If `node_input` is locked, and `force` is not set.
	"""
	edge = node_input.edge
	if edge is None or edge.output is not output:
		msg = f'No edge from {output!r} to input "{node_input.id}"'
		log.error(msg)
		raise ValueError(msg)

	if node_input.is_locked and not force:
		msg = f'Cannot disconnect locked input "{node_input.id}"'
		log.error(msg)
		raise RuntimeError(msg)

	output.edges.remove(edge)
	node_input.detach_edge()

	log.debug('Disconnected %s -> "%s"', output, node_input.id)
	node_input.trigger_event(ct.GraphEvent.InputDisconnected, output, node_input)
