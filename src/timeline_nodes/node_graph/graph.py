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

"""The graph container: Owns nodes, and where each node is placed within each context node.

# Contexts
A context is itself a node of the graph (ex. a composition), within which other nodes are placed at a 2-D `ct.NodePosition`.
The same node may be placed in any number of contexts.

Reads of the position map never create entries; only `set_node_position()` does.
"""

import collections
import typing as typ

from frozendict import frozendict

from timeline_nodes import contracts as ct
from timeline_nodes.utils import logger
from timeline_nodes.utils.events import EventEmitter, Listener, relay_events, unrelay_events

from . import edges
from .node import Node

log = logger.get(__name__)

GE = ct.GraphEvent

RELAYED_EVENTS: frozenset[ct.GraphEvent] = frozenset(
	{GE.InputConnected, GE.InputDisconnected, GE.ValueChanged}
)


class NodeGraph(EventEmitter):
	"""A set of nodes, together with per-context node placements.

	`InputConnected`, `InputDisconnected` and `ValueChanged` of every node in the graph are relayed by the graph, with unchanged arguments.

	Attributes:
		nodes: All nodes of the graph, in insertion order.
		default_nodes: Nodes that were added as part of the graph's default content.
	"""

	def __init__(self) -> None:
		super().__init__()
		self.nodes: list[Node] = []
		self.default_nodes: list[Node] = []

		self._position_map: dict[Node, dict[Node, ct.NodePosition]] = {}
		self._node_relays: dict[Node, dict[typ.Hashable, Listener]] = {}

	####################
	# - Nodes
	####################
	def add_node(self, node: Node) -> None:
		"""Register `node`, then report `NodeAdded`.

		Raises:
			ValueError: If `node` is already in the graph.
		"""
		if node in self._node_relays:
			msg = f'Node {node!r} is already in the graph'
			log.error(msg)
			raise ValueError(msg)

		self.nodes.append(node)
		self._node_relays[node] = relay_events(node, self, RELAYED_EVENTS)

		log.debug('Added node %s', node)
		self.trigger_event(GE.NodeAdded, node)

	def add_default_node(self, node: Node) -> None:
		"""Register `node` as part of the graph's default content."""
		self.add_node(node)
		self.default_nodes.append(node)

	def remove_node(self, node: Node) -> None:
		"""Remove `node`, and every trace of it.

		In order:

		1. Every edge into or out of `node` is (forcibly) disconnected, reporting `InputDisconnected`.
		2. Every position of `node`, and every position within `node` as a context, is removed, reporting `NodePositionRemoved`.
		3. `node` is dropped, reporting `NodeRemoved`.

		Raises:
			ValueError: If `node` isn't in the graph.
		"""
		if node not in self._node_relays:
			msg = f'Node {node!r} is not in the graph'
			log.error(msg)
			raise ValueError(msg)

		# Disconnect Edges
		for edge in node.input_edges():
			edges.disconnect_edge(edge.output, edge.input, force=True)
		for edge in list(node.output.edges):
			edges.disconnect_edge(edge.output, edge.input, force=True)

		# Prune Positions
		## As a context node.
		for contained_node in list(self._position_map.get(node, {})):
			self.remove_node_position(contained_node, node)

		## As a contained node.
		for context in list(self._position_map):
			self.remove_node_position(node, context)

		# Drop Node
		unrelay_events(node, self._node_relays.pop(node))
		self.nodes.remove(node)
		if node in self.default_nodes:
			self.default_nodes.remove(node)

		log.debug('Removed node %s', node)
		self.trigger_event(GE.NodeRemoved, node)

	def clear(self) -> None:
		"""Remove every node, each through `remove_node()`."""
		log.info('Clearing graph of %d nodes', len(self.nodes))
		for node in list(self.nodes):
			self.remove_node(node)

		self.default_nodes.clear()
		self._position_map.clear()

	def __contains__(self, node: Node) -> bool:
		return node in self._node_relays

	####################
	# - Positions
	####################
	def set_node_position(
		self,
		node: Node,
		context: Node,
		position: ct.NodePosition | tuple[float, float],
	) -> None:
		"""Place `node` at `position` within `context`, then report `NodePositionAdded`.

		Raises:
			ValueError: If `node` or `context` isn't in the graph.
		"""
		for required_node in (node, context):
			if required_node not in self._node_relays:
				msg = f'Cannot position {node!r} in {context!r}: {required_node!r} is not in the graph'
				log.error(msg)
				raise ValueError(msg)

		position = ct.NodePosition.model_validate(position)
		self._position_map.setdefault(context, {})[node] = position

		log.debug('Positioned %s in %s at %s', node, context, position)
		self.trigger_event(GE.NodePositionAdded, node, context, position)

	def get_node_position(self, node: Node, context: Node) -> ct.NodePosition | None:
		context_map = self._position_map.get(context)
		if context_map is None:
			return None
		return context_map.get(node)

	def remove_node_position(self, node: Node, context: Node) -> None:
		"""Remove the position of `node` within `context`, if there is one.

		`NodePositionRemoved` is only reported when a position was actually removed.
		"""
		context_map = self._position_map.get(context)
		if context_map is None or node not in context_map:
			return

		del context_map[node]
		if not context_map:
			del self._position_map[context]

		log.debug('Removed position of %s in %s', node, context)
		self.trigger_event(GE.NodePositionRemoved, node, context)

	def node_map_contains_node(self, node: Node, context: Node) -> bool:
		return node in self._position_map.get(context, {})

	def context_contains_node(self, node: Node, context: Node) -> bool:
		return self.node_map_contains_node(node, context)

	def get_nodes_for_context(self, context: Node) -> frozendict[Node, ct.NodePosition]:
		"""All nodes placed within `context`, with their positions."""
		return frozendict(self._position_map.get(context, {}))

	@property
	def position_map(self) -> frozendict[Node, frozendict[Node, ct.NodePosition]]:
		"""Snapshot of every context, with its placed nodes."""
		return frozendict(
			{
				context: frozendict(context_map)
				for context, context_map in self._position_map.items()
			}
		)

	def get_number_of_contexts_node_is_in(self, node: Node) -> int:
		return sum(
			1 for context_map in self._position_map.values() if node in context_map
		)

	####################
	# - Queries
	####################
	def node_outputs_to_context(self, node: Node) -> bool:
		"""Whether anything downstream of `node` is placed within some context.

		Walks output edges breadth-first; cycles are visited once.
		"""
		visited: set[Node] = {node}
		queue: collections.deque[Node] = collections.deque([node])

		while queue:
			current = queue.popleft()
			for consumer_input in current.output_connections():
				consumer = consumer_input.node
				if consumer is None or consumer in visited:
					continue

				if self.get_number_of_contexts_node_is_in(consumer) > 0:
					return True

				visited.add(consumer)
				queue.append(consumer)

		return False

	def get_node_context_height(self, context: Node) -> float:
		"""Vertical extent of all nodes placed within `context`, using each node's `visual_size()`.

		Returns:
			`max(y + height) - min(y)`, or `0.0` if nothing is placed within `context`.
		"""
		context_map = self._position_map.get(context)
		if not context_map:
			return 0.0

		top = min(position.y for position in context_map.values())
		bottom = max(
			position.y + node.visual_size()[1] for node, position in context_map.items()
		)
		return bottom - top
