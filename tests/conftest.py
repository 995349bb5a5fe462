"""Shared fixtures.

- Default preferences, regardless of the environment.
- An event recorder, for asserting on notification order.
- Small keyframed inputs and graphs.
"""

import functools
import typing as typ

import pytest

from timeline_nodes import contracts as ct
from timeline_nodes import preferences
from timeline_nodes.node_graph import Node, NodeGraph, NodeInput, NodeKeyframe
from timeline_nodes.utils.events import EventEmitter


@pytest.fixture(autouse=True)
def default_prefs(monkeypatch: pytest.MonkeyPatch) -> typ.Iterator[None]:
	"""Default preferences; loggers are re-synced afterwards, closing any log files."""
	monkeypatch.setattr(preferences, '_PREFS', preferences.Preferences())
	yield
	preferences.set_prefs(preferences.Preferences())


class EventRecorder:
	"""Records `(event, args)` for every event it listens to, in trigger order."""

	def __init__(self) -> None:
		self.events: list[tuple[typ.Hashable, tuple]] = []

	def listen(self, emitter: EventEmitter, *events: typ.Hashable) -> None:
		for event in events:
			emitter.on(event, functools.partial(self._record, event))

	def _record(self, event: typ.Hashable, *args: typ.Any) -> None:
		self.events.append((event, args))

	@property
	def names(self) -> list[typ.Hashable]:
		return [event for event, _ in self.events]

	def of(self, event: typ.Hashable) -> list[tuple]:
		return [args for recorded, args in self.events if recorded == event]

	def clear(self) -> None:
		self.events.clear()


@pytest.fixture()
def recorder() -> EventRecorder:
	return EventRecorder()


def make_keyframed_input(
	times_values: list[tuple[typ.Any, typ.Any]],
	data_type: ct.DataType = ct.DataType.Float,
	keyframe_type: ct.KeyframeType = ct.KeyframeType.Linear,
	input_id: str = 'amount',
) -> NodeInput:
	node_input = NodeInput(input_id, data_type)
	node_input.set_is_keyframing(True)
	for time, value in times_values:
		node_input.insert_keyframe(NodeKeyframe(time, value, keyframe_type))
	return node_input


@pytest.fixture()
def make_input() -> typ.Callable[..., NodeInput]:
	return make_keyframed_input


@pytest.fixture()
def ramp_input() -> NodeInput:
	"""Float input: `0 -> 0`, `10 -> 100`, both linear."""
	return make_keyframed_input([(0, 0.0), (10, 100.0)])


@pytest.fixture()
def three_key_input() -> NodeInput:
	"""Float input: `0 -> 0`, `5 -> 50`, `10 -> 100`, all linear."""
	return make_keyframed_input([(0, 0.0), (5, 50.0), (10, 100.0)])


@pytest.fixture()
def graph() -> NodeGraph:
	return NodeGraph()


@pytest.fixture()
def source_node() -> Node:
	node = Node('source')
	node.add_input(NodeInput('amount', ct.DataType.Float, 1.0))
	return node


@pytest.fixture()
def sink_node() -> Node:
	node = Node('sink')
	node.add_input(NodeInput('amount', ct.DataType.Float, 2.0))
	return node
