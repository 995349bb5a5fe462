import pytest

from timeline_nodes import contracts as ct
from timeline_nodes.node_graph import Node, NodeInputArray, NodeKeyframe, connect_edge
from timeline_nodes.timing import TimeRange

DT = ct.DataType
GE = ct.GraphEvent


def test_sub_inputs_share_type_and_default() -> None:
	array = NodeInputArray('weights', DT.Float, 0.5, size=3)
	assert array.size == 3
	assert [sub.id for sub in array.sub_inputs] == ['weights[0]', 'weights[1]', 'weights[2]']
	assert all(sub.data_type is DT.Float for sub in array.sub_inputs)
	assert all(sub.standard_value == 0.5 for sub in array.sub_inputs)
	assert list(array.iter_inputs()) == [array, *array.sub_inputs]


def test_at_out_of_range() -> None:
	array = NodeInputArray('weights', DT.Float, size=1)
	with pytest.raises(IndexError):
		array.at(1)


def test_set_size(recorder) -> None:
	array = NodeInputArray('weights', DT.Float, size=1)
	recorder.listen(array, GE.SizeChanged)

	array.set_size(4)
	array.set_size(4)
	array.set_size(2)
	assert array.size == 2
	assert recorder.of(GE.SizeChanged) == [(array, 4), (array, 2)]

	with pytest.raises(ValueError, match='negative'):
		array.set_size(-1)


def test_sub_input_events_are_relayed(recorder) -> None:
	node = Node('mixer')
	array = node.add_input(NodeInputArray('weights', DT.Float, size=2))
	recorder.listen(node, GE.KeyframeAdded, GE.ValueChanged)

	sub = array.at(1)
	key = NodeKeyframe(0, 1.0)
	sub.insert_keyframe(key)
	assert recorder.events == [
		(GE.KeyframeAdded, (sub, key)),
		(GE.ValueChanged, (sub, TimeRange.all_time())),
	]


def test_sub_inputs_know_their_node() -> None:
	node = Node('mixer')
	array = node.add_input(NodeInputArray('weights', DT.Float, size=1))
	array.set_size(2)
	assert array.at(0).node is node
	assert array.at(1).node is node


def test_shrinking_disconnects_and_stops_relaying(recorder) -> None:
	upstream = Node('upstream')
	node = Node('mixer')
	array = node.add_input(NodeInputArray('weights', DT.Float, size=2))
	removed = array.at(1)
	connect_edge(upstream.output, removed)
	recorder.listen(node, GE.InputDisconnected, GE.ValueChanged)

	array.set_size(1)
	assert removed.get_connected_output() is None
	assert upstream.output.edges == []
	assert recorder.of(GE.InputDisconnected) == [(upstream.output, removed)]

	recorder.clear()
	removed.set_standard_value(3.0)
	assert recorder.events == []


def test_node_sees_sub_input_edges() -> None:
	upstream = Node('upstream')
	node = Node('mixer')
	array = node.add_input(NodeInputArray('weights', DT.Float, size=2))
	edge = connect_edge(upstream.output, array.at(0))

	assert node.input_edges() == [edge]
	assert upstream.output_connections() == [array.at(0)]
