import pytest

from timeline_nodes import contracts as ct
from timeline_nodes.node_graph import Node, NodeGraph, NodeInput, connect_edge
from timeline_nodes.timing import TimeRange

DT = ct.DataType
GE = ct.GraphEvent


class TallNode(Node):
	def visual_size(self) -> tuple[float, float]:
		return (2.0, 3.0)


def make_node(name: str) -> Node:
	node = Node(name)
	node.add_input(NodeInput('amount', DT.Float))
	return node


@pytest.fixture()
def populated_graph(graph) -> tuple[NodeGraph, Node, Node, Node]:
	"""`a -> b`, both placed in the context `ctx`."""
	a, b, ctx = make_node('a'), make_node('b'), make_node('ctx')
	for node in (a, b, ctx):
		graph.add_node(node)
	connect_edge(a.output, b.get_input('amount'))
	graph.set_node_position(a, ctx, (0.0, 0.0))
	graph.set_node_position(b, ctx, (2.0, 5.0))
	return graph, a, b, ctx


####################
# - Nodes
####################
def test_add_node(graph, recorder) -> None:
	node = make_node('a')
	recorder.listen(graph, GE.NodeAdded)

	graph.add_node(node)
	assert graph.nodes == [node]
	assert node in graph
	assert recorder.of(GE.NodeAdded) == [(node,)]

	with pytest.raises(ValueError, match='already'):
		graph.add_node(node)
	assert graph.nodes == [node]


def test_add_default_node(graph) -> None:
	node = make_node('output')
	graph.add_default_node(node)
	assert graph.nodes == [node]
	assert graph.default_nodes == [node]


def test_relays_input_events(graph, source_node, sink_node, recorder) -> None:
	graph.add_node(source_node)
	graph.add_node(sink_node)
	recorder.listen(graph, GE.InputConnected, GE.ValueChanged, GE.KeyframeEnableChanged)

	sink = sink_node.get_input('amount')
	connect_edge(source_node.output, sink)
	sink.set_standard_value(4.0)
	sink.set_is_keyframing(True)

	assert recorder.events == [
		(GE.InputConnected, (source_node.output, sink)),
		(GE.ValueChanged, (sink, TimeRange.all_time())),
	]


def test_remove_node(populated_graph, recorder) -> None:
	graph, a, b, ctx = populated_graph
	recorder.listen(graph, GE.InputDisconnected, GE.NodePositionRemoved, GE.NodeRemoved)

	graph.remove_node(a)
	assert recorder.events == [
		(GE.InputDisconnected, (a.output, b.get_input('amount'))),
		(GE.NodePositionRemoved, (a, ctx)),
		(GE.NodeRemoved, (a,)),
	]
	assert a not in graph
	assert graph.nodes == [b, ctx]
	assert b.get_input('amount').edge is None
	assert not graph.node_map_contains_node(a, ctx)


def test_remove_node_forces_locked_edges(populated_graph) -> None:
	graph, a, b, _ = populated_graph
	b.get_input('amount').set_locked(True)

	graph.remove_node(b)
	assert a.output.edges == []


def test_remove_context_node_prunes_contained_positions(populated_graph, recorder) -> None:
	graph, a, b, ctx = populated_graph
	recorder.listen(graph, GE.NodePositionRemoved)

	graph.remove_node(ctx)
	assert sorted(args[0].name for args in recorder.of(GE.NodePositionRemoved)) == ['a', 'b']
	assert graph.position_map == {}
	assert graph.get_number_of_contexts_node_is_in(a) == 0


def test_removed_node_is_no_longer_relayed(populated_graph, recorder) -> None:
	graph, a, _, _ = populated_graph
	graph.remove_node(a)
	recorder.listen(graph, GE.ValueChanged)

	a.get_input('amount').set_standard_value(1.0)
	assert recorder.events == []


def test_remove_unknown_node_fails(graph) -> None:
	with pytest.raises(ValueError, match='not in the graph'):
		graph.remove_node(make_node('ghost'))


def test_clear(populated_graph, recorder) -> None:
	graph, a, b, ctx = populated_graph
	graph.add_default_node(make_node('output'))
	recorder.listen(graph, GE.NodeRemoved)

	graph.clear()
	assert len(recorder.of(GE.NodeRemoved)) == 4
	assert graph.nodes == []
	assert graph.default_nodes == []
	assert graph.position_map == {}

	graph.clear()


####################
# - Positions
####################
def test_set_and_get_position(populated_graph, recorder) -> None:
	graph, a, _, ctx = populated_graph
	recorder.listen(graph, GE.NodePositionAdded)

	graph.set_node_position(a, ctx, ct.NodePosition(x=1.0, y=1.0))
	assert graph.get_node_position(a, ctx) == ct.NodePosition(x=1.0, y=1.0)
	assert recorder.of(GE.NodePositionAdded) == [(a, ctx, ct.NodePosition(x=1.0, y=1.0))]
	assert graph.get_node_position(ctx, a) is None


def test_set_position_requires_both_nodes(graph) -> None:
	node, context = make_node('a'), make_node('ctx')
	graph.add_node(node)
	with pytest.raises(ValueError, match='not in the graph'):
		graph.set_node_position(node, context, (0.0, 0.0))
	assert graph.position_map == {}


def test_remove_position_is_idempotent(populated_graph, recorder) -> None:
	graph, a, b, ctx = populated_graph
	recorder.listen(graph, GE.NodePositionRemoved)

	graph.remove_node_position(a, ctx)
	graph.remove_node_position(a, ctx)
	graph.remove_node_position(a, b)
	assert recorder.of(GE.NodePositionRemoved) == [(a, ctx)]

	graph.remove_node_position(b, ctx)
	assert ctx not in graph.position_map


def test_reads_do_not_create_contexts(populated_graph) -> None:
	graph, a, b, _ = populated_graph
	assert not graph.node_map_contains_node(a, b)
	assert not graph.context_contains_node(a, b)
	assert graph.get_nodes_for_context(b) == {}
	assert graph.get_node_position(a, b) is None
	assert b not in graph.position_map


def test_snapshots_are_read_only(populated_graph) -> None:
	graph, a, b, ctx = populated_graph
	nodes = graph.get_nodes_for_context(ctx)
	assert set(nodes) == {a, b}

	with pytest.raises(TypeError):
		nodes[a] = ct.NodePosition()
	with pytest.raises(TypeError):
		graph.position_map[ctx] = {}


def test_number_of_contexts(graph) -> None:
	node, ctx1, ctx2 = make_node('a'), make_node('ctx1'), make_node('ctx2')
	for n in (node, ctx1, ctx2):
		graph.add_node(n)
	graph.set_node_position(node, ctx1, (0.0, 0.0))
	graph.set_node_position(node, ctx2, (0.0, 0.0))
	graph.set_node_position(node, ctx2, (1.0, 0.0))

	assert graph.get_number_of_contexts_node_is_in(node) == 2
	assert graph.get_number_of_contexts_node_is_in(ctx1) == 0


####################
# - Queries
####################
def test_node_outputs_to_context(graph) -> None:
	a, b, c, ctx = make_node('a'), make_node('b'), make_node('c'), make_node('ctx')
	for node in (a, b, c, ctx):
		graph.add_node(node)
	connect_edge(a.output, b.get_input('amount'))
	connect_edge(b.output, c.get_input('amount'))

	assert not graph.node_outputs_to_context(a)

	graph.set_node_position(c, ctx, (0.0, 0.0))
	assert graph.node_outputs_to_context(a)
	assert graph.node_outputs_to_context(b)
	assert not graph.node_outputs_to_context(c)


def test_node_outputs_to_context_survives_cycles(graph) -> None:
	a, b = make_node('a'), make_node('b')
	graph.add_node(a)
	graph.add_node(b)
	connect_edge(a.output, b.get_input('amount'))
	connect_edge(b.output, a.get_input('amount'))

	assert not graph.node_outputs_to_context(a)


def test_node_context_height(graph) -> None:
	ctx = make_node('ctx')
	short, tall = make_node('short'), TallNode('tall')
	for node in (ctx, short, tall):
		graph.add_node(node)

	assert graph.get_node_context_height(ctx) == 0.0

	graph.set_node_position(short, ctx, (0.0, -1.0))
	graph.set_node_position(tall, ctx, (0.0, 4.0))
	assert graph.get_node_context_height(ctx) == pytest.approx(8.0)
	assert graph.get_node_context_height(short) == 0.0
