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

"""A graph of processing nodes, whose inputs hold either a constant value or keyframes interpolated over time.

Every edit reports exactly the span of time whose evaluated values it may have changed, as a `contracts.GraphEvent.ValueChanged` notification.

Attributes:
	ct: Shared enums and models (data types, events, keyframe types, positions).
	ms: Interpolation math.
"""

from . import contracts as ct
from . import math_system as ms
from . import preferences, timing
from .node_graph import (
	Node,
	NodeEdge,
	NodeGraph,
	NodeInput,
	NodeInputArray,
	NodeKeyframe,
	NodeOutput,
	connect_edge,
	disconnect_edge,
)
from .timing import TimeRange, TimeRangeList

__all__ = [
	'ct',
	'ms',
	'preferences',
	'timing',
	'Node',
	'NodeEdge',
	'NodeGraph',
	'NodeInput',
	'NodeInputArray',
	'NodeKeyframe',
	'NodeOutput',
	'connect_edge',
	'disconnect_edge',
	'TimeRange',
	'TimeRangeList',
]
