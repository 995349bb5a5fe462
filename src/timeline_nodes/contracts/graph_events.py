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

import enum
import typing as typ

from timeline_nodes.utils.staticproperty import staticproperty


class GraphEvent(enum.StrEnum):
	"""Notifications emitted by inputs, nodes and graphs.

	Input-level events are relayed, with unchanged arguments, by the owning node; the graph relays a subset of them.

	Attributes:
		NodeAdded: `(node)`, after the node is fully registered in a graph.
		NodeRemoved: `(node)`, after every trace of the node was pruned from a graph.
		InputConnected: `(output, input)`, after an edge was made.
		InputDisconnected: `(output, input)`, after an edge was removed.
		ValueChanged: `(input, time_range)`, whenever evaluated values within `time_range` may have changed.
		NodePositionAdded: `(node, context, position)`, after a position was set.
		NodePositionRemoved: `(node, context)`, after a position was removed.
		KeyframeAdded: `(input, keyframe)`, after a keyframe was inserted.
		KeyframeRemoved: `(input, keyframe)`, after a keyframe was removed.
		KeyframeEnableChanged: `(input, enabled)`, after keyframing was toggled.
		SizeChanged: `(input_array, size)`, after an array input was resized.
	"""

	# Graph Structure
	NodeAdded = enum.auto()
	NodeRemoved = enum.auto()
	InputConnected = enum.auto()
	InputDisconnected = enum.auto()

	# Data
	ValueChanged = enum.auto()

	# Layout
	NodePositionAdded = enum.auto()
	NodePositionRemoved = enum.auto()

	# Keyframes
	KeyframeAdded = enum.auto()
	KeyframeRemoved = enum.auto()
	KeyframeEnableChanged = enum.auto()

	# Arrays
	SizeChanged = enum.auto()

	@staticproperty
	def input_events() -> frozenset[typ.Self]:
		"""Events emitted by a `NodeInput`, which its owners relay."""
		GE = GraphEvent
		return frozenset(
			{
				GE.InputConnected,
				GE.InputDisconnected,
				GE.ValueChanged,
				GE.KeyframeAdded,
				GE.KeyframeRemoved,
				GE.KeyframeEnableChanged,
				GE.SizeChanged,
			}
		)


class KeyframeEvent(enum.StrEnum):
	"""Notifications emitted by a single keyframe; each carries the keyframe as first argument.

	`*Changing` events run **before** the change is applied: A listener may veto the change by raising.

	Attributes:
		TimeChanging: `(keyframe, new_time)`.
		TimeChanged: `(keyframe, old_time)`.
		ValueChanging: `(keyframe, new_value)`.
		ValueChanged: `(keyframe)`.
		TypeChanged: `(keyframe, old_type)`.
		BezierChanging: `(keyframe, new_handle)`, before either tangent handle changes.
		BezierChanged: `(keyframe)`, after either tangent handle changed.
	"""

	TimeChanging = enum.auto()
	TimeChanged = enum.auto()
	ValueChanging = enum.auto()
	ValueChanged = enum.auto()
	TypeChanged = enum.auto()
	BezierChanging = enum.auto()
	BezierChanged = enum.auto()
