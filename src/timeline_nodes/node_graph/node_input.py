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

"""The animatable parameter of a node: A standard value, or keyframes interpolated over time.

# Keyframe Storage
Keyframes are owned by an arena, `NodeInput._keyframes`, addressed by their stable `KeyframeID` handle.
The temporal order is kept separately, in `NodeInput._keyframe_order`, which is sorted by strictly ascending time at all times.

# Invalidation
Every mutation reports, through `ct.GraphEvent.ValueChanged`, the smallest time range whose evaluated values may have changed:

- Around a keyframe, the range is bounded by its neighbors (or open-ended, at the edges).
- If the previous keyframe holds its value, the segment before the keyframe never changes, so the range starts at the keyframe itself.
"""

import copy
import itertools
import typing as typ

from timeline_nodes import contracts as ct
from timeline_nodes import math_system as ms
from timeline_nodes import preferences
from timeline_nodes.timing import (
	RATIONAL_MAX,
	RATIONAL_MIN,
	RationalLike,
	TimeRange,
	TimeRangeList,
	to_rational,
)
from timeline_nodes.utils import logger
from timeline_nodes.utils.events import EventEmitter

from . import edges
from .keyframe import KeyframeID, NodeKeyframe

if typ.TYPE_CHECKING:
	from .node import Node

log = logger.get(__name__)

KE = ct.KeyframeEvent


class NodeInput(EventEmitter):
	"""A typed, optionally keyframed value slot of a `Node`.

	Attributes:
		id: Identifier of the input, unique within its node.
			Inputs with equal `id` are "the same parameter", which `copy_values()` relies on.
		data_type: The declared type of every value held by this input.
		node: The node owning this input, if any.
	"""

	def __init__(
		self,
		input_id: str,
		data_type: ct.DataType,
		default_value: typ.Any = None,
		*,
		name: str = '',
		keyframable: bool = True,
	) -> None:
		super().__init__()
		self.id = input_id
		self.data_type = ct.DataType(data_type)
		self.node: Node | None = None
		self._name = name

		self._standard_value = (
			self.data_type.default_value
			if default_value is None
			else self.data_type.coerce(default_value)
		)
		self._keyframable = keyframable
		self._keyframing = False

		# Keyframe Arena
		self._keyframes: dict[KeyframeID, NodeKeyframe] = {}
		self._keyframe_order: list[KeyframeID] = []

		# Bounds
		self._minimum: typ.Any = None
		self._has_minimum = False
		self._maximum: typ.Any = None
		self._has_maximum = False

		# Connections
		self._edge: edges.NodeEdge | None = None
		self._locked = False

	def __repr__(self) -> str:
		return f'{type(self).__name__}({self.id!r}, {self.data_type})'

	####################
	# - Identity
	####################
	@property
	def name(self) -> str:
		return self._name if self._name else 'Input'

	def set_name(self, name: str) -> None:
		self._name = name

	def iter_inputs(self) -> typ.Iterator['NodeInput']:
		"""This input; array inputs also yield their sub-inputs."""
		yield self

	####################
	# - Standard Value
	####################
	@property
	def standard_value(self) -> typ.Any:
		return self._standard_value

	@property
	def is_using_standard_value(self) -> bool:
		return not self._keyframing or not self._keyframe_order

	def set_standard_value(self, value: typ.Any) -> None:
		"""Store a new standard value.

		`ValueChanged` over all time is only reported when the standard value is actually what's being evaluated.

		Raises:
			ValueError: If `value` doesn't match `self.data_type`.
		"""
		self._standard_value = self.data_type.coerce(value)

		if self.is_using_standard_value:
			self._emit_time_range(TimeRange.all_time())

	####################
	# - Flags / Bounds
	####################
	@property
	def is_keyframing(self) -> bool:
		return self._keyframing

	def set_is_keyframing(self, enabled: bool) -> None:
		"""Toggle keyframing.

		Existing keyframes are left alone, and no `ValueChanged` is reported.

		Raises:
			RuntimeError: If keyframing is enabled on an input that isn't keyframable.
		"""
		if enabled and not self._keyframable:
			msg = f'Input "{self.id}" is not keyframable'
			log.error(msg)
			raise RuntimeError(msg)

		self._keyframing = enabled
		self.trigger_event(ct.GraphEvent.KeyframeEnableChanged, self, enabled)

	@property
	def is_keyframable(self) -> bool:
		return self._keyframable

	def set_is_keyframable(self, keyframable: bool) -> None:
		self._keyframable = keyframable

	@property
	def minimum(self) -> typ.Any:
		return self._minimum

	@property
	def has_minimum(self) -> bool:
		return self._has_minimum

	def set_minimum(self, minimum: typ.Any) -> None:
		self._minimum = self.data_type.coerce(minimum)
		self._has_minimum = True

	@property
	def maximum(self) -> typ.Any:
		return self._maximum

	@property
	def has_maximum(self) -> bool:
		return self._has_maximum

	def set_maximum(self, maximum: typ.Any) -> None:
		self._maximum = self.data_type.coerce(maximum)
		self._has_maximum = True

	####################
	# - Connections
	####################
	@property
	def edge(self) -> edges.NodeEdge | None:
		return self._edge

	def attach_edge(self, edge: edges.NodeEdge) -> None:
		"""Record the incoming edge; only called by `edges.connect_edge()`."""
		self._edge = edge

	def detach_edge(self) -> None:
		"""Forget the incoming edge; only called by `edges.disconnect_edge()`."""
		self._edge = None

	def get_connected_output(self) -> edges.NodeOutput | None:
		if self._edge is not None:
			return self._edge.output
		return None

	def get_connected_node(self) -> 'Node | None':
		output = self.get_connected_output()
		if output is not None:
			return output.node
		return None

	@property
	def is_locked(self) -> bool:
		return self._locked

	def set_locked(self, locked: bool) -> None:
		"""Lock (or unlock) the input's connection; a locked input may not be connected or disconnected."""
		self._locked = locked

	####################
	# - Evaluation
	####################
	def value_at_time(self, time: RationalLike) -> typ.Any:
		"""Evaluate the input at `time`.

		- Not keyframing, or no keyframes: The standard value.
		- Before the first/after the last keyframe: That keyframe's value.
		- Exactly on a keyframe, after a `Hold` keyframe, or for a non-interpolable data type: The previous keyframe's value, untouched.
		- Otherwise: Interpolated, as decided by `ms.InterpolationMode.from_keyframe_types()`.
		"""
		if self.is_using_standard_value:
			return self._standard_value

		time = to_rational(time)
		keyframes = self.keyframes

		if time <= keyframes[0].time:
			return keyframes[0].value

		if time >= keyframes[-1].time:
			return keyframes[-1].value

		for before, after in itertools.pairwise(keyframes):
			if not (before.time <= time < after.time):
				continue

			mode = ms.InterpolationMode.from_keyframe_types(before.type, after.type)
			if (
				time == before.time
				or not self.data_type.can_interpolate
				or mode is ms.InterpolationMode.Hold
			):
				return before.value

			duration = after.time - before.time
			elapsed = time - before.time
			if mode is ms.InterpolationMode.Linear:
				return ms.lerp(
					self.data_type, before.value, after.value, float(elapsed / duration)
				)

			return ms.bezier(
				self.data_type,
				mode,
				before.value,
				after.value,
				float(duration),
				float(elapsed),
				out_handle=before.bezier_out,
				in_handle=after.bezier_in,
			)

		## Unreachable, given the bounds checks above.
		return self._standard_value

	####################
	# - Keyframe Queries
	####################
	@property
	def keyframes(self) -> list[NodeKeyframe]:
		"""All keyframes, sorted by ascending time."""
		return [self._keyframes[key_id] for key_id in self._keyframe_order]

	def get_keyframe(self, key_id: KeyframeID) -> NodeKeyframe | None:
		return self._keyframes.get(key_id)

	def index_of_keyframe(self, key: NodeKeyframe) -> int:
		"""Position of `key` in the temporal order, or `-1` if `key` isn't owned by this input."""
		if key.id not in self._keyframes:
			return -1
		return self._keyframe_order.index(key.id)

	def get_keyframe_at_time(self, time: RationalLike) -> NodeKeyframe | None:
		if self.is_using_standard_value:
			return None

		time = to_rational(time)
		for key in self.keyframes:
			if key.time == time:
				return key

		return None

	def has_keyframe_at_time(self, time: RationalLike) -> bool:
		return self.get_keyframe_at_time(time) is not None

	def get_closest_keyframe_to_time(self, time: RationalLike) -> NodeKeyframe | None:
		"""The keyframe nearest to `time`; ties go to the earlier keyframe."""
		if self.is_using_standard_value:
			return None

		time = to_rational(time)
		keyframes = self.keyframes

		if time <= keyframes[0].time:
			return keyframes[0]

		if time >= keyframes[-1].time:
			return keyframes[-1]

		for prev_key, next_key in itertools.pairwise(keyframes):
			if prev_key.time <= time <= next_key.time:
				prev_diff = time - prev_key.time
				next_diff = next_key.time - time
				if next_diff < prev_diff:
					return next_key
				return prev_key

		return None

	def get_best_keyframe_type_for_time(self, time: RationalLike) -> ct.KeyframeType:
		"""Type to suggest for a new keyframe at `time`, taken from the closest keyframe."""
		closest_key = self.get_closest_keyframe_to_time(time)
		if closest_key is not None:
			return closest_key.type

		return preferences.prefs().default_keyframe_type

	####################
	# - Keyframe Mutation
	####################
	def insert_keyframe(self, key: NodeKeyframe) -> None:
		"""Insert `key`, keeping keyframes sorted by time.

		A keyframe is owned by at most one input; remove it from its current owner (or `clone()` it) to insert it elsewhere.
		Reports `KeyframeAdded`, then `ValueChanged` over the range affected by the new keyframe.

		Raises:
			RuntimeError: If the input isn't keyframable, but already has keyframes.
			ValueError: If `key` is already inserted in any input, if another keyframe has the same time, or if its value or handles don't match `self.data_type`.
		"""
		if not self._keyframable and self._keyframe_order:
			msg = f'Input "{self.id}" is not keyframable, but already has keyframes'
			log.error(msg)
			raise RuntimeError(msg)

		if key.is_inserted or key.id in self._keyframes:
			msg = f'Keyframe {key!r} is already inserted in an input, and cannot be inserted in input "{self.id}"'
			log.error(msg)
			raise ValueError(msg)

		self._check_time_is_free(key, key.time)
		value = self.data_type.coerce(key.value)
		self._check_bezier_handle(key.bezier_in)
		self._check_bezier_handle(key.bezier_out)

		# Attach
		key.replace_value(value)
		key.is_inserted = True
		self._keyframes[key.id] = key
		self._insert_keyframe_internal(key)
		self._connect_keyframe(key)

		log.debug('Input "%s": Inserted %s', self.id, key)
		self.trigger_event(ct.GraphEvent.KeyframeAdded, self, key)
		self._emit_range_affected_by_keyframe(key)

	def remove_keyframe(self, key: NodeKeyframe) -> None:
		"""Remove `key`.

		The affected range is computed **before** removal, from the old neighbors.
		Reports `KeyframeRemoved`, then `ValueChanged`.

		Raises:
			RuntimeError: If the input isn't keyframable, keyframing is disabled, or `key` is the only keyframe.
			ValueError: If `key` isn't owned by this input.
		"""
		if not (
			self._keyframable and self._keyframing and len(self._keyframe_order) > 1
		):
			msg = f'Input "{self.id}": Keyframes may only be removed while keyframing, and while more than one keyframe exists'
			log.error(msg)
			raise RuntimeError(msg)

		if key.id not in self._keyframes:
			msg = f'Keyframe {key!r} is not owned by input "{self.id}"'
			log.error(msg)
			raise ValueError(msg)

		time_affected = self.get_range_affected_by_keyframe(key)

		self._disconnect_keyframe(key)
		self._keyframe_order.remove(key.id)
		del self._keyframes[key.id]
		key.is_inserted = False

		log.debug('Input "%s": Removed %s', self.id, key)
		self.trigger_event(ct.GraphEvent.KeyframeRemoved, self, key)
		self._emit_time_range(time_affected)

	def _insert_keyframe_internal(self, key: NodeKeyframe) -> None:
		"""Insert the handle of `key` before the first keyframe with a strictly greater time."""
		for i, key_id in enumerate(self._keyframe_order):
			if self._keyframes[key_id].time > key.time:
				self._keyframe_order.insert(i, key.id)
				return

		self._keyframe_order.append(key.id)

	def _check_time_is_free(self, key: NodeKeyframe, time: RationalLike) -> None:
		for other in self._keyframes.values():
			if other is not key and other.time == time:
				msg = f'Input "{self.id}" already has a keyframe at time {time}'
				log.error(msg)
				raise ValueError(msg)

	def _check_bezier_handle(self, handle: ct.BezierHandle) -> None:
		"""Check that a per-component handle offset has one entry per component of `self.data_type`.

		Scalar offsets apply to every component, and are always valid.
		Scalar data types only accept scalar offsets.

		Raises:
			ValueError: If the handle's value can't be applied to values of `self.data_type`.
		"""
		if not self.data_type.can_interpolate or not isinstance(handle.value, tuple):
			return

		if (
			self.data_type is ct.DataType.Float
			or len(handle.value) != self.data_type.component_count
		):
			msg = f'Input "{self.id}": Bezier handle {handle!r} does not match the components of {self.data_type}'
			log.error(msg)
			raise ValueError(msg)

	####################
	# - Keyframe Events
	####################
	def _connect_keyframe(self, key: NodeKeyframe) -> None:
		key.on(KE.TimeChanging, self._on_keyframe_time_changing)
		key.on(KE.TimeChanged, self._on_keyframe_time_changed)
		key.on(KE.ValueChanging, self._on_keyframe_value_changing)
		key.on(KE.ValueChanged, self._on_keyframe_value_changed)
		key.on(KE.TypeChanged, self._on_keyframe_type_changed)
		key.on(KE.BezierChanging, self._on_keyframe_bezier_changing)
		key.on(KE.BezierChanged, self._on_keyframe_bezier_changed)

	def _disconnect_keyframe(self, key: NodeKeyframe) -> None:
		key.off(KE.TimeChanging, self._on_keyframe_time_changing)
		key.off(KE.TimeChanged, self._on_keyframe_time_changed)
		key.off(KE.ValueChanging, self._on_keyframe_value_changing)
		key.off(KE.ValueChanged, self._on_keyframe_value_changed)
		key.off(KE.TypeChanged, self._on_keyframe_type_changed)
		key.off(KE.BezierChanging, self._on_keyframe_bezier_changing)
		key.off(KE.BezierChanged, self._on_keyframe_bezier_changed)

	def _on_keyframe_time_changing(self, key: NodeKeyframe, new_time: RationalLike) -> None:
		self._check_time_is_free(key, new_time)

	def _on_keyframe_time_changed(self, key: NodeKeyframe, _old_time: RationalLike) -> None:
		"""Re-sort `key` if it passed a neighbor, then invalidate both where it was, and where it is now."""
		index = self.index_of_keyframe(key)
		invalidated = TimeRangeList([self.get_range_around_index(index)])

		prev_key = self._keyframes[self._keyframe_order[index - 1]] if index > 0 else None
		next_key = (
			self._keyframes[self._keyframe_order[index + 1]]
			if index < len(self._keyframe_order) - 1
			else None
		)
		if (prev_key is not None and prev_key.time > key.time) or (
			next_key is not None and next_key.time < key.time
		):
			self._keyframe_order.pop(index)
			self._insert_keyframe_internal(key)
			invalidated.insert(self.get_range_affected_by_keyframe(key))

		for time_range in invalidated:
			self._emit_time_range(time_range)

	def _on_keyframe_value_changing(self, _key: NodeKeyframe, new_value: typ.Any) -> None:
		self.data_type.coerce(new_value)

	def _on_keyframe_value_changed(self, key: NodeKeyframe) -> None:
		## Stored in canonical form.
		key.replace_value(self.data_type.coerce(key.value))
		self._emit_range_affected_by_keyframe(key)

	def _on_keyframe_bezier_changing(
		self, _key: NodeKeyframe, new_handle: ct.BezierHandle
	) -> None:
		self._check_bezier_handle(new_handle)

	def _on_keyframe_bezier_changed(self, key: NodeKeyframe) -> None:
		self._emit_range_affected_by_keyframe(key)

	def _on_keyframe_type_changed(self, key: NodeKeyframe, _old_type: ct.KeyframeType) -> None:
		## With a single keyframe, there's nothing to interpolate.
		if len(self._keyframe_order) <= 1:
			return

		self._emit_time_range(self.get_range_around_index(self.index_of_keyframe(key)))

	####################
	# - Invalidation Ranges
	####################
	def get_range_around_index(self, index: int) -> TimeRange:
		"""The range between the neighbors of the keyframe at `index`, open-ended where there is no neighbor."""
		range_begin = RATIONAL_MIN
		range_end = RATIONAL_MAX

		if len(self._keyframe_order) > 1:
			if index > 0:
				range_begin = self._keyframes[self._keyframe_order[index - 1]].time
			if index < len(self._keyframe_order) - 1:
				range_end = self._keyframes[self._keyframe_order[index + 1]].time

		return TimeRange(range_begin, range_end)

	def get_range_affected_by_keyframe(self, key: NodeKeyframe) -> TimeRange:
		"""The range whose values depend on `key`.

		Like `get_range_around_index()`, except that a preceding `Hold` keyframe shields everything before `key`.

		Raises:
			ValueError: If `key` isn't owned by this input.
		"""
		index = self.index_of_keyframe(key)
		if index == -1:
			msg = f'Keyframe {key!r} is not owned by input "{self.id}"'
			log.error(msg)
			raise ValueError(msg)

		time_range = self.get_range_around_index(index)

		if (
			len(self._keyframe_order) > 1
			and index > 0
			and self._keyframes[self._keyframe_order[index - 1]].type
			is ct.KeyframeType.Hold
		):
			time_range = time_range.with_in(key.time)

		return time_range

	def _emit_time_range(self, time_range: TimeRange) -> None:
		log.debug('Input "%s": Value Changed in %s', self.id, time_range)
		self.trigger_event(ct.GraphEvent.ValueChanged, self, time_range)

	def _emit_range_affected_by_keyframe(self, key: NodeKeyframe) -> None:
		self._emit_time_range(self.get_range_affected_by_keyframe(key))

	####################
	# - Copying
	####################
	@staticmethod
	def copy_values(
		source: 'NodeInput',
		dest: 'NodeInput',
		include_connections: bool = True,
		lock_connections: bool = False,
	) -> None:
		"""Replace every value of `dest` with a deep copy of the values of `source`.

		Copies the standard value, fresh clones of all keyframes, and the keyframing state.
		Array inputs are resized to match, and copied per sub-input.
		Sub-inputs are connected when `include_connections` is set, but never locked.
		Every input involved is checked before anything is altered, so a failed copy leaves `dest` untouched.
		Always finishes by reporting `ValueChanged` over all time on `dest`.

		Parameters:
			source: The input to copy from.
			dest: The input to copy into.
			include_connections: Also connect `dest` (and its sub-inputs) to the outputs that `source` (and its sub-inputs) are connected to.
			lock_connections: Lock `dest` after connecting it.

		Raises:
			ValueError: If `source` and `dest` aren't the same parameter (their `id` differs), or only one is an array.
			RuntimeError: If `source` (or a sub-input) is keyframing, but its destination isn't keyframable; or if a connection must be made to a locked destination.
		"""
		NodeInput._check_copy_values(source, dest, include_connections)
		NodeInput._apply_copy_values(source, dest, include_connections, lock_connections)

	@staticmethod
	def _check_copy_values(
		source: 'NodeInput', dest: 'NodeInput', include_connections: bool
	) -> None:
		"""Check that `copy_values()` can copy `source` into `dest`, recursing into sub-inputs."""
		from .node_input_array import NodeInputArray

		if source.id != dest.id:
			msg = f'Cannot copy values from input "{source.id}" to a different input "{dest.id}"'
			log.error(msg)
			raise ValueError(msg)

		if isinstance(source, NodeInputArray) != isinstance(dest, NodeInputArray):
			msg = f'Cannot copy values between array and non-array inputs ("{source.id}")'
			log.error(msg)
			raise ValueError(msg)

		if source.is_keyframing and not dest.is_keyframable:
			msg = f'Cannot copy keyframes to input "{dest.id}", which is not keyframable'
			log.error(msg)
			raise RuntimeError(msg)

		source_output = source.get_connected_output()
		if (
			include_connections
			and source_output is not None
			and dest.get_connected_output() is not source_output
			and dest.is_locked
		):
			msg = f'Cannot copy connection to locked input "{dest.id}"'
			log.error(msg)
			raise RuntimeError(msg)

		match dest:
			case NodeInputArray():
				for i, src_sub in enumerate(source.sub_inputs):
					if i < dest.size:
						NodeInput._check_copy_values(src_sub, dest.at(i), include_connections)

					## Sub-inputs created by resizing inherit the array's keyframability.
					elif src_sub.is_keyframing and not dest.is_keyframable:
						msg = f'Cannot copy keyframes to sub-input "{src_sub.id}" of "{dest.id}", which is not keyframable'
						log.error(msg)
						raise RuntimeError(msg)

	@staticmethod
	def _apply_copy_values(
		source: 'NodeInput',
		dest: 'NodeInput',
		include_connections: bool,
		lock_connections: bool,
	) -> None:
		from .node_input_array import NodeInputArray

		# Copy Standard Value
		dest._standard_value = copy.deepcopy(source._standard_value)  # noqa: SLF001

		# Copy Keyframes
		for key in dest.keyframes:
			dest._disconnect_keyframe(key)  # noqa: SLF001
			key.is_inserted = False
		dest._keyframes.clear()  # noqa: SLF001
		dest._keyframe_order.clear()  # noqa: SLF001
		for key in source.keyframes:
			key_copy = key.clone()
			key_copy.is_inserted = True
			dest._keyframes[key_copy.id] = key_copy  # noqa: SLF001
			dest._keyframe_order.append(key_copy.id)  # noqa: SLF001
			dest._connect_keyframe(key_copy)  # noqa: SLF001

		# Copy Keyframing State
		dest.set_is_keyframing(source.is_keyframing)

		# Copy Connections
		source_output = source.get_connected_output()
		if include_connections and source_output is not None:
			edges.connect_edge(source_output, dest)
			if lock_connections:
				dest.set_locked(True)

		# Copy Sub-Inputs
		match dest:
			case NodeInputArray():
				dest.set_size(source.size)
				for src_sub, dst_sub in zip(source.sub_inputs, dest.sub_inputs, strict=True):
					NodeInput._apply_copy_values(
						src_sub, dst_sub, include_connections, lock_connections=False
					)

		log.debug('Copied values of input "%s"', source.id)
		dest._emit_time_range(TimeRange.all_time())  # noqa: SLF001
