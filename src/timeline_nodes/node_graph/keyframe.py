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

import copy
import typing as typ
import uuid

from timeline_nodes import contracts as ct
from timeline_nodes.timing import RationalLike, to_finite_rational
from timeline_nodes.timing.rational import Rational
from timeline_nodes.utils.events import EventEmitter

KeyframeID: typ.TypeAlias = uuid.UUID


class NodeKeyframe(EventEmitter):
	"""A timestamped value and interpolation type, sampled by a `NodeInput`.

	A keyframe knows nothing of the input that owns it, only whether it is owned at all.
	Every mutation is announced through `ct.KeyframeEvent`s, which the owning input subscribes to while the keyframe is inserted.

	Attributes:
		id: Stable handle of this keyframe, unique for its lifetime.
			Clones receive a new handle.
		is_inserted: Whether some input currently owns this keyframe.
			A keyframe is owned by at most one input at a time.
	"""

	def __init__(
		self,
		time: RationalLike,
		value: typ.Any,
		keyframe_type: ct.KeyframeType = ct.KeyframeType.Linear,
		*,
		bezier_in: ct.BezierHandle | tuple[float, typ.Any] | None = None,
		bezier_out: ct.BezierHandle | tuple[float, typ.Any] | None = None,
	) -> None:
		super().__init__()
		self.id: KeyframeID = uuid.uuid4()

		self._time: Rational = to_finite_rational(time)
		self._value = value
		self._type = ct.KeyframeType(keyframe_type)
		self._bezier_in = _parse_handle(bezier_in)
		self._bezier_out = _parse_handle(bezier_out)

		self.is_inserted = False

	####################
	# - Time
	####################
	@property
	def time(self) -> Rational:
		return self._time

	def set_time(self, time: RationalLike) -> None:
		"""Move the keyframe in time.

		Raises:
			ValueError: If `time` is infinite, or a `TimeChanging` listener vetoes the move.
		"""
		new_time = to_finite_rational(time)
		if new_time == self._time:
			return

		self.trigger_event(ct.KeyframeEvent.TimeChanging, self, new_time)

		old_time = self._time
		self._time = new_time
		self.trigger_event(ct.KeyframeEvent.TimeChanged, self, old_time)

	####################
	# - Value
	####################
	@property
	def value(self) -> typ.Any:
		return self._value

	def set_value(self, value: typ.Any) -> None:
		"""Change the keyframe's value.

		Raises:
			ValueError: If a `ValueChanging` listener refuses the value.
		"""
		self.trigger_event(ct.KeyframeEvent.ValueChanging, self, value)

		self._value = value
		self.trigger_event(ct.KeyframeEvent.ValueChanged, self)

	def replace_value(self, value: typ.Any) -> None:
		"""Store `value` without notifying anyone.

		Only for the owning input, to store the canonical form of a value that was already validated and announced.
		"""
		self._value = value

	####################
	# - Type
	####################
	@property
	def type(self) -> ct.KeyframeType:
		return self._type

	def set_type(self, keyframe_type: ct.KeyframeType) -> None:
		new_type = ct.KeyframeType(keyframe_type)
		if new_type is self._type:
			return

		old_type = self._type
		self._type = new_type
		self.trigger_event(ct.KeyframeEvent.TypeChanged, self, old_type)

	####################
	# - Bezier Handles
	####################
	@property
	def bezier_in(self) -> ct.BezierHandle:
		return self._bezier_in

	@property
	def bezier_out(self) -> ct.BezierHandle:
		return self._bezier_out

	def set_bezier_in(self, handle: ct.BezierHandle | tuple[float, typ.Any]) -> None:
		"""Change the incoming tangent handle.

		Raises:
			ValueError: If a `BezierChanging` listener refuses the handle.
		"""
		new_handle = _parse_handle(handle)
		self.trigger_event(ct.KeyframeEvent.BezierChanging, self, new_handle)

		self._bezier_in = new_handle
		self.trigger_event(ct.KeyframeEvent.BezierChanged, self)

	def set_bezier_out(
		self, handle: ct.BezierHandle | tuple[float, typ.Any]
	) -> None:
		new_handle = _parse_handle(handle)
		self.trigger_event(ct.KeyframeEvent.BezierChanging, self, new_handle)

		self._bezier_out = new_handle
		self.trigger_event(ct.KeyframeEvent.BezierChanged, self)

	####################
	# - Copying
	####################
	def clone(self) -> typ.Self:
		"""A new keyframe with identical time, value, type and handles, but a fresh `id`, no listeners, and no owner."""
		return NodeKeyframe(
			self._time,
			copy.deepcopy(self._value),
			self._type,
			bezier_in=self._bezier_in,
			bezier_out=self._bezier_out,
		)

	def __repr__(self) -> str:
		return f'NodeKeyframe(time={self._time}, value={self._value!r}, type={self._type})'


def _parse_handle(
	handle: ct.BezierHandle | tuple[float, typ.Any] | None,
) -> ct.BezierHandle:
	if handle is None:
		return ct.BezierHandle()
	return ct.BezierHandle.model_validate(handle)
