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

import pydantic as pyd


class KeyframeType(enum.StrEnum):
	"""How the value stream is interpolated away from a keyframe.

	Attributes:
		Hold: The keyframe's value is held, unchanged, until the next keyframe.
		Linear: Straight-line interpolation towards the next keyframe.
		Bezier: Curve-based interpolation, shaped by the keyframe's `BezierHandle`s.
	"""

	Hold = enum.auto()
	Linear = enum.auto()
	Bezier = enum.auto()


class BezierHandle(pyd.BaseModel):
	"""A tangent handle of a keyframe, relative to the keyframe's own `(time, value)`.

	Attributes:
		time: Offset along the time axis, in seconds.
			Incoming handles are expected to be `<= 0`, outgoing handles `>= 0`; out-of-segment offsets are clamped on evaluation.
		value: Offset along the value axis.
			A scalar applies to every component of vector-like values; a tuple gives one offset per component.
	"""

	model_config = pyd.ConfigDict(frozen=True)

	time: float = 0.0
	value: float | tuple[float, ...] = 0.0

	@pyd.model_validator(mode='before')
	@classmethod
	def _from_pair(cls, data: typ.Any) -> typ.Any:
		if isinstance(data, tuple | list) and len(data) == 2:  # noqa: PLR2004
			return {'time': data[0], 'value': data[1]}
		return data
