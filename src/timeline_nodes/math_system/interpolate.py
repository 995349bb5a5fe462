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

"""Interpolation of keyframed values.

Values are converted to `numpy` component arrays, interpolated, and converted back; this makes scalars, vectors and colors share one code path.

Curves live in `(time, value)` space: Bezier control points are the keyframes themselves, offset by their `BezierHandle`s.
Since time must stay monotonic along a segment, handle time offsets are clamped into the segment, and the curve parameter for a given time is found as the real root of the curve's time polynomial.
"""

import enum
import typing as typ

import numpy as np

from timeline_nodes.contracts import BezierHandle, Color, DataType, KeyframeType

ROOT_TOLERANCE: float = 1e-4
RESIDUAL_TOLERANCE: float = 1e-12
BISECTION_STEPS: int = 64


class InterpolationMode(enum.StrEnum):
	"""How a segment between two adjacent keyframes is interpolated.

	Attributes:
		Hold: The segment holds the earlier keyframe's value.
		Linear: Straight line between the keyframes.
		QuadraticOut: Quadratic Bezier, whose control point is the earlier keyframe's outgoing handle.
		QuadraticIn: Quadratic Bezier, whose control point is the later keyframe's incoming handle.
		Cubic: Cubic Bezier, using both of the above handles.
	"""

	Hold = enum.auto()
	Linear = enum.auto()
	QuadraticOut = enum.auto()
	QuadraticIn = enum.auto()
	Cubic = enum.auto()

	@staticmethod
	def from_keyframe_types(
		before: KeyframeType, after: KeyframeType
	) -> typ.Self:
		"""Deduce the segment interpolation from the types of its bounding keyframes.

		Only the earlier keyframe decides `Hold`; a later `Hold` keyframe contributes no incoming handle.
		"""
		KT = KeyframeType
		IM = InterpolationMode
		match (before, after):
			case (KT.Hold, _):
				return IM.Hold
			case (KT.Bezier, KT.Bezier):
				return IM.Cubic
			case (KT.Bezier, _):
				return IM.QuadraticOut
			case (_, KT.Bezier):
				return IM.QuadraticIn
			case _:
				return IM.Linear


####################
# - Value <-> Components
####################
def to_components(data_type: DataType, value: typ.Any) -> np.ndarray:
	"""Convert an interpolable value to a 1D `float64` component array.

	Raises:
		ValueError: If `data_type` isn't interpolable.
	"""
	match data_type:
		case DataType.Float:
			return np.array([float(value)], dtype=np.float64)
		case DataType.Vec2 | DataType.Vec3 | DataType.Vec4:
			return np.asarray(value, dtype=np.float64)
		case DataType.Color:
			return Color.model_validate(value).as_array()
		case (
			DataType.Int
			| DataType.Boolean
			| DataType.Text
			| DataType.Other
		):
			msg = f'Values of data type "{data_type}" have no interpolable components'
			raise ValueError(msg)


def from_components(data_type: DataType, components: np.ndarray) -> typ.Any:
	"""Inverse of `to_components()`."""
	match data_type:
		case DataType.Float:
			return float(components[0])
		case DataType.Vec2 | DataType.Vec3 | DataType.Vec4:
			return tuple(float(c) for c in components)
		case DataType.Color:
			return Color.model_validate(components)
		case (
			DataType.Int
			| DataType.Boolean
			| DataType.Text
			| DataType.Other
		):
			msg = f'Values of data type "{data_type}" have no interpolable components'
			raise ValueError(msg)


####################
# - Interpolation
####################
def lerp(
	data_type: DataType, before: typ.Any, after: typ.Any, fraction: float
) -> typ.Any:
	"""Linearly interpolate between two values of `data_type`.

	Non-interpolable data types return `before`, unchanged.
	"""
	if not data_type.can_interpolate:
		return before

	v0 = to_components(data_type, before)
	v1 = to_components(data_type, after)
	return from_components(data_type, v0 + (v1 - v0) * fraction)


def _solve_curve_parameter(coeffs: list[float], time: float) -> float:
	"""Find the curve parameter `s ∈ [0, 1]` at which the time polynomial (highest power first) equals `time`.

	If several roots lie in `[0, 1]`, the earliest is chosen.
	Roots that don't reproduce `time` closely enough (ex. the smeared roots of a near-repeated root) are replaced by bisection, which is valid since time never decreases along a segment.
	"""
	scale = max(abs(c) for c in coeffs) or 1.0
	shifted = [*coeffs[:-1], coeffs[-1] - time]
	candidates = sorted(
		float(np.clip(root.real, 0.0, 1.0))
		for root in np.roots(shifted)
		if abs(root.imag) <= ROOT_TOLERANCE
		and -ROOT_TOLERANCE <= root.real <= 1.0 + ROOT_TOLERANCE
	)
	for s in candidates:
		if abs(np.polyval(coeffs, s) - time) <= RESIDUAL_TOLERANCE * scale:
			return s

	return _bisect_curve_parameter(coeffs, time)


def _bisect_curve_parameter(coeffs: list[float], time: float) -> float:
	"""Earliest `s ∈ [0, 1]` at which the non-decreasing time polynomial reaches `time`."""
	s_lo, s_hi = 0.0, 1.0
	for _ in range(BISECTION_STEPS):
		s_mid = (s_lo + s_hi) / 2
		if np.polyval(coeffs, s_mid) < time:
			s_lo = s_mid
		else:
			s_hi = s_mid

	return s_hi


def _handle_offset(handle: BezierHandle, shape: tuple[int, ...]) -> np.ndarray:
	return np.broadcast_to(
		np.asarray(handle.value, dtype=np.float64), shape
	).astype(np.float64)


def bezier(  # noqa: PLR0913
	data_type: DataType,
	mode: InterpolationMode,
	before: typ.Any,
	after: typ.Any,
	duration: float,
	elapsed: float,
	*,
	out_handle: BezierHandle,
	in_handle: BezierHandle,
) -> typ.Any:
	"""Evaluate a quadratic/cubic Bezier segment between two keyframed values.

	Parameters:
		data_type: The data type of both values.
		mode: One of `QuadraticOut`, `QuadraticIn` or `Cubic`.
		before: The value of the earlier keyframe.
		after: The value of the later keyframe.
		duration: Time between the two keyframes, in seconds (`> 0`).
		elapsed: Time since the earlier keyframe, in seconds (`0 <= elapsed <= duration`).
		out_handle: Outgoing handle of the earlier keyframe.
		in_handle: Incoming handle of the later keyframe.

	Raises:
		ValueError: If `mode` isn't a Bezier mode.
	"""
	if not data_type.can_interpolate:
		return before

	v0 = to_components(data_type, before)
	v3 = to_components(data_type, after)

	# Control Points
	## Time offsets are clamped into the segment, to keep time monotonic.
	x1 = float(np.clip(out_handle.time, 0.0, duration))
	x2 = duration + float(np.clip(in_handle.time, -duration, 0.0))
	y1 = v0 + _handle_offset(out_handle, v0.shape)
	y2 = v3 + _handle_offset(in_handle, v3.shape)

	IM = InterpolationMode
	match mode:
		case IM.Cubic:
			# x(s) = 3(1-s)²s·x1 + 3(1-s)s²·x2 + s³·T
			coeffs = [3 * x1 - 3 * x2 + duration, -6 * x1 + 3 * x2, 3 * x1, 0.0]
			s = _solve_curve_parameter(coeffs, elapsed)
			r = 1.0 - s
			value = r**3 * v0 + 3 * r**2 * s * y1 + 3 * r * s**2 * y2 + s**3 * v3

		case IM.QuadraticOut | IM.QuadraticIn:
			xc, yc = (x1, y1) if mode is IM.QuadraticOut else (x2, y2)

			# x(s) = 2(1-s)s·xc + s²·T
			coeffs = [duration - 2 * xc, 2 * xc, 0.0]
			s = _solve_curve_parameter(coeffs, elapsed)
			r = 1.0 - s
			value = r**2 * v0 + 2 * r * s * yc + s**2 * v3

		case IM.Hold | IM.Linear:
			msg = f'Interpolation mode "{mode}" is not a Bezier mode'
			raise ValueError(msg)

	return from_components(data_type, value)
