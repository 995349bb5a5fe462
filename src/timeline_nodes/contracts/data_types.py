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
import functools
import typing as typ

import numpy as np
import pydantic as pyd

from timeline_nodes.utils.staticproperty import staticproperty


####################
# - Color
####################
class Color(pyd.BaseModel):
	"""RGBA color, with (nominally) `0..1` components.

	Components aren't clamped, so that interpolation and over-bright values round-trip.
	"""

	model_config = pyd.ConfigDict(frozen=True)

	r: float = 0.0
	g: float = 0.0
	b: float = 0.0
	a: float = 1.0

	@pyd.model_validator(mode='before')
	@classmethod
	def _from_sequence(cls, data: typ.Any) -> typ.Any:
		if isinstance(data, tuple | list | np.ndarray):
			components = [float(c) for c in data]
			if len(components) not in (3, 4):
				msg = f'A color needs 3 or 4 components, got {len(components)}'
				raise ValueError(msg)
			return dict(zip('rgba', components, strict=False))
		return data

	def as_array(self) -> np.ndarray:
		return np.array([self.r, self.g, self.b, self.a], dtype=np.float64)


####################
# - Data Type
####################
class DataType(enum.StrEnum):
	"""The declared type of a `NodeInput`'s values.

	Only `DataType.interpolable` types are ever interpolated between keyframes; all others hold the previous keyframe's value.

	Attributes:
		Float: A `float`.
		Int: An `int`.
		Boolean: A `bool`.
		Vec2: A `tuple` of 2 `float`s.
		Vec3: A `tuple` of 3 `float`s.
		Vec4: A `tuple` of 4 `float`s.
		Color: A `Color`.
		Text: A `str`.
		Other: Any opaque object.
	"""

	Float = enum.auto()
	Int = enum.auto()
	Boolean = enum.auto()
	Vec2 = enum.auto()
	Vec3 = enum.auto()
	Vec4 = enum.auto()
	Color = enum.auto()
	Text = enum.auto()
	Other = enum.auto()

	@staticproperty
	def interpolable() -> frozenset[typ.Self]:
		return frozenset(
			{
				DataType.Float,
				DataType.Vec2,
				DataType.Vec3,
				DataType.Vec4,
				DataType.Color,
			}
		)

	####################
	# - Properties
	####################
	@property
	def can_interpolate(self) -> bool:
		return self in DataType.interpolable

	@property
	def python_type(self) -> typ.Any:
		DT = DataType
		return {
			DT.Float: float,
			DT.Int: int,
			DT.Boolean: bool,
			DT.Vec2: tuple[float, float],
			DT.Vec3: tuple[float, float, float],
			DT.Vec4: tuple[float, float, float, float],
			DT.Color: Color,
			DT.Text: str,
			DT.Other: typ.Any,
		}[self]

	@property
	def default_value(self) -> typ.Any:
		DT = DataType
		return {
			DT.Float: 0.0,
			DT.Int: 0,
			DT.Boolean: False,
			DT.Vec2: (0.0, 0.0),
			DT.Vec3: (0.0, 0.0, 0.0),
			DT.Vec4: (0.0, 0.0, 0.0, 0.0),
			DT.Color: Color(),
			DT.Text: '',
			DT.Other: None,
		}[self]

	@property
	def component_count(self) -> int | None:
		"""Number of interpolated components of a value, or `None` if the type isn't interpolable."""
		DT = DataType
		return {
			DT.Float: 1,
			DT.Vec2: 2,
			DT.Vec3: 3,
			DT.Vec4: 4,
			DT.Color: 4,
		}.get(self)

	####################
	# - Methods
	####################
	def coerce(self, value: typ.Any) -> typ.Any:
		"""Validate `value` against this data type, returning it in canonical form.

		Raises:
			pydantic.ValidationError: If `value` can't be interpreted as this data type.
				This is a `ValueError`.
		"""
		return _type_adapter(self).validate_python(value)


@functools.cache
def _type_adapter(data_type: DataType) -> pyd.TypeAdapter:
	return pyd.TypeAdapter(data_type.python_type)
