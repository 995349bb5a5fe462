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

import dataclasses
import typing as typ

from . import rational
from .rational import RATIONAL_MAX, RATIONAL_MIN, RationalLike, TimeBound


####################
# - Time Range
####################
@dataclasses.dataclass(frozen=True)
class TimeRange:
	"""A closed interval `[in_, out]` of time.

	Either bound may be an infinite sentinel.
	Bounds given in reverse are swapped, so `in_ <= out` always holds.

	Attributes:
		in_: The lower bound.
		out: The upper bound.
	"""

	in_: TimeBound = RATIONAL_MIN
	out: TimeBound = RATIONAL_MAX

	def __post_init__(self) -> None:
		in_ = rational.to_rational(self.in_)
		out = rational.to_rational(self.out)
		if out < in_:
			in_, out = out, in_

		object.__setattr__(self, 'in_', in_)
		object.__setattr__(self, 'out', out)

	@classmethod
	def all_time(cls) -> typ.Self:
		"""The range `(-inf, +inf)`, invalidating everything."""
		return cls(RATIONAL_MIN, RATIONAL_MAX)

	####################
	# - Properties
	####################
	@property
	def length(self) -> TimeBound:
		return self.out - self.in_

	@property
	def is_infinite(self) -> bool:
		return rational.is_infinite(self.in_) or rational.is_infinite(self.out)

	####################
	# - Methods
	####################
	def contains(self, time: RationalLike) -> bool:
		return self.in_ <= rational.to_rational(time) <= self.out

	def overlaps(self, other: typ.Self) -> bool:
		"""Whether the ranges share at least one point; touching ranges overlap."""
		return self.in_ <= other.out and other.in_ <= self.out

	def combined(self, other: typ.Self) -> typ.Self:
		"""The smallest range containing both ranges."""
		return TimeRange(min(self.in_, other.in_), max(self.out, other.out))

	def with_in(self, in_: RationalLike) -> typ.Self:
		return TimeRange(in_, self.out)

	def with_out(self, out: RationalLike) -> typ.Self:
		return TimeRange(self.in_, out)

	def __str__(self) -> str:
		return f'[{self.in_}, {self.out}]'


####################
# - Time Range List
####################
class TimeRangeList:
	"""A union of `TimeRange`s, kept as a sorted list of disjoint ranges.

	Overlapping or touching ranges are merged on insertion.
	"""

	def __init__(self, ranges: typ.Iterable[TimeRange] = ()) -> None:
		self._ranges: list[TimeRange] = []
		for time_range in ranges:
			self.insert(time_range)

	def insert(self, time_range: TimeRange) -> None:
		merged = time_range
		kept: list[TimeRange] = []
		for existing in self._ranges:
			if existing.overlaps(merged):
				merged = existing.combined(merged)
			else:
				kept.append(existing)

		kept.append(merged)
		self._ranges = sorted(kept, key=lambda r: r.in_)

	def contains(self, time: RationalLike) -> bool:
		return any(time_range.contains(time) for time_range in self._ranges)

	def __iter__(self) -> typ.Iterator[TimeRange]:
		return iter(list(self._ranges))

	def __len__(self) -> int:
		return len(self._ranges)

	def __eq__(self, other: object) -> bool:
		if isinstance(other, TimeRangeList):
			return self._ranges == other._ranges
		if isinstance(other, list | tuple):
			return self._ranges == list(other)
		return NotImplemented

	__hash__ = None

	def __repr__(self) -> str:
		return f'{type(self).__name__}({self._ranges!r})'
