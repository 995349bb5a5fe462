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

"""Exact, fraction-based time.

Times are plain `fractions.Fraction`s, in seconds.
The only non-`Fraction` times are the sentinels `RATIONAL_MIN` and `RATIONAL_MAX`, which bound open-ended ranges; as `float` infinities, they are totally ordered against every `Fraction`.

Attributes:
	RATIONAL_MIN: Negative infinity, for ranges open to the past.
	RATIONAL_MAX: Positive infinity, for ranges open to the future.
"""

import math
import numbers
import typing as typ
from fractions import Fraction

Rational: typ.TypeAlias = Fraction
RationalLike: typ.TypeAlias = Fraction | int | float | str
TimeBound: typ.TypeAlias = Fraction | float

RATIONAL_MIN: typ.Final[float] = -math.inf
RATIONAL_MAX: typ.Final[float] = math.inf


def to_rational(value: RationalLike) -> TimeBound:
	"""Exactly convert `value` to a time.

	Notes:
		Finite `float`s are converted through their shortest `repr`, so that ex. `0.1` becomes `1/10` rather than its binary approximation.

	Raises:
		ValueError: If `value` is `NaN`, a `bool`, or otherwise can't be read as a rational.
	"""
	match value:
		case Fraction():
			return value
		case bool():
			msg = f'Refusing to interpret bool {value} as a time'
			raise ValueError(msg)
		case int():
			return Fraction(value)
		case float() if math.isnan(value):
			msg = 'NaN is not a valid time'
			raise ValueError(msg)
		case float() if math.isinf(value):
			return value
		case float():
			return Fraction(repr(value))
		case numbers.Rational():
			return Fraction(value.numerator, value.denominator)
		case str():
			return Fraction(value)
		case _:
			msg = f'Cannot interpret {value!r} ({type(value)}) as a time'
			raise ValueError(msg)


def to_finite_rational(value: RationalLike) -> Fraction:
	"""Like `to_rational()`, but also refuse the infinite sentinels.

	Raises:
		ValueError: If `value` is infinite, or can't be read as a rational.
	"""
	time = to_rational(value)
	if is_infinite(time):
		msg = f'Expected a finite time, got {time}'
		raise ValueError(msg)
	return time


def is_infinite(time: TimeBound) -> bool:
	return isinstance(time, float) and math.isinf(time)
