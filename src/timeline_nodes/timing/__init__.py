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

from .rational import (
	RATIONAL_MAX,
	RATIONAL_MIN,
	Rational,
	RationalLike,
	TimeBound,
	is_infinite,
	to_finite_rational,
	to_rational,
)
from .time_range import TimeRange, TimeRangeList

__all__ = [
	'RATIONAL_MAX',
	'RATIONAL_MIN',
	'Rational',
	'RationalLike',
	'TimeBound',
	'is_infinite',
	'to_finite_rational',
	'to_rational',
	'TimeRange',
	'TimeRangeList',
]
