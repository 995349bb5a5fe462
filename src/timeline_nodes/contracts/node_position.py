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

import typing as typ

import pydantic as pyd


class NodePosition(pyd.BaseModel):
	"""Where a node is drawn within a context; purely presentational."""

	model_config = pyd.ConfigDict(frozen=True)

	x: float = 0.0
	y: float = 0.0

	@pyd.model_validator(mode='before')
	@classmethod
	def _from_pair(cls, data: typ.Any) -> typ.Any:
		if isinstance(data, tuple | list) and len(data) == 2:  # noqa: PLR2004
			return {'x': data[0], 'y': data[1]}
		return data
