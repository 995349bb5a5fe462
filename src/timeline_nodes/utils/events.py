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

"""A minimal, synchronous observer registry used by keyframes, inputs, nodes and graphs.

Listeners are invoked in registration order, before the mutating call returns.
Exceptions raised by a listener propagate to whoever triggered the event.
"""

import functools
import typing as typ
from collections import defaultdict

Listener: typ.TypeAlias = typ.Callable[..., None]


class EventEmitter:
	"""Mixin holding per-event listener lists.

	Attributes:
		_listeners: Map from an event (any hashable, usually a `StrEnum`) to its listeners, in registration order.
	"""

	def __init__(self) -> None:
		self._listeners: defaultdict[typ.Hashable, list[Listener]] = defaultdict(list)

	def on(self, event: typ.Hashable, listener: Listener) -> Listener:
		"""Register `listener` to be called whenever `event` is triggered.

		Registering the same listener twice makes it run twice.

		Returns:
			The listener, so that `on()` can be used as a decorator.
		"""
		self._listeners[event].append(listener)
		return listener

	def off(self, event: typ.Hashable, listener: Listener) -> None:
		"""Unregister one registration of `listener` from `event`.

		Unregistering a listener that isn't registered does nothing.
		"""
		listeners = self._listeners.get(event)
		if listeners is not None and listener in listeners:
			listeners.remove(listener)
			if not listeners:
				del self._listeners[event]

	def listener_count(self, event: typ.Hashable) -> int:
		return len(self._listeners.get(event, ()))

	def trigger_event(self, event: typ.Hashable, *args: typ.Any) -> None:
		"""Synchronously call every listener of `event` with `args`.

		The listener list is copied first, so listeners may (un)register during dispatch without affecting the current dispatch.
		"""
		for listener in list(self._listeners.get(event, ())):
			listener(*args)


####################
# - Relaying
####################
def relay_events(
	source: EventEmitter, target: EventEmitter, events: typ.Iterable[typ.Hashable]
) -> dict[typ.Hashable, Listener]:
	"""Re-trigger each of `events` on `target`, with unchanged arguments, whenever `source` triggers it.

	Returns:
		The registered relay listeners by event, to be passed to `unrelay_events()`.
	"""
	relays = {event: functools.partial(target.trigger_event, event) for event in events}
	for event, relay in relays.items():
		source.on(event, relay)

	return relays


def unrelay_events(
	source: EventEmitter, relays: dict[typ.Hashable, Listener]
) -> None:
	"""Undo `relay_events()`."""
	for event, relay in relays.items():
		source.off(event, relay)
