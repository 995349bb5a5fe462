import pytest

from timeline_nodes.utils.events import EventEmitter, relay_events, unrelay_events


def test_listeners_run_in_registration_order() -> None:
	emitter = EventEmitter()
	calls = []
	emitter.on('changed', lambda x: calls.append(('a', x)))
	emitter.on('changed', lambda x: calls.append(('b', x)))

	emitter.trigger_event('changed', 1)
	assert calls == [('a', 1), ('b', 1)]


def test_off_unregisters_and_tolerates_unknown() -> None:
	emitter = EventEmitter()
	calls = []
	listener = emitter.on('changed', calls.append)

	emitter.off('changed', listener)
	emitter.off('changed', listener)
	emitter.off('never-registered', listener)

	emitter.trigger_event('changed', 1)
	assert calls == []
	assert emitter.listener_count('changed') == 0
	assert emitter.listener_count('never-registered') == 0


def test_listener_exceptions_propagate() -> None:
	emitter = EventEmitter()

	def veto(*_) -> None:
		msg = 'vetoed'
		raise ValueError(msg)

	emitter.on('changing', veto)
	with pytest.raises(ValueError, match='vetoed'):
		emitter.trigger_event('changing')


def test_unregistering_during_dispatch() -> None:
	emitter = EventEmitter()
	calls = []

	def first() -> None:
		calls.append('first')
		emitter.off('changed', second)

	def second() -> None:
		calls.append('second')

	emitter.on('changed', first)
	emitter.on('changed', second)

	emitter.trigger_event('changed')
	emitter.trigger_event('changed')
	assert calls == ['first', 'second', 'first']


def test_relay_and_unrelay() -> None:
	source = EventEmitter()
	target = EventEmitter()
	calls = []
	target.on('changed', lambda *args: calls.append(args))

	relays = relay_events(source, target, ['changed'])
	source.trigger_event('changed', 1, 2)
	assert calls == [(1, 2)]

	unrelay_events(source, relays)
	source.trigger_event('changed', 3, 4)
	assert calls == [(1, 2)]
	assert source.listener_count('changed') == 0
