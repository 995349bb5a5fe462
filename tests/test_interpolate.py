import numpy as np
import pytest

from timeline_nodes import contracts as ct
from timeline_nodes import math_system as ms

DT = ct.DataType
KT = ct.KeyframeType
IM = ms.InterpolationMode


@pytest.mark.parametrize(
	('before', 'after', 'expected'),
	[
		(KT.Hold, KT.Linear, IM.Hold),
		(KT.Hold, KT.Bezier, IM.Hold),
		(KT.Linear, KT.Linear, IM.Linear),
		(KT.Linear, KT.Hold, IM.Linear),
		(KT.Bezier, KT.Bezier, IM.Cubic),
		(KT.Bezier, KT.Linear, IM.QuadraticOut),
		(KT.Bezier, KT.Hold, IM.QuadraticOut),
		(KT.Linear, KT.Bezier, IM.QuadraticIn),
	],
)
def test_mode_from_keyframe_types(before, after, expected) -> None:
	assert IM.from_keyframe_types(before, after) is expected


def test_lerp_scalar_and_vectors() -> None:
	assert ms.lerp(DT.Float, 0.0, 100.0, 0.25) == pytest.approx(25.0)
	assert ms.lerp(DT.Vec2, (0.0, 10.0), (10.0, 0.0), 0.5) == pytest.approx((5.0, 5.0))
	assert ms.lerp(DT.Vec4, (0, 0, 0, 0), (4, 8, 12, 16), 0.25) == pytest.approx(
		(1.0, 2.0, 3.0, 4.0)
	)


def test_lerp_color() -> None:
	color = ms.lerp(
		DT.Color, ct.Color(r=0.0, g=1.0, b=0.0), ct.Color(r=1.0, g=0.0, b=0.0, a=0.0), 0.5
	)
	assert isinstance(color, ct.Color)
	assert (color.r, color.g, color.b, color.a) == pytest.approx((0.5, 0.5, 0.0, 0.5))


@pytest.mark.parametrize('data_type', [DT.Int, DT.Boolean, DT.Text, DT.Other])
def test_lerp_non_interpolable_holds(data_type) -> None:
	before = data_type.default_value
	assert ms.lerp(data_type, before, object(), 0.9) is before


@pytest.mark.parametrize('mode', [IM.Cubic, IM.QuadraticOut, IM.QuadraticIn])
@pytest.mark.parametrize('elapsed', [0.5, 2.5, 5.0, 9.0])
def test_zero_handles_are_linear(mode, elapsed) -> None:
	value = ms.bezier(
		DT.Float,
		mode,
		0.0,
		100.0,
		10.0,
		elapsed,
		out_handle=ct.BezierHandle(),
		in_handle=ct.BezierHandle(),
	)
	assert value == pytest.approx(elapsed * 10.0, abs=1e-6)


def test_cubic_ease_in_out_is_symmetric() -> None:
	kwargs = {
		'out_handle': ct.BezierHandle(time=5.0, value=0.0),
		'in_handle': ct.BezierHandle(time=-5.0, value=0.0),
	}
	early = ms.bezier(DT.Float, IM.Cubic, 0.0, 100.0, 10.0, 2.0, **kwargs)
	middle = ms.bezier(DT.Float, IM.Cubic, 0.0, 100.0, 10.0, 5.0, **kwargs)
	late = ms.bezier(DT.Float, IM.Cubic, 0.0, 100.0, 10.0, 8.0, **kwargs)

	## Slow start, slow end.
	assert early < 20.0
	assert middle == pytest.approx(50.0, abs=1e-6)
	assert early + late == pytest.approx(100.0, abs=1e-6)


def test_bezier_hits_endpoints() -> None:
	kwargs = {
		'out_handle': ct.BezierHandle(time=3.0, value=40.0),
		'in_handle': ct.BezierHandle(time=-1.0, value=-10.0),
	}
	assert ms.bezier(DT.Float, IM.Cubic, 0.0, 100.0, 10.0, 0.0, **kwargs) == pytest.approx(0.0, abs=1e-6)
	assert ms.bezier(DT.Float, IM.Cubic, 0.0, 100.0, 10.0, 10.0, **kwargs) == pytest.approx(100.0, abs=1e-6)


def test_bezier_value_handle_overshoots() -> None:
	value = ms.bezier(
		DT.Float,
		IM.QuadraticOut,
		0.0,
		0.0,
		10.0,
		5.0,
		out_handle=ct.BezierHandle(time=5.0, value=10.0),
		in_handle=ct.BezierHandle(),
	)
	## Control point at (5, 10), endpoints at 0: the midpoint sits halfway up.
	assert value == pytest.approx(5.0, abs=1e-6)


def test_bezier_per_component_handles() -> None:
	value = ms.bezier(
		DT.Vec2,
		IM.QuadraticOut,
		(0.0, 0.0),
		(0.0, 0.0),
		10.0,
		5.0,
		out_handle=ct.BezierHandle(time=5.0, value=(10.0, -10.0)),
		in_handle=ct.BezierHandle(),
	)
	assert value == pytest.approx((5.0, -5.0), abs=1e-6)


def test_bezier_clamps_handle_times() -> None:
	## Handles reaching past the segment behave like handles ending at its bounds.
	clamped = ms.bezier(
		DT.Float,
		IM.Cubic,
		0.0,
		100.0,
		10.0,
		3.0,
		out_handle=ct.BezierHandle(time=50.0),
		in_handle=ct.BezierHandle(time=-50.0),
	)
	bounded = ms.bezier(
		DT.Float,
		IM.Cubic,
		0.0,
		100.0,
		10.0,
		3.0,
		out_handle=ct.BezierHandle(time=10.0),
		in_handle=ct.BezierHandle(time=-10.0),
	)
	assert clamped == pytest.approx(bounded)


def _flat_middle_cubic(elapsed: float) -> float:
	## Time along this curve is `5(2s - 1)³ + 5`, which stalls at its midpoint.
	return ms.bezier(
		DT.Float,
		IM.Cubic,
		0.0,
		100.0,
		10.0,
		elapsed,
		out_handle=ct.BezierHandle(time=10.0, value=40.0),
		in_handle=ct.BezierHandle(time=-10.0),
	)


def test_bezier_resolves_repeated_time_root() -> None:
	assert _flat_middle_cubic(5.0) == pytest.approx(65.0, abs=1e-6)


@pytest.mark.parametrize('elapsed', [5.0 - 1e-6, 5.0 + 1e-6, 5.0 + 1e-3, 2.5, 9.0])
def test_bezier_near_repeated_time_root(elapsed) -> None:
	s = 0.5 + np.cbrt((elapsed - 5.0) / 5.0) / 2
	r = 1.0 - s
	expected = 3 * r**2 * s * 40.0 + 3 * r * s**2 * 100.0 + s**3 * 100.0

	assert _flat_middle_cubic(elapsed) == pytest.approx(expected, abs=0.05)


@pytest.mark.parametrize('mode', [IM.Hold, IM.Linear])
def test_bezier_rejects_non_bezier_modes(mode) -> None:
	with pytest.raises(ValueError, match='not a Bezier mode'):
		ms.bezier(
			DT.Float,
			mode,
			0.0,
			1.0,
			1.0,
			0.5,
			out_handle=ct.BezierHandle(),
			in_handle=ct.BezierHandle(),
		)
