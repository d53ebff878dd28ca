import math

import pytest

from ephemerides.quaternion import Quaternion


def approx_vec(values, tol=1e-9):
    return pytest.approx(tuple(values), abs=tol)


def approx_quat(q, tol=1e-9):
    return pytest.approx(tuple(q), abs=tol)


def test_identity_and_null():
    assert Quaternion.identity().is_identity()
    assert Quaternion() == Quaternion.identity()
    assert Quaternion(0.0, 0.0, 0.0, 0.0).is_null()
    assert not Quaternion(1.0, 2.0, 3.0, 4.0).is_null()
    assert not Quaternion(1.0, 0.0, 0.0, 0.5).is_identity()


def test_hamilton_product_i_times_j_is_k():
    i = Quaternion(0.0, 1.0, 0.0, 0.0)
    j = Quaternion(0.0, 0.0, 1.0, 0.0)
    assert tuple(i * j) == pytest.approx((0.0, 0.0, 0.0, 1.0))
    assert tuple(j * i) == pytest.approx((0.0, 0.0, 0.0, -1.0))


def test_identity_is_neutral_for_product():
    q = Quaternion(0.3, -1.2, 2.5, 0.7)
    assert approx_quat(q * Quaternion.identity()) == tuple(q)
    assert approx_quat(Quaternion.identity() * q) == tuple(q)


def test_arithmetic_operators():
    a = Quaternion(1.0, 2.0, 3.0, 4.0)
    b = Quaternion(0.5, -1.0, 2.0, 0.0)
    assert (a + b) - b == a
    assert -a + a == Quaternion(0.0, 0.0, 0.0, 0.0)
    assert 2.0 * a == a * 2.0
    assert (a * 2.0) / 2.0 == a


def test_dot_and_length():
    q = Quaternion(1.0, 2.0, 3.0, 4.0)
    assert q.dot(q) == q.length_squared()
    assert q.length() == pytest.approx(math.sqrt(q.length_squared()))


def test_normalized():
    q = Quaternion(1.0, 2.0, 3.0, 4.0)
    assert q.normalized().length() == pytest.approx(1.0)
    assert Quaternion(0.0, 0.0, 0.0, 0.0).normalized().is_null()
    unit = Quaternion.identity()
    assert unit.normalized() is unit


def test_inverted_unit_quaternion_gives_identity():
    q = Quaternion.from_axis_and_angle((1.0, 2.0, -0.5), 0.8)
    assert approx_quat(q * q.inverted()) == tuple(Quaternion.identity())
    assert Quaternion(0.0, 0.0, 0.0, 0.0).inverted().is_null()


def test_conjugate_product_is_length_squared():
    q = Quaternion(1.0, 2.0, 3.0, 4.0)
    product = q * q.conjugated()
    assert approx_quat(product) == (q.length_squared(), 0.0, 0.0, 0.0)


def test_rotation_about_z_by_right_angle():
    q = Quaternion.from_axis_and_angle((0.0, 0.0, 1.0), math.pi / 2)
    assert approx_vec(q.rotated_vector((1.0, 0.0, 0.0))) == (0.0, 1.0, 0.0)


def test_rotation_preserves_length():
    q = Quaternion.from_axis_and_angle((0.3, -0.4, 1.1), 2.1)
    v = (1.5, -2.0, 0.25)
    rotated = q.rotated_vector(v)
    assert math.hypot(*rotated) == pytest.approx(math.hypot(*v))


def test_axis_and_angle_round_trip():
    axis = (1.0, 2.0, 2.0)
    q = Quaternion.from_axis_and_angle(axis, 1.2)
    got_axis, angle = q.axis_and_angle()
    length = math.hypot(*axis)
    assert approx_vec(got_axis) == tuple(c / length for c in axis)
    assert angle == pytest.approx(1.2)


def test_axis_and_angle_of_identity():
    assert Quaternion.identity().axis_and_angle() == ((0.0, 0.0, 0.0), 0.0)


@pytest.mark.parametrize("angle", [0.3, -0.7, 1.2])
def test_single_axis_constructors(angle):
    assert Quaternion.from_pitch(angle).pitch() == pytest.approx(angle)
    assert Quaternion.from_yaw(angle).yaw() == pytest.approx(angle)
    assert Quaternion.from_roll(angle).roll() == pytest.approx(angle)


def test_euler_angles_round_trip():
    q = Quaternion.from_euler_angles(0.2, -0.5, 0.9)
    assert approx_vec(q.euler_angles()) == (0.2, -0.5, 0.9)
    assert q.pitch() == pytest.approx(0.2)
    assert q.yaw() == pytest.approx(-0.5)
    assert q.roll() == pytest.approx(0.9)


def test_euler_angles_scale_invariant():
    q = Quaternion.from_euler_angles(0.4, 0.1, -0.3)
    assert approx_vec((q * 3.0).euler_angles()) == q.euler_angles()


def test_gimbal_lock_has_zero_roll():
    q = Quaternion.from_pitch(math.pi / 2)
    assert q.pitch() == pytest.approx(math.pi / 2)
    assert q.roll() == 0.0


def test_rotation_to_maps_from_onto_to():
    src = (1.0, 2.0, 3.0)
    dst = (-2.0, 0.5, 1.0)
    q = Quaternion.rotation_to(src, dst)
    rotated = q.rotated_vector(src)
    scale = math.hypot(*src) / math.hypot(*dst)
    assert approx_vec(rotated) == tuple(c * scale for c in dst)


def test_rotation_to_opposite_vectors():
    q = Quaternion.rotation_to((1.0, 0.0, 0.0), (-1.0, 0.0, 0.0))
    assert q.scalar == 0.0
    assert approx_vec(q.rotated_vector((1.0, 0.0, 0.0))) == (-1.0, 0.0, 0.0)


def test_rotation_matrix_round_trip():
    q = Quaternion.from_axis_and_angle((0.2, 1.0, -0.3), 0.9)
    back = Quaternion.from_rotation_matrix(q.to_rotation_matrix())
    assert approx_quat(back) == tuple(q)


def test_rotation_matrix_round_trip_near_half_turn():
    q = Quaternion.from_axis_and_angle((0.0, 1.0, 0.2), math.pi)
    back = Quaternion.from_rotation_matrix(q.to_rotation_matrix())
    # q and -q represent the same rotation
    assert abs(back.dot(q)) == pytest.approx(1.0)


def test_rotation_matrix_matches_rotated_vector():
    q = Quaternion.from_euler_angles(0.3, 0.6, -0.2)
    m = q.to_rotation_matrix()
    v = (0.5, -1.0, 2.0)
    by_matrix = tuple(sum(m[r][c] * v[c] for c in range(3)) for r in range(3))
    assert approx_vec(by_matrix) == q.rotated_vector(v)


def test_identity_rotation_matrix():
    m = Quaternion.identity().to_rotation_matrix()
    assert m == ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))


def test_axes_round_trip():
    q = Quaternion.from_axis_and_angle((1.0, -1.0, 0.5), 1.4)
    x_axis, y_axis, z_axis = q.axes()
    assert approx_vec(x_axis) == q.rotated_vector((1.0, 0.0, 0.0))
    back = Quaternion.from_axes(x_axis, y_axis, z_axis)
    assert approx_quat(back) == tuple(q)


def test_invalid_vector_length_raises():
    with pytest.raises(ValueError):
        Quaternion.identity().rotated_vector((1.0, 2.0))