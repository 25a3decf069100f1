import math

import numpy as np
import pytest

from gameforge.camera import PITCH_LIMIT, Camera, orthographic, perspective


def test_defaults():
    camera = Camera(800, 600)
    np.testing.assert_allclose(camera.position, [0.0, 5.0, 30.0])
    np.testing.assert_allclose(camera.euler, [0.0, 0.0, 0.0])
    assert camera.dirty is False


def test_identity_directions():
    camera = Camera(800, 600)
    np.testing.assert_allclose(camera.forward_direction(), [0.0, 0.0, -1.0], atol=1e-12)
    np.testing.assert_allclose(camera.up_direction(), [0.0, 1.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(camera.right_direction(), [1.0, 0.0, 0.0], atol=1e-12)


def test_directions_stay_orthonormal_after_turning():
    camera = Camera(640, 480)
    camera.yaw(0.7)
    camera.pitch(0.3)
    camera.roll(-0.2)
    f, u, r = camera.forward_direction(), camera.up_direction(), camera.right_direction()
    for vector in (f, u, r):
        assert np.linalg.norm(vector) == pytest.approx(1.0)
    assert np.dot(f, u) == pytest.approx(0.0, abs=1e-12)
    assert np.dot(f, r) == pytest.approx(0.0, abs=1e-12)
    np.testing.assert_allclose(np.cross(r, u), -f, atol=1e-12)


def test_view_maps_camera_position_to_origin():
    camera = Camera(800, 600)
    point = np.append(camera.position, 1.0)
    np.testing.assert_allclose(camera.view @ point, [0.0, 0.0, 0.0, 1.0], atol=1e-9)


def test_view_updates_only_on_update():
    camera = Camera(800, 600)
    before = camera.view.copy()
    camera.set_position((1.0, 2.0, 3.0))
    assert camera.dirty
    np.testing.assert_allclose(camera.view, before)
    camera.on_update()
    assert not camera.dirty
    np.testing.assert_allclose(camera.view @ [1.0, 2.0, 3.0, 1.0], [0, 0, 0, 1], atol=1e-9)


def test_forward_point_is_in_front_after_turning():
    camera = Camera(800, 600)
    camera.set_euler((0.2, 1.1, 0.0))
    camera.on_update()
    ahead = camera.position + camera.forward_direction() * 5.0
    view_space = camera.view @ np.append(ahead, 1.0)
    np.testing.assert_allclose(view_space[:3], [0.0, 0.0, -5.0], atol=1e-9)


def test_moves_are_inverse_pairs():
    camera = Camera(800, 600)
    camera.yaw(0.4)
    start = camera.position
    camera.move_forward(3.0)
    camera.move_backward(3.0)
    camera.move_left(2.0)
    camera.move_right(2.0)
    camera.move_up(1.5)
    camera.move_down(1.5)
    np.testing.assert_allclose(camera.position, start, atol=1e-12)


def test_move_forward_follows_forward_direction():
    camera = Camera(800, 600)
    start = camera.position
    camera.move_forward(2.0)
    np.testing.assert_allclose(camera.position, start + 2.0 * camera.forward_direction())


def test_yaw_and_roll_subtract():
    camera = Camera(800, 600)
    camera.yaw(0.5)
    camera.roll(0.25)
    np.testing.assert_allclose(camera.euler, [0.0, -0.5, -0.25])


def test_pitch_is_clamped():
    camera = Camera(800, 600)
    camera.pitch(-10.0)
    assert camera.euler[0] == pytest.approx(PITCH_LIMIT)
    camera.pitch(20.0)
    assert camera.euler[0] == pytest.approx(-PITCH_LIMIT)
    assert PITCH_LIMIT == pytest.approx(math.radians(89.0))


def test_perspective_structure():
    matrix = perspective(1.0, 2.0, 0.1, 100.0)
    assert matrix[3, 2] == -1.0
    assert matrix[3, 3] == 0.0
    assert matrix[1, 1] / matrix[0, 0] == pytest.approx(2.0)
    near_point = matrix @ [0.0, 0.0, -0.1, 1.0]
    far_point = matrix @ [0.0, 0.0, -100.0, 1.0]
    assert near_point[2] / near_point[3] == pytest.approx(-1.0)
    assert far_point[2] / far_point[3] == pytest.approx(1.0)


def test_perspective_rejects_zero_aspect():
    with pytest.raises(ValueError):
        perspective(1.0, 0.0, 0.1, 10.0)


def test_orthographic_maps_corners():
    matrix = orthographic(0.0, 800.0, 600.0, 0.0, -100.0, 100.0)
    np.testing.assert_allclose(matrix @ [0, 0, 0, 1], [-1, 1, 0, 1], atol=1e-12)
    np.testing.assert_allclose(matrix @ [800, 600, 0, 1], [1, -1, 0, 1], atol=1e-12)


def test_ui_matrices():
    camera = Camera(800, 600)
    np.testing.assert_allclose(camera.ui_view, np.identity(4))
    np.testing.assert_allclose(camera.ui_projection @ [800, 600, 0, 1], [1, -1, 0, 1], atol=1e-12)


def test_on_resize_rebuilds_projections():
    camera = Camera(800, 600)
    camera.on_resize(1000, 500)
    assert camera.projection[1, 1] / camera.projection[0, 0] == pytest.approx(2.0)
    np.testing.assert_allclose(camera.ui_projection @ [1000, 500, 0, 1], [1, -1, 0, 1], atol=1e-12)


def test_zero_height_rejected():
    camera = Camera(800, 600)
    with pytest.raises(ValueError):
        camera.on_resize(800, 0)