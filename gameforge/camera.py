"""Perspective camera with a separate orthographic view for the UI."""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from gameforge.transform import quat_from_euler, quat_rotate, quat_to_mat4, translation_matrix

PITCH_LIMIT = math.radians(89.0)

DEFAULT_POSITION = (0.0, 5.0, 30.0)
DEFAULT_EULER = (0.0, 0.0, 0.0)


def _vec3(value: Iterable[float]) -> np.ndarray:
    array = np.asarray(value, dtype=float).reshape(-1)
    if array.shape != (3,):
        raise ValueError("expected three components")
    return array.copy()


def perspective(fov: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection with depth mapped to -1..1.

    ``fov`` is the vertical field of view in radians.
    """
    if aspect == 0:
        raise ValueError("aspect ratio must not be zero")
    if far == near:
        raise ValueError("near and far planes must differ")
    tan_half = math.tan(fov / 2.0)
    matrix = np.zeros((4, 4))
    matrix[0, 0] = 1.0 / (aspect * tan_half)
    matrix[1, 1] = 1.0 / tan_half
    matrix[2, 2] = -(far + near) / (far - near)
    matrix[3, 2] = -1.0
    matrix[2, 3] = -(2.0 * far * near) / (far - near)
    return matrix


def orthographic(
    left: float, right: float, bottom: float, top: float, near: float, far: float
) -> np.ndarray:
    """Right-handed orthographic projection with depth mapped to -1..1."""
    if right == left or top == bottom or far == near:
        raise ValueError("orthographic bounds must not be degenerate")
    matrix = np.identity(4)
    matrix[0, 0] = 2.0 / (right - left)
    matrix[1, 1] = 2.0 / (top - bottom)
    matrix[2, 2] = -2.0 / (far - near)
    matrix[0, 3] = -(right + left) / (right - left)
    matrix[1, 3] = -(top + bottom) / (top - bottom)
    matrix[2, 3] = -(far + near) / (far - near)
    return matrix


class Camera:
    """A free-flying camera described by a position and Euler angles (radians).

    Movement and rotation mark the camera dirty; the view matrix is rebuilt
    on the next :meth:`on_update`.
    """

    near_clip = 0.1
    far_clip = 1000.0
    fov = 45.0

    def __init__(self, width: int, height: int) -> None:
        self._position = np.array(DEFAULT_POSITION)
        self._euler = np.array(DEFAULT_EULER)
        self._dirty = False
        self.projection = np.identity(4)
        self.view = np.identity(4)
        self.ui_projection = np.identity(4)
        self.ui_view = np.identity(4)
        self._generate_projection(width, height)
        self._generate_view()
        self._generate_ui_projection(width, height)
        self.ui_view = np.linalg.inv(np.identity(4))

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @property
    def euler(self) -> np.ndarray:
        return self._euler.copy()

    @property
    def dirty(self) -> bool:
        """True when the view matrix is out of date."""
        return self._dirty

    def _generate_projection(self, width: int, height: int) -> None:
        if height == 0:
            raise ValueError("frame height must not be zero")
        self.projection = perspective(self.fov, width / height, self.near_clip, self.far_clip)

    def _generate_ui_projection(self, width: int, height: int) -> None:
        self.ui_projection = orthographic(0.0, float(width), float(height), 0.0, -100.0, 100.0)

    def _generate_view(self) -> None:
        model = translation_matrix(self._position) @ quat_to_mat4(self.orientation())
        self.view = np.linalg.inv(model)
        self._dirty = False

    def orientation(self) -> np.ndarray:
        """Orientation quaternion (w, x, y, z) built from the Euler angles."""
        return quat_from_euler(self._euler)

    def up_direction(self) -> np.ndarray:
        return quat_rotate(self.orientation(), (0.0, 1.0, 0.0))

    def right_direction(self) -> np.ndarray:
        return quat_rotate(self.orientation(), (1.0, 0.0, 0.0))

    def forward_direction(self) -> np.ndarray:
        return quat_rotate(self.orientation(), (0.0, 0.0, -1.0))

    def set_position(self, position: Iterable[float]) -> None:
        self._position = _vec3(position)
        self._dirty = True

    def set_euler(self, euler: Iterable[float]) -> None:
        self._euler = _vec3(euler)
        self._dirty = True

    def _move(self, direction: np.ndarray, amount: float) -> None:
        self._position = self._position + direction * amount
        self._dirty = True

    def move_up(self, amount: float) -> None:
        self._move(self.up_direction(), amount)

    def move_down(self, amount: float) -> None:
        self._move(-self.up_direction(), amount)

    def move_forward(self, amount: float) -> None:
        self._move(self.forward_direction(), amount)

    def move_backward(self, amount: float) -> None:
        self._move(-self.forward_direction(), amount)

    def move_left(self, amount: float) -> None:
        self._move(-self.right_direction(), amount)

    def move_right(self, amount: float) -> None:
        self._move(self.right_direction(), amount)

    def yaw(self, amount: float) -> None:
        """Turn around the vertical axis."""
        self._euler[1] -= amount
        self._dirty = True

    def pitch(self, amount: float) -> None:
        """Tilt up or down, clamped short of straight up or down."""
        self._euler[0] = min(max(self._euler[0] - amount, -PITCH_LIMIT), PITCH_LIMIT)
        self._dirty = True

    def roll(self, amount: float) -> None:
        """Rotate around the viewing axis."""
        self._euler[2] -= amount
        self._dirty = True

    def on_update(self) -> None:
        """Rebuild the view matrix if the camera moved or turned."""
        if self._dirty:
            self._generate_view()

    def on_resize(self, width: int, height: int) -> None:
        """Rebuild both projections for a new frame size."""
        self._generate_projection(width, height)
        self._generate_ui_projection(width, height)