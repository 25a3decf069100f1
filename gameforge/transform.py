"""Quaternion helpers and a hierarchical position/rotation/scale transform."""

from __future__ import annotations

from typing import Iterable

import numpy as np

# Quaternions are numpy arrays ordered (w, x, y, z); matrices act on column vectors.


def _vec3(value: Iterable[float]) -> np.ndarray:
    array = np.asarray(value, dtype=float).reshape(-1)
    if array.shape != (3,):
        raise ValueError("expected three components")
    return array.copy()


def _quat(value: Iterable[float]) -> np.ndarray:
    array = np.asarray(value, dtype=float).reshape(-1)
    if array.shape != (4,):
        raise ValueError("expected a quaternion of four components (w, x, y, z)")
    return array.copy()


def quat_identity() -> np.ndarray:
    """The rotation that does nothing."""
    return np.array([1.0, 0.0, 0.0, 0.0])


def quat_from_euler(euler: Iterable[float]) -> np.ndarray:
    """Quaternion from pitch, yaw and roll angles in radians (x, y, z)."""
    angles = _vec3(euler) * 0.5
    cx, cy, cz = np.cos(angles)
    sx, sy, sz = np.sin(angles)
    return np.array([
        cx * cy * cz + sx * sy * sz,
        sx * cy * cz - cx * sy * sz,
        cx * sy * cz + sx * cy * sz,
        cx * cy * sz - sx * sy * cz,
    ])


def quat_multiply(a: Iterable[float], b: Iterable[float]) -> np.ndarray:
    """Hamilton product ``a * b``: rotate by ``b`` first, then by ``a``."""
    w1, x1, y1, z1 = _quat(a)
    w2, x2, y2, z2 = _quat(b)
    return np.array([
        w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
        w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
        w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
        w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
    ])


def quat_rotate(q: Iterable[float], v: Iterable[float]) -> np.ndarray:
    """Rotate vector ``v`` by unit quaternion ``q``."""
    quat = _quat(q)
    vector = _vec3(v)
    w, axis = quat[0], quat[1:]
    uv = np.cross(axis, vector)
    uuv = np.cross(axis, uv)
    return vector + 2.0 * (w * uv + uuv)


def quat_to_mat4(q: Iterable[float]) -> np.ndarray:
    """4x4 rotation matrix of unit quaternion ``q``."""
    w, x, y, z = _quat(q)
    return np.array([
        [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y), 0.0],
        [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x), 0.0],
        [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y), 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def translation_matrix(v: Iterable[float]) -> np.ndarray:
    """4x4 matrix translating by ``v``."""
    matrix = np.identity(4)
    matrix[:3, 3] = _vec3(v)
    return matrix


def scale_matrix(v: Iterable[float]) -> np.ndarray:
    """4x4 matrix scaling by ``v`` along each axis."""
    matrix = np.identity(4)
    matrix[0, 0], matrix[1, 1], matrix[2, 2] = _vec3(v)
    return matrix


class Transform:
    """Position, rotation and scale with an optional parent transform.

    The local matrix is rotation * translation * scale and is rebuilt
    lazily after any change.
    """

    def __init__(
        self,
        position: Iterable[float] | None = None,
        rotation: Iterable[float] | None = None,
        scale: Iterable[float] | None = None,
        parent: Transform | None = None,
    ) -> None:
        self._position = _vec3(position) if position is not None else np.zeros(3)
        self._rotation = _quat(rotation) if rotation is not None else quat_identity()
        self._scale = _vec3(scale) if scale is not None else np.ones(3)
        self._parent = parent
        self._model = np.identity(4)
        self._generate()

    def _generate(self) -> None:
        self._model = (
            quat_to_mat4(self._rotation)
            @ translation_matrix(self._position)
            @ scale_matrix(self._scale)
        )
        self._dirty = False

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @property
    def rotation(self) -> np.ndarray:
        return self._rotation.copy()

    @property
    def scale(self) -> np.ndarray:
        return self._scale.copy()

    @property
    def parent(self) -> Transform | None:
        return self._parent

    def set_position(self, position: Iterable[float]) -> None:
        self._position = _vec3(position)
        self._dirty = True

    def translate(self, offset: Iterable[float]) -> None:
        """Move the position by ``offset``."""
        self._position = self._position + _vec3(offset)
        self._dirty = True

    def set_rotation(self, rotation: Iterable[float]) -> None:
        self._rotation = _quat(rotation)
        self._dirty = True

    def rotate(self, rotation: Iterable[float]) -> None:
        """Compose ``rotation`` on the right of the current rotation."""
        self._rotation = quat_multiply(self._rotation, rotation)
        self._dirty = True

    def set_scale(self, scale: Iterable[float]) -> None:
        self._scale = _vec3(scale)
        self._dirty = True

    def set_parent(self, parent: Transform | None) -> None:
        self._parent = parent

    def set_position_rotation(self, position: Iterable[float], rotation: Iterable[float]) -> None:
        self._position = _vec3(position)
        self._rotation = _quat(rotation)
        self._dirty = True

    def set_position_rotation_scale(
        self,
        position: Iterable[float],
        rotation: Iterable[float],
        scale: Iterable[float],
    ) -> None:
        self._position = _vec3(position)
        self._rotation = _quat(rotation)
        self._scale = _vec3(scale)
        self._dirty = True

    def local(self) -> np.ndarray:
        """Local model matrix, rebuilt if anything changed."""
        if self._dirty:
            self._generate()
        return self._model.copy()

    def world(self) -> np.ndarray:
        """Model matrix combined with every ancestor's."""
        local = self.local()
        if self._parent is not None:
            return self._parent.world() @ local
        return local