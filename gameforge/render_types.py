"""Vertex formats and per-frame render data."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Iterable

import numpy as np

FLOAT_EPSILON = 1.192092896e-07


class BuiltinRenderpasses(IntEnum):
    """Render passes every frame goes through."""

    WORLD = 0x01
    UI = 0x02


def _components(value: Iterable[float], count: int, name: str) -> tuple[float, ...]:
    values = tuple(float(component) for component in value)
    if len(values) != count:
        raise ValueError(f"{name} needs {count} components, got {len(values)}")
    return values


def _close(a: tuple[float, ...], b: tuple[float, ...]) -> bool:
    return all(math.fabs(x - y) < FLOAT_EPSILON for x, y in zip(a, b))


@dataclass(frozen=True, eq=False)
class Vertex3D:
    """A mesh vertex; two vertices are equal when every component is within epsilon."""

    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    normal: tuple[float, float, float] = (0.0, 0.0, 0.0)
    texcoord: tuple[float, float] = (0.0, 0.0)
    color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    tangent: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        for name, count in (("position", 3), ("normal", 3), ("texcoord", 2), ("color", 4), ("tangent", 4)):
            object.__setattr__(self, name, _components(getattr(self, name), count, name))

    def _fields(self) -> tuple[tuple[float, ...], ...]:
        return (self.position, self.normal, self.texcoord, self.color, self.tangent)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vertex3D):
            return NotImplemented
        return all(_close(mine, theirs) for mine, theirs in zip(self._fields(), other._fields()))

    def __hash__(self) -> int:
        return hash(self._fields())


@dataclass(frozen=True)
class Vertex2D:
    """A 2D vertex for UI geometry."""

    position: tuple[float, float] = (0.0, 0.0)
    texcoord: tuple[float, float] = (0.0, 0.0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", _components(self.position, 2, "position"))
        object.__setattr__(self, "texcoord", _components(self.texcoord, 2, "texcoord"))


@dataclass
class GeometryRenderData:
    """One piece of geometry to draw with its model matrix."""

    object_id: int = 0
    model: np.ndarray = field(default_factory=lambda: np.identity(4))
    geometry: Any = None


@dataclass
class RenderPacket:
    """Everything needed to draw one frame."""

    delta_time: float = 0.0
    geometries: list[GeometryRenderData] = field(default_factory=list)
    ui_geometries: list[GeometryRenderData] = field(default_factory=list)