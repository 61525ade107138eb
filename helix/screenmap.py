from __future__ import annotations

from typing import Any, Dict, Iterator, List, Sequence

from geometry import Vec2f


DEFAULT_DIAMETER = 0.5


class ScreenMap:
    """Ordered LED positions plus the drawn LED diameter, for visualizers."""

    def __init__(
        self, points: Sequence[Vec2f], diameter: float = DEFAULT_DIAMETER
    ) -> None:
        self._points: List[Vec2f] = list(points)
        self.diameter = float(diameter)

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, idx: int) -> Vec2f:
        return self._points[idx]

    def __iter__(self) -> Iterator[Vec2f]:
        return iter(self._points)

    def get_length(self) -> int:
        return len(self._points)

    def get_diameter(self) -> float:
        return self.diameter

    def set_diameter(self, diameter: float) -> None:
        self.diameter = float(diameter)

    def get_bounds(self) -> Vec2f:
        """Extent (max - min) of the points on each axis."""
        if not self._points:
            return Vec2f(0.0, 0.0)
        xs = [p.x for p in self._points]
        ys = [p.y for p in self._points]
        return Vec2f(max(xs) - min(xs), max(ys) - min(ys))

    def as_dict(self, name: str = "strip") -> Dict[str, Any]:
        return {
            "map": {
                name: {
                    "x": [p.x for p in self._points],
                    "y": [p.y for p in self._points],
                    "diameter": self.diameter,
                }
            }
        }
