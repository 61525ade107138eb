from __future__ import annotations

import logging
import math
import struct
from typing import Dict, Iterator, List, Optional

from colors import BLACK, CRGB, blend_weighted
from geometry import (
    CorkscrewInput,
    CorkscrewState,
    Vec2f,
    generate_state,
    unwrapped_position,
    wrap_x,
)
from grid import Grid
from screenmap import DEFAULT_DIAMETER, ScreenMap
from tile import Tile2x2Wrap

log = logging.getLogger(__name__)


def _index_key(idx: float) -> int:
    """Bit pattern of the float index, used as the tile cache key."""
    return int.from_bytes(struct.pack("<d", float(idx)), "little")


class Corkscrew:
    """
    Maps an LED strip wound as a helix onto a width x height cylinder grid.

    Holds a lazily allocated colour buffer with one cell per grid position and
    a memo of bilinear tiles keyed by fractional LED index.
    """

    def __init__(
        self,
        inp: Optional[CorkscrewInput] = None,
        *,
        caching: bool = True,
        multi_sampling: bool = True,
    ) -> None:
        self.input = (inp or CorkscrewInput()).normalized()
        self.state: CorkscrewState = generate_state(self.input)
        self._buffer: Optional[List[CRGB]] = None
        self._tile_cache: Dict[int, Tile2x2Wrap] = {}
        self._caching = bool(caching)
        self.multi_sampling = bool(multi_sampling)
        log.debug(
            "corkscrew turns=%s leds=%s invert=%s gap=%s -> %sx%s",
            self.input.total_turns,
            self.input.num_leds,
            self.input.invert,
            self.input.gap,
            self.state.width,
            self.state.height,
        )

    # -----------------------
    #  Dimensions
    # -----------------------

    def size(self) -> int:
        return self.input.num_leds

    def __len__(self) -> int:
        return self.input.num_leds

    def cylinder_width(self) -> int:
        return self.state.width

    def cylinder_height(self) -> int:
        return self.state.height

    # -----------------------
    #  Index mapping
    # -----------------------

    def _led_position(self, idx: int) -> Vec2f:
        return unwrapped_position(
            idx, self.input.num_leds, self.state.width, self.input.gap
        )

    def at_no_wrap(self, idx: float) -> Vec2f:
        """Unwrapped position of a (possibly fractional) LED index."""
        last = self.input.num_leds - 1
        i = float(idx)
        if math.isnan(i):
            i = 0.0
        i = max(0.0, min(float(last), i))
        if self.input.invert:
            i = last - i

        i0 = int(math.floor(i))
        frac = i - i0
        p0 = self._led_position(i0)
        if frac <= 0.0:
            return p0
        p1 = self._led_position(i0 + 1)
        return Vec2f(p0.x + (p1.x - p0.x) * frac, p0.y + (p1.y - p0.y) * frac)

    def at_exact(self, idx: float) -> Vec2f:
        """Position on the cylinder surface, x in [0, width)."""
        pos = self.at_no_wrap(idx)
        return Vec2f(wrap_x(pos.x, self.state.width), pos.y)

    def __iter__(self) -> Iterator[Vec2f]:
        for i in range(self.input.num_leds):
            yield self.at_exact(i)

    # -----------------------
    #  Tile sampling
    # -----------------------

    def _calculate_tile(self, idx: float) -> Tile2x2Wrap:
        return Tile2x2Wrap.from_position(
            self.at_exact(idx), self.state.width, self.state.height
        )

    def at_wrap(self, idx: float) -> Tile2x2Wrap:
        """Bilinear 2x2 tile for a fractional LED index."""
        if not self._caching:
            return self._calculate_tile(idx)
        key = _index_key(idx)
        tile = self._tile_cache.get(key)
        if tile is None:
            tile = self._calculate_tile(idx)
            self._tile_cache[key] = tile
        return tile

    def set_caching_enabled(self, enabled: bool) -> None:
        enabled = bool(enabled)
        if enabled != self._caching:
            log.debug(
                "tile caching %s (%s cached)",
                "enabled" if enabled else "disabled",
                len(self._tile_cache),
            )
        self._caching = enabled

    def is_caching_enabled(self) -> bool:
        return self._caching

    def cache_size(self) -> int:
        return len(self._tile_cache)

    def clear_cache(self) -> None:
        self._tile_cache.clear()

    # -----------------------
    #  Buffer
    # -----------------------

    def _ensure_buffer(self) -> List[CRGB]:
        if self._buffer is None:
            self._buffer = [BLACK] * self.state.cells
            log.debug("allocated %s cell buffer", len(self._buffer))
        return self._buffer

    def get_buffer(self) -> List[CRGB]:
        return self._ensure_buffer()

    def data(self) -> List[CRGB]:
        """Raw cell storage, row-major; the same list get_buffer() returns."""
        return self._ensure_buffer()

    def fill_buffer(self, color: CRGB) -> None:
        buf = self._ensure_buffer()
        buf[:] = [color] * len(buf)

    def clear_buffer(self) -> None:
        self.fill_buffer(BLACK)

    def _cell_index(self, pos: Vec2f) -> int:
        w = self.state.width
        x = int(math.floor(pos.x)) % w
        y = max(0, min(self.state.height - 1, int(math.floor(pos.y))))
        return y * w + x

    def _sample_nearest(self, grid: Grid, pos: Vec2f) -> CRGB:
        x = int(math.floor(pos.x + 0.5)) % self.state.width
        y = max(0, min(self.state.height - 1, int(math.floor(pos.y + 0.5))))
        if not grid.has(x, y):
            return BLACK
        return grid.get(x, y)

    def _sample_tile(self, grid: Grid, idx: int) -> CRGB:
        tile = self.at_wrap(float(idx))
        return blend_weighted(
            (grid.get(c.x, c.y), w) for c, w in tile if w and grid.has(c.x, c.y)
        )

    def read_from(
        self, grid: Grid, *, use_multi_sampling: Optional[bool] = None
    ) -> None:
        """Resample a rectangular image onto the helix.

        Each LED samples `grid` at its cylinder position (bilinear through its
        tile, or nearest cell) and stores the colour in the buffer cell under
        that position. Cells no LED lands on keep their value.
        """
        if use_multi_sampling is None:
            use_multi_sampling = self.multi_sampling
        buf = self._ensure_buffer()
        for i in range(self.input.num_leds):
            pos = self.at_exact(i)
            if use_multi_sampling:
                color = self._sample_tile(grid, i)
            else:
                color = self._sample_nearest(grid, pos)
            buf[self._cell_index(pos)] = color
        log.debug(
            "read %sx%s grid into %s leds (multi_sampling=%s)",
            grid.width,
            grid.height,
            self.input.num_leds,
            use_multi_sampling,
        )

    def led_colors(self) -> List[CRGB]:
        """Buffer colour under each LED, in strip order."""
        buf = self._ensure_buffer()
        return [buf[self._cell_index(p)] for p in self]

    def frame_bytes(self) -> bytes:
        out = bytearray(self.input.num_leds * 3)
        for i, c in enumerate(self.led_colors()):
            j = i * 3
            out[j : j + 3] = bytes((c.r, c.g, c.b))
        return bytes(out)

    # -----------------------
    #  Export
    # -----------------------

    def to_screen_map(self, diameter: float = DEFAULT_DIAMETER) -> ScreenMap:
        return ScreenMap(list(self), diameter=diameter)
