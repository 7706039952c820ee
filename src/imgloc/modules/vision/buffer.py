"""
Read-only, stride-aware pixel buffers.

A PixelBuffer wraps an 8-bit image as a (height, width, channels) numpy view.
Rows may be padded: a buffer built from raw bytes keeps the caller's row
stride, and slicing a region never copies.
"""
from __future__ import annotations

from typing import Union

import numpy as np

from ..geometry.rect import Rect
from .errors import FormatMismatchError

SUPPORTED_CHANNELS = (1, 3)


class PixelBuffer:
    __slots__ = ("_data",)

    def __init__(self, data: np.ndarray) -> None:
        if data.dtype != np.uint8:
            raise FormatMismatchError(f"Unsupported pixel depth: {data.dtype}, expected uint8")
        if data.ndim == 2:
            data = data[:, :, np.newaxis]
        if data.ndim != 3 or data.shape[2] not in SUPPORTED_CHANNELS:
            raise FormatMismatchError(f"Unsupported pixel layout: shape {data.shape}")
        view = data.view()
        view.flags.writeable = False
        self._data = view

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Wrap a grayscale (H, W) or interleaved (H, W, C) uint8 array without copying."""
        return cls(np.asarray(array))

    @classmethod
    def from_bytes(
        cls,
        raw: Union[bytes, bytearray, memoryview],
        width: int,
        height: int,
        channels: int,
        *,
        stride: int | None = None,
        offset: int = 0,
    ) -> "PixelBuffer":
        """Wrap raw row-major bytes, honouring row padding and a base offset."""
        if channels not in SUPPORTED_CHANNELS:
            raise FormatMismatchError(f"Unsupported channel count: {channels}")
        if width <= 0 or height <= 0:
            raise ValueError(f"Buffer size must be positive, got {width}x{height}")
        row_bytes = width * channels
        if stride is None:
            stride = row_bytes
        if stride < row_bytes:
            raise ValueError(f"Stride {stride} is smaller than row size {row_bytes}")
        flat = np.frombuffer(raw, dtype=np.uint8)
        needed = offset + stride * (height - 1) + row_bytes
        if offset < 0 or flat.size < needed:
            raise ValueError(f"Buffer too small: need {needed} bytes, got {flat.size}")
        view = np.lib.stride_tricks.as_strided(
            flat[offset:],
            shape=(height, width, channels),
            strides=(stride, channels, 1),
            writeable=False,
        )
        return cls(view)

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def channels(self) -> int:
        return self._data.shape[2]

    @property
    def stride(self) -> int:
        """Bytes between the starts of successive rows."""
        return self._data.strides[0]

    @property
    def bounds(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    def pixel_at(self, row: int, col: int, channel: int = 0) -> int:
        """Return one channel value. Raises IndexError if out of bounds."""
        if not (0 <= row < self.height and 0 <= col < self.width and 0 <= channel < self.channels):
            raise IndexError(
                f"Pixel (row={row}, col={col}, ch={channel}) is out of bounds for "
                f"{self.width}x{self.height}x{self.channels}"
            )
        return int(self._data[row, col, channel])

    def row(self, index: int) -> np.ndarray:
        """Return row `index` as a (width, channels) view."""
        if not 0 <= index < self.height:
            raise IndexError(f"Row {index} is out of bounds for height {self.height}")
        return self._data[index]

    def region(self, rect: Rect) -> "PixelBuffer":
        """Return a view of rect, which must lie inside the buffer."""
        if not self.bounds.contains_rect(rect) or rect.is_empty:
            raise IndexError(f"Region {rect.as_tuple()} is outside {self.width}x{self.height}")
        return PixelBuffer(self._data[rect.y:rect.bottom, rect.x:rect.right])

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height}x{self.channels}, stride={self.stride})"


__all__ = ["PixelBuffer", "SUPPORTED_CHANNELS"]
