"""
Vision utilities: image loading/decoding into canonical pixel buffers.
"""
from __future__ import annotations

import os
from typing import Union

import cv2  # type: ignore
import numpy as np

from .buffer import PixelBuffer


ImageLike = Union[str, bytes, np.ndarray, PixelBuffer]


def load_image(img: ImageLike, *, grayscale: bool = False) -> np.ndarray:
    """Load an image into a BGR (or single-channel) uint8 numpy array.

    - str: treated as a file path and loaded via cv2.imread
    - bytes: decoded via cv2.imdecode
    - np.ndarray: converted to canonical layout (BGRA is reduced to BGR)
    - PixelBuffer: its underlying view, treated like an array
    """
    flag = cv2.IMREAD_GRAYSCALE if grayscale else cv2.IMREAD_COLOR
    if isinstance(img, PixelBuffer):
        img = img.data
    if isinstance(img, np.ndarray):
        mat = to_canonical(img)
        return to_gray(mat) if grayscale else mat
    if isinstance(img, (bytes, bytearray)):
        arr = np.frombuffer(img, dtype=np.uint8)
        mat = cv2.imdecode(arr, flag)
        if mat is None:
            raise ValueError("Failed to decode image bytes")
        return mat
    if isinstance(img, str):
        if not os.path.isfile(img):
            raise FileNotFoundError(f"Image file not found: {img}")
        mat = cv2.imread(img, flag)
        if mat is None:
            raise ValueError(f"Failed to load image from path: {img}")
        return mat
    raise TypeError(f"Unsupported image type: {type(img)}")


def to_canonical(img: np.ndarray) -> np.ndarray:
    """Reduce an array to 1-channel or 3-channel 8-bit layout."""
    if img.ndim == 3 and img.shape[2] == 4:
        img = cv2.cvtColor(img, cv2.COLOR_BGRA2BGR)
    elif img.ndim == 3 and img.shape[2] == 1:
        img = img[:, :, 0]
    if img.dtype == np.uint16:
        img = (img >> 8).astype(np.uint8)
    return img


def to_gray(img: np.ndarray) -> np.ndarray:
    """Convert BGR image to grayscale (no-op if already single-channel)."""
    if img.ndim == 2:
        return img
    if img.shape[2] == 1:
        return img[:, :, 0]
    return cv2.cvtColor(np.ascontiguousarray(img), cv2.COLOR_BGR2GRAY)


def as_buffer(img: ImageLike, *, grayscale: bool = False) -> PixelBuffer:
    """Load anything image-like into a PixelBuffer."""
    if isinstance(img, PixelBuffer) and not grayscale:
        return img
    return PixelBuffer.from_array(load_image(img, grayscale=grayscale))


__all__ = [
    "ImageLike",
    "load_image",
    "to_canonical",
    "to_gray",
    "as_buffer",
]
