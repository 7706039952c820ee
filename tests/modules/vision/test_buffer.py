import numpy as np
import pytest

from imgloc.modules.geometry import Rect
from imgloc.modules.vision import FormatMismatchError, PixelBuffer


def test_from_bytes_honours_stride_and_offset():
    # two junk bytes, then rows of three pixels padded to four bytes
    raw = bytes([99, 99, 1, 2, 3, 0, 4, 5, 6])

    buf = PixelBuffer.from_bytes(raw, width=3, height=2, channels=1, stride=4, offset=2)

    assert (buf.width, buf.height, buf.channels) == (3, 2, 1)
    assert buf.stride == 4
    assert buf.pixel_at(0, 0) == 1
    assert buf.pixel_at(1, 2) == 6
    assert buf.row(1)[:, 0].tolist() == [4, 5, 6]


def test_from_bytes_interleaved_channels():
    raw = bytes(range(12))

    buf = PixelBuffer.from_bytes(raw, width=2, height=2, channels=3)

    assert buf.pixel_at(1, 0, 2) == 8
    assert buf.stride == 6


def test_from_bytes_too_short():
    with pytest.raises(ValueError):
        PixelBuffer.from_bytes(bytes(8), width=3, height=2, channels=1, stride=4, offset=2)


def test_unsupported_formats_rejected():
    with pytest.raises(FormatMismatchError):
        PixelBuffer.from_array(np.zeros((4, 4), dtype=np.float32))
    with pytest.raises(FormatMismatchError):
        PixelBuffer.from_array(np.zeros((4, 4, 4), dtype=np.uint8))
    with pytest.raises(FormatMismatchError):
        PixelBuffer.from_bytes(bytes(16), width=2, height=2, channels=4)


def test_pixel_at_out_of_bounds():
    buf = PixelBuffer.from_array(np.zeros((3, 5), dtype=np.uint8))

    with pytest.raises(IndexError):
        buf.pixel_at(3, 0)
    with pytest.raises(IndexError):
        buf.pixel_at(0, 5)
    with pytest.raises(IndexError):
        buf.pixel_at(0, 0, 1)


def test_region_is_read_only_view():
    arr = np.arange(48, dtype=np.uint8).reshape(6, 8)
    buf = PixelBuffer.from_array(arr)

    sub = buf.region(Rect(2, 1, 3, 2))

    assert (sub.width, sub.height) == (3, 2)
    assert sub.pixel_at(0, 0) == arr[1, 2]
    assert np.shares_memory(sub.data, arr)
    assert not sub.data.flags.writeable
    with pytest.raises(IndexError):
        buf.region(Rect(6, 0, 3, 2))
    with pytest.raises(IndexError):
        buf.region(Rect(0, 0, 0, 2))
