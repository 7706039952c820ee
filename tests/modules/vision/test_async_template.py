import cv2
import numpy as np
import pytest

from imgloc.core.thread_pool import shutdown_pools
from imgloc.modules.vision import SearchHit
from imgloc.modules.vision.async_template import (
    async_find_all_templates,
    async_image_search,
    async_match_template,
)


@pytest.fixture(autouse=True)
def _reset_pools():
    yield
    shutdown_pools()


@pytest.fixture()
def scene():
    source = np.zeros((24, 24, 3), dtype=np.uint8)
    source[4:8, 10:14] = (0, 200, 0)
    source[16:20, 3:7] = (0, 200, 0)
    template = source[4:8, 10:14].copy()
    return source, template


@pytest.mark.asyncio
async def test_async_find_all_templates(scene):
    source, template = scene

    matches = await async_find_all_templates(source, template, threshold=0.95)

    assert [(m.x, m.y) for m in matches] == [(10, 4), (3, 16)]


@pytest.mark.asyncio
async def test_async_match_template_with_zone(scene):
    source, template = scene

    best = await async_match_template(source, template, threshold=0.95, search_zone=(0, 12, 24, 12))

    assert (best.x, best.y) == (3, 16)


@pytest.mark.asyncio
async def test_async_image_search(tmp_path, scene):
    source, template = scene
    tpl_path = tmp_path / "green.png"
    cv2.imwrite(str(tpl_path), template)

    hit = await async_image_search(source, str(tpl_path))

    assert hit == SearchHit(10, 4, 4, 4)
