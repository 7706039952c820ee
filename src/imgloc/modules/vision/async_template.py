"""异步模板匹配包装器。

将同步的 find_all_templates / match_template / image_search offload 到
计算线程池，避免阻塞事件循环。
"""
from __future__ import annotations

import functools
from typing import List, Optional

from ...core.thread_pool import run_in_compute
from ..geometry.polygon import Polygon
from ..geometry.rect import Rect
from .image_search import SearchHit, search_with_options
from .template import (
    TemplateMatch,
    ZoneLike,
    find_all_templates as _sync_find_all,
    match_template as _sync_match,
)
from .utils import ImageLike


async def async_match_template(
    image: ImageLike,
    template: ImageLike,
    *,
    threshold: Optional[float] = None,
    search_zone: Optional[ZoneLike] = None,
    polygon: Optional[Polygon] = None,
) -> Optional[TemplateMatch]:
    """异步版本的 match_template，在计算线程池中执行。"""
    return await run_in_compute(
        functools.partial(
            _sync_match, image, template,
            threshold=threshold, search_zone=search_zone, polygon=polygon,
        )
    )


async def async_find_all_templates(
    image: ImageLike,
    template: ImageLike,
    *,
    threshold: Optional[float] = None,
    search_zone: Optional[ZoneLike] = None,
    polygon: Optional[Polygon] = None,
) -> List[TemplateMatch]:
    """异步版本的 find_all_templates，在计算线程池中执行。"""
    return await run_in_compute(
        functools.partial(
            _sync_find_all, image, template,
            threshold=threshold, search_zone=search_zone, polygon=polygon,
        )
    )


async def async_image_search(
    image: ImageLike,
    spec: str,
    region: Optional[Rect] = None,
) -> Optional[SearchHit]:
    """异步版本的 search_with_options，在计算线程池中执行。"""
    return await run_in_compute(search_with_options, image, spec, region)


__all__ = ["async_match_template", "async_find_all_templates", "async_image_search"]
