"""结果编码：管道符分隔的字符串协议"""
from __future__ import annotations

from typing import Optional, Sequence

from ..vision.image_search import SearchHit
from ..vision.template import TemplateMatch

# 空结果或失败
SENTINEL = "-1"
# image_search 未找到
NOT_FOUND = "0"


def encode_matches(matches: Sequence[TemplateMatch]) -> str:
    """``count|cx|cy|cx|cy...``，坐标为匹配区域中心（锚点 + 模板尺寸一半）。"""
    if not matches:
        return SENTINEL
    parts = [str(len(matches))]
    for m in matches:
        cx, cy = m.center
        parts.append(str(cx))
        parts.append(str(cy))
    return "|".join(parts)


def encode_hit(hit: Optional[SearchHit]) -> str:
    """``1|x|y|w|h``（左上角坐标 + 模板尺寸），未找到为 ``0``。"""
    if hit is None:
        return NOT_FOUND
    return f"1|{hit.x}|{hit.y}|{hit.w}|{hit.h}"


__all__ = ["SENTINEL", "NOT_FOUND", "encode_matches", "encode_hit"]
