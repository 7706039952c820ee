"""
全局线程池管理

提供统一的计算线程池，供 async 包装器将 CPU 密集的模板匹配
offload 到线程，避免阻塞事件循环。每次匹配调用只读取自己的
像素缓冲区，因此可以安全地并发执行。
"""
from __future__ import annotations

import asyncio
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from .config import settings
from .logger import logger

_compute_pool: Optional[ThreadPoolExecutor] = None
_pool_lock = threading.Lock()


def _auto_compute_pool_size() -> int:
    """根据 CPU 核数自动计算计算线程池大小。

    规则: max(2, cpu_count // 2)，上限 16。
    """
    cpu = os.cpu_count() or 4
    return min(max(2, cpu // 2), 16)


def get_compute_pool() -> ThreadPoolExecutor:
    """获取计算线程池（模板匹配、图像搜索等）。"""
    global _compute_pool
    with _pool_lock:
        if _compute_pool is None:
            size = settings.compute_thread_pool_size
            if size <= 0:
                size = _auto_compute_pool_size()
            _compute_pool = ThreadPoolExecutor(
                max_workers=size,
                thread_name_prefix="imgloc-compute",
            )
            logger.info("计算线程池已创建: max_workers={}", size)
        return _compute_pool


async def run_in_compute(func, *args):
    """在计算线程池中执行同步函数并 await 结果。"""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(get_compute_pool(), func, *args)


def shutdown_pools() -> None:
    """关闭线程池（进程退出或测试清理时调用）。"""
    global _compute_pool
    with _pool_lock:
        if _compute_pool:
            _compute_pool.shutdown(wait=False)
            _compute_pool = None
            logger.info("线程池已关闭")
