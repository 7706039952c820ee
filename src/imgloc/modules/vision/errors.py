"""匹配失败异常"""


class FormatMismatchError(ValueError):
    """源图与模板像素格式不一致，或格式不受支持（仅支持 1/3 通道 8 位）"""
    pass


class SizeViolationError(ValueError):
    """模板尺寸大于裁剪后的搜索区域"""
    pass


__all__ = ["FormatMismatchError", "SizeViolationError"]
