"""セッション保存データの複製"""

from __future__ import annotations

import copy
from typing import TypeVar

T = TypeVar("T")


def deep_copy(value: T) -> T:
    """ネストしたオブジェクトを共有しない ``value`` の複製を返す"""
    return copy.deepcopy(value)


__all__ = ["deep_copy"]
