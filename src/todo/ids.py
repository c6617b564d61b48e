"""TodoリストとTodoの数値ID採番"""

from __future__ import annotations

from typing import Iterable

_last_id = 0


def next_id() -> int:
    """新しいIDを返す（プロセス内で単調増加）"""
    global _last_id
    _last_id += 1
    return _last_id


def reserve_ids(ids: Iterable[int]) -> None:
    """既存のIDより大きい値から採番を続けるようにする

    再起動後に引き継いだセッションのIDと重複しないよう、
    セッション取り込み時に呼び出す。
    """
    global _last_id
    _last_id = max([_last_id, *ids])


__all__ = ["next_id", "reserve_ids"]
