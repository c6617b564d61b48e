"""Todoリストが未登録のセッションに投入する初期データ"""

from __future__ import annotations

from typing import Any, Dict, List

from .ids import next_id


def _todo(title: str, done: bool = False) -> Dict[str, Any]:
    return {"id": next_id(), "title": title, "done": done}


SEED_DATA: List[Dict[str, Any]] = [
    {
        "id": next_id(),
        "title": "Work Todos",
        "todos": [
            _todo("Get coffee", done=True),
            _todo("Chat with co-workers", done=True),
            _todo("Duck out of meeting"),
        ],
    },
    {
        "id": next_id(),
        "title": "Home Todos",
        "todos": [
            _todo("Feed the cats", done=True),
            _todo("Go to bed", done=True),
            _todo("Buy milk", done=True),
            _todo("Study for the exam", done=True),
        ],
    },
    {
        "id": next_id(),
        "title": "Additional Todos",
        "todos": [],
    },
    {
        "id": next_id(),
        "title": "social todos",
        "todos": [
            _todo("Go to Libby's birthday party"),
        ],
    },
]


__all__ = ["SEED_DATA"]
