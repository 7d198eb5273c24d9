"""Announcement model definition."""

from datetime import datetime
from typing import Any, Dict
from dataclasses import dataclass


@dataclass
class Announcement:
    """Campus-wide announcement, read-only for the engine."""
    id: str
    title: str
    content: str
    date: datetime
    author: str
    important: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'content': self.content,
            'date': self.date.isoformat(),
            'author': self.author,
            'important': self.important,
        }
