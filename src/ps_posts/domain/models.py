"""Domain models for ps_posts — pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Post:
    id: int
    title: str
    content: str
    created_at: datetime
