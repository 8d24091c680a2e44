# File: src/models/common.py

import uuid
from dataclasses import dataclass, field
from datetime import datetime, date
from typing import Optional, Union

from src.core.config_manager import Config


def parse_datetime(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse a 'YYYY-MM-DDTHH:MM' string (or any ISO timestamp) into a naive datetime."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, Config.ALL_DAY_START)

    text = str(value).strip()
    if not text:
        return None
    try:
        return datetime.strptime(text, Config.DATETIME_FORMAT)
    except ValueError:
        # Fall back to the looser ISO parser (seconds, space separator)
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        # Stored times are naive; drop any offset rather than convert
        return parsed.replace(tzinfo=None)


@dataclass(frozen=True)
class SeriesId:
    """Label shared by every occurrence generated from one recurrence rule."""
    value: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def new(cls) -> 'SeriesId':
        return cls(uuid.uuid4())

    def __str__(self) -> str:
        return str(self.value)
