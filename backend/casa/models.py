from dataclasses import dataclass, field
from datetime import datetime, timezone
import re
from typing import Dict, List, Optional


_FRACTION = re.compile(r"\.(\d+)")


def _parse_timestamp(value) -> Optional[datetime]:
    if not value:
        return None
    text = str(value).strip().replace('Z', '+00:00')
    # fromisoformat wants exactly 6 fractional digits before 3.11; .NET writes 7
    text = _FRACTION.sub(lambda m: '.' + m.group(1)[:6].ljust(6, '0'), text, count=1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class CatalogItem:
    id: str
    slot: str
    category: str
    name: str
    cost: int
    image: str

    def __str__(self):
        return f"{self.name} ({self.slot}) - {self.cost}pt"

    def to_dict(self):
        return {
            'id': self.id,
            'slot': self.slot,
            'category': self.category,
            'name': self.name,
            'cost': self.cost,
            'image': self.image,
        }


@dataclass
class GameTimer:
    is_running: bool = False
    start_time: Optional[datetime] = None
    duration_seconds: int = 0
    cancelled: bool = False

    def to_dict(self):
        return {
            'isRunning': self.is_running,
            'startTime': self.start_time.isoformat() if self.start_time else None,
            'durationSeconds': self.duration_seconds,
            'cancelled': self.cancelled,
        }

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        # Dumps written by the first release used startUtc
        start = data.get('startTime', data.get('startUtc'))
        return cls(
            is_running=bool(data.get('isRunning', False)),
            start_time=_parse_timestamp(start),
            duration_seconds=int(data.get('durationSeconds') or 0),
            cancelled=bool(data.get('cancelled', False)),
        )


@dataclass
class House:
    slots: List[str] = field(default_factory=list)
    placed: Dict[str, str] = field(default_factory=dict)

    def to_dict(self):
        return {
            'slots': list(self.slots),
            'placed': dict(self.placed),
        }

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        return cls(
            slots=[str(s) for s in data.get('slots') or []],
            placed={str(k): str(v) for k, v in (data.get('placed') or {}).items()},
        )


@dataclass
class GameState:
    points: int = 0
    timer: GameTimer = field(default_factory=GameTimer)
    house: House = field(default_factory=House)
    catalog: List[CatalogItem] = field(default_factory=list)
    theme: str = 'default'
    achievements: List[str] = field(default_factory=list)

    def find_item(self, item_id: str) -> Optional[CatalogItem]:
        return next((item for item in self.catalog if item.id == item_id), None)

    def to_dict(self):
        return {
            'points': self.points,
            'timer': self.timer.to_dict(),
            'house': self.house.to_dict(),
            'catalog': [item.to_dict() for item in self.catalog],
            'theme': self.theme,
            'achievements': list(self.achievements),
        }
