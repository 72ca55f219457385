"""
Item store - thread-safe in-memory storage for the sample item endpoints.
"""

import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Item:
    id: str
    user_id: str
    name: str
    price: float
    created_at: datetime
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "price": self.price,
            "createdAt": self.created_at.isoformat(),
        }
        if self.description is not None:
            data["description"] = self.description
        return data


class ItemStore:
    """Items keyed by id. Safe to share across request threads."""

    def __init__(self):
        self._items: Dict[str, Item] = {}
        self._lock = threading.Lock()

    def add(self, user_id: str, name: str, price: float, description: Optional[str] = None) -> Item:
        item = Item(
            id=str(uuid.uuid4()),
            user_id=user_id,
            name=name,
            price=price,
            description=description,
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._items[item.id] = item
        return item

    def get(self, item_id: str) -> Optional[Item]:
        with self._lock:
            return self._items.get(item_id)

    def list_for_user(self, user_id: str, limit: Optional[int] = None) -> List[Item]:
        """Oldest first."""
        with self._lock:
            items = [item for item in self._items.values() if item.user_id == user_id]
        items.sort(key=lambda item: item.created_at)
        if limit is not None:
            items = items[:limit]
        return items
