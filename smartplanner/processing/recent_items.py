"""
Recently used capture chips (tags, projects) kept in an explicit store.
"""

from collections import defaultdict

from ..constants import RECENT_ITEMS_LIMIT, RECENT_PROJECTS_KEY, RECENT_TAGS_KEY
from ..models.capture import ParsedTask


class RecentItemsStore:
    """Key-value store of most-recently-used items, newest first"""

    def __init__(self, limit: int = RECENT_ITEMS_LIMIT):
        self._items: dict[str, list[str]] = defaultdict(list)
        self.limit = limit

    def add(self, key: str, value: str) -> None:
        """Move ``value`` to the front of the list stored under ``key``"""
        value = value.strip()
        if not value:
            return
        items = self._items[key]
        if value in items:
            items.remove(value)
        items.insert(0, value)
        del items[self.limit:]

    def add_many(self, key: str, values: list[str]) -> None:
        """Add several values; the last one ends up most recent"""
        for value in values:
            self.add(key, value)

    def get(self, key: str) -> list[str]:
        """Items stored under ``key``, most recent first"""
        return list(self._items.get(key, []))

    def remove(self, key: str, value: str) -> bool:
        """Forget a single value"""
        items = self._items.get(key, [])
        if value in items:
            items.remove(value)
            return True
        return False

    def clear(self, key: str | None = None) -> None:
        """Clear one key, or everything"""
        if key is None:
            self._items.clear()
        elif key in self._items:
            del self._items[key]

    def remember_task(self, task: ParsedTask) -> None:
        """Record the tags and project of a committed task"""
        self.add_many(RECENT_TAGS_KEY, task.tags)
        if task.project_id:
            self.add(RECENT_PROJECTS_KEY, task.project_id)

    def recent_tags(self) -> list[str]:
        return self.get(RECENT_TAGS_KEY)

    def recent_projects(self) -> list[str]:
        return self.get(RECENT_PROJECTS_KEY)
