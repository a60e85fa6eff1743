"""ImageCache aggregate: (day, meal type, meal name) -> data URI, 'loading' or 'failed'.

Keys are flattened to "<day>-<type>-<name>" strings so the cache persists as plain JSON.
"""
from typing import Dict, Optional

from nutriplan.utilities.constants import IMAGE_FAILED, IMAGE_LOADING


def cache_key(day_index: int, meal_type: str, meal_name: str) -> str:
    return f"{day_index}-{meal_type}-{meal_name}"


class ImageCache:
    def __init__(self, entries: Optional[Dict[str, str]] = None):
        self.entries: Dict[str, str] = dict(entries) if entries else {}

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: str) -> bool:
        return key in self.entries

    def __str__(self) -> str:
        loading = sum(1 for v in self.entries.values() if v == IMAGE_LOADING)
        failed = sum(1 for v in self.entries.values() if v == IMAGE_FAILED)
        return f"ImageCache - {len(self.entries)} entries ({loading} loading, {failed} failed)"

    __repr__ = __str__

    def get(self, day_index: int, meal_type: str, meal_name: str) -> Optional[str]:
        return self.entries.get(cache_key(day_index, meal_type, meal_name))

    def image_for(self, day_index: int, meal_type: str, meal_name: str) -> Optional[str]:
        """Return the usable payload, or None while loading / after failure / when absent."""
        value = self.get(day_index, meal_type, meal_name)
        if value in (None, IMAGE_LOADING, IMAGE_FAILED):
            return None
        return value

    def status_for(self, day_index: int, meal_type: str, meal_name: str) -> str:
        value = self.get(day_index, meal_type, meal_name)
        if value is None:
            return "absent"
        if value in (IMAGE_LOADING, IMAGE_FAILED):
            return value
        return "ready"

    def claim(self, key: str) -> bool:
        """Mark key as loading if it has no entry yet. Returns True when the caller owns the request."""
        if key in self.entries:
            return False
        self.entries[key] = IMAGE_LOADING
        return True

    def resolve(self, key: str, payload: Optional[str]) -> bool:
        """Store the outcome of a claimed request; ignored unless the entry is still loading."""
        if self.entries.get(key) != IMAGE_LOADING:
            return False
        self.entries[key] = payload or IMAGE_FAILED
        return True

    def drop_pending(self) -> int:
        """Forget every loading entry; used at startup when no request can still be in flight."""
        pending = [k for k, v in self.entries.items() if v == IMAGE_LOADING]
        for key in pending:
            del self.entries[key]
        return len(pending)

    def purge(self, day_index: int, meal_type: str, meal_name: str) -> bool:
        if not meal_name:
            return False
        return self.entries.pop(cache_key(day_index, meal_type, meal_name), None) is not None

    @staticmethod
    def from_dict(data) -> "ImageCache":
        d = data if isinstance(data, dict) else {}
        return ImageCache({str(k): v for k, v in d.items() if isinstance(v, str)})

    def to_dict(self) -> Dict[str, str]:
        return dict(self.entries)
