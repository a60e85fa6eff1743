"""ShoppingList aggregate: ordered categories of items parsed from the markdown list text."""
from typing import List, Optional


class ShoppingCategory:
    def __init__(self, title: str, items: Optional[List[str]] = None):
        self.title = title
        self.items = items[:] if items else []

    def __eq__(self, other):
        if not isinstance(other, ShoppingCategory):
            return NotImplemented
        return self.title == other.title and self.items == other.items

    def __str__(self) -> str:
        return f"{self.title}: {', '.join(self.items)}"

    __repr__ = __str__

    def to_dict(self):
        return {"title": self.title, "items": list(self.items)}


class ShoppingList:
    def __init__(self, text: str = "", categories: Optional[List[ShoppingCategory]] = None):
        self.text = text or ""
        self.categories = categories[:] if categories else []

    @property
    def is_available(self) -> bool:
        '''False means "not generated yet": nothing recognizable in the text.'''
        return bool(self.categories)

    def item_count(self) -> int:
        return sum(len(c.items) for c in self.categories)

    def __str__(self) -> str:
        return f"Shopping List - {len(self.categories)} categories, {self.item_count()} items"

    def __repr__(self) -> str:
        return self.__str__()

    def to_dict(self):
        return {
            "available": self.is_available,
            "categories": [c.to_dict() for c in self.categories],
        }
