"""Shopping list markdown parser.

Shared by the review view and the print output. parse_shopping_list(text) is pure:
the same text always yields the same ordered categories.
"""
import re
from typing import List, Optional

from nutriplan.domain.ShoppingList import ShoppingCategory, ShoppingList
from nutriplan.utilities.constants import GENERAL_CATEGORY

_HEADING_RE = re.compile(r"^#{1,6}\s+(.+?)\s*#*\s*$")
_BOLD_RE = re.compile(r"^\*\*(.+?)\*\*:?\s*$")
_BULLET_RE = re.compile(r"^-\s+(.*)$")


def _heading(line: str) -> Optional[str]:
    m = _HEADING_RE.match(line) or _BOLD_RE.match(line)
    if not m:
        return None
    title = m.group(1).strip().strip("*").strip()
    return title.rstrip(":").strip() or None


def _bullet(line: str) -> Optional[str]:
    m = _BULLET_RE.match(line)
    if not m:
        return None
    item = m.group(1).strip()
    return item or None


def parse_categories(text: str) -> List[ShoppingCategory]:
    """Split markdown into categories.

    - '### Title' or a bold-only line ('**Title**') opens a category.
    - '- item' lines belong to the latest category; text before the first heading is ignored.
    - Categories without items are dropped.
    - No headings but some bullets -> one 'General' category with every bullet, in order.
    - Nothing recognizable -> [].
    """
    if not text or not text.strip():
        return []

    categories: List[ShoppingCategory] = []
    loose_items: List[str] = []
    current: Optional[ShoppingCategory] = None
    saw_heading = False

    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue
        title = _heading(line)
        if title is not None:
            saw_heading = True
            current = ShoppingCategory(title)
            categories.append(current)
            continue
        item = _bullet(line)
        if item is None:
            continue
        if current is not None:
            current.items.append(item)
        else:
            loose_items.append(item)

    if not saw_heading:
        return [ShoppingCategory(GENERAL_CATEGORY, loose_items)] if loose_items else []
    return [c for c in categories if c.items]


def parse_shopping_list(text: str) -> ShoppingList:
    return ShoppingList(text or "", parse_categories(text or ""))


__all__ = ['parse_categories', 'parse_shopping_list']
