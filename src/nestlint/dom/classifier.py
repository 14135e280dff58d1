# src/nestlint/dom/classifier.py
"""
Category classifier: maps an element to the categories it belongs to.

The result depends on the tag name and the attribute map only, never on the
element's position in the tree.
"""
from typing import Dict, Union

from .categories import (
    CATEGORY_MEMBERS,
    CONDITIONAL_CATEGORIES,
    EMPTY_CATEGORIES,
    SUBSUMES,
    TEXT_CATEGORIES,
    Category,
    CategorySet,
)
from .core import ElementNode, TextNode
from .tags import Tag


def _base_table() -> Dict[Tag, CategorySet]:
    table: Dict[Tag, set] = {tag: set() for tag in Tag}
    for category, tags in CATEGORY_MEMBERS.items():
        for tag in tags:
            table[tag].add(category)
    return {tag: frozenset(categories) for tag, categories in table.items()}


_BASE: Dict[Tag, CategorySet] = _base_table()


def base_categories(tag: Tag) -> CategorySet:
    return _BASE.get(tag, EMPTY_CATEGORIES)


def classify(node: ElementNode) -> CategorySet:
    """
    Returns the category set of an element: its base categories plus those
    added by satisfied attribute combinators. Unknown tags give the empty set.
    """
    tag = Tag.of(node.tag)
    categories = set(base_categories(tag))
    for conditional in CONDITIONAL_CATEGORIES.get(tag, ()):
        if conditional.applies(node.attrs):
            categories.update(conditional.adds)
    return frozenset(categories)


def categories_of(child: Union[ElementNode, TextNode]) -> CategorySet:
    """Like classify(), but text counts as flow and phrasing unless it is whitespace."""
    if isinstance(child, TextNode):
        return EMPTY_CATEGORIES if child.is_whitespace else TEXT_CATEGORIES
    return classify(child)


def is_a(child: Union[ElementNode, TextNode], category: Category) -> bool:
    """True if `child` may fill a slot that expects `category`."""
    accepted = SUBSUMES.get(category, frozenset({category}))
    return bool(categories_of(child) & accepted)
