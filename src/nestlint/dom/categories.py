# src/nestlint/dom/categories.py
"""
Shared category vocabulary for the nest engine.

Every table in this module is built once at import time and exposed
read-only. Rules query it; nothing writes to it.
"""
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple

from .tags import Tag, HEADING_TAGS


class Category(str, Enum):
    """Abstract content categories an element can belong to."""
    FLOW = "flow content"
    PHRASING = "phrasing content"
    METADATA = "metadata content"
    SECTIONING = "sectioning content"
    SECTIONING_ROOT = "sectioning root"
    HEADING = "heading content"
    EMBEDDED = "embedded content"
    INTERACTIVE = "interactive content"
    PALPABLE = "palpable content"
    FORM_ASSOCIATED = "form-associated element"
    SCRIPT_SUPPORTING = "script-supporting element"

    # Content-model keywords. They describe what an element accepts,
    # never what it is, so no tag is ever a member.
    TRANSPARENT = "transparent"
    NONE = "none"


CategorySet = FrozenSet[Category]

EMPTY_CATEGORIES: CategorySet = frozenset()


def _tags(*names: str) -> FrozenSet[Tag]:
    return frozenset(Tag(name) for name in names)


_PHRASING = _tags(
    "a", "abbr", "area", "audio", "b", "bdi", "bdo", "br", "button", "canvas",
    "cite", "code", "data", "datalist", "del", "dfn", "em", "embed", "i",
    "iframe", "img", "input", "ins", "kbd", "keygen", "label", "map", "mark",
    "math", "meter", "noscript", "object", "output", "progress", "q", "ruby",
    "s", "samp", "script", "select", "small", "span", "strong", "sub", "sup",
    "svg", "template", "textarea", "time", "u", "var", "video", "wbr",
)

_FLOW = _PHRASING | HEADING_TAGS | _tags(
    "address", "article", "aside", "blockquote", "details", "dialog", "div",
    "dl", "fieldset", "figure", "footer", "form", "header", "hr", "main",
    "menu", "nav", "ol", "p", "pre", "section", "table", "ul",
)

CATEGORY_MEMBERS: Mapping[Category, FrozenSet[Tag]] = MappingProxyType({
    Category.FLOW: _FLOW,
    Category.PHRASING: _PHRASING,
    Category.METADATA: _tags(
        "base", "link", "meta", "noscript", "script", "style", "template", "title",
    ),
    Category.SECTIONING: _tags("article", "aside", "nav", "section"),
    Category.SECTIONING_ROOT: _tags(
        "blockquote", "body", "details", "dialog", "fieldset", "figure", "td",
    ),
    Category.HEADING: HEADING_TAGS,
    Category.EMBEDDED: _tags(
        "audio", "canvas", "embed", "iframe", "img", "math", "object", "svg", "video",
    ),
    Category.INTERACTIVE: _tags(
        "a", "button", "details", "embed", "iframe", "keygen", "label", "select", "textarea",
    ),
    Category.PALPABLE: HEADING_TAGS | _tags(
        "a", "abbr", "address", "article", "aside", "b", "bdi", "bdo", "blockquote",
        "button", "canvas", "cite", "code", "data", "details", "dfn", "div", "em",
        "embed", "fieldset", "figure", "footer", "form", "header", "i", "iframe",
        "img", "ins", "kbd", "keygen", "label", "main", "map", "mark", "math",
        "meter", "nav", "object", "output", "p", "pre", "progress", "q", "ruby",
        "s", "samp", "section", "select", "small", "span", "strong", "sub", "sup",
        "svg", "table", "textarea", "time", "u", "var", "video",
    ),
    Category.FORM_ASSOCIATED: _tags(
        "button", "fieldset", "img", "input", "keygen", "label", "object",
        "output", "select", "textarea",
    ),
    Category.SCRIPT_SUPPORTING: _tags("script", "template"),
    Category.TRANSPARENT: frozenset(),
    Category.NONE: frozenset(),
})

# A slot expecting the key category also accepts elements of these categories.
SUBSUMES: Mapping[Category, CategorySet] = MappingProxyType({
    Category.FLOW: frozenset({
        Category.FLOW, Category.PHRASING, Category.HEADING, Category.SECTIONING,
        Category.EMBEDDED, Category.INTERACTIVE,
    }),
    Category.PHRASING: frozenset({Category.PHRASING, Category.EMBEDDED}),
    Category.METADATA: frozenset({Category.METADATA}),
})

TEXT_CATEGORIES: CategorySet = frozenset({Category.FLOW, Category.PHRASING})


def slot_accepts(slot: Category, wanted: Category) -> bool:
    """True if a slot expecting `slot` content accepts `wanted` content."""
    return wanted in SUBSUMES.get(slot, frozenset({slot}))


@dataclass(frozen=True)
class Conditional:
    """
    Adds categories to an element depending on one attribute.

    With `value` unset the attribute's presence decides (its value is
    ignored); with `value` set the categories are added unless the attribute
    equals that value, case-insensitively.
    """
    attr: str
    adds: CategorySet
    value: Optional[str] = None

    def applies(self, attrs: Mapping[str, str]) -> bool:
        if self.value is not None:
            return str(attrs.get(self.attr, "")).strip().lower() != self.value
        return self.attr in attrs


def when_present(attr: str, *categories: Category) -> Conditional:
    return Conditional(attr, frozenset(categories))


def unless_equals(attr: str, value: str, *categories: Category) -> Conditional:
    return Conditional(attr, frozenset(categories), value=value.lower())


CONDITIONAL_CATEGORIES: Mapping[Tag, Tuple[Conditional, ...]] = MappingProxyType({
    Tag.IMG: (when_present("usemap", Category.INTERACTIVE),),
    Tag.OBJECT: (when_present("usemap", Category.INTERACTIVE),),
    Tag.VIDEO: (when_present("controls", Category.INTERACTIVE),),
    Tag.AUDIO: (when_present("controls", Category.INTERACTIVE, Category.PALPABLE),),
    Tag.INPUT: (unless_equals("type", "hidden", Category.INTERACTIVE, Category.PALPABLE),),
    Tag.LINK: (when_present("itemprop", Category.FLOW, Category.PHRASING),),
    Tag.META: (when_present("itemprop", Category.FLOW, Category.PHRASING),),
})
