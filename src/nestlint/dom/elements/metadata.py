from ..categories import Category
from ..contents import Empty, TextOnly
from ..contexts import (
    AnyOf, ByAttribute, Expected, ParentIs, UniqueAmongSiblings, attr_equals, has_attr,
)
from ..core import RuleEntry


def _in_head():
    return ParentIs(["head"])


def _in_head_or_head_noscript():
    return ParentIs(["head"], through=["noscript"])


DEFINITIONS = [
    RuleEntry(
        "title",
        contexts=[_in_head(), UniqueAmongSiblings()],
        content=TextOnly()
    ),
    RuleEntry(
        "base",
        contexts=[_in_head(), UniqueAmongSiblings()],
        content=Empty()
    ),
    RuleEntry(
        "link",
        contexts=[ByAttribute(
            [(has_attr("itemprop"), [Expected(Category.PHRASING)])],
            default=[AnyOf(Expected(Category.METADATA), _in_head_or_head_noscript())]
        )],
        content=Empty()
    ),
    RuleEntry(
        "meta",
        contexts=[ByAttribute(
            [
                # encoding declaration
                (has_attr("charset"), [_in_head()]),
                (attr_equals("http-equiv", "content-type"), [_in_head()]),
                # any other pragma
                (has_attr("http-equiv"), [_in_head_or_head_noscript()]),
                (has_attr("name"), [Expected(Category.METADATA)]),
                (has_attr("itemprop"), [Expected(Category.PHRASING)]),
            ],
            default=[Expected(Category.METADATA)]
        )],
        content=Empty()
    ),
    # Style sheets are raw text; their content is not checked.
    RuleEntry(
        "style",
        contexts=[AnyOf(Expected(Category.METADATA), _in_head_or_head_noscript())]
    ),
]
