from ..categories import Category
from ..contents import DescendantExclusion, Empty, Members, Transparent
from ..contexts import Expected
from ..core import RuleEntry

_PHRASING_ONLY = (
    "em", "strong", "small", "s", "cite", "q", "abbr", "data", "time", "code",
    "var", "samp", "kbd", "sub", "sup", "i", "b", "u", "mark", "bdi", "bdo", "span",
)


def _phrasing(tag_name: str, content) -> RuleEntry:
    """Element used where phrasing content is expected."""
    return RuleEntry(tag_name, contexts=[Expected(Category.PHRASING)], content=content)


DEFINITIONS = [
    # transparent, but there must be no interactive content descendant
    _phrasing("a", Transparent(exclude=DescendantExclusion(categories=[Category.INTERACTIVE]))),
    *(_phrasing(name, Members(Category.PHRASING)) for name in _PHRASING_ONLY),
    _phrasing("dfn", Members(Category.PHRASING, exclude=DescendantExclusion(tags=["dfn"]))),

    # Ruby annotations: the grammar of ruby and rtc, and where rb/rt/rtc/rp
    # may appear, is not enforced.
    RuleEntry("ruby", contexts=[Expected(Category.PHRASING)]),
    RuleEntry("rb", content=Members(Category.PHRASING)),
    RuleEntry("rt", content=Members(Category.PHRASING)),
    RuleEntry("rtc"),
    RuleEntry("rp", content=Members(Category.PHRASING)),

    _phrasing("br", Empty()),
    _phrasing("wbr", Empty()),
]
