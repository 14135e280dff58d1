from ..categories import Category
from ..contents import DescendantExclusion, Empty, Transparent, WhenAttribute
from ..contexts import BeforeAny, Expected, HasAncestor, ParentIs
from ..core import RuleEntry
from ..tags import MEDIA_TAGS

_MEDIA = sorted(t.value for t in MEDIA_TAGS)


def _embedded(tag_name: str, content=None) -> RuleEntry:
    """Element used where embedded content is expected."""
    return RuleEntry(tag_name, contexts=[Expected(Category.EMBEDDED)], content=content)


def _media_content() -> WhenAttribute:
    # with src: track elements, then transparent (no source elements)
    # without src: source elements, then track elements, then transparent
    # either way no media element descendants
    return WhenAttribute(
        "src",
        present=Transparent(
            skip=["track"], forbid=["source"], exclude=DescendantExclusion(tags=_MEDIA)
        ),
        absent=Transparent(
            skip=["source", "track"], exclude=DescendantExclusion(tags=_MEDIA)
        )
    )


DEFINITIONS = [
    _embedded("img", Empty()),
    # iframe content is text parsed by its own rules; not checked
    _embedded("iframe"),
    _embedded("embed", Empty()),
    # zero or more param elements, then transparent
    _embedded("object", Transparent(skip=["param"])),
    RuleEntry(
        "param",
        contexts=[ParentIs(["object"]), BeforeAny(categories=[Category.FLOW])],
        content=Empty()
    ),
    _embedded("video", _media_content()),
    _embedded("audio", _media_content()),
    RuleEntry(
        "source",
        contexts=[ParentIs(_MEDIA), BeforeAny(tags=["track"], categories=[Category.FLOW])],
        content=Empty()
    ),
    RuleEntry(
        "track",
        contexts=[ParentIs(_MEDIA), BeforeAny(categories=[Category.FLOW])],
        content=Empty()
    ),
    RuleEntry("map", contexts=[Expected(Category.PHRASING)], content=Transparent()),
    RuleEntry(
        "area",
        contexts=[Expected(Category.PHRASING), HasAncestor(["map", "template"])],
        content=Empty()
    ),
]
