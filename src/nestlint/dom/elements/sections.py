from ..categories import Category
from ..contents import DescendantExclusion, Members
from ..contexts import Expected, NoAncestor
from ..core import RuleEntry


def _sectioning(tag_name: str) -> RuleEntry:
    return RuleEntry(tag_name, contexts=[Expected(Category.FLOW)], content=Members(Category.FLOW))


def _heading(tag_name: str) -> RuleEntry:
    return RuleEntry(tag_name, contexts=[Expected(Category.FLOW)], content=Members(Category.PHRASING))


def _landmark(tag_name: str) -> RuleEntry:
    # header/footer: no header or footer element ancestors
    return RuleEntry(
        tag_name,
        contexts=[Expected(Category.FLOW), NoAncestor(["header", "footer"])],
        content=Members(Category.FLOW)
    )


DEFINITIONS = [
    *(_sectioning(name) for name in ("article", "section", "nav", "aside")),
    *(_heading(f"h{level}") for level in range(1, 7)),
    _landmark("header"),
    _landmark("footer"),
    RuleEntry(
        "address",
        contexts=[Expected(Category.FLOW)],
        content=Members(
            Category.FLOW,
            exclude=DescendantExclusion(
                tags=["header", "footer", "address"],
                categories=[Category.HEADING, Category.SECTIONING]
            )
        )
    ),
]
