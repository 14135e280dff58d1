from ..categories import Category
from ..contents import DescendantExclusion, Empty, Members, Ordered, WhenAttribute, segment
from ..contexts import Expected, ParentIs
from ..core import RuleEntry

# caption?, colgroup*, thead?, tfoot?, (tbody* | tr+), tfoot?
# with at most one tfoot in total, script-supporting elements anywhere
TABLE_CONTENT = Ordered(
    [
        segment("caption", max=1),
        segment("colgroup"),
        segment("thead", max=1),
        segment("tfoot", max=1),
        segment("tbody", "tr"),
        segment("tfoot", max=1),
    ],
    caps={"tfoot": 1},
    exclusive=[(["tbody"], ["tr"])],
    script_supporting=True
)


def _row_group(tag_name: str) -> RuleEntry:
    # zero or more tr and script-supporting elements
    return RuleEntry(
        tag_name,
        contexts=[ParentIs(["table"])],
        content=Members(tags=["tr"], script_supporting=True)
    )


DEFINITIONS = [
    RuleEntry("table", contexts=[Expected(Category.FLOW)], content=TABLE_CONTENT),
    RuleEntry(
        "caption",
        contexts=[ParentIs(["table"])],
        content=Members(Category.FLOW, exclude=DescendantExclusion(tags=["table"]))
    ),
    RuleEntry(
        "colgroup",
        contexts=[ParentIs(["table"])],
        content=WhenAttribute("span", present=Empty(), absent=Members(tags=["col", "template"]))
    ),
    RuleEntry("col", contexts=[ParentIs(["colgroup"])], content=Empty()),
    _row_group("tbody"),
    _row_group("thead"),
    _row_group("tfoot"),
    RuleEntry(
        "tr",
        contexts=[ParentIs(["table", "thead", "tbody", "tfoot"])],
        content=Members(tags=["td", "th"], script_supporting=True)
    ),
    RuleEntry("td", contexts=[ParentIs(["tr"])], content=Members(Category.FLOW)),
    RuleEntry(
        "th",
        contexts=[ParentIs(["tr"])],
        content=Members(
            Category.FLOW,
            exclude=DescendantExclusion(
                tags=["header", "footer"],
                categories=[Category.SECTIONING, Category.HEADING]
            )
        )
    ),
]
