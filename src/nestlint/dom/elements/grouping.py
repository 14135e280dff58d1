from ..categories import Category
from ..contents import DescendantExclusion, Empty, Groups, Members
from ..contexts import Expected, FirstOrLastChildOf, NoAncestor, ParentIs
from ..core import RuleEntry


def _flow(tag_name: str, content) -> RuleEntry:
    """Element used where flow content is expected."""
    return RuleEntry(tag_name, contexts=[Expected(Category.FLOW)], content=content)


def _list_items() -> Members:
    # zero or more li and script-supporting elements
    return Members(tags=["li"], script_supporting=True)


DEFINITIONS = [
    _flow("p", Members(Category.PHRASING)),
    _flow("hr", Empty()),
    _flow("pre", Members(Category.PHRASING)),
    _flow("blockquote", Members(Category.FLOW)),
    _flow("ol", _list_items()),
    _flow("ul", _list_items()),
    RuleEntry("li", contexts=[ParentIs(["ol", "ul", "menu"])], content=Members(Category.FLOW)),
    _flow("dl", Groups("dt", "dd")),
    RuleEntry(
        "dt",
        contexts=[ParentIs(["dl"])],
        content=Members(
            Category.FLOW,
            exclude=DescendantExclusion(
                tags=["header", "footer"],
                categories=[Category.SECTIONING, Category.HEADING]
            )
        )
    ),
    RuleEntry("dd", contexts=[ParentIs(["dl"])], content=Members(Category.FLOW)),
    # placement of the figcaption is checked on the figcaption itself
    _flow("figure", Members(Category.FLOW, tags=["figcaption"], limits={"figcaption": 1})),
    RuleEntry("figcaption", contexts=[FirstOrLastChildOf("figure")], content=Members(Category.FLOW)),
    _flow("div", Members(Category.FLOW)),
    RuleEntry(
        "main",
        contexts=[Expected(Category.FLOW), NoAncestor(["article", "aside", "footer", "header", "nav"])],
        content=Members(Category.FLOW)
    ),
]
