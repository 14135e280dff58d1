from nestlint.model import Severity
from ..categories import Category
from ..contents import Members, Ordered, segment
from ..contexts import DocumentRoot, NthChildOf
from ..core import RuleEntry

# Document structure findings are errors; the page is broken without them.

DEFINITIONS = [
    RuleEntry(
        "html",
        contexts=[DocumentRoot(severity=Severity.ERROR)],
        # a head element followed by a body element
        content=Ordered(
            [segment("head", min=1, max=1), segment("body", min=1, max=1)],
            severity=Severity.ERROR
        )
    ),
    RuleEntry(
        "head",
        contexts=[NthChildOf("html", 0, severity=Severity.ERROR)],
        # metadata content; title and base report their own duplicates
        content=Members(Category.METADATA)
    ),
    RuleEntry(
        "body",
        contexts=[NthChildOf("html", 1, after=["head"], severity=Severity.ERROR)],
        content=Members(Category.FLOW)
    ),
]
