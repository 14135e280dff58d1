from ..categories import Category
from ..contents import Transparent
from ..contexts import Expected
from ..core import RuleEntry

DEFINITIONS = [
    RuleEntry(name, contexts=[Expected(Category.PHRASING)], content=Transparent())
    for name in ("ins", "del")
]
