# src/nestlint/dom/contexts.py
"""
Reusable context rules.

A context rule decides whether an element may sit where it is, looking at its
ancestor chain and, for ordering rules, at its sibling run. Every failing rule
yields exactly one diagnostic; independent rules on one element may each fire.

An element without a parent is a document root. Only `DocumentRoot` says
anything about it (it must be the only one); every other rule treats it as
legal.
"""
from typing import Callable, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from nestlint.model import Diagnostic, Severity
from .categories import Category
from .classifier import is_a
from .core import ElementNode, TextNode, check_codes, collect_codes, report
from .tags import Tag

# (code, message) of a failed rule
Violation = Tuple[str, str]


def _tagset(tags: Iterable[str]) -> frozenset:
    return frozenset(Tag.of(t) for t in tags)


def _names(tags: Iterable[Tag]) -> str:
    return ", ".join(sorted(f"<{t.value}>" for t in tags))


class ContextRule:
    """Base class. Subclasses implement violation() and declare their codes on it."""
    applies_to_root = False

    def __init__(self, severity: Severity = Severity.WARN):
        self.severity = severity

    @property
    def codes(self) -> Set[str]:
        return collect_codes(type(self).violation)

    def violation(self, node: ElementNode) -> Optional[Violation]:
        raise NotImplementedError

    def failure(self, node: ElementNode) -> Optional[Violation]:
        if node.parent is None and not self.applies_to_root:
            return None
        return self.violation(node)

    def check(self, node: ElementNode) -> List[Diagnostic]:
        found = self.failure(node)
        if found is None:
            return []
        code, message = found
        return [report(code, node, message, self.severity)]


class DocumentRoot(ContextRule):
    """The element must be the root of the document, and the only top-level element."""
    applies_to_root = True

    @check_codes(codes=["CONTEXT_NOT_DOCUMENT_ROOT"])
    def violation(self, node):
        if node.parent is not None:
            return ("CONTEXT_NOT_DOCUMENT_ROOT",
                    f"<{node.tag}> must be the root element of the document, found inside <{node.parent.tag}>")
        others = [s for s in node.previous_siblings() + node.next_siblings() if isinstance(s, ElementNode)]
        if others:
            return ("CONTEXT_NOT_DOCUMENT_ROOT",
                    f"<{node.tag}> must be the only root element of the document, found next to <{others[0].tag}>")
        return None


class Expected(ContextRule):
    """
    "Where <category> is expected", judged by the nearest ancestor with a
    content model. When that ancestor is the parent, its own content check
    already reports a child it rejects, so this rule stays silent. Ancestors
    without a model are looked through; a <template> accepts anything.
    """

    def __init__(self, category: Category, severity: Severity = Severity.WARN):
        super().__init__(severity)
        self.category = category

    @check_codes(codes=["CONTEXT_CATEGORY_NOT_EXPECTED"])
    def violation(self, node):
        from .registry import DOMRegistry

        for ancestor in node.ancestors():
            if Tag.of(ancestor.tag) is Tag.TEMPLATE:
                return None
            model = DOMRegistry.content_model(ancestor)
            if model is None:
                continue
            if ancestor is node.parent or model.select(ancestor).accepts(ancestor, self.category):
                return None
            return ("CONTEXT_CATEGORY_NOT_EXPECTED",
                    f"<{node.tag}> must be used where {self.category.value} is expected, "
                    f"<{ancestor.tag}> does not accept it")
        return None


class ParentIs(ContextRule):
    """
    The parent must be one of `tags`. With `through`, the parent may also be one
    of those wrappers, provided the wrapper's own parent is one of `tags`.
    """

    def __init__(self, tags: Sequence[str], through: Sequence[str] = (), severity: Severity = Severity.WARN):
        super().__init__(severity)
        self.tags = _tagset(tags)
        self.through = _tagset(through)

    @check_codes(codes=["CONTEXT_WRONG_PARENT"])
    def violation(self, node):
        parent = node.parent
        parent_tag = Tag.of(parent.tag)
        if parent_tag in self.tags:
            return None
        if parent_tag in self.through and parent.parent is not None and Tag.of(parent.parent.tag) in self.tags:
            return None
        expected = _names(self.tags)
        if self.through:
            expected += f" (or {_names(self.through)} inside one)"
        return ("CONTEXT_WRONG_PARENT", f"<{node.tag}> must be a child of {expected}, found in <{parent.tag}>")


class NthChildOf(ContextRule):
    """
    The element must be the `index`-th element child (0-based) of a `parent`
    element, and the element children before it must carry the `after` tags.
    """

    def __init__(self, parent: str, index: int, after: Sequence[str] = (), severity: Severity = Severity.WARN):
        super().__init__(severity)
        self.parent = Tag.of(parent)
        self.index = index
        self.after = tuple(Tag.of(t) for t in after)

    @check_codes(codes=["CONTEXT_WRONG_PARENT", "CONTEXT_WRONG_POSITION"])
    def violation(self, node):
        if Tag.of(node.parent.tag) != self.parent:
            return ("CONTEXT_WRONG_PARENT",
                    f"<{node.tag}> must be a child of <{self.parent.value}>, found in <{node.parent.tag}>")

        before = [s for s in node.previous_siblings() if isinstance(s, ElementNode)]
        position_ok = len(before) == self.index
        if position_ok and self.after:
            position_ok = tuple(Tag.of(s.tag) for s in before) == self.after
        if not position_ok:
            ordinal = {0: "first", 1: "second", 2: "third"}.get(self.index, f"#{self.index + 1}")
            return ("CONTEXT_WRONG_POSITION",
                    f"<{node.tag}> must be the {ordinal} element in <{self.parent.value}>")
        return None


class FirstOrLastChildOf(ContextRule):

    def __init__(self, parent: str, severity: Severity = Severity.WARN):
        super().__init__(severity)
        self.parent = Tag.of(parent)

    @check_codes(codes=["CONTEXT_WRONG_PARENT", "CONTEXT_WRONG_POSITION"])
    def violation(self, node):
        if Tag.of(node.parent.tag) != self.parent:
            return ("CONTEXT_WRONG_PARENT",
                    f"<{node.tag}> must be a child of <{self.parent.value}>, found in <{node.parent.tag}>")
        elements = node.parent.element_children
        if elements[0] is node or elements[-1] is node:
            return None
        return ("CONTEXT_WRONG_POSITION",
                f"<{node.tag}> must be the first or last element in <{self.parent.value}>")


class UniqueAmongSiblings(ContextRule):
    """No earlier element child of the parent may share this element's tag."""

    @check_codes(codes=["CONTEXT_DUPLICATE_SIBLING"])
    def violation(self, node):
        for sibling in node.previous_siblings():
            if isinstance(sibling, ElementNode) and sibling.tag == node.tag:
                return ("CONTEXT_DUPLICATE_SIBLING",
                        f"<{node.parent.tag}> must not contain more than one <{node.tag}>")
        return None


class NoAncestor(ContextRule):

    def __init__(self, tags: Sequence[str], severity: Severity = Severity.WARN):
        super().__init__(severity)
        self.tags = _tagset(tags)

    @check_codes(codes=["CONTEXT_FORBIDDEN_ANCESTOR"])
    def violation(self, node):
        for ancestor in node.ancestors():
            if Tag.of(ancestor.tag) in self.tags:
                return ("CONTEXT_FORBIDDEN_ANCESTOR",
                        f"<{node.tag}> must not be a descendant of <{ancestor.tag}>")
        return None


class HasAncestor(ContextRule):

    def __init__(self, tags: Sequence[str], severity: Severity = Severity.WARN):
        super().__init__(severity)
        self.tags = _tagset(tags)

    @check_codes(codes=["CONTEXT_MISSING_ANCESTOR"])
    def violation(self, node):
        if any(Tag.of(ancestor.tag) in self.tags for ancestor in node.ancestors()):
            return None
        return ("CONTEXT_MISSING_ANCESTOR",
                f"<{node.tag}> must be a descendant of {_names(self.tags)}")


class BeforeAny(ContextRule):
    """
    No preceding sibling may carry one of `tags` or belong to one of
    `categories`. Non-whitespace text counts as flow and phrasing content.
    """

    def __init__(
            self,
            tags: Sequence[str] = (),
            categories: Sequence[Category] = (),
            severity: Severity = Severity.WARN
    ):
        super().__init__(severity)
        self.tags = _tagset(tags)
        self.categories = tuple(categories)

    def _blocks(self, sibling) -> bool:
        if isinstance(sibling, ElementNode) and Tag.of(sibling.tag) in self.tags:
            return True
        if isinstance(sibling, TextNode) and sibling.is_whitespace:
            return False
        return any(is_a(sibling, category) for category in self.categories)

    @check_codes(codes=["CONTEXT_WRONG_POSITION"])
    def violation(self, node):
        for sibling in node.previous_siblings():
            if self._blocks(sibling):
                what = "text" if isinstance(sibling, TextNode) else f"<{sibling.tag}>"
                return ("CONTEXT_WRONG_POSITION", f"<{node.tag}> must come before {what}")
        return None


class AnyOf(ContextRule):
    """Legal if any alternative passes. Otherwise reports the first alternative's failure."""

    def __init__(self, *rules: ContextRule, severity: Optional[Severity] = None):
        super().__init__(severity or rules[0].severity)
        self.rules = rules

    @property
    def codes(self) -> Set[str]:
        codes: Set[str] = set()
        for rule in self.rules:
            codes.update(rule.codes)
        return codes

    def violation(self, node):
        failures = []
        for rule in self.rules:
            found = rule.failure(node)
            if found is None:
                return None
            failures.append(found)
        return failures[0]


class ByAttribute(ContextRule):
    """
    Picks a list of rules by attribute. Each branch is `(predicate, rules)`,
    tried in order; `default` applies when no predicate matches.
    Every rule of the chosen branch runs and may fire independently.
    """
    applies_to_root = True

    def __init__(
            self,
            branches: Sequence[Tuple[Callable[[Mapping[str, str]], bool], Sequence[ContextRule]]],
            default: Sequence[ContextRule] = ()
    ):
        super().__init__()
        self.branches = tuple((predicate, tuple(rules)) for predicate, rules in branches)
        self.default = tuple(default)

    @property
    def codes(self) -> Set[str]:
        codes: Set[str] = set()
        for rule in self.default + tuple(r for _, rules in self.branches for r in rules):
            codes.update(rule.codes)
        return codes

    def select(self, node: ElementNode) -> Tuple[ContextRule, ...]:
        for predicate, rules in self.branches:
            if predicate(node.attrs):
                return rules
        return self.default

    def violation(self, node):
        for rule in self.select(node):
            found = rule.failure(node)
            if found is not None:
                return found
        return None

    def check(self, node: ElementNode) -> List[Diagnostic]:
        results: List[Diagnostic] = []
        for rule in self.select(node):
            results.extend(rule.check(node))
        return results


def has_attr(name: str) -> Callable[[Mapping[str, str]], bool]:
    return lambda attrs: name in attrs


def attr_equals(name: str, value: str) -> Callable[[Mapping[str, str]], bool]:
    """Case-insensitive attribute value test (enumerated attribute semantics)."""
    return lambda attrs: str(attrs.get(name, "")).strip().lower() == value.lower()
