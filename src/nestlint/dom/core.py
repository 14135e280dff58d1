from typing import Any, Callable, Dict, FrozenSet, Iterator, List, Optional, Sequence, Set, Union

from pydantic import BaseModel, Field, PrivateAttr

from nestlint.model import Diagnostic, Severity
from .tags import Tag

# Inter-element whitespace as defined by HTML; str.strip() would also eat NBSP.
HTML_WHITESPACE = " \t\n\f\r"


def check_codes(codes: List[str]):
    """
    Decorator to declare which diagnostic codes a specific check returns.
    Facilitates auto-discovery of all codes by the DOMRegistry.
    """
    def decorator(func):
        func.defined_codes = codes
        return func
    return decorator


class TextNode(BaseModel):
    """
    A run of character data between elements.
    Only its whitespace-ness matters for content-model checks.
    """
    data: str = ""
    line: int = 1
    column: int = 1

    _parent: Optional["ElementNode"] = PrivateAttr(default=None)

    @property
    def tag(self) -> str:
        return "#text"

    @property
    def parent(self) -> Optional["ElementNode"]:
        return self._parent

    @property
    def is_whitespace(self) -> bool:
        """True for inter-element whitespace (including the empty string)."""
        return not self.data.strip(HTML_WHITESPACE)

    @property
    def has_text(self) -> bool:
        return not self.is_whitespace


class ElementNode(BaseModel):
    """
    Data model representing one element of the document tree.

    The tree is read-only during validation. `parent` is a non-owning back
    reference, wired up when the parent node is constructed.
    """
    tag: str
    attrs: Dict[str, str] = Field(default_factory=dict)
    children: List[Union["ElementNode", TextNode]] = Field(default_factory=list)
    line: int = 1
    column: int = 1

    _parent: Optional["ElementNode"] = PrivateAttr(default=None)
    # top-level nodes of the owning document, set on roots only
    _root_siblings: Sequence[Union["ElementNode", TextNode]] = PrivateAttr(default=())

    def model_post_init(self, __context: Any) -> None:
        self.tag = self.tag.lower()
        for child in self.children:
            child._parent = self

    @property
    def parent(self) -> Optional["ElementNode"]:
        return self._parent

    @property
    def element_children(self) -> List["ElementNode"]:
        return [c for c in self.children if isinstance(c, ElementNode)]

    def has_attr(self, name: str) -> bool:
        return name in self.attrs

    def ancestors(self) -> Iterator["ElementNode"]:
        """Yields the parent chain, nearest first."""
        node = self._parent
        while node is not None:
            yield node
            node = node._parent

    def descendants(self) -> Iterator["ElementNode"]:
        """Yields every descendant element in document order (self excluded)."""
        stack = list(reversed(self.element_children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.element_children))

    def _siblings(self) -> Sequence[Union["ElementNode", TextNode]]:
        return self._parent.children if self._parent is not None else self._root_siblings

    def previous_siblings(self) -> List[Union["ElementNode", TextNode]]:
        """Siblings before this node, in document order. Compared by identity."""
        before = []
        for sibling in self._siblings():
            if sibling is self:
                return before
            before.append(sibling)
        return []

    def next_siblings(self) -> List[Union["ElementNode", TextNode]]:
        """Siblings after this node, in document order."""
        siblings = list(self._siblings())
        for index, sibling in enumerate(siblings):
            if sibling is self:
                return siblings[index + 1:]
        return []


Node = Union[ElementNode, TextNode]


def report(
        code: str,
        node: Node,
        message: str,
        severity: Severity = Severity.WARN
) -> Diagnostic:
    """Builds a diagnostic positioned at `node`."""
    return Diagnostic(
        code=code,
        severity=severity,
        line=node.line,
        column=node.column,
        tag=node.tag,
        message=message
    )


class RuleEntry:
    """
    Configuration object binding an HTML tag to its nest rules: the
    category classifier, the context checks and the content model.

    A missing context list or content model means "unconstrained", which is
    different from an element that belongs to no category.
    """

    def __init__(
            self,
            tag_name: str,
            contexts: Optional[Sequence[Any]] = None,
            content: Optional[Any] = None
    ):
        self.tag = Tag.of(tag_name)
        self.tag_name = tag_name
        self.contexts = tuple(contexts or ())
        self.content = content

        # --- Auto-Discovery of Diagnostic Codes ---
        final_codes: Set[str] = set()
        for rule in self._rules():
            final_codes.update(getattr(rule, "codes", ()))

        self.codes = sorted(final_codes)

    def _rules(self) -> List[Any]:
        rules = list(self.contexts)
        if self.content is not None:
            rules.append(self.content)
        return rules

    def classify(self, node: ElementNode) -> FrozenSet:
        from .classifier import classify
        return classify(node)

    def check_context(self, node: ElementNode) -> List[Diagnostic]:
        results: List[Diagnostic] = []
        for rule in self.contexts:
            results.extend(rule.check(node))
        return results

    def check_content(self, node: ElementNode) -> List[Diagnostic]:
        if self.content is None:
            return []
        return self.content.check(node)


def collect_codes(*checks: Callable) -> Set[str]:
    """Gathers the codes declared with @check_codes on the given callables."""
    codes: Set[str] = set()
    for check in checks:
        codes.update(getattr(check, "defined_codes", ()))
    return codes
