# src/nestlint/dom/engine.py
import logging
from typing import List, Union

from nestlint.model import Diagnostic
from .categories import CategorySet
from .core import ElementNode
from .models import HTMLDocument
from .registry import DOMRegistry

logger = logging.getLogger(__name__)


class NestEngine:
    """
    Content-model conformance engine (the "nest" rule).

    Traverses the element tree in document order and, for every element, runs
    the context check and then the content check registered for its tag.
    Findings are plain diagnostics; a malformed tree never aborts the walk.
    """

    def __init__(self):
        """Initializes the engine by discovering and loading all nest rules."""
        DOMRegistry.discover()

    def validate(self, tree: Union[HTMLDocument, ElementNode]) -> List[Diagnostic]:
        """
        Validates a document (or a detached subtree rooted at an element).

        Args:
            tree: The parsed HTMLDocument, or a root ElementNode.

        Returns:
            List[Diagnostic]: All findings, sorted by (line, column), stable on ties.
        """
        findings: List[Diagnostic] = []

        roots = tree.roots if isinstance(tree, HTMLDocument) else [tree]
        for root in roots:
            stack = [root]
            while stack:
                node = stack.pop()
                entry = DOMRegistry.entry_for(node)
                findings.extend(entry.check_context(node))
                findings.extend(entry.check_content(node))
                stack.extend(reversed(node.element_children))

        logger.debug(f"Nest check finished with {len(findings)} finding(s)")
        return sorted(findings, key=lambda d: (d.line, d.column))


_engine = None


def _default_engine() -> NestEngine:
    global _engine
    if _engine is None:
        _engine = NestEngine()
    return _engine


def validate(tree: Union[HTMLDocument, ElementNode]) -> List[Diagnostic]:
    """Runs the nest rule over `tree` and returns the ordered diagnostics."""
    return _default_engine().validate(tree)


def classify(node: ElementNode) -> CategorySet:
    """Returns the content categories of `node` (tag and attributes only)."""
    return DOMRegistry.entry_for(node).classify(node)
