# src/nestlint/dom/models.py
from typing import Any, Iterator, List, Optional, Union

from pydantic import BaseModel, Field

from .core import ElementNode, TextNode


class HTMLDocument(BaseModel):
    """
    Represents a parsed HTML document.

    This model is the root container of the element tree. Its top-level
    children have no parent; for context checks each of them is a document
    root, and they are each other's siblings.
    """
    source: Optional[str] = None
    has_doctype: bool = False

    # The tree, as written (no implied html/head/body)
    children: List[Union[ElementNode, TextNode]] = Field(default_factory=list)

    def model_post_init(self, __context: Any) -> None:
        for child in self.roots:
            child._root_siblings = self.children

    @property
    def roots(self) -> List[ElementNode]:
        """Top-level elements."""
        return [c for c in self.children if isinstance(c, ElementNode)]

    def walk(self) -> Iterator[ElementNode]:
        """Yields every element in document (pre-)order."""
        for root in self.roots:
            yield root
            yield from root.descendants()
