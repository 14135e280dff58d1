# src/nestlint/dom/builder.py
import logging
from typing import List, Optional, Union

from bs4 import BeautifulSoup, Tag
from bs4.element import CData, Comment, Declaration, Doctype, NavigableString, ProcessingInstruction

from .models import HTMLDocument
from .core import ElementNode, TextNode

logger = logging.getLogger(__name__)

# Markup-level strings that never take part in the content model
_SKIPPED_STRINGS = (Comment, Doctype, CData, ProcessingInstruction, Declaration)


class DOMBuilder:
    """
    Builder responsible for parsing raw HTML into an HTMLDocument model.

    Uses BeautifulSoup's 'html.parser' tree builder, which keeps the markup as
    written: no html/head/body is implied and misnested elements stay where the
    author put them, which is exactly what the nest rules need to see.
    """

    def parse_doc(self, html: str, source: Optional[str] = None) -> HTMLDocument:
        """
        Parses raw HTML content into an HTMLDocument.

        Args:
            html (str): The raw HTML string.
            source (Optional[str]): Path or name of the document, used in reports.

        Returns:
            HTMLDocument: The element tree with 1-based line/column positions.
        """
        if not html:
            return HTMLDocument(source=source)

        # Strip a BOM so positions on line 1 are not shifted
        clean_html = html.replace('\ufeff', '')
        soup = BeautifulSoup(clean_html, 'html.parser', multi_valued_attributes=None)

        has_doctype = any(isinstance(item, Doctype) for item in soup.contents)
        children = self._build_children(soup)

        logger.debug(f"Parsed {source or '<string>'}: {len(children)} top-level node(s)")
        return HTMLDocument(source=source, has_doctype=has_doctype, children=children)

    def _build_children(self, soup: BeautifulSoup) -> List[Union[ElementNode, TextNode]]:
        """
        Converts the BeautifulSoup tree into nodes without recursion, so nesting
        depth is not bounded by the interpreter's stack. An element is created
        once all of its children are, which wires up their parent references.
        """
        top_level: List[Union[ElementNode, TextNode]] = []
        # (bs4 tag, its remaining children, nodes built so far, line, column)
        stack = [(soup, iter(soup.children), top_level, 1, 1)]

        while stack:
            tag, pending, children, line, column = stack[-1]
            child = next(pending, None)

            if child is None:
                stack.pop()
                if stack:
                    stack[-1][2].append(self._build_element(tag, children, line, column))
            elif isinstance(child, Tag):
                child_line = child.sourceline or 1
                child_column = (child.sourcepos or 0) + 1
                stack.append((child, iter(child.children), [], child_line, child_column))
            elif isinstance(child, _SKIPPED_STRINGS):
                continue
            elif isinstance(child, NavigableString):
                # Text has no position of its own; it reports at its element
                children.append(TextNode(data=str(child), line=line, column=column))

        return top_level

    @staticmethod
    def _build_element(tag: Tag, children: List[Union[ElementNode, TextNode]], line: int, column: int) -> ElementNode:
        # multi_valued_attributes=None keeps every value a plain string
        attrs = {name: value or "" for name, value in tag.attrs.items()}
        return ElementNode(tag=tag.name, attrs=attrs, children=children, line=line, column=column)
