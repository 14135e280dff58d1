# src/nestlint/dom/contents.py
"""
Reusable content models.

A content model checks an element's children. Every model offers three calls:

- check(node): the full check the engine runs for `node`.
- check_children(node, children): membership/grammar check of an explicit
  child list only. Transparent elements call this on their parent's model,
  so exclusion scans of the parent never run twice.
- accepts(node, category): whether children of `category` fit the model,
  used by the "where X is expected" context rules.

Inter-element whitespace is never content. Other text is flow and phrasing.
"""
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence, Set, Tuple, Union

from nestlint.model import Diagnostic, Severity
from .categories import Category, slot_accepts
from .classifier import classify, is_a
from .core import ElementNode, TextNode, check_codes, collect_codes, report
from .tags import Tag

Child = Union[ElementNode, TextNode]


def _tagset(tags) -> FrozenSet[Tag]:
    return frozenset(Tag.of(t) for t in tags)


def _tag(child: Child) -> Optional[Tag]:
    return Tag.of(child.tag) if isinstance(child, ElementNode) else None


def _is_content(child: Child) -> bool:
    return isinstance(child, ElementNode) or child.has_text


def _describe(child: Child) -> str:
    return f"<{child.tag}>" if isinstance(child, ElementNode) else "Text"


def _is_script_supporting(child: Child) -> bool:
    return isinstance(child, ElementNode) and Category.SCRIPT_SUPPORTING in classify(child)


class ContentModel:
    """Base class for all content models."""

    def __init__(self, severity: Severity = Severity.WARN):
        self.severity = severity

    @property
    def codes(self) -> Set[str]:
        return collect_codes(type(self).check_children, type(self).check)

    def select(self, node: ElementNode) -> "ContentModel":
        """The model that applies to `node` (attribute branches resolve here)."""
        return self

    def check(self, node: ElementNode) -> List[Diagnostic]:
        return self.check_children(node, node.children)

    def check_children(self, node: ElementNode, children: Sequence[Child]) -> List[Diagnostic]:
        return []

    def accepts(self, node: ElementNode, category: Category) -> bool:
        return False

    def _report(self, code: str, node, message: str) -> Diagnostic:
        return report(code, node, message, self.severity)


class Empty(ContentModel):
    """Void elements: no element children and no text."""

    @check_codes(codes=["CONTENT_NOT_EMPTY"])
    def check_children(self, node, children):
        return [
            self._report("CONTENT_NOT_EMPTY", child, f"<{node.tag}> must be empty, found {_describe(child)}")
            for child in children if _is_content(child)
        ]


class TextOnly(ContentModel):
    """Text that is not inter-element whitespace, and no elements."""

    @check_codes(codes=["CONTENT_NOT_ALLOWED", "CONTENT_TEXT_REQUIRED"])
    def check_children(self, node, children):
        results = []
        has_elements = False
        for child in children:
            if isinstance(child, ElementNode):
                has_elements = True
                results.append(self._report(
                    "CONTENT_NOT_ALLOWED", child, f"<{child.tag}> is not allowed in <{node.tag}>, only text is"
                ))
        if not has_elements and not any(_is_content(c) for c in children):
            results.append(self._report(
                "CONTENT_TEXT_REQUIRED", node, f"<{node.tag}> must contain text that is not whitespace"
            ))
        return results


class DescendantExclusion:
    """
    Scans the whole subtree of an element and reports every descendant that
    carries one of `tags` or belongs to one of `categories`.
    """

    def __init__(self, tags: Sequence[str] = (), categories: Sequence[Category] = (), severity: Severity = Severity.WARN):
        self.tags = _tagset(tags)
        self.categories = frozenset(categories)
        self.severity = severity

    @property
    def codes(self) -> Set[str]:
        return collect_codes(type(self).scan)

    def matches(self, element: ElementNode) -> bool:
        return Tag.of(element.tag) in self.tags or bool(classify(element) & self.categories)

    @check_codes(codes=["CONTENT_FORBIDDEN_DESCENDANT"])
    def scan(self, node: ElementNode) -> List[Diagnostic]:
        return [
            report("CONTENT_FORBIDDEN_DESCENDANT", descendant,
                   f"<{descendant.tag}> must not be a descendant of <{node.tag}>", self.severity)
            for descendant in node.descendants() if self.matches(descendant)
        ]


class Members(ContentModel):
    """
    Category-membership sequence: every child must belong to `category` or
    carry one of `tags` (or be script-supporting, when allowed). `skip` tags
    are invisible, `limits` caps how often a tag may occur, and `exclude`
    layers a descendant scan on top.
    """

    def __init__(
            self,
            category: Optional[Category] = None,
            tags: Sequence[str] = (),
            script_supporting: bool = False,
            skip: Sequence[str] = (),
            limits: Optional[Mapping[str, int]] = None,
            exclude: Optional[DescendantExclusion] = None,
            severity: Severity = Severity.WARN
    ):
        super().__init__(severity)
        self.category = category
        self.tags = _tagset(tags)
        self.script_supporting = script_supporting
        self.skip = _tagset(skip)
        self.limits: Dict[Tag, int] = {Tag.of(t): n for t, n in (limits or {}).items()}
        self.exclude = exclude

    @property
    def codes(self) -> Set[str]:
        codes = super().codes
        if self.exclude is not None:
            codes |= self.exclude.codes
        return codes

    def allows(self, child: Child) -> bool:
        if isinstance(child, TextNode):
            return child.is_whitespace or (self.category is not None and is_a(child, self.category))
        if Tag.of(child.tag) in self.tags:
            return True
        if self.script_supporting and _is_script_supporting(child):
            return True
        return self.category is not None and is_a(child, self.category)

    def _expected(self) -> str:
        parts = [self.category.value] if self.category is not None else []
        parts.extend(sorted(f"<{t.value}>" for t in self.tags))
        if self.script_supporting:
            parts.append("script-supporting elements")
        return " or ".join(parts) or "nothing"

    @check_codes(codes=["CONTENT_NOT_ALLOWED", "CONTENT_TOO_MANY"])
    def check_children(self, node, children):
        results = []
        counts: Dict[Tag, int] = {}
        for child in children:
            tag = _tag(child)
            if tag in self.skip:
                continue
            if not self.allows(child):
                results.append(self._report(
                    "CONTENT_NOT_ALLOWED", child,
                    f"{_describe(child)} is not allowed in <{node.tag}>, expected {self._expected()}"
                ))
                continue
            if tag in self.limits:
                counts[tag] = counts.get(tag, 0) + 1
                if counts[tag] > self.limits[tag]:
                    results.append(self._report(
                        "CONTENT_TOO_MANY", child,
                        f"<{node.tag}> must not contain more than {self.limits[tag]} <{tag.value}>"
                    ))
        return results

    def check(self, node):
        results = self.check_children(node, node.children)
        if self.exclude is not None:
            results.extend(self.exclude.scan(node))
        return results

    def accepts(self, node, category):
        return self.category is not None and slot_accepts(self.category, category)


@dataclass(frozen=True)
class Segment:
    """One step of an ordered grammar: between `min` and `max` children with one of `tags`."""
    tags: FrozenSet[Tag]
    min: int = 0
    max: Optional[int] = None


def segment(*tags: str, min: int = 0, max: Optional[int] = None) -> Segment:
    return Segment(_tagset(tags), min, max)


class Ordered(ContentModel):
    """
    Ordered structured sequence, e.g. the table grammar.

    Script-supporting children are removed first (when allowed). Children
    outside the grammar are reported as not allowed. The rest are matched
    against the segments by finding the longest subsequence the grammar
    accepts; every child outside that subsequence breaks the order (or, when
    its tag occurs more often than the grammar permits, is one too many).
    `caps` limit a tag across all segments, `exclusive` lists tag families
    that must not both occur under one parent.
    """

    def __init__(
            self,
            segments: Sequence[Segment],
            caps: Optional[Mapping[str, int]] = None,
            exclusive: Sequence[Tuple[Sequence[str], Sequence[str]]] = (),
            script_supporting: bool = False,
            severity: Severity = Severity.WARN
    ):
        super().__init__(severity)
        self.segments = tuple(segments)
        self.caps: Dict[Tag, int] = {Tag.of(t): n for t, n in (caps or {}).items()}
        self.exclusive = tuple((_tagset(a), _tagset(b)) for a, b in exclusive)
        self.script_supporting = script_supporting
        self.grammar_tags = frozenset(t for s in self.segments for t in s.tags)

    def _allowance(self, tag: Tag) -> Optional[int]:
        total = 0
        for seg in self.segments:
            if tag in seg.tags:
                if seg.max is None:
                    total = None
                    break
                total += seg.max
        cap = self.caps.get(tag)
        if cap is not None and (total is None or cap < total):
            return cap
        return total

    def longest_match(self, tags: Sequence[Tag]) -> Tuple[int, ...]:
        """
        Indices of the longest subsequence of `tags` the segment grammar accepts
        (segment minimums aside). Among equally long matches the one that ends
        earliest is kept.
        """
        # state (segment index, items taken in that segment) -> (length, last index, back-pointer chain)
        best: Dict[Tuple[int, int], Tuple[int, int, Optional[tuple]]] = {(-1, 0): (0, -1, None)}

        for index, tag in enumerate(tags):
            updated = dict(best)
            for (current, taken), (length, _, chain) in best.items():
                for position in range(max(current, 0), len(self.segments)):
                    seg = self.segments[position]
                    if tag not in seg.tags:
                        continue
                    if position == current:
                        if seg.max is not None and taken + 1 > seg.max:
                            continue
                        state = (position, taken + 1 if seg.max is not None else 1)
                    else:
                        if seg.max == 0:
                            continue
                        state = (position, 1)
                    known = updated.get(state)
                    if known is None or length + 1 > known[0]:
                        updated[state] = (length + 1, index, (index, chain))
            best = updated

        _, _, chain = max(best.values(), key=lambda entry: (entry[0], -entry[1]))
        kept: List[int] = []
        while chain is not None:
            kept.append(chain[0])
            chain = chain[1]
        return tuple(reversed(kept))

    @check_codes(codes=[
        "CONTENT_NOT_ALLOWED", "CONTENT_OUT_OF_ORDER", "CONTENT_TOO_MANY",
        "CONTENT_MISSING_REQUIRED", "CONTENT_EXCLUSIVE_CONFLICT",
    ])
    def check_children(self, node, children):
        results = []
        grammar: List[ElementNode] = []

        for child in children:
            if not _is_content(child):
                continue
            if self.script_supporting and _is_script_supporting(child):
                continue
            if isinstance(child, ElementNode) and Tag.of(child.tag) in self.grammar_tags:
                grammar.append(child)
            else:
                results.append(self._report(
                    "CONTENT_NOT_ALLOWED", child, f"{_describe(child)} is not allowed in <{node.tag}>"
                ))

        tags = [Tag.of(child.tag) for child in grammar]
        counts: Dict[Tag, int] = {}
        for tag in tags:
            counts[tag] = counts.get(tag, 0) + 1

        reported: Set[int] = set()
        kept = set(self.longest_match(tags))
        for index, child in enumerate(grammar):
            if index in kept:
                continue
            reported.add(index)
            allowance = self._allowance(tags[index])
            if allowance is not None and counts[tags[index]] > allowance:
                results.append(self._report(
                    "CONTENT_TOO_MANY", child,
                    f"<{node.tag}> must not contain more than {allowance} <{child.tag}>"
                ))
            else:
                results.append(self._report(
                    "CONTENT_OUT_OF_ORDER", child, f"<{child.tag}> is out of order in <{node.tag}>"
                ))

        for tag, cap in self.caps.items():
            seen = 0
            for index, child in enumerate(grammar):
                if tags[index] != tag:
                    continue
                seen += 1
                if seen > cap and index not in reported:
                    reported.add(index)
                    results.append(self._report(
                        "CONTENT_TOO_MANY", child, f"<{node.tag}> must not contain more than {cap} <{tag.value}>"
                    ))

        missing = [
            seg for seg in self.segments
            if seg.min > 0 and not any(tag in seg.tags for tag in tags)
        ]
        if missing:
            names = ", ".join("/".join(sorted(f"<{t.value}>" for t in seg.tags)) for seg in missing)
            results.append(self._report(
                "CONTENT_MISSING_REQUIRED", node, f"<{node.tag}> is missing required {names}"
            ))

        for first, second in self.exclusive:
            firsts = [i for i, t in enumerate(tags) if t in first]
            seconds = [i for i, t in enumerate(tags) if t in second]
            if firsts and seconds:
                offender = grammar[max(firsts[0], seconds[0])]
                results.append(self._report(
                    "CONTENT_EXCLUSIVE_CONFLICT", offender,
                    f"<{node.tag}> must not mix {'/'.join(sorted(t.value for t in first))} "
                    f"and {'/'.join(sorted(t.value for t in second))} children"
                ))

        return results


class Groups(ContentModel):
    """
    Grouped repetition `(first+ second+)*`, e.g. dt/dd groups in a dl.
    Script-supporting children are ignored; other strays are reported one by
    one, and a broken group structure is reported once.
    """

    def __init__(self, first: str, second: str, severity: Severity = Severity.WARN):
        super().__init__(severity)
        self.first = Tag.of(first)
        self.second = Tag.of(second)

    @check_codes(codes=["CONTENT_NOT_ALLOWED", "CONTENT_GROUP_BROKEN"])
    def check_children(self, node, children):
        results = []
        run: List[ElementNode] = []
        for child in children:
            if not _is_content(child) or _is_script_supporting(child):
                continue
            if _tag(child) in (self.first, self.second):
                run.append(child)
            else:
                results.append(self._report(
                    "CONTENT_NOT_ALLOWED", child,
                    f"{_describe(child)} is not allowed in <{node.tag}>, "
                    f"expected <{self.first.value}> or <{self.second.value}>"
                ))

        if run:
            if Tag.of(run[0].tag) != self.first:
                results.append(self._report(
                    "CONTENT_GROUP_BROKEN", run[0],
                    f"<{run[0].tag}> must follow a <{self.first.value}> in <{node.tag}>"
                ))
            elif Tag.of(run[-1].tag) != self.second:
                start = len(run) - 1
                while start > 0 and Tag.of(run[start - 1].tag) == self.first:
                    start -= 1
                results.append(self._report(
                    "CONTENT_GROUP_BROKEN", run[start],
                    f"<{self.first.value}> must be followed by a <{self.second.value}> in <{node.tag}>"
                ))
        return results


# "flow content" is what a parentless element delegates to.
FLOW_CONTENT = Members(Category.FLOW)


def effective_model(node: ElementNode) -> Optional[ContentModel]:
    """
    The content model the children of a transparent `node` are checked
    against: its parent's model, resolved through transparent parents and
    attribute branches. None means the parent places no constraint.
    """
    from .registry import DOMRegistry

    parent = node.parent
    while parent is not None:
        model = DOMRegistry.content_model(parent)
        if model is None:
            return None
        model = model.select(parent)
        if not isinstance(model, Transparent):
            return model
        parent = parent.parent
    return FLOW_CONTENT


class Transparent(ContentModel):
    """
    Transparent content: the children must be valid content of the parent.
    `skip` tags are invisible to the delegated check, `forbid` tags are not
    allowed at all, and `exclude` adds a descendant scan.
    """

    def __init__(
            self,
            skip: Sequence[str] = (),
            forbid: Sequence[str] = (),
            exclude: Optional[DescendantExclusion] = None,
            severity: Severity = Severity.WARN
    ):
        super().__init__(severity)
        self.skip = _tagset(skip)
        self.forbid = _tagset(forbid)
        self.exclude = exclude

    @property
    def codes(self) -> Set[str]:
        codes = super().codes
        if self.exclude is not None:
            codes |= self.exclude.codes
        return codes

    def check_children(self, node, children):
        model = effective_model(node)
        if model is None:
            return []
        return model.check_children(node, children)

    @check_codes(codes=["CONTENT_NOT_ALLOWED"])
    def check(self, node):
        results = []
        visible = []
        for child in node.children:
            tag = _tag(child)
            if tag in self.forbid:
                results.append(self._report(
                    "CONTENT_NOT_ALLOWED", child, f"<{child.tag}> is not allowed in <{node.tag}>"
                ))
            elif tag not in self.skip:
                visible.append(child)

        results.extend(self.check_children(node, visible))
        if self.exclude is not None:
            results.extend(self.exclude.scan(node))
        return results

    def accepts(self, node, category):
        model = effective_model(node)
        return model is None or model.accepts(node, category)


class WhenAttribute(ContentModel):
    """Selects between two models by the presence of an attribute."""

    def __init__(self, attr: str, present: ContentModel, absent: ContentModel):
        super().__init__()
        self.attr = attr
        self.present = present
        self.absent = absent

    @property
    def codes(self) -> Set[str]:
        return self.present.codes | self.absent.codes

    def select(self, node):
        return self.present if node.has_attr(self.attr) else self.absent

    def check(self, node):
        return self.select(node).check(node)

    def check_children(self, node, children):
        return self.select(node).check_children(node, children)

    def accepts(self, node, category):
        return self.select(node).accepts(node, category)
