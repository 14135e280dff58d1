# tests/dom/test_registry.py
import pytest

from nestlint.dom.contents import ContentModel
from nestlint.dom.core import ElementNode, RuleEntry
from nestlint.dom.registry import DOMRegistry
from nestlint.dom.tags import Tag

ALL_CODES = [
    "CONTENT_EXCLUSIVE_CONFLICT",
    "CONTENT_FORBIDDEN_DESCENDANT",
    "CONTENT_GROUP_BROKEN",
    "CONTENT_MISSING_REQUIRED",
    "CONTENT_NOT_ALLOWED",
    "CONTENT_NOT_EMPTY",
    "CONTENT_OUT_OF_ORDER",
    "CONTENT_TEXT_REQUIRED",
    "CONTENT_TOO_MANY",
    "CONTEXT_CATEGORY_NOT_EXPECTED",
    "CONTEXT_DUPLICATE_SIBLING",
    "CONTEXT_FORBIDDEN_ANCESTOR",
    "CONTEXT_MISSING_ANCESTOR",
    "CONTEXT_NOT_DOCUMENT_ROOT",
    "CONTEXT_WRONG_PARENT",
    "CONTEXT_WRONG_POSITION",
]


def test_all_codes_are_discovered():
    """Test dat de registry alle diagnosecodes via @check_codes verzamelt."""
    assert DOMRegistry.get_all_possible_codes() == ALL_CODES


def test_discover_is_idempotent():
    DOMRegistry.discover()
    before = dict(DOMRegistry._entries)
    DOMRegistry.discover()
    assert DOMRegistry._entries == before


def test_every_tag_has_an_entry():
    """Test dat elke tag een entry heeft, zodat opvragen nooit faalt."""
    for tag in Tag:
        entry = DOMRegistry.entry(tag)
        assert isinstance(entry, RuleEntry)
        assert entry.tag is tag


def test_unknown_tag_is_permissive():
    entry = DOMRegistry.entry_for(ElementNode(tag="x-anything"))
    assert entry.tag is Tag.UNKNOWN
    assert entry.contexts == ()
    assert entry.content is None
    assert DOMRegistry.content_model(ElementNode(tag="x-anything")) is None


@pytest.mark.parametrize("tag", [Tag.HTML, Tag.TITLE, Tag.TABLE, Tag.DL, Tag.A, Tag.VIDEO, Tag.AREA])
def test_core_tags_are_registered(tag):
    entry = DOMRegistry.entry(tag)
    assert entry.contexts or entry.content is not None


def test_ruby_entries():
    """Test dat ruby alleen een context heeft en rb/rt/rp phrasing content bevatten."""
    ruby = DOMRegistry.entry(Tag.RUBY)
    assert ruby.contexts and ruby.content is None

    for tag in (Tag.RB, Tag.RT, Tag.RP):
        entry = DOMRegistry.entry(tag)
        assert entry.contexts == ()
        assert isinstance(entry.content, ContentModel)

    rtc = DOMRegistry.entry(Tag.RTC)
    assert rtc.contexts == () and rtc.content is None


def test_entry_codes_match_its_rules():
    assert DOMRegistry.entry(Tag.TITLE).codes == [
        "CONTENT_NOT_ALLOWED",
        "CONTENT_TEXT_REQUIRED",
        "CONTEXT_DUPLICATE_SIBLING",
        "CONTEXT_WRONG_PARENT",
    ]
    assert DOMRegistry.entry(Tag.AREA).codes == [
        "CONTENT_NOT_EMPTY",
        "CONTEXT_CATEGORY_NOT_EXPECTED",
        "CONTEXT_MISSING_ANCESTOR",
    ]
