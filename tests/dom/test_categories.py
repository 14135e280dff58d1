# tests/dom/test_categories.py
import pytest

from nestlint.dom.categories import CATEGORY_MEMBERS, Category, slot_accepts
from nestlint.dom.classifier import categories_of, classify, is_a
from nestlint.dom.core import ElementNode, TextNode
from nestlint.dom.tags import Tag

FLOW = Category.FLOW
PHRASING = Category.PHRASING
PALPABLE = Category.PALPABLE
EMBEDDED = Category.EMBEDDED
INTERACTIVE = Category.INTERACTIVE
FORM = Category.FORM_ASSOCIATED


def E(tag, *children, **attrs):
    """Bouwt een ElementNode; 'http_equiv' wordt 'http-equiv'."""
    kids = [TextNode(data=c) if isinstance(c, str) else c for c in children]
    return ElementNode(tag=tag, attrs={k.replace("_", "-"): v for k, v in attrs.items()}, children=kids)


@pytest.mark.parametrize("tag, expected", [
    ("html", set()),
    ("head", set()),
    ("body", {Category.SECTIONING_ROOT}),
    ("title", {Category.METADATA}),
    ("link", {Category.METADATA}),
    ("article", {FLOW, Category.SECTIONING, PALPABLE}),
    ("h3", {FLOW, Category.HEADING, PALPABLE}),
    ("header", {FLOW, PALPABLE}),
    ("hr", {FLOW}),
    ("blockquote", {FLOW, Category.SECTIONING_ROOT, PALPABLE}),
    ("ol", {FLOW}),
    ("dl", {FLOW}),
    ("li", set()),
    ("figcaption", set()),
    ("div", {FLOW, PALPABLE}),
    ("a", {FLOW, PHRASING, INTERACTIVE, PALPABLE}),
    ("br", {FLOW, PHRASING}),
    ("del", {FLOW, PHRASING}),
    ("ins", {FLOW, PHRASING, PALPABLE}),
    ("img", {FLOW, PHRASING, EMBEDDED, FORM, PALPABLE}),
    ("iframe", {FLOW, PHRASING, EMBEDDED, INTERACTIVE, PALPABLE}),
    ("object", {FLOW, PHRASING, EMBEDDED, FORM, PALPABLE}),
    ("video", {FLOW, PHRASING, EMBEDDED, PALPABLE}),
    ("audio", {FLOW, PHRASING, EMBEDDED}),
    ("area", {FLOW, PHRASING}),
    ("param", set()),
    ("rt", set()),
    ("table", {FLOW, PALPABLE}),
    ("caption", set()),
])
def test_base_categories(tag, expected):
    """Test de basiscategorieën per tag."""
    assert classify(E(tag)) == expected


@pytest.mark.parametrize("tag, attrs, added", [
    ("img", {"usemap": "#map"}, {INTERACTIVE}),
    ("object", {"usemap": "#map"}, {INTERACTIVE}),
    ("video", {"controls": ""}, {INTERACTIVE}),
    ("audio", {"controls": ""}, {INTERACTIVE, PALPABLE}),
    ("link", {"itemprop": "url"}, {FLOW, PHRASING}),
    ("meta", {"itemprop": "name"}, {FLOW, PHRASING}),
])
def test_attribute_presence_adds_categories(tag, attrs, added):
    """Test dat de aanwezigheid van een attribuut (ongeacht de waarde) categorieën toevoegt."""
    plain = classify(E(tag))
    assert classify(E(tag, **attrs)) == plain | added
    assert not (plain & added)


def test_input_type_hidden_is_not_interactive():
    """Test dat input[type=hidden] geen interactive/palpable content is, andere types wel."""
    assert INTERACTIVE not in classify(E("input", type="hidden"))
    assert INTERACTIVE not in classify(E("input", type="HIDDEN"))
    assert {INTERACTIVE, PALPABLE} <= classify(E("input", type="text"))
    assert {INTERACTIVE, PALPABLE} <= classify(E("input"))


def test_unknown_tag_classifies_to_empty_set():
    """Test dat een onbekende tag geen fout geeft maar een lege set."""
    assert classify(E("x-widget")) == frozenset()
    assert Tag.of("x-widget") is Tag.UNKNOWN
    assert Tag.of("DIV") is Tag.DIV


def test_classification_is_position_independent():
    """Test dat identieke tag+attributen op verschillende plekken dezelfde categorieën geven."""
    first = E("img", usemap="#m", alt="x")
    second = E("img", usemap="#m", alt="x")
    E("a", E("span", first))
    E("table", E("caption", second))

    assert classify(first) == classify(second)
    assert classify(first) == classify(E("img", usemap="#m", alt="x"))


def test_text_categories():
    """Test dat tekst flow/phrasing is en witruimte niets."""
    assert categories_of(TextNode(data="hello!")) == {FLOW, PHRASING}
    assert categories_of(TextNode(data=" \t\n\x0c\r")) == frozenset()
    # NBSP is no inter-element whitespace
    assert categories_of(TextNode(data="\xa0")) == {FLOW, PHRASING}


def test_is_a_honours_subsumption():
    """Test dat een flow-slot ook phrasing, heading en sectioning accepteert."""
    assert is_a(E("span"), FLOW)
    assert is_a(E("h1"), FLOW)
    assert is_a(E("img"), PHRASING)
    assert not is_a(E("div"), PHRASING)
    assert not is_a(E("base"), FLOW)
    assert slot_accepts(FLOW, EMBEDDED)
    assert not slot_accepts(PHRASING, FLOW)


def test_vocabulary_is_read_only():
    """Test dat de gedeelde tabellen niet te wijzigen zijn."""
    with pytest.raises(TypeError):
        CATEGORY_MEMBERS[Category.FLOW] = frozenset()
    with pytest.raises(AttributeError):
        CATEGORY_MEMBERS[Category.FLOW].add(Tag.DIV)
    assert CATEGORY_MEMBERS[Category.TRANSPARENT] == frozenset()
