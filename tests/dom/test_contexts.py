# tests/dom/test_contexts.py
import pytest

from nestlint.dom.core import ElementNode, TextNode
from nestlint.dom.models import HTMLDocument
from nestlint.dom.registry import DOMRegistry
from nestlint.model import Severity


def E(tag, *children, **attrs):
    """Bouwt een ElementNode; 'http_equiv' wordt 'http-equiv'."""
    kids = [TextNode(data=c) if isinstance(c, str) else c for c in children]
    return ElementNode(tag=tag, attrs={k.replace("_", "-"): v for k, v in attrs.items()}, children=kids)


def context_of(node):
    return DOMRegistry.entry_for(node).check_context(node)


def codes(diagnostics):
    return [d.code for d in diagnostics]


# --- Document structure ---

def test_html_must_be_document_root():
    """Test dat html alleen als root geldig is, en dat de fout een ERROR is."""
    html = E("html", E("head"), E("body"))
    assert context_of(html) == []

    nested = E("html", E("head"), E("body"))
    E("div", nested)
    found = context_of(nested)
    assert codes(found) == ["CONTEXT_NOT_DOCUMENT_ROOT"]
    assert found[0].severity is Severity.ERROR


def test_html_must_be_the_only_root():
    """Test dat html de enige root van het document moet zijn; witruimte ernaast telt niet."""
    html = E("html", E("head"), E("body"))
    HTMLDocument(children=[TextNode(data="\n"), html, TextNode(data="\n")])
    assert context_of(html) == []

    html = E("html", E("head"), E("body"))
    HTMLDocument(children=[E("div"), html])
    found = context_of(html)
    assert codes(found) == ["CONTEXT_NOT_DOCUMENT_ROOT"]
    assert found[0].severity is Severity.ERROR


def test_head_is_first_element_of_html():
    """Test de positie van head binnen html."""
    head = E("head")
    E("html", "\n  ", head, E("body"))
    assert context_of(head) == []

    head = E("head")
    E("html", E("div"), head, E("body"))
    assert codes(context_of(head)) == ["CONTEXT_WRONG_POSITION"]

    head = E("head")
    E("div", head, E("body"))
    assert codes(context_of(head)) == ["CONTEXT_WRONG_PARENT"]


def test_body_is_second_element_of_html():
    """Test dat body na head moet komen."""
    body = E("body")
    E("html", E("head"), body)
    assert context_of(body) == []

    body = E("body")
    E("html", body)
    found = context_of(body)
    assert codes(found) == ["CONTEXT_WRONG_POSITION"]
    assert found[0].severity is Severity.ERROR

    body = E("body")
    E("div", E("head"), body)
    assert codes(context_of(body)) == ["CONTEXT_WRONG_PARENT"]


def test_parentless_element_is_treated_as_root():
    """Test dat een element zonder parent (document root) geen context-fouten geeft."""
    for tag in ("body", "head", "li", "td", "param", "area", "title", "caption"):
        assert context_of(E(tag)) == []


# --- Metadata ---

def test_title_unique_in_head():
    """Test dat title in head moet staan en dat alleen een tweede title gemeld wordt."""
    title = E("title", "x")
    E("head", title, E("meta"))
    assert context_of(title) == []

    first, second = E("title"), E("title")
    E("head", first, second, E("meta"))
    assert context_of(first) == []
    assert codes(context_of(second)) == ["CONTEXT_DUPLICATE_SIBLING"]

    base = E("base")
    E("head", E("base"), base)
    assert codes(context_of(base)) == ["CONTEXT_DUPLICATE_SIBLING"]

    title = E("title")
    E("p", title)
    assert codes(context_of(title)) == ["CONTEXT_WRONG_PARENT"]


@pytest.mark.parametrize("build, expected", [
    (lambda m: E("head", m), 0),
    (lambda m: E("p", m), 1),
])
@pytest.mark.parametrize("attrs", [{"charset": "utf-8"}, {"http_equiv": "Content-Type"}])
def test_meta_encoding_declaration_in_head(build, expected, attrs):
    """Test meta[charset] en meta[http-equiv=content-type]: alleen direct in head."""
    meta = E("meta", **attrs)
    build(meta)
    assert len(context_of(meta)) == expected


def test_meta_pragma_in_head_or_head_noscript():
    """Test meta[http-equiv] (geen encoding): in head of in noscript binnen head."""
    cases = [
        (lambda m: E("head", m), 0),
        (lambda m: E("head", E("noscript", m)), 0),
        (lambda m: E("p", m), 1),
        (lambda m: E("head", E("p", m)), 1),
    ]
    for build, expected in cases:
        meta = E("meta", http_equiv="expires")
        build(meta)
        found = context_of(meta)
        assert len(found) == expected
        assert set(codes(found)) <= {"CONTEXT_WRONG_PARENT"}


def test_meta_name_and_itemprop():
    """Test meta[name] (waar metadata verwacht wordt) en meta[itemprop] (waar phrasing verwacht wordt)."""
    meta = E("meta", name="author")
    E("head", meta)
    assert context_of(meta) == []

    meta = E("meta", name="author")
    E("body", E("p", E("x-card", meta)))
    assert codes(context_of(meta)) == ["CONTEXT_CATEGORY_NOT_EXPECTED"]

    meta = E("meta", itemprop="name")
    E("p", meta)
    assert context_of(meta) == []


def test_link_and_style_placement():
    """Test link/style: waar metadata verwacht wordt, of in noscript binnen head."""
    for tag in ("link", "style"):
        node = E(tag)
        E("head", node)
        assert context_of(node) == []

        node = E(tag)
        E("head", E("noscript", node))
        assert context_of(node) == []

        node = E(tag)
        E("body", E("x-card", node))
        assert codes(context_of(node)) == ["CONTEXT_CATEGORY_NOT_EXPECTED"]

        # directly in body, the content check of body reports it
        node = E(tag)
        E("body", node)
        assert context_of(node) == []

    link = E("link", itemprop="url")
    E("span", link)
    assert context_of(link) == []


# --- Sections and grouping ---

def test_header_and_footer_ancestors():
    """Test dat header/footer geen header- of footer-voorouder mogen hebben."""
    for outer in ("header", "footer"):
        for inner in ("header", "footer"):
            node = E(inner)
            E(outer, E("div", node))
            assert codes(context_of(node)) == ["CONTEXT_FORBIDDEN_ANCESTOR"]

    node = E("header")
    E("body", node)
    assert context_of(node) == []


@pytest.mark.parametrize("landmark", ["article", "aside", "footer", "header", "nav"])
def test_main_forbidden_ancestors(landmark):
    """Test dat main niet binnen article, aside, footer, header of nav mag staan."""
    main = E("main")
    E(landmark, E("div", main))
    assert codes(context_of(main)) == ["CONTEXT_FORBIDDEN_ANCESTOR"]


def test_main_in_body():
    main = E("main")
    E("body", main)
    assert context_of(main) == []


@pytest.mark.parametrize("parent, expected", [("ol", 0), ("ul", 0), ("menu", 0), ("div", 1), ("p", 1)])
def test_li_parent(parent, expected):
    """Test dat li alleen in ol, ul of menu mag staan."""
    li = E("li")
    E(parent, li)
    assert len(context_of(li)) == expected


@pytest.mark.parametrize("tag", ["dt", "dd"])
def test_dt_dd_inside_dl(tag):
    node = E(tag)
    E("dl", node, E(tag))
    assert context_of(node) == []

    node = E(tag)
    E("div", node, E(tag))
    assert codes(context_of(node)) == ["CONTEXT_WRONG_PARENT"]


def test_figcaption_first_or_last_in_figure():
    """Test dat figcaption het eerste of laatste element in figure moet zijn."""
    cap = E("figcaption")
    E("figure", cap)
    assert context_of(cap) == []

    cap = E("figcaption")
    E("figure", E("p"), cap)
    assert context_of(cap) == []

    cap = E("figcaption")
    E("figure", E("p"), cap, E("p"))
    assert codes(context_of(cap)) == ["CONTEXT_WRONG_POSITION"]

    cap = E("figcaption")
    E("div", cap)
    assert codes(context_of(cap)) == ["CONTEXT_WRONG_PARENT"]


# --- Where X is expected ---

def test_heading_without_flow_ancestor():
    """Test dat de dichtstbijzijnde voorouder met een content model beslist, onbeperkte elementen tellen niet mee."""
    h1 = E("h1")
    E("body", E("span", E("x-card", h1)))
    assert codes(context_of(h1)) == ["CONTEXT_CATEGORY_NOT_EXPECTED"]

    h1 = E("h1")
    E("span", E("x-card", E("div", E("x-card", h1))))
    assert context_of(h1) == []


def test_expected_leaves_a_rejecting_parent_to_its_content_check():
    """Test dat een heading direct in een span alleen via de content check van span gemeld wordt."""
    h1 = E("h1")
    E("span", h1)
    assert context_of(h1) == []


def test_expected_resolves_through_transparent_parent():
    """Test dat een transparante parent de content model van zijn eigen parent overneemt."""
    p = E("p")
    E("div", E("a", E("x-card", p)))
    assert context_of(p) == []

    p = E("p")
    E("span", E("a", E("x-card", p)))
    assert codes(context_of(p)) == ["CONTEXT_CATEGORY_NOT_EXPECTED"]


def test_unconstrained_ancestor_accepts_anything():
    """Test dat onbekende of onbeperkte voorouders alles accepteren."""
    div = E("div")
    E("x-widget", div)
    assert context_of(div) == []

    div = E("div")
    E("span", E("template", div))
    assert context_of(div) == []


# --- Embedded ---

def test_param_before_flow_content():
    """Test dat param voor alle flow content in object moet staan."""
    param = E("param")
    E("object", param, E("div"))
    assert context_of(param) == []

    param = E("param")
    E("object", E("div"), param)
    assert codes(context_of(param)) == ["CONTEXT_WRONG_POSITION"]

    param = E("param")
    E("object", "fallback text", param)
    assert codes(context_of(param)) == ["CONTEXT_WRONG_POSITION"]

    param = E("param")
    E("div", param)
    assert codes(context_of(param)) == ["CONTEXT_WRONG_PARENT"]


@pytest.mark.parametrize("siblings_before, parent, expected", [
    ([], "video", 0),
    ([], "audio", 0),
    ([], "div", 1),
    (["div"], "video", 1),
    (["track"], "video", 1),
])
def test_source_placement(siblings_before, parent, expected):
    """Test dat source in een media-element staat, voor flow content en track."""
    source = E("source")
    E(parent, *[E(t) for t in siblings_before], source, E("track"), E("p"))
    assert len(context_of(source)) == expected


def test_track_placement():
    track = E("track")
    E("video", track, E("div"))
    assert context_of(track) == []

    track = E("track")
    E("video", E("div"), track, E("p"))
    assert codes(context_of(track)) == ["CONTEXT_WRONG_POSITION"]

    track = E("track")
    E("div", track)
    assert codes(context_of(track)) == ["CONTEXT_WRONG_PARENT"]


def test_area_needs_map_or_template_ancestor():
    """Test dat area een map- of template-voorouder nodig heeft."""
    for build in (
        lambda a: E("map", a),
        lambda a: E("template", a),
        lambda a: E("map", E("span", a)),
        lambda a: E("template", E("span", a)),
    ):
        area = E("area")
        build(area)
        assert context_of(area) == []

    area = E("area")
    E("span", area)
    assert codes(context_of(area)) == ["CONTEXT_MISSING_ANCESTOR"]


# --- Tabular ---

@pytest.mark.parametrize("tag, good_parent", [
    ("caption", "table"),
    ("colgroup", "table"),
    ("tbody", "table"),
    ("thead", "table"),
    ("tfoot", "table"),
    ("col", "colgroup"),
    ("tr", "tbody"),
    ("td", "tr"),
    ("th", "tr"),
])
def test_table_parts_need_their_parent(tag, good_parent):
    node = E(tag)
    E(good_parent, node)
    assert context_of(node) == []

    for bad_parent in ("body", "div", "span"):
        node = E(tag)
        E(bad_parent, node)
        assert codes(context_of(node)) == ["CONTEXT_WRONG_PARENT"]


def test_independent_context_rules_fire_separately():
    """Test dat onafhankelijke regels op één element elk een diagnose geven."""
    source = E("source")
    E("div", E("p"), source)
    assert sorted(codes(context_of(source))) == ["CONTEXT_WRONG_PARENT", "CONTEXT_WRONG_POSITION"]
