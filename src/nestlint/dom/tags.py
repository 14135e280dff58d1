# src/nestlint/dom/tags.py
from enum import Enum


class Tag(str, Enum):
    """
    Closed enumeration of the HTML elements the nest engine knows about.

    `UNKNOWN` stands in for every other tag name (custom elements, SVG/MathML
    internals, typos), so registry lookups keyed by `Tag` can never miss.
    """
    UNKNOWN = ""

    # Document and metadata
    HTML = "html"
    HEAD = "head"
    TITLE = "title"
    BASE = "base"
    LINK = "link"
    META = "meta"
    STYLE = "style"
    BODY = "body"

    # Sections
    ARTICLE = "article"
    SECTION = "section"
    NAV = "nav"
    ASIDE = "aside"
    H1 = "h1"
    H2 = "h2"
    H3 = "h3"
    H4 = "h4"
    H5 = "h5"
    H6 = "h6"
    HEADER = "header"
    FOOTER = "footer"
    ADDRESS = "address"

    # Grouping
    P = "p"
    HR = "hr"
    PRE = "pre"
    BLOCKQUOTE = "blockquote"
    OL = "ol"
    UL = "ul"
    LI = "li"
    DL = "dl"
    DT = "dt"
    DD = "dd"
    FIGURE = "figure"
    FIGCAPTION = "figcaption"
    DIV = "div"
    MAIN = "main"

    # Text-level
    A = "a"
    EM = "em"
    STRONG = "strong"
    SMALL = "small"
    S = "s"
    CITE = "cite"
    Q = "q"
    DFN = "dfn"
    ABBR = "abbr"
    DATA = "data"
    TIME = "time"
    CODE = "code"
    VAR = "var"
    SAMP = "samp"
    KBD = "kbd"
    SUB = "sub"
    SUP = "sup"
    I = "i"
    B = "b"
    U = "u"
    MARK = "mark"
    RUBY = "ruby"
    RB = "rb"
    RT = "rt"
    RTC = "rtc"
    RP = "rp"
    BDI = "bdi"
    BDO = "bdo"
    SPAN = "span"
    BR = "br"
    WBR = "wbr"

    # Edits
    INS = "ins"
    DEL = "del"

    # Embedded
    IMG = "img"
    IFRAME = "iframe"
    EMBED = "embed"
    OBJECT = "object"
    PARAM = "param"
    VIDEO = "video"
    AUDIO = "audio"
    SOURCE = "source"
    TRACK = "track"
    MAP = "map"
    AREA = "area"
    CANVAS = "canvas"
    SVG = "svg"
    MATH = "math"

    # Tabular
    TABLE = "table"
    CAPTION = "caption"
    COLGROUP = "colgroup"
    COL = "col"
    TBODY = "tbody"
    THEAD = "thead"
    TFOOT = "tfoot"
    TR = "tr"
    TD = "td"
    TH = "th"

    # Forms
    FORM = "form"
    FIELDSET = "fieldset"
    LEGEND = "legend"
    LABEL = "label"
    INPUT = "input"
    BUTTON = "button"
    SELECT = "select"
    DATALIST = "datalist"
    OPTGROUP = "optgroup"
    OPTION = "option"
    TEXTAREA = "textarea"
    KEYGEN = "keygen"
    OUTPUT = "output"
    PROGRESS = "progress"
    METER = "meter"

    # Interactive and scripting
    DETAILS = "details"
    SUMMARY = "summary"
    DIALOG = "dialog"
    MENU = "menu"
    SCRIPT = "script"
    NOSCRIPT = "noscript"
    TEMPLATE = "template"

    @classmethod
    def of(cls, name: str) -> "Tag":
        """Maps a tag name to its member; unknown names map to UNKNOWN."""
        try:
            return cls((name or "").lower())
        except ValueError:
            return cls.UNKNOWN


HEADING_TAGS = frozenset({Tag.H1, Tag.H2, Tag.H3, Tag.H4, Tag.H5, Tag.H6})
MEDIA_TAGS = frozenset({Tag.AUDIO, Tag.VIDEO})
