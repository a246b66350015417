"""Mutable markup tree for the source document.

The tree is built from html.parser events. It only offers what the build
phases need: element lookup by tag or class, attribute access, element
removal and markup serialization.
"""

from __future__ import annotations

from collections.abc import Iterator
from html.parser import HTMLParser
from pathlib import Path

from .errors import SourceNotFoundError, SourceReadError

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

DOCUMENT_ROOT = "#document"

# Start tags that close an open <p>
_CLOSES_P = frozenset(
    {
        "address",
        "article",
        "aside",
        "blockquote",
        "details",
        "dialog",
        "div",
        "dl",
        "fieldset",
        "figcaption",
        "figure",
        "footer",
        "form",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hgroup",
        "hr",
        "main",
        "menu",
        "nav",
        "ol",
        "p",
        "pre",
        "section",
        "table",
        "ul",
    }
)

_P_SCOPE = frozenset(
    {"applet", "button", "caption", "html", "marquee", "object", "table", "td", "template", "th"}
)
_TABLE_SECTIONS = frozenset({"tbody", "thead", "tfoot"})

# start tag -> (open elements it closes, elements that stop the search)
IMPLIED_END_TAGS: dict[str, tuple[frozenset[str], frozenset[str]]] = {
    tag: (frozenset({"p"}), _P_SCOPE) for tag in _CLOSES_P
}
IMPLIED_END_TAGS.update(
    {
        "li": (frozenset({"li"}), frozenset({"ol", "ul", "menu"}) | _P_SCOPE),
        "dt": (frozenset({"dt", "dd"}), frozenset({"dl"}) | _P_SCOPE),
        "dd": (frozenset({"dt", "dd"}), frozenset({"dl"}) | _P_SCOPE),
        "option": (frozenset({"option"}), frozenset({"select", "datalist", "optgroup"})),
        "optgroup": (frozenset({"option", "optgroup"}), frozenset({"select"})),
        "tr": (frozenset({"tr"}), frozenset({"table"}) | _TABLE_SECTIONS),
        "td": (frozenset({"td", "th"}), frozenset({"tr", "table"})),
        "th": (frozenset({"td", "th"}), frozenset({"tr", "table"})),
        "tbody": (_TABLE_SECTIONS, frozenset({"table"})),
        "thead": (_TABLE_SECTIONS, frozenset({"table"})),
        "tfoot": (_TABLE_SECTIONS, frozenset({"table"})),
    }
)


def _escape_attribute(value: str) -> str:
    return value.replace("&", "&amp;").replace('"', "&quot;")


class Node:
    """Base class for tree nodes."""

    parent: Element | None = None

    def to_html(self) -> str:
        raise NotImplementedError


class Text(Node):
    """Character data, kept as it appeared in the source (entities unexpanded)."""

    def __init__(self, data: str):
        self.data = data

    def to_html(self) -> str:
        return self.data


class Comment(Node):
    def __init__(self, data: str):
        self.data = data

    def to_html(self) -> str:
        return f"<!--{self.data}-->"


class Markup(Node):
    """Doctype, CDATA section or processing instruction, serialized verbatim."""

    def __init__(self, markup: str):
        self.markup = markup

    def to_html(self) -> str:
        return self.markup


class Element(Node):
    """An element with ordered attributes and children.

    Parsed elements remember how they were written: the start tag text, the
    tag name's case, and whether an end tag was present. Serialization
    reproduces that spelling until the attributes are changed.
    """

    def __init__(
        self,
        tag: str,
        attributes: list[tuple[str, str | None]] | dict[str, str | None] | None = None,
    ):
        self.tag = tag.lower()
        self.source_tag = tag
        self.attributes: dict[str, str | None] = dict(attributes or {})
        self.children: list[Node] = []
        self.parent = None
        self.self_closing = False
        self.has_end_tag = True
        # Start tag text as written in the source; dropped on attribute changes
        self.source_start_tag: str | None = None

    def __repr__(self) -> str:
        return f"<Element {self.tag} {self.attributes!r}>"

    @property
    def tag_name(self) -> str:
        """Upper-cased tag name, as the DOM reports it."""
        return self.tag.upper()

    # Attributes

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def get_attribute(self, name: str, default: str | None = None) -> str | None:
        """Attribute value; valueless attributes read as an empty string."""
        if name not in self.attributes:
            return default
        value = self.attributes[name]
        return "" if value is None else value

    def set_attribute(self, name: str, value: str | None) -> None:
        self.attributes[name] = value
        self.source_start_tag = None

    def remove_attribute(self, name: str) -> None:
        if name in self.attributes:
            del self.attributes[name]
            self.source_start_tag = None

    @property
    def class_list(self) -> list[str]:
        return (self.get_attribute("class") or "").split()

    # Tree

    def append(self, child: Node) -> None:
        child.parent = self
        self.children.append(child)

    def remove(self) -> None:
        """Detach this element from its parent."""
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    def iter(self) -> Iterator[Element]:
        """Yield this element and all descendant elements in document order."""
        yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter()

    def find_all(self, tag: str) -> list[Element]:
        """Descendant elements with the given tag name.

        Returns a list, so callers may remove elements while looping.
        """
        tag = tag.lower()
        return [el for el in self.iter() if el is not self and el.tag == tag]

    def find_by_class(self, class_name: str) -> list[Element]:
        """Descendant elements whose class list contains class_name."""
        return [
            el for el in self.iter() if el is not self and class_name in el.class_list
        ]

    @property
    def text(self) -> str:
        parts = []
        for child in self.children:
            if isinstance(child, Text):
                parts.append(child.data)
            elif isinstance(child, Element):
                parts.append(child.text)
        return "".join(parts)

    # Serialization

    def start_tag(self) -> str:
        if self.source_start_tag is not None:
            return self.source_start_tag
        parts = [self.source_tag]
        for name, value in self.attributes.items():
            if value is None:
                parts.append(name)
            else:
                parts.append(f'{name}="{_escape_attribute(value)}"')
        closing = "/>" if self.self_closing else ">"
        return f"<{' '.join(parts)}{closing}"

    @property
    def inner_html(self) -> str:
        return "".join(child.to_html() for child in self.children)

    def to_html(self) -> str:
        if self.tag == DOCUMENT_ROOT:
            return self.inner_html
        if self.self_closing or self.tag in VOID_ELEMENTS:
            return self.start_tag()
        end_tag = f"</{self.source_tag}>" if self.has_end_tag else ""
        return f"{self.start_tag()}{self.inner_html}{end_tag}"


class Document:
    """A parsed source document."""

    def __init__(self, root: Element, path: str | None = None):
        self.root = root
        self.path = path

    @property
    def body(self) -> Element:
        """The <body> element, or the whole document for fragments."""
        for el in self.root.iter():
            if el.tag == "body":
                return el
        return self.root

    def find_all(self, tag: str) -> list[Element]:
        return self.root.find_all(tag)

    def find_by_class(self, class_name: str) -> list[Element]:
        return self.root.find_by_class(class_name)

    def to_html(self) -> str:
        return self.root.to_html()


class _TreeBuilder(HTMLParser):
    """Builds an Element tree from parser events."""

    def __init__(self):
        super().__init__(convert_charrefs=False)
        self.root = Element(DOCUMENT_ROOT)
        self._stack: list[Element] = [self.root]

    @property
    def _current(self) -> Element:
        return self._stack[-1]

    def _add_text(self, data: str) -> None:
        children = self._current.children
        if children and isinstance(children[-1], Text):
            children[-1].data += data
        else:
            self._current.append(Text(data))

    def _parsed_element(self, tag, attrs) -> Element:
        raw = self.get_starttag_text()
        element = Element(raw[1 : 1 + len(tag)], attrs)
        element.source_start_tag = raw
        element.has_end_tag = False
        return element

    def _close_implied(self, tag: str) -> None:
        """Close open elements whose end tag the new start tag implies."""
        if tag not in IMPLIED_END_TAGS:
            return
        closes, boundary = IMPLIED_END_TAGS[tag]
        for i in range(len(self._stack) - 1, 0, -1):
            open_tag = self._stack[i].tag
            if open_tag in closes:
                del self._stack[i:]
                return
            if open_tag in boundary:
                return

    def handle_starttag(self, tag, attrs):
        self._close_implied(tag)
        element = self._parsed_element(tag, attrs)
        self._current.append(element)
        if element.tag not in VOID_ELEMENTS:
            self._stack.append(element)

    def handle_startendtag(self, tag, attrs):
        element = self._parsed_element(tag, attrs)
        element.self_closing = True
        self._current.append(element)

    def handle_endtag(self, tag):
        # Close the nearest open element with this tag; stray end tags are dropped
        for i in range(len(self._stack) - 1, 0, -1):
            if self._stack[i].tag == tag:
                self._stack[i].has_end_tag = True
                del self._stack[i:]
                return

    def handle_data(self, data):
        self._add_text(data)

    def handle_entityref(self, name):
        self._add_text(f"&{name};")

    def handle_charref(self, name):
        self._add_text(f"&#{name};")

    def handle_comment(self, data):
        self._current.append(Comment(data))

    def handle_decl(self, decl):
        self._current.append(Markup(f"<!{decl}>"))

    def unknown_decl(self, data):
        self._current.append(Markup(f"<![{data}]>"))

    def handle_pi(self, data):
        self._current.append(Markup(f"<?{data}>"))


def parse_document(markup: str, path: str | None = None) -> Document:
    """Parse markup into a Document."""
    builder = _TreeBuilder()
    builder.feed(markup)
    builder.close()
    return Document(builder.root, path=path)


def load_document(path: str | Path) -> Document:
    """Load and parse the source document at path.

    Raises:
        SourceNotFoundError: If the file does not exist
        SourceReadError: If the file cannot be read or is not valid UTF-8
    """
    source = Path(path)
    if not source.is_file():
        raise SourceNotFoundError(str(path))
    try:
        markup = source.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SourceReadError(str(path), f"not valid UTF-8 ({e.reason} at byte {e.start})") from e
    except OSError as e:
        raise SourceReadError(str(path), e.strerror or str(e)) from e
    return parse_document(markup, path=str(path))
