from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, ClassVar, Iterator, List, Literal, Optional

import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node, Parser, Tree

from antd_rush.config import COMPONENT_BASE_NAMES
from antd_rush.services.catalog import Catalog
from antd_rush.services.document import Position, TextDocument

TSX_LANGUAGE = Language(tstypescript.language_tsx())

Direction = Literal["outward", "inward"]

JSX_ELEMENT_TYPES: set[str] = {
    "jsx_element",
    "jsx_self_closing_element",
    # Only reached on its own when error recovery left it without a jsx_element parent
    "jsx_opening_element",
}

CLASS_TYPES: set[str] = {
    "class_declaration",
    "abstract_class_declaration",
    "class",
}

_TAG_NAME_TYPES: set[str] = {
    "identifier",
    "member_expression",
    "nested_identifier",
    "jsx_namespace_name",
}


# --- Node variants ---

@dataclass(frozen=True)
class SyntaxNode:
    ts_node: Node
    kind: ClassVar[str] = "other"

    @property
    def parent(self) -> Optional[SyntaxNode]:
        parent = self.ts_node.parent
        return wrap(parent) if parent is not None else None

    @property
    def text(self) -> str:
        return self.ts_node.text.decode("utf-8", errors="ignore")


@dataclass(frozen=True)
class OtherNode(SyntaxNode):
    pass


@dataclass(frozen=True)
class JsxElementNode(SyntaxNode):
    kind: ClassVar[str] = "jsx_element"

    @property
    def tag_name(self) -> Optional[str]:
        """Tag as written, e.g. `Button` or `Table.Column`. None for fragments."""
        node = self.ts_node
        if node.type == "jsx_element":
            opening = node.child_by_field_name("open_tag")
            if opening is None:
                opening = next((c for c in node.children if c.type == "jsx_opening_element"), None)
            if opening is None:
                return None
            node = opening

        name_node = node.child_by_field_name("name")
        if name_node is None:
            name_node = next((c for c in node.named_children if c.type in _TAG_NAME_TYPES), None)
        if name_node is None:
            return None
        return name_node.text.decode("utf-8", errors="ignore")


@dataclass(frozen=True)
class ClassDeclarationNode(SyntaxNode):
    kind: ClassVar[str] = "class_declaration"

    @property
    def name(self) -> Optional[str]:
        name_node = self.ts_node.child_by_field_name("name")
        if name_node is None:
            return None
        return name_node.text.decode("utf-8", errors="ignore")

    @property
    def superclass_expression(self) -> Optional[str]:
        """Text of the `extends` target without type arguments, e.g. `React.Component`."""
        for child in self.ts_node.children:
            if child.type != "class_heritage":
                continue
            # TSX grammar: class_heritage -> extends_clause -> value
            for clause in child.children:
                if clause.type == "extends_clause":
                    value = clause.child_by_field_name("value")
                    if value is None and clause.named_children:
                        value = clause.named_children[0]
                    if value is not None:
                        return value.text.decode("utf-8", errors="ignore")
            # JS grammar: class_heritage -> expression
            if child.named_children:
                return child.named_children[0].text.decode("utf-8", errors="ignore")
        return None


def wrap(node: Node) -> SyntaxNode:
    # Anonymous tokens share type names with real nodes (the `class` keyword)
    if not node.is_named:
        return OtherNode(node)
    if node.type in JSX_ELEMENT_TYPES:
        return JsxElementNode(node)
    if node.type in CLASS_TYPES:
        return ClassDeclarationNode(node)
    return OtherNode(node)


# --- Parsing ---

_parser: Optional[Parser] = None


def get_parser() -> Parser:
    global _parser
    if _parser is None:
        _parser = Parser(TSX_LANGUAGE)
    return _parser


def parse_document(document: TextDocument) -> Tree:
    return get_parser().parse(document.source)


def node_at(tree: Tree, document: TextDocument, position: Position) -> SyntaxNode:
    """Smallest node containing the cursor."""
    offset = document.offset_at(position)
    node = tree.root_node.descendant_for_byte_range(offset, offset)
    return wrap(node if node is not None else tree.root_node)


# --- Walking ---

def iter_nodes(start: SyntaxNode, direction: Direction = "outward") -> Iterator[SyntaxNode]:
    if direction == "outward":
        current: Optional[SyntaxNode] = start
        while current is not None:
            yield current
            current = current.parent
        return

    stack: List[Node] = [start.ts_node]
    while stack:
        node = stack.pop()
        yield wrap(node)
        stack.extend(reversed(node.children))


Predicate = Callable[[SyntaxNode], bool]


def find_first(
    tree: Tree,
    document: TextDocument,
    position: Position,
    predicate: Predicate,
    direction: Direction = "outward",
) -> Optional[SyntaxNode]:
    for node in iter_nodes(node_at(tree, document, position), direction):
        if predicate(node):
            return node
    return None


def class_extends(*base_names: str) -> Predicate:
    """
    Predicate for class declarations whose superclass is one of `base_names`,
    either bare (`Component`) or qualified (`React.Component`).
    """

    def predicate(node: SyntaxNode) -> bool:
        if not isinstance(node, ClassDeclarationNode):
            return False
        superclass = node.superclass_expression
        if not superclass:
            return False
        superclass = "".join(superclass.split())
        return any(superclass == base or superclass.endswith("." + base) for base in base_names)

    return predicate


extends_component = class_extends(*COMPONENT_BASE_NAMES)


def find_enclosing_class(
    tree: Tree,
    document: TextDocument,
    position: Position,
    predicate: Predicate = extends_component,
    direction: Direction = "outward",
) -> Optional[SyntaxNode]:
    return find_first(tree, document, position, predicate, direction)


def find_enclosing_jsx_component(
    tree: Tree,
    document: TextDocument,
    position: Position,
    catalog: Catalog,
) -> Optional[str]:
    """
    Catalog key of the innermost JSX element around the cursor whose tag is a
    known component.

    While the user is typing, the tag around the cursor is usually not valid
    JSX yet (`<Button #`). When the cursor touches a syntax error, the text of
    the broken statement leading up to the cursor is scanned for unclosed tags
    first.
    """
    offset = document.offset_at(position)
    root = tree.root_node

    if _touches_error(root, offset):
        start = _recovery_start(root, offset)
        prefix = document.source[start:offset].decode("utf-8", errors="ignore")
        for tag in unclosed_tags(prefix):
            key = catalog.match_exact(tag)
            if key:
                return key

    for node in iter_nodes(node_at(tree, document, position), "outward"):
        if not isinstance(node, JsxElementNode):
            continue
        tag = node.tag_name
        if not tag:
            continue
        key = catalog.match_exact(tag)
        if key:
            return key
    return None


# --- Error recovery ---

_TAG_TOKEN_RE = re.compile(
    r"(?P<close></\s*(?P<close_name>[A-Za-z_$][\w$.:-]*)?\s*>)"
    r"|(?P<fragment><>)"
    r"|(?P<open><(?P<open_name>[A-Za-z_$][\w$.:-]*))"
    r"|(?P<self_close>/>)"
    r"|(?P<arrow>=>)"
    r"|(?P<end>>)"
    r"|(?P<lbrace>\{)"
    r"|(?P<rbrace>\})"
)


def _is_broken(node: Node) -> bool:
    return node.type == "ERROR" or node.is_missing


def _touches_error(root: Node, offset: int) -> bool:
    """
    Whether the cursor sits in, or right after, a node tree-sitter could not
    parse. Errors elsewhere in the file don't count.
    """
    spans = [(offset, offset)]
    if offset > 0:
        spans.append((offset - 1, offset))
    for start, end in spans:
        node = root.descendant_for_byte_range(start, end)
        while node is not None:
            if _is_broken(node):
                return True
            node = node.parent
    return False


def _recovery_start(root: Node, offset: int) -> int:
    """
    Start of the top-level statement the cursor is in. When that statement is
    broken, the start is widened backwards over neighbouring statements that
    also failed to parse, since tree-sitter may have split one statement there.
    """
    if root.type == "ERROR":
        return 0
    children = [c for c in root.children if c.start_byte < offset]
    if not children:
        return 0
    index = len(children) - 1
    while index > 0 and children[index].has_error and children[index - 1].has_error:
        index -= 1
    return children[index].start_byte


def unclosed_tags(text: str) -> List[str]:
    """
    Tags still open at the end of `text`, innermost first.

    This is a lexical approximation used only where tree-sitter could not
    build JSX nodes. `<` directly after an identifier character is treated as
    a type argument or comparison, not a tag. An opening tag that never got
    its `>` is dropped once another tag starts at the same brace depth, and a
    `}` drops every tag opened inside the block it closes.
    """
    stack: List[List] = []  # [name, still_in_opening_tag, brace_depth]
    depth = 0
    for match in _TAG_TOKEN_RE.finditer(text):
        if match.group("lbrace"):
            depth += 1
        elif match.group("rbrace"):
            depth -= 1
            while stack and stack[-1][2] > depth:
                stack.pop()
        elif match.group("open"):
            start = match.start()
            if start > 0 and (text[start - 1].isalnum() or text[start - 1] in "_$"):
                continue
            if stack and stack[-1][1] and stack[-1][2] == depth:
                stack.pop()
            stack.append([match.group("open_name"), True, depth])
        elif match.group("fragment"):
            stack.append(["", False, depth])
        elif match.group("self_close"):
            if stack and stack[-1][1]:
                stack.pop()
        elif match.group("end"):
            if stack and stack[-1][1]:
                stack[-1][1] = False
        elif match.group("close"):
            name = match.group("close_name") or ""
            for i in range(len(stack) - 1, -1, -1):
                if not stack[i][1] and stack[i][0] == name:
                    del stack[i:]
                    break
    return [name for name, _, _ in reversed(stack) if name]
