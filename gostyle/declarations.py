# Structural view: turn a tree-sitter Go parse tree into the declaration-level
# abstractions rules consume (functions, types, package-level variables).
# Everything below the declaration level is hidden, except the few body
# sub-checks exposed through FunctionBody.

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterator, Optional

import tree_sitter
from tree_sitter import Node as TSNode

from gostyle.parser import parse_bytes, syntax_problem

logger = logging.getLogger(__name__)

# Parameter types that carry framework context (*testing.T, *ondatra.DUTDevice)
# rather than configuration; they never count towards the struct-params limit.
FRAMEWORK_CONTEXT_TYPES = frozenset({"T", "DUTDevice"})

_ARRAY_TYPES = frozenset({"slice_type", "array_type", "implicit_length_array_type"})
# Composite literal types accepted as a test table: []T{...}, [N]T{...}, T{...}, pkg.T{...}
_TABLE_LITERAL_TYPES = _ARRAY_TYPES | {"type_identifier", "qualified_type"}

# //go:generate, //line file.go:1, //export Foo ... are directives, not documentation.
_DIRECTIVE_RE = re.compile(r"^(?:line |extern |export |[a-z0-9]+:[a-z0-9])")


def _walk(node: TSNode) -> Iterator[TSNode]:
    """Yield every descendant of node in document order (DFS)."""
    yield node
    for child in node.children:
        yield from _walk(child)


def _node_text(source: bytes, node: TSNode) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _line(node: TSNode) -> int:
    return node.start_point[0] + 1


@dataclass(frozen=True)
class TypeRef:
    """
    Shape of a type expression as far as rules care about it.

    kind is one of "named" (int, Config), "qualified" (testing.T),
    "struct" (struct{...}), "pointer" (*X, with elem set) or "other".
    """

    kind: str
    text: str
    name: Optional[str] = None
    package: Optional[str] = None
    elem: Optional[TypeRef] = None

    def is_struct(self) -> bool:
        return self.kind == "struct"

    def is_pointer_to_struct(self) -> bool:
        return self.kind == "pointer" and self.elem is not None and self.elem.is_struct()

    def is_pointer_to(self, package: str, name: str) -> bool:
        """True for ``*package.name``."""
        return (
            self.kind == "pointer"
            and self.elem is not None
            and self.elem.kind == "qualified"
            and self.elem.package == package
            and self.elem.name == name
        )

    def is_framework_context(self) -> bool:
        """True for a pointer to a qualified T or DUTDevice, from any package."""
        return (
            self.kind == "pointer"
            and self.elem is not None
            and self.elem.kind == "qualified"
            and self.elem.name in FRAMEWORK_CONTEXT_TYPES
        )


@dataclass(frozen=True)
class ParameterDeclaration:
    """One parameter field: ``a, b int`` is a single field with two names."""

    names: tuple[str, ...]
    type: TypeRef

    @property
    def name(self) -> Optional[str]:
        return self.names[0] if self.names else None

    def is_testing_t(self) -> bool:
        return self.type.is_pointer_to("testing", "T")

    def is_testing_m(self) -> bool:
        return self.type.is_pointer_to("testing", "M")


class FunctionBody:
    """
    Opaque handle on a function body.

    Only answers the questions rules ask of a body; the tree itself is not
    exposed.
    """

    def __init__(self, node: TSNode, source: bytes) -> None:
        self._node = node
        self._source = source

    def _text(self, node: TSNode) -> str:
        return _node_text(self._source, node)

    def calls(self, qualifier: str, selector: str) -> bool:
        """True if the body contains a call ``qualifier.selector(...)`` anywhere."""
        for node in _walk(self._node):
            if node.type != "call_expression":
                continue
            function = node.child_by_field_name("function")
            if function is None or function.type != "selector_expression":
                continue
            operand = function.child_by_field_name("operand")
            member = function.child_by_field_name("field")
            if (
                operand is not None
                and member is not None
                and operand.type == "identifier"
                and self._text(operand) == qualifier
                and self._text(member) == selector
            ):
                return True
        return False

    def has_table_value(self) -> bool:
        """
        True if the body builds a collection-like value: a ``var`` of array or
        slice type, or a composite literal of array/slice/named type assigned
        via ``var x = ...``, ``x := ...`` or ``x = ...``.
        """
        for node in _walk(self._node):
            if node.type == "var_spec":
                type_node = node.child_by_field_name("type")
                if type_node is not None:
                    if type_node.type in _ARRAY_TYPES:
                        return True
                elif _any_table_literal(node.child_by_field_name("value")):
                    return True
            elif node.type in ("short_var_declaration", "assignment_statement"):
                if _any_table_literal(node.child_by_field_name("right")):
                    return True
        return False

    def has_range_loop(self) -> bool:
        return any(node.type == "range_clause" for node in _walk(self._node))


def _any_table_literal(values: Optional[TSNode]) -> bool:
    if values is None:
        return False
    candidates = values.named_children if values.type == "expression_list" else [values]
    for value in candidates:
        if value.type != "composite_literal":
            continue
        literal_type = value.child_by_field_name("type")
        if literal_type is not None and literal_type.type in _TABLE_LITERAL_TYPES:
            return True
    return False


@dataclass(frozen=True)
class Declaration:
    """A top-level named construct; ``exported`` follows Go's first-letter rule."""

    name: str
    line: int

    label = "declaration"

    @property
    def exported(self) -> bool:
        return self.name[:1].isupper()


@dataclass(frozen=True)
class FunctionDeclaration(Declaration):
    parameters: tuple[ParameterDeclaration, ...] = ()
    doc: Optional[str] = None
    has_receiver: bool = False
    body: Optional[FunctionBody] = field(default=None, compare=False, repr=False)

    label = "function"

    @property
    def is_test_entry(self) -> bool:
        return self.name.startswith("Test")

    @property
    def is_test_main_hook(self) -> bool:
        """``func TestMain(m *testing.M)``: the framework hook, not a test."""
        return (
            self.name == "TestMain"
            and len(self.parameters) == 1
            and self.parameters[0].is_testing_m()
        )

    def testing_t_name(self) -> Optional[str]:
        """Name of the first named ``*testing.T`` parameter, if any."""
        for param in self.parameters:
            if param.is_testing_t() and param.names:
                return param.names[0]
        return None


@dataclass(frozen=True)
class TypeDeclaration(Declaration):
    label = "type"


@dataclass(frozen=True)
class VariableDeclaration(Declaration):
    # Source text of the declared type; None when the type is inferred.
    type_name: Optional[str] = None
    kind: str = "var"

    label = "variable"


@dataclass(frozen=True)
class FileStructure:
    """Ordered top-level declarations of one successfully parsed file."""

    declarations: tuple[Declaration, ...]

    @property
    def functions(self) -> tuple[FunctionDeclaration, ...]:
        return tuple(d for d in self.declarations if isinstance(d, FunctionDeclaration))

    @property
    def types(self) -> tuple[TypeDeclaration, ...]:
        return tuple(d for d in self.declarations if isinstance(d, TypeDeclaration))

    @property
    def variables(self) -> tuple[VariableDeclaration, ...]:
        return tuple(d for d in self.declarations if isinstance(d, VariableDeclaration))


def _type_ref(source: bytes, node: TSNode) -> TypeRef:
    text = _node_text(source, node)
    if node.type == "pointer_type":
        targets = node.named_children
        elem = _type_ref(source, targets[0]) if targets else None
        return TypeRef(kind="pointer", text=text, elem=elem)
    if node.type == "qualified_type":
        package = node.child_by_field_name("package")
        name = node.child_by_field_name("name")
        return TypeRef(
            kind="qualified",
            text=text,
            name=_node_text(source, name) if name is not None else None,
            package=_node_text(source, package) if package is not None else None,
        )
    if node.type == "struct_type":
        return TypeRef(kind="struct", text=text)
    if node.type == "type_identifier":
        return TypeRef(kind="named", text=text, name=text)
    return TypeRef(kind="other", text=text)


def _parameters(source: bytes, params: Optional[TSNode]) -> tuple[ParameterDeclaration, ...]:
    if params is None:
        return ()
    result: list[ParameterDeclaration] = []
    for child in params.named_children:
        if child.type not in ("parameter_declaration", "variadic_parameter_declaration"):
            continue
        names = tuple(_node_text(source, n) for n in child.children_by_field_name("name"))
        type_node = child.child_by_field_name("type")
        if type_node is None:
            type_ref = TypeRef(kind="other", text="")
        elif child.type == "variadic_parameter_declaration":
            type_ref = TypeRef(kind="other", text="..." + _node_text(source, type_node))
        else:
            type_ref = _type_ref(source, type_node)
        result.append(ParameterDeclaration(names=names, type=type_ref))
    return tuple(result)


def _comment_lines(raw: str) -> list[str]:
    if raw.startswith("//"):
        body = raw[2:]
        if _DIRECTIVE_RE.match(body):
            return []
        return [body[1:] if body.startswith(" ") else body]
    return raw[2:-2].splitlines()


def _is_trailing_comment(comment: TSNode) -> bool:
    """A comment on the same line as the code before it belongs to that code."""
    before = comment.prev_named_sibling
    return (
        before is not None
        and before.type != "comment"
        and before.end_point[0] == comment.start_point[0]
    )


def _doc_comment(source: bytes, node: TSNode) -> Optional[str]:
    """
    Text of the comment group ending on the line directly above node, or None.

    Mirrors go/ast CommentGroup.Text: markers, the first space of line comments
    and directives are removed, then surrounding whitespace is stripped.
    """
    group: list[TSNode] = []
    expected_row = node.start_point[0] - 1
    prev = node.prev_named_sibling
    while (
        prev is not None
        and prev.type == "comment"
        and prev.end_point[0] == expected_row
        and not _is_trailing_comment(prev)
    ):
        group.append(prev)
        expected_row = prev.start_point[0] - 1
        prev = prev.prev_named_sibling
    if not group:
        return None
    lines: list[str] = []
    for comment in reversed(group):
        lines.extend(_comment_lines(_node_text(source, comment)))
    return "\n".join(line.rstrip() for line in lines).strip()


def _function(source: bytes, node: TSNode) -> Optional[FunctionDeclaration]:
    name = node.child_by_field_name("name")
    if name is None:
        return None
    body = node.child_by_field_name("body")
    return FunctionDeclaration(
        name=_node_text(source, name),
        line=_line(node),
        parameters=_parameters(source, node.child_by_field_name("parameters")),
        doc=_doc_comment(source, node),
        has_receiver=node.type == "method_declaration",
        body=FunctionBody(body, source) if body is not None else None,
    )


def _specs(node: TSNode, spec_type: str) -> Iterator[TSNode]:
    """Yield the specs of a (possibly parenthesized) var/const/type declaration."""
    for child in node.named_children:
        if child.type == spec_type:
            yield child
        elif child.type.endswith("_spec_list"):
            yield from _specs(child, spec_type)


def _types(source: bytes, node: TSNode) -> Iterator[TypeDeclaration]:
    for child in node.named_children:
        if child.type not in ("type_spec", "type_alias"):
            continue
        name = child.child_by_field_name("name")
        if name is not None:
            yield TypeDeclaration(name=_node_text(source, name), line=_line(name))


def _variables(source: bytes, node: TSNode) -> Iterator[VariableDeclaration]:
    kind = "var" if node.type == "var_declaration" else "const"
    for spec in _specs(node, f"{kind}_spec"):
        type_node = spec.child_by_field_name("type")
        type_name = _node_text(source, type_node) if type_node is not None else None
        for name in spec.children_by_field_name("name"):
            yield VariableDeclaration(
                name=_node_text(source, name),
                line=_line(name),
                type_name=type_name,
                kind=kind,
            )


def build_structure(root: TSNode, source: bytes) -> FileStructure:
    """Collect top-level declarations of a parsed Go file in source order."""
    declarations: list[Declaration] = []
    for node in root.named_children:
        if node.type in ("function_declaration", "method_declaration"):
            fn = _function(source, node)
            if fn is not None:
                declarations.append(fn)
        elif node.type == "type_declaration":
            declarations.extend(_types(source, node))
        elif node.type in ("var_declaration", "const_declaration"):
            declarations.extend(_variables(source, node))
    return FileStructure(declarations=tuple(declarations))


def parse_structure(
    source: bytes,
    parser: Optional[tree_sitter.Parser] = None,
) -> Optional[FileStructure]:
    """
    Parse Go source into its structural view.

    Returns None when the source is not valid Go (syntax errors, no package
    clause, statements at file scope); malformed input never raises past
    this function.
    """
    tree = parse_bytes(source, parser=parser)
    problem = syntax_problem(tree)
    if problem is not None:
        logger.info("Source is not valid Go (%s); no structural view", problem)
        return None
    structure = build_structure(tree.root_node, source)
    logger.debug(
        "Extracted %d declaration(s), %d function(s)",
        len(structure.declarations),
        len(structure.functions),
    )
    return structure
