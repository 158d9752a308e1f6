# Tree-sitter setup for Go, plus the file-shape checks that tree-sitter-go's
# grammar leaves to the compiler (package clause first, declarations only at
# the top level).

import logging
from typing import Optional

import tree_sitter
from tree_sitter import Language
from tree_sitter_go import language as _go_language_capsule

logger = logging.getLogger(__name__)

_GO_LANGUAGE = Language(_go_language_capsule())

# Named nodes go/parser accepts directly under a source file.
TOP_LEVEL_NODES = frozenset(
    {
        "package_clause",
        "import_declaration",
        "function_declaration",
        "method_declaration",
        "type_declaration",
        "var_declaration",
        "const_declaration",
        "comment",
    }
)


def create_parser() -> tree_sitter.Parser:
    """Create and return a Tree-sitter Parser configured for Go."""
    return tree_sitter.Parser(_GO_LANGUAGE)


def parse_bytes(
    source: bytes,
    parser: Optional[tree_sitter.Parser] = None,
) -> tree_sitter.Tree:
    """
    Parse Go source bytes into an AST.

    The tree is returned even when it contains ERROR nodes; use
    syntax_problem() to decide whether go/parser would accept the file.
    """
    if parser is None:
        parser = create_parser()
    tree = parser.parse(source)
    if tree.root_node.has_error:
        logger.debug("Parse completed with errors: root=%s", tree.root_node.type)
    else:
        logger.debug("Parse succeeded: root=%s", tree.root_node.type)
    return tree


def syntax_problem(tree: tree_sitter.Tree) -> Optional[str]:
    """
    Describe why a parsed file is not valid Go, or return None if it is.

    tree-sitter-go also accepts a missing package clause and statements at
    file scope (x := 1); go/parser rejects both, so they count as failures.
    """
    root = tree.root_node
    if root.has_error:
        return "syntax error"
    code = [node for node in root.named_children if node.type != "comment"]
    if not code or code[0].type != "package_clause":
        return "missing package clause"
    for node in code:
        if node.type not in TOP_LEVEL_NODES:
            return f"unexpected {node.type} at line {node.start_point[0] + 1}"
    return None
