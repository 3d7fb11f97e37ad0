"""Python suggestors using LibCST."""

import logging
from typing import Iterator, List, Optional, Tuple

import libcst as cst
from libcst.metadata import MetadataWrapper, PositionProvider

from .base import BaseSuggestor
from .patch import Patch
from .source import SourceText

logger = logging.getLogger(__name__)


class CSTVisitingSuggestor(BaseSuggestor, cst.CSTVisitor):
    """
    Base class for suggestors that walk a LibCST syntax tree.

    Subclasses implement ordinary ``visit_*`` methods and call
    ``yield_patch``, ``insert_before`` or ``insert_after`` with the nodes they
    want to change. Patches are handed out in the order the visitor recorded
    them. Files that do not parse produce no patches.
    """

    METADATA_DEPENDENCIES = (PositionProvider,)

    def __init__(self, name: str = "", description: str = ""):
        BaseSuggestor.__init__(self, name=name, description=description)
        cst.CSTVisitor.__init__(self)
        self._source: Optional[SourceText] = None
        self._patches: List[Patch] = []

    @property
    def source(self) -> SourceText:
        if self._source is None:
            raise RuntimeError("No file is being visited")
        return self._source

    def node_span(self, node: cst.CSTNode) -> Tuple[int, int]:
        """Return the ``[start, end)`` offsets of ``node`` in the visited file."""
        code_range = self.get_metadata(PositionProvider, node)
        start = self.source.offset_of(code_range.start.line - 1, code_range.start.column)
        end = self.source.offset_of(code_range.end.line - 1, code_range.end.column)
        return start, end

    def yield_patch(self, node: cst.CSTNode, replacement: str) -> None:
        """Replace the source of ``node`` with ``replacement``."""
        start, end = self.node_span(node)
        self._patches.append(Patch(self.source, start, end, replacement))

    def insert_before(self, node: cst.CSTNode, text: str) -> None:
        start, _ = self.node_span(node)
        self._patches.append(Patch(self.source, start, start, text))

    def insert_after(self, node: cst.CSTNode, text: str) -> None:
        _, end = self.node_span(node)
        self._patches.append(Patch(self.source, end, end, text))

    def generate_patches(self, source: SourceText) -> Iterator[Patch]:
        try:
            module = cst.parse_module(source.text)
        except cst.ParserSyntaxError as e:
            logger.warning(f"Could not parse {source.url}: {e.message}")
            return

        self._source = source
        self._patches = []
        try:
            MetadataWrapper(module).visit(self)
            patches = self._patches
        finally:
            self._source = None
            self._patches = []
        yield from patches


class RenameSymbolSuggestor(CSTVisitingSuggestor):
    """Rename a symbol throughout the code."""

    def __init__(self, old_name: str, new_name: str):
        super().__init__(
            name="rename_symbol",
            description=f"Rename symbol '{old_name}' to '{new_name}'"
        )
        self.old_name = old_name
        self.new_name = new_name

    def should_skip(self, source_text: str) -> bool:
        return self.old_name not in source_text

    def visit_Name(self, node: cst.Name) -> None:
        if node.value == self.old_name:
            self.yield_patch(node, self.new_name)


class ConvertPrintToLoggingSuggestor(CSTVisitingSuggestor):
    """Convert print() calls to logging calls."""

    def __init__(self, level: str = "info"):
        super().__init__(
            name="convert_print_to_logging",
            description=f"Convert print() calls to logging.{level}()"
        )
        self.level = level.lower()

    def should_skip(self, source_text: str) -> bool:
        return "print" not in source_text

    def visit_Call(self, node: cst.Call) -> None:
        if isinstance(node.func, cst.Name) and node.func.value == "print":
            self.yield_patch(node.func, f"logging.{self.level}")


class AddTypeHintsSuggestor(CSTVisitingSuggestor):
    """Add simple type hints to function parameters."""

    def __init__(self, simple: bool = True):
        super().__init__(
            name="add_type_hints",
            description="Add basic type hints to function parameters"
        )
        self.simple = simple
        self._lambda_depth = 0

    def visit_Lambda(self, node: cst.Lambda) -> None:
        # Lambda parameters cannot carry annotations.
        self._lambda_depth += 1

    def leave_Lambda(self, original_node: cst.Lambda) -> None:
        self._lambda_depth -= 1

    def visit_Param(self, node: cst.Param) -> None:
        if self._lambda_depth or node.annotation is not None:
            return
        type_hint = self._infer_type_hint(node.name.value)
        if type_hint:
            self.insert_after(node.name, f": {type_hint}")

    def _infer_type_hint(self, param_name: str) -> Optional[str]:
        """Simple type inference based on naming conventions."""
        if self.simple:
            name_lower = param_name.lower()
            if name_lower in ["count", "index", "length", "size", "num"]:
                return "int"
            elif name_lower in ["name", "text", "message", "content", "data"]:
                return "str"
            elif name_lower in ["flag", "enabled", "disabled", "active"]:
                return "bool"
            elif name_lower in ["items", "values", "args", "params"]:
                return "list"
        return None
