"""JavaScript/TypeScript suggestors using regex patterns."""

import re

from .base import RegexSuggestor


class RenameExportSuggestor(RegexSuggestor):
    """Rename an export symbol."""

    def __init__(self, old_name: str, new_name: str):
        name = re.escape(old_name)
        # export { old }, export { old as alias }, export default old
        pattern = (
            r"\bexport\s*\{\s*(?P<name>" + name + r")\b(?=\s*(?:as\s+\w+\s*)?\})"
            r"|\bexport\s+default\s+(?P<default>" + name + r")\b"
        )
        super().__init__(
            pattern,
            name="rename_export",
            description=f"Rename export '{old_name}' to '{new_name}'"
        )
        self.old_name = old_name
        self.new_name = new_name

    def should_skip(self, source_text: str) -> bool:
        return self.old_name not in source_text

    def match_span(self, match: "re.Match[str]"):
        group = "name" if match.group("name") is not None else "default"
        return match.span(group)

    def generate_replacement(self, match: "re.Match[str]") -> str:
        return self.new_name


class RemoveConsoleSuggestor(RegexSuggestor):
    """Remove console.log, console.warn, etc. statements that sit on their own line."""

    # The call must be the only statement on its line.
    pattern = re.compile(r"^[ \t]*console\.\w+\([^;\n]*\);?[ \t]*(?:\r?\n|\Z)", re.MULTILINE)

    def __init__(self):
        super().__init__(
            name="remove_console",
            description="Remove all console.* calls"
        )

    def should_skip(self, source_text: str) -> bool:
        return "console." not in source_text

    def generate_replacement(self, match: "re.Match[str]") -> str:
        return ""
