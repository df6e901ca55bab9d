from enum import Enum

from .meta_types import BaseMetadata, FieldMetadata, TableMetadata
from .templates import FRAGMENTS, Fragment


class Language(str, Enum):
    typescript = "typescript"
    python = "python"


class Mode(str, Enum):
    types = "types"
    """Static declarations only (TypeScript interfaces, TypedDicts)"""
    schemas = "schemas"
    """Declarations that validate data at runtime (Zod, Pydantic)"""


class Emitter:
    """Renders the declarations of one target language and mode.

    Every method returns the lines it produced; the assembler decides where they go.
    """

    language: Language
    mode: Mode
    imported_names: tuple[str, ...] = ()
    """Names the output takes from its imports or the language globals. No declaration may reuse them."""

    def header(self, base: BaseMetadata) -> list[str]:
        raise NotImplementedError

    def fragments(self) -> list[Fragment]:
        return FRAGMENTS[(self.language.value, self.mode.value)]

    def fragment(self, fragment: Fragment) -> list[str]:
        return fragment.text.split("\n") + [""]

    def enum(self, table: TableMetadata, field: FieldMetadata) -> list[str]:
        """Enum declaration for a select field. Only schema modes declare enums."""
        return []

    def table(self, table: TableMetadata) -> list[str]:
        raise NotImplementedError

    def field_id_mapping(self, table: TableMetadata) -> list[str]:
        raise NotImplementedError

    def table_mappings(self, tables: list[TableMetadata]) -> list[str]:
        """Run-wide table-name to table-ID and table-ID to type lookups"""
        raise NotImplementedError

    def identifiers(self, table: TableMetadata, field_ids: bool) -> list[tuple[str, str]]:
        """Every `(identifier, source)` this emitter declares for `table`"""
        raise NotImplementedError

    def mapping_identifiers(self) -> list[str]:
        raise NotImplementedError
