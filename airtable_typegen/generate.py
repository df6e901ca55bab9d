from typing import Callable, Iterable, Optional

from pydantic import BaseModel, ConfigDict

from .emitter import Emitter, Language, Mode
from .errors import IdentifierCollisionError, UnresolvedTableFilterError
from .helpers import has_attachment_field, has_barcode_field, has_button_field, has_collaborator_field, has_email_field, has_enum
from .mapping import get_emitter
from .meta_types import BaseMetadata, FieldMetadata, TableMetadata

FRAGMENT_PREDICATES: dict[str, Callable[[Iterable[FieldMetadata]], bool]] = {
    "attachment": has_attachment_field,
    "collaborator": has_collaborator_field,
    "barcode": has_barcode_field,
    "button": has_button_field,
    "email": has_email_field,
}


class GenerateOptions(BaseModel):
    language: Language = Language.typescript
    mode: Mode = Mode.types
    include_field_id_mapping: bool = False
    """Also emit field-name to field-ID mappings, and the run-wide table lookups"""
    table_filter: Optional[list[str]] = None
    """Table names or IDs to generate. All tables when unset."""


class Assembly(BaseModel):
    """Everything accumulated while walking the tables of one generation run."""

    model_config = ConfigDict(frozen=True)

    lines: tuple[str, ...] = ()
    identifiers: tuple[tuple[str, str], ...] = ()
    mapped_tables: tuple[TableMetadata, ...] = ()

    def add(
        self,
        lines: Iterable[str] = (),
        identifiers: Iterable[tuple[str, str]] = (),
        mapped_tables: Iterable[TableMetadata] = (),
    ) -> "Assembly":
        return Assembly(
            lines=self.lines + tuple(lines),
            identifiers=self.identifiers + tuple(identifiers),
            mapped_tables=self.mapped_tables + tuple(mapped_tables),
        )

    def collisions(self) -> dict[str, list[str]]:
        sources: dict[str, list[str]] = {}
        for identifier, source in self.identifiers:
            sources.setdefault(identifier, []).append(source)
        return {identifier: found for identifier, found in sources.items() if len(found) > 1}

    def text(self) -> str:
        return "\n".join(self.lines).rstrip("\n") + "\n"


def filter_tables(tables: list[TableMetadata], requested: Optional[list[str]]) -> list[TableMetadata]:
    """Selects the tables named (by name or ID) in `requested`, keeping the metadata order.

    Every requested entry has to match exactly one table, otherwise nothing is generated.
    """
    if requested is None:
        return tables

    selected: set[str] = set()
    unresolved: list[str] = []
    for name_or_id in requested:
        matches = [table for table in tables if name_or_id in (table.id, table.name)]
        if len(matches) == 1:
            selected.add(matches[0].id)
        else:
            unresolved.append(name_or_id)

    found = [table for table in tables if table.id in selected]
    if unresolved:
        raise UnresolvedTableFilterError(requested, [table.name for table in found], unresolved)
    return found


def assemble_table(assembly: Assembly, emitter: Emitter, table: TableMetadata, field_ids: bool) -> Assembly:
    lines: list[str] = []
    for field in table.fields:
        if has_enum(field):
            lines += emitter.enum(table, field)
    lines += emitter.table(table)
    if field_ids:
        lines += emitter.field_id_mapping(table)
    return assembly.add(lines=lines, identifiers=emitter.identifiers(table, field_ids), mapped_tables=[table])


def generate(base: BaseMetadata, tables: list[TableMetadata], options: Optional[GenerateOptions] = None) -> str:
    """Generates the source code describing the records of `tables`"""

    options = options or GenerateOptions()
    tables = filter_tables(tables, options.table_filter)
    emitter = get_emitter(options.language, options.mode)
    all_fields = [field for table in tables for field in table.fields]

    assembly = Assembly().add(
        lines=emitter.header(base),
        identifiers=[(name, "imports") for name in emitter.imported_names],
    )

    for fragment in emitter.fragments():
        if FRAGMENT_PREDICATES[fragment.kind](all_fields):
            assembly = assembly.add(
                lines=emitter.fragment(fragment),
                identifiers=[(identifier, "shared declarations") for identifier in fragment.identifiers],
            )

    for table in tables:
        assembly = assemble_table(assembly, emitter, table, options.include_field_id_mapping)

    if options.include_field_id_mapping:
        assembly = assembly.add(
            lines=emitter.table_mappings(list(assembly.mapped_tables)),
            identifiers=[(identifier, "table mappings") for identifier in emitter.mapping_identifiers()],
        )

    collisions = assembly.collisions()
    if collisions:
        raise IdentifierCollisionError(collisions)

    return assembly.text()
