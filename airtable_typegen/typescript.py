from .emitter import Emitter, Language, Mode
from .errors import UnrecognizedFieldTypeError
from .helpers import (
    enum_identifier,
    get_result,
    get_select_options,
    has_enum,
    is_integer_number,
    is_read_only,
    lookup_element,
    property_doc,
    sanitize_string,
    table_type_name,
    ts_string,
)
from .meta_types import BaseMetadata, FieldMetadata, TableMetadata
from .write_to_file import WriteToTypeScriptFile

TABLE_ID_MAPPING = "AirtableTableIdMapping"
TABLE_TYPE_MAPPING = "AirtableTableTypeMapping"
TABLE_SCHEMA_MAPPING = "AirtableTableSchemaMapping"


def literal_union(options: list[str]) -> str:
    if not options:
        return "string"
    return " | ".join(ts_string(option) for option in options)


def typescript_type(table: TableMetadata, field: FieldMetadata) -> str:
    """Returns the appropriate TypeScript type for a given Airtable field."""

    match field.type:
        case "checkbox":
            return "boolean"
        case "singleLineText" | "multilineText" | "richText" | "phoneNumber" | "url" | "email":
            return "string"
        case "number" | "currency" | "percent" | "count" | "autoNumber" | "duration" | "rating":
            return "number"
        # Dates are strings in the API
        case "date" | "dateTime" | "createdTime" | "lastModifiedTime":
            return "string"
        case "singleSelect":
            return literal_union(get_select_options(field))
        case "multipleSelects":
            return f"Array<{literal_union(get_select_options(field))}>"
        case "singleCollaborator" | "createdBy" | "lastModifiedBy":
            return "IAirtableCollaborator"
        case "multipleCollaborators":
            return "Array<IAirtableCollaborator>"
        case "multipleAttachments":
            return "Array<IAirtableAttachment>"
        case "multipleRecordLinks":
            return "Array<string>"
        case "multipleLookupValues":
            match lookup_element(field):
                case "numeric":
                    return "Array<number>"
                case "boolean":
                    return "Array<boolean>"
                case "attachment":
                    return "Array<IAirtableAttachment>"
                case "string":
                    return "Array<string>"
                case _:
                    return "Array<string | boolean | number | Record<string, unknown>>"
        case "formula" | "rollup":
            result = get_result(field)
            return typescript_type(table, result) if result is not None else "string"
        case "barcode":
            return "{ text: string; type: string }"
        case "button":
            return "{ label: string; url?: string }"
        # Airtable does not document the shape of this one
        case "externalSyncSource":
            return "unknown"

    raise UnrecognizedFieldTypeError(field.label(), field.type)


def zod_select(table: TableMetadata, field: FieldMetadata, nested: bool) -> str:
    options = get_select_options(field)
    if not options:
        return "z.string()"
    if nested:
        return f"z.enum([{', '.join(ts_string(option) for option in options)}])"
    return enum_identifier(table, field)


def zod_type(table: TableMetadata, field: FieldMetadata, nested: bool = False) -> str:
    """Returns the appropriate Zod schema for a given Airtable field.

    `nested` is set for the `result` descriptors of computed fields, which have no enum of their own.
    """

    match field.type:
        case "autoNumber":
            return "z.number().int().positive()"
        case "barcode":
            return "z.object({ text: z.string(), type: z.string() })"
        case "button":
            return "z.object({ label: z.string(), url: z.string().optional() })"
        case "checkbox":
            return "z.boolean()"
        case "count":
            return "z.number().int().nonnegative()"
        case "createdBy" | "lastModifiedBy" | "singleCollaborator":
            return "AirtableCollaboratorSchema"
        case "date" | "dateTime" | "createdTime" | "lastModifiedTime":
            return "z.coerce.date()"
        case "number" | "currency" | "percent":
            return "z.number().int()" if is_integer_number(field) else "z.number()"
        case "duration":
            return "z.number()"
        case "rating":
            return f"z.number().int().min(0).max({field.options.max})"  # type: ignore[union-attr]
        case "email":
            return "z.string().email()"
        case "multilineText" | "phoneNumber" | "singleLineText" | "url" | "richText":
            return "z.string()"
        case "formula" | "rollup":
            result = get_result(field)
            return zod_type(table, result, nested=True) if result is not None else "z.string()"
        case "multipleCollaborators":
            return "z.array(AirtableCollaboratorSchema)"
        case "multipleAttachments":
            return "z.array(AirtableAttachmentSchema)"
        case "multipleLookupValues":
            result = get_result(field)
            match lookup_element(field):
                case "numeric":
                    return f"z.array({zod_type(table, result, nested=True)})"  # type: ignore[arg-type]
                case "boolean":
                    return "z.array(z.boolean())"
                case "attachment":
                    return "z.array(AirtableAttachmentSchema)"
                case "string":
                    return "z.array(z.string())"
                case _:
                    return "z.union([z.array(z.string()), z.array(z.boolean()), z.array(z.number()), z.array(z.record(z.unknown()))])"
        case "multipleRecordLinks":
            return "z.array(z.string())"
        case "singleSelect":
            return zod_select(table, field, nested)
        case "multipleSelects":
            return f"z.array({zod_select(table, field, nested)})"
        # Airtable does not document the shape of this one
        case "externalSyncSource":
            return "z.unknown()"

    raise UnrecognizedFieldTypeError(field.label(), field.type)


def _field_id_pairs(table: TableMetadata) -> list[tuple[str, str]]:
    return [(field.label(), field.id or "") for field in table.fields]


class TypeScriptEmitter(Emitter):
    """TypeScript interfaces"""

    language = Language.typescript
    mode = Mode.types
    imported_names = ("Array", "Record")

    def header(self, base: BaseMetadata) -> list[str]:
        write = WriteToTypeScriptFile()
        write.banner()
        write.line(f"// Airtable base: {sanitize_string(base.name)} ({base.id})")
        write.line_empty()
        return write.lines

    def table(self, table: TableMetadata) -> list[str]:
        write = WriteToTypeScriptFile()
        write.line(f"export interface {table_type_name(table)} {{")
        for field in table.fields:
            read_only = is_read_only(field)
            write.docstring(property_doc(table, field))
            write.property_row(field.label(), typescript_type(table, field), optional=not read_only, readonly=read_only)
        write.line("}")
        write.line_empty()
        return write.lines

    def field_id_mapping(self, table: TableMetadata) -> list[str]:
        write = WriteToTypeScriptFile()
        write.dict_class(f"{table_type_name(table)}FieldIdMapping", _field_id_pairs(table))
        return write.lines

    def table_mappings(self, tables: list[TableMetadata]) -> list[str]:
        write = WriteToTypeScriptFile()
        write.dict_class(TABLE_ID_MAPPING, [(table.name, table.id) for table in tables])
        write.line(f"export interface {TABLE_TYPE_MAPPING} {{")
        for table in tables:
            write.property_row(table.id, table_type_name(table))
        write.line("}")
        write.line_empty()
        return write.lines

    def identifiers(self, table: TableMetadata, field_ids: bool) -> list[tuple[str, str]]:
        source = f"table '{table.name}'"
        identifiers = [(table_type_name(table), source)]
        if field_ids:
            identifiers.append((f"{table_type_name(table)}FieldIdMapping", source))
        return identifiers

    def mapping_identifiers(self) -> list[str]:
        return [TABLE_ID_MAPPING, TABLE_TYPE_MAPPING]


class ZodEmitter(Emitter):
    """Zod schemas, with inferred TypeScript types"""

    language = Language.typescript
    mode = Mode.schemas
    imported_names = ("z",)

    def header(self, base: BaseMetadata) -> list[str]:
        write = WriteToTypeScriptFile()
        write.banner()
        write.line(f"// Airtable base: {sanitize_string(base.name)} ({base.id})")
        write.line_empty()
        write.line("import { z } from 'zod'")
        write.line_empty()
        return write.lines

    def enum(self, table: TableMetadata, field: FieldMetadata) -> list[str]:
        write = WriteToTypeScriptFile()
        write.line(f"export const {enum_identifier(table, field)} = z.enum([")
        for option in get_select_options(field):
            write.line_indented(f"{ts_string(option)},")
        write.line("])")
        write.line_empty()
        return write.lines

    def table(self, table: TableMetadata) -> list[str]:
        write = WriteToTypeScriptFile()
        type_name = table_type_name(table)
        write.line(f"export const {type_name}Schema = z.object({{")
        for field in table.fields:
            schema = zod_type(table, field)
            write.docstring(property_doc(table, field))
            write.line_indented(f"{ts_string(field.label())}: {schema if is_read_only(field) else f'{schema}.optional()'},")
        write.line("})")
        write.line(f"export type {type_name} = z.infer<typeof {type_name}Schema>")
        write.line_empty()
        return write.lines

    def field_id_mapping(self, table: TableMetadata) -> list[str]:
        write = WriteToTypeScriptFile()
        write.dict_class(f"{table_type_name(table)}FieldIdMapping", _field_id_pairs(table))
        return write.lines

    def table_mappings(self, tables: list[TableMetadata]) -> list[str]:
        write = WriteToTypeScriptFile()
        write.dict_class(TABLE_ID_MAPPING, [(table.name, table.id) for table in tables])
        write.dict_class(TABLE_SCHEMA_MAPPING, [(table.id, f"{table_type_name(table)}Schema") for table in tables], is_value_string=False)
        return write.lines

    def identifiers(self, table: TableMetadata, field_ids: bool) -> list[tuple[str, str]]:
        source = f"table '{table.name}'"
        type_name = table_type_name(table)
        identifiers = [(type_name, source), (f"{type_name}Schema", source)]
        for field in table.fields:
            if has_enum(field):
                identifiers.append((enum_identifier(table, field), f"field '{table.name}.{field.label()}'"))
        if field_ids:
            identifiers.append((f"{type_name}FieldIdMapping", source))
        return identifiers

    def mapping_identifiers(self) -> list[str]:
        return [TABLE_ID_MAPPING, TABLE_SCHEMA_MAPPING]
