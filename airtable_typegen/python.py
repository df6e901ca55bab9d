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
    py_string,
    python_property_name,
    sanitize_string,
    table_type_name,
)
from .meta_types import BaseMetadata, FieldMetadata, TableMetadata
from .templates import Fragment
from .write_to_file import WriteToPythonFile

TABLE_ID_MAPPING = "AirtableTableIdMapping"
TABLE_TYPE_MAPPING = "AirtableTableTypeMapping"


def literal_type(options: list[str]) -> str:
    if not options:
        return "str"
    return f"Literal[{', '.join(py_string(option) for option in options)}]"


def python_type(table: TableMetadata, field: FieldMetadata) -> str:
    """Returns the appropriate Python type for a given Airtable field, as used in a `TypedDict`."""

    match field.type:
        case "checkbox":
            return "bool"
        case "singleLineText" | "multilineText" | "richText" | "phoneNumber" | "url" | "email":
            return "str"
        case "number" | "currency" | "percent":
            return "int" if is_integer_number(field) else "float"
        case "count" | "autoNumber" | "rating":
            return "int"
        case "duration":
            return "float"
        # Dates are strings in the API
        case "date" | "dateTime" | "createdTime" | "lastModifiedTime":
            return "str"
        case "singleSelect":
            return literal_type(get_select_options(field))
        case "multipleSelects":
            return f"list[{literal_type(get_select_options(field))}]"
        case "singleCollaborator" | "createdBy" | "lastModifiedBy":
            return "AirtableCollaborator"
        case "multipleCollaborators":
            return "list[AirtableCollaborator]"
        case "multipleAttachments":
            return "list[AirtableAttachment]"
        case "multipleRecordLinks":
            return "list[str]"
        case "multipleLookupValues":
            result = get_result(field)
            match lookup_element(field):
                case "numeric":
                    return f"list[{python_type(table, result)}]"  # type: ignore[arg-type]
                case "boolean":
                    return "list[bool]"
                case "attachment":
                    return "list[AirtableAttachment]"
                case "string":
                    return "list[str]"
                case _:
                    return "list[str | bool | int | float | dict[str, Any]]"
        case "formula" | "rollup":
            result = get_result(field)
            return python_type(table, result) if result is not None else "str"
        case "barcode":
            return "AirtableBarcode"
        case "button":
            return "AirtableButton"
        # Airtable does not document the shape of this one
        case "externalSyncSource":
            return "Any"

    raise UnrecognizedFieldTypeError(field.label(), field.type)


def pydantic_select(table: TableMetadata, field: FieldMetadata, nested: bool) -> str:
    options = get_select_options(field)
    if not options or nested:
        return literal_type(options)
    return enum_identifier(table, field)


def pydantic_type(table: TableMetadata, field: FieldMetadata, nested: bool = False) -> str:
    """Returns the appropriate Pydantic annotation for a given Airtable field.

    `nested` is set for the `result` descriptors of computed fields, which have no enum of their own.
    """

    match field.type:
        case "checkbox":
            return "bool"
        case "singleLineText" | "multilineText" | "richText" | "phoneNumber" | "url":
            return "str"
        case "email":
            return "AirtableEmail"
        case "number" | "currency" | "percent":
            return "int" if is_integer_number(field) else "float"
        case "count":
            return "Annotated[int, Field(ge=0)]"
        case "autoNumber":
            return "Annotated[int, Field(gt=0)]"
        case "rating":
            return f"Annotated[int, Field(ge=0, le={field.options.max})]"  # type: ignore[union-attr]
        # Airtable sends durations as a number of seconds
        case "duration":
            return "timedelta"
        case "date":
            return "date"
        # Sent as full timestamps whatever the display format
        case "dateTime" | "createdTime" | "lastModifiedTime":
            return "datetime"
        case "singleSelect":
            return pydantic_select(table, field, nested)
        case "multipleSelects":
            return f"list[{pydantic_select(table, field, nested)}]"
        case "singleCollaborator" | "createdBy" | "lastModifiedBy":
            return "AirtableCollaborator"
        case "multipleCollaborators":
            return "list[AirtableCollaborator]"
        case "multipleAttachments":
            return "list[AirtableAttachment]"
        case "multipleRecordLinks":
            return "list[str]"
        case "multipleLookupValues":
            result = get_result(field)
            match lookup_element(field):
                case "numeric":
                    return f"list[{pydantic_type(table, result, nested=True)}]"  # type: ignore[arg-type]
                case "boolean":
                    return "list[bool]"
                case "attachment":
                    return "list[AirtableAttachment]"
                case "string":
                    return "list[str]"
                case _:
                    return "list[str | bool | int | float | dict[str, Any]]"
        case "formula" | "rollup":
            result = get_result(field)
            return pydantic_type(table, result, nested=True) if result is not None else "str"
        case "barcode":
            return "AirtableBarcode"
        case "button":
            return "AirtableButton"
        # Airtable does not document the shape of this one
        case "externalSyncSource":
            return "Any"

    raise UnrecognizedFieldTypeError(field.label(), field.type)


def _field_id_pairs(table: TableMetadata) -> list[tuple[str, str]]:
    return [(field.label(), field.id or "") for field in table.fields]


class _PythonEmitter(Emitter):
    language = Language.python
    mapping_value_type = "type"

    def _banner(self, base: BaseMetadata) -> WriteToPythonFile:
        write = WriteToPythonFile()
        write.banner()
        write.line(f"# Airtable base: {sanitize_string(base.name)} ({base.id})")
        write.line_empty()
        return write

    def fragment(self, fragment: Fragment) -> list[str]:
        return fragment.text.split("\n") + ["", ""]

    def field_id_mapping(self, table: TableMetadata) -> list[str]:
        write = WriteToPythonFile()
        write.dict_class(f"{table_type_name(table)}FieldIdMapping", _field_id_pairs(table))
        return write.lines

    def table_mappings(self, tables: list[TableMetadata]) -> list[str]:
        write = WriteToPythonFile()
        write.dict_class(TABLE_ID_MAPPING, [(table.name, table.id) for table in tables])
        write.dict_class(
            TABLE_TYPE_MAPPING,
            [(table.id, table_type_name(table)) for table in tables],
            second_type=self.mapping_value_type,
            value_is_string=False,
        )
        return write.lines

    def mapping_identifiers(self) -> list[str]:
        return [TABLE_ID_MAPPING, TABLE_TYPE_MAPPING]


class TypedDictEmitter(_PythonEmitter):
    """`TypedDict` declarations, keyed by the Airtable field names"""

    mode = Mode.types
    imported_names = ("Any", "Literal", "NotRequired", "TypedDict")

    def header(self, base: BaseMetadata) -> list[str]:
        write = self._banner(base)
        write.line("from typing import Any, Literal, NotRequired, TypedDict")
        write.line_empty()
        write.line_empty()
        return write.lines

    def table(self, table: TableMetadata) -> list[str]:
        write = WriteToPythonFile()
        type_name = table_type_name(table)
        write.line(f"{type_name} = TypedDict(")
        write.line_indented(f"{py_string(type_name)},")
        write.line_indented("{")
        for field in table.fields:
            annotation = python_type(table, field)
            if not is_read_only(field):
                annotation = f"NotRequired[{annotation}]"
            write.line_indented(f"# {property_doc(table, field)}", indent=2)
            write.line_indented(f"{py_string(field.label())}: {annotation},", indent=2)
        write.line_indented("},")
        write.line(")")
        write.line(f'"""{sanitize_string(table.name)} `{table.id}`"""')
        write.line_empty()
        write.line_empty()
        return write.lines

    def identifiers(self, table: TableMetadata, field_ids: bool) -> list[tuple[str, str]]:
        source = f"table '{table.name}'"
        identifiers = [(table_type_name(table), source)]
        if field_ids:
            identifiers.append((f"{table_type_name(table)}FieldIdMapping", source))
        return identifiers


class PydanticEmitter(_PythonEmitter):
    """Pydantic models that validate records read from Airtable"""

    mode = Mode.schemas
    mapping_value_type = "type[BaseModel]"
    imported_names = ("date", "datetime", "timedelta", "Annotated", "Any", "Literal", "Optional", "BaseModel", "ConfigDict", "Field")

    def header(self, base: BaseMetadata) -> list[str]:
        write = self._banner(base)
        write.line("from datetime import date, datetime, timedelta")
        write.line("from typing import Annotated, Any, Literal, Optional")
        write.line_empty()
        write.line("from pydantic import BaseModel, ConfigDict, Field")
        write.line_empty()
        write.line_empty()
        return write.lines

    def enum(self, table: TableMetadata, field: FieldMetadata) -> list[str]:
        write = WriteToPythonFile()
        write.literal(enum_identifier(table, field), get_select_options(field))
        write.line(f'"""Select options for `{sanitize_string(field.label())}`"""')
        write.line_empty()
        return write.lines

    def table(self, table: TableMetadata) -> list[str]:
        write = WriteToPythonFile()
        write.line(f"class {table_type_name(table)}(BaseModel):")
        write.docstring(f"{sanitize_string(table.name)} `{table.id}`")
        write.line_empty()
        write.line_indented("model_config = ConfigDict(populate_by_name=True)")
        write.line_empty()
        for field in table.fields:
            annotation = pydantic_type(table, field)
            alias = py_string(field.label())
            if is_read_only(field):
                write.property_row(python_property_name(field.label()), annotation, f"Field(alias={alias}, frozen=True)")
            else:
                write.property_row(python_property_name(field.label()), f"Optional[{annotation}]", f"Field(default=None, alias={alias})")
            write.docstring(property_doc(table, field))
        write.line_empty()
        write.line_empty()
        return write.lines

    def identifiers(self, table: TableMetadata, field_ids: bool) -> list[tuple[str, str]]:
        source = f"table '{table.name}'"
        type_name = table_type_name(table)
        identifiers = [(type_name, source)]
        for field in table.fields:
            field_source = f"field '{table.name}.{field.label()}'"
            if has_enum(field):
                identifiers.append((enum_identifier(table, field), field_source))
            identifiers.append((f"{type_name}.{python_property_name(field.label())}", field_source))
        if field_ids:
            identifiers.append((f"{type_name}FieldIdMapping", source))
        return identifiers
