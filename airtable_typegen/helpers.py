import json
import keyword
import re
from typing import Iterable, Literal

from .meta_types import FieldMetadata, TableMetadata

READ_ONLY_FIELD_TYPES = frozenset(
    [
        "autoNumber",
        "button",
        "count",
        "createdBy",
        "createdTime",
        "externalSyncSource",
        "formula",
        "lastModifiedBy",
        "lastModifiedTime",
        "multipleLookupValues",
        "rollup",
    ]
)
"""Computed fields cannot be updated via the API."""

COLLABORATOR_FIELD_TYPES = frozenset(["singleCollaborator", "multipleCollaborators", "lastModifiedBy", "createdBy"])
SELECT_FIELD_TYPES = frozenset(["singleSelect", "multipleSelects"])
NUMERIC_FIELD_TYPES = frozenset(["number", "currency", "percent", "count", "autoNumber", "duration", "rating"])
RESERVED_PROPERTY_NAMES = frozenset(
    ["construct", "copy", "dict", "fields", "from_orm", "json", "parse_obj", "parse_raw", "schema", "schema_json", "validate"]
    + ["bool", "date", "datetime", "float", "int", "list", "str", "timedelta"]
)
"""Names that would shadow an attribute of `pydantic.BaseModel`, or a type used in generated annotations"""


def is_read_only(field: FieldMetadata) -> bool:
    return field.type in READ_ONLY_FIELD_TYPES


def get_result(field: FieldMetadata) -> FieldMetadata | None:
    """The `result` descriptor of a computed field, if Airtable reported one."""
    options = getattr(field, "options", None)
    return getattr(options, "result", None)


def referenced_field_types(field: FieldMetadata) -> set[str]:
    """The field type plus every type its mapping is derived from"""
    types = {field.type}
    result = get_result(field)
    if result is None:
        return types
    if field.type in ("formula", "rollup"):
        types |= referenced_field_types(result)
    elif field.type == "multipleLookupValues" and result.type == "multipleAttachments":
        types.add(result.type)
    return types


def _any_references(fields: Iterable[FieldMetadata], types: Iterable[str]) -> bool:
    wanted = set(types)
    return any(referenced_field_types(f) & wanted for f in fields)


def has_attachment_field(fields: Iterable[FieldMetadata]) -> bool:
    return _any_references(fields, ["multipleAttachments"])


def has_collaborator_field(fields: Iterable[FieldMetadata]) -> bool:
    return _any_references(fields, COLLABORATOR_FIELD_TYPES)


def has_barcode_field(fields: Iterable[FieldMetadata]) -> bool:
    return _any_references(fields, ["barcode"])


def has_button_field(fields: Iterable[FieldMetadata]) -> bool:
    return _any_references(fields, ["button"])


def has_email_field(fields: Iterable[FieldMetadata]) -> bool:
    return _any_references(fields, ["email"])


def get_select_options(field: FieldMetadata) -> list[str]:
    """Get the option names of a select field, in Airtable's order and without duplicates"""

    if field.type not in SELECT_FIELD_TYPES:
        return []
    options: list[str] = []
    for choice in field.options.choices:  # type: ignore[union-attr]
        if choice.name not in options:
            options.append(choice.name)
    return options


def has_enum(field: FieldMetadata) -> bool:
    """Select fields with at least one choice get their own enum declaration in schema output."""
    return len(get_select_options(field)) > 0


def split_words(text: str) -> list[str]:
    """Splits on anything that is not a letter or digit, and on lowercase-to-uppercase boundaries"""

    text = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", text)
    text = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1 \2", text)
    return [word for word in re.split(r"[\W_]+", text) if word]


def pascal_case(text: str) -> str:
    """Formats as PascalCase"""

    text = "".join(word[0].upper() + word[1:].lower() for word in split_words(text))
    if text and text[0].isdigit():
        text = f"_{text}"
    return text


def enum_identifier(table: TableMetadata, field: FieldMetadata) -> str:
    return f"{pascal_case(table.name)}{pascal_case(field.label())}"


def table_type_name(table: TableMetadata) -> str:
    return pascal_case(table.name) or "Table"


def python_property_name(name: str) -> str:
    """Formats as snake_case, and sanitizes the name to remove any characters that are not allowed in property names"""

    text = sanitize_property_name(name)
    text = snake_case(text)
    text = sanitize_leading_trailing_characters(text)
    text = sanitize_reserved_names(text)

    return text


def sanitize_property_name(text: str) -> str:
    """Replaces symbols that carry meaning with words, and drops the rest"""

    if text.endswith("?"):
        text = "is_" + text[:-1]
    if text.endswith(" #"):
        text = text[:-1] + "number"

    text = text.replace("+", " and ")
    text = text.replace("&", " and ")
    text = text.replace("=", " is ")
    text = text.replace("%", " percent ")
    text = text.replace("<", " less than ")
    text = text.replace(">", " greater than ")
    text = text.replace("w/", " with ")
    text = text.replace("# ", " number ")

    return " ".join(split_words(text))


def snake_case(text: str) -> str:
    """Formats as snake_case"""

    text = text.replace(" ", "_")
    text = re.sub(r"_+", "_", text)
    return text.lower()


def sanitize_leading_trailing_characters(text: str) -> str:
    text = text.strip("_")
    if text and text[0].isdigit():
        text = f"n_{text}"
    return text


def sanitize_reserved_names(text: str) -> str:
    """Some names are reserved by Python or by Pydantic and cannot be used as property names."""

    if not text:
        return "field"
    if text.startswith("model_"):
        return f"field_{text}"
    if keyword.iskeyword(text) or text in RESERVED_PROPERTY_NAMES:
        return f"{text}_"

    return text


def ts_string(text: str) -> str:
    """Quotes text as a single-quoted TypeScript string literal"""
    escaped = text.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n").replace("\r", "\\r")
    return f"'{escaped}'"


def py_string(text: str) -> str:
    """Quotes text as a double-quoted Python string literal"""
    return json.dumps(text, ensure_ascii=False)


def sanitize_string(text: str) -> str:
    """Makes text safe for use inside a single-line comment or docstring"""
    return " ".join(text.replace('"""', "'''").replace("*/", "* /").split())


LookupElement = Literal["numeric", "boolean", "attachment", "string", "unknown"]


def lookup_element(field: FieldMetadata) -> LookupElement:
    """What a lookup field yields, judged only by the `result` hint Airtable reports on the field itself.

    The linked table's field is not followed. A formula or rollup hint is judged by its own result.
    """
    result = get_result(field)
    if result is not None and result.type in ("formula", "rollup"):
        result = get_result(result)
    if result is None:
        return "unknown"
    if result.type in NUMERIC_FIELD_TYPES:
        return "numeric"
    if result.type == "checkbox":
        return "boolean"
    if result.type == "multipleAttachments":
        return "attachment"
    return "string"


def is_integer_number(field: FieldMetadata) -> bool:
    """Precision 0 is the only reliable signal that a number field holds integers"""
    return field.type in ("number", "currency", "percent") and field.options.precision == 0  # type: ignore[union-attr]


def property_doc(table: TableMetadata, field: FieldMetadata) -> str:
    text = f"{sanitize_string(field.label())} `{field.id}`"
    if field.id == table.primary_field_id:
        text += " - `Primary Key`"
    if is_read_only(field):
        text += " - `Read-Only Field`"
    return text
