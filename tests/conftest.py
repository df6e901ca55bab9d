from typing import Any, Callable

import pytest

from airtable_typegen.meta_types import BaseMetadata, TableMetadata, parse_table_list

BASE_DATA = {"id": "appTest123", "name": "Furniture Store", "permissionLevel": "create"}

DATE_OPTIONS = {"dateFormat": {"name": "iso", "format": "YYYY-MM-DD"}}
DATE_TIME_OPTIONS = {
    "dateFormat": {"name": "iso", "format": "YYYY-MM-DD"},
    "timeFormat": {"name": "24hour", "format": "HH:mm"},
    "timeZone": "utc",
}

FIELD_OPTIONS: dict[str, Any] = {
    "autoNumber": None,
    "barcode": None,
    "button": None,
    "checkbox": {"icon": "check", "color": "greenBright"},
    "count": {"isValid": True, "recordLinkFieldId": "fldLink"},
    "createdBy": None,
    "createdTime": {"result": {"type": "dateTime", "options": DATE_TIME_OPTIONS}},
    "currency": {"precision": 2, "symbol": "$"},
    "date": DATE_OPTIONS,
    "dateTime": DATE_TIME_OPTIONS,
    "duration": {"durationFormat": "h:mm"},
    "email": None,
    "externalSyncSource": {"choices": [{"id": "selSource", "name": "Source A"}]},
    "formula": {"isValid": True, "referencedFieldIds": [], "result": {"type": "number", "options": {"precision": 1}}},
    "lastModifiedBy": None,
    "lastModifiedTime": {"isValid": True, "referencedFieldIds": [], "result": {"type": "date", "options": DATE_OPTIONS}},
    "multilineText": None,
    "multipleAttachments": {"isReversed": False},
    "multipleCollaborators": None,
    "multipleLookupValues": {
        "isValid": True,
        "recordLinkFieldId": "fldLink",
        "fieldIdInLinkedTable": "fldOther",
        "result": {"type": "singleLineText"},
    },
    "multipleRecordLinks": {"linkedTableId": "tblOther", "isReversed": False, "prefersSingleRecordLink": False},
    "multipleSelects": {"choices": [{"id": "selRed", "name": "Red", "color": "redLight2"}, {"id": "selBlue", "name": "Blue"}]},
    "number": {"precision": 0},
    "percent": {"precision": 1},
    "phoneNumber": None,
    "rating": {"max": 5, "icon": "star", "color": "yellowBright"},
    "richText": None,
    "rollup": {
        "isValid": True,
        "recordLinkFieldId": "fldLink",
        "fieldIdInLinkedTable": "fldOther",
        "referencedFieldIds": [],
        "result": {"type": "currency", "options": {"precision": 0, "symbol": "$"}},
    },
    "singleCollaborator": None,
    "singleLineText": None,
    "singleSelect": {"choices": [{"id": "selBeds", "name": "Beds"}, {"id": "selChairs", "name": "Chairs"}]},
    "url": None,
}
"""A valid options payload for every field type, as the metadata API returns it"""


def field_data(type: str, name: str | None = None, options: Any = None, id: str | None = None) -> dict[str, Any]:
    name = name or f"{type} field"
    data: dict[str, Any] = {"id": id or f"fld{name.title().replace(' ', '')}", "name": name, "type": type}
    if options is not None:
        data["options"] = options
    return data


def table_data(fields: list[dict[str, Any]], name: str = "Furniture", id: str | None = None) -> dict[str, Any]:
    return {
        "id": id or f"tbl{name.title().replace(' ', '')}",
        "name": name,
        "primaryFieldId": fields[0]["id"],
        "fields": fields,
        "views": [{"id": "viwGrid", "name": "Grid view", "type": "grid"}],
    }


@pytest.fixture
def base() -> BaseMetadata:
    return BaseMetadata.model_validate(BASE_DATA)


@pytest.fixture
def make_field() -> Callable[..., dict[str, Any]]:
    """Raw field data: `make_field("singleSelect", "Type", {...})`"""
    return field_data


@pytest.fixture
def make_table() -> Callable[..., TableMetadata]:
    """Parses raw field data into a table: `make_table([make_field(...)], name="Furniture")`"""

    def make(fields: list[dict[str, Any]], name: str = "Furniture", id: str | None = None) -> TableMetadata:
        return parse_table_list({"tables": [table_data(fields, name, id)]})[0]

    return make


@pytest.fixture
def all_fields_data() -> list[dict[str, Any]]:
    """One field of every type"""
    return [field_data(type, options=options) for type, options in FIELD_OPTIONS.items()]


@pytest.fixture
def all_fields_table(make_table, all_fields_data) -> TableMetadata:
    return make_table(all_fields_data)


@pytest.fixture
def meta_data(all_fields_data) -> dict[str, Any]:
    """The contents of a `meta.json`, with a second table linked from the first"""
    return {
        "base": BASE_DATA,
        "tables": [
            table_data(all_fields_data, name="Furniture", id="tblFurniture"),
            table_data([field_data("singleLineText", "Name"), field_data("email", "Contact")], name="Suppliers", id="tblSuppliers"),
        ],
    }
