import pytest

from airtable_typegen.helpers import (
    enum_identifier,
    get_select_options,
    has_attachment_field,
    has_barcode_field,
    has_button_field,
    has_collaborator_field,
    has_email_field,
    has_enum,
    is_integer_number,
    is_read_only,
    lookup_element,
    pascal_case,
    property_doc,
    py_string,
    python_property_name,
    sanitize_string,
    split_words,
    table_type_name,
    ts_string,
)
from airtable_typegen.meta_types import FIELD_TYPES, parse_field

COMPUTED_TYPES = {
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
}


class TestIsReadOnly:
    """Test the read-only classification of every field type."""

    def test_every_type(self, all_fields_table):
        assert len(all_fields_table.fields) == len(FIELD_TYPES)
        for field in all_fields_table.fields:
            assert is_read_only(field) is (field.type in COMPUTED_TYPES), field.type

    def test_writable_types(self, all_fields_table):
        writable = {field.type for field in all_fields_table.fields if not is_read_only(field)}
        assert writable == set(FIELD_TYPES) - COMPUTED_TYPES


class TestFragmentPredicates:
    """Test the existence predicates that decide which shared declarations are emitted."""

    def test_attachment(self, make_field):
        assert has_attachment_field([parse_field(make_field("multipleAttachments", "Photos"))])
        assert not has_attachment_field([parse_field(make_field("singleLineText", "Name"))])

    def test_attachment_through_lookup(self, make_field):
        lookup = make_field("multipleLookupValues", "Photos", {"result": {"type": "multipleAttachments"}})
        assert has_attachment_field([parse_field(lookup)])

    def test_attachment_through_formula(self, make_field):
        formula = make_field("formula", "Photos", {"result": {"type": "multipleAttachments"}})
        assert has_attachment_field([parse_field(formula)])

    def test_collaborator(self, make_field):
        for type in ["singleCollaborator", "multipleCollaborators", "createdBy", "lastModifiedBy"]:
            assert has_collaborator_field([parse_field(make_field(type))]), type
        assert not has_collaborator_field([parse_field(make_field("email"))])

    def test_lookup_of_collaborators_does_not_count(self, make_field):
        lookup = make_field("multipleLookupValues", "Owners", {"result": {"type": "singleCollaborator"}})
        assert not has_collaborator_field([parse_field(lookup)])

    def test_barcode_and_button(self, make_field):
        fields = [parse_field(make_field("barcode")), parse_field(make_field("button"))]
        assert has_barcode_field(fields)
        assert has_button_field(fields)
        assert not has_barcode_field(fields[1:])

    def test_email_through_rollup(self, make_field):
        rollup = make_field("rollup", "Emails", {"result": {"type": "email"}})
        assert has_email_field([parse_field(rollup)])

    def test_empty(self):
        assert not has_attachment_field([])
        assert not has_collaborator_field([])


class TestSelectOptions:
    def test_order_and_duplicates(self, make_field):
        choices = [{"id": "sel1", "name": "Beds"}, {"id": "sel2", "name": "Chairs"}, {"id": "sel3", "name": "Beds"}]
        field = parse_field(make_field("singleSelect", "Type", {"choices": choices}))
        assert get_select_options(field) == ["Beds", "Chairs"]
        assert has_enum(field)

    def test_no_choices(self, make_field):
        field = parse_field(make_field("multipleSelects", "Tags", {"choices": []}))
        assert get_select_options(field) == []
        assert not has_enum(field)

    def test_external_sync_source_has_no_enum(self, make_field):
        field = parse_field(make_field("externalSyncSource", "Source", {"choices": [{"id": "sel1", "name": "A"}]}))
        assert not has_enum(field)


class TestLookupElement:
    @pytest.mark.parametrize(
        "result,expected",
        [
            ({"type": "number", "options": {"precision": 2}}, "numeric"),
            ({"type": "count"}, "numeric"),
            ({"type": "rating", "options": {"max": 5, "icon": "star", "color": "yellowBright"}}, "numeric"),
            ({"type": "checkbox"}, "boolean"),
            ({"type": "multipleAttachments"}, "attachment"),
            ({"type": "singleLineText"}, "string"),
            ({"type": "multipleRecordLinks"}, "string"),
            ({"type": "rollup", "options": {"result": {"type": "number", "options": {"precision": 0}}}}, "numeric"),
            ({"type": "formula", "options": {"result": {"type": "multipleAttachments"}}}, "attachment"),
            ({"type": "formula"}, "unknown"),
            (None, "unknown"),
        ],
    )
    def test_result_hint(self, make_field, result, expected):
        options = {"result": result} if result is not None else {}
        field = parse_field(make_field("multipleLookupValues", "Lookup", options))
        assert lookup_element(field) == expected


class TestIsIntegerNumber:
    @pytest.mark.parametrize("precision", range(9))
    def test_precision(self, make_field, precision):
        for type in ["number", "currency", "percent"]:
            field = parse_field(make_field(type, "Amount", {"precision": precision}))
            assert is_integer_number(field) is (precision == 0)


class TestNaming:
    """Test identifier and property-name derivation."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("furniture", "Furniture"),
            ("furniture items", "FurnitureItems"),
            ("Order-ID", "OrderId"),
            ("firstName", "FirstName"),
            ("2024 Sales", "_2024Sales"),
            ("Café Menu", "CaféMenu"),
            ("!!!", ""),
        ],
    )
    def test_pascal_case(self, text, expected):
        assert pascal_case(text) == expected

    def test_split_words(self):
        assert split_words("HTTPResponse code_2") == ["HTTP", "Response", "code", "2"]

    def test_enum_identifier(self, make_table, make_field):
        table = make_table([make_field("singleSelect", "Type", {"choices": []})], name="Furniture")
        assert enum_identifier(table, table.fields[0]) == "FurnitureType"

    def test_table_type_name(self, make_table, make_field):
        assert table_type_name(make_table([make_field("singleLineText", "Name")], name="order items")) == "OrderItems"
        assert table_type_name(make_table([make_field("singleLineText", "Name")], name="???", id="tblX")) == "Table"

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Name", "name"),
            ("First Name", "first_name"),
            ("firstName", "first_name"),
            ("Price (USD)", "price_usd"),
            ("Active?", "is_active"),
            ("Order #", "order_number"),
            ("Cost + Tax", "cost_and_tax"),
            ("Margin %", "margin_percent"),
            ("2024 Sales", "n_2024_sales"),
            ("class", "class_"),
            ("date", "date_"),
            ("json", "json_"),
            ("model name", "field_model_name"),
            ("!!!", "field"),
        ],
    )
    def test_python_property_name(self, name, expected):
        assert python_property_name(name) == expected


class TestStrings:
    def test_ts_string(self):
        assert ts_string("Beds") == "'Beds'"
        assert ts_string("it's") == "'it\\'s'"
        assert ts_string("back\\slash") == "'back\\\\slash'"
        assert ts_string("two\nlines") == "'two\\nlines'"

    def test_py_string(self):
        assert py_string("Beds") == '"Beds"'
        assert py_string('say "hi"') == '"say \\"hi\\""'
        assert py_string("Café") == '"Café"'

    def test_sanitize_string(self):
        assert sanitize_string("a\nb   c") == "a b c"
        assert sanitize_string('ends with """') == "ends with '''"
        assert sanitize_string("closes */ comment") == "closes * / comment"

    def test_property_doc(self, all_fields_table):
        primary, count = all_fields_table.fields[0], all_fields_table.fields[4]
        assert property_doc(all_fields_table, primary) == f"autoNumber field `{primary.id}` - `Primary Key` - `Read-Only Field`"
        assert property_doc(all_fields_table, count) == f"count field `{count.id}` - `Read-Only Field`"
