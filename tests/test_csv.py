import pandas as pd

from airtable_typegen.csv import FIELD_COLUMNS, TABLE_COLUMNS, gen_csv
from airtable_typegen.meta_types import parse_meta_file


class TestGenCsv:
    def test_tables(self, meta_data, tmp_path):
        tables_path, _ = gen_csv(parse_meta_file(meta_data).tables, tmp_path)
        df = pd.read_csv(tables_path)
        assert list(df.columns) == TABLE_COLUMNS
        assert df["Type Name"].tolist() == ["Furniture", "Suppliers"]

    def test_fields(self, meta_data, tmp_path):
        _, fields_path = gen_csv(parse_meta_file(meta_data).tables, tmp_path / "report")
        df = pd.read_csv(fields_path, keep_default_na=False)
        assert list(df.columns) == FIELD_COLUMNS
        assert len(df) == 34

        select = df[df["Airtable Type"] == "singleSelect"].iloc[0]
        assert select["Property Name"] == "single_select_field"
        assert select["TypeScript Type"] == "'Beds' | 'Chairs'"
        assert select["Zod Schema"] == "FurnitureSingleSelectField"
        assert select["Python Type"] == 'Literal["Beds", "Chairs"]'
        assert not select["Read-Only"]

        rollup = df[df["Airtable Type"] == "rollup"].iloc[0]
        assert rollup["Pydantic Type"] == "int"
        assert rollup["Read-Only"]

        contact = df[df["Field Name"] == "Contact"].iloc[0]
        assert contact["Table Name"] == "Suppliers"
        assert contact["Pydantic Type"] == "AirtableEmail"
