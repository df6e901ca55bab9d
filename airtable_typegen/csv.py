from pathlib import Path

import pandas as pd
from rich import print

from .emitter import Language, Mode
from .helpers import is_read_only, python_property_name, sanitize_string, table_type_name
from .mapping import map_type
from .meta_types import TableMetadata

TABLE_COLUMNS = ["Table ID", "Table Name", "Type Name"]
FIELD_COLUMNS = [
    "Table ID",
    "Table Name",
    "Field ID",
    "Field Name",
    "Property Name",
    "Airtable Type",
    "Read-Only",
    "TypeScript Type",
    "Zod Schema",
    "Python Type",
    "Pydantic Type",
]


def gen_csv(tables: list[TableMetadata], folder: Path) -> tuple[Path, Path]:
    """Export the tables and fields of a base, with the type generated for each field, to CSV format."""

    folder.mkdir(parents=True, exist_ok=True)

    table_rows = []
    for table in tables:
        table_rows.append(
            {
                "Table ID": table.id,
                "Table Name": table.name,
                "Type Name": table_type_name(table),
            }
        )

    df = pd.DataFrame(table_rows, columns=TABLE_COLUMNS)
    tables_csv_path = folder / "tables.csv"
    df.to_csv(tables_csv_path, index=False)
    print(f"Table CSV exported to {tables_csv_path.as_posix()}")

    field_rows: list[dict] = []
    for table in tables:
        for field in table.fields:
            field_rows.append(
                {
                    "Table ID": table.id,
                    "Table Name": table.name,
                    "Field ID": field.id,
                    "Field Name": sanitize_string(field.label()),
                    "Property Name": python_property_name(field.label()),
                    "Airtable Type": field.type,
                    "Read-Only": is_read_only(field),
                    "TypeScript Type": map_type(table, field, Language.typescript, Mode.types),
                    "Zod Schema": map_type(table, field, Language.typescript, Mode.schemas),
                    "Python Type": map_type(table, field, Language.python, Mode.types),
                    "Pydantic Type": map_type(table, field, Language.python, Mode.schemas),
                }
            )

    fields_df = pd.DataFrame(field_rows, columns=FIELD_COLUMNS)
    fields_csv_path = folder / "fields.csv"
    fields_df.to_csv(fields_csv_path, index=False)
    print(f"Fields CSV exported to {fields_csv_path.as_posix()}")

    return tables_csv_path, fields_csv_path
