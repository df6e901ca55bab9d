from pathlib import Path
from typing import Annotated, Optional

from dotenv import load_dotenv
from rich import print
from rich.markup import escape
from typer import Argument, Exit, Option, Typer

from airtable_typegen.csv import gen_csv
from airtable_typegen.emitter import Language, Mode
from airtable_typegen.errors import BaseNotFoundError, TypegenError
from airtable_typegen.generate import GenerateOptions, generate
from airtable_typegen.helpers import split_words
from airtable_typegen.meta import fetch_meta_data, gen_meta, load_meta
from airtable_typegen.meta_types import MetaFile, parse_meta_file
from airtable_typegen.progress import progress_spinner
from airtable_typegen.write_to_file import write_file

app = Typer(help="Generate TypeScript or Python declarations from the schema of an Airtable base.")

BASE_ID_HELP = "ID of the Airtable base (app...)"
TokenOption = Annotated[Optional[str], Option(help="Airtable access token. Read from the environment when omitted.", show_default=False)]


@app.callback()
def main():
    load_dotenv()


def fail(error: Exception):
    print(f"[red]{escape(str(error))}[/]")
    raise Exit(1)


def fetch(base_id: str, token: Optional[str]) -> dict:
    with progress_spinner(f"Fetching metadata for base {base_id}...") as progress:
        data = fetch_meta_data(base_id, token)
        progress.step("Metadata fetched")
    return data


def load_metadata(base_id: Optional[str], meta_file: Optional[Path], token: Optional[str]) -> MetaFile:
    if meta_file is None:
        return parse_meta_file(fetch(base_id or "", token))
    metadata = load_meta(meta_file)
    if base_id and metadata.base.id != base_id:
        raise BaseNotFoundError(base_id)
    return metadata


def default_output(base_name: str, language: Language) -> Path:
    words = [word.lower() for word in split_words(base_name)] or ["airtable"]
    if language == Language.python:
        return Path("_".join(words) + ".py")
    return Path("-".join(words) + ".ts")


@app.command()
def gen(
    base_id: Annotated[Optional[str], Argument(envvar="AIRTABLE_BASE_ID", help=BASE_ID_HELP, show_default=False)] = None,
    output: Annotated[Optional[Path], Option("--output", "-o", help="Path to the generated file", show_default=False)] = None,
    language: Annotated[Language, Option(help="Target language")] = Language.typescript,
    mode: Annotated[Mode, Option(help="Static types, or schemas that validate at runtime")] = Mode.types,
    zod: Annotated[bool, Option("--zod", "-z", help="Shorthand for --mode schemas")] = False,
    tables: Annotated[Optional[str], Option("--tables", "-t", help="Comma-separated table names or IDs", show_default=False)] = None,
    field_ids: Annotated[bool, Option("--field-ids", help="Also emit field-ID and table-ID mappings")] = False,
    meta_file: Annotated[Optional[Path], Option(help="Generate from a meta.json instead of the Airtable API", exists=True, dir_okay=False, show_default=False)] = None,
    token: TokenOption = None,
):
    """Generate types or schemas for the tables of a base"""
    options = GenerateOptions(
        language=language,
        mode=Mode.schemas if zod else mode,
        include_field_id_mapping=field_ids,
        table_filter=[name.strip() for name in tables.split(",") if name.strip()] if tables else None,
    )

    if not base_id and meta_file is None:
        fail(ValueError("Missing BASE_ID. Pass it as an argument or set AIRTABLE_BASE_ID."))

    try:
        metadata = load_metadata(base_id, meta_file, token)
        contents = generate(metadata.base, metadata.tables, options)
    except TypegenError as e:
        fail(e)

    path = output or default_output(metadata.base.name, language)
    write_file(path, contents)
    print(f"[green]{options.language.value} {options.mode.value} written to {path.as_posix()}[/]")


@app.command()
def meta(
    base_id: Annotated[str, Argument(envvar="AIRTABLE_BASE_ID", help=BASE_ID_HELP)],
    folder: Annotated[Path, Argument(help="Path to the output folder")],
    token: TokenOption = None,
):
    """Fetch Airtable metadata into a json file."""
    try:
        data = fetch(base_id, token)
    except TypegenError as e:
        fail(e)
    gen_meta(data, folder)


@app.command()
def csv(
    base_id: Annotated[str, Argument(envvar="AIRTABLE_BASE_ID", help=BASE_ID_HELP)],
    folder: Annotated[Path, Argument(help="Path to the output folder")],
    meta_file: Annotated[Optional[Path], Option(help="Read from a meta.json instead of the Airtable API", exists=True, dir_okay=False, show_default=False)] = None,
    token: TokenOption = None,
):
    """Export the tables and fields of a base, with their generated types, to CSV format."""
    try:
        metadata = load_metadata(base_id, meta_file, token)
        gen_csv(metadata.tables, folder)
    except TypegenError as e:
        fail(e)


if __name__ == "__main__":
    app()
