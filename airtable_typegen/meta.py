import json
import os
import time
from contextlib import nullcontext
from pathlib import Path
from typing import Any, Optional

import httpx
from rich import print

from .errors import (
    BaseNotFoundError,
    MalformedResponseError,
    MetadataConnectionError,
    MetadataRequestError,
    MissingCredentialError,
)
from .meta_types import MetaFile, parse_base_list, parse_meta_file, parse_table_list
from .write_to_file import write_file

AIRTABLE_API = "https://api.airtable.com/v0"
TOKEN_ENV_VARS = ("AIRTABLE_TYPEGEN_ACCESS_TOKEN", "AIRTABLE_API_KEY")


def get_access_token(token: Optional[str] = None) -> str:
    """The explicit token if given, otherwise the first one found in the environment"""
    if token:
        return token
    for name in TOKEN_ENV_VARS:
        value = os.getenv(name)
        if value:
            return value
    raise MissingCredentialError()


def get_with_retry(client: httpx.Client, url: str, headers: dict[str, str]) -> httpx.Response:
    try:
        return client.get(url, headers=headers)
    except httpx.ReadTimeout:
        print("[yellow]Request timed out, retrying in 5 seconds...[/]")
        time.sleep(5)
        return client.get(url, headers=headers)


def get_json(client: httpx.Client, url: str, token: str) -> Any:
    try:
        response = get_with_retry(client, url, {"Authorization": f"Bearer {token}"})
    except httpx.HTTPError as e:
        raise MetadataConnectionError(url, str(e) or type(e).__name__) from e

    if not response.is_success:
        raise MetadataRequestError(response.status_code, url, response.text)
    try:
        return response.json()
    except ValueError as e:
        raise MalformedResponseError(url) from e


def get_bases(client: httpx.Client, token: str) -> list[dict[str, Any]]:
    """`GET /v0/meta/bases`, validated, as raw json"""
    data = get_json(client, f"{AIRTABLE_API}/meta/bases", token)
    parse_base_list(data)
    return data["bases"]


def get_tables(client: httpx.Client, base_id: str, token: str) -> list[dict[str, Any]]:
    """`GET /v0/meta/bases/{base_id}/tables`, validated, as raw json"""
    data = get_json(client, f"{AIRTABLE_API}/meta/bases/{base_id}/tables", token)
    parse_table_list(data)
    return data["tables"]


def fetch_meta_data(base_id: str, token: Optional[str] = None, client: Optional[httpx.Client] = None) -> dict[str, Any]:
    """Fetches the base and its tables, in the layout of `meta.json`.

    Both responses are validated before anything is returned.
    """
    token = get_access_token(token)
    with nullcontext(client) if client is not None else httpx.Client(timeout=30) as http:
        base = next((base for base in get_bases(http, token) if base["id"] == base_id), None)
        if base is None:
            raise BaseNotFoundError(base_id)
        tables = get_tables(http, base_id, token)
    return {"base": base, "tables": tables}


def get_base_meta_data(base_id: str, token: Optional[str] = None, client: Optional[httpx.Client] = None) -> MetaFile:
    return parse_meta_file(fetch_meta_data(base_id, token, client))


def gen_meta(data: dict[str, Any], folder: Path) -> Path:
    """Writes fetched Airtable metadata into a json file."""
    p = folder / "meta.json"
    write_file(p, json.dumps(data, indent=4))
    print(f"Base metadata written to {p.as_posix()}")
    return p


def load_meta(path: Path) -> MetaFile:
    """Reads a `meta.json` written by `gen_meta`"""
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as e:
            raise MalformedResponseError(path.as_posix()) from e
    return parse_meta_file(data)
