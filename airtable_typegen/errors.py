from typing import Any

from pydantic import ValidationError


class TypegenError(Exception):
    """Base class for all errors raised while generating code from Airtable metadata."""


class SchemaValidationError(TypegenError):
    """The metadata returned by Airtable does not match the expected structure."""

    def __init__(self, message: str, paths: list[str] | None = None):
        super().__init__(message)
        self.paths = paths or []

    @classmethod
    def from_validation_error(cls, error: ValidationError, data: Any, root: str = "") -> "SchemaValidationError":
        paths: list[str] = []
        lines: list[str] = []
        for detail in error.errors():
            path = format_path(detail["loc"], data, root)
            paths.append(path)
            field_name = _field_name_at(data, detail["loc"])
            suffix = f" (on field '{field_name}')" if field_name else ""
            lines.append(f"  {path}: {detail['msg']}{suffix}")
        message = "Airtable metadata does not match the expected schema:\n" + "\n".join(lines)
        return cls(message, paths)


class UnrecognizedFieldTypeError(TypegenError):
    def __init__(self, field_name: str, field_type: str):
        super().__init__(f"Unrecognized field type: {field_type} (on field '{field_name}')")
        self.field_name = field_name
        self.field_type = field_type


class UnresolvedTableFilterError(TypegenError):
    def __init__(self, requested: list[str], found: list[str], unresolved: list[str]):
        super().__init__(
            "Could not find all tables:\n\n"
            f"Requested: {', '.join(requested)}\n"
            f"Found: {', '.join(found)}\n"
            f"Unresolved: {', '.join(unresolved)}"
        )
        self.requested = requested
        self.found = found
        self.unresolved = unresolved


class IdentifierCollisionError(TypegenError):
    """Two declarations in the generated output would share the same identifier."""

    def __init__(self, collisions: dict[str, list[str]]):
        lines = [f"  {identifier}: {', '.join(sources)}" for identifier, sources in collisions.items()]
        super().__init__("Generated identifiers collide:\n" + "\n".join(lines))
        self.collisions = collisions


class MissingCredentialError(TypegenError):
    def __init__(self):
        super().__init__(
            "No Airtable access token provided. Pass one with --token or set the "
            "AIRTABLE_TYPEGEN_ACCESS_TOKEN (or AIRTABLE_API_KEY) environment variable."
        )


class MetadataRequestError(TypegenError):
    def __init__(self, status_code: int, url: str, body: str = ""):
        super().__init__(f"Airtable responded with HTTP {status_code} for {url}" + (f": {body}" if body else ""))
        self.status_code = status_code
        self.url = url


class MetadataConnectionError(TypegenError):
    def __init__(self, url: str, reason: str):
        super().__init__(f"Could not reach Airtable at {url}: {reason}")
        self.url = url


class MalformedResponseError(TypegenError):
    def __init__(self, url: str):
        super().__init__(f"Airtable metadata from {url} is not valid JSON")
        self.url = url


class BaseNotFoundError(TypegenError):
    def __init__(self, base_id: str):
        super().__init__(f"Could not find base with ID {base_id}")
        self.base_id = base_id


def format_path(loc: tuple[int | str, ...], data: Any = None, root: str = "") -> str:
    """Formats a pydantic error location as `tables[0].fields[3].options`, leaving out discriminator tags"""
    path = root
    current = data
    for part in loc:
        if isinstance(current, dict) and part not in current and current.get("type") == part:
            continue
        if isinstance(current, (dict, list)):
            try:
                current = current[part]  # type: ignore[index]
            except (KeyError, IndexError, TypeError):
                current = None
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "<root>"


def _field_name_at(data: Any, loc: tuple[int | str, ...]) -> str | None:
    """Walks the raw data along `loc` and returns the name of the innermost field passed through."""
    name = None
    current = data
    for part in loc:
        if isinstance(current, dict) and part in current:
            current = current[part]
        elif isinstance(current, list) and isinstance(part, int) and 0 <= part < len(current):
            current = current[part]
        else:
            # Discriminated unions add the tag to the location
            continue
        if isinstance(current, dict) and isinstance(current.get("name"), str) and "type" in current:
            name = current["name"]
    return name
