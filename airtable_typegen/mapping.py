from .emitter import Emitter, Language, Mode
from .meta_types import FieldMetadata, TableMetadata
from .python import PydanticEmitter, TypedDictEmitter, pydantic_type, python_type
from .typescript import TypeScriptEmitter, ZodEmitter, typescript_type, zod_type


def map_type(table: TableMetadata, field: FieldMetadata, language: Language = Language.typescript, mode: Mode = Mode.types) -> str:
    """The type expression for `field` in the given language and mode"""

    match (language, mode):
        case (Language.typescript, Mode.types):
            return typescript_type(table, field)
        case (Language.typescript, Mode.schemas):
            return zod_type(table, field)
        case (Language.python, Mode.types):
            return python_type(table, field)
        case (Language.python, Mode.schemas):
            return pydantic_type(table, field)

    raise ValueError(f"Unsupported combination: {language} {mode}")


def get_emitter(language: Language, mode: Mode) -> Emitter:
    match (language, mode):
        case (Language.typescript, Mode.types):
            return TypeScriptEmitter()
        case (Language.typescript, Mode.schemas):
            return ZodEmitter()
        case (Language.python, Mode.types):
            return TypedDictEmitter()
        case (Language.python, Mode.schemas):
            return PydanticEmitter()

    raise ValueError(f"Unsupported combination: {language} {mode}")
