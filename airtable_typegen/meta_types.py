from typing import Annotated, Any, Literal, Optional, Union, get_args

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .errors import SchemaValidationError

FieldType = Literal[
    "autoNumber",
    "barcode",
    "button",
    "checkbox",
    "count",
    "createdBy",
    "createdTime",
    "currency",
    "date",
    "dateTime",
    "duration",
    "email",
    "externalSyncSource",
    "formula",
    "lastModifiedBy",
    "lastModifiedTime",
    "multilineText",
    "multipleAttachments",
    "multipleCollaborators",
    "multipleLookupValues",
    "multipleRecordLinks",
    "multipleSelects",
    "number",
    "percent",
    "phoneNumber",
    "rating",
    "richText",
    "rollup",
    "singleCollaborator",
    "singleLineText",
    "singleSelect",
    "url",
]
"""All Airtable field types, according to https://airtable.com/developers/web/api/model/field-type"""

FIELD_TYPES: tuple[str, ...] = get_args(FieldType)

ViewType = Literal["grid", "form", "calendar", "gallery", "kanban", "block", "levels", "timeline"]
PermissionLevel = Literal["read", "comment", "edit", "create"]


class MetadataModel(BaseModel):
    """Immutable shape shared by every piece of Airtable metadata."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class ChoiceMetadata(MetadataModel):
    id: str
    name: str
    color: Optional[str] = None


# region OPTIONS
class PrecisionOptions(MetadataModel):
    precision: int = Field(ge=0, le=8)


class DateFormat(MetadataModel):
    name: Literal["local", "friendly", "us", "european", "iso"]
    format: str


class TimeFormat(MetadataModel):
    name: Literal["12hour", "24hour"]
    format: str


class DateOptions(MetadataModel):
    date_format: DateFormat


class DateTimeOptions(DateOptions):
    time_format: TimeFormat
    time_zone: str


class ChoiceOptions(MetadataModel):
    choices: list[ChoiceMetadata] = []


class DurationOptions(MetadataModel):
    duration_format: Literal["h:mm", "h:mm:ss", "h:mm:ss.S", "h:mm:ss.SS", "h:mm:ss.SSS"]


class RatingOptions(MetadataModel):
    max: int = Field(ge=1, le=10)
    icon: Literal["star", "heart", "thumbsUp", "flag", "dot"]
    color: Literal[
        "yellowBright",
        "orangeBright",
        "redBright",
        "pinkBright",
        "purpleBright",
        "blueBright",
        "cyanBright",
        "tealBright",
        "greenBright",
        "grayBright",
    ]


# endregion


# region FIELDS
class FieldMetadataBase(MetadataModel):
    """`id` and `name` are absent on the `result` descriptors nested inside computed fields."""

    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None

    def label(self) -> str:
        return self.name or "<result>"


class BasicField(FieldMetadataBase):
    """Field types that need no extra metadata to infer their type."""

    type: Literal[
        "autoNumber",
        "barcode",
        "button",
        "checkbox",
        "count",
        "createdBy",
        "email",
        "lastModifiedBy",
        "multilineText",
        "multipleAttachments",
        "multipleCollaborators",
        "multipleRecordLinks",
        "phoneNumber",
        "richText",
        "singleCollaborator",
        "singleLineText",
        "url",
    ]
    options: Optional[dict[str, Any]] = None


class PreciseNumberField(FieldMetadataBase):
    type: Literal["number", "currency", "percent"]
    options: PrecisionOptions


class DateField(FieldMetadataBase):
    type: Literal["date"]
    options: DateOptions


class DateTimeField(FieldMetadataBase):
    type: Literal["dateTime"]
    options: DateTimeOptions


TemporalResult = Annotated[Union[DateField, DateTimeField], Field(discriminator="type")]


class TemporalResultOptions(MetadataModel):
    result: Optional[TemporalResult] = None


class TimestampField(FieldMetadataBase):
    type: Literal["createdTime", "lastModifiedTime"]
    options: TemporalResultOptions = Field(default_factory=TemporalResultOptions)


class ComputedOptions(MetadataModel):
    result: Optional["FieldMetadata"] = None


class ComputedField(FieldMetadataBase):
    """Formula, rollup and lookup fields, whose `result` describes the computed value."""

    type: Literal["formula", "rollup", "multipleLookupValues"]
    options: ComputedOptions = Field(default_factory=ComputedOptions)


class ChoiceField(FieldMetadataBase):
    type: Literal["singleSelect", "multipleSelects", "externalSyncSource"]
    options: ChoiceOptions


class DurationField(FieldMetadataBase):
    type: Literal["duration"]
    options: DurationOptions


class RatingField(FieldMetadataBase):
    type: Literal["rating"]
    options: RatingOptions


FieldMetadata = Annotated[
    Union[
        BasicField,
        PreciseNumberField,
        DateField,
        DateTimeField,
        TimestampField,
        ComputedField,
        ChoiceField,
        DurationField,
        RatingField,
    ],
    Field(discriminator="type"),
]

ComputedOptions.model_rebuild()
ComputedField.model_rebuild()
# endregion


class ViewMetadata(MetadataModel):
    id: str
    name: str
    type: ViewType


class TableMetadata(MetadataModel):
    id: str
    name: str
    primary_field_id: str
    description: Optional[str] = None
    fields: list[FieldMetadata]
    views: list[ViewMetadata] = []

    @field_validator("fields")
    @classmethod
    def fields_have_identity(cls, fields: list[FieldMetadata]) -> list[FieldMetadata]:
        for index, field in enumerate(fields):
            if not field.id or not field.name:
                raise ValueError(f"field at index {index} ({field.type}) is missing an id or a name")
        return fields


class BaseMetadata(MetadataModel):
    id: str
    name: str
    permission_level: PermissionLevel


class BaseListMetadata(MetadataModel):
    bases: list[BaseMetadata]


class TableListMetadata(MetadataModel):
    tables: list[TableMetadata]


_field_adapter: TypeAdapter[FieldMetadata] = TypeAdapter(FieldMetadata)


def parse_base_list(data: Any) -> list[BaseMetadata]:
    """Parses the response of `GET /v0/meta/bases`"""
    try:
        return BaseListMetadata.model_validate(data).bases
    except ValidationError as e:
        raise SchemaValidationError.from_validation_error(e, data) from e


def parse_table_list(data: Any) -> list[TableMetadata]:
    """Parses the response of `GET /v0/meta/bases/{baseId}/tables`"""
    try:
        return TableListMetadata.model_validate(data).tables
    except ValidationError as e:
        raise SchemaValidationError.from_validation_error(e, data) from e


def parse_field(data: Any) -> FieldMetadata:
    try:
        return _field_adapter.validate_python(data)
    except ValidationError as e:
        raise SchemaValidationError.from_validation_error(e, data, root="field") from e


class MetaFile(MetadataModel):
    """The layout of `meta.json`: one base and its tables, as returned by the Airtable API."""

    base: BaseMetadata
    tables: list[TableMetadata]


def parse_meta_file(data: Any) -> MetaFile:
    try:
        return MetaFile.model_validate(data)
    except ValidationError as e:
        raise SchemaValidationError.from_validation_error(e, data) from e
