from typing import Literal

from pydantic import BaseModel

FragmentKind = Literal["attachment", "collaborator", "barcode", "button", "email"]


class Fragment(BaseModel):
    """A fixed declaration shared by every table that references it."""

    kind: FragmentKind
    identifiers: list[str]
    text: str


# region TYPESCRIPT
COLLABORATOR_TS = Fragment(
    kind="collaborator",
    identifiers=["IAirtableCollaborator"],
    text="""export interface IAirtableCollaborator {
  id: string
  email: string
  name: string
}""",
)

ATTACHMENT_TS = Fragment(
    kind="attachment",
    identifiers=["IAirtableThumbnail", "IAirtableAttachment"],
    text="""export interface IAirtableThumbnail {
  url: string
  width: number
  height: number
}

export interface IAirtableAttachment {
  id: string
  url: string
  filename: string
  size: number
  type: string
  thumbnails?: {
    small: IAirtableThumbnail
    large: IAirtableThumbnail
    full: IAirtableThumbnail
  }
}""",
)
# endregion


# region ZOD
COLLABORATOR_ZOD = Fragment(
    kind="collaborator",
    identifiers=["AirtableCollaboratorSchema"],
    text="""export const AirtableCollaboratorSchema = z.object({
  id: z.string(),
  email: z.string(),
  name: z.string(),
})""",
)

ATTACHMENT_ZOD = Fragment(
    kind="attachment",
    identifiers=["AirtableThumbnailSchema", "AirtableAttachmentSchema"],
    text="""export const AirtableThumbnailSchema = z.object({
  url: z.string(),
  width: z.number(),
  height: z.number(),
})

export const AirtableAttachmentSchema = z.object({
  id: z.string(),
  url: z.string(),
  filename: z.string(),
  size: z.number(),
  type: z.string(),
  thumbnails: z.object({
    small: AirtableThumbnailSchema,
    large: AirtableThumbnailSchema,
    full: AirtableThumbnailSchema,
  }).optional(),
})""",
)
# endregion


# region PYTHON
COLLABORATOR_PY = Fragment(
    kind="collaborator",
    identifiers=["AirtableCollaborator"],
    text='''class AirtableCollaborator(TypedDict):
    id: str
    email: str
    name: str''',
)

ATTACHMENT_PY = Fragment(
    kind="attachment",
    identifiers=["AirtableThumbnail", "AirtableThumbnails", "AirtableAttachment"],
    text='''class AirtableThumbnail(TypedDict):
    url: str
    width: int
    height: int


class AirtableThumbnails(TypedDict):
    small: AirtableThumbnail
    large: AirtableThumbnail
    full: AirtableThumbnail


class AirtableAttachment(TypedDict):
    id: str
    url: str
    filename: str
    size: int
    type: str
    thumbnails: NotRequired[AirtableThumbnails]''',
)

BARCODE_PY = Fragment(
    kind="barcode",
    identifiers=["AirtableBarcode"],
    text='''class AirtableBarcode(TypedDict):
    text: str
    type: str''',
)

BUTTON_PY = Fragment(
    kind="button",
    identifiers=["AirtableButton"],
    text='''class AirtableButton(TypedDict):
    label: str
    url: NotRequired[str]''',
)
# endregion


# region PYDANTIC
COLLABORATOR_PYDANTIC = Fragment(
    kind="collaborator",
    identifiers=["AirtableCollaborator"],
    text='''class AirtableCollaborator(BaseModel):
    id: str
    email: str
    name: str''',
)

ATTACHMENT_PYDANTIC = Fragment(
    kind="attachment",
    identifiers=["AirtableThumbnail", "AirtableThumbnails", "AirtableAttachment"],
    text='''class AirtableThumbnail(BaseModel):
    url: str
    width: int
    height: int


class AirtableThumbnails(BaseModel):
    small: AirtableThumbnail
    large: AirtableThumbnail
    full: AirtableThumbnail


class AirtableAttachment(BaseModel):
    id: str
    url: str
    filename: str
    size: int
    type: str
    thumbnails: Optional[AirtableThumbnails] = None''',
)

BARCODE_PYDANTIC = Fragment(
    kind="barcode",
    identifiers=["AirtableBarcode"],
    text='''class AirtableBarcode(BaseModel):
    text: str
    type: str''',
)

BUTTON_PYDANTIC = Fragment(
    kind="button",
    identifiers=["AirtableButton"],
    text='''class AirtableButton(BaseModel):
    label: str
    url: Optional[str] = None''',
)

EMAIL_PYDANTIC = Fragment(
    kind="email",
    identifiers=["AirtableEmail"],
    text='''AirtableEmail = Annotated[str, Field(pattern=r"^[^@\\s]+@[^@\\s]+\\.[^@\\s]+$")]''',
)
# endregion


FRAGMENTS: dict[tuple[str, str], list[Fragment]] = {
    ("typescript", "types"): [ATTACHMENT_TS, COLLABORATOR_TS],
    ("typescript", "schemas"): [ATTACHMENT_ZOD, COLLABORATOR_ZOD],
    ("python", "types"): [ATTACHMENT_PY, COLLABORATOR_PY, BARCODE_PY, BUTTON_PY],
    ("python", "schemas"): [ATTACHMENT_PYDANTIC, COLLABORATOR_PYDANTIC, BARCODE_PYDANTIC, BUTTON_PYDANTIC, EMAIL_PYDANTIC],
}
"""Shared fragments per (language, mode), in the order they are emitted"""
