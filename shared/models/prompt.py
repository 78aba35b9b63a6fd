"""
Prompt generation data models.

Defines StyleKind, the StyleSelection variant, ReferenceImage,
GenerationRequest, and the PromptSet result.
"""

import base64
import binascii
import re
from enum import Enum
from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Allowed sequence lengths (number of image prompts per request)
SUPPORTED_COUNTS = (1, 2, 3, 4, 5, 6)
DEFAULT_COUNT = 3

# Reference images beyond this limit are dropped, not rejected
MAX_REFERENCE_IMAGES = 3

AUTO_STYLE_LABEL = "Auto"

_DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>image/[\w.+-]+);base64,(?P<data>.+)$", re.DOTALL)


class StyleKind(str, Enum):
    """Visual styles with a fixed lexicon."""

    DOCUMENTARY = "Documentary"
    INDUSTRIAL = "Industrial / Factory Process"
    LUXURY_EPOXY = "Luxury Interior Art / Epoxy"
    CONSTRUCTION = "Real-life / Construction"
    CINEMATIC = "Cinematic"
    CLEANUP_RENOVATION = "Dọn rác & Cải tạo (Bẩn → Ấm cúng)"


class ExplicitStyle(BaseModel):
    """A style fixed by the user."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["explicit"] = "explicit"
    kind: StyleKind

    @property
    def label(self) -> str:
        return self.kind.value


class AutoStyle(BaseModel):
    """Let the model infer the style from the title and/or images."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["auto"] = "auto"

    @property
    def label(self) -> str:
        return AUTO_STYLE_LABEL


StyleSelection = Annotated[Union[ExplicitStyle, AutoStyle], Field(discriminator="mode")]


class ReferenceImage(BaseModel):
    """Base64-encoded reference image with its MIME type."""

    model_config = ConfigDict(frozen=True)

    mime_type: str = Field(description="Image MIME type, e.g. image/png")
    data: str = Field(description="Base64 payload without the data URL prefix")

    @field_validator("mime_type")
    @classmethod
    def validate_mime_type(cls, v: str) -> str:
        if not v.startswith("image/"):
            raise ValueError(f"Unsupported reference MIME type: {v}")
        return v

    @field_validator("data")
    @classmethod
    def validate_data(cls, v: str) -> str:
        if not v:
            raise ValueError("Reference image payload is empty")
        try:
            base64.b64decode(v, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError("Reference image payload is not valid base64") from exc
        return v

    @classmethod
    def from_data_url(cls, data_url: str) -> "ReferenceImage":
        """Parse a ``data:<mime>;base64,<payload>`` string."""
        match = _DATA_URL_PATTERN.match(data_url.strip())
        if not match:
            raise ValueError("Reference image must be a base64 image data URL")
        return cls(mime_type=match.group("mime"), data=match.group("data"))

    @classmethod
    def from_bytes(cls, raw: bytes, mime_type: str) -> "ReferenceImage":
        return cls(mime_type=mime_type, data=base64.b64encode(raw).decode("ascii"))

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data)


class GenerationRequest(BaseModel):
    """Normalized input for a single generation."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    count: int = DEFAULT_COUNT
    style: StyleSelection = Field(default_factory=AutoStyle)
    reference_images: List[ReferenceImage] = Field(
        default_factory=list, max_length=MAX_REFERENCE_IMAGES
    )

    @field_validator("count")
    @classmethod
    def validate_count(cls, v: int) -> int:
        if v not in SUPPORTED_COUNTS:
            raise ValueError(f"count must be one of {list(SUPPORTED_COUNTS)}")
        return v

    @model_validator(mode="after")
    def require_title_or_images(self) -> "GenerationRequest":
        if not self.title.strip() and not self.reference_images:
            raise ValueError("A title or at least one reference image is required")
        return self

    @property
    def video_count(self) -> int:
        return self.count - 1


class PromptAnalysis(BaseModel):
    """Narrative summary inferred by the model."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    subject: str
    action_type: str = Field(alias="actionType")
    progression: str

    @field_validator("subject", "action_type", "progression")
    @classmethod
    def require_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("analysis fields must be non-empty")
        return v


class PromptSet(BaseModel):
    """Image prompts, transition prompts, and narrative analysis."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    image_prompts: List[str] = Field(alias="imagePrompts", min_length=1)
    video_prompts: List[str] = Field(alias="videoPrompts")
    analysis: PromptAnalysis

    @field_validator("image_prompts", "video_prompts")
    @classmethod
    def require_prompt_text(cls, v: List[str]) -> List[str]:
        for index, prompt in enumerate(v):
            if not prompt.strip():
                raise ValueError(f"prompt at position {index} is empty")
        return v

    @model_validator(mode="after")
    def check_transition_cardinality(self) -> "PromptSet":
        if len(self.video_prompts) != len(self.image_prompts) - 1:
            raise ValueError(
                f"Expected {len(self.image_prompts) - 1} video prompts, "
                f"received {len(self.video_prompts)}"
            )
        return self

    @property
    def count(self) -> int:
        return len(self.image_prompts)
