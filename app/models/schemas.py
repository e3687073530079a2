"""
Pydantic schemas for request/response validation.

The wizard front end posts camelCase JSON; every schema accepts those names
as aliases and exposes snake_case attributes.  Guide schemas are lenient:
unknown keys are ignored and every field has a default, because the guide
document is authored elsewhere and is not validated here.
"""
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List, Dict, Any
from datetime import datetime
from enum import Enum


# Enums
class ContentType(str, Enum):
    """Content block types a guide may declare."""

    PARAGRAPH = "paragraph"
    SUBSECTION = "subsection"
    LIST = "list"
    COMBO = "combo"
    TABLE = "table"
    IMAGE = "image"
    FIGURE = "figure"
    OTHER = "other"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "ContentType":
        """Map a declared contentType string onto a member; unknown values become OTHER."""
        if not isinstance(raw, str):
            return cls.OTHER
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.OTHER


_GUIDE_CONFIG = ConfigDict(populate_by_name=True, extra="ignore")


# Guide Schemas
class BlockDeclaration(BaseModel):
    """One content block as declared by the guide."""

    content_type: Optional[str] = Field(None, alias="contentType")
    content_number: Optional[Any] = Field(None, alias="contentNumber")
    subsection_title: Optional[str] = Field(None, alias="subsectionTitle")
    content: Dict[str, Any] = Field(default_factory=dict)
    requirements: List[Any] = Field(default_factory=list)
    notes: Optional[str] = None
    special_instructions: Optional[str] = Field(None, alias="specialInstructions")

    model_config = _GUIDE_CONFIG

    @field_validator("content", mode="before")
    @classmethod
    def _coerce_content(cls, value: Any) -> Dict[str, Any]:
        if value is None:
            return {}
        if isinstance(value, str):
            return {"text": value}
        return value if isinstance(value, dict) else {}

    @field_validator("requirements", mode="before")
    @classmethod
    def _coerce_requirements(cls, value: Any) -> List[Any]:
        if value is None:
            return []
        return value if isinstance(value, list) else [value]

    @property
    def kind(self) -> ContentType:
        return ContentType.parse(self.content_type)


class GuideSection(BaseModel):
    """A section: title, optional guide note, ordered content blocks."""

    section_title: str = Field("", alias="sectionTitle")
    section_guide: Optional[str] = Field(None, alias="sectionGuide")
    content_blocks: List[BlockDeclaration] = Field(default_factory=list, alias="contentBlocks")

    model_config = _GUIDE_CONFIG

    @field_validator("section_title", mode="before")
    @classmethod
    def _title_to_str(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("content_blocks", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class GuideChapter(BaseModel):
    """A chapter: title and ordered sections."""

    chapter_title: str = Field("", alias="chapterTitle")
    sections: List[GuideSection] = Field(default_factory=list)

    model_config = _GUIDE_CONFIG

    @field_validator("chapter_title", mode="before")
    @classmethod
    def _title_to_str(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("sections", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class GuideDocument(BaseModel):
    """The guide tree describing what a thesis must contain."""

    project_title: Optional[str] = Field(None, alias="projectTitle")
    version: Optional[Any] = None
    chapters: List[GuideChapter] = Field(default_factory=list)

    model_config = _GUIDE_CONFIG

    @field_validator("chapters", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value


# Export Schemas
class ExportRequest(BaseModel):
    """
    Body of POST /api/export-docx.

    ``thesis_content`` and ``guide_data`` are optional at the schema level so
    the router can answer a missing field with a 400 rather than a 422.
    """

    thesis_content: Optional[Dict[str, Any]] = Field(None, alias="thesisContent")
    guide_data: Optional[GuideDocument] = Field(None, alias="guideData")
    filled_variables: Optional[Dict[str, Any]] = Field(None, alias="filledVariables")
    template: Optional[str] = None
    include_front_matter: Optional[bool] = Field(None, alias="includeFrontMatter")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class TemplateResponse(BaseModel):
    """Schema for one style template."""

    name: str
    title_font: str
    body_font: str
    font_size: int
    heading1_size: int
    heading2_size: int
    heading3_size: int
    line_spacing: int
    margins: Dict[str, int]
    include_front_matter: bool
    is_default: bool = False


class ExportErrorResponse(BaseModel):
    """Schema returned when a document could not be generated."""

    error: str
    details: Optional[str] = None


# Health Check Schemas
class HealthCheckResponse(BaseModel):
    """Schema for health check endpoint."""

    status: str
    docx: str
    frontend: str
    timestamp: datetime
    version: str = "0.1.0"
