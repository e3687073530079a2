"""Request schemas, content-block variants and the paragraph model."""
from app.models.content import (
    Block,
    ComboBlock,
    ContentBlock,
    ContentPath,
    EmptyBlock,
    FigureBlock,
    ImageBlock,
    ImagePayload,
    ListBlock,
    LiteratureReviewBlock,
    Slot,
    SlotKind,
    TableBlock,
    TextBlock,
)
from app.models.paragraphs import Alignment, ImageRun, Paragraph, TextRun
from app.models.schemas import (
    BlockDeclaration,
    ContentType,
    ExportRequest,
    GuideChapter,
    GuideDocument,
    GuideSection,
    HealthCheckResponse,
    TemplateResponse,
)

__all__ = [
    # Content blocks
    "Block",
    "ComboBlock",
    "ContentBlock",
    "ContentPath",
    "EmptyBlock",
    "FigureBlock",
    "ImageBlock",
    "ImagePayload",
    "ListBlock",
    "LiteratureReviewBlock",
    "Slot",
    "SlotKind",
    "TableBlock",
    "TextBlock",
    # Paragraph model
    "Alignment",
    "ImageRun",
    "Paragraph",
    "TextRun",
    # Pydantic schemas
    "BlockDeclaration",
    "ContentType",
    "ExportRequest",
    "GuideChapter",
    "GuideDocument",
    "GuideSection",
    "HealthCheckResponse",
    "TemplateResponse",
]
