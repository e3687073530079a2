"""
Shared fixtures for the thesis export backend tests.

The app has no database or external service, so the client fixture talks to
the ASGI app in-process.  Helpers build guide documents, content stores and
small real images for the rendering tests.
"""
from __future__ import annotations

import base64
import io
from typing import Any, AsyncGenerator, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from PIL import Image

from app.main import app
from app.models.schemas import GuideDocument
from app.services.styles import StyleProfile, resolve_style


# ---------------------------------------------------------------------------
# Per-test fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """httpx AsyncClient wired to the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def standard_style() -> StyleProfile:
    return resolve_style("standard")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def image_bytes(fmt: str = "PNG", size=(4, 3)) -> bytes:
    """Return a tiny solid-colour image encoded in ``fmt``."""
    buf = io.BytesIO()
    Image.new("RGB", size, (200, 30, 30)).save(buf, format=fmt)
    return buf.getvalue()


def data_uri(raw: bytes, subtype: str = "png") -> str:
    return f"data:image/{subtype};base64,{base64.b64encode(raw).decode('ascii')}"


def image_payload(uri: Optional[str] = None, width: Any = 120, height: Any = 80) -> Dict[str, Any]:
    return {
        "type": "image",
        "data": uri if uri is not None else data_uri(image_bytes()),
        "width": width,
        "height": height,
    }


def make_guide(*chapters: Dict[str, Any], **extra: Any) -> GuideDocument:
    """GuideDocument from camelCase chapter dicts, as the wizard posts them."""
    return GuideDocument.model_validate({"chapters": list(chapters), **extra})


def chapter(title: str, *sections: Dict[str, Any]) -> Dict[str, Any]:
    return {"chapterTitle": title, "sections": list(sections)}


def section(title: str, *blocks: Dict[str, Any], guide: Optional[str] = None) -> Dict[str, Any]:
    data: Dict[str, Any] = {"sectionTitle": title, "contentBlocks": list(blocks)}
    if guide is not None:
        data["sectionGuide"] = guide
    return data


def block(content_type: str, content: Optional[Dict[str, Any]] = None, **extra: Any) -> Dict[str, Any]:
    return {"contentType": content_type, "content": content or {}, **extra}


def store_for(blocks: Dict[str, Any], chapter_index: int = 0, section_index: int = 0) -> Dict[str, Any]:
    """Nest block-keyed values under ``chapter-<i>/section-<j>``."""
    return {f"chapter-{chapter_index}": {f"section-{section_index}": blocks}}


def texts(paragraphs: List[Any]) -> List[str]:
    return [p.text for p in paragraphs]
