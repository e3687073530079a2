"""Tests for POST /api/export-docx and the templates listing."""
import io

import pytest
from docx import Document
from httpx import AsyncClient

from app.config import settings
from app.routers import export as export_router
from app.services.packager import DOCX_CONTENT_TYPE, PackagingError
from tests.conftest import block, chapter, image_payload, section

GUIDE = {
    "projectTitle": "Sleep and Grades",
    "chapters": [
        chapter(
            "Introduction",
            section("Background", block("paragraph"), block("list", {"items": ["a", "b"]})),
            section("Conceptual Framework", block("image")),
        ),
    ],
}

CONTENT = {
    "chapter-0": {
        "section-0": {"block-0": "Hello world", "block-1-item-1": "second point"},
        "section-1": {"block-0": image_payload()},
    }
}


def _paragraph_texts(data: bytes):
    return [p.text for p in Document(io.BytesIO(data)).paragraphs if p.text]


@pytest.mark.asyncio
async def test_export_returns_docx_attachment(client: AsyncClient):
    resp = await client.post(
        "/api/export-docx",
        json={"thesisContent": CONTENT, "guideData": GUIDE, "template": "arial"},
    )
    assert resp.status_code == 200
    assert resp.headers["content-type"] == DOCX_CONTENT_TYPE
    assert resp.headers["content-disposition"] == 'attachment; filename="thesis.docx"'

    assert _paragraph_texts(resp.content) == [
        "Chapter 1",
        "INTRODUCTION",
        "Background",
        "Hello world",
        "• second point",
        "Conceptual Framework",
    ]
    assert len(Document(io.BytesIO(resp.content)).inline_shapes) == 1


@pytest.mark.asyncio
async def test_export_unknown_template_uses_default(client: AsyncClient):
    resp = await client.post(
        "/api/export-docx",
        json={"thesisContent": CONTENT, "guideData": GUIDE, "template": "no-such-template"},
    )
    assert resp.status_code == 200
    normal = Document(io.BytesIO(resp.content)).styles["Normal"]
    assert normal.font.name == "Times New Roman"


@pytest.mark.asyncio
async def test_export_front_matter_override(client: AsyncClient):
    resp = await client.post(
        "/api/export-docx",
        json={
            "thesisContent": {},
            "guideData": GUIDE,
            "filledVariables": {"IV": "Sleep"},
            "includeFrontMatter": True,
        },
    )
    assert resp.status_code == 200
    texts = _paragraph_texts(resp.content)
    assert texts[:3] == ["Sleep and Grades", "Variables Used", "IV: Sleep"]


@pytest.mark.asyncio
async def test_export_empty_guide(client: AsyncClient):
    resp = await client.post("/api/export-docx", json={"thesisContent": {}, "guideData": {}})
    assert resp.status_code == 200
    assert _paragraph_texts(resp.content) == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"guideData": GUIDE},
        {"thesisContent": CONTENT},
        {"thesisContent": None, "guideData": GUIDE},
        {},
    ],
)
async def test_export_requires_content_and_guide(client: AsyncClient, body):
    resp = await client.post("/api/export-docx", json=body)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Missing thesis content or guide data"


@pytest.mark.asyncio
async def test_export_packaging_failure(client: AsyncClient, monkeypatch):
    def _fail(*args, **kwargs):
        raise PackagingError("could not save")

    monkeypatch.setattr(export_router, "export_docx", _fail)
    resp = await client.post("/api/export-docx", json={"thesisContent": CONTENT, "guideData": GUIDE})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to generate DOCX document", "details": "could not save"}


@pytest.mark.asyncio
async def test_export_rejects_oversized_body(client: AsyncClient, monkeypatch):
    monkeypatch.setattr(settings, "MAX_REQUEST_SIZE", 16)
    resp = await client.post("/api/export-docx", json={"thesisContent": CONTENT, "guideData": GUIDE})
    assert resp.status_code == 413


@pytest.mark.asyncio
async def test_get_on_export_endpoint_is_not_allowed(client: AsyncClient):
    resp = await client.get("/api/export-docx")
    assert resp.status_code == 404
    assert resp.json() == {"error": "GET method not allowed for API endpoints"}


@pytest.mark.asyncio
async def test_list_templates(client: AsyncClient):
    resp = await client.get("/api/export-docx/templates")
    assert resp.status_code == 200
    data = resp.json()
    assert data[0]["name"] == "standard"
    assert data[0]["is_default"] is True
    by_name = {t["name"]: t for t in data}
    assert set(by_name) == {"standard", "academic", "modern", "arial", "draft"}
    assert by_name["modern"]["font_size"] == 11
    assert by_name["arial"]["margins"] == {"top": 1440, "right": 1440, "bottom": 1440, "left": 1440}
