"""Read-only endpoints over the content snapshot."""

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from docsite.config import DOCSITE_SEARCH_MAX_RESULTS
from docsite.repository import ContentSnapshot, get_snapshot, rebuild_snapshot
from docsite.utils.logging_config import get_logger
from server.models import (
    DocumentResponse,
    ErrorResponse,
    RebuildResponse,
    RoutesResponse,
    SearchResponse,
    SectionResponse,
    SectionsResponse,
)
from server.server_config import MAX_SEARCH_RESULTS

logger = get_logger(__name__)

router = APIRouter(prefix="/api")

NOT_FOUND_RESPONSES = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}


def content_root(request: Request) -> Path:
    return request.app.state.content_root


def current_snapshot(root: Annotated[Path, Depends(content_root)]) -> ContentSnapshot:
    return get_snapshot(root)


SnapshotDep = Annotated[ContentSnapshot, Depends(current_snapshot)]


@router.get("/sections", response_model=SectionsResponse)
def list_sections(snapshot: SnapshotDep) -> SectionsResponse:
    """Return the full navigation tree."""
    return SectionsResponse(
        sections=[SectionResponse.from_section(section) for section in snapshot.sections]
    )


@router.get("/sections/{section_path:path}", response_model=SectionResponse, responses=NOT_FOUND_RESPONSES)
def get_section(section_path: str, snapshot: SnapshotDep) -> SectionResponse:
    """Return one section by slug path.

    **Raises**

    - **HTTPException**: **404** - no section has this path
    """
    section = snapshot.get_section(section_path)
    if section is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Section {section_path!r} not found",
        )
    return SectionResponse.from_section(section)


@router.get(
    "/docs/{section_path:path}/{document}",
    response_model=DocumentResponse,
    responses=NOT_FOUND_RESPONSES,
)
def get_document(section_path: str, document: str, snapshot: SnapshotDep) -> DocumentResponse:
    """Return a document, its compiled render tree and navigation links.

    A body that fails to compile still returns **200**, with
    ``compiled.error`` describing the failure and an error panel as the
    render tree.

    **Raises**

    - **HTTPException**: **404** - unknown section or document
    """
    doc = snapshot.get_document(section_path, document)
    compiled = snapshot.compile(section_path, document)
    if doc is None or compiled is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Document {section_path.strip('/')}/{document} not found",
        )
    if compiled.error is not None:
        logger.warning(
            "Serving error panel",
            extra={"section": section_path, "document": document, "error": compiled.error.message},
        )

    previous, following = snapshot.adjacent(section_path, document)
    return DocumentResponse(
        section=section_path.strip("/"),
        slug=doc.slug,
        front_matter=doc.front_matter,
        reading_time=doc.reading_time,
        word_count=doc.word_count,
        compiled=compiled,
        previous=previous,
        next=following,
        breadcrumbs=snapshot.breadcrumbs(section_path, document),
    )


@router.get("/routes", response_model=RoutesResponse)
def list_routes(snapshot: SnapshotDep) -> RoutesResponse:
    """Return every published (section, document) pair."""
    return RoutesResponse(routes=snapshot.document_routes())


@router.get("/search", response_model=SearchResponse)
def search(
    snapshot: SnapshotDep,
    q: Annotated[str, Query(description="Case-insensitive substring to look for")] = "",
    limit: Annotated[int, Query(ge=1, le=MAX_SEARCH_RESULTS)] = DOCSITE_SEARCH_MAX_RESULTS,
) -> SearchResponse:
    """Search titles, descriptions and bodies."""
    results = snapshot.search_summaries(q, limit=limit)
    logger.info("Search", extra={"query": q, "results": len(results)})
    return SearchResponse(query=q, results=results)


@router.post("/rebuild", response_model=RebuildResponse)
def rebuild(root: Annotated[Path, Depends(content_root)]) -> RebuildResponse:
    """Rebuild the content snapshot from disk."""
    snapshot = rebuild_snapshot(root)
    return RebuildResponse(
        sections=len(snapshot.sections),
        documents=snapshot.document_count(),
        diagnostics=list(snapshot.diagnostics),
    )
