"""Document-store paper endpoints: JSON CRUD and HTMX list partials."""

from typing import Optional, Union

from fastapi import APIRouter, Form, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel

from pubtrack.errors import PaperNotFoundError
from pubtrack.gui.helpers import filter_papers, progress_percent, split_published
from pubtrack.gui.state import state, templates

router = APIRouter()


class NewPaperPayload(BaseModel):
    """Request body for adding a paper."""
    title: str
    status: str = ""


class PaperPatch(BaseModel):
    """Request body for editing a paper; omitted fields are left as is."""
    id: Optional[Union[int, float, str]] = None
    title: Optional[str] = None
    status: Optional[str] = None
    highlight: Optional[bool] = None


def _not_found(key: int) -> JSONResponse:
    return JSONResponse({"error": f"Paper {key} not found"}, status_code=404)


# ============================================================================
# JSON API
# ============================================================================


@router.get("/api/papers")
def list_papers():
    """Return all stored papers ordered by id."""
    return JSONResponse([p.to_dict() for p in state.repo.find_all()])


@router.post("/api/papers")
def create_paper(body: NewPaperPayload):
    """Add a paper with the next free id.  Returns the created paper."""
    try:
        paper = state.repo.add(body.title, body.status)
    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=400)
    return JSONResponse(paper.to_dict(), status_code=201)


@router.put("/api/papers/{key}")
def update_paper(key: int, body: PaperPatch):
    """Edit an existing paper."""
    fields = body.model_dump(exclude_none=True)
    if "title" in fields and not fields["title"].strip():
        return JSONResponse({"error": "Paper title must not be empty"}, status_code=400)
    try:
        paper = state.repo.update(key, **fields)
    except PaperNotFoundError:
        return _not_found(key)
    return JSONResponse(paper.to_dict())


@router.delete("/api/papers/{key}")
def delete_paper(key: int):
    """Delete a paper."""
    try:
        state.repo.delete(key)
    except PaperNotFoundError:
        return _not_found(key)
    return JSONResponse({"ok": True})


# ============================================================================
# HTMX partials
# ============================================================================


def _paper_list_response(request: Request, q: str = "") -> HTMLResponse:
    """Render the published / pending sections of the dashboard."""
    papers = state.repo.find_all()
    published, pending = split_published(papers)
    response = templates.TemplateResponse(
        request,
        "partials/paper_list.html",
        {
            "published": published,
            "pending": filter_papers(pending, q),
            "q": q,
        },
    )
    response.headers["X-Paper-Count"] = str(len(papers))
    return response


@router.get("/papers", response_class=HTMLResponse)
def papers_partial(request: Request, q: str = Query("", description="Search query")):
    """Paper list partial, pending papers filtered by *q*."""
    return _paper_list_response(request, q)


@router.get("/stats", response_class=HTMLResponse)
def stats_partial(request: Request):
    """Progress card partial."""
    counts = state.repo.get_counts()
    target = state.settings.target_papers
    return templates.TemplateResponse(
        request,
        "partials/stats.html",
        {
            "counts": counts,
            "target": target,
            "percent": progress_percent(counts["total"], target),
        },
    )


@router.post("/actions/add", response_class=HTMLResponse)
def add_paper(request: Request, title: str = Form(""), status: str = Form("")):
    """Add a paper from the dashboard form; blank titles are ignored."""
    if title.strip():
        state.repo.add(title, status)
    response = _paper_list_response(request)
    response.headers["HX-Trigger"] = "statsUpdated"
    return response


@router.post("/actions/edit/{key}", response_class=HTMLResponse)
def edit_paper(
    request: Request,
    key: int,
    title: str = Form(""),
    status: str = Form(""),
):
    """Save an edited paper from the dashboard form."""
    fields = {"status": status}
    if title.strip():
        fields["title"] = title.strip()
    try:
        state.repo.update(key, **fields)
    except PaperNotFoundError:
        return HTMLResponse(
            '<div class="toast toast-error">Paper not found.</div>', status_code=404
        )
    response = _paper_list_response(request)
    response.headers["HX-Trigger"] = "statsUpdated"
    return response


@router.post("/actions/delete/{key}", response_class=HTMLResponse)
def remove_paper(request: Request, key: int):
    """Delete a paper from the dashboard."""
    try:
        state.repo.delete(key)
    except PaperNotFoundError:
        return HTMLResponse(
            '<div class="toast toast-error">Paper not found.</div>', status_code=404
        )
    response = _paper_list_response(request)
    response.headers["HX-Trigger"] = "statsUpdated"
    return response
