"""Workbook routes: ingestion, update, and sheet ⇄ store sync."""

import logging
from typing import Union

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from pubtrack.errors import PubTrackError
from pubtrack.gui.state import state

logger = logging.getLogger(__name__)

router = APIRouter()


class PaperRow(BaseModel):
    """One paper row as sent by the dashboard."""
    id: Union[int, float, str]
    title: str = ""
    status: str = ""


class UpdatePayload(BaseModel):
    """Request body for overwriting the paper rows."""
    papers: list[PaperRow]


def _error(e: Exception) -> JSONResponse:
    return JSONResponse({"error": str(e)}, status_code=500)


# ============================================================================
# Ingestion / Update
# ============================================================================


@router.get("/api/data")
def get_data():
    """Read the researcher header and all papers from the workbook."""
    try:
        snapshot = state.sheet.read()
    except PubTrackError as e:
        logger.exception("Sheet read failed")
        return _error(e)
    return JSONResponse(snapshot.to_dict())


@router.post("/api/update")
def update_data(body: UpdatePayload):
    """Overwrite the paper rows with the given list (stale rows cleared)."""
    try:
        state.sheet.write([row.model_dump() for row in body.papers])
    except PubTrackError as e:
        logger.exception("Sheet update failed")
        return _error(e)
    return JSONResponse({"success": True})


# ============================================================================
# Sync
# ============================================================================


@router.post("/api/sync/import")
def sync_import():
    """Replace the document store with the workbook's papers."""
    try:
        count = state.sync.import_sheet()
    except PubTrackError as e:
        logger.exception("Sheet import failed")
        return _error(e)
    return JSONResponse({"success": True, "count": count})


@router.post("/api/sync/export")
def sync_export():
    """Write the document store's papers to the workbook."""
    try:
        count = state.sync.export_store()
    except PubTrackError as e:
        logger.exception("Sheet export failed")
        return _error(e)
    return JSONResponse({"success": True, "count": count})
