"""FastAPI + HTMX GUI for PubTrack."""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from pubtrack.config import Settings
from pubtrack.gui.routers import common, papers, sheet
from pubtrack.gui.state import init_state, shutdown_state


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize services on startup."""
    init_state(Settings.load())
    yield
    shutdown_state()


app = FastAPI(lifespan=lifespan)

app.mount(
    "/static",
    StaticFiles(directory=os.path.join(os.path.dirname(__file__), "static")),
    name="static",
)

app.include_router(common.router)
app.include_router(papers.router)
app.include_router(sheet.router)
