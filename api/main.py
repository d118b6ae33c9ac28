# api/main.py
import io
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from seaflog import __version__, config
from seaflog.convert import convert_stream
from seaflog.definitions import load_definitions
from seaflog.exceptions import ScanError, TsdataError
from seaflog.timestamps import parse_bound
from seaflog.writer import TsdataWriter

# ----- logging -----
logger = logging.getLogger("uvicorn.error")


# ----- lifespan (startup/shutdown) -----
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: the definition table is loaded once and shared read-only
    app.state.definitions = load_definitions()
    logger.info("[seaflog] %d event definitions loaded", len(app.state.definitions))
    yield


app = FastAPI(
    title="seaflog API",
    version=__version__,
    lifespan=lifespan,
)


# ----- Schemas -----
class ConvertRequest(BaseModel):
    log_text: str
    filetype: str = Field(default=config.FILE_TYPE, min_length=1, max_length=128)
    project: str = Field(default=config.PROJECT, min_length=1, max_length=128)
    description: str = config.DESCRIPTION
    earliest: Optional[str] = None
    latest: Optional[str] = None
    notes: bool = True


class FormItem(BaseModel):
    startswith: str
    value_action: str


class DefinitionItem(BaseModel):
    name: str
    type: str
    forms: List[FormItem]


class ConvertResponse(BaseModel):
    tsdata: str
    stats: Dict[str, Any]


# ----- Routes -----
@app.get("/health")
def health():
    return {"status": "ok", "events": len(app.state.definitions)}


@app.get("/definitions", response_model=List[DefinitionItem])
def list_definitions():
    definitions = app.state.definitions
    return [
        DefinitionItem(
            name=edef.name,
            type=edef.type,
            forms=[
                FormItem(startswith=f.startswith, value_action=f.value_action.value)
                for f in edef.forms
            ],
        )
        for _, edef in sorted(definitions.items())
    ]


@app.post("/convert", response_model=ConvertResponse)
def convert(req: ConvertRequest):
    definitions = app.state.definitions
    try:
        earliest = parse_bound(req.earliest)
        latest = parse_bound(req.latest)
        writer = TsdataWriter(req.filetype, req.project, req.description, definitions)
    except (ValueError, TsdataError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    out = io.StringIO()
    try:
        stats = convert_stream(
            io.StringIO(req.log_text), out, writer, definitions, earliest, latest, req.notes
        )
    except ScanError as e:
        raise HTTPException(status_code=500, detail=f"Scan error: {e}")
    return ConvertResponse(tsdata=out.getvalue(), stats=stats.as_dict())
