# src/assistant_relay/main.py
import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from assistant_relay.config import Settings
from assistant_relay.models.response import ParsedResponse
from assistant_relay.providers.base import CLIError
from assistant_relay.providers.process import SubprocessCLI
from assistant_relay.relay.session import RelaySession, SessionBusyError, load_workspace_config


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    return Settings()


def build_session(settings: Settings) -> RelaySession:
    """Create a session for the configured workspace and CLI."""
    config = load_workspace_config(settings.workspace_root)
    if settings.fallback_answer:
        config = config.model_copy(update={"fallback_answer": settings.fallback_answer})

    cli = SubprocessCLI(
        command=settings.cli_command,
        args=config.cli_args,
        cwd=settings.workspace_root,
        timeout=settings.cli_timeout,
    )
    return RelaySession(
        cli=cli,
        workspace_root=settings.workspace_root,
        config=config,
        log_dir=settings.log_dir,
    )


def get_session(request: Request) -> RelaySession:
    session = getattr(request.app.state, "session", None)
    if session is None:
        session = build_session(get_settings())
        request.app.state.session = session
    return session


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level.upper())
    logger.info("Assistant Relay starting...")
    app.state.session = build_session(settings)
    yield
    app.state.session.close()
    logger.info("Assistant Relay shutting down...")


app = FastAPI(title="Assistant Relay", lifespan=lifespan)


class ResponseRequest(BaseModel):
    text: str


class QueryRequest(BaseModel):
    prompt: str
    files: list[str] = Field(default_factory=list)


class RelayResponse(BaseModel):
    status: str
    response: ParsedResponse | None = None


class HighlightResponse(BaseModel):
    path: str
    added_lines: list[int]
    removed_lines: list[int]
    first_added_line: int | None = None


class SnapshotResponse(BaseModel):
    status: str
    files: int


class ChangeSummary(BaseModel):
    path: str
    file_name: str
    additions: int
    deletions: int
    unified_diff: str


def _relay_response(response: ParsedResponse | None) -> RelayResponse:
    if response is None:
        return RelayResponse(status="skipped")
    return RelayResponse(status="parsed", response=response)


@app.get("/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}


@app.post("/api/response", response_model=RelayResponse)
async def submit_response(body: ResponseRequest, request: Request):
    """Parse raw CLI output collected by the editor's terminal."""
    session = get_session(request)
    return _relay_response(session.process_response(body.text))


@app.post("/api/query", response_model=RelayResponse)
async def query(body: QueryRequest, request: Request):
    """Send a prompt to the assistant CLI and parse its answer."""
    session = get_session(request)
    try:
        response = await session.ask(body.prompt, files=body.files)
    except SessionBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except CLIError as e:
        logger.error(f"Assistant CLI failed: {e} {e.stderr}")
        raise HTTPException(status_code=502, detail=str(e))
    return _relay_response(response)


@app.get("/api/highlights", response_model=HighlightResponse)
async def highlights(path: str, request: Request):
    session = get_session(request)
    line_changes = session.highlights_for(path)
    if line_changes is None:
        raise HTTPException(status_code=404, detail=f"No changes recorded for {path}")
    return HighlightResponse(
        path=path,
        added_lines=line_changes.added_lines,
        removed_lines=line_changes.removed_lines,
        first_added_line=line_changes.first_added_line,
    )


@app.post("/api/snapshot", response_model=SnapshotResponse)
async def snapshot(request: Request):
    session = get_session(request)
    files = session.take_snapshot()
    return SnapshotResponse(status="completed", files=files)


@app.get("/api/files", response_model=list[str])
async def list_files(request: Request):
    """List workspace files that can be attached to a prompt as context."""
    session = get_session(request)
    return session.list_files()


@app.get("/api/changes", response_model=list[ChangeSummary])
async def changes(request: Request):
    """List files changed on disk since the last snapshot."""
    session = get_session(request)
    summaries = []
    for change, file_change in session.detect_changes():
        summaries.append(ChangeSummary(
            path=change.path,
            file_name=change.file_name,
            additions=file_change.additions,
            deletions=file_change.deletions,
            unified_diff=change.unified_diff,
        ))
    return summaries


@app.post("/api/session/reset")
async def reset_session(request: Request):
    session = get_session(request)
    session.close()
    return {"status": "reset"}
