"""Session-scoped outcome history endpoints."""

from typing import Annotated

from fastapi import APIRouter, Header, HTTPException

from api.routes.analysis import build_summary
from api.schemas import (
    AddOutcomeRequest,
    HistoryResponse,
    ImportRequest,
    RoadsResponse,
    SummaryResponse,
)
from api.session import create_session, load_history, save_history
from config import config
from core.history import OutcomeHistory
from core.outcomes import Outcome
from core.roads import bead_plate, streak_columns

router = APIRouter()

SessionHeader = Annotated[str, Header(alias="X-Session-ID")]


def _history_response(history: OutcomeHistory) -> HistoryResponse:
    return HistoryResponse(
        outcomes=[o.value for o in history],
        encoded=history.export_string(),
        hands=len(history),
    )


def _grid_letters(grid: list[list[Outcome | None]]) -> list[list[str | None]]:
    return [[cell.value if cell is not None else None for cell in row] for row in grid]


async def _get_history(session_id: str) -> OutcomeHistory:
    history = await load_history(session_id)
    if history is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return history


@router.post("/new")
async def new_history() -> dict[str, str]:
    """Start a new session with an empty history."""
    return {"session_id": await create_session()}


@router.get("")
async def get_history(session_id: SessionHeader) -> HistoryResponse:
    """Get the recorded outcomes."""
    return _history_response(await _get_history(session_id))


@router.post("/outcome")
async def add_outcome(request: AddOutcomeRequest, session_id: SessionHeader) -> HistoryResponse:
    """Record one outcome."""
    history = await _get_history(session_id)
    history.append(Outcome(request.outcome))
    await save_history(session_id, history)
    return _history_response(history)


@router.post("/undo")
async def undo_outcome(session_id: SessionHeader) -> HistoryResponse:
    """Remove the most recent outcome."""
    history = await _get_history(session_id)
    history.undo()
    await save_history(session_id, history)
    return _history_response(history)


@router.delete("")
async def clear_history(session_id: SessionHeader) -> HistoryResponse:
    """Forget every recorded outcome."""
    history = await _get_history(session_id)
    history.clear()
    await save_history(session_id, history)
    return _history_response(history)


@router.post("/import")
async def import_history(request: ImportRequest, session_id: SessionHeader) -> HistoryResponse:
    """Append (or replace with) outcomes parsed from text."""
    history = await _get_history(session_id)
    if request.replace:
        history.clear()
    try:
        history.import_string(request.text, config.history.max_outcomes)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    await save_history(session_id, history)
    return _history_response(history)


@router.get("/export")
async def export_history(session_id: SessionHeader) -> dict[str, str]:
    """Export the history as run-length text."""
    history = await _get_history(session_id)
    return {"text": history.export_string()}


@router.get("/summary")
async def history_summary(session_id: SessionHeader) -> SummaryResponse:
    """Estimate next-hand probabilities from the recorded history."""
    history = await _get_history(session_id)
    return build_summary(history.outcomes)


@router.get("/roads")
async def history_roads(session_id: SessionHeader) -> RoadsResponse:
    """Lay the history out as bead plate and streak columns."""
    history = await _get_history(session_id)
    rows, cols = config.scoreboard.rows, config.scoreboard.cols
    return RoadsResponse(
        bead_plate=_grid_letters(bead_plate(history.outcomes, rows, cols)),
        streak_columns=_grid_letters(streak_columns(history.outcomes, rows, cols)),
    )
