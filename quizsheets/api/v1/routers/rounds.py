from fastapi import APIRouter, Body, Depends, HTTPException, Path, status

from quizsheets.api.v1.dependencies import get_game_service
from quizsheets.api.v1.errors import http_error
from quizsheets.core.errors import QuizSheetsError
from quizsheets.features.games.services import GameService
from quizsheets.features.results.schemas import (
    RoundCheckIn,
    RoundResponseOut,
    RoundResults,
    RoundResultsOut,
)
from quizsheets.features.results.services import parse_status
from quizsheets.features.sheets.services import SpreadsheetServiceError


router = APIRouter(
    prefix="/rounds",
    tags=["rounds"],
    responses={404: {"description": "Round results not found"}},
)

# -------- Helpers --------

def _results_out(results: RoundResults) -> RoundResultsOut:
    return RoundResultsOut(
        round=results.round,
        results={
            team: RoundResponseOut(response=r.response, status=r.status.symbol)
            for team, r in results.results.items()
        },
    )

# -----------------------------
# Fetch (lecture du manager)
# -----------------------------
@router.post(
    "/{round_number}/fetch",
    summary="Récupérer les réponses d'un tour depuis le manager (statuts remis à zéro)",
    response_model=RoundResultsOut,
)
def fetch_round(
    round_number: int = Path(..., ge=0),
    svc: GameService = Depends(get_game_service),
):
    try:
        return _results_out(svc.fetch_round(round_number))
    except QuizSheetsError as e:
        raise http_error(e)
    except SpreadsheetServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except FileNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except LookupError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Manager spreadsheet not found")
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

# -----------------------------
# Get
# -----------------------------
@router.get(
    "/{round_number}",
    summary="Lire les résultats enregistrés d'un tour",
    response_model=RoundResultsOut,
)
def get_round(
    round_number: int = Path(..., ge=0),
    svc: GameService = Depends(get_game_service),
):
    try:
        return _results_out(svc.get_round(round_number))
    except QuizSheetsError as e:
        raise http_error(e)

# -----------------------------
# Check (correction)
# -----------------------------
@router.put(
    "/{round_number}/check",
    summary="Corriger un tour : team -> '+', '-', '?' ou ''",
    response_model=RoundResultsOut,
)
def check_round(
    round_number: int = Path(..., ge=0),
    payload: RoundCheckIn = Body(...),
    svc: GameService = Depends(get_game_service),
):
    try:
        decisions = {team: parse_status(symbol) for team, symbol in payload.decisions.items()}
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    try:
        return _results_out(svc.check_round(round_number, decisions))
    except QuizSheetsError as e:
        raise http_error(e)
