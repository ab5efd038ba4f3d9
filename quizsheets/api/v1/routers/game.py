from fastapi import APIRouter, Depends, HTTPException, status

from quizsheets.api.v1.dependencies import get_game_service
from quizsheets.api.v1.errors import http_error
from quizsheets.core.errors import QuizSheetsError
from quizsheets.features.games.schemas import (
    SpreadsheetOut,
    SpreadsheetRegistry,
    SpreadsheetRegistryOut,
    TotalOut,
)
from quizsheets.features.games.services import GameService
from quizsheets.features.sheets.services import SpreadsheetServiceError


router = APIRouter(
    prefix="/game",
    tags=["game"],
    responses={404: {"description": "Not Found"}},
)

# -------- Helpers --------

def _registry_out(registry: SpreadsheetRegistry) -> SpreadsheetRegistryOut:
    return SpreadsheetRegistryOut(
        manager=(
            SpreadsheetOut(id=registry.manager.id, url=registry.manager.url)
            if registry.manager
            else None
        ),
        teams={
            team: SpreadsheetOut(id=sheet.id, url=sheet.url)
            for team, sheet in registry.teams.items()
        },
    )

# -----------------------------
# Create game
# -----------------------------
@router.post(
    "",
    summary="Créer les spreadsheets de la partie (manager + équipes)",
    status_code=status.HTTP_201_CREATED,
    response_model=SpreadsheetRegistryOut,
)
def create_game(
    svc: GameService = Depends(get_game_service),
):
    try:
        return _registry_out(svc.create_game())
    except QuizSheetsError as e:
        raise http_error(e)
    except SpreadsheetServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except FileNotFoundError as e:
        # token Google absent : seules les routes distantes en ont besoin
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

# -----------------------------
# Spreadsheets
# -----------------------------
@router.get(
    "/spreadsheets",
    summary="Lister les URLs des spreadsheets",
    response_model=SpreadsheetRegistryOut,
)
def list_spreadsheets(
    svc: GameService = Depends(get_game_service),
):
    try:
        return _registry_out(svc.get_spreadsheets())
    except QuizSheetsError as e:
        raise http_error(e)

@router.delete(
    "/spreadsheets",
    summary="Supprimer les spreadsheets distants (le registre local est conservé)",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_spreadsheets(
    svc: GameService = Depends(get_game_service),
):
    try:
        svc.delete_game()
    except QuizSheetsError as e:
        raise http_error(e)
    except SpreadsheetServiceError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except FileNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

# -----------------------------
# Total
# -----------------------------
@router.get(
    "/total",
    summary="Nombre de réponses correctes par équipe",
    response_model=TotalOut,
)
def get_total(
    svc: GameService = Depends(get_game_service),
):
    try:
        return TotalOut(totals=svc.total())
    except QuizSheetsError as e:
        raise http_error(e)
