"""
➡️ But : assembler toutes les pièces du puzzle.

Crée l’instance FastAPI (app).

Configure :

titre, version, tags

schéma OpenAPI personnalisé

logging

Inclut les routers (ex : /api/v1/rounds).

Prépare le dossier de la partie au démarrage (@app.on_event("startup")).

🔹 Avantages :

Point unique d’exécution : uvicorn quizsheets.main:app --reload.
"""

from fastapi import FastAPI
from quizsheets.core.config import settings
from quizsheets.core.log_config import setup_logging
from quizsheets.core.openapi import custom_openapi
from quizsheets.utils.game_dir import prepare_game_dir

from quizsheets.api.v1.routers import game, rounds

import uvicorn

app = FastAPI(
    title=settings.APP_NAME,
    version="0.0.1",
    openapi_tags=[
        {"name": "game", "description": "Création et suivi des spreadsheets de la partie"},
        {"name": "rounds", "description": "Récupération et correction des réponses par tour"},
    ],
)

# Routers
app.include_router(game.router, prefix="/api/v1")
app.include_router(rounds.router, prefix="/api/v1")

app.openapi = lambda: custom_openapi(app)

# Démarrage
@app.on_event("startup")
def on_startup():
    setup_logging(settings.LOG_LEVEL)
    prepare_game_dir(settings.GAME_DIR, new_game=settings.NEW_GAME)

if __name__ == "__main__":
    uvicorn.run("quizsheets.main:app", host="127.0.0.1", port=8080, reload=(settings.ENV == "dev")) # http://localhost:8080
