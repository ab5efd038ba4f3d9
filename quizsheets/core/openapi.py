"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) modifie le schéma généré par FastAPI pour :

ajouter une description du déroulé d'une partie,

documenter les symboles de correction.

🔹 Avantages :

La doc est toujours complète et cohérente.
"""

from fastapi.openapi.utils import get_openapi

def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "Pilotage d'un quiz sur Google Sheets : un spreadsheet manager, un par équipe.\n\n"
            "### Déroulé\n"
            "1. `POST /game` crée et remplit les spreadsheets.\n"
            "2. `POST /rounds/{n}/fetch` relit les réponses du tour `n` (statuts remis à `{}`).\n"
            "3. `PUT /rounds/{n}/check` corrige : `+` OK, `-` KO, `?` en question, `\"\"` non corrigé.\n"
            "4. `GET /game/total` donne le nombre de réponses OK par équipe.\n"
        ),
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
