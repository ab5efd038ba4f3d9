"""
➡️ But : Centraliser tous les paramètres configurables (dossier de partie, fichier de store, token Google, etc.)

Utilise pydantic-settings pour charger automatiquement les variables d’environnement (.env, variables système…).

Fournit un objet settings unique, que tu importes ailleurs :

from quizsheets.core.config import settings
print(settings.STORE_PATH)


🔹 Avantages :

Plus propre que des constantes éparpillées dans le code.

Facilite le passage entre environnements (dev / prod / test).
"""

import os
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "Quiz-Sheets"
    ENV: str = "dev"  # dev | prod | test
    LOG_LEVEL: str = "INFO"

    # -----------------------------
    # Partie
    # -----------------------------
    GAME_DIR: str = "game"
    GAME_CONFIG_PATH: str = "config.json"
    NEW_GAME: bool = False

    # -----------------------------
    # Store local
    # -----------------------------
    STORE_FILENAME: str = "bolt-db"
    # Si tu veux forcer un autre fichier, définis STORE_PATH dans l'env.
    STORE_PATH: Optional[str] = None

    # -----------------------------
    # Google Sheets
    # -----------------------------
    GOOGLE_TOKEN_FILE: Optional[str] = None

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    # -----------------------------
    # Post-process values
    # -----------------------------
    def model_post_init(self, __context): # appelée automatiquement
        # STORE_PATH par défaut dans le dossier de partie
        if not self.STORE_PATH:
            object.__setattr__(self, "STORE_PATH", os.path.join(self.GAME_DIR, self.STORE_FILENAME))

        # le token est rangé à côté du store
        if not self.GOOGLE_TOKEN_FILE:
            object.__setattr__(self, "GOOGLE_TOKEN_FILE", os.path.join(self.GAME_DIR, "secret-token"))


# Instance globale importable partout
settings = Settings()
