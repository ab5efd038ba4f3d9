"""
➡️ But : Configurer le fichier SQLite du store et créer les tables.

build_engine() : connexion au fichier (sqlite:///<STORE_PATH>), en lecture seule si demandé.

init_db() : crée les tables à partir des modèles SQLModel.

🔹 Avantages :

Un seul endroit pour gérer les connexions au fichier.

Aucune connexion persistante : chaque appel du store construit puis libère son engine.
"""

from typing import Any, Dict

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

# Import all models for creating all tables
from quizsheets.db.models.buckets import Bucket, BucketEntry


def build_engine(store_path: str, *, read_only: bool = False) -> Engine:
    assert store_path, "store_path must be set"

    connect_args: Dict[str, Any] = {
        # l'engine peut être libéré depuis un autre thread (serveur FastAPI)
        "check_same_thread": False,
    }
    engine = create_engine(f"sqlite:///{store_path}", connect_args=connect_args)

    if read_only:
        @event.listens_for(engine, "connect")
        def _set_query_only(dbapi_connection, _connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA query_only = ON")
            cursor.close()

    return engine


def init_db(engine: Engine) -> None:
    """
    Crée les tables si elles n'existent pas.
    Jamais appelée en lecture : une vue read-only ne crée rien.
    """
    SQLModel.metadata.create_all(engine, tables=[Bucket.__table__, BucketEntry.__table__])
