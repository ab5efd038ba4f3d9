"""
➡️ But : Définir la structure des tables du store local (ORM).

Propriétés communes aux tables : clé technique et horodatage des écritures.

🔹 Avantages :

Tu manipules des objets Python, pas du SQL brut.

Le fichier SQLite reste un simple fichier local, ouvert à chaque appel.
"""

from sqlmodel import SQLModel, Field
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    # horodatages toujours "aware" : sqlmodel refuse les datetimes naïfs à l'insertion
    return datetime.now(timezone.utc)


class BaseModelDB(SQLModel, table=False):
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def touch(self) -> None:
        """Marque la ligne comme réécrite (valeur écrasée dans son bucket)."""
        self.updated_at = utc_now()
