from typing import Any, Type, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from quizsheets.core.errors import SerializationError
from quizsheets.db.store import TransactionalStore

# Type générique pour la valeur persistée (SpreadsheetRef, RoundResults, etc.)
ValueT = TypeVar("ValueT")

class BaseRepository:
    """
    Repository de base au-dessus du TransactionalStore.

    👉 Ne contient aucune logique métier.
    👉 Gère la (dé)sérialisation JSON des valeurs stockées dans les buckets.
    👉 Toute erreur d'encodage/décodage devient une SerializationError.
    """

    def __init__(self, store: TransactionalStore):
        self.store = store

    # ---------- ENCODE ----------

    @staticmethod
    def _encode(type_: Any, value: Any) -> bytes:
        """Sérialise une valeur (y compris None -> null) selon le type annoncé."""
        try:
            return TypeAdapter(type_).dump_json(value, by_alias=True)
        except PydanticSerializationError as e:
            raise SerializationError(f"failed to encode {type_}: {e}") from e

    # ---------- DECODE ----------

    @staticmethod
    def _decode(type_: Type[ValueT], raw: bytes) -> ValueT:
        try:
            return TypeAdapter(type_).validate_json(raw)
        except ValidationError as e:
            raise SerializationError(f"failed to decode {type_}: {e}") from e
