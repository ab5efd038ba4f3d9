"""
➡️ But : Fournir un accès transactionnel au fichier local, organisé en buckets de paires clé → valeur binaires.

TransactionalStore.update(fn) : ouvre le fichier, crée les buckets connus s'ils manquent, exécute fn puis commit.
Toute exception levée par fn annule la transaction (aucune écriture partielle visible).

TransactionalStore.read(fn) : ouvre le fichier en lecture seule et exécute fn sur une vue figée.
Ne crée jamais de bucket.

🔹 Avantages :

Aucune connexion gardée entre deux appels : plusieurs process se sérialisent sur le verrou fichier de SQLite.

Le store est une valeur explicite passée aux repositories (pas de handle global).
"""

import logging
from typing import Callable, List, Optional, Tuple, TypeVar, Union

from sqlalchemy import inspect
from sqlmodel import Session, select

from quizsheets.core.errors import MissingBucketError
from quizsheets.db.models.buckets import Bucket, BucketEntry
from quizsheets.db.session import build_engine, init_db

logger = logging.getLogger(__name__)

BUCKET_GAME_CONFIGURATION = "game-configuration"
BUCKET_TEAMS_SPREADSHEETS = "teams-spreadsheets"
BUCKET_GAME_RESULTS = "game-results"

WELL_KNOWN_BUCKETS = (
    BUCKET_GAME_CONFIGURATION,
    BUCKET_TEAMS_SPREADSHEETS,
    BUCKET_GAME_RESULTS,
)

T = TypeVar("T")
Key = Union[str, bytes]


def _as_bytes(key: Key) -> bytes:
    return key.encode("utf-8") if isinstance(key, str) else key


class BucketHandle:
    """Accès aux entrées d'un bucket, dans la transaction qui l'a ouvert."""

    def __init__(self, session: Session, bucket: Bucket, *, writable: bool):
        self.session = session
        self.bucket = bucket
        self.writable = writable

    @property
    def name(self) -> str:
        return self.bucket.name

    def _entry(self, key: bytes) -> Optional[BucketEntry]:
        stmt = select(BucketEntry).where(
            BucketEntry.bucket_id == self.bucket.id,
            BucketEntry.key == key,
        )
        return self.session.exec(stmt).first()

    def _ensure_writable(self) -> None:
        if not self.writable:
            raise RuntimeError(f"bucket {self.name} is opened in a read-only transaction")

    # ---------- READ ----------

    def get(self, key: Key) -> Optional[bytes]:
        """Retourne la valeur brute, ou None si la clé est absente."""
        entry = self._entry(_as_bytes(key))
        return None if entry is None else bytes(entry.value)

    def items(self) -> List[Tuple[bytes, bytes]]:
        """Toutes les paires (clé, valeur), triées par clé."""
        stmt = (
            select(BucketEntry)
            .where(BucketEntry.bucket_id == self.bucket.id)
            .order_by(BucketEntry.key.asc())
        )
        return [(bytes(e.key), bytes(e.value)) for e in self.session.exec(stmt).all()]

    # ---------- WRITE ----------

    def put(self, key: Key, value: bytes) -> None:
        """Crée ou écrase la valeur de la clé."""
        self._ensure_writable()
        raw_key = _as_bytes(key)
        entry = self._entry(raw_key)
        if entry is None:
            entry = BucketEntry(bucket_id=self.bucket.id, key=raw_key, value=value)
        else:
            entry.value = value
            entry.touch()
        self.session.add(entry)
        self.session.flush()

    def delete(self, key: Key) -> None:
        self._ensure_writable()
        entry = self._entry(_as_bytes(key))
        if entry is not None:
            self.session.delete(entry)
            self.session.flush()


class Transaction:
    """
    Vue transactionnelle sur le store.
    writable=False pour les vues ouvertes par `read`.
    """

    def __init__(self, session: Session, *, writable: bool):
        self.session = session
        self.writable = writable

    def _has_bucket_table(self) -> bool:
        return inspect(self.session.connection()).has_table(Bucket.__tablename__)

    def bucket(self, name: str) -> BucketHandle:
        """Lève MissingBucketError si le bucket n'existe pas (différent d'un bucket vide)."""
        if not self._has_bucket_table():
            raise MissingBucketError(name)
        bucket = self.session.exec(select(Bucket).where(Bucket.name == name)).first()
        if bucket is None:
            raise MissingBucketError(name)
        return BucketHandle(self.session, bucket, writable=self.writable)

    def create_bucket_if_not_exists(self, name: str) -> BucketHandle:
        if not self.writable:
            raise RuntimeError(f"cannot create bucket {name} in a read-only transaction")
        bucket = self.session.exec(select(Bucket).where(Bucket.name == name)).first()
        if bucket is None:
            bucket = Bucket(name=name)
            self.session.add(bucket)
            self.session.flush()
        return BucketHandle(self.session, bucket, writable=True)

    def delete_bucket(self, name: str) -> None:
        """Supprime le bucket et toutes ses entrées ; MissingBucketError s'il n'existe pas."""
        handle = self.bucket(name)
        if not self.writable:
            raise RuntimeError(f"cannot delete bucket {name} in a read-only transaction")
        for entry in self.session.exec(select(BucketEntry).where(BucketEntry.bucket_id == handle.bucket.id)).all():
            self.session.delete(entry)
        self.session.delete(handle.bucket)
        self.session.flush()


class TransactionalStore:
    """
    Store clé/valeur transactionnel adossé à un fichier SQLite.

    Non réentrant : un même process ne doit pas imbriquer deux appels.
    """

    def __init__(self, path: str):
        self.path = path

    def update(self, fn: Callable[[Transaction], T]) -> T:
        engine = build_engine(self.path)
        try:
            init_db(engine)
            with Session(engine) as session:
                tx = Transaction(session, writable=True)
                try:
                    for name in WELL_KNOWN_BUCKETS:
                        tx.create_bucket_if_not_exists(name)
                    result = fn(tx)
                    session.commit()
                except Exception:
                    session.rollback()
                    raise
            return result
        finally:
            engine.dispose()

    def read(self, fn: Callable[[Transaction], T]) -> T:
        engine = build_engine(self.path, read_only=True)
        logger.debug("opening store %s in read-only mode", self.path)
        try:
            with Session(engine) as session:
                try:
                    return fn(Transaction(session, writable=False))
                finally:
                    session.rollback()
        finally:
            engine.dispose()
