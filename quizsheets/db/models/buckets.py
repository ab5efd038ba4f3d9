from sqlmodel import Field
from sqlalchemy import Column, LargeBinary, UniqueConstraint

from quizsheets.db.models.base import BaseModelDB


class Bucket(BaseModelDB, table=True):
    # partition nommée du store (game-configuration, teams-spreadsheets, game-results)
    name: str = Field(index=True, unique=True, nullable=False)


class BucketEntry(BaseModelDB, table=True):
    __table_args__ = (
        UniqueConstraint("bucket_id", "key", name="uq_bucketentry_bucket_key"),
    )

    bucket_id: int = Field(foreign_key="bucket.id", index=True)

    key: bytes = Field(sa_column=Column(LargeBinary, nullable=False))
    value: bytes = Field(sa_column=Column(LargeBinary, nullable=False))
