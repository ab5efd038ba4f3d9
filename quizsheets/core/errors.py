"""
Exceptions métier du quiz.

Chaque erreur porte un `kind` (ErrorKind) : les appelants testent le type d'erreur
via `err.kind`, jamais via le texte du message.
"""

from enum import Enum


class ErrorKind(str, Enum):
    MISSING_BUCKET = "missing-bucket"
    ROUND_NOT_FOUND = "round-not-found"
    SERIALIZATION = "serialization"
    LAYOUT_CONSTRAINT = "layout-constraint"
    UNKNOWN_TEAM = "unknown-team"


class QuizSheetsError(Exception):
    """Base de toutes les erreurs du cœur."""
    kind: ErrorKind


# ============ Store ============

class MissingBucketError(QuizSheetsError):
    """Le bucket demandé n'existe pas (différent d'un bucket vide)."""
    kind = ErrorKind.MISSING_BUCKET

    def __init__(self, bucket: str):
        self.bucket = bucket
        super().__init__(f"bucket {bucket} does not exist")


class SerializationError(QuizSheetsError):
    """Encodage/décodage impossible : store corrompu ou incompatible."""
    kind = ErrorKind.SERIALIZATION

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


# ============ Résultats ============

class RoundNotFoundError(QuizSheetsError):
    """Aucun résultat enregistré pour ce tour (cas normal, ex : tour jamais récupéré)."""
    kind = ErrorKind.ROUND_NOT_FOUND

    def __init__(self, round_: int):
        self.round = round_
        super().__init__(f"round {round_} results are not found")


class UnknownTeamError(QuizSheetsError):
    """Un résultat référence une équipe absente de la configuration."""
    kind = ErrorKind.UNKNOWN_TEAM

    def __init__(self, team: str):
        self.team = team
        super().__init__(f"team {team} is unknown")


# ============ Mise en page ============

class LayoutConstraintError(QuizSheetsError):
    """Plage impossible à calculer (groupe trop long, tour hors bornes...)."""
    kind = ErrorKind.LAYOUT_CONSTRAINT

    def __init__(self, message: str, value: int):
        self.value = value
        super().__init__(message)
