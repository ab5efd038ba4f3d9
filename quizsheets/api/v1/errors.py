from fastapi import HTTPException, status

from quizsheets.core.errors import ErrorKind, QuizSheetsError

_STATUS_BY_KIND = {
    ErrorKind.ROUND_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.LAYOUT_CONSTRAINT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNKNOWN_TEAM: status.HTTP_409_CONFLICT,
    ErrorKind.SERIALIZATION: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.MISSING_BUCKET: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def http_error(e: QuizSheetsError) -> HTTPException:
    """Erreur du cœur -> HTTPException, selon son kind."""
    return HTTPException(
        status_code=_STATUS_BY_KIND[e.kind],
        detail={"kind": e.kind.value, "message": str(e)},
    )
