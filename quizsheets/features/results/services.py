from typing import Dict, Mapping

from quizsheets.core.errors import UnknownTeamError
from quizsheets.features.results.schemas import ResponseStatus, RoundResponse, RoundResults

# symboles saisis par l'opérateur pendant la correction
_STATUS_INPUTS: Dict[str, ResponseStatus] = {
    "+": ResponseStatus.OK,
    "-": ResponseStatus.KO,
    "?": ResponseStatus.IN_QUESTION,
    "": ResponseStatus.NOT_CHECKED,
}


def parse_status(symbol: str) -> ResponseStatus:
    """Lève ValueError pour un symbole inconnu."""
    try:
        return _STATUS_INPUTS[symbol.strip()]
    except KeyError:
        raise ValueError(f"unknown status {symbol!r}, expected one of '+', '-', '?' or ''") from None


def new_round_results(round_: int, responses: Mapping[str, str]) -> RoundResults:
    """Résultats fraîchement récupérés : toutes les réponses repartent en NOT_CHECKED."""
    return RoundResults(
        round=round_,
        results={
            team: RoundResponse(response=response, status=ResponseStatus.NOT_CHECKED)
            for team, response in responses.items()
        },
    )


def grade_round(results: RoundResults, decisions: Mapping[str, ResponseStatus]) -> RoundResults:
    """
    Applique les décisions de correction et renvoie un nouvel enregistrement.
    Les équipes sans décision gardent leur statut ; une décision pour une équipe
    absente du tour lève UnknownTeamError.
    """
    graded = results.model_copy(deep=True)
    for team, status in decisions.items():
        if team not in graded.results:
            raise UnknownTeamError(team)
        graded.results[team].status = ResponseStatus(status)
    return graded
