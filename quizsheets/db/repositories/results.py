import logging
from typing import Dict, Sequence

from quizsheets.core.errors import MissingBucketError, RoundNotFoundError, UnknownTeamError
from quizsheets.db.repositories.base import BaseRepository
from quizsheets.db.store import BUCKET_GAME_RESULTS, Transaction
from quizsheets.features.results.schemas import ResponseStatus, RoundResults

logger = logging.getLogger(__name__)


class RoundResultsLedger(BaseRepository):
    """
    Résultats par tour, stockés sous la clé décimale du numéro de tour.
    Un enregistrement par tour, réécrit en entier à chaque sauvegarde.
    """

    def save_round(self, results: RoundResults) -> None:
        def _save(tx: Transaction) -> None:
            tx.bucket(BUCKET_GAME_RESULTS).put(
                str(results.round),
                self._encode(RoundResults, results),
            )

        self.store.update(_save)

    def get_round(self, round_: int) -> RoundResults:
        """
        - bucket absent (store neuf) -> enregistrement vide, sans erreur
        - clé absente -> RoundNotFoundError(round_)
        - contenu illisible -> SerializationError
        """
        def _get(tx: Transaction) -> RoundResults:
            try:
                bucket = tx.bucket(BUCKET_GAME_RESULTS)
            except MissingBucketError:
                logger.debug("bucket %s is missing, returning empty round %d", BUCKET_GAME_RESULTS, round_)
                return RoundResults(round=round_)
            raw = bucket.get(str(round_))
            if not raw:
                raise RoundNotFoundError(round_)
            return self._decode(RoundResults, raw)

        return self.store.read(_get)

    def total(self, teams: Sequence[str], number_of_questions: int, has_warm_up_question: bool) -> Dict[str, int]:
        """
        Compte, par équipe, les tours dont le statut est OK.
        Le tour d'échauffement (0) n'est pas compté ; un tour jamais récupéré compte pour zéro.
        Les tours comptés vont jusqu'à number_of_questions - 1 : le dernier tour (number_of_questions),
        bien que récupérable et corrigeable, n'entre pas dans le total.
        """
        totals = {team: 0 for team in teams}
        first_round = 1 if has_warm_up_question else 0
        for round_ in range(first_round, number_of_questions):
            try:
                results = self.get_round(round_)
            except RoundNotFoundError:
                logger.debug("round %d is not fetched yet, skipped in total", round_)
                continue
            for team, response in results.results.items():
                if team not in totals:
                    raise UnknownTeamError(team)
                if response.status == ResponseStatus.OK:
                    totals[team] += 1
        return totals
