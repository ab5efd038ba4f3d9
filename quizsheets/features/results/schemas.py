from enum import IntEnum
from typing import Dict
from pydantic import BaseModel, Field


class ResponseStatus(IntEnum):
    """
    Statut de correction d'une réponse.
    Persisté en entier ; le symbole ne sert qu'à l'affichage.
    """
    OK = 1
    KO = 2
    IN_QUESTION = 3
    NOT_CHECKED = 4

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {
    ResponseStatus.OK: "+",
    ResponseStatus.KO: "-",
    ResponseStatus.IN_QUESTION: "?",
    ResponseStatus.NOT_CHECKED: "{}",
}


class RoundResponse(BaseModel):
    response: str = Field(default="", alias="Response")
    status: ResponseStatus = Field(default=ResponseStatus.NOT_CHECKED, alias="Status")

    model_config = {"populate_by_name": True}


class RoundResults(BaseModel):
    # format persisté : {"Round": 3, "Results": {"team": {"Response": "...", "Status": 4}}}
    round: int = Field(default=0, alias="Round")
    results: Dict[str, RoundResponse] = Field(default_factory=dict, alias="Results")

    model_config = {"populate_by_name": True}

    def __str__(self) -> str:
        lines = [f"Round {self.round} results:"]
        for team, result in self.results.items():
            lines.append(f"\t team {team}: {result.response}\t{result.status.symbol}")
        return "\n".join(lines) + "\n"


# -----------------------------
# API
# -----------------------------

class RoundResponseOut(BaseModel):
    response: str
    status: str  # symbole d'affichage


class RoundResultsOut(BaseModel):
    round: int
    results: Dict[str, RoundResponseOut]


class RoundCheckIn(BaseModel):
    """
    Décisions de correction : team -> symbole.
    "+" OK, "-" KO, "?" en question, "" non corrigé.
    """
    decisions: Dict[str, str] = Field(default_factory=dict, examples=[{"Alpha": "+", "Beta": "-"}])
