from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator


# -----------------------------
# Game configuration
# -----------------------------

class GameConfig(BaseModel):
    """
    Paramètres d'une partie, chargés une fois par exécution.
    L'ordre des équipes définit l'ordre des colonnes/lignes des grilles.
    """
    game_name: str = Field(alias="GameName")
    number_of_questions: int = Field(default=0, ge=0, alias="NumberOfQuestions")
    has_warm_up_question: bool = Field(default=False, alias="HasWarmUpQuestion")
    teams: List[str] = Field(default_factory=list, alias="Teams")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("game_name")
    @classmethod
    def game_name_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("game name cannot be empty")
        return v

    @field_validator("teams")
    @classmethod
    def teams_must_be_unique(cls, v: List[str]) -> List[str]:
        if len(set(v)) != len(v):
            raise ValueError("team names must be unique")
        return v


# -----------------------------
# Spreadsheets registry
# -----------------------------

class SpreadsheetRef(BaseModel):
    # format persisté : {"ID": ..., "URL": ...}
    id: str = Field(alias="ID")
    url: str = Field(alias="URL")

    model_config = {"populate_by_name": True, "frozen": True}


class SpreadsheetRegistry(BaseModel):
    manager: Optional[SpreadsheetRef] = None
    teams: Dict[str, SpreadsheetRef] = Field(default_factory=dict)

    def __str__(self) -> str:
        lines = [f"manager: {self.manager.url if self.manager else None}"]
        for team, sheet in self.teams.items():
            lines.append(f"team {team}: {sheet.url}")
        return "\n".join(lines) + "\n"


# -----------------------------
# API
# -----------------------------

class SpreadsheetOut(BaseModel):
    id: str
    url: str


class SpreadsheetRegistryOut(BaseModel):
    manager: Optional[SpreadsheetOut] = None
    teams: Dict[str, SpreadsheetOut]


class TotalOut(BaseModel):
    # team -> nombre de réponses OK
    totals: Dict[str, int]
