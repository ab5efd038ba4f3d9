from pathlib import Path

import yaml
from pydantic import ValidationError

from quizsheets.features.games.schemas import GameConfig


def load_game_config(config_path: str | Path) -> GameConfig:
    """
    Charge la configuration de la partie (JSON, ou YAML qui en est un sur-ensemble).
    Clés attendues : GameName, NumberOfQuestions, HasWarmUpQuestion, Teams.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(
            f"configuration file {path} could not be opened, please make sure that the file exists"
        )

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("The game configuration must contain a root object (mapping).")
    try:
        return GameConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"invalid game configuration {path}: {e}") from e
