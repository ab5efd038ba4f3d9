from pathlib import Path

TOKEN_FILENAME = "secret-token"


def prepare_game_dir(game_dir: str | Path, *, new_game: bool) -> None:
    """
    Pour une nouvelle partie : crée le dossier s'il n'existe pas, sinon exige qu'il soit vide
    (seul le token Google est toléré). Rien à vérifier pour une partie existante.
    """
    if not new_game:
        return
    path = Path(game_dir)
    if not path.exists():
        path.mkdir(mode=0o755, parents=True)
        return
    for entry in path.iterdir():
        if entry.name == TOKEN_FILENAME:
            continue
        raise FileExistsError(f"cannot use a non-empty output directory {path} to create a game")
