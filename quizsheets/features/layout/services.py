"""
➡️ But : Calculer la mise en page des grilles de réponses (manager, équipes, liens).

LayoutEngine : arithmétique pure à partir de (nombre de questions, échauffement, nombre d'équipes).
Aucun état distant ni persisté.

Règle de découpage : l'échauffement forme un groupe de 1, puis les questions sont
consommées par lots de 12, le dernier lot contenant le reste.

🔹 Avantages :

Les plages écrites (création) et relues (fetch d'un tour) viennent du même calcul.

Testable sans API Google ni store.
"""

from typing import List, Tuple

from quizsheets.core.errors import LayoutConstraintError
from quizsheets.features.games.schemas import GameConfig
from quizsheets.features.layout.schemas import CellRange, MAX_COLUMN_INDEX, QuestionGroup

BATCH_SIZE = 12

# Longueur max d'un groupe : la dernière colonne ne doit pas dépasser Z.
# Les grilles manager/équipe vont de A à A+longueur, les liens de B à B+longueur.
MAX_GRID_GROUP_LENGTH = MAX_COLUMN_INDEX          # 25
MAX_LINK_GROUP_LENGTH = MAX_COLUMN_INDEX - 1      # 24


class LayoutEngine:
    def __init__(self, number_of_questions: int, has_warm_up_question: bool, team_count: int):
        if number_of_questions < 0:
            raise ValueError("number of questions cannot be negative")
        if team_count < 0:
            raise ValueError("team count cannot be negative")
        self.number_of_questions = number_of_questions
        self.has_warm_up_question = has_warm_up_question
        self.team_count = team_count

    @classmethod
    def from_config(cls, config: GameConfig) -> "LayoutEngine":
        return cls(
            number_of_questions=config.number_of_questions,
            has_warm_up_question=config.has_warm_up_question,
            team_count=len(config.teams),
        )

    # -----------------------------------
    # Groupes
    # -----------------------------------
    def groups(self) -> List[QuestionGroup]:
        groups: List[QuestionGroup] = []
        current = -1
        if self.has_warm_up_question:
            groups.append(QuestionGroup(index=len(groups), length=1, current_question_index=current))
        # la première vraie question est toujours d'index 0, échauffement ou non
        current = 0

        for _ in range(self.number_of_questions // BATCH_SIZE):
            groups.append(QuestionGroup(index=len(groups), length=BATCH_SIZE, current_question_index=current))
            current += BATCH_SIZE

        rem = self.number_of_questions % BATCH_SIZE
        if rem:
            groups.append(QuestionGroup(index=len(groups), length=rem, current_question_index=current))
        return groups

    @property
    def is_empty(self) -> bool:
        return self.number_of_questions == 0 and not self.has_warm_up_question

    # -----------------------------------
    # Plages par groupe
    # -----------------------------------
    @staticmethod
    def _check_length(length: int, max_length: int) -> None:
        if length < 1:
            raise LayoutConstraintError(f"group length must be positive, got {length}", length)
        if length > max_length:
            raise LayoutConstraintError(
                f"group length must be inferior to {max_length + 1}, got {length}", length
            )

    def _block_height(self) -> int:
        # ligne d'en-tête + une ligne par équipe + une ligne d'écart
        return self.team_count + 2

    def manager_range(self, group_index: int, length: int) -> CellRange:
        """Colonne des équipes + une colonne par question, blocs empilés verticalement."""
        self._check_length(length, MAX_GRID_GROUP_LENGTH)
        start_row = group_index * self._block_height()
        return CellRange(
            start_column=0,
            start_row=start_row,
            end_column=length + 1,
            end_row=start_row + self.team_count + 2,
        )

    def team_range(self, group_index: int, length: int) -> CellRange:
        """Ligne des numéros de question + ligne des réponses, blocs espacés d'une ligne."""
        self._check_length(length, MAX_GRID_GROUP_LENGTH)
        start_row = group_index * 3
        return CellRange(
            start_column=0,
            start_row=start_row,
            end_column=length + 1,
            end_row=start_row + 2,
        )

    def link_range(self, group_index: int, length: int) -> CellRange:
        """Cellules du manager qui importent les réponses des équipes (à partir de B, sous l'en-tête)."""
        self._check_length(length, MAX_LINK_GROUP_LENGTH)
        start_row = group_index * self._block_height() + 1
        return CellRange(
            start_column=1,
            start_row=start_row,
            end_column=length + 2,
            end_row=start_row + self.team_count + 1,
        )

    def team_border_ranges(self) -> List[CellRange]:
        """Blocs (numéros + réponses) d'une feuille d'équipe, encadrés à la création."""
        return [
            CellRange(start_column=0, start_row=g.index * 3, end_column=g.length, end_row=g.index * 3 + 2)
            for g in self.groups()
        ]

    # -----------------------------------
    # Tour -> plage du manager
    # -----------------------------------
    def round_position(self, round_: int) -> Tuple[int, int]:
        """
        (index du groupe de questions numérotées, colonne dans le bloc) pour un tour > 0.
        La colonne 0 est celle des noms d'équipes ; un reste nul revient à la dernière colonne.
        """
        group_index = (round_ - 1) // BATCH_SIZE
        column = round_ % BATCH_SIZE or BATCH_SIZE
        return group_index, column

    def round_range(self, round_: int) -> CellRange:
        """Plage des réponses de toutes les équipes pour un tour, dans la grille du manager."""
        if round_ < 0 or round_ > self.number_of_questions:
            raise LayoutConstraintError(
                f"round {round_} is out of range [0; {self.number_of_questions}]", round_
            )
        if round_ == 0:
            if not self.has_warm_up_question:
                raise LayoutConstraintError(
                    f"round {round_} is invalid as the game does not have a warm-up question", round_
                )
            return CellRange(start_column=1, start_row=1, end_column=2, end_row=self.team_count + 1)

        first_group_row = self._block_height() if self.has_warm_up_question else 0
        group_index, column = self.round_position(round_)
        group_row = first_group_row + group_index * self._block_height()
        return CellRange(
            start_column=column,
            start_row=group_row + 1,
            end_column=column + 1,
            end_row=group_row + self.team_count + 1,
        )
