from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from quizsheets.core.errors import LayoutConstraintError

# Colonnes adressables sur une seule lettre : A..Z
MAX_COLUMN_INDEX = ord("Z") - ord("A")


def column_letter(index: int) -> str:
    """Lettre de colonne pour un index 0-based (0 -> A). Refuse tout dépassement de Z."""
    if index < 0 or index > MAX_COLUMN_INDEX:
        raise LayoutConstraintError(f"column index {index} does not fit in a single letter", index)
    return chr(ord("A") + index)


# ==========================================================
# Plages
# ==========================================================

@dataclass(frozen=True)
class CellRange:
    """
    Rectangle de cellules d'une feuille.
    Index 0-based ; start inclus, end exclu (comme une GridRange de l'API Sheets).
    """
    start_column: int
    start_row: int
    end_column: int
    end_row: int

    @property
    def width(self) -> int:
        return self.end_column - self.start_column

    @property
    def height(self) -> int:
        return self.end_row - self.start_row

    def to_a1(self) -> str:
        """Ex : CellRange(0, 0, 3, 4) -> "A1:C4"."""
        return (
            f"{column_letter(self.start_column)}{self.start_row + 1}:"
            f"{column_letter(self.end_column - 1)}{self.end_row}"
        )

    def to_grid_range(self, sheet_id: int = 0) -> Dict[str, int]:
        return {
            "sheetId": sheet_id,
            "startRowIndex": self.start_row,
            "endRowIndex": self.end_row,
            "startColumnIndex": self.start_column,
            "endColumnIndex": self.end_column,
        }


@dataclass(frozen=True)
class QuestionGroup:
    """
    Lot de questions rendues ensemble.
    current_question_index : index courant avant le lot (-1 pour l'échauffement).
    """
    index: int
    length: int
    current_question_index: int

    @property
    def labels(self) -> List[int]:
        # numéros de tour affichés : 0 pour l'échauffement, puis 1..Q
        start = self.current_question_index + 1
        return list(range(start, start + self.length))


# ==========================================================
# Valeurs de cellules
# ==========================================================

@dataclass(frozen=True)
class TextCell:
    text: str

    def to_api(self) -> Any:
        return self.text


@dataclass(frozen=True)
class NumberCell:
    number: Union[int, float]

    def to_api(self) -> Any:
        return self.number


@dataclass(frozen=True)
class FormulaCell:
    formula: str

    def to_api(self) -> Any:
        return self.formula


CellValue = Union[TextCell, NumberCell, FormulaCell]


def cell_from_api(raw: Any) -> CellValue:
    """Valeur brute renvoyée par l'API -> variante typée."""
    if isinstance(raw, bool):
        return TextCell("TRUE" if raw else "FALSE")
    if isinstance(raw, (int, float)):
        return NumberCell(raw)
    text = str(raw)
    if text.startswith("="):
        return FormulaCell(text)
    return TextCell(text)


@dataclass
class ValueRange:
    """Plage + matrice de valeurs à écrire en un bloc."""
    range: CellRange
    values: List[List[CellValue]] = field(default_factory=list)
    major_dimension: str = "ROWS"  # ROWS | COLUMNS

    def to_api(self) -> Dict[str, Any]:
        return {
            "range": self.range.to_a1(),
            "majorDimension": self.major_dimension,
            "values": [[cell.to_api() for cell in line] for line in self.values],
        }
