"""Grading rules applied to a single student row.

The average is (p1 + p2 + p3) / 30, which lands in [0, 1] for grades out of 10,
while the situation thresholds (5 and 7) are on a 0-10 scale. That is how the
sheet was originally graded, so it is kept as is.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_CEILING, ROUND_DOWN, ROUND_FLOOR, ROUND_HALF_UP
from enum import Enum

from settings import MAXIMUM_ABSENCES

TENTH = Decimal("0.1")


class Situation(Enum):
    FAILED_BY_ABSENCE = "Reprovado por Falta"
    FAILED_BY_GRADE = "Reprovado por Nota"
    FINAL_EXAM = "Exame Final"
    PASSED = "Aprovado"

    def __str__(self):
        return render_situation(self)


def render_situation(situation):
    """Text written to the situation column."""
    return situation.value


@dataclass(frozen=True)
class StudentRecord:
    absences: int
    grade1: int
    grade2: int
    grade3: int


@dataclass(frozen=True)
class GradingResult:
    situation: Situation
    final_exam_threshold: float = 0.0
    average: float = 0.0
    rounded_average: float = 0.0


def round_to_tenth(n):
    """Round n to one decimal place the way the sheet has always been graded.

    The fractional part is first rounded half-up to tenths. When that gives 0.5
    or more, n is rounded up to the next tenth, otherwise down, so 0.45 becomes
    0.5 while 0.35 becomes 0.3. Works on the decimal text of n to avoid binary noise.
    """
    value = Decimal(repr(n))
    fraction = value - value.to_integral_value(rounding=ROUND_DOWN)
    tenths = fraction.quantize(TENTH, rounding=ROUND_HALF_UP)
    rounding = ROUND_CEILING if tenths >= Decimal("0.5") else ROUND_FLOOR
    return float(value.quantize(TENTH, rounding=rounding))


def calculate_average(grade1, grade2, grade3):
    return (grade1 + grade2 + grade3) / 30.0


def determine_situation(absences, average, maximum_absences=MAXIMUM_ABSENCES):
    """Classify a student. The absence check wins over any average."""
    if absences > maximum_absences:
        return Situation.FAILED_BY_ABSENCE
    if average < 5.0:
        return Situation.FAILED_BY_GRADE
    if 5.0 <= average < 7.0:
        return Situation.FINAL_EXAM
    return Situation.PASSED


def calculate_naf(average):
    """Nota para Aprovação Final: the score needed in the final exam.

    Expects the already rounded average.
    """
    return round_to_tenth(10 - average)


def evaluate_row(record, maximum_absences=MAXIMUM_ABSENCES):
    average = calculate_average(record.grade1, record.grade2, record.grade3)
    rounded_average = round_to_tenth(average)
    #Classification uses the raw average, the NAF uses the rounded one.
    situation = determine_situation(record.absences, average, maximum_absences)
    naf = calculate_naf(rounded_average) if situation is Situation.FINAL_EXAM else 0.0
    return GradingResult(situation, naf, average, rounded_average)
