#Reads absences and grades from the "engenharia_de_software" sheet and writes each student's
#situation (column G) and the score needed in the final exam (column H) back to it, row by row.
#Absences above MAXIMUM_ABSENCES (15 by default) mean the student failed regardless of grades.

import logging
import sys

from googleapiclient.discovery import build
from pydantic import ValidationError

from auth import get_credentials
from errors import AuthError, ParseError, SheetIOError
from grading import Situation, evaluate_row, render_situation
from settings import MAXIMUM_ABSENCES, NAF_COLUMN, SHEET_RANGE, SITUATION_COLUMN, get_settings
from sheet_store import SheetStore, parse_rows, split_range

logger = logging.getLogger(__name__)

EXIT_AUTH_ERROR = 1
EXIT_IO_ERROR = 2
EXIT_PARSE_ERROR = 3
EXIT_CONFIG_ERROR = 4


def grade_sheet(store, sheet_range=SHEET_RANGE, maximum_absences=MAXIMUM_ABSENCES):
    """Grade every row of sheet_range and write the results next to it.

    Returns the number of rows written.
    """
    values = store.read_rows(sheet_range)
    if not values:
        logger.info("No data found.")
        return 0
    sheet_name, first_row = split_range(sheet_range)

    written = 0
    for row_number, record in parse_rows(values, first_row):
        result = evaluate_row(record, maximum_absences)
        logger.info(
            f"Row {row_number}: average {result.rounded_average}, "
            f"{result.situation}, NAF {result.final_exam_threshold}"
        )
        naf = result.final_exam_threshold if result.situation is Situation.FINAL_EXAM else 0
        store.update_cell(sheet_name, SITUATION_COLUMN, row_number, render_situation(result.situation))
        store.update_cell(sheet_name, NAF_COLUMN, row_number, naf)
        written += 1
    logger.info(f"Updated {written} rows")
    return written


def main():
    try:
        settings = get_settings()
    except ValidationError as error:
        logging.basicConfig()
        logger.error(f"Invalid settings: {error}")
        return EXIT_CONFIG_ERROR
    logging.basicConfig(level=settings.log_level)
    try:
        credentials = get_credentials(settings.token_file, settings.credentials_file)
        service = build("sheets", "v4", credentials=credentials)
        store = SheetStore(service, settings.spreadsheet_id)
        grade_sheet(store, settings.sheet_range, settings.maximum_absences)
    except AuthError as error:
        logger.error(error)
        return EXIT_AUTH_ERROR
    except SheetIOError as error:
        logger.error(f"Sheets API error (HTTP {error.status}): {error}")
        return EXIT_IO_ERROR
    except ParseError as error:
        logger.error(error)
        return EXIT_PARSE_ERROR
    return 0


if __name__ == "__main__":
    sys.exit(main())
