import logging
import re

from googleapiclient.errors import HttpError

from errors import ParseError, SheetIOError
from grading import StudentRecord
from settings import VALUE_INPUT_OPTION

logger = logging.getLogger(__name__)

#Absences and grades live in columns C to F, offsets 2 to 5 of a row read from column A.
ABSENCES_INDEX = 2
GRADE_INDEXES = (3, 4, 5)

_CELLS_PATTERN = re.compile(r"^\$?[A-Za-z]*\$?(?P<row>\d*)")


def split_range(sheet_range):
    """Split an A1 range like "tab!A4:F27" into ("tab", 4).

    The tab is None when the range has none, and the first row is 1 when the
    range starts with a whole column ("A:F"). A bare name with no cells, like
    "notas", is a whole tab.
    """
    sheet_name, _, cells = sheet_range.rpartition("!")
    bare_tab = cells.startswith("'") or (":" not in cells and not any(c.isdigit() for c in cells))
    if not sheet_name and bare_tab:
        return cells, 1
    row = _CELLS_PATTERN.match(cells).group("row")
    sheet_name = sheet_name or None
    return sheet_name, int(row) if row else 1


def cell_address(sheet_name, column, row_number):
    cell = f"{column}{row_number}"
    return f"{sheet_name}!{cell}" if sheet_name else cell


def parse_row(row, row_number):
    try:
        absences = int(str(row[ABSENCES_INDEX]).strip())
        grades = [int(str(row[i]).strip()) for i in GRADE_INDEXES]
    except IndexError:
        raise ParseError(f"Row {row_number} has {len(row)} cells, expected at least {GRADE_INDEXES[-1] + 1}", row_number)
    except ValueError as error:
        raise ParseError(f"Row {row_number} holds a non integer value: {error}", row_number)
    return StudentRecord(absences, *grades)


def parse_rows(values, first_row):
    """Yield (sheet row number, StudentRecord) pairs in sheet order."""
    for position, row in enumerate(values):
        row_number = first_row + position
        yield row_number, parse_row(row, row_number)


class SheetStore:
    """Reads ranges from and writes single cells to one spreadsheet."""

    def __init__(self, service, spreadsheet_id, value_input_option=VALUE_INPUT_OPTION):
        self.values = service.spreadsheets().values()
        self.spreadsheet_id = spreadsheet_id
        self.value_input_option = value_input_option

    def read_rows(self, sheet_range):
        try:
            response = self.values.get(spreadsheetId=self.spreadsheet_id, range=sheet_range).execute()
        except HttpError as error:
            raise SheetIOError(f"Could not read {sheet_range}: {error}", error.resp.status) from error
        rows = response.get("values", [])
        logger.info(f"Read {len(rows)} rows from {sheet_range}")
        return rows

    def update_cell(self, sheet_name, column, row_number, value):
        cell = cell_address(sheet_name, column, row_number)
        try:
            self.values.update(
                spreadsheetId=self.spreadsheet_id,
                range=cell,
                valueInputOption=self.value_input_option,
                body={"values": [[value]]},
            ).execute()
        except HttpError as error:
            raise SheetIOError(f"Could not write {cell}: {error}", error.resp.status) from error
        logger.debug(f"Wrote {value!r} to {cell}")
