class SheetsGradesError(Exception):
    pass


class AuthError(SheetsGradesError):
    """Credentials could not be loaded or the OAuth flow failed."""


class SheetIOError(SheetsGradesError):
    """The Sheets API answered a read or write with an HTTP error."""

    def __init__(self, message, status=None):
        super().__init__(message)
        self.status = status


class ParseError(SheetsGradesError, ValueError):
    """A sheet row does not hold integer absences and grades."""

    def __init__(self, message, row_number=None):
        super().__init__(message)
        self.row_number = row_number
