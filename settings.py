"""Sheet, credentials and grading settings, overridable through environment variables or a .env file."""
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

SPREADSHEET_ID = "14umGRUJ3cWCMU0wnz4xm6K6ZGEYuTkNnhTBXFJu3xfU"
#Rows 4 to 27, columns A to F. Only C (absences) to F (third grade) are read by the grading.
SHEET_RANGE = "engenharia_de_software!A4:F27"

MAXIMUM_ABSENCES = 15

TOKEN_FILE = "token.json"
CREDENTIALS_FILE = "credentials.json"

SITUATION_COLUMN = "G"
NAF_COLUMN = "H"
VALUE_INPUT_OPTION = "RAW"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Run settings loaded from environment variables."""

    spreadsheet_id: str = SPREADSHEET_ID
    sheet_range: str = SHEET_RANGE
    maximum_absences: int = MAXIMUM_ABSENCES
    token_file: str = TOKEN_FILE
    credentials_file: str = CREDENTIALS_FILE
    log_level: str = "INFO"

    class Config:
        env_file = str(Path(__file__).parent / ".env")
        case_sensitive = False

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value):
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
