import os
from typing import Literal

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings:
    DEFAULT_MIME_TYPE: str
    MAX_FILE_SIZE: int
    LOG_LEVEL: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]
    CORS_ORIGIN_REGEX: str
    HOST: str
    PORT: int

    def __init__(self):
        self.DEFAULT_MIME_TYPE = os.getenv("DEFAULT_MIME_TYPE", "image/png")
        if "/" not in self.DEFAULT_MIME_TYPE:
            raise ValueError(
                f"Invalid DEFAULT_MIME_TYPE: {self.DEFAULT_MIME_TYPE}. Must look like 'type/subtype'."
            )

        self.MAX_FILE_SIZE = int(os.getenv("MAX_FILE_SIZE", 25 * 1024 * 1024))  # 25MB

        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(
                f"Invalid LOG_LEVEL: {log_level}. Must be one of {', '.join(LOG_LEVELS)}."
            )
        self.LOG_LEVEL = log_level

        self.CORS_ORIGIN_REGEX = os.getenv("CORS_ORIGIN_REGEX", r".*")

        self.HOST = os.getenv("HOST", "0.0.0.0")
        self.PORT = int(os.getenv("PORT", 41839))


settings = Settings()
