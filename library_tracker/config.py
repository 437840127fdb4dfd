import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Settings:
    # Application settings
    app_name: str = os.getenv("APP_NAME", "Library Tracker")
    debug: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "yes")
    log_level: str = os.getenv("LOG_LEVEL", "ERROR").upper()

    # Storage settings
    data_file: str = os.getenv("LIBRARY_DATA_FILE", "library_data.json")

    # CLI output: plain | json | rich
    output_mode: str = os.getenv("LIB_CLI_OUTPUT", "plain").lower()

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level


settings = Settings()
