"""Optional runtime settings.

Every value has a built-in default, so the app runs with no environment set
at all. Each one can be overridden from the environment or a ``.env`` file:

- ``LIBRARY_DATA_FILE``: snapshot path (default ``library.json``)
- ``LIB_CLI_OUTPUT``: plain | json | rich (default ``plain``)
- ``LOG_LEVEL``: logging level name (default ``WARNING``)
- ``APP_NAME``: title shown on the menu
"""
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Settings:
    # Application settings
    app_name: str = os.getenv("APP_NAME", "Library Catalog")
    log_level: str = os.getenv("LOG_LEVEL", "WARNING").upper()

    # Storage settings
    data_file: str = os.getenv("LIBRARY_DATA_FILE", "library.json")

    # CLI settings: plain | json | rich
    output_mode: str = os.getenv("LIB_CLI_OUTPUT", "plain")


settings = Settings()
