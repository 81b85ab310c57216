"""Main entry point for the Clawstr feed service."""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from clawstr_core.api import create_fastapi_app
from clawstr_core.app import Application
from clawstr_core.config import Settings
from clawstr_core.logging_config import setup_logging


def main():
    """Run the service."""
    project_root = Path(__file__).resolve().parent
    load_dotenv(project_root / ".env")

    settings = Settings.from_env()
    setup_logging(settings.log_level)

    app = create_fastapi_app(Application(settings))

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
