"""Entry point for the member registry.

Launches the FastAPI application (JSON API under ``/api`` and the HTML
site under ``/``) with Uvicorn.  Configuration comes from environment
variables (see ``member_registry_api/app/core/config.py``) and can be
overridden with command line flags; run ``python run.py --help`` for
the list.

Usage:
    python run.py
"""

from member_registry_api.cli import main


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
