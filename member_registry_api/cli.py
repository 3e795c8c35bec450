"""
Command line entry point for the Member Registry.

Flags override the environment‑derived :class:`Settings`; anything not
given on the command line keeps its environment (or default) value.

Usage:
    python run.py --port 8080 --db-dir ./data --template-dir ./templates
    python run.py --no-site          # JSON API only
"""

import argparse
import dataclasses
from typing import List, Optional

from uvicorn import Config, Server

from member_registry_api.app.core.config import Settings, settings as default_settings
from member_registry_api.app.main import create_app


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Run the member registry (JSON API and HTML site).")
    ap.add_argument("--host", help="Interface to listen on")
    ap.add_argument("--port", type=int, help="Port to listen on")
    ap.add_argument("--db-dir", dest="database_dir", help="Directory holding the database file")
    ap.add_argument("--db-file", dest="database_file", help="Database file name")
    ap.add_argument("--template-dir", dest="template_dir", help="Directory with index.html and error.html")
    ap.add_argument("--log-level", dest="log_level", help="Logging level (DEBUG, INFO, ...)")
    ap.add_argument("--log-file", dest="log_file", help="Also write logs to this file")
    ap.add_argument("--no-api", dest="enable_api", action="store_false", default=None,
                    help="Do not serve the JSON API")
    ap.add_argument("--no-site", dest="enable_site", action="store_false", default=None,
                    help="Do not serve the HTML site")
    return ap


def settings_from_args(argv: Optional[List[str]] = None, base: Optional[Settings] = None) -> Settings:
    """Parse ``argv`` and return ``base`` with the given flags applied."""
    args = build_parser().parse_args(argv)
    overrides = {key: value for key, value in vars(args).items() if value is not None}
    return dataclasses.replace(base or default_settings, **overrides)


def main(argv: Optional[List[str]] = None) -> None:
    settings = settings_from_args(argv)
    app = create_app(settings)
    config = Config(app=app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    server = Server(config)
    server.run()


if __name__ == "__main__":
    main()
