"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
registry runs out of the box with a database under ``./data``.  The
command line front‑end (:mod:`member_registry_api.cli`) builds on top
of these values and overrides individual fields from flags.
"""

import os
from dataclasses import dataclass
from pathlib import Path


# Templates shipped with the package.  Used when ``TEMPLATE_DIR`` is not set.
DEFAULT_TEMPLATE_DIR = str(Path(__file__).resolve().parent.parent / "templates")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Member Registry")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional log file.  Empty means console logging only.
    log_file: str = os.getenv("LOG_FILE", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))

    # Directory and file name of the embedded database.  A relative
    # directory is resolved against the current working directory.
    database_dir: str = os.getenv("DATABASE_DIR", "data")
    database_file: str = os.getenv("DATABASE_FILE", "members.db")
    bucket: str = os.getenv("MEMBERS_BUCKET", "members")

    template_dir: str = os.getenv("TEMPLATE_DIR", DEFAULT_TEMPLATE_DIR)

    # Feature toggles for the two front‑ends.
    enable_api: bool = _env_flag("ENABLE_API", "true")
    enable_site: bool = _env_flag("ENABLE_SITE", "true")

    @property
    def database_path(self) -> str:
        """Absolute path of the database file."""
        return str((Path(self.database_dir) / self.database_file).resolve())


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
