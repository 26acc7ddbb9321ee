"""
Configuration: engine settings and the static language table.
"""

import os

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_MARKDOWN_EXTENSIONS = ("fenced_code", "tables", "codehilite", "toc")


class LanguageInfo(BaseModel):
    """Editor metadata for a scripting language."""
    model_config = ConfigDict(frozen=True)

    language_id: str
    display_name: str
    editor_mode: str
    file_extension: str


# Read-only; copied onto every new Notebook.
LANGUAGES: dict[str, LanguageInfo] = {
    "py": LanguageInfo(
        language_id="py",
        display_name="Python",
        editor_mode="python",
        file_extension="py",
    ),
}


class Settings(BaseModel):
    """Engine settings, overridable through ``NBSTATE_*`` environment variables."""
    model_config = ConfigDict(frozen=True)

    comment_marker: str = Field(default="#", min_length=1)
    markdown_extensions: tuple[str, ...] = DEFAULT_MARKDOWN_EXTENSIONS
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Build settings from the environment, falling back to defaults."""
        environ = os.environ if environ is None else environ
        data = {}
        if environ.get("NBSTATE_COMMENT_MARKER"):
            data["comment_marker"] = environ["NBSTATE_COMMENT_MARKER"]
        if environ.get("NBSTATE_MARKDOWN_EXTENSIONS") is not None:
            raw = environ["NBSTATE_MARKDOWN_EXTENSIONS"]
            data["markdown_extensions"] = tuple(e.strip() for e in raw.split(",") if e.strip())
        if environ.get("NBSTATE_LOG_LEVEL"):
            data["log_level"] = environ["NBSTATE_LOG_LEVEL"].upper()
        return cls(**data)
