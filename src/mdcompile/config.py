"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:        str  = "mdcompile"
    root_dir:        str  = Field(default=".",             description="Root that source/destination dirs are joined onto")
    source_dir:      str  = Field(default="articles",      description="Directory containing the collection's .md files")
    destination_dir: str  = Field(default="dist/articles", description="Directory for .html, .preview.html and .json output")
    collection_key:  str  = Field(default="articles",      description="Plural collection name; singularized for the metadata key")
    parser_config:   str  = Field(default="gfm-like",      description="MarkdownIt parser preset name")
    linkify:         bool = Field(default=True,            description="Autolink bare URLs in the body")
    highlight_css_class:     str  = Field(default="highlight", description="CSS class on highlighted code wrappers")
    highlight_inline_styles: bool = Field(default=False,       description="Emit inline styles instead of CSS classes")
    log_level:       str  = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$")

    @field_validator("collection_key")
    @classmethod
    def _plural_key(cls, v: str) -> str:
        """The key names the collection and, singularized, the metadata wrapper; it cannot be blank."""
        v = v.strip()
        if not v:
            raise ValueError("collection_key must be a non-empty plural name, e.g. 'articles'")
        return v

    @field_validator("source_dir", "destination_dir")
    @classmethod
    def _non_blank_dir(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("directory must not be empty")
        return v


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDCOMPILE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    # MDCOMPILE_COLLECTION_KEY=pages etc.; pydantic coerces the strings
    for name in Settings.model_fields:
        if val := os.getenv(f"MDCOMPILE_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
