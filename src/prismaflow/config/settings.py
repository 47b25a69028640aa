"""Configuration management using Pydantic Settings."""

from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PRISMAFLOW_",
        case_sensitive=False,
        extra="ignore",
    )

    # Directories
    output_dir: Path = Field(Path("output"))

    # Logging
    log_level: str = Field("INFO")
    log_format: str = Field("json", pattern="^(json|text)$")

    # Rendering
    layout_engine: str = Field("neato", description="Graphviz engine used for static export")
    viz_js_url: str = Field(
        "https://unpkg.com/@viz-js/viz@3.2.4/lib/viz-standalone.js",
        description="viz.js build used by the HTML widget to lay out the diagram in the browser",
    )


# Instantiate global settings
settings = Settings()
