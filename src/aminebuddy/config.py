"""Runtime configuration.

Settings are read from the process environment after loading
``.env.local`` and ``.env`` from the working directory. Values already
present in the environment win over file values.
"""

import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigurationError

DEFAULT_ENV_FILES = (".env.local", ".env")


class ModelSettings(BaseModel):
    """Language model and embedding configuration."""

    model_config = ConfigDict(frozen=True)

    provider: str = Field(default="openai", description="LLM provider name")
    model_name: str = Field(default="gpt-4o-mini", description="Chat model")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    openai_api_key: str | None = Field(default=None, repr=False)
    anthropic_api_key: str | None = Field(default=None, repr=False)
    embedding_model: str = Field(default="text-embedding-3-small")

    @property
    def api_key(self) -> str | None:
        """Key for the configured chat provider."""
        if self.provider.lower() in ("anthropic", "claude"):
            return self.anthropic_api_key
        return self.openai_api_key


class DatabaseSettings(BaseModel):
    """Connection settings for the pgvector knowledge store."""

    model_config = ConfigDict(frozen=True)

    host: str = "localhost"
    port: int = 5433
    database: str = "aminebuddy"
    user: str = "aminebuddy"
    password: str = Field(default="aminebuddy_dev", repr=False)


class RetrievalSettings(BaseModel):
    """Knowledge base retrieval settings."""

    model_config = ConfigDict(frozen=True)

    top_k: int = Field(default=5, ge=1, le=50)
    namespace: str = "default"


class ServerSettings(BaseModel):
    """HTTP server settings."""

    model_config = ConfigDict(frozen=True)

    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class ClientSettings(BaseModel):
    """Settings for the chat widget."""

    model_config = ConfigDict(frozen=True)

    api_url: str = "http://127.0.0.1:8000"
    site_url: str = "https://aminehachemi.com"


class Settings(BaseModel):
    """All configuration sections."""

    model_config = ConfigDict(frozen=True)

    model: ModelSettings = Field(default_factory=ModelSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    client: ClientSettings = Field(default_factory=ClientSettings)
    log_level: str = "INFO"


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


def settings_from_env(env: Mapping[str, str]) -> Settings:
    """Build settings from an environment mapping.

    Args:
        env: Mapping of variable names to values (usually ``os.environ``)

    Returns:
        Parsed settings

    Raises:
        ConfigurationError: If a numeric variable cannot be parsed
    """
    origins = env.get("CORS_ORIGINS", "*")

    return Settings(
        model=ModelSettings(
            provider=env.get("LLM_PROVIDER", "openai"),
            model_name=env.get("LLM_MODEL_NAME", "gpt-4o-mini"),
            temperature=_float(env, "LLM_TEMPERATURE", 0.7),
            openai_api_key=env.get("OPENAI_API_KEY") or None,
            anthropic_api_key=env.get("ANTHROPIC_API_KEY") or None,
            embedding_model=env.get("EMBEDDING_MODEL", "text-embedding-3-small"),
        ),
        database=DatabaseSettings(
            host=env.get("POSTGRES_HOST", "localhost"),
            port=_int(env, "POSTGRES_PORT", 5433),
            database=env.get("POSTGRES_DB", "aminebuddy"),
            user=env.get("POSTGRES_USER", "aminebuddy"),
            password=env.get("POSTGRES_PASSWORD", "aminebuddy_dev"),
        ),
        retrieval=RetrievalSettings(
            top_k=_int(env, "RETRIEVAL_TOP_K", 5),
            namespace=env.get("KNOWLEDGE_NAMESPACE", "default"),
        ),
        server=ServerSettings(
            host=env.get("SERVER_HOST", "127.0.0.1"),
            port=_int(env, "SERVER_PORT", 8000),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        ),
        client=ClientSettings(
            api_url=env.get("BUDDY_API_URL", "http://127.0.0.1:8000"),
            site_url=env.get("SITE_URL", "https://aminehachemi.com"),
        ),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )


def load_settings(env_file: Path | None = None) -> Settings:
    """Load environment files and build settings from ``os.environ``.

    Args:
        env_file: Explicit env file; when omitted ``.env.local`` and
            ``.env`` are tried in that order

    Returns:
        Parsed settings
    """
    if env_file is not None:
        load_dotenv(env_file)
    else:
        for name in DEFAULT_ENV_FILES:
            load_dotenv(Path.cwd() / name)

    return settings_from_env(os.environ)
