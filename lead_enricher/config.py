"""Configuration settings for the Lead Enricher service."""

from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Paths
    base_dir: Path = Path(__file__).parent.parent
    data_dir: Path = base_dir / "data"
    db_path: Path = data_dir / "lead_enricher.db"

    # Side effects: memory-only mode skips cache and persistence entirely
    memory_only: bool = False
    database_url_override: str = ""

    # Cache Settings
    cache_backend: str = "sql"  # memory, sql or redis
    redis_url: str = "redis://localhost:6379/0"
    cache_ttl_seconds: int = 3600

    # Batch Settings
    batch_delay_seconds: float = 1.0  # seconds between companies in a batch

    # Email Generation
    email_top_n: int = Field(default=5, ge=3, le=5)
    email_local_parts: list[str] = [
        "contacto",
        "info",
        "ventas",
        "administracion",
        "gerencia",
        "atencion",
        "comercial",
        "direccion",
        "director",
    ]

    # Discovery Settings
    discovery_provider: str = "synthetic"  # synthetic, duckduckgo or none
    discovery_seed: int = 0
    search_results_per_query: int = 10

    # Server
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3001

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return f"sqlite:///{self.db_path}"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()

# Ensure data directory exists
settings.data_dir.mkdir(parents=True, exist_ok=True)
