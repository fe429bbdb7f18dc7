"""Application settings and shared constants."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

READ = "read"
WRITE = "write"
CLONE = "clone"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    app_name: str = "Style BOM Studio"
    id_baseline: int = 10000
    enforce_references: bool = False
    simulate_latency: bool = False
    read_latency_ms: int = 200
    write_latency_ms: int = 300
    clone_latency_ms: int = 500
    log_level: str = "INFO"

    @field_validator("id_baseline")
    @classmethod
    def validate_id_baseline(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("id_baseline must be positive")
        return v

    @field_validator("read_latency_ms", "write_latency_ms", "clone_latency_ms")
    @classmethod
    def validate_latency(cls, v: int) -> int:
        if v < 0:
            raise ValueError("latency must be zero or positive")
        return v

    def latency_seconds(self, operation_class: str) -> float:
        delays = {
            READ: self.read_latency_ms,
            WRITE: self.write_latency_ms,
            CLONE: self.clone_latency_ms,
        }
        return delays[operation_class] / 1000.0


@lru_cache
def get_settings() -> Settings:
    return Settings()
