"""
Configuration management with environment variable support and validation.

Design principles:
- Environment-specific configs (dev, staging, prod)
- Validation at startup (fail fast)
- Type safety with Pydantic
- Safe defaults: a local SQLite file unless another storage URL is configured
"""

import os
from functools import lru_cache
from typing import Literal, cast

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

from healthstore.services.routes import KINDS_BY_KEY

# Load environment variables from .env file
load_dotenv()


class StorageConfig(BaseModel):
    """Backing store and request simulation settings."""

    url: str = Field(
        default="sqlite:///./healthstore.db",
        description="Backing store URL: sqlite:///<path> or memory://",
    )
    key_prefix: str = Field(
        default="", description="Namespace prepended to every collection key"
    )
    latency_seconds: float = Field(
        default=0.1, ge=0.0, le=10.0, description="Artificial latency applied to every API call"
    )

    @field_validator("url")
    def validate_url(cls, v: str) -> str:
        if v != "memory://" and not v.startswith("sqlite:///"):
            raise ValueError("storage url must be 'memory://' or start with 'sqlite:///'")
        return v


class DemoConfig(BaseModel):
    """Demo identities and fixture seeding."""

    demo_prefix: str = Field(
        default="demo-", min_length=1, description="Identity prefix with shared fixture visibility"
    )
    demo_owner_id: str = Field(
        default="demo-patient-1", description="Owner id stamped on seeded fixtures"
    )
    auto_seed: bool = Field(
        default=True, description="Seed the auto-seed collections on first access"
    )
    auto_seed_collections: list[str] = Field(
        default_factory=lambda: ["prescriptions", "insurance_policies"],
        description="Collections seeded on first access when auto_seed is on",
    )

    @field_validator("auto_seed_collections")
    def validate_collections(cls, v: list[str]) -> list[str]:
        unknown = [key for key in v if key not in KINDS_BY_KEY]
        if unknown:
            raise ValueError(f"Unknown collections: {', '.join(unknown)}")
        return v

    @model_validator(mode="after")
    def owner_uses_demo_prefix(self) -> "DemoConfig":
        """Seeded fixtures are only shared if their owner is a demo identity."""
        if not self.demo_owner_id.startswith(self.demo_prefix):
            raise ValueError("demo_owner_id must start with demo_prefix")
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    format: Literal["json", "console"] = Field(default="json", description="Logging format")


class AppConfig(BaseModel):
    """Main application configuration combining all subsystems."""

    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    storage: StorageConfig = Field(default_factory=StorageConfig)
    demo: DemoConfig = Field(default_factory=DemoConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def debug_only_in_dev(self) -> "AppConfig":
        """Ensure debug mode is only allowed in development environment."""
        if self.debug and self.environment != "development":
            raise ValueError("debug mode is only allowed in development environment")
        return self


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables with validation."""

    def _env_to_literal(val: str) -> Literal["development", "staging", "production"]:
        v = val.strip().lower()
        if v in {"dev", "development"}:
            return "development"
        if v in {"stage", "staging"}:
            return "staging"
        return "production"

    def _level_to_literal(val: str) -> Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        v = val.strip().upper()
        return cast(
            Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            v if v in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else "INFO",
        )

    def _parse_bool(val: str | None, default: bool) -> bool:
        if val is None:
            return default
        return val.strip().lower() in {"1", "true", "yes", "on"}

    def _parse_list(val: str | None, default: list[str]) -> list[str]:
        if val is None:
            return default
        return [item.strip() for item in val.split(",") if item.strip()]

    environment = _env_to_literal(os.getenv("ENVIRONMENT", "development"))
    debug = environment == "development"

    storage_config = StorageConfig(
        url=os.getenv("STORAGE_URL", "sqlite:///./healthstore.db"),
        key_prefix=os.getenv("STORAGE_KEY_PREFIX", ""),
        latency_seconds=float(os.getenv("SIMULATED_LATENCY_SECONDS", "0.1")),
    )

    demo_config = DemoConfig(
        demo_prefix=os.getenv("DEMO_PREFIX", "demo-"),
        demo_owner_id=os.getenv("DEMO_OWNER_ID", "demo-patient-1"),
        auto_seed=_parse_bool(os.getenv("DEMO_AUTO_SEED"), True),
        auto_seed_collections=_parse_list(
            os.getenv("DEMO_AUTO_SEED_COLLECTIONS"), ["prescriptions", "insurance_policies"]
        ),
    )

    log_format = os.getenv("LOG_FORMAT", "console" if debug else "json").strip().lower()
    logging_config = LoggingConfig(
        level=_level_to_literal(os.getenv("LOG_LEVEL", "INFO")),
        format="console" if log_format == "console" else "json",
    )

    return AppConfig(
        environment=environment,
        debug=debug,
        storage=storage_config,
        demo=demo_config,
        logging=logging_config,
    )


@lru_cache
def get_config() -> AppConfig:
    """Get cached application configuration."""
    return load_config_from_env()


def validate_config() -> None:
    """Validate configuration at startup."""
    try:
        config = get_config()
        print(f"Configuration loaded for {config.environment} environment")
        print(f"Backing store: {config.storage.url}")
    except Exception as e:
        print(f"Configuration validation failed: {e}")
        raise


def print_config_summary() -> None:
    """Print configuration summary for debugging."""
    config = get_config()

    print("\nCONFIGURATION SUMMARY")
    print(f"Environment: {config.environment}")
    print(f"Debug Mode: {config.debug}")
    print(f"Log Level: {config.logging.level} ({config.logging.format})")

    print("\nSTORAGE")
    print(f"URL: {config.storage.url}")
    print(f"Key Prefix: {config.storage.key_prefix or '(none)'}")
    print(f"Simulated Latency: {config.storage.latency_seconds}s")

    print("\nDEMO MODE")
    print(f"Demo Prefix: {config.demo.demo_prefix}")
    print(f"Auto Seed: {config.demo.auto_seed} {config.demo.auto_seed_collections}")


if __name__ == "__main__":
    validate_config()
    print_config_summary()
