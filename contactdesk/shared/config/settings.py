# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    validate_by_name=True,
    extra="ignore",
)


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///contactdesk.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _SECTION_CONFIG


class AuthConfig(BaseSettings):
    jwt_secret: str | None = Field(None, alias="JWT_SECRET")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    token_ttl_seconds: int = Field(3600, ge=1, alias="TOKEN_TTL_SECONDS")
    cookie_name: str = Field("admin_token", alias="AUTH_COOKIE_NAME")

    credential_backend: Literal["config", "database"] = Field(
        "config", alias="CREDENTIAL_BACKEND"
    )
    admin_username: str | None = Field(None, alias="ADMIN_USERNAME")
    # Used by the config backend.
    admin_password_hash: str | None = Field(None, alias="ADMIN_PASSWORD_HASH")
    # Seeds the database backend on first start.
    admin_password: str | None = Field(None, alias="ADMIN_PASSWORD")

    model_config = _SECTION_CONFIG


class StorageConfig(BaseSettings):
    backend: Literal["database", "json"] = Field("database", alias="RECORDS_BACKEND")
    data_dir: Path = Field(Path("data"), alias="DATA_DIR")

    model_config = _SECTION_CONFIG


class SecurityConfig(BaseSettings):
    cookie_secure: bool = Field(False, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Strict", alias="COOKIE_SAMESITE")

    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    enable_rate_limit: bool = Field(True, alias="ENABLE_RATE_LIMIT")
    # Reverse proxies in front of the app whose X-Forwarded-* headers are trusted.
    trusted_proxy_hops: int = Field(0, ge=0, alias="TRUSTED_PROXY_HOPS")

    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = _SECTION_CONFIG

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("cookie_secure", "enable_rate_limit", "enable_hsts", mode="before")
    @classmethod
    def _parse_flags(cls, value: str | bool) -> bool:
        return _parse_bool(value)


class ChatConfig(BaseSettings):
    enabled: bool = Field(False, alias="CHAT_ENABLED")
    host: str = Field("127.0.0.1", alias="CHAT_HOST")
    port: int = Field(8765, ge=0, le=65535, alias="CHAT_PORT")
    max_message_length: int = Field(1000, ge=1, alias="CHAT_MAX_MESSAGE_LENGTH")

    model_config = _SECTION_CONFIG

    @field_validator("enabled", mode="before")
    @classmethod
    def _parse_enabled(cls, value: str | bool) -> bool:
        return _parse_bool(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _auth_config_factory() -> AuthConfig:
    return AuthConfig()  # type: ignore[call-arg]


def _storage_config_factory() -> StorageConfig:
    return StorageConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


def _chat_config_factory() -> ChatConfig:
    return ChatConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    auth: AuthConfig = Field(default_factory=_auth_config_factory)
    storage: StorageConfig = Field(default_factory=_storage_config_factory)
    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)
    chat: ChatConfig = Field(default_factory=_chat_config_factory)

    model_config = _SECTION_CONFIG

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @model_validator(mode="after")
    def _require_signing_secret(self) -> "AppConfig":
        if not (self.auth.jwt_secret or "").strip():
            raise ValueError(
                "JWT_SECRET is not configured; refusing to start without a signing secret"
            )
        return self

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        warnings = []
        if len(self.auth.jwt_secret or "") < 32:
            warnings.append("⚠️  JWT_SECRET is shorter than 32 characters")
        if not self.security.cookie_secure:
            warnings.append("⚠️  Cookie Secure flag is DISABLED (use HTTPS!)")
        if "*" in self.security.allowed_origins:
            warnings.append("⚠️  CORS allows wildcard (*) origins")
        if not self.security.enable_hsts:
            warnings.append("⚠️  HSTS is DISABLED (recommended for HTTPS)")

        if warnings:
            print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)
            print(
                "   Consider enabling these security features in production.\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "AuthConfig",
    "ChatConfig",
    "DatabaseConfig",
    "SecurityConfig",
    "StorageConfig",
    "load_config",
]
