"""
Configuration - Pydantic v2 Settings (env / .env)
=================================================

Purpose
-------
Centralized, strongly-typed application configuration using:
- Pydantic v2 `BaseSettings` for environment-driven values
- `pydantic-settings` v2 for `.env` loading and model config

Load Order & Behavior
---------------------
- Values are read from the environment; if not present, `.env` is used.
- Missing required fields (`DATABASE_URL`, `SECRET_KEY`) raise a validation error at import time.
- `extra="ignore"`: unknown env vars are ignored (not an error).

Usage
-----
from aila_admin.database.config.config import settings

upload_dir = settings.UPLOAD_DIR
generation_url = settings.GENERATION_SERVICE_URL

Security
--------
- Never commit secrets or the `.env` file to source control.
- Prefer runtime environment variables in production (K8s/Secrets Manager/etc.).
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration settings loaded from environment variables
    or a `.env` file. Provides strongly typed access to environment values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    DATABASE_URL: str = Field(..., description="SQLAlchemy URL of the main application database.")
    LAWYER_DATABASE_URL: Optional[str] = Field(
        None, description="SQLAlchemy URL of the database holding lawyer and KYC records. Defaults to DATABASE_URL."
    )
    SECRET_KEY: str = Field(..., description="Secret key for signing access tokens.")
    ALGORITHM: str = Field("HS256", description="JWT signing algorithm.")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(60 * 24 * 7, description="Access token lifetime in minutes.")

    GENERATION_SERVICE_URL: str = Field(
        "http://localhost:8000/chat", description="Endpoint of the external text-generation service."
    )
    GENERATION_TIMEOUT_SECONDS: float = Field(30.0, description="Upper bound for one generation request.")
    GENERATION_CONTEXT_WINDOW: int = Field(20, description="Number of trailing turns sent as context.")
    GENERATION_FALLBACK_REPLY: str = Field(
        "Sorry, no reply", description="Reply stored when the generation service gives no usable answer."
    )

    HOST: str = Field("0.0.0.0", description="Interface uvicorn binds to.")
    PORT: int = Field(4000, description="Port uvicorn listens on.")
    UPLOAD_DIR: str = Field("uploads", description="Directory where uploaded files are written.")
    PUBLIC_BASE_URL: str = Field(
        "http://localhost:4000", description="Base address used to build public links to uploaded files."
    )
    MAX_UPLOAD_BYTES: int = Field(50 * 1024 * 1024, description="Largest accepted upload, in bytes.")
    FRONTEND_URL: str = Field("http://localhost:3000", description="Allowed CORS origin of the dashboard.")

    KYC_ENABLED: bool = Field(True, description="Mount the KYC review routes.")
    CREATE_TABLES: bool = Field(True, description="Create missing tables during application startup.")
    ENVIRONMENT: str = Field("development", description="Deployment environment name reported by /health.")
    LOG_LEVEL: str = Field("INFO", description="Root logging level.")


# Singleton instance of Settings, ready to be imported across the app
settings = Settings()
"""Defines a Settings object that contains the contents of the environment / .env file"""
