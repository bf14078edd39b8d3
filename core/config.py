"""
配置文件 - 项目配置管理

Settings are read once at startup (environment and ``.env``) and are frozen;
handlers receive them through ``app.state`` instead of a mutable global.
"""
from functools import lru_cache
from typing import Annotated, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from domain.pix.urls import is_absolute_http_url

DEFAULT_FAIR_API_BASE = "https://api.fairpayments.com.br/functions/v1"


class Settings(BaseSettings):
    """项目配置"""

    # 基础配置
    PROJECT_NAME: str = Field(default="PIX Gateway Adapter")
    VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="development")

    # FairPayments provider
    FAIR_SECRET_KEY: Optional[str] = Field(
        default=None,
        description="Provider secret key; the service refuses to start without it",
    )
    FAIR_COMPANY_ID: Optional[str] = Field(default=None, description="Tenant id sent as x-company-id")
    FAIR_REQUIRE_COMPANY_ID: bool = Field(default=False)
    FAIR_API_BASE: str = Field(default=DEFAULT_FAIR_API_BASE)

    # Externally reachable base used to derive the default postback URL
    PUBLIC_BASE_URL: Optional[str] = Field(default=None)

    # Optional persistence sink for webhook events
    DATABASE_URL: Optional[str] = Field(default=None)

    # CORS配置
    CORS_ORIGINS: Annotated[list[str], NoDecode] = Field(default=["*"])

    # 日志/请求体记录配置
    LOG_REQUEST_BODY_ENABLE_BY_DEFAULT: bool = Field(default=True)
    LOG_REQUEST_BODY_MAX_BYTES: int = Field(default=2048)

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("FAIR_API_BASE")
    @classmethod
    def _strip_api_base(cls, v: str) -> str:
        v = (v or "").strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError("FAIR_API_BASE must be an absolute http(s) URL")
        return v

    @field_validator("PUBLIC_BASE_URL", mode="before")
    @classmethod
    def _validate_public_base_url(cls, v):
        """Reject relative or malformed bases so derived postback URLs are always absolute."""
        if v is None:
            return None
        s = str(v).strip()
        if not s:
            return None
        if not is_absolute_http_url(s):
            raise ValueError("PUBLIC_BASE_URL must be an absolute http(s) URL")
        return s

    @field_validator("DATABASE_URL", "FAIR_COMPANY_ID", mode="before")
    @classmethod
    def _blank_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v):
        """允许 JSON 字符串或逗号分隔字符串两种格式。"""
        if isinstance(v, list):
            return v
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("[") and s.endswith("]"):
                import json
                try:
                    arr = json.loads(s)
                    if isinstance(arr, list):
                        return arr
                except Exception:
                    pass
            if "," in s:
                return [item.strip() for item in s.split(",") if item.strip()]
            return [s]
        return v


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
