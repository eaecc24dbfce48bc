from typing import Any, Dict, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator


class SourceConfig(BaseModel):
    """
    Everything the core needs to talk to one source.
    Plugins fill in their defaults; job params may override any field.
    """

    base_url: str
    min_interval: float = Field(default=0.6, ge=0)  # seconds between requests
    timeout: Optional[float] = Field(default=15.0, gt=0)  # None = transport default
    max_retries: int = Field(default=2, ge=0)
    gap_tolerance: int = Field(default=1, ge=0)
    headers: Dict[str, str] = Field(default_factory=dict)

    @field_validator("base_url")
    def base_url_must_be_http(cls, v):
        if urlparse(v).scheme not in ("http", "https"):
            raise ValueError("base_url must be an http(s) URL")
        return v.rstrip("/")

    @property
    def host(self) -> str:
        return urlparse(self.base_url).netloc.lower()

    @property
    def referer(self) -> str:
        """Requests present themselves as coming from the site's root."""
        return f"{self.base_url}/"


class ChapterJobConfig(BaseModel):
    """
    Input contract of the chapter flow.
    """

    job_name: str
    environment: str = Field(default="dev", pattern="^(dev|staging|prod)$")

    # Reader page of the chapter and, optionally, the series page used as Referer
    source_url: str
    series_url: Optional[str] = None

    # Overrides for the plugin's SourceConfig (min_interval, gap_tolerance, ...)
    source_params: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("job_name")
    def job_name_must_be_slug(cls, v):
        if " " in v:
            raise ValueError("job_name must not contain spaces")
        return v.lower()

    @field_validator("source_url")
    def source_url_must_be_http(cls, v):
        if urlparse(v).scheme not in ("http", "https"):
            raise ValueError("source_url must be an http(s) URL")
        return v
