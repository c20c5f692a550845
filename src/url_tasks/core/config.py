from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_UA_POOL = [
    "Mozilla/5.0 (compatible; UrlTasksBot/1.0; +https://example.org/bot)",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
]


class FetchSettings(BaseModel):
    """Transport knobs shared by the fetch and hash operations.

    `timeout` applies to the fetch operations only; the hasher's HTTP branch
    always runs without a timeout.
    """

    timeout: Optional[float] = Field(default=15, gt=0)
    chunk_size: int = Field(default=8192, ge=1)
    ua_pool: List[str] = Field(default_factory=lambda: list(DEFAULT_UA_POOL))
    max_concurrent: int = Field(default=4, ge=1)

    @field_validator("ua_pool")
    def ua_pool_not_empty(cls, v):
        if not v:
            raise ValueError("ua_pool must contain at least one User-Agent")
        return v


class ComparisonConfig(BaseModel):
    """
    Contract for the sync vs. bounded comparison flow.
    Describes which URLs to fetch and which resources to hash.
    """

    job_name: str
    environment: str = Field(default="dev", pattern="^(dev|staging|prod)$")

    urls: List[str] = Field(default_factory=list)
    resources: List[str] = Field(default_factory=list)
    max_concurrent: int = Field(default=4, ge=1)

    settings: FetchSettings = Field(default_factory=FetchSettings)

    @field_validator("job_name")
    def job_name_must_be_slug(cls, v):
        if " " in v:
            raise ValueError("job_name must not contain spaces")
        return v.lower()
