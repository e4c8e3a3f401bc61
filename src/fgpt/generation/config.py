"""Configuration for the generation client.

Built once at startup and injected into the client, so the client itself never
reads the process environment.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GenerationConfig(BaseModel):
    """Target and limits of the generation service."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(description="Base URL of the generation service")
    endpoint_path: str = Field(
        default="/openai",
        description="Path of the generation endpoint, appended to base_url"
    )
    timeout: float | None = Field(
        default=30.0,
        gt=0.0,
        description="Maximum seconds to wait for a response (None waits forever)"
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop the trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("endpoint_path")
    @classmethod
    def validate_endpoint_path(cls, v: str) -> str:
        """Ensure the path is absolute."""
        return v if v.startswith("/") else f"/{v}"

    @property
    def endpoint_url(self) -> str:
        """Full URL the generation request is posted to."""
        return f"{self.base_url}{self.endpoint_path}"
