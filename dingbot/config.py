"""
DingTalk webhook settings.

Credentials and transport options read from ``KW_DINGTALK_*`` environment
variables. Explicit values from the persisted kubewatch config take
precedence over these; see ``kubewatch.handlers.dingtalk``.
"""

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings

DEFAULT_API_URL = "https://oapi.dingtalk.com/robot/send?access_token="


class DingTalkSettings(BaseSettings):
    """DingTalk robot configuration from environment variables."""

    token: str = Field(
        default="",
        description="Robot access token",
    )

    sign: str = Field(
        default="",
        description="Robot sign secret (optional)",
    )

    timeout: float = Field(
        default=5.0,
        description="HTTP timeout for a single webhook request (seconds)",
        ge=0.5,
        le=60.0,
    )

    api_url: str = Field(
        default=DEFAULT_API_URL,
        description="Webhook base URL, the access token is appended to it",
    )

    sign_per_request: bool = Field(
        default=True,
        description="Recompute timestamp and signature for every request",
    )

    model_config = ConfigDict(
        env_prefix="KW_DINGTALK_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def __repr__(self) -> str:
        return (
            f"DingTalkSettings(token={'***' if self.token else ''!r}, "
            f"sign={'***' if self.sign else ''!r}, timeout={self.timeout}, "
            f"api_url={self.api_url!r}, sign_per_request={self.sign_per_request})"
        )


def get_settings() -> DingTalkSettings:
    """
    Get DingTalk settings from environment variables.

    Returns:
        DingTalkSettings: Settings instance
    """
    return DingTalkSettings()
