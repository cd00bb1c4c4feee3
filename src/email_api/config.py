from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    server_host: str = "0.0.0.0"
    server_port: int = 3000
    log_level: str = "INFO"
    # Email / SendGrid
    sendgrid_api_key: str = ""
    email_from: str = "noreply@drivecore.co.uk"
    # Base URL used for fallback verification links and transfer accept links
    frontend_url: str = "http://localhost:3000"
    cors_origins: List[str] = ["*"]
    # Verification tokens
    verification_token_ttl_seconds: int = 86400  # 24 hours
    # Debug only: echo the raw token back in send-* responses
    expose_token_in_response: bool = False
    # Callback URLs hosted on these domains (or subdomains) are provider action links
    trusted_action_link_hosts: List[str] = ["firebaseapp.com", "web.app"]
    # Periodic eviction of expired tokens (seconds). 0 disables the sweep.
    token_sweep_interval_seconds: int = 0
    # Redis
    redis_url: str = ""
    # Expired records stay in Redis this long so consume can still report 410
    redis_expired_retention_seconds: int = 86400

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")
