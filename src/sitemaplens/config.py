# SitemapLens — Configuration via Pydantic BaseSettings
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
	"""Application settings with sane defaults.

	Environment variables are prefixed with SITEMAPLENS_. CLI flags can override.
	"""

	model_config = SettingsConfigDict(env_prefix="SITEMAPLENS_", env_file=".env", extra="ignore")

	user_agent: str = Field(default="Mozilla/5.0 (compatible; SitemapLens/0.1)")
	timeout: float = Field(default=12.0)
	retries: int = Field(default=0)
	backoff: float = Field(default=0.5)
	send_origin: bool = Field(default=True)
	default_paths: List[str] = Field(default_factory=lambda: ["/sitemap.xml", "/sitemap_index.xml"])
	log_dir: str = Field(default="logs")
	log_level: str = Field(default="INFO")
