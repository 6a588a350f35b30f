# SitemapLens — robots.txt directive reader
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
from typing import Iterator, Optional

from .session import HttpFetcher
from ..utils.urls import parse_absolute_url, resolve_path


logger = logging.getLogger(__name__)

USER_AGENT_PREFIX = "user-agent:"
SITEMAP_PREFIX = "sitemap:"


class RobotsDirectiveReader:
	"""Fetch robots.txt and pull out Sitemap: and user-agent scoped directives.

	Nothing is cached: every call re-reads the text it is given or re-fetches the file.
	"""

	def __init__(self, fetcher: HttpFetcher) -> None:
		if fetcher is None:
			raise ValueError("RobotsDirectiveReader requires a fetcher")
		self.fetcher = fetcher

	def fetch_raw(self, url: str) -> Optional[str]:
		"""GET /robots.txt on the site of ``url``; body on success, None otherwise."""
		robots_url = resolve_path(url, "/robots.txt")
		r = self.fetcher.get(robots_url)
		if r is None:
			return None
		# utf-8-sig drops a leading byte-order mark
		return r.content.decode("utf-8-sig", errors="replace")

	@staticmethod
	def iter_lines(text: Optional[str]) -> Iterator[str]:
		"""Trimmed lines with blanks and # comments removed, in file order."""
		if not text:
			return
		for raw in text.lstrip("\ufeff").splitlines():
			line = raw.strip()
			if not line or line.startswith("#"):
				continue
			yield line

	@classmethod
	def iter_user_agent_lines(cls, text: Optional[str], agent: str) -> Iterator[str]:
		"""Lines inside User-agent sections naming ``agent`` (case-insensitive).

		Every User-agent: line closes the current section before the next one is
		evaluated, so each matching section is yielded on its own.
		"""
		wanted = agent.strip().lower()
		active = False
		for line in cls.iter_lines(text):
			if line.lower().startswith(USER_AGENT_PREFIX):
				value = line[len(USER_AGENT_PREFIX):].split("#", 1)[0].strip()
				active = value.lower() == wanted
			elif active:
				yield line

	@classmethod
	def iter_sitemap_urls(cls, text: Optional[str]) -> Iterator[str]:
		for line in cls.iter_lines(text):
			if not line.lower().startswith(SITEMAP_PREFIX):
				continue
			value = line[len(SITEMAP_PREFIX):].strip()
			url = parse_absolute_url(value)
			if url is None:
				logger.debug("Skipping malformed Sitemap directive: %r", value)
				continue
			yield url

	def discover_sitemaps(self, url: str) -> Iterator[str]:
		"""Sitemap URLs declared in the robots.txt of the site of ``url``."""
		text = self.fetch_raw(url)
		if text is None:
			return
		yield from self.iter_sitemap_urls(text)
