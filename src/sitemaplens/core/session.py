# SitemapLens — HTTP session and fetch helpers
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
from typing import Optional

import requests

from ..config import Settings
from ..utils.net import build_session


logger = logging.getLogger(__name__)


class HttpFetcher:
	"""GET and HEAD-probe over a shared requests Session.

	Failures never raise: non-2xx responses and transport errors come back as None.
	"""

	def __init__(self, session: requests.Session, timeout: float = 12.0) -> None:
		if session is None:
			raise ValueError("HttpFetcher requires a requests session")
		self.session = session
		self.timeout = timeout

	def get(self, url: str) -> Optional[requests.Response]:
		try:
			r = self.session.get(url, timeout=self.timeout)
		except requests.RequestException as e:
			logger.debug("GET %s failed: %s", url, e)
			return None
		if not 200 <= r.status_code < 300:
			logger.debug("GET %s returned %s", url, r.status_code)
			return None
		return r

	def probe(self, url: str) -> Optional[str]:
		"""HEAD the URL following redirects; return the final URL on success."""
		try:
			r = self.session.head(url, allow_redirects=True, timeout=self.timeout)
		except requests.RequestException as e:
			logger.debug("HEAD %s failed: %s", url, e)
			return None
		if not 200 <= r.status_code < 300:
			logger.debug("HEAD %s returned %s", url, r.status_code)
			return None
		return r.url or url


def make_session(cfg: Settings) -> requests.Session:
	return build_session(
		user_agent=cfg.user_agent,
		retries=cfg.retries,
		backoff=cfg.backoff,
		send_origin=cfg.send_origin,
	)


def make_fetcher(cfg: Settings, session: Optional[requests.Session] = None) -> HttpFetcher:
	return HttpFetcher(session or make_session(cfg), timeout=cfg.timeout)
