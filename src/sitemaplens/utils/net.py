# SitemapLens — Networking utilities (requests session with retries and origin headers)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .urls import site_root


DEFAULT_HEADERS = {
	"Accept": "*/*",
	"Accept-Language": "en-US,en;q=0.9",
	"Connection": "keep-alive",
}


class OriginHeaderAdapter(HTTPAdapter):
	"""HTTPAdapter that sends Referer and Origin set to the site root of each request.

	Some hosts refuse sitemap requests that carry neither header.
	"""

	def add_headers(self, request, **kwargs):
		super().add_headers(request, **kwargs)
		root = site_root(request.url)
		request.headers.setdefault("Referer", root)
		request.headers.setdefault("Origin", root.rstrip("/"))


def build_session(
	user_agent: str,
	retries: int = 0,
	backoff: float = 0.5,
	send_origin: bool = True,
) -> requests.Session:
	"""Build a requests Session with crawler defaults and Retry.

	Redirects, cookies and gzip/deflate decoding are handled by requests itself.
	With ``retries=0`` every failure is final.
	"""
	s = requests.Session()
	s.headers.update(DEFAULT_HEADERS)
	s.headers["User-Agent"] = user_agent
	retry = Retry(
		total=retries,
		backoff_factor=backoff,
		status_forcelist=(429, 500, 502, 503, 504),
		allowed_methods=frozenset({"GET", "HEAD"}),
		raise_on_status=False,
	)
	adapter_cls = OriginHeaderAdapter if send_origin else HTTPAdapter
	adapter = adapter_cls(max_retries=retry)
	s.mount("http://", adapter)
	s.mount("https://", adapter)
	return s
