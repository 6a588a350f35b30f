import pytest
import requests

from sitemaplens.core.session import HttpFetcher
from sitemaplens.core.sitemap import SitemapResolver


class MockResponse:
	def __init__(self, url, text="", status_code=200):
		self.url = url
		self.text = text
		self.content = text.encode("utf-8")
		self.status_code = status_code

	@property
	def ok(self):
		return self.status_code < 400


class MockSession:
	"""Serves canned bodies by URL and records every request.

	pages: url -> body, or url -> (status, body)
	redirects: url -> final url (applied to both GET and HEAD)
	errors: urls that raise a connection error
	"""

	def __init__(self, pages=None, redirects=None, errors=()):
		self.pages = dict(pages or {})
		self.redirects = dict(redirects or {})
		self.errors = set(errors)
		self.calls = []

	def _respond(self, method, url):
		self.calls.append((method, url))
		if url in self.errors:
			raise requests.ConnectionError(f"cannot reach {url}")
		final = self.redirects.get(url, url)
		page = self.pages.get(final)
		if page is None:
			return MockResponse(final, "not found", 404)
		if isinstance(page, tuple):
			status, body = page
		else:
			status, body = 200, page
		return MockResponse(final, body, status)

	def get(self, url, timeout=None):
		return self._respond("GET", url)

	def head(self, url, allow_redirects=False, timeout=None):
		return self._respond("HEAD", url)

	def requested(self, method=None):
		return [u for m, u in self.calls if method is None or m == method]


def urlset(*locs, ns="http://www.sitemaps.org/schemas/sitemap/0.9"):
	xmlns = f' xmlns="{ns}"' if ns else ""
	urls = "".join(f"<url><loc>{loc}</loc></url>" for loc in locs)
	return f'<?xml version="1.0" encoding="UTF-8"?><urlset{xmlns}>{urls}</urlset>'


def sitemapindex(*locs, ns="http://www.sitemaps.org/schemas/sitemap/0.9"):
	xmlns = f' xmlns="{ns}"' if ns else ""
	items = "".join(f"<sitemap><loc>{loc}</loc></sitemap>" for loc in locs)
	return f'<?xml version="1.0" encoding="UTF-8"?><sitemapindex{xmlns}>{items}</sitemapindex>'


@pytest.fixture
def make_resolver():
	def _make(pages=None, redirects=None, errors=()):
		session = MockSession(pages, redirects, errors)
		return SitemapResolver(HttpFetcher(session, timeout=5)), session

	return _make
