# SitemapLens — Sitemap discovery and parsing
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import itertools
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Iterator, List, Optional, Set, Tuple
import xml.etree.ElementTree as ET

from .models import Found, FetchResult, ImageRef, NotFound, PageEntry
from .robots import RobotsDirectiveReader
from .session import HttpFetcher
from ..utils.urls import normalize_url, parse_absolute_url, resolve_path, site_root


logger = logging.getLogger(__name__)

SCHEMA_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
SCHEMA_NAMESPACE_HTTPS = "https://www.sitemaps.org/schemas/sitemap/0.9"
IMAGE_NAMESPACE = "http://www.google.com/schemas/sitemap-image/1.1"

# Tried in order; "" matches documents that declare no namespace at all.
SITEMAP_NAMESPACES = (SCHEMA_NAMESPACE, SCHEMA_NAMESPACE_HTTPS, "")

DEFAULT_SITEMAP_PATHS = ("/sitemap.xml", "/sitemap_index.xml")

SITEMAP_INDEX = "sitemapindex"
URLSET = "urlset"


def _qname(ns: str, tag: str) -> str:
	return f"{{{ns}}}{tag}" if ns else tag


def _child_text(el: ET.Element, ns: str, tag: str) -> Optional[str]:
	child = el.find(_qname(ns, tag))
	if child is None or child.text is None:
		return None
	return child.text.strip() or None


def parse_document(url: str, content: bytes) -> FetchResult:
	try:
		root = ET.fromstring(content)
	except ET.ParseError as e:
		return NotFound(url, f"malformed XML: {e}")
	return Found(url, root)


def classify(root: ET.Element) -> Tuple[Optional[str], str]:
	"""Return (kind, namespace) for a document root; kind is None when it is not a sitemap."""
	for ns in SITEMAP_NAMESPACES:
		for kind in (SITEMAP_INDEX, URLSET):
			if root.tag == _qname(ns, kind):
				return kind, ns
	return None, ""


def parse_lastmod(text: Optional[str]) -> Optional[datetime]:
	"""Parse a W3C datetime (full timestamp, date, year-month or year).

	Values without an offset are taken as UTC. Anything unparsable gives None.
	"""
	if not text:
		return None
	value = text.strip()
	if value[-1:] in ("Z", "z"):
		value = value[:-1] + "+00:00"
	try:
		dt = datetime.fromisoformat(value)
	except ValueError:
		dt = None
		# fromisoformat before 3.11 only takes 3 or 6 fractional digits
		for fmt in ("%Y-%m-%dT%H:%M:%S.%f%z", "%Y-%m-%dT%H:%M:%S.%f", "%Y-%m", "%Y"):
			try:
				dt = datetime.strptime(value, fmt)
				break
			except ValueError:
				continue
		if dt is None:
			return None
	if dt.tzinfo is None:
		dt = dt.replace(tzinfo=timezone.utc)
	return dt


def iter_sitemap_refs(root: ET.Element, ns: str) -> Iterator[str]:
	for sm in root.findall(_qname(ns, "sitemap")):
		loc = _child_text(sm, ns, "loc")
		url = parse_absolute_url(loc)
		if url is None:
			logger.debug("Skipping sitemap reference with malformed loc: %r", loc)
			continue
		yield url


def _first_image(url_el: ET.Element) -> Optional[ImageRef]:
	img = url_el.find(_qname(IMAGE_NAMESPACE, "image"))
	if img is None:
		return None
	loc = parse_absolute_url(_child_text(img, IMAGE_NAMESPACE, "loc"))
	if loc is None:
		return None
	return ImageRef(
		location=loc,
		title=_child_text(img, IMAGE_NAMESPACE, "title"),
		caption=_child_text(img, IMAGE_NAMESPACE, "caption"),
	)


def iter_page_entries(root: ET.Element, ns: str) -> Iterator[PageEntry]:
	for url_el in root.findall(_qname(ns, "url")):
		loc = _child_text(url_el, ns, "loc")
		location = parse_absolute_url(loc)
		if location is None:
			logger.debug("Skipping url entry with malformed loc: %r", loc)
			continue
		yield PageEntry(
			location=location,
			last_modified=parse_lastmod(_child_text(url_el, ns, "lastmod")),
			image=_first_image(url_el),
		)


@dataclass
class _Walk:
	"""Traversal state owned by a single discover() call."""

	cancel: Optional[threading.Event] = None
	visited: Set[str] = field(default_factory=set)
	fallback_roots: Set[str] = field(default_factory=set)

	@property
	def cancelled(self) -> bool:
		return self.cancel is not None and self.cancel.is_set()

	def seen(self, url: str) -> bool:
		return normalize_url(url) in self.visited

	def mark(self, url: str) -> None:
		self.visited.add(normalize_url(url))


class SitemapResolver:
	"""Resolve a site root or sitemap URL into the pages its sitemaps publish.

	Fallback order when the URL is not itself a sitemap document: sitemaps
	declared in robots.txt, then the default paths (only when robots.txt
	declares none). Sitemap indexes are expanded depth-first in document order.
	"""

	def __init__(
		self,
		fetcher: HttpFetcher,
		robots: Optional[RobotsDirectiveReader] = None,
		default_paths: Iterable[str] = DEFAULT_SITEMAP_PATHS,
	) -> None:
		if fetcher is None:
			raise ValueError("SitemapResolver requires a fetcher")
		self.fetcher = fetcher
		self.robots = robots if robots is not None else RobotsDirectiveReader(fetcher)
		self.default_paths = tuple(default_paths)

	def discover(self, url: str, cancel: Optional[threading.Event] = None) -> Iterator[PageEntry]:
		"""Lazily yield every PageEntry reachable from ``url``.

		Network requests happen only as the iterator is consumed; setting
		``cancel`` stops the walk before its next request. Each call starts
		from scratch.
		"""
		start = parse_absolute_url(url)
		if start is None:
			raise ValueError(f"not an absolute URL: {url!r}")
		return self._discover(start, _Walk(cancel=cancel))

	def discover_all(
		self,
		url: str,
		cancel: Optional[threading.Event] = None,
		limit: Optional[int] = None,
	) -> List[PageEntry]:
		return list(itertools.islice(self.discover(url, cancel=cancel), limit))

	def _discover(self, url: str, walk: _Walk) -> Iterator[PageEntry]:
		if walk.seen(url):
			logger.debug("Already visited %s", url)
			return
		result = self._load(url, walk)
		if isinstance(result, Found):
			yield from self._expand(result, walk)
			return
		if walk.cancelled:
			return

		root = site_root(url)
		if root in walk.fallback_roots:
			return
		walk.fallback_roots.add(root)

		logger.info("No sitemap at %s (%s); checking robots.txt", url, result.reason)
		declared = 0
		for sitemap_url in self.robots.discover_sitemaps(url):
			declared += 1
			yield from self._discover(sitemap_url, walk)
			if walk.cancelled:
				return
		if declared:
			return

		logger.info("robots.txt declares no sitemaps for %s; probing default paths", root)
		for candidate in self._iter_default_sitemaps(url, walk):
			if walk.seen(candidate):
				continue
			found = self._load(candidate, walk)
			if isinstance(found, Found):
				yield from self._expand(found, walk)

	def _iter_default_sitemaps(self, url: str, walk: _Walk) -> Iterator[str]:
		accepted: Set[str] = set()
		for path in self.default_paths:
			if walk.cancelled:
				return
			candidate = resolve_path(url, path)
			final = self.fetcher.probe(candidate)
			if final is None:
				continue
			key = normalize_url(final)
			if key in accepted:
				logger.debug("%s resolves to already accepted %s", candidate, final)
				continue
			accepted.add(key)
			yield candidate

	def _load(self, url: str, walk: _Walk) -> FetchResult:
		walk.mark(url)
		if walk.cancelled:
			return NotFound(url, "cancelled")
		r = self.fetcher.get(url)
		if r is None:
			return NotFound(url, "fetch failed")
		result = parse_document(url, r.content)
		if isinstance(result, NotFound):
			logger.debug("%s: %s", url, result.reason)
		return result

	def _expand(self, doc: Found, walk: _Walk) -> Iterator[PageEntry]:
		kind, ns = classify(doc.root)
		if kind == URLSET:
			yield from iter_page_entries(doc.root, ns)
		elif kind == SITEMAP_INDEX:
			logger.debug("Expanding sitemap index %s", doc.url)
			for child in iter_sitemap_refs(doc.root, ns):
				if walk.cancelled:
					return
				if walk.seen(child):
					logger.debug("Skipping already visited sitemap %s", child)
					continue
				result = self._load(child, walk)
				if isinstance(result, Found):
					yield from self._expand(result, walk)
		else:
			logger.debug("%s is XML but not a sitemap (root %s)", doc.url, doc.root.tag)
