# SitemapLens — URL utilities: absolute-URL checks, site roots, normalization
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from typing import Optional
from urllib.parse import urlparse, urlunparse, urljoin
import re


def parse_absolute_url(text: Optional[str]) -> Optional[str]:
	"""Return the stripped URL if it is absolute (scheme + host, valid port), else None."""
	if not text:
		return None
	candidate = text.strip()
	if not candidate or any(ch.isspace() for ch in candidate):
		return None
	try:
		p = urlparse(candidate)
		# .port raises ValueError on a malformed port
		p.port
	except ValueError:
		return None
	if not p.scheme or not p.netloc or not p.hostname:
		return None
	return candidate


def site_root(url: str) -> str:
	"""scheme://host[:port]/ of an absolute URL."""
	p = urlparse(url)
	return urlunparse((p.scheme.lower(), p.netloc.lower(), "/", "", "", ""))


def resolve_path(url: str, path: str) -> str:
	"""Resolve a root-relative path such as ``/robots.txt`` against the site of ``url``."""
	return urljoin(site_root(url), path)


def normalize_url(url: str) -> str:
	"""Normalize URL for identity checks: strip fragments, lower scheme/host, drop default ports, collapse slashes.
	Fallbacks to original URL on errors.
	"""
	try:
		p = urlparse(url)
		p = p._replace(fragment="")
		netloc = p.netloc.lower()
		scheme = p.scheme.lower() if p.scheme else "https"
		p = p._replace(netloc=netloc, scheme=scheme)
		# default ports
		if p.netloc.endswith(":80") and p.scheme == "http":
			p = p._replace(netloc=p.netloc[:-3])
		if p.netloc.endswith(":443") and p.scheme == "https":
			p = p._replace(netloc=p.netloc[:-4])
		# path slashes
		path = re.sub(r"/+", "/", p.path or "/")
		p = p._replace(path=path)
		return urlunparse(p)
	except ValueError:
		return url


__all__ = [
	"parse_absolute_url",
	"site_root",
	"resolve_path",
	"normalize_url",
	"urljoin",
]
