# SitemapLens — Data model (page entries and fetch results)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Union
import xml.etree.ElementTree as ET


@dataclass(frozen=True)
class ImageRef:
	"""Google image-sitemap extension attached to a page."""

	location: str
	title: Optional[str] = None
	caption: Optional[str] = None


@dataclass(frozen=True)
class PageEntry:
	"""A page published in a urlset sitemap."""

	location: str
	last_modified: Optional[datetime] = None
	image: Optional[ImageRef] = None

	def to_dict(self) -> Dict[str, Any]:
		obj: Dict[str, Any] = {
			"location": self.location,
			"last_modified": self.last_modified.isoformat() if self.last_modified else None,
		}
		if self.image is not None:
			obj["image"] = {
				"location": self.image.location,
				"title": self.image.title,
				"caption": self.image.caption,
			}
		return obj


@dataclass(frozen=True)
class Found:
	url: str
	root: ET.Element


@dataclass(frozen=True)
class NotFound:
	url: str
	reason: str


FetchResult = Union[Found, NotFound]
