# SitemapLens — IO helpers (directories, JSONL writing)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import json
import os
from typing import Any


def ensure_dirs(*paths: str) -> None:
	for p in paths:
		if p:
			os.makedirs(p, exist_ok=True)


def append_jsonl(path: str, obj: Any) -> None:
	ensure_dirs(os.path.dirname(path))
	with open(path, "a", encoding="utf-8") as f:
		f.write(json.dumps(obj, ensure_ascii=False) + "\n")
