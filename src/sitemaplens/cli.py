# SitemapLens — CLI (Typer)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import typer
import itertools
from typing import Optional
from rich import print
from rich.markup import escape

from .config import Settings
from .core.robots import RobotsDirectiveReader
from .core.session import make_fetcher
from .core.sitemap import SitemapResolver
from .logging_config import configure_logging
from .utils.io import append_jsonl
from .utils.urls import parse_absolute_url

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _settings(
	user_agent: Optional[str] = None,
	timeout: Optional[float] = None,
	retries: Optional[int] = None,
	log_level: Optional[str] = None,
) -> Settings:
	cfg = Settings()
	overrides = {
		"user_agent": user_agent,
		"timeout": timeout,
		"retries": retries,
		"log_level": log_level,
	}
	return cfg.model_copy(update={k: v for k, v in overrides.items() if v is not None})


def _require_url(url: str) -> str:
	absolute = parse_absolute_url(url)
	if absolute is None:
		raise typer.BadParameter(f"not an absolute URL: {url}")
	return absolute


@app.command()
def discover(
	url: str = typer.Argument(..., help="Site root or sitemap URL"),
	limit: Optional[int] = typer.Option(None, help="Stop after this many pages"),
	jsonl: Optional[str] = typer.Option(None, help="Append entries to this JSONL file"),
	user_agent: Optional[str] = typer.Option(None, help="Override User-Agent"),
	timeout: Optional[float] = typer.Option(None, help="Request timeout (seconds)"),
	retries: Optional[int] = typer.Option(None, help="HTTP retry attempts"),
	log_level: Optional[str] = typer.Option(None, help="Log level"),
):
	"""List every page published through the site's sitemaps."""
	url = _require_url(url)
	cfg = _settings(user_agent, timeout, retries, log_level)
	configure_logging(level=cfg.log_level, log_dir=cfg.log_dir)
	resolver = SitemapResolver(make_fetcher(cfg), default_paths=cfg.default_paths)
	counter = 0
	for entry in itertools.islice(resolver.discover(url), limit):
		counter += 1
		print(f"{counter:04d}: {escape(entry.location)}")
		if jsonl:
			append_jsonl(jsonl, entry.to_dict())
	print(f"[bold]{counter} page(s)[/bold]")


@app.command()
def robots(
	url: str = typer.Argument(..., help="Any URL on the site"),
	agent: Optional[str] = typer.Option(None, help="Also print lines scoped to this user agent"),
	user_agent: Optional[str] = typer.Option(None, help="Override User-Agent"),
	timeout: Optional[float] = typer.Option(None, help="Request timeout (seconds)"),
):
	"""Show the sitemaps declared in robots.txt."""
	url = _require_url(url)
	cfg = _settings(user_agent, timeout)
	reader = RobotsDirectiveReader(make_fetcher(cfg))
	text = reader.fetch_raw(url)
	if text is None:
		print("[yellow]robots.txt not available[/yellow]")
		raise typer.Exit(code=1)
	for sitemap in reader.iter_sitemap_urls(text):
		print(f"Sitemap: {escape(sitemap)}")
	if agent:
		print(f"[bold]User-agent: {escape(agent)}[/bold]")
		for line in reader.iter_user_agent_lines(text, agent):
			print(f"  {escape(line)}")


@app.command("print-config")
def print_config():
	"""Print effective configuration from environment."""
	cfg = Settings()
	print(cfg.model_dump())


def main():
	app()


if __name__ == "__main__":
	main()
