# ABOUTME: High-level service orchestrating an incremental update of the character store
# ABOUTME: Listing → skip known names → concurrent page fetch + image storage → sorted JSON output

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field

from nikkedex.config import get_config
from nikkedex.core.models import ExtractedNikke, Nikke, NikkeListEntry
from nikkedex.core.result import Err, Ok, Result
from nikkedex.extraction import ErrorReport, extract_nikke, extract_nikke_list
from nikkedex.fetch import ImageProcessor, WikiClient
from nikkedex.persistence import NikkeStore
from nikkedex.utils.logging import get_logger, log_extraction_step, with_record_context

ProgressCallback = Callable[[str, int, int], None]


@dataclass(slots=True)
class UpdateReport:
    """Outcome of one update run."""

    listed: int = 0
    cached: int = 0
    added: list[str] = field(default_factory=list)
    failed: dict[str, ErrorReport | str] = field(default_factory=dict)


def unique_entries(entries: list[NikkeListEntry]) -> list[NikkeListEntry]:
    """Drop listing cards whose name (ignoring case) was already seen."""
    seen: set[str] = set()
    unique = []
    for entry in entries:
        key = entry.name.casefold()
        if key in seen:
            continue
        seen.add(key)
        unique.append(entry)
    return unique


class NikkeUpdateService:
    """Service for updating the record store with cache-first logic."""

    def __init__(
        self,
        client: WikiClient | None = None,
        store: NikkeStore | None = None,
        images: ImageProcessor | None = None,
        max_concurrency: int | None = None,
    ):
        config = get_config()
        self.config = config
        self.client = client or WikiClient()
        self.store = store or NikkeStore()
        self.images = images or ImageProcessor(self.client)
        self.max_concurrency = max_concurrency or config.max_concurrency
        self.logger = get_logger(__name__)

    @log_extraction_step("fetch_list")
    async def fetch_list(self) -> list[NikkeListEntry]:
        """Read the listing page into card entries."""
        document = await self.client.fetch_html(self.config.home_url)
        return extract_nikke_list(document, self.config.wiki_base_url)

    async def fetch_record(self, entry: NikkeListEntry) -> Result[ExtractedNikke, ErrorReport]:
        document = await self.client.fetch_html(entry.url)
        return extract_nikke(document)

    async def update_entry(self, entry: NikkeListEntry) -> Result[Nikke, ErrorReport]:
        """Store the portrait and extract the record for one entry, side by side."""
        # Both halves run to completion before any failure is raised
        outcomes = await asyncio.gather(self.images.update(entry), self.fetch_record(entry), return_exceptions=True)
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome

        extracted: Result[ExtractedNikke, ErrorReport] = outcomes[1]
        return extracted.map(lambda record: Nikke.from_extracted(record, entry.image_filename))

    async def run(self, progress_callback: ProgressCallback | None = None) -> UpdateReport:
        """Add every listed character missing from the store, then save it."""
        self.store.load()
        report = UpdateReport()

        entries = unique_entries(await self.fetch_list())
        report.listed = len(entries)

        pending = [entry for entry in entries if not self.store.contains(entry.name)]
        report.cached = report.listed - len(pending)
        total = len(pending)

        self.logger.info(
            "Starting update", listed=report.listed, cached=report.cached, pending=total,
            max_concurrency=self.max_concurrency,
        )

        semaphore = asyncio.Semaphore(self.max_concurrency)
        completed = 0

        async def process(entry: NikkeListEntry) -> None:
            nonlocal completed
            async with semaphore:
                with with_record_context(entry.name) as log:
                    try:
                        outcome = await self.update_entry(entry)
                    except Exception as exc:
                        # Per-entry failures are recorded and the batch continues
                        log.error("Failed to update character", url=entry.url, error=str(exc),
                                  error_type=type(exc).__name__)
                        report.failed[entry.name] = str(exc)
                    else:
                        match outcome:
                            case Ok(record):
                                self.store.add(record)
                                report.added.append(record.name)
                                log.info("Added character")
                            case Err(errors):
                                log.warning("Skipping character with unreadable fields", url=entry.url,
                                            errors=errors)
                                report.failed[entry.name] = errors

                completed += 1
                if progress_callback:
                    progress_callback(entry.name, completed, total)

        await asyncio.gather(*(process(entry) for entry in pending))

        self.store.save()
        self.logger.info(
            "Update completed", listed=report.listed, cached=report.cached, added=len(report.added),
            failed=len(report.failed),
        )
        return report

    async def close(self) -> None:
        await self.client.close()
