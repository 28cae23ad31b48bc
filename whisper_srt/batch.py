"""Directory discovery and parallel conversion with a fixed worker pool.

WHY: Transcription runs usually leave dozens of JSON files in one folder.
Converting them one at a time wastes the machine, and one corrupt file
must not stop the rest. Each file is an independent unit of work whose
outcome is collected, not just printed, so the caller decides what a
failure means.

HOW: Three pieces:
  convert_file() : read → parse → render → write for one path, raising
                   a ConversionError subclass on failure
  BatchRunner    : N worker threads pull (position, path) jobs from a
                   shared queue.Queue and push FileResults onto a result
                   queue; a threading.Event cancels cooperatively
  BatchReport    : the results in input order plus success/failure counts

RULES:
- One task per input file; the job and result queues are the only shared state
- A failure (typed or unexpected) in one file never affects another
- Cancellation is checked between files and between segments; work in
  progress is never interrupted mid-write
- Files not started before cancellation are reported as ConversionCancelled
- No retries, no per-file timeout
- Output: UTF-8 BOM + SRT text at input path with the suffix replaced by .srt
"""

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from whisper_srt.config import INPUT_EXTENSION, OUTPUT_EXTENSION, UTF8_BOM, load_worker_count
from whisper_srt.core.parser import parse_document
from whisper_srt.core.renderer import build_captions, format_caption
from whisper_srt.errors import (
    ConversionCancelled,
    ConversionError,
    ReadError,
    WriteError,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Discovery and paths
# ---------------------------------------------------------------------------


def discover_json_files(directory: Path) -> List[Path]:
    """List the JSON files directly inside ``directory``, sorted by name.

    RULES:
    - Extension match is case-insensitive (.json, .JSON, .Json)
    - Not recursive; subdirectories are ignored even if named *.json
    - Raises OSError if the directory cannot be listed
    """
    return sorted(
        p for p in Path(directory).iterdir()
        if p.is_file() and p.suffix.lower() == INPUT_EXTENSION
    )


def output_path_for(json_path: Path) -> Path:
    """``talk.json`` → ``talk.srt``, next to the input."""
    return Path(json_path).with_suffix(OUTPUT_EXTENSION)


# ---------------------------------------------------------------------------
# Single file
# ---------------------------------------------------------------------------


@dataclass
class FileResult:
    """Outcome of converting one input file.

    Attributes:
        source: The input JSON path.
        output: The written .srt path, None on failure.
        caption_count: Number of captions written.
        error: The failure, None on success.
    """

    source: Path
    output: Optional[Path] = None
    caption_count: int = 0
    error: Optional[ConversionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def convert_file(
    json_path: Path,
    cancel_event: Optional[threading.Event] = None,
) -> FileResult:
    """Convert one whisper.cpp JSON file and write the .srt beside it.

    Args:
        json_path: Input file.
        cancel_event: When set, stop before writing anything.

    Returns:
        A successful FileResult.

    Raises:
        ConversionError: A subclass naming the failed stage, bound to json_path.
    """
    json_path = Path(json_path)
    should_cancel = cancel_event.is_set if cancel_event is not None else None

    try:
        if should_cancel is not None and should_cancel():
            raise ConversionCancelled("cancelled before start")

        try:
            content = json_path.read_bytes()
        except OSError as e:
            raise ReadError("cannot read input: {}".format(e.strerror or e)) from e

        document = parse_document(content)
        captions = build_captions(document, should_cancel)
        data = UTF8_BOM + "".join(format_caption(c) for c in captions).encode("utf-8")

        srt_path = output_path_for(json_path)
        try:
            srt_path.write_bytes(data)
        except OSError as e:
            raise WriteError("cannot write {}: {}".format(srt_path.name, e.strerror or e)) from e
    except ConversionError as e:
        if e.path is None:
            raise e.with_path(json_path) from e.__cause__
        raise

    return FileResult(source=json_path, output=srt_path, caption_count=len(captions))


# ---------------------------------------------------------------------------
# Batch
# ---------------------------------------------------------------------------


@dataclass
class BatchReport:
    """Per-file results of one batch, in input order."""

    results: List[FileResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> List[FileResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> List[FileResult]:
        return [r for r in self.results if not r.ok]

    @property
    def ok(self) -> bool:
        return not self.failed


class BatchRunner:
    """Convert many files with a fixed pool of worker threads.

    WHY: Parsing and rendering are cheap but file I/O is not, and a
    folder can hold hundreds of transcripts. A bounded pool keeps the
    machine busy without opening every file at once.

    HOW: run() fills a job queue with every path up front, starts
    ``workers`` threads that drain it, waits for them, then collects
    the result queue. Each worker handles its own exceptions so a bad
    file only ever produces a failed FileResult.

    RULES:
    - Pool size never exceeds the number of files
    - Results come back in the order the paths were given, whatever
      order the workers finished in
    - cancel() sets the shared event; workers stop pulling jobs
    """

    def __init__(
        self,
        workers: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        if workers is None:
            workers = load_worker_count()
        if workers < 1:
            raise ValueError("workers must be at least 1, got {}".format(workers))
        self.workers = workers
        self.cancel_event = cancel_event or threading.Event()

    def cancel(self) -> None:
        self.cancel_event.set()

    def run(self, paths: List[Path]) -> BatchReport:
        """Convert every path and return the collected report."""
        paths = [Path(p) for p in paths]
        if not paths:
            return BatchReport()

        jobs: queue.Queue = queue.Queue()
        results: queue.Queue = queue.Queue()
        for position, path in enumerate(paths):
            jobs.put((position, path))

        pool_size = min(self.workers, len(paths))
        logger.info("Starting %d worker(s) for %d file(s)", pool_size, len(paths))

        threads = [
            threading.Thread(
                target=self._worker,
                args=(worker_id, jobs, results),
                name="whisper-srt-worker-{}".format(worker_id),
                daemon=True,
            )
            for worker_id in range(1, pool_size + 1)
        ]
        for t in threads:
            t.start()
        try:
            for t in threads:
                t.join()
        except KeyboardInterrupt:
            logger.warning("Interrupted, letting workers finish their current file")
            self.cancel()
            for t in threads:
                t.join()

        collected: List[Optional[FileResult]] = [None] * len(paths)
        while True:
            try:
                position, result = results.get_nowait()
            except queue.Empty:
                break
            collected[position] = result

        # Paths never pulled from the queue because the batch was cancelled
        for position, result in enumerate(collected):
            if result is None:
                collected[position] = FileResult(
                    source=paths[position],
                    error=ConversionCancelled("cancelled before start", paths[position]),
                )

        return BatchReport(results=collected)

    def _worker(
        self,
        worker_id: int,
        jobs: "queue.Queue[Tuple[int, Path]]",
        results: "queue.Queue[Tuple[int, FileResult]]",
    ) -> None:
        while not self.cancel_event.is_set():
            try:
                position, path = jobs.get_nowait()
            except queue.Empty:
                return
            results.put((position, self._process(worker_id, path)))

    def _process(self, worker_id: int, path: Path) -> FileResult:
        logger.info("Worker %d converting %s", worker_id, path.name)
        try:
            result = convert_file(path, self.cancel_event)
        except ConversionError as e:
            logger.warning("Worker %d failed on %s", worker_id, e)
            return FileResult(source=path, error=e)
        except Exception as e:
            logger.exception("Worker %d hit an unexpected error on %s", worker_id, path.name)
            error = ConversionError("unexpected error: {}".format(e), path)
            error.__cause__ = e
            return FileResult(source=path, error=error)

        logger.info(
            "Worker %d wrote %s (%d caption(s))",
            worker_id, result.output.name, result.caption_count,
        )
        return result


def run_directory(
    directory: Path,
    workers: Optional[int] = None,
    cancel_event: Optional[threading.Event] = None,
) -> BatchReport:
    """Discover and convert every JSON file in ``directory``."""
    paths = discover_json_files(directory)
    if not paths:
        return BatchReport()
    return BatchRunner(workers=workers, cancel_event=cancel_event).run(paths)
