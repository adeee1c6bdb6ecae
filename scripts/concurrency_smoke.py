"""Concurrent save/find/search smoke test for the document data store.

The script saves many documents from a thread pool, checks that every returned
id can be read back, then times a handful of searches. It prints a JSON report
so runs against the ``memory`` and ``sqlite`` backends can be compared.
"""

from __future__ import annotations

import argparse
import json
import logging
import statistics
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

CURRENT_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = CURRENT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from document_data_store.config import get_settings
from document_data_store.models.document import Author, Document
from document_data_store.repositories.filters import SearchRequest
from document_data_store.store import DocumentStore, create_document_store


def parse_args() -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Concurrent document store smoke test")
    parser.add_argument(
        "--backend",
        choices=("memory", "sqlite"),
        default=settings.backend,
        help="Repository backend (default from DOCUMENT_STORE_BACKEND).",
    )
    parser.add_argument(
        "--documents",
        type=int,
        default=1000,
        help="Number of documents to save (default 1000).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=8,
        help="Thread pool size (default 8).",
    )
    parser.add_argument(
        "--authors",
        type=int,
        default=5,
        help="Distinct author ids to spread documents across (default 5).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional path to write the JSON report instead of stdout.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings.",
    )
    return parser.parse_args()


def build_document(index: int, author_count: int) -> Document:
    author_index = index % author_count
    return Document(
        title=f"Document {index:05d}",
        content=f"Body of document {index} for author {author_index}",
        author=Author(id=f"author{author_index}", name=f"Author {author_index}"),
    )


def timed_save(store: DocumentStore, document: Document) -> tuple[str, float]:
    start = time.perf_counter()
    saved = store.save(document)
    return saved.id, (time.perf_counter() - start) * 1000


def measure_searches(store: DocumentStore, author_count: int) -> dict[str, Any]:
    requests = {
        "all": SearchRequest(),
        "title_prefix": SearchRequest(title_prefixes=["Document 000"]),
        "single_author": SearchRequest(author_ids=["author0"]),
        "content_and_author": SearchRequest(
            contains_contents=["author 1"],
            author_ids=[f"author{i}" for i in range(min(2, author_count))],
        ),
    }
    results: dict[str, Any] = {}
    for name, request in requests.items():
        start = time.perf_counter()
        matches = store.search(request)
        results[name] = {
            "matches": len(matches),
            "ms": (time.perf_counter() - start) * 1000,
        }
    return results


def main() -> None:
    args = parse_args()

    logging.basicConfig(
        level=logging.WARNING if args.quiet else get_settings().log_level.upper(),
        format="[%(levelname)s] %(message)s",
    )
    logger = logging.getLogger("concurrency_smoke")

    if args.documents < 1 or args.workers < 1 or args.authors < 1:
        raise ValueError("--documents, --workers and --authors must be positive")

    store = create_document_store(backend=args.backend)
    logger.info("Using %s backend with %d workers", args.backend, args.workers)

    documents = [build_document(index, args.authors) for index in range(args.documents)]

    start = time.perf_counter()
    with ThreadPoolExecutor(max_workers=args.workers) as pool:
        outcomes = list(pool.map(lambda doc: timed_save(store, doc), documents))
    total_save_ms = (time.perf_counter() - start) * 1000

    saved_ids = [document_id for document_id, _ in outcomes]
    save_latencies = [latency for _, latency in outcomes]
    logger.info("Saved %d documents in %.3fms", len(saved_ids), total_save_ms)

    missing = [document_id for document_id in saved_ids if store.find_by_id(document_id) is None]
    if missing:
        logger.error("%d saved document(s) could not be found", len(missing))
    if len(set(saved_ids)) != len(saved_ids):
        logger.error("Duplicate identifiers were generated")

    payload = {
        "backend": args.backend,
        "documents": args.documents,
        "workers": args.workers,
        "save_total_ms": total_save_ms,
        "save_avg_ms": statistics.fmean(save_latencies),
        "save_max_ms": max(save_latencies),
        "missing": len(missing),
        "searches": measure_searches(store, args.authors),
    }

    output = json.dumps(payload, indent=2)
    if args.output:
        args.output.write_text(output)
        logger.info("Wrote report to %s", args.output)
    else:
        print(output)

    if missing:
        sys.exit(1)


if __name__ == "__main__":
    main()
