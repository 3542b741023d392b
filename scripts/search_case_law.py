"""Run one ranked case-law search from the command line."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from caselaw_ranker.api.app import build_pipeline
from caselaw_ranker.config.settings import get_settings
from caselaw_ranker.observability.logger import setup_logging


async def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("query")
    parser.add_argument("--case-id", default="cli")
    parser.add_argument("--keyword", action="append", dest="keywords", default=None)
    parser.add_argument("--top-k", type=int, default=None)
    parser.add_argument("--limit", type=int, default=10)
    args = parser.parse_args()

    settings = get_settings()
    setup_logging("WARNING")
    pipeline, _, closeables = build_pipeline(settings)

    try:
        results = await pipeline.search(
            args.case_id, args.query, top_k=args.top_k, keywords=args.keywords
        )
    finally:
        for closeable in closeables:
            await closeable.close()

    print(f"{len(results)} results for {args.query!r}\n")
    for rank, r in enumerate(results[: args.limit], start=1):
        b = r.score_breakdown
        rerank = f"{r.rerank_score:.3f}" if r.rerank_score is not None else "-"
        print(
            f"{rank:>2}. {r.metadata.ecli or r.id:<28} {r.court_type.value:<10} "
            f"adj={r.adjusted_score:.3f} (base={b.base_score:.3f} court={b.court_boost:+.2f} "
            f"kw={b.keyword_bonus:+.3f}) rerank={rerank}"
        )
        if r.metadata.title:
            print(f"    {r.metadata.title}")


if __name__ == "__main__":
    asyncio.run(main())
