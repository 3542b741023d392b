"""Upsert (or delete) case-law records in the vector index from a JSONL file.

Each line: {"id": "...", "text": "...", "metadata": {...}}.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from caselaw_ranker.config.settings import get_settings
from caselaw_ranker.models.domain import VectorRecord
from caselaw_ranker.retrieval.vector_search import VectorSearchClient
from caselaw_ranker.vectorstore.pinecone_index import PineconeIndex

BATCH_SIZE = 90


def load_records(path: Path) -> list[VectorRecord]:
    records = []
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            data = json.loads(line)
            records.append(
                VectorRecord(id=data["id"], text=data["text"], metadata=data.get("metadata", {}))
            )
    return records


async def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("path", type=Path, help="JSONL file with records (or ids with --delete)")
    parser.add_argument("--namespace", default=None)
    parser.add_argument("--delete", action="store_true", help="Delete the listed record ids")
    args = parser.parse_args()

    settings = get_settings()
    index = PineconeIndex(
        api_key=settings.pinecone_api_key,
        index_host=settings.pinecone_index_host,
        namespace=settings.pinecone_namespace,
        timeout=settings.vector_search_timeout_seconds,
        api_version=settings.pinecone_api_version,
    )
    client = VectorSearchClient(index, settings)

    records = load_records(args.path)
    print(f"Loaded {len(records)} records from {args.path}")

    try:
        for i in range(0, len(records), BATCH_SIZE):
            batch = records[i : i + BATCH_SIZE]
            if args.delete:
                await client.delete([r.id for r in batch], namespace=args.namespace)
            else:
                await client.upsert(batch, namespace=args.namespace)
            print(f"  {'deleted' if args.delete else 'upserted'} {i + len(batch)}/{len(records)}")
    finally:
        await index.close()

    print("Done!")


if __name__ == "__main__":
    asyncio.run(main())
