"""
Retrieval: semantic search over the persona documents in Milvus.

Responsibility: Embed the query, search Milvus, return the top passages in rank order.
"""

import logging
from typing import Any

from app.core.config import COLLECTION_NAME, CONTEXT_TOP_K, MILVUS_TEXT_FIELD
from app.services.vector_store import Embedder

logger = logging.getLogger(__name__)


def parse_hits(hits: list[Any], text_field: str = MILVUS_TEXT_FIELD) -> list[dict]:
    """Turn raw Milvus hits into {id, text, score, metadata} dicts, keeping their order."""
    passages = []
    for h in hits:
        # Milvus returns dict with "distance", "id", and optionally "entity" (output_fields)
        score = float(h.get("distance", h.get("score", 0.0)))
        e = h.get("entity") or h
        passages.append({
            "id": e.get("id", h.get("id")),
            "text": e.get(text_field) or "",
            "score": score,
            "metadata": {k: v for k, v in e.items() if k not in ("id", "distance", "score", text_field)},
        })
    return passages


class MilvusRetriever:
    """Top-K similarity search by query text."""

    def __init__(
        self,
        client: Any,
        embedder: Embedder,
        collection_name: str = COLLECTION_NAME,
        text_field: str = MILVUS_TEXT_FIELD,
    ) -> None:
        self._client = client
        self._embedder = embedder
        self._collection = collection_name
        self._text_field = text_field

    def similarity_search(self, query: str, k: int = CONTEXT_TOP_K) -> list[dict]:
        logger.info("[retrieval:similarity_search] IN  query=%r k=%d", query, k)
        if not query or not query.strip():
            logger.info("[retrieval:similarity_search] OUT empty query, returning []")
            return []

        query_vec = self._embedder.embed_texts([query.strip()])
        if not query_vec:
            logger.warning("[retrieval:similarity_search] embed_texts returned empty")
            return []

        results = self._client.search(
            collection_name=self._collection,
            data=query_vec,
            limit=k,
            output_fields=[self._text_field],
        )
        # results: list of list of hits (one list per query vector)
        passages = parse_hits(results[0] if results else [], self._text_field)
        logger.info(
            "[retrieval:similarity_search] OUT passages=%d scores=%s",
            len(passages),
            [round(p["score"], 4) for p in passages],
        )
        return passages
