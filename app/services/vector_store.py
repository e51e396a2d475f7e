"""
Vector store client: Milvus Cloud connection and query embeddings (HF Inference API).

Responsibility: Connect to Milvus and embed query text via all-MiniLM-L6-v2.
The collection itself is built and filled outside this service.
"""

import logging
from typing import Any

import httpx

from app.core.config import (
    EMBED_API_TIMEOUT,
    HF_API_KEY,
    HF_EMBED_MODEL,
    MILVUS_TOKEN,
    MILVUS_URI,
)
from app.core.errors import ServiceUnavailableError

logger = logging.getLogger(__name__)

HF_API_URL_ROUTER = (
    "https://router.huggingface.co/hf-inference/models/"
    f"{HF_EMBED_MODEL}/pipeline/feature-extraction"
)
HF_API_URL_STANDARD = f"https://api-inference.huggingface.co/models/{HF_EMBED_MODEL}"


class Embedder:
    """
    Embed texts using the Hugging Face Inference API (all-MiniLM-L6-v2).

    Holds one httpx.Client for the life of the process. Returns 384-dim vectors
    normalized for cosine similarity.
    """

    def __init__(
        self,
        api_key: str = HF_API_KEY,
        timeout: float = EMBED_API_TIMEOUT,
        http_client: httpx.Client | None = None,
    ) -> None:
        if not api_key:
            raise ServiceUnavailableError(
                "HF_API_KEY must be set in .env. Get a token from https://huggingface.co/settings/tokens"
            )
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        self._http = http_client or httpx.Client(timeout=timeout)

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []

        payload = {"inputs": texts, "options": {"wait_for_model": True}}
        api_urls = [HF_API_URL_ROUTER, HF_API_URL_STANDARD]
        response = None
        last_error: str | None = None

        for api_url in api_urls:
            try:
                response = self._http.post(api_url, json=payload, headers=self._headers)
                if response.status_code == 200:
                    break
                if response.status_code == 403 and api_url == HF_API_URL_ROUTER:
                    last_error = response.text
                    continue
                break
            except httpx.HTTPError as e:
                last_error = str(e)
                if api_url == api_urls[-1]:
                    raise
                continue

        if response is None or response.status_code != 200:
            msg = response.text if response is not None else last_error
            if response is not None and response.status_code == 503:
                raise RuntimeError(f"HF model is loading. Retry later. {msg}")
            if response is not None and response.status_code == 401:
                raise ValueError(
                    "Invalid HF API key. Check HF_API_KEY at https://huggingface.co/settings/tokens"
                )
            raise RuntimeError(f"HF API error: {msg}")

        result = response.json()
        if isinstance(result, list) and result and isinstance(result[0], list):
            vectors = result
        else:
            vectors = [
                item if isinstance(item, list) else [item]
                for item in (result if isinstance(result, list) else [result])
            ]

        # Normalize for cosine similarity (Milvus COSINE)
        embeddings: list[list[float]] = []
        for vec in vectors:
            norm = sum(x * x for x in vec) ** 0.5
            if norm == 0:
                norm = 1.0
            embeddings.append([x / norm for x in vec])
        return embeddings


def get_milvus_client(uri: str = MILVUS_URI, token: str = MILVUS_TOKEN) -> Any:
    """Connect to Milvus Cloud and return a client."""
    if not uri or not token:
        raise ServiceUnavailableError("MILVUS_URI and MILVUS_TOKEN must be set in .env")

    from pymilvus import MilvusClient

    client = MilvusClient(uri=uri, token=token)
    logger.info("Milvus connection established")
    return client
