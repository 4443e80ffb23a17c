"""Embedding service client.

One synchronous HTTP request per text: POST ``{"model", "input"}`` to the
configured endpoint and read the first vector of ``embeddings`` from the
response. No batching, no retries.
"""

from __future__ import annotations

from typing import Any

import httpx
import numpy as np
import structlog

from codevector.config.models import EmbeddingConfig
from codevector.core.cancellation import CancellationToken
from codevector.core.errors import EmbeddingError

log = structlog.get_logger(__name__)


class OllamaEmbeddingClient:
    """Client for an Ollama-compatible ``/api/embed`` endpoint.

    Args:
        config: Endpoint URL, model name and request timeout.
        client: Optional pre-built ``httpx.Client`` (tests inject one backed
            by ``httpx.MockTransport``). Owned by the caller when given.
    """

    def __init__(self, config: EmbeddingConfig, client: httpx.Client | None = None) -> None:
        self.config = config
        self._owns_client = client is None
        self._client = client or httpx.Client()

    @property
    def url(self) -> str:
        return self.config.url

    @property
    def model(self) -> str:
        return self.config.model

    def embed(self, text: str, *, cancel: CancellationToken | None = None) -> list[float]:
        """Embed *text* and return its vector at float32 precision.

        Raises:
            OperationCancelledError: If *cancel* fired before the request.
            EmbeddingError: On transport failure, a non-200 status, an
                undecodable body, an empty ``embeddings`` list or a first
                vector that is not a flat non-empty list of numbers.
        """
        token = cancel or CancellationToken.none()
        token.raise_if_cancelled("embedding")

        try:
            response = self._client.post(
                self.url,
                json={"model": self.model, "input": text},
                timeout=token.timeout(self.config.timeout_sec),
            )
        except httpx.HTTPError as e:
            raise EmbeddingError.request_failed(self.url, str(e)) from e

        if response.status_code != 200:
            raise EmbeddingError.bad_status(self.url, response.status_code)

        vectors = self._parse_embeddings(response)
        if not vectors:
            raise EmbeddingError.empty(self.model)

        try:
            vector = np.asarray(vectors[0], dtype=np.float32)
            if vector.ndim != 1 or vector.size == 0:
                raise ValueError(f"expected a flat non-empty vector, got shape {vector.shape}")
            values = [float(v) for v in vector]
        except (TypeError, ValueError) as e:
            raise EmbeddingError.bad_response(f"malformed vector: {e}") from e
        log.debug("embedding_complete", model=self.model, dimension=len(values))
        return values

    @staticmethod
    def _parse_embeddings(response: httpx.Response) -> list[Any]:
        try:
            body = response.json()
        except ValueError as e:
            raise EmbeddingError.bad_response(f"invalid JSON: {e}") from e

        if not isinstance(body, dict):
            raise EmbeddingError.bad_response("response body is not an object")
        vectors = body.get("embeddings", [])
        if not isinstance(vectors, list) or (vectors and not isinstance(vectors[0], list)):
            raise EmbeddingError.bad_response("'embeddings' is not a list of vectors")
        # JSON numbers only, bool excluded
        if vectors and not all(
            isinstance(v, int | float) and not isinstance(v, bool) for v in vectors[0]
        ):
            raise EmbeddingError.bad_response("vector elements must be numbers")
        return vectors

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
