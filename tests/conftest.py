"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides the fakes shared across test packages: an in-memory Qdrant
client and an embedding service served through ``httpx.MockTransport``.
"""

import hashlib
import json
import re
import sys
from collections.abc import Generator
from pathlib import Path

import httpx
import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local codevector package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of codevector modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("codevector"):
        del sys.modules[module_name]

from qdrant_client import QdrantClient  # noqa: E402

from codevector.config.models import (  # noqa: E402
    CodeVectorConfig,
    EmbeddingConfig,
    VectorStoreConfig,
)

TEST_DIMENSION = 16
TEST_COLLECTION = "test_index"
TEST_EMBED_URL = "http://embed.test/api/embed"

# One top-level function and one method
GO_SOURCE = (
    "package main\n"
    "\n"
    'import "fmt"\n'
    "\n"
    "type Calc struct{}\n"
    "\n"
    "func Foo(a int) int {\n"
    "\treturn a + 1\n"
    "}\n"
    "\n"
    "func (c *Calc) Bar(msg string) {\n"
    "\tfmt.Println(msg)\n"
    "}\n"
)

FOO_SOURCE = "func Foo(a int) int {\n\treturn a + 1\n}"
BAR_SOURCE = "func (c *Calc) Bar(msg string) {\n\tfmt.Println(msg)\n}"


def fake_vector(text: str, dimension: int = TEST_DIMENSION) -> list[float]:
    """Deterministic bag-of-tokens vector; identical texts embed identically."""
    vector = [0.0] * dimension
    for token in re.findall(r"\w+", text):
        bucket = hashlib.sha256(token.encode()).digest()[0] % dimension
        vector[bucket] += 1.0
    vector[0] += 0.5  # never the zero vector
    return vector


class FakeEmbeddingService:
    """Ollama-compatible embed endpoint backed by ``fake_vector``.

    Inputs containing any string in ``fail_on`` get a 500 response.
    """

    def __init__(self, dimension: int = TEST_DIMENSION) -> None:
        self.dimension = dimension
        self.requests: list[dict[str, str]] = []
        self.fail_on: set[str] = set()

    def handle(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)
        if any(marker in body["input"] for marker in self.fail_on):
            return httpx.Response(500, json={"error": "model crashed"})
        return httpx.Response(
            200,
            json={
                "model": body["model"],
                "embeddings": [fake_vector(body["input"], self.dimension)],
            },
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture
def embedding_service() -> FakeEmbeddingService:
    """Fake embedding service recording every request."""
    return FakeEmbeddingService()


@pytest.fixture
def http_client(embedding_service: FakeEmbeddingService) -> Generator[httpx.Client, None, None]:
    """httpx client routed to the fake embedding service."""
    client = httpx.Client(transport=embedding_service.transport)
    yield client
    client.close()


@pytest.fixture
def qdrant() -> Generator[QdrantClient, None, None]:
    """In-memory Qdrant client."""
    client = QdrantClient(":memory:")
    yield client
    client.close()


@pytest.fixture
def config() -> CodeVectorConfig:
    """Config sized for the fake embedding service."""
    return CodeVectorConfig(
        embedding=EmbeddingConfig(url=TEST_EMBED_URL, model="test-model", timeout_sec=5),
        vector_store=VectorStoreConfig(collection=TEST_COLLECTION, dimension=TEST_DIMENSION),
    )


@pytest.fixture
def go_project(tmp_path: Path) -> Path:
    """Project with a single Go file holding Foo and Calc.Bar."""
    project = tmp_path / "project"
    project.mkdir()
    (project / "main.go").write_text(GO_SOURCE)
    return project


@pytest.fixture
def go_snippets() -> dict[str, str]:
    """Contents of the Go file in ``go_project`` and its two declarations."""
    return {"file": GO_SOURCE, "Foo": FOO_SOURCE, "Bar": BAR_SOURCE}


@pytest.fixture
def embed_text():
    """The fake embedding function, for computing expected vectors."""
    return fake_vector
