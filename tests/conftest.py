"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory async database, deterministic fake embeddings,
in-memory file storage, document and pipeline factories
Dependencies: pytest, sqlalchemy, aiosqlite, langchain_core
System role: Test infrastructure and fixture management
"""

import re
import threading
import uuid

import pytest
from langchain_core.embeddings import Embeddings


VOCABULARY = (
    "photosynthesis",
    "chlorophyll",
    "mitosis",
    "enzyme",
    "newton",
    "gravity",
    "algebra",
    "poetry",
)


class KeywordEmbeddings(Embeddings):
    """Bag-of-keywords vectors: one dimension per vocabulary word plus a bias."""

    def __init__(self, vocabulary=VOCABULARY):
        self.vocabulary = vocabulary
        self.document_inputs: list[str] = []
        self.query_inputs: list[str] = []
        self._lock = threading.Lock()

    @property
    def dimension(self) -> int:
        return len(self.vocabulary) + 1

    def _vector(self, text: str) -> list[float]:
        words = re.findall(r"[a-z]+", text.lower())
        return [float(words.count(term)) for term in self.vocabulary] + [0.1]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        with self._lock:
            self.document_inputs.extend(texts)
        return [self._vector(t) for t in texts]

    def embed_query(self, text: str) -> list[float]:
        with self._lock:
            self.query_inputs.append(text)
        return self._vector(text)


class FailingEmbeddings(KeywordEmbeddings):
    """Succeeds for the first calls, then raises on every document call."""

    def __init__(self, fail_from_call: int, error: Exception | None = None):
        super().__init__()
        self.fail_from_call = fail_from_call
        self.error = error or RuntimeError("embedding quota exceeded")
        self.calls = 0

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        with self._lock:
            self.calls += 1
            call_number = self.calls
        if call_number >= self.fail_from_call:
            raise self.error
        return super().embed_documents(texts)

    def embed_query(self, text: str) -> list[float]:
        raise self.error


class InMemoryStorage:
    """File storage keyed by file reference."""

    def __init__(self):
        self.files: dict[str, tuple[bytes, str]] = {}

    def put(self, file_ref: str, blob: bytes, content_type: str = "text/plain") -> str:
        self.files[file_ref] = (blob, content_type)
        return file_ref

    async def get_download_url(self, file_ref: str) -> str | None:
        if file_ref not in self.files:
            return None
        return f"memory://{file_ref}"

    async def fetch(self, url: str) -> tuple[bytes, str]:
        return self.files[url.removeprefix("memory://")]


@pytest.fixture
async def engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine shared by every session of one test
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool
    from study_rag.boundary.db.create_tables import create_all_tables, drop_all_tables

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all_tables(engine)

    yield engine

    await drop_all_tables(engine)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Session factory matching the production configuration."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_async_db(session_factory):
    """
    Database session for a test.

    Yields:
        AsyncSession: Test database session
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def keyword_embeddings():
    return KeywordEmbeddings()


@pytest.fixture
def embedding_client(keyword_embeddings):
    """EmbeddingClient over deterministic keyword embeddings."""
    from study_rag.boundary.embeddings import EmbeddingClient

    return EmbeddingClient(
        embeddings=keyword_embeddings,
        model_id="test-keyword-model",
        dimension=keyword_embeddings.dimension,
    )


@pytest.fixture
def failing_embeddings_factory():
    """Build FailingEmbeddings(fail_from_call)."""
    return FailingEmbeddings


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def make_document(session_factory):
    """
    Factory inserting a committed document.

    Returns:
        Callable: async (**fields) -> uuid.UUID
    """
    from study_rag.boundary.db.CRUD.document_crud import document_crud

    async def _make(
        owner_id: str = "owner-a",
        collection_id: uuid.UUID | None = None,
        name: str = "notes.txt",
        file_ref: str | None = None,
        extracted_content: str | None = None,
    ) -> uuid.UUID:
        async with session_factory() as session:
            document = await document_crud.create(
                session,
                owner_id=owner_id,
                collection_id=collection_id,
                name=name,
                file_ref=file_ref or f"documents/{uuid.uuid4()}/{name}",
                extracted_content=extracted_content,
            )
            await session.commit()
            return document.id

    return _make


@pytest.fixture
def make_pipeline(session_factory, storage, embedding_client):
    """
    Factory building an IngestionPipeline over the test database.

    Returns:
        Callable: (embedding_client=None, **settings) -> IngestionPipeline
    """
    from study_rag.core.document_processing import IngestionPipeline, IngestionSettings

    def _make(client=None, **settings):
        return IngestionPipeline(
            session_factory=session_factory,
            storage=storage,
            embedding_client=client or embedding_client,
            settings=IngestionSettings(**settings),
        )

    return _make


def study_text(length: int) -> str:
    """Printable text of an exact length."""
    base = (
        "Photosynthesis converts light energy into chemical energy. "
        "Chlorophyll absorbs light in the leaves. "
    )
    text = (base * (length // len(base) + 1))[:length]
    if text.endswith(" "):
        text = text[:-1] + "."
    return text


@pytest.fixture
def make_text():
    return study_text
