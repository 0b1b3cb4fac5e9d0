"""Unit tests for fixed-window chunking."""

import pytest

from study_rag.core.document_processing.tasks.chunking_task import ChunkingTask


def _text(length: int) -> str:
    return "".join(chr(ord("a") + i % 26) for i in range(length))


def test_4500_chars_produce_three_windows():
    text = _text(4500)
    chunks = ChunkingTask(chunk_size=2000, chunk_overlap=200).chunk(text)

    assert len(chunks) == 3
    assert [c.start_index for c in chunks] == [0, 1800, 3600]
    assert len(chunks[-1].text) == 900
    assert [c.text for c in chunks] == [text[0:2000], text[1800:3800], text[3600:4500]]


@pytest.mark.parametrize(
    "length, size, overlap",
    [
        (10, 2000, 200),
        (2000, 2000, 200),
        (2001, 2000, 200),
        (3999, 2000, 200),
        (1300, 100, 10),
        (57, 7, 3),
        (50, 10, 0),
    ],
)
def test_windows_cover_text_with_exact_overlap(length, size, overlap):
    text = _text(length)
    chunks = ChunkingTask(chunk_size=size, chunk_overlap=overlap).chunk(text)

    assert chunks[0].start_index == 0
    assert chunks[-1].end_index == length
    assert [c.chunk_index for c in chunks] == list(range(len(chunks)))

    rebuilt = chunks[0].text
    for previous, current in zip(chunks, chunks[1:]):
        assert len(previous.text) == size
        assert previous.end_index - current.start_index == overlap
        if overlap:
            assert previous.text[-overlap:] == current.text[:overlap]
        rebuilt += current.text[overlap:]
    assert rebuilt == text


def test_chunking_is_deterministic():
    text = _text(9876)
    task = ChunkingTask(chunk_size=500, chunk_overlap=50)
    assert task.chunk(text) == task.chunk(text)


def test_short_text_is_single_chunk():
    chunks = ChunkingTask().chunk("Hello world")
    assert len(chunks) == 1
    assert chunks[0].text == "Hello world"


def test_empty_text_has_no_chunks():
    assert ChunkingTask().chunk("") == []


@pytest.mark.parametrize("size, overlap", [(0, 0), (-5, 0), (100, 100), (100, 150), (100, -1)])
def test_invalid_window_configuration(size, overlap):
    with pytest.raises(ValueError):
        ChunkingTask(chunk_size=size, chunk_overlap=overlap)
