"""Tests for the PageChunker module."""

import pytest
from chat_paginator.core.page_chunker import PageChunker


class TestPaginate:
    """Tests for splitting a document into pages."""

    @pytest.fixture
    def chunker(self):
        """A chunker with small pages for readable tests."""
        return PageChunker(max_size=40)

    def test_blank_document_has_no_pages(self, chunker):
        """Blank documents produce no pages."""
        assert chunker.paginate("") == []
        assert chunker.paginate("  \n\n  ") == []

    def test_short_document_is_one_page(self, chunker):
        """A short document is a single page."""
        assert chunker.paginate("Hello world") == ["Hello world"]

    def test_paragraphs_packed_while_they_fit(self, chunker):
        """Short paragraphs share a page, separated by a blank line."""
        document = "First para.\n\nSecond para.\n\nA third paragraph that is long."
        pages = chunker.paginate(document)
        assert pages == ["First para.\n\nSecond para.", "A third paragraph that is long."]

    def test_extra_blank_lines_collapse(self, chunker):
        """Runs of blank lines collapse to one separator."""
        pages = chunker.paginate("One\n\n\n   \n\nTwo")
        assert pages == ["One\n\nTwo"]

    def test_long_paragraph_split_on_words(self, chunker):
        """Oversize paragraphs split on word boundaries."""
        paragraph = "word " * 30
        pages = chunker.paginate(paragraph)
        assert len(pages) > 1
        for page in pages:
            assert len(page) <= 40
            assert not page.startswith(" ")
        assert " ".join(pages).split() == paragraph.split()

    def test_remainder_of_split_packs_with_next_paragraph(self):
        """The tail of a split paragraph shares a page with the next one."""
        chunker = PageChunker(max_size=20)
        pages = chunker.paginate("aaaa bbbb cccc dddd eeee\n\nff")
        assert pages[-1].endswith("ff")
        assert all(len(page) <= 20 for page in pages)

    def test_no_page_indicators(self, chunker):
        """Pages are not numbered; the controls show position."""
        pages = chunker.paginate("x " * 100)
        assert not any("[1/" in page for page in pages)

    def test_invalid_size(self):
        """A non-positive size raises ValueError."""
        with pytest.raises(ValueError):
            PageChunker(max_size=0).paginate("text")


class TestChunk:
    """Tests for splitting one oversize message into numbered chunks."""

    @pytest.fixture
    def small_chunker(self):
        return PageChunker(max_size=50)

    def test_default_max_size(self):
        """Default max_size is 230."""
        assert PageChunker().max_size == 230

    def test_short_content_single_chunk(self, small_chunker):
        """Short content is returned as-is without an indicator."""
        assert small_chunker.chunk("Hello world") == ["Hello world"]

    def test_empty_content(self, small_chunker):
        """Whitespace-only content has no chunks."""
        assert small_chunker.chunk("   \n  \t  ") == []

    def test_exact_max_size_single_chunk(self, small_chunker):
        """Content of exactly max_size is one chunk."""
        content = "A" * 50
        assert small_chunker.chunk(content) == [content]

    def test_indicators(self, small_chunker):
        """Multi-chunk content ends each chunk with [n/total]."""
        chunks = small_chunker.chunk("A" * 150)
        total = len(chunks)
        assert total >= 3
        for i, chunk in enumerate(chunks, 1):
            assert chunk.endswith(f"[{i}/{total}]")
            assert len(chunk) <= 50

    def test_realistic_230_char_limit(self):
        """Long text splits within the mesh message limit."""
        chunker = PageChunker(max_size=230)
        chunks = chunker.chunk("This is a sample text file. " * 50)
        assert len(chunks) >= 6
        assert all(len(chunk) <= 230 for chunk in chunks)

    def test_unicode_content(self):
        """Unicode content passes through unchanged."""
        content = "Hello 世界! Emoji: 🎉🚀"
        assert PageChunker().chunk(content) == [content]

    def test_max_size_too_small_raises(self):
        """max_size smaller than the indicator reserve raises ValueError."""
        with pytest.raises(ValueError, match="max_size must be"):
            PageChunker(max_size=5).chunk("A" * 100)


class TestSplitPoint:
    """Tests for _find_split_point."""

    def test_short_text(self):
        """Text within the limit splits at its end."""
        assert PageChunker()._find_split_point("short text", 50) == len("short text")

    def test_prefers_newline(self):
        """A newline is preferred as the split point."""
        text = "a" * 15 + "\n" + "b b b b b b" + "c" * 30
        assert PageChunker()._find_split_point(text, 25) == 16

    def test_falls_back_to_space(self):
        """Without a newline a space is used."""
        text = "a" * 15 + " " + "b" * 20
        assert PageChunker()._find_split_point(text, 20) == 16

    def test_hard_split(self):
        """Without whitespace the split is at the limit."""
        assert PageChunker()._find_split_point("x" * 40, 20) == 20
