"""Splits text into message-sized pages and chunks."""

import re
from dataclasses import dataclass

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


@dataclass
class PageChunker:
    """Splits documents into pages and oversize messages into chunks.

    Attributes:
        max_size: Maximum characters per page or chunk.
    """

    max_size: int = 230

    def paginate(self, document: str) -> list[str]:
        """
        Split a document into pages of at most max_size characters.

        Paragraphs are packed together while they fit; a paragraph that is
        too long on its own is split on line, then word boundaries.

        Args:
            document: The text to split.

        Returns:
            List of pages (empty for blank input).
        """
        if self.max_size <= 0:
            raise ValueError("max_size must be positive")

        pages: list[str] = []
        current = ""

        for paragraph in _PARAGRAPH_BREAK.split(document.strip()):
            paragraph = paragraph.strip()
            if not paragraph:
                continue

            candidate = f"{current}\n\n{paragraph}" if current else paragraph
            if len(candidate) <= self.max_size:
                current = candidate
                continue

            if current:
                pages.append(current)
                current = ""

            if len(paragraph) <= self.max_size:
                current = paragraph
            else:
                pieces = self._split(paragraph, self.max_size)
                pages.extend(pieces[:-1])
                current = pieces[-1]

        if current:
            pages.append(current)
        return pages

    def chunk(self, content: str) -> list[str]:
        """
        Split content into chunks that fit within max_size.

        For single-chunk content, no page indicator is added.
        For multi-chunk content, each chunk ends with [n/total].

        Args:
            content: The content to split.

        Returns:
            List of chunks, each <= max_size characters.
        """
        content = content.strip()
        if not content:
            return []

        if len(content) <= self.max_size:
            return [content]

        # Reserve space for the longest indicator: " [99/99]"
        indicator_reserve = 8
        effective_max = self.max_size - indicator_reserve
        if effective_max <= 0:
            raise ValueError(f"max_size must be > {indicator_reserve}")

        raw_chunks = self._split(content, effective_max)
        total = len(raw_chunks)
        return [f"{chunk} [{i}/{total}]" for i, chunk in enumerate(raw_chunks, 1)]

    def _split(self, text: str, max_len: int) -> list[str]:
        chunks = []
        remaining = text

        while remaining:
            if len(remaining) <= max_len:
                chunks.append(remaining)
                break

            split_point = self._find_split_point(remaining, max_len)
            chunks.append(remaining[:split_point].rstrip())
            remaining = remaining[split_point:].lstrip()

        return chunks

    def _find_split_point(self, text: str, max_len: int) -> int:
        """
        Find the best point to split text at or before max_len.

        Prefers a line break, then a space, in the second half of the
        window. Falls back to a hard split.
        """
        if len(text) <= max_len:
            return len(text)

        window = text[:max_len]

        last_newline = window.rfind("\n")
        if last_newline > max_len // 2:
            return last_newline + 1

        last_space = window.rfind(" ")
        if last_space > max_len // 2:
            return last_space + 1

        return max_len
