"""
Text Utility Functions

Segmentation helpers shared by the labeler and the session, plus a short
statistical summary of extracted text.
"""

import re
from dataclasses import dataclass

_PARAGRAPH_BREAK = re.compile(r'\n\s*\n')
_SENTENCE = re.compile(r'[^.!?]+[.!?]+')


def split_paragraphs(text: str) -> list[str]:
    """
    Split text on blank-line boundaries.

    Example:
        >>> split_paragraphs("First.\\n\\nSecond.")
        ['First.', 'Second.']
    """
    if not text:
        return []
    return _PARAGRAPH_BREAK.split(text)


def split_sentences(text: str) -> list[str]:
    """
    Split text into sentences ending with '.', '!' or '?'.

    Runs of terminators stay with their sentence ("Really?!"). A trailing
    fragment with no terminator is dropped. Sentences are returned unstripped.

    Example:
        >>> split_sentences("One. Two! Three")
        ['One.', ' Two!']
    """
    if not text:
        return []
    return _SENTENCE.findall(text)


@dataclass(frozen=True)
class TextSummary:
    """Word, character and paragraph counts for a block of text."""
    words: int
    characters: int
    paragraphs: int

    def describe(self) -> str:
        if not self.characters:
            return "No text extracted"
        return (
            f"Extracted {self.words:,} words ({self.characters:,} characters) "
            f"in {self.paragraphs} paragraphs."
        )


def summarize_text(text: str) -> TextSummary:
    """
    Count words, characters and paragraphs.

    Blank text yields an all-zero summary.
    """
    if not text or not text.strip():
        return TextSummary(words=0, characters=0, paragraphs=0)
    return TextSummary(
        words=len(text.split()),
        characters=len(text),
        paragraphs=len(split_paragraphs(text)),
    )
