"""
Utility Modules for the Democracy Analyzer

Shared text segmentation helpers used by the labeler and the session.
"""

from .text_utils import TextSummary, split_paragraphs, split_sentences, summarize_text

__all__ = [
    'TextSummary',
    'split_paragraphs',
    'split_sentences',
    'summarize_text',
]
