"""
Lexical analysis of post text.
"""

from .text_analysis import JanomeTokenizer, TextAnalyzer, Token

__all__ = [
    "JanomeTokenizer",
    "TextAnalyzer",
    "Token",
]
