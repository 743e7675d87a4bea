# Analyzer package - capture, prompts and scoring
from .prompts import get_website_prompt, get_text_prompt
from .pipeline import analyze_website, analyze_text

__all__ = [
    "get_website_prompt",
    "get_text_prompt",
    "analyze_website",
    "analyze_text",
]
