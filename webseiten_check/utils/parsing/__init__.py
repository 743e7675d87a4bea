# Parsing subpackage - JSON parsing utilities
from .json import extract_json_text, repair_and_parse_json

__all__ = [
    "extract_json_text",
    "repair_and_parse_json",
]
