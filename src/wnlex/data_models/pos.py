from enum import Enum


class PartOfSpeech(str, Enum):
    """Single-letter part-of-speech codes used throughout the WordNet files."""

    noun = "n"
    verb = "v"
    adjective = "a"
    satellite = "s"  # adjective satellite, only seen in synset headers
    adverb = "r"


def normalize_pos(code: str) -> str:
    """Rewrite the satellite code to the adjective code; pass others through."""
    if code == PartOfSpeech.satellite.value:
        return PartOfSpeech.adjective.value
    return code
