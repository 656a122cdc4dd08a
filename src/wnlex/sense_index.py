"""Run-scoped map from (synset offset, pos, lemma) to a 0-based sense number.

Filled while the index files are parsed, then frozen and consulted while the
data files are parsed.
"""

import re

from wnlex.errors import SenseIndexConflict, SenseIndexFrozen, UnresolvedSense

# Trailing marker such as "(p)" or "(ip)" on adjective lemmas in data files
_PAREN_SUFFIX_RE = re.compile(r"\([^()]*\)$")

SenseKey = tuple[str, str, str]


def sense_key(offset: str, pos: str, lemma: str) -> SenseKey:
    return (offset, pos.lower(), lemma.lower())


class SenseIndex:
    def __init__(self) -> None:
        self._senses: dict[SenseKey, int] = {}
        self._frozen = False

    def __len__(self) -> int:
        return len(self._senses)

    def __contains__(self, key: object) -> bool:
        return key in self._senses

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def put(self, offset: str, pos: str, lemma: str, sense_number: int) -> None:
        if self._frozen:
            raise SenseIndexFrozen(
                f"Sense index is read-only; cannot add {lemma!r} ({offset}, {pos})"
            )
        key = sense_key(offset, pos, lemma)
        existing = self._senses.get(key)
        if existing is not None:
            raise SenseIndexConflict(
                f"Sense {key} already numbered {existing}, got {sense_number}"
            )
        self._senses[key] = sense_number

    def get(self, offset: str, pos: str, lemma: str) -> int:
        """Return the sense number for a word in a synset.

        Falls back once to the lemma with its trailing parenthesized marker
        removed. Raises UnresolvedSense if neither form is known.
        """
        key = sense_key(offset, pos, lemma)
        if key in self._senses:
            return self._senses[key]
        stripped = (key[0], key[1], _PAREN_SUFFIX_RE.sub("", key[2]))
        if stripped in self._senses:
            return self._senses[stripped]
        raise UnresolvedSense(
            f"Sense index does not contain sense {'%'.join(key)!r} "
            f"(tried {'%'.join(stripped)!r}, too)"
        )

    def senses_for(self, lemma: str, pos: str) -> dict[str, int]:
        """Return {offset: sense number} for every synset holding ``lemma``."""
        lemma, pos = lemma.lower(), pos.lower()
        return {
            offset: number
            for (offset, p, word), number in self._senses.items()
            if p == pos and word == lemma
        }
