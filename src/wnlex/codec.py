"""Two-level delimiter encoding shared by all converted records.

A record value is its top-level fields joined with ``DELIM``; repeated items
inside one field are joined with ``SUB_DELIM``. Keys join their parts with
``KEY_DELIM``. The separators are those of the existing converted lexicon
databases, so output stays byte-compatible with them.
"""

from collections.abc import Iterable

DELIM = "||"
SUB_DELIM = "|"
KEY_DELIM = "%"


def encode(*fields: object) -> str:
    return DELIM.join("" if f is None else str(f) for f in fields)


def join_items(items: Iterable[str]) -> str:
    return SUB_DELIM.join(items)


def decode(value: str) -> list[str]:
    return value.split(DELIM)


def split_items(field: str) -> list[str]:
    """Split one field into its items; an empty field has no items."""
    if not field:
        return []
    return field.split(SUB_DELIM)


def make_key(*parts: str) -> str:
    return KEY_DELIM.join(parts)


def split_key(key: str) -> tuple[str, str]:
    """Split a record key into its two parts.

    The split happens at the last separator, so a lemma containing the
    separator still comes back whole.
    """
    head, sep, tail = key.rpartition(KEY_DELIM)
    if not sep:
        raise ValueError(f"Not a record key: {key!r}")
    return head, tail
