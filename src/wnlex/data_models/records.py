"""Converted lexicon records and their (key, value) text form."""

from pydantic import BaseModel, ConfigDict

from wnlex.codec import decode, encode, join_items, make_key, split_items, split_key


class IndexRecord(BaseModel):
    """One line of an index file: a lemma and the synsets it belongs to."""

    model_config = ConfigDict(frozen=True)

    lemma: str
    pos: str
    polysemy_count: int
    offsets: list[str] = []  # in index-file order; position = sense number

    @property
    def key(self) -> str:
        return make_key(self.lemma, self.pos)

    @property
    def value(self) -> str:
        return encode(self.polysemy_count, join_items(self.offsets))

    def pair(self) -> tuple[str, str]:
        return self.key, self.value

    @classmethod
    def from_pair(cls, key: str, value: str) -> "IndexRecord":
        lemma, pos = split_key(key)
        polycnt, offsets = decode(value)
        return cls(
            lemma=lemma,
            pos=pos,
            polysemy_count=int(polycnt),
            offsets=split_items(offsets),
        )


class MorphRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    form: str  # inflected exception form, e.g. "ran"
    pos: str
    base: str

    @property
    def key(self) -> str:
        return make_key(self.form, self.pos)

    @property
    def value(self) -> str:
        return self.base

    def pair(self) -> tuple[str, str]:
        return self.key, self.value

    @classmethod
    def from_pair(cls, key: str, value: str) -> "MorphRecord":
        form, pos = split_key(key)
        return cls(form=form, pos=pos, base=value)


class WordSense(BaseModel):
    model_config = ConfigDict(frozen=True)

    word: str  # as written in the data file, case and markers kept
    sense_number: int

    def encode(self) -> str:
        return f"{self.word}%{self.sense_number}"

    @classmethod
    def decode(cls, item: str) -> "WordSense":
        word, number = split_key(item)
        return cls(word=word, sense_number=int(number))


class Pointer(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    target_offset: str
    target_pos: str
    lex_ids: str  # 4 hex digits: source word number, then target word number

    @property
    def source_word(self) -> int:
        """1-based word number in this synset; 0 means the whole synset."""
        return int(self.lex_ids[:2], 16)

    @property
    def target_word(self) -> int:
        return int(self.lex_ids[2:], 16)

    def encode(self) -> str:
        return f"{self.symbol} {self.target_offset}%{self.target_pos} {self.lex_ids}"

    @classmethod
    def decode(cls, item: str) -> "Pointer":
        symbol, target, lex_ids = item.split(" ")
        offset, pos = split_key(target)
        return cls(symbol=symbol, target_offset=offset, target_pos=pos, lex_ids=lex_ids)


class VerbFrame(BaseModel):
    model_config = ConfigDict(frozen=True)

    frame_number: str  # 2 digits
    word_index: str  # 2 hex digits; "00" means every word in the synset

    def encode(self) -> str:
        return f"{self.frame_number} {self.word_index}"

    @classmethod
    def decode(cls, item: str) -> "VerbFrame":
        frame_number, word_index = item.split(" ")
        return cls(frame_number=frame_number, word_index=word_index)


class SynsetRecord(BaseModel):
    """One line of a data file. ``pos`` is already normalized."""

    model_config = ConfigDict(frozen=True)

    offset: str
    pos: str
    file_number: str
    words: list[WordSense] = []
    pointers: list[Pointer] = []
    frames: list[VerbFrame] = []
    gloss: str | None = None

    @property
    def key(self) -> str:
        return make_key(self.offset, self.pos)

    @property
    def value(self) -> str:
        return encode(
            self.file_number,
            join_items(w.encode() for w in self.words),
            join_items(p.encode() for p in self.pointers),
            join_items(f.encode() for f in self.frames),
            self.gloss,
        )

    def pair(self) -> tuple[str, str]:
        return self.key, self.value

    @classmethod
    def from_pair(cls, key: str, value: str) -> "SynsetRecord":
        offset, pos = split_key(key)
        file_number, words, pointers, frames, gloss = decode(value)
        return cls(
            offset=offset,
            pos=pos,
            file_number=file_number,
            words=[WordSense.decode(w) for w in split_items(words)],
            pointers=[Pointer.decode(p) for p in split_items(pointers)],
            frames=[VerbFrame.decode(f) for f in split_items(frames)],
            gloss=gloss or None,
        )


Record = IndexRecord | MorphRecord | SynsetRecord
