"""
collection/corpus.py
--------------------
Corpus model and loaders for the novels under analysis.

A corpus is an ordered collection of books, each an ordered sequence of
chapter texts. Three on-disk shapes are supported:

- A directory of .txt files, one book per file, chapters split on headings
- A .jsonl file with one {"book", "chapter", "text"} record per chapter
- A .json file mapping book name -> list of chapter texts
"""

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# Chapter numbers in headings: digits, Roman numerals or English number words
_UNIT_WORDS = "ONE|TWO|THREE|FOUR|FIVE|SIX|SEVEN|EIGHT|NINE"
_TEEN_WORDS = "TEN|ELEVEN|TWELVE|THIRTEEN|FOURTEEN|FIFTEEN|SIXTEEN|SEVENTEEN|EIGHTEEN|NINETEEN"
_TENS_WORDS = "TWENTY|THIRTY|FORTY|FIFTY|SIXTY|SEVENTY|EIGHTY|NINETY"
CHAPTER_NUMBER = (
    rf"(?:\d+|[IVXLCDM]+|(?:{_TENS_WORDS})(?:[- ](?:{_UNIT_WORDS}))?|{_TEEN_WORDS}|{_UNIT_WORDS})"
)

# Chapter headings in plain-text books ("CHAPTER ONE", "CHAPTER 12 - ...").
# Case-sensitive and numbered, so prose lines like "Chapter and verse" stay text.
CHAPTER_HEADING_REGEX = re.compile(rf"^[ \t]*CHAPTER[ \t]+{CHAPTER_NUMBER}\b.*$", re.MULTILINE)

# Leading ordering prefix on book file names ("01_", "7-", "03 ")
ORDER_PREFIX_REGEX = re.compile(r"^\d+[\s_\-.]+")


@dataclass(frozen=True)
class Book:
    """A named novel as an ordered tuple of chapter texts."""
    name: str
    chapters: tuple[str, ...]

    def __post_init__(self):
        if isinstance(self.chapters, str):
            raise ValueError(f"Chapters for {self.name!r} must be a sequence of strings, not a string")
        object.__setattr__(self, "chapters", tuple(self.chapters))

    def __len__(self) -> int:
        return len(self.chapters)


@dataclass(frozen=True)
class Corpus:
    """Ordered, immutable collection of books."""
    books: tuple[Book, ...]

    def __post_init__(self):
        # Accept any iterable of books, store as tuple
        object.__setattr__(self, "books", tuple(self.books))
        seen = set()
        for book in self.books:
            if not isinstance(book, Book):
                raise ValueError(f"Corpus entries must be Book, got {type(book).__name__}")
            if book.name in seen:
                raise ValueError(f"Duplicate book name in corpus: {book.name!r}")
            seen.add(book.name)
            for idx, chapter in enumerate(book.chapters, 1):
                if not isinstance(chapter, str):
                    raise ValueError(
                        f"Chapter {idx} of {book.name!r} is not text "
                        f"({type(chapter).__name__})"
                    )

    def __iter__(self):
        return iter(self.books)

    def __len__(self) -> int:
        return len(self.books)

    @property
    def book_names(self) -> list[str]:
        return [book.name for book in self.books]

    @property
    def total_chapters(self) -> int:
        return sum(len(book) for book in self.books)

    def get(self, name: str) -> Book | None:
        """Look up a book by name (exact match)."""
        for book in self.books:
            if book.name == name:
                return book
        return None

    @classmethod
    def from_mapping(cls, mapping: dict) -> "Corpus":
        """
        Build a corpus from {book name: [chapter text, ...]}.

        Insertion order of the mapping is the book order.

        Raises:
            ValueError: If a chapter list is not a list/tuple of strings
        """
        books = []
        for name, chapters in mapping.items():
            if isinstance(chapters, str) or not isinstance(chapters, (list, tuple)):
                raise ValueError(
                    f"Chapters for {name!r} must be a list of strings, "
                    f"got {type(chapters).__name__}"
                )
            books.append(Book(name=str(name), chapters=tuple(chapters)))
        return cls(books=tuple(books))


def book_name_from_path(path: Path) -> str:
    """
    Derive a display name from a book file name.

    "01_philosophers_stone.txt" -> "philosophers stone"
    "Chamber-of-Secrets.txt" -> "Chamber of Secrets"
    """
    stem = ORDER_PREFIX_REGEX.sub("", path.stem)
    name = re.sub(r"[_\-]+", " ", stem).strip()
    return name or path.stem


def split_chapters(text: str, heading_regex: re.Pattern = CHAPTER_HEADING_REGEX) -> list[str]:
    """
    Split a plain-text book into chapter bodies.

    Text before the first heading is front matter and is dropped. A text
    without any heading is returned as a single chapter.
    """
    headings = list(heading_regex.finditer(text))
    if not headings:
        return [text.strip()] if text.strip() else []

    chapters = []
    for i, match in enumerate(headings):
        start = match.end()
        end = headings[i + 1].start() if i + 1 < len(headings) else len(text)
        chapters.append(text[start:end].strip())
    return chapters


def load_corpus_dir(
    directory: Path,
    heading_regex: re.Pattern = CHAPTER_HEADING_REGEX,
) -> Corpus:
    """Load every *.txt file in a directory as one book, ordered by file name."""
    paths = sorted(Path(directory).glob("*.txt"))
    if not paths:
        logger.warning(f"No .txt books found in {directory}")

    books = []
    for path in paths:
        text = path.read_text(encoding="utf-8")
        chapters = split_chapters(text, heading_regex)
        name = book_name_from_path(path)
        books.append(Book(name=name, chapters=tuple(chapters)))
        logger.debug(f"Loaded {name!r}: {len(chapters)} chapters from {path.name}")

    corpus = Corpus(books=tuple(books))
    logger.info(f"Loaded {len(corpus)} books ({corpus.total_chapters:,} chapters) from {directory}")
    return corpus


def load_corpus_jsonl(path: Path) -> Corpus:
    """
    Load chapter records from a JSONL file.

    Each line is {"book": str, "chapter": int (optional), "text": str}.
    Books keep the order in which they first appear. Chapters are sorted
    by their number when every record of a book has one, otherwise file
    order is kept. Malformed lines are skipped with a warning.
    """
    logger.info(f"Loading corpus from {path}")

    records: dict[str, list[tuple[int | None, str]]] = {}
    skipped = 0
    with open(path, "r", encoding="utf-8") as f:
        for line_num, line in enumerate(f, 1):
            if not line.strip():
                continue
            try:
                record = json.loads(line)
                book = record["book"]
                text = record["text"]
                chapter = record.get("chapter")
                if not isinstance(book, str) or not isinstance(text, str):
                    raise ValueError("'book' and 'text' must be strings")
                if chapter is not None and (isinstance(chapter, bool) or not isinstance(chapter, int)):
                    raise ValueError(f"'chapter' must be an integer, got {chapter!r}")
            except Exception as e:
                logger.warning(f"Skipping line {line_num}: {e}")
                skipped += 1
                continue
            records.setdefault(book, []).append((chapter, text))

    books = []
    for name, chapters in records.items():
        if all(number is not None for number, _ in chapters):
            chapters = sorted(chapters, key=lambda item: item[0])
        books.append(Book(name=name, chapters=tuple(text for _, text in chapters)))

    corpus = Corpus(books=tuple(books))
    logger.info(
        f"Loaded {len(corpus)} books ({corpus.total_chapters:,} chapters), "
        f"skipped {skipped} malformed lines"
    )
    return corpus


def load_corpus_json(path: Path) -> Corpus:
    """Load a {book name: [chapter text, ...]} JSON object."""
    logger.info(f"Loading corpus from {path}")
    with open(path, "r", encoding="utf-8") as f:
        mapping = json.load(f)

    if not isinstance(mapping, dict):
        raise ValueError(
            f"Expected a JSON object of book -> chapters in {path}, "
            f"got {type(mapping).__name__}"
        )

    corpus = Corpus.from_mapping(mapping)
    logger.info(f"Loaded {len(corpus)} books ({corpus.total_chapters:,} chapters)")
    return corpus


def load_corpus(path: Path | str) -> Corpus:
    """
    Load a corpus from a directory, .jsonl or .json file.

    Raises:
        FileNotFoundError: If the path does not exist
        ValueError: If the file type is not supported
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(
            f"Corpus not found at {path}. Set NOVELSTATS_CORPUS_PATH or pass --corpus."
        )

    if path.is_dir():
        return load_corpus_dir(path)

    suffix = path.suffix.lower()
    if suffix == ".jsonl":
        return load_corpus_jsonl(path)
    if suffix == ".json":
        return load_corpus_json(path)

    raise ValueError(
        f"Unsupported corpus file {path.name!r}: expected a directory, .jsonl or .json"
    )
