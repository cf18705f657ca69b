from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import yaml

WORDS_FILE = "words.yaml"
QUOTES_FILE = "quotes.yaml"


@dataclass(frozen=True)
class Quote:
    text: str
    source: str


def default_data_dir() -> Path:
    return Path(__file__).resolve().parent.parent / "data"


class CorpusRepository:
    """Word list and quotations read from YAML files.

    ``words.yaml`` holds a mapping with a ``words`` list; ``quotes.yaml`` holds a
    list of ``{text, source}`` mappings. Either file may be given explicitly,
    otherwise both are looked up in ``data_dir``.
    """

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        words_path: Optional[Path] = None,
        quotes_path: Optional[Path] = None,
    ) -> None:
        base_dir = Path(data_dir) if data_dir is not None else default_data_dir()
        if (words_path is None or quotes_path is None) and not base_dir.exists():
            raise FileNotFoundError(f"Data directory not found: {base_dir}")
        self._words = self._load_words(Path(words_path) if words_path else base_dir / WORDS_FILE)
        self._quotes = self._load_quotes(Path(quotes_path) if quotes_path else base_dir / QUOTES_FILE)

    def words(self) -> List[str]:
        return list(self._words)

    def quotes(self) -> List[Quote]:
        return list(self._quotes)

    def _load_words(self, path: Path) -> List[str]:
        raw = _read_yaml(path)
        if not isinstance(raw, dict) or "words" not in raw:
            raise ValueError(f"{path.name}: expected YAML with a 'words' list")
        content = raw["words"]
        if not isinstance(content, list):
            raise ValueError(f"{path.name}: 'words' must be a list")
        return [str(item).strip() for item in content if item is not None and str(item).strip()]

    def _load_quotes(self, path: Path) -> List[Quote]:
        raw = _read_yaml(path)
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise ValueError(f"{path.name}: expected a list of quotes")
        quotes: List[Quote] = []
        for position, item in enumerate(raw):
            if not isinstance(item, dict):
                raise ValueError(f"{path.name}: quote #{position} is not a mapping")
            text = item.get("text")
            if not text or not isinstance(text, str):
                raise ValueError(f"{path.name}: quote #{position} has no 'text'")
            source = item.get("source") or "Unknown"
            quotes.append(Quote(text=" ".join(text.split()), source=str(source).strip()))
        return quotes


def _read_yaml(path: Path) -> object:
    if not path.exists():
        raise FileNotFoundError(f"Corpus file not found: {path}")
    return yaml.safe_load(path.read_text(encoding="utf-8"))
