"""Local high-score table.

The table is a JSON list of ``{"name", "score", "level", "date"}`` rows,
best first, at most ``MAX_HIGH_SCORES`` long. A missing or unreadable file
is an empty table; the game never crashes over it.
"""
import json
import logging
import os
from dataclasses import dataclass, asdict
from datetime import date as _date

from settings import MAX_HIGH_SCORES, MAX_NAME_LENGTH, NAME_PUNCTUATION, DEFAULT_PLAYER_NAME

logger = logging.getLogger(__name__)


@dataclass
class HighScoreEntry:
    name: str
    score: int
    level: int
    date: str

    @classmethod
    def from_dict(cls, data):
        return cls(name=str(data['name']),
                   score=int(data['score']),
                   level=int(data['level']),
                   date=str(data['date']))


def sort_entries(entries):
    # stable: earlier entries win ties
    return sorted(entries, key=lambda e: e.score, reverse=True)


def sanitize_name(text, max_length=MAX_NAME_LENGTH):
    """Keep letters, digits, spaces and a little punctuation."""
    kept = [c for c in text or '' if c.isalnum() or c == ' ' or c in NAME_PUNCTUATION]
    return ''.join(kept)[:max_length]


class HighScoreStore:
    """JSON file persistence."""
    def __init__(self, path):
        self.path = path

    def load(self):
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("High score load issue: %s", e)
            return []
        if not isinstance(data, list):
            logger.warning("High score file %s is not a list, ignoring it", self.path)
            return []

        entries = []
        for row in data:
            try:
                entries.append(HighScoreEntry.from_dict(row))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed high score row %r: %s", row, e)
        return sort_entries(entries)[:MAX_HIGH_SCORES]

    def save(self, entries):
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump([asdict(e) for e in entries], f, indent=2)
                f.write("\n")
        except OSError as e:
            logger.warning("High score save issue: %s", e)


class HighScoreTable:
    def __init__(self, store=None, max_entries=MAX_HIGH_SCORES):
        self.store = store
        self.max_entries = max_entries
        self.entries = []
        self.load()

    def __len__(self):
        return len(self.entries)

    def load(self):
        self.entries = self.store.load() if self.store is not None else []
        return self.entries

    @property
    def best(self):
        return self.entries[0].score if self.entries else 0

    def qualifies(self, score):
        if score <= 0:
            return False
        if len(self.entries) < self.max_entries:
            return True
        return score > self.entries[self.max_entries - 1].score

    def record(self, score, name, level, when=None):
        """Insert a score and persist. Returns its 1-based rank, or None if it
        did not make the table.
        """
        entry = HighScoreEntry(name=sanitize_name(name) or DEFAULT_PLAYER_NAME,
                               score=int(score), level=int(level),
                               date=(when or _date.today()).isoformat())
        self.entries = sort_entries(self.entries + [entry])[:self.max_entries]
        if self.store is not None:
            self.store.save(self.entries)
        for rank, e in enumerate(self.entries, 1):
            if e is entry:
                return rank
        return None
