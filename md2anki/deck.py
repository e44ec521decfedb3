import json
import logging
import sqlite3
from typing import Dict, List, Optional

from .model import Model
from .note import Note
from .util import IdGenerator

logger = logging.getLogger(__name__)


class Deck:
    """
    A named group of notes, plus the models those notes use.

    A deck is written once per package build. Writing it again into the same
    database inserts every note a second time.
    """

    def __init__(self, deck_id: int, name: str, description: str = ''):
        self.deck_id = deck_id
        self.name = name
        self.description = description
        self.notes: List[Note] = []
        self.models: Dict[int, Model] = {}

    def add_note(self, note: Note) -> None:
        self.notes.append(note)

    def add_model(self, model: Model) -> None:
        self.models[model.model_id] = model

    def to_json(self) -> dict:
        return {
            'collapsed': False,
            'conf': 1,
            'desc': self.description,
            'dyn': 0,
            'extendNew': 0,
            'extendRev': 50,
            'id': self.deck_id,
            'lrnToday': [163, 2],
            'mod': 1425278051,
            'name': self.name,
            'newToday': [163, 2],
            'revToday': [163, 0],
            'timeToday': [163, 23598],
            'usn': -1,
        }

    def write_to_db(self, cursor: sqlite3.Cursor, timestamp: float, id_gen: IdGenerator) -> None:
        if not isinstance(self.deck_id, int) or isinstance(self.deck_id, bool):
            raise TypeError(f'Deck .deck_id must be an integer, not {self.deck_id!r}.')
        if not isinstance(self.name, str):
            raise TypeError(f'Deck .name must be a string, not {self.name!r}.')

        logger.debug(f'Writing deck {self.deck_id} ({self.name}) with {len(self.notes)} notes')

        decks_json_str, = cursor.execute('SELECT decks FROM col').fetchone()
        decks = json.loads(decks_json_str)
        decks[str(self.deck_id)] = self.to_json()
        cursor.execute('UPDATE col SET decks = ?', (json.dumps(decks),))

        models_json_str, = cursor.execute('SELECT models FROM col').fetchone()
        models = json.loads(models_json_str)
        for note in self.notes:
            self.add_model(note.model)
        for model in self.models.values():
            models[str(model.model_id)] = model.to_json(timestamp, self.deck_id)
        cursor.execute('UPDATE col SET models = ?', (json.dumps(models),))

        for note in self.notes:
            note.write_to_db(cursor, timestamp, self.deck_id, id_gen)

    def write_to_file(self, file, timestamp: Optional[float] = None) -> None:
        """Shortcut for packaging just this deck."""
        from .package import Package
        Package(self).write_to_file(file, timestamp=timestamp)

    def __repr__(self):
        return f'Deck(deck_id={self.deck_id!r}, name={self.name!r}, notes={len(self.notes)})'
