import logging
import sqlite3

from .util import IdGenerator

logger = logging.getLogger(__name__)


class Card:
    """One reviewable card: a note rendered through the template at `ordinal`."""

    def __init__(self, ordinal: int, suspend: bool = False):
        self.ordinal = ordinal
        self.suspend = suspend

    def write_to_db(self, cursor: sqlite3.Cursor, timestamp: float, deck_id: int, note_id: int,
                    id_gen: IdGenerator, due: int = 0) -> int:
        queue = -1 if self.suspend else 0
        card_id = id_gen.next_id()
        cursor.execute('INSERT INTO cards VALUES(?,?,?,?,?,?,?,?,?,?,?,?,?,?,?,?,?,?);', (
            card_id,         # id
            note_id,         # nid
            deck_id,         # did
            self.ordinal,    # ord
            int(timestamp),  # mod
            -1,              # usn
            0,               # type (new)
            queue,           # queue
            due,             # due
            0,               # ivl
            0,               # factor
            0,               # reps
            0,               # lapses
            0,               # left
            0,               # odue
            0,               # odid
            0,               # flags
            '',              # data
        ))
        logger.debug(f'Wrote card {card_id} (note {note_id}, ord {self.ordinal})')
        return card_id

    def __eq__(self, other):
        if not isinstance(other, Card):
            return NotImplemented
        return self.ordinal == other.ordinal and self.suspend == other.suspend

    def __repr__(self):
        return f'Card(ordinal={self.ordinal!r}, suspend={self.suspend!r})'
