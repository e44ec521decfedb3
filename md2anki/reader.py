"""
Read an .apkg back: collection rows, deck/model blobs and the media manifest.

Used for previewing uploaded decks and for checking what the writer produced.
"""
import json
import logging
import sqlite3
import tempfile
import zipfile
from typing import Any, Dict, List

import pandas as pd

from .errors import InvalidPackageError

logger = logging.getLogger(__name__)

# Both are plain SQLite; zstd-compressed collection.anki21b files are not read
COLLECTION_NAMES = ['collection.anki2', 'collection.anki21']


def _open_archive(apkg_file) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(apkg_file, 'r')
    except zipfile.BadZipFile as e:
        raise InvalidPackageError('File is not a zip archive') from e


def read_package(apkg_file) -> Dict[str, Any]:
    """
    Extract everything from an .apkg (path or binary file object) into plain Python data.

    Returns a dict with keys 'decks', 'models' (the col JSON blobs), 'notes' and
    'cards' (lists of dicts keyed by column name) and 'media' (the manifest).
    """
    with _open_archive(apkg_file) as z, tempfile.TemporaryDirectory() as tmpdir:
        names = z.namelist()
        collection_name = next((name for name in COLLECTION_NAMES if name in names), None)
        if collection_name is None:
            raise InvalidPackageError(f'No Anki database found. Archive entries: {names}')

        db_path = z.extract(collection_name, tmpdir)
        try:
            media = json.loads(z.read('media')) if 'media' in names else {}
        except ValueError as e:
            raise InvalidPackageError(f'Media manifest is not valid JSON: {e}') from e

        conn = sqlite3.connect(db_path)
        try:
            conn.row_factory = sqlite3.Row
            cur = conn.cursor()
            col_row = cur.execute('SELECT decks, models FROM col').fetchone()
            if col_row is None:
                raise InvalidPackageError(f'{collection_name} has no collection row')
            decks_json, models_json = col_row
            notes = [dict(row) for row in cur.execute('SELECT * FROM notes ORDER BY id')]
            cards = [dict(row) for row in cur.execute('SELECT * FROM cards ORDER BY id')]
        except sqlite3.DatabaseError as e:
            raise InvalidPackageError(f'Could not read {collection_name}: {e}') from e
        finally:
            conn.close()

    try:
        decks = json.loads(decks_json)
        models = json.loads(models_json)
    except (TypeError, ValueError) as e:
        raise InvalidPackageError(f'Deck or model data in {collection_name} is not valid JSON: {e}') from e

    logger.debug(f'Read {len(notes)} notes and {len(cards)} cards from {collection_name}')
    return {
        'decks': decks,
        'models': models,
        'notes': notes,
        'cards': cards,
        'media': media,
    }


def deck_names(package: Dict[str, Any]) -> List[str]:
    """Names of the decks in a read package, without Anki's built-in 'Default' deck."""
    return [deck['name'] for deck in package['decks'].values() if deck['name'] != 'Default']


def notes_to_df(package: Dict[str, Any]) -> pd.DataFrame:
    data = []
    for note in package['notes']:
        fields = note['flds'].split('\x1f') if note['flds'] else []
        # Cloze notes keep their text in the first field; basic notes are Front, Back
        front = fields[0] if fields else ''
        back = fields[1] if len(fields) >= 2 else ''
        data.append({'noteId': note['id'], 'Front': front, 'Back': back})
    return pd.DataFrame(data, columns=['noteId', 'Front', 'Back'])


def load_apkg_to_df(apkg_file) -> pd.DataFrame:
    """Extract notes from an .apkg -> DataFrame(noteId, Front, Back)."""
    return notes_to_df(read_package(apkg_file))
