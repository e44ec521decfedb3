import json
import logging
import os
import shutil
import sqlite3
import tempfile
import time
import zipfile
from typing import List, Optional, Sequence, Tuple, Union

from .apkg_schema import APKG_SCHEMA, APKG_COL
from .deck import Deck
from .errors import PackageWriteError
from .util import IdGenerator

logger = logging.getLogger(__name__)

# A media file is either a path on disk or an in-memory (filename, bytes) pair
MediaFile = Union[str, os.PathLike, Tuple[str, bytes]]

COLLECTION_ENTRY = 'collection.anki2'
MEDIA_ENTRY = 'media'


class Package:
    """
    Everything that ends up in one .apkg file: one or more decks and the
    media files their notes reference.
    """

    def __init__(self, deck_or_decks: Union[Deck, Sequence[Deck], None] = None,
                 media_files: Optional[Sequence[MediaFile]] = None):
        if isinstance(deck_or_decks, Deck):
            self.decks: List[Deck] = [deck_or_decks]
        else:
            self.decks = list(deck_or_decks or [])
        self.media_files: List[MediaFile] = list(media_files or [])

    def write_to_file(self, file, timestamp: Optional[float] = None) -> None:
        """
        Build the collection and write the .apkg archive.

        `file` may be a path or a writable binary file object (e.g. io.BytesIO).
        `timestamp` (seconds) stamps every note and card; defaults to now.
        """
        if timestamp is None:
            timestamp = time.time()
        id_gen = IdGenerator(int(timestamp * 1000))

        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = os.path.join(tmpdir, COLLECTION_ENTRY)
            try:
                conn = sqlite3.connect(db_path)
                try:
                    cursor = conn.cursor()
                    self.write_to_db(cursor, timestamp, id_gen)
                    conn.commit()
                finally:
                    conn.close()
            except sqlite3.Error as e:
                raise PackageWriteError(f'Could not build the collection database: {e}') from e

            # The archive is finished in tmpdir; the target is only touched once it is complete
            apkg_path = os.path.join(tmpdir, 'package.apkg')
            try:
                with zipfile.ZipFile(apkg_path, 'w', zipfile.ZIP_DEFLATED) as outzip:
                    outzip.write(db_path, COLLECTION_ENTRY)
                    media_json = self._write_media(outzip)
                    outzip.writestr(MEDIA_ENTRY, json.dumps(media_json))
            except (OSError, zipfile.BadZipFile) as e:
                raise PackageWriteError(f'Could not write the .apkg archive: {e}') from e

            try:
                if hasattr(file, 'write'):
                    with open(apkg_path, 'rb') as src:
                        shutil.copyfileobj(src, file)
                else:
                    shutil.copyfile(apkg_path, file)
            except OSError as e:
                raise PackageWriteError(f'Could not save the .apkg archive: {e}') from e

        logger.info(f'Wrote package with {len(self.decks)} deck(s) and {len(self.media_files)} media file(s)')

    def write_to_db(self, cursor: sqlite3.Cursor, timestamp: float, id_gen: IdGenerator) -> None:
        cursor.executescript(APKG_SCHEMA)
        cursor.executescript(APKG_COL)

        for deck in self.decks:
            deck.write_to_db(cursor, timestamp, id_gen)

    def _write_media(self, outzip: zipfile.ZipFile) -> dict:
        # Entries are named by position; the manifest maps them back to file names
        media_json = {}
        for idx, media_file in enumerate(self.media_files):
            if isinstance(media_file, tuple):
                filename, data = media_file
                outzip.writestr(str(idx), data)
            else:
                filename = os.path.basename(os.fspath(media_file))
                outzip.write(media_file, str(idx))
            media_json[idx] = filename
        return media_json
