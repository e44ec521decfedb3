"""
Turn generated flashcard records into a Deck and an .apkg file.

A record looks like:
    {'question': str, 'answer': str, 'type': 'basic' | 'reversible' | 'cloze', 'tags': [str, ...]}
"""
import logging
import random
from typing import Any, Dict, Iterable, Optional

from . import config
from .builtin_models import BASIC_MODEL, BASIC_AND_REVERSED_CARD_MODEL, CLOZE_MODEL
from .deck import Deck
from .note import Note
from .package import Package

logger = logging.getLogger(__name__)

MODELS_BY_TYPE = {
    'basic': BASIC_MODEL,
    'reversible': BASIC_AND_REVERSED_CARD_MODEL,
    'cloze': CLOZE_MODEL,
}
FLASHCARD_TYPES = tuple(MODELS_BY_TYPE)


def is_valid_flashcard(flashcard: Any) -> bool:
    return (
        isinstance(flashcard, dict)
        and isinstance(flashcard.get('question'), str)
        and isinstance(flashcard.get('answer'), str)
        and flashcard.get('type') in FLASHCARD_TYPES
        and isinstance(flashcard.get('tags'), list)
    )


def random_deck_id() -> int:
    # Six digits keeps deck ids clear of the fixed model ids
    return random.randint(100000, 999999)


def deck_name_or_default(deck_name: Optional[str]) -> str:
    if isinstance(deck_name, str) and deck_name.strip():
        return deck_name.strip()
    return config.DEFAULT_DECK_NAME


def export_filename(deck_name: Optional[str]) -> str:
    """'My Deck' -> 'my-deck-md2anki.apkg'"""
    name = deck_name_or_default(deck_name)
    return name.lower().replace(' ', '-') + config.EXPORT_SUFFIX


def build_deck(deck_name: Optional[str], flashcards: Iterable[Dict[str, Any]],
               deck_id: Optional[int] = None, description: Optional[str] = None) -> Deck:
    """Build a Deck, skipping (and logging) records that don't have the expected shape."""
    if deck_id is None:
        deck_id = random_deck_id()
    if description is None:
        description = config.DEFAULT_DECK_DESCRIPTION
    deck = Deck(deck_id, deck_name_or_default(deck_name), description)
    logger.debug(f'Deck ID: {deck_id}')

    for index, flashcard in enumerate(flashcards or []):
        if not is_valid_flashcard(flashcard):
            logger.warning(f'Skipping invalid flashcard at index {index}')
            continue
        model = MODELS_BY_TYPE[flashcard['type']]
        note = Note(
            model=model,
            fields=[flashcard['question'], flashcard['answer']],
            tags=flashcard['tags'],
        )
        deck.add_note(note)

    logger.info(f'Built deck "{deck.name}" with {len(deck.notes)} notes')
    return deck


def export_deck(deck_name: Optional[str], flashcards: Iterable[Dict[str, Any]], file,
                deck_id: Optional[int] = None, media_files=None, timestamp: Optional[float] = None) -> str:
    """
    Build the deck and write it as an .apkg to `file` (path or binary file object).

    Returns the download file name for the deck.
    """
    deck = build_deck(deck_name, flashcards, deck_id=deck_id)
    Package(deck, media_files=media_files).write_to_file(file, timestamp=timestamp)
    return export_filename(deck.name)
