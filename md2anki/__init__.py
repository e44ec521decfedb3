"""Build Anki .apkg packages from generated flashcards."""

from .card import Card
from .deck import Deck
from .errors import (
    ConfigurationError,
    InvalidPackageError,
    InvalidTagError,
    Md2AnkiError,
    PackageWriteError,
)
from .model import Model
from .note import Note, TagList
from .package import Package
from .util import IdGenerator, guid_for

__version__ = '0.1.0'

__all__ = [
    'Card',
    'ConfigurationError',
    'Deck',
    'IdGenerator',
    'InvalidPackageError',
    'InvalidTagError',
    'Md2AnkiError',
    'Model',
    'Note',
    'Package',
    'PackageWriteError',
    'TagList',
    'guid_for',
]
