import logging
import re
import sqlite3
from functools import cached_property
from typing import Iterable, List, Optional

from .card import Card
from .errors import ConfigurationError, InvalidTagError
from .model import Model
from .util import IdGenerator, guid_for

logger = logging.getLogger(__name__)

# Anything that looks like a tag but isn't an open/close tag, a comment or CDATA
INVALID_HTML_TAG_RE = re.compile(r'<(?!/?[a-zA-Z0-9]+(?: .*|/?)>|!--|!\[CDATA\[)(?:.|\n)*?>')

# {{cloze:Text}}, {{furigana:cloze:Text}} and the older <%cloze:Text%> form
CLOZE_REFERENCE_RES = [
    re.compile(r'{{[^}]*?cloze:(?:[^}]?:)*(.+?)}}'),
    re.compile(r'<%cloze:(.+?)%>'),
]
CLOZE_DELETION_RE = re.compile(r'{{c(\d+)::.+?}}', re.DOTALL)


def _validate_tag(tag) -> None:
    if not isinstance(tag, str):
        raise InvalidTagError(f'Tag {tag!r} is not a string')
    if any(ch.isspace() for ch in tag):
        raise InvalidTagError(f'Tag "{tag}" contains whitespace; this is not allowed!')


class TagList:
    """
    Ordered note tags. Anki stores tags space-separated and splits them on any
    whitespace when reading, so tabs and newlines are rejected along with
    spaces. Every mutation checks the incoming tags first and leaves the list
    untouched if any of them fails.
    """

    def __init__(self, tags: Optional[Iterable[str]] = None):
        tags = list(tags or [])
        for tag in tags:
            _validate_tag(tag)
        self._tags: List[str] = tags

    def append(self, tag: str) -> None:
        _validate_tag(tag)
        self._tags.append(tag)

    def extend(self, tags: Iterable[str]) -> None:
        tags = list(tags)
        for tag in tags:
            _validate_tag(tag)
        self._tags.extend(tags)

    def insert(self, index: int, tag: str) -> None:
        _validate_tag(tag)
        self._tags.insert(index, tag)

    def splice(self, start: int, delete_count: int = 0, *items: str) -> List[str]:
        """Remove `delete_count` tags at `start` and put `items` in their place."""
        for tag in items:
            _validate_tag(tag)
        removed = self._tags[start:start + delete_count]
        self._tags[start:start + delete_count] = list(items)
        return removed

    def remove_range(self, start: int, stop: int) -> List[str]:
        removed = self._tags[start:stop]
        del self._tags[start:stop]
        return removed

    def remove(self, tag: str) -> None:
        self._tags.remove(tag)

    def __setitem__(self, index, value):
        if isinstance(index, slice):
            value = list(value)
            for tag in value:
                _validate_tag(tag)
        else:
            _validate_tag(value)
        self._tags[index] = value

    def __getitem__(self, index):
        return self._tags[index]

    def __delitem__(self, index):
        del self._tags[index]

    def __iter__(self):
        return iter(self._tags)

    def __len__(self):
        return len(self._tags)

    def __contains__(self, tag):
        return tag in self._tags

    def __eq__(self, other):
        if isinstance(other, TagList):
            return self._tags == other._tags
        if isinstance(other, (list, tuple)):
            return self._tags == list(other)
        return NotImplemented

    def __repr__(self):
        return f'TagList({self._tags!r})'


class Note:
    """
    One flashcard's content: field values for a Model, plus tags.

    The field values are fixed at construction; the cards a note produces and
    its default GUID are both derived from them.
    """

    def __init__(self, model: Model, fields: Optional[Iterable[str]] = None,
                 sort_field: Optional[str] = None, tags: Optional[Iterable[str]] = None,
                 guid: Optional[str] = None, due: int = 0):
        self.model = model
        self.fields = tuple(fields or ())
        self._sort_field = sort_field
        self._tags = TagList(tags)
        self._guid = guid
        self.due = due

    @property
    def sort_field(self) -> str:
        return self._sort_field or self.fields[self.model.sort_field_index]

    @property
    def tags(self) -> TagList:
        return self._tags

    @tags.setter
    def tags(self, value: Iterable[str]) -> None:
        self._tags = TagList(value)

    @property
    def guid(self) -> str:
        if self._guid is None:
            return guid_for(*self.fields)
        return self._guid

    @cached_property
    def cards(self) -> List[Card]:
        if self.model.model_type == Model.FRONT_BACK:
            return self._front_back_cards()
        if self.model.model_type == Model.CLOZE:
            return self._cloze_cards()
        raise ConfigurationError(
            f'Expected model_type CLOZE or FRONT_BACK, got {self.model.model_type!r}')

    def _cloze_cards(self) -> List[Card]:
        qfmt = self.model.templates[0]['qfmt']
        field_names = []
        for reference_re in CLOZE_REFERENCE_RES:
            for field_name in reference_re.findall(qfmt):
                if field_name not in field_names:
                    field_names.append(field_name)

        model_field_names = self.model.field_names
        card_ords = []
        for field_name in field_names:
            if field_name not in model_field_names:
                continue
            field_ord = model_field_names.index(field_name)
            field_value = self.fields[field_ord] if field_ord < len(self.fields) else ''
            for number in CLOZE_DELETION_RE.findall(field_value):
                ord_ = int(number) - 1
                if ord_ >= 0 and ord_ not in card_ords:
                    card_ords.append(ord_)

        if not card_ords:
            card_ords = [0]
        return [Card(ord_) for ord_ in card_ords]

    def _front_back_cards(self) -> List[Card]:
        cards = []
        for card_ord, any_or_all, required_field_ords in self.model.req:
            op = any if any_or_all == 'any' else all
            if op(self._field_is_filled(ord_) for ord_ in required_field_ords):
                cards.append(Card(card_ord))
        return cards

    def _field_is_filled(self, field_ord: int) -> bool:
        return field_ord < len(self.fields) and bool(self.fields[field_ord])

    def _check_number_model_fields_matches_num_fields(self) -> None:
        model_count = len(self.model.fields)
        if model_count != len(self.fields):
            raise ConfigurationError(
                'Number of fields in Model does not match number of fields in Note: '
                f'{self.model} has {model_count} fields, but {self} has {len(self.fields)} fields.')

    @staticmethod
    def _find_invalid_html_tags_in_field(field: str) -> List[str]:
        return INVALID_HTML_TAG_RE.findall(field)

    def _check_invalid_html_tags_in_fields(self) -> None:
        for field in self.fields:
            invalid_tags = self._find_invalid_html_tags_in_field(field)
            if invalid_tags:
                logger.warning(
                    'Field contained the following invalid HTML tags. Make sure you are calling '
                    "html.escape() if your field data isn't already HTML-encoded: "
                    + ' '.join(invalid_tags))

    def write_to_db(self, cursor: sqlite3.Cursor, timestamp: float, deck_id: int,
                    id_gen: IdGenerator) -> int:
        self._check_number_model_fields_matches_num_fields()
        self._check_invalid_html_tags_in_fields()

        note_id = id_gen.next_id()
        cursor.execute('INSERT INTO notes VALUES(?,?,?,?,?,?,?,?,?,?,?);', (
            note_id,                   # id
            self.guid,                 # guid
            self.model.model_id,       # mid
            int(timestamp),            # mod
            -1,                        # usn
            self._format_tags(),       # tags
            self._format_fields(),     # flds
            self.sort_field,           # sfld
            0,                         # csum, can be ignored
            0,                         # flags
            '',                        # data
        ))
        logger.debug(f'Wrote note {note_id} ({self.guid})')

        for card in self.cards:
            card.write_to_db(cursor, timestamp, deck_id, note_id, id_gen, self.due)
        return note_id

    def _format_fields(self) -> str:
        return '\x1f'.join(self.fields)

    def _format_tags(self) -> str:
        return ' ' + ' '.join(self._tags) + ' '

    def __repr__(self):
        return (f'Note(model={self.model.model_id!r}, fields={list(self.fields)!r}, '
                f'sort_field={self._sort_field!r}, tags={list(self._tags)!r}, guid={self._guid!r})')
