import hashlib
import struct

import pytest

from md2anki.util import BASE91_TABLE, IdGenerator, guid_for, to_base91


def _reference_guid(*values):
    # Same algorithm, written independently: unpack the 64-bit prefix and build digits backwards
    digest = hashlib.sha256('__'.join(values).encode('utf-8')).digest()
    number, = struct.unpack('>Q', digest[:8])
    out = ''
    while number:
        out = BASE91_TABLE[number % 91] + out
        number //= 91
    return out


def test_base91_table_has_91_distinct_digits():
    assert len(BASE91_TABLE) == 91
    assert len(set(BASE91_TABLE)) == 91
    assert ' ' not in BASE91_TABLE
    assert '"' not in BASE91_TABLE
    assert "'" not in BASE91_TABLE


@pytest.mark.parametrize('value, expected', [
    (0, ''),
    (1, 'b'),
    (90, '~'),
    (91, 'ba'),
    (91 * 91, 'baa'),
])
def test_to_base91(value, expected):
    assert to_base91(value) == expected


def test_guid_matches_reference_algorithm():
    assert guid_for('What is the capital of France?', 'Paris') == \
        _reference_guid('What is the capital of France?', 'Paris')
    assert guid_for('ünïcödé', '日本語') == _reference_guid('ünïcödé', '日本語')


def test_guid_is_content_addressed():
    assert guid_for('Front', 'Back') == guid_for('Front', 'Back')
    assert guid_for('Front', 'Back') != guid_for('Front', 'Back!')
    assert guid_for('Front', 'Back') != guid_for('Back', 'Front')


def test_guid_stringifies_values():
    assert guid_for(1, 2) == guid_for('1', '2')


def test_guid_for_empty_input_is_still_a_string():
    assert guid_for() == _reference_guid()
    assert guid_for('', '') == _reference_guid('', '')
    assert all(ch in BASE91_TABLE for ch in guid_for('', ''))


def test_guid_fits_in_64_bits():
    # 91 ** 10 > 2 ** 64, so a GUID never needs more than 10 digits
    for i in range(50):
        assert 0 < len(guid_for(str(i))) <= 10


def test_id_generator_is_strictly_increasing():
    id_gen = IdGenerator(1700000000000)
    ids = [id_gen.next_id() for _ in range(1000)]
    assert ids[0] == 1700000000000
    assert all(b > a for a, b in zip(ids, ids[1:]))
    assert len(set(ids)) == len(ids)


def test_id_generators_are_independent():
    a = IdGenerator(10)
    b = IdGenerator(10)
    a.next_id()
    a.next_id()
    assert b.next_id() == 10
    assert a.next_id() == 12
