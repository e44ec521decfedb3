import pytest
from app import parse_cards


def test_basic_card_parsing():
    text = "Front of card\tBack of card"
    result = parse_cards(text)
    assert result == [{
        'question': 'Front of card',
        'answer': 'Back of card',
        'type': 'basic',
        'tags': ['generated'],
    }]


def test_cloze_detection():
    text = "{{c1::Capital of France}} is Paris\tParis"
    result = parse_cards(text)
    assert len(result) == 1
    card = result[0]
    assert card['question'] == "{{c1::Capital of France}} is Paris"
    assert card['answer'] == 'Paris'
    assert card['type'] == 'cloze'


def test_ignore_non_cloze_without_tab():
    text = "Front\tBack\nInvalid line without tab\nAnother front\tAnother back"
    result = parse_cards(text)
    assert len(result) == 2
    fronts = [c['question'] for c in result]
    assert 'Front' in fronts
    assert 'Another front' in fronts


def test_cloze_without_tab():
    text = "Front\tBack\n{{c1::Capital of France}} is Paris\nAnother front\tAnother back"
    result = parse_cards(text)
    assert len(result) == 3
    cloze_card = [c for c in result if c['type'] == 'cloze'][0]
    assert cloze_card['question'] == "{{c1::Capital of France}} is Paris"
    assert cloze_card['answer'] == ''


def test_empty_front_is_skipped():
    result = parse_cards("\tonly a back\nFront\tBack")
    assert [c['question'] for c in result] == ['Front']


@pytest.mark.parametrize('text', ['', '   ', '\n\n'])
def test_blank_input(text):
    assert parse_cards(text) == []


def test_each_card_gets_its_own_tag_list():
    first, second = parse_cards("a\tb\nc\td")
    first['tags'].append('extra')
    assert second['tags'] == ['generated']
