import pytest

from md2anki.builtin_models import (
    BASIC_MODEL,
    BASIC_AND_REVERSED_CARD_MODEL,
    BASIC_OPTIONAL_REVERSED_CARD_MODEL,
    BASIC_TYPE_IN_THE_ANSWER_MODEL,
    CLOZE_MODEL,
)
from md2anki.errors import ConfigurationError
from md2anki.model import Model


def test_basic_model_req():
    assert BASIC_MODEL.req == [[0, 'all', [0]]]


def test_reversed_model_req():
    assert BASIC_AND_REVERSED_CARD_MODEL.req == [[0, 'all', [0]], [1, 'all', [1]]]


def test_optional_reversed_model_req():
    # Card 2 needs both Back and the Add Reverse flag
    assert BASIC_OPTIONAL_REVERSED_CARD_MODEL.req == [[0, 'all', [0]], [1, 'all', [1, 2]]]


def test_type_in_the_answer_model_req():
    assert BASIC_TYPE_IN_THE_ANSWER_MODEL.req == [[0, 'all', [0]]]


def test_cloze_model_req_does_not_raise():
    assert CLOZE_MODEL.req == [[0, 'all', [0, 1]]]


def test_any_requirement():
    model = Model(
        1234,
        'Either',
        fields=[{'name': 'A'}, {'name': 'B'}],
        templates=[{'name': 'Card 1', 'qfmt': '{{#A}}{{A}}{{/A}}{{#B}}{{B}}{{/B}}', 'afmt': ''}],
    )
    assert model.req == [[0, 'any', [0, 1]]]


def test_every_template_gets_exactly_one_entry():
    for model in (BASIC_MODEL, BASIC_AND_REVERSED_CARD_MODEL, BASIC_OPTIONAL_REVERSED_CARD_MODEL):
        ords = [entry[0] for entry in model.req]
        assert ords == list(range(len(model.templates)))
        assert all(entry[1] in ('all', 'any') for entry in model.req)


def test_template_without_fields_is_a_configuration_error():
    model = Model(
        1235,
        'Broken',
        fields=[],
        templates=[{'name': 'Card 1', 'qfmt': '{{Front}}', 'afmt': ''}],
    )
    with pytest.raises(ConfigurationError, match='Front'):
        model.req


def test_static_template_requires_every_field():
    model = Model(
        1236,
        'Static',
        fields=[{'name': 'Front'}],
        templates=[{'name': 'Card 1', 'qfmt': 'static text only', 'afmt': ''}],
    )
    assert model.req == [[0, 'all', [0]]]


def test_req_is_computed_once():
    model = Model(
        1236,
        fields=[{'name': 'Front'}, {'name': 'Back'}],
        templates=[{'name': 'Card 1', 'qfmt': '{{Front}}', 'afmt': '{{Back}}'}],
    )
    assert model.req is model.req


def test_model_copies_its_fields_and_templates():
    fields = [{'name': 'Front'}, {'name': 'Back'}]
    templates = [{'name': 'Card 1', 'qfmt': '{{Front}}', 'afmt': '{{Back}}'}]
    model = Model(1237, fields=fields, templates=templates)

    fields.append({'name': 'Extra'})
    templates[0]['qfmt'] = '{{Back}}'

    assert model.field_names == ['Front', 'Back']
    assert model.templates[0]['qfmt'] == '{{Front}}'
    assert model.req == [[0, 'all', [0]]]


def test_fields_and_templates_from_yaml():
    model = Model(
        1238,
        'From YAML',
        fields='''
- name: Question
- name: Answer
  font: Arial
''',
        templates='''
- name: Card 1
  qfmt: '{{Question}}'
  afmt: '{{FrontSide}}<hr id=answer>{{Answer}}'
''',
    )
    assert model.field_names == ['Question', 'Answer']
    assert model.fields[1]['font'] == 'Arial'
    assert model.req == [[0, 'all', [0]]]


def test_fields_without_names_are_rejected():
    with pytest.raises(ConfigurationError):
        Model(1239, fields=[{'font': 'Arial'}])


def test_to_json_fills_in_defaults():
    data = BASIC_MODEL.to_json(1700000000.7, 424242)

    assert data['id'] == '1559383000'
    assert data['did'] == 424242
    assert data['mod'] == 1700000000
    assert data['type'] == Model.FRONT_BACK
    assert data['req'] == [[0, 'all', [0]]]
    assert data['usn'] == -1
    assert data['latexsvg'] is False
    assert data['sortf'] == 0

    front, back = data['flds']
    assert front == {
        'name': 'Front', 'font': 'Arial', 'ord': 0,
        'media': [], 'rtl': False, 'size': 20, 'sticky': False,
    }
    assert back['ord'] == 1

    tmpl, = data['tmpls']
    assert tmpl['ord'] == 0
    assert tmpl['bqfmt'] == ''
    assert tmpl['bafmt'] == ''
    assert tmpl['bfont'] == ''
    assert tmpl['bsize'] == 0
    assert tmpl['did'] is None


def test_to_json_does_not_touch_the_model():
    BASIC_MODEL.to_json(0, 1)
    assert 'ord' not in BASIC_MODEL.fields[0]
    assert 'bqfmt' not in BASIC_MODEL.templates[0]


def test_default_field_font():
    model = Model(1240, fields=[{'name': 'Front'}],
                  templates=[{'name': 'Card 1', 'qfmt': '{{Front}}', 'afmt': ''}])
    assert model.to_json(0, 1)['flds'][0]['font'] == 'Liberation Sans'
    assert model.latex_pre == Model.DEFAULT_LATEX_PRE
    assert model.latex_post == Model.DEFAULT_LATEX_POST
