from .model import Model

# Model ids are fixed so re-importing a deck reuses the note types already in Anki
CARD_CSS = '.card {\n font-family: arial;\n font-size: 20px;\n text-align: center;\n color: black;\n background-color: white;\n}\n'

BASIC_MODEL = Model(
    1559383000,
    'Basic (md2anki)',
    fields=[
        {'name': 'Front', 'font': 'Arial'},
        {'name': 'Back', 'font': 'Arial'},
    ],
    templates=[
        {
            'name': 'Card 1',
            'qfmt': '{{Front}}',
            'afmt': '{{FrontSide}}\n\n<hr id=answer>\n\n{{Back}}',
        },
    ],
    css=CARD_CSS,
)

BASIC_AND_REVERSED_CARD_MODEL = Model(
    1485830179,
    'Basic (and reversed card) (md2anki)',
    fields=[
        {'name': 'Front', 'font': 'Arial'},
        {'name': 'Back', 'font': 'Arial'},
    ],
    templates=[
        {
            'name': 'Card 1',
            'qfmt': '{{Front}}',
            'afmt': '{{FrontSide}}\n\n<hr id=answer>\n\n{{Back}}',
        },
        {
            'name': 'Card 2',
            'qfmt': '{{Back}}',
            'afmt': '{{FrontSide}}\n\n<hr id=answer>\n\n{{Front}}',
        },
    ],
    css=CARD_CSS,
)

BASIC_OPTIONAL_REVERSED_CARD_MODEL = Model(
    1382232460,
    'Basic (optional reversed card) (md2anki)',
    fields=[
        {'name': 'Front', 'font': 'Arial'},
        {'name': 'Back', 'font': 'Arial'},
        {'name': 'Add Reverse', 'font': 'Arial'},
    ],
    templates=[
        {
            'name': 'Card 1',
            'qfmt': '{{Front}}',
            'afmt': '{{FrontSide}}\n\n<hr id=answer>\n\n{{Back}}',
        },
        {
            'name': 'Card 2',
            'qfmt': '{{#Add Reverse}}{{Back}}{{/Add Reverse}}',
            'afmt': '{{FrontSide}}\n\n<hr id=answer>\n\n{{Front}}',
        },
    ],
    css=CARD_CSS,
)

BASIC_TYPE_IN_THE_ANSWER_MODEL = Model(
    1305534440,
    'Basic (type in the answer) (md2anki)',
    fields=[
        {'name': 'Front', 'font': 'Arial'},
        {'name': 'Back', 'font': 'Arial'},
    ],
    templates=[
        {
            'name': 'Card 1',
            'qfmt': '{{Front}}\n\n{{type:Back}}',
            'afmt': '{{Front}}\n\n<hr id=answer>\n\n{{type:Back}}',
        },
    ],
    css=CARD_CSS,
)

CLOZE_MODEL = Model(
    1550428389,
    'Cloze (md2anki)',
    fields=[
        {'name': 'Text', 'font': 'Arial'},
        {'name': 'Back Extra', 'font': 'Arial'},
    ],
    templates=[
        {
            'name': 'Cloze',
            'qfmt': '{{cloze:Text}}',
            'afmt': '{{cloze:Text}}<br>\n{{Back Extra}}',
        },
    ],
    css=CARD_CSS + '\n.cloze {\n font-weight: bold;\n color: blue;\n}\n.nightMode .cloze {\n color: lightblue;\n}',
    model_type=Model.CLOZE,
)
