import os

# Fallbacks used when the generation pipeline leaves something out
DEFAULT_DECK_NAME = os.environ.get('MD2ANKI_DEFAULT_DECK_NAME', 'md2anki Deck')
DEFAULT_DECK_DESCRIPTION = os.environ.get('MD2ANKI_DECK_DESCRIPTION', 'A deck created using md2anki')
EXPORT_SUFFIX = '-md2anki.apkg'

LOG_LEVEL = os.environ.get('MD2ANKI_LOG_LEVEL', 'INFO')

# Request body limit for the web app (generated decks and uploaded .apkg files)
MAX_CONTENT_LENGTH = int(os.environ.get('MD2ANKI_MAX_CONTENT_LENGTH', 3 * 1024 * 1024))

# Tags given to cards pasted into the generator form
PASTED_CARD_TAGS = ['generated']
