from flask import Flask, request, render_template_string, send_file, jsonify
import io
import logging
import os
import tempfile

from md2anki import config, Md2AnkiError
from md2anki.export import export_deck, export_filename
from md2anki.logging_config import setup_logging
from md2anki.reader import read_package, deck_names, notes_to_df

app = Flask(__name__)
app.config.from_mapping(
    MAX_CONTENT_LENGTH=config.MAX_CONTENT_LENGTH,
    LOG_LEVEL=config.LOG_LEVEL,
    DEFAULT_DECK_NAME=config.DEFAULT_DECK_NAME,
)
# MD2ANKI_LOG_LEVEL, MD2ANKI_MAX_CONTENT_LENGTH, ... override the defaults above
app.config.from_prefixed_env('MD2ANKI')

setup_logging(app.config['LOG_LEVEL'])
logger = logging.getLogger(__name__)

PACKAGE_FAILED = 'Package creation failed'


# Simple parser to convert pasted text into flashcard records
def parse_cards(text):
    cards = []
    lines = text.strip().split('\n')
    for line in lines:
        # Allow cloze lines without a tab; otherwise require front/back
        if '\t' in line:
            front, back = line.split('\t', 1)
        elif '{{c' in line:
            front, back = line, ''
        else:
            continue

        front = front.strip()
        back = back.strip()

        # Skip completely empty lines
        if not front:
            continue

        # Detect cloze by {{c1::...}} style in front
        is_cloze = '{{c' in front

        cards.append({
            'question': front,
            'answer': back,
            'type': 'cloze' if is_cloze else 'basic',
            'tags': list(config.PASTED_CARD_TAGS),
        })
    return cards


def apkg_response(deck_name, flashcards):
    deck_data = io.BytesIO()
    filename = export_deck(deck_name, flashcards, deck_data)
    deck_data.seek(0)

    return send_file(
        deck_data,
        as_attachment=True,
        download_name=filename,
        mimetype='application/octet-stream'
    )


@app.route('/', methods=['GET', 'POST'])
def anki_generator():
    if request.method == 'POST':
        cards_text = request.form.get('cards_text', '')
        deck_name = request.form.get('deck_name', '').strip() or app.config['DEFAULT_DECK_NAME']
        cards = parse_cards(cards_text)

        try:
            return apkg_response(deck_name, cards)
        except Exception:
            logger.exception(f'Error creating Anki package for deck "{deck_name}"')
            return render_template_string(ANKI_GENERATOR_TEMPLATE, error=PACKAGE_FAILED,
                                          deck_name=deck_name), 500

    # GET request returns HTML form
    return render_template_string(ANKI_GENERATOR_TEMPLATE, error=None,
                                  deck_name=app.config['DEFAULT_DECK_NAME'])


@app.route('/api/export', methods=['POST'])
def export_api():
    """
    JSON body: {"deck_name": "...", "flashcards": [{"question", "answer", "type", "tags"}, ...]}
    Responds with the .apkg as an attachment named <deck-name>-md2anki.apkg.
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict) or not isinstance(payload.get('flashcards'), list):
        return jsonify({'error': 'Expected a JSON object with a "flashcards" list'}), 400

    deck_name = payload.get('deck_name') or app.config['DEFAULT_DECK_NAME']
    try:
        return apkg_response(deck_name, payload['flashcards'])
    except Exception:
        logger.exception(f'Error creating Anki package for deck "{deck_name}"')
        return jsonify({'error': PACKAGE_FAILED}), 500


@app.route('/api/inspect', methods=['POST'])
def inspect_api():
    """Preview an uploaded .apkg: deck names plus Front/Back of every note."""
    apkg_file = request.files.get('deck_file')
    if apkg_file is None or apkg_file.filename == '':
        return jsonify({'error': 'No deck file uploaded'}), 400

    with tempfile.TemporaryDirectory() as tmpdir:
        apkg_path = os.path.join(tmpdir, 'upload.apkg')
        apkg_file.save(apkg_path)
        try:
            package = read_package(apkg_path)
        except Md2AnkiError as e:
            logger.warning(f'Rejected upload {apkg_file.filename}: {e}')
            return jsonify({'error': 'Not a readable .apkg file'}), 400

    df = notes_to_df(package)
    names = deck_names(package)
    return jsonify({
        'deck_names': names,
        'download_name': export_filename(names[0] if names else None),
        'notes': df.to_dict(orient='records'),
    })


# Template for Anki Generator
ANKI_GENERATOR_TEMPLATE = '''
<html>
<head>
  <title>md2anki</title>
  <style>
    body {
      font-family: Arial, sans-serif;
      margin: 20px;
      background-color: #f5f5f5;
    }
    .container {
      max-width: 800px;
      margin: 0 auto;
      background: white;
      padding: 30px;
      border-radius: 10px;
      box-shadow: 0 2px 10px rgba(0,0,0,0.1);
    }
    h1 {
      color: #333;
      text-align: center;
    }
    .help-section {
      background: #e7f3ff;
      padding: 20px;
      border-radius: 8px;
      margin-bottom: 25px;
    }
    .help-section h3 {
      margin-top: 0;
      color: #0066cc;
    }
    .error {
      background: #f8d7da;
      color: #721c24;
      padding: 12px;
      border-radius: 6px;
      margin-bottom: 20px;
    }
    label {
      display: block;
      margin-bottom: 5px;
      font-weight: bold;
      color: #333;
    }
    input[type="text"], textarea {
      width: 100%;
      padding: 10px;
      border: 1px solid #ddd;
      border-radius: 4px;
      font-size: 14px;
      box-sizing: border-box;
    }
    textarea {
      resize: vertical;
      min-height: 200px;
    }
    button {
      background-color: #007bff;
      color: white;
      padding: 12px 24px;
      border: none;
      border-radius: 6px;
      cursor: pointer;
      font-size: 16px;
      margin-top: 20px;
    }
    button:hover {
      background-color: #0056b3;
    }
    .example {
      background: #f8f9fa;
      padding: 10px;
      border-left: 4px solid #007bff;
      margin: 10px 0;
      font-family: monospace;
    }
  </style>
</head>
<body>
  <div class="container">
    <h1>md2anki</h1>

    {% if error %}<div class="error">{{ error }}</div>{% endif %}

    <div class="help-section">
      <h3>How to Format Your Cards</h3>
      <p><strong>Basic Cards:</strong> Use a tab to separate front and back</p>
      <div class="example">What is the capital of France?	Paris</div>

      <p><strong>Cloze Deletion:</strong> Use {%raw%}{{c1::answer}}{%endraw%} format (no tab needed)</p>
      <div class="example">{%raw%}The capital of France is {{c1::Paris}}{%endraw%}</div>

      <p><strong>Multiple Clozes:</strong> Use c1, c2, etc. for different deletions</p>
      <div class="example">{%raw%}{{c1::Napoleon}} was born in {{c2::1769}} in {{c3::Corsica}}{%endraw%}</div>
    </div>

    <form method="POST">
      <label for="deck_name">Deck Name:</label>
      <input type="text" id="deck_name" name="deck_name" value="{{ deck_name }}" required>

      <label for="cards_text">Your Cards (one per line):</label>
      <textarea id="cards_text" name="cards_text" placeholder="Enter your cards here, one per line..." required></textarea>

      <button type="submit">Download as .apkg</button>
    </form>
  </div>
</body>
</html>
'''

if __name__ == '__main__':
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=True)
