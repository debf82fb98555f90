"""
Dictionary Generator - Flask Web Application

Small JSON API around the dictionary generator:
- Quota status
- Single word lookups
- Batch generation from a word list on disk
"""

import threading
from pathlib import Path
from typing import Optional

from flask import Flask, request, jsonify

from .config import (
    VERSION, HOST, PORT, DATA_DIR, DEFAULT_WORD_LIST, DEFAULT_DICTIONARY,
    MERRIAM_WEBSTER_COLLEGIATE_KEY
)
from .fetchers.quota import SettingsStore
from .generators.dictionary_generator import (
    DictionaryGenerator, DictionaryLookupError, LookupErrorKind
)
from .generators.word_list import DictionaryWriter, read_word_list
from .utils.run_log import RunLog

# Initialize Flask app
app = Flask(__name__)

# Global instance (lazy loaded)
_generator = None
_generator_lock = threading.Lock()

# Only one batch at a time
_run_lock = threading.Lock()

ERROR_STATUS = {
    LookupErrorKind.NOT_FOUND: 404,
    LookupErrorKind.QUOTA_EXCEEDED: 429,
    LookupErrorKind.FATAL: 502,
}


def get_generator():
    """Get or create dictionary generator instance."""
    global _generator
    with _generator_lock:
        if _generator is None:
            _generator = DictionaryGenerator(store=SettingsStore(), log=RunLog(echo=False))
    return _generator


def _api_key_missing():
    return not get_generator().fetcher.configured


def _allowed_path(value, default) -> Optional[Path]:
    """Resolve a requested file path; None if it lies outside the working or data directory."""
    path = (Path.cwd() / (value or default)).resolve()
    for root in (Path.cwd().resolve(), DATA_DIR.resolve()):
        try:
            path.relative_to(root)
            return path
        except ValueError:
            continue
    return None


@app.route('/api/status')
def api_status():
    """Get today's quota status."""
    status = get_generator().get_status()
    status['version'] = VERSION
    status['api_configured'] = not _api_key_missing()
    return jsonify(status)


@app.route('/api/entry')
def api_entry():
    """Look up the category of a single word."""
    word = request.args.get('word', '').strip()
    if not word:
        return jsonify({'error': 'word is required'}), 400

    if _api_key_missing():
        return jsonify({'error': 'MW Collegiate API key not configured. Set MW_COLLEGIATE_API_KEY.'}), 503

    try:
        entry = get_generator().get_dictionary_entry(word)
    except DictionaryLookupError as e:
        return jsonify({'error': str(e), 'kind': e.kind.value}), ERROR_STATUS[e.kind]

    _, _, category = entry.partition(', ')
    return jsonify({'entry': entry, 'word': word, 'category': category})


@app.route('/api/generate/start', methods=['POST'])
def api_generate_start():
    """Run a batch over a word list file and append to a dictionary file."""
    data = request.get_json(silent=True) or {}
    word_list = _allowed_path(data.get('word_list'), DEFAULT_WORD_LIST)
    dictionary = _allowed_path(data.get('dictionary'), DEFAULT_DICTIONARY)

    if word_list is None or dictionary is None:
        return jsonify({'error': 'Paths must be inside the working or data directory'}), 400

    if not word_list.exists():
        return jsonify({'error': f'Word list not found: {word_list}'}), 404

    if _api_key_missing():
        return jsonify({'error': 'MW Collegiate API key not configured. Set MW_COLLEGIATE_API_KEY.'}), 503

    if not _run_lock.acquire(blocking=False):
        return jsonify({'error': 'A generation run is already in progress'}), 409

    try:
        gen = get_generator()
        try:
            words = read_word_list(word_list)
        except ValueError as e:
            return jsonify({'error': f'Word list is not valid UTF-8 text: {e}'}), 400
        with DictionaryWriter(dictionary) as writer:
            summary = gen.run(words, writer)
    finally:
        _run_lock.release()

    result = summary.to_dict()
    result['status'] = gen.get_status()
    return jsonify(result)


def main():
    """Run the application."""
    print(f"Dictionary Generator v{VERSION}")
    print(f"🌐 Starting server at http://localhost:{PORT}")
    print("   Press Ctrl+C to stop\n")

    if not MERRIAM_WEBSTER_COLLEGIATE_KEY:
        print("⚠ MW_COLLEGIATE_API_KEY is not set; lookups will be refused.\n")

    app.run(host=HOST, port=PORT, debug=False, threaded=True)


if __name__ == '__main__':
    main()
