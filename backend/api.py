"""
Flask REST API for the Calorie Tracker.
Exposes the tracker operations as JSON endpoints.

Run from the project root (or after `pip install -e .`) with:
    python -m backend.api
"""

from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from app_logging import configure_logging
from config import Config
from models import ValidationError
from storage import SqliteStore
from tracker import PersistenceError, Tracker


# ============== Helper Functions ==============

def json_response(data, status=200):
    """Create a JSON response."""
    return jsonify(data), status


def error_response(message, status=400, **extra):
    """Create an error response."""
    return jsonify({'error': message, **extra}), status


def request_data() -> dict:
    """Return the JSON body if it is an object, otherwise an empty dict."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def create_app(tracker: Optional[Tracker] = None, config: Optional[Config] = None) -> Flask:
    """Build the Flask app around a tracker, creating one from config if needed."""
    if tracker is None:
        config = config or Config.from_env()
        tracker = Tracker(SqliteStore(config.database_path), key=config.storage_key)
        tracker.initialize()

    app = Flask(__name__)
    CORS(app)

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(e):
        return error_response(str(e), 500, **tracker.view().to_dict())

    # ============== Food Entries ==============

    @app.route('/api/foods', methods=['GET'])
    def get_foods():
        """Get all entries and the total."""
        return json_response(tracker.view().to_dict())

    @app.route('/api/foods', methods=['POST'])
    def add_food():
        """Add a new food entry."""
        data = request_data()

        name = str(data.get('name') or '').strip()
        calories = data.get('calories')
        if isinstance(calories, str):
            calories = calories.strip()
        if not name or calories is None or calories == '':
            return error_response('Food name and calories are required')

        try:
            entry = tracker.add_food(name, calories)
        except ValidationError as e:
            return error_response(str(e))

        return json_response({
            'food': entry.to_dict(),
            'message': 'Food added successfully',
            **tracker.view().to_dict(),
        }, 201)

    @app.route('/api/foods/<entry_id>', methods=['DELETE'])
    def remove_food(entry_id):
        """Remove a food entry. Unknown ids leave the list unchanged."""
        removed = tracker.remove_food(entry_id)
        return json_response({'removed': removed, **tracker.view().to_dict()})

    # ============== Reset ==============

    @app.route('/api/reset', methods=['POST'])
    def reset():
        """Clear the tracker. The request must carry confirm: true."""
        data = request_data()
        confirmed = data.get('confirm') is True
        was_reset = tracker.reset(lambda: confirmed)
        return json_response({'reset': was_reset, **tracker.view().to_dict()})

    return app


if __name__ == '__main__':
    config = Config.from_env()
    configure_logging(config.log_level)
    create_app(config=config).run(host='127.0.0.1', port=config.port, debug=False)
