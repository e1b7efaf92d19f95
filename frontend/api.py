# frontend/api.py

import logging
import threading
import uuid
from collections import OrderedDict

from flask import Blueprint, current_app, jsonify, request

from backend.config import get_difficulty
from backend import game

logger = logging.getLogger(__name__)

api_blueprint = Blueprint("api", __name__)

DEFAULT_MAX_SESSIONS = 1000

# session_id -> SessionEntry, least recently used first
_sessions = OrderedDict()
_sessions_lock = threading.Lock()


class EventQueue(game.GameListener):
    """
    Collects session transitions so they can be returned with the
    response of the request that caused them.
    """

    def __init__(self):
        self.pending = []

    def game_started(self, session):
        self.pending.append({"type": "started"})

    def game_ended(self, session, outcome):
        self.pending.append({"type": "ended", "outcome": outcome.value})

    def drain(self):
        events, self.pending = self.pending, []
        return events


class SessionEntry:
    """
    A registered game. The lock serialises requests against one session.
    """

    def __init__(self, session, events):
        self.session = session
        self.events = events
        self.lock = threading.Lock()


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    return data


def _int_field(data, name, default=None):
    value = data.get(name, default)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{name}' must be an integer")
    return value


def _max_sessions():
    server = current_app.config["GAME_CONFIG"].get("server") or {}
    return int(server.get("max_sessions", DEFAULT_MAX_SESSIONS))


def _lookup(session_id):
    if session_id is not None and not isinstance(session_id, str):
        raise ValueError("'session_id' must be a string")
    with _sessions_lock:
        entry = _sessions.get(session_id)
        if entry is not None:
            _sessions.move_to_end(session_id)
        return entry


def _register(entry):
    session_id = uuid.uuid4().hex
    limit = _max_sessions()
    with _sessions_lock:
        _sessions[session_id] = entry
        while len(_sessions) > limit:
            evicted, _ = _sessions.popitem(last=False)
            logger.debug("Evicted session %s", evicted)
    return session_id


def _session_payload(session_id, entry, **extra):
    payload = {"session_id": session_id, "events": entry.events.drain()}
    payload.update(extra)
    payload.update(entry.session.get_state())
    return payload


def _resolve_dimensions(data, fallback=None):
    config = current_app.config["GAME_CONFIG"]
    if data.get("difficulty") is not None:
        preset = get_difficulty(config, data["difficulty"])
    elif fallback is not None:
        preset = fallback
    else:
        preset = get_difficulty(config)
    return (
        _int_field(data, "width", preset["width"]),
        _int_field(data, "height", preset["height"]),
        _int_field(data, "num_mines", preset["num_mines"]),
    )


@api_blueprint.route("/difficulties", methods=["GET"])
def difficulties():
    config = current_app.config["GAME_CONFIG"]
    return jsonify({
        "default": config["default_difficulty"],
        "difficulties": {name: get_difficulty(config, name) for name in config["difficulties"]}
    })


@api_blueprint.route("/new_game", methods=["POST"])
def new_game():
    try:
        data = _json_body()
        width, height, num_mines = _resolve_dimensions(data)
        seed = _int_field(data, "seed")
        events = EventQueue()
        session = game.create_session(width, height, num_mines, seed=seed, listeners=[events])
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    entry = SessionEntry(session, events)
    session_id = _register(entry)
    with entry.lock:
        return jsonify(_session_payload(session_id, entry))


@api_blueprint.route("/restart", methods=["POST"])
def restart():
    try:
        data = _json_body()
        session_id = data.get("session_id")
        entry = _lookup(session_id)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    if entry is None:
        return jsonify({"error": "Unknown session"}), 404

    with entry.lock:
        old = entry.session
        current = {"width": old.width, "height": old.height, "num_mines": old.num_mines}
        try:
            width, height, num_mines = _resolve_dimensions(data, fallback=current)
            entry.session = game.restart(old, width, height, num_mines)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

        entry.events.drain()
        return jsonify(_session_payload(session_id, entry))


def _apply_action(action):
    try:
        data = _json_body()
        session_id = data.get("session_id")
        entry = _lookup(session_id)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    if entry is None:
        return jsonify({"error": "Unknown session"}), 404

    with entry.lock:
        try:
            x = _int_field(data, "x")
            y = _int_field(data, "y")
            if x is None or y is None:
                raise ValueError("'x' and 'y' are required")
            result = action(entry.session, x, y)
        except (ValueError, IndexError) as e:
            return jsonify({"error": str(e)}), 400

        return jsonify(_session_payload(session_id, entry, **result))


@api_blueprint.route("/reveal", methods=["POST"])
def reveal():
    return _apply_action(game.reveal)


@api_blueprint.route("/flag", methods=["POST"])
def flag():
    return _apply_action(game.toggle_flag)


@api_blueprint.route("/state", methods=["GET"])
def get_state():
    entry = _lookup(request.args.get("session_id"))
    if entry is None:
        return jsonify({"error": "Unknown session"}), 404
    with entry.lock:
        return jsonify(entry.session.get_state())
