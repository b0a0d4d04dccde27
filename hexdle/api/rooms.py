from flask import Blueprint, jsonify, request, current_app
from hexdle.services.rooms import ROOM_CAPACITY
from hexdle.services.rooms.colors import color_accuracy_percentage
from hexdle.services.rooms.history import recent_matches


rooms_api = Blueprint('rooms_api', __name__)


@rooms_api.route('/rooms', methods=['GET'])
def list_open_rooms():
    """
    Returns rooms that have a player waiting for an opponent.
    """
    registry = current_app.extensions['match_coordinator'].registry
    waiting = []
    for room in registry.rooms():
        with room.lock:
            if not room.closed and room.players and not room.is_full:
                waiting.append({'room': room.room_id, 'players': len(room.players)})
    return jsonify(sorted(waiting, key=lambda r: r['room']))


@rooms_api.route('/rooms/<string:room_id>', methods=['GET'])
def get_room(room_id):
    """
    Returns the lobby status of a live room. The target color is never included.
    """
    registry = current_app.extensions['match_coordinator'].registry
    room = registry.get(room_id)
    if room is None:
        return jsonify({'error': 'Room not found'}), 404
    with room.lock:
        payload = {
            'room': room.room_id,
            'status': room.status,
            'players': len(room.players),
            'capacity': ROOM_CAPACITY,
            'finished': room.finished_count,
        }
    return jsonify(payload)


@rooms_api.route('/matches', methods=['GET'])
def list_matches():
    """
    Returns recently resolved versus matches, newest first.
    """
    default_limit = int(current_app.config.get('MATCH_HISTORY_LIMIT', 20))
    limit = request.args.get('limit', default_limit, type=int)
    if limit is None or limit < 1:
        return jsonify({'error': 'limit must be a positive integer'}), 400
    limit = min(limit, 100)
    return jsonify([m.to_dict() for m in recent_matches(limit)])


@rooms_api.route('/colors/accuracy', methods=['POST'])
def color_accuracy():
    data = request.get_json(silent=True) or {}
    guess = data.get('guess')
    target = data.get('target')
    if not all([guess, target]):
        return jsonify({'error': 'guess and target are required'}), 400
    try:
        accuracy = color_accuracy_percentage(guess, target)
    except ValueError as exc:
        return jsonify({'error': str(exc)}), 400
    return jsonify({'guess': guess, 'target': target, 'accuracy': accuracy})
