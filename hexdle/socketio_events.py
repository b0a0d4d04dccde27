from flask import current_app, request
from flask_socketio import emit
from hexdle import socketio
from hexdle.services.rooms import MatchCoordinator

NAMESPACE = '/'


class SocketIONotifier:
    """Outbound side of the coordinator, backed by Flask-SocketIO."""

    def __init__(self, sio, namespace: str = NAMESPACE):
        self.sio = sio
        self.namespace = namespace

    def send(self, event, data, to, skip=None):
        self.sio.emit(event, data, to=to, skip_sid=skip, namespace=self.namespace)

    def enter(self, sid, channel):
        # sio.server only exists after init_app, so resolve it per call
        self.sio.server.enter_room(sid, channel, namespace=self.namespace)

    def close(self, channel):
        self.sio.close_room(channel, namespace=self.namespace)


def _get_sid() -> str:
    return request.sid  # type: ignore


def _coordinator() -> MatchCoordinator:
    return current_app.extensions['match_coordinator']


def _room_arg(data):
    room = data.get('room') if isinstance(data, dict) else data
    if room is None:
        return None
    return str(room).strip() or None


def _parse_time(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError('time must be a number of seconds')
    if isinstance(value, float):
        # also rejects inf and nan
        if not value.is_integer():
            raise ValueError('time must be a whole number of seconds')
        value = int(value)
    if value < 0:
        raise ValueError('time must not be negative')
    return value


def handle_connect(auth=None):
    current_app.logger.info(f"[connect] sid={_get_sid()}")


def handle_disconnect(reason=None):
    sid = _get_sid()
    current_app.logger.info(f"[disconnect] sid={sid} reason={reason}")
    _coordinator().disconnect(sid)


def handle_join_room(data):
    _coordinator().join(_room_arg(data), _get_sid())


def handle_submit_guess(data):
    if not isinstance(data, dict) or data.get('res') is None:
        emit('error', {'message': 'res is required'})
        return
    room = _room_arg(data)
    _coordinator().relay_guess(_get_sid(), data['res'], room_id=room)


def handle_submit_win_lose(data):
    if not isinstance(data, dict) or data.get('res') not in ('win', 'lose'):
        emit('error', {'message': "res must be 'win' or 'lose'"})
        return
    try:
        seconds = _parse_time(data.get('time', 0))
    except (TypeError, ValueError) as exc:
        emit('error', {'message': f'invalid time: {exc}'})
        return

    report = _coordinator().submit_result(
        _get_sid(), data['res'] == 'win', seconds, room_id=_room_arg(data)
    )
    if report is not None and current_app.config.get('RECORD_MATCHES'):
        from hexdle.services.rooms.history import record_match
        record_match(report, logger=current_app.logger)


def register_socketio_handlers(namespace: str = NAMESPACE) -> None:
    """Register the versus protocol handlers on the shared SocketIO instance."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('joinRoom', handle_join_room, namespace=namespace)
    socketio.on_event('submitGuess', handle_submit_guess, namespace=namespace)
    socketio.on_event('submitWinLose', handle_submit_win_lose, namespace=namespace)
