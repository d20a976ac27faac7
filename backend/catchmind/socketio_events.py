from functools import wraps

from flask import current_app, request
from flask_socketio import emit, join_room, leave_room
from pydantic import ValidationError

from catchmind import get_game_state, socketio
from catchmind.schemas import Draw, Guess, JoinGame, LeaveGame
from catchmind.services.rounds import advance_round, assign_first_presenter, evaluate_guess


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def validated(schema):
    """Parse the event payload with ``schema`` before calling the handler.

    Malformed payloads are answered with a generic ``exception`` event to
    the sender only and never reach the handler.
    """
    def decorator(handler):
        @wraps(handler)
        def wrapper(data=None):
            try:
                payload = schema.model_validate(data)
            except ValidationError as exc:
                current_app.logger.warning(
                    f"Rejected {handler.__name__} from {_get_sid()}: {exc.error_count()} validation error(s)"
                )
                emit('exception', {'status': 'error', 'message': 'Validation failed'})
                return None
            return handler(payload)
        return wrapper
    return decorator


def _presenter_payload(player):
    return {'presenterId': player.connection_id, 'presenterName': player.name}


def _announce_new_round(room, advance, namespace):
    # socketio.emit so this works from background tasks as well as handlers
    socketio.emit('newRoundStarting', to=room.id, namespace=namespace)
    socketio.emit('presenterAssigned', _presenter_payload(advance.next_presenter), to=room.id, namespace=namespace)
    socketio.emit(
        'roundStarted',
        {'word': advance.new_secret},
        to=advance.next_presenter.connection_id,
        namespace=namespace,
    )


def _start_next_round(room_id: str) -> None:
    """Deferred half of a correct guess: rotate presenter and deal a new word."""
    state = get_game_state()
    namespace = current_app.config.get('SOCKETIO_NAMESPACE', '/game')
    with state.registry.lock:
        room = state.registry.get(room_id)
        if room is None:
            return
        advance = advance_round(room, state.words)
        if advance is None:
            current_app.logger.info(f"Room {room_id} is empty; next round not started")
            return
        room.touch()
        current_app.logger.info(
            f"Room {room_id} new round: presenter={advance.next_presenter.connection_id}"
        )
        _announce_new_round(room, advance, namespace)


def handle_connect(auth=None):
    current_app.logger.info(f"Client connected: {_get_sid()}")


def handle_disconnect(reason=None):
    sid = _get_sid()
    current_app.logger.info(f"Client disconnected: {sid}")
    state = get_game_state()
    forfeit = current_app.config.get('FORFEIT_PRESENTER_ON_DISCONNECT', False)
    namespace = current_app.config.get('SOCKETIO_NAMESPACE', '/game')
    with state.registry.lock:
        for room in state.registry.remove_connection(sid):
            room.touch()
            if not forfeit or room.presenter_id != sid:
                continue
            advance = advance_round(room, state.words)
            if advance:
                current_app.logger.info(f"Presenter {sid} forfeited room {room.id}")
                _announce_new_round(room, advance, namespace)


@validated(JoinGame)
def handle_join_game(payload):
    sid = _get_sid()
    state = get_game_state()
    with state.registry.lock:
        join_room(payload.room_id)
        room = state.registry.ensure_room(payload.room_id)
        room.add_player(sid, payload.user_name)
        if room.presenter_id is None:
            assign_first_presenter(room, sid, state.words)
        room.touch()

        emit('initialState', room.to_dict())
        emit('userJoined', {'id': sid, 'name': payload.user_name}, to=room.id, include_self=False)

        # A presenter who already left gets no announcement
        presenter = room.presenter()
        if presenter:
            emit('presenterAssigned', _presenter_payload(presenter), to=room.id)
            emit('roundStarted', {'word': room.secret}, to=presenter.connection_id)


@validated(Draw)
def handle_drawing(payload):
    sid = _get_sid()
    state = get_game_state()
    with state.registry.lock:
        room = state.registry.ensure_room(payload.room_id)
        if sid != room.presenter_id:
            current_app.logger.warning(f"Client {sid} tried to draw in room {room.id} but is not the presenter.")
            return
        room.strokes.append(payload.data)
        room.touch()
        emit('drawing:remote', {'from': sid, 'data': payload.data}, to=room.id, include_self=False)


@validated(Guess)
def handle_submit_guess(payload):
    sid = _get_sid()
    state = get_game_state()
    with state.registry.lock:
        room = state.registry.ensure_room(payload.room_id)
        outcome = evaluate_guess(room, sid, payload.guess)
        room.touch()
        guesser = room.players.get(sid)

        # Names are omitted, not null, for guessers outside the room
        result = {'from': sid, 'guess': payload.guess}
        ended = {'winnerId': sid, 'score': outcome.score}
        if guesser:
            result['playerName'] = guesser.name
            ended['winnerName'] = guesser.name
        result.update(outcome.to_dict())
        emit('guessResult', result, to=room.id)

        if not outcome.correct:
            return
        emit('roundEnded', ended, to=room.id)
        delay = float(current_app.config.get('ROUND_ADVANCE_DELAY_SEC', 3))
        state.scheduler.schedule(room.id, delay, _start_next_round, room.id)


@validated(LeaveGame)
def handle_leave_game(payload):
    sid = _get_sid()
    state = get_game_state()
    leave_room(payload.room_id)
    with state.registry.lock:
        room = state.registry.get(payload.room_id)
        if room:
            # Presenter role is kept even when the presenter leaves
            room.remove_player(sid)
            room.touch()
    emit('userLeft', {'id': sid}, to=payload.room_id)


def register_socketio_handlers(namespace: str = '/game') -> None:
    """Register the game's Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('joinGame', handle_join_game, namespace=namespace)
    socketio.on_event('drawing', handle_drawing, namespace=namespace)
    socketio.on_event('submitGuess', handle_submit_guess, namespace=namespace)
    socketio.on_event('leaveGame', handle_leave_game, namespace=namespace)
