from flask import Blueprint, jsonify

from catchmind import get_game_state

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Catchmind game server!'})


@main.route('/health')
def health():
    state = get_game_state()
    return jsonify({
        'status': 'ok',
        'rooms': len(state.registry),
        'backplane': state.backplane_url is not None,
    })
