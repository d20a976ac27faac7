import os


def _env_flag(name, default='false'):
    return os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


def _env_list(name):
    raw = os.environ.get(name, '')
    return [item.strip() for item in raw.split(',') if item.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Pub/sub backplane for cross-instance fan-out. Unset runs single-instance.
    REDIS_URL = os.environ.get('REDIS_URL') or None
    BACKPLANE_CHANNEL = os.environ.get('BACKPLANE_CHANNEL', 'catchmind')
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/game')
    CORS_ORIGINS = _env_list('CORS_ORIGINS') or '*'
    # Pause between a correct guess and the next round (seconds)
    ROUND_ADVANCE_DELAY_SEC = float(os.environ.get('ROUND_ADVANCE_DELAY_SEC', '3'))
    # Secret pool; empty falls back to the built-in words
    WORD_LIST = _env_list('WORD_LIST')
    # Off keeps the presenter role with a disconnected socket until the next correct guess
    FORFEIT_PRESENTER_ON_DISCONNECT = _env_flag('FORFEIT_PRESENTER_ON_DISCONNECT')
    # Idle-room reaping (seconds). 0 keeps rooms for the process lifetime.
    ROOM_IDLE_TTL_SEC = int(os.environ.get('ROOM_IDLE_TTL_SEC', '0'))
    ROOM_REAP_INTERVAL_SEC = int(os.environ.get('ROOM_REAP_INTERVAL_SEC', '60'))
    PORT = int(os.environ.get('PORT', '3000'))
