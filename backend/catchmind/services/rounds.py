from typing import NamedTuple, Optional

from catchmind.models import Player, Room

POINTS_PER_CORRECT_GUESS = 10


class GuessOutcome(NamedTuple):
    correct: bool
    score: Optional[int] = None

    def to_dict(self):
        data = {'correct': self.correct}
        if self.correct:
            data['score'] = self.score
        return data


class RoundAdvance(NamedTuple):
    next_presenter: Player
    new_secret: str


def _normalize(text: str) -> str:
    return text.strip().casefold()


def assign_first_presenter(room: Room, connection_id: str, words) -> None:
    """Make ``connection_id`` the presenter of a room that has none yet."""
    room.set_round(connection_id, words.pick())


def evaluate_guess(room: Room, connection_id: str, guess_text: str) -> GuessOutcome:
    """Check a guess against the room's secret.

    Matching ignores surrounding whitespace and case. A match awards
    POINTS_PER_CORRECT_GUESS to the guesser if they are a member; a guess
    from a non-member still counts as correct, with a score of 0.
    """
    if not room.secret:
        return GuessOutcome(False)
    if _normalize(room.secret) != _normalize(guess_text):
        return GuessOutcome(False)

    player = room.players.get(connection_id)
    if player is None:
        return GuessOutcome(True, score=0)
    player.score += POINTS_PER_CORRECT_GUESS
    return GuessOutcome(True, score=player.score)


def advance_round(room: Room, words) -> Optional[RoundAdvance]:
    """Rotate the presenter role and deal a new secret.

    Rotation is round-robin over join order starting after the current
    presenter. A presenter who already left resets the rotation to the
    first player. Returns None for an empty room.
    """
    if not room.players:
        return None

    players = list(room.players.values())
    ids = [p.connection_id for p in players]
    if room.presenter_id in ids:
        next_index = (ids.index(room.presenter_id) + 1) % len(players)
    else:
        next_index = 0
    next_presenter = players[next_index]

    new_secret = words.pick()
    room.set_round(next_presenter.connection_id, new_secret)
    room.strokes = []
    return RoundAdvance(next_presenter, new_secret)
