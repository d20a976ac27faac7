import random

DEFAULT_WORDS = [
    '사과',
    '바나나',
    '컴퓨터',
    '자동차',
    '커피',
    '의자',
    '책상',
    '휴대폰',
    '자전거',
    '카메라',
]


class WordProvider:
    """Uniform random picks from a fixed pool. Repeats are allowed."""

    def __init__(self, words=None, rng=None):
        self.words = list(words) if words else list(DEFAULT_WORDS)
        if not all(isinstance(w, str) and w.strip() for w in self.words):
            raise ValueError('word pool entries must be non-empty strings')
        self._rng = rng or random.Random()

    def pick(self) -> str:
        return self._rng.choice(self.words)
