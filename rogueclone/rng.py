"""Additive-feedback pseudo-random generator used for all game randomness."""

_MASK32 = 0xFFFFFFFF
_DEGREE = 31
_SEPARATION = 3

_INITIAL_STATE = (
    0x9A319039, 0x32D9C024, 0x9B663182, 0x5DA1F342,
    0xDE3B81E0, 0xDF0A6FB5, 0xF103BC02, 0x48F340FB, 0x7449E56B,
    0xBEB1DBB0, 0xAB5C5918, 0x946554FD, 0x8C2E680F, 0xEB3D799F,
    0xB11EE0B7, 0x2D436B86, 0xDA672E2A, 0x1588CA88, 0xE369735D,
    0x904F35F7, 0xD7158FD6, 0x6FA6F051, 0x616E6B96, 0xAC94EFDC,
    0x36413F93, 0xC622C298, 0xF5A42AB8, 0x8A88D77B, 0xF5AD9D0E,
    0x8999220B, 0x27FB47B9,
)


class Random:
    """A trinomial additive-feedback generator with a 31-word state.

    Without a seed the generator starts from its built-in table, so two
    unseeded generators produce the same sequence.
    """

    def __init__(self, seed=None):
        self._state = list(_INITIAL_STATE)
        self._front = _SEPARATION
        self._rear = 0
        if seed is not None:
            self.seed(seed)

    def seed(self, x):
        """Reinitialise the state from the integer ``x``."""
        state = self._state
        state[0] = x & _MASK32
        for i in range(1, _DEGREE):
            state[i] = (1103515245 * state[i - 1] + 12345) & _MASK32
        self._front = _SEPARATION
        self._rear = 0
        for _ in range(10 * _DEGREE):
            self.next()

    def next(self):
        """Return the next value in ``[0, 2**31)``."""
        state = self._state
        state[self._front] = (state[self._front] + state[self._rear]) & _MASK32
        value = (state[self._front] >> 1) & 0x7FFFFFFF
        self._front += 1
        if self._front >= _DEGREE:
            self._front = 0
            self._rear += 1
        else:
            self._rear += 1
            if self._rear >= _DEGREE:
                self._rear = 0
        return value

    def get_rand(self, x, y):
        """Return an integer between ``x`` and ``y`` inclusive, in either order."""
        if x > y:
            x, y = y, x
        return (self.next() & 0x7FFF) % (y - x + 1) + x

    def rand_percent(self, percentage):
        """Return True with a chance of ``percentage`` in a hundred."""
        return self.get_rand(1, 100) <= percentage

    def coin_toss(self):
        """Return True or False with equal chance."""
        return bool(self.next() & 1)