import random
import logging
from typing import Optional

import config

logger = logging.getLogger(__name__)


class Allocator:
    '''
    Creates queue nodes and string copies, keeping count of live allocations.

    Allocation failures can be injected, either deterministically with
    fail_next() or randomly with fail_probability. A failed allocation raises
    MemoryError, exactly like the interpreter running out of memory.
    '''

    def __init__(self, fail_probability: Optional[float] = None, seed=None) -> None:
        if fail_probability is None:
            fail_probability = config.fail_probability()
        assert 0 <= fail_probability <= 1, 'fail probability out of range'

        self.fail_probability: float = fail_probability
        self.allocated: int = 0
        self.failures: int = 0
        self._pending_failures: int = 0
        self._random = random.Random(seed)

    def fail_next(self, count: int = 1):
        ''' make the next `count` allocations fail '''

        assert count >= 0
        self._pending_failures = count

    def _check(self, what: str):
        if self._pending_failures > 0:
            self._pending_failures -= 1
        elif not (self.fail_probability and self._random.random() < self.fail_probability):
            return
        self.failures += 1
        logger.debug(f'injected allocation failure:{what}')
        raise MemoryError(f'cannot allocate {what}')

    def malloc(self, factory, *args):
        ''' build an object through factory, counting it as live '''

        self._check(getattr(factory, '__name__', 'object'))
        obj = factory(*args)
        self.allocated += 1
        return obj

    def strdup(self, s: str) -> str:
        ''' private copy of a string '''

        self._check('string')
        self.allocated += 1
        return str(s)

    def free(self, obj):
        if obj is None:
            return
        assert self.allocated > 0, 'double free'
        self.allocated -= 1


_default = None


def default_allocator() -> Allocator:
    ''' shared allocator, configured from the environment on first use '''

    global _default
    if _default is None:
        _default = Allocator()
    return _default
