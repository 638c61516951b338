import os
import logging

logger = logging.getLogger(__name__)

MERGE_STRATEGIES = ('iterative', 'recursive')


def merge_strategy(environ=os.environ) -> str:
    ''' merge implementation used by Queue.sort '''

    strategy = environ.get('QUEUE_MERGE_STRATEGY', 'iterative').strip().lower()
    if strategy not in MERGE_STRATEGIES:
        raise ValueError(f'unknown merge strategy:{strategy}')
    logger.debug(f'merge strategy:{strategy}')
    return strategy


def fail_probability(environ=os.environ) -> float:
    ''' default probability that an allocation fails '''

    value = environ.get('QUEUE_FAIL_PROBABILITY', '0')
    try:
        probability = float(value)
    except ValueError:
        raise ValueError(f'invalid fail probability:{value}') from None
    if not 0 <= probability <= 1:
        raise ValueError(f'fail probability out of range:{probability}')
    logger.debug(f'fail probability:{probability}')
    return probability

