import re

_DIGITS = re.compile(r'([0-9]+)')


def _number(run: str) -> tuple:
    # (length, digits) orders digit runs by value without int(),
    # which rejects very long runs
    digits = run.lstrip('0')
    return len(digits), digits


def natural_key(s: str, fold_case: bool = False) -> list:
    '''
    Split a string into alternating text and number runs, e.g.
    'item10b' -> ['item', (2, '10'), 'b']. The list always starts with a text
    run (possibly empty), so two keys compare text with text and number with
    number.
    '''

    if fold_case:
        s = s.lower()
    # odd positions hold the captured digit runs
    return [_number(part) if i % 2 else part
            for i, part in enumerate(_DIGITS.split(s))]


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def strnatcmp(a: str, b: str) -> int:
    ''' three-way natural order comparison: 'item2' < 'item10' '''

    result = _cmp(natural_key(a), natural_key(b))
    if result == 0:
        # 'a01' and 'a1' have equal keys
        result = _cmp(a, b)
    return result


def strnatcasecmp(a: str, b: str) -> int:
    ''' like strnatcmp, ignoring case '''

    result = _cmp(natural_key(a, True), natural_key(b, True))
    if result == 0:
        result = _cmp(a.lower(), b.lower())
    return result
