from typing import Optional

ENCODING = 'utf-8'


def new_buffer(size: int) -> bytearray:
    ''' zeroed output buffer for Queue.remove_head '''

    assert size >= 0
    return bytearray(size)


def copy_to_buffer(buf: Optional[bytearray], bufsize: int, s: str) -> int:
    '''
    snprintf-like copy: write at most bufsize-1 bytes of s plus a NUL
    terminator. Returns the number of bytes written, terminator excluded.
    Truncation is silent.
    '''

    if buf is None or bufsize <= 0:
        return 0
    assert bufsize <= len(buf), 'bufsize larger than buffer'

    data = s.encode(ENCODING)[:bufsize-1]
    buf[:len(data)] = data
    buf[len(data)] = 0
    return len(data)


def buffer_to_str(buf: bytearray) -> str:
    ''' decode a NUL terminated buffer '''

    end = buf.find(0)
    if end < 0:
        end = len(buf)
    # truncation may have cut a multi-byte sequence
    return bytes(buf[:end]).decode(ENCODING, errors='ignore')
