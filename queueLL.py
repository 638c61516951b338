import sys
import logging
from typing import Callable, Iterator, List, Optional

import config
import utils
from allocator import Allocator, default_allocator
from natcmp import strnatcmp

logger = logging.getLogger(__name__)


class Node:
    __slots__ = ('value', 'next')

    def __init__(self, value: Optional[str] = None):
        self.value: Optional[str] = value
        self.next: Optional[Node] = None


def _merge_iterative(left: Node, right: Node, cmp) -> Node:
    ''' merge two sorted lists, equal keys taken from left first '''

    if left is None:
        return right
    if right is None:
        return left

    if cmp(left.value, right.value) <= 0:
        head = left
        left = left.next
    else:
        head = right
        right = right.next

    node = head
    while left is not None and right is not None:
        if cmp(left.value, right.value) <= 0:
            node.next = left
            left = left.next
        else:
            node.next = right
            right = right.next
        node = node.next

    node.next = left if left is not None else right
    return head


def _merge_recursive(left: Node, right: Node, cmp) -> Node:
    if left is None:
        return right
    if right is None:
        return left

    if cmp(left.value, right.value) <= 0:
        left.next = _merge_recursive(left.next, right, cmp)
        return left
    right.next = _merge_recursive(left, right.next, cmp)
    return right


MERGES = {
    'iterative': _merge_iterative,
    'recursive': _merge_recursive,
}


def _merge_sort(head: Node, merge, cmp) -> Node:
    if head is None or head.next is None:
        return head

    # fast starts one ahead so slow stops at the end of the left half
    slow = head
    fast = head.next
    while fast is not None and fast.next is not None:
        slow = slow.next
        fast = fast.next.next

    right = slow.next
    slow.next = None

    left = _merge_sort(head, merge, cmp)
    right = _merge_sort(right, merge, cmp)
    return merge(left, right, cmp)


class Queue:
    '''
    Queue of strings implemented on a singly linked list.

    Strings are inserted at either end and removed from the head. Every
    operation either completes or leaves the queue untouched; expected
    failures (empty queue, allocation failure) are reported by the return
    value, never raised.
    '''

    def __init__(self, allocator: Optional[Allocator] = None, merge: Optional[str] = None,
                 cmp: Callable[[str, str], int] = strnatcmp) -> None:
        if merge is None:
            merge = config.merge_strategy()
        if merge not in MERGES:
            raise ValueError(f'unknown merge strategy:{merge}')

        self.head: Optional[Node] = None
        self.tail: Optional[Node] = None
        self._size: int = 0

        self.allocator: Allocator = allocator if allocator is not None else default_allocator()
        self.merge: str = merge
        self.cmp: Callable[[str, str], int] = cmp

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[str]:
        node = self.head
        while node is not None:
            yield node.value
            node = node.next

    def __repr__(self) -> str:
        return f'Queue({self.to_list()!r})'

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self.head is None

    def first(self) -> str:
        if self.head is None:
            raise IndexError('first from empty queue')
        return self.head.value

    def last(self) -> str:
        if self.tail is None:
            raise IndexError('last from empty queue')
        return self.tail.value

    def to_list(self) -> List[str]:
        return list(self)

    def _new_node(self, s: str) -> Optional[Node]:
        ''' node holding a private copy of s, None if allocation failed '''

        try:
            node = self.allocator.malloc(Node)
        except MemoryError:
            logger.warning(f'cannot allocate node for {s!r}')
            return None

        try:
            node.value = self.allocator.strdup(s)
        except MemoryError:
            self.allocator.free(node)
            logger.warning(f'cannot allocate string {s!r}')
            return None

        return node

    def _nodes(self) -> Iterator[Node]:
        node = self.head
        while node is not None:
            yield node
            node = node.next

    def _relink(self, nodes: List[Node]):
        for node, following in zip(nodes, nodes[1:]):
            node.next = following
        nodes[-1].next = None
        self.head = nodes[0]
        self.tail = nodes[-1]

    def _release(self, node: Node):
        node.next = None
        self.allocator.free(node.value)
        node.value = None
        self.allocator.free(node)

    def insert_head(self, s: str) -> bool:
        node = self._new_node(s)
        if node is None:
            return False

        node.next = self.head
        self.head = node
        if self.tail is None:
            self.tail = node
        self._size += 1
        return True

    def insert_tail(self, s: str) -> bool:
        node = self._new_node(s)
        if node is None:
            return False

        if self.tail is None:
            self.head = self.tail = node
        else:
            self.tail.next = node
            self.tail = node
        self._size += 1
        return True

    def remove_head(self, buf: Optional[bytearray] = None, bufsize: int = 0) -> bool:
        '''
        Remove the head element. If buf is given, up to bufsize-1 bytes of
        the removed string are copied into it, followed by a NUL byte.
        Longer strings are truncated without notice.
        '''

        if self.head is None:
            return False

        node = self.head
        utils.copy_to_buffer(buf, bufsize, node.value)

        self.head = node.next
        if self.head is None:
            self.tail = None
        self._size -= 1

        self._release(node)
        return True

    def reverse(self):
        ''' reverse the queue in place, relinking the existing nodes '''

        if self.head is None or self.head is self.tail:
            return

        # close the ring, then move every node after head behind the old tail
        self.tail.next = self.head
        while self.head.next is not self.tail:
            node = self.head.next
            self.head.next = node.next
            node.next = self.tail.next
            self.tail.next = node

        self.head, self.tail = self.tail, self.head
        self.tail.next = None
        logger.debug(f'reversed {self._size} elements')

    def sort(self):
        ''' stable ascending sort in natural order '''

        if self.head is None or self.head.next is None:
            return

        merge = MERGES[self.merge]
        if merge is _merge_recursive and self._size >= sys.getrecursionlimit() // 2:
            logger.warning(f'{self._size} elements too many for recursive merge, merging iteratively')
            merge = _merge_iterative

        # merging cuts the list apart, keep the original order so a failing
        # comparison leaves the queue as it was
        nodes = list(self._nodes())
        try:
            self.head = _merge_sort(self.head, merge, self.cmp)
        except BaseException:
            self._relink(nodes)
            logger.warning(f'sort of {self._size} elements failed, order restored')
            raise
        while self.tail.next is not None:
            self.tail = self.tail.next
        logger.debug(f'sorted {self._size} elements')

    def free(self):
        ''' release every node and its string '''

        count = self._size
        while self.head is not None:
            node = self.head
            self.head = node.next
            self._release(node)
        self.tail = None
        self._size = 0
        logger.debug(f'freed {count} elements')


def q_new(allocator: Optional[Allocator] = None) -> Optional[Queue]:
    ''' new empty queue, None if it cannot be allocated '''

    if allocator is None:
        allocator = default_allocator()
    try:
        return allocator.malloc(Queue, allocator)
    except MemoryError:
        logger.warning('cannot allocate queue')
        return None


def q_free(q: Optional[Queue]):
    ''' free a queue created by q_new '''

    if q is None:
        return
    q.free()
    q.allocator.free(q)


def q_insert_head(q: Optional[Queue], s: str) -> bool:
    if q is None:
        return False
    return q.insert_head(s)


def q_insert_tail(q: Optional[Queue], s: str) -> bool:
    if q is None:
        return False
    return q.insert_tail(s)


def q_remove_head(q: Optional[Queue], buf: Optional[bytearray] = None, bufsize: int = 0) -> bool:
    if q is None:
        return False
    return q.remove_head(buf, bufsize)


def q_size(q: Optional[Queue]) -> int:
    if q is None:
        return 0
    return q.size()


def q_reverse(q: Optional[Queue]):
    if q is None:
        return
    q.reverse()


def q_sort(q: Optional[Queue]):
    if q is None:
        return
    q.sort()
