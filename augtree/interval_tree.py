"""
Augmented interval tree indexed by start point.

Intervals are half-open, [start, end). Every node caches the highest end
value found in its subtree, which lets a stabbing query skip subtrees that
cannot reach the query point. The tree is never rebalanced: its shape is a
function of insertion order alone.
"""

from typing import Generic, Iterator, Optional, TypeVar

# T is any ordered type used for coordinates (ints, times, aware datetimes)
T = TypeVar('T')


class AugTreeNode(Generic[T]):
    """One stored interval plus the subtree maximum of its end values."""
    __slots__ = ['interval', 'highest', 'left', 'right']

    def __init__(self, start: T, end: T):
        # start <= end is not checked; an inverted interval never matches.
        self.interval: tuple[T, T] = (start, end)
        self.highest: T = end
        self.left: Optional['AugTreeNode[T]'] = None
        self.right: Optional['AugTreeNode[T]'] = None

    @property
    def start(self) -> T:
        return self.interval[0]

    @property
    def end(self) -> T:
        return self.interval[1]

    def range(self) -> tuple[T, T]:
        """Return the stored (start, end) pair."""
        return self.interval

    def add(self, node: 'AugTreeNode[T]'):
        """Insert node into the subtree rooted here."""
        insert(self, node)

    def remove(self, node: 'AugTreeNode[T]'):
        # Removing the root of a bare node tree would need to re-root it.
        raise NotImplementedError(
            "AugTreeNode cannot remove nodes in place; use IntervalTree.remove()"
        )

    def __repr__(self):
        return f"AugTreeNode(interval={self.interval!r}, highest={self.highest!r})"


# --- Node-level operations ---

def insert(root: AugTreeNode[T], node: AugTreeNode[T]):
    """
    Attach node below root, following start order (ties go right).

    Every node on the descent path has its highest raised to cover the
    new node, whichever side the descent takes.
    """
    curr = root
    while True:
        if node.highest > curr.highest:
            curr.highest = node.highest
        if node.interval[0] < curr.interval[0]:
            if curr.left is None:
                curr.left = node
                return
            curr = curr.left
        else:
            if curr.right is None:
                curr.right = node
                return
            curr = curr.right


def query(node: Optional[AugTreeNode[T]], point: T, results: list):
    """
    Append every interval below node that contains point to results.

    Matches come out in tree order: left subtree, node, right subtree.
    """
    # Frames are (node, visited): a node is tested once its left subtree is done.
    stack = [(node, False)]
    while stack:
        n, visited = stack.pop()
        if n is None: continue
        if not visited:
            if n.highest < point: continue
            stack.append((n, True))
            stack.append((n.left, False))
            continue
        start, end = n.interval
        if start <= point < end: results.append((start, end))
        # Everything to the right starts at or after n's start.
        if point < start: continue
        stack.append((n.right, False))


def height(node: Optional[AugTreeNode[T]]) -> int:
    """Length of the longest root-to-leaf path; 0 for an absent node."""
    if node is None:
        return 0
    # Explicit stack so degenerate chains don't hit the recursion limit.
    deepest = 0
    stack = [(node, 1)]
    while stack:
        n, depth = stack.pop()
        if depth > deepest:
            deepest = depth
        if n.left is not None:
            stack.append((n.left, depth + 1))
        if n.right is not None:
            stack.append((n.right, depth + 1))
    return deepest


def traverse(node: Optional[AugTreeNode[T]]) -> Iterator[tuple[T, T]]:
    """Yield intervals in order of start; equal starts in insertion order."""
    stack = []
    curr = node
    while stack or curr is not None:
        while curr is not None:
            stack.append(curr)
            curr = curr.left
        curr = stack.pop()
        yield curr.interval
        curr = curr.right


def verify_integrity(node: Optional[AugTreeNode[T]]):
    """Crashes if start ordering or highest properties are violated."""
    # Pre-order pass checks start bounds: low <= s < high
    order = []
    stack = [(node, None, None)]
    while stack:
        n, low, high = stack.pop()
        if n is None: continue
        start = n.interval[0]
        if (low is not None and start < low) or (high is not None and not start < high):
            raise RuntimeError(f"Ordering Violation at {start}")
        order.append(n)
        stack.append((n.left, low, start))
        stack.append((n.right, start, high))

    # Reversed pre-order sees children before their parent.
    subtree_max = {}
    for n in reversed(order):
        expected = n.interval[1]
        for child in (n.left, n.right):
            if child is not None and subtree_max[id(child)] > expected:
                expected = subtree_max[id(child)]
        if n.highest != expected:
            raise RuntimeError(f"Highest Violation at {n.interval[0]}")
        subtree_max[id(n)] = expected


def _recompute(node: AugTreeNode[T]):
    m = node.interval[1]
    if node.left is not None and node.left.highest > m: m = node.left.highest
    if node.right is not None and node.right.highest > m: m = node.right.highest
    node.highest = m


# --- Owning handle ---

class IntervalTree(Generic[T]):
    """
    Owns the root of an augmented interval tree.

    Not thread-safe: see SynchronizedIntervalTree for a locked wrapper.
    """

    def __init__(self):
        self.root: Optional[AugTreeNode[T]] = None
        self._count = 0

    def insert(self, start: T, end: T) -> AugTreeNode[T]:
        node = AugTreeNode(start, end)
        if self.root is None:
            self.root = node
        else:
            insert(self.root, node)
        self._count += 1
        return node

    def query(self, point: T) -> list[tuple[T, T]]:
        """Return all stored intervals containing point, in tree order."""
        results: list[tuple[T, T]] = []
        query(self.root, point, results)
        return results

    def height(self) -> int:
        return height(self.root)

    def traverse(self) -> Iterator[tuple[T, T]]:
        return traverse(self.root)

    def remove(self, start: T, end: T) -> bool:
        """
        Remove one node storing exactly (start, end).

        A node with two children takes over its in-order successor's
        interval, and the successor is removed from the right subtree.
        highest is recomputed on the whole path back to the root.

        Returns:
            True if a node was removed, False if no such interval is stored.
        """
        target = (start, end)
        path = []  # ancestors of n, root first
        n = self.root
        while n is not None:
            if start < n.interval[0]:
                path.append(n)
                n = n.left
            elif n.interval == target:
                break
            else:
                path.append(n)
                n = n.right
        if n is None:
            return False

        if n.left is not None and n.right is not None:
            path.append(n)
            successor = n.right
            while successor.left is not None:
                path.append(successor)
                successor = successor.left
            n.interval = successor.interval
            n, child = successor, successor.right
        else:
            child = n.left if n.left is not None else n.right

        if not path:
            self.root = child
        elif path[-1].left is n:
            path[-1].left = child
        else:
            path[-1].right = child

        for ancestor in reversed(path):
            _recompute(ancestor)
        self._count -= 1
        return True

    def verify_integrity(self):
        verify_integrity(self.root)

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[tuple[T, T]]:
        return self.traverse()

    def __contains__(self, interval) -> bool:
        return tuple(interval) in self.traverse()
