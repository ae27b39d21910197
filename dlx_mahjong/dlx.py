"""
Exact Cover Solver

Knuth's Algorithm X on a dancing-links matrix. The sparse toroidal matrix is
kept in an arena of parallel integer lists: every node is an index, and the
left/right/up/down links are indices into the same lists. Covering and
uncovering a column only rewrites links, so both stay O(1) per node and no
node is ever freed.

Node layout:
- 0: root header, linked to the leftmost and rightmost column headers
- 1..n_columns: column headers (column c lives at node c + 1)
- n_columns + 1..: one node per 1-cell, grouped by row
"""

from typing import FrozenSet, Iterable, List, Sequence

ROOT = 0
DEFAULT_UNIVERSE_SIZE = 14


class ExactCoverSolver:
    """
    Finds every exact cover of a column universe by a list of rows.

    Each row is an iterable of column indices (a candidate group of tile
    slots). A solution is a set of row indices whose columns are pairwise
    disjoint and together cover every column exactly once.
    """

    def __init__(self, rows: Sequence[Iterable[int]], universe_size: int = DEFAULT_UNIVERSE_SIZE):
        """
        Build the linked matrix.

        Args:
            rows: Candidate rows, each a collection of column indices
            universe_size: Number of columns to cover
        """
        self.n_columns = universe_size
        self.n_rows = len(rows)

        self.left: List[int] = []
        self.right: List[int] = []
        self.up: List[int] = []
        self.down: List[int] = []
        self.column: List[int] = []
        self.row_id: List[int] = []
        self.count: List[int] = [0] * (universe_size + 1)

        self._solution: List[int] = []
        self._covers: List[FrozenSet[int]] = []

        self._build_headers()
        for row_index, row in enumerate(rows):
            self._add_row(row_index, row)

    def _new_node(self, column: int, row_index: int) -> int:
        node = len(self.left)
        self.left.append(node)
        self.right.append(node)
        self.up.append(node)
        self.down.append(node)
        self.column.append(column)
        self.row_id.append(row_index)
        return node

    def _build_headers(self) -> None:
        self._new_node(ROOT, -1)
        for _ in range(self.n_columns):
            header = self._new_node(len(self.left), -1)
            # Insert header just left of the root
            self.left[header] = self.left[ROOT]
            self.right[header] = ROOT
            self.right[self.left[ROOT]] = header
            self.left[ROOT] = header

    def _add_row(self, row_index: int, row: Iterable[int]) -> None:
        first = None
        for col in sorted(set(row)):
            if not 0 <= col < self.n_columns:
                raise ValueError(
                    f"Row {row_index} uses column {col} outside universe of size {self.n_columns}"
                )
            header = col + 1
            node = self._new_node(header, row_index)

            # Append at the bottom of the column
            self.up[node] = self.up[header]
            self.down[node] = header
            self.down[self.up[header]] = node
            self.up[header] = node
            self.count[header] += 1

            # Append at the end of the circular row
            if first is None:
                first = node
            else:
                self.left[node] = self.left[first]
                self.right[node] = first
                self.right[self.left[first]] = node
                self.left[first] = node

    def cover(self, header: int) -> None:
        """Unlink a column header and every row that touches the column."""
        self.right[self.left[header]] = self.right[header]
        self.left[self.right[header]] = self.left[header]

        row = self.down[header]
        while row != header:
            node = self.right[row]
            while node != row:
                self.down[self.up[node]] = self.down[node]
                self.up[self.down[node]] = self.up[node]
                self.count[self.column[node]] -= 1
                node = self.right[node]
            row = self.down[row]

    def uncover(self, header: int) -> None:
        """Exact mirror of cover(): relink in reverse order."""
        row = self.up[header]
        while row != header:
            node = self.left[row]
            while node != row:
                self.count[self.column[node]] += 1
                self.down[self.up[node]] = node
                self.up[self.down[node]] = node
                node = self.left[node]
            row = self.up[row]

        self.right[self.left[header]] = header
        self.left[self.right[header]] = header

    def _min_column(self) -> int:
        """Column with the fewest live rows, leftmost on ties."""
        best = self.right[ROOT]
        header = self.right[best]
        while header != ROOT:
            if self.count[header] < self.count[best]:
                best = header
            header = self.right[header]
        return best

    def _search(self) -> None:
        if self.right[ROOT] == ROOT:
            self._covers.append(frozenset(self.row_id[node] for node in self._solution))
            return

        header = self._min_column()
        if self.count[header] == 0:
            return

        self.cover(header)
        row = self.down[header]
        while row != header:
            self._solution.append(row)
            node = self.right[row]
            while node != row:
                self.cover(self.column[node])
                node = self.right[node]

            self._search()

            self._solution.pop()
            node = self.left[row]
            while node != row:
                self.uncover(self.column[node])
                node = self.left[node]
            row = self.down[row]
        self.uncover(header)

    def solve(self) -> List[FrozenSet[int]]:
        """
        Run Algorithm X over the full search space.

        Returns:
            Every exact cover as a frozenset of row indices, in discovery order
        """
        self._solution = []
        self._covers = []
        self._search()
        return list(self._covers)


def find_exact_covers(
    groups: Sequence[Iterable[int]],
    universe_size: int = DEFAULT_UNIVERSE_SIZE,
) -> List[FrozenSet[int]]:
    """
    Find every selection of groups covering range(universe_size) exactly once.

    Args:
        groups: Candidate groups, each a collection of tile slot indices
        universe_size: Number of tile slots to cover

    Returns:
        List of covers, each a frozenset of indices into ``groups``.
        Empty when no cover exists.
    """
    return ExactCoverSolver(groups, universe_size).solve()
