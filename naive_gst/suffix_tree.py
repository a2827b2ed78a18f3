from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, List, Optional, Set

from naive_gst.tree import Tree, check_trie_property

logger = logging.getLogger(__name__)

########## ! Env
DEBUG = False


########## ! Terminators
FIRST_TERMINATOR = 0x7B
MAX_CODE_POINT = 0x10FFFF
SURROGATES = range(0xD800, 0xE000)


class CapacityExceededError(ValueError):
    pass


class InvalidStringError(ValueError):
    pass


########## ! Generalized Suffix Tree
class GeneralizedSuffixTree:
    """Generalized suffix tree built by naive insertion.

    Every suffix of every string is inserted from the root, one character
    comparison at a time, splitting edges where a suffix diverges. There
    are no suffix links, so construction is quadratic in the total input
    length.

    Each string gets its own terminating character, taken from a running
    code point counter that starts at ``first_terminator``, skipping
    surrogates. Terminators are positional: the last character of a stored
    string is its terminator and matches nothing else, so inputs may
    contain any character, terminator code points included. The string id
    of a leaf tells which string that suffix came from.
    """

    def __init__(self, first_terminator: int = FIRST_TERMINATOR):
        if not 0 <= first_terminator <= MAX_CODE_POINT or first_terminator in SURROGATES:
            raise ValueError(f"Invalid first terminator code point: {first_terminator:#x}")
        self.first_terminator = first_terminator
        self.tree = Tree()
        self.terminators: List[str] = []
        self._terminator_index: Dict[str, int] = {}

    def __len__(self) -> int:
        return len(self.terminators)

    def __repr__(self):
        return f"GeneralizedSuffixTree(strings={len(self)}, nodes={self.count_nodes()})"

    @property
    def strings(self) -> List[str]:
        return [text[:-1] for text in self.tree.texts]

    def string_index(self, terminator: str) -> int:
        return self._terminator_index[terminator]

    def current_terminator(self) -> Optional[str]:
        if not self.terminators:
            return None
        return self.terminators[-1]

    def previous_terminator(self) -> Optional[str]:
        if not self.terminators:
            return None
        if len(self.terminators) == 1:
            return self.terminators[0]
        return self.terminators[-2]

    def _next_terminator(self) -> str:
        if self.terminators:
            cp = ord(self.terminators[-1]) + 1
        else:
            cp = self.first_terminator
        while cp <= MAX_CODE_POINT and cp in SURROGATES:
            cp += 1
        if cp > MAX_CODE_POINT:
            raise CapacityExceededError(
                f"No terminating character left after {len(self.terminators)} strings (max U+{MAX_CODE_POINT:04X})"
            )
        return chr(cp)

    @staticmethod
    def all_suffixes(s: str) -> List[str]:
        return [s[i:] for i in range(len(s) - 1)]

    # * construction
    def add_string(self, s: str) -> int:
        """Terminate ``s`` with a fresh character and insert its suffixes.

        The suffix made of the terminator alone is not inserted. Returns the
        index of the string, which is also its position in ``terminators``.
        Nothing is mutated if the string is rejected.
        """
        if not isinstance(s, str):
            raise InvalidStringError(f"Expected a str, got {type(s).__name__}")
        try:
            terminator = self._next_terminator()
        except CapacityExceededError:
            logger.warning("Capacity exceeded, string %d rejected", len(self.terminators))
            raise

        sid = self.tree.add_text(s + terminator)
        self._terminator_index[terminator] = len(self.terminators)
        self.terminators.append(terminator)

        st = self.tree.texts[sid]
        for position in range(len(st) - 1):
            self.add_suffix(sid, position)

        logger.debug(
            "Added string %d (length %d, terminator U+%04X), tree has %d nodes",
            sid,
            len(s),
            ord(terminator),
            len(self.tree),
        )
        if DEBUG:
            assert check_trie_property(self.tree), "Trie property check failed"
        return sid

    def add_suffix(self, sid: int, position: int) -> Optional[int]:
        """Insert the suffix of terminated string ``sid`` starting at ``position``.

        Returns the leaf the suffix ends at.
        """
        tree = self.tree
        text = tree.texts[sid]
        last = len(text) - 1
        node = tree.root

        # special case - first suffix ever
        if not tree.has_children(node):
            return tree.add_child(node, tree.new_node(sid, position, last, position))

        i = position
        while tree.has_children(node) and i <= last:
            child = tree.edge_with_same_first_char(node, tree.key_at(sid, i))

            # no edge starts with the first char -> new leaf
            if child is None:
                return tree.add_child(node, tree.new_node(sid, i, last, position))

            m = tree.last_matching_index(child, sid, i)
            k = m + 1

            # edge fully consumed -> keep walking
            if m == tree.nodes[child].edge_len() - 1:
                node = child
                i += k
                continue

            # split the edge
            old = tree.nodes[child]
            tree.remove_child(node, tree.label(child))
            mid = tree.add_child(node, tree.new_node(old.sid, old.start, old.start + m))
            old.start += k
            tree.add_child(mid, child)
            return tree.add_child(mid, tree.new_node(sid, i + k, last, position))

        return None

    # * suffix queries
    def _is_end_of_suffix(self, n: int) -> bool:
        children = self.tree.nodes[n].children
        if not children:
            return True
        # terminator edges are keyed by string id
        return any(isinstance(key, int) for key in children)

    def find(self, s: str) -> Optional[int]:
        """Node whose path spells ``s`` where ``s`` ends at least one input.

        Only suffixes of the inserted strings are found; a string that
        occurs solely in the middle of inputs gives ``None``.
        """
        tree = self.tree
        node = tree.root
        while tree.has_children(node):
            if not s:
                return None
            child = tree.edge_with_same_first_char(node, s[0])
            if child is None:
                return None
            edge = tree.body(child)
            if tree.ends_with_terminator(child):
                # s ends inside the edge, right before a terminator
                return child if s == edge else None
            if s == edge and self._is_end_of_suffix(child):
                return child
            elif s.startswith(edge):
                node = child
                s = s[len(edge) :]
            else:
                return None
        return None

    def has_suffix(self, s: str) -> bool:
        return self.find(s) is not None

    # * aggregate queries
    def count_nodes(self) -> int:
        return len(self.tree.bfs())

    def _string_masks(self) -> List[int]:
        tree = self.tree
        masks = [0] * len(tree.nodes)
        for v in tree.postorder():
            node = tree.nodes[v]
            if not node.children:
                if v != tree.root:
                    masks[v] = 1 << node.sid
                continue
            for c in node.children.values():
                masks[v] |= masks[c]
        return masks

    def terminators_below(self, n: int) -> Set[str]:
        tree = self.tree
        return {self.terminators[tree.nodes[v].sid] for v in tree.bfs(n) if v != tree.root and tree.is_leaf(v)}

    def contains_all_inputs(self, n: int) -> bool:
        return self.terminators_below(n) == set(self.terminators)

    def node_value(self, n: int) -> str:
        return self.tree.path_label(n)

    def get_common_substring_nodes(self) -> List[int]:
        # one string has nothing to share with
        if len(self.terminators) < 2:
            return []
        tree = self.tree
        full = (1 << len(self.terminators)) - 1
        masks = self._string_masks()
        return [v for v in tree.bfs() if v != tree.root and masks[v] == full]

    def count_common_substrings(self) -> int:
        return len(self.get_common_substring_nodes())

    def get_common_substrings(self) -> List[str]:
        values = [self.node_value(n) for n in self.get_common_substring_nodes()]
        return sorted(values, key=len, reverse=True)

    def get_longest_common_substrings(self) -> List[str]:
        xs = self.get_common_substrings()
        if not xs:
            return []
        k = len(xs[0])
        return [s for s in xs if len(s) == k]

    def get_string_positions(self, s: str) -> Dict[str, List[int]]:
        """Offsets of ``s`` in every input, keyed by that input's terminator.

        Positions are only reported for a string that ends at least one of
        the inputs, the same strings ``find`` locates. Anything else gives
        an empty mapping.
        """
        return {self.terminators[sid]: p for sid, p in self.get_string_positions_by_index(s).items()}

    def get_string_positions_by_index(self, s: str) -> Dict[int, List[int]]:
        node = self.find(s)
        if node is None:
            return {}
        tree = self.tree
        grouped = defaultdict(list)
        for n in tree.bfs(node):
            if tree.is_leaf(n):
                grouped[tree.nodes[n].sid].append(tree.nodes[n].position)
        return {sid: sorted(grouped[sid]) for sid in sorted(grouped)}
