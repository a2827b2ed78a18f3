from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Union

# A child is keyed by the first character of its edge label, or by the string
# id when the edge starts at that string's terminator.
EdgeKey = Union[str, int]


########## ! Node
@dataclass(slots=True)
class Node:
    sid: int  # index of the terminated string the edge label points into
    start: int
    end: int  # inclusive
    parent: int = -1
    children: Dict[EdgeKey, int] = field(default_factory=dict)
    position: int = -1  # suffix start offset, leaves only

    def edge_len(self) -> int:
        return self.end - self.start + 1


########## ! Tree
class Tree:
    """Arena of nodes addressed by index.

    Edge labels are not stored as strings: every node keeps ``(sid, start,
    end)`` offsets into ``texts``, the list of terminated strings. The edge
    label of a node is the label of the edge coming *into* it from its
    parent, so the root has none.

    The last character of every text is its terminator. It is positional:
    it never compares equal to a character of another string, even when
    the code points are the same.
    """

    def __init__(self):
        self.texts: List[str] = []
        self.nodes: List[Node] = []
        self.root = self.new_node(-1, 0, -1)

    def new_node(self, sid: int, start: int, end: int, position: int = -1) -> int:
        self.nodes.append(Node(sid, start, end, position=position))
        return len(self.nodes) - 1

    def add_text(self, text: str) -> int:
        self.texts.append(text)
        return len(self.texts) - 1

    def __len__(self) -> int:
        return len(self.nodes)

    # * positions
    def is_terminator_at(self, sid: int, i: int) -> bool:
        return i == len(self.texts[sid]) - 1

    def key_at(self, sid: int, i: int) -> EdgeKey:
        if self.is_terminator_at(sid, i):
            return sid
        return self.texts[sid][i]

    def key(self, n: int) -> EdgeKey:
        node = self.nodes[n]
        return self.key_at(node.sid, node.start)

    def ends_with_terminator(self, n: int) -> bool:
        node = self.nodes[n]
        return node.sid != -1 and self.is_terminator_at(node.sid, node.end)

    # * labels
    def label(self, n: int) -> str:
        node = self.nodes[n]
        if node.sid == -1:
            return ""
        return self.texts[node.sid][node.start : node.end + 1]

    def body(self, n: int) -> str:
        """Edge label without its terminator."""
        label = self.label(n)
        if self.ends_with_terminator(n):
            return label[:-1]
        return label

    # * container contract
    def add_child(self, n: int, child: int) -> int:
        self.nodes[n].children[self.key(child)] = child
        self.nodes[child].parent = n
        return child

    # by label only reaches edges that start with an input character
    def get_child(self, n: int, label: str) -> Optional[int]:
        if not label:
            return None
        child = self.nodes[n].children.get(label[0])
        if child is None or self.label(child) != label:
            return None
        return child

    def remove_child(self, n: int, label: str) -> Optional[int]:
        child = self.get_child(n, label)
        if child is None:
            return None
        del self.nodes[n].children[label[0]]
        self.nodes[child].parent = -1
        return child

    def has_children(self, n: int) -> bool:
        return bool(self.nodes[n].children)

    def is_leaf(self, n: int) -> bool:
        return not self.nodes[n].children

    def parent(self, n: int) -> int:
        return self.nodes[n].parent

    def edge_with_same_first_char(self, n: int, key: EdgeKey) -> Optional[int]:
        return self.nodes[n].children.get(key)

    # * walks
    def bfs(self, start: Optional[int] = None) -> List[int]:
        if start is None:
            start = self.root
        order = []
        queue = deque([start])
        while queue:
            v = queue.popleft()
            order.append(v)
            queue.extend(self.nodes[v].children.values())
        return order

    def postorder(self, start: Optional[int] = None) -> Iterator[int]:
        stack = [(self.root if start is None else start, False)]
        while stack:
            n, visited = stack.pop()
            if visited:
                yield n
            else:
                stack.append((n, True))
                for c in self.nodes[n].children.values():
                    stack.append((c, False))

    def path_label(self, n: int) -> str:
        parts = []
        while self.nodes[n].parent != -1:
            parts.append(self.label(n))
            n = self.nodes[n].parent
        return "".join(reversed(parts))

    def last_matching_index(self, n: int, sid: int, i: int) -> int:
        """Index of the last position where the edge into ``n`` and the suffix
        ``texts[sid][i:]`` agree, or -1 if they differ at the first one."""
        node = self.nodes[n]
        label_text = self.texts[node.sid]
        text = self.texts[sid]
        limit = min(node.edge_len(), len(text) - i)
        m = -1
        while m + 1 < limit:
            a, b = node.start + m + 1, i + m + 1
            if self.is_terminator_at(node.sid, a) or self.is_terminator_at(sid, b) or label_text[a] != text[b]:
                break
            m += 1
        return m


########## ! Debug
def check_trie_property(tree: Tree) -> bool:
    for vidx in tree.bfs():
        vnode = tree.nodes[vidx]
        for key, c in vnode.children.items():
            assert tree.nodes[c].edge_len() > 0, f"Node {c} has an empty edge"
            assert tree.key(c) == key, f"Child {c} of node {vidx} is keyed by {key!r}"
            assert tree.nodes[c].parent == vidx, f"Child {c} of node {vidx} has parent {tree.nodes[c].parent}"
        if vidx != tree.root and not vnode.children:
            assert vnode.position != -1, f"Leaf {vidx} has no suffix position"
            assert tree.ends_with_terminator(vidx), f"Leaf {vidx} does not end with its terminator"
            suffix = tree.texts[tree.nodes[vidx].sid][vnode.position :]
            assert tree.path_label(vidx) == suffix, f"Leaf {vidx} does not spell its suffix"
    return True


def _visualize_node_recursive(tree: Tree, node_idx: int, current_indent_str: str, is_last_child_of_parent: bool):
    node = tree.nodes[node_idx]
    if node_idx == tree.root:
        edge_label_display = "<ROOT>"
    else:
        edge_label_display = f"{tree.label(node_idx)!r}"

    line_prefix = current_indent_str
    if node_idx != tree.root:
        line_prefix += "└─ " if is_last_child_of_parent else "├─ "

    details = []
    if node_idx != tree.root:
        details.append(f"S/E:({node.start},{node.end})")
        details.append(f"Sid:{node.sid}")
    if node.parent != -1:
        details.append(f"Parent:{node.parent}")
    if not node.children and node_idx != tree.root:
        details.append(f"LEAF(pos:{node.position})")

    print(f"{line_prefix}Node {node_idx} {edge_label_display} [{', '.join(details)}]")

    # terminator edges (int keys) go last
    children_items = sorted(node.children.items(), key=lambda kv: (isinstance(kv[0], int), str(kv[0])))
    for i, (_, child_idx) in enumerate(children_items):
        indent_for_child_level = current_indent_str
        if node_idx != tree.root:
            indent_for_child_level += "    " if is_last_child_of_parent else "│   "
        _visualize_node_recursive(tree, child_idx, indent_for_child_level, i == len(children_items) - 1)


def visualize_tree(tree: Tree, title: str = "Suffix Tree Visualization"):
    print(f"\n--- {title} ---")
    for sid, text in enumerate(tree.texts):
        print(f'Text {sid}: "{text}" (Length: {len(text)})')
    print(f"Root Node Index: {tree.root}, Nodes: {len(tree)}")
    _visualize_node_recursive(tree, tree.root, current_indent_str="", is_last_child_of_parent=True)
    print()
