import pytest

from naive_gst.suffix_tree import GeneralizedSuffixTree
from naive_gst.tree import Tree, check_trie_property, visualize_tree


@pytest.fixture
def banana():
    gst = GeneralizedSuffixTree()
    gst.add_string("banana")
    return gst


def test_child_container_contract():
    tree = Tree()
    sid = tree.add_text("abc{")
    n = tree.add_child(tree.root, tree.new_node(sid, 0, 3, 0))

    assert tree.has_children(tree.root)
    assert tree.label(n) == "abc{"
    assert tree.label(tree.root) == ""
    assert tree.get_child(tree.root, "abc{") == n
    assert tree.get_child(tree.root, "abc") is None
    assert tree.get_child(tree.root, "") is None
    assert tree.edge_with_same_first_char(tree.root, "a") == n
    assert tree.edge_with_same_first_char(tree.root, "b") is None
    assert tree.parent(n) == tree.root
    assert tree.is_leaf(n)

    assert tree.remove_child(tree.root, "abc{") == n
    assert not tree.has_children(tree.root)
    assert tree.parent(n) == -1
    assert tree.remove_child(tree.root, "abc{") is None


def test_last_matching_index():
    tree = Tree()
    first = tree.add_text("abcd{")
    second = tree.add_text("xabx|")
    third = tree.add_text("ab|")
    n = tree.add_child(tree.root, tree.new_node(first, 0, 4, 0))
    assert tree.last_matching_index(n, second, 1) == 1
    assert tree.last_matching_index(n, second, 0) == -1
    # the terminator of "ab" never matches the "c" on the edge
    assert tree.last_matching_index(n, third, 0) == 1


def test_terminator_is_positional():
    tree = Tree()
    first = tree.add_text("a{")
    second = tree.add_text("{a|")
    assert tree.key_at(first, 1) == first
    assert tree.key_at(second, 0) == "{"
    assert tree.key_at(second, 2) == second
    n = tree.add_child(tree.root, tree.new_node(first, 1, 1, 1))
    assert tree.key(n) == first
    assert tree.ends_with_terminator(n)
    assert tree.body(n) == ""
    # same code point, different meaning
    assert tree.last_matching_index(n, second, 0) == -1


def test_bfs_visits_every_node_once(banana):
    tree = banana.tree
    order = tree.bfs()
    assert order[0] == tree.root
    assert sorted(order) == list(range(len(tree)))


def test_postorder_children_before_parents(banana):
    tree = banana.tree
    order = list(tree.postorder())
    seen = {}
    for i, v in enumerate(order):
        seen[v] = i
    assert order[-1] == tree.root
    for v in order:
        for c in tree.nodes[v].children.values():
            assert seen[c] < seen[v]


def test_leaves_spell_their_suffixes(banana):
    tree = banana.tree
    leaves = [v for v in tree.bfs() if v != tree.root and tree.is_leaf(v)]
    assert sorted(tree.path_label(v) for v in leaves) == sorted(
        ["banana{", "anana{", "nana{", "ana{", "na{", "a{"]
    )
    for v in leaves:
        assert tree.path_label(v) == "banana{"[tree.nodes[v].position :]


def test_trie_property(banana):
    banana.add_string("ananas")
    banana.add_string("bandana")
    assert check_trie_property(banana.tree)
    for v in banana.tree.bfs():
        firsts = [banana.tree.label(c)[0] for c in banana.tree.nodes[v].children.values()]
        assert len(firsts) == len(set(firsts))


def test_check_trie_property_detects_bad_parent(banana):
    tree = banana.tree
    leaf = next(v for v in tree.bfs() if v != tree.root and tree.is_leaf(v))
    tree.nodes[leaf].parent = 12345
    with pytest.raises(AssertionError):
        check_trie_property(tree)


def test_path_label_walks_parents(banana):
    tree = banana.tree
    node = banana.find("ana")
    assert tree.label(node) == "na"
    assert tree.label(tree.parent(node)) == "a"
    assert tree.parent(tree.parent(node)) == tree.root
    assert tree.path_label(node) == "ana"


def test_visualize_tree(banana, capsys):
    visualize_tree(banana.tree, title="banana")
    out = capsys.readouterr().out
    assert "--- banana ---" in out
    assert "<ROOT>" in out
    assert "'banana{'" in out
    assert "LEAF(pos:0)" in out
