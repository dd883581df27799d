"""Tests for TreeBuilder and node ordering."""
import pytest

from lakepy.core.exceptions import DuplicatePathError
from lakepy.core.storage import TreeBuilder, PathEntry, TreeNode, ExpansionState


def shape(nodes):
    """Reduce a forest to (name, children) tuples."""
    return [(n.name, shape(n.children)) for n in nodes]


def assert_ordered(nodes):
    kinds = [n.is_directory for n in nodes]
    assert kinds == sorted(kinds, reverse=True), "directories must precede files"
    for node in nodes:
        assert_ordered(node.children)


class TestTreeBuilder:
    """Test suite for TreeBuilder."""

    @pytest.fixture
    def builder(self):
        return TreeBuilder()

    @pytest.fixture
    def entries(self):
        return [
            PathEntry('a', is_directory=True),
            PathEntry('a/b', is_directory=True),
            PathEntry('a/b/c.txt'),
            PathEntry('d.txt'),
        ]

    def test_builds_nested_structure(self, builder, entries):
        forest = builder.build(entries)

        assert shape(forest) == [
            ('a', [('b', [('c.txt', [])])]),
            ('d.txt', []),
        ]
        assert forest[0].is_directory
        assert forest[0].children[0].children[0].full_path == 'a/b/c.txt'

    def test_rebuild_is_identical(self, builder, entries):
        first = builder.build(entries)
        second = builder.build(entries)

        assert [n.to_dict() for n in first] == [n.to_dict() for n in second]

    def test_input_order_does_not_matter(self, builder, entries):
        assert shape(builder.build(entries)) == shape(builder.build(list(reversed(entries))))

    def test_directories_before_files(self, builder):
        forest = builder.build([
            PathEntry('zeta', is_directory=True),
            PathEntry('alpha.txt'),
            PathEntry('beta', is_directory=True),
            PathEntry('beta/1.txt'),
            PathEntry('beta/sub', is_directory=True),
        ])

        assert [n.name for n in forest] == ['beta', 'zeta', 'alpha.txt']
        assert [n.name for n in forest[0].children] == ['sub', '1.txt']
        assert_ordered(forest)

    def test_name_ordering_ignores_case(self, builder):
        forest = builder.build([PathEntry('b.txt'), PathEntry('B2.txt'), PathEntry('a.txt'), PathEntry('A.txt')])

        assert [n.name for n in forest] == ['a.txt', 'A.txt', 'b.txt', 'B2.txt']

    def test_accented_names_sort_with_base_letter(self, builder):
        forest = builder.build([PathEntry('zebra.txt'), PathEntry('éclair.txt'), PathEntry('Émile.txt')])

        assert [n.name for n in forest] == ['éclair.txt', 'Émile.txt', 'zebra.txt']

    def test_accent_and_case_ties(self, builder):
        """Unaccented before accented, then lowercase before uppercase."""
        forest = builder.build([
            PathEntry('résumé'),
            PathEntry('Resume'),
            PathEntry('resume'),
            PathEntry('Ångström', is_directory=True),
            PathEntry('zulu', is_directory=True),
        ])

        assert [n.name for n in forest] == ['Ångström', 'zulu', 'resume', 'Resume', 'résumé']

    def test_composed_and_decomposed_names_are_ordered_deterministically(self, builder):
        composed = 'caf\u00e9'
        decomposed = 'cafe\u0301'
        first = builder.build([PathEntry(composed), PathEntry(decomposed), PathEntry('cafeteria')])
        second = builder.build([PathEntry(decomposed), PathEntry('cafeteria'), PathEntry(composed)])

        assert [n.name for n in first] == [n.name for n in second]
        assert first[-1].name == 'cafeteria'

    def test_orphans_land_at_root(self, builder):
        """A non-recursive listing without the parent directory does not fail."""
        forest = builder.build([
            PathEntry('item/Files/report.csv'),
            PathEntry('item/Files/raw', is_directory=True),
        ])

        assert [n.full_path for n in forest] == ['item/Files/raw', 'item/Files/report.csv']

    def test_duplicate_directory_rejected(self, builder):
        with pytest.raises(DuplicatePathError):
            builder.build([PathEntry('a', is_directory=True), PathEntry('a', is_directory=True)])

    def test_empty_listing(self, builder):
        assert builder.build([]) == []

    def test_nodes_start_collapsed(self, builder):
        forest = builder.build([PathEntry('sc', is_directory=True, is_shortcut=True)])

        assert forest[0].expansion_state is ExpansionState.COLLAPSED
        assert forest[0].children == []


class TestTreeNode:
    """Test suite for TreeNode helpers."""

    def test_find_and_walk(self):
        forest = TreeBuilder().build([
            PathEntry('a', is_directory=True),
            PathEntry('a/b.txt'),
        ])

        root = forest[0]
        assert [n.full_path for n in root.walk()] == ['a', 'a/b.txt']
        assert root.find('a/b.txt').name == 'b.txt'
        assert root.find('missing') is None

    def test_repr_mentions_kind(self):
        assert 'shortcut' in repr(TreeNode(PathEntry('x', is_shortcut=True)))
