"""
Commitment Tree Unit Tests
Tests for votetree/merkle/commitment_tree.py

Covers the leaf lifecycle (insert, remove, replace, rebuild), read
isolation, snapshots, and atomic rebuilds.
"""
import pytest

from votetree.config.runtime import RuntimeConfig, set_default_config
from votetree.crypto.hashing import hash_pair
from votetree.merkle import commitment_tree as commitment_tree_module
from votetree.merkle.commitment_tree import CommitmentTree, TreeSnapshot
from votetree.merkle.merkle_tree import build_merkle_root, verify_merkle_proof
from votetree.schemas.errors import DuplicateLeafException, ErrorCodes

from fixtures import make_leaves, make_tree


class TestEmptyTree:

    def test_fresh_tree_has_no_root(self):
        tree = CommitmentTree()
        assert tree.root is None
        assert tree.leaves == []
        assert tree.leaf_count == 0
        assert tree.depth == 0
        assert tree.structure() is None

    def test_fresh_tree_has_no_proofs(self):
        tree = CommitmentTree()
        assert tree.generate_proof("c1") is None

    def test_insert_then_remove_returns_to_empty(self):
        tree = CommitmentTree()
        tree.insert("c1")
        result = tree.remove("c1")

        fresh = CommitmentTree()
        assert result.root is None
        assert result.leaf_count == 0
        assert tree.root == fresh.root
        assert tree.leaves == fresh.leaves
        assert tree.generate_proof("c1") is None


class TestInsert:

    def test_insert_appends_in_order(self):
        leaves = make_leaves(4)
        tree = make_tree(leaves=leaves)
        assert tree.leaves == leaves

    def test_insert_reports_root_and_count(self):
        tree = CommitmentTree()
        leaves = make_leaves(2)
        tree.insert(leaves[0])
        result = tree.insert(leaves[1])

        assert result.action == "insert"
        assert result.changed is True
        assert result.leaf_count == 2
        assert result.root == hash_pair(leaves[0], leaves[1])
        assert tree.last_mutation == result

    def test_insert_is_idempotent(self):
        leaf = make_leaves(1)[0]
        once = make_tree(leaves=[leaf])
        twice = make_tree(leaves=[leaf])
        result = twice.insert(leaf)

        assert result.changed is False
        assert twice.leaves == once.leaves
        assert twice.root == once.root

    def test_three_literal_leaves(self, three_leaf_tree):
        assert three_leaf_tree.root == (
            "4279484b826df5de36382d7cf13be9a59ea62f7bc986d257c038d0bd9df207e2"
        )
        proof = three_leaf_tree.generate_proof("h3")
        assert proof.path[0].hash == "h3"
        assert proof.path[0].position == "right"
        assert verify_merkle_proof(proof)

    @pytest.mark.parametrize("bad", [None, 7, b"ab"])
    def test_rejects_non_string_leaves(self, bad):
        with pytest.raises(TypeError):
            CommitmentTree().insert(bad)

    def test_rejects_empty_leaf(self):
        tree = CommitmentTree()
        with pytest.raises(ValueError):
            tree.insert("")
        with pytest.raises(ValueError):
            tree.remove("")
        assert tree.leaf_count == 0


class TestStrictDuplicates:
    """Duplicate policy: ignored by default, rejected when strict."""

    def test_strict_duplicate_raises(self):
        leaf = make_leaves(1)[0]
        tree = make_tree(leaves=[leaf], strict_duplicates=True)

        with pytest.raises(DuplicateLeafException) as exc_info:
            tree.insert(leaf)
        assert exc_info.value.code == ErrorCodes.DUPLICATE_LEAF
        assert tree.leaves == [leaf]

    def test_strict_replace_onto_existing_raises(self):
        a, b = make_leaves(2)
        tree = make_tree(leaves=[a, b], strict_duplicates=True)

        with pytest.raises(DuplicateLeafException):
            tree.replace(a, b)
        assert tree.leaves == [a, b]

    def test_from_config_reads_policy(self):
        config = RuntimeConfig.from_dict({"tree": {"strict_duplicates": True}})
        assert CommitmentTree.from_config(config).strict_duplicates is True

    def test_from_config_uses_default_config(self):
        set_default_config(RuntimeConfig.from_dict({"tree": {"strict_duplicates": True}}))
        assert CommitmentTree.from_config().strict_duplicates is True


class TestRemove:

    def test_remove_preserves_survivor_order(self):
        a, b, c, d = make_leaves(4)
        tree = make_tree(leaves=[a, b, c, d])
        tree.remove(b)
        assert tree.leaves == [a, c, d]
        assert tree.root == build_merkle_root([a, c, d])

    def test_insert_a_b_remove_a_equals_insert_b(self):
        a, b = make_leaves(2)
        tree = make_tree(leaves=[a, b])
        tree.remove(a)

        only_b = make_tree(leaves=[b])
        assert tree.leaves == only_b.leaves
        assert tree.root == only_b.root

    def test_remove_unknown_is_noop(self):
        tree = make_tree(3)
        before = (tree.leaves, tree.root)
        result = tree.remove(make_leaves(4)[3])

        assert result.changed is False
        assert (tree.leaves, tree.root) == before

    def test_removed_leaf_has_no_proof(self):
        leaves = make_leaves(3)
        tree = make_tree(leaves=leaves)
        tree.remove(leaves[0])
        assert tree.generate_proof(leaves[0]) is None


class TestReplace:
    """replace() is the vote-update path."""

    def test_replace_moves_new_leaf_to_end(self):
        a, b, c, d = make_leaves(4)
        tree = make_tree(leaves=[a, b, c])
        result = tree.replace(a, d)

        assert result.action == "replace"
        assert result.changed is True
        assert tree.leaves == [b, c, d]

    def test_replace_matches_remove_then_insert(self):
        a, b, c, d = make_leaves(4)
        replaced = make_tree(leaves=[a, b, c])
        replaced.replace(b, d)

        manual = make_tree(leaves=[a, b, c])
        manual.remove(b)
        manual.insert(d)

        assert replaced.leaves == manual.leaves
        assert replaced.root == manual.root

    def test_replace_missing_old_inserts_new(self):
        a, b = make_leaves(2)
        tree = make_tree(leaves=[a])
        tree.replace(make_leaves(3)[2], b)
        assert tree.leaves == [a, b]

    def test_replace_same_leaf_is_noop(self):
        a, b = make_leaves(2)
        tree = make_tree(leaves=[a, b])
        assert tree.replace(a, a).changed is False
        assert tree.leaves == [a, b]

    def test_replace_changes_root_deterministically(self):
        a, b, c = make_leaves(3)
        t1 = make_tree(leaves=[a, b])
        t2 = make_tree(leaves=[a, b])
        t1.replace(b, c)
        t2.replace(b, c)
        assert t1.root == t2.root
        assert t1.root != make_tree(leaves=[a, b]).root


class TestReads:

    def test_leaves_returns_copy(self):
        tree = make_tree(3)
        view = tree.leaves
        view.append("intruder")
        view.clear()
        assert tree.leaf_count == 3

    def test_contains(self):
        leaves = make_leaves(2)
        tree = make_tree(leaves=leaves)
        assert leaves[0] in tree
        assert tree.contains(leaves[1])
        assert "nope" not in tree
        assert len(tree) == 2

    def test_round_trip_after_mixed_mutations(self):
        leaves = make_leaves(10)
        tree = make_tree(leaves=leaves[:7])
        tree.remove(leaves[2])
        tree.remove(leaves[5])
        tree.insert(leaves[8])
        tree.replace(leaves[0], leaves[9])

        for leaf in tree.leaves:
            assert verify_merkle_proof(tree.generate_proof(leaf))

    def test_generate_proof_is_repeatable(self):
        leaves = make_leaves(5)
        tree = make_tree(leaves=leaves)
        assert tree.generate_proof(leaves[4]) == tree.generate_proof(leaves[4])

    def test_structure_export(self, three_leaf_tree):
        structure = three_leaf_tree.structure()

        assert structure["hash"] == three_leaf_tree.root
        assert structure["is_leaf"] is False
        assert structure["left"]["left"] == {
            "hash": "h1", "is_leaf": True, "paired_with_self": False,
        }
        padded = structure["right"]
        assert padded["paired_with_self"] is True
        assert padded["child"]["hash"] == "h3"


class TestSeeding:

    def test_from_leaves_matches_incremental(self):
        leaves = make_leaves(6)
        assert CommitmentTree.from_leaves(leaves).root == make_tree(leaves=leaves).root

    def test_from_leaves_collapses_duplicates(self):
        a, b = make_leaves(2)
        tree = CommitmentTree.from_leaves([a, b, a])
        assert tree.leaves == [a, b]

    def test_rebuild_is_stable(self):
        tree = make_tree(5)
        root = tree.root
        result = tree.rebuild()
        assert result.changed is False
        assert tree.root == root


class TestSnapshot:
    """Snapshots are immutable published views."""

    def test_snapshot_survives_mutation(self):
        leaves = make_leaves(4)
        tree = make_tree(leaves=leaves[:3])
        snap = tree.snapshot()
        tree.insert(leaves[3])
        tree.remove(leaves[0])

        assert isinstance(snap, TreeSnapshot)
        assert snap.leaves == tuple(leaves[:3])
        assert snap.root == build_merkle_root(leaves[:3])
        assert snap.leaf_count == 3
        assert verify_merkle_proof(snap.generate_proof(leaves[0]))

    def test_snapshot_proofs_match_tree(self):
        leaves = make_leaves(5)
        tree = make_tree(leaves=leaves)
        snap = tree.snapshot()
        for leaf in leaves:
            assert snap.generate_proof(leaf) == tree.generate_proof(leaf)

    def test_empty_snapshot(self):
        snap = CommitmentTree().snapshot()
        assert snap.root is None
        assert snap.generate_proof("x") is None


class TestAtomicRebuild:
    """A failed rebuild leaves the previous state untouched."""

    def test_failed_insert_keeps_previous_state(self, monkeypatch):
        leaves = make_leaves(4)
        tree = make_tree(leaves=leaves[:3])
        before = (tree.leaves, tree.root, tree.last_mutation)

        def exhausted(_leaves):
            raise MemoryError("out of memory")

        original = commitment_tree_module.build_levels
        monkeypatch.setattr(commitment_tree_module, "build_levels", exhausted)

        with pytest.raises(MemoryError):
            tree.insert(leaves[3])
        assert (tree.leaves, tree.root, tree.last_mutation) == before

        monkeypatch.setattr(commitment_tree_module, "build_levels", original)
        assert verify_merkle_proof(tree.generate_proof(leaves[2]))
        assert tree.insert(leaves[3]).leaf_count == 4
