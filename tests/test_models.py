"""
Tests for data models: key policies, Node, Rotation, outcomes and exceptions.
"""

import pytest

from avltree.models.exceptions import InvalidKeyError, PrefixQueryUnsupportedError
from avltree.models.key_policy import IntegerKeys, WordKeys
from avltree.models.node import Node, balance_of, height_of
from avltree.models.outcome import Mutation, Outcome, Suggestion, TreeStats
from avltree.models.rotation import Rotation, RotationKind


class TestIntegerKeys:
    """Tests for IntegerKeys policy."""

    def test_accepts_int(self):
        """Test plain ints pass through with no display value."""
        assert IntegerKeys().parse(42) == (42, None)
        assert IntegerKeys().parse(-7) == (-7, None)

    def test_accepts_decimal_string(self):
        """Test decimal strings are parsed, as path parameters arrive as text."""
        assert IntegerKeys().parse("15") == (15, None)
        assert IntegerKeys().parse(" -3 ") == (-3, None)
        assert IntegerKeys().parse("+8") == (8, None)

    @pytest.mark.parametrize("raw", [True, False, 1.5, 2.0, None, "abc", "", "1.5", "12a", [1], {"v": 1}])
    def test_rejects_non_integers(self, raw):
        """Test non-integer input is rejected, never coerced."""
        with pytest.raises(InvalidKeyError) as exc_info:
            IntegerKeys().parse(raw)
        assert exc_info.value.raw == raw

    def test_compare(self):
        """Test three-way comparison."""
        policy = IntegerKeys()
        assert policy.compare(1, 2) == -1
        assert policy.compare(2, 1) == 1
        assert policy.compare(2, 2) == 0

    def test_no_prefix_support(self):
        """Test prefix operations are refused."""
        policy = IntegerKeys()
        assert not policy.supports_prefix
        with pytest.raises(PrefixQueryUnsupportedError):
            policy.parse_prefix("1")


class TestWordKeys:
    """Tests for WordKeys policy."""

    def test_case_folds_and_keeps_display(self):
        """Test the key is lower-cased while the display keeps the casing."""
        assert WordKeys().parse("Google") == ("google", "Google")

    def test_strips_whitespace(self):
        """Test surrounding whitespace is dropped."""
        assert WordKeys().parse("  eBay ") == ("ebay", "eBay")

    @pytest.mark.parametrize("raw", ["", "   ", None, 5, b"bytes"])
    def test_rejects_invalid(self, raw):
        """Test empty and non-string words are rejected."""
        with pytest.raises(InvalidKeyError):
            WordKeys().parse(raw)

    def test_prefix(self):
        """Test prefix normalization and matching."""
        policy = WordKeys()
        assert policy.supports_prefix
        assert policy.parse_prefix(" Go") == "go"
        assert policy.parse_prefix("   ") == ""
        assert policy.matches_prefix("google", "go")
        assert not policy.matches_prefix("apple", "go")

    def test_prefix_must_be_string(self):
        """Test a non-string prefix is rejected."""
        with pytest.raises(InvalidKeyError):
            WordKeys().parse_prefix(12)


class TestNode:
    """Tests for Node."""

    def test_leaf(self):
        """Test a fresh node is a leaf of height 1."""
        node = Node(key=5)
        assert node.height == 1
        assert node.balance() == 0
        assert height_of(None) == 0
        assert balance_of(None) == 0

    def test_update_height_and_balance(self):
        """Test height and balance factor follow the children."""
        node = Node(key=5, left=Node(key=3, left=Node(key=1)))
        node.left.update_height()
        node.update_height()

        assert node.left.height == 2
        assert node.height == 3
        assert node.balance() == 2

    def test_copy_content_keeps_structure(self):
        """Test content copy takes key and display only."""
        target = Node(key="a", display="A", left=Node(key="0"), height=2)
        source = Node(key="b", display="B", height=7)
        target.copy_content_from(source)

        assert (target.key, target.display) == ("b", "B")
        assert target.height == 2
        assert target.left.key == "0"

    def test_to_dict(self):
        """Test recursive serialization."""
        node = Node(key=2, left=Node(key=1), height=2)
        assert node.to_dict() == {
            "key": 2,
            "display": None,
            "height": 2,
            "balance": 1,
            "left": {"key": 1, "display": None, "height": 1, "balance": 0, "left": None, "right": None},
            "right": None,
        }


class TestResults:
    """Tests for Rotation, Mutation, Suggestion and TreeStats."""

    def test_rotation_to_dict(self):
        """Test rotation serialization."""
        rotation = Rotation(kind=RotationKind.LEFT, pivot=10, new_root=20)
        assert rotation.to_dict() == {"type": "left", "pivot": 10, "newRoot": 20}

    def test_outcome_changed(self):
        """Test only inserts and deletes count as changes."""
        assert Mutation(Outcome.INSERTED).changed
        assert Mutation(Outcome.DELETED).changed
        assert not Mutation(Outcome.DUPLICATE).changed
        assert not Mutation(Outcome.NOT_FOUND).changed
        assert not Mutation(Outcome.INVALID_KEY).changed

    def test_suggestion_to_dict(self):
        """Test suggestion serialization."""
        assert Suggestion("golf", "Golf").to_dict() == {"key": "golf", "display": "Golf"}

    def test_stats_to_dict(self):
        """Test stats serialization."""
        stats = TreeStats(node_count=3, height=2, min_height=2, depth=1)
        assert stats.to_dict() == {
            "nodeCount": 3,
            "height": 2,
            "theoreticalMinHeight": 2,
            "depth": 1,
        }

    def test_invalid_key_message(self):
        """Test the error message names the input and the reason."""
        error = InvalidKeyError("x", "not a decimal integer")
        assert "'x'" in str(error)
        assert "not a decimal integer" in str(error)
        assert isinstance(error, ValueError)
