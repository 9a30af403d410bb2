"""
Tests for rule tree nodes and the fast/full tree walkers
"""

import unittest

from endplay.types import Denom, Player

from auction import Auction
from bridge_model import Call, Hand, create_bidding_context
from conditions import Condition
from rule_tree import (BidNode, ConventionCategory, ConventionConfig, DecisionNode, FallbackNode,
                       MalformedTreeError, NodeMetadata, bid, bid_nodes, decision, fallback, is_tree_convention,
                       iter_nodes)
from tree_evaluator import evaluate_tree, evaluate_tree_fast


def flag(name, value):
    """Condition with a fixed answer"""
    return Condition(name, name, lambda ctx: value, lambda ctx: f"{name} is {value}")


def hcp_at_least(n):
    return Condition('hcp', f"{n}+", lambda ctx: ctx.evaluation.hcp >= n,
                     lambda ctx: f"{ctx.evaluation.hcp} vs {n}")


def silent(name, value):
    """Condition whose describe must never be called"""
    def describe(ctx):
        raise RuntimeError(f"describe called on {name}")
    return Condition(name, name, lambda ctx: value, describe)


def context_for(lin):
    return create_bidding_context(Hand.from_lin(lin), Auction(), Player.south)


# 12 HCP
TWELVE = 'SAK32HQ432DK32C32'
# 2 HCP
TWO = 'S932HQ8432D32C432'


class TestTreeNodes(unittest.TestCase):
    """Test node builders and tree iteration"""

    def test_fixed_bid(self):
        node = bid('one-club', Call.bid(1, Denom.clubs))
        self.assertIsInstance(node, BidNode)
        self.assertEqual(node.call(None), Call.bid(1, Denom.clubs))

    def test_computed_bid(self):
        node = bid('by-hcp', lambda ctx: Call.bid(1 + ctx.evaluation.hcp // 10, Denom.nt))
        self.assertEqual(node.call(context_for(TWELVE)), Call.bid(2, Denom.nt))

    def test_explanation_from_metadata(self):
        node = bid('x', Call.pass_(), NodeMetadata(description="Nothing to say"))
        self.assertEqual(node.explanation, "Nothing to say")
        self.assertEqual(bid('y', Call.pass_()).explanation, '')

    def test_iter_nodes_yes_first(self):
        tree = decision('root', flag('a', True),
                        bid('left', Call.pass_()),
                        decision('inner', flag('b', True), bid('middle', Call.pass_()), fallback('none')))
        names = [getattr(node, 'name', None) for node in iter_nodes(tree)]
        self.assertEqual(names, ['root', 'left', 'inner', 'middle', None])
        self.assertEqual([node.name for node in bid_nodes(tree)], ['left', 'middle'])

    def test_iter_nodes_rejects_foreign_objects(self):
        tree = decision('root', flag('a', True), bid('x', Call.pass_()), 'not a node')
        with self.assertRaises(MalformedTreeError):
            list(iter_nodes(tree))

    def test_convention_config_kinds(self):
        tree_config = ConventionConfig('t', 'T', 'tree', ConventionCategory.ASKING, rule_tree=fallback())
        flat_config = ConventionConfig('f', 'F', 'flat', ConventionCategory.COMPETITIVE, bidding_rules=[])
        self.assertTrue(is_tree_convention(tree_config))
        self.assertFalse(is_tree_convention(flat_config))
        self.assertEqual(flat_config.bidding_rules, [])


class TestTreeEvaluation(unittest.TestCase):
    """Test fast and full evaluation"""

    def setUp(self):
        self.game = bid('game', Call.bid(3, Denom.nt))
        self.invite = bid('invite', Call.bid(2, Denom.nt))
        self.tree = decision(
            'strong', hcp_at_least(10),
            decision('very-strong', hcp_at_least(12), self.game, self.invite),
            fallback('too-weak'),
        )

    def test_full_walk_records_path(self):
        result = evaluate_tree(self.tree, context_for(TWELVE))
        self.assertIs(result.matched, self.game)
        self.assertEqual([e.node.name for e in result.path], ['strong', 'very-strong'])
        self.assertEqual(result.rejected_decisions, [])
        self.assertEqual(result.visited[0].description, "12 vs 10")

    def test_fallback_returns_none(self):
        ctx = context_for(TWO)
        self.assertIsNone(evaluate_tree_fast(self.tree, ctx))
        result = evaluate_tree(self.tree, ctx)
        self.assertIsNone(result.matched)
        self.assertEqual([e.node.name for e in result.rejected_decisions], ['strong'])
        self.assertEqual(len(result.visited), 1)

    def test_fast_and_full_agree(self):
        """Both walkers land on the same node for every context"""
        for lin in (TWELVE, TWO, 'SKJ32HAQ432D32C32'):
            ctx = context_for(lin)
            self.assertIs(evaluate_tree_fast(self.tree, ctx), evaluate_tree(self.tree, ctx).matched, lin)

    def test_only_visited_decisions_reported(self):
        """Decisions on the branch not taken never appear"""
        target = bid('target', Call.pass_())
        tree = decision(
            'a', flag('a', False),
            decision('unreached', flag('u', True), bid('never', Call.pass_()), fallback()),
            decision('b', flag('b', True), target, fallback()),
        )
        result = evaluate_tree(tree, context_for(TWELVE))
        self.assertIs(result.matched, target)
        self.assertEqual([e.node.name for e in result.visited], ['a', 'b'])
        self.assertEqual([e.node.name for e in result.path], ['b'])
        self.assertEqual([e.node.name for e in result.rejected_decisions], ['a'])

    def test_full_walk_is_repeatable(self):
        ctx = context_for(TWELVE)
        first = evaluate_tree(self.tree, ctx)
        second = evaluate_tree(self.tree, ctx)
        self.assertIs(first.matched, second.matched)
        self.assertEqual(first.visited, second.visited)

    def test_fast_walk_never_describes(self):
        tree = decision('quiet', silent('quiet', True), self.game, fallback())
        self.assertIs(evaluate_tree_fast(tree, context_for(TWELVE)), self.game)
        with self.assertRaises(RuntimeError):
            evaluate_tree(tree, context_for(TWELVE))

    def test_root_leaves(self):
        ctx = context_for(TWELVE)
        self.assertIs(evaluate_tree_fast(self.game, ctx), self.game)
        result = evaluate_tree(self.game, ctx)
        self.assertIs(result.matched, self.game)
        self.assertEqual(result.visited, [])

        self.assertIsNone(evaluate_tree_fast(FallbackNode('empty'), ctx))
        self.assertIsNone(evaluate_tree(FallbackNode('empty'), ctx).matched)

    def test_malformed_node(self):
        tree = DecisionNode('root', flag('a', True), {'call': '1C'}, fallback())
        ctx = context_for(TWELVE)
        with self.assertRaises(MalformedTreeError):
            evaluate_tree_fast(tree, ctx)
        with self.assertRaises(MalformedTreeError):
            evaluate_tree(tree, ctx)

    def test_malformed_node_off_path_is_not_touched(self):
        tree = DecisionNode('root', flag('a', True), self.game, object())
        self.assertIs(evaluate_tree_fast(tree, context_for(TWELVE)), self.game)

    def test_deep_chain(self):
        """Walkers do not recurse, so very deep trees are fine"""
        leaf = bid('bottom', Call.pass_())
        node = leaf
        for i in range(5000):
            node = decision(f"d{i}", flag(f"d{i}", False), fallback(), node)
        ctx = context_for(TWO)
        self.assertIs(evaluate_tree_fast(node, ctx), leaf)
        self.assertEqual(len(evaluate_tree(node, ctx).visited), 5000)


if __name__ == '__main__':
    unittest.main()
