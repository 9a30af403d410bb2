"""
Tests for finding alternative bids in the same auction position
"""

import unittest

from endplay.types import Denom, Player

from auction import build_auction
from bridge_model import Call, Hand, create_bidding_context, parse_call
from conditions import auction_matches, hcp_min
from conventions.bergen_raises import bergen_tree
from conventions.gerber import gerber_tree
from conventions.stayman import stayman_tree
from rule_tree import DecisionNode, bid, decision, fallback
from sibling_finder import TreeInvariantError, find_hand_subtree_root, find_sibling_bids
from tree_evaluator import evaluate_tree_fast


def make_context(lin, calls, seat, dealer=Player.north):
    return create_bidding_context(Hand.from_lin(lin), build_auction(dealer, calls), seat)


class TestHandSubtreeRoot(unittest.TestCase):
    """Test locating the first hand decision"""

    def test_follows_auction_decisions(self):
        ctx = make_context('SAQ2HKJ43DKJ3CQ98', ['1NT', 'P', '2C', 'P'], Player.north)
        root = find_hand_subtree_root(stayman_tree, ctx)
        self.assertIsInstance(root, DecisionNode)
        self.assertEqual(root.name, 'has-4-hearts')

    def test_no_hand_decisions(self):
        leaf = bid('ask', parse_call('2C'))
        tree = decision('after-1nt-p', auction_matches(['1NT', 'P']), leaf, fallback())
        ctx = make_context('SAK32HQ432DK32C32', ['1NT', 'P'], Player.south)
        self.assertIs(find_hand_subtree_root(tree, ctx), leaf)
        self.assertEqual(find_sibling_bids(tree, leaf, ctx), [])


class TestSiblingBids(unittest.TestCase):
    """Test listing the bids a hand did not reach"""

    def test_stayman_responses(self):
        ctx = make_context('SAQ2HKJ43DKJ3CQ98', ['1NT', 'P', '2C', 'P'], Player.north)
        matched = evaluate_tree_fast(stayman_tree, ctx)
        siblings = find_sibling_bids(stayman_tree, matched, ctx)

        self.assertEqual([s.bid_name for s in siblings], ['stayman-response-spades', 'stayman-response-denial'])
        self.assertEqual(siblings[0].call, Call.bid(2, Denom.spades))
        # 2S needs "not four hearts" and "four spades": both fail
        self.assertEqual([f.name for f in siblings[0].failed_conditions], ['hearts-min', 'spades-min'])
        # 2D needs neither major: only the hearts check fails
        self.assertEqual([f.name for f in siblings[1].failed_conditions], ['hearts-min'])
        self.assertEqual(siblings[1].failed_conditions[0].description, "4 hearts (4+ required)")

    def test_bergen_alternatives(self):
        """Fallbacks are skipped and computed calls follow the opened major"""
        ctx = make_context('SA32HK432DK32C432', ['1H', 'P'], Player.south)
        matched = evaluate_tree_fast(bergen_tree, ctx)
        self.assertEqual(matched.name, 'bergen-limit-raise')
        siblings = find_sibling_bids(bergen_tree, matched, ctx)
        self.assertEqual([s.bid_name for s in siblings],
                         ['bergen-game-raise', 'bergen-constructive-raise', 'bergen-preemptive-raise'])
        self.assertEqual(siblings[0].call, parse_call('4H'))
        self.assertEqual(siblings[2].call, parse_call('3H'))

    def test_auction_decision_below_hand_decision(self):
        ctx = make_context('SKQ32HAQ2DKQ2CK32', ['1NT', 'P', '4C', 'P', '4H', 'P'], Player.south)
        matched = evaluate_tree_fast(gerber_tree, ctx)
        self.assertEqual(matched.name, 'gerber-signoff')
        with self.assertRaises(TreeInvariantError):
            find_sibling_bids(gerber_tree, matched, ctx)

    def test_deep_hand_subtree(self):
        ok = bid('ok', parse_call('2C'))
        node = decision('values', hcp_min(8), ok, bid('weak', Call.pass_()))
        for i in range(5000):
            node = decision(f"d{i}", hcp_min(40), fallback(), node)
        ctx = make_context('SAK32HQ432DK32C32', ['1NT', 'P'], Player.south)
        self.assertIs(evaluate_tree_fast(node, ctx), ok)
        (sibling,) = find_sibling_bids(node, ok, ctx)
        self.assertEqual(sibling.bid_name, 'weak')
        self.assertEqual([f.name for f in sibling.failed_conditions], ['hcp-min'])

    def test_broken_call_is_skipped(self):
        ok = bid('ok', parse_call('2C'))

        def broken(ctx):
            raise ValueError("no call")

        tree = decision('values', hcp_min(8), ok, bid('broken', broken))
        ctx = make_context('SAK32HQ432DK32C32', ['1NT', 'P'], Player.south)
        with self.assertLogs('sibling_finder', level='WARNING'):
            siblings = find_sibling_bids(tree, ok, ctx)
        self.assertEqual(siblings, [])


if __name__ == '__main__':
    unittest.main()
