"""
Tests for flattening rule trees into flat rules
"""

import unittest

from endplay.types import Denom, Player

from auction import build_auction
from bridge_model import Call, Hand, create_bidding_context
from condition_evaluator import ConditionedRule, conditioned_rule, evaluate_conditions
from conditions import AUCTION, HAND, Condition, auction_matches, hcp_min, suit_min
from conventions import ALL_CONVENTIONS
from conventions.bergen_raises import bergen_tree
from conventions.stayman import stayman_tree
from registry import get_effective_rules
from rule_tree import MalformedTreeError, NodeMetadata, bid, decision, fallback, is_tree_convention
from tree_compat import (audit_rule_classification, count_bid_paths, flatten_tree, is_auction_condition,
                         negate_condition, tree_result_to_rule_result)
from tree_evaluator import evaluate_tree, evaluate_tree_fast


def make_context(lin, calls, seat=Player.south):
    return create_bidding_context(Hand.from_lin(lin), build_auction(Player.north, calls), seat)


class TestClassification(unittest.TestCase):
    """Test name-based auction/hand classification"""

    def test_known_auction_names(self):
        for name in ('auction', 'is-opener', 'is-responder', 'partner opened', 'opponent-bid',
                     'no-prior-bid', 'bidding-round', 'seat-has-bid', 'advance-after-double',
                     'opponent-acted', 'partner-opened-major', 'partner-opened-minor'):
            self.assertTrue(is_auction_condition(name), name)

    def test_parameterised_names(self):
        self.assertTrue(is_auction_condition('partner-opened-1NT'))
        self.assertTrue(is_auction_condition('partner-bid-3C'))
        self.assertTrue(is_auction_condition('partner opened H'))

    def test_negated_names(self):
        self.assertTrue(is_auction_condition('not-auction'))
        self.assertTrue(is_auction_condition('not-not-is-opener'))
        self.assertFalse(is_auction_condition('not-hcp-min'))

    def test_hand_names(self):
        for name in ('hcp-min', 'hearts-min', 'and', 'or', 'major-support', 'gerber-king-ask',
                     'gerber-signoff', 'advance-support-hearts', 'partner-opened'):
            self.assertFalse(is_auction_condition(name), name)


class TestNegation(unittest.TestCase):
    """Test the no-branch form of a condition"""

    def test_negated_condition(self):
        ctx = make_context('SAK32HQ432DK32C32', ['1NT', 'P'])
        original = hcp_min(8)
        negated = negate_condition(original)
        self.assertEqual(negated.name, 'not-hcp-min')
        self.assertEqual(negated.label, 'Not: 8+ HCP')
        self.assertEqual(negated.describe(ctx), 'Not: 12 HCP (8+ required)')
        self.assertFalse(negated.test(ctx))
        self.assertEqual(negated.category, HAND)
        self.assertIsNone(negated.inference)
        # original untouched
        self.assertIsNotNone(original.inference)

    def test_negated_auction_condition_stays_auction(self):
        negated = negate_condition(auction_matches(['1NT', 'P']))
        self.assertEqual(negated.category, AUCTION)
        self.assertTrue(is_auction_condition(negated.name))


class TestFlatten(unittest.TestCase):
    """Test tree to flat rule conversion"""

    def setUp(self):
        self.tree = decision(
            'after-1nt-p', auction_matches(['1NT', 'P']),
            decision(
                'values', hcp_min(8),
                bid('ask', Call.bid(2, Denom.clubs), NodeMetadata(description="Ask for a major")),
                fallback('weak'),
            ),
            bid('other', Call.pass_()),
        )

    def test_one_rule_per_bid_path(self):
        rules = flatten_tree(self.tree)
        self.assertEqual([r.name for r in rules], ['ask', 'other'])
        self.assertEqual(len(rules), count_bid_paths(self.tree))
        self.assertTrue(all(isinstance(r, ConditionedRule) for r in rules))

    def test_conditions_split_by_scope(self):
        ask, other = flatten_tree(self.tree)
        self.assertEqual([c.name for c in ask.auction_conditions], ['auction'])
        self.assertEqual([c.name for c in ask.hand_conditions], ['hcp-min'])
        self.assertEqual([c.name for c in other.auction_conditions], ['not-auction'])
        self.assertEqual(other.hand_conditions, [])
        self.assertEqual(ask.explanation, "Ask for a major")

    def test_fallback_only_tree(self):
        self.assertEqual(flatten_tree(fallback('nothing')), [])
        self.assertEqual(count_bid_paths(fallback('nothing')), 0)

    def test_root_bid(self):
        rules = flatten_tree(bid('always', Call.pass_()))
        self.assertEqual(len(rules), 1)
        self.assertEqual(rules[0].conditions, [])

    def test_malformed_tree(self):
        with self.assertRaises(MalformedTreeError):
            flatten_tree(decision('x', hcp_min(1), 42, fallback()))

    def test_flat_rule_matches_where_tree_lands(self):
        """Exactly one flat rule matches, and it is the bid the tree reaches"""
        rules = flatten_tree(stayman_tree)
        cases = [
            ('SAK32HQ432DK32C32', ['1NT', 'P'], Player.south),
            ('SAQ2HKJ43DKJ3CQ98', ['1NT', 'P', '2C', 'P'], Player.north),
            ('SAQ2HKJ3DKJ43CQ98', ['1NT', 'P', '2C', 'P'], Player.north),
            ('SAK32HQ432DK32C32', ['1NT', 'P', '2C', 'P', '2H', 'P'], Player.south),
        ]
        for lin, calls, seat in cases:
            ctx = make_context(lin, calls, seat)
            matched = evaluate_tree_fast(stayman_tree, ctx)
            matching = [r for r in rules if r.matches(ctx)]
            self.assertEqual(len(matching), 1, calls)
            self.assertEqual(matching[0].name, matched.name)
            self.assertEqual(matching[0].call(ctx), matched.call(ctx))

    def test_no_flat_rule_matches_a_fallback(self):
        rules = flatten_tree(stayman_tree)
        ctx = make_context('S932HQ8432D32C432', ['1NT', 'P'])
        self.assertIsNone(evaluate_tree_fast(stayman_tree, ctx))
        self.assertEqual([r.name for r in rules if r.matches(ctx)], [])

    def test_evaluate_conditions_reports_every_condition(self):
        ask, _ = flatten_tree(self.tree)
        ctx = make_context('S932HQ8432D32C432', ['1NT', 'P'])
        results = evaluate_conditions(ask, ctx)
        self.assertEqual([r.passed for r in results], [True, False])
        self.assertEqual(results[1].description, "Only 2 HCP (need 8+)")


class TestAudit(unittest.TestCase):
    """Test classification audit"""

    def test_built_in_conventions_are_clean(self):
        for config in ALL_CONVENTIONS:
            rules = get_effective_rules(config)
            self.assertEqual(audit_rule_classification(rules, config.id), [], config.id)
            if is_tree_convention(config):
                self.assertEqual(len(rules), count_bid_paths(config.rule_tree), config.id)

    def test_built_in_bids_are_explained(self):
        for config in ALL_CONVENTIONS:
            if is_tree_convention(config):
                for rule in flatten_tree(config.rule_tree):
                    self.assertTrue(rule.explanation, rule.name)
        (limit,) = [r for r in flatten_tree(bergen_tree) if r.name == 'bergen-limit-raise']
        self.assertEqual(limit.explanation, "Bid 3D showing a limit raise (10-12 HCP) with 4+ card support")

    def test_hand_written_rule(self):
        rule = conditioned_rule('stayman-ask', [auction_matches(['1NT', 'P'])], [hcp_min(8), suit_min(Denom.hearts, 4)],
                                lambda ctx: Call.bid(2, Denom.clubs))
        self.assertEqual([c.name for c in rule.conditions], ['auction', 'hcp-min', 'hearts-min'])
        self.assertEqual(audit_rule_classification([rule]), [])
        self.assertTrue(rule.matches(make_context('SAK32HQ432DK32C32', ['1NT', 'P'])))
        self.assertFalse(rule.matches(make_context('SAK32HQ432DK32C32', ['1NT', 'X'])))

    def test_misfiled_conditions_reported(self):
        sneaky = Condition('is-opener', 'Opener', lambda ctx: True, lambda ctx: '', category=AUCTION)
        tagged = Condition('custom', 'Custom', lambda ctx: True, lambda ctx: '', category=AUCTION)
        rule = ConditionedRule('bad', [hcp_min(8)], [sneaky, tagged], lambda ctx: Call.pass_())
        violations = audit_rule_classification([rule], 'demo')
        self.assertEqual(len(violations), 5)
        self.assertTrue(all(v.startswith('demo/bad: ') for v in violations))


class TestRuleResult(unittest.TestCase):
    """Test mapping a tree result onto a rule result"""

    def test_explanation_lists_visited_decisions(self):
        ctx = make_context('SAQ2HKJ43DKJ3CQ98', ['1NT', 'P', '2C', 'P'], Player.north)
        result = tree_result_to_rule_result(evaluate_tree(stayman_tree, ctx), ctx)
        self.assertEqual(result.rule_name, 'stayman-response-hearts')
        self.assertEqual(result.call, Call.bid(2, Denom.hearts))
        self.assertEqual(result.explanation,
                         "✗ Auction does not match 1NT - P; "
                         "✗ Auction does not match 2NT - P; "
                         "✓ After 1NT - P - 2C - P; "
                         "✓ 4 hearts (4+ required)")
        self.assertEqual(len(result.condition_results), 4)

    def test_no_match(self):
        ctx = make_context('S932HQ8432D32C432', ['1NT', 'P'])
        self.assertIsNone(tree_result_to_rule_result(evaluate_tree(stayman_tree, ctx), ctx))

    def test_supplied_call_is_used(self):
        tree = decision('spades', suit_min(Denom.spades, 4), bid('s', Call.bid(2, Denom.spades)), fallback())
        ctx = make_context('SAK32HQ432DK32C32', ['1NT', 'P'])
        result = tree_result_to_rule_result(evaluate_tree(tree, ctx), ctx, call=Call.pass_())
        self.assertEqual(result.call, Call.pass_())


if __name__ == '__main__':
    unittest.main()
