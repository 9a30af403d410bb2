"""
Convention strategy for bidding drills
Wraps one convention so a drill can ask "what should this seat bid?"
and grade the bid the user actually made.
"""

import logging

from bridge_model import Call
from registry import evaluate_bidding_rules, evaluate_flat_rules, get_effective_rules
from rule_tree import is_tree_convention
from sibling_finder import TreeInvariantError, find_sibling_bids

logger = logging.getLogger(__name__)


class BidResult:
    """Suggested call plus the rule and explanation behind it"""

    def __init__(self, call, rule_name, explanation):
        self.call = call
        self.rule_name = rule_name
        self.explanation = explanation

    def __repr__(self):
        return f"BidResult({self.call}, {self.rule_name!r})"


class BidFeedback:
    """
    Verdict on a user's call.
    expected is the BidResult the convention recommends (None means pass);
    siblings lists the other bids available in the same position;
    user_rule names the sibling the user's call corresponds to, if any.
    """

    def __init__(self, correct, user_call, expected, explanation, siblings=None, user_rule=None):
        self.correct = correct
        self.user_call = user_call
        self.expected = expected
        self.explanation = explanation
        self.siblings = siblings or []
        self.user_rule = user_rule


class ConventionStrategy:
    """Bidding strategy backed by one convention, tree or flat"""

    def __init__(self, config):
        self.config = config
        self.id = f"convention:{config.id}"
        self.name = config.name

    def evaluate(self, context):
        """Full registry result (with condition trace) or None"""
        if is_tree_convention(self.config):
            return evaluate_bidding_rules(context, self.config)
        return evaluate_flat_rules(get_effective_rules(self.config), context)

    def suggest(self, context):
        """Recommended call for this context, or None when no rule applies"""
        result = self.evaluate(context)
        if result is None:
            logger.debug("%s: no rule for %s", self.config.id, context.seat.name)
            return None
        logger.debug("%s: %s -> %s", self.config.id, result.rule_name, result.call)
        return BidResult(result.call, result.rule_name, result.explanation)

    def alternatives(self, context, result):
        """Other bids reachable from the same auction position (tree conventions only)"""
        if result.raw_tree_result is None:
            return []
        matched = result.raw_tree_result.matched
        try:
            return find_sibling_bids(self.config.rule_tree, matched, context)
        except TreeInvariantError as e:
            logger.warning("%s: no alternatives for %s: %s", self.config.id, result.rule_name, e)
            return []

    def grade(self, context, user_call):
        """Compare the user's call with the convention's recommendation"""
        result = self.evaluate(context)

        if result is None:
            correct = user_call == Call.pass_()
            explanation = "No convention rule applies here; pass" if not correct else "Correct: pass"
            return BidFeedback(correct, user_call, None, explanation)

        expected = BidResult(result.call, result.rule_name, result.explanation)
        siblings = self.alternatives(context, result)
        correct = user_call == result.call

        user_rule = result.rule_name if correct else None
        if not correct:
            for sibling in siblings:
                if sibling.call == user_call:
                    user_rule = sibling.bid_name
                    break

        if correct:
            explanation = f"Correct: {result.call.display()} ({result.rule_name}). {result.explanation}"
        else:
            explanation = (f"Expected {result.call.display()} ({result.rule_name}), "
                           f"you bid {user_call.display()}. {result.explanation}")
        return BidFeedback(correct, user_call, expected, explanation, siblings, user_rule)


def convention_to_strategy(config):
    return ConventionStrategy(config)
