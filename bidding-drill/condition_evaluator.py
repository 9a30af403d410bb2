"""
Flat bidding rules and per-condition evaluation.

A flat rule is the list form of one path through a rule tree: auction
conditions first, then hand conditions, then the call to make.
"""

from conditions import ConditionResult

PASS_MARK = '✓'
FAIL_MARK = '✗'


class BiddingRule:
    """Legacy flat rule: an opaque matches() predicate and a call function"""

    def __init__(self, name, explanation, matches, call):
        self.name = name
        self.explanation = explanation
        self.matches = matches
        self.call = call

    def __repr__(self):
        return f"BiddingRule({self.name!r})"


class ConditionedRule:
    """A flat rule whose conditions are inspectable, split by scope"""

    def __init__(self, name, auction_conditions, hand_conditions, call, explanation=''):
        self.name = name
        self.auction_conditions = list(auction_conditions)
        self.hand_conditions = list(hand_conditions)
        self.call = call
        self.explanation = explanation

    @property
    def conditions(self):
        """Auction conditions followed by hand conditions"""
        return self.auction_conditions + self.hand_conditions

    def matches(self, ctx):
        return all(cond.test(ctx) for cond in self.conditions)

    def __repr__(self):
        return f"ConditionedRule({self.name!r}, {len(self.conditions)} conditions)"


def conditioned_rule(name, auction_conditions, hand_conditions, call):
    return ConditionedRule(name, auction_conditions, hand_conditions, call)


def is_conditioned_rule(rule):
    return isinstance(rule, ConditionedRule)


def evaluate_conditions(rule, context):
    """
    Run every condition of `rule` against `context`, in order, without
    stopping at the first failure. Compound conditions also report their branches.
    """
    results = []
    for cond in rule.conditions:
        branches = cond.evaluate_children(context) if cond.evaluate_children is not None else None
        results.append(ConditionResult(cond, bool(cond.test(context)), cond.describe(context), branches))
    return results


def build_explanation(results):
    """'✓ desc; ✗ desc; ...' over all results, passing and failing"""
    return '; '.join(f"{PASS_MARK if r.passed else FAIL_MARK} {r.description}" for r in results)
