"""
Alternative bids for drill feedback

Given the bid a hand reached, list the other bids it could have reached
in the same auction, with the conditions that kept the hand away from each.
"""

import logging

from conditions import AUCTION
from rule_tree import BidNode, DecisionNode, FallbackNode, MalformedTreeError
from tree_compat import is_auction_condition

logger = logging.getLogger(__name__)


class TreeInvariantError(Exception):
    """An auction decision sits below a hand decision"""


class FailedCondition:
    def __init__(self, name, description):
        self.name = name
        self.description = description

    def __repr__(self):
        return f"FailedCondition({self.name!r})"


class SiblingBid:
    """Another bid in the same hand subtree and why this hand did not reach it"""

    def __init__(self, bid_name, call, failed_conditions, explanation=''):
        self.bid_name = bid_name
        self.call = call
        self.failed_conditions = failed_conditions
        self.explanation = explanation

    def __repr__(self):
        return f"SiblingBid({self.bid_name!r}, {self.call})"


def _is_auction(condition):
    return condition.category == AUCTION or is_auction_condition(condition.name)


def find_hand_subtree_root(tree, context):
    """Follow the auction decisions the way this context answers them"""
    node = tree
    while isinstance(node, DecisionNode) and _is_auction(node.condition):
        node = node.yes if node.condition.test(context) else node.no
    return node


def find_sibling_bids(tree, matched, context):
    """
    Every BidNode under the hand subtree root except `matched`, in
    yes-before-no order. Raises TreeInvariantError if the subtree contains
    an auction decision.
    """
    root = find_hand_subtree_root(tree, context)
    if not isinstance(root, DecisionNode):
        return []

    siblings = []
    stack = [(root, [])]
    while stack:
        node, required = stack.pop()
        if isinstance(node, FallbackNode) or node is matched:
            continue
        if isinstance(node, BidNode):
            try:
                call = node.call(context)
            except (ValueError, IndexError, KeyError) as e:
                logger.warning("Sibling bid %r could not compute its call: %s", node.name, e)
                continue
            failed = [FailedCondition(cond.name, cond.describe(context))
                      for cond, wanted in required if bool(cond.test(context)) != wanted]
            siblings.append(SiblingBid(node.name, call, failed, node.explanation))
        elif isinstance(node, DecisionNode):
            if _is_auction(node.condition):
                raise TreeInvariantError(
                    f"Auction condition {node.condition.name!r} found inside hand subtree")
            stack.append((node.no, required + [(node.condition, False)]))
            stack.append((node.yes, required + [(node.condition, True)]))
        else:
            raise MalformedTreeError(node)
    return siblings
