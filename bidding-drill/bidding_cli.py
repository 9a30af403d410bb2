"""
Bidding drill command line

    python bidding_cli.py bid --convention stayman --hand 'SKQ52HAJ83D742C95' --seat S
    python bidding_cli.py conventions --list
    python bidding_cli.py conventions --show stayman
"""

import argparse
import logging
import sys

from auction import Auction, IllegalCallError, build_auction
from bridge_model import Hand, create_bidding_context, parse_seat, seat_letter
from convention_strategy import ConventionStrategy
from conventions import build_registry
from registry import UnknownConventionError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 2


def _cmd_bid(args, registry):
    config = registry.get(args.convention)
    seat = parse_seat(args.seat)
    hand = Hand.parse(args.hand)

    if args.auction:
        auction = build_auction(parse_seat(args.dealer), args.auction.split())
    else:
        auction = (config.default_auction(seat) if config.default_auction else None) or Auction()
    logger.debug("Auction for %s: %r", seat_letter(seat), auction)

    ctx = create_bidding_context(hand, auction, seat)
    result = ConventionStrategy(config).suggest(ctx)

    print(f"Hand: {hand} ({ctx.evaluation.hcp} HCP)")
    if result is None:
        print("No convention rule applies")
        return EXIT_OK
    print(f"Bid: {result.call.display()}")
    print(f"Rule: {result.rule_name}")
    print(f"Why: {result.explanation}")
    return EXIT_OK


def _cmd_conventions(args, registry):
    if args.show:
        config = registry.get(args.show)
        rules = registry.get_effective_rules(config)
        print(f"{config.name} ({config.id}): {config.description}")
        print(f"{len(rules)} rules")
        for rule in rules:
            print(f"\n  {rule.name}")
            if rule.explanation:
                print(f"    {rule.explanation}")
            for cond in rule.auction_conditions:
                print(f"    [auction] {cond.label}")
            for cond in rule.hand_conditions:
                print(f"    [hand] {cond.label}")
        return EXIT_OK

    for config in registry.list():
        print(f"{config.id:<15} {config.name:<15} {config.category.value}")
    return EXIT_OK


def build_parser():
    parser = argparse.ArgumentParser(prog="bidding-drill", description="Bridge convention bidding drills")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_bid = sub.add_parser("bid", help="Suggest a bid using a convention")
    p_bid.add_argument("--convention", "-c", required=True, help="Convention id (see 'conventions --list')")
    p_bid.add_argument("--hand", required=True, help="LIN ('SAKQ2H...') or cards ('SA SK SQ ...')")
    p_bid.add_argument("--seat", "-s", required=True, help="Bidding seat (N|E|S|W)")
    p_bid.add_argument("--auction", "-a", help="Calls so far, e.g. '1NT P'")
    p_bid.add_argument("--dealer", "-d", default="N", help="First caller of --auction (default N)")
    p_bid.set_defaults(func=_cmd_bid)

    p_conv = sub.add_parser("conventions", help="List conventions or show one convention's rules")
    group = p_conv.add_mutually_exclusive_group()
    group.add_argument("--list", action="store_true", help="List registered conventions (default)")
    group.add_argument("--show", metavar="ID", help="Show every rule of a convention")
    p_conv.set_defaults(func=_cmd_conventions)

    return parser


def main(argv=None, registry=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if registry is None:
        registry = build_registry()

    try:
        return args.func(args, registry)
    except UnknownConventionError as e:
        print(f"❌ {e}", file=sys.stderr)
    except IllegalCallError as e:
        print(f"❌ Invalid auction: {e}", file=sys.stderr)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
    return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
