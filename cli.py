import argparse
import sys

from config import PROG_NAME
from flows import (
    BatchExchangeState, PrimitiveRootState, InteractiveExchangeState,
    compute_keys, detailed_steps, reason_lines, batch_summary,
    check_primitive_root, verdict, root_steps, root_summary,
    set_parameter, set_private, publish_first, publish_second, compute_secrets,
    interactive_summary,
)
from logging_util import setup_logger
from utils import parse_number, format_optional

logger = setup_logger("cli")


def _print_lines(title, lines):
    if lines:
        print(f"{title}:")
        for line in lines:
            print(f"  - {line}")


def run_exchange(args) -> int:
    state = BatchExchangeState(n=args.n, g=args.g, private_a=args.a, private_b=args.b)
    state = compute_keys(state)

    if args.json:
        print(batch_summary(state).to_json())
    elif state.error:
        logger.error(state.error)
        _print_lines("Calculations", reason_lines(state))
    else:
        print(f"{state.name_a} Sends: {state.public_a}")
        print(f"{state.name_b} Sends: {state.public_b}")
        print(f"{state.name_a}'s Secret Key: {state.secret_a}")
        print(f"{state.name_b}'s Secret Key: {state.secret_b}")
        if args.steps:
            _print_lines("Steps", detailed_steps(state))
    return 1 if state.error else 0


def run_primitive_root(args) -> int:
    state = check_primitive_root(PrimitiveRootState(n=args.n, g=args.g))

    if args.json:
        print(root_summary(state).to_json())
    elif state.error:
        logger.error(state.error)
    else:
        print(verdict(state))
        _print_lines("Steps", root_steps(state))
    return 1 if state.error else 0


def _prompt(label, current=None):
    suffix = f" [{format_optional(current)}]" if current is not None else ""
    text = input(f"{label}{suffix}> ")
    if not text.strip() and current is not None:
        return current
    return parse_number(text)


def run_interactive(args) -> int:
    state = InteractiveExchangeState()
    try:
        state = set_parameter(state, "n", args.n if args.n is not None else _prompt("n"))
        state = set_parameter(state, "g", args.g if args.g is not None else _prompt("g"))

        while state.first.public is None:
            state = set_private(state, "first", _prompt(f"{state.first.name}'s private key", state.first.private))
            state = publish_first(state)
            if state.error:
                logger.error(state.error)
                if state.n is None or state.g is None:
                    return 1
                if state.first.private is not None and state.first.private > 0:
                    # n or g is at fault, another key will not help
                    return 1
        if not args.json:
            _print_lines(state.first.name, state.first.messages)

        while state.second.public is None:
            state = set_private(state, "second", _prompt(f"{state.second.name}'s private key", state.second.private))
            state = publish_second(state)
            if state.error:
                logger.error(state.error)
        if not args.json:
            _print_lines(state.second.name, state.second.messages)
    except (EOFError, KeyboardInterrupt):
        logger.info("Exchange aborted")
        return 1

    state = compute_secrets(state)
    if args.json:
        print(interactive_summary(state).to_json())
    else:
        _print_lines("Secret Key Calculation Steps", state.secret_steps)
        print(f"{state.first.name}'s Secret Key: {state.first.secret}")
        print(f"{state.second.name}'s Secret Key: {state.second.secret}")
    return 1 if state.error else 0


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog=PROG_NAME, description="Diffie-Hellman key exchange visualizer")
    sub = parser.add_subparsers(dest="command", required=True)

    exchange = sub.add_parser("exchange", help="Compute both public keys and shared secrets at once")
    exchange.add_argument("--n", type=int, help="Prime modulus")
    exchange.add_argument("--g", type=int, help="Generator (prime, primitive root of n)")
    exchange.add_argument("--a", type=int, help="First party's private key")
    exchange.add_argument("--b", type=int, help="Second party's private key")
    exchange.add_argument("--steps", action="store_true", help="Show detailed steps")
    exchange.add_argument("--json", action="store_true", help="Print the result as JSON")
    exchange.set_defaults(func=run_exchange)

    root = sub.add_parser("primitive-root", help="Check whether g is a primitive root of n")
    root.add_argument("--n", type=int, help="Modulus")
    root.add_argument("--g", type=int, help="Candidate primitive root")
    root.add_argument("--json", action="store_true", help="Print the result as JSON")
    root.set_defaults(func=run_primitive_root)

    interactive = sub.add_parser("interactive", help="Two-step exchange driven from the prompt")
    interactive.add_argument("--n", type=int, help="Prime modulus")
    interactive.add_argument("--g", type=int, help="Generator (prime, primitive root of n)")
    interactive.add_argument("--json", action="store_true", help="Print the result as JSON")
    interactive.set_defaults(func=run_interactive)

    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
