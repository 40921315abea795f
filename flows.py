"""
State records and transitions for the three user flows.

Every state is a frozen dataclass and every transition returns a new one,
so front-ends only render a state and dispatch the next transition.
Validation failures never escape a transition: they become ``error``
on the returned state, with the step's results cleared.
"""
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from config import PARTY_A_NAME, PARTY_B_NAME
from key_exchange import KeyExchange
from logging_util import setup_logger
from messages import (
    ExchangeSummary, MISSING_BOTH_PUBLIC_KEYS, missing_first_public_key,
    public_key_step, residue_lines, sends_public_key, shared_secret_step,
)
from number_theory import PrimitiveRootResult, is_primitive_root
from validation import ValidationError, require_fields, require_positive, validate_parameters

logger = setup_logger("flows")

FIRST_LABEL = "x"
SECOND_LABEL = "y"


@dataclass(frozen=True)
class BatchExchangeState:
    n: Optional[int] = None
    g: Optional[int] = None
    private_a: Optional[int] = None
    private_b: Optional[int] = None
    public_a: Optional[int] = None
    public_b: Optional[int] = None
    secret_a: Optional[int] = None
    secret_b: Optional[int] = None
    error: Optional[str] = None
    reason: Optional[Tuple[int, ...]] = None
    show_steps: bool = False
    name_a: str = PARTY_A_NAME
    name_b: str = PARTY_B_NAME

    @property
    def has_results(self) -> bool:
        return self.public_a is not None


BATCH_FIELDS = ("n", "g", "private_a", "private_b")

_CLEARED_BATCH = dict(public_a=None, public_b=None, secret_a=None, secret_b=None)


def _set_input(state, allowed, name: str, value: Optional[int]):
    if name not in allowed:
        raise ValueError(f"Unknown field: {name}")
    return replace(state, **{name: value})


def set_batch_field(state: BatchExchangeState, name: str, value: Optional[int]) -> BatchExchangeState:
    """Edit one input; results computed from the old inputs are dropped."""
    if name in BATCH_FIELDS and getattr(state, name) == value:
        return state
    state = _set_input(state, BATCH_FIELDS, name, value)
    return replace(state, reason=None, show_steps=False, **_CLEARED_BATCH)


def compute_keys(state: BatchExchangeState) -> BatchExchangeState:
    try:
        validate_parameters(state.n, state.g, state.private_a, state.private_b)
    except ValidationError as e:
        logger.info(f"Batch exchange rejected: {e.message}")
        reason = tuple(e.steps) if e.steps is not None else None
        return replace(state, error=e.message, reason=reason, show_steps=False, **_CLEARED_BATCH)

    party_a = KeyExchange(state.n, state.g, state.private_a)
    party_b = KeyExchange(state.n, state.g, state.private_b)
    public_a = party_a.public_component()
    public_b = party_b.public_component()
    secret_a = party_a.derive_shared(public_b)
    secret_b = party_b.derive_shared(public_a)
    logger.debug(f"Batch exchange n={state.n} g={state.g}: public {public_a}/{public_b}, "
                 f"secret {secret_a}/{secret_b}")

    return replace(state, public_a=public_a, public_b=public_b, secret_a=secret_a,
                   secret_b=secret_b, error=None, reason=None, show_steps=False)


def toggle_steps(state: BatchExchangeState) -> BatchExchangeState:
    if not state.has_results:
        return state
    return replace(state, show_steps=not state.show_steps)


def detailed_steps(state: BatchExchangeState) -> List[str]:
    if not state.has_results:
        return []
    n, g = state.n, state.g
    return [
        public_key_step(state.name_a, FIRST_LABEL, g, state.private_a, n, state.public_a),
        public_key_step(state.name_b, SECOND_LABEL, g, state.private_b, n, state.public_b),
        shared_secret_step(state.name_a, state.name_b, FIRST_LABEL, state.public_b,
                           state.private_a, n, state.secret_a),
        shared_secret_step(state.name_b, state.name_a, SECOND_LABEL, state.public_a,
                           state.private_b, n, state.secret_b),
    ]


def reason_lines(state: BatchExchangeState) -> List[str]:
    if state.reason is None:
        return []
    return residue_lines(state.g, state.n, list(state.reason))


def batch_summary(state: BatchExchangeState) -> ExchangeSummary:
    summary = ExchangeSummary(n=state.n, g=state.g, error=state.error)
    if state.has_results:
        summary.public_keys = {state.name_a: state.public_a, state.name_b: state.public_b}
        summary.secrets = {state.name_a: state.secret_a, state.name_b: state.secret_b}
        summary.steps = detailed_steps(state)
    else:
        summary.steps = reason_lines(state)
    return summary


@dataclass(frozen=True)
class PrimitiveRootState:
    n: Optional[int] = None
    g: Optional[int] = None
    result: Optional[PrimitiveRootResult] = None
    error: Optional[str] = None


PARAMETER_FIELDS = ("n", "g")


def set_root_field(state: PrimitiveRootState, name: str, value: Optional[int]) -> PrimitiveRootState:
    return _set_input(state, PARAMETER_FIELDS, name, value)


def check_primitive_root(state: PrimitiveRootState) -> PrimitiveRootState:
    try:
        require_fields(state.n, state.g)
        require_positive(state.n, state.g)
    except ValidationError as e:
        logger.info(f"Primitive-root check rejected: {e.message}")
        return replace(state, result=None, error=e.message)

    result = is_primitive_root(state.g, state.n)
    logger.debug(f"Primitive-root check g={state.g} n={state.n}: {result.is_root}")
    return replace(state, result=result, error=None)


def verdict(state: PrimitiveRootState) -> str:
    if state.result is None:
        return ""
    if state.result.is_root:
        return f"{state.g} is a primitive root of {state.n}"
    return f"{state.g} is not a primitive root of {state.n}"


def root_steps(state: PrimitiveRootState) -> List[str]:
    if state.result is None:
        return []
    return residue_lines(state.g, state.n, state.result.steps)


def root_summary(state: PrimitiveRootState) -> ExchangeSummary:
    is_root = state.result.is_root if state.result is not None else None
    return ExchangeSummary(n=state.n, g=state.g, error=state.error, steps=root_steps(state),
                           is_primitive_root=is_root)


@dataclass(frozen=True)
class PartyState:
    name: str
    private: Optional[int] = None
    public: Optional[int] = None
    secret: Optional[int] = None
    messages: Tuple[str, ...] = ()

    def cleared(self) -> "PartyState":
        return replace(self, public=None, secret=None, messages=())


@dataclass(frozen=True)
class InteractiveExchangeState:
    n: Optional[int] = None
    g: Optional[int] = None
    first: PartyState = field(default_factory=lambda: PartyState(PARTY_A_NAME))
    second: PartyState = field(default_factory=lambda: PartyState(PARTY_B_NAME))
    secret_steps: Tuple[str, ...] = ()
    error: Optional[str] = None


def _reset_exchange(state: InteractiveExchangeState, **changes) -> InteractiveExchangeState:
    return replace(state, first=state.first.cleared(), second=state.second.cleared(),
                   secret_steps=(), **changes)


def set_parameter(state: InteractiveExchangeState, name: str, value: Optional[int]) -> InteractiveExchangeState:
    """Change n or g; anything published under the old values is dropped."""
    if name not in PARAMETER_FIELDS:
        raise ValueError(f"Unknown field: {name}")
    if getattr(state, name) == value:
        return state
    return _reset_exchange(state, **{name: value})


def set_private(state: InteractiveExchangeState, party: str, value: Optional[int]) -> InteractiveExchangeState:
    """Edit one party's private key; a changed key has to be published again."""
    if party not in ("first", "second"):
        raise ValueError(f"Unknown party: {party}")
    current = getattr(state, party)
    if current.private == value:
        return state
    other = "second" if party == "first" else "first"
    return replace(state, secret_steps=(), **{
        party: replace(current.cleared(), private=value),
        other: replace(getattr(state, other), secret=None),
    })


def publish_first(state: InteractiveExchangeState) -> InteractiveExchangeState:
    first = state.first
    try:
        validate_parameters(state.n, state.g, first.private)
    except ValidationError as e:
        logger.info(f"{first.name} could not publish: {e.message}")
        return _reset_exchange(state, error=e.message)

    value = KeyExchange(state.n, state.g, first.private).public_component()
    logger.debug(f"{first.name} published {value}")
    first = replace(first, public=value, secret=None, messages=(
        public_key_step(first.name, FIRST_LABEL, state.g, first.private, state.n, value),
        sends_public_key(first.name, value),
    ))
    second = replace(state.second, secret=None)
    return replace(state, first=first, second=second, secret_steps=(), error=None)


def publish_second(state: InteractiveExchangeState) -> InteractiveExchangeState:
    second = state.second
    try:
        if state.n is None or state.g is None or state.first.public is None:
            raise ValidationError(missing_first_public_key(state.first.name))
        require_fields(second.private)
        require_positive(second.private)
    except ValidationError as e:
        logger.info(f"{second.name} could not publish: {e.message}")
        return replace(state, first=replace(state.first, secret=None), second=second.cleared(),
                       secret_steps=(), error=e.message)

    value = KeyExchange(state.n, state.g, second.private).public_component()
    logger.debug(f"{second.name} published {value}")
    second = replace(second, public=value, secret=None, messages=(
        public_key_step(second.name, SECOND_LABEL, state.g, second.private, state.n, value),
        sends_public_key(second.name, value),
    ))
    return replace(state, first=replace(state.first, secret=None), second=second,
                   secret_steps=(), error=None)


def compute_secrets(state: InteractiveExchangeState) -> InteractiveExchangeState:
    first, second = state.first, state.second
    if None in (state.n, state.g, first.private, second.private, first.public, second.public):
        logger.info(f"Secrets not computed: {MISSING_BOTH_PUBLIC_KEYS}")
        return replace(state, first=replace(first, secret=None), second=replace(second, secret=None),
                       secret_steps=(), error=MISSING_BOTH_PUBLIC_KEYS)

    secret_first = KeyExchange(state.n, state.g, first.private).derive_shared(second.public)
    secret_second = KeyExchange(state.n, state.g, second.private).derive_shared(first.public)
    logger.debug(f"Secrets derived: {secret_first}/{secret_second}")
    steps = (
        shared_secret_step(first.name, second.name, FIRST_LABEL, second.public,
                           first.private, state.n, secret_first),
        shared_secret_step(second.name, first.name, SECOND_LABEL, first.public,
                           second.private, state.n, secret_second),
    )
    return replace(state, first=replace(first, secret=secret_first),
                   second=replace(second, secret=secret_second), secret_steps=steps, error=None)


def interactive_summary(state: InteractiveExchangeState) -> ExchangeSummary:
    parties = (state.first, state.second)
    return ExchangeSummary(
        n=state.n, g=state.g, error=state.error,
        public_keys={p.name: p.public for p in parties if p.public is not None},
        secrets={p.name: p.secret for p in parties if p.secret is not None},
        steps=[*state.first.messages, *state.second.messages, *state.secret_steps],
    )
