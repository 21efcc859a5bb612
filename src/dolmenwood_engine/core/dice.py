from __future__ import annotations

import logging
import math
import random
import re
from dataclasses import dataclass, field
from typing import Any, Optional, Union, cast

from .errors import DiceNotationError


@dataclass(frozen=True)
class NumberLeaf:
    value: Union[int, float]


@dataclass(frozen=True)
class TextLeaf:
    text: str


@dataclass(frozen=True)
class ResultGroup:
    results: tuple["RollNode", ...] = ()


@dataclass(frozen=True)
class RollSequence:
    rolls: tuple["RollNode", ...] = ()


RollNode = Optional[Union[NumberLeaf, TextLeaf, ResultGroup, RollSequence]]


@dataclass(frozen=True)
class RollResult:
    notation: str
    total: int
    rolls: tuple[RollNode, ...] = ()
    min_total: Optional[int] = None
    max_total: Optional[int] = None
    output: str = ""
    valid: bool = True


def coerce_roll_node(raw: Any) -> RollNode:
    """Convert loosely-shaped third-party roll output into a ``RollNode``.

    Lists become sequences, dicts are read through their ``rolls``,
    ``results`` or numeric ``value`` keys. Anything unrecognised maps to
    ``None`` and is later ignored by ``extract_die_values``.
    """
    if raw is None or isinstance(raw, (NumberLeaf, TextLeaf, ResultGroup, RollSequence)):
        return raw
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return NumberLeaf(raw)
    if isinstance(raw, str):
        return TextLeaf(raw)
    if isinstance(raw, (list, tuple)):
        return RollSequence(tuple(coerce_roll_node(item) for item in raw))
    if isinstance(raw, dict):
        if isinstance(raw.get("rolls"), (list, tuple)):
            return RollSequence(tuple(coerce_roll_node(item) for item in raw["rolls"]))
        if isinstance(raw.get("results"), (list, tuple)):
            return ResultGroup(tuple(coerce_roll_node(item) for item in raw["results"]))
        value = raw.get("value")
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return NumberLeaf(value)
    return None


def _as_die_value(value: Union[int, float]) -> Optional[int]:
    if isinstance(value, int):
        return value
    if math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def _parse_die_text(text: str) -> Optional[int]:
    try:
        return _as_die_value(float(text.strip()))
    except ValueError:
        return None


def _extract(node: RollNode) -> list[int]:
    if isinstance(node, NumberLeaf):
        value = _as_die_value(node.value)
        return [] if value is None else [value]
    if isinstance(node, TextLeaf):
        value = _parse_die_text(node.text)
        return [] if value is None else [value]
    if isinstance(node, RollSequence):
        return [v for child in node.rolls for v in _extract(child)]
    if isinstance(node, ResultGroup):
        return [v for child in node.results for v in _extract(child)]
    return []


def extract_die_values(result: RollResult) -> list[int]:
    """Flatten every individual die value out of ``result``."""
    if not result.valid:
        return []
    return [v for node in result.rolls for v in _extract(node)]


_TOKEN_RE = re.compile(r"\s*(?:(?P<dice>\d*[dD]\d+)|(?P<number>\d+)|(?P<op>[-+*]))")


@dataclass
class _Term:
    total: int
    low: int
    high: int
    node: RollNode = None
    ops: list[RollNode] = field(default_factory=list)


class DiceEvaluator:
    """Seedable dice roller understanding ``NdM``, constants, ``+``, ``-`` and ``*``."""

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        seed: int | None = None,
        logger: logging.Logger | None = None,
    ):
        self._rng = rng or random.Random(seed)
        self._logger = logger or logging.getLogger(__name__)

    def roll(self, notation: str) -> RollResult:
        tokens = self._tokenize(notation)
        position = 0

        def atom() -> _Term:
            nonlocal position
            if position >= len(tokens):
                raise DiceNotationError(notation, "expression ends unexpectedly")
            kind, text = tokens[position]
            position += 1
            if kind == "number":
                value = int(text)
                return _Term(total=value, low=value, high=value)
            if kind == "dice":
                return self._roll_dice(notation, text)
            raise DiceNotationError(notation, f"unexpected operator {text!r}")

        def product() -> _Term:
            nonlocal position
            term = atom()
            while position < len(tokens) and tokens[position] == ("op", "*"):
                position += 1
                rhs = atom()
                corners = (term.low * rhs.low, term.low * rhs.high, term.high * rhs.low, term.high * rhs.high)
                term = _Term(
                    total=term.total * rhs.total,
                    low=min(corners),
                    high=max(corners),
                    ops=term.ops + _nodes(term) + [TextLeaf("*")] + rhs.ops + _nodes(rhs),
                )
            return term

        def expression() -> _Term:
            nonlocal position
            term = product()
            while position < len(tokens) and tokens[position][0] == "op" and tokens[position][1] in "+-":
                sign = tokens[position][1]
                position += 1
                rhs = product()
                if sign == "+":
                    total, low, high = term.total + rhs.total, term.low + rhs.low, term.high + rhs.high
                else:
                    total, low, high = term.total - rhs.total, term.low - rhs.high, term.high - rhs.low
                term = _Term(
                    total=total,
                    low=low,
                    high=high,
                    ops=term.ops + _nodes(term) + [TextLeaf(sign)] + rhs.ops + _nodes(rhs),
                )
            return term

        result_term = expression()
        if position != len(tokens):
            raise DiceNotationError(notation, f"unexpected token {tokens[position][1]!r}")

        rolls = tuple(result_term.ops + _nodes(result_term))
        result = RollResult(
            notation=notation,
            total=result_term.total,
            rolls=rolls,
            min_total=result_term.low,
            max_total=result_term.high,
            output=f"{notation.strip()}: {_render(rolls)} = {result_term.total}",
        )
        self._logger.debug("Rolled %s", result.output)
        return result

    def _tokenize(self, notation: str) -> list[tuple[str, str]]:
        if not isinstance(notation, str) or not notation.strip():
            raise DiceNotationError(str(notation), "empty notation")
        tokens: list[tuple[str, str]] = []
        position = 0
        stripped = notation.rstrip()
        while position < len(stripped):
            match = _TOKEN_RE.match(stripped, position)
            if match is None:
                raise DiceNotationError(notation, f"unexpected character at {position}")
            # Every alternative of _TOKEN_RE is a named group.
            kind = cast(str, match.lastgroup)
            tokens.append((kind, match.group(kind)))
            position = match.end()
        return tokens

    def _roll_dice(self, notation: str, text: str) -> _Term:
        count_text, sides_text = text.lower().split("d")
        count = int(count_text) if count_text else 1
        sides = int(sides_text)
        if count < 1:
            raise DiceNotationError(notation, f"cannot roll {count} dice")
        if sides < 1:
            raise DiceNotationError(notation, f"dice need at least one side, got d{sides}")
        values = [self._rng.randint(1, sides) for _ in range(count)]
        return _Term(
            total=sum(values),
            low=count,
            high=count * sides,
            node=RollSequence(tuple(NumberLeaf(v) for v in values)),
        )


def _nodes(term: _Term) -> list[RollNode]:
    return [term.node] if term.node is not None else []


def _render(rolls: tuple[RollNode, ...]) -> str:
    return " ".join(
        "[" + ", ".join(str(v) for v in _extract(node)) + "]"
        for node in rolls
        if isinstance(node, RollSequence)
    )
