"""
Token classifier for NC program tokens.

Each token is matched against an ordered list of rules and takes the
kind of the first rule that matches. The order is fixed:

    COMMAND, PARAMETER, LABEL, CONDITIONAL, JUMP,
    INDEXED_VARIABLE, SYMBOL, then the loose GOTO fallback and UNKNOWN.

Matching is done on the uppercased token, so ``g1`` and ``G1`` are the
same command.
"""
import re
from enum import Enum
from dataclasses import dataclass
from typing import List, Optional, Pattern, Tuple


class TokenKind(Enum):
    COMMAND = "command"
    PARAMETER = "parameter"
    LABEL = "label"
    CONDITIONAL = "conditional"
    JUMP = "jump"
    INDEXED_VARIABLE = "indexed_variable"
    SYMBOL = "symbol"
    UNKNOWN = "unknown"


# Axis and modal-value letters accepted as parameters
PARAMETER_LETTERS = "XYZUWIJKRSPFQ"

SYMBOLS = frozenset({"EQ", "NE", "GT", "LT", "GE", "LE", "[", "]", "AND", "OR"})


@dataclass(frozen=True)
class ClassifiedToken:
    """A token together with the kind it was classified as."""
    kind: TokenKind
    text: str
    target: Optional[str] = None  # Jump target for JUMP tokens

    def __str__(self):
        return f"{self.kind.value}:{self.text}"


# Ordered (kind, pattern) rules; patterns match the whole token, first match wins
CLASSIFICATION_RULES: List[Tuple[TokenKind, Pattern]] = [
    (TokenKind.COMMAND, re.compile(r'[GM][0-9]+')),
    (TokenKind.PARAMETER, re.compile(r'[' + PARAMETER_LETTERS + r'][-+]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)')),
    (TokenKind.LABEL, re.compile(r'N[0-9A-Z]+')),
    (TokenKind.CONDITIONAL, re.compile(r'IF')),
    (TokenKind.JUMP, re.compile(r'GOTO([0-9A-Z]+)')),
    (TokenKind.INDEXED_VARIABLE, re.compile(r'#[0-9]+')),
]

LOOSE_JUMP_PATTERN = re.compile(r'^GOTO(\S+)')


def classify_token(token: str) -> ClassifiedToken:
    """Classify a single token by the first matching rule."""
    upper = token.upper()

    for kind, pattern in CLASSIFICATION_RULES:
        match = pattern.fullmatch(upper)
        if match:
            target = match.group(1) if kind == TokenKind.JUMP else None
            return ClassifiedToken(kind, upper, target)

    if upper in SYMBOLS:
        return ClassifiedToken(TokenKind.SYMBOL, upper)

    loose = LOOSE_JUMP_PATTERN.match(upper)
    if loose:
        return ClassifiedToken(TokenKind.JUMP, upper, loose.group(1))

    return ClassifiedToken(TokenKind.UNKNOWN, upper)


def classify_tokens(tokens: List[str]) -> List[ClassifiedToken]:
    """Classify a token sequence, preserving order."""
    return [classify_token(token) for token in tokens]
