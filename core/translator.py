"""
Line translator: turns tokenized NC program lines into readable glosses.

Command codes are looked up in the effective dictionary of the selected
model and collected, in order, into the primary description. Parameter
tokens are collected separately, sorted by axis letter, and appended
after the description.
"""
from dataclasses import dataclass
from typing import List, Optional

from config.code_dictionary import CodeDictionary
from core.classifier import ClassifiedToken, TokenKind, classify_token
from core.tokenizer import LineTokenizer

PRIMARY_SEPARATOR = " ／ "
UNREGISTERED_PREFIX = "未登録:"
LABEL_PREFIX = "ラベル"
CONDITIONAL_TEXT = "条件分岐 IF"
JUMP_PREFIX = "GOTO"

# Sort priority for parameter tokens, by first character
PARAMETER_ORDER = "XYZUWIJKRSPFQ"


@dataclass(frozen=True)
class TranslationResult:
    """Gloss for one line and whether any token in it was unknown."""
    text: str = ""
    has_unknown: bool = False
    unknown_tokens: tuple = ()


@dataclass(frozen=True)
class AnnotatedLine:
    """One input line paired with its translation."""
    line_number: int
    source: str
    text: str
    has_unknown: bool
    unknown_tokens: tuple = ()


def parameter_sort_key(token: str):
    """Axis-letter tokens first, by letter priority; everything else after, lexically."""
    index = PARAMETER_ORDER.find(token[:1]) if token else -1
    if index != -1:
        return (0, index, "")
    return (1, 0, token)


def sort_parameters(params: List[str]) -> List[str]:
    # sorted() is stable, so tokens with the same letter keep their order
    return sorted(params, key=parameter_sort_key)


class LineTranslator:
    """Translates lines of NC program text against a code dictionary."""

    def __init__(self, dictionary: Optional[CodeDictionary] = None,
                 tokenizer: Optional[LineTokenizer] = None):
        self.dictionary = dictionary if dictionary is not None else CodeDictionary.default()
        self.tokenizer = tokenizer or LineTokenizer()

    def translate_line(self, line: str, model: Optional[str] = None) -> TranslationResult:
        """Translate one line of program text."""
        return self.translate_tokens(self.tokenizer.tokenize(line), model)

    def translate_tokens(self, tokens: List[str], model: Optional[str] = None) -> TranslationResult:
        """
        Translate an already tokenized line.

        Args:
            tokens: Tokens in left-to-right order
            model: Model identifier selecting the override layer; None or an
                unknown identifier means common descriptions only

        Returns:
            TranslationResult with the display text and unknown flag
        """
        if not tokens:
            return TranslationResult()

        codes = self.dictionary.effective(model)
        primary: List[str] = []
        params: List[str] = []
        unknowns: List[str] = []

        for token in tokens:
            classified = classify_token(token)
            self._apply(classified, codes, primary, params, unknowns)

        text = PRIMARY_SEPARATOR.join(primary)
        if params:
            text += (" " if text else "") + " ".join(sort_parameters(params))

        return TranslationResult(text, bool(unknowns), tuple(unknowns))

    def _apply(self, token: ClassifiedToken, codes, primary: List[str],
               params: List[str], unknowns: List[str]):
        kind = token.kind
        if kind == TokenKind.COMMAND:
            description = codes.get(token.text)
            if description:
                primary.append(description)
            else:
                primary.append(f"{UNREGISTERED_PREFIX}{token.text}")
                unknowns.append(token.text)
        elif kind in (TokenKind.PARAMETER, TokenKind.INDEXED_VARIABLE, TokenKind.SYMBOL):
            params.append(token.text)
        elif kind == TokenKind.LABEL:
            primary.append(f"{LABEL_PREFIX} {token.text}")
        elif kind == TokenKind.CONDITIONAL:
            primary.append(CONDITIONAL_TEXT)
        elif kind == TokenKind.JUMP:
            primary.append(f"{JUMP_PREFIX} {token.target}")
        else:
            # Unknown tokens are flagged and still shown with the parameters
            unknowns.append(token.text)
            params.append(token.text)

    def translate_text(self, text: str, model: Optional[str] = None) -> List[AnnotatedLine]:
        """Translate a whole program, one AnnotatedLine per input line."""
        lines = text.replace("\r\n", "\n").split("\n")
        annotated = []
        for line_number, line in enumerate(lines, 1):
            result = self.translate_line(line, model)
            annotated.append(AnnotatedLine(line_number, line, result.text,
                                           result.has_unknown, result.unknown_tokens))
        return annotated
