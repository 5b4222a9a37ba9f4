"""
Line tokenizer for NC program text.

Splits one raw line into discrete tokens: comments and trailing
terminators are removed, the line is split on spaces, and glued words
such as ``G0X38.0`` are broken apart at every letter that follows a
non-letter.
"""
import re
from typing import List


class LineTokenizer:
    """Tokenizes single lines of NC program text."""

    # Non-greedy, non-nested: "(a (b) c)" is not handled as one comment
    PAREN_COMMENT_PATTERN = re.compile(r'\(.*?\)')
    TRAILING_TERMINATOR_PATTERN = re.compile(r';+$')
    LETTER_PATTERN = re.compile(r'[A-Za-z]')

    def tokenize(self, line: str) -> List[str]:
        """Tokenize a single line into an ordered list of non-empty tokens."""
        cleaned = self.clean_line(line)
        tokens = []
        for segment in cleaned.split(' '):
            if segment:
                tokens.extend(self._split_glued(segment))
        return [token for token in tokens if token]

    def clean_line(self, line: str) -> str:
        """Remove comments and trailing terminators from a line."""
        stripped = self.PAREN_COMMENT_PATTERN.sub('', line).strip()
        return self.TRAILING_TERMINATOR_PATTERN.sub('', stripped)

    def mask_comments(self, line: str) -> str:
        """Blank out comments with spaces, keeping every column where it was."""
        return self.PAREN_COMMENT_PATTERN.sub(lambda m: ' ' * len(m.group(0)), line)

    def _split_glued(self, segment: str) -> List[str]:
        """Break a space-free segment wherever a letter follows a non-letter."""
        parts = []
        current = ""
        for ch in segment:
            prev_is_letter = bool(current) and self._is_letter(current[-1])
            if self._is_letter(ch) and current and not prev_is_letter:
                parts.append(current)
                current = ch
            else:
                current += ch
        if current:
            parts.append(current)
        return parts

    def _is_letter(self, ch: str) -> bool:
        return self.LETTER_PATTERN.fullmatch(ch) is not None


_default_tokenizer = LineTokenizer()


def tokenize(line: str) -> List[str]:
    """Tokenize a line with the shared default tokenizer."""
    return _default_tokenizer.tokenize(line)
