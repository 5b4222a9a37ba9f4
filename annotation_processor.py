"""
Main annotation processor interface.
This is the primary entry point for translating NC program text.
"""
import logging
from typing import Any, Dict, List, Optional

from config.code_dictionary import CodeDictionary
from core.classifier import TokenKind, classify_token
from core.translator import AnnotatedLine, LineTranslator
from utils.errors import AnnotationIssue, ErrorCollector, ErrorSeverity, ErrorType

logger = logging.getLogger(__name__)


class AnnotationProcessor:
    """
    Main interface for program annotation.
    Provides a simple API for the editor window and for scripts.
    """

    def __init__(self, dictionary: Optional[CodeDictionary] = None):
        self.dictionary = dictionary if dictionary is not None else CodeDictionary.default()
        self.translator = LineTranslator(self.dictionary)
        self.error_collector = ErrorCollector()
        self._annotated: List[AnnotatedLine] = []
        self._last_model: Optional[str] = None

    def annotate_text(self, text: str, model: Optional[str] = None) -> List[AnnotatedLine]:
        """
        Translate program text line by line.

        Args:
            text: Raw program text, LF or CRLF separated
            model: Model identifier selecting the override layer

        Returns:
            One AnnotatedLine per input line, in input order
        """
        self.error_collector.clear()
        if model is not None and not self.dictionary.has_model(model):
            logger.warning("Unknown model %r, using common descriptions only", model)

        self._annotated = self.translator.translate_text(text, model)
        self._last_model = model

        for line in self._annotated:
            for token in line.unknown_tokens:
                self._record_unknown(line, token)

        logger.debug("Annotated %d lines (%d with unknown tokens)",
                     len(self._annotated), len(self.get_unknown_lines()))
        return list(self._annotated)

    def _record_unknown(self, line: AnnotatedLine, token: str):
        # Search outside comments so "(G999) G999" points at the second one
        searchable = self.translator.tokenizer.mask_comments(line.source).upper()
        start = searchable.find(token)
        if start == -1:
            start, end = 0, len(line.source)
        else:
            end = start + len(token)

        if classify_token(token).kind == TokenKind.COMMAND:
            self.error_collector.add_error(line.line_number, start, end,
                                           f"Unregistered code: {token}",
                                           ErrorType.UNREGISTERED_CODE)
        else:
            self.error_collector.add_error(line.line_number, start, end,
                                           f"Unrecognized token: {token}",
                                           ErrorType.UNKNOWN_TOKEN)

    # Error handling methods for editor integration

    def get_errors_for_line(self, line_number: int) -> List[AnnotationIssue]:
        """Get all issues for a specific line number."""
        return self.error_collector.get_errors_for_line(line_number)

    def get_all_errors(self) -> List[AnnotationIssue]:
        """Get all issues from the last annotation."""
        return self.error_collector.get_all_errors()

    def has_errors(self) -> bool:
        return self.error_collector.has_errors()

    def get_unknown_lines(self) -> List[int]:
        """Line numbers that contain at least one unknown token."""
        return [line.line_number for line in self._annotated if line.has_unknown]

    def get_annotated_lines(self) -> List[AnnotatedLine]:
        return list(self._annotated)

    def get_statistics(self) -> Dict[str, Any]:
        """Get line counts for the last annotation."""
        total = len(self._annotated)
        empty = sum(1 for line in self._annotated if not line.text)
        unknown = len(self.get_unknown_lines())
        return {
            'total_lines': total,
            'translated_lines': total - empty,
            'empty_lines': empty,
            'unknown_lines': unknown,
            'issues': len(self.error_collector.errors),
            'warnings': sum(1 for e in self.error_collector.errors
                            if e.severity == ErrorSeverity.WARNING),
            'model': self._last_model,
        }

    # Dictionary methods

    def available_models(self) -> List[str]:
        return self.dictionary.models()

    def export_dictionary(self, filepath: str):
        """Write the current dictionary document to a file."""
        self.dictionary.save(filepath)

    def import_dictionary(self, filepath: str):
        """
        Merge a dictionary document from a file.
        Raises DictionaryImportError without changing anything if the file is malformed.
        """
        self.dictionary.load(filepath)

    def import_dictionary_text(self, text: str):
        self.dictionary.import_json(text)

    def reset(self):
        """Reset processor to initial state."""
        self.error_collector.clear()
        self._annotated = []
        self._last_model = None


# Example usage
if __name__ == "__main__":
    processor = AnnotationProcessor()

    sample_program = """O0001 (SAMPLE)
G50 S5000;
G0X38.0Z-1.0 T0101;
G96 S120 M03;
G1 X10 Z-5 F0.05;
G999;
M30;"""

    for row in processor.annotate_text(sample_program, "BE12"):
        marker = "!" if row.has_unknown else " "
        print(f"{marker} {row.source:<24} {row.text}")

    print(processor.get_statistics())
