"""
Program editor widget with NC syntax highlighting, line numbers and dark mode.
"""
from PySide6.QtWidgets import QPlainTextEdit, QWidget, QTextEdit
from PySide6.QtGui import (QColor, QTextFormat, QPainter, QFont, QSyntaxHighlighter,
                           QTextCharFormat, QPalette)
from PySide6.QtCore import Qt, QRect, QSize
import re


def _char_format(color, bold=False, italic=False):
    fmt = QTextCharFormat()
    fmt.setForeground(QColor(color))
    if bold:
        fmt.setFontWeight(QFont.Weight.Bold)
    fmt.setFontItalic(italic)
    return fmt


class NCHighlighter(QSyntaxHighlighter):
    """Highlights words of an NC program using the same word shapes the translator recognizes."""

    COMMENT_PATTERN = re.compile(r'\(.*?\)')
    WORD_PATTERN = re.compile(
        r'(?P<jump>GOTO\w*)|(?P<cond>\bIF\b)|(?P<code>[GM]\d+)|(?P<label>N\w+)'
        r'|(?P<var>#\d+)|(?P<param>[XYZUWIJKRSPFQ][-+]?[\d.]+)',
        re.IGNORECASE,
    )

    def __init__(self, document):
        super().__init__(document)

        self.formats = {
            'code': _char_format('#74c0fc', bold=True),   # Light blue for G/M codes
            'param': _char_format('#ffd43b'),              # Yellow for axis and modal values
            'label': _char_format('#adb5bd'),              # Light gray for N labels
            'cond': _char_format('#20c997', bold=True),    # Teal for IF
            'jump': _char_format('#20c997', bold=True),    # Teal for GOTO
            'var': _char_format('#ffa500'),                # Orange for #variables
        }
        self.comment_format = _char_format('#6c757d', italic=True)
        self.terminator_format = _char_format('#6c757d')

    def highlightBlock(self, text):
        """Apply syntax highlighting to a block of text."""
        for match in self.WORD_PATTERN.finditer(text):
            self.setFormat(match.start(), match.end() - match.start(),
                           self.formats[match.lastgroup])

        # Comments win over anything highlighted inside them
        for match in self.COMMENT_PATTERN.finditer(text):
            self.setFormat(match.start(), match.end() - match.start(), self.comment_format)

        stripped = text.rstrip()
        terminators = len(stripped) - len(stripped.rstrip(';'))
        if terminators:
            self.setFormat(len(stripped) - terminators, terminators, self.terminator_format)


class LineNumberArea(QWidget):
    """Line number area widget for the editor."""

    def __init__(self, editor):
        super().__init__(editor)
        self.editor = editor

    def sizeHint(self):
        return QSize(self.editor.lineNumberAreaWidth(), 0)

    def paintEvent(self, event):
        self.editor.lineNumberAreaPaintEvent(event)


class Editor(QPlainTextEdit):
    """NC program editor with syntax highlighting and dark mode."""

    def __init__(self, parent=None):
        super().__init__(parent)

        self.setup_dark_mode()

        self.lineNumberArea = LineNumberArea(self)

        # Lines holding unknown tokens
        self.unknown_lines = set()

        self.setup_editor()

        self.highlighter = NCHighlighter(self.document())

        self.blockCountChanged.connect(self.updateLineNumberAreaWidth)
        self.updateRequest.connect(self.updateLineNumberArea)
        self.cursorPositionChanged.connect(self.update_extra_selections)

    def setup_dark_mode(self):
        """Configure dark mode appearance."""
        palette = self.palette()
        palette.setColor(QPalette.Base, QColor('#2b2b2b'))
        palette.setColor(QPalette.Text, QColor('#f8f8f2'))
        palette.setColor(QPalette.Highlight, QColor('#44475a'))
        palette.setColor(QPalette.HighlightedText, QColor('#f8f8f2'))
        self.setPalette(palette)

    def setup_editor(self):
        """Configure the editor appearance and behavior."""
        self.setLineWrapMode(QPlainTextEdit.NoWrap)

        font = QFont("Consolas", 11)
        if not font.exactMatch():
            font = QFont("Courier New", 11)
        font.setStyleHint(QFont.StyleHint.Monospace)
        font.setFixedPitch(True)
        self.setFont(font)

        self.updateLineNumberAreaWidth(0)

    def highlight_unknown_lines(self, lines):
        """Mark lines that contain unknown tokens."""
        self.unknown_lines = set(lines) if lines else set()
        self.update_extra_selections()
        self.lineNumberArea.update()

    def clear_unknown_highlights(self):
        self.unknown_lines.clear()
        self.update_extra_selections()
        self.lineNumberArea.update()

    def update_extra_selections(self):
        """Update line highlighting (current line and unknown lines)."""
        selections = []

        if not self.isReadOnly():
            selection = QTextEdit.ExtraSelection()
            selection.format.setBackground(QColor('#44475a'))
            selection.format.setProperty(QTextFormat.FullWidthSelection, True)
            selection.cursor = self.textCursor()
            selection.cursor.clearSelection()
            selections.append(selection)

        for line_num in self.unknown_lines:
            block = self.document().findBlockByNumber(line_num - 1)
            if line_num > 0 and block.isValid():
                selection = QTextEdit.ExtraSelection()
                selection.format.setBackground(QColor('#660000'))  # Dark red
                selection.format.setProperty(QTextFormat.FullWidthSelection, True)
                selection.cursor = self.textCursor()
                selection.cursor.setPosition(block.position())
                selection.cursor.clearSelection()
                selections.append(selection)

        self.setExtraSelections(selections)

    # Line number area methods
    def lineNumberAreaWidth(self):
        """Calculate the width needed for line numbers."""
        digits = len(str(max(1, self.blockCount())))
        return 3 + self.fontMetrics().horizontalAdvance('9') * digits

    def updateLineNumberAreaWidth(self, _):
        self.setViewportMargins(self.lineNumberAreaWidth(), 0, 0, 0)

    def updateLineNumberArea(self, rect, dy):
        """Update the line number area when scrolling."""
        if dy:
            self.lineNumberArea.scroll(0, dy)
        else:
            self.lineNumberArea.update(0, rect.y(), self.lineNumberArea.width(), rect.height())

        if rect.contains(self.viewport().rect()):
            self.updateLineNumberAreaWidth(0)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        cr = self.contentsRect()
        self.lineNumberArea.setGeometry(QRect(cr.left(), cr.top(), self.lineNumberAreaWidth(), cr.height()))

    def lineNumberAreaPaintEvent(self, event):
        """Paint the line number area."""
        painter = QPainter(self.lineNumberArea)
        painter.fillRect(event.rect(), QColor('#383838'))

        block = self.firstVisibleBlock()
        blockNumber = block.blockNumber()
        top = self.blockBoundingGeometry(block).translated(self.contentOffset()).top()
        bottom = top + self.blockBoundingRect(block).height()

        while block.isValid() and top <= event.rect().bottom():
            if block.isVisible() and bottom >= event.rect().top():
                if (blockNumber + 1) in self.unknown_lines:
                    painter.setPen(QColor('#ff6b6b'))
                else:
                    painter.setPen(QColor('#6c757d'))

                painter.drawText(0, int(top), self.lineNumberArea.width() - 3,
                                 self.fontMetrics().height(), Qt.AlignRight, str(blockNumber + 1))

            block = block.next()
            top = bottom
            bottom = top + self.blockBoundingRect(block).height()
            blockNumber += 1

    def goto_line(self, line_number):
        """Jump to a specific line number."""
        if line_number > 0:
            block = self.document().findBlockByNumber(line_number - 1)
            if block.isValid():
                cursor = self.textCursor()
                cursor.setPosition(block.position())
                self.setTextCursor(cursor)
                self.centerCursor()
