"""
Table showing each program line next to its translation.
"""
from PySide6.QtWidgets import QTableWidget, QTableWidgetItem, QHeaderView, QAbstractItemView
from PySide6.QtGui import QColor, QFont
from PySide6.QtCore import Signal


class AnnotationView(QTableWidget):
    """Two-column view: source line and translated gloss. Unknown rows are tinted."""

    lineActivated = Signal(int)

    UNKNOWN_BACKGROUND = QColor('#ffe3e3')
    UNKNOWN_FOREGROUND = QColor('#c92a2a')

    def __init__(self, parent=None):
        super().__init__(0, 2, parent)
        self.setHorizontalHeaderLabels(["コード", "翻訳"])
        self.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeToContents)
        self.horizontalHeader().setStretchLastSection(True)

        font = QFont("Consolas", 10)
        font.setStyleHint(QFont.StyleHint.Monospace)
        self.setFont(font)

        self.cellDoubleClicked.connect(lambda row, _column: self.lineActivated.emit(row + 1))

    def set_lines(self, lines):
        """Fill the table from a list of AnnotatedLine rows, in order."""
        self.setRowCount(len(lines))
        for row, line in enumerate(lines):
            code_item = QTableWidgetItem(line.source)
            text_item = QTableWidgetItem(line.text)
            if line.has_unknown:
                text_item.setBackground(self.UNKNOWN_BACKGROUND)
                text_item.setForeground(self.UNKNOWN_FOREGROUND)
                text_item.setToolTip(", ".join(line.unknown_tokens))
            self.setItem(row, 0, code_item)
            self.setItem(row, 1, text_item)

    def clear_lines(self):
        self.setRowCount(0)
