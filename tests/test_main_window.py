import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PySide6.QtWidgets")

from annotation_processor import AnnotationProcessor
from config.app_config import AppConfig
from gui.main_window import MainWindow


@pytest.fixture
def window(dictionary):
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    win = MainWindow(AnnotationProcessor(dictionary), AppConfig())
    yield win
    win.deleteLater()
    app.processEvents()


def test_sample_program_is_translated(window):
    assert window.annotation_view.rowCount() > 0


def test_clear_leaves_table_empty(window):
    window.clear_program()
    assert not window.translate_timer.isActive()
    assert window.annotation_view.rowCount() == 0
    assert window.editor.toPlainText() == ""
