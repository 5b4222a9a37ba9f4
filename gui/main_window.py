"""
The main window for the CNC line annotator.
"""
import logging
import os

from PySide6.QtWidgets import (QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
                               QPushButton, QFileDialog, QMessageBox, QTextEdit,
                               QSplitter, QLabel, QComboBox)
from PySide6.QtCore import Qt, QTimer
from .editor import Editor
from .annotation_view import AnnotationView
from annotation_processor import AnnotationProcessor
from config.app_config import AppConfig, ConfigManager
from config.code_dictionary import DEFAULT_EXPORT_FILENAME
from utils.errors import DictionaryException, SettingsException

logger = logging.getLogger(__name__)

SAMPLE_PROGRAM = """O0001 (SAMPLE)
N1 (OUTER)
G50 S5000;
G0X38.0Z-1.0;
G96 S120 M03;
M08;
G1 X10 Z-5 F0.05;
G28U0W0;
IF[#100EQ1]GOTO10;
M10;
M30;"""


class MainWindow(QMainWindow):
    def __init__(self, processor: AnnotationProcessor = None, config: AppConfig = None):
        super().__init__()
        self.setWindowTitle("CNC Line Annotator")

        self.processor = processor or AnnotationProcessor()
        self.config = config or ConfigManager.load_config()
        self.setGeometry(*self.config.window_geometry)

        # Re-translate shortly after typing stops
        self.translate_timer = QTimer()
        self.translate_timer.setSingleShot(True)
        self.translate_timer.timeout.connect(self.translate_program)

        self.setup_ui()
        self.connect_signals()

        self.editor.setPlainText(SAMPLE_PROGRAM)
        self.translate_program()

    def setup_ui(self):
        """Set up the user interface."""
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QVBoxLayout(main_widget)

        toolbar_layout = QHBoxLayout()

        self.load_button = QPushButton("プログラムを開く")
        self.translate_button = QPushButton("翻訳")
        self.clear_button = QPushButton("クリア")
        self.import_button = QPushButton("辞書インポート")
        self.export_button = QPushButton("辞書エクスポート")

        self.model_selector = QComboBox()
        models = self.processor.available_models()
        self.model_selector.addItems(models)
        self.model_selector.setCurrentText(ConfigManager.validate_model(self.config, models))

        self.status_label = QLabel("Ready")

        toolbar_layout.addWidget(self.load_button)
        toolbar_layout.addWidget(self.translate_button)
        toolbar_layout.addWidget(self.clear_button)
        toolbar_layout.addStretch()
        toolbar_layout.addWidget(QLabel("機種:"))
        toolbar_layout.addWidget(self.model_selector)
        toolbar_layout.addWidget(self.import_button)
        toolbar_layout.addWidget(self.export_button)
        toolbar_layout.addWidget(self.status_label)

        main_layout.addLayout(toolbar_layout)

        main_splitter = QSplitter(Qt.Vertical)
        main_layout.addWidget(main_splitter)

        workspace_splitter = QSplitter(Qt.Horizontal)
        self.editor = Editor()
        self.annotation_view = AnnotationView()
        workspace_splitter.addWidget(self.editor)
        workspace_splitter.addWidget(self.annotation_view)

        console_widget = QWidget()
        console_layout = QVBoxLayout(console_widget)
        console_layout.setContentsMargins(0, 0, 0, 0)
        console_layout.addWidget(QLabel("Console Output:"))
        self.console = QTextEdit()
        self.console.setReadOnly(True)
        self.console.setMaximumHeight(150)
        console_layout.addWidget(self.console)

        main_splitter.addWidget(workspace_splitter)
        main_splitter.addWidget(console_widget)

        workspace_splitter.setSizes([500, 700])
        main_splitter.setSizes([800, 150])

    def connect_signals(self):
        """Connect all signal handlers."""
        self.load_button.clicked.connect(self.load_program_file)
        self.translate_button.clicked.connect(self.translate_program)
        self.clear_button.clicked.connect(self.clear_program)
        self.import_button.clicked.connect(self.import_dictionary)
        self.export_button.clicked.connect(self.export_dictionary)
        self.model_selector.currentTextChanged.connect(self.change_model)
        self.editor.textChanged.connect(self.on_text_changed)
        self.annotation_view.lineActivated.connect(self.editor.goto_line)

    def current_model(self):
        return self.model_selector.currentText() or None

    def load_program_file(self):
        """Load an NC program from a file."""
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Open NC Program", "",
            "NC Programs (*.nc *.txt *.ngc *.gcode);;All Files (*)"
        )
        if not file_path:
            return

        try:
            with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
                content = f.read()
        except OSError as e:
            QMessageBox.critical(self, "Error", f"Could not open {file_path}:\n{e}")
            return

        self.editor.setPlainText(content)
        self.console.append(f"Loaded: {file_path}")
        self.translate_program()

    def clear_program(self):
        self.editor.clear()
        # clear() emits textChanged; keep the table empty afterwards
        self.translate_timer.stop()
        self.annotation_view.clear_lines()
        self.editor.clear_unknown_highlights()
        self.processor.reset()
        self.status_label.setText("Ready")

    def change_model(self, model):
        """Switch the override layer and re-translate."""
        self.config.default_model = model
        self.console.append(f"Switched to {model}")
        self.translate_program()

    def translate_program(self):
        """Translate the current program and update the table."""
        lines = self.processor.annotate_text(self.editor.toPlainText(), self.current_model())
        self.annotation_view.set_lines(lines)

        unknown_lines = self.processor.get_unknown_lines()
        if unknown_lines:
            self.editor.highlight_unknown_lines(unknown_lines)
            self.status_label.setText(f"未登録/不明: {len(unknown_lines)} 行")
        else:
            self.editor.clear_unknown_highlights()
            self.status_label.setText("Translation complete")

    def on_text_changed(self):
        self.translate_timer.stop()
        self.translate_timer.start(500)

    def import_dictionary(self):
        """Merge a dictionary document chosen by the user."""
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Import Dictionary", self.config.last_export_dir or "", "JSON (*.json);;All Files (*)"
        )
        if not file_path:
            return

        try:
            self.processor.import_dictionary(file_path)
        except DictionaryException as e:
            logger.warning("Dictionary import failed: %s", e)
            QMessageBox.warning(self, "Error", str(e))
            return

        self._refresh_models()
        self.config.dictionary_path = file_path
        QMessageBox.information(self, "Dictionary", "辞書を読み込みました")
        self.console.append(f"Imported dictionary: {file_path}")
        self.translate_program()

    def export_dictionary(self):
        """Write the current dictionary to a JSON file."""
        start = os.path.join(self.config.last_export_dir or "", DEFAULT_EXPORT_FILENAME)
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Export Dictionary", start, "JSON (*.json);;All Files (*)"
        )
        if not file_path:
            return

        try:
            self.processor.export_dictionary(file_path)
        except DictionaryException as e:
            QMessageBox.critical(self, "Error", str(e))
            return

        self.config.last_export_dir = os.path.dirname(file_path)
        self.console.append(f"Exported dictionary: {file_path}")

    def _refresh_models(self):
        """Repopulate the model selector after a merge may have added models."""
        current = self.model_selector.currentText()
        self.model_selector.blockSignals(True)
        self.model_selector.clear()
        self.model_selector.addItems(self.processor.available_models())
        self.model_selector.setCurrentText(current)
        self.model_selector.blockSignals(False)

    def closeEvent(self, event):
        geometry = self.geometry()
        self.config.window_geometry = [geometry.x(), geometry.y(), geometry.width(), geometry.height()]
        try:
            ConfigManager.save_config(self.config)
        except SettingsException as e:
            logger.warning("%s", e)
        super().closeEvent(event)
