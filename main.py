"""
Main entry point for the CNC line annotator.
Loads settings, sets up logging and the code dictionary, then starts the Qt event loop.
"""

import logging
import sys
from PySide6.QtWidgets import QApplication
from annotation_processor import AnnotationProcessor
from config.app_config import ConfigManager
from config.code_dictionary import CodeDictionary
from gui.main_window import MainWindow
from utils.errors import DictionaryException
from utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_processor(config):
    """Create the processor, merging the configured dictionary document if there is one."""
    dictionary = CodeDictionary.default()
    if config.dictionary_path:
        try:
            dictionary.load(config.dictionary_path)
        except DictionaryException as e:
            logger.warning("Skipping dictionary %s: %s", config.dictionary_path, e)
    return AnnotationProcessor(dictionary)


def main():
    """Initializes and runs the PySide6 application."""
    config = ConfigManager.load_config()
    setup_logging(config.log_level)

    app = QApplication(sys.argv)
    window = MainWindow(build_processor(config), config)
    window.show()
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
