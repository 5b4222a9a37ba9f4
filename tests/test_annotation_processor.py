import json

import pytest

from annotation_processor import AnnotationProcessor
from utils.errors import DictionaryImportError, ErrorType

PROGRAM = """O0001 (SAMPLE)
G50 S5000;
G0X38.0Z-1.0;

G999;
M08;"""


@pytest.fixture
def processor(dictionary):
    return AnnotationProcessor(dictionary)


def test_annotate_text_rows(processor):
    rows = processor.annotate_text(PROGRAM, "BE12")
    assert len(rows) == 6
    assert rows[1].text == "上限回転数設定/スケーリング解除(機種依存) S5000"
    assert rows[2].text == "早送り移動 X38.0 Z-1.0"
    assert rows[3].text == ""
    assert rows[5].text == "クーラント ON"


def test_unknown_lines_and_issues(processor):
    processor.annotate_text(PROGRAM, "BE12")
    assert processor.get_unknown_lines() == [1, 5]

    issues = processor.get_errors_for_line(5)
    assert len(issues) == 1
    assert issues[0].error_type == ErrorType.UNREGISTERED_CODE
    assert issues[0].char_start == 0 and issues[0].char_end == 4

    first = processor.get_errors_for_line(1)
    assert first[0].error_type == ErrorType.UNKNOWN_TOKEN
    assert processor.has_errors()


def test_statistics(processor):
    processor.annotate_text(PROGRAM, "BE12")
    stats = processor.get_statistics()
    assert stats['total_lines'] == 6
    assert stats['empty_lines'] == 1
    assert stats['translated_lines'] == 5
    assert stats['unknown_lines'] == 2
    assert stats['model'] == "BE12"


def test_issues_are_cleared_between_runs(processor):
    processor.annotate_text("G999", None)
    processor.annotate_text("G0", None)
    assert processor.get_all_errors() == []
    assert not processor.has_errors()


def test_reset(processor):
    processor.annotate_text(PROGRAM)
    processor.reset()
    assert processor.get_annotated_lines() == []
    assert processor.get_statistics()['total_lines'] == 0


def test_import_and_export(tmp_path, processor):
    path = tmp_path / "dict.json"
    path.write_text(json.dumps({"modelDicts": {"BE12": {"M10": "材料クランプ"}}}), encoding="utf-8")
    processor.import_dictionary(str(path))
    assert processor.annotate_text("M10", "BE12")[0].text == "材料クランプ"

    out = tmp_path / "out.json"
    processor.export_dictionary(str(out))
    document = json.loads(out.read_text(encoding="utf-8"))
    assert document["modelDicts"]["BE12"]["M10"] == "材料クランプ"


def test_failed_import_keeps_translations(processor):
    before = processor.annotate_text("M10", "BE12")[0].text
    with pytest.raises(DictionaryImportError):
        processor.import_dictionary_text('{"baseDict": {"M10": 1}}')
    assert processor.annotate_text("M10", "BE12")[0].text == before


def test_available_models(processor):
    assert "BE20-V" in processor.available_models()


def test_issue_span_skips_comments(processor):
    processor.annotate_text("(G999) G999")
    issue = processor.get_errors_for_line(1)[0]
    assert (issue.char_start, issue.char_end) == (7, 11)


def test_full_width_digits_are_unknown_tokens(processor):
    processor.annotate_text("G０")
    assert processor.get_errors_for_line(1)[0].error_type == ErrorType.UNKNOWN_TOKEN
