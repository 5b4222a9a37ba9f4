import json
import threading

import pytest

from config.code_dictionary import CodeDictionary
from dialects.tsugami_dialect import TSUGAMI_MODELS
from utils.errors import DictionaryImportError


def test_default_dictionary_has_common_codes_and_models(dictionary):
    assert dictionary.lookup("G1") == "直線補間"
    assert dictionary.lookup("m08") == "クーラント ON"
    assert dictionary.models() == list(TSUGAMI_MODELS)


def test_keys_are_case_insensitive():
    dictionary = CodeDictionary(base={"g5": "x"})
    assert dictionary.lookup("G5") == "x"
    assert "G5" in dictionary.effective()


def test_effective_layers_model_over_base():
    dictionary = CodeDictionary(base={"M10": "base", "M11": "keep"}, models={"A": {"M10": "model"}})
    effective = dictionary.effective("A")
    assert effective["M10"] == "model"
    assert effective["M11"] == "keep"
    assert dictionary.effective("B")["M10"] == "base"
    assert dictionary.effective(None)["M10"] == "base"


def test_effective_is_read_only(dictionary):
    with pytest.raises(TypeError):
        dictionary.effective()["G1"] = "changed"


def test_merge_is_additive():
    dictionary = CodeDictionary(base={"G0": "old", "G1": "keep"}, models={"A": {"M1": "a1"}})
    dictionary.merge(base={"G0": "new", "G2": "added"}, models={"A": {"M2": "a2"}, "B": {"M3": "b3"}})

    assert dictionary.effective()["G0"] == "new"
    assert dictionary.effective()["G1"] == "keep"
    assert dictionary.effective()["G2"] == "added"
    assert dictionary.effective("A")["M1"] == "a1"
    assert dictionary.effective("A")["M2"] == "a2"
    assert dictionary.has_model("B")


def test_merge_replaces_snapshot():
    dictionary = CodeDictionary(base={"G0": "old"})
    before = dictionary.snapshot()
    dictionary.merge(base={"G0": "new"})
    assert before.base["G0"] == "old"
    assert dictionary.snapshot().base["G0"] == "new"


def test_export_document_shape(dictionary):
    document = dictionary.export_document()
    assert set(document) == {"baseDict", "modelDicts"}
    assert document["baseDict"]["G0"] == "早送り移動"
    assert document["modelDicts"]["BE12"] == {}


def test_export_json_keeps_japanese_text(dictionary):
    assert "早送り移動" in dictionary.export_json()


def test_round_trip_into_fresh_instance():
    source = CodeDictionary.default()
    source.merge(base={"G70": "仕上げサイクル"}, models={"BE12": {"M10": "材料クランプ"}, "NEW": {"M99": "x"}})

    fresh = CodeDictionary()
    fresh.import_json(source.export_json())

    for model in source.models():
        assert dict(fresh.effective(model)) == dict(source.effective(model))
    assert dict(fresh.effective()) == dict(source.effective())


def test_import_merges_document(dictionary):
    dictionary.import_json(json.dumps({"baseDict": {"g70": "仕上げ"}, "modelDicts": {"BE12": {"M10": "clamp"}}}))
    assert dictionary.lookup("G70") == "仕上げ"
    assert dictionary.lookup("M10", "BE12") == "clamp"
    assert dictionary.lookup("M10", "BS18-Ⅲ") == "チャック クランプ（機種依存）"


def test_import_with_missing_fields(dictionary):
    before = dictionary.export_document()
    dictionary.import_json("{}")
    dictionary.import_json('{"baseDict": null, "modelDicts": {}}')
    assert dictionary.export_document() == before


@pytest.mark.parametrize(
    "text",
    [
        "{not json",
        "[]",
        '"text"',
        '{"baseDict": []}',
        '{"baseDict": 0}',
        '{"baseDict": false}',
        '{"modelDicts": ""}',
        '{"baseDict": {"G0": 1}}',
        '{"modelDicts": {"BE12": "x"}}',
        '{"baseDict": {"G0": "new"}, "modelDicts": {"BE12": {"M10": 5}}}',
    ],
)
def test_malformed_import_changes_nothing(dictionary, text):
    before = dictionary.export_document()
    with pytest.raises(DictionaryImportError):
        dictionary.import_json(text)
    assert dictionary.export_document() == before


def test_import_error_carries_reason(dictionary):
    with pytest.raises(DictionaryImportError) as excinfo:
        dictionary.import_json("{not json")
    assert excinfo.value.reason
    assert excinfo.value.reason in str(excinfo.value)
    assert str(excinfo.value).startswith("JSON読み込みエラー")


def test_save_and_load(tmp_path):
    path = tmp_path / "tsugami_dict.json"
    source = CodeDictionary.default()
    source.merge(models={"BE12": {"M10": "材料クランプ"}})
    source.save(str(path))

    fresh = CodeDictionary()
    fresh.load(str(path))
    assert fresh.lookup("M10", "BE12") == "材料クランプ"


def test_load_missing_file(tmp_path, dictionary):
    with pytest.raises(DictionaryImportError):
        dictionary.load(str(tmp_path / "missing.json"))


def test_concurrent_merges_keep_every_entry():
    dictionary = CodeDictionary()

    def worker(start):
        for i in range(start, start + 50):
            dictionary.merge(base={f"G{i}": str(i)})

    threads = [threading.Thread(target=worker, args=(n * 50,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(dictionary.effective()) == 200
