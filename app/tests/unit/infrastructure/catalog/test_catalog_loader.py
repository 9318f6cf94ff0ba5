"""
Tests for the YAML question catalog loader.
"""

import pytest

from app.domain.enums.assessment import AnswerType
from app.domain.exceptions import ConfigurationError
from app.infrastructure.catalog import DEFAULT_CATALOG_PATH, load_catalog

VALID_CATALOG = """
questions:
  - id: q-1
    text: How would you rate your mood today?
    type: scale
    category: emotional
    sub_category: mood
    conditions: [depression]
  - id: q-2
    text: Which of these apply to you?
    type: multiSelect
    category: behavioral
    options: [Restlessness, Irritability]
    conditions: [anxiety]
"""


def write_catalog(tmp_path, content: str):
    path = tmp_path / "questions.yaml"
    path.write_text(content, encoding="utf-8")
    return path


class TestBundledCatalog:
    def test_loads(self, bundled_catalog):
        assert len(bundled_catalog) == 17
        assert bundled_catalog.ordered()[0].id == "dep-1"

    def test_default_path_exists(self):
        assert DEFAULT_CATALOG_PATH.is_file()

    def test_unscored_question_is_kept(self, bundled_catalog):
        assert not bundled_catalog.get("cop-1").scored

    def test_covers_core_conditions(self, bundled_catalog):
        assert {"depression", "anxiety", "bipolar", "adhd"} <= set(bundled_catalog.conditions())


class TestLoadCatalog:
    def test_custom_file(self, tmp_path):
        catalog = load_catalog(write_catalog(tmp_path, VALID_CATALOG))

        assert [q.id for q in catalog] == ["q-1", "q-2"]
        assert catalog.get("q-2").answer_type is AnswerType.MULTI_SELECT
        assert catalog.get("q-2").options == ("Restlessness", "Irritability")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_catalog(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not valid YAML"):
            load_catalog(write_catalog(tmp_path, "questions: [unclosed"))

    @pytest.mark.parametrize("content", ["[]", "questions: nope", "other: []"])
    def test_missing_question_list(self, tmp_path, content):
        with pytest.raises(ConfigurationError, match="expected a 'questions' list"):
            load_catalog(write_catalog(tmp_path, content))

    def test_empty_question_list(self, tmp_path):
        with pytest.raises(ConfigurationError, match="empty"):
            load_catalog(write_catalog(tmp_path, "questions: []"))

    @pytest.mark.parametrize(
        "entry",
        [
            "- just a string",
            "- {text: No id, type: scale, category: emotional, conditions: [depression]}",
            "- {id: x, text: Bad type, type: slider, category: emotional, conditions: [depression]}",
            "- {id: x, text: Bad options, type: multiSelect, category: emotional, options: nope}",
            "- {id: x, text: Bad flag, type: scale, category: emotional, scored: maybe}",
            "- {id: x, text: No options, type: singleSelect, category: emotional, conditions: [adhd]}",
        ],
    )
    def test_invalid_entry(self, tmp_path, entry):
        with pytest.raises(ConfigurationError):
            load_catalog(write_catalog(tmp_path, f"questions:\n  {entry}\n"))

    def test_duplicate_ids(self, tmp_path):
        content = VALID_CATALOG.replace("id: q-2", "id: q-1")

        with pytest.raises(ConfigurationError, match="Duplicate"):
            load_catalog(write_catalog(tmp_path, content))
