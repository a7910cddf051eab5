"""
Tests for StandardsRepository and the rich text helpers.
"""

import json
import tempfile
from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from coherence_core.config import GRADES
from coherence_core.errors import DataLoadError
from coherence_core.services.data_loader import StandardsRepository, ALL_GRADES
from coherence_core.services.rich_text import transform_content, prepare_content
from coherence_core.services.search import match_codes


def write_json(directory, payload, name="data.json"):
    path = Path(directory) / name
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
    return path


class TestBundledData:
    """The packaged Kindergarten data set."""

    def setup_method(self):
        self.repo = StandardsRepository()

    def test_counts(self):
        assert len(self.repo.standards) == 23
        assert len(self.repo.standards_for_grade("Kindergarten")) == 23

    def test_grade_choices(self):
        grades = self.repo.grades()
        assert grades[:len(GRADES)] == list(GRADES)
        assert grades[-1] == ALL_GRADES

    def test_all_grades(self):
        assert len(self.repo.standards_for_grade(ALL_GRADES)) == 23
        assert self.repo.standards_for_grade("Grade 2") == []

    def test_code_search(self):
        matches = match_codes("K.CC", self.repo.standards)
        assert matches == frozenset(f"K.CC.{i}" for i in range(1, 8))

    def test_dependencies_parsed(self):
        s = self.repo.find_standard("K.CC.4")
        assert s.dependencies == ("K.CC.1", "K.CC.2", "K.CC.3")

    def test_find_cluster(self):
        s = self.repo.find_standard("K.G.6")
        cluster = self.repo.find_cluster(s)
        assert cluster is not None
        assert cluster.cluster == "Analyze, compare, create, and compose shapes."
        assert "Sides" in cluster.terminology

    def test_find_missing_standard(self):
        assert self.repo.find_standard("Z.9") is None


class TestLoadErrors:
    """Bad files raise DataLoadError."""

    def test_missing_file(self):
        repo = StandardsRepository("/nonexistent/standards.json")
        with pytest.raises(DataLoadError, match="file not found"):
            repo.load()

    def test_invalid_json(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            repo = StandardsRepository(write_json(tmpdir, "{not json"))
            with pytest.raises(DataLoadError, match="invalid JSON"):
                repo.load()

    def test_missing_standards_list(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            repo = StandardsRepository(write_json(tmpdir, {"clusters": []}))
            with pytest.raises(DataLoadError):
                repo.load()

    def test_record_without_code(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            repo = StandardsRepository(write_json(tmpdir, {"standards": [{"Description": "x"}]}))
            with pytest.raises(DataLoadError, match="standard #0"):
                repo.load()

    def test_error_carries_source(self):
        repo = StandardsRepository("/nonexistent/standards.json")
        with pytest.raises(DataLoadError) as exc_info:
            repo.load()
        assert exc_info.value.source.endswith("standards.json")

    def test_extra_grades_listed(self):
        payload = {"standards": [
            {"Code": "3.OA.1", "Description": "d", "Grade": "Grade 3"},
            {"Code": "3.OA.1", "Description": "later", "Grade": "Grade 3"},
        ]}
        with tempfile.TemporaryDirectory() as tmpdir:
            repo = StandardsRepository(write_json(tmpdir, payload))
            assert repo.grades() == list(GRADES) + ["Grade 3", ALL_GRADES]
            assert repo.find_standard("3.OA.1").description == "later"
            assert repo.find_cluster(repo.standards[0]) is None


class TestRichText:
    """Image rewriting and math markup."""

    def test_image_paths_rewritten(self):
        html = '<img src="images/k_cc_1.png"> <img src=\'images/a/b.jpg\'>'
        out = transform_content(html, "https://cdn.example.org/img")
        assert 'src="https://cdn.example.org/img/k_cc_1.png"' in out
        assert 'src="https://cdn.example.org/img/a/b.jpg"' in out

    def test_absolute_images_untouched(self):
        html = '<img src="https://elsewhere/x.png">'
        assert transform_content(html, "https://cdn/") == html

    def test_empty(self):
        assert transform_content("", "https://cdn/") == ""
        assert prepare_content(None, "https://cdn/") == ""

    def test_inline_and_display_math(self):
        out = prepare_content(r'Add \(3 + 2\) then \[x = "5"\]', "https://cdn/")
        assert '<span class="math-tex" data-formula="3 + 2">3 + 2</span>' in out
        assert '<div class="math-tex" data-formula="x = &quot;5&quot;">' in out
