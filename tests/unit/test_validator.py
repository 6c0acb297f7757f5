# ============================================================
# tests/unit/test_validator.py - Spec validation tests
# ============================================================
# pytest -v tests/unit/test_validator.py
# ============================================================

from bomgraph.classification import validate_specs


class TestRequiredFields:
    """Missing bore/stroke/series are errors"""

    def test_all_missing(self):
        result = validate_specs({})
        assert not result.valid
        assert result.errors == [
            "Bore size is required",
            "Stroke length is required",
            "Series is required",
        ]

    def test_empty_string_counts_as_missing(self):
        result = validate_specs({"bore": "", "stroke": "100", "series": "10"})
        assert result.errors == ["Bore size is required"]


class TestFormat:
    """Non-numeric dimensions are errors"""

    def test_invalid_bore(self):
        result = validate_specs({"bore": "6x3", "stroke": "100", "series": "10"})
        assert not result.valid
        assert result.errors == ["Invalid bore size format: 6x3"]

    def test_invalid_stroke(self):
        result = validate_specs({"bore": "63", "stroke": "long", "series": "10"})
        assert result.errors == ["Invalid stroke length format: long"]


class TestWarnings:
    """Out-of-range or non-standard values only warn"""

    def test_unknown_series(self):
        result = validate_specs({"bore": "50", "stroke": "200", "series": "99"})
        assert result.valid
        assert result.errors == []
        assert result.warnings == ["Unknown series: 99. Standard series are 10, 11, 12, 13"]

    def test_bore_out_of_range(self):
        result = validate_specs({"bore": "600", "stroke": "200", "series": "10"})
        assert result.valid
        assert result.warnings == ["Bore size 600mm is outside typical range (10-500mm)"]

    def test_stroke_out_of_range(self):
        result = validate_specs({"bore": "50", "stroke": "5", "series": "10"})
        assert result.warnings == ["Stroke length 5mm is outside typical range (10-10000mm)"]

    def test_range_bounds_inclusive(self):
        result = validate_specs({"bore": "10", "stroke": "10000", "series": "10"})
        assert result.warnings == []

    def test_unknown_rod_end(self):
        result = validate_specs({"bore": "50", "stroke": "200", "series": "10", "rodEndType": "Q"})
        assert result.valid
        assert result.warnings == ["Unknown rod end type: Q. Standard types are Y, I, E, P"]

    def test_clean_spec(self):
        result = validate_specs({"bore": "63", "stroke": "150", "series": "11", "rodEndType": "E"})
        assert result.to_dict() == {"valid": True, "errors": [], "warnings": []}

    def test_errors_and_warnings_together(self):
        result = validate_specs({"bore": "abc", "stroke": "20000", "series": "14"})
        assert not result.valid
        assert result.errors == ["Invalid bore size format: abc"]
        assert len(result.warnings) == 2
