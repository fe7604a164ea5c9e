"""
Unit tests for text utilities.

Run: pytest tests/unit/test_text_utils.py -v
"""

from utils.text_utils import extract_until_multiple_spaces, cut_label, match_label


class TestExtractUntilMultipleSpaces:
    """Tests for extract_until_multiple_spaces()"""

    def test_cuts_at_column_gap(self):
        assert extract_until_multiple_spaces("AB 1234 CD        Trailer info") == "AB 1234 CD"

    def test_single_spaces_kept(self):
        assert extract_until_multiple_spaces("JOHN SMITH") == "JOHN SMITH"

    def test_intentional_double_space_truncates(self):
        """Known limitation: a double space inside a value ends it."""
        assert extract_until_multiple_spaces("ACME  Chemicals") == "ACME"

    def test_configurable_gap(self):
        assert extract_until_multiple_spaces("ACME  Chemicals    Next", min_gap=3) == "ACME  Chemicals"

    def test_tab_counts_as_whitespace(self):
        assert extract_until_multiple_spaces("HOYU 1\t\tnext") == "HOYU 1"

    def test_empty(self):
        assert extract_until_multiple_spaces("") == ""


class TestCutLabel:
    """Tests for cut_label()"""

    def test_case_insensitive_label(self):
        assert cut_label("Load date: 03/11/2025", "load date") == "03/11/2025"

    def test_value_keeps_casing(self):
        assert cut_label("DRIVER   John Smith", "driver") == "John Smith"

    def test_colon_removed_once(self):
        assert cut_label("Remark:: x", "remark") == ": x"

    def test_label_not_at_start(self):
        assert cut_label("Tare weight 3200 kg", "weight") is None

    def test_indented_line_does_not_match(self):
        assert cut_label("  Product: x", "product") is None

    def test_empty_value(self):
        assert cut_label("Product:", "product") == ""


class TestMatchLabel:
    """Tests for match_label()"""

    def test_first_matching_label(self):
        assert match_label("Temperature: 20 C", ("temperature", "temp")) == "20 C"

    def test_labels_tried_in_order(self):
        """A shorter label listed first shadows the longer one."""
        assert match_label("Temperature: 20 C", ("temp", "temperature")) == "erature: 20 C"

    def test_later_label_matches(self):
        assert match_label("Gewicht   24000 kg", ("weight", "gewicht")) == "24000 kg"

    def test_no_label_matches(self):
        assert match_label("Driver   John", ("truck", "vehicle")) is None

    def test_empty_labels(self):
        assert match_label("Driver   John", ()) is None
