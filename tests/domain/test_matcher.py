"""Unit tests for candidate matching."""

from stockout.domain.model.catalog import CatalogSnapshot
from stockout.domain.service.matcher import MAX_CANDIDATES, match
from tests.fakes import BOLT, NUT, make_item


def _catalog(count: int) -> CatalogSnapshot:
    return CatalogSnapshot(
        make_item(i, f"P{i:03d}", f"Part {i}") for i in range(1, count + 1)
    )


class TestMatchBasics:

    def test_empty_fragment_gives_nothing(self):
        assert match(CatalogSnapshot([BOLT, NUT]), "") == ()

    def test_blank_fragment_gives_nothing(self):
        assert match(CatalogSnapshot([BOLT, NUT]), "   ") == ()

    def test_matches_code_or_name_in_catalog_order(self):
        assert match(CatalogSnapshot([BOLT, NUT]), "a") == (BOLT, NUT)

    def test_matches_name_case_insensitively(self):
        assert match(CatalogSnapshot([BOLT, NUT]), "bOLt") == (BOLT,)

    def test_matches_unanchored_substring_of_code(self):
        assert match(CatalogSnapshot([BOLT, NUT]), "200") == (NUT,)

    def test_no_match(self):
        assert match(CatalogSnapshot([BOLT, NUT]), "washer") == ()

    def test_empty_catalog(self):
        assert match(CatalogSnapshot.empty(), "a") == ()


class TestMatchBound:

    def test_truncated_to_five(self):
        result = match(_catalog(12), "part")
        assert len(result) == MAX_CANDIDATES == 5
        assert [item.id for item in result] == [1, 2, 3, 4, 5]

    def test_every_result_contains_fragment(self):
        snapshot = _catalog(30)
        for fragment in ("p0", "1", "ART 2", "t 3"):
            result = match(snapshot, fragment)
            assert len(result) <= 5
            needle = fragment.casefold()
            for item in result:
                assert needle in item.code.casefold() or needle in item.name.casefold()

    def test_custom_limit(self):
        assert len(match(_catalog(10), "part", limit=2)) == 2

    def test_pure(self):
        snapshot = _catalog(8)
        assert match(snapshot, "p00") == match(snapshot, "p00")


class TestMatchWhitespace:

    def test_surrounding_whitespace_is_part_of_fragment(self):
        bolt_m6 = make_item(3, "B600", "Bolt M6")
        nut = make_item(4, "B700", "Nut")
        assert match(CatalogSnapshot([bolt_m6, nut]), "t ") == (bolt_m6,)

    def test_inner_space_matches_multiword_name(self):
        bolt_m6 = make_item(3, "B600", "Bolt M6")
        assert match(CatalogSnapshot([bolt_m6, NUT]), "bolt m") == (bolt_m6,)
