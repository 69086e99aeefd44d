"""Unit tests for essential_times.services.pagination: input parsing and page counters."""

import unittest

from essential_times.services.pagination import build_pagination, page_offset, parse_page_params


class TestParsePageParams(unittest.TestCase):
    """Missing, non-numeric or non-positive values fall back to defaults; limit is clamped."""

    def test_defaults_when_missing(self) -> None:
        self.assertEqual(parse_page_params(None, None), (1, 10))

    def test_numeric_strings(self) -> None:
        self.assertEqual(parse_page_params("3", "20"), (3, 20))

    def test_garbage_and_non_positive(self) -> None:
        self.assertEqual(parse_page_params("abc", "0"), (1, 10))
        self.assertEqual(parse_page_params("-2", "-5"), (1, 10))

    def test_limit_clamped(self) -> None:
        self.assertEqual(parse_page_params(1, 5000, default_limit=10, max_limit=100), (1, 100))

    def test_custom_default_limit(self) -> None:
        self.assertEqual(parse_page_params(None, None, default_limit=25), (1, 25))


class TestBuildPagination(unittest.TestCase):
    """Counters agree with ceil(count / limit) and the requested page."""

    def test_first_of_two_pages(self) -> None:
        p = build_pagination(1, 10, 11)
        self.assertEqual((p.current, p.total, p.hasNext, p.hasPrev), (1, 2, True, False))

    def test_last_page(self) -> None:
        p = build_pagination(2, 10, 11)
        self.assertEqual((p.current, p.total, p.hasNext, p.hasPrev), (2, 2, False, True))

    def test_exact_multiple(self) -> None:
        p = build_pagination(2, 10, 20)
        self.assertEqual(p.total, 2)
        self.assertFalse(p.hasNext)

    def test_page_beyond_total(self) -> None:
        for page in (3, 4, 50):
            p = build_pagination(page, 10, 11)
            self.assertFalse(p.hasNext)
            self.assertTrue(p.hasPrev)

    def test_empty(self) -> None:
        p = build_pagination(1, 10, 0)
        self.assertEqual((p.total, p.hasNext, p.hasPrev), (0, False, False))

    def test_offset(self) -> None:
        self.assertEqual(page_offset(1, 10), 0)
        self.assertEqual(page_offset(3, 10), 20)


if __name__ == "__main__":
    unittest.main()
