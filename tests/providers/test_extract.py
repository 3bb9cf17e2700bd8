from __future__ import annotations

import math

from tenantscreening.providers import count_occurrences, find_value


def test_find_value_coerces_digit_strings():
    assert find_value({"score": "720"}, "score") == 720
    assert find_value({"score": "3.5"}, "score") == 3.5


def test_find_value_skips_non_numeric_and_keeps_searching():
    assert find_value({"score": "N/A"}, "score") is None
    document = {"score": "N/A", "detail": {"score": 701}}
    assert find_value(document, "score") == 701


def test_find_value_checks_keys_in_caller_order_before_children():
    document = {
        "nested": {"vantageScore": 640},
        "creditScore": 700,
        "vantageScore": 710,
    }
    assert find_value(document, "vantageScore", "creditScore") == 710
    assert find_value(document, "creditScore", "vantageScore") == 700


def test_find_value_descends_depth_first_in_document_order():
    document = {
        "reports": [
            {"meta": {"id": "x"}},
            {"scoreModels": [{"score": {"value": 1}}, {"scoreValue": 655}]},
            {"scoreValue": 800},
        ]
    }
    assert find_value(document, "scoreValue") == 655


def test_find_value_ignores_nulls_bools_and_nan():
    assert find_value({"score": None, "inner": {"score": 12}}, "score") == 12
    assert find_value({"score": True}, "score") is None
    assert find_value({"score": math.nan}, "score") is None


def test_find_value_returns_none_for_scalars_and_misses():
    assert find_value(None, "score") is None
    assert find_value("720", "score") is None
    assert find_value({"other": 1}, "score") is None


def test_count_occurrences_sums_lists_numbers_and_flags():
    assert count_occurrences({"evictions": [{}, {}]}, "evictions", "count") == 2
    assert count_occurrences({"evictionCount": 3}, "evictionCount") == 3
    assert count_occurrences({"nothing": []}, "evictions") == 0


def test_count_occurrences_walks_the_whole_document():
    document = {
        "results": [
            {"offense": {"code": "A"}},
            {"offense": {"code": "B"}, "offenses": [1, 2]},
            {"conviction": None},
            {"conviction": False},
            {"conviction": True},
        ]
    }
    assert count_occurrences(document, "offense", "offenses", "conviction") == 5


def test_count_occurrences_counts_nested_matches_inside_matches():
    document = {"bankruptcies": [{"bankruptcy": "chapter 7"}]}
    assert count_occurrences(document, "bankruptcy", "bankruptcies") == 2


def test_non_finite_values_are_not_numbers():
    assert find_value({"score": math.inf, "inner": {"score": 7}}, "score") == 7
    assert find_value({"score": "1" * 400 + ".5"}, "score") is None
    assert count_occurrences({"offenseCount": math.inf, "rows": [{"offenseCount": 2}]}, "offenseCount") == 2
