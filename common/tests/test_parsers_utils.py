# common/tests/test_parsers_utils.py
from common.parsers_utils import parse_match_ids_from_rows


def test_single_id_keys_in_first_seen_order():
    rows = [{"match_id": 30}, {"matchId": "10"}, {"match_id": 30}, {"match_id": 20}]

    assert parse_match_ids_from_rows(rows) == [30, 10, 20]


def test_csv_lists_and_nested_rows():
    rows = [
        {"match_ids": "5, 6,7"},
        {"matches": [8, "9", {"match_id": 10}]},
    ]

    assert parse_match_ids_from_rows(rows) == [5, 6, 7, 10, 8, 9]


def test_invalid_values_are_ignored():
    rows = [{"match_id": True}, {"match_id": -4}, {"match_id": "abc"}, {"match_id": 0}, "not-a-row"]

    assert parse_match_ids_from_rows(rows) == []
