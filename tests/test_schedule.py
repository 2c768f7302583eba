# tests/test_schedule.py

from evaluation_api.schedule import InstructorSlot, decode, dump_schedule, encode, parse_schedule

HEADER = ["Center", "Week", "Day", "Period", "Instructor1", "Instructor2"]


def test_decode_builds_nested_lookup():
    decoded = decode(
        [
            HEADER,
            ["A", "1", "Mon", "AM", "X", "Y"],
            ["A", "1", "Mon", "PM", "Z", ""],
            ["B", "2", "Sat", "AM", "Q", None],
        ]
    )

    assert decoded.record_count == 3
    assert decoded.data["A"]["1"]["Mon"]["AM"] == InstructorSlot(instructor1="X", instructor2="Y")
    assert decoded.data["A"]["1"]["Mon"]["PM"].instructor2 == ""
    assert decoded.data["B"]["2"]["Sat"]["AM"].instructor2 == ""


def test_decode_discards_header_only():
    decoded = decode([HEADER])

    assert decoded.data == {}
    assert decoded.record_count == 0


def test_decode_skips_rows_with_empty_keys_but_counts_them():
    decoded = decode(
        [
            HEADER,
            ["", "1", "Mon", "AM", "X", ""],
            ["A", "", "Mon", "AM", "X", ""],
            ["A", "1", None, "AM", "X", ""],
            ["A", "1", "Mon", "", "X", ""],
            ["A", "1", "Mon", "AM", "kept", ""],
        ]
    )

    assert decoded.record_count == 5
    assert dump_schedule(decoded.data) == {"A": {"1": {"Mon": {"AM": {"instructor1": "kept", "instructor2": ""}}}}}


def test_decode_later_row_overwrites_same_path():
    decoded = decode(
        [
            HEADER,
            ["A", "1", "Mon", "AM", "first", ""],
            ["A", "1", "Mon", "AM", "second", "other"],
        ]
    )

    assert decoded.data["A"]["1"]["Mon"]["AM"] == InstructorSlot(instructor1="second", instructor2="other")


def test_decode_pads_short_rows_and_stringifies_keys():
    decoded = decode([HEADER, ["A", 1, "Mon", "AM", "X"]])

    assert decoded.data["A"]["1"]["Mon"]["AM"] == InstructorSlot(instructor1="X", instructor2="")


def test_encode_flattens_every_leaf(sample_schedule):
    parsed = parse_schedule(sample_schedule)
    rows = encode(parsed.value)

    assert len(rows) == 5
    assert ["A", "1", "Mon", "AM", "X", ""] in rows
    assert ["A", "1", "Tue", "AM", "", "W"] in rows
    assert ["B", "1", "Sat", "AM", "Q", ""] in rows


def test_encode_defaults_missing_instructors():
    parsed = parse_schedule({"A": {"1": {"Mon": {"AM": {"instructor1": None}}}}})

    assert encode(parsed.value) == [["A", "1", "Mon", "AM", "", ""]]


def test_decode_of_encode_round_trips(sample_schedule):
    parsed = parse_schedule(sample_schedule)
    rows = encode(parsed.value)

    assert decode([HEADER] + rows).data == parsed.value


def test_parse_schedule_rejects_non_mappings():
    for payload in (None, [], "A", 5):
        result = parse_schedule(payload)
        assert not result.ok
        assert str(result.error) == "Invalid instructorsMap provided"


def test_parse_schedule_rejects_malformed_levels():
    result = parse_schedule({"A": {"1": ["Mon"]}})

    assert not result.ok
    assert str(result.error).startswith("Invalid instructorsMap provided")


def test_parse_schedule_accepts_empty_mapping():
    result = parse_schedule({})

    assert result.ok
    assert encode(result.value) == []


def test_parse_schedule_renders_numeric_instructors_as_text():
    result = parse_schedule({"A": {"1": {"Mon": {"AM": {"instructor1": 7}}}}})

    assert result.ok
    assert encode(result.value) == [["A", "1", "Mon", "AM", "7", ""]]
