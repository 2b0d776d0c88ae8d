from fleetops.imports.parser import ParsedRow, parse_rows, split_fields


def test_split_on_mixed_delimiters() -> None:
    assert split_fields("仓库A\t详细地址X，116.4, 39.9") == ("仓库A", "详细地址X", "116.4", "39.9")


def test_run_of_delimiters_is_single_split_point() -> None:
    assert split_fields("A厂,,\t，B厂,12.5") == ("A厂", "B厂", "12.5")


def test_leading_delimiter_keeps_first_field_absent() -> None:
    assert split_fields(",C厂,8") == ("", "C厂", "8")
    assert split_fields("\tC厂\t8") == ("", "C厂", "8")
    assert split_fields("，C厂，8") == ("", "C厂", "8")
    assert split_fields("  \tC厂\t8\r") == ("", "C厂", "8")


def test_pasted_spreadsheet_row_with_empty_first_cell() -> None:
    rows = parse_rows("A厂\tB厂\t12.5\n\tC厂\t8\n")

    assert [row.fields for row in rows] == [("A厂", "B厂", "12.5"), ("", "C厂", "8")]


def test_trailing_delimiter_yields_shorter_tuple() -> None:
    assert split_fields("仓库B,") == ("仓库B",)
    assert split_fields("仓库B, ,  ") == ("仓库B",)


def test_tokens_are_trimmed() -> None:
    assert split_fields("  张三 ,  13800000000  ") == ("张三", "13800000000")


def test_blank_lines_skipped_and_line_numbers_keep_original_positions() -> None:
    rows = parse_rows("\n仓库A\n   \n\t\n仓库B\n")

    assert rows == [
        ParsedRow(line=2, fields=("仓库A",)),
        ParsedRow(line=5, fields=("仓库B",)),
    ]


def test_windows_line_endings() -> None:
    rows = parse_rows("A厂,B厂,1\r\nC厂,D厂,2\r\n")

    assert [row.fields for row in rows] == [("A厂", "B厂", "1"), ("C厂", "D厂", "2")]
    assert [row.line for row in rows] == [1, 2]


def test_empty_input_has_no_rows() -> None:
    assert parse_rows("") == []
    assert parse_rows("   \n \n") == []


def test_parsing_is_idempotent() -> None:
    text = "仓库A, 详细地址X, 116.4, 39.9\n\n仓库B\n,C厂,8"

    assert parse_rows(text) == parse_rows(text)


def test_get_returns_empty_string_past_the_end() -> None:
    row = ParsedRow(line=1, fields=("仓库B",))

    assert row.get(0) == "仓库B"
    assert row.get(3) == ""
