from __future__ import annotations


_STRINGS: dict[str, str] = {
    # validation
    "blocks_disabled": (
        "Empty line found. An empty line represents a block boundary, "
        "but blocks are currently disabled in settings"
    ),
    "double_boundary": (
        "Double empty line found. A single empty line represents a block boundary; "
        "double lines are not supported."
    ),
    "block_too_long": (
        "Block size exceeded. The block contains more than {max_lines} lines. "
        "Please split the block by adding a block separator (an empty line)."
    ),
    "missing_opening_tag": "Missing opening time tag. Every line must start with a [mm:ss.ms] time tag",
    "missing_closing_tag": (
        "Missing closing time tag. For this lyrics type every line must end with a [mm:ss.ms] time tag"
    ),
    "placeholder_present": "Placeholders should not be present in the production file.",
    "seconds_out_of_range": "Invalid time, number of seconds cannot exceed 59.",
    "time_goes_backward": "Time goes backward, previous time value is greater than current value.",
    "invalid_time_tag": (
        "Invalid time tag. Time tag must be in format [mm:ss.ms] where mm is minutes, "
        "ss is seconds and ms is milliseconds * 10"
    ),
    "invalid_tag_char": (
        "Invalid character in the time tag. Time tag must be in format [mm:ss.ms] where mm is minutes, "
        "ss is seconds and ms is milliseconds * 10"
    ),
    "stray_closing_bracket": "Invalid closing bracket usage outside the time block",
    "unclosed_tag": "Time tag is not closed properly",
    # legacy import
    "legacy_stray_close": "Unexpected '>' outside of a legacy time tag",
    "legacy_nested_open": "Unexpected '<' inside a legacy time tag",
    "legacy_bad_tag": "Invalid legacy time tag <{body}>, expected <ms> or <ms|duration>",
    "legacy_unterminated": "Legacy time tag is not closed",
    # cli
    "error_at": "Error at line {line}, column {column}: {message}",
    "valid": "No errors found",
    "errors_total": "{count} error(s) found",
    "export_failed": "Export aborted: the document does not validate",
    "cursor_at": "Cursor offset: {offset}",
}


def t(key: str, **kwargs: str | int) -> str:
    s = _STRINGS.get(key, key)
    if kwargs:
        try:
            return s.format(**kwargs)
        except KeyError:
            return s
    return s
