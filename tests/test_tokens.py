from timed_lyrics.lrc.tokens import (
    PLACEHOLDER,
    TagFault,
    TokenKind,
    match_time_mark,
    split_lines,
    strip_marks,
    tokenize,
    tokenize_line,
)


def test_tags_and_text():
    toks = list(tokenize_line("[00:01.00]hello [00:02.50]world"))
    assert [t.kind for t in toks] == [TokenKind.TIME_TAG, TokenKind.TEXT, TokenKind.TIME_TAG, TokenKind.TEXT]
    assert [t.value for t in toks if t.kind is TokenKind.TIME_TAG] == [1000, 2500]
    assert [(t.start, t.end) for t in toks] == [(0, 10), (10, 16), (16, 26), (26, 31)]
    assert toks[1].text == "hello "
    assert toks[0].content == "00:01.00"


def test_placeholder_is_one_token():
    toks = list(tokenize_line(PLACEHOLDER + "la"))
    assert [t.kind for t in toks] == [TokenKind.PLACEHOLDER, TokenKind.TEXT]
    assert (toks[0].start, toks[0].end) == (0, 7)
    assert toks[0].value is None


def test_stray_closing_bracket_does_not_stop_scan():
    toks = list(tokenize_line("a]b"))
    assert [t.kind for t in toks] == [TokenKind.TEXT, TokenKind.STRAY_CLOSE, TokenKind.TEXT]
    assert toks[1].start == 1


def test_unterminated_tag():
    toks = list(tokenize_line("[00:01"))
    assert len(toks) == 1
    assert toks[0].fault is TagFault.UNTERMINATED
    assert toks[0].fault_at == 5
    assert toks[0].end == 6


def test_invalid_char_swallows_rest_of_line():
    toks = list(tokenize_line("[00:x1]rest]"))
    assert len(toks) == 1
    assert toks[0].fault is TagFault.INVALID_CHAR
    assert toks[0].fault_at == 4
    assert toks[0].text == "[00:x1]rest]"


def test_malformed_time_is_flagged():
    toks = list(tokenize_line("[1:2]x"))
    assert toks[0].kind is TokenKind.TIME_TAG
    assert toks[0].fault is TagFault.INVALID_TIME
    assert toks[0].value is None
    assert toks[0].content == "1:2"
    assert toks[1].text == "x"


def test_scan_is_lazy_and_restartable():
    line = "[00:01.00]a[00:02.00]b"
    it = tokenize_line(line)
    assert next(it).value == 1000
    assert list(tokenize_line(line)) == list(tokenize_line(line))


def test_document_tokens_have_line_breaks():
    kinds = [t.kind for t in tokenize("[00:01.00]a\n[00:02.00]b\n")]
    assert kinds == [
        TokenKind.TIME_TAG,
        TokenKind.TEXT,
        TokenKind.LINE_BREAK,
        TokenKind.TIME_TAG,
        TokenKind.TEXT,
    ]


def test_split_lines_trailing_newline():
    assert split_lines("") == []
    assert split_lines("a\n") == ["a"]
    assert split_lines("a\n\n") == ["a", ""]
    assert split_lines("a\nb") == ["a", "b"]


def test_match_time_mark():
    assert match_time_mark("x[00:01.00]", 1) == 10
    assert match_time_mark(PLACEHOLDER + "x") == 7
    assert match_time_mark("[00:01]") is None
    assert match_time_mark("abc") is None


def test_strip_marks():
    assert strip_marks("[00:01.00]a[--:--]b") == "ab"
