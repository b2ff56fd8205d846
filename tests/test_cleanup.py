from timed_lyrics.editing.cleanup import remove_all_time_tags, remove_extra_whitespace


def test_remove_all_time_tags():
    text = "[00:01.00]Hello [--:--]world[00:02.00]\n[00:03.00]x"
    assert remove_all_time_tags(text) == "Hello world\nx"


def test_malformed_tags_are_left_alone():
    assert remove_all_time_tags("[1:2]a") == "[1:2]a"


def test_remove_extra_whitespace():
    assert remove_extra_whitespace("  a \n\tb\n") == "a\nb\n"
