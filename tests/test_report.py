from timed_lyrics.config import PolicyConfig
from timed_lyrics.lrc.model import FormatProfile
from timed_lyrics.lrc.validate import validate
from timed_lyrics.render.report import PLAIN, ReportRenderer, Theme


def test_plain_report_points_at_error():
    text = "[00:01.00]a]b\n"
    errors = validate(text, FormatProfile.LRC1, PolicyConfig())
    out = ReportRenderer(theme=PLAIN).render(text, errors).splitlines()
    assert out[0] == "1:11 [structural] Invalid closing bracket usage outside the time block"
    assert out[1] == "    [00:01.00]a]b"
    assert out[2] == "    " + " " * 11 + "^"
    assert out[3] == "1 error(s) found"


def test_no_errors():
    assert ReportRenderer(theme=PLAIN).render("[00:01.00]a", []) == "No errors found"


def test_colored_theme_and_no_source():
    text = "oops"
    errors = validate(text, FormatProfile.LRC1, PolicyConfig())
    out = ReportRenderer(theme=Theme(), show_source=False).render(text, errors)
    assert "\x1b[" in out
    assert "oops" not in out
