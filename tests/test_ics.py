from conftest import HOUR, make_shift
from farmboy_schedule.ics import (
    fmt_value,
    ics_escape,
    render,
    shift_location,
    shift_summary,
    write_ics,
)

HEADER = [
    "BEGIN:VCALENDAR",
    "VERSION:2.0",
    "CALSCALE:GREGORIAN",
    "PRODID:-//IDK//IDK//EN",
    "X-WR-CALNAME:Farm Boy Schedule",
    "X-APPLE-CALENDAR-COLOR:#FF2968",
    "REFRESH-INTERVAL;VALUE=DURATION:PT4H",
    "X-PUBLISHED-TTL:PT4H",
]


def lines_of(ics: str):
    assert ics.endswith("\r\n")
    return ics[:-2].split("\r\n")


def test_empty_calendar_is_header_and_footer():
    assert lines_of(render([])) == HEADER + ["END:VCALENDAR"]


def test_one_hour_shift():
    shift = make_shift(1700000000000, hours=1, paid_hours=1, status=0)
    assert lines_of(render([shift])) == HEADER + [
        "BEGIN:VEVENT",
        "DTSTART:20231114T221320Z",
        "DTEND:20231114T231320Z",
        "SUMMARY:Farm Boy (1 hour shift)",
        "LOCATION:Location: Kanata. Department: Produce. Role: Clerk.",
        "DESCRIPTION:Paid hours: 1",
        "SEQUENCE:1",
        "STATUS:CONFIRMED",
        "END:VEVENT",
        "END:VCALENDAR",
    ]


def test_updated_shift_summary_suffix():
    shift = make_shift(1700000000000, hours=8, status=1)
    assert shift_summary(shift) == "Farm Boy (8 hour shift) Updated"


def test_fractional_hours_are_not_rounded():
    assert shift_summary(make_shift(0, hours=7.5)) == "Farm Boy (7.5 hour shift)"
    shift = make_shift(0, end_time=HOUR + HOUR // 3)
    assert shift_summary(shift).startswith("Farm Boy (1.33333")


def test_description_paid_hours():
    ics = render([make_shift(0, hours=8, paid_hours=7.5)])
    assert "DESCRIPTION:Paid hours: 7.5" in lines_of(ics)


def test_sequence_follows_input_order():
    shifts = [make_shift(i * 24 * HOUR) for i in range(12)]
    seqs = [ln for ln in lines_of(render(shifts)) if ln.startswith("SEQUENCE:")]
    assert seqs == [f"SEQUENCE:{i}" for i in range(1, 13)]


def test_render_is_deterministic():
    shifts = [make_shift(1700000000000), make_shift(1700100000000, status=1)]
    assert render(shifts) == render(list(shifts))
    assert lines_of(render(shifts)).count("BEGIN:VEVENT") == 2


def test_text_is_not_escaped_by_default():
    shift = make_shift(0, store="Ottawa; Main, Bank\\St")
    assert shift_location(shift) == "Location: Ottawa; Main, Bank\\St. Department: Produce. Role: Clerk."
    assert "LOCATION:Location: Ottawa; Main, Bank\\St." in render([shift])


def test_text_escaping_when_enabled():
    shift = make_shift(0, store="Ottawa; Main, Bank")
    expected = r"LOCATION:Location: Ottawa\; Main\, Bank. Department: Produce. Role: Clerk."
    assert expected in lines_of(render([shift], escape=True))
    assert ics_escape("a\nb") == "a\\nb"


def test_fmt_value():
    assert fmt_value(8) == "8"
    assert fmt_value(8.0) == "8"
    assert fmt_value(7.25) == "7.25"
    assert fmt_value(None) == "null"
    assert fmt_value("Deli") == "Deli"


def test_write_ics_keeps_crlf(tmp_path):
    path = tmp_path / "out" / "schedule.ics"
    content = render([make_shift(1700000000000)])
    write_ics(path, content)
    assert path.read_bytes() == content.encode("utf-8")
