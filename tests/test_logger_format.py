import io
import re
import sys

from tallylog import Level, new_logger
from tallylog.logger import UNKNOWN_FILE, sprint, sprintf


def make_logger(**kw):
    buf = io.StringIO()
    log = new_logger(kw.get("stderr", False), kw.get("colorize", False), kw.get("timestamp", False), buf)
    return log, buf


def test_infof_example_line():
    log, buf = make_logger()
    log.infof("value=%d", 42)
    assert re.match(r"^\[I0000\] \S+:\d+: value=42$", buf.getvalue().rstrip("\n"))


def test_sequence_numbers_per_level():
    log, buf = make_logger()
    for i in range(12):
        log.info("n", i)
    log.warning("w")
    log.error("e")
    log.warning("w2")
    lines = buf.getvalue().splitlines()
    info_seq = [int(m.group(1)) for m in (re.match(r"^\[I(\d{4})\]", ln) for ln in lines) if m]
    assert info_seq == list(range(12))
    assert lines[12].startswith("[W0000] ")
    assert lines[13].startswith("[E0000] ")
    assert lines[14].startswith("[W0001] ")
    assert log.count(Level.INFO) == 12
    assert log.count(Level.WARNING) == 2
    assert log.count(Level.ERROR) == 1


def test_sequence_grows_past_padding():
    log, buf = make_logger()
    log._counts[Level.INFO] = 12345
    log.info("big")
    assert buf.getvalue().startswith("[I12345] ")


def test_reports_caller_basename_and_line():
    log, buf = make_logger()
    line = sys._getframe().f_lineno + 1
    log.error("where am I")
    out = buf.getvalue().rstrip("\n")
    assert out == f"[E0000] test_logger_format.py:{line}: where am I"
    assert "/" not in out.split(" ")[1]


def test_unknown_caller_placeholder():
    log, buf = make_logger()
    log.caller_skip = 100000
    log.info("lost")
    assert buf.getvalue() == f"[I0000] {UNKNOWN_FILE}:0: lost\n"


def test_no_timestamp_by_default():
    log, buf = make_logger()
    log.info("plain")
    assert buf.getvalue().startswith("[I0000]")


def test_timestamp_prefix():
    log, buf = make_logger(timestamp=True)
    log.warning("stamped")
    out = buf.getvalue()
    assert re.match(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{6} [+-]\d{4} .+ \[W0000\] \S+:\d+: stamped\n$", out)


def test_independent_counters():
    a, buf_a = make_logger()
    b, buf_b = make_logger()
    a.info("one")
    a.info("two")
    b.info("first for b")
    assert buf_b.getvalue().startswith("[I0000] ")
    assert a.count(Level.INFO) == 2
    assert b.count(Level.INFO) == 1


def test_sprint_spacing():
    assert sprint(("a", 1, 2, "b", 3)) == "a1 2b3"
    assert sprint((1.5, None, True)) == "1.5 None True"
    assert sprint(("x", "y")) == "xy"
    assert sprint(()) == ""


def test_sprintf_variants():
    assert sprintf("%s=%d", ("k", 3)) == "k=3"
    assert sprintf("100%", ()) == "100%"
    assert sprintf("%(user)s logged in", ({"user": "ann"},)) == "ann logged in"


def test_sprintf_mismatch_degrades():
    out = sprintf("%d items", ("many",))
    assert out.startswith("%d items (format error:")
    assert "'many'" in out


def test_bad_format_does_not_raise_and_still_counts():
    log, buf = make_logger()
    log.errorf("%s and %s", "only-one")
    assert buf.getvalue().startswith("[E0000] ")
    assert "(format error:" in buf.getvalue()
    assert log.count(Level.ERROR) == 1


def test_destination_write_has_trailing_newline_only():
    log, buf = make_logger()
    log.info("multi\nline")
    assert buf.getvalue().endswith("multi\nline\n")


class Unprintable:
    def __str__(self):
        raise RuntimeError("no str for you")

    def __repr__(self):
        raise RuntimeError("no repr either")


def test_out_of_range_char_does_not_raise():
    log, buf = make_logger()
    log.infof("%c", 2**40)
    out = buf.getvalue()
    assert out.startswith("[I0000] ")
    assert "%c (format error:" in out
    assert log.count(Level.INFO) == 1


def test_operand_with_broken_str():
    log, buf = make_logger()
    log.warning("value:", Unprintable())
    assert buf.getvalue().rstrip("\n").endswith(": value:<unprintable Unprintable: RuntimeError>")


def test_format_error_with_broken_repr():
    out = sprintf("%d", (Unprintable(),))
    assert out.startswith("%d (format error:")
    assert "<unprintable tuple: RuntimeError>" in out
