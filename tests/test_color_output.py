import io

from tallylog import new_logger

RESET = "\x1b[0m"


def test_colored_stderr_plain_destination(capsys):
    buf = io.StringIO()
    log = new_logger(True, True, False, buf)
    log.info("green")
    log.warning("yellow")
    log.error("red")
    err_lines = capsys.readouterr().err.splitlines()
    assert len(err_lines) == 3
    for line, code in zip(err_lines, ("\x1b[32m", "\x1b[33m", "\x1b[31m")):
        assert line.startswith(code)
        assert line.endswith(RESET)
    assert "\x1b[" not in buf.getvalue()
    assert buf.getvalue().splitlines()[0] in err_lines[0]


def test_stderr_without_color(capsys):
    buf = io.StringIO()
    log = new_logger(True, False, False, buf)
    log.infof("n=%d", 7)
    err = capsys.readouterr().err
    assert "\x1b[" not in err
    assert err == buf.getvalue()


def test_stderr_disabled(capsys):
    buf = io.StringIO()
    log = new_logger(False, True, False, buf)
    log.error("file only")
    assert capsys.readouterr().err == ""
    assert buf.getvalue().endswith(": file only\n")


def test_colored_line_keeps_control_characters(capsys):
    buf = io.StringIO()
    log = new_logger(True, True, False, buf)
    log.info("a\tb\rc")
    err = capsys.readouterr().err
    assert err == "\x1b[32m" + buf.getvalue().rstrip("\n") + RESET + "\n"
    assert "a\tb\rc" in err
