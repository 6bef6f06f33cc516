from no2cc.errors import CompileError, format_error


def test_format_error_places_caret_under_position():
    text = format_error("1 $", 2, "cannot tokenize: $")
    assert text.splitlines() == ["1 $", "  ^ cannot tokenize: $"]


def test_format_error_at_start():
    text = format_error("x", 0, "oops")
    assert text == "x\n^ oops"


def test_caret_column_matches_position():
    source = "a + b + c"
    for pos in range(len(source)):
        second = format_error(source, pos, "m").splitlines()[1]
        assert second.index("^") == pos


def test_compile_error_keeps_fields():
    err = CompileError("abc", 1, "bad")
    assert err.source == "abc"
    assert err.pos == 1
    assert err.message == "bad"


def test_compile_error_str_is_formatted():
    err = CompileError("abc", 1, "bad")
    assert str(err) == format_error("abc", 1, "bad")


def test_compile_error_message_points_at_position():
    err = CompileError("x;", 1, "';' expected")
    assert str(err) == "x;\n ^ ';' expected"