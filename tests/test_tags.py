from streamlit_cookie_jar.tags import add_tag, read_tag, strip_tag


def test_add_tag():
    assert add_tag("rot13", "hello") == "[rot13]hello"


def test_read_and_strip_tag():
    value = add_tag("rot13", "hello")
    assert read_tag(value) == "rot13"
    assert strip_tag(value) == "hello"


def test_untagged_value():
    assert read_tag("hello") == ""
    assert strip_tag("hello") == "hello"


def test_tag_must_be_at_start():
    assert read_tag("x[rot13]hello") == ""
    assert strip_tag("x[rot13]hello") == "x[rot13]hello"


def test_tag_stops_at_first_closing_bracket():
    value = "[rot13][1,2]"
    assert read_tag(value) == "rot13"
    assert strip_tag(value) == "[1,2]"


def test_empty_tag_is_not_a_tag():
    assert read_tag("[]payload]") == ""
    assert strip_tag("[]payload") == "[]payload"


def test_unclosed_bracket_is_not_a_tag():
    assert read_tag("[rot13hello") == ""
    assert strip_tag("[rot13hello") == "[rot13hello"
