import pytest

from jzlog.mangling import ParseState, is_anonymous_namespace, is_function_clone_suffix


def test_consume_char_advances_only_on_match():
    state = ParseState("_Z3foo")
    assert state.consume_char("_") is True
    assert state.pos == 1
    assert state.consume_char("x") is False
    assert state.pos == 1


def test_consume_char_at_end_fails():
    state = ParseState("")
    assert state.consume_char("N") is False
    assert state.pos == 0


def test_consume_two():
    state = ParseState("_Z1fv")
    assert state.consume_two("_Z") is True
    assert state.remaining() == "1fv"
    assert state.consume_two("1g") is False
    assert state.remaining() == "1fv"


def test_consume_class_matches_any_member():
    state = ParseState("C2")
    assert state.consume_char("C")
    assert state.consume_class("123") is True
    assert state.remaining() == ""


def test_consume_class_does_not_match_at_end():
    state = ParseState("a")
    state.pos = 1
    assert state.consume_class("abc") is False
    assert state.pos == 1


def test_peek_past_end_is_empty():
    state = ParseState("ab")
    assert state.peek() == "a"
    assert state.peek(1) == "b"
    assert state.peek(2) == ""


def test_snapshot_restore_round_trip():
    state = ParseState("N3FooE")
    before = state.snapshot()
    state.consume_char("N")
    state.nest_level = 0
    state.append = False
    state.maybe_append("ignored")
    state.append = True
    state.maybe_append("Foo")
    assert state.result() == "Foo"
    state.restore(before)
    assert state.pos == 0
    assert state.result() == ""
    assert state.nest_level == -1
    assert state.append is True
    assert state.prev_name == ""
    assert state.snapshot() == before


def test_restore_clears_overflow():
    state = ParseState("x", out_size=3)
    saved = state.snapshot()
    state.append_text("abcdef")
    assert state.overflowed is True
    state.restore(saved)
    assert state.overflowed is False
    assert state.result() == ""


@pytest.mark.parametrize("size", [10, 9])
def test_append_fits_within_out_size(size):
    state = ParseState("", out_size=size)
    state.append_text("foobar()")
    assert state.overflowed is False
    assert state.result() == "foobar()"


@pytest.mark.parametrize("size", [8, 1, 0])
def test_append_overflows_small_out_size(size):
    state = ParseState("", out_size=size)
    state.append_text("foobar()")
    assert state.overflowed is True
    assert len(state.result()) == max(size - 1, 0)


def test_unbounded_output_never_overflows():
    state = ParseState("")
    text = "x" * 5000
    state.append_text(text)
    assert state.overflowed is False
    assert state.result() == text


def test_maybe_append_respects_disabled_append():
    state = ParseState("")
    state.append = False
    assert state.maybe_append("foo") is True
    assert state.result() == ""
    assert state.prev_name == ""


def test_maybe_append_separates_angle_brackets():
    state = ParseState("")
    state.maybe_append("<")
    state.maybe_append("<>")
    assert state.result() == "< <>"


def test_maybe_append_remembers_identifiers_only():
    state = ParseState("")
    state.maybe_append("Foo")
    state.maybe_append("::")
    state.maybe_append("()")
    assert state.prev_name == "Foo"
    state.maybe_append("_bar")
    assert state.prev_name == "_bar"
    assert state.result() == "Foo::()_bar"


@pytest.mark.parametrize(
    "suffix",
    ["", ".clone.3", ".constprop.80", ".isra.18", ".isra.2.constprop.18"],
)
def test_clone_suffix_accepted(suffix):
    assert is_function_clone_suffix(suffix) is True


@pytest.mark.parametrize(
    "suffix",
    [".clo", ".clone.", ".clone.foo", ".isra.2.constprop.", "@@GLIBCXX_3.4"],
)
def test_clone_suffix_rejected(suffix):
    assert is_function_clone_suffix(suffix) is False


def test_anonymous_namespace_requires_longer_identifier():
    name = "_GLOBAL__N_1"
    assert is_anonymous_namespace(name, len(name)) is True
    assert is_anonymous_namespace("_GLOBAL__N_", len("_GLOBAL__N_")) is False
    assert is_anonymous_namespace("SomeNamespace", len("SomeNamespace")) is False