import io

import pytest

from jzlog.demangle import DemangleError, demangle, demangle_or_original, main


def test_corner_cases_buffer_size():
    mangled = "_Z6foobarv"
    assert demangle(mangled, 10) == "foobar()"
    assert demangle(mangled, 9) == "foobar()"
    with pytest.raises(DemangleError):
        demangle(mangled, 8)
    with pytest.raises(DemangleError):
        demangle(mangled, 1)
    with pytest.raises(DemangleError):
        demangle(mangled, 0)


@pytest.mark.parametrize(
    "mangled",
    [
        "_ZL3Foov",
        "_ZL3Foov.clone.3",
        "_ZL3Foov.constprop.80",
        "_ZL3Foov.isra.18",
        "_ZL3Foov.isra.2.constprop.18",
    ],
)
def test_clone_suffixes_are_dropped(mangled):
    assert demangle(mangled, 20) == "Foo()"


@pytest.mark.parametrize(
    "mangled",
    [
        "_ZL3Foov.clo",
        "_ZL3Foov.clone.",
        "_ZL3Foov.clone.foo",
        "_ZL3Foov.isra.2.constprop.",
    ],
)
def test_invalid_clone_suffixes(mangled):
    with pytest.raises(DemangleError):
        demangle(mangled, 20)


@pytest.mark.parametrize(
    ("mangled", "expected"),
    [
        ("_Z1fv", "f()"),
        ("_Z1fi", "f()"),
        ("_Z3foo3bar", "foo()"),
        ("_Z1fIiEvi", "f<>()"),
        ("_ZN1N1fE", "N::f"),
        ("_ZN3Foo3BarEv", "Foo::Bar()"),
        ("_Zrm1XS_", "operator%()"),
        ("_ZN3FooC1Ev", "Foo::Foo()"),
        ("_Z1fSs", "f()"),
    ],
)
def test_documented_examples(mangled, expected):
    assert demangle(mangled) == expected


def test_destructor_repeats_class_name():
    assert demangle("_ZN3FooD1Ev") == "Foo::~Foo()"


def test_version_suffix_is_kept():
    assert demangle("_Z3foo@@GLIBCXX_3.4") == "foo@@GLIBCXX_3.4"


def test_anonymous_namespace():
    assert demangle("_ZN12_GLOBAL__N_11fEv") == "(anonymous namespace)::f()"


def test_std_template_member():
    assert demangle("_ZNSt6vectorIiE9push_backEv") == "std::vector<>::push_back()"


def test_operator_new_has_space():
    assert demangle("_Znwm") == "operator new()"


def test_not_mangled_raises_with_name():
    with pytest.raises(DemangleError) as info:
        demangle("foo")
    assert info.value.mangled == "foo"


def test_demangle_or_original():
    assert demangle_or_original("_Z6foobarv") == "foobar()"
    assert demangle_or_original("not_a_symbol") == "not_a_symbol"


def test_main_with_arguments(capsys):
    assert main(["_Z1fv", "plain"]) == 0
    assert capsys.readouterr().out == "f()\nplain\n"


def test_main_filters_stdin(capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("_ZN3Foo3BarEv\nhello\n"))
    assert main([]) == 0
    assert capsys.readouterr().out == "Foo::Bar()\nhello\n"