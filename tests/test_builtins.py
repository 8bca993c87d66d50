import re

import pytest

from iqra.consts import BUILTIN_FUNCTIONS
from iqra.datatypes import *
from iqra.interp import BuiltInFunction


def nums(*values):
    return List(Number(v) for v in values)


def strs(*values):
    return List(String(v) for v in values)


def test_every_builtin_has_an_implementation():
    for canonical in set(BUILTIN_FUNCTIONS.values()):
        assert hasattr(BuiltInFunction, f"execute_{canonical}"), canonical


@pytest.mark.parametrize(
    "english,arabic,expected",
    [
        ("list(1, 2)", "قائمة(١, ٢)", nums(1, 2)),
        ("list_len([1, 2, 3])", "طول_القائمة([1, 2, 3])", Number(3)),
        ("get([5, 6], 1)", "عنصر([5, 6], 1)", Number(6)),
        ('get(map("a", 1), "a")', 'عنصر(قاموس("a", 1), "a")', Number(1)),
        ("append([1], 2)", "أضف([1], 2)", nums(1, 2)),
        ("remove([1, 2, 1, 3], 1)", "احذف([1, 2, 1, 3], 1)", nums(2, 3)),
        ("contains([1, 2], 2)", "يحتوي([1, 2], 2)", Bool.true),
        ("contains([1, 2], 5)", "يحتوي([1, 2], 5)", Bool.false),
        ('map_get(map("k", "v"), "k")', 'جلب_عنصر(قاموس("k", "v"), "k")', String("v")),
        (
            'map_set(map("a", 1), "b", 2)',
            'تعيين_عنصر(قاموس("a", 1), "b", 2)',
            Map({"a": Number(1), "b": Number(2)}),
        ),
        ('map_remove(map("a", 1), "a")', 'حذف_عنصر(قاموس("a", 1), "a")', Map()),
        ('map_remove(map("a", 1), "z")', 'حذف_عنصر(قاموس("a", 1), "z")', Map({"a": Number(1)})),
        ("type([])", "نوع([])", String("list")),
        ('to_number("٤٢")', 'إلى_رقم("٤٢")', Number(42)),
        ("to_string(3)", "إلى_نص(3)", String("3")),
        ("to_string(true)", "إلى_نص(صحيح)", String("صحيح")),
        ("is_number(1)", "رقم؟(1)", Bool.true),
        ('is_number("1")', 'رقم؟("1")', Bool.false),
        ('is_string("1")', 'نص؟("1")', Bool.true),
        ('len("مرحبا")', 'طول("مرحبا")', Number(5)),
        ("len([1, 2])", "طول([1, 2])", Number(2)),
        ("sum([1, 2, 3.5])", "جمع([1, 2, 3.5])", Number(6.5)),
        ("average([2, 4])", "متوسط([2, 4])", Number(3)),
        ("average([])", "متوسط([])", Number(0)),
        ("max([3, 9, 1])", "أكبر([3, 9, 1])", Number(9)),
        ("min([3, 9, 1])", "أصغر([3, 9, 1])", Number(1)),
        ('word_count("  واحد two   ثلاثة ")', 'عدد_الكلمات("واحد two ثلاثة")', Number(3)),
        ('reverse("abc")', 'عكس("abc")', String("cba")),
        ("reverse([1, 2, 3])", "عكس([1, 2, 3])", nums(3, 2, 1)),
    ],
)
def test_builtins_in_both_languages(runtime, english, arabic, expected):
    assert runtime.execute(english) == expected
    assert runtime.execute(arabic) == expected


def test_type_names(runtime):
    source = 'list(type(nil_fn()), type(true), type(1), type(""), type([]), type(map()))'
    runtime.execute("def nil_fn() { return }")
    assert runtime.execute(source) == strs("nil", "bool", "number", "string", "list", "map")


def test_print_joins_arguments_with_spaces(runtime, capsys):
    assert runtime.execute('اطبع("مرحبا", 1, [1, صحيح], map("a", 2))') == Nil.nil
    assert runtime.execute("print()") == Nil.nil
    assert capsys.readouterr().out == "مرحبا 1 [1, صحيح] {a: 2}\n\n"


def test_list_operations_do_not_mutate(runtime):
    runtime.execute('xs = [1, 2]\nys = append(xs, 3)\nzs = remove(xs, 1)\nm = map("a", 1)\nn = map_set(m, "a", 5)')
    values = runtime.variables
    assert values["xs"] == nums(1, 2)
    assert values["ys"] == nums(1, 2, 3)
    assert values["zs"] == nums(2)
    assert values["m"] == Map({"a": Number(1)})
    assert values["n"] == Map({"a": Number(5)})


def test_contains_uses_structural_equality(runtime):
    assert runtime.execute('contains([[1], map("k", "v")], map("k", "v"))') == Bool.true


def test_map_requires_even_arguments_and_string_keys(run_error):
    assert run_error('map("a")').kind == "Argument Count Mismatch"
    assert run_error("map(1, 2)").kind == "Invalid Key Type"


def test_map_later_keys_win(runtime):
    assert runtime.execute('map("a", 1, "a", 2)') == Map({"a": Number(2)})


def test_arity_is_checked(run_error):
    error = run_error("\nlen(1, 2)")
    assert error.kind == "Argument Count Mismatch"
    assert error.line == 2
    assert run_error("today(1)").kind == "Argument Count Mismatch"


@pytest.mark.parametrize(
    "source,kind",
    [
        ("len(5)", "Invalid Argument Type"),
        ("list_len(\"abc\")", "Invalid Argument Type"),
        ("append(1, 2)", "Invalid Argument Type"),
        ("remove(\"a\", 1)", "Invalid Argument Type"),
        ("contains(map(), 1)", "Invalid Argument Type"),
        ('map_set(map(), 1, 2)', "Invalid Argument Type"),
        ('map_remove([], "a")', "Invalid Argument Type"),
        ("sum(1)", "Invalid Argument Type"),
        ('sum([1, "2"])', "Invalid Element Type"),
        ('average(["x"])', "Invalid Element Type"),
        ("max([])", "Empty List"),
        ("min([])", "Empty List"),
        ("word_count(1)", "Invalid Argument Type"),
        ("reverse(1)", "Invalid Argument Type"),
        ("system(1)", "Invalid Argument Type"),
        ('system_with_io("cat", 1)', "Invalid Argument Type"),
        ("read_file(1)", "Invalid Argument Type"),
        ('write_file("p", 1)', "Invalid Argument Type"),
        ("list_files(1)", "Invalid Argument Type"),
        ("env_var(1)", "Invalid Argument Type"),
        ("get([1], 4)", "Index Out of Bounds"),
        ('get(1, "a")', "Invalid Indexing Operation"),
        ('map_get(map("a", 1), "b")', "Key Not Found"),
        ('to_number("abc")', "Conversion Error"),
        ("to_number([])", "Conversion Error"),
    ],
)
def test_argument_errors(run_error, source, kind):
    error = run_error(source)
    assert error.kind == kind
    assert error.line == 1


def test_to_string_uses_display_form(runtime):
    assert runtime.execute('to_string([1, "a"])') == String("[1, a]")
    assert runtime.execute('to_string(map("k", 2))') == String("{k: 2}")


def test_today_is_cached(runtime):
    first = runtime.execute("today()")
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", first.value)
    runtime.today_cache = "2000-01-01"
    assert runtime.execute("تاريخ_اليوم()") == String("2000-01-01")


def test_system_trims_output(runtime, executor):
    assert runtime.execute('system("echo hi")') == String("mocked output")
    assert runtime.execute('نفذ_أمر_بمدخل("cat", "data")') == String(
        "mocked output with input"
    )
    assert executor.calls == [
        ("exec", "echo hi"),
        ("exec_with_io", "cat", "data"),
    ]


def test_file_builtins_use_executor(runtime, executor):
    assert runtime.execute('read_file("a.txt")') == String("mocked file content")
    assert runtime.execute('اكتب_ملف("b.txt", "نص")') == Bool.true
    assert runtime.execute('list_files(".")') == strs("file1.txt", "file2.txt")
    assert executor.calls == [
        ("read_file", "a.txt"),
        ("write_file", "b.txt", "نص"),
        ("list_files", "."),
    ]


def test_env_var(runtime):
    assert runtime.execute('env_var("HOME")') == String("mocked env value")
    assert runtime.execute('متغير_بيئة("MISSING")') == Nil.nil


def test_system_info_is_cached(runtime, executor):
    expected = Map({"os": String("Linux"), "arch": String("x86_64")})
    assert runtime.execute("system_info()") == expected
    assert runtime.execute("معلومات_النظام()") == expected
    assert executor.calls == [("system_info",)]


@pytest.mark.parametrize(
    "source,kind",
    [
        ('system("ls")', "System Command Error"),
        ('system_with_io("cat", "x")', "System Command Error"),
        ('read_file("missing.txt")', "File Read Error"),
        ('write_file("locked.txt", "y")', "File Write Error"),
        ('list_files("file.txt")', "List Files Error"),
        ("system_info()", "System Info Error"),
    ],
)
def test_io_failures_become_errors(run_error, failing_runtime, source, kind):
    error = run_error(source, failing_runtime)
    assert error.kind == kind
    assert error.error_name == "IOError"


def test_io_failures_are_catchable(failing_runtime):
    value = failing_runtime.execute('try { read_file("x") } catch(e) { e }')
    assert "File Read Error" in value.value


def test_user_functions_shadow_builtins(runtime):
    runtime.execute("def len(x) { return 42 }")
    assert runtime.execute('len("abc")') == Number(42)
