import copy

import pytest
from hypothesis import given, strategies as st

from irl import errors
from irl.builtin import env_builtin
from irl.builtin.env_builtin import BUILTINS, write_escaped
from irl.interpreter import Interpreter
from irl.types.builtin import Builtin
from irl.types.environment import Environment
from irl.types.nil import Nil
from irl.types.symbol import Symbol


@pytest.fixture
def env():
    e = Environment()
    env_builtin.register(e)
    return e


# -------------------------------
# Registration
# -------------------------------
def test_register_installs_all_builtins_and_file(env):
    for name in ("+", "=", "print", "if", "define", "fn", "get", "set", "len", "import", "type"):
        assert isinstance(env.find(name), Builtin)
    assert env.find("FILE") == ""


def test_builtin_references_compare_by_identity():
    a, b = Interpreter(), Interpreter()
    assert a.env.find("+") is b.env.find("+")
    assert a.env.find("+") == BUILTINS["+"]
    assert a.env.find("+") != a.env.find("=")


def test_builtins_called_directly(env):
    add = env.find("+")
    stack = ["untouched", 1, 2, 3]
    assert add(env, stack, 3) == 6
    assert stack == ["untouched"]


# -------------------------------
# Arithmetic and equality
# -------------------------------
@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+)", 0),
        ("(+ 5)", 5),
        ("(+ 1 2 3)", 6),
        ("(+ -1 5 -3)", 1),
        ("(+ 1 2.5)", 3.5),
        ("(+ 1.5 1.5)", 3.0),
        ("(+ 1 (+ 2 3))", 6),
        ("(= 1 1)", True),
        ("(= 1 2)", False),
        ("(= 1 1 1)", True),
        ("(= 1 1 2)", False),
        ("(= 1 1.0)", False),
        ("(= 1 true)", False),
        ("(= 'a 'a)", True),
        ('(= "a" \'a)', False),
        ("(= [1 2] [1 2])", True),
        ("(= [1 2] [1 2 3])", False),
        ("(= [1 [2]] [1 [2]])", True),
        ("(= '(1 2) [1 2])", False),
        ("(= nil nil)", True),
        ("(= (fn [] 1) (fn [] 1))", True),
        ("(= (fn [] 1) (fn [] true))", False),
        ("(= (fn [] 1) (fn [] 1.0))", False),
        ("(= (fn [a] a) (fn [b] b))", False),
        ("(= (get [(f 1)] 0) (get [(f 1)] 0))", True),
        ("(= (get [(f 1)] 0) (get [(f true)] 0))", False),
    ],
)
def test_arithmetic_and_equality(interp, source, expected):
    result = interp.eval(source)
    assert result == expected
    assert type(result) is type(expected)


@pytest.mark.parametrize("source", ['(+ 1 "2")', "(+ 1 true)", "(+ [1])", "(+ nil)"])
def test_add_rejects_non_numbers(interp, source):
    with pytest.raises(errors.IrlTypeError):
        interp.eval(source)


@pytest.mark.parametrize("source", ["(=)", "(= 1)"])
def test_equal_needs_two_operands(interp, source):
    with pytest.raises(errors.IrlArityError):
        interp.eval(source)


@given(st.lists(st.one_of(st.integers(-10**6, 10**6), st.floats(-1e6, 1e6)), max_size=8))
def test_add_is_float_iff_any_operand_is_float(numbers):
    interp = Interpreter(mode="debug")
    source = "(+ " + " ".join(repr(n) for n in numbers) + ")"
    result = interp.eval(source)
    if any(isinstance(n, float) for n in numbers):
        assert isinstance(result, float)
    else:
        assert type(result) is int
        assert result == sum(numbers)


# -------------------------------
# print
# -------------------------------
@pytest.mark.parametrize(
    "source,expected",
    [
        ('(print "yes\\n")', "yes\n"),
        ('(print "a\\tb")', "a\tb"),
        ('(print "back\\\\slash")', "back\\slash"),
        ('(print "no newline")', "no newline"),
        ("(print 42)", "42"),
        ("(print -3)", "-3"),
        ("(print 1.5)", "1.5"),
        ("(print 3.0)", "3"),
        ("(print 0.1)", "0.1"),
        ("(print 'sym)", "'sym"),
        ("(print true false)", "truefalse"),
        ("(print nil)", "nil"),
        ("(print [1 2 'a])", "[1 2 'a]"),
        ('(print 1 " " 2 "\\n")', "1 2\n"),
        ("(print [3.0 1.5 [2.0]])", "[3 1.5 [2]]"),
        ("(print ['(4.0) nil])", "['(4) nil]"),
        ('(print ["a" 1.0])', '["a" 1]'),
    ],
)
def test_print_output(interp, capsys, source, expected):
    assert interp.eval(source) == 0
    assert capsys.readouterr().out == expected


@pytest.mark.parametrize("source", ['(print "bad \\q")', '(print "trailing \\")'])
def test_print_rejects_bad_escapes(interp, source):
    with pytest.raises(errors.IrlSyntaxError):
        interp.eval(source)


def test_print_flushes_text_before_a_bad_escape():
    class Out:
        def __init__(self):
            self.parts = []

        def write(self, s):
            self.parts.append(s)

    out = Out()
    with pytest.raises(errors.IrlSyntaxError):
        write_escaped("one\\ntwo\\x", out)
    assert "".join(out.parts) == "one\n"


def test_print_requires_an_operand(interp):
    with pytest.raises(errors.IrlArityError):
        interp.eval("(print)")


def test_print_rejects_code(interp):
    with pytest.raises(errors.IrlTypeError):
        interp.eval("(print (fn [] 0))")


# -------------------------------
# Arrays: get / set / len
# -------------------------------
@pytest.mark.parametrize(
    "source,expected",
    [
        ("(get [1 2 3] 0)", 1),
        ("(get [1 2 3] 2)", 3),
        ("(get [1 2 3] -1)", 3),
        ("(get [1 2 3] -3)", 1),
        ("(get [[1 2] 3] 0)", [1, 2]),
        ("(len [])", 0),
        ("(len [1 2 3])", 3),
    ],
)
def test_get_and_len(interp, source, expected):
    assert interp.eval(source) == expected


@pytest.mark.parametrize("source", ["(get [1 2 3] 3)", "(get [1 2 3] -4)", "(get [] 0)"])
def test_get_out_of_range(interp, source):
    with pytest.raises(errors.IrlIndexError):
        interp.eval(source)


@pytest.mark.parametrize(
    "source,error",
    [
        ("(get [1 2] 1.0)", errors.IrlTypeError),
        ("(get [1 2] true)", errors.IrlTypeError),
        ("(get 5 0)", errors.IrlTypeError),
        ("(get [1 2])", errors.IrlArityError),
        ("(len 5)", errors.IrlTypeError),
        ("(len [1] [2])", errors.IrlArityError),
    ],
)
def test_get_and_len_errors(interp, source, error):
    with pytest.raises(error):
        interp.eval(source)


def test_set_replaces_last_element(interp):
    interp.eval("(define a [1 2 3])")
    assert interp.eval("(set a -1 9)") is Nil
    assert interp.eval("(get a 2)") == 9
    assert interp.eval("a") == [1, 2, 9]


def test_set_with_negative_length_index_hits_first(interp):
    interp.eval("(define a [1 2 3])")
    interp.eval("(set a -3 0)")
    assert interp.eval("a") == [0, 2, 3]


def test_set_rebinds_a_new_array(interp):
    interp.eval("(define a [1 2 3])")
    interp.eval("(define b a)")
    interp.eval("(set a 0 100)")
    assert interp.eval("a") == [100, 2, 3]
    assert interp.eval("b") == [1, 2, 3]


def test_set_on_literal_array_is_a_no_op(interp):
    assert interp.eval("(set [1 2 3] 0 9)") is Nil


@pytest.mark.parametrize(
    "source,error",
    [
        ("(set nope 0 1)", errors.IrlUnboundSymbol),
        ("(set a 3 1)", errors.IrlIndexError),
        ("(set a -4 1)", errors.IrlIndexError),
        ("(set n 0 1)", errors.IrlTypeError),
        ("(set a 'x 1)", errors.IrlTypeError),
        ("(set 5 0 1)", errors.IrlTypeError),
        ("(set a 0)", errors.IrlArityError),
    ],
)
def test_set_errors(interp, source, error):
    interp.eval("(define a [1 2 3]) (define n 5)")
    with pytest.raises(error):
        interp.eval(source)
    assert interp.eval("a") == [1, 2, 3]


@given(st.lists(st.integers(), min_size=1, max_size=6), st.data())
def test_get_negative_index_counts_from_end(items, data):
    interp = Interpreter(mode="debug")
    idx = data.draw(st.integers(min_value=-len(items), max_value=len(items) - 1))
    interp.env.declare("xs", items)
    assert interp.eval(f"(get xs {idx})") == items[idx]


# -------------------------------
# type
# -------------------------------
@pytest.mark.parametrize(
    "source,expected",
    [
        ("(type 1)", "integer"),
        ("(type 1.5)", "float"),
        ("(type [1])", "array"),
        ("(type '(1 2))", "list"),
        ('(type "s")', "string"),
        ("(type 'a)", "symbol"),
        ("(type (fn [] 0))", "code"),
        ("(type true)", "boolean"),
        ("(type nil)", "nil"),
        ("(type (type 1))", "symbol"),
    ],
)
def test_type(interp, source, expected):
    assert interp.eval(source) == Symbol(expected)


def test_type_of_raw_node_is_an_error(interp):
    with pytest.raises(errors.IrlTypeError):
        interp.eval("(type (get [a] 0))")


def test_type_arity(interp):
    with pytest.raises(errors.IrlArityError):
        interp.eval("(type 1 2)")


# -------------------------------
# if / define / fn
# -------------------------------
@pytest.mark.parametrize(
    "source,expected",
    [
        ("(if true 1 2)", 1),
        ("(if false 1 2)", 2),
        ("(if false 1)", Nil),
        ("(if (= 1 1) 'yes 'no)", Symbol("yes")),
        ("(if (= 1 2) 'yes (+ 1 1))", 2),
    ],
)
def test_if(interp, source, expected):
    assert interp.eval(source) == expected


@pytest.mark.parametrize(
    "source,error",
    [
        ("(if 1 2 3)", errors.IrlTypeError),
        ("(if nil 2 3)", errors.IrlTypeError),
        ("(if true)", errors.IrlArityError),
        ("(if true 1 2 3)", errors.IrlArityError),
    ],
)
def test_if_errors(interp, source, error):
    with pytest.raises(error):
        interp.eval(source)


def test_define_returns_value_and_binds(interp):
    assert interp.eval("(define x (+ 1 2))") == 3
    assert interp.eval("x") == 3


def test_define_with_computed_name(interp):
    interp.eval("(define name-of (fn [] 'answer))")
    assert interp.eval("(define (name-of) 42)") == 42
    assert interp.eval("answer") == 42


@pytest.mark.parametrize(
    "source,error",
    [
        ("(define x)", errors.IrlArityError),
        ("(define x 1 2)", errors.IrlArityError),
        ("(define 5 1)", errors.IrlTypeError),
        ("(define (+ 1 2) 1)", errors.IrlTypeError),
    ],
)
def test_define_errors(interp, source, error):
    with pytest.raises(error):
        interp.eval(source)


@pytest.mark.parametrize(
    "source,error",
    [
        ("(fn)", errors.IrlArityError),
        ("(fn 5 1)", errors.IrlTypeError),
        ("(fn (+ 1 2) 1)", errors.IrlTypeError),
    ],
)
def test_fn_errors(interp, source, error):
    with pytest.raises(error):
        interp.eval(source)


nested = st.recursive(st.integers(), lambda children: st.lists(children, max_size=3), max_leaves=8)


@given(nested)
def test_equal_is_reflexive_on_copies(value):
    interp = Interpreter(mode="debug")
    interp.env.declare("v", value)
    interp.env.declare("w", copy.deepcopy(value))
    assert interp.eval("(= v w)") is True
