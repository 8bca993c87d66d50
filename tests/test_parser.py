import pytest

from iqra.consts import *
from iqra.errors import InvalidSyntaxError
from iqra.interp import Runtime
from iqra.nodes import *


def parse(text):
    statements, error = Runtime().parse(text)
    assert error is None, str(error)
    return statements


def parse_error(text):
    statements, error = Runtime().parse(text)
    assert statements is None
    assert isinstance(error, InvalidSyntaxError)
    return error


def test_multiplication_binds_tighter_than_addition():
    (stmt,) = parse("1 + 2 * 3")
    assert isinstance(stmt, BinOpNode)
    assert stmt.op_tok.type == TT_PLUS
    assert isinstance(stmt.right_node, BinOpNode)
    assert stmt.right_node.op_tok.type == TT_MUL


def test_operators_are_left_associative():
    (stmt,) = parse("10 - 4 - 3")
    assert stmt.op_tok.type == TT_MINUS
    assert isinstance(stmt.left_node, BinOpNode)
    assert stmt.right_node.tok.value == 3.0


def test_logic_precedence():
    (stmt,) = parse("a or b and c == d")
    assert stmt.op_tok.matches(TT_KEYWORD, "or")
    and_node = stmt.right_node
    assert and_node.op_tok.matches(TT_KEYWORD, "and")
    assert and_node.right_node.op_tok.type == TT_EE


def test_unary_operators_nest():
    (stmt,) = parse("ليس -x")
    assert isinstance(stmt, UnaryOpNode)
    assert stmt.op_tok.matches(TT_KEYWORD, "not")
    assert isinstance(stmt.node, UnaryOpNode)
    assert stmt.node.op_tok.type == TT_MINUS


def test_assignment_versus_expression():
    assign, expr = parse("x = 1\nx == 1")
    assert isinstance(assign, VarAssignNode)
    assert assign.var_name_tok.value == "x"
    assert isinstance(expr, BinOpNode)


def test_call_and_postfix_index():
    (stmt,) = parse('m["k"][0]')
    assert isinstance(stmt, IndexNode)
    assert isinstance(stmt.obj_node, IndexNode)
    (call,) = parse("f(1, g(2))")
    assert isinstance(call, CallNode)
    assert len(call.arg_nodes) == 2
    assert isinstance(call.arg_nodes[1], CallNode)


def test_list_literal():
    (stmt,) = parse("[1, 2, [3]]")
    assert isinstance(stmt, ListNode)
    assert isinstance(stmt.element_nodes[2], ListNode)


def test_if_else_if_chain_with_newlines():
    (stmt,) = parse("if a {\n 1\n}\nelse if b {\n 2\n} else {\n 3\n}")
    assert isinstance(stmt, IfNode)
    assert isinstance(stmt.else_node, IfNode)
    assert isinstance(stmt.else_node.else_node, BlockNode)


def test_if_without_else_keeps_following_statement():
    statements = parse("اذا أ { 1 }\nب")
    assert len(statements) == 2
    assert statements[0].else_node is None
    assert isinstance(statements[1], VarAccessNode)


def test_function_definition_spellings():
    for source in ("function f(a, b) { return a }", "def f(a, b) { return a }", "دالة f(a, b) { ارجع a }"):
        (stmt,) = parse(source)
        assert isinstance(stmt, FuncDefNode)
        assert [t.value for t in stmt.arg_name_toks] == ["a", "b"]
        assert isinstance(stmt.body_node.statement_nodes[0], ReturnNode)


def test_bare_return():
    (stmt,) = parse("function f() { return }")
    ret = stmt.body_node.statement_nodes[0]
    assert ret.node_to_return is None


def test_try_catch_forms():
    bound, unbound = parse("try { 1 } catch(e) { e }\nجرب { 1 }\nامسك { 2 }")
    assert isinstance(bound, TryCatchNode)
    assert bound.error_var_tok.value == "e"
    assert unbound.error_var_tok is None


def test_semicolons_separate_statements():
    assert len(parse("a = 1; b = 2;; a + b")) == 3


def test_parsing_is_idempotent():
    source = 'دالة f(x) { اذا x > 1 { ارجع x } وإلا { ارجع [x, "y"] } }\nf(٢)'
    assert parse(source) == parse(source)
    assert parse(source) != parse(source.replace("٢", "٣"))


@pytest.mark.parametrize(
    "source,kind,line",
    [
        ("x = (1 + ", "Parse Error", 1),
        ("\n\n)", "Parse Error", 3),
        ("function (a) { }", "Function Name Error", 1),
        ("function f(a,) { }", "Parameter Name Error", 1),
        ("function f(1) { }", "Parameter Name Error", 1),
        ("while x 1", "Block Error", 1),
        ("if x {\n 1\n", "Block Error", 3),
        ("try { 1 }\nx", "Try/Catch Error", 2),
        ("try { 1 } catch(false) { 2 }", "Catch Variable Error", 1),
        ("try { 1 } catch(خطأ) { 2 }", "Catch Variable Error", 1),
    ],
)
def test_syntax_errors(source, kind, line):
    error = parse_error(source)
    assert error.kind == kind
    assert error.line == line
    assert error.message_ar and error.message_en


def test_missing_catch_has_suggestion():
    error = parse_error("جرب { 1 }")
    assert error.suggestion
    assert "catch" in error.message_en


def test_number_tokens_are_reported_in_display_form():
    error = parse_error("function f(2) { }")
    assert "'2'" in error.message_en
    assert "2.0" not in error.message_en
