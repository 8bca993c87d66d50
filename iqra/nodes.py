class Node:
    """Base for tree nodes; equality is structural and ignores positions."""

    __slots__ = ()

    def fields(self):
        return tuple(
            getattr(self, name)
            for name in self.__slots__
            if name not in ("pos_start", "pos_end")
        )

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.fields() == other.fields()

    __hash__ = None


class NumberNode(Node):
    __slots__ = ["tok", "pos_start", "pos_end"]

    def __init__(self, tok):
        self.tok = tok
        self.pos_start = self.tok.pos_start
        self.pos_end = self.tok.pos_end

    def __repr__(self):
        return f"NumberNode({self.tok.value})"


class StringNode(Node):
    __slots__ = ["tok", "pos_start", "pos_end"]

    def __init__(self, tok):
        self.tok = tok
        self.pos_start = self.tok.pos_start
        self.pos_end = self.tok.pos_end

    def __repr__(self):
        return f'StringNode("{self.tok.value}")'


class BoolNode(Node):
    __slots__ = ["tok", "pos_start", "pos_end"]

    def __init__(self, tok):
        self.tok = tok
        self.pos_start = self.tok.pos_start
        self.pos_end = self.tok.pos_end

    def __repr__(self):
        return f"BoolNode({self.tok.value})"


class ListNode(Node):
    __slots__ = ["element_nodes", "pos_start", "pos_end"]

    def __init__(self, element_nodes, pos_start, pos_end):
        self.element_nodes = element_nodes
        self.pos_start = pos_start
        self.pos_end = pos_end

    def __repr__(self):
        return f"ListNode({', '.join(repr(x) for x in self.element_nodes)})"


class VarAccessNode(Node):
    __slots__ = ["var_name_tok", "pos_start", "pos_end"]

    def __init__(self, var_name_tok):
        self.var_name_tok = var_name_tok
        self.pos_start = self.var_name_tok.pos_start
        self.pos_end = self.var_name_tok.pos_end

    def __repr__(self):
        return f"VarAccessNode({self.var_name_tok.value})"


class VarAssignNode(Node):
    __slots__ = ["var_name_tok", "value_node", "pos_start", "pos_end"]

    def __init__(self, var_name_tok, value_node):
        self.var_name_tok = var_name_tok
        self.value_node = value_node
        self.pos_start = self.var_name_tok.pos_start
        self.pos_end = self.value_node.pos_end

    def __repr__(self):
        return f"VarAssignNode({self.var_name_tok.value} = {self.value_node!r})"


class BinOpNode(Node):
    __slots__ = ["left_node", "op_tok", "right_node", "pos_start", "pos_end"]

    def __init__(self, left_node, op_tok, right_node):
        self.left_node = left_node
        self.op_tok = op_tok
        self.right_node = right_node
        self.pos_start = self.left_node.pos_start
        self.pos_end = self.right_node.pos_end

    def __repr__(self):
        return f"BinOpNode({self.left_node!r} {self.op_tok!r} {self.right_node!r})"


class UnaryOpNode(Node):
    __slots__ = ["op_tok", "node", "pos_start", "pos_end"]

    def __init__(self, op_tok, node):
        self.op_tok = op_tok
        self.node = node
        self.pos_start = self.op_tok.pos_start
        self.pos_end = node.pos_end

    def __repr__(self):
        return f"UnaryOpNode({self.op_tok!r} {self.node!r})"


class CallNode(Node):
    __slots__ = ["func_name_tok", "arg_nodes", "pos_start", "pos_end"]

    def __init__(self, func_name_tok, arg_nodes, pos_end):
        self.func_name_tok = func_name_tok
        self.arg_nodes = arg_nodes
        self.pos_start = self.func_name_tok.pos_start
        self.pos_end = pos_end

    def __repr__(self):
        args = ", ".join(repr(x) for x in self.arg_nodes)
        return f"CallNode({self.func_name_tok.value}({args}))"


class IndexNode(Node):
    __slots__ = ["obj_node", "index_node", "pos_start", "pos_end"]

    def __init__(self, obj_node, index_node, pos_end):
        self.obj_node = obj_node
        self.index_node = index_node
        self.pos_start = self.obj_node.pos_start
        self.pos_end = pos_end

    def __repr__(self):
        return f"IndexNode({self.obj_node!r}[{self.index_node!r}])"


class BlockNode(Node):
    __slots__ = ["statement_nodes", "pos_start", "pos_end"]

    def __init__(self, statement_nodes, pos_start, pos_end):
        self.statement_nodes = statement_nodes
        self.pos_start = pos_start
        self.pos_end = pos_end

    def __repr__(self):
        return f"BlockNode({'; '.join(repr(x) for x in self.statement_nodes)})"


class IfNode(Node):
    __slots__ = ["condition_node", "then_node", "else_node", "pos_start", "pos_end"]

    def __init__(self, condition_node, then_node, else_node, pos_start):
        self.condition_node = condition_node
        self.then_node = then_node
        self.else_node = else_node
        self.pos_start = pos_start
        self.pos_end = (else_node or then_node).pos_end

    def __repr__(self):
        result = f"IfNode({self.condition_node!r} then {self.then_node!r}"
        if self.else_node is not None:
            result += f" else {self.else_node!r}"
        return result + ")"


class WhileNode(Node):
    __slots__ = ["condition_node", "body_node", "pos_start", "pos_end"]

    def __init__(self, condition_node, body_node, pos_start):
        self.condition_node = condition_node
        self.body_node = body_node
        self.pos_start = pos_start
        self.pos_end = self.body_node.pos_end

    def __repr__(self):
        return f"WhileNode({self.condition_node!r} do {self.body_node!r})"


class FuncDefNode(Node):
    __slots__ = ["func_name_tok", "arg_name_toks", "body_node", "pos_start", "pos_end"]

    def __init__(self, func_name_tok, arg_name_toks, body_node, pos_start):
        self.func_name_tok = func_name_tok
        self.arg_name_toks = arg_name_toks
        self.body_node = body_node
        self.pos_start = pos_start
        self.pos_end = self.body_node.pos_end

    def __repr__(self):
        args = ", ".join(tok.value for tok in self.arg_name_toks)
        return f"FuncDefNode({self.func_name_tok.value}({args}) {self.body_node!r})"


class ReturnNode(Node):
    __slots__ = ["node_to_return", "pos_start", "pos_end"]

    def __init__(self, node_to_return, pos_start, pos_end):
        self.node_to_return = node_to_return
        self.pos_start = pos_start
        self.pos_end = pos_end

    def __repr__(self):
        return f"ReturnNode({self.node_to_return!r})"


class TryCatchNode(Node):
    __slots__ = ["try_node", "catch_node", "error_var_tok", "pos_start", "pos_end"]

    def __init__(self, try_node, catch_node, error_var_tok, pos_start):
        self.try_node = try_node
        self.catch_node = catch_node
        self.error_var_tok = error_var_tok
        self.pos_start = pos_start
        self.pos_end = self.catch_node.pos_end

    def __repr__(self):
        name = self.error_var_tok.value if self.error_var_tok else ""
        return f"TryCatchNode({self.try_node!r} catch({name}) {self.catch_node!r})"
