from .consts import *
from .datatypes import Number
from .errors import InvalidSyntaxError
from .nodes import *


def describe(tok):
    if tok.type == TT_EOF:
        return "end of input"
    if tok.type == TT_NEWLINE:
        return "newline"
    if tok.type == TT_NUMBER:
        return f"'{Number(tok.value)}'"
    if tok.value is not None:
        return f"'{tok.value}'"
    return tok.type


class ParseResult:
    __slots__ = ("error", "node", "advance_count")

    def __init__(self):
        self.error = None
        self.node = None
        self.advance_count = 0

    def register_advancement(self):
        self.advance_count += 1

    def register(self, res):
        self.advance_count += res.advance_count
        if res.error:
            self.error = res.error
        return res.node

    def success(self, node):
        self.node = node
        return self

    def failure(self, error):
        if not self.error:
            self.error = error
        return self


class Parser:
    __slots__ = ("tokens", "tok_idx", "current_tok")

    def __init__(self, tokens):
        self.tokens = tokens
        self.tok_idx = -1
        self.current_tok = None
        self.advance()

    def advance(self):
        self.tok_idx += 1
        self.update_current_tok()
        return self.current_tok

    def reverse(self, amount=1):
        self.tok_idx -= amount
        self.update_current_tok()
        return self.current_tok

    def update_current_tok(self):
        if 0 <= self.tok_idx < len(self.tokens):
            self.current_tok = self.tokens[self.tok_idx]

    def peek(self, steps=1):
        idx = self.tok_idx + steps
        if idx < len(self.tokens):
            return self.tokens[idx]
        return self.tokens[-1]

    def error(self, kind, message_ar, message_en, suggestion=None, tok=None):
        tok = tok or self.current_tok
        return InvalidSyntaxError(
            tok.pos_start, tok.pos_end, kind, message_ar, message_en, suggestion
        )

    def expected(self, what_ar, what_en, suggestion=None):
        found = describe(self.current_tok)
        return self.error(
            "Parse Error",
            f"متوقع {what_ar} لكن وجد {found}",
            f"Expected {what_en} but found {found}",
            suggestion,
        )

    def skip_separators(self, res):
        count = 0
        while self.current_tok.type in (TT_NEWLINE, TT_SEMICOLON):
            res.register_advancement()
            self.advance()
            count += 1
        return count

    def skip_newlines(self, res):
        while self.current_tok.type == TT_NEWLINE:
            res.register_advancement()
            self.advance()

    def parse(self):
        res = ParseResult()
        statements = []

        self.skip_separators(res)
        while self.current_tok.type != TT_EOF:
            statement = res.register(self.statement())
            if res.error:
                return res
            statements.append(statement)
            self.skip_separators(res)

        return res.success(statements)

    ###################################

    def statement(self):
        tok = self.current_tok

        if tok.matches(TT_KEYWORD, "try"):
            return self.try_catch()
        if tok.matches(TT_KEYWORD, "function"):
            return self.func_def()
        if tok.matches(TT_KEYWORD, "if"):
            return self.if_stmt()
        if tok.matches(TT_KEYWORD, "while"):
            return self.while_stmt()
        if tok.type == TT_LBRACE:
            return self.block()
        if tok.matches(TT_KEYWORD, "return"):
            return self.return_stmt()
        if tok.type == TT_IDENTIFIER and self.peek().type == TT_EQ:
            return self.assignment()
        return self.expr()

    def assignment(self):
        res = ParseResult()
        var_name_tok = self.current_tok
        res.register_advancement()
        self.advance()
        res.register_advancement()
        self.advance()

        value_node = res.register(self.expr())
        if res.error:
            return res
        return res.success(VarAssignNode(var_name_tok, value_node))

    def block(self):
        res = ParseResult()
        pos_start = self.current_tok.pos_start.copy()

        if self.current_tok.type != TT_LBRACE:
            found = describe(self.current_tok)
            return res.failure(
                self.error(
                    "Block Error",
                    f"متوقع '{{' لبداية الكتلة لكن وجد {found}",
                    f"Expected '{{' to open a block but found {found}",
                    "ضع جسم الجملة بين { و }",
                )
            )
        res.register_advancement()
        self.advance()

        statements = []
        self.skip_separators(res)
        while self.current_tok.type != TT_RBRACE:
            if self.current_tok.type == TT_EOF:
                return res.failure(
                    self.error(
                        "Block Error",
                        "الكتلة غير مغلقة، متوقع '}'",
                        "Unclosed block, expected '}'",
                        "أضف '}' في نهاية الكتلة",
                    )
                )
            statement = res.register(self.statement())
            if res.error:
                return res
            statements.append(statement)
            self.skip_separators(res)

        pos_end = self.current_tok.pos_end.copy()
        res.register_advancement()
        self.advance()
        return res.success(BlockNode(statements, pos_start, pos_end))

    def if_stmt(self):
        res = ParseResult()
        pos_start = self.current_tok.pos_start.copy()
        res.register_advancement()
        self.advance()

        condition = res.register(self.expr())
        if res.error:
            return res

        then_node = res.register(self.block())
        if res.error:
            return res

        else_node = None
        skipped = 0
        while self.current_tok.type == TT_NEWLINE:
            self.advance()
            skipped += 1

        if self.current_tok.matches(TT_KEYWORD, "else"):
            res.advance_count += skipped
            res.register_advancement()
            self.advance()

            if self.current_tok.matches(TT_KEYWORD, "if"):
                else_node = res.register(self.if_stmt())
            else:
                else_node = res.register(self.block())
            if res.error:
                return res
        elif skipped:
            self.reverse(skipped)

        return res.success(IfNode(condition, then_node, else_node, pos_start))

    def while_stmt(self):
        res = ParseResult()
        pos_start = self.current_tok.pos_start.copy()
        res.register_advancement()
        self.advance()

        condition = res.register(self.expr())
        if res.error:
            return res

        body = res.register(self.block())
        if res.error:
            return res

        return res.success(WhileNode(condition, body, pos_start))

    def func_def(self):
        res = ParseResult()
        pos_start = self.current_tok.pos_start.copy()
        res.register_advancement()
        self.advance()

        if self.current_tok.type != TT_IDENTIFIER:
            found = describe(self.current_tok)
            return res.failure(
                self.error(
                    "Function Name Error",
                    f"متوقع اسم الدالة لكن وجد {found}",
                    f"Expected function name but found {found}",
                    "اكتب اسم الدالة بعد الكلمة دالة",
                )
            )
        func_name_tok = self.current_tok
        res.register_advancement()
        self.advance()

        if self.current_tok.type != TT_LPAREN:
            return res.failure(self.expected("'('", "'('"))
        res.register_advancement()
        self.advance()

        arg_name_toks = []
        if self.current_tok.type != TT_RPAREN:
            while True:
                if self.current_tok.type != TT_IDENTIFIER:
                    found = describe(self.current_tok)
                    return res.failure(
                        self.error(
                            "Parameter Name Error",
                            f"متوقع اسم معامل لكن وجد {found}",
                            f"Expected parameter name but found {found}",
                            "المعاملات أسماء مفصولة بفواصل بدون فاصلة أخيرة",
                        )
                    )
                arg_name_toks.append(self.current_tok)
                res.register_advancement()
                self.advance()

                if self.current_tok.type == TT_COMMA:
                    res.register_advancement()
                    self.advance()
                elif self.current_tok.type == TT_RPAREN:
                    break
                else:
                    return res.failure(self.expected("',' أو ')'", "',' or ')'"))

        res.register_advancement()
        self.advance()

        body = res.register(self.block())
        if res.error:
            return res

        return res.success(FuncDefNode(func_name_tok, arg_name_toks, body, pos_start))

    def return_stmt(self):
        res = ParseResult()
        pos_start = self.current_tok.pos_start.copy()
        pos_end = self.current_tok.pos_end.copy()
        res.register_advancement()
        self.advance()

        node = None
        if self.current_tok.type not in (TT_NEWLINE, TT_SEMICOLON, TT_RBRACE, TT_EOF):
            node = res.register(self.expr())
            if res.error:
                return res
            pos_end = node.pos_end

        return res.success(ReturnNode(node, pos_start, pos_end))

    def try_catch(self):
        res = ParseResult()
        pos_start = self.current_tok.pos_start.copy()
        res.register_advancement()
        self.advance()

        try_node = res.register(self.block())
        if res.error:
            return res

        self.skip_newlines(res)
        if not self.current_tok.matches(TT_KEYWORD, "catch"):
            found = describe(self.current_tok)
            return res.failure(
                self.error(
                    "Try/Catch Error",
                    f"متوقع 'امسك' بعد كتلة 'جرب' لكن وجد {found}",
                    f"Expected 'catch' after 'try' block but found {found}",
                    "أضف امسك(خطأ_ما) { ... } بعد كتلة جرب",
                )
            )
        res.register_advancement()
        self.advance()

        error_var_tok = None
        if self.current_tok.type == TT_LPAREN:
            res.register_advancement()
            self.advance()

            if self.current_tok.type == TT_IDENTIFIER:
                error_var_tok = self.current_tok
                res.register_advancement()
                self.advance()
            elif self.current_tok.type != TT_RPAREN:
                found = describe(self.current_tok)
                return res.failure(
                    self.error(
                        "Catch Variable Error",
                        f"اسم متغير الخطأ غير مدعوم: {found}",
                        f"Unsupported error variable name: {found}",
                        "استخدم اسم متغير عادي مثل امسك(م)",
                    )
                )

            if self.current_tok.type != TT_RPAREN:
                found = describe(self.current_tok)
                return res.failure(
                    self.error(
                        "Catch Variable Error",
                        f"متوقع ')' بعد متغير الخطأ لكن وجد {found}",
                        f"Expected ')' after error variable but found {found}",
                    )
                )
            res.register_advancement()
            self.advance()

        catch_node = res.register(self.block())
        if res.error:
            return res

        return res.success(TryCatchNode(try_node, catch_node, error_var_tok, pos_start))

    ###################################

    def expr(self, min_prec=1):
        res = ParseResult()
        left = res.register(self.unary())
        if res.error:
            return res

        while True:
            op_tok = self.current_tok
            key = (op_tok.type, op_tok.value if op_tok.type == TT_KEYWORD else None)
            prec = BINARY_PRECEDENCE.get(key)
            if prec is None or prec < min_prec:
                break

            res.register_advancement()
            self.advance()
            right = res.register(self.expr(prec + 1))
            if res.error:
                return res
            left = BinOpNode(left, op_tok, right)

        return res.success(left)

    def unary(self):
        res = ParseResult()
        tok = self.current_tok

        if tok.type == TT_MINUS or tok.matches(TT_KEYWORD, "not"):
            res.register_advancement()
            self.advance()
            node = res.register(self.unary())
            if res.error:
                return res
            return res.success(UnaryOpNode(tok, node))

        return self.postfix()

    def postfix(self):
        res = ParseResult()
        node = res.register(self.primary())
        if res.error:
            return res

        while self.current_tok.type == TT_LSQUARE:
            res.register_advancement()
            self.advance()
            index = res.register(self.expr())
            if res.error:
                return res
            if self.current_tok.type != TT_RSQUARE:
                return res.failure(self.expected("']'", "']'"))
            pos_end = self.current_tok.pos_end.copy()
            res.register_advancement()
            self.advance()
            node = IndexNode(node, index, pos_end)

        return res.success(node)

    def primary(self):
        res = ParseResult()
        tok = self.current_tok

        if tok.type == TT_NUMBER:
            res.register_advancement()
            self.advance()
            return res.success(NumberNode(tok))

        if tok.type == TT_STRING:
            res.register_advancement()
            self.advance()
            return res.success(StringNode(tok))

        if tok.matches(TT_KEYWORD, "true") or tok.matches(TT_KEYWORD, "false"):
            res.register_advancement()
            self.advance()
            return res.success(BoolNode(tok))

        if tok.type == TT_IDENTIFIER:
            res.register_advancement()
            self.advance()
            if self.current_tok.type == TT_LPAREN:
                return self.call(tok, res)
            return res.success(VarAccessNode(tok))

        if tok.type == TT_LPAREN:
            res.register_advancement()
            self.advance()
            self.skip_newlines(res)
            node = res.register(self.expr())
            if res.error:
                return res
            self.skip_newlines(res)
            if self.current_tok.type != TT_RPAREN:
                return res.failure(self.expected("')'", "')'"))
            res.register_advancement()
            self.advance()
            return res.success(node)

        if tok.type == TT_LSQUARE:
            return self.list_expr()

        found = describe(tok)
        return res.failure(
            self.error(
                "Parse Error",
                f"رمز غير متوقع: {found}",
                f"Unexpected token: {found}",
                "تحقق من صياغة التعبير",
            )
        )

    def comma_separated(self, res, closer, closer_text):
        nodes = []
        self.skip_newlines(res)
        if self.current_tok.type == closer:
            return nodes

        while True:
            node = res.register(self.expr())
            if res.error:
                return nodes
            nodes.append(node)
            self.skip_newlines(res)

            if self.current_tok.type == TT_COMMA:
                res.register_advancement()
                self.advance()
                self.skip_newlines(res)
            elif self.current_tok.type == closer:
                return nodes
            else:
                res.failure(
                    self.expected(f"',' أو {closer_text}", f"',' or {closer_text}")
                )
                return nodes

    def call(self, func_name_tok, res):
        res.register_advancement()
        self.advance()

        arg_nodes = self.comma_separated(res, TT_RPAREN, "')'")
        if res.error:
            return res

        pos_end = self.current_tok.pos_end.copy()
        res.register_advancement()
        self.advance()
        return res.success(CallNode(func_name_tok, arg_nodes, pos_end))

    def list_expr(self):
        res = ParseResult()
        pos_start = self.current_tok.pos_start.copy()
        res.register_advancement()
        self.advance()

        element_nodes = self.comma_separated(res, TT_RSQUARE, "']'")
        if res.error:
            return res

        pos_end = self.current_tok.pos_end.copy()
        res.register_advancement()
        self.advance()
        return res.success(ListNode(element_nodes, pos_start, pos_end))
