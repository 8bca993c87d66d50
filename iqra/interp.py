import logging
import sys
from datetime import date

from .consts import *
from .datatypes import *
from .errors import IError, RTError, TError
from .lexer import Lexer
from .nodes import *
from .parser import Parser
from .system import DefaultSystemExecutor
from .utils import RTResult

logger = logging.getLogger(__name__)

OPERATOR_METHODS = {
    TT_PLUS: "added_to",
    TT_MINUS: "subbed_by",
    TT_MUL: "multed_by",
    TT_DIV: "dived_by",
    TT_MOD: "moduled_by",
    TT_EE: "get_comparison_eq",
    TT_NE: "get_comparison_ne",
    TT_LT: "get_comparison_lt",
    TT_GT: "get_comparison_gt",
    TT_LTE: "get_comparison_lte",
    TT_GTE: "get_comparison_gte",
    "and": "anded_by",
    "or": "ored_by",
}


class BaseFunction:
    __slots__ = ("name", "pos_start", "pos_end", "context")

    def __init__(self, name):
        self.name = name or "?"
        self.set_pos()
        self.set_context()

    def set_pos(self, pos_start=None, pos_end=None):
        self.pos_start = pos_start
        self.pos_end = pos_end
        return self

    def set_context(self, context=None):
        self.context = context
        return self

    def generate_new_context(self, parent_symbol_table=None):
        new_context = Context(self.name, self.context, self.pos_start)
        new_context.symbol_table = SymbolTable(parent_symbol_table)
        return new_context

    def check_args(self, arg_names, args, exec_ctx):
        res = RTResult()
        if len(args) != len(arg_names):
            return res.failure(
                RTError(
                    self.pos_start,
                    self.pos_end,
                    "Argument Count Mismatch",
                    f"الدالة '{self.name}' تتوقع {len(arg_names)} وسائط لكن أعطيت {len(args)}",
                    f"'{self.name}' expects {len(arg_names)} argument(s) but {len(args)} were given",
                    "تأكد من عدد الوسائط المدخلة",
                    exec_ctx,
                )
            )
        return res.success(None)

    def populate_args(self, arg_names, args, exec_ctx):
        for arg_name, arg_value in zip(arg_names, args):
            exec_ctx.symbol_table.set(arg_name, arg_value)

    def check_and_populate_args(self, arg_names, args, exec_ctx):
        res = RTResult()
        res.register(self.check_args(arg_names, args, exec_ctx))
        if res.should_return():
            return res
        self.populate_args(arg_names, args, exec_ctx)
        return res.success(None)


class Function(BaseFunction):
    __slots__ = ("body_node", "arg_names")

    def __init__(self, name, body_node, arg_names):
        super().__init__(name)
        self.body_node = body_node
        self.arg_names = arg_names

    def execute(self, args, interpreter):
        res = RTResult()
        global_table = interpreter.runtime.global_context.symbol_table
        exec_ctx = self.generate_new_context(global_table)

        res.register(self.check_and_populate_args(self.arg_names, args, exec_ctx))
        if res.should_return():
            return res

        value = res.register(interpreter.visit(self.body_node, exec_ctx))
        if res.error:
            return res
        if res.func_return_value is not None:
            return res.success(res.func_return_value)
        return res.success(value)

    def copy(self):
        copy = Function(self.name, self.body_node, self.arg_names)
        copy.set_context(self.context)
        copy.set_pos(self.pos_start, self.pos_end)
        return copy

    def __repr__(self):
        return f"<function {self.name}({', '.join(self.arg_names)})>"


class BuiltInFunction(BaseFunction):
    __slots__ = ("canonical", "runtime")

    def __init__(self, name, runtime):
        super().__init__(name)
        self.canonical = BUILTIN_FUNCTIONS[name]
        self.runtime = runtime

    def execute(self, args, interpreter):
        res = RTResult()
        exec_ctx = self.generate_new_context()
        method = getattr(self, f"execute_{self.canonical}", self.no_execute_method)

        if method.variadic:
            exec_ctx.symbol_table.set(method.arg_names[0], List(args))
        else:
            res.register(self.check_and_populate_args(method.arg_names, args, exec_ctx))
            if res.should_return():
                return res

        return_value = res.register(method(exec_ctx))
        if res.should_return():
            return res
        return res.success(return_value)

    def no_execute_method(self, _):
        raise Exception(f"No execute_{self.canonical} method defined")

    no_execute_method.arg_names = []
    no_execute_method.variadic = False

    def __repr__(self):
        return f"<built-in function {self.name}>"

    @staticmethod
    def set_args(arg_names, variadic=False):
        def _args(f):
            f.arg_names = arg_names
            f.variadic = variadic
            return f

        return _args

    ###################################

    def wrong_type(self, exec_ctx, expected_ar, expected_en, kind="Invalid Argument Type"):
        return RTResult().failure(
            TError(
                self.pos_start,
                self.pos_end,
                kind,
                f"الدالة {self.name} تتوقع {expected_ar}",
                f"{self.name} expects {expected_en}",
                "تأكد من نوع الوسائط",
                exec_ctx,
            )
        )

    def io_failure(self, exec_ctx, kind, action_ar, action_en, e, suggestion):
        return RTResult().failure(
            IError(
                self.pos_start,
                self.pos_end,
                kind,
                f"{action_ar}: {e}",
                f"{action_en}: {e}",
                suggestion,
                exec_ctx,
            )
        )

    def located(self, result, error, exec_ctx):
        if error:
            return RTResult().failure(error.locate(self.pos_start, self.pos_end, exec_ctx))
        return RTResult().success(result)

    def numbers_of(self, exec_ctx):
        """Returns (floats, failure) for the ``list`` argument."""
        lst = exec_ctx.symbol_table.get("list")
        if not isinstance(lst, List):
            return None, self.wrong_type(exec_ctx, "قائمة", "a list")
        if not all(isinstance(x, Number) for x in lst.value):
            return None, self.wrong_type(
                exec_ctx,
                "قائمة أرقام فقط",
                "a list of numbers",
                kind="Invalid Element Type",
            )
        return [x.value for x in lst.value], None

    ###################################

    @set_args(["values"], variadic=True)
    def execute_print(self, exec_ctx):
        values = exec_ctx.symbol_table.get("values")
        print(" ".join(str(x) for x in values.value))
        return RTResult().success(Nil.nil)

    @set_args(["values"], variadic=True)
    def execute_list(self, exec_ctx):
        return RTResult().success(exec_ctx.symbol_table.get("values"))

    @set_args(["list"])
    def execute_list_len(self, exec_ctx):
        lst = exec_ctx.symbol_table.get("list")
        if not isinstance(lst, List):
            return self.wrong_type(exec_ctx, "قائمة", "a list")
        return RTResult().success(Number(len(lst.value)))

    @set_args(["collection", "index"])
    def execute_get(self, exec_ctx):
        collection = exec_ctx.symbol_table.get("collection")
        index = exec_ctx.symbol_table.get("index")
        return self.located(*collection.indexed_by(index), exec_ctx)

    @set_args(["list", "value"])
    def execute_append(self, exec_ctx):
        lst = exec_ctx.symbol_table.get("list")
        value = exec_ctx.symbol_table.get("value")
        if not isinstance(lst, List):
            return self.wrong_type(exec_ctx, "قائمة كوسيط أول", "a list as first argument")
        return RTResult().success(List(lst.value + [value]))

    @set_args(["list", "value"])
    def execute_remove(self, exec_ctx):
        lst = exec_ctx.symbol_table.get("list")
        value = exec_ctx.symbol_table.get("value")
        if not isinstance(lst, List):
            return self.wrong_type(exec_ctx, "قائمة كوسيط أول", "a list as first argument")
        return RTResult().success(List(x for x in lst.value if x != value))

    @set_args(["list", "value"])
    def execute_contains(self, exec_ctx):
        lst = exec_ctx.symbol_table.get("list")
        value = exec_ctx.symbol_table.get("value")
        if not isinstance(lst, List):
            return self.wrong_type(exec_ctx, "قائمة كوسيط أول", "a list as first argument")
        return RTResult().success(Bool.of(value in lst.value))

    @set_args(["values"], variadic=True)
    def execute_map(self, exec_ctx):
        values = exec_ctx.symbol_table.get("values").value
        if len(values) % 2 != 0:
            return RTResult().failure(
                RTError(
                    self.pos_start,
                    self.pos_end,
                    "Argument Count Mismatch",
                    f"الدالة {self.name} تتوقع عددًا زوجيًا من الوسائط",
                    f"{self.name} expects an even number of arguments",
                    "استخدم أزواج مفتاح/قيمة",
                    exec_ctx,
                )
            )

        entries = {}
        for key, value in zip(values[::2], values[1::2]):
            if not isinstance(key, String):
                return self.wrong_type(
                    exec_ctx, "مفاتيح نصية", "string keys", kind="Invalid Key Type"
                )
            entries[key.value] = value
        return RTResult().success(Map(entries))

    @set_args(["map", "key"])
    def execute_map_get(self, exec_ctx):
        map_ = exec_ctx.symbol_table.get("map")
        key = exec_ctx.symbol_table.get("key")
        return self.located(*map_.indexed_by(key), exec_ctx)

    @set_args(["map", "key", "value"])
    def execute_map_set(self, exec_ctx):
        map_ = exec_ctx.symbol_table.get("map")
        key = exec_ctx.symbol_table.get("key")
        value = exec_ctx.symbol_table.get("value")
        if not isinstance(map_, Map) or not isinstance(key, String):
            return self.wrong_type(exec_ctx, "قاموسًا ومفتاحًا نصيًا", "a map and a string key")
        entries = dict(map_.value)
        entries[key.value] = value
        return RTResult().success(Map(entries))

    @set_args(["map", "key"])
    def execute_map_remove(self, exec_ctx):
        map_ = exec_ctx.symbol_table.get("map")
        key = exec_ctx.symbol_table.get("key")
        if not isinstance(map_, Map) or not isinstance(key, String):
            return self.wrong_type(exec_ctx, "قاموسًا ومفتاحًا نصيًا", "a map and a string key")
        entries = dict(map_.value)
        entries.pop(key.value, None)
        return RTResult().success(Map(entries))

    @set_args(["value"])
    def execute_type(self, exec_ctx):
        value = exec_ctx.symbol_table.get("value")
        return RTResult().success(String(value.type_name()))

    @set_args(["value"])
    def execute_to_number(self, exec_ctx):
        value = exec_ctx.symbol_table.get("value")
        return self.located(*value.to_number(), exec_ctx)

    @set_args(["value"])
    def execute_to_string(self, exec_ctx):
        value = exec_ctx.symbol_table.get("value")
        return RTResult().success(String(str(value)))

    @set_args(["value"])
    def execute_is_number(self, exec_ctx):
        value = exec_ctx.symbol_table.get("value")
        return RTResult().success(Bool.of(isinstance(value, Number)))

    @set_args(["value"])
    def execute_is_string(self, exec_ctx):
        value = exec_ctx.symbol_table.get("value")
        return RTResult().success(Bool.of(isinstance(value, String)))

    @set_args(["value"])
    def execute_len(self, exec_ctx):
        value = exec_ctx.symbol_table.get("value")
        if not isinstance(value, (String, List)):
            return self.wrong_type(exec_ctx, "نصًا أو قائمة", "a string or list")
        return RTResult().success(Number(len(value.value)))

    @set_args(["list"])
    def execute_sum(self, exec_ctx):
        numbers, failure = self.numbers_of(exec_ctx)
        if failure:
            return failure
        return RTResult().success(Number(sum(numbers)))

    @set_args(["list"])
    def execute_average(self, exec_ctx):
        numbers, failure = self.numbers_of(exec_ctx)
        if failure:
            return failure
        # an empty list averages to 0 while max/min reject it
        if not numbers:
            return RTResult().success(Number(0))
        return RTResult().success(Number(sum(numbers) / len(numbers)))

    def extreme(self, exec_ctx, pick):
        numbers, failure = self.numbers_of(exec_ctx)
        if failure:
            return failure
        if not numbers:
            return RTResult().failure(
                RTError(
                    self.pos_start,
                    self.pos_end,
                    "Empty List",
                    f"الدالة {self.name} تتوقع قائمة غير فارغة",
                    f"{self.name} expects a non-empty list",
                    "استخدم قائمة فيها عناصر",
                    exec_ctx,
                )
            )
        return RTResult().success(Number(pick(numbers)))

    @set_args(["list"])
    def execute_max(self, exec_ctx):
        return self.extreme(exec_ctx, max)

    @set_args(["list"])
    def execute_min(self, exec_ctx):
        return self.extreme(exec_ctx, min)

    @set_args(["text"])
    def execute_word_count(self, exec_ctx):
        text = exec_ctx.symbol_table.get("text")
        if not isinstance(text, String):
            return self.wrong_type(exec_ctx, "نصًا", "a string")
        return RTResult().success(Number(len(text.value.split())))

    @set_args(["value"])
    def execute_reverse(self, exec_ctx):
        value = exec_ctx.symbol_table.get("value")
        if isinstance(value, String):
            return RTResult().success(String(value.value[::-1]))
        if isinstance(value, List):
            return RTResult().success(List(reversed(value.value)))
        return self.wrong_type(exec_ctx, "نصًا أو قائمة", "a string or list")

    @set_args([])
    def execute_today(self, exec_ctx):
        if self.runtime.today_cache is None:
            self.runtime.today_cache = date.today().strftime("%Y-%m-%d")
            logger.debug("cached today as %s", self.runtime.today_cache)
        return RTResult().success(String(self.runtime.today_cache))

    @set_args(["command"])
    def execute_system(self, exec_ctx):
        command = exec_ctx.symbol_table.get("command")
        if not isinstance(command, String):
            return self.wrong_type(exec_ctx, "نصًا يمثل الأمر", "a string command")
        try:
            output = self.runtime.system_executor.exec(command.value)
        except (OSError, ValueError) as e:
            return self.io_failure(
                exec_ctx,
                "System Command Error",
                "فشل تنفيذ الأمر",
                "System command failed",
                e,
                "تأكد من صحة الأمر وصلاحيات التنفيذ",
            )
        return RTResult().success(String(output.strip()))

    @set_args(["command", "input"])
    def execute_system_with_io(self, exec_ctx):
        command = exec_ctx.symbol_table.get("command")
        input_text = exec_ctx.symbol_table.get("input")
        if not isinstance(command, String) or not isinstance(input_text, String):
            return self.wrong_type(exec_ctx, "نصين: الأمر والمدخل", "string arguments")
        try:
            output = self.runtime.system_executor.exec_with_io(
                command.value, input_text.value
            )
        except (OSError, ValueError) as e:
            return self.io_failure(
                exec_ctx,
                "System Command Error",
                "فشل تنفيذ الأمر بمدخل",
                "System command failed",
                e,
                "تأكد من صحة الأمر والمدخل وصلاحيات التنفيذ",
            )
        return RTResult().success(String(output.strip()))

    @set_args(["path"])
    def execute_read_file(self, exec_ctx):
        path = exec_ctx.symbol_table.get("path")
        if not isinstance(path, String):
            return self.wrong_type(exec_ctx, "نصًا يمثل المسار", "a string path")
        try:
            content = self.runtime.system_executor.read_file(path.value)
        except (OSError, ValueError) as e:
            return self.io_failure(
                exec_ctx,
                "File Read Error",
                "فشل قراءة الملف",
                "Failed to read file",
                e,
                "تأكد من صحة المسار وصلاحيات القراءة",
            )
        return RTResult().success(String(content))

    @set_args(["path", "content"])
    def execute_write_file(self, exec_ctx):
        path = exec_ctx.symbol_table.get("path")
        content = exec_ctx.symbol_table.get("content")
        if not isinstance(path, String) or not isinstance(content, String):
            return self.wrong_type(exec_ctx, "نصين: المسار والمحتوى", "string arguments")
        try:
            success = self.runtime.system_executor.write_file(path.value, content.value)
        except (OSError, ValueError) as e:
            return self.io_failure(
                exec_ctx,
                "File Write Error",
                "فشل كتابة الملف",
                "Failed to write file",
                e,
                "تأكد من صحة المسار وصلاحيات الكتابة",
            )
        return RTResult().success(Bool.of(success))

    @set_args(["path"])
    def execute_list_files(self, exec_ctx):
        path = exec_ctx.symbol_table.get("path")
        if not isinstance(path, String):
            return self.wrong_type(exec_ctx, "نصًا يمثل المسار", "a string path")
        try:
            names = self.runtime.system_executor.list_files(path.value)
        except (OSError, ValueError) as e:
            return self.io_failure(
                exec_ctx,
                "List Files Error",
                "فشل جلب قائمة الملفات",
                "Failed to list files",
                e,
                "تأكد من صحة المسار وصلاحيات القراءة",
            )
        return RTResult().success(List(String(name) for name in names))

    @set_args(["name"])
    def execute_env_var(self, exec_ctx):
        name = exec_ctx.symbol_table.get("name")
        if not isinstance(name, String):
            return self.wrong_type(exec_ctx, "نصًا يمثل اسم المتغير", "a string name")
        value = self.runtime.system_executor.get_env_var(name.value)
        if value is None:
            return RTResult().success(Nil.nil)
        return RTResult().success(String(value))

    @set_args([])
    def execute_system_info(self, exec_ctx):
        if self.runtime.system_info_cache is None:
            try:
                info = self.runtime.system_executor.system_info()
            except (OSError, ValueError) as e:
                return self.io_failure(
                    exec_ctx,
                    "System Info Error",
                    "فشل جلب معلومات النظام",
                    "Failed to get system info",
                    e,
                    "تأكد من صلاحيات النظام",
                )
            self.runtime.system_info_cache = dict(info)
            logger.debug("cached system info: %s", sorted(info))
        return RTResult().success(
            Map({k: String(v) for k, v in self.runtime.system_info_cache.items()})
        )


class Interpreter:
    def __init__(self, runtime):
        self.runtime = runtime
        self.visit_table = {}
        for attr_name in dir(self):
            if attr_name.startswith("visit_"):
                method = getattr(self, attr_name)
                if callable(method):
                    node_type = attr_name[len("visit_") :]
                    self.visit_table[node_type] = method

    def visit(self, node, context):
        node_type = type(node).__name__
        method = self.visit_table.get(node_type)
        if method is None:
            raise Exception(f"No visit method defined for {node_type}")
        return method(node, context)

    ###################################

    def visit_NumberNode(self, node, context):
        return RTResult().success(Number(node.tok.value))

    def visit_StringNode(self, node, context):
        return RTResult().success(String(node.tok.value))

    def visit_BoolNode(self, node, context):
        return RTResult().success(Bool.of(node.tok.value == "true"))

    def visit_ListNode(self, node, context):
        res = RTResult()
        elements = []
        for element_node in node.element_nodes:
            elements.append(res.register(self.visit(element_node, context)))
            if res.should_return():
                return res
        return res.success(List(elements))

    def visit_VarAccessNode(self, node, context):
        res = RTResult()
        var_name = node.var_name_tok.value
        value = context.symbol_table.get(var_name)

        if value is None:
            return res.failure(
                RTError(
                    node.pos_start,
                    node.pos_end,
                    "Undefined Variable",
                    f"المتغير غير معرف: {var_name}",
                    f"Undefined variable: {var_name}",
                    "تأكد من تعريف المتغير قبل استخدامه",
                    context,
                )
            )
        return res.success(value)

    def visit_VarAssignNode(self, node, context):
        res = RTResult()
        value = res.register(self.visit(node.value_node, context))
        if res.should_return():
            return res

        context.symbol_table.set(node.var_name_tok.value, value)
        return res.success(value)

    def visit_BinOpNode(self, node, context):
        res = RTResult()
        # both sides are always evaluated, and/or included
        left = res.register(self.visit(node.left_node, context))
        if res.should_return():
            return res
        right = res.register(self.visit(node.right_node, context))
        if res.should_return():
            return res

        op_tok = node.op_tok
        key = op_tok.value if op_tok.type == TT_KEYWORD else op_tok.type
        result, error = getattr(left, OPERATOR_METHODS[key])(right)
        if error:
            return res.failure(error.locate(node.pos_start, node.pos_end, context))
        return res.success(result)

    def visit_UnaryOpNode(self, node, context):
        res = RTResult()
        operand = res.register(self.visit(node.node, context))
        if res.should_return():
            return res

        if node.op_tok.type == TT_MINUS:
            result, error = operand.negated()
        else:
            result, error = operand.notted()

        if error:
            return res.failure(error.locate(node.pos_start, node.pos_end, context))
        return res.success(result)

    def visit_IndexNode(self, node, context):
        res = RTResult()
        obj = res.register(self.visit(node.obj_node, context))
        if res.should_return():
            return res
        index = res.register(self.visit(node.index_node, context))
        if res.should_return():
            return res

        result, error = obj.indexed_by(index)
        if error:
            return res.failure(error.locate(node.pos_start, node.pos_end, context))
        return res.success(result)

    def visit_CallNode(self, node, context):
        res = RTResult()
        name = node.func_name_tok.value

        args = []
        for arg_node in node.arg_nodes:
            args.append(res.register(self.visit(arg_node, context)))
            if res.should_return():
                return res

        if name in self.runtime.functions:
            func = self.runtime.functions[name].copy()
        elif name in BUILTIN_FUNCTIONS:
            func = BuiltInFunction(name, self.runtime)
        else:
            return res.failure(
                RTError(
                    node.pos_start,
                    node.pos_end,
                    "Undefined Function",
                    f"الدالة غير معرفة: {name}",
                    f"Undefined function: {name}",
                    "تأكد من كتابة اسم الدالة بشكل صحيح",
                    context,
                )
            )

        func.set_pos(node.pos_start, node.pos_end).set_context(context)
        return_value = res.register(func.execute(args, self))
        if res.should_return():
            return res
        return res.success(return_value)

    def visit_BlockNode(self, node, context):
        res = RTResult()
        value = Nil.nil
        for statement_node in node.statement_nodes:
            value = res.register(self.visit(statement_node, context))
            if res.should_return():
                return res
        return res.success(value)

    def visit_IfNode(self, node, context):
        res = RTResult()
        condition = res.register(self.visit(node.condition_node, context))
        if res.should_return():
            return res

        if condition.is_truthy():
            branch = node.then_node
        elif node.else_node is not None:
            branch = node.else_node
        else:
            return res.success(Nil.nil)

        value = res.register(self.visit(branch, context))
        if res.should_return():
            return res
        return res.success(value)

    def visit_WhileNode(self, node, context):
        res = RTResult()
        value = Nil.nil

        while True:
            condition = res.register(self.visit(node.condition_node, context))
            if res.should_return():
                return res
            if not condition.is_truthy():
                break

            value = res.register(self.visit(node.body_node, context))
            if res.should_return():
                return res

        return res.success(value)

    def visit_FuncDefNode(self, node, context):
        func_name = node.func_name_tok.value
        arg_names = [tok.value for tok in node.arg_name_toks]
        self.runtime.functions[func_name] = Function(func_name, node.body_node, arg_names)
        logger.debug("registered function %s(%s)", func_name, ", ".join(arg_names))
        return RTResult().success(Nil.nil)

    def visit_ReturnNode(self, node, context):
        res = RTResult()
        value = Nil.nil
        if node.node_to_return is not None:
            value = res.register(self.visit(node.node_to_return, context))
            if res.should_return():
                return res
        return res.success_return(value)

    def visit_TryCatchNode(self, node, context):
        res = RTResult()
        try_res = self.visit(node.try_node, context)
        if try_res.error is None:
            return try_res

        if node.error_var_tok is not None:
            context.symbol_table.set(node.error_var_tok.value, String(str(try_res.error)))

        value = res.register(self.visit(node.catch_node, context))
        if res.should_return():
            return res
        return res.success(value)


class Runtime:
    """A fresh interpreter state: global frame, function table and caches.

    ``today`` and ``system_info`` are computed on first use and kept for
    the lifetime of the instance.
    """

    __slots__ = (
        "system_executor",
        "global_context",
        "functions",
        "today_cache",
        "system_info_cache",
        "interpreter",
    )

    def __init__(self, system_executor=None):
        if sys.getrecursionlimit() < RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)
        self.system_executor = system_executor or DefaultSystemExecutor()
        self.global_context = Context("<program>")
        self.global_context.symbol_table = SymbolTable()
        self.functions = {}
        self.today_cache = None
        self.system_info_cache = None
        self.interpreter = Interpreter(self)

    @property
    def variables(self):
        return dict(self.global_context.symbol_table.symbols)

    def parse(self, text, fn="<string>"):
        lexer = Lexer(fn, text)
        tokens, error = lexer.make_tokens()
        if error:
            return None, error

        parser = Parser(tokens)
        ast = parser.parse()
        if ast.error:
            return None, ast.error
        return ast.node, None

    def run(self, fn, text):
        statements, error = self.parse(text, fn)
        if error:
            return None, error

        value = Nil.nil
        for statement in statements:
            res = self.interpreter.visit(statement, self.global_context)
            if res.error:
                return None, res.error
            if res.func_return_value is not None:
                return res.func_return_value, None
            value = res.value
        return value, None

    def execute(self, text, fn="<string>"):
        value, error = self.run(fn, text)
        if error:
            raise error
        return value
