import math

from .consts import ARABIC_DIGIT_MAP
from .errors import MError, TError


class Context:
    __slots__ = ("display_name", "parent", "parent_entry_pos", "symbol_table")

    def __init__(self, display_name, parent=None, parent_entry_pos=None):
        self.display_name = display_name
        self.parent = parent
        self.parent_entry_pos = parent_entry_pos
        self.symbol_table = None


class SymbolTable:
    __slots__ = ("symbols", "parent")

    def __init__(self, parent=None):
        self.symbols = {}
        self.parent = parent

    def get(self, name):
        value = self.symbols.get(name, None)
        if value is None and self.parent:
            return self.parent.get(name)
        return value

    def set(self, name, value):
        self.symbols[name] = value


def conversion_error(value, target_en, target_ar, detail_en=None, detail_ar=None):
    return TError(
        None,
        None,
        "Conversion Error",
        detail_ar or f"لا يمكن تحويل النوع '{value.type_name_ar()}' إلى {target_ar}",
        detail_en or f"Cannot convert type '{value.type_name()}' to {target_en}",
        "استخدم نوعًا مناسبًا | Use a suitable type",
    )


class Value:
    """Base of the closed set of runtime values.

    Operator methods return ``(value, error)``; errors carry no position
    until the interpreter locates them on the node that failed.
    """

    __slots__ = ("value",)

    type_en = "value"
    type_ar = "قيمة"

    def __init__(self, value=None):
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return type(self) is type(other) and self.value == other.value

    __hash__ = None

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"

    def type_name(self):
        return self.type_en

    def type_name_ar(self):
        return self.type_ar

    def is_truthy(self):
        return bool(self.value)

    ###################################

    def to_number(self):
        return None, conversion_error(self, "number", "رقم")

    def to_string(self):
        return String(str(self)), None

    def to_list(self):
        return None, conversion_error(self, "list", "قائمة")

    def to_map(self):
        return None, conversion_error(self, "map", "قاموس")

    ###################################

    def illegal_operation(self, other, op):
        return TError(
            None,
            None,
            "Invalid Operand Type",
            f"لا يمكن تطبيق '{op}' على '{self.type_name_ar()}' و '{other.type_name_ar()}'",
            f"Cannot apply '{op}' to '{self.type_name()}' and '{other.type_name()}'",
            "تأكد من أن المعاملات من النوع الصحيح",
        )

    def added_to(self, other):
        return None, self.illegal_operation(other, "+")

    def subbed_by(self, other):
        return None, self.illegal_operation(other, "-")

    def multed_by(self, other):
        return None, self.illegal_operation(other, "*")

    def dived_by(self, other):
        return None, self.illegal_operation(other, "/")

    def moduled_by(self, other):
        return None, self.illegal_operation(other, "%")

    def get_comparison_lt(self, other):
        return None, self.illegal_operation(other, "<")

    def get_comparison_gt(self, other):
        return None, self.illegal_operation(other, ">")

    def get_comparison_lte(self, other):
        return None, self.illegal_operation(other, "<=")

    def get_comparison_gte(self, other):
        return None, self.illegal_operation(other, ">=")

    def get_comparison_eq(self, other):
        return Bool.of(self == other), None

    def get_comparison_ne(self, other):
        return Bool.of(self != other), None

    def anded_by(self, other):
        return Bool.of(self.is_truthy() and other.is_truthy()), None

    def ored_by(self, other):
        return Bool.of(self.is_truthy() or other.is_truthy()), None

    def notted(self):
        return Bool.of(not self.is_truthy()), None

    def negated(self):
        return None, TError(
            None,
            None,
            "Invalid Operand Type",
            f"لا يمكن تطبيق '-' على '{self.type_name_ar()}'",
            f"Cannot apply unary '-' to '{self.type_name()}'",
            "استخدم رقمًا",
        )

    def indexed_by(self, index):
        return None, TError(
            None,
            None,
            "Invalid Indexing Operation",
            f"لا يمكن فهرسة '{self.type_name_ar()}' باستخدام '{index.type_name_ar()}'",
            f"Cannot index '{self.type_name()}' with '{index.type_name()}'",
            "فهرس القوائم بالأرقام والقواميس بالنصوص",
        )


class Nil(Value):
    __slots__ = ()

    type_en = "nil"
    type_ar = "فارغ"

    def __str__(self):
        return "فارغ"

    def is_truthy(self):
        return False


Nil.nil = Nil()


class Bool(Value):
    __slots__ = ()

    type_en = "bool"
    type_ar = "منطقي"

    def __init__(self, value):
        super().__init__(bool(value))

    @staticmethod
    def of(value):
        return Bool.true if value else Bool.false

    def __str__(self):
        return "صحيح" if self.value else "خطأ"


Bool.true = Bool(True)
Bool.false = Bool(False)


class Number(Value):
    __slots__ = ()

    type_en = "number"
    type_ar = "رقم"

    def __init__(self, value):
        super().__init__(float(value))

    def __str__(self):
        if math.isfinite(self.value) and self.value == int(self.value):
            return str(int(self.value))
        return str(self.value)

    def is_truthy(self):
        return self.value != 0.0

    def to_number(self):
        return self, None

    def _arith(self, other, op, fn):
        if isinstance(other, Number):
            return Number(fn(self.value, other.value)), None
        return None, self.illegal_operation(other, op)

    def _compare(self, other, op, fn):
        if isinstance(other, Number):
            return Bool.of(fn(self.value, other.value)), None
        return None, self.illegal_operation(other, op)

    def added_to(self, other):
        return self._arith(other, "+", lambda a, b: a + b)

    def subbed_by(self, other):
        return self._arith(other, "-", lambda a, b: a - b)

    def multed_by(self, other):
        return self._arith(other, "*", lambda a, b: a * b)

    def dived_by(self, other):
        if isinstance(other, Number) and other.value == 0.0:
            return None, MError(
                None,
                None,
                "Division by Zero",
                "لا يمكن القسمة على صفر",
                "Cannot divide by zero",
                "تأكد من أن المقسوم عليه ليس صفرًا",
            )
        return self._arith(other, "/", lambda a, b: a / b)

    def moduled_by(self, other):
        if isinstance(other, Number) and other.value == 0.0:
            return None, MError(
                None,
                None,
                "Modulo by Zero",
                "لا يمكن حساب باقي القسمة على صفر",
                "Cannot take modulo by zero",
                "تأكد من أن المقسوم عليه ليس صفرًا",
            )
        return self._arith(other, "%", math.fmod)

    def get_comparison_lt(self, other):
        return self._compare(other, "<", lambda a, b: a < b)

    def get_comparison_gt(self, other):
        return self._compare(other, ">", lambda a, b: a > b)

    def get_comparison_lte(self, other):
        return self._compare(other, "<=", lambda a, b: a <= b)

    def get_comparison_gte(self, other):
        return self._compare(other, ">=", lambda a, b: a >= b)

    def negated(self):
        return Number(-self.value), None


class String(Value):
    __slots__ = ()

    type_en = "string"
    type_ar = "سلسلة"

    def __str__(self):
        return self.value

    def to_number(self):
        text = self.value.translate(ARABIC_DIGIT_MAP)
        # float() would also accept padding and digit separators
        if text != text.strip() or "_" in text:
            text = ""
        try:
            return Number(float(text)), None
        except ValueError:
            return None, conversion_error(
                self,
                "number",
                "رقم",
                f"Cannot convert string '{self.value}' to number",
                f"لا يمكن تحويل السلسلة '{self.value}' إلى رقم",
            )

    def to_string(self):
        return self, None

    def added_to(self, other):
        if isinstance(other, String):
            return String(self.value + other.value), None
        return None, self.illegal_operation(other, "+")


class List(Value):
    __slots__ = ()

    type_en = "list"
    type_ar = "قائمة"

    def __init__(self, elements=None):
        super().__init__(list(elements or []))

    def __str__(self):
        return "[" + ", ".join(str(x) for x in self.value) + "]"

    def to_string(self):
        return None, conversion_error(self, "string", "سلسلة")

    def to_list(self):
        return self, None

    def indexed_by(self, index):
        if not isinstance(index, Number):
            return super().indexed_by(index)

        size = len(self.value)
        if not math.isfinite(index.value) or index.value < 0:
            idx = None
        else:
            idx = int(index.value)
        if idx is None or idx >= size:
            return None, TError(
                None,
                None,
                "Index Out of Bounds",
                f"الفهرس {index} خارج حدود القائمة ذات الطول {size}",
                f"Index {index} is out of bounds for list of length {size}",
                f"استخدم فهرسًا بين 0 و {max(size - 1, 0)}",
            )
        return self.value[idx], None


class Map(Value):
    __slots__ = ()

    type_en = "map"
    type_ar = "قاموس"

    def __init__(self, entries=None):
        super().__init__(dict(entries or {}))

    def __str__(self):
        items = ", ".join(f"{k}: {v}" for k, v in self.value.items())
        return "{" + items + "}"

    def to_string(self):
        return None, conversion_error(self, "string", "سلسلة")

    def to_map(self):
        return self, None

    def indexed_by(self, index):
        if not isinstance(index, String):
            return super().indexed_by(index)

        if index.value not in self.value:
            return None, TError(
                None,
                None,
                "Key Not Found",
                f"المفتاح '{index.value}' غير موجود في القاموس",
                f"Key '{index.value}' not found in map",
                "تحقق من اسم المفتاح",
            )
        return self.value[index.value], None
