from colorama import Fore, Style


def get_line_from_text(text, line_number):
    if not text:
        return None
    lines = text.split("\n")
    if 0 <= line_number < len(lines):
        return lines[line_number]
    return None


def create_traceback_header(error_name, total_width=75):
    line1 = "-" * total_width + "\n"
    traceback_str = "Traceback (most recent call last)"
    remaining_space = total_width - len(error_name)
    line2 = f"{error_name}{traceback_str:>{remaining_space}}\n"
    return line1 + line2


class IqraError(Exception):
    """A bilingual Iqra failure.

    ``str(error)`` is the plain text bound to a ``catch`` variable;
    ``as_string()`` is the coloured console rendering.
    """

    __slots__ = [
        "kind",
        "message_ar",
        "message_en",
        "suggestion",
        "line",
        "pos_start",
        "pos_end",
        "error_name",
    ]

    def __init__(
        self,
        kind,
        message_ar,
        message_en,
        suggestion=None,
        pos_start=None,
        pos_end=None,
        line=None,
    ):
        super().__init__(message_en)
        self.kind = kind
        self.message_ar = message_ar
        self.message_en = message_en
        self.suggestion = suggestion
        self.pos_start = pos_start
        self.pos_end = pos_end
        self.line = line
        self.error_name = "Error"
        if line is None and pos_start is not None:
            self.line = pos_start.ln + 1

    def set_pos(self, pos_start=None, pos_end=None):
        if self.pos_start is None and pos_start is not None:
            self.pos_start = pos_start
            self.pos_end = pos_end
            if self.line is None:
                self.line = pos_start.ln + 1
        return self

    @property
    def details(self):
        return f"[{self.kind}] {self.message_ar} | {self.message_en}"

    def __str__(self):
        result = self.details
        if self.suggestion:
            result += f"\nاقتراح | Suggestion: {self.suggestion}"
        if self.line is not None:
            result += f"\nالسطر: {self.line} | Line: {self.line}"
        return result

    def __repr__(self):
        return f"{type(self).__name__}({self.kind!r}, line={self.line})"

    def location_lines(self):
        if self.pos_start is None:
            if self.line is None:
                return ""
            return f"  line {Fore.MAGENTA}{self.line}{Style.RESET_ALL}\n"
        return f'  File "{Fore.MAGENTA}{self.pos_start.fn}{Style.RESET_ALL}", line {Fore.MAGENTA}{self.pos_start.ln + 1}{Style.RESET_ALL}\n'

    def as_string(self):
        result = create_traceback_header(self.error_name)
        result += self.location_lines()

        if self.pos_start is not None:
            line_text = get_line_from_text(self.pos_start.ftxt, self.pos_start.ln)
            if line_text is not None:
                result += f"{Fore.LIGHTRED_EX}--> {line_text.strip()}{Style.RESET_ALL}\n"

        result += f"\n{Fore.LIGHTMAGENTA_EX}{Style.BRIGHT}{self.error_name}{Style.RESET_ALL}: {Fore.MAGENTA}{self.details}{Style.RESET_ALL}"
        if self.suggestion:
            result += f"\n{Fore.CYAN}اقتراح | Suggestion: {self.suggestion}{Style.RESET_ALL}"
        return result


class IllegalCharError(IqraError):
    def __init__(self, pos_start, pos_end, char):
        super().__init__(
            "Unknown Character",
            f"حرف غير معروف: '{char}'",
            f"Unknown character: '{char}'",
            "احذف هذا الحرف أو ضعه داخل نص",
            pos_start,
            pos_end,
        )
        self.error_name = "IllegalCharacterError"


class NumberError(IqraError):
    def __init__(self, pos_start, pos_end, text):
        super().__init__(
            "Number Error",
            f"رقم غير صالح: '{text}'",
            f"Invalid number: '{text}'",
            "استخدم نقطة عشرية واحدة على الأكثر",
            pos_start,
            pos_end,
        )
        self.error_name = "NumberError"


class StringError(IqraError):
    def __init__(self, pos_start, pos_end):
        super().__init__(
            "String Error",
            "نص غير مكتمل",
            "Unterminated string",
            'أغلق النص بعلامة "',
            pos_start,
            pos_end,
        )
        self.error_name = "StringError"


class InvalidSyntaxError(IqraError):
    def __init__(
        self, pos_start, pos_end, kind, message_ar, message_en, suggestion=None
    ):
        super().__init__(
            kind, message_ar, message_en, suggestion, pos_start, pos_end
        )
        self.error_name = "InvalidSyntaxError"


class RTError(IqraError):
    __slots__ = ["context"]

    def __init__(
        self,
        pos_start,
        pos_end,
        kind,
        message_ar,
        message_en,
        suggestion=None,
        context=None,
    ):
        super().__init__(
            kind, message_ar, message_en, suggestion, pos_start, pos_end
        )
        self.context = context
        self.error_name = "RuntimeError"

    def locate(self, pos_start, pos_end, context):
        self.set_pos(pos_start, pos_end)
        if self.context is None:
            self.context = context
        return self

    def generate_traceback_frames(self):
        frames = []
        ctx = self.context
        pos = self.pos_start
        while ctx:
            if pos:
                frames.append({"pos": pos, "display_name": ctx.display_name})
            pos = ctx.parent_entry_pos
            ctx = ctx.parent
        return list(reversed(frames))

    def location_lines(self):
        frames = self.generate_traceback_frames()
        if not frames:
            return super().location_lines()

        result = ""
        for frame in frames:
            pos = frame["pos"]
            display_name = frame["display_name"]
            result += f'  File "{Fore.MAGENTA}{pos.fn}{Style.RESET_ALL}", line {Fore.MAGENTA}{pos.ln + 1}{Style.RESET_ALL}, in {Fore.MAGENTA}{display_name}{Style.RESET_ALL}\n'
        return result


class TError(RTError):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.error_name = "TypeError"


class MError(RTError):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.error_name = "MathError"


class IError(RTError):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.error_name = "IOError"
