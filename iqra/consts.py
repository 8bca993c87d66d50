import string

INFO = "(v1.0.0, 2026-10-18)"

DIGITS = string.digits
LETTERS = string.ascii_letters
LETTERS_DIGITS = LETTERS + DIGITS

ARABIC_DIGITS = "٠١٢٣٤٥٦٧٨٩"
ARABIC_DIGIT_MAP = str.maketrans(ARABIC_DIGITS, DIGITS)
ARABIC_RANGES = (
    ("\u0600", "\u06ff"),
    ("\u0750", "\u077f"),
    ("\u08a0", "\u08ff"),
)

SHELL_FALLBACK_ENV = "IQRA_ALLOW_SHELL_FALLBACK"
SCRIPT_EXTENSION = ".iqra"

# each Iqra call level costs about ten Python frames
RECURSION_LIMIT = 10000

TT_NUMBER = "NUMBER"
TT_STRING = "STRING"
TT_IDENTIFIER = "IDENTIFIER"
TT_KEYWORD = "KEYWORD"
TT_PLUS = "PLUS"
TT_MINUS = "MINUS"
TT_MUL = "MUL"
TT_DIV = "DIV"
TT_MOD = "MOD"
TT_EQ = "EQ"
TT_EE = "EE"
TT_NE = "NE"
TT_LT = "LT"
TT_GT = "GT"
TT_LTE = "LTE"
TT_GTE = "GTE"
TT_LPAREN = "LPAREN"
TT_RPAREN = "RPAREN"
TT_LBRACE = "LBRACE"
TT_RBRACE = "RBRACE"
TT_LSQUARE = "LSQUARE"
TT_RSQUARE = "RSQUARE"
TT_COMMA = "COMMA"
TT_SEMICOLON = "SEMICOLON"
TT_NEWLINE = "NEWLINE"
TT_EOF = "EOF"

# spelling -> canonical keyword
KEYWORDS = {
    "اذا": "if",
    "إذا": "if",
    "if": "if",
    "وإلا": "else",
    "والا": "else",
    "وإلاّ": "else",
    "else": "else",
    "بينما": "while",
    "while": "while",
    "صحيح": "true",
    "true": "true",
    "خطأ": "false",
    "false": "false",
    "و": "and",
    "and": "and",
    "أو": "or",
    "or": "or",
    "ليس": "not",
    "not": "not",
    "دالة": "function",
    "function": "function",
    "def": "function",
    "ارجع": "return",
    "return": "return",
    "جرب": "try",
    "try": "try",
    "امسك": "catch",
    "catch": "catch",
}

# (token type, keyword value) -> precedence, low to high
BINARY_PRECEDENCE = {
    (TT_KEYWORD, "or"): 1,
    (TT_KEYWORD, "and"): 2,
    (TT_EE, None): 3,
    (TT_NE, None): 3,
    (TT_LT, None): 4,
    (TT_LTE, None): 4,
    (TT_GT, None): 4,
    (TT_GTE, None): 4,
    (TT_PLUS, None): 5,
    (TT_MINUS, None): 5,
    (TT_MUL, None): 6,
    (TT_DIV, None): 6,
    (TT_MOD, None): 6,
}

# spelling -> canonical builtin name
BUILTIN_FUNCTIONS = {
    "print": "print",
    "اطبع": "print",
    "list": "list",
    "قائمة": "list",
    "list_len": "list_len",
    "طول_القائمة": "list_len",
    "get": "get",
    "عنصر": "get",
    "append": "append",
    "أضف": "append",
    "remove": "remove",
    "احذف": "remove",
    "contains": "contains",
    "يحتوي": "contains",
    "map": "map",
    "قاموس": "map",
    "map_get": "map_get",
    "جلب_عنصر": "map_get",
    "map_set": "map_set",
    "تعيين_عنصر": "map_set",
    "map_remove": "map_remove",
    "حذف_عنصر": "map_remove",
    "type": "type",
    "نوع": "type",
    "to_number": "to_number",
    "إلى_رقم": "to_number",
    "to_string": "to_string",
    "إلى_نص": "to_string",
    "is_number": "is_number",
    "رقم؟": "is_number",
    "is_string": "is_string",
    "نص؟": "is_string",
    "len": "len",
    "طول": "len",
    "sum": "sum",
    "جمع": "sum",
    "average": "average",
    "متوسط": "average",
    "max": "max",
    "أكبر": "max",
    "min": "min",
    "أصغر": "min",
    "word_count": "word_count",
    "عدد_الكلمات": "word_count",
    "reverse": "reverse",
    "عكس": "reverse",
    "today": "today",
    "تاريخ_اليوم": "today",
    "system": "system",
    "نفذ_أمر": "system",
    "system_with_io": "system_with_io",
    "نفذ_أمر_بمدخل": "system_with_io",
    "read_file": "read_file",
    "اقرأ_ملف": "read_file",
    "write_file": "write_file",
    "اكتب_ملف": "write_file",
    "list_files": "list_files",
    "قائمة_ملفات": "list_files",
    "env_var": "env_var",
    "متغير_بيئة": "env_var",
    "system_info": "system_info",
    "معلومات_النظام": "system_info",
}
