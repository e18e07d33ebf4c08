"""Token kinds for command lines and source text, and the token value type."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

__all__ = ["TokenType", "Token"]


class TokenType(enum.Enum):
    # Command line
    CLI_FLAG = enum.auto()
    CLI_OPTION = enum.auto()
    CLI_POSITIONAL = enum.auto()
    CLI_COMMAND = enum.auto()

    # Control flow
    KEYWORD_IF = enum.auto()
    KEYWORD_ELSE = enum.auto()
    KEYWORD_FOR = enum.auto()
    KEYWORD_WHILE = enum.auto()
    KEYWORD_RETURN = enum.auto()
    KEYWORD_GOTO = enum.auto()
    KEYWORD_BREAK = enum.auto()
    KEYWORD_CONTINUE = enum.auto()
    KEYWORD_SWITCH = enum.auto()
    KEYWORD_CASE = enum.auto()
    KEYWORD_DEFAULT = enum.auto()
    KEYWORD_DEFER = enum.auto()

    # Error handling
    KEYWORD_TRY = enum.auto()
    KEYWORD_CATCH = enum.auto()
    KEYWORD_THROW = enum.auto()
    KEYWORD_FINALLY = enum.auto()
    KEYWORD_RAISE = enum.auto()
    KEYWORD_ASSERT = enum.auto()

    # Data types
    KEYWORD_FUNCTION = enum.auto()
    KEYWORD_STRUCT = enum.auto()
    KEYWORD_ENUM = enum.auto()
    KEYWORD_ARRAY = enum.auto()
    KEYWORD_MAP = enum.auto()
    KEYWORD_SET = enum.auto()
    KEYWORD_TUPLE = enum.auto()
    KEYWORD_GENERIC = enum.auto()
    KEYWORD_WHERE = enum.auto()

    # Object orientation
    KEYWORD_CLASS = enum.auto()
    KEYWORD_INTERFACE = enum.auto()
    KEYWORD_IMPLEMENTS = enum.auto()
    KEYWORD_EXTENDS = enum.auto()
    KEYWORD_SELF = enum.auto()
    KEYWORD_SUPER = enum.auto()
    KEYWORD_OVERRIDE = enum.auto()
    KEYWORD_ABSTRACT = enum.auto()
    KEYWORD_VIRTUAL = enum.auto()
    KEYWORD_DELEGATE = enum.auto()
    KEYWORD_EVENT = enum.auto()

    # Modules
    KEYWORD_IMPORT = enum.auto()
    KEYWORD_PACKAGE = enum.auto()
    KEYWORD_EXPORT = enum.auto()
    KEYWORD_FROM = enum.auto()

    # Declarations
    KEYWORD_CONST = enum.auto()
    KEYWORD_LET = enum.auto()
    KEYWORD_VAR = enum.auto()
    KEYWORD_TYPE = enum.auto()
    KEYWORD_MUT = enum.auto()
    KEYWORD_UNSAFE = enum.auto()
    KEYWORD_STATIC = enum.auto()

    # Memory management
    KEYWORD_NEW = enum.auto()
    KEYWORD_DELETE = enum.auto()
    KEYWORD_ALLOC = enum.auto()
    KEYWORD_FREE = enum.auto()
    KEYWORD_MOVE = enum.auto()
    KEYWORD_BORROW = enum.auto()

    # Access modifiers
    KEYWORD_PUBLIC = enum.auto()
    KEYWORD_PRIVATE = enum.auto()
    KEYWORD_PROTECTED = enum.auto()
    KEYWORD_INTERNAL = enum.auto()
    KEYWORD_FINAL = enum.auto()

    # Boolean operators
    KEYWORD_AS = enum.auto()
    KEYWORD_IS = enum.auto()
    KEYWORD_IN = enum.auto()
    KEYWORD_NOT = enum.auto()
    KEYWORD_AND = enum.auto()
    KEYWORD_OR = enum.auto()

    # Functional programming
    KEYWORD_LAMBDA = enum.auto()
    KEYWORD_CLOSURE = enum.auto()
    KEYWORD_CURRY = enum.auto()
    KEYWORD_PIPE = enum.auto()
    KEYWORD_COMPOSE = enum.auto()

    # Concurrency
    KEYWORD_THREAD = enum.auto()
    KEYWORD_ATOMIC = enum.auto()
    KEYWORD_SYNC = enum.auto()
    KEYWORD_LOCK = enum.auto()
    KEYWORD_MUTEX = enum.auto()

    # Async
    KEYWORD_YIELD = enum.auto()
    KEYWORD_ASYNC = enum.auto()
    KEYWORD_AWAIT = enum.auto()

    # Operators
    OPERATOR_PLUS = enum.auto()
    OPERATOR_MINUS = enum.auto()
    OPERATOR_MULTIPLY = enum.auto()
    OPERATOR_DIVIDE = enum.auto()
    OPERATOR_MODULO = enum.auto()
    OPERATOR_ASSIGN = enum.auto()
    OPERATOR_EQUAL = enum.auto()
    OPERATOR_NOT_EQUAL = enum.auto()
    OPERATOR_LESS_THAN = enum.auto()
    OPERATOR_GREATER_THAN = enum.auto()
    OPERATOR_LESS_EQUAL = enum.auto()
    OPERATOR_GREATER_EQUAL = enum.auto()
    OPERATOR_POWER = enum.auto()
    OPERATOR_BITWISE_AND = enum.auto()
    OPERATOR_BITWISE_OR = enum.auto()
    OPERATOR_BITWISE_XOR = enum.auto()
    OPERATOR_BITWISE_NOT = enum.auto()
    OPERATOR_SHIFT_LEFT = enum.auto()
    OPERATOR_SHIFT_RIGHT = enum.auto()
    OPERATOR_ASSIGN_ADD = enum.auto()
    OPERATOR_ASSIGN_SUBTRACT = enum.auto()
    OPERATOR_ASSIGN_MULTIPLY = enum.auto()
    OPERATOR_ASSIGN_DIVIDE = enum.auto()
    OPERATOR_ASSIGN_MODULO = enum.auto()
    OPERATOR_ASSIGN_BITWISE_AND = enum.auto()
    OPERATOR_ASSIGN_BITWISE_OR = enum.auto()
    OPERATOR_ASSIGN_BITWISE_XOR = enum.auto()
    OPERATOR_ASSIGN_BITWISE_NOT = enum.auto()
    OPERATOR_ASSIGN_SHIFT_LEFT = enum.auto()
    OPERATOR_ASSIGN_SHIFT_RIGHT = enum.auto()
    OPERATOR_ASSIGN_POWER = enum.auto()
    OPERATOR_INCREMENT = enum.auto()
    OPERATOR_DECREMENT = enum.auto()
    OPERATOR_NULL_COALESCE = enum.auto()
    OPERATOR_OPTIONAL_CHAINING = enum.auto()
    OPERATOR_SPREAD = enum.auto()
    OPERATOR_RANGE_INCLUSIVE = enum.auto()
    OPERATOR_RANGE_EXCLUSIVE = enum.auto()
    OPERATOR_PIPELINE = enum.auto()

    # Delimiters
    DELIMITER_SEMICOLON = enum.auto()
    DELIMITER_COMMA = enum.auto()
    DELIMITER_DOT = enum.auto()
    DELIMITER_COLON = enum.auto()
    DELIMITER_OPEN_PAREN = enum.auto()
    DELIMITER_CLOSE_PAREN = enum.auto()
    DELIMITER_OPEN_BRACE = enum.auto()
    DELIMITER_CLOSE_BRACE = enum.auto()
    DELIMITER_OPEN_BRACKET = enum.auto()
    DELIMITER_CLOSE_BRACKET = enum.auto()
    DELIMITER_DOUBLE_COLON = enum.auto()
    DELIMITER_ARROW = enum.auto()
    DELIMITER_FAT_ARROW = enum.auto()
    DELIMITER_BACKTICK = enum.auto()

    # Literals
    LITERAL_NULL = enum.auto()
    LITERAL_NUMBER = enum.auto()
    LITERAL_STRING = enum.auto()
    LITERAL_BOOLEAN = enum.auto()
    LITERAL_FLOAT = enum.auto()
    LITERAL_CHAR = enum.auto()
    LITERAL_REGEX = enum.auto()
    LITERAL_DATE = enum.auto()
    LITERAL_TEMPLATE = enum.auto()
    LITERAL_BINARY = enum.auto()
    LITERAL_HEX = enum.auto()
    LITERAL_OCTAL = enum.auto()
    LITERAL_BIG_INT = enum.auto()

    # Preprocessor
    PREPROCESSOR_INCLUDE = enum.auto()
    PREPROCESSOR_DEFINE = enum.auto()
    PREPROCESSOR_IF = enum.auto()
    PREPROCESSOR_ELSE = enum.auto()
    PREPROCESSOR_ENDIF = enum.auto()

    # Meta-programming
    META_QUOTE = enum.auto()
    META_UNQUOTE = enum.auto()
    META_SPLICE = enum.auto()
    META_MACRO = enum.auto()

    IDENTIFIER = enum.auto()

    # Comments
    COMMENT_LINE = enum.auto()
    COMMENT_BLOCK = enum.auto()

    # Whitespace
    WHITESPACE = enum.auto()
    NEWLINE = enum.auto()
    TAB = enum.auto()
    CARRIAGE_RETURN = enum.auto()
    SPACE = enum.auto()

    END_OF_FILE = enum.auto()


@dataclass
class Token:
    """A token kind with an optional payload value."""

    type: TokenType = TokenType.END_OF_FILE
    value: Any = None