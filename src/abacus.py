########################################
# IMPORTS
########################################

import arrows

########################################
# CONSTANTS
########################################

DIGITS = '0123456789'
FLOAT_EXACT_LIMIT = 2 ** 53

DEBUG = False
# Uncomment if you need to turn on debug
# DEBUG = True

########################################
# ERRORS
########################################

class Error:
    def __init__(self, pos_start, pos_end, error_name, details):
        self.pos_start = pos_start
        self.pos_end = pos_end
        self.error_name = error_name
        self.details = details

    def as_string(self):
        result  = f'{self.error_name}: {self.details} '
        result += f'File {self.pos_start.fn}, Line {self.pos_start.ln + 1}'
        return result

    def as_report(self):
        return self.as_string() + '\n\n' + arrows.arrow_text(
            self.pos_start.ftxt, self.pos_start, self.pos_end)

class IllegalCharacterError(Error):
    def __init__(self, pos_start, pos_end, details):
        super().__init__(pos_start, pos_end, "Illegal Character", details)

class InvalidSyntaxError(Error):
    def __init__(self, pos_start, pos_end, details=''):
        super().__init__(pos_start, pos_end, "Invalid Syntax", details)

class RuntimeError(Error):
    def __init__(self, pos_start, pos_end, context, details=''):
        super().__init__(pos_start, pos_end, "Runtime Error", details)
        self.context = context

    def as_string(self):
        return self.generate_traceback() + super().as_string()

    def generate_traceback(self):
        result = ''
        pos = self.pos_start
        ctx = self.context

        # Walk innermost to outermost, prepending so the outermost frame prints first
        while ctx:
            result = f'File {pos.fn}, Line {pos.ln + 1}, {ctx.display_name}\n' + result
            pos = ctx.parent_entry_pos
            ctx = ctx.parent

        return "Traceback (most recent call last):\n" + result

class DivisionByZeroError(RuntimeError):
    def __init__(self, pos_start, pos_end, context):
        super().__init__(pos_start, pos_end, context, "Division by zero")

class NumericOverflowError(RuntimeError):
    def __init__(self, pos_start, pos_end, context):
        super().__init__(pos_start, pos_end, context, "Numeric overflow")

########################################
# POSITION
########################################

class Position:
    def __init__(self, idx, ln, col, fn, ftxt):
        self.idx = idx
        self.ln = ln
        self.col = col
        self.fn = fn
        self.ftxt = ftxt

    def advance(self, current_char=None):
        self.idx += 1
        self.col += 1

        if current_char == '\n':
            self.ln += 1
            self.col = 0

        return self

    def copy(self):
        return Position(self.idx, self.ln, self.col, self.fn, self.ftxt)

########################################
# TOKENS
########################################

TT_INT         = "INT"
TT_FLOAT       = "FLOAT"
TT_PLUS        = "PLUS"
TT_MINUS       = "MINUS"
TT_MUL         = "MUL"
TT_DIV         = "DIV"
TT_LPAREN      = "LPAREN"
TT_RPAREN      = "RPAREN"
TT_EOF         = "EOF"

SINGLE_CHAR_TOKENS = {
    '+': TT_PLUS,
    '-': TT_MINUS,
    '*': TT_MUL,
    '/': TT_DIV,
    '(': TT_LPAREN,
    ')': TT_RPAREN,
}

class Token:
    def __init__(self, type_, value=None, pos_start=None, pos_end=None):
        self.type = type_
        self.value = value

        if pos_start:
            self.pos_start = pos_start.copy()
            self.pos_end = pos_start.copy()
            self.pos_end.advance()

        if pos_end:
            self.pos_end = pos_end.copy()

    def __repr__(self):
        if self.value is not None:
            return f'{self.type}:{self.value}'
        return f'{self.type}'

########################################
# LEXER
########################################

class Lexer:
    def __init__(self, fn, text):
        self.fn = fn
        self.text = text
        self.pos = Position(-1, 0, -1, fn, text)
        self.current_char = None
        self.advance()

    def advance(self):
        self.pos.advance(self.current_char)
        self.current_char = self.text[
            self.pos.idx
        ] if self.pos.idx < len(self.text) else None

    def make_tokens(self):
        tokens = []

        while self.current_char is not None:
            if self.current_char in " \t":
                self.advance() # Skip character
            elif self.current_char in DIGITS:
                tokens.append(self.make_number())
            elif self.current_char in SINGLE_CHAR_TOKENS:
                tokens.append(Token(SINGLE_CHAR_TOKENS[self.current_char],
                                    pos_start=self.pos))
                self.advance()
            else:
                pos_start = self.pos.copy()
                char = self.current_char
                self.advance()
                return tokens, IllegalCharacterError(pos_start, self.pos, char)

        tokens.append(Token(TT_EOF, pos_start=self.pos))
        return tokens, None

    def make_number(self):
        num_str = ""
        has_dot = False
        pos_start = self.pos.copy()

        while self.current_char is not None and self.current_char in DIGITS + '.':
            if self.current_char == '.':
                if has_dot:
                    break
                has_dot = True
                num_str += '.'
            else:
                num_str += self.current_char
            self.advance()

        if not has_dot:
            return Token(TT_INT, int(num_str), pos_start, self.pos)

        return Token(TT_FLOAT, float(num_str), pos_start, self.pos)

########################################
# AST NODES
########################################

class NumberNode:
    def __init__(self, tok):
        self.tok = tok

        self.pos_start = self.tok.pos_start
        self.pos_end = self.tok.pos_end

    def __repr__(self):
        return f'{self.tok}'

class BinOpNode:
    def __init__(self, left_node, op_tok, right_node):
        self.left_node = left_node
        self.op_tok = op_tok
        self.right_node = right_node

        self.pos_start = self.left_node.pos_start
        self.pos_end = self.right_node.pos_end

    def __repr__(self):
        return f'({self.left_node}, {self.op_tok}, {self.right_node})'

class UnaryOpNode:
    def __init__(self, op_tok, node):
        self.op_tok = op_tok
        self.node = node

        self.pos_start = self.op_tok.pos_start
        self.pos_end = self.node.pos_end

    def __repr__(self):
        return f'({self.op_tok}, {self.node})'

########################################
# PARSE RESULT
########################################

class ParseResult:
    def __init__(self):
        self.node = None
        self.error = None

    def register(self, res):
        if res.error:
            self.error = res.error
        return res.node

    def success(self, node):
        self.node = node
        return self

    def failure(self, error):
        self.error = error
        return self

########################################
# PARSER
########################################

class Parser:
    def __init__(self, tokens):
        self.tokens = tokens
        self.tok_idx = -1
        self.current_tok = None
        self.advance()

    def advance(self):
        self.tok_idx += 1
        if self.tok_idx < len(self.tokens):
            self.current_tok = self.tokens[self.tok_idx]
        return self.current_tok

    ########################################

    def parse(self):
        try:
            res = self.expr()
        except RecursionError:
            return ParseResult().failure(InvalidSyntaxError(
                self.current_tok.pos_start, self.current_tok.pos_end,
                "Expression too deeply nested"
            ))

        if not res.error and self.current_tok.type != TT_EOF:
            return res.failure(InvalidSyntaxError(
                self.current_tok.pos_start, self.current_tok.pos_end,
                "Expected '+', '-', '*' or '/'"
            ))
        return res

    ########################################

    def factor(self):
        res = ParseResult()
        tok = self.current_tok

        if tok.type in (TT_PLUS, TT_MINUS):
            self.advance()
            factor = res.register(self.factor())
            if res.error:
                return res
            return res.success(UnaryOpNode(tok, factor))

        elif tok.type in (TT_INT, TT_FLOAT):
            self.advance()
            return res.success(NumberNode(tok))

        elif tok.type == TT_LPAREN:
            self.advance()
            expr = res.register(self.expr())
            if res.error:
                return res
            if self.current_tok.type == TT_RPAREN:
                self.advance()
                return res.success(expr)
            else:
                return res.failure(InvalidSyntaxError(
                    self.current_tok.pos_start, self.current_tok.pos_end,
                    "Expected ')'"
                ))

        return res.failure(InvalidSyntaxError(
            tok.pos_start, tok.pos_end,
            "Expected int, float, '+', '-' or '('"))

    def term(self):
        return self.bin_op(self.factor, (TT_MUL, TT_DIV))

    def expr(self):
        return self.bin_op(self.term, (TT_PLUS, TT_MINUS))

    ########################################

    def bin_op(self, func, ops):
        res = ParseResult()
        left = res.register(func())
        if res.error:
            return res

        while self.current_tok.type in ops:
            op_tok = self.current_tok
            self.advance()
            right = res.register(func())
            if res.error:
                return res
            left = BinOpNode(left, op_tok, right)

        return res.success(left)

########################################
# RUNTIME RESULT
########################################

class RTResult:
    def __init__(self):
        self.value = None
        self.error = None

    def register(self, res):
        if res.error:
            self.error = res.error
        return res.value

    def success(self, value):
        self.value = value
        return self

    def failure(self, error):
        self.error = error
        return self

########################################
# VALUES
########################################

class Number:
    def __init__(self, value):
        self.value = value
        self.set_pos()
        self.set_context()

    def set_pos(self, pos_start=None, pos_end=None):
        self.pos_start = pos_start
        self.pos_end = pos_end

        return self

    def set_context(self, context=None):
        self.context = context

        return self

    def added_to(self, other):
        if isinstance(other, Number):
            return self.combined(other, lambda a, b: a + b)

    def subbed_by(self, other):
        if isinstance(other, Number):
            return self.combined(other, lambda a, b: a - b)

    def multed_by(self, other):
        if isinstance(other, Number):
            return self.combined(other, lambda a, b: a * b)

    def dived_by(self, other):
        if isinstance(other, Number):
            if other.value == 0:
                return None, DivisionByZeroError(
                    other.pos_start, other.pos_end,
                    self.context
                )
            return self.combined(other, lambda a, b: a / b)

    def combined(self, other, op):
        # int operands beyond float range overflow on true division and mixed ops
        try:
            value = op(self.value, other.value)
        except OverflowError:
            return None, NumericOverflowError(
                self.pos_start, other.pos_end,
                self.context
            )
        return Number(value).set_context(self.context), None

    def copy(self):
        copy = Number(self.value)
        copy.set_pos(self.pos_start, self.pos_end)
        copy.set_context(self.context)
        return copy

    def __repr__(self):
        # Integral floats print like ints while they are still exact
        if isinstance(self.value, float) and self.value.is_integer() \
                and abs(self.value) < FLOAT_EXACT_LIMIT:
            return str(int(self.value))
        return str(self.value)

########################################
# CONTEXT
########################################

class Context:
    def __init__(self, display_name, parent=None, parent_entry_pos=None):
        self.display_name = display_name
        self.parent = parent
        self.parent_entry_pos = parent_entry_pos

########################################
# INTERPRETER
########################################

class Interpreter:
    def evaluate(self, node, context):
        try:
            return self.visit(node, context)
        except RecursionError:
            return RTResult().failure(RuntimeError(
                node.pos_start, node.pos_end, context,
                "Expression too deeply nested"
            ))

    def visit(self, node, context):
        if isinstance(node, NumberNode):
            return self.visit_NumberNode(node, context)
        elif isinstance(node, BinOpNode):
            return self.visit_BinOpNode(node, context)
        elif isinstance(node, UnaryOpNode):
            return self.visit_UnaryOpNode(node, context)

        raise TypeError(f'No visit method defined for {type(node).__name__}')

    ########################################

    def visit_NumberNode(self, node, context):
        return RTResult().success(
            Number(node.tok.value).set_context(context).set_pos(node.pos_start,
                                                                node.pos_end))

    def visit_BinOpNode(self, node, context):
        res = RTResult()
        left = res.register(self.visit(node.left_node, context))
        if res.error:
            return res
        right = res.register(self.visit(node.right_node, context))
        if res.error:
            return res

        if node.op_tok.type == TT_PLUS:
            result, error = left.added_to(right)
        elif node.op_tok.type == TT_MINUS:
            result, error = left.subbed_by(right)
        elif node.op_tok.type == TT_MUL:
            result, error = left.multed_by(right)
        elif node.op_tok.type == TT_DIV:
            result, error = left.dived_by(right)
        else:
            raise ValueError(f'Unknown binary operator {node.op_tok.type}')

        if error:
            return res.failure(error)

        return res.success(result.set_pos(node.pos_start, node.pos_end))

    def visit_UnaryOpNode(self, node, context):
        res = RTResult()
        number = res.register(self.visit(node.node, context))
        if res.error:
            return res

        error = None
        if node.op_tok.type == TT_MINUS:
            number, error = number.multed_by(Number(-1))

        if error:
            return res.failure(error)

        return res.success(number.set_pos(node.pos_start, node.pos_end))

########################################
# RUN
########################################

def execute(fn, text):
    # Generate tokens
    lexer = Lexer(fn, text)
    tokens, error = lexer.make_tokens()

    if error:
        return None, error

    if DEBUG:
        print("DEBUG: TokenList: " + str(tokens))

    # Generate AST
    parser = Parser(tokens)
    ast = parser.parse()
    if ast.error:
        return None, ast.error

    if DEBUG:
        print("DEBUG: AbstractSyntaxTree: " + str(ast.node))

    interpreter = Interpreter()
    context = Context("<program>")
    result = interpreter.evaluate(ast.node, context)

    return result.value, result.error

def run(fn, text):
    result, error = execute(fn, text)

    if error:
        return error.as_string()
    return repr(result)
