"""
Servo Parser

Recursive-descent parser producing a Program from source text.

Order of precedence, lowest first:
- Assignment
- Object literal
- Additive (+ -)
- Multiplicative (* / % ^)
- Call / Member
- Primary

Parse errors are unrecoverable: the first unexpected token aborts the parse
with a ParseError naming the expected and actual token.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from servo.errors import ParseError
from servo.frontend.ast import (
    AccessDeclaration,
    AssignmentExpression,
    BinaryExpression,
    CallExpression,
    Expression,
    FunctionDeclaration,
    Identifier,
    MemberExpression,
    NumericLiteral,
    ObjectLiteral,
    Program,
    Property,
    Statement,
    StringLiteral,
    VariableDeclaration,
    Visibility,
)
from servo.frontend.lexer import QUOTE_TOKENS, Token, TokenKind, Tokenizer

logger = logging.getLogger(__name__)

ADDITIVE_OPERATORS = ("+", "-")
MULTIPLICATIVE_OPERATORS = ("*", "/", "%", "^")

VISIBILITY_KEYWORDS = {
    TokenKind.PUBLIC: Visibility.PUBLIC,
    TokenKind.PRIVATE: Visibility.PRIVATE,
    TokenKind.PROTECTED: Visibility.PROTECTED,
}

QUOTE_KINDS = frozenset(QUOTE_TOKENS.values())


class Parser:
    """
    Frontend producing a syntax tree from source code.

    A Parser can be reused; each call to produce_ast tokenizes afresh and
    resets the cursor.
    """

    def __init__(self, tokenizer: Optional[Tokenizer] = None):
        self.tokenizer = tokenizer or Tokenizer()
        self.tokens: List[Token] = []
        self.position = 0

    def produce_ast(self, source: str) -> Program:
        """Parse source text into a Program."""
        self.tokens = self.tokenizer.tokenize(source)
        self.position = 0

        body: List[Statement] = []
        try:
            while self._not_eof():
                body.append(self._parse_statement())
        except RecursionError:
            raise ParseError("Expression nesting too deep", actual=self._at()) from None

        logger.debug("Parsed program with %d top-level statements", len(body))
        return Program(body=tuple(body))

    # Cursor helpers

    def _not_eof(self) -> bool:
        return self._at().kind != TokenKind.EOF

    def _at(self) -> Token:
        return self.tokens[self.position]

    def _eat(self) -> Token:
        token = self.tokens[self.position]
        # The EOF token is never consumed past.
        if token.kind != TokenKind.EOF:
            self.position += 1
        return token

    def _expect(self, kind: TokenKind, message: str) -> Token:
        token = self._at()
        if token.kind != kind:
            raise ParseError(message, expected=kind, actual=token)
        return self._eat()

    # Statements

    def _parse_statement(self) -> Statement:
        kind = self._at().kind

        if kind in (TokenKind.VAR, TokenKind.LET, TokenKind.CONST):
            return self._parse_variable_declaration()
        if kind == TokenKind.NUM:
            return self._parse_number_declaration()
        if kind in VISIBILITY_KEYWORDS:
            return self._parse_access_declaration()
        if kind == TokenKind.FUNCTION:
            return self._parse_function_declaration()

        expression = self._parse_expression()
        if self._at().kind == TokenKind.SEMICOLON and not self._terminates_itself(expression):
            self._eat()
        return expression

    def _parse_access_declaration(self) -> Statement:
        visibility = VISIBILITY_KEYWORDS[self._eat().kind]
        if self._at().kind != TokenKind.FUNCTION:
            raise ParseError(
                f"Expected function declaration following {visibility.value} keyword.",
                expected=TokenKind.FUNCTION,
                actual=self._at(),
            )
        function = self._parse_function_declaration(visibility)
        return AccessDeclaration(function=function, visibility=visibility)

    def _parse_function_declaration(self, visibility: Optional[Visibility] = None) -> FunctionDeclaration:
        self._eat()  # function keyword
        name = self._expect(TokenKind.IDENTIFIER, "Expected function name following declaration type keyword.").text

        parameters = self._parse_parameters(name)
        self._expect(TokenKind.ARROW, "Expected arrow token following function parameters.")
        # TODO: accept return types other than Void once typed returns exist.
        self._expect(TokenKind.VOID, "Expected return type for function declaration.")
        self._expect(TokenKind.OPEN_BRACE, "Expected function body following function declaration.")

        body: List[Statement] = []
        while self._not_eof() and self._at().kind != TokenKind.CLOSE_BRACE:
            body.append(self._parse_statement())

        self._expect(TokenKind.CLOSE_BRACE, "Expected closure of function declaration.")
        return FunctionDeclaration(
            name=name,
            parameters=tuple(parameters),
            body=tuple(body),
            visibility=visibility,
        )

    def _parse_variable_declaration(self) -> Statement:
        """( let | const | var ) IDENT ; | ( let | const | var ) IDENT = EXPR ;"""
        constant = self._eat().kind == TokenKind.CONST
        name = self._expect(
            TokenKind.IDENTIFIER, "Expected identifier name following let | const | var keywords."
        ).text

        if self._at().kind == TokenKind.SEMICOLON:
            if constant:
                raise ParseError(
                    f"Must assign value to constant expression '{name}'. No value provided.",
                    actual=self._at(),
                )
            self._eat()
            return VariableDeclaration(name=name, value=None, constant=False)

        self._expect(TokenKind.EQUALS, "Expected equals token following identifier in var declaration.")
        value = self._parse_expression()
        self._expect_terminator(value)
        return VariableDeclaration(name=name, value=value, constant=constant)

    def _parse_number_declaration(self) -> Statement:
        """num IDENT ; | num IDENT = ADDITIVE ;"""
        self._eat()
        name = self._expect(TokenKind.IDENTIFIER, "Expected identifier name following num keyword.").text

        if self._at().kind == TokenKind.SEMICOLON:
            self._eat()
            return VariableDeclaration(name=name, value=None, constant=False)

        self._expect(TokenKind.EQUALS, "Expected equals token following identifier in num declaration.")
        if self._at().kind == TokenKind.OPEN_BRACE:
            raise ParseError(
                f"num declaration '{name}' requires a numeric expression, not an object literal.",
                actual=self._at(),
            )
        value = self._parse_additive_expression()
        self._expect(TokenKind.SEMICOLON, "Variable declaration statement must end with semicolon.")
        return VariableDeclaration(name=name, value=value, constant=False)

    @staticmethod
    def _terminates_itself(expression: Expression) -> bool:
        """Assignments and object literals consume their own trailing semicolon."""
        return isinstance(expression, (AssignmentExpression, ObjectLiteral))

    def _expect_terminator(self, value: Expression) -> None:
        if not self._terminates_itself(value):
            self._expect(TokenKind.SEMICOLON, "Variable declaration statement must end with semicolon.")

    # Expressions

    def _parse_expression(self) -> Expression:
        return self._parse_assignment_expression()

    def _parse_assignment_expression(self) -> Expression:
        left = self._parse_object_expression()

        if self._at().kind == TokenKind.EQUALS:
            self._eat()
            value = self._parse_assignment_expression()
            if not self._terminates_itself(value):
                self._expect(TokenKind.SEMICOLON, "Assignment statement must end with semicolon.")
            return AssignmentExpression(target=left, value=value)

        return left

    def _parse_object_expression(self) -> Expression:
        if self._at().kind != TokenKind.OPEN_BRACE:
            return self._parse_additive_expression()

        self._eat()
        properties: List[Property] = []

        while self._not_eof() and self._at().kind != TokenKind.CLOSE_BRACE:
            key = self._expect(TokenKind.IDENTIFIER, "Object literal key expected.").text

            # shorthand { key, }
            if self._at().kind == TokenKind.COMMA:
                self._eat()
                properties.append(Property(key=key))
                continue
            # shorthand { key }
            if self._at().kind == TokenKind.CLOSE_BRACE:
                properties.append(Property(key=key))
                continue

            self._expect(TokenKind.COLON, "Missing colon following identifier in object literal.")
            value = self._parse_expression()
            properties.append(Property(key=key, value=value))

            if self._at().kind != TokenKind.CLOSE_BRACE:
                self._expect(TokenKind.COMMA, "Expected comma or closing brace following property.")

        self._expect(TokenKind.CLOSE_BRACE, "Object literal missing closure.")
        self._expect(TokenKind.SEMICOLON, "Object literal must end with semicolon.")
        return ObjectLiteral(properties=tuple(properties))

    def _parse_additive_expression(self) -> Expression:
        left = self._parse_multiplicative_expression()

        while self._is_operator(ADDITIVE_OPERATORS):
            operator = self._eat().text
            right = self._parse_multiplicative_expression()
            left = BinaryExpression(left=left, right=right, operator=operator)

        return left

    def _parse_multiplicative_expression(self) -> Expression:
        left = self._parse_call_member_expression()

        while self._is_operator(MULTIPLICATIVE_OPERATORS):
            operator = self._eat().text
            right = self._parse_call_member_expression()
            left = BinaryExpression(left=left, right=right, operator=operator)

        return left

    def _is_operator(self, operators) -> bool:
        token = self._at()
        return token.kind == TokenKind.BINARY_OPERATOR and token.text in operators

    def _parse_call_member_expression(self) -> Expression:
        member = self._parse_member_expression()

        if self._at().kind == TokenKind.OPEN_PAREN:
            return self._parse_call_expression(member)

        return member

    def _parse_call_expression(self, callee: Expression) -> Expression:
        call: Expression = CallExpression(callee=callee, arguments=tuple(self._parse_arguments()))

        # f()()
        if self._at().kind == TokenKind.OPEN_PAREN:
            call = self._parse_call_expression(call)

        return call

    def _parse_parameters(self, name: str) -> List[str]:
        """Parse a parameter list; each entry must be a bare identifier."""
        self._expect(TokenKind.OPEN_PAREN, "Expected open parenthesis.")
        parameters: List[str] = []
        if self._at().kind != TokenKind.CLOSE_PAREN:
            while True:
                first = self._at()
                argument = self._parse_assignment_expression()
                if not isinstance(argument, Identifier):
                    raise ParseError(
                        f"Inside function declaration '{name}' expected parameters to be identifiers, "
                        f"found {argument.kind}.",
                        expected=TokenKind.IDENTIFIER,
                        actual=first,
                    )
                parameters.append(argument.symbol)
                if self._at().kind != TokenKind.COMMA:
                    break
                self._eat()
        self._expect(TokenKind.CLOSE_PAREN, "Missing closing parenthesis inside parameter list.")
        return parameters

    def _parse_arguments(self) -> List[Expression]:
        self._expect(TokenKind.OPEN_PAREN, "Expected open parenthesis.")
        arguments = [] if self._at().kind == TokenKind.CLOSE_PAREN else self._parse_arguments_list()
        self._expect(TokenKind.CLOSE_PAREN, "Missing closing parenthesis inside arguments list.")
        return arguments

    def _parse_arguments_list(self) -> List[Expression]:
        arguments = [self._parse_assignment_expression()]

        while self._at().kind == TokenKind.COMMA:
            self._eat()
            arguments.append(self._parse_assignment_expression())

        return arguments

    def _parse_member_expression(self) -> Expression:
        obj = self._parse_primary_expression()

        while self._at().kind in (TokenKind.DOT, TokenKind.OPEN_BRACKET):
            operator = self._eat()

            if operator.kind == TokenKind.DOT:
                computed = False
                if self._at().kind != TokenKind.IDENTIFIER:
                    raise ParseError(
                        "Cannot use dot operator without right hand side being an identifier.",
                        expected=TokenKind.IDENTIFIER,
                        actual=self._at(),
                    )
                prop: Expression = self._parse_primary_expression()
            else:
                computed = True
                prop = self._parse_expression()
                self._expect(TokenKind.CLOSE_BRACKET, "Missing closing bracket in computed value.")

            obj = MemberExpression(object=obj, property=prop, computed=computed)

        return obj

    def _parse_primary_expression(self) -> Expression:
        token = self._at()

        if token.kind == TokenKind.IDENTIFIER:
            return Identifier(symbol=self._eat().text)

        if token.kind == TokenKind.NUMBER:
            return NumericLiteral(value=float(self._eat().text))

        if token.kind in QUOTE_KINDS:
            opening = self._eat()
            value = self._expect(TokenKind.STRING_LITERAL, "Expected string contents following quote.").text
            self._expect(opening.kind, "String literal must be closed with the quote it was opened with.")
            return StringLiteral(value=value)

        if token.kind == TokenKind.OPEN_PAREN:
            self._eat()
            value = self._parse_expression()
            self._expect(
                TokenKind.CLOSE_PAREN,
                "Unexpected token found inside parenthesised expression. Expected closing parenthesis.",
            )
            return value

        raise ParseError("Unexpected token found during parsing", actual=token)


def parse(source: str, tokenizer: Optional[Tokenizer] = None) -> Program:
    """Parse source text into a Program."""
    return Parser(tokenizer).produce_ast(source)
