"""
CSharpDeclarationParser — static reading of C# source files, no compiler required.

Workflow:
  1. Tokenise the file with one regular expression (comments and
     preprocessor lines are dropped, string literals kept whole)
  2. Walk the token stream tracking namespace / type nesting
  3. Record every enum (members + attribute lists) and every class-like
     type (static / instance properties)
  4. Return a SourceFile ready to be added to a Compilation

Only declarations are understood.  Method bodies, initialisers and
accessor blocks are skipped as balanced brace groups.
"""

import logging
import re
from pathlib import Path
from typing import NamedTuple, Optional

from enum_string_gen.exceptions import SourceParseError, SourceReadError
from .models import (
    Accessibility,
    AttributeData,
    EnumDeclaration,
    PropertyDeclaration,
    RawExpression,
    SourceFile,
    SourceLocation,
    TypeDeclaration,
    TypeRef,
)

__all__ = ["CSharpDeclarationParser"]

logger = logging.getLogger(__name__)

# Regex for tokenising; order matters (longest / most specific first)
_TOKEN_RE = re.compile(
    r"""
      (?P<ws>\s+)
    | (?P<comment>//[^\n]*|/\*[\s\S]*?\*/)
    | (?P<pp>\#[^\n]*)
    | (?P<raw>\$*(?P<quotes>"{3,})[\s\S]*?(?P=quotes))
    | (?P<verbatim>(?:\$@|@\$|@)"(?:[^"]|"")*")
    | (?P<string>\$?"(?:[^"\\\n]|\\.)*")
    | (?P<char>'(?:[^'\\\n]|\\.)+')
    | (?P<number>\d[\w.]*)
    | (?P<ident>@?[A-Za-z_]\w*)
    | (?P<op>==|!=|<=|>=|&&|\|\||\+\+|--|->|=>|::|\?\?=?|<<|[{}()\[\];,.:=<>?!+\-*/%&|^~])
    | (?P<other>.)
    """,
    re.VERBOSE,
)
_SKIPPED_KINDS = {"ws", "comment", "pp"}

_MODIFIERS = {
    "public", "private", "protected", "internal", "static", "sealed",
    "abstract", "partial", "readonly", "new", "unsafe", "extern", "virtual",
    "override", "async", "volatile", "const", "required", "file", "ref",
    "fixed",
}
_TYPE_KEYWORDS = {"class", "struct", "interface", "record"}
_NON_DECLARATION_TARGETS = {"assembly", "module"}

_ESCAPE_RE = re.compile(
    r"\\(u[0-9A-Fa-f]{4}|U[0-9A-Fa-f]{8}|x[0-9A-Fa-f]{1,4}|.)", re.DOTALL
)
_SIMPLE_ESCAPES = {
    "'": "'", '"': '"', "\\": "\\", "0": "\0", "a": "\a", "b": "\b",
    "f": "\f", "n": "\n", "r": "\r", "t": "\t", "v": "\v",
}


class _Token(NamedTuple):
    kind:   str
    text:   str
    line:   int
    column: int


class CSharpDeclarationParser:
    """
    Read enum and type declarations out of C# source text.

    Usage::

        parser = CSharpDeclarationParser()
        source = parser.parse_file(Path("Colours.cs"))
        for enum in source.enums:
            print(enum.qualified_name, enum.members)
    """

    def parse_file(self, path: Path) -> SourceFile:
        """
        Parse one .cs file from disk.

        Raises:
            SourceReadError:  The file could not be read.
            SourceParseError: The file's braces do not balance.
        """
        try:
            text = Path(path).read_text(encoding="utf-8-sig", errors="replace")
        except OSError as exc:
            raise SourceReadError(f"Cannot read source file {path}: {exc}") from exc
        return self.parse_text(text, str(path))

    def parse_text(self, text: str, path: str = "<memory>") -> SourceFile:
        """Parse C# source text and return the declarations it contains."""
        tokens = _tokenise(text)
        source = SourceFile(path=path)
        walker = _DeclarationWalker(tokens, source)
        walker.walk()
        logger.debug(
            "Parsed %s: %d enums, %d types", path, len(source.enums), len(source.types)
        )
        return source


# ── Tokeniser ─────────────────────────────────────────────────────────────────

def _tokenise(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    line, line_start, pos = 1, 0, 0
    length = len(text)
    while pos < length:
        m = _TOKEN_RE.match(text, pos)
        kind = m.lastgroup
        if kind == "quotes":
            kind = "raw"
        value = m.group(0)
        if kind not in _SKIPPED_KINDS:
            tokens.append(_Token(kind, value, line, pos - line_start + 1))
        newlines = value.count("\n")
        if newlines:
            line += newlines
            line_start = pos + value.rindex("\n") + 1
        pos = m.end()
    return tokens


# ── Literal decoding ──────────────────────────────────────────────────────────

def _unescape(body: str) -> str:
    def replace(m: re.Match) -> str:
        esc = m.group(1)
        if esc[0] in "uUx" and len(esc) > 1:
            return chr(int(esc[1:], 16))
        return _SIMPLE_ESCAPES.get(esc, esc)

    return _ESCAPE_RE.sub(replace, body)


def _decode_string(token: _Token) -> Optional[str]:
    """Return the value of a string literal token, or None for interpolated strings."""
    text = token.text
    if token.kind == "string":
        if text.startswith("$"):
            return None
        return _unescape(text[1:-1])
    if token.kind == "verbatim":
        if "$" in text[:2]:
            return None
        return text[2:-1].replace('""', '"')
    if token.kind == "raw":
        if text.startswith("$"):
            return None
        quotes = len(text) - len(text.lstrip('"'))
        body = text[quotes:-quotes]
        if "\n" not in body:
            return body
        lines = body.split("\n")
        indent = lines[-1]
        return "\n".join(
            ln[len(indent):] if ln.startswith(indent) else ln.lstrip()
            for ln in lines[1:-1]
        )
    return None


def _join_tokens(tokens: list[_Token]) -> str:
    """Render tokens back to text, spacing only between adjacent words."""
    out: list[str] = []
    prev: Optional[_Token] = None
    for tok in tokens:
        if prev is not None and prev.kind in ("ident", "number") and tok.kind in ("ident", "number"):
            out.append(" ")
        out.append(tok.text)
        prev = tok
    return "".join(out)


def _identifier(text: str) -> str:
    return text[1:] if text.startswith("@") else text


# ── Declaration walker ────────────────────────────────────────────────────────

class _DeclarationWalker:
    """Recursive walk over a token list, filling in a SourceFile."""

    def __init__(self, tokens: list[_Token], source: SourceFile) -> None:
        self._tokens = tokens
        self._pos = 0
        self._source = source

    # ── Token helpers ─────────────────────────────────────────────────────

    def _peek(self, offset: int = 0) -> Optional[_Token]:
        idx = self._pos + offset
        return self._tokens[idx] if idx < len(self._tokens) else None

    def _is(self, text: str, offset: int = 0) -> bool:
        tok = self._peek(offset)
        return tok is not None and tok.text == text

    def _next(self) -> _Token:
        tok = self._peek()
        if tok is None:
            raise self._error("unexpected end of file")
        self._pos += 1
        return tok

    def _expect(self, text: str) -> _Token:
        tok = self._next()
        if tok.text != text:
            raise self._error(f"expected '{text}' but found '{tok.text}'", tok)
        return tok

    def _error(self, message: str, tok: Optional[_Token] = None) -> SourceParseError:
        if tok is None:
            tok = self._tokens[-1] if self._tokens else None
        line = tok.line if tok is not None else 0
        return SourceParseError(message, path=self._source.path, line=line)

    def _location(self, tok: _Token) -> SourceLocation:
        return SourceLocation(self._source.path, tok.line, tok.column)

    def _skip_group(self, open_text: str, close_text: str) -> list[_Token]:
        """Consume a balanced group starting at the current opening token."""
        start = self._expect(open_text)
        depth = 1
        inner: list[_Token] = []
        while depth:
            tok = self._peek()
            if tok is None:
                raise self._error(f"unclosed '{open_text}'", start)
            self._pos += 1
            if tok.text == open_text:
                depth += 1
            elif tok.text == close_text:
                depth -= 1
                if depth == 0:
                    break
            inner.append(tok)
        return inner

    def _skip_to_semicolon(self) -> None:
        depth = 0
        while True:
            tok = self._next()
            if tok.text in ("(", "[", "{"):
                depth += 1
            elif tok.text in (")", "]", "}"):
                depth -= 1
            elif tok.text == ";" and depth <= 0:
                return

    def _qualified_name(self) -> str:
        parts = [_identifier(self._next().text)]
        while self._is(".") or self._is("::"):
            parts.append(self._next().text)
            parts.append(_identifier(self._next().text))
        return "".join(parts)

    # ── Entry point ───────────────────────────────────────────────────────

    def walk(self) -> None:
        self._parse_block(
            namespace="",
            containing_types=[],
            usings=self._source.usings,
            closed_by_brace=False,
        )

    # ── Blocks ────────────────────────────────────────────────────────────

    def _parse_block(
        self,
        namespace: str,
        containing_types: list[str],
        usings: list[str],
        closed_by_brace: bool,
        constants: Optional[dict[str, str]] = None,
    ) -> list[PropertyDeclaration]:
        """
        Parse declarations until the closing brace (or end of file for the
        compilation unit).  Returns the properties declared directly in
        this block, which only matters when the block is a type body.
        String constants of a type body are collected into *constants*.
        """
        properties: list[PropertyDeclaration] = []
        in_type = bool(containing_types)

        while True:
            tok = self._peek()
            if tok is None:
                if closed_by_brace:
                    raise self._error("missing closing '}'")
                return properties
            if tok.text == "}":
                if not closed_by_brace:
                    raise self._error("unexpected '}'", tok)
                self._pos += 1
                return properties
            if tok.text == ";":
                self._pos += 1
                continue

            start = tok
            attributes = self._parse_attribute_sections()
            modifiers = self._parse_modifiers()
            head = self._peek()
            if head is None:
                raise self._error("declaration truncated at end of file", start)

            if not in_type and head.text == "global" and self._is("using", 1):
                # applies to every file of the compilation
                self._pos += 1
                self._parse_using(self._source.global_usings)
            elif not in_type and head.text == "using":
                self._parse_using(usings)
            elif not in_type and head.text == "namespace":
                self._pos += 1
                name = self._qualified_name()
                full = f"{namespace}.{name}" if namespace else name
                if self._is(";"):
                    # file-scoped namespace covers the rest of the file
                    self._pos += 1
                    namespace = full
                else:
                    self._expect("{")
                    self._parse_block(full, [], list(usings), closed_by_brace=True)
            elif head.text == "enum":
                self._parse_enum(start, attributes, modifiers, namespace, containing_types, usings)
            elif head.text in _TYPE_KEYWORDS:
                self._parse_type(start, modifiers, namespace, containing_types, usings)
            elif head.text == "delegate":
                self._skip_to_semicolon()
            elif "const" in modifiers:
                found = self._parse_constants()
                if constants is not None:
                    constants.update(found)
            else:
                prop = self._parse_member(modifiers)
                if prop is not None:
                    properties.append(prop)

    def _parse_attribute_sections(self) -> list[AttributeData]:
        attributes: list[AttributeData] = []
        while self._is("["):
            self._pos += 1
            target = ""
            if self._peek(1) is not None and self._peek(1).text == ":" and self._peek().kind == "ident":
                target = self._next().text
                self._pos += 1
            section: list[AttributeData] = []
            while not self._is("]"):
                section.append(self._parse_attribute())
                if self._is(","):
                    self._pos += 1
            self._expect("]")
            if target not in _NON_DECLARATION_TARGETS:
                attributes.extend(section)
        return attributes

    def _parse_attribute(self) -> AttributeData:
        name_tok = self._peek()
        name = self._qualified_name()
        if self._is("<"):
            name += "<" + _join_tokens(self._skip_group("<", ">")) + ">"
        attribute = AttributeData(name=name, location=self._location(name_tok))
        if self._is("("):
            for arg in _split_arguments(self._skip_group("(", ")")):
                if len(arg) >= 2 and arg[0].kind == "ident" and arg[1].text == "=":
                    attribute.named_args[_identifier(arg[0].text)] = _evaluate(arg[2:])
                elif len(arg) >= 2 and arg[0].kind == "ident" and arg[1].text == ":":
                    attribute.constructor_args.append(_evaluate(arg[2:]))
                else:
                    attribute.constructor_args.append(_evaluate(arg))
        return attribute

    def _parse_modifiers(self) -> list[str]:
        modifiers: list[str] = []
        while True:
            tok = self._peek()
            if tok is None or tok.text not in _MODIFIERS:
                return modifiers
            modifiers.append(tok.text)
            self._pos += 1

    def _parse_using(self, usings: list[str]) -> None:
        self._expect("using")
        if self._is("("):
            # using statement; its body is handled by the caller's loop
            self._skip_group("(", ")")
            return
        if self._is("static") or (self._peek(1) is not None and self._peek(1).text == "="):
            self._skip_to_semicolon()
            return
        name = self._qualified_name()
        if not self._is(";"):
            # `using var x = ...;` declaration
            self._skip_to_semicolon()
            return
        self._pos += 1
        if name.startswith("global::"):
            name = name[len("global::"):]
        usings.append(name)

    # ── Enums ─────────────────────────────────────────────────────────────

    def _parse_enum(
        self,
        start: _Token,
        attributes: list[AttributeData],
        modifiers: list[str],
        namespace: str,
        containing_types: list[str],
        usings: list[str],
    ) -> None:
        self._expect("enum")
        name = _identifier(self._next().text)
        while not self._is("{"):
            self._next()            # underlying type, e.g. `: byte`
        self._expect("{")

        members: list[str] = []
        while not self._is("}"):
            self._parse_attribute_sections()
            member = self._next()
            if member.kind != "ident":
                raise self._error(f"unexpected '{member.text}' in enum {name}", member)
            members.append(_identifier(member.text))
            depth = 0
            while True:
                tok = self._peek()
                if tok is None:
                    raise self._error(f"unterminated enum {name}", start)
                if depth == 0 and tok.text in (",", "}"):
                    break
                if tok.text in ("(", "["):
                    depth += 1
                elif tok.text in (")", "]"):
                    depth -= 1
                self._pos += 1
            if self._is(","):
                self._pos += 1
        self._expect("}")

        self._source.enums.append(EnumDeclaration(
            name=name,
            namespace=namespace,
            accessibility=Accessibility.from_modifiers(modifiers, nested=bool(containing_types)),
            members=members,
            attributes=attributes,
            containing_types=list(containing_types),
            location=self._location(start),
            usings=list(usings),
        ))

    # ── Classes / structs / records / interfaces ──────────────────────────

    def _parse_type(
        self,
        start: _Token,
        modifiers: list[str],
        namespace: str,
        containing_types: list[str],
        usings: list[str],
    ) -> None:
        kind = self._next().text
        if kind == "record" and (self._is("class") or self._is("struct")):
            self._pos += 1
        name = _identifier(self._next().text)

        depth = 0
        while True:
            tok = self._peek()
            if tok is None:
                raise self._error(f"declaration of {name} is missing its body", start)
            if depth == 0 and tok.text in ("{", ";"):
                break
            if tok.text in ("(", "<", "["):
                depth += 1
            elif tok.text in (")", ">", "]"):
                depth -= 1
            self._pos += 1

        declaration = TypeDeclaration(
            name=name,
            namespace=namespace,
            kind=kind,
            accessibility=Accessibility.from_modifiers(modifiers, nested=bool(containing_types)),
            containing_types=list(containing_types),
            location=self._location(start),
        )
        self._source.types.append(declaration)

        if self._is(";"):
            self._pos += 1
            return
        self._expect("{")
        declaration.properties = self._parse_block(
            namespace, [*containing_types, name], usings,
            closed_by_brace=True, constants=declaration.constants,
        )

    # ── Members ───────────────────────────────────────────────────────────

    def _parse_member(self, modifiers: list[str]) -> Optional[PropertyDeclaration]:
        """
        Consume one member (or stray statement).  Returns a
        PropertyDeclaration when the member is a property, else None.
        """
        header: list[_Token] = []
        depth = 0
        while True:
            tok = self._peek()
            if tok is None:
                raise self._error("member declaration truncated at end of file")
            if depth == 0 and tok.text in (";", "{", "=>", "}"):
                break
            if tok.text in ("(", "["):
                depth += 1
            elif tok.text in (")", "]"):
                depth -= 1
            header.append(tok)
            self._pos += 1

        stop = self._peek()
        if stop.text == "}":
            # stray tokens before a closing brace; let the block handle it
            return None

        texts = [t.text for t in header]
        has_params = "(" in texts
        has_assignment = "=" in texts
        property_like = (
            bool(header)
            and header[-1].kind == "ident"
            and not has_params
            and not has_assignment
            and "event" not in texts
            and len(header) >= 2
            and header[-2].text not in (".", "::")
        )

        if stop.text == ";":
            self._pos += 1
            return None

        if stop.text == "{":
            self._skip_group("{", "}")
            if has_assignment:
                self._skip_to_semicolon()
                return None
            if not property_like:
                return None
            if self._is("="):
                self._skip_to_semicolon()
            return self._make_property(header, modifiers)

        # `=>` expression body
        self._pos += 1
        self._skip_to_semicolon()
        if not property_like:
            return None
        return self._make_property(header, modifiers)

    def _parse_constants(self) -> dict[str, str]:
        """Consume a `const` field declaration; return its string values by name."""
        tokens: list[_Token] = []
        depth = 0
        while True:
            tok = self._next()
            if tok.text in ("(", "[", "{"):
                depth += 1
            elif tok.text in (")", "]", "}"):
                depth -= 1
            elif tok.text == ";" and depth <= 0:
                break
            tokens.append(tok)

        values: dict[str, str] = {}
        # const string A = "a", B = "b";
        for declarator in _split_arguments(tokens):
            texts = [t.text for t in declarator]
            if "=" not in texts or texts.index("=") == 0:
                continue
            eq = texts.index("=")
            value = _evaluate(declarator[eq + 1:])
            if isinstance(value, str):
                values[_identifier(declarator[eq - 1].text)] = value
        return values

    @staticmethod
    def _make_property(header: list[_Token], modifiers: list[str]) -> PropertyDeclaration:
        return PropertyDeclaration(
            name=_identifier(header[-1].text),
            type_name=_join_tokens(header[:-1]),
            is_static="static" in modifiers,
        )


# ── Attribute argument helpers ────────────────────────────────────────────────

def _split_arguments(tokens: list[_Token]) -> list[list[_Token]]:
    args: list[list[_Token]] = []
    current: list[_Token] = []
    depth = 0
    for tok in tokens:
        if tok.text in ("(", "[", "{", "<"):
            depth += 1
        elif tok.text in (")", "]", "}", ">"):
            depth -= 1
        if tok.text == "," and depth == 0:
            args.append(current)
            current = []
            continue
        current.append(tok)
    if current:
        args.append(current)
    return args


def _evaluate(tokens: list[_Token]):
    """Evaluate an attribute argument expression to a Python value."""
    if not tokens:
        return RawExpression("")
    texts = [t.text for t in tokens]

    if texts[0] == "typeof" and len(tokens) >= 3 and texts[1] == "(" and texts[-1] == ")":
        name = _join_tokens(tokens[2:-1])
        if name.startswith("global::"):
            name = name[len("global::"):]
        return TypeRef(name)

    if texts[0] == "nameof" and len(tokens) >= 3 and texts[1] == "(" and texts[-1] == ")":
        idents = [t for t in tokens[2:-1] if t.kind == "ident"]
        if idents:
            return _identifier(idents[-1].text)

    if len(tokens) == 1:
        tok = tokens[0]
        if tok.kind in ("string", "verbatim", "raw"):
            value = _decode_string(tok)
            return value if value is not None else RawExpression(tok.text)
        if tok.text == "null":
            return None
        if tok.text in ("true", "false"):
            return tok.text == "true"
        if tok.kind == "number":
            return _parse_number(tok.text)

    if len(tokens) == 2 and texts[0] == "-" and tokens[1].kind == "number":
        value = _parse_number(tokens[1].text)
        if isinstance(value, (int, float)):
            return -value

    # constant string concatenation: "a" + "b" + ...
    if len(tokens) % 2 == 1 and all(t.text == "+" for t in tokens[1::2]):
        pieces = [_decode_string(t) if t.kind in ("string", "verbatim", "raw") else None
                  for t in tokens[0::2]]
        if all(p is not None for p in pieces):
            return "".join(pieces)

    return RawExpression(_join_tokens(tokens))


def _parse_number(text: str):
    cleaned = text.replace("_", "")
    lowered = cleaned.lower()
    try:
        if lowered.startswith(("0x", "0b")):
            return int(lowered.rstrip("ul"), 0)
        if any(c in lowered for c in ".e") or lowered.endswith(("f", "d", "m")):
            return float(lowered.rstrip("fdm"))
        return int(lowered.rstrip("ul"))
    except ValueError:
        return RawExpression(text)
