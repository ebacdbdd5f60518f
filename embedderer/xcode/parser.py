"""
Xcode project file parser.

This module reads the OpenStep-style property list Xcode uses for project.pbxproj
files and turns it into an XcodeProject. Dictionaries are decoded to dicts (key
order is kept), arrays to lists and every scalar to a string, as the format has no
other scalar types.
"""

from typing import Any, Dict, List, Union

from embedderer.errors import DecodeError
from embedderer.xcode.model import XcodeID, XcodeProject, make_object
from embedderer.xcode.store import ObjectStore

PlistValue = Union[str, List[Any], Dict[str, Any]]

# Characters allowed in an unquoted string
UNQUOTED_CHARSET = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_$+/:.-"
)

ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    '"': '"',
    "'": "'",
    "\\": "\\",
}


class _Reader:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def error(self, message: str) -> DecodeError:
        line = self.text.count("\n", 0, self.pos) + 1
        column = self.pos - (self.text.rfind("\n", 0, self.pos) + 1) + 1
        return DecodeError(message, line, column)

    def skip_whitespace_and_comments(self) -> None:
        text = self.text
        while self.pos < len(text):
            char = text[self.pos]
            if char.isspace():
                self.pos += 1
            elif text.startswith("/*", self.pos):
                end = text.find("*/", self.pos + 2)
                if end < 0:
                    raise self.error("unterminated comment")
                self.pos = end + 2
            elif text.startswith("//", self.pos):
                end = text.find("\n", self.pos + 2)
                self.pos = len(text) if end < 0 else end + 1
            else:
                break

    def peek(self) -> str:
        self.skip_whitespace_and_comments()
        if self.pos >= len(self.text):
            raise self.error("unexpected end of data")
        return self.text[self.pos]

    def expect(self, char: str) -> None:
        if self.peek() != char:
            raise self.error(f"expected '{char}', found '{self.text[self.pos]}'")
        self.pos += 1

    def read_value(self) -> PlistValue:
        char = self.peek()
        if char == "{":
            return self.read_dictionary()
        if char == "(":
            return self.read_array()
        if char in "\"'":
            return self.read_quoted_string()
        if char in UNQUOTED_CHARSET:
            return self.read_unquoted_string()
        raise self.error(f"unexpected character '{char}'")

    def read_dictionary(self) -> Dict[str, Any]:
        self.expect("{")
        data: Dict[str, Any] = {}
        while self.peek() != "}":
            key = self.read_value()
            if not isinstance(key, str):
                raise self.error("dictionary keys must be strings")
            self.expect("=")
            data[key] = self.read_value()
            self.expect(";")
        self.pos += 1
        return data

    def read_array(self) -> List[Any]:
        self.expect("(")
        data: List[Any] = []
        while self.peek() != ")":
            data.append(self.read_value())
            if self.peek() == ",":
                self.pos += 1
            elif self.peek() != ")":
                raise self.error("expected ',' or ')' in array")
        self.pos += 1
        return data

    def read_unquoted_string(self) -> str:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] in UNQUOTED_CHARSET:
            self.pos += 1
        return self.text[start : self.pos]

    def read_quoted_string(self) -> str:
        text = self.text
        quote = text[self.pos]
        self.pos += 1
        chunks: List[str] = []
        while True:
            if self.pos >= len(text):
                raise self.error("unterminated string")
            char = text[self.pos]
            if char == quote:
                self.pos += 1
                return "".join(chunks)
            if char != "\\":
                chunks.append(char)
                self.pos += 1
                continue
            # escape sequence
            if self.pos + 1 >= len(text):
                raise self.error("unterminated escape sequence")
            escaped = text[self.pos + 1]
            if escaped in ESCAPES:
                chunks.append(ESCAPES[escaped])
                self.pos += 2
            elif escaped == "U":
                digits = text[self.pos + 2 : self.pos + 6]
                try:
                    chunks.append(chr(int(digits, 16)))
                except ValueError:
                    raise self.error(f"invalid unicode escape '\\U{digits}'")
                self.pos += 6
            else:
                chunks.append(escaped)
                self.pos += 2


def parse_plist(text: str) -> PlistValue:
    reader = _Reader(text)
    value = reader.read_value()
    reader.skip_whitespace_and_comments()
    if reader.pos != len(text):
        raise reader.error("unexpected data after the root value")
    return value


def parse_project(text: str) -> XcodeProject:
    """
    Decode the contents of a project.pbxproj file.

    Args:
        text: The file contents.

    Returns:
        The decoded project, with every object attached to its store.

    Raises:
        DecodeError: If the text is not a property list or lacks the
            objects/rootObject entries of a project file.
    """
    root = parse_plist(text)
    if not isinstance(root, dict):
        raise DecodeError("project file root is not a dictionary")
    objects = root.get("objects")
    if not isinstance(objects, dict):
        raise DecodeError("project file has no objects dictionary")
    root_id = root.get("rootObject")
    if not isinstance(root_id, str):
        raise DecodeError("project file has no rootObject")

    store = ObjectStore()
    for object_id, fields in objects.items():
        if not isinstance(fields, dict) or not isinstance(fields.get("isa"), str):
            raise DecodeError(f"object {object_id} has no isa")
        store.attach(make_object(object_id, fields))
    if root_id not in store:
        raise DecodeError(f"rootObject {root_id} is not defined")

    properties = {
        key: value for key, value in root.items() if key not in ("objects", "rootObject")
    }
    project = XcodeProject(objects=store, root_id=XcodeID(root_id), properties=properties)
    try:
        project.project
    except ValueError as e:
        raise DecodeError(str(e))
    return project
