"""
Character scanner for hierarchical (WKT) definitions.

The scanner is a small state machine that turns text such as

    PROJCS["OSGB 1936 / British National Grid",GEOGCS[...],...]

into nested lists: ['PROJCS', 'OSGB 1936 / British National Grid',
['GEOGCS', ...], ...]. Keywords and quoted strings become str, numbers
become float, bare keywords inside a group (e.g. AXIS["E",EAST]) stay
as str.

States:
    NEUTRAL     between items
    KEYWORD     reading a bare keyword
    NUMBER      reading a signed float
    QUOTED      inside a double-quoted string
    AFTERQUOTE  just after a closing quote ("" is an escaped quote)
    ENDED       the outermost group has closed
"""

from enum import Enum
from typing import Any, List, Optional
import re

from ..errors import DefinitionError, WktParseError


class ScanState(Enum):
    NEUTRAL = 1
    KEYWORD = 2
    NUMBER = 3
    QUOTED = 4
    AFTERQUOTE = 5
    ENDED = -1


_WHITESPACE = re.compile(r'\s')
_LATIN = re.compile(r'[A-Za-z]')
_KEYWORD = re.compile(r'[A-Za-z84_]')
_END_THINGS = re.compile(r'[,\])]')
_DIGITS = re.compile(r'[\d.E\-+]')
_OPEN = '[('
_CLOSE = '])'


def scan_wkt(text: str) -> List[Any]:
    """
    Scan WKT text into a nested list tree.

    Args:
        text: WKT definition

    Returns:
        The root group as a nested list, keyword first

    Raises:
        DefinitionError: If the text is empty
        WktParseError: On an unexpected character, unterminated string
                       or unbalanced brackets
    """
    text = text.strip()
    if not text:
        raise DefinitionError("Empty string is not a valid specification")

    state = ScanState.NEUTRAL
    root: Optional[List[Any]] = None
    stack: List[Optional[List[Any]]] = []
    current: Optional[List[Any]] = None
    word: Any = None
    place = 0
    length = len(text)

    def fail(char: str, where: str) -> WktParseError:
        return WktParseError(
            f"Unexpected character {char!r} in {where} at index {place}",
            char=char,
            position=place,
        )

    while place < length:
        char = text[place]
        place += 1

        if state is not ScanState.QUOTED and _WHITESPACE.match(char):
            continue

        if state is ScanState.ENDED:
            raise fail(char, "text after the closing bracket")

        if state is ScanState.QUOTED:
            if char == '"':
                state = ScanState.AFTERQUOTE
            else:
                word += char
            continue

        if state is ScanState.AFTERQUOTE:
            if char == '"':
                # Doubled quote inside a string
                word += '"'
                state = ScanState.QUOTED
                continue
            if not _END_THINGS.match(char):
                raise fail(char, "afterquote")
            word = word.strip()
            # fall through to end-of-item handling

        elif state is ScanState.NUMBER:
            if _DIGITS.match(char):
                word += char
                continue
            if not _END_THINGS.match(char):
                raise fail(char, "number")
            try:
                word = float(word)
            except ValueError:
                raise WktParseError(
                    f"Malformed number {word!r} ending at index {place}",
                    char=char,
                    position=place,
                )

        elif state is ScanState.KEYWORD:
            if _KEYWORD.match(char):
                word += char
                continue
            if char in _OPEN:
                group = [word]
                if root is None:
                    root = group
                else:
                    current.append(group)
                stack.append(current)
                current = group
                word = None
                state = ScanState.NEUTRAL
                continue
            if not _END_THINGS.match(char):
                raise fail(char, "keyword")

        else:  # NEUTRAL
            if _LATIN.match(char):
                word = char
                state = ScanState.KEYWORD
                continue
            if char == '"':
                word = ''
                state = ScanState.QUOTED
                continue
            if _DIGITS.match(char):
                word = char
                state = ScanState.NUMBER
                continue
            if not _END_THINGS.match(char):
                raise fail(char, "neutral")

        # End of an item: ',' or a closing bracket
        if current is None:
            raise fail(char, "top level")
        if char == ',':
            if word is not None:
                current.append(word)
            word = None
            state = ScanState.NEUTRAL
        else:
            if word is not None:
                current.append(word)
                word = None
            state = ScanState.NEUTRAL
            current = stack.pop()
            if current is None:
                state = ScanState.ENDED

    if state is ScanState.ENDED:
        return root
    if state is ScanState.QUOTED:
        raise WktParseError(
            f"Unterminated quoted string at index {place}", char=None, position=place
        )
    raise WktParseError(
        f"Unable to parse {text!r}: brackets not closed (state {state.name})",
        char=None,
        position=place,
    )
