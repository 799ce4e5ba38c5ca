"""
Key decoding for terminal input.

Turns the bytes read from a TTY into ``RawKeyEvent`` objects.  Raw codes
follow the Windows virtual-key numbering (Enter=13, Escape=27, Up=38, the
A key=65, ...), which is what custom item actions are keyed by; the POSIX
escape sequences are mapped onto it here.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class RawKeyEvent:
    """
    A key press as delivered to the menu.

    Attributes
    ----------
    raw_code:
        Virtual key code (``13`` Enter, ``38`` Up, ``65`` the A key, ...).
    shift, ctrl, alt, meta:
        Modifier flags.
    char:
        The character the key produced, when known.  Key sources that only
        see codes leave it empty and the character is derived from
        *raw_code*.
    """

    raw_code: int
    shift: bool = False
    ctrl: bool = False
    alt: bool = False
    meta: bool = False
    char: str = ""


# ---------------------------------------------------------------------------
# Virtual key codes
# ---------------------------------------------------------------------------

VK_BACKSPACE = 8
VK_TAB = 9
VK_ENTER = 13
VK_ESCAPE = 27
VK_SPACE = 32
VK_PAGE_UP = 33
VK_PAGE_DOWN = 34
VK_END = 35
VK_HOME = 36
VK_LEFT = 37
VK_UP = 38
VK_RIGHT = 39
VK_DOWN = 40
VK_INSERT = 45
VK_DELETE = 46
VK_F1 = 112

# US layout: punctuation -> (code, shift)
_OEM_CODES: dict[str, tuple[int, bool]] = {
    ";": (186, False), ":": (186, True),
    "=": (187, False), "+": (187, True),
    ",": (188, False), "<": (188, True),
    "-": (189, False), "_": (189, True),
    ".": (190, False), ">": (190, True),
    "/": (191, False), "?": (191, True),
    "`": (192, False), "~": (192, True),
    "[": (219, False), "{": (219, True),
    "\\": (220, False), "|": (220, True),
    "]": (221, False), "}": (221, True),
    "'": (222, False), '"': (222, True),
    "!": (49, True), "@": (50, True), "#": (51, True), "$": (52, True),
    "%": (53, True), "^": (54, True), "&": (55, True), "*": (56, True),
    "(": (57, True), ")": (48, True),
}


def char_code(ch: str) -> tuple[int, bool]:
    """
    Return ``(virtual key code, shift)`` for a printable character.

    Letters map to their uppercase code with *shift* set for capitals,
    digits to their own code.  Characters outside the US layout get code 0.
    """
    if len(ch) == 1 and ch.isascii():
        if ch.isalpha():
            return ord(ch.upper()), ch.isupper()
        if ch.isdigit():
            return ord(ch), False
        if ch == " ":
            return VK_SPACE, False
    return _OEM_CODES.get(ch, (0, False))


# ---------------------------------------------------------------------------
# Escape sequence tables
# ---------------------------------------------------------------------------

# CSI <params> <final>
_CSI_FINAL: dict[str, int] = {
    "A": VK_UP,
    "B": VK_DOWN,
    "C": VK_RIGHT,
    "D": VK_LEFT,
    "H": VK_HOME,
    "F": VK_END,
}

# CSI <number> ~
_CSI_TILDE: dict[int, int] = {
    1: VK_HOME,
    2: VK_INSERT,
    3: VK_DELETE,
    4: VK_END,
    5: VK_PAGE_UP,
    6: VK_PAGE_DOWN,
    7: VK_HOME,
    8: VK_END,
    **{n: VK_F1 + i for i, n in enumerate((11, 12, 13, 14, 15, 17, 18, 19, 20, 21, 23, 24))},
}

# ESC O <final>
_SS3: dict[str, int] = {
    "A": VK_UP,
    "B": VK_DOWN,
    "C": VK_RIGHT,
    "D": VK_LEFT,
    "H": VK_HOME,
    "F": VK_END,
    "P": VK_F1,
    "Q": VK_F1 + 1,
    "R": VK_F1 + 2,
    "S": VK_F1 + 3,
}


def _modifier_flags(value: int) -> tuple[bool, bool, bool]:
    """
    Decode an xterm modifier parameter into ``(shift, alt, ctrl)``.

    The parameter is 1-based: ``1 + shift + 2*alt + 4*ctrl``.
    """
    bits = value - 1
    return bool(bits & 1), bool(bits & 2), bool(bits & 4)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def iter_key_sequences(data: bytes) -> Iterator[bytes]:
    """
    Split a chunk read from the terminal into single-key byte sequences.

    A read may carry several keys (typing fast, pasting); each yielded
    chunk can be handed to :func:`decode_key` on its own.
    """
    i = 0
    n = len(data)
    while i < n:
        if data[i] == 0x1B and i + 1 < n:
            second = data[i + 1]
            if second == ord("["):
                # CSI: parameters until a final byte in 0x40-0x7e
                j = i + 2
                while j < n and not (0x40 <= data[j] <= 0x7E):
                    j += 1
                end = min(j + 1, n)
            elif second == ord("O"):
                end = min(i + 3, n)
            elif second == 0x1B:
                end = i + 1
            else:
                end = i + 2
        elif data[i] >= 0xC0:
            # UTF-8 lead byte
            width = 2 if data[i] < 0xE0 else 3 if data[i] < 0xF0 else 4
            end = min(i + width, n)
        else:
            end = i + 1
        yield data[i:end]
        i = end


def decode_key(data: bytes) -> RawKeyEvent | None:
    """
    Decode one key sequence into a :class:`RawKeyEvent`.

    Handles printable ASCII and UTF-8 characters, Ctrl+letter (bytes
    0x01-0x1a), Alt+key (ESC prefix), CSI and SS3 sequences, and xterm
    modifier parameters (``CSI 1;5C`` is Ctrl+Right).

    Parameters
    ----------
    data:
        Raw bytes of one key, as yielded by :func:`iter_key_sequences`.

    Returns
    -------
    RawKeyEvent | None
        ``None`` for sequences that do not map to a key.
    """
    if not data:
        return None

    if data[0] != 0x1B:
        return _decode_plain(data)

    if len(data) == 1:
        return RawKeyEvent(VK_ESCAPE)

    second = data[1:2]
    if second == b"[":
        return _decode_csi(data[2:])
    if second == b"O":
        code = _SS3.get(data[2:3].decode("ascii", errors="replace"))
        return RawKeyEvent(code) if code is not None else None

    if len(data) == 2:
        byte = data[1]
        if 1 <= byte <= 26:
            letter = chr(byte + 96)
            return RawKeyEvent(ord(letter.upper()), ctrl=True, alt=True, char=letter)
        event = _decode_plain(data[1:])
        return replace(event, alt=True) if event is not None else None

    return None


def _decode_plain(data: bytes) -> RawKeyEvent | None:
    byte = data[0]
    if len(data) == 1:
        if byte in (0x0D, 0x0A):
            return RawKeyEvent(VK_ENTER, char="\r")
        if byte == 0x09:
            return RawKeyEvent(VK_TAB, char="\t")
        if byte in (0x7F, 0x08):
            return RawKeyEvent(VK_BACKSPACE)
        if byte == 0x00:
            return RawKeyEvent(VK_SPACE, ctrl=True, char=" ")
        if 1 <= byte <= 26:
            letter = chr(byte + 96)  # 1 -> 'a'
            return RawKeyEvent(ord(letter.upper()), ctrl=True, char=letter)
        if byte < 0x20:
            return None

    try:
        ch = data.decode("utf-8")
    except UnicodeDecodeError:
        return None
    if len(ch) != 1 or not ch.isprintable():
        return None
    code, shift = char_code(ch)
    return RawKeyEvent(code, shift=shift, char=ch)


def _decode_csi(payload: bytes) -> RawKeyEvent | None:
    """Decode the bytes after ``ESC [``."""
    try:
        text = payload.decode("ascii")
    except UnicodeDecodeError:
        return None
    if not text:
        return None

    final = text[-1]
    params = text[:-1].split(";") if len(text) > 1 else []

    shift = False
    if final == "~":
        code = _CSI_TILDE.get(_safe_int(params[0])) if params else None
    elif final == "Z":
        # Back-tab
        code, shift = VK_TAB, True
    else:
        code = _CSI_FINAL.get(final)
    if code is None:
        return None

    alt = ctrl = False
    if len(params) == 2:
        modifier = _safe_int(params[1])
        if modifier is not None:
            shift, alt, ctrl = _modifier_flags(modifier)
    return RawKeyEvent(code, shift=shift, ctrl=ctrl, alt=alt)


def _safe_int(s: str) -> int | None:
    try:
        return int(s)
    except ValueError:
        return None
