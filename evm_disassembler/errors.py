"""
Failure kinds shared by the disassembler, the encoder and the hex front-end.

Only ``UnknownOpcode``, ``InvalidHexCharacter`` and ``InvalidPushOperand``
ever reach a caller. ``EndOfStream`` and ``TooFewBytesForPush`` are raised by
the single-instruction reader and consumed by the decode loop, where both end
the scan successfully.
"""

from typing import Optional


class DisassemblyError(Exception):
    """Base class for every error raised by this package."""


class UnknownOpcode(DisassemblyError):
    """A byte outside the fixed and push ranges was read as an opcode."""

    def __init__(self, opcode: int, offset: int):
        self.opcode = opcode
        self.offset = offset
        super().__init__(f"Unknown opcode 0x{opcode:02x} at offset {offset}")


class InvalidHexCharacter(DisassemblyError, ValueError):
    """Input text is not an even-length run of hex digits."""

    def __init__(self, text: str, position: Optional[int] = None):
        self.text = text
        self.position = position
        if position is None:
            message = f"Odd-length hex string ({len(text)} digits)"
        else:
            message = f"Invalid hex character {text[position]!r} at position {position}"
        super().__init__(message)


class TooFewBytesForPush(DisassemblyError):
    """A push opcode is followed by fewer operand bytes than it requires."""

    def __init__(self, offset: int, expected: int, available: int):
        self.offset = offset
        self.expected = expected
        self.available = available
        super().__init__(
            f"PUSH{expected} at offset {offset} needs {expected} operand bytes, "
            f"only {available} left"
        )


class EndOfStream(DisassemblyError):
    """No byte is left to read at the cursor."""

    def __init__(self, offset: int):
        self.offset = offset
        super().__init__(f"End of stream at offset {offset}")


class InvalidPushOperand(DisassemblyError, ValueError):
    """A push operand is empty or longer than 32 bytes."""

    def __init__(self, length: int):
        self.length = length
        super().__init__(f"Push operand must be 1 to 32 bytes long, got {length}")
