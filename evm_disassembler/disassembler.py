"""
EVM bytecode disassembler.

Scans a byte buffer from offset 0 and turns it into an offset-addressed,
ascending ``Disassembly``. Termination policy:

- running out of bytes ends the scan normally;
- a push whose operand runs past the end of the buffer also ends the scan
  normally, dropping the truncated push. Solidity and Vyper append a CBOR
  metadata blob after the runtime code, and a truncated push is how that
  tail usually shows up;
- an unknown opcode anywhere aborts the whole decode with ``UnknownOpcode``.
"""

import logging
from collections.abc import Mapping
from operator import itemgetter
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from .encoder import encode
from .errors import EndOfStream, TooFewBytesForPush, UnknownOpcode
from .hexcodec import hex_to_bytes
from .opcodes import Instruction, OpcodeCategory, Push, resolve

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


def read_instruction(code: bytes, offset: int) -> Tuple[int, Instruction]:
    """
    Decode the instruction whose opcode byte sits at ``offset``.

    Args:
        code: Bytecode buffer
        offset: Position of the opcode byte

    Returns:
        ``(offset, instruction)``; the next instruction starts at
        ``offset + instruction.size``

    Raises:
        EndOfStream: No byte at ``offset``
        TooFewBytesForPush: Push operand runs past the end of ``code``
        UnknownOpcode: Byte at ``offset`` is not a known opcode
    """
    if offset >= len(code):
        raise EndOfStream(offset)

    byte = code[offset]
    kind = resolve(byte)

    if kind.category is OpcodeCategory.FIXED:
        return offset, kind.instruction

    if kind.category is OpcodeCategory.PUSH:
        start = offset + 1
        available = len(code) - start
        if available < kind.operand_length:
            raise TooFewBytesForPush(offset, kind.operand_length, available)
        return offset, Push(code[start:start + kind.operand_length])

    logger.debug("Unknown opcode 0x%02x at offset %d", byte, offset)
    raise UnknownOpcode(byte, offset)


def disassemble_bytes(code: BytesLike) -> Dict[int, Instruction]:
    """Decode ``code`` into an offset -> instruction dict in ascending offset order."""
    if isinstance(code, str):
        raise TypeError("Expected bytes; use disassemble_hex_str for hex text")
    if not isinstance(code, (bytes, bytearray, memoryview)):
        raise TypeError(f"Expected bytes-like code, not {type(code).__name__}")
    code = bytes(code)

    instructions = {}
    offset = 0
    while True:
        try:
            _, instruction = read_instruction(code, offset)
        except EndOfStream:
            break
        except TooFewBytesForPush as e:
            logger.debug(
                "Stopping at truncated PUSH%d at offset %d (%d trailing bytes)",
                e.expected, e.offset, len(code) - e.offset,
            )
            break
        instructions[offset] = instruction
        offset += instruction.size

    logger.debug("Disassembled %d instructions from %d bytes", len(instructions), len(code))
    return instructions


def disassemble_hex_str(text: str) -> Dict[int, Instruction]:
    """Decode hex text (optional ``0x`` prefix) the same way as ``disassemble_bytes``."""
    return disassemble_bytes(hex_to_bytes(text))


class Disassembly(Mapping):
    """
    Read-only mapping from byte offset to instruction.

    Iteration is always in ascending offset order, whatever order the
    entries were supplied in. Compares equal to any mapping with the same
    entries.
    """

    def __init__(self, instructions: Optional[Mapping] = None):
        entries = sorted((instructions or {}).items(), key=itemgetter(0))
        for offset, _ in entries:
            if not isinstance(offset, int) or offset < 0:
                raise ValueError(f"Offsets must be non-negative integers, got {offset!r}")
        self._instructions: Dict[int, Instruction] = dict(entries)

    @classmethod
    def from_bytes(cls, code: BytesLike) -> "Disassembly":
        return cls(disassemble_bytes(code))

    @classmethod
    def from_hex_str(cls, text: str) -> "Disassembly":
        return cls(disassemble_hex_str(text))

    def get(self, offset: int, default: Optional[Instruction] = None) -> Optional[Instruction]:
        """
        Instruction whose opcode byte is at ``offset``.

        Offsets inside a push operand, or past the end, give ``default``.
        """
        return self._instructions.get(offset, default)

    def __getitem__(self, offset: int) -> Instruction:
        return self._instructions[offset]

    def __iter__(self) -> Iterator[int]:
        return iter(self._instructions)

    def __len__(self) -> int:
        return len(self._instructions)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} instructions)"

    @property
    def instructions(self) -> Mapping:
        return MappingProxyType(self._instructions)

    @property
    def offsets(self) -> List[int]:
        return list(self._instructions)

    def to_bytes(self) -> bytes:
        """Re-encode the instructions in offset order."""
        return encode(self._instructions.values())

    def to_list(self) -> List[Dict[str, Any]]:
        """JSON-serializable rows, one per instruction."""
        return [
            {
                "offset": offset,
                "opcode": instruction.opcode,
                "mnemonic": instruction.mnemonic,
                "operand": "0x" + instruction.operand.hex() if isinstance(instruction, Push) else None,
            }
            for offset, instruction in self._instructions.items()
        ]


def decode_bytes(code: BytesLike) -> Disassembly:
    """
    Disassemble raw bytecode.

    Raises:
        UnknownOpcode: If any scanned byte is not a known opcode
    """
    return Disassembly.from_bytes(code)


def decode_hex(text: str) -> Disassembly:
    """
    Disassemble hex text with an optional ``0x`` prefix.

    Raises:
        InvalidHexCharacter: On malformed hex, before any decoding happens
        UnknownOpcode: If any scanned byte is not a known opcode
    """
    return Disassembly.from_hex_str(text)
