"""
Instruction sequence -> bytecode.

The inverse of the disassembler for a plain, ordered run of instructions.
No offsets are tracked or checked: instructions are emitted in the order
given.
"""

import logging
from typing import Iterable

from .hexcodec import bytes_to_hex
from .opcodes import Instruction, Opcode, Push, push_opcode

logger = logging.getLogger(__name__)


def encode_instruction(instruction: Instruction) -> bytes:
    """Byte encoding of a single instruction."""
    if isinstance(instruction, Opcode):
        return bytes((instruction.value,))
    if isinstance(instruction, Push):
        return bytes((push_opcode(instruction.operand_length),)) + instruction.operand
    raise TypeError(f"Not an instruction: {instruction!r}")


def encode(instructions: Iterable[Instruction]) -> bytes:
    """
    Concatenate the encodings of ``instructions`` in sequence order.

    Args:
        instructions: ``Opcode`` members and ``Push`` values, in execution order

    Returns:
        Bytecode

    Raises:
        InvalidPushOperand: If a push operand is empty or longer than 32 bytes
        TypeError: If an element is not an instruction
    """
    code = bytearray()
    count = 0
    for instruction in instructions:
        code += encode_instruction(instruction)
        count += 1
    logger.debug("Encoded %d instructions into %d bytes", count, len(code))
    return bytes(code)


def encode_hex(instructions: Iterable[Instruction], prefix: bool = True) -> str:
    """Like ``encode`` but returns lowercase hex text."""
    return bytes_to_hex(encode(instructions), prefix=prefix)
