"""
EVM Bytecode Disassembler

Decodes raw smart-contract bytecode into typed, offset-addressed
instructions and encodes instruction sequences back into bytecode.
Truncated push data at the end of the code (compiler metadata) is
tolerated; unknown opcodes are not.
"""

from .disassembler import (
    Disassembly,
    decode_bytes,
    decode_hex,
    disassemble_bytes,
    disassemble_hex_str,
)
from .encoder import encode, encode_hex
from .errors import (
    DisassemblyError,
    EndOfStream,
    InvalidHexCharacter,
    InvalidPushOperand,
    TooFewBytesForPush,
    UnknownOpcode,
)
from .opcodes import (
    PUSH1_VALUE,
    Instruction,
    Opcode,
    OpcodeCategory,
    OpcodeKind,
    Push,
    resolve,
)

__version__ = "1.0.0"
__author__ = "Smart Contract Decompilation Team"

__all__ = [
    "Disassembly",
    "DisassemblyError",
    "EndOfStream",
    "Instruction",
    "InvalidHexCharacter",
    "InvalidPushOperand",
    "Opcode",
    "OpcodeCategory",
    "OpcodeKind",
    "PUSH1_VALUE",
    "Push",
    "TooFewBytesForPush",
    "UnknownOpcode",
    "decode_bytes",
    "decode_hex",
    "disassemble_bytes",
    "disassemble_hex_str",
    "encode",
    "encode_hex",
    "resolve",
]
