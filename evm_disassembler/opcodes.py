"""
EVM opcode table.

Maps every byte value to one of three kinds: a fixed single-byte instruction
(``Opcode``), a push whose operand length follows from the byte value itself,
or unknown. The fixed set is the instruction set of the Constantinople /
Petersburg hard fork; opcodes introduced later resolve as unknown.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .errors import InvalidPushOperand

PUSH1_VALUE = 0x60
PUSH32_VALUE = 0x7F
MAX_PUSH_SIZE = PUSH32_VALUE - PUSH1_VALUE + 1


class Opcode(Enum):
    """Fixed instructions that carry no operand. The value is the opcode byte."""

    # Stop and arithmetic
    STOP = 0x00
    ADD = 0x01
    MUL = 0x02
    SUB = 0x03
    DIV = 0x04
    SDIV = 0x05
    MOD = 0x06
    SMOD = 0x07
    ADDMOD = 0x08
    MULMOD = 0x09
    EXP = 0x0A
    SIGNEXTEND = 0x0B

    # Comparison and bitwise logic
    LT = 0x10
    GT = 0x11
    SLT = 0x12
    SGT = 0x13
    EQ = 0x14
    ISZERO = 0x15
    AND = 0x16
    OR = 0x17
    XOR = 0x18
    NOT = 0x19
    BYTE = 0x1A
    SHL = 0x1B
    SHR = 0x1C
    SAR = 0x1D

    SHA3 = 0x20

    # Environmental information
    ADDRESS = 0x30
    BALANCE = 0x31
    ORIGIN = 0x32
    CALLER = 0x33
    CALLVALUE = 0x34
    CALLDATALOAD = 0x35
    CALLDATASIZE = 0x36
    CALLDATACOPY = 0x37
    CODESIZE = 0x38
    CODECOPY = 0x39
    GASPRICE = 0x3A
    EXTCODESIZE = 0x3B
    EXTCODECOPY = 0x3C
    RETURNDATASIZE = 0x3D
    RETURNDATACOPY = 0x3E
    EXTCODEHASH = 0x3F

    # Block information
    BLOCKHASH = 0x40
    COINBASE = 0x41
    TIMESTAMP = 0x42
    NUMBER = 0x43
    DIFFICULTY = 0x44
    GASLIMIT = 0x45

    # Stack, memory, storage and flow
    POP = 0x50
    MLOAD = 0x51
    MSTORE = 0x52
    MSTORE8 = 0x53
    SLOAD = 0x54
    SSTORE = 0x55
    JUMP = 0x56
    JUMPI = 0x57
    PC = 0x58
    MSIZE = 0x59
    GAS = 0x5A
    JUMPDEST = 0x5B

    DUP1 = 0x80
    DUP2 = 0x81
    DUP3 = 0x82
    DUP4 = 0x83
    DUP5 = 0x84
    DUP6 = 0x85
    DUP7 = 0x86
    DUP8 = 0x87
    DUP9 = 0x88
    DUP10 = 0x89
    DUP11 = 0x8A
    DUP12 = 0x8B
    DUP13 = 0x8C
    DUP14 = 0x8D
    DUP15 = 0x8E
    DUP16 = 0x8F

    SWAP1 = 0x90
    SWAP2 = 0x91
    SWAP3 = 0x92
    SWAP4 = 0x93
    SWAP5 = 0x94
    SWAP6 = 0x95
    SWAP7 = 0x96
    SWAP8 = 0x97
    SWAP9 = 0x98
    SWAP10 = 0x99
    SWAP11 = 0x9A
    SWAP12 = 0x9B
    SWAP13 = 0x9C
    SWAP14 = 0x9D
    SWAP15 = 0x9E
    SWAP16 = 0x9F

    LOG0 = 0xA0
    LOG1 = 0xA1
    LOG2 = 0xA2
    LOG3 = 0xA3
    LOG4 = 0xA4

    # System operations
    CREATE = 0xF0
    CALL = 0xF1
    CALLCODE = 0xF2
    RETURN = 0xF3
    DELEGATECALL = 0xF4
    CREATE2 = 0xF5
    STATICCALL = 0xFA
    REVERT = 0xFD
    INVALID = 0xFE
    SELFDESTRUCT = 0xFF

    @property
    def opcode(self) -> int:
        return self.value

    @property
    def mnemonic(self) -> str:
        return self.name

    @property
    def operand_length(self) -> int:
        return 0

    @property
    def size(self) -> int:
        return 1

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Push:
    """
    A PUSH1..PUSH32 instruction and its immediate operand.

    The operand is stored big-endian, exactly as it appears in the code, and
    is always an owned ``bytes`` copy of whatever bytes-like value was given.
    """
    operand: bytes

    def __post_init__(self):
        if not isinstance(self.operand, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"Push operand must be bytes-like, not {type(self.operand).__name__}"
            )
        operand = bytes(self.operand)
        if not 1 <= len(operand) <= MAX_PUSH_SIZE:
            raise InvalidPushOperand(len(operand))
        object.__setattr__(self, "operand", operand)

    @classmethod
    def from_int(cls, value: int, size: Optional[int] = None) -> "Push":
        """
        Build a push for an unsigned integer.

        Args:
            value: Non-negative integer to push
            size: Operand width in bytes; the smallest width that fits when omitted

        Returns:
            Push instruction holding ``value`` big-endian
        """
        if value < 0:
            raise ValueError(f"Cannot push negative value {value}")
        if size is None:
            size = max(1, (value.bit_length() + 7) // 8)
        if not 1 <= size <= MAX_PUSH_SIZE:
            raise InvalidPushOperand(size)
        try:
            operand = value.to_bytes(size, "big")
        except OverflowError:
            raise ValueError(f"Value {value:#x} does not fit in {size} bytes") from None
        return cls(operand)

    @property
    def opcode(self) -> int:
        return PUSH1_VALUE + len(self.operand) - 1

    @property
    def mnemonic(self) -> str:
        return f"PUSH{len(self.operand)}"

    @property
    def operand_length(self) -> int:
        return len(self.operand)

    @property
    def size(self) -> int:
        return 1 + len(self.operand)

    @property
    def value(self) -> int:
        return int.from_bytes(self.operand, "big")

    def __str__(self) -> str:
        return f"{self.mnemonic} 0x{self.operand.hex()}"


Instruction = Union[Opcode, Push]


class OpcodeCategory(Enum):
    """How a byte value behaves when read as an opcode."""
    FIXED = "fixed"
    PUSH = "push"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class OpcodeKind:
    """Resolution of a single opcode byte."""
    category: OpcodeCategory
    instruction: Optional[Opcode] = None
    operand_length: int = 0


_UNKNOWN = OpcodeKind(OpcodeCategory.UNKNOWN)


def _build_kind(byte: int) -> OpcodeKind:
    if PUSH1_VALUE <= byte <= PUSH32_VALUE:
        return OpcodeKind(OpcodeCategory.PUSH, operand_length=byte - PUSH1_VALUE + 1)
    try:
        return OpcodeKind(OpcodeCategory.FIXED, instruction=Opcode(byte))
    except ValueError:
        return _UNKNOWN


_OPCODE_KINDS = tuple(_build_kind(byte) for byte in range(256))


def resolve(byte: int) -> OpcodeKind:
    """Resolve an opcode byte to its kind. Defined for every value in 0..255."""
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"Opcode must be a byte value, got {byte}")
    return _OPCODE_KINDS[byte]


def push_opcode(operand_length: int) -> int:
    """Opcode byte of the push instruction that carries ``operand_length`` bytes."""
    if not 1 <= operand_length <= MAX_PUSH_SIZE:
        raise InvalidPushOperand(operand_length)
    return PUSH1_VALUE + operand_length - 1


def is_known(byte: int) -> bool:
    """True for fixed and push opcodes, False for bytes with no instruction."""
    return resolve(byte).category is not OpcodeCategory.UNKNOWN

