"""
Tests for evm_disassembler/opcodes.py

Covers:
  - Opcode table resolution over all 256 byte values
  - Push operand length arithmetic
  - Later-fork opcodes resolving as unknown
  - Push construction, validation and integer helpers
  - Cross-check of mnemonics against pyevmasm
"""

import pytest
from evm_disassembler.errors import InvalidPushOperand
from evm_disassembler.opcodes import (
    MAX_PUSH_SIZE,
    PUSH1_VALUE,
    Opcode,
    OpcodeCategory,
    OpcodeKind,
    Push,
    is_known,
    push_opcode,
    resolve,
)


# ---------------------------------------------------------------------------
# Table resolution
# ---------------------------------------------------------------------------

class TestResolve:
    def test_fixed_opcode(self):
        kind = resolve(0x40)
        assert kind.category is OpcodeCategory.FIXED
        assert kind.instruction is Opcode.BLOCKHASH
        assert kind.operand_length == 0

    def test_push1(self):
        assert resolve(0x60) == OpcodeKind(OpcodeCategory.PUSH, None, 1)

    def test_push32(self):
        kind = resolve(0x7F)
        assert kind.category is OpcodeCategory.PUSH
        assert kind.operand_length == 32

    def test_push_lengths_are_contiguous(self):
        lengths = [resolve(PUSH1_VALUE + i).operand_length for i in range(MAX_PUSH_SIZE)]
        assert lengths == list(range(1, 33))

    def test_unassigned_byte_is_unknown(self):
        assert resolve(0x0C).category is OpcodeCategory.UNKNOWN
        assert resolve(0x0C).instruction is None

    @pytest.mark.parametrize("byte", [0x46, 0x47, 0x48, 0x5C, 0x5D, 0x5E, 0x5F])
    def test_later_fork_opcodes_are_unknown(self, byte):
        # CHAINID, SELFBALANCE, BASEFEE, TLOAD, TSTORE, MCOPY, PUSH0
        assert not is_known(byte)

    def test_invalid_is_a_known_instruction(self):
        assert resolve(0xFE).instruction is Opcode.INVALID

    def test_category_counts(self):
        categories = [resolve(b).category for b in range(256)]
        assert categories.count(OpcodeCategory.FIXED) == 108
        assert categories.count(OpcodeCategory.PUSH) == 32
        assert categories.count(OpcodeCategory.UNKNOWN) == 116

    def test_every_fixed_member_resolves_to_itself(self):
        for op in Opcode:
            assert resolve(op.value).instruction is op

    @pytest.mark.parametrize("value", [-1, 256, 0x1FF])
    def test_out_of_range_raises(self, value):
        with pytest.raises(ValueError):
            resolve(value)


# ---------------------------------------------------------------------------
# Opcode members
# ---------------------------------------------------------------------------

class TestOpcode:
    def test_properties(self):
        assert Opcode.SHA3.opcode == 0x20
        assert Opcode.SHA3.mnemonic == "SHA3"
        assert Opcode.SHA3.size == 1
        assert Opcode.SHA3.operand_length == 0

    def test_str(self):
        assert str(Opcode.JUMPDEST) == "JUMPDEST"

    def test_lookup_by_byte(self):
        assert Opcode(0x52) is Opcode.MSTORE


# ---------------------------------------------------------------------------
# Push
# ---------------------------------------------------------------------------

class TestPush:
    def test_properties(self):
        push = Push(b"\x01\x00")
        assert push.opcode == 0x61
        assert push.mnemonic == "PUSH2"
        assert push.size == 3
        assert push.operand_length == 2
        assert push.value == 256

    def test_str(self):
        assert str(Push(b"\x80")) == "PUSH1 0x80"

    def test_operand_is_copied(self):
        buf = bytearray(b"\x01\x02")
        push = Push(buf)
        buf[0] = 0xFF
        assert push.operand == b"\x01\x02"
        assert isinstance(push.operand, bytes)

    def test_memoryview_operand(self):
        assert Push(memoryview(b"\xaa\xbb")).operand == b"\xaa\xbb"

    def test_equality_and_hash(self):
        assert Push(b"\x01") == Push(bytearray(b"\x01"))
        assert len({Push(b"\x01"), Push(b"\x01")}) == 1

    def test_empty_operand_rejected(self):
        with pytest.raises(InvalidPushOperand):
            Push(b"")

    def test_oversized_operand_rejected(self):
        with pytest.raises(InvalidPushOperand) as excinfo:
            Push(bytes(33))
        assert excinfo.value.length == 33

    def test_invalid_operand_is_value_error(self):
        with pytest.raises(ValueError):
            Push(b"")

    @pytest.mark.parametrize("operand", ["80", 3, None, [1, 2]])
    def test_non_bytes_rejected(self, operand):
        with pytest.raises(TypeError):
            Push(operand)

    def test_from_int_minimal(self):
        assert Push.from_int(0) == Push(b"\x00")
        assert Push.from_int(0x80) == Push(b"\x80")
        assert Push.from_int(0x100) == Push(b"\x01\x00")

    def test_from_int_fixed_width(self):
        assert Push.from_int(1, size=4) == Push(b"\x00\x00\x00\x01")

    def test_from_int_max_word(self):
        push = Push.from_int(2 ** 256 - 1)
        assert push.mnemonic == "PUSH32"

    def test_from_int_too_large(self):
        with pytest.raises(InvalidPushOperand):
            Push.from_int(2 ** 256)

    def test_from_int_does_not_fit(self):
        with pytest.raises(ValueError, match="does not fit"):
            Push.from_int(256, size=1)

    def test_from_int_negative(self):
        with pytest.raises(ValueError):
            Push.from_int(-1)

    def test_push_opcode(self):
        assert push_opcode(1) == 0x60
        assert push_opcode(32) == 0x7F
        with pytest.raises(InvalidPushOperand):
            push_opcode(0)


# ---------------------------------------------------------------------------
# Cross-check against pyevmasm
# ---------------------------------------------------------------------------

# pyevmasm spells a few mnemonics differently
PYEVMASM_ALIASES = {"GETPC": "PC"}


class TestAgainstPyevmasm:
    def test_fixed_mnemonics_match(self):
        pyevmasm = pytest.importorskip("pyevmasm")
        table = pyevmasm.instruction_tables["constantinople"]
        for op in Opcode:
            name = table[op.value].name
            assert PYEVMASM_ALIASES.get(name, name) == op.mnemonic

    def test_pc_keeps_its_standard_mnemonic(self):
        assert Opcode.PC.mnemonic == "PC"
        assert resolve(0x58).instruction is Opcode.PC

    def test_push_mnemonics_match(self):
        pyevmasm = pytest.importorskip("pyevmasm")
        table = pyevmasm.instruction_tables["constantinople"]
        for length in range(1, MAX_PUSH_SIZE + 1):
            byte = push_opcode(length)
            assert table[byte].name == f"PUSH{length}"
            assert table[byte].operand_size == resolve(byte).operand_length
