"""Human-readable disassembly listings."""

from typing import Optional

from .config import ListingConfig
from .disassembler import Disassembly
from .encoder import encode_instruction
from .opcodes import Push

MNEMONIC_WIDTH = 14


def _format_offset(offset: int, config: ListingConfig) -> str:
    if config.hex_offsets:
        digits = f"{offset:0{config.offset_width}x}"
        return digits.upper() if config.uppercase else digits
    return f"{offset:>{config.offset_width}d}"


def _hex(data: bytes, config: ListingConfig) -> str:
    digits = data.hex()
    return digits.upper() if config.uppercase else digits


def format_listing(disassembly: Disassembly, config: Optional[ListingConfig] = None) -> str:
    """
    Render one line per instruction, in offset order.

    Example line (defaults): ``0000  PUSH1           0x80``
    """
    config = config or ListingConfig()

    raw = {}
    if config.show_bytes:
        raw = {offset: _hex(encode_instruction(instr), config) for offset, instr in disassembly.items()}
    raw_width = max((len(text) for text in raw.values()), default=0)

    lines = []
    for offset, instruction in disassembly.items():
        parts = [_format_offset(offset, config)]
        if config.show_bytes:
            parts.append(f"{raw[offset]:<{raw_width}}")
        parts.append(f"{instruction.mnemonic:<{MNEMONIC_WIDTH}}")
        if isinstance(instruction, Push):
            parts.append("0x" + _hex(instruction.operand, config))
        lines.append("  ".join(parts).rstrip())
    return "\n".join(lines)
