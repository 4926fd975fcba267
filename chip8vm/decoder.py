from enum import Enum
from typing import NamedTuple


class Op(Enum):
    CLS = "00E0"
    RET = "00EE"
    SYS = "0NNN"
    JP = "1NNN"
    CALL = "2NNN"
    SE_VX_NN = "3XNN"
    SNE_VX_NN = "4XNN"
    SE_VX_VY = "5XY0"
    LD_VX_NN = "6XNN"
    ADD_VX_NN = "7XNN"
    LD_VX_VY = "8XY0"
    OR = "8XY1"
    AND = "8XY2"
    XOR = "8XY3"
    ADD = "8XY4"
    SUB = "8XY5"
    SHR = "8XY6"
    SUBN = "8XY7"
    SHL = "8XYE"
    SNE_VX_VY = "9XY0"
    LD_I = "ANNN"
    JP_V0 = "BNNN"
    RND = "CXNN"
    DRW = "DXYN"
    SKP = "EX9E"
    SKNP = "EXA1"
    LD_VX_DT = "FX07"
    WAITKEY = "FX0A"
    LD_DT_VX = "FX15"
    LD_ST_VX = "FX18"
    ADD_I_VX = "FX1E"
    FONT = "FX29"
    BCD = "FX33"
    STORE = "FX55"
    LOAD = "FX65"
    UNKNOWN = "????"


class Instruction(NamedTuple):
    opcode: int
    op: Op
    nnn: int  # 12 bit address/constant
    nn: int   # 8 bit constant
    n: int    # 4 bit constant
    x: int    # 4 bit register index
    y: int    # 4 bit register index


# (mask, pattern, op), first match wins
OPCODES = [
    (0xFFFF, 0x00E0, Op.CLS),
    (0xFFFF, 0x00EE, Op.RET),
    (0xF000, 0x0000, Op.SYS),

    (0xF000, 0x1000, Op.JP),
    (0xF000, 0x2000, Op.CALL),
    (0xF000, 0x3000, Op.SE_VX_NN),
    (0xF000, 0x4000, Op.SNE_VX_NN),
    (0xF00F, 0x5000, Op.SE_VX_VY),
    (0xF000, 0x6000, Op.LD_VX_NN),
    (0xF000, 0x7000, Op.ADD_VX_NN),

    (0xF00F, 0x8000, Op.LD_VX_VY),
    (0xF00F, 0x8001, Op.OR),
    (0xF00F, 0x8002, Op.AND),
    (0xF00F, 0x8003, Op.XOR),
    (0xF00F, 0x8004, Op.ADD),
    (0xF00F, 0x8005, Op.SUB),
    (0xF00F, 0x8006, Op.SHR),
    (0xF00F, 0x8007, Op.SUBN),
    (0xF00F, 0x800E, Op.SHL),

    (0xF00F, 0x9000, Op.SNE_VX_VY),
    (0xF000, 0xA000, Op.LD_I),
    (0xF000, 0xB000, Op.JP_V0),
    (0xF000, 0xC000, Op.RND),
    (0xF000, 0xD000, Op.DRW),

    (0xF0FF, 0xE09E, Op.SKP),
    (0xF0FF, 0xE0A1, Op.SKNP),

    (0xF0FF, 0xF007, Op.LD_VX_DT),
    (0xF0FF, 0xF00A, Op.WAITKEY),
    (0xF0FF, 0xF015, Op.LD_DT_VX),
    (0xF0FF, 0xF018, Op.LD_ST_VX),
    (0xF0FF, 0xF01E, Op.ADD_I_VX),
    (0xF0FF, 0xF029, Op.FONT),
    (0xF0FF, 0xF033, Op.BCD),
    (0xF0FF, 0xF055, Op.STORE),
    (0xF0FF, 0xF065, Op.LOAD),
]

# bucket the table by top nibble so decode only scans a handful of rows
_BY_PREFIX = {}
for _mask, _pattern, _op in OPCODES:
    _BY_PREFIX.setdefault(_pattern >> 12, []).append((_mask, _pattern, _op))


def fields(opcode):
    """Split a 16-bit opcode into (nnn, nn, n, x, y)."""
    return (
        opcode & 0x0FFF,
        opcode & 0x00FF,
        opcode & 0x000F,
        (opcode >> 8) & 0xF,
        (opcode >> 4) & 0xF,
    )


def classify(opcode):
    for mask, pattern, op in _BY_PREFIX.get(opcode >> 12, ()):
        if opcode & mask == pattern:
            return op
    return Op.UNKNOWN


def decode(opcode):
    opcode &= 0xFFFF
    return Instruction(opcode, classify(opcode), *fields(opcode))
