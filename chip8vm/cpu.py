# CHIP-8 instruction executor.
# Fetch a big-endian word at pc, bump pc by 2, decode it into an Instruction
# and hand it to the handler registered for its Op. Opcodes that match no
# pattern land on op_UNKNOWN, which does nothing on purpose: test ROMs probe
# undefined opcodes and expect them to be ignored.

import logging
import random

from .constants import ENTRY_POINT, FONT_GLYPH_SIZE, REGISTER_COUNT
from .decoder import Op, decode

log = logging.getLogger(__name__)

PC_MASK = 0xFFF


class CPU:

    def __init__(self, memory, stack, display, keypad, timers, rng=None):
        self.memory = memory
        self.stack = stack
        self.display = display
        self.keypad = keypad
        self.timers = timers
        self.rng = rng or random.Random()

        self.V = [0] * REGISTER_COUNT
        self.I = 0
        self.pc = ENTRY_POINT
        self.awaiting_key = None  # register FX0A is blocked on

        self.setup_funcmap()

    def reset(self):
        self.V = [0] * REGISTER_COUNT
        self.I = 0
        self.pc = ENTRY_POINT
        self.awaiting_key = None

    def setup_funcmap(self):
        self.funcmap = {
            Op.CLS: self.op_CLS,
            Op.RET: self.op_RET,
            Op.SYS: self.op_SYS,
            Op.JP: self.op_JP,
            Op.CALL: self.op_CALL,
            Op.SE_VX_NN: self.op_SE_Vx_nn,
            Op.SNE_VX_NN: self.op_SNE_Vx_nn,
            Op.SE_VX_VY: self.op_SE_Vx_Vy,
            Op.LD_VX_NN: self.op_LD_Vx_nn,
            Op.ADD_VX_NN: self.op_ADD_Vx_nn,
            Op.LD_VX_VY: self.op_LD_Vx_Vy,
            Op.OR: self.op_OR,
            Op.AND: self.op_AND,
            Op.XOR: self.op_XOR,
            Op.ADD: self.op_ADD,
            Op.SUB: self.op_SUB,
            Op.SHR: self.op_SHR,
            Op.SUBN: self.op_SUBN,
            Op.SHL: self.op_SHL,
            Op.SNE_VX_VY: self.op_SNE_Vx_Vy,
            Op.LD_I: self.op_LD_I,
            Op.JP_V0: self.op_JP_V0,
            Op.RND: self.op_RND,
            Op.DRW: self.op_DRW,
            Op.SKP: self.op_SKP,
            Op.SKNP: self.op_SKNP,
            Op.LD_VX_DT: self.op_LD_Vx_DT,
            Op.WAITKEY: self.op_WAITKEY,
            Op.LD_DT_VX: self.op_LD_DT_Vx,
            Op.LD_ST_VX: self.op_LD_ST_Vx,
            Op.ADD_I_VX: self.op_ADD_I_Vx,
            Op.FONT: self.op_FONT,
            Op.BCD: self.op_BCD,
            Op.STORE: self.op_STORE,
            Op.LOAD: self.op_LOAD,
            Op.UNKNOWN: self.op_UNKNOWN,
        }

    # ---- cycle ----
    def fetch(self):
        opcode = self.memory.read_word(self.pc)
        self.pc = (self.pc + 2) & PC_MASK
        return opcode

    def execute(self, ins):
        self.funcmap[ins.op](ins)

    def step(self):
        addr = self.pc
        ins = decode(self.fetch())
        if log.isEnabledFor(logging.DEBUG):
            log.debug(
                "addr: 0x%03X, op: 0x%04X, %s nnn=0x%03X V%X=0x%02X V%X=0x%02X I=0x%03X",
                addr, ins.opcode, ins.op.name, ins.nnn,
                ins.x, self.V[ins.x], ins.y, self.V[ins.y], self.I,
            )
        self.execute(ins)
        return ins

    def skip(self):
        self.pc = (self.pc + 2) & PC_MASK

    # ---- opcode handlers ----

    # 00E0 - clear the display
    def op_CLS(self, ins):
        self.display.clear()

    # 00EE - return from subroutine
    def op_RET(self, ins):
        self.pc = self.stack.pop()

    # 0NNN - machine code routine, treated as a plain jump
    def op_SYS(self, ins):
        self.pc = ins.nnn

    def op_JP(self, ins):
        self.pc = ins.nnn

    def op_CALL(self, ins):
        self.stack.push(self.pc)
        self.pc = ins.nnn

    def op_SE_Vx_nn(self, ins):
        if self.V[ins.x] == ins.nn:
            self.skip()

    def op_SNE_Vx_nn(self, ins):
        if self.V[ins.x] != ins.nn:
            self.skip()

    def op_SE_Vx_Vy(self, ins):
        if self.V[ins.x] == self.V[ins.y]:
            self.skip()

    def op_LD_Vx_nn(self, ins):
        self.V[ins.x] = ins.nn

    # 7XNN - carry flag is not changed
    def op_ADD_Vx_nn(self, ins):
        self.V[ins.x] = (self.V[ins.x] + ins.nn) & 0xFF

    # 8XY0..8XYE - subtract and shift forms write VF before Vx
    def op_LD_Vx_Vy(self, ins):
        self.V[ins.x] = self.V[ins.y]

    def op_OR(self, ins):
        self.V[ins.x] |= self.V[ins.y]

    def op_AND(self, ins):
        self.V[ins.x] &= self.V[ins.y]

    def op_XOR(self, ins):
        self.V[ins.x] ^= self.V[ins.y]

    # 8XY4 - sum first, then the carry, so 8FY4 leaves the carry in VF
    def op_ADD(self, ins):
        total = self.V[ins.x] + self.V[ins.y]
        self.V[ins.x] = total & 0xFF
        self.V[0xF] = 1 if total > 0xFF else 0

    def op_SUB(self, ins):
        vx, vy = self.V[ins.x], self.V[ins.y]
        self.V[0xF] = 1 if vx > vy else 0
        self.V[ins.x] = (vx - vy) & 0xFF

    def op_SHR(self, ins):
        vx = self.V[ins.x]
        self.V[0xF] = vx & 1
        self.V[ins.x] = vx >> 1

    def op_SUBN(self, ins):
        vx, vy = self.V[ins.x], self.V[ins.y]
        self.V[0xF] = 1 if vy > vx else 0
        self.V[ins.x] = (vy - vx) & 0xFF

    def op_SHL(self, ins):
        vx = self.V[ins.x]
        self.V[0xF] = (vx >> 7) & 1
        self.V[ins.x] = (vx << 1) & 0xFF

    def op_SNE_Vx_Vy(self, ins):
        if self.V[ins.x] != self.V[ins.y]:
            self.skip()

    def op_LD_I(self, ins):
        self.I = ins.nnn

    def op_JP_V0(self, ins):
        self.pc = (ins.nnn + self.V[0]) & PC_MASK

    def op_RND(self, ins):
        self.V[ins.x] = self.rng.getrandbits(8) & ins.nn

    # DXYN - draw N rows of sprite data from I at (Vx, Vy), VF = collision
    def op_DRW(self, ins):
        vx, vy = self.V[ins.x], self.V[ins.y]
        rows = self.memory.read_block(self.I, ins.n)
        self.V[0xF] = 0
        if self.display.draw_sprite(vx, vy, rows):
            self.V[0xF] = 1

    def op_SKP(self, ins):
        if self.keypad.is_pressed(self.V[ins.x]):
            self.skip()

    def op_SKNP(self, ins):
        if not self.keypad.is_pressed(self.V[ins.x]):
            self.skip()

    def op_LD_Vx_DT(self, ins):
        self.V[ins.x] = self.timers.delay

    # FX0A - wait for a key: rewind pc so this instruction runs again next step
    def op_WAITKEY(self, ins):
        key = self.keypad.first_pressed()
        if key is None:
            self.pc = (self.pc - 2) & PC_MASK
            self.awaiting_key = ins.x
            return
        self.V[ins.x] = key
        self.awaiting_key = None

    def op_LD_DT_Vx(self, ins):
        self.timers.delay = self.V[ins.x]

    def op_LD_ST_Vx(self, ins):
        self.timers.sound = self.V[ins.x]

    # FX1E - VF is not affected
    def op_ADD_I_Vx(self, ins):
        self.I = (self.I + self.V[ins.x]) & 0xFFFF

    def op_FONT(self, ins):
        self.I = (self.V[ins.x] & 0xF) * FONT_GLYPH_SIZE

    def op_BCD(self, ins):
        v = self.V[ins.x]
        self.memory.write_block(self.I, (v // 100, (v // 10) % 10, v % 10))

    # FX55 / FX65 - I is left unmodified
    def op_STORE(self, ins):
        self.memory.write_block(self.I, self.V[:ins.x + 1])

    def op_LOAD(self, ins):
        self.V[:ins.x + 1] = self.memory.read_block(self.I, ins.x + 1)

    def op_UNKNOWN(self, ins):
        log.debug("Unknown opcode: %04X", ins.opcode)
