import logging

import pytest

from chip8vm.constants import ENTRY_POINT


def run(vm, steps):
    for _ in range(steps):
        vm.step()
    return vm.cpu


# =============================================================================
#  LOADS AND ARITHMETIC
# =============================================================================

@pytest.mark.parametrize("nn", [0x00, 0x01, 0x7F, 0x80, 0xFF])
def test_set_register(load, nn):
    cpu = run(load(0x6300 | nn), 1)
    assert cpu.V[3] == nn


def test_set_then_add(load):
    cpu = run(load(0x6105, 0x7105), 2)
    assert cpu.V[1] == 10


@pytest.mark.parametrize("a, b", [(0, 0), (200, 55), (200, 56), (255, 255), (1, 255)])
def test_add_immediate_wraps_without_flag(load, a, b):
    cpu = run(load(0x6F07, 0x6000 | a, 0x7000 | b), 3)
    assert cpu.V[0] == (a + b) % 256
    assert cpu.V[0xF] == 7


@pytest.mark.parametrize("a, b", [(1, 2), (255, 1), (128, 128), (100, 155), (100, 156)])
def test_add_registers_carry(load, a, b):
    cpu = run(load(0x6000 | a, 0x6100 | b, 0x8014), 3)
    assert cpu.V[0] == (a + b) & 0xFF
    assert cpu.V[0xF] == (1 if a + b > 255 else 0)


@pytest.mark.parametrize("a, b", [(5, 3), (3, 5), (7, 7), (0, 255)])
def test_sub_no_borrow_flag(load, a, b):
    cpu = run(load(0x6000 | a, 0x6100 | b, 0x8015), 3)
    assert cpu.V[0] == (a - b) & 0xFF
    assert cpu.V[0xF] == (1 if a > b else 0)


@pytest.mark.parametrize("a, b", [(5, 3), (3, 5), (7, 7)])
def test_subn(load, a, b):
    cpu = run(load(0x6000 | a, 0x6100 | b, 0x8017), 3)
    assert cpu.V[0] == (b - a) & 0xFF
    assert cpu.V[0xF] == (1 if b > a else 0)


def test_bitwise_ops(load):
    cpu = run(load(0x60F0, 0x613C, 0x6200, 0x8200, 0x8211,
                   0x6300, 0x8300, 0x8312, 0x6400, 0x8400, 0x8413), 11)
    assert cpu.V[2] == 0xF0 | 0x3C
    assert cpu.V[3] == 0xF0 & 0x3C
    assert cpu.V[4] == 0xF0 ^ 0x3C


def test_shift_right(load):
    cpu = run(load(0x6005, 0x8006), 2)
    assert cpu.V[0] == 2
    assert cpu.V[0xF] == 1


def test_shift_left_flag_is_a_bit(load):
    cpu = run(load(0x6081, 0x800E), 2)
    assert cpu.V[0] == 0x02
    assert cpu.V[0xF] == 1


def test_assign(load):
    cpu = run(load(0x6142, 0x8010), 2)
    assert cpu.V[0] == 0x42


# =============================================================================
#  FLOW CONTROL
# =============================================================================

def test_jump(load):
    cpu = run(load(0x1208), 1)
    assert cpu.pc == 0x208


def test_sys_is_a_jump(load):
    cpu = run(load(0x0300), 1)
    assert cpu.pc == 0x300


def test_call_and_return(load):
    vm = load(0x2206, 0x0000, 0x0000, 0x00EE)
    run(vm, 1)
    assert vm.cpu.pc == 0x206
    assert vm.stack.depth == 1
    run(vm, 1)
    assert vm.cpu.pc == ENTRY_POINT + 2
    assert vm.stack.depth == 0


def test_jump_plus_v0(load):
    cpu = run(load(0x6004, 0xB300), 2)
    assert cpu.pc == 0x304


@pytest.mark.parametrize("words, skipped", [
    ((0x6005, 0x3005), True),
    ((0x6005, 0x3006), False),
    ((0x6005, 0x4006), True),
    ((0x6005, 0x4005), False),
    ((0x6005, 0x6105, 0x5010), True),
    ((0x6005, 0x6106, 0x5010), False),
    ((0x6005, 0x6106, 0x9010), True),
    ((0x6005, 0x6105, 0x9010), False),
])
def test_skips(load, words, skipped):
    cpu = run(load(*words), len(words))
    after = ENTRY_POINT + 2 * len(words)
    assert cpu.pc == (after + 2 if skipped else after)


def test_unknown_opcode_is_noop(load):
    vm = load(0x6001, 0x5011, 0xE000, 0xF0FF)
    run(vm, 4)
    assert vm.cpu.pc == ENTRY_POINT + 8
    assert vm.cpu.V[0] == 1


# =============================================================================
#  INDEX, MEMORY, RANDOM
# =============================================================================

def test_set_and_add_index(load):
    cpu = run(load(0xA300, 0x6010, 0xF01E), 3)
    assert cpu.I == 0x310


def test_font_address(load):
    cpu = run(load(0x600A, 0xF029), 2)
    assert cpu.I == 0xA * 5


def test_bcd(load):
    vm = load(0x60FE, 0xA300, 0xF033)
    run(vm, 3)
    assert vm.memory.read_block(0x300, 3) == bytes([2, 5, 4])


def test_store_and_load_registers(load):
    vm = load(0x6011, 0x6122, 0x6233, 0xA400, 0xF255, 0x6000, 0x6100, 0x6200, 0xF165)
    run(vm, 9)
    assert vm.memory.read_block(0x400, 4) == bytes([0x11, 0x22, 0x33, 0])
    assert vm.cpu.V[:3] == [0x11, 0x22, 0]
    assert vm.cpu.I == 0x400


def test_random_masked(load):
    vm = load(*([0xC00F] * 32))
    for _ in range(32):
        vm.step()
        assert vm.cpu.V[0] & 0xF0 == 0


# =============================================================================
#  DISPLAY, TIMERS, KEYS
# =============================================================================

def test_draw_font_glyph_twice(load):
    vm = load(0x6000, 0xF029, 0x6105, 0x6203, 0xD125, 0xD125)
    run(vm, 5)
    assert vm.cpu.V[0xF] == 0
    assert vm.display.pixel(5, 3)
    run(vm, 1)
    assert vm.cpu.V[0xF] == 1
    assert not any(vm.display.vram)


def test_draw_clipped_row(load):
    vm = load(0x603C, 0x6100, 0xA20A, 0xD011, 0x0000, 0xFF00)
    run(vm, 4)
    lit = [i for i, v in enumerate(vm.display.vram) if v]
    assert lit == [60, 61, 62, 63]


def test_clear_screen(load):
    vm = load(0xD005, 0x00E0)
    run(vm, 2)
    assert not any(vm.display.vram)
    assert vm.display.dirty


def test_delay_and_sound_timers(load):
    vm = load(0x6009, 0xF015, 0xF018, 0xF107)
    run(vm, 3)
    vm.tick_timers()
    run(vm, 1)
    assert vm.cpu.V[1] == 8
    assert vm.timers.sound == 8
    assert vm.tone_active


def test_skip_if_key(load):
    vm = load(0x6007, 0xE09E, 0x0000, 0xE0A1)
    vm.press_key(7)
    run(vm, 2)
    assert vm.cpu.pc == ENTRY_POINT + 6
    run(vm, 1)
    assert vm.cpu.pc == ENTRY_POINT + 8


def test_wait_for_key(load):
    vm = load(0xF30A)
    for _ in range(3):
        vm.step()
        assert vm.cpu.pc == ENTRY_POINT
        assert vm.awaiting_key == 3
    vm.press_key(0xC)
    vm.step()
    assert vm.cpu.pc == ENTRY_POINT + 2
    assert vm.cpu.V[3] == 0xC
    assert vm.awaiting_key is None


# =============================================================================
#  VF AS AN OPERAND
# =============================================================================

@pytest.mark.parametrize("words, v0, vf", [
    # 8FY4 - carry is written last and wins
    ((0x6FC8, 0x6164, 0x8F14), 0, 1),
    ((0x6F0A, 0x6114, 0x8F14), 0, 0),
    # subtract and shift forms write the flag first, the result wins
    ((0x6F0A, 0x6103, 0x8F15), 0, 7),
    ((0x6F05, 0x8F06), 0, 2),
    ((0x6F03, 0x610A, 0x8F17), 0, 7),
    ((0x6F81, 0x8F0E), 0, 0x02),
    # VF as the Y operand is read before the flag is written
    ((0x60C8, 0x6F64, 0x80F4), 44, 1),
    ((0x600A, 0x6F03, 0x80F5), 7, 1),
    ((0x6003, 0x6F0A, 0x80F7), 7, 1),
])
def test_alu_with_vf_operand(load, words, v0, vf):
    cpu = run(load(*words), len(words))
    assert cpu.V[0] == v0
    assert cpu.V[0xF] == vf


def test_draw_with_vf_as_x(load):
    """DFYN uses VF's value as the column before clearing it."""
    vm = load(0x6F0A, 0x6100, 0x6000, 0xF029, 0xDF15)
    run(vm, 5)
    assert vm.display.pixel(10, 0)
    assert not vm.display.pixel(0, 0)
    assert vm.cpu.V[0xF] == 0


def test_draw_with_vf_as_y(load):
    """DXFN uses VF's value as the row."""
    vm = load(0x6005, 0x6F07, 0xA000, 0xD0F5)
    run(vm, 4)
    assert vm.display.pixel(5, 7)
    assert not vm.display.pixel(5, 0)
    assert vm.cpu.V[0xF] == 0


def test_draw_collision_with_vf_as_x(load):
    vm = load(0x6F0A, 0x6100, 0xA000, 0xDF11, 0x6F0A, 0xDF11)
    run(vm, 6)
    assert vm.cpu.V[0xF] == 1
    assert not any(vm.display.vram)


def test_debug_trace_shows_operands(load, caplog):
    vm = load(0x6F0A, 0xA123, 0xDF15)
    run(vm, 2)
    with caplog.at_level(logging.DEBUG, logger="chip8vm.cpu"):
        vm.step()
    line = caplog.records[-1].getMessage()
    assert "0xDF15" in line
    assert "DRW" in line
    assert "VF=0x0A" in line
    assert "I=0x123" in line
