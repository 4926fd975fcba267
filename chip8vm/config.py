import argparse
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class Config:
    rom: str
    instructions_per_second: int = 700
    scale: int = 20
    fg_color: int = 0x0FEEEEFF  # RGBA
    bg_color: int = 0x020022FF
    pixel_border: bool = False
    volume: float = 0.25
    tone_hz: float = 440.0
    show_hud: bool = False
    verbose: bool = False


def parse_color(text):
    """Accept 0xRRGGBBAA, #RRGGBB or #RRGGBBAA and return a packed RGBA int."""
    value = text.strip()
    if value.startswith("#"):
        value = value[1:]
    elif value.lower().startswith("0x"):
        value = value[2:]
    if len(value) not in (6, 8):
        raise argparse.ArgumentTypeError(f"invalid color {text!r}")
    try:
        rgba = int(value, 16)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid color {text!r}") from None
    if len(value) == 6:
        rgba = (rgba << 8) | 0xFF
    return rgba


def positive_int(text):
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return value


def unit_float(text):
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number, got {text!r}") from None
    if not 0.0 <= value <= 1.0:
        raise argparse.ArgumentTypeError(f"must be between 0 and 1, got {value}")
    return value


def build_parser():
    parser = argparse.ArgumentParser(prog="chip8vm", description="CHIP-8 virtual machine")
    parser.add_argument("rom", help="path to a raw CHIP-8 program image")
    parser.add_argument("--ips", type=positive_int, default=Config.instructions_per_second,
                        help="instructions per second (default: %(default)s)")
    parser.add_argument("--scale", type=positive_int, default=Config.scale,
                        help="window pixels per CHIP-8 pixel (default: %(default)s)")
    parser.add_argument("--fg", type=parse_color, default=Config.fg_color,
                        help="foreground color, 0xRRGGBBAA or #RRGGBB")
    parser.add_argument("--bg", type=parse_color, default=Config.bg_color,
                        help="background color, 0xRRGGBBAA or #RRGGBB")
    parser.add_argument("--pixel-border", action="store_true",
                        help="draw a thin background border around each pixel")
    parser.add_argument("--volume", type=unit_float, default=Config.volume,
                        help="initial tone volume 0..1 (default: %(default)s)")
    parser.add_argument("--tone", type=float, default=Config.tone_hz,
                        help="tone frequency in Hz (default: %(default)s)")
    parser.add_argument("--hud", action="store_true", help="show FPS and instructions/s")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> Config:
    args = build_parser().parse_args(argv)
    return Config(
        rom=args.rom,
        instructions_per_second=args.ips,
        scale=args.scale,
        fg_color=args.fg,
        bg_color=args.bg,
        pixel_border=args.pixel_border,
        volume=args.volume,
        tone_hz=args.tone,
        show_hud=args.hud,
        verbose=args.verbose,
    )
