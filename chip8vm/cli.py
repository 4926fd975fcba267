import logging
import sys

from .config import parse_args
from .errors import RomLoadError
from .vm import VirtualMachine
from .volume import Volume

log = logging.getLogger(__name__)


def setup_logging(verbose=False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def main(argv=None):
    config = parse_args(argv)
    setup_logging(config.verbose)

    vm = VirtualMachine()
    try:
        vm.load_file(config.rom)
    except RomLoadError as e:
        log.error("%s", e)
        return 1

    # imported late so a bad ROM is reported without opening a window
    import pyglet
    from .audio import Beeper
    from .window import Chip8Window

    volume = Volume(config.volume)
    beeper = Beeper(volume, frequency=config.tone_hz)
    Chip8Window(vm, config, volume, beeper=beeper)
    pyglet.app.run()
    log.info("Bye")
    return 0


if __name__ == "__main__":
    sys.exit(main())
