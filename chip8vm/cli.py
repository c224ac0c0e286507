import argparse
import logging
import sys

from .cpu import Cpu
from .errors import ProgramTooLargeError
from .machine import Machine
from .quirks import Quirks
from .timing import CPU_HZ

log = logging.getLogger(__name__)

QUIRK_HELP = {
    "bitshift_ignores_vy": "Shift instruction uses VX without first setting VX to VY",
    "jump_with_offset_uses_vx": "Jump-with-offset adds VX instead of V0",
    "add_to_index_ignores_overflow": "Add to index instruction does not set VF on overflow",
    "store_and_load_increment_index": "Increment index register by X after store and load",
}


def build_parser():
    parser = argparse.ArgumentParser(prog="chip8vm", description="CHIP-8 emulator")
    parser.add_argument("rom", help="Path to the CHIP-8 ROM")
    for name in Quirks.names():
        parser.add_argument("--" + name.replace("_", "-"), action="store_true",
                            help=QUIRK_HELP[name])
    parser.add_argument("--ips", type=int, default=CPU_HZ,
                        help="Instructions executed per second (default: %(default)s)")
    parser.add_argument("--scale", type=int, default=10,
                        help="Window pixels per CHIP-8 pixel (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log every executed instruction")
    return parser


def parse_args(argv=None):
    args = build_parser().parse_args(argv)
    if args.ips <= 0:
        build_parser().error("--ips must be positive")
    if args.scale <= 0:
        build_parser().error("--scale must be positive")
    args.quirks = Quirks(**{name: getattr(args, name) for name in Quirks.names()})
    return args


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    log.info("Loading ROM: %s", args.rom)
    try:
        with open(args.rom, "rb") as f:
            program = f.read()
    except OSError as err:
        log.error("Couldn't read program file: %s", err)
        return 1

    machine = Machine()
    try:
        machine.load_program(program)
    except ProgramTooLargeError as err:
        log.error("%s", err)
        return 1

    if args.quirks.enabled():
        log.info("Quirks: %s", ", ".join(args.quirks.enabled()))

    # window system is only needed from here on
    import pyglet
    from .window import Chip8Window

    window = Chip8Window(Cpu(machine, args.quirks), scale=args.scale, rate=args.ips)
    pyglet.app.run()
    return 1 if window.error is not None else 0


if __name__ == "__main__":
    sys.exit(main())
