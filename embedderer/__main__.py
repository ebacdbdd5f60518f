from argparse import ArgumentParser
import sys

from embedderer.config import Config, DEFAULT_BUILD_DIR, DEFAULT_EMBED_PHASE_NAME
from embedderer.details.tools.project import project_main
from embedderer.details.tools.validate import validate_main


def main(argv=None):
    COMMANDS = {
        "project": project_main,
        "validate": validate_main,
    }
    # parse common arguments...
    parser = ArgumentParser(prog="embedderer")
    parser.add_argument("command", choices=COMMANDS.keys())
    parser.add_argument("path", nargs="?", default=".", help="The project path.")
    parser.add_argument(
        "--debug", action="store_true", help="Print debug information."
    )
    parser.add_argument(
        "--build-dir",
        default=DEFAULT_BUILD_DIR,
        help="Directory the dependency manager builds frameworks into.",
    )
    parser.add_argument(
        "--embed-phase",
        default=DEFAULT_EMBED_PHASE_NAME,
        help="Name of the copy files phase that embeds frameworks.",
    )
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    config = Config(
        build_dir=args.build_dir,
        embed_phase_name=args.embed_phase,
        debug=args.debug,
    )
    exit_code = COMMANDS[args.command](
        config=config,
        path=args.path,
    )
    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
