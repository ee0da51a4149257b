"""Command-line parsing for the apicula subcommands."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

from apicula.cli_parse import Args, Opt, UsageError, parse_opts
from apicula.version import version_string

log = logging.getLogger(__name__)

_GENERAL_HINT = "use `apicula help` for help"

HELP_OPT = Opt("h", "help", True,
               "-h, --help                show help")
OUTPUT_OPT = Opt("o", "output", False,
                 "-o, --output <outdir>     place output files here (will be created)")
OVERWRITE_OPT = Opt("", "overwrite", True,
                    "--overwrite               allow overwriting files in the output dir")
ALL_ANIMATIONS_OPT = Opt("", "all-animations", True,
                         "--all-animations          don't guess which joint anims go with a model, just try them all")
MORE_TEXTURES_OPT = Opt("", "more-textures", True,
                        "--more-textures           try to dump images for unused textures too")
FORMAT_OPT = Opt("f", "format", False,
                 "-f, --format <format>     output model format (dae, glb, gltf)")

EXTRACT_OPTS = (OUTPUT_OPT, OVERWRITE_OPT, HELP_OPT)
INFO_OPTS = (HELP_OPT,)
VIEW_OPTS = (ALL_ANIMATIONS_OPT, HELP_OPT)
CONVERT_OPTS = (OUTPUT_OPT, FORMAT_OPT, OVERWRITE_OPT, MORE_TEXTURES_OPT,
                ALL_ANIMATIONS_OPT, HELP_OPT)

FORMATS = ("dae", "glb", "gltf")

_ALIASES = {
    "x": "extract", "extract": "extract",
    "v": "view", "view": "view",
    "c": "convert", "convert": "convert",
    "i": "info", "info": "info",
}

_USAGE = (
    "\n"
    "  Usage: apicula <command> ...\n"
    "\n"
    "  Viewer/converter for Nintendo DS Nitro model files (.nsbmd).\n"
    "\n"
    "  Example:\n"
    "\n"
    "    # extract files from a ROM\n"
    "    apicula extract rom.nds -o nitro-files\n"
    "    # view all extracted models\n"
    "    apicula view nitro-files\n"
    "    # convert model to collada\n"
    "    apicula convert nitro-files/my-model.nsbmd -o my-model\n"
    "\n"
    "  Commands:\n"
    "\n"
    "    extract        Extract Nitro files\n"
    "    view           Nitro model viewer\n"
    "    convert        Convert Nitro models to .dae/.gltf\n"
    "    info           Display debugging info for Nitro files\n"
    "    help           Display help\n"
    "\n"
    "  Run `apicula help COMMAND` for more information on specific commands.\n"
    "\n"
)

_HELP_HEADERS = {
    "extract": (
        "\n"
        "  Usage: apicula extract <input> -o <outdir>\n"
        "\n"
        "  Extract Nitro files (models, textures, animations, etc.) from <input>.\n"
        "  Try it on an .nds rom.\n"
        "\n"
    ),
    "info": (
        "\n"
        "  Usage: apicula info <input...>\n"
        "\n"
        "  Display debugging info for the given set of Nitro files.\n"
        "  You can lookup how textures and palettes were resolved here.\n"
        "  But this is mostly useful for developers.\n"
        "\n"
    ),
    "view": (
        "\n"
        "  Usage: apicula view <input...>\n"
        "\n"
        "  Open the 3D model viewer.\n"
        "  Each <input> can be either a Nitro file or a directory of Nitro files.\n"
        "\n"
    ),
    "convert": (
        "\n"
        "  Usage: apicula convert <input>... -o <ourdir>\n"
        "\n"
        "  Converts Nitro models to .dae/.gltf. Default is .dae.\n"
        "  The textures and animations on each model will be the same as with `apicula view`.\n"
        "\n"
    ),
}

_SUBCOMMAND_OPTS = {
    "extract": EXTRACT_OPTS,
    "info": INFO_OPTS,
    "view": VIEW_OPTS,
    "convert": CONVERT_OPTS,
}


def usage_text() -> str:
    """The top-level usage message."""
    return _USAGE


def _opts_help(opts: Sequence[Opt]) -> str:
    lines = ["  Options:\n"]
    lines.extend(f"    {opt.help}\n" for opt in opts if opt.help)
    return "".join(lines)


def subcommand_help_text(subcommand: str) -> str:
    """Help for one subcommand; the general usage for anything unknown."""
    header = _HELP_HEADERS.get(subcommand)
    if header is None:
        return usage_text()
    text = header + _opts_help(_SUBCOMMAND_OPTS[subcommand])
    if subcommand != "info":
        text += "\n"
    return text


def _print_and_exit(text: str) -> NoReturn:
    print(text, end="")
    raise SystemExit(0)


def _check_nitro_input(args: Args) -> None:
    if not args.free_args:
        raise UsageError("give me some input files")


def _check_format(args: Args) -> None:
    fmt = args.get_opt("format")
    if fmt is not None and fmt not in FORMATS:
        raise UsageError("bad output format, should be one of: dae glb gltf")


def _check_output_dir(args: Args) -> None:
    output = args.get_opt("output")
    if output is None:
        raise UsageError("where do I put the output files? Pass it with --output")
    if Path(output).exists() and "overwrite" not in args.flags:
        raise UsageError(
            "output directory already exists, choose a different one or "
            "pass --overwrite if you're okay with files in that dir possibly "
            "being overwritten"
        )


def _check_extract(args: Args) -> None:
    if not args.free_args:
        raise UsageError("pass the file you want to extract from")
    if len(args.free_args) > 1:
        raise UsageError("too many input files! I only need one")
    _check_output_dir(args)


def _check_convert(args: Args) -> None:
    _check_nitro_input(args)
    _check_format(args)
    _check_output_dir(args)


_CHECKS = {
    "extract": _check_extract,
    "view": _check_nitro_input,
    "convert": _check_convert,
    "info": _check_nitro_input,
}


def parse_cli_args(argv: Sequence[str] | None = None) -> Args:
    """Parse the command line (without the program name).

    Help, usage and version requests print their text and raise SystemExit(0);
    bad usage raises UsageError.
    """
    it = iter(list(sys.argv[1:] if argv is None else argv))
    first = next(it, None)
    if first is None or first in ("-h", "--help"):
        _print_and_exit(usage_text())
    if first in ("-V", "--version"):
        _print_and_exit(f"apicula {version_string()}\n")
    if first == "help":
        _print_and_exit(subcommand_help_text(next(it, "")))

    subcommand = _ALIASES.get(first)
    if subcommand is None:
        raise UsageError(f"don't understand {first}", hint=_GENERAL_HINT)

    args = parse_opts(it, _SUBCOMMAND_OPTS[subcommand], Args(subcommand=subcommand))
    if "help" in args.flags:
        _print_and_exit(subcommand_help_text(subcommand))
    _CHECKS[subcommand](args)
    return args