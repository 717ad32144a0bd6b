"""Greymap enhancement and bilevel conversion: filters, thresholding, options.

A greymap is a list of rows (row 0 first), each a list of grey values
where 0 is black and 255 is white.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field

from vectrace.bitmap import Bitmap

Greymap = list[list[float]]


class OptionError(ValueError):
    """A command line option was invalid."""


@dataclass
class Options:
    """Settings for converting greymaps to bitmaps."""

    outfile: str | None = None
    infiles: list[str] = field(default_factory=list)
    invert: bool = False
    highpass: bool = True
    lam: float = 4.0
    lowpass: bool = False
    lam1: float = 0.0
    scale: int = 2
    linear: bool = False
    bilevel: bool = True
    level: float = 0.45
    outext: str = ".pbm"
    action: str | None = None


def _dims(greymap: Greymap) -> tuple[int, int]:
    h = len(greymap)
    w = len(greymap[0]) if h else 0
    return w, h


def lowpass(greymap: Greymap, lam: float) -> None:
    """Blur the greymap in place with an approximate Gaussian of radius lam."""
    w, h = _dims(greymap)
    if w == 0 or h == 0:
        return
    if lam <= 0:
        raise ValueError(f"filter radius must be positive: {lam}")

    big_b = 1 + 2 / (lam * lam)
    c = big_b - math.sqrt(big_b * big_b - 1)
    d = 1 - c
    cutoff = 1 / 255.0

    def run(line: list[float]) -> None:
        f = g = 0.0
        for idx, value in enumerate(line):
            f = f * c + value * d
            g = g * c + f * d
            line[idx] = g
        for idx in range(len(line) - 1, -1, -1):
            f = f * c + line[idx] * d
            g = g * c + f * d
            line[idx] = g
        for idx in range(len(line)):
            f = f * c
            g = g * c + f * d
            if f + g < cutoff:
                break
            line[idx] += g

    for row in greymap:
        run(row)

    for x in range(w):
        column = [row[x] for row in greymap]
        run(column)
        for row, value in zip(greymap, column):
            row[x] = value


def highpass(greymap: Greymap, lam: float) -> None:
    """Even out background gradients in place: subtract a blurred copy, recentre on 128."""
    w, h = _dims(greymap)
    if w == 0 or h == 0:
        return
    blurred = [list(row) for row in greymap]
    lowpass(blurred, lam)
    for row, brow in zip(greymap, blurred):
        for x, (value, bvalue) in enumerate(zip(row, brow)):
            row[x] = value - bvalue + 128


def threshold(greymap: Greymap, c: float) -> Bitmap:
    """Convert to a bitmap: a pixel is set where its grey value is below c*255."""
    w, h = _dims(greymap)
    bm = Bitmap(w, h)
    c1 = c * 255
    for y, row in enumerate(greymap):
        for x, value in enumerate(row):
            bm.put(x, y, value < c1)
    return bm


def make_outfilename(infile: str, ext: str) -> str:
    """Derive an output file name by replacing the extension of infile."""
    if infile == "-":
        return "-"
    dot = infile.rfind(".")
    outfile = (infile[:dot] if dot >= 0 else infile) + ext
    if outfile == infile:
        outfile = infile + "-out"
    return outfile


_LONG_OPTIONS = {
    "help": "h",
    "version": "v",
    "license": "l",
    "output": "o",
    "reset": "x",
    "invert": "i",
    "filter": "f",
    "nofilter": "n",
    "blur": "b",
    "scale": "s",
    "linear": "1",
    "cubic": "3",
    "grey": "g",
    "threshold": "t",
}
_SHORT_OPTIONS = set("hvloxifnbs13gt")
_TAKES_ARG = set("ofbst")

_INT_RE = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")


def _parse_int(text: str) -> int:
    """Parse an integer like strtol with base 0 (hex, octal or decimal)."""
    match = _INT_RE.fullmatch(text)
    if not match:
        raise ValueError(text)
    sign_text, digits = match.groups()
    if digits[:2] in ("0x", "0X"):
        value = int(digits[2:], 16)
    elif digits.startswith("0"):
        value = int(digits, 8)
    else:
        value = int(digits)
    return -value if sign_text == "-" else value


def _parse_float(text: str) -> float:
    if text != text.rstrip() or not text.strip():
        raise ValueError(text)
    return float(text)


def _match_long(name: str) -> str:
    if name in _LONG_OPTIONS:
        return _LONG_OPTIONS[name]
    candidates = [long for long in _LONG_OPTIONS if long.startswith(name)] if name else []
    if len(candidates) == 1:
        return _LONG_OPTIONS[candidates[0]]
    if candidates:
        raise OptionError(f"option '--{name}' is ambiguous")
    raise OptionError(f"unrecognized option '--{name}'")


def _apply(opts: Options, letter: str, value: str | None) -> bool:
    """Apply one option; return True if it requests an immediate action."""
    if letter == "h":
        opts.action = "help"
    elif letter == "v":
        opts.action = "version"
    elif letter == "l":
        opts.action = "license"
    elif letter == "o":
        opts.outfile = value
    elif letter == "x":
        opts.invert = False
        opts.highpass = False
        opts.scale = 1
        opts.bilevel = False
        opts.outext = ".pgm"
    elif letter == "i":
        opts.invert = True
    elif letter == "f":
        opts.highpass = True
        try:
            opts.lam = _parse_float(value)
        except ValueError:
            raise OptionError(f"invalid filter radius -- {value}") from None
        if opts.lam < 0:
            raise OptionError(f"invalid filter radius -- {value}")
    elif letter == "n":
        opts.highpass = False
    elif letter == "b":
        opts.lowpass = True
        try:
            opts.lam1 = _parse_float(value)
        except ValueError:
            raise OptionError(f"invalid filter radius -- {value}") from None
        if opts.lam1 < 0:
            raise OptionError(f"invalid filter radius -- {value}")
    elif letter == "s":
        try:
            opts.scale = _parse_int(value)
        except ValueError:
            raise OptionError(f"invalid scaling factor -- {value}") from None
        if opts.scale <= 0:
            raise OptionError(f"invalid scaling factor -- {value}")
    elif letter == "1":
        opts.linear = True
    elif letter == "3":
        opts.linear = False
    elif letter == "g":
        opts.bilevel = False
        opts.outext = ".pgm"
    elif letter == "t":
        opts.bilevel = True
        opts.outext = ".pbm"
        try:
            opts.level = _parse_float(value)
        except ValueError:
            raise OptionError(f"invalid threshold -- {value}") from None
        if opts.level < 0:
            raise OptionError(f"invalid threshold -- {value}")
    return opts.action is not None


def parse_options(argv) -> Options:
    """Parse command line arguments (without the program name).

    Options are processed in order; help, version and license stop
    parsing and are reported through ``Options.action``.
    """
    opts = Options()
    args = list(argv)
    files: list[str] = []
    i = 0
    while i < len(args):
        arg = args[i]
        i += 1
        if arg == "--":
            files.extend(args[i:])
            break
        if arg.startswith("--"):
            name, eq, value = arg[2:].partition("=")
            letter = _match_long(name)
            if letter in _TAKES_ARG:
                if not eq:
                    if i >= len(args):
                        raise OptionError(f"option '--{name}' requires an argument")
                    value = args[i]
                    i += 1
            elif eq:
                raise OptionError(f"option '--{name}' doesn't allow an argument")
            else:
                value = None
            if _apply(opts, letter, value):
                return opts
        elif arg.startswith("-") and arg != "-":
            pos = 1
            while pos < len(arg):
                letter = arg[pos]
                pos += 1
                if letter not in _SHORT_OPTIONS:
                    raise OptionError(f"invalid option -- '{letter}'")
                value = None
                if letter in _TAKES_ARG:
                    if pos < len(arg):
                        value = arg[pos:]
                    elif i < len(args):
                        value = args[i]
                        i += 1
                    else:
                        raise OptionError(f"option requires an argument -- '{letter}'")
                    pos = len(arg)
                if _apply(opts, letter, value):
                    return opts
        else:
            files.append(arg)
    opts.infiles = files
    return opts