"""Built-in levels and loading of level collection files."""

from __future__ import annotations

from pathlib import Path

# Classic "Microcosmos" level 21.
MICROCOSMOS = "\n".join(
    (
        "  #####",
        "  #   ###",
        "###*# $ #",
        "# $ @ # #",
        "# # ..  #",
        "# . #$###",
        "##$.  #",
        " #  ###",
        " ####",
    )
)

STARTER = "\n".join(
    (
        "#####",
        "#@$.#",
        "#####",
    )
)

TWIN = "\n".join(
    (
        "#########",
        "#########",
        "#########",
        "##.$@$.##",
        "#########",
        "#########",
        "#########",
        "#########",
        "#########",
    )
)

CORNER = "\n".join(
    (
        "#########",
        "###.#####",
        "###$#####",
        "###@ $.##",
        "#########",
        "#########",
        "#########",
        "#########",
        "#########",
    )
)

BUILTIN_LEVELS: dict[str, str] = {
    "starter": STARTER,
    "twin": TWIN,
    "corner": CORNER,
    "microcosmos": MICROCOSMOS,
}


def get_level(name: str) -> str:
    """Return the description of a built-in level."""
    try:
        return BUILTIN_LEVELS[name]
    except KeyError:
        known = ", ".join(BUILTIN_LEVELS)
        raise KeyError(f"Unknown level {name!r} (known: {known})") from None


def load_collection(path: str | Path) -> list[str]:
    """Read the levels of a collection file.

    - Lines starting with ';' are comments (titles, level numbers).
    - Blank lines separate levels.
    """
    levels: list[str] = []
    current: list[str] = []
    with open(path, encoding="utf-8") as f:
        for raw in f:
            line = raw.rstrip("\r\n")
            if line.startswith(";"):
                continue
            if not line.strip():
                if current:
                    levels.append("\n".join(current))
                    current = []
                continue
            current.append(line)
    if current:
        levels.append("\n".join(current))
    return levels
