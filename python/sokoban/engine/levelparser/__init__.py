from sokoban.engine.levelparser.parser import parse_grid, parse_level, split_rows

__all__ = ["parse_grid", "parse_level", "split_rows"]
