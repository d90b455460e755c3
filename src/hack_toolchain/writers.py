from __future__ import annotations
import os
from typing import Iterable, List, Optional
from .encoding import Encoded

def to_bin_lines(words: Iterable[Encoded]) -> List[str]:
    return [w.word for w in words]

def output_path(source: str, ext: str, out_dir: Optional[str] = None) -> str:
    """Sustituye la extensión de source por ext ('.hack', '.asm'); opcionalmente en out_dir."""
    stem, _ = os.path.splitext(source)
    if out_dir is not None:
        stem = os.path.join(out_dir, os.path.basename(stem))
    return stem + ext

def write_lines(lines: Iterable[str], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")

def write_bin(words: Iterable[Encoded], path: str) -> None:
    write_lines(to_bin_lines(words), path)
